"""Validation of proposed offering windows.

Pure checks only: nothing here reads or mutates chain state. The caller
supplies ``now`` (the chain timestamp at creation time).
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import MAX_WINDOW_DURATION, TRANCHE_PRIVATE, TRANCHE_PUBLIC
from .errors import (
    DuplicateAsset,
    InvertedWindow,
    NoTrancheSelected,
    WindowNotFuture,
    WindowTooFar,
)


@dataclass(frozen=True)
class WindowSpec:
    """A create request's asset pair, windows and tranche selection."""

    asset_a: str
    asset_b: str
    start_time: int
    end_time: int
    private_start_time: int
    private_end_time: int
    is_public: bool = True
    is_private: bool = False

    def requested_windows(self) -> list[tuple[str, int, int]]:
        """(tranche, start, end) for each requested tranche, public first."""
        windows: list[tuple[str, int, int]] = []
        if self.is_public:
            windows.append((TRANCHE_PUBLIC, self.start_time, self.end_time))
        if self.is_private:
            windows.append(
                (TRANCHE_PRIVATE, self.private_start_time, self.private_end_time)
            )
        return windows


def check_window(tranche: str, start_time: int, end_time: int, now: int) -> None:
    """Check a single (start, end) pair against the window policy.

    Raises:
        WindowTooFar: end_time is not strictly before now + MAX_WINDOW_DURATION
        InvertedWindow: start_time is not strictly before end_time
        WindowNotFuture: start_time is not strictly after now
    """
    if end_time >= now + MAX_WINDOW_DURATION:
        raise WindowTooFar(
            f"{tranche} window ends too far in the future",
            tranche=tranche,
            end_time=end_time,
            latest_end_time=now + MAX_WINDOW_DURATION - 1,
        )
    if start_time >= end_time:
        raise InvertedWindow(
            f"{tranche} window must start before it ends",
            tranche=tranche,
            start_time=start_time,
            end_time=end_time,
        )
    if start_time <= now:
        raise WindowNotFuture(
            f"{tranche} window must start in the future",
            tranche=tranche,
            start_time=start_time,
            now=now,
        )


def validate_window(spec: WindowSpec, now: int) -> None:
    """Validate a create request. The first failing rule wins.

    Only the windows of requested tranches are checked, each against the
    same rule set.

    Raises:
        DuplicateAsset, NoTrancheSelected, WindowTooFar, InvertedWindow,
        WindowNotFuture
    """
    if spec.asset_a == spec.asset_b:
        raise DuplicateAsset(
            "Offering assets must differ",
            asset=spec.asset_a,
        )
    if not (spec.is_public or spec.is_private):
        raise NoTrancheSelected("At least one of public or private must be requested")
    for tranche, start_time, end_time in spec.requested_windows():
        check_window(tranche, start_time, end_time, now)
