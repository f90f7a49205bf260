"""Tests for offering window validation."""

import pytest

from src.ifo.constants import MAX_WINDOW_DURATION
from src.ifo.errors import (
    DuplicateAsset,
    InvertedWindow,
    NoTrancheSelected,
    WindowNotFuture,
    WindowTooFar,
)
from src.ifo.window import WindowSpec, check_window, validate_window

NOW = 1_700_000_000


def make_spec(**overrides: object) -> WindowSpec:
    fields: dict[str, object] = {
        "asset_a": "LP",
        "asset_b": "TOKEN",
        "start_time": NOW + 100,
        "end_time": NOW + 1000,
        "private_start_time": NOW + 200,
        "private_end_time": NOW + 2000,
        "is_public": True,
        "is_private": False,
    }
    fields.update(overrides)
    return WindowSpec(**fields)  # type: ignore[arg-type]


class TestCheckWindow:
    """Tests for the single-window rule set."""

    def test_valid_window_passes(self) -> None:
        check_window("public", NOW + 1, NOW + 2, NOW)

    def test_end_at_limit_is_too_far(self) -> None:
        """The end bound is strict: now + 7 days itself is rejected."""
        with pytest.raises(WindowTooFar):
            check_window("public", NOW + 1, NOW + MAX_WINDOW_DURATION, NOW)

    def test_end_just_inside_limit(self) -> None:
        check_window("public", NOW + 1, NOW + MAX_WINDOW_DURATION - 1, NOW)

    def test_equal_start_and_end_is_inverted(self) -> None:
        with pytest.raises(InvertedWindow):
            check_window("public", NOW + 10, NOW + 10, NOW)

    def test_start_now_is_not_future(self) -> None:
        with pytest.raises(WindowNotFuture):
            check_window("public", NOW, NOW + 10, NOW)

    def test_too_far_checked_before_inverted(self) -> None:
        """An inverted window that also ends too late reports WindowTooFar."""
        with pytest.raises(WindowTooFar):
            check_window("public", NOW + MAX_WINDOW_DURATION + 5, NOW + MAX_WINDOW_DURATION, NOW)

    def test_inverted_checked_before_not_future(self) -> None:
        with pytest.raises(InvertedWindow):
            check_window("public", NOW - 5, NOW - 10, NOW)

    def test_seven_days_constant(self) -> None:
        assert MAX_WINDOW_DURATION == 604800


class TestValidateWindow:
    """Tests for full create-request validation."""

    def test_valid_public_request(self) -> None:
        validate_window(make_spec(), NOW)

    def test_duplicate_asset_wins_over_everything(self) -> None:
        spec = make_spec(
            asset_b="LP", start_time=NOW - 1, end_time=NOW - 2,
            is_public=False, is_private=False,
        )
        with pytest.raises(DuplicateAsset):
            validate_window(spec, NOW)

    def test_no_tranche_selected(self) -> None:
        with pytest.raises(NoTrancheSelected):
            validate_window(make_spec(is_public=False, is_private=False), NOW)

    def test_no_tranche_selected_ignores_bad_windows(self) -> None:
        spec = make_spec(start_time=NOW - 10, is_public=False, is_private=False)
        with pytest.raises(NoTrancheSelected):
            validate_window(spec, NOW)

    def test_private_only_checks_private_window(self) -> None:
        """A broken public window is irrelevant when only private is requested."""
        spec = make_spec(start_time=NOW - 10, end_time=NOW - 20, is_public=False, is_private=True)
        validate_window(spec, NOW)

    def test_private_only_rejects_bad_private_window(self) -> None:
        spec = make_spec(private_start_time=NOW, is_public=False, is_private=True)
        with pytest.raises(WindowNotFuture):
            validate_window(spec, NOW)

    def test_both_tranches_check_both_windows(self) -> None:
        spec = make_spec(
            private_end_time=NOW + MAX_WINDOW_DURATION, is_public=True, is_private=True,
        )
        with pytest.raises(WindowTooFar) as exc_info:
            validate_window(spec, NOW)
        assert exc_info.value.details["tranche"] == "private"

    def test_requested_windows_order(self) -> None:
        spec = make_spec(is_public=True, is_private=True)
        assert spec.requested_windows() == [
            ("public", NOW + 100, NOW + 1000),
            ("private", NOW + 200, NOW + 2000),
        ]
