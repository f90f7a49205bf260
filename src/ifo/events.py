"""JSONL event log - the notification surface of the factory.

Events are appended in commit order with a monotonic ``sequence``. When an
output file is configured every event is also written as one JSON line.
A failed file write is logged and skipped; the event stays in memory.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Event types
NEW_OFFERING_CREATED = "NewOfferingCreated"
ADMIN_ASSET_RECOVERED = "AdminAssetRecovered"
OWNERSHIP_TRANSFERRED = "OwnershipTransferred"


class EventLog:
    """Append-only event log, in memory and optionally mirrored to JSONL."""

    output_path: Path | None
    default_recent: int
    _events: list[dict[str, Any]]
    _sequence: int

    def __init__(self, output_file: str | None = None, default_recent: int = 50) -> None:
        """Initialize the event log.

        Args:
            output_file: JSONL file to mirror events into. Cleared on init.
            default_recent: Number of events read_recent returns by default
        """
        self.output_path = Path(output_file) if output_file else None
        self.default_recent = default_recent
        self._events = []
        self._sequence = 0
        if self.output_path is not None:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_text("")

    def log(self, event_type: str, data: dict[str, Any]) -> dict[str, Any]:
        """Append an event and return it as recorded."""
        self._sequence += 1
        event: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "sequence": self._sequence,
            "event_type": event_type,
            **data,
        }
        self._events.append(event)
        if self.output_path is not None:
            self._mirror(self.output_path, event)
        return event

    def _mirror(self, path: Path, event: dict[str, Any]) -> None:
        # The in-memory log is authoritative; a failed file write loses only the copy
        try:
            with open(path, "a") as f:
                f.write(json.dumps(event) + "\n")
        except OSError as e:
            logger.warning(
                "Could not mirror event %d to %s: %s", event["sequence"], path, e
            )

    def __len__(self) -> int:
        return len(self._events)

    def events(self, event_type: str | None = None) -> list[dict[str, Any]]:
        """All events, optionally filtered by type."""
        if event_type is None:
            return list(self._events)
        return [e for e in self._events if e["event_type"] == event_type]

    def read_recent(self, n: int | None = None) -> list[dict[str, Any]]:
        """Return the last n events (default_recent when n is None)."""
        if n is None:
            n = self.default_recent
        if n <= 0:
            return []
        return list(self._events[-n:])
