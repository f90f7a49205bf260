"""Append-only registry of created offerings.

Positional indices are durable references: callers cache them, so records
are never removed or reordered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from .errors import InvalidArgument


@dataclass(frozen=True)
class OfferingRecord:
    """Instance handles produced by one create call.

    A tranche that was not requested has a handle of None. At least one
    handle is always present.
    """

    public_instance: str | None = None
    private_instance: str | None = None

    def __post_init__(self) -> None:
        if self.public_instance is None and self.private_instance is None:
            raise ValueError("OfferingRecord needs at least one instance handle")

    def to_dict(self) -> dict[str, Any]:
        return {
            "public_instance": self.public_instance,
            "private_instance": self.private_instance,
        }


class OfferingRegistry:
    """Ordered sequence of OfferingRecord, indexed from 0 in creation order."""

    _records: list[OfferingRecord]

    def __init__(self) -> None:
        self._records = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[OfferingRecord]:
        return iter(list(self._records))

    @property
    def next_index(self) -> int:
        """Index the next appended record will receive."""
        return len(self._records)

    def append(self, record: OfferingRecord) -> int:
        """Append a record and return its index."""
        index = len(self._records)
        self._records.append(record)
        return index

    def get(self, index: int) -> OfferingRecord | None:
        """Record at index, or None when out of range."""
        if index < 0 or index >= len(self._records):
            return None
        return self._records[index]

    def page(self, count: int, offset: int) -> list[OfferingRecord]:
        """Up to count records starting at offset, in creation order.

        Bounds are clamped to the registry length. The result holds exactly
        the records in range, never padding entries.

        Raises:
            InvalidArgument: offset is negative
        """
        if offset < 0:
            raise InvalidArgument("offset must be non-negative", offset=offset)
        total = len(self._records)
        if count <= 0 or offset >= total:
            return []
        count = min(count, total)
        end_index = min(offset + count, total)
        return self._records[offset:end_index]
