"""Tests for the append-only offering registry."""

import pytest

from src.ifo.errors import InvalidArgument
from src.ifo.registry import OfferingRecord, OfferingRegistry


def filled_registry(n: int) -> OfferingRegistry:
    registry = OfferingRegistry()
    for i in range(n):
        registry.append(OfferingRecord(public_instance=f"0x{i:040x}"))
    return registry


class TestOfferingRecord:
    """Tests for OfferingRecord."""

    def test_needs_at_least_one_instance(self) -> None:
        with pytest.raises(ValueError):
            OfferingRecord()

    def test_private_only(self) -> None:
        record = OfferingRecord(private_instance="0xabc")
        assert record.public_instance is None
        assert record.to_dict() == {"public_instance": None, "private_instance": "0xabc"}

    def test_immutable(self) -> None:
        record = OfferingRecord(public_instance="0xabc")
        with pytest.raises(AttributeError):
            record.public_instance = "0xdef"  # type: ignore[misc]


class TestAppend:
    """Tests for append and positional indices."""

    def test_indices_follow_creation_order(self) -> None:
        registry = OfferingRegistry()
        assert registry.next_index == 0
        assert registry.append(OfferingRecord(public_instance="0x1")) == 0
        assert registry.append(OfferingRecord(public_instance="0x2")) == 1
        assert registry.next_index == 2
        assert len(registry) == 2

    def test_get(self) -> None:
        registry = filled_registry(3)
        record = registry.get(1)
        assert record is not None
        assert record.public_instance == f"0x{1:040x}"

    def test_get_out_of_range(self) -> None:
        registry = filled_registry(2)
        assert registry.get(2) is None
        assert registry.get(-1) is None

    def test_iteration_is_a_copy(self) -> None:
        registry = filled_registry(2)
        records = list(registry)
        records.clear()
        assert len(registry) == 2


class TestPage:
    """Tests for clamped pagination."""

    def test_tail_of_registry(self) -> None:
        """After 5 creations, page(10, 3) returns exactly indices 3 and 4."""
        registry = filled_registry(5)
        page = registry.page(10, 3)
        assert page == [registry.get(3), registry.get(4)]

    def test_no_padding_entries(self) -> None:
        registry = filled_registry(5)
        assert len(registry.page(2, 2)) == 2
        assert all(r is not None for r in registry.page(100, 1))

    def test_offset_at_length_is_empty(self) -> None:
        assert filled_registry(3).page(5, 3) == []

    def test_offset_beyond_length_is_empty(self) -> None:
        assert filled_registry(3).page(5, 50) == []

    def test_empty_registry(self) -> None:
        assert OfferingRegistry().page(10, 0) == []

    def test_zero_count(self) -> None:
        assert filled_registry(3).page(0, 0) == []

    def test_whole_registry(self) -> None:
        registry = filled_registry(4)
        assert registry.page(4, 0) == list(registry)

    @pytest.mark.parametrize("count,offset", [(1, 0), (3, 1), (10, 0), (2, 4), (7, 6)])
    def test_never_exceeds_remaining(self, count: int, offset: int) -> None:
        registry = filled_registry(6)
        assert len(registry.page(count, offset)) <= max(0, len(registry) - offset)
        assert len(registry.page(count, offset)) <= count

    def test_negative_offset_rejected(self) -> None:
        with pytest.raises(InvalidArgument):
            filled_registry(3).page(1, -1)
