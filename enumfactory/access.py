"""
Validity and safe-access layer.

Pure functions over generated enumerations and tables. None of them raise
for an out-of-range or unpopulated ordinal: the result is False or ABSENT.
A value inside ``[0, total)`` that falls into a gap of a sparse enumeration
is not valid.
"""

from typing import Any, Iterator, Sequence

from .synthesizer import Enumeration
from .table import ABSENT, MetadataTable, is_index


def in_range(owner: Enumeration, value: Any) -> bool:
    """True iff ``value`` is an integer in ``[owner.begin, owner.end)``."""
    return is_index(value) and owner.begin <= value < owner.end


def is_valid(owner: Enumeration, value: Any) -> bool:
    """True iff ``value`` is the assigned value of a declared member."""
    return in_range(owner, value) and owner.labels.get(value) is not ABSENT


def safe_get(table: MetadataTable, owner: Enumeration, value: Any) -> Any:
    """
    Read ``table`` at ``value``.

    Returns the slot's item when ``value`` is in range and the slot is
    populated, otherwise ABSENT.

    Raises:
        ValueError: ``table`` was generated for a different enumeration
    """
    if table.owner is not owner:
        raise ValueError(
            f"Table {table.name} belongs to {table.owner.name}, not {owner.name}"
        )
    if not in_range(owner, value):
        return ABSENT
    return table.get(value)


def to_label(owner: Enumeration, value: Any) -> Any:
    """Display label of the member assigned ``value``, or ABSENT."""
    return safe_get(owner.labels, owner, value)


def safe_array_access(sequence: Sequence[Any], owner: Enumeration, index: Any) -> Any:
    """
    Bounds-checked read of a caller-owned sequence indexed by ordinal.

    Only the range is checked, not membership: a gap ordinal returns
    whatever the sequence holds there.
    """
    if not in_range(owner, index) or index >= len(sequence):
        return ABSENT
    return sequence[index]


def valid_values(owner: Enumeration) -> Iterator[int]:
    """Every valid ordinal of ``owner`` in ascending order."""
    for value, _ in owner.labels.items():
        yield value
