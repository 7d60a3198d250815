"""
Metadata tables: parallel, ordinal-indexed containers keyed to an enumeration.

A table has exactly ``owner.total`` slots. Slots belonging to a declared
member hold the extractor's result; every other slot (gaps, and the slots of
names the table does not mention) holds ABSENT.
"""

import logging
from typing import (
    TYPE_CHECKING, Any, Callable, Generic, Iterator, Optional, Tuple, TypeVar,
)

from .descriptor import check_identifier, normalize_entries
from .errors import DescriptorError, DuplicateNameError

if TYPE_CHECKING:
    from .synthesizer import Enumeration

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _AbsentType:
    """Type of the ABSENT sentinel. Only one instance ever exists."""

    _instance: Optional["_AbsentType"] = None

    def __new__(cls) -> "_AbsentType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_AbsentType, ())

    def __copy__(self) -> "_AbsentType":
        return self

    def __deepcopy__(self, memo) -> "_AbsentType":
        return self


ABSENT = _AbsentType()


def is_index(value: Any) -> bool:
    """True for plain integers and IntEnum members, False for bool and others."""
    return isinstance(value, int) and not isinstance(value, bool)


# Stock extractors, also addressable by name from schema files

def label_extractor(name: str, *payload: Any) -> str:
    """The member's own name, unmodified."""
    return name


def payload_value(name: str, *payload: Any) -> Any:
    """The first payload item as-is (``[NAME] = value``)."""
    if not payload:
        raise DescriptorError(f"Table entry {name!r} carries no payload")
    return payload[0]


def payload_string(name: str, *payload: Any) -> str:
    """The first payload item rendered as a string (``[NAME] = "value"``)."""
    return str(payload_value(name, *payload))


EXTRACTORS = {
    "label": label_extractor,
    "payload_value": payload_value,
    "payload_string": payload_string,
}


class MetadataTable(Generic[T]):
    """
    Immutable table of ``owner.total`` slots indexed by ordinal.

    Use ``get`` (or the access layer) to read it; it never raises for an
    out-of-range index.
    """

    __slots__ = ("_owner", "_suffix", "_slots")

    def __init__(self, owner: "Enumeration", suffix: str, slots: Tuple[Any, ...]):
        if len(slots) != owner.total:
            raise ValueError(
                f"Table {owner.name}_{suffix} has {len(slots)} slots, "
                f"expected {owner.total}"
            )
        object.__setattr__(self, "_owner", owner)
        object.__setattr__(self, "_suffix", suffix)
        object.__setattr__(self, "_slots", tuple(slots))

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def owner(self) -> "Enumeration":
        return self._owner

    @property
    def suffix(self) -> str:
        return self._suffix

    @property
    def name(self) -> str:
        """Qualified table name, e.g. ``STATUS_label``."""
        return f"{self._owner.name}_{self._suffix}"

    @property
    def slots(self) -> Tuple[Any, ...]:
        return self._slots

    @property
    def populated(self) -> int:
        """Number of slots holding a value."""
        return sum(1 for item in self._slots if item is not ABSENT)

    def get(self, value: Any) -> Any:
        """Slot value at ``value``, or ABSENT if out of range or unpopulated."""
        if not is_index(value) or not 0 <= value < self._owner.total:
            return ABSENT
        return self._slots[value]

    def is_populated(self, value: Any) -> bool:
        return self.get(value) is not ABSENT

    def items(self) -> Iterator[Tuple[int, T]]:
        """Populated ``(ordinal, item)`` pairs in ordinal order."""
        for index, item in enumerate(self._slots):
            if item is not ABSENT:
                yield index, item

    def to_dict(self) -> dict:
        """Populated slots keyed by ordinal."""
        return dict(self.items())

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._slots)

    def __repr__(self) -> str:
        return (
            f"MetadataTable({self.name}, total={len(self._slots)}, "
            f"populated={self.populated})"
        )


# Names the code generators already derive from an enumeration name
RESERVED_SUFFIXES = ("label", "total", "count")


def check_table_suffix(suffix: Any) -> str:
    """Validate an auxiliary table suffix; reserved suffixes are rejected in any case."""
    check_identifier(suffix, "table suffix")
    if suffix.lower() in RESERVED_SUFFIXES:
        raise DescriptorError(
            f"Table suffix {suffix!r} is reserved (reserved: {', '.join(RESERVED_SUFFIXES)})"
        )
    return suffix


def populate_table(
    owner: "Enumeration",
    entries: Any,
    extractor: Optional[Callable[..., T]],
    suffix: str,
) -> MetadataTable[T]:
    """Fill ``owner.total`` slots from ``entries`` without checking the suffix."""
    extract = extractor or label_extractor
    rows = normalize_entries(entries)

    slots = [ABSENT] * owner.total
    seen = set()
    for row in rows:
        if row.name in seen:
            raise DuplicateNameError(row.name, f"table {owner.name}_{suffix}")
        seen.add(row.name)

        # raises UnknownMemberError on drift between the enum and the table
        value = owner.value_of(row.name)
        if value < 0:
            logger.debug(f"{owner.name}_{suffix}: skipping {row.name}={value} (no slot)")
            continue
        slots[value] = extract(row.name, *row.payload)

    table: MetadataTable[T] = MetadataTable(owner, suffix, tuple(slots))
    logger.debug(
        f"Generated table {table.name}: {table.populated} of {owner.total} slots populated"
    )
    return table


def build_table(
    owner: "Enumeration",
    entries: Any,
    extractor: Optional[Callable[..., T]] = None,
    *,
    suffix: str = "table",
) -> MetadataTable[T]:
    """
    Build an auxiliary metadata table for ``owner``.

    Each entry's name is resolved through the owner, so the slot an item
    lands in is the member's assigned value, not the entry's position.

    Args:
        owner: The enumeration the table is indexed against
        entries: Table rows (names with payload), see ``normalize_entries``
        extractor: ``extractor(name, *payload) -> T``; defaults to the name
        suffix: Table name, appended to the owner's name

    Returns:
        Immutable MetadataTable

    Raises:
        DescriptorError: ``suffix`` is not an identifier or is reserved
        UnknownMemberError: an entry names something ``owner`` does not declare
        DuplicateNameError: the same name appears twice in ``entries``
    """
    check_table_suffix(suffix)
    return populate_table(owner, entries, extractor, suffix)
