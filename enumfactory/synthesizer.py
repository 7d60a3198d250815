"""
Enumeration synthesizer.

Turns a member list into an Enumeration: a generated IntEnum type, the
``total``/``count`` constants and the automatic label table.

Values follow sequential-enumerator semantics: a member without an explicit
value takes the previous member's assigned value plus one, so

    synthesize("PRIORITY", [("LOW", 10), "MEDIUM", ("HIGH", 30), "CRITICAL"])

assigns LOW=10, MEDIUM=11, HIGH=30, CRITICAL=31 and ``total == 32``.
"""

import logging
from enum import IntEnum
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Type

from .descriptor import MemberDescriptor, check_identifier, normalize_members
from .errors import DescriptorError, DuplicateNameError, DuplicateValueError, UnknownMemberError
from .table import ABSENT, MetadataTable, is_index, populate_table

logger = logging.getLogger(__name__)

DUPLICATE_VALUE_POLICIES = ("reject", "last_wins")

LABEL_FORMATS: Dict[str, Callable[[str], str]] = {
    "identity": lambda name: name,
    "lower": lambda name: name.lower(),
    "title": lambda name: name.replace("_", " ").title(),
    "capitalize": lambda name: name.replace("_", " ").capitalize(),
}


def get_label_formatter(label_format: str) -> Callable[[str], str]:
    """Resolve a label format name (``identity``, ``lower``, ``title``, ``capitalize``)."""
    if not isinstance(label_format, str) or label_format not in LABEL_FORMATS:
        raise ValueError(
            f"Unknown label format: {label_format!r}. Valid formats: {list(LABEL_FORMATS)}"
        )
    return LABEL_FORMATS[label_format]


class Enumeration:
    """
    A generated enumeration.

    Attributes:
        name: Enumeration name, also the name of the generated IntEnum
        members: Member descriptors in declaration order
        values: Read-only mapping of member name to assigned value
        type: The generated IntEnum class
        total: One past the largest assigned value (table size)
        count: Number of declared members
        labels: The automatic label table
    """

    def __init__(
        self,
        name: str,
        members: Tuple[MemberDescriptor, ...],
        values: Mapping[str, int],
        enum_type: Type[IntEnum],
        total: int,
        label_formatter: Optional[Callable[[str], str]] = None,
    ):
        self._name = name
        self._members = members
        self._values = MappingProxyType(dict(values))
        self._type = enum_type
        self._total = total
        self._names_by_value: Dict[int, str] = {}
        for member_name, value in self._values.items():
            self._names_by_value[value] = member_name
        formatter = label_formatter or LABEL_FORMATS["identity"]
        self._labels: MetadataTable[str] = populate_table(
            self,
            [descriptor.name for descriptor in members],
            lambda member_name, *payload: formatter(member_name),
            "label",
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def members(self) -> Tuple[MemberDescriptor, ...]:
        return self._members

    @property
    def values(self) -> Mapping[str, int]:
        return self._values

    @property
    def type(self) -> Type[IntEnum]:
        return self._type

    @property
    def total(self) -> int:
        return self._total

    @property
    def count(self) -> int:
        return len(self._members)

    @property
    def begin(self) -> int:
        """First ordinal of the table range."""
        return 0

    @property
    def end(self) -> int:
        """One past the last ordinal of the table range."""
        return self._total

    @property
    def labels(self) -> MetadataTable[str]:
        return self._labels

    @property
    def is_dense(self) -> bool:
        """True when every ordinal in ``[0, total)`` belongs to a member."""
        return self.count == self._total and self._labels.populated == self._total

    def value_of(self, name: str) -> int:
        """Assigned value of member ``name``."""
        try:
            return self._values[name]
        except KeyError:
            raise UnknownMemberError(name, self._name) from None

    def name_of(self, value: Any) -> Any:
        """Name of the member assigned ``value``, or ABSENT."""
        if not is_index(value):
            return ABSENT
        return self._names_by_value.get(int(value), ABSENT)

    def member_of(self, value: Any) -> Any:
        """The IntEnum member for ``value``, or ABSENT."""
        name = self.name_of(value)
        if name is ABSENT:
            return ABSENT
        return self._type[name]

    def __getitem__(self, name: str) -> IntEnum:
        try:
            return self._type[name]
        except KeyError:
            raise UnknownMemberError(name, self._name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        for descriptor in self._members:
            yield descriptor.name, self._values[descriptor.name]

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"Enumeration({self._name}, count={self.count}, total={self._total})"


def assign_values(members: Iterable[MemberDescriptor]) -> List[Tuple[str, int]]:
    """
    Assign a value to every member in declaration order.

    An undeclared value continues from the previous member's assigned value;
    the first member defaults to 0.
    """
    assigned = []
    previous: Optional[int] = None
    for descriptor in members:
        if descriptor.explicit_value is not None:
            value = descriptor.explicit_value
        elif previous is None:
            value = 0
        else:
            value = previous + 1
        assigned.append((descriptor.name, value))
        previous = value
    return assigned


def _check_unique_names(name: str, members: Tuple[MemberDescriptor, ...]) -> None:
    seen = set()
    for descriptor in members:
        if descriptor.name in seen:
            raise DuplicateNameError(descriptor.name, f"enumeration {name}")
        seen.add(descriptor.name)


def _check_unique_values(name: str, assigned: List[Tuple[str, int]], policy: str) -> None:
    by_value: Dict[int, List[str]] = {}
    for member_name, value in assigned:
        by_value.setdefault(value, []).append(member_name)

    for value, names in by_value.items():
        if len(names) < 2:
            continue
        if policy == "reject":
            raise DuplicateValueError(value, names, f"enumeration {name}")
        logger.warning(
            f"{name}: value {value} shared by {', '.join(names)}; "
            f"label slot keeps {names[-1]}"
        )


def _create_enum_type(
    name: str, assigned: List[Tuple[str, int]], module: Optional[str]
) -> Type[IntEnum]:
    for member_name, _ in assigned:
        if len(member_name) > 1 and member_name.startswith("_") and member_name.endswith("_"):
            raise DescriptorError(f"{name}: member name is reserved by enum: {member_name!r}")
    try:
        return IntEnum(name, assigned, module=module)
    except (TypeError, ValueError) as e:
        raise DescriptorError(f"{name}: cannot create enum type: {e}") from e


def synthesize(
    name: str,
    member_list: Iterable[Any],
    *,
    label_formatter: Optional[Callable[[str], str]] = None,
    duplicate_values: str = "reject",
    warn_negative: bool = True,
    module: Optional[str] = None,
) -> Enumeration:
    """
    Generate an enumeration and its label table from a member list.

    Args:
        name: Enumeration name (a valid identifier)
        member_list: Ordered member declarations
        label_formatter: Maps a member name to its display label
        duplicate_values: "reject" or "last_wins" for members sharing a value
        warn_negative: Log a warning for members with negative values
        module: ``__module__`` of the generated IntEnum (for pickling)

    Returns:
        Immutable Enumeration

    Raises:
        DuplicateNameError: Two members share a name
        DuplicateValueError: Two members share a value under the "reject" policy
        DescriptorError: Malformed declaration or enumeration name
    """
    check_identifier(name, "enumeration name")
    if duplicate_values not in DUPLICATE_VALUE_POLICIES:
        raise ValueError(
            f"Unknown duplicate value policy: {duplicate_values}. "
            f"Valid policies: {list(DUPLICATE_VALUE_POLICIES)}"
        )

    members = normalize_members(member_list)
    _check_unique_names(name, members)

    assigned = assign_values(members)
    _check_unique_values(name, assigned, duplicate_values)

    negative = [member_name for member_name, value in assigned if value < 0]
    if negative and warn_negative:
        logger.warning(
            f"{name}: negative values have no table slot: {', '.join(negative)}"
        )

    total = max(max(value for _, value in assigned) + 1, 0)
    enumeration = Enumeration(
        name=name,
        members=members,
        values=dict(assigned),
        enum_type=_create_enum_type(name, assigned, module),
        total=total,
        label_formatter=label_formatter,
    )

    logger.debug(f"Generated enum {name}: count={enumeration.count}, total={total}")
    return enumeration


def automatic(name: str, *names: str, **options: Any) -> Enumeration:
    """Enumeration with sequential values 0..n-1: ``automatic("COLOR", "RED", "GREEN")``."""
    for member_name in names:
        if not isinstance(member_name, str):
            raise DescriptorError(
                f"{name}: automatic members are plain names, got {member_name!r}"
            )
    return synthesize(name, names, **options)


def assigned(name: str, *pairs: Tuple[str, int], **options: Any) -> Enumeration:
    """Enumeration where every member carries a value: ``assigned("S", ("OK", 200))``."""
    members = normalize_members(pairs)
    for descriptor in members:
        if descriptor.explicit_value is None:
            raise DescriptorError(f"{name}: member {descriptor.name!r} has no value")
    return synthesize(name, members, **options)
