"""
Member-list descriptors.

A member list is the declarative input of the generator: an ordered
sequence of member declarations, each a name with an optional explicit
value and optional payload. Auxiliary tables are described by a second,
looser shape (TableEntry) that only carries a name and its payload.

Accepted member shapes:
    "RED"                                 name only
    ("OK", 200)                           name and explicit value
    ("LOW", 1, "Low priority", 0.1)       name, value and payload
    ("LOW", None, "Low priority")         payload without explicit value
    {"name": "OK", "value": 200, "payload": [...]}
    {"OK": 200}
"""

import keyword
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .errors import DescriptorError


def check_identifier(name: Any, what: str = "member name") -> str:
    """Return ``name`` if it is usable as a source identifier."""
    if not isinstance(name, str):
        raise DescriptorError(f"{what} must be a string, got {type(name).__name__}")
    if not name.isidentifier() or keyword.iskeyword(name):
        raise DescriptorError(f"{what} is not a valid identifier: {name!r}")
    return name


def _check_value(name: str, value: Any) -> Optional[int]:
    if value is None:
        return None
    # bool is an int subclass but never a meaningful ordinal
    if isinstance(value, bool) or not isinstance(value, int):
        raise DescriptorError(
            f"Explicit value of {name!r} must be an integer, got {value!r}"
        )
    return int(value)


@dataclass(frozen=True)
class MemberDescriptor:
    """One declared member of an enumeration."""
    name: str
    explicit_value: Optional[int] = None
    payload: Tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self):
        check_identifier(self.name)
        _check_value(self.name, self.explicit_value)
        if not isinstance(self.payload, tuple):
            object.__setattr__(self, "payload", tuple(self.payload))

    @property
    def has_explicit_value(self) -> bool:
        return self.explicit_value is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {"name": self.name}
        if self.explicit_value is not None:
            data["value"] = self.explicit_value
        if self.payload:
            data["payload"] = list(self.payload)
        return data


@dataclass(frozen=True)
class TableEntry:
    """One row of an auxiliary table: a member name and its payload."""
    name: str
    payload: Tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self):
        check_identifier(self.name)
        if not isinstance(self.payload, tuple):
            object.__setattr__(self, "payload", tuple(self.payload))


def member(name: str, value: Optional[int] = None, *payload: Any) -> MemberDescriptor:
    """Declare a member: ``member("OK", 200)`` or ``member("LOW", 1, "Low")``."""
    return MemberDescriptor(name=name, explicit_value=value, payload=tuple(payload))


def _member_from_mapping(data: Mapping[str, Any]) -> MemberDescriptor:
    if "name" in data:
        unknown = set(data) - {"name", "value", "payload"}
        if unknown:
            raise DescriptorError(
                f"Unknown keys in member declaration {dict(data)!r}: {sorted(unknown)}"
            )
        payload = data.get("payload", ())
        if isinstance(payload, (str, bytes)) or not isinstance(payload, Iterable):
            payload = (payload,)
        return MemberDescriptor(
            name=data["name"],
            explicit_value=data.get("value"),
            payload=tuple(payload),
        )

    if len(data) != 1:
        raise DescriptorError(
            f"Member mapping must be {{name: value}} or carry a 'name' key: {dict(data)!r}"
        )
    (name, value), = data.items()
    return MemberDescriptor(name=name, explicit_value=value)


def to_member(entry: Any) -> MemberDescriptor:
    """Normalize a single member declaration."""
    if isinstance(entry, MemberDescriptor):
        return entry
    if isinstance(entry, str):
        return MemberDescriptor(name=entry)
    if isinstance(entry, Mapping):
        return _member_from_mapping(entry)
    if isinstance(entry, (tuple, list)):
        if not entry:
            raise DescriptorError("Empty member declaration")
        name, *rest = entry
        value = rest[0] if rest else None
        return MemberDescriptor(
            name=name,
            explicit_value=value,
            payload=tuple(rest[1:]),
        )
    raise DescriptorError(f"Unsupported member declaration: {entry!r}")


def normalize_members(entries: Iterable[Any]) -> Tuple[MemberDescriptor, ...]:
    """
    Normalize a member list into descriptors.

    Shape only: uniqueness and value assignment are checked by the
    synthesizer.

    Args:
        entries: Ordered member declarations in any accepted shape

    Returns:
        Tuple of MemberDescriptor in declaration order
    """
    if isinstance(entries, (str, bytes)):
        raise DescriptorError("Member list must be a sequence of declarations, not a string")
    members = tuple(to_member(entry) for entry in entries)
    if not members:
        raise DescriptorError("Member list is empty")
    return members


def to_entry(entry: Any) -> TableEntry:
    """Normalize a single auxiliary table row."""
    if isinstance(entry, TableEntry):
        return entry
    if isinstance(entry, MemberDescriptor):
        return TableEntry(name=entry.name, payload=entry.payload)
    if isinstance(entry, str):
        return TableEntry(name=entry)
    if isinstance(entry, (tuple, list)):
        if not entry:
            raise DescriptorError("Empty table entry")
        name, *payload = entry
        return TableEntry(name=name, payload=tuple(payload))
    raise DescriptorError(f"Unsupported table entry: {entry!r}")


def normalize_entries(entries: Any) -> Tuple[TableEntry, ...]:
    """
    Normalize auxiliary table rows.

    A mapping is read as ``{name: payload}``; a tuple/list payload value is
    spread into several payload items, anything else becomes a single item.
    """
    if isinstance(entries, Mapping):
        rows = []
        for name, payload in entries.items():
            if isinstance(payload, (tuple, list)):
                rows.append(TableEntry(name=name, payload=tuple(payload)))
            else:
                rows.append(TableEntry(name=name, payload=(payload,)))
        return tuple(rows)
    if isinstance(entries, (str, bytes)):
        raise DescriptorError("Table entries must be a sequence or mapping, not a string")
    return tuple(to_entry(entry) for entry in entries)
