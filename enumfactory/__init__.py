"""
enumfactory: declarative enumerations with metadata tables.

A member list such as

    STATUS = synthesize("STATUS", [("OK", 200), ("NOT_FOUND", 404), ("ERROR", 500)])

produces an IntEnum type, ``total`` (one past the largest value, 501) and
``count`` (3) constants, a label table indexed by ordinal, and safe
accessors that return ABSENT instead of reading out of range:

    to_label(STATUS, 404)   -> "NOT_FOUND"
    is_valid(STATUS, 201)   -> False
    to_label(STATUS, 9999)  -> ABSENT

Additional tables are attached with ``build_table`` and always share the
owner's value-to-slot mapping.
"""

__version__ = "0.1.0"
__author__ = "enumfactory Team"

from .errors import (
    EnumFactoryError,
    DescriptorError,
    DuplicateNameError,
    DuplicateValueError,
    UnknownMemberError,
    SchemaError,
    RegistryFrozenError,
)
from .descriptor import (
    MemberDescriptor,
    TableEntry,
    member,
    normalize_members,
    normalize_entries,
)
from .table import (
    ABSENT,
    MetadataTable,
    build_table,
    label_extractor,
    payload_value,
    payload_string,
)
from .synthesizer import Enumeration, synthesize, automatic, assigned
from .access import is_valid, safe_get, to_label, safe_array_access, valid_values
from .registry import EnumRegistry
from .schema import load_schema, load_schema_data

__all__ = [
    # Errors
    "EnumFactoryError",
    "DescriptorError",
    "DuplicateNameError",
    "DuplicateValueError",
    "UnknownMemberError",
    "SchemaError",
    "RegistryFrozenError",
    # Member lists
    "MemberDescriptor",
    "TableEntry",
    "member",
    "normalize_members",
    "normalize_entries",
    # Tables
    "ABSENT",
    "MetadataTable",
    "build_table",
    "label_extractor",
    "payload_value",
    "payload_string",
    # Enumerations
    "Enumeration",
    "synthesize",
    "automatic",
    "assigned",
    # Safe access
    "is_valid",
    "safe_get",
    "to_label",
    "safe_array_access",
    "valid_values",
    # Generation scopes
    "EnumRegistry",
    "load_schema",
    "load_schema_data",
]
