"""
Error types raised while generating enumerations and their tables.

Every error here is raised at generation time. Lookups on generated
artifacts never raise for out-of-range input; they return ABSENT instead.
"""

from typing import Any, Optional, Sequence


class EnumFactoryError(ValueError):
    """Base class for all enumfactory generation errors."""


class DescriptorError(EnumFactoryError):
    """A member declaration or enumeration name has an invalid shape."""


class DuplicateNameError(EnumFactoryError):
    """Two declarations in the same scope share a name."""

    def __init__(self, name: str, scope: str = ""):
        self.name = name
        self.scope = scope
        where = f" in {scope}" if scope else ""
        super().__init__(f"Duplicate name{where}: {name!r}")


class DuplicateValueError(EnumFactoryError):
    """Two members were assigned the same value."""

    def __init__(self, value: int, names: Sequence[str], scope: str = ""):
        self.value = value
        self.names = tuple(names)
        self.scope = scope
        where = f" in {scope}" if scope else ""
        super().__init__(
            f"Duplicate value{where}: {value} assigned to {', '.join(self.names)}"
        )


class UnknownMemberError(EnumFactoryError):
    """A name does not resolve to anything declared in its owner."""

    def __init__(self, name: str, owner: str = ""):
        self.name = name
        self.owner = owner
        where = f" of {owner}" if owner else ""
        super().__init__(f"Unknown member{where}: {name!r}")


class SchemaError(EnumFactoryError):
    """A schema document is structurally invalid."""

    def __init__(self, message: str, path: Optional[str] = None, source: Any = None):
        self.path = path
        self.source = source
        prefix = f"{source}: " if source else ""
        location = f"{path}: " if path else ""
        super().__init__(f"{prefix}{location}{message}")


class RegistryFrozenError(EnumFactoryError):
    """Generation was attempted after the registry was frozen."""
