"""
Registry of generated enumerations and their auxiliary tables.

The registry owns the artifacts produced during the generation phase and is
passed explicitly to consumers. Once ``freeze()`` is called it is read-only
and can be shared between threads without coordination.
"""

import logging
import threading
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from .errors import DuplicateNameError, RegistryFrozenError, UnknownMemberError
from .synthesizer import Enumeration, get_label_formatter, synthesize
from .table import MetadataTable, build_table, check_table_suffix
from .utils.config import Config

logger = logging.getLogger(__name__)


class EnumRegistry:
    """Holds enumerations by name and their tables by suffix."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self._enums: Dict[str, Enumeration] = {}
        self._tables: Dict[str, Dict[str, MetadataTable]] = {}
        self._lock = threading.Lock()
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "EnumRegistry":
        """End the generation phase."""
        self._frozen = True
        logger.debug(f"Registry frozen with {len(self._enums)} enumerations")
        return self

    def _check_open(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("Registry is frozen; generation phase is over")

    def define(
        self,
        name: str,
        members: Iterable[Any],
        *,
        label_formatter: Optional[Callable[[str], str]] = None,
    ) -> Enumeration:
        """Synthesize and register an enumeration using the registry's config."""
        generation = self.config.generation
        with self._lock:
            self._check_open()
            if name in self._enums:
                raise DuplicateNameError(name, "registry")
            enumeration = synthesize(
                name,
                members,
                label_formatter=label_formatter or get_label_formatter(generation.label_format),
                duplicate_values=generation.duplicate_values,
                warn_negative=generation.warn_negative_values,
            )
            self._enums[name] = enumeration
            self._tables[name] = {"label": enumeration.labels}
        return enumeration

    def attach_table(
        self,
        enum_name: str,
        suffix: str,
        entries: Any,
        extractor: Optional[Callable[..., Any]] = None,
    ) -> MetadataTable:
        """Build a table against a registered enumeration and register it."""
        with self._lock:
            self._check_open()
            owner = self.enum(enum_name)
            check_table_suffix(suffix)
            # generated constants upper-case the suffix, so TEXT and text collide
            if suffix.lower() in (existing.lower() for existing in self._tables[enum_name]):
                raise DuplicateNameError(suffix, f"tables of {enum_name}")
            table = build_table(owner, entries, extractor, suffix=suffix)
            self._tables[enum_name][suffix] = table
        return table

    def enum(self, name: str) -> Enumeration:
        try:
            return self._enums[name]
        except KeyError:
            raise UnknownMemberError(name, "registry") from None

    def table(self, enum_name: str, suffix: str = "label") -> MetadataTable:
        tables = self.tables(enum_name)
        try:
            return tables[suffix]
        except KeyError:
            raise UnknownMemberError(suffix, f"tables of {enum_name}") from None

    def tables(self, enum_name: str) -> Dict[str, MetadataTable]:
        """All tables of ``enum_name`` keyed by suffix, label table first."""
        self.enum(enum_name)
        return dict(self._tables[enum_name])

    def names(self) -> List[str]:
        """Enumeration names in definition order."""
        return list(self._enums)

    def __contains__(self, name: object) -> bool:
        return name in self._enums

    def __iter__(self) -> Iterator[Enumeration]:
        return iter(list(self._enums.values()))

    def __len__(self) -> int:
        return len(self._enums)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"EnumRegistry({', '.join(self._enums)}; {state})"
