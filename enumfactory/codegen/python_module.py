"""
Python module emitter.

Produces a standalone module that does not import enumfactory:

    class STATUS(IntEnum):
        OK = 200
        ...

    STATUS_TOTAL = 501
    STATUS_COUNT = 3
    STATUS_LABEL = _table(STATUS_TOTAL, {200: 'OK', ...})

    def get_status_label(value): ...
    def is_valid_status(value): ...

Tables are tuples of ``total`` slots with None in unpopulated slots.
"""

import ast
import logging
from typing import Any, List

from ..synthesizer import Enumeration
from ..table import MetadataTable
from .common import HEADER_NOTE, Target, collect

logger = logging.getLogger(__name__)

PRELUDE = '''from enum import IntEnum


def _table(total, items):
    return tuple(items.get(index) for index in range(total))


def _lookup(table, value):
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if not 0 <= value < len(table):
        return None
    return table[value]
'''


def is_literal(item: Any) -> bool:
    """True if ``repr(item)`` evaluates back to an equal value."""
    try:
        return ast.literal_eval(repr(item)) == item
    except (ValueError, SyntaxError, TypeError, MemoryError, RecursionError):
        return False


class PythonModuleEmitter:
    """Emits the Python declarations of one enumeration and its tables."""

    def __init__(self, enumeration: Enumeration):
        self.enum = enumeration
        self.func_name = enumeration.name.lower()

    def emit(self, tables: dict) -> List[str]:
        name = self.enum.name
        lines = ["", "", f"class {name}(IntEnum):"]
        for member_name, value in self.enum:
            lines.append(f"    {member_name} = {value}")
        lines.extend([
            "",
            "",
            f"{name}_TOTAL = {self.enum.total}",
            f"{name}_COUNT = {self.enum.count}",
        ])
        for suffix, table in tables.items():
            lines.extend(self._emit_table(table))
        lines.extend([
            "",
            "",
            f"def is_valid_{self.func_name}(value):",
            f"    return get_{self.func_name}_label(value) is not None",
        ])
        return lines

    def _emit_table(self, table: MetadataTable) -> List[str]:
        items = dict(table.items())
        if not all(is_literal(item) for item in items.values()):
            logger.warning(f"Skipping table {table.name}: items are not Python literals")
            return []

        constant = f"{self.enum.name}_{table.suffix.upper()}"
        rows = [f"    {value}: {item!r}," for value, item in items.items()]
        return [
            "",
            f"{constant} = _table({self.enum.name}_TOTAL, {{",
            *rows,
            "})",
            "",
            "",
            f"def get_{self.func_name}_{table.suffix}(value):",
            f"    return _lookup({constant}, value)",
        ]


def generate_python_module(target: Target) -> str:
    """
    Emit a Python module for an enumeration or every enumeration of a registry.

    Args:
        target: EnumRegistry or Enumeration

    Returns:
        Module source text
    """
    enums = collect(target)
    if not enums:
        raise ValueError("No enumerations to generate")

    lines = [f'"""{HEADER_NOTE}"""', "", PRELUDE.rstrip("\n")]
    for enumeration, tables in enums:
        lines.extend(PythonModuleEmitter(enumeration).emit(tables))
    return "\n".join(lines) + "\n"
