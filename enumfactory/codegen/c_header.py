"""
C header emitter.

For every enumeration the header declares

    typedef enum STATUS { OK = 200, ..., STATUS_total = 501 } STATUS;
    #define STATUS_count 3
    static const char *const STATUS_label[STATUS_total] = { [OK] = "OK", ... };
    static inline bool STATUS_is_valid(int value);
    static inline const char *STATUS_get_label(int value);

plus one array and accessor per auxiliary table whose items are strings,
numbers or booleans. Unpopulated slots are NULL (strings) or flagged in a
``STATUS_has_<suffix>`` presence array (numbers).
"""

import logging
import math
import re
from typing import Any, List, Optional, Tuple

from ..synthesizer import Enumeration
from ..table import MetadataTable
from .common import HEADER_NOTE, Target, collect

logger = logging.getLogger(__name__)

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


def c_string(text: str) -> str:
    """Quote ``text`` as a C string literal."""
    out = []
    for ch in text:
        if ch == "\\":
            out.append("\\\\")
        elif ch == '"':
            out.append('\\"')
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\t":
            out.append("\\t")
        elif ord(ch) < 0x20 or ord(ch) == 0x7f:
            # octal escapes stop after three digits, unlike \x
            out.append(f"\\{ord(ch):03o}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def c_element_type(items: List[Any]) -> Optional[str]:
    """C element type able to hold every item, or None if there is none."""
    if not items:
        return None
    if all(isinstance(item, str) for item in items):
        return "const char *"
    if all(isinstance(item, bool) for item in items):
        return "bool"
    if any(isinstance(item, bool) for item in items):
        return None
    if all(isinstance(item, int) for item in items):
        if all(INT32_MIN <= item <= INT32_MAX for item in items):
            return "int"
        return "long long"
    if all(isinstance(item, (int, float)) for item in items):
        if all(math.isfinite(item) for item in items):
            return "double"
    return None


def c_literal(item: Any, c_type: str) -> str:
    if c_type == "const char *":
        return c_string(item)
    if c_type == "bool":
        return "true" if item else "false"
    if c_type == "double":
        return repr(float(item))
    if c_type == "long long":
        return f"{item}LL"
    return str(item)


def header_guard(name: str) -> str:
    guard = re.sub(r"[^A-Za-z0-9]", "_", name).upper()
    if not guard or guard[0].isdigit():
        guard = "_" + guard
    return f"{guard}_H"


class CHeaderEmitter:
    """Emits the C declarations of one enumeration and its tables."""

    def __init__(self, enumeration: Enumeration, prefix: str = ""):
        self.enum = enumeration
        self.prefix = prefix

    def enumerator(self, member_name: str) -> str:
        return f"{self.prefix}{member_name}"

    def emit(self, tables: dict) -> List[str]:
        lines = self._emit_type()
        if self.enum.total == 0:
            lines.extend(self._emit_empty_accessors())
            return lines
        lines.extend(self._emit_label_table(self.enum.labels))
        for suffix, table in tables.items():
            if suffix == "label":
                continue
            lines.extend(self._emit_table(table))
        return lines

    def _emit_type(self) -> List[str]:
        name = self.enum.name
        lines = [f"typedef enum {name} {{"]
        for member_name, value in self.enum:
            lines.append(f"    {self.enumerator(member_name)} = {value},")
        lines.append(f"    {name}_total = {self.enum.total}")
        lines.append(f"}} {name};")
        lines.append("")
        lines.append(f"#define {name}_count {self.enum.count}")
        lines.append("")
        return lines

    def _designated(self, table: MetadataTable, c_type: str) -> List[str]:
        rows = []
        for value, item in table.items():
            index = self.enumerator(self.enum.name_of(value))
            rows.append(f"    [{index}] = {c_literal(item, c_type)},")
        return rows

    def _emit_label_table(self, table: MetadataTable) -> List[str]:
        name = self.enum.name
        lines = [f"static const char *const {name}_label[{name}_total] = {{"]
        lines.extend(self._designated(table, "const char *"))
        lines.append("};")
        lines.append("")
        lines.append(f"static inline bool {name}_is_valid(int value) {{")
        lines.append(
            f"    return value >= 0 && value < {name}_total && {name}_label[value] != NULL;"
        )
        lines.append("}")
        lines.append("")
        lines.append(f"static inline const char *{name}_get_label(int value) {{")
        lines.append(f"    return {name}_is_valid(value) ? {name}_label[value] : NULL;")
        lines.append("}")
        lines.append("")
        lines.append(f"static inline const char *{name}_to_string({name} value) {{")
        lines.append(f"    return {name}_get_label((int)value);")
        lines.append("}")
        lines.append("")
        return lines

    def _emit_table(self, table: MetadataTable) -> List[str]:
        name = self.enum.name
        items = [item for _, item in table.items()]
        c_type = c_element_type(items)
        if c_type is None:
            logger.warning(f"Skipping table {table.name}: items have no C representation")
            return []

        array = f"{name}_{table.suffix}"
        if c_type == "const char *":
            return [
                f"static const char *const {array}[{name}_total] = {{",
                *self._designated(table, c_type),
                "};",
                "",
                f"static inline const char *{name}_get_{table.suffix}(int value) {{",
                f"    return (value >= 0 && value < {name}_total) ? {array}[value] : NULL;",
                "}",
                "",
            ]

        presence = [
            f"    [{self.enumerator(self.enum.name_of(value))}] = true,"
            for value, _ in table.items()
        ]
        return [
            f"static const {c_type} {array}[{name}_total] = {{",
            *self._designated(table, c_type),
            "};",
            "",
            f"static const bool {name}_has_{table.suffix}[{name}_total] = {{",
            *presence,
            "};",
            "",
            f"static inline {c_type} {name}_get_{table.suffix}(int value, {c_type} fallback) {{",
            f"    return (value >= 0 && value < {name}_total && {name}_has_{table.suffix}[value])",
            f"        ? {array}[value] : fallback;",
            "}",
            "",
        ]

    def _emit_empty_accessors(self) -> List[str]:
        name = self.enum.name
        return [
            f"static inline bool {name}_is_valid(int value) {{",
            "    (void)value;",
            "    return false;",
            "}",
            "",
            f"static inline const char *{name}_get_label(int value) {{",
            "    (void)value;",
            "    return NULL;",
            "}",
            "",
        ]


def generate_c_header(target: Target, *, guard: Optional[str] = None, prefix: str = "") -> str:
    """
    Emit a C header for an enumeration or every enumeration of a registry.

    Args:
        target: EnumRegistry or Enumeration
        guard: Include guard macro (derived from the first enum name if omitted)
        prefix: Prepended to every enumerator name

    Returns:
        Header source text
    """
    enums: List[Tuple[Enumeration, dict]] = collect(target)
    if not enums:
        raise ValueError("No enumerations to generate")
    guard = guard or header_guard(enums[0][0].name + "_enums")

    lines = [
        f"/* {HEADER_NOTE} */",
        "#pragma once",
        f"#ifndef {guard}",
        f"#define {guard}",
        "",
        "#include <stdbool.h>",
        "#include <stddef.h>",
        "",
    ]
    for enumeration, tables in enums:
        lines.extend(CHeaderEmitter(enumeration, prefix).emit(tables))
    lines.append(f"#endif /* {guard} */")
    return "\n".join(lines) + "\n"
