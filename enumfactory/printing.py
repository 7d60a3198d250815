"""Label listing helpers."""

import sys
from typing import List, Optional, TextIO

from .table import MetadataTable


def format_labels(table: MetadataTable) -> List[str]:
    """One ``Label[<ordinal>]: <item>`` line per populated slot; gaps are skipped."""
    return [f"Label[{value}]: {item}" for value, item in table.items()]


def print_labels(table: MetadataTable, stream: Optional[TextIO] = None) -> int:
    """Write ``format_labels(table)`` to ``stream`` and return the number of lines."""
    out = stream or sys.stdout
    lines = format_labels(table)
    for line in lines:
        out.write(line + "\n")
    out.flush()
    return len(lines)
