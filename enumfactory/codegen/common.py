"""Helpers shared by the source emitters."""

from pathlib import Path
from typing import Dict, List, Tuple, Union

from ..registry import EnumRegistry
from ..synthesizer import Enumeration
from ..table import MetadataTable

Target = Union[EnumRegistry, Enumeration]

HEADER_NOTE = "Generated by enumfactory. Do not edit."


def collect(target: Target) -> List[Tuple[Enumeration, Dict[str, MetadataTable]]]:
    """Enumerations with their tables (label table first) in definition order."""
    if isinstance(target, Enumeration):
        return [(target, {"label": target.labels})]
    if isinstance(target, EnumRegistry):
        return [(enumeration, target.tables(enumeration.name)) for enumeration in target]
    raise TypeError(f"Cannot generate code for {type(target).__name__}")


def write_output(text: str, path: Union[str, Path]) -> Path:
    """Write generated text to ``path``, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        f.write(text)
    return path
