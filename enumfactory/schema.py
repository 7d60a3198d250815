"""
Schema files for the build-time generation pass.

A schema declares enumerations and their auxiliary tables in YAML or JSON:

    enums:
      STATUS:
        label_format: identity
        members:
          - OK: 200
          - NOT_FOUND: 404
          - name: ERROR
            value: 500
            payload: ["Internal error"]
        tables:
          description:
            extractor: payload_value
            entries:
              OK: "Success"
              NOT_FOUND: "Missing"
          detail:
            extractor: payload_string

A table without ``entries`` is built from the payloads declared on the
members themselves (``detail`` above holds ERROR -> "Internal error");
members without a payload leave their slot ABSENT.

Loading a schema produces a frozen EnumRegistry. Structural problems raise
SchemaError with the path of the offending node; generation errors
(duplicate names, unknown members, duplicate values) propagate unchanged.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .errors import DescriptorError, SchemaError
from .registry import EnumRegistry
from .synthesizer import get_label_formatter
from .table import EXTRACTORS, check_table_suffix
from .utils.config import Config
from .utils.logging import log_with_data, timed

logger = logging.getLogger(__name__)

ENUM_KEYS = {"members", "tables", "label_format"}
TABLE_KEYS = {"entries", "extractor"}


def _expect_mapping(node: Any, path: str, source: Any) -> Mapping[str, Any]:
    if not isinstance(node, Mapping):
        raise SchemaError(f"expected a mapping, got {type(node).__name__}", path, source)
    return node


def _check_keys(node: Mapping[str, Any], allowed: set, path: str, source: Any) -> None:
    unknown = set(node) - allowed
    if unknown:
        raise SchemaError(f"unknown keys {sorted(unknown)}", path, source)


def _define_enum(
    registry: EnumRegistry, name: str, node: Any, source: Any
) -> None:
    path = f"enums.{name}"
    node = _expect_mapping(node, path, source)
    _check_keys(node, ENUM_KEYS, path, source)

    members = node.get("members")
    if not isinstance(members, list) or not members:
        raise SchemaError("'members' must be a non-empty list", f"{path}.members", source)

    formatter = None
    if "label_format" in node:
        try:
            formatter = get_label_formatter(node["label_format"])
        except ValueError as e:
            raise SchemaError(str(e), f"{path}.label_format", source) from e

    try:
        registry.define(name, members, label_formatter=formatter)
    except DescriptorError as e:
        raise SchemaError(str(e), f"{path}.members", source) from e

    tables = node.get("tables") or {}
    tables = _expect_mapping(tables, f"{path}.tables", source)
    for suffix, table_node in tables.items():
        _attach_table(registry, name, suffix, table_node, source)


def _attach_table(
    registry: EnumRegistry, enum_name: str, suffix: str, node: Any, source: Any
) -> None:
    path = f"enums.{enum_name}.tables.{suffix}"
    node = _expect_mapping(node, path, source)
    _check_keys(node, TABLE_KEYS, path, source)

    try:
        check_table_suffix(suffix)
    except DescriptorError as e:
        raise SchemaError(str(e), path, source) from e

    extractor_name = node.get("extractor", "payload_value")
    if not isinstance(extractor_name, str) or extractor_name not in EXTRACTORS:
        raise SchemaError(
            f"unknown extractor {extractor_name!r}, expected one of {sorted(EXTRACTORS)}",
            f"{path}.extractor",
            source,
        )

    if "entries" in node:
        entries = node["entries"]
        if not isinstance(entries, (list, Mapping)):
            raise SchemaError("'entries' must be a list or mapping", f"{path}.entries", source)
    else:
        # rows come from the members' own payloads
        entries = [
            descriptor for descriptor in registry.enum(enum_name).members if descriptor.payload
        ]

    try:
        registry.attach_table(enum_name, suffix, entries, EXTRACTORS[extractor_name])
    except DescriptorError as e:
        raise SchemaError(str(e), f"{path}.entries", source) from e


def load_schema_data(
    data: Any, config: Optional[Config] = None, *, source: Any = None
) -> EnumRegistry:
    """
    Generate every enumeration and table declared in an already-parsed schema.

    Args:
        data: Parsed schema document
        config: Generation settings (defaults to Config())
        source: Name of the document, used in error messages

    Returns:
        Frozen EnumRegistry
    """
    root = _expect_mapping(data, "<root>", source)
    _check_keys(root, {"enums"}, "<root>", source)
    enums = _expect_mapping(root.get("enums"), "enums", source)
    if not enums:
        raise SchemaError("no enumerations declared", "enums", source)

    registry = EnumRegistry(config)
    for name, node in enums.items():
        if not isinstance(name, str):
            raise SchemaError(f"enumeration name must be a string: {name!r}", "enums", source)
        _define_enum(registry, name, node, source)

    log_with_data(
        logger,
        "INFO",
        f"Loaded {len(registry)} enumerations from {source or 'schema data'}",
        {"source": source, "tables": {name: list(registry.tables(name)) for name in registry.names()}},
    )
    return registry.freeze()


def read_schema_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Parse a schema file by extension (.yaml/.yml or .json)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    suffix = path.suffix.lower()
    with open(path, 'r', encoding='utf-8') as f:
        try:
            if suffix in (".yaml", ".yml"):
                return yaml.safe_load(f)
            if suffix == ".json":
                return json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SchemaError(f"cannot parse: {e}", source=str(path)) from e
    raise SchemaError(f"unsupported schema format {suffix!r}", source=str(path))


@timed()
def load_schema(path: Union[str, Path], config: Optional[Config] = None) -> EnumRegistry:
    """Load a schema file and generate its enumerations."""
    return load_schema_data(read_schema_file(path), config, source=str(path))
