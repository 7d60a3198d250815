#!/usr/bin/env python3
"""
enumfactory CLI Tool

Build-time front end for schema files.
Supports: generate, check, show, lookup commands.

Usage:
    enumfactory --help
    enumfactory generate enums.yaml --lang c --output include/enums.h
    enumfactory -c enumfactory.yaml generate enums.yaml --write
    enumfactory check enums.yaml
    enumfactory show enums.yaml STATUS --table description
    enumfactory lookup enums.yaml STATUS 404
"""

import sys
import traceback
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .access import is_valid, safe_get
from .codegen import GENERATORS, write_output
from .errors import EnumFactoryError
from .schema import load_schema
from .utils.config import Config, load_config
from .utils.logging import get_logger, log_with_data, setup_logger

console = Console()
err_console = Console(stderr=True)

EXTENSIONS = {"c": ".h", "python": ".py"}


def print_info(message: str):
    """Print info message."""
    console.print(f"[blue]INFO:[/blue] {message}")


def print_success(message: str):
    """Print success message."""
    console.print(f"[green]SUCCESS:[/green] {message}")


def print_error(message: str):
    """Print error message."""
    err_console.print(f"[red]ERROR:[/red] {escape(message)}", highlight=False)


def _load(ctx, schema: str):
    """Load a schema with the context's config, exiting with status 1 on failure."""
    try:
        return load_schema(schema, ctx.obj['config'])
    except (EnumFactoryError, FileNotFoundError) as e:
        print_error(str(e))
        if ctx.obj['verbose']:
            err_console.print(traceback.format_exc())
        ctx.exit(1)


def _parse_int(text: str) -> Optional[int]:
    try:
        return int(text, 0)
    except ValueError:
        return None


# ============================================================================
# Main CLI Group
# ============================================================================
@click.group()
@click.version_option(version=__version__, prog_name="enumfactory")
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True, dir_okay=False),
              default=None, help='YAML configuration file')
@click.pass_context
def cli(ctx, verbose: bool, config_path: Optional[str]):
    """
    enumfactory: enumerations with metadata tables from declarative member lists.

    \b
    Quick Start:
      enumfactory check enums.yaml                 # Validate a schema
      enumfactory generate enums.yaml --lang c     # Emit a C header
      enumfactory lookup enums.yaml STATUS 404     # Safe lookup
    """
    ctx.ensure_object(dict)
    try:
        config = load_config(config_path) if config_path else Config()
    except ValueError as e:
        print_error(f"Invalid configuration: {e}")
        ctx.exit(1)
    if verbose:
        config.log_level = "DEBUG"

    setup_logger(name="enumfactory", level=config.log_level, log_file=config.log_file)
    ctx.obj['verbose'] = verbose
    ctx.obj['config'] = config


# ============================================================================
# Generate Command
# ============================================================================
@cli.command()
@click.argument('schema', type=click.Path(exists=True, dir_okay=False))
@click.option('--lang', '-l', type=click.Choice(sorted(GENERATORS)), default=None,
              help='Output language (default: from config, else c)')
@click.option('--output', '-o', type=click.Path(dir_okay=False), default=None,
              help='Output file (default: stdout)')
@click.option('--write', '-w', is_flag=True,
              help='Write to the configured output directory')
@click.option('--prefix', type=str, default=None,
              help='Prefix for C enumerator names')
@click.pass_context
def generate(ctx, schema: str, lang: Optional[str], output: Optional[str],
             write: bool, prefix: Optional[str]):
    """Generate source code from SCHEMA."""
    config: Config = ctx.obj['config']
    registry = _load(ctx, schema)
    language = lang or config.codegen.language

    if language == "c":
        text = GENERATORS["c"](
            registry,
            prefix=config.codegen.header_prefix if prefix is None else prefix,
        )
    else:
        text = GENERATORS[language](registry)

    log_with_data(get_logger(), "DEBUG", f"Generated {language} source", {
        "schema": schema,
        "enums": registry.names(),
        "bytes": len(text),
    })

    if output is None and write:
        output = Path(config.codegen.output_dir) / (Path(schema).stem + EXTENSIONS[language])
    if output is None:
        click.echo(text, nl=False)
        return

    path = write_output(text, output)
    print_success(f"Wrote {len(registry)} enumerations to {escape(str(path))}")


# ============================================================================
# Check Command
# ============================================================================
@cli.command()
@click.argument('schema', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def check(ctx, schema: str):
    """Validate SCHEMA and summarize its enumerations."""
    registry = _load(ctx, schema)

    table = Table(title=f"Enumerations in {escape(schema)}")
    table.add_column("Enum", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Dense", justify="center")
    table.add_column("Tables")

    for enumeration in registry:
        suffixes = ", ".join(registry.tables(enumeration.name))
        table.add_row(
            enumeration.name,
            str(enumeration.count),
            str(enumeration.total),
            "yes" if enumeration.is_dense else "no",
            suffixes,
        )

    console.print(table)
    print_success(f"{len(registry)} enumerations generated")


# ============================================================================
# Show Command
# ============================================================================
@cli.command()
@click.argument('schema', type=click.Path(exists=True, dir_okay=False))
@click.argument('enum_name')
@click.option('--table', '-t', 'suffix', default='label', help='Table to show (default: label)')
@click.pass_context
def show(ctx, schema: str, enum_name: str, suffix: str):
    """Print the populated slots of a table of ENUM_NAME."""
    registry = _load(ctx, schema)
    try:
        enumeration = registry.enum(enum_name)
        metadata = registry.table(enum_name, suffix)
    except EnumFactoryError as e:
        print_error(str(e))
        ctx.exit(1)

    table = Table(title=metadata.name)
    table.add_column("Value", justify="right")
    table.add_column("Member", style="cyan")
    table.add_column(suffix)
    for value, item in metadata.items():
        table.add_row(str(value), enumeration.name_of(value), escape(str(item)))

    console.print(table)
    print_info(
        f"{metadata.populated} of {enumeration.total} slots populated "
        f"(count={enumeration.count}, total={enumeration.total})"
    )


# ============================================================================
# Lookup Command
# ============================================================================
@cli.command()
@click.argument('schema', type=click.Path(exists=True, dir_okay=False))
@click.argument('enum_name')
@click.argument('value')
@click.option('--table', '-t', 'suffix', default='label', help='Table to read (default: label)')
@click.pass_context
def lookup(ctx, schema: str, enum_name: str, value: str, suffix: str):
    """Look up VALUE in a table of ENUM_NAME without failing on bad input."""
    registry = _load(ctx, schema)
    try:
        enumeration = registry.enum(enum_name)
        metadata = registry.table(enum_name, suffix)
    except EnumFactoryError as e:
        print_error(str(e))
        ctx.exit(1)

    ordinal = _parse_int(value)
    valid = is_valid(enumeration, ordinal)
    item = safe_get(metadata, enumeration, ordinal)

    shown = repr(item) if isinstance(item, str) else str(item)
    console.print(f"{enum_name}[{value}] valid: {'yes' if valid else 'no'}",
                  markup=False, highlight=False)
    console.print(f"{metadata.name}[{value}]: {shown}", markup=False, highlight=False)


def main():
    """Console script entry point."""
    cli(obj={})


if __name__ == '__main__':
    sys.exit(main())
