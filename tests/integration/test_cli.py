"""
Integration tests for the enumfactory command line interface.
"""

import logging
import pytest
import sys
import textwrap
from pathlib import Path

from click.testing import CliRunner

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from enumfactory import __version__
from enumfactory.cli import cli

SCHEMA_YAML = textwrap.dedent("""\
    enums:
      STATUS:
        members:
          - OK: 200
          - NOT_FOUND: 404
          - ERROR: 500
        tables:
          description:
            entries:
              OK: "Success"
              ERROR: "Internal [bold]error[/bold]"
      COLOR:
        members: [RED, GREEN, BLUE]
""")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "enums.yaml"
    path.write_text(SCHEMA_YAML)
    return str(path)


@pytest.fixture(autouse=True)
def reset_logger():
    """The CLI attaches handlers to streams that are closed after invoke."""
    yield
    logger = logging.getLogger("enumfactory")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()


class TestCliBasics:
    """Tests for the command group."""

    def test_help(self, runner):
        """Test the help lists every command."""
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for command in ("generate", "check", "show", "lookup"):
            assert command in result.output

    def test_version(self, runner):
        """Test --version."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_schema(self, runner, tmp_path):
        """Test click rejects a missing schema path."""
        result = runner.invoke(cli, ["check", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 2

    def test_invalid_config(self, runner, schema_file, tmp_path):
        """Test a config with unknown settings."""
        config = tmp_path / "config.yaml"
        config.write_text("codegen:\n  language: rust\n")

        result = runner.invoke(cli, ["--config", str(config), "check", schema_file])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_c_to_stdout(self, runner, schema_file):
        """Test the default language writes a C header to stdout."""
        result = runner.invoke(cli, ["generate", schema_file])

        assert result.exit_code == 0
        assert "typedef enum STATUS {" in result.output
        assert "#define COLOR_count 3" in result.output

    def test_python(self, runner, schema_file):
        """Test --lang python."""
        result = runner.invoke(cli, ["generate", schema_file, "--lang", "python"])

        assert result.exit_code == 0
        assert "class STATUS(IntEnum):" in result.output
        assert "def get_status_description(value):" in result.output

    def test_prefix(self, runner, schema_file):
        """Test --prefix for C enumerators."""
        result = runner.invoke(cli, ["generate", schema_file, "--prefix", "APP_"])

        assert result.exit_code == 0
        assert "    APP_NOT_FOUND = 404," in result.output

    def test_output_file(self, runner, schema_file, tmp_path):
        """Test --output writes the file."""
        output = tmp_path / "include" / "enums.h"

        result = runner.invoke(cli, ["generate", schema_file, "--output", str(output)])

        assert result.exit_code == 0
        assert "Wrote 2" in result.output
        assert "STATUS_total = 501" in output.read_text()

    def test_language_from_config(self, runner, schema_file, tmp_path):
        """Test the configured default language."""
        config = tmp_path / "config.yaml"
        config.write_text("codegen:\n  language: python\n")

        result = runner.invoke(cli, ["--config", str(config), "generate", schema_file])

        assert result.exit_code == 0
        assert "class COLOR(IntEnum):" in result.output

    def test_write_to_output_dir(self, runner, schema_file, tmp_path):
        """Test --write uses the configured output directory."""
        config = tmp_path / "config.yaml"
        config.write_text(
            f"codegen:\n  language: python\n  output_dir: {tmp_path / 'gen'}\n"
        )

        result = runner.invoke(cli, ["--config", str(config), "generate", schema_file, "--write"])

        assert result.exit_code == 0
        assert "class STATUS(IntEnum):" in (tmp_path / "gen" / "enums.py").read_text()

    def test_undecodable_schema(self, runner, tmp_path):
        """Test a schema that is not UTF-8 exits with status 1."""
        path = tmp_path / "bad.yaml"
        path.write_bytes(b"enums:\n  E:\n    members: [\xff]\n")

        result = runner.invoke(cli, ["check", str(path)])

        assert result.exit_code == 1
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_generation_error(self, runner, tmp_path):
        """Test generation errors exit with status 1."""
        path = tmp_path / "dup.yaml"
        path.write_text("enums:\n  E:\n    members: [A, B, A]\n")

        result = runner.invoke(cli, ["generate", str(path)])

        assert result.exit_code == 1
        assert "Duplicate name" in result.output


class TestInspectCommands:
    """Tests for check, show and lookup."""

    def test_check(self, runner, schema_file):
        """Test the summary table."""
        result = runner.invoke(cli, ["check", schema_file])

        assert result.exit_code == 0
        assert "STATUS" in result.output
        assert "501" in result.output
        assert "2 enumerations generated" in result.output

    def test_show_labels(self, runner, schema_file):
        """Test showing the label table."""
        result = runner.invoke(cli, ["show", schema_file, "STATUS"])

        assert result.exit_code == 0
        assert "NOT_FOUND" in result.output
        assert "3 of 501 slots populated" in result.output

    def test_show_auxiliary(self, runner, schema_file):
        """Test showing an auxiliary table keeps markup-like text literal."""
        result = runner.invoke(cli, ["show", schema_file, "STATUS", "--table", "description"])

        assert result.exit_code == 0
        assert "Success" in result.output
        assert "[bold]error[/bold]" in result.output

    def test_show_unknown_table(self, runner, schema_file):
        """Test an unknown table suffix."""
        result = runner.invoke(cli, ["show", schema_file, "STATUS", "--table", "weight"])

        assert result.exit_code == 1

    def test_lookup_valid(self, runner, schema_file):
        """Test looking up a declared value."""
        result = runner.invoke(cli, ["lookup", schema_file, "STATUS", "404"])

        assert result.exit_code == 0
        assert "STATUS[404] valid: yes" in result.output
        assert "STATUS_label[404]: 'NOT_FOUND'" in result.output

    def test_lookup_gap(self, runner, schema_file):
        """Test a gap in a sparse enumeration."""
        result = runner.invoke(cli, ["lookup", schema_file, "STATUS", "201"])

        assert result.exit_code == 0
        assert "STATUS[201] valid: no" in result.output
        assert "STATUS_label[201]: ABSENT" in result.output

    def test_lookup_negative_and_garbage(self, runner, schema_file):
        """Test lookups never fail on bad input."""
        negative = runner.invoke(cli, ["lookup", schema_file, "COLOR", "--", "-1"])
        garbage = runner.invoke(cli, ["lookup", schema_file, "COLOR", "purple"])

        assert negative.exit_code == 0
        assert "COLOR_label[-1]: ABSENT" in negative.output
        assert garbage.exit_code == 0
        assert "COLOR[purple] valid: no" in garbage.output

    def test_lookup_hex(self, runner, schema_file):
        """Test integer literals with a base prefix."""
        result = runner.invoke(cli, ["lookup", schema_file, "STATUS", "0x1f4"])

        assert "valid: yes" in result.output
        assert "'ERROR'" in result.output

    def test_lookup_unknown_enum(self, runner, schema_file):
        """Test an undefined enumeration name."""
        result = runner.invoke(cli, ["lookup", schema_file, "SHAPE", "0"])

        assert result.exit_code == 1
        assert "Unknown member" in result.output
