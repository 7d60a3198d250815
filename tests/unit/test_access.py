"""
Unit tests for the validity and safe-access layer.
"""

import pytest
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from enumfactory.access import (
    in_range,
    is_valid,
    safe_array_access,
    safe_get,
    to_label,
    valid_values,
)
from enumfactory.synthesizer import synthesize
from enumfactory.table import ABSENT, build_table, payload_value


@pytest.fixture
def color():
    return synthesize("COLOR", ["RED", "GREEN", "BLUE"])


@pytest.fixture
def status():
    return synthesize("STATUS", [("OK", 200), ("NOT_FOUND", 404), ("ERROR", 500)])


class TestIsValid:
    """Tests for is_valid()."""

    def test_dense_valid_everywhere_in_range(self, color):
        """Test every in-range ordinal of a dense enumeration is valid."""
        assert all(is_valid(color, v) for v in range(color.total))

    def test_dense_out_of_range(self, color):
        """Test ordinals outside [0, total)."""
        assert not is_valid(color, -1)
        assert not is_valid(color, 3)
        assert not is_valid(color, 10 ** 12)

    def test_sparse_gaps_are_invalid(self, status):
        """Test only declared values of a sparse enumeration are valid."""
        valid = [v for v in range(status.total) if is_valid(status, v)]

        assert valid == [200, 404, 500]
        assert not is_valid(status, 201)
        assert not is_valid(status, 0)

    def test_non_integers(self, color):
        """Test non-integer values are never valid."""
        assert not is_valid(color, "RED")
        assert not is_valid(color, 1.0)
        assert not is_valid(color, None)
        assert not is_valid(color, True)

    def test_enum_members(self, status):
        """Test generated IntEnum members are valid."""
        assert is_valid(status, status.type.NOT_FOUND)

    def test_in_range(self, status):
        """Test in_range ignores membership."""
        assert in_range(status, 201)
        assert not in_range(status, 501)


class TestSafeGet:
    """Tests for safe_get() and to_label()."""

    def test_to_label_round_trip(self, status):
        """Test every member's label is its name."""
        for name, value in status:
            assert to_label(status, value) == name

    def test_to_label_absent(self, status):
        """Test gaps and out-of-range ordinals give ABSENT."""
        assert to_label(status, 201) is ABSENT
        assert to_label(status, 501) is ABSENT
        assert to_label(status, -200) is ABSENT

    def test_safe_get_auxiliary(self, status):
        """Test safe_get on an auxiliary table."""
        text = build_table(status, {"OK": "Success", "ERROR": "Failure"}, payload_value, suffix="text")

        assert safe_get(text, status, 200) == "Success"
        assert safe_get(text, status, 404) is ABSENT
        assert safe_get(text, status, 9999) is ABSENT

    def test_safe_get_foreign_table(self, status, color):
        """Test a table cannot be read through another enumeration."""
        with pytest.raises(ValueError):
            safe_get(color.labels, status, 0)

    def test_concurrent_readers(self, status):
        """Test lookups from many threads agree."""
        def read(value):
            return to_label(status, value)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(read, [200, 404, 500, 201] * 50))

        assert results[:4] == ["OK", "NOT_FOUND", "ERROR", ABSENT]
        assert results == results[:4] * 50


class TestSafeArrayAccess:
    """Tests for safe_array_access()."""

    def test_in_range(self, color):
        """Test reads inside the range."""
        names = ["red", "green", "blue"]

        assert safe_array_access(names, color, 1) == "green"

    def test_out_of_range(self, color):
        """Test reads outside the range."""
        names = ["red", "green", "blue"]

        assert safe_array_access(names, color, -1) is ABSENT
        assert safe_array_access(names, color, color.total) is ABSENT

    def test_short_sequence(self, color):
        """Test a sequence shorter than total."""
        assert safe_array_access(["red"], color, 2) is ABSENT

    def test_gap_reads_sequence(self, status):
        """Test only the range is checked, not membership."""
        data = list(range(status.total))

        assert safe_array_access(data, status, 201) == 201


class TestValidValues:
    """Tests for valid_values()."""

    def test_sparse(self, status):
        """Test declared values in ascending order."""
        assert list(valid_values(status)) == [200, 404, 500]

    def test_declaration_order_does_not_matter(self):
        """Test values are yielded in ordinal order."""
        e = synthesize("E", [("C", 3), ("A", 1), ("B", 2)])

        assert list(valid_values(e)) == [1, 2, 3]
