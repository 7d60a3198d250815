"""
End-to-end scenarios: declaring enumerations, attaching tables and reading
them back through the safe accessors.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from enumfactory import (
    ABSENT,
    DuplicateNameError,
    UnknownMemberError,
    automatic,
    build_table,
    is_valid,
    member,
    payload_value,
    safe_get,
    synthesize,
    to_label,
    valid_values,
)


class TestScenarios:
    """Dense, sparse, auxiliary, duplicate and drift scenarios."""

    def test_dense(self):
        """Test implicit values 0..n-1."""
        e = automatic("COLOR", "RED", "GREEN", "BLUE")

        assert (e.total, e.count) == (3, 3)
        assert to_label(e, 0) == "RED"
        assert not is_valid(e, 3)

    def test_sparse(self):
        """Test explicit values leave gaps."""
        e = synthesize("STATUS", [("OK", 200), ("NOT_FOUND", 404), ("ERROR", 500)])

        assert (e.total, e.count) == (501, 3)
        assert not is_valid(e, 201)
        assert to_label(e, 404) == "NOT_FOUND"

    def test_auxiliary_map(self):
        """Test a score table keyed by a sparse owner."""
        owner = synthesize("PRIORITY", [("LOW", 1), ("MEDIUM", 5), ("HIGH", 10)])
        score = build_table(
            owner, [("LOW", 0), ("MEDIUM", 50), ("HIGH", 100)], payload_value, suffix="score"
        )

        assert owner.total == 11
        assert safe_get(score, owner, 5) == 50
        assert safe_get(score, owner, 99) is ABSENT

    def test_duplicate_detection(self):
        """Test a repeated member name fails generation."""
        with pytest.raises(DuplicateNameError) as exc:
            synthesize("E", ["A", "B", "A"])
        assert exc.value.name == "A"

    def test_drift_detection(self):
        """Test a table naming a member its owner lacks fails generation."""
        owner = synthesize("XYZ", ["X", "Y", "Z"])

        with pytest.raises(UnknownMemberError) as exc:
            build_table(owner, [("X", 1), ("Y", 2), ("W", 3)], payload_value)
        assert exc.value.name == "W"

    def test_mixed_values(self):
        """Test implicit values continue from the previous member."""
        e = synthesize("E", ["A", ("B", 10), "C", ("D", 3), "E"])

        assert dict(e.values) == {"A": 0, "B": 10, "C": 11, "D": 3, "E": 4}
        assert e.total == 12
        assert list(valid_values(e)) == [0, 3, 4, 10, 11]


class TestProperties:
    """Properties that hold for any generated enumeration."""

    MEMBER_LISTS = [
        ["A"],
        ["A", "B", "C", "D"],
        [("A", 7)],
        [("A", 3), "B", ("C", 1)],
        [("A", 1000), ("B", 2), "C"],
        [member("LOW", 1, "l"), member("HIGH", 10, "h")],
    ]

    @pytest.mark.parametrize("members", MEMBER_LISTS)
    def test_label_round_trip(self, members):
        """Test every member's label is its name."""
        e = synthesize("E", members)

        for name, value in e:
            assert to_label(e, value) == name

    @pytest.mark.parametrize("members", MEMBER_LISTS)
    def test_total_and_count(self, members):
        """Test total is one past the maximum and bounds count."""
        e = synthesize("E", members)

        assert e.total == max(value for _, value in e) + 1
        assert e.count == len(members)
        assert e.count <= e.total

    @pytest.mark.parametrize("members", MEMBER_LISTS)
    def test_validity_matches_membership(self, members):
        """Test a value is valid exactly when some member has it."""
        e = synthesize("E", members)
        declared = {value for _, value in e}

        for value in range(-2, e.total + 2):
            assert is_valid(e, value) == (value in declared)

    @pytest.mark.parametrize("members", MEMBER_LISTS)
    def test_tables_match_total(self, members):
        """Test every table has exactly total slots."""
        e = synthesize("E", members)
        names = build_table(e, [name for name, _ in e], suffix="names")

        assert len(e.labels) == e.total
        assert len(names) == e.total
        assert names.slots == e.labels.slots

    def test_independent_enumerations(self):
        """Test enumerations with overlapping member names do not interact."""
        a = synthesize("A", [("X", 1), ("Y", 2)])
        b = synthesize("B", [("Y", 5), ("X", 9)])

        assert to_label(a, 1) == "X"
        assert to_label(b, 9) == "X"
        assert a.total == 3
        assert b.total == 10
        with pytest.raises(ValueError):
            safe_get(a.labels, b, 1)
