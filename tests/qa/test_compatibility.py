"""Tests for dimension compatibility checks."""

import json

import numpy as np
import pytest

from rcot.core import ConstructRecord, FieldRef, SUTRecord
from rcot.exceptions import InvalidQueryError, UnknownFieldError
from rcot.qa import (
    allequal_multi,
    check_compatibility,
    compatibility_report,
    format_report_summary,
)


@pytest.fixture
def bag() -> SUTRecord:
    return SUTRecord(V=np.ones((3, 5)), U=np.ones((5, 3)), F=np.ones((2, 3)), S=np.ones((2, 3)))


class TestSingleGroup:
    """Tests for one-group queries."""

    def test_transposed_make_matches_use(self, bag):
        assert check_compatibility(bag, [("V'", "U")]) is True

    def test_plain_make_does_not_match_use(self, bag):
        assert check_compatibility(bag, [("V", "U")]) is False

    def test_field_ref_objects(self, bag):
        group = (FieldRef(name="V", transposed=True), FieldRef(name="U"))
        assert check_compatibility(bag, [group]) is True

    def test_one_element_group_passes(self, bag):
        assert check_compatibility(bag, [("V",)]) is True

    def test_three_element_group(self, bag):
        bag.Y = np.zeros((5, 3))
        assert check_compatibility(bag, [("U", "Y", "V'")]) is True
        assert check_compatibility(bag, [("U", "Y", "V")]) is False

    @pytest.mark.parametrize(
        ("shape", "expected"),
        [((3, 3), True), ((1, 1), True), ((3, 5), False), ((5, 3), False), ((4,), False)],
    )
    def test_field_against_its_transpose_iff_square(self, shape, expected):
        record = ConstructRecord(A=np.zeros(shape))
        assert check_compatibility(record, [("A", "A'")]) is expected

    def test_vector_transpose_is_row(self):
        record = ConstructRecord(x=np.ones(4), y=np.ones((1, 4)))
        assert check_compatibility(record, [("x'", "y")]) is True
        assert check_compatibility(record, [("x", "y")]) is False


class TestAggregation:
    """Tests for combining group outcomes."""

    def test_all_groups_pass(self, bag):
        assert allequal_multi(bag, ("V'", "U"), ("F", "S")) is True

    def test_all_groups_fail(self, bag):
        assert allequal_multi(bag, ("V", "U"), ("F", "U")) is False

    def test_mixed_outcome_is_false(self, bag):
        assert allequal_multi(bag, ("V", "U"), ("F", "S")) is False
        assert allequal_multi(bag, ("F", "S"), ("V", "U")) is False

    def test_one_failure_among_many(self, bag):
        groups = [("V'", "U"), ("F", "S"), ("U", "V'"), ("S", "U")]
        assert check_compatibility(bag, groups) is False


class TestAbsentAndUnknown:
    """Tests for absent fields and invalid names."""

    def test_absent_field_compares_as_incompatible(self, bag):
        assert check_compatibility(bag, [("E", "F")]) is False

    def test_absent_fields_compare_equal(self, bag):
        assert check_compatibility(bag, [("E", "e'")]) is True

    def test_unknown_field_raises(self, bag):
        with pytest.raises(UnknownFieldError, match="W"):
            check_compatibility(bag, [("V", "W")])

    def test_unknown_transposed_field_raises(self, bag):
        with pytest.raises(UnknownFieldError, match="A"):
            check_compatibility(bag, [("V'", "U"), ("A'", "U")])

    def test_unknown_field_is_key_error(self, bag):
        with pytest.raises(KeyError):
            check_compatibility(bag, [("W",)])

    def test_no_groups_raises(self, bag):
        with pytest.raises(InvalidQueryError):
            check_compatibility(bag, [])
        with pytest.raises(InvalidQueryError):
            allequal_multi(bag)

    def test_empty_group_raises(self, bag):
        with pytest.raises(InvalidQueryError):
            check_compatibility(bag, [("V'", "U"), ()])

    def test_bare_string_group_raises(self, bag):
        with pytest.raises(InvalidQueryError):
            check_compatibility(bag, ["V"])

    def test_malformed_reference_raises(self, bag):
        with pytest.raises(InvalidQueryError, match="'"):
            check_compatibility(bag, [("V", "'")])
        with pytest.raises(InvalidQueryError):
            check_compatibility(bag, [[("V",)]])

    def test_absent_field_matches_its_transpose(self):
        assert check_compatibility(ConstructRecord(), [("A", "A'")]) is True

    def test_bag_is_not_modified(self, bag):
        before = bag.V.copy()
        check_compatibility(bag, [("V'", "U")])
        np.testing.assert_array_equal(bag.V, before)
        assert bag.V.shape == (3, 5)


class TestCompatibilityReport:
    """Tests for the per-group report."""

    def test_report_groups(self, bag):
        report = compatibility_report(bag, [("V'", "U"), ("F", "U")])
        assert report.passed is False
        assert report.record_type == "SUTRecord"
        assert report.failed_groups == 1
        assert report.groups[0].references == ["V'", "U"]
        assert report.groups[0].shapes == [(5, 3), (5, 3)]
        assert report.groups[0].passed is True
        assert report.groups[1].passed is False

    def test_report_matches_check(self, bag):
        groups = [("V'", "U"), ("F", "S")]
        assert compatibility_report(bag, groups).passed == check_compatibility(bag, groups)

    def test_summary_line(self, bag):
        report = compatibility_report(bag, [("V", "U")])
        line = format_report_summary(report)
        assert line.startswith("Dimension check FAIL")
        assert "(V, U)" in line

    def test_save_json(self, bag, tmp_path):
        report = compatibility_report(bag, [("V'", "U")])
        path = tmp_path / "out" / "report.json"
        report.save_json(path)
        data = json.loads(path.read_text())
        assert data["passed"] is True
        assert data["groups"][0]["shapes"] == [[5, 3], [5, 3]]
