"""Tests for row set algebra."""

from datasheet.core.set_ops import filter_rows, normalize_rows, row_union, row_xor


class TestRowSetAlgebra:
    def test_normalize_sorts_and_dedupes(self):
        assert normalize_rows([3, 1, 3, 2]) == [1, 2, 3]

    def test_normalize_none(self):
        assert normalize_rows(None) == []

    def test_union(self):
        assert row_union([1, 2, 3], [3, 4]) == [1, 2, 3, 4]

    def test_union_with_empty(self):
        assert row_union([], [2, 0]) == [0, 2]

    def test_xor_toggles_overlap(self):
        assert row_xor([1, 2, 3], [2, 3, 4, 5]) == [1, 4, 5]

    def test_xor_identical_is_empty(self):
        assert row_xor([1, 2], [2, 1]) == []

    def test_results_are_python_ints(self):
        result = row_union([1], [2])
        assert all(type(r) is int for r in result)


class TestFilterRows:
    def test_sorted_and_bounded(self):
        assert filter_rows([3, 7, 2], 5) == [2, 3]

    def test_negative_dropped(self):
        assert filter_rows([-1, 0, 1], 5) == [0, 1]

    def test_all_stale(self):
        assert filter_rows([9, 10], 5) == []

    def test_none(self):
        assert filter_rows(None, 5) == []
