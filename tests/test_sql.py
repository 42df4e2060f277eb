"""
Unit tests for the SQL builders.

Tests cover:
- Partial-update SET clause generation
- Filter WHERE clause generation and bound checks
"""

import pytest

from jobly.core.errors import InvalidInputError
from jobly.core.sql import (
    FilterQuery,
    bind_params,
    check_bounds,
    placeholder,
    sql_for_partial_update,
)


class TestPartialUpdate:
    """Tests for sql_for_partial_update"""

    def test_maps_fields_to_columns_in_order(self):
        clause = sql_for_partial_update(
            {"firstName": "Aliya", "age": 32},
            {"firstName": "first_name", "age": "age"},
        )

        assert clause.columns == ['"first_name" = :p1', '"age" = :p2']
        assert clause.sql == '"first_name" = :p1, "age" = :p2'
        assert clause.values == ["Aliya", 32]

    def test_unmapped_fields_use_their_own_name(self):
        clause = sql_for_partial_update({"title": "New", "salary": 10}, {})

        assert clause.sql == '"title" = :p1, "salary" = :p2'
        assert clause.values == ["New", 10]

    def test_none_is_a_value(self):
        """Setting a field to null is different from leaving it out"""
        clause = sql_for_partial_update(
            {"numEmployees": None, "logoUrl": None},
            {"numEmployees": "num_employees", "logoUrl": "logo_url"},
        )

        assert clause.sql == '"num_employees" = :p1, "logo_url" = :p2'
        assert clause.values == [None, None]

    def test_placeholders_are_contiguous(self):
        data = {f"field{i}": i for i in range(1, 8)}
        clause = sql_for_partial_update(data, {})

        assert len(clause.columns) == 7
        assert len(clause.values) == 7
        for index, column in enumerate(clause.columns, start=1):
            assert column.endswith(f":p{index}")
        assert clause.values == list(range(1, 8))

    def test_next_placeholder_follows_values(self):
        clause = sql_for_partial_update({"a": 1, "b": 2}, {})

        assert clause.next_placeholder == ":p3"
        assert bind_params([*clause.values, "key"]) == {"p1": 1, "p2": 2, "p3": "key"}

    def test_empty_data_is_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            sql_for_partial_update({}, {"firstName": "first_name"})

        assert exc_info.value.message == "No data"

    def test_identifiers_are_quoted(self):
        clause = sql_for_partial_update({'bad"name': 1}, {})

        assert clause.sql == '"bad""name" = :p1'


class TestFilterQuery:
    """Tests for FilterQuery and check_bounds"""

    def test_no_filters_means_no_where(self):
        where = FilterQuery().contains("name", None).at_least("salary", None).render()

        assert where.sql == ""
        assert where.values == []

    def test_contains_wraps_value_and_uses_ilike_on_postgres(self):
        where = FilterQuery().contains("name", "net").render("postgresql")

        assert where.sql == 'WHERE "name" ILIKE :p1'
        assert where.values == ["%net%"]

    def test_contains_falls_back_to_lower_like(self):
        where = FilterQuery().contains("title", "Pharm").render("sqlite")

        assert where.sql == 'WHERE lower("title") LIKE lower(:p1)'
        assert where.values == ["%Pharm%"]

    def test_predicates_are_conjunctive_and_numbered(self):
        where = (
            FilterQuery()
            .between("num_employees", 50, 100, "minEmployees", "maxEmployees")
            .contains("name", "c")
            .render("postgresql")
        )

        assert where.predicates == [
            '"num_employees" >= :p1',
            '"num_employees" <= :p2',
            '"name" ILIKE :p3',
        ]
        assert where.sql == 'WHERE "num_employees" >= :p1 AND "num_employees" <= :p2 AND "name" ILIKE :p3'
        assert where.values == [50, 100, "%c%"]

    def test_between_with_one_bound(self):
        where = FilterQuery().between("num_employees", None, 10, "minEmployees", "maxEmployees").render()

        assert where.sql == 'WHERE "num_employees" <= :p1'
        assert where.values == [10]

    def test_equal_bounds_are_allowed(self):
        where = FilterQuery().between("num_employees", 5, 5, "minEmployees", "maxEmployees").render()

        assert where.values == [5, 5]

    def test_inverted_bounds_are_rejected_before_adding(self):
        query = FilterQuery()
        with pytest.raises(InvalidInputError) as exc_info:
            query.between("num_employees", 100, 50, "minEmployees", "maxEmployees")

        assert exc_info.value.message == "minEmployees cannot be greater than maxEmployees"
        assert len(query) == 0

    def test_greater_than(self):
        where = FilterQuery().greater_than("equity", 0).render()

        assert where.sql == 'WHERE "equity" > :p1'
        assert where.values == [0]

    def test_numeric_comparison_casts_off_postgres(self):
        query = FilterQuery().greater_than("equity", 0, numeric=True)

        assert query.render("sqlite").sql == 'WHERE CAST("equity" AS NUMERIC) > :p1'
        assert query.render("postgresql").sql == 'WHERE "equity" > :p1'

    def test_zero_is_a_real_bound(self):
        where = FilterQuery().at_least("salary", 0).render()

        assert where.values == [0]

    @pytest.mark.parametrize("lower, upper", [(None, None), (1, None), (None, 1), (1, 2), (2, 2)])
    def test_check_bounds_accepts(self, lower, upper):
        check_bounds("minSalary", lower, "maxSalary", upper)

    def test_check_bounds_message_names_both_fields(self):
        with pytest.raises(InvalidInputError, match="minSalary cannot be greater than maxSalary"):
            check_bounds("minSalary", 3, "maxSalary", 2)


def test_placeholder_is_one_based():
    assert placeholder(1) == ":p1"
    assert bind_params(["a", "b"]) == {"p1": "a", "p2": "b"}
