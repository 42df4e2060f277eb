"""
Builders for the dynamic parts of repository SQL.

Both builders collect typed objects first (``Assignment`` / ``Predicate``)
and only render them at the end, numbering placeholders ``:p1 .. :pN`` in
insertion order. Caller values never end up in statement text; they travel
in the parallel ``values`` list and are bound with ``bind_params``.

Partial update::

    >>> clause = sql_for_partial_update(
    ...     {"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
    >>> clause.sql
    '"first_name" = :p1, "age" = :p2'
    >>> clause.values
    ['Aliya', 32]

Filtering::

    >>> where = (FilterQuery()
    ...          .contains("name", "net")
    ...          .between("num_employees", 10, None, "minEmployees", "maxEmployees")
    ...          .render("postgresql"))
    >>> where.sql
    'WHERE "name" ILIKE :p1 AND "num_employees" >= :p2'
    >>> where.values
    ['%net%', 10]
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence

from jobly.core.errors import InvalidInputError

ILIKE = "ILIKE"


def placeholder(index: int) -> str:
    """Named bind marker for the 1-based position ``index``."""
    return f":p{index}"


def bind_params(values: Sequence[Any]) -> Dict[str, Any]:
    """Turn an ordered value list into the bind dict matching ``placeholder``."""
    return {f"p{index}": value for index, value in enumerate(values, start=1)}


def quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


# ---------------------------------------------------------------------------
# Partial update
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Assignment:
    column: str
    value: Any

    def render(self, index: int) -> str:
        return f"{quote_identifier(self.column)} = {placeholder(index)}"


class SetClause(NamedTuple):
    """Rendered ``SET`` body: one fragment per column, values in the same order."""
    columns: List[str]
    values: List[Any]

    @property
    def sql(self) -> str:
        return ", ".join(self.columns)

    @property
    def next_placeholder(self) -> str:
        """Placeholder for the key in the trailing ``WHERE``."""
        return placeholder(len(self.values) + 1)


def sql_for_partial_update(data_to_update: Mapping[str, Any], js_to_sql: Mapping[str, str]) -> SetClause:
    """
    Compile the ``SET`` part of an ``UPDATE`` for the fields being changed.

    Args:
        data_to_update: field name -> new value, only for fields to change.
            ``None`` is a legal value and sets the column to NULL.
        js_to_sql: field name -> column name; fields missing here are used
            verbatim as the column name.

    Raises:
        InvalidInputError: "No data" when there is nothing to update.
    """
    if not data_to_update:
        raise InvalidInputError("No data")

    assignments = [
        Assignment(js_to_sql.get(field, field), value)
        for field, value in data_to_update.items()
    ]

    return SetClause(
        columns=[a.render(index) for index, a in enumerate(assignments, start=1)],
        values=[a.value for a in assignments],
    )


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

def check_bounds(lower_name: str, lower: Optional[Any], upper_name: str, upper: Optional[Any]) -> None:
    """Reject a range whose lower bound exceeds its upper bound."""
    if lower is not None and upper is not None and lower > upper:
        raise InvalidInputError(f"{lower_name} cannot be greater than {upper_name}")


@dataclass(frozen=True)
class Predicate:
    column: str
    operator: str
    value: Any
    # Compare by numeric value even where the column holds decimal text
    numeric: bool = False

    def render(self, index: int, dialect_name: str) -> str:
        column = quote_identifier(self.column)
        if self.numeric and dialect_name != "postgresql":
            column = f"CAST({column} AS NUMERIC)"
        if self.operator == ILIKE and dialect_name != "postgresql":
            # ILIKE is PostgreSQL only
            return f"lower({column}) LIKE lower({placeholder(index)})"
        return f"{column} {self.operator} {placeholder(index)}"


class WhereClause(NamedTuple):
    predicates: List[str]
    values: List[Any]

    @property
    def sql(self) -> str:
        if not self.predicates:
            return ""
        return "WHERE " + " AND ".join(self.predicates)


class FilterQuery:
    """
    Collects optional filters for a list query.

    Every ``add``-style method ignores ``None`` so callers can pass filter
    fields straight through; each applied filter yields exactly one predicate
    and one placeholder.
    """

    def __init__(self):
        self._predicates: List[Predicate] = []

    def __len__(self) -> int:
        return len(self._predicates)

    def add(self, column: str, operator: str, value: Any, numeric: bool = False) -> "FilterQuery":
        if value is not None:
            self._predicates.append(Predicate(column, operator, value, numeric))
        return self

    def contains(self, column: str, value: Optional[str]) -> "FilterQuery":
        """Case-insensitive substring match."""
        if value is None:
            return self
        return self.add(column, ILIKE, f"%{value}%")

    def at_least(self, column: str, value: Any) -> "FilterQuery":
        return self.add(column, ">=", value)

    def at_most(self, column: str, value: Any) -> "FilterQuery":
        return self.add(column, "<=", value)

    def greater_than(self, column: str, value: Any, numeric: bool = False) -> "FilterQuery":
        return self.add(column, ">", value, numeric)

    def between(self, column: str, lower: Any, upper: Any, lower_name: str, upper_name: str) -> "FilterQuery":
        """Inclusive range; either bound may be missing. Bounds are checked before anything is added."""
        check_bounds(lower_name, lower, upper_name, upper)
        return self.at_least(column, lower).at_most(column, upper)

    def render(self, dialect_name: str = "postgresql") -> WhereClause:
        return WhereClause(
            predicates=[p.render(index, dialect_name) for index, p in enumerate(self._predicates, start=1)],
            values=[p.value for p in self._predicates],
        )
