"""Translate storage-independent filter predicates into SQLAlchemy clauses.

Values are always passed as bound parameters; ``contains`` escapes ``%`` and
``_`` so they match literally.
"""

from collections.abc import Callable, Iterable
from typing import Any

from sqlalchemy import ColumnElement
from sqlalchemy.orm import DeclarativeBase

from records_api.domain.entities import FilterPredicate

_OPERATORS: dict[str, Callable[[Any, Any], ColumnElement[bool]]] = {
    "contains": lambda column, value: column.contains(value, autoescape=True),
    "equals": lambda column, value: column == value,
    "gte": lambda column, value: column >= value,
    "lte": lambda column, value: column <= value,
}


def compile_predicates(
    model: type[DeclarativeBase],
    predicates: Iterable[FilterPredicate],
) -> list[ColumnElement[bool]]:
    """Compile each predicate against ``model``'s table, preserving order."""
    columns = model.__table__.columns
    clauses: list[ColumnElement[bool]] = []

    for predicate in predicates:
        if predicate.field_name not in columns:
            raise ValueError(f"Unknown filter field: {predicate.field_name!r}")
        build = _OPERATORS.get(predicate.operator)
        if build is None:
            raise ValueError(f"Unsupported filter operator: {predicate.operator!r}")
        clauses.append(build(columns[predicate.field_name], predicate.value))

    return clauses
