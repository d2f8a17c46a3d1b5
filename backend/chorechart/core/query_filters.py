"""Query-parameter driven narrowing and ordering of list endpoints.

Parameters arrive as raw strings. A status filter fires when its parameter
is present (not missing, not blank) and picks the true branch only for the
literal "true"; every other present value picks the inverse branch. An
ordering fires only for a present literal "true".
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from sqlalchemy.orm import Query

TRUE_LITERAL = "true"


def IsPresent(value: str | None) -> bool:
    return value is not None and value.strip() != ""


def IsTrue(value: str | None) -> bool:
    return IsPresent(value) and value == TRUE_LITERAL


@dataclass(frozen=True)
class StatusFilter:
    Param: str
    WhenTrue: Callable[[Query], Query]
    WhenFalse: Callable[[Query], Query]
    Description: str = ""


@dataclass(frozen=True)
class Ordering:
    Param: str
    Columns: tuple[Any, ...]
    Joins: tuple[Any, ...] = field(default_factory=tuple)
    Description: str = ""


def ApplyStatusFilters(query: Query, params: Mapping[str, str | None], filters: list[StatusFilter]) -> Query:
    for status_filter in filters:
        value = params.get(status_filter.Param)
        if not IsPresent(value):
            continue
        if value == TRUE_LITERAL:
            query = status_filter.WhenTrue(query)
        else:
            query = status_filter.WhenFalse(query)
    return query


def ApplyOrderings(
    query: Query,
    params: Mapping[str, str | None],
    orderings: list[Ordering],
    tiebreaker: Any,
) -> Query:
    columns: list[Any] = []
    for ordering in orderings:
        if not IsTrue(params.get(ordering.Param)):
            continue
        for target in ordering.Joins:
            query = query.join(target)
        columns.extend(ordering.Columns)
    columns.append(tiebreaker)
    return query.order_by(None).order_by(*columns)


def ApplyQueryFilters(
    query: Query,
    params: Mapping[str, str | None],
    filters: list[StatusFilter],
    orderings: list[Ordering],
    tiebreaker: Any,
) -> Query:
    query = ApplyStatusFilters(query, params, filters)
    return ApplyOrderings(query, params, orderings, tiebreaker)


def ParamDescriptions(filters: list[StatusFilter], orderings: list[Ordering]) -> dict[str, str]:
    """Query parameter docs for a list endpoint, keyed by parameter name."""
    return {item.Param: item.Description for item in (*filters, *orderings)}
