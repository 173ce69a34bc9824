"""Listing query construction from untrusted request parameters.

A listing is driven by a :class:`Predicate`: an ordered list of
``(column, operator, value)`` clauses and nested groups combined with AND/OR.
The predicate is rendered once into a SQLAlchemy expression with bound
parameters, and that single expression feeds both the page query and the
count query, so the two can never disagree about which rows match.

Identifiers never come from the request: filter columns are fixed by the
caller and sort columns are checked against an allow-list.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sqlalchemy import ColumnElement, Select, and_, func, or_, select
from sqlmodel import SQLModel

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_MAX_LIMIT = 100
STATUS_ALL = "all"
# OFFSET is bound as a signed 64-bit integer
MAX_OFFSET = 2**63 - 1

_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?)(\d+)")
_MAX_DIGITS = len(str(MAX_OFFSET))
_LIKE_ESCAPE = "\\"


class Operator(str, Enum):
    """Comparison operators a clause may use."""

    EQ = "eq"
    ILIKE = "ilike"
    GE = "ge"
    LT = "lt"


class Combinator(str, Enum):
    AND = "and"
    OR = "or"


_OPERATORS: dict[Operator, Callable[[Any, Any], ColumnElement[bool]]] = {
    Operator.EQ: lambda column, value: column == value,
    Operator.ILIKE: lambda column, value: column.ilike(value, escape=_LIKE_ESCAPE),
    Operator.GE: lambda column, value: column >= value,
    Operator.LT: lambda column, value: column < value,
}


@dataclass(frozen=True)
class Clause:
    """A single ``column <operator> :value`` comparison."""

    column: str
    operator: Operator
    value: Any


@dataclass
class Predicate:
    """Ordered clauses and sub-predicates joined by one combinator."""

    combinator: Combinator = Combinator.AND
    terms: list["Clause | Predicate"] = field(default_factory=list)

    def where(self, column: str, operator: Operator, value: Any) -> "Predicate":
        self.terms.append(Clause(column, operator, value))
        return self

    def group(self, predicate: "Predicate") -> "Predicate":
        self.terms.append(predicate)
        return self

    def render(self, model: type[SQLModel]) -> ColumnElement[bool] | None:
        """Render into a SQLAlchemy boolean expression, or None when empty."""
        parts: list[ColumnElement[bool]] = []
        for term in self.terms:
            if isinstance(term, Predicate):
                rendered = term.render(model)
                if rendered is not None:
                    parts.append(rendered)
            else:
                column = resolve_column(model, term.column)
                parts.append(_OPERATORS[term.operator](column, term.value))

        if not parts:
            return None
        if len(parts) == 1:
            return parts[0]
        if self.combinator is Combinator.OR:
            return or_(*parts)
        return and_(*parts)


def resolve_column(model: type[SQLModel], name: str) -> Any:
    """Look up a mapped column by name, refusing anything not on the table."""
    columns = model.__table__.c  # type: ignore[attr-defined]
    if name not in columns:
        raise ValueError(f"Unknown column for {model.__name__}: {name!r}")
    return columns[name]


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches as a literal substring."""
    return (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", f"{_LIKE_ESCAPE}%")
        .replace("_", f"{_LIKE_ESCAPE}_")
    )


def _parse_leading_int(raw: str | int | None) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT_PATTERN.match(raw)
    if match is None:
        return None
    sign, digits = match.groups()
    # Longer digit runs saturate instead of tripping int() limits
    value = MAX_OFFSET if len(digits.lstrip("0")) > _MAX_DIGITS else int(digits)
    return -value if sign == "-" else value


@dataclass(frozen=True)
class ListingParams:
    """Normalized pagination, filter and sort parameters."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    status: str | None = None
    search: str | None = None
    sort_by: str = "created_at"
    descending: bool = True

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(
        cls,
        *,
        page: str | int | None = None,
        limit: str | int | None = None,
        status: str | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
        sortable_columns: Sequence[str] = ("created_at",),
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = DEFAULT_MAX_LIMIT,
    ) -> "ListingParams":
        """Clamp raw query-string values; never raises on malformed input.

        Numbers are read like ``parseInt``: leading digits count, anything
        unparseable or zero falls back to the default, then the value is
        floored at 1. ``limit`` is additionally capped at ``max_limit``, and
        ``page`` so that the resulting offset still fits in ``MAX_OFFSET``.
        """
        page_num = _parse_leading_int(page) or DEFAULT_PAGE
        limit_num = _parse_leading_int(limit) or default_limit
        limit_num = min(max(1, limit_num), max_limit)
        max_page = MAX_OFFSET // limit_num + 1

        status = status.strip() if status else None
        if not status or status == STATUS_ALL:
            status = None

        search = search.strip() if search else None

        default_sort = sortable_columns[0]
        sort_column = sort_by if sort_by in sortable_columns else default_sort

        return cls(
            page=min(max(1, page_num), max_page),
            limit=limit_num,
            status=status,
            search=search or None,
            sort_by=sort_column,
            descending=(sort_order or "").upper() != "ASC",
        )


@dataclass(frozen=True)
class ListingQuery:
    """Page and count statements sharing one rendered predicate."""

    params: ListingParams
    statement: Select[Any]
    count_statement: Select[Any]


class ListingQueryBuilder[ModelType: SQLModel]:
    """Builds listing queries for one table.

    Args:
        model: Table model being listed.
        sortable_columns: Allow-list of sort columns; the first is the default.
        search_columns: Columns OR'd together for the substring search.
        status_column: Column compared against the status filter.
    """

    def __init__(
        self,
        model: type[ModelType],
        sortable_columns: Sequence[str],
        search_columns: Sequence[str],
        status_column: str = "status",
    ):
        if not sortable_columns:
            raise ValueError("At least one sortable column is required")
        for name in (*sortable_columns, *search_columns, status_column):
            resolve_column(model, name)
        self.model = model
        self.sortable_columns = tuple(sortable_columns)
        self.search_columns = tuple(search_columns)
        self.status_column = status_column

    def params(self, **raw: Any) -> ListingParams:
        """Normalize raw request values against this builder's allow-list."""
        return ListingParams.from_query(sortable_columns=self.sortable_columns, **raw)

    def predicate(self, params: ListingParams) -> Predicate:
        predicate = Predicate(Combinator.AND)
        if params.status is not None:
            predicate.where(self.status_column, Operator.EQ, params.status)
        if params.search:
            pattern = f"%{escape_like(params.search)}%"
            search = Predicate(Combinator.OR)
            for column in self.search_columns:
                search.where(column, Operator.ILIKE, pattern)
            predicate.group(search)
        return predicate

    def build(self, params: ListingParams) -> ListingQuery:
        where = self.predicate(params).render(self.model)

        sort_column = resolve_column(self.model, params.sort_by)
        tiebreak = resolve_column(self.model, "id")
        if params.descending:
            ordering = (sort_column.desc(), tiebreak.desc())
        else:
            ordering = (sort_column.asc(), tiebreak.asc())

        statement = select(self.model)
        count_statement = select(func.count()).select_from(self.model)
        if where is not None:
            statement = statement.where(where)
            count_statement = count_statement.where(where)

        statement = statement.order_by(*ordering).limit(params.limit).offset(params.offset)
        return ListingQuery(
            params=params,
            statement=statement,
            count_statement=count_statement,
        )
