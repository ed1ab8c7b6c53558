"""Translation of ``shared.query`` values into persistence dialects.

Two renderings of the same query are provided:

* ``to_sql`` produces a parameterised SQL fragment. Repositories log it at
  debug level so slow searches can be replayed by hand.
* ``to_filter`` produces a protean ``Q`` expression that runs on whatever
  provider the aggregate is bound to (memory in tests, PostgreSQL in
  production).
"""

from dataclasses import dataclass, field
from typing import Any

from protean.core.repository import BaseRepository
from protean.exceptions import DatabaseError, TransactionError
from protean.utils.query import Q
from sqlalchemy.exc import IntegrityError

from shared.logging import get_logger
from shared.query import DEFAULT_PAGE, ComparisonOperator, Condition, LogicalOperator, Page, Query

logger = get_logger(__name__)

# Raised by providers when a write or the unit-of-work commit fails
WRITE_ERRORS = (TransactionError, DatabaseError, IntegrityError)


def _sql_condition(condition: Condition) -> tuple[str, Any]:
    match condition.operator:
        case ComparisonOperator.EQUAL:
            template = "{} IS ?" if condition.value is None else "{} = ?"
            return template.format(condition.field), condition.value
        case ComparisonOperator.NOT_EQUAL:
            template = "{} IS NOT ?" if condition.value is None else "{} != ?"
            return template.format(condition.field), condition.value
        case ComparisonOperator.MATCH:
            if condition.value is None:
                raise ValueError(f"cannot match {condition.field} against a null value")
            return f"{condition.field} ILIKE ?", f"%{condition.value}%"
    raise ValueError(f"unsupported comparison operator {condition.operator!r}")


def to_sql(query: Query) -> tuple[str, list[Any]]:
    """Render ``query`` as ``(fragment, params)``; an empty query renders as ``("", [])``."""
    fragments: list[str] = []
    params: list[Any] = []
    for operator, condition in query:
        clause, value = _sql_condition(condition)
        if operator is not None:
            fragments.append(" AND " if operator is LogicalOperator.AND else " OR ")
        fragments.append(clause)
        params.append(value)
    return "".join(fragments), params


def _q_condition(condition: Condition) -> Q:
    match condition.operator:
        case ComparisonOperator.EQUAL:
            return Q(**{condition.field: condition.value})
        case ComparisonOperator.NOT_EQUAL:
            return ~Q(**{condition.field: condition.value})
        case ComparisonOperator.MATCH:
            if condition.value is None:
                raise ValueError(f"cannot match {condition.field} against a null value")
            return Q(**{f"{condition.field}__icontains": condition.value})
    raise ValueError(f"unsupported comparison operator {condition.operator!r}")


def to_filter(query: Query) -> Q | None:
    """Combine ``query`` into a single ``Q``; ``None`` when empty.

    AND binds tighter than OR, as in the SQL rendering: ``a OR b AND c``
    becomes ``a | (b & c)``.
    """
    terms: list[Q] = []
    for operator, condition in query:
        q = _q_condition(condition)
        if terms and operator is LogicalOperator.AND:
            terms[-1] = terms[-1] & q
        else:
            terms.append(q)

    expression = None
    for term in terms:
        expression = term if expression is None else expression | term
    return expression


@dataclass
class Paginated:
    """One page of aggregates plus the total number of matches."""

    items: list = field(default_factory=list)
    limit: int = DEFAULT_PAGE.size
    offset: int = 0
    total: int = 0


class QueryableRepository(BaseRepository):
    """Base for protean repositories that answer ``Query``/``Page`` searches."""

    ordering: tuple[str, ...] = ("-created_at",)

    def find_by_query(self, query: Query, page: Page = DEFAULT_PAGE) -> Paginated:
        fragment, params = to_sql(query)
        logger.debug(
            "Searching repository",
            aggregate=self.meta_.part_of.__name__,
            where=fragment,
            params=params,
            limit=page.size,
            offset=page.offset,
        )

        queryset = self._dao.query
        expression = to_filter(query)
        if expression is not None:
            queryset = queryset.filter(expression)

        results = queryset.order_by(list(self.ordering)).offset(page.offset).limit(page.size).all()
        return Paginated(items=list(results.items), limit=page.size, offset=page.offset, total=results.total)


def is_unique_violation(exc: BaseException) -> bool:
    """Whether ``exc`` is a failed commit or write caused by a database integrity error."""
    seen = set()
    while exc is not None and id(exc) not in seen:
        if isinstance(exc, IntegrityError):
            return True
        seen.add(id(exc))
        exc = getattr(exc, "original_exception", None) or exc.__cause__
    return False

