"""Repository-agnostic filter and pagination values.

A ``Query`` is an ordered chain of conditions joined by logical operators.
The first condition carries no operator; every following one carries the
operator that joins it to everything before it::

    query = Query.where("title", ComparisonOperator.MATCH, "dune").and_("author_name", ComparisonOperator.MATCH, "herbert")

    for operator, condition in query:
        ...  # (None, title MATCH dune), (AND, author_name MATCH herbert)

Adapters translate a query into their own dialect; see ``shared.persistence``.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ComparisonOperator(Enum):
    EQUAL = "Equal"
    NOT_EQUAL = "NotEqual"
    MATCH = "Match"


class LogicalOperator(Enum):
    AND = "And"
    OR = "Or"


@dataclass(frozen=True)
class Condition:
    field: str
    operator: ComparisonOperator
    value: Any


@dataclass(frozen=True)
class _Node:
    operator: LogicalOperator | None
    condition: Condition


class Query:
    """Composable filter made of ``(logical operator, condition)`` nodes."""

    def __init__(self) -> None:
        self._nodes: list[_Node] = []

    @classmethod
    def where(cls, field: str, operator: ComparisonOperator, value: Any) -> Query:
        query = cls()
        query._nodes.append(_Node(None, Condition(field, operator, value)))
        return query

    def and_(self, field: str, operator: ComparisonOperator, value: Any) -> Query:
        return self._append(LogicalOperator.AND, Condition(field, operator, value))

    def or_(self, field: str, operator: ComparisonOperator, value: Any) -> Query:
        return self._append(LogicalOperator.OR, Condition(field, operator, value))

    def _append(self, operator: LogicalOperator, condition: Condition) -> Query:
        # The first node never carries an operator, whatever the caller asked for
        self._nodes.append(_Node(operator if self._nodes else None, condition))
        return self

    @property
    def empty(self) -> bool:
        return not self._nodes

    def __iter__(self) -> Iterator[tuple[LogicalOperator | None, Condition]]:
        for node in self._nodes:
            yield node.operator, node.condition

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        parts = []
        for operator, condition in self:
            if operator is not None:
                parts.append(operator.value)
            parts.append(f"{condition.field} {condition.operator.value} {condition.value!r}")
        return f"Query({' '.join(parts)})"


@dataclass(frozen=True)
class Page:
    """One page of results. Numbers start at 1."""

    number: int = 1
    size: int = 15

    def __post_init__(self) -> None:
        if self.number < 1:
            raise ValueError("page number must be greater than or equal to 1")
        if self.size < 1:
            raise ValueError("page size must be greater than or equal to 1")

    @property
    def offset(self) -> int:
        return (self.number - 1) * self.size


DEFAULT_PAGE = Page(number=1, size=15)
