"""
Operator expressions for ``Query.where``.

An ``Operator`` collects per-column conditions such as
``{"age": {"$gt": 18}}`` and converts them to a plain predicate map, which is
the only form the compiler sees.
"""

import copy
from enum import Enum
from typing import Any, Dict, Iterable, Tuple

from .schemas import PredicateMap


class QueryOperator(str, Enum):
    """Comparison operators understood by backend handles."""

    EQ = "$eq"
    NE = "$ne"
    GT = "$gt"
    GTE = "$gte"
    LT = "$lt"
    LTE = "$lte"
    IN = "$in"
    NOT_IN = "$notIn"
    LIKE = "$like"
    BETWEEN = "$between"


class Operator:
    """Composable where-condition builder."""

    def __init__(self, expr: Dict[str, Any] = None):
        self._expr: Dict[str, Any] = copy.deepcopy(expr) if expr else {}

    @classmethod
    def condition(cls, column: str, op: QueryOperator, value: Any) -> "Operator":
        if not column:
            raise ValueError("Column name cannot be empty")
        op = QueryOperator(op)
        if op in (QueryOperator.IN, QueryOperator.NOT_IN):
            if isinstance(value, (str, bytes)):
                raise TypeError(f"{op.value} needs a collection of values, got {type(value).__name__}")
            value = list(value)
        elif op == QueryOperator.BETWEEN:
            value = list(value)
            if len(value) != 2:
                raise ValueError("BETWEEN needs exactly two bounds")
        return cls({column: {op.value: value}})

    @classmethod
    def eq(cls, column: str, value: Any) -> "Operator":
        return cls.condition(column, QueryOperator.EQ, value)

    @classmethod
    def ne(cls, column: str, value: Any) -> "Operator":
        return cls.condition(column, QueryOperator.NE, value)

    @classmethod
    def gt(cls, column: str, value: Any) -> "Operator":
        return cls.condition(column, QueryOperator.GT, value)

    @classmethod
    def gte(cls, column: str, value: Any) -> "Operator":
        return cls.condition(column, QueryOperator.GTE, value)

    @classmethod
    def lt(cls, column: str, value: Any) -> "Operator":
        return cls.condition(column, QueryOperator.LT, value)

    @classmethod
    def lte(cls, column: str, value: Any) -> "Operator":
        return cls.condition(column, QueryOperator.LTE, value)

    @classmethod
    def in_(cls, column: str, values: Iterable[Any]) -> "Operator":
        return cls.condition(column, QueryOperator.IN, values)

    @classmethod
    def not_in(cls, column: str, values: Iterable[Any]) -> "Operator":
        return cls.condition(column, QueryOperator.NOT_IN, values)

    @classmethod
    def like(cls, column: str, pattern: str) -> "Operator":
        return cls.condition(column, QueryOperator.LIKE, pattern)

    @classmethod
    def between(cls, column: str, bounds: Tuple[Any, Any]) -> "Operator":
        return cls.condition(column, QueryOperator.BETWEEN, bounds)

    def and_(self, other: "Operator") -> "Operator":
        """Combine two expressions; operators on the same column are merged."""
        merged = copy.deepcopy(self._expr)
        for column, cond in other.to_predicate().items():
            existing = merged.get(column)
            if isinstance(existing, dict) and isinstance(cond, dict):
                existing.update(cond)
            else:
                merged[column] = cond
        return Operator(merged)

    def __and__(self, other: "Operator") -> "Operator":
        return self.and_(other)

    def to_predicate(self) -> PredicateMap:
        return copy.deepcopy(self._expr)

    def __bool__(self) -> bool:
        return bool(self._expr)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Operator):
            return NotImplemented
        return self._expr == other._expr

    def __repr__(self) -> str:
        return f"Operator({self._expr!r})"
