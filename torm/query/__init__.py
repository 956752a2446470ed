"""
Query module for torm.

Main Components:
- Query: fluent builder bound to one entity, with find_all/find/count
- compiler: pure functions turning query state into CompiledQuery descriptors
- Operator: where-condition builder
- Schemas: query state and descriptor types
"""

from .builder import Query
from .compiler import build_complex_query, build_count_query, build_query, merge_where
from .operator import Operator, QueryOperator
from .schemas import (
    DEFAULT_COUNT_ALIAS,
    Aggregate,
    CompiledQuery,
    ExcludeAttributes,
    QueryState,
    Record,
)

__all__ = [
    # Main classes
    "Query",
    "Operator",
    "QueryOperator",
    # Compilation
    "build_query",
    "build_complex_query",
    "build_count_query",
    "merge_where",
    # Descriptor types
    "QueryState",
    "CompiledQuery",
    "ExcludeAttributes",
    "Aggregate",
    "Record",
    "DEFAULT_COUNT_ALIAS",
]
