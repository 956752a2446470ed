"""
Compilation of query state into backend-neutral descriptors.

None of these functions mutate the state they are given.
"""

import copy
from typing import List, Optional

from .schemas import (
    DEFAULT_COUNT_ALIAS,
    Aggregate,
    CompiledQuery,
    ExcludeAttributes,
    PredicateMap,
    QueryState,
)


def merge_where(conditions: List[PredicateMap]) -> Optional[PredicateMap]:
    """Fold predicate maps left to right; later keys overwrite earlier ones.

    Returns None when there are no maps so an empty where is never emitted.
    """
    if not conditions:
        return None

    merged: PredicateMap = {}
    for cond in conditions:
        for key in cond:
            merged[key] = copy.deepcopy(cond[key])
    return merged


def _apply_pagination(query: CompiledQuery, state: QueryState) -> None:
    if state.limit is not None:
        query.limit = state.limit
    if state.offset is not None:
        query.offset = state.offset


def build_query(state: QueryState) -> CompiledQuery:
    """Basic query: pagination and where, full rows."""
    query = CompiledQuery()
    _apply_pagination(query, state)
    query.where = merge_where(state.where_conditions)
    return query


def build_complex_query(state: QueryState) -> CompiledQuery:
    """Query with an explicit projection or exclusion."""
    query = CompiledQuery()

    if state.attributes:
        query.attributes = list(state.attributes)

    # exclusion wins over projection
    if state.excludes:
        query.attributes = ExcludeAttributes(exclude=list(state.excludes))

    # an attribute list combined with pagination is dropped unless columns were asked for
    if state.is_paginated() and not state.attributes and isinstance(query.attributes, list):
        query.attributes = None

    _apply_pagination(query, state)
    query.where = merge_where(state.where_conditions)
    return query


def build_count_query(name: Optional[str] = None, alias: Optional[str] = None) -> CompiledQuery:
    """Query projecting a single COUNT aggregate."""
    if not name or not name.strip():
        name = "*"
    if not alias or not alias.strip():
        alias = DEFAULT_COUNT_ALIAS
    return CompiledQuery(attributes=[Aggregate(function="COUNT", column=name, alias=alias)])
