"""
Fluent query builder.

A ``Query`` is bound to one entity and one ``ModelRegistry``. Fluent calls
accumulate state, and exactly one terminal call (``find_all``, ``find`` or
``count``) compiles it and dispatches it to the entity's backend handle.
"""

import copy
import logging
from typing import TYPE_CHECKING, Any, Generic, List, Optional, TypeVar, Union

from torm.core.exceptions import (
    ClassNotFoundError,
    QueryConsumedError,
    QueryNotImplementedError,
    WrongMethodInvokedError,
)

from .compiler import build_complex_query, build_count_query, build_query
from .operator import Operator
from .schemas import CompiledQuery, PredicateMap, QueryState

if TYPE_CHECKING:
    from torm.common.base_dao import BaseModelHandle
    from torm.resources.registry import ModelRegistry

logger = logging.getLogger(__name__)

E = TypeVar("E")


class Query(Generic[E]):
    """
    Builds and executes a query for a single entity.

    Setters are no-ops for empty input so they can be chained with optional
    arguments::

        rows = await registry.query(Widget).column("price").where({"status": "active"}).find()
    """

    def __init__(self, entity: Optional[Any], registry: "ModelRegistry"):
        self._entity = entity
        self._registry = registry
        self._state = QueryState()
        self._consumed = False

    @property
    def entity(self) -> Optional[Any]:
        return self._entity

    @property
    def state(self) -> QueryState:
        return self._state

    # ===== FLUENT SETTERS =====

    def column(self, name: str, alias: Optional[str] = None) -> "Query[E]":
        """Select a column, optionally under an alias.

        Once invoked, use find() rather than find_all().
        """
        if not name:
            return self

        if not alias:
            self._state.attributes.append(name)
        else:
            self._state.attributes.append((name, alias))
        return self

    def not_(self, name: str) -> "Query[E]":
        """Exclude a column from the result"""
        if not name:
            return self

        self._state.excludes.append(name)
        return self

    def where(self, conditions: Union[PredicateMap, Operator, None]) -> "Query[E]":
        """Add conditions; keys repeated across calls keep the last value"""
        if isinstance(conditions, Operator):
            conditions = conditions.to_predicate()
        if not conditions:
            return self

        self._state.where_conditions.append(copy.deepcopy(dict(conditions)))
        return self

    def limit(self, num: Optional[int]) -> "Query[E]":
        """Limit the number of rows returned"""
        if num is not None:
            self._state.limit = self._check_bound("limit", num)
        return self

    def offset(self, num: Optional[int]) -> "Query[E]":
        """Skip a number of rows"""
        if num is not None:
            self._state.offset = self._check_bound("offset", num)
        return self

    # TODO: ordering needs sort keys on CompiledQuery and ModelDAO support
    def order(self, *args: Any) -> "Query[E]":
        raise QueryNotImplementedError("order")

    def raw(self, *args: Any) -> List[E]:
        raise QueryNotImplementedError("raw")

    # ===== COMPILATION =====

    def build_query(self) -> CompiledQuery:
        """Compile the state used by find_all()"""
        return build_query(self._state)

    def build_complex_query(self) -> CompiledQuery:
        """Compile the state used by find()"""
        return build_complex_query(self._state)

    # ===== TERMINAL OPERATIONS =====

    async def find_all(self) -> List[E]:
        """Execute a full-row query.

        Only valid when neither column() nor not_() were invoked.
        """
        self._check_preconditions("find_all()")
        if self._state.has_projection():
            raise WrongMethodInvokedError("find_all()", "find()")

        handle = self._resolve_handle()
        query = self.build_query()
        return await self._dispatch("find_all()", handle, query)

    async def find(self) -> List[Any]:
        """Execute a query built with column() or not_(), rows are returned raw"""
        self._check_preconditions("find()")
        if not self._state.has_projection():
            raise WrongMethodInvokedError("find()", "find_all()")

        handle = self._resolve_handle()
        query = self.build_complex_query()
        return await self._dispatch("find()", handle, query)

    async def count(self, name: Optional[str] = None, alias: Optional[str] = None) -> Optional[Any]:
        """Count rows, ``COUNT(*)`` unless a column name is given.

        Accumulated where/limit/offset are not applied.
        """
        self._check_preconditions("count()")
        handle = self._resolve_handle()
        query = build_count_query(name, alias)
        rows = await self._dispatch("count()", handle, query)
        if len(rows) <= 0:
            return None

        aggregate = query.attributes[0]
        return rows[0].values[aggregate.alias]

    # ===== HELPERS =====

    def _check_preconditions(self, method: str) -> None:
        if self._consumed:
            raise QueryConsumedError(method)
        if self._entity is None:
            raise ClassNotFoundError()

    def _resolve_handle(self) -> "BaseModelHandle":
        return self._registry.require(self._entity)

    async def _dispatch(self, method: str, handle: "BaseModelHandle", query: CompiledQuery) -> List[Any]:
        self._consumed = True

        logger.debug(f"Executing {method} with {query.to_dict()}")
        return await handle.find_all(query)

    @staticmethod
    def _check_bound(kind: str, num: int) -> int:
        if isinstance(num, bool) or not isinstance(num, int):
            raise TypeError(f"{kind} must be an integer, got {type(num).__name__}")
        if num < 0:
            raise ValueError(f"{kind} cannot be negative: {num}")
        return num
