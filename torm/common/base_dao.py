import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import and_, func, inspect, literal_column, select
from sqlalchemy.orm import Session

from torm.query.operator import QueryOperator
from torm.query.schemas import Aggregate, CompiledQuery, ExcludeAttributes, Record

logger = logging.getLogger(__name__)

# Type variables for our generic classes
T = TypeVar("T")  # SQLAlchemy model
ReadT = TypeVar("ReadT", bound=BaseModel)  # Pydantic model


class BaseModelHandle(ABC):
    """Backend capable of executing a compiled query"""

    @abstractmethod
    async def find_all(self, query: CompiledQuery) -> List[Any]:
        """Execute the query and return its rows"""


class ModelDAO(BaseModelHandle, Generic[T, ReadT]):
    """Executes compiled queries against one SQLAlchemy model"""

    def __init__(self, session: Session, model_class: Type[T], read_model_class: Optional[Type[ReadT]] = None):
        self.session = session
        self.model_class = model_class
        self.read_model_class = read_model_class

    async def find_all(self, query: CompiledQuery) -> List[Any]:
        """Full rows come back as model instances (or read models), projections as Records"""
        if query.attributes is None:
            stmt = self._apply_filters(select(self.model_class), query)
            logger.debug(f"Executing {stmt}")
            items = list(self.session.execute(stmt).scalars().all())
            if self.read_model_class is not None:
                return [self.read_model_class.model_validate(item) for item in items]
            return items

        stmt = self._apply_filters(select(*self._build_columns(query)).select_from(self.model_class), query)
        logger.debug(f"Executing {stmt}")
        result = self.session.execute(stmt)
        return [Record(values=dict(row._mapping)) for row in result]

    # ===== STATEMENT BUILDING =====

    def _build_columns(self, query: CompiledQuery) -> List[Any]:
        if isinstance(query.attributes, ExcludeAttributes):
            for name in query.attributes.exclude:
                self._get_column(name)
            excluded = set(query.attributes.exclude)
            return [getattr(self.model_class, key) for key in self._column_keys() if key not in excluded]

        columns = []
        for attr in query.attributes:
            if isinstance(attr, Aggregate):
                columns.append(self._build_aggregate(attr))
            elif isinstance(attr, tuple):
                name, alias = attr
                columns.append(self._get_column(name).label(alias))
            else:
                columns.append(self._get_column(attr))
        return columns

    def _build_aggregate(self, aggregate: Aggregate) -> Any:
        fn = getattr(func, aggregate.function.lower())
        target = literal_column("*") if aggregate.column == "*" else self._get_column(aggregate.column)
        return fn(target).label(aggregate.alias)

    def _apply_filters(self, stmt, query: CompiledQuery):
        if query.where:
            stmt = stmt.where(and_(*self._build_conditions(query.where)))
        if query.offset is not None:
            stmt = stmt.offset(query.offset)
        if query.limit is not None:
            stmt = stmt.limit(query.limit)
        return stmt

    def _build_conditions(self, where: Dict[str, Any]) -> List[Any]:
        conditions = []
        for key, value in where.items():
            column = self._get_column(key)
            if isinstance(value, dict):
                for op, operand in value.items():
                    conditions.append(self._build_operator(column, op, operand))
            elif value is None:
                conditions.append(column.is_(None))
            elif isinstance(value, (list, tuple, set)):
                conditions.append(column.in_(list(value)))
            else:
                conditions.append(column == value)
        return conditions

    @staticmethod
    def _build_operator(column, op: str, operand: Any) -> Any:
        op = QueryOperator(op)
        if op == QueryOperator.EQ:
            return column.is_(None) if operand is None else column == operand
        if op == QueryOperator.NE:
            return column.is_not(None) if operand is None else column != operand
        if op == QueryOperator.GT:
            return column > operand
        if op == QueryOperator.GTE:
            return column >= operand
        if op == QueryOperator.LT:
            return column < operand
        if op == QueryOperator.LTE:
            return column <= operand
        if op == QueryOperator.IN:
            return column.in_(list(operand))
        if op == QueryOperator.NOT_IN:
            return column.not_in(list(operand))
        if op == QueryOperator.LIKE:
            return column.like(operand)
        low, high = operand
        return column.between(low, high)

    def _column_keys(self) -> List[str]:
        return list(inspect(self.model_class).columns.keys())

    def _get_column(self, name: str) -> Any:
        if name not in self._column_keys():
            raise ValueError(f"Column '{name}' does not exist on {self.model_class.__name__}")
        return getattr(self.model_class, name)
