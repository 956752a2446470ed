"""torm: fluent query composition over SQLAlchemy models."""

from torm.common.base_dao import BaseModelHandle, ModelDAO
from torm.core.config import Settings, configure_logging, get_settings
from torm.core.exceptions import (
    ClassNotFoundError,
    ModelNotFoundError,
    QueryConsumedError,
    QueryNotImplementedError,
    TormError,
    WrongMethodInvokedError,
)
from torm.query import CompiledQuery, ExcludeAttributes, Operator, Query, QueryOperator, Record
from torm.resources import Entity, ModelRegistry, entity_name_of

__version__ = "0.1.0"

__all__ = [
    "Query",
    "Operator",
    "QueryOperator",
    "CompiledQuery",
    "ExcludeAttributes",
    "Record",
    "BaseModelHandle",
    "ModelDAO",
    "Entity",
    "ModelRegistry",
    "entity_name_of",
    "Settings",
    "get_settings",
    "configure_logging",
    "TormError",
    "ClassNotFoundError",
    "ModelNotFoundError",
    "WrongMethodInvokedError",
    "QueryNotImplementedError",
    "QueryConsumedError",
]
