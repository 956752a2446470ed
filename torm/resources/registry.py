import logging
from typing import Any, Dict, List, Optional, Union

from torm.common.base_dao import BaseModelHandle
from torm.core.exceptions import ModelNotFoundError
from torm.query.builder import Query

logger = logging.getLogger(__name__)


def entity_name_of(entity: Any) -> str:
    """Get the lower-case registry key for an entity or a plain name"""
    if isinstance(entity, str):
        name = entity
    elif callable(getattr(entity, "entity_name", None)):
        name = entity.entity_name()
    else:
        raise TypeError(f"{entity!r} does not provide an entity_name() accessor")

    name = name.strip()
    if not name:
        raise ValueError("Entity name cannot be empty")
    return name.lower()


class ModelRegistry:
    """Registry of backend handles keyed by entity name"""

    def __init__(self):
        self.handles: Dict[str, BaseModelHandle] = {}

    def register(self, entity: Union[str, Any], handle: BaseModelHandle) -> None:
        """Register a handle for an entity"""
        name = entity_name_of(entity)
        if name in self.handles:
            logger.info(f"Replacing backend handle for model '{name}'")
        else:
            logger.info(f"Registered backend handle for model '{name}'")
        self.handles[name] = handle

    def unregister(self, entity: Union[str, Any]) -> bool:
        """Remove a handle, returns False if none was registered"""
        return self.handles.pop(entity_name_of(entity), None) is not None

    def resolve(self, name: str) -> Optional[BaseModelHandle]:
        """Get a handle by name, None if it's not registered"""
        return self.handles.get(name.lower())

    def require(self, entity: Union[str, Any]) -> BaseModelHandle:
        """Get a handle for an entity or raise ModelNotFoundError"""
        name = entity_name_of(entity)
        handle = self.resolve(name)
        if handle is None:
            raise ModelNotFoundError(name)
        return handle

    def names(self) -> List[str]:
        return list(self.handles.keys())

    def query(self, entity: Any) -> Query:
        """Start a query for an entity resolved through this registry"""
        return Query(entity, self)

    def __contains__(self, entity: Union[str, Any]) -> bool:
        return entity_name_of(entity) in self.handles

    def __len__(self) -> int:
        return len(self.handles)
