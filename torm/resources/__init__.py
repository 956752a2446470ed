from .models import Entity
from .registry import ModelRegistry, entity_name_of

__all__ = ["Entity", "ModelRegistry", "entity_name_of"]
