"""
Query state and compiled query types.

A ``Query`` accumulates a ``QueryState`` through its fluent methods; the
compiler turns that state into a ``CompiledQuery`` which backend handles
execute.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

# A projected column: bare name or (name, alias)
Selector = Union[str, Tuple[str, str]]
PredicateMap = Dict[str, Any]

DEFAULT_COUNT_ALIAS = "__alias__"


@dataclass(frozen=True)
class ExcludeAttributes:
    """Attribute form listing the columns to leave out."""

    exclude: List[str]

    def to_dict(self) -> Dict[str, List[str]]:
        return {"exclude": list(self.exclude)}


@dataclass(frozen=True)
class Aggregate:
    """An aggregate projection, e.g. COUNT(*) AS __alias__."""

    function: str
    column: str
    alias: str

    def to_dict(self) -> Dict[str, str]:
        return {"fn": self.function, "column": self.column, "alias": self.alias}

    def __str__(self) -> str:
        return f"{self.function}({self.column}) AS {self.alias}"


Attributes = Union[List[Union[Selector, Aggregate]], ExcludeAttributes]


@dataclass
class QueryState:
    """Everything a query has accumulated so far."""

    attributes: List[Selector] = field(default_factory=list)
    excludes: List[str] = field(default_factory=list)
    where_conditions: List[PredicateMap] = field(default_factory=list)
    limit: Optional[int] = None
    offset: Optional[int] = None

    def has_projection(self) -> bool:
        """Check whether columns were selected or excluded."""
        return len(self.attributes) > 0 or len(self.excludes) > 0

    def is_paginated(self) -> bool:
        return self.limit is not None or self.offset is not None


@dataclass
class CompiledQuery:
    """Backend-neutral query descriptor."""

    attributes: Optional[Attributes] = None
    where: Optional[PredicateMap] = None
    limit: Optional[int] = None
    offset: Optional[int] = None

    def is_excluding(self) -> bool:
        return isinstance(self.attributes, ExcludeAttributes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the mapping form, leaving out anything unset."""
        params: Dict[str, Any] = {}
        if isinstance(self.attributes, ExcludeAttributes):
            params["attributes"] = self.attributes.to_dict()
        elif self.attributes is not None:
            params["attributes"] = [
                attr.to_dict() if isinstance(attr, Aggregate) else (list(attr) if isinstance(attr, tuple) else attr)
                for attr in self.attributes
            ]
        if self.limit is not None:
            params["limit"] = self.limit
        if self.offset is not None:
            params["offset"] = self.offset
        if self.where is not None:
            params["where"] = dict(self.where)
        return params


@dataclass
class Record:
    """A result row keyed by column name or alias."""

    values: Dict[str, Any]

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.values[key]
