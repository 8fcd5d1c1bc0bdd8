"""
Models for component trees and the forest handed to consumers.
"""
from typing import List, Optional

from pydantic import BaseModel, Field


class LocalImport(BaseModel):
    """An import from a relative module path"""
    source: str
    default_name: Optional[str] = None


class ComponentTreeNode(BaseModel):
    """One component and the full trees of every component it may render"""
    path: str
    name: str
    children: List['ComponentTreeNode'] = Field(default_factory=list)

    def walk(self):
        """Yield this node and all descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def shape(self) -> tuple:
        """Name/children structure as nested tuples, for comparing trees."""
        return (self.name, self.path, tuple(child.shape() for child in self.children))


ComponentTreeNode.model_rebuild()


class ForestEntry(BaseModel):
    """A root tree serialized for transport"""
    id: int
    data: str

    def tree(self) -> ComponentTreeNode:
        return ComponentTreeNode.model_validate_json(self.data)
