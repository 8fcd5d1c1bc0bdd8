"""
Models for parsed component modules and their declarations.
"""
import os
from dataclasses import dataclass
from typing import Optional

from tree_sitter import Node

from .enums import DeclarationShape


def component_name(path: str) -> str:
    """Name of the component in ``path``: the filename up to its first dot."""
    return os.path.basename(path).split('.')[0]


@dataclass(frozen=True)
class ComponentDeclaration:
    """A top-level declaration tagged with its shape."""
    shape: DeclarationShape
    name: Optional[str]
    node: Node


@dataclass(frozen=True)
class ComponentFile:
    """A parsed source file; lives only for the duration of one generation run."""
    path: str
    root: Node
    code_bytes: bytes

    @property
    def name(self) -> str:
        return component_name(self.path)
