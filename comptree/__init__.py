from .models.component import ComponentTreeNode, ForestEntry
from .models.config import ProjectConfig
from .models.enums import DeclarationShape
from .builder import (
    GenerationContext,
    generate_component_tree,
    generate_component_trees,
    run_generation,
)

__version__ = "1.0.0"
__all__ = [
    "ComponentTreeNode",
    "DeclarationShape",
    "ForestEntry",
    "GenerationContext",
    "ProjectConfig",
    "generate_component_tree",
    "generate_component_trees",
    "run_generation",
]
