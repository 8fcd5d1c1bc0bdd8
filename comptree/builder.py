"""
Assembly of component dependency trees for a whole project.

One ``GenerationContext`` owns all mutable state of a run: the path cache
used to deduplicate trees and decide which of them are roots, and the cached
list of component paths under the source directory. Nothing is shared
between runs.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from comptree.analysis.classifier import is_component, load_component_file
from comptree.analysis.imports import child_component_paths
from comptree.analysis.scanner import component_paths_in_directory
from comptree.core.ast_logger import ASTLogger
from comptree.core.engine.ast_handler import ASTHandler, get_ast_handler
from comptree.core.error_handling import (
    ComponentResolutionError,
    ComponentTreeError,
    InvalidRootComponentError,
    SourceDirectoryError,
)
from comptree.core.source_reader import SourceReader
from comptree.models.component import ComponentTreeNode, ForestEntry
from comptree.models.config import ProjectConfig
from comptree.models.declaration import component_name

logger = logging.getLogger(__name__)

RESOLUTION_FAILURES = (ComponentTreeError, OSError, ValueError)


@dataclass
class CacheEntry:
    """Cached tree for one path. ``tree`` stays None while the path is being built."""
    tree: Optional[ComponentTreeNode] = None
    is_root: bool = True

    @property
    def in_progress(self) -> bool:
        return self.tree is None


class GenerationContext:
    """State of a single generation run."""

    def __init__(self, config: ProjectConfig, reader: SourceReader = None,
                 handler: ASTHandler = None, ast_logger: Optional[ASTLogger] = None):
        self.config = config
        self.reader = reader or SourceReader()
        self.handler = handler or get_ast_handler()
        if ast_logger is None and config.log_asts:
            ast_logger = ASTLogger.for_project(config.project_path)
        self.ast_logger = ast_logger
        self.cache: Dict[str, CacheEntry] = {}
        self._component_paths: Optional[List[str]] = None

    def reset(self) -> None:
        """Forget every tree built so far."""
        self.cache = {}

    async def component_paths(self, clear_cache: bool = False) -> List[str]:
        """Component paths under the project's source directory, memoized per context."""
        if clear_cache:
            self._component_paths = None
        if self._component_paths is None:
            try:
                self._component_paths = await component_paths_in_directory(
                    self.config.src_path, self.reader, self.handler
                )
            except OSError as e:
                raise SourceDirectoryError(self.config.src_path, reason=str(e)) from e
        return self._component_paths

    def root_trees(self) -> List[ComponentTreeNode]:
        """Trees never discovered as another component's child, in cache order."""
        return [entry.tree for entry in self.cache.values() if entry.is_root and entry.tree is not None]


async def _build_node(path: str, context: GenerationContext, ancestors: Tuple[str, ...]) -> ComponentTreeNode:
    component = await load_component_file(path, context.reader, context.handler)
    if context.ast_logger is not None:
        await context.ast_logger.write(component.name, component.root, component.code_bytes)

    child_paths = await child_component_paths(
        component.root, component.code_bytes, path, context.reader, context.handler
    )
    children = await asyncio.gather(*(
        generate_component_tree(child_path, context, parent=path, ancestors=ancestors)
        for child_path in child_paths
    ))
    return ComponentTreeNode(path=path, name=component.name, children=list(children))


async def generate_component_tree(path: str, context: GenerationContext, parent: Optional[str] = None,
                                  ancestors: Tuple[str, ...] = ()) -> ComponentTreeNode:
    """
    Build the dependency tree rooted at ``path``.

    A finished tree already in the cache is returned as an independent copy
    without reparsing. A path that is one of its own ancestors yields a leaf
    node, breaking the cycle. Any other discovery with a ``parent`` marks the
    path as a non-root.

    Raises:
        ComponentResolutionError: If the tree cannot be built, naming the failing path
    """
    if path in ancestors:
        # back edge; the ancestor keeps its root status
        logger.warning(f"Import cycle: {' -> '.join(ancestors + (path,))}")
        return ComponentTreeNode(path=path, name=component_name(path))

    entry = context.cache.get(path)
    if entry is not None:
        if parent is not None:
            entry.is_root = False
        if not entry.in_progress:
            logger.debug(f"Reusing cached tree for {path}")
            return entry.tree.model_copy(deep=True)
        logger.debug(f"{path} is being built on another branch; building it again")
    else:
        entry = context.cache[path] = CacheEntry(is_root=parent is None)

    try:
        tree = await _build_node(path, context, ancestors + (path,))
    except ComponentResolutionError:
        raise
    except RESOLUTION_FAILURES as e:
        raise ComponentResolutionError(path, cause=str(e)) from e

    if entry.in_progress:
        entry.tree = tree
    return tree


async def generate_component_trees(config: ProjectConfig,
                                   context: Optional[GenerationContext] = None) -> List[ForestEntry]:
    """
    Build the forest of root component trees for a project.

    The root component must itself be a component. Every component under the
    source directory is then built once; trees that turn out to be another
    component's child are dropped from the forest. Forest order follows the
    order in which components were first reached and is not meaningful.

    Raises:
        InvalidRootComponentError: If the configured root is not a component
        SourceDirectoryError: If the source directory cannot be scanned
        ComponentResolutionError: If any component's tree cannot be built
    """
    context = context or GenerationContext(config)
    if not await is_component(config.root_component_path, context.reader, context.handler):
        raise InvalidRootComponentError(config.root_component_path)

    context.reset()
    paths = await context.component_paths(clear_cache=True)
    if config.root_component_path not in paths:
        paths = [config.root_component_path] + paths

    for path in paths:
        await generate_component_tree(path, context)

    roots = context.root_trees()
    logger.info(f"Built {len(context.cache)} component tree(s), {len(roots)} root(s)")
    return [ForestEntry(id=index, data=tree.model_dump_json()) for index, tree in enumerate(roots)]


def run_generation(config: ProjectConfig) -> List[ForestEntry]:
    """Synchronous entry point around ``generate_component_trees``."""
    return asyncio.run(generate_component_trees(config))
