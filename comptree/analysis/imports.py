"""
Resolution of locally imported components to the files that define them.
"""
import asyncio
import logging
import os
from typing import List, Optional

from tree_sitter import Node

from comptree.analysis.declarations import resolve_default_export
from comptree.analysis.elements import potentially_rendered_elements
from comptree.core.engine.ast_handler import ASTHandler, get_ast_handler
from comptree.core.source_reader import SourceReader
from comptree.models.component import LocalImport

logger = logging.getLogger(__name__)


def get_file_ext(file_path: str) -> Optional[str]:
    """Text after the last dot of the basename, or None when there is no dot."""
    split_name = os.path.basename(file_path).split('.')
    if len(split_name) < 2:
        return None
    return split_name[-1]


def _string_value(node: Node, handler: ASTHandler, code_bytes: bytes) -> str:
    fragments = [child for child in node.named_children if child.type == 'string_fragment']
    if fragments:
        return ''.join(handler.get_node_text(f, code_bytes) for f in fragments)
    return handler.get_node_text(node, code_bytes)[1:-1]


def _default_binding(statement: Node, handler: ASTHandler, code_bytes: bytes) -> Optional[str]:
    for clause in statement.named_children:
        if clause.type != 'import_clause':
            continue
        for specifier in clause.named_children:
            if specifier.type == 'identifier':
                return handler.get_node_text(specifier, code_bytes)
    return None


def get_local_imports(root: Node, code_bytes: bytes, handler: ASTHandler = None) -> List[LocalImport]:
    """Import statements whose source is a relative path, in source order."""
    handler = handler or get_ast_handler()
    local_imports = []
    for statement in handler.named_children(root):
        if statement.type != 'import_statement':
            continue
        source = handler.find_child_by_field_name(statement, 'source')
        if source is None:
            continue
        value = _string_value(source, handler, code_bytes)
        if value.startswith('.'):
            local_imports.append(LocalImport(
                source=value,
                default_name=_default_binding(statement, handler, code_bytes),
            ))
    return local_imports


async def resolve_import_path(local_import: LocalImport, component_path: str,
                              reader: SourceReader) -> Optional[str]:
    """
    Path of the file a relative import points to, or None if it does not exist.

    Extension-less sources are probed as ``.js`` and ``.jsx``; ``.js`` wins
    when both exist.
    """
    child_path = os.path.abspath(os.path.join(os.path.dirname(component_path), local_import.source))
    if get_file_ext(local_import.source) is None:
        js_path, jsx_path = f"{child_path}.js", f"{child_path}.jsx"
        js_exists, jsx_exists = await asyncio.gather(reader.exists(js_path), reader.exists(jsx_path))
        if js_exists:
            return js_path
        if jsx_exists:
            return jsx_path
        return None
    if await reader.exists(child_path):
        return child_path
    return None


async def child_component_paths(root: Node, code_bytes: bytes, component_path: str,
                                reader: SourceReader = None, handler: ASTHandler = None) -> List[str]:
    """
    Paths of the components the module at ``component_path`` may render.

    A relative import counts when its default binding is one of the names in
    the module's returned markup. Imports pointing at missing files are
    dropped.
    """
    handler = handler or get_ast_handler()
    reader = reader or SourceReader()
    declaration = resolve_default_export(root, code_bytes, handler)
    rendered = potentially_rendered_elements(declaration, code_bytes, handler)

    candidates = [
        local_import for local_import in get_local_imports(root, code_bytes, handler)
        if local_import.default_name is not None and local_import.default_name in rendered
    ]
    resolved = await asyncio.gather(
        *(resolve_import_path(candidate, component_path, reader) for candidate in candidates)
    )
    for candidate, path in zip(candidates, resolved):
        if path is None:
            logger.debug(f"{component_path}: import {candidate.source} does not resolve to a file")
    return [path for path in resolved if path is not None]
