"""
Best-effort decision of whether a source file defines a component.
"""
import logging
from typing import Optional

from comptree.analysis.declarations import resolve_default_export
from comptree.analysis.elements import render_output
from comptree.analysis.imports import get_file_ext
from comptree.core.config import config
from comptree.core.engine.ast_handler import ASTHandler, get_ast_handler
from comptree.core.error_handling import absorb_classification_errors
from comptree.core.source_reader import SourceReader
from comptree.models.declaration import ComponentFile

logger = logging.getLogger(__name__)


def has_component_extension(file_path: str) -> bool:
    return get_file_ext(file_path) in config.get('scanner', 'extensions')


async def load_component_file(file_path: str, reader: SourceReader = None,
                              handler: ASTHandler = None) -> ComponentFile:
    """Read and parse ``file_path``."""
    reader = reader or SourceReader()
    handler = handler or get_ast_handler()
    code = await reader.read_text(file_path)
    root, code_bytes = handler.parse(code, path=file_path)
    return ComponentFile(path=file_path, root=root, code_bytes=code_bytes)


@absorb_classification_errors
async def is_component(file_path: str, reader: Optional[SourceReader] = None,
                       handler: Optional[ASTHandler] = None) -> bool:
    """
    Decide whether ``file_path`` defines a component.

    Files without a ``.js``/``.jsx`` extension are rejected without being read.
    Otherwise the default export must resolve to a class, function or
    function-bound variable whose render block directly returns markup. Any
    failure along the way means "not a component".
    """
    if not has_component_extension(file_path):
        return False
    handler = handler or get_ast_handler()
    component = await load_component_file(file_path, reader, handler)
    declaration = resolve_default_export(component.root, component.code_bytes, handler)
    render_output(declaration, component.code_bytes, handler)
    logger.debug(f"{file_path} is a component")
    return True
