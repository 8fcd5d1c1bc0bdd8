"""
Recursive discovery of component files under a source directory.
"""
import asyncio
import logging
import os
from typing import List

from comptree.analysis.classifier import is_component
from comptree.core.engine.ast_handler import ASTHandler
from comptree.core.source_reader import SourceReader

logger = logging.getLogger(__name__)


async def component_paths_in_directory(dir_path: str, reader: SourceReader = None,
                                       handler: ASTHandler = None) -> List[str]:
    """
    Paths of every component file below ``dir_path``.

    Subdirectories are scanned and files classified concurrently. Paths found
    in subdirectories come first, followed by the components of ``dir_path``
    itself in listing order.
    """
    reader = reader or SourceReader()
    entries = [os.path.join(dir_path, name) for name in await reader.list_dir(dir_path)]
    is_dir = await asyncio.gather(*(reader.is_dir(entry) for entry in entries))
    subdirectories = [entry for entry, flag in zip(entries, is_dir) if flag]
    files = [entry for entry, flag in zip(entries, is_dir) if not flag]

    from_subdirectories, flags = await asyncio.gather(
        asyncio.gather(*(component_paths_in_directory(d, reader, handler) for d in subdirectories)),
        asyncio.gather(*(is_component(f, reader, handler) for f in files)),
    )
    paths = [path for nested in from_subdirectories for path in nested]
    paths.extend(f for f, flag in zip(files, flags) if flag)
    logger.debug(f"{dir_path}: {len(paths)} component(s)")
    return paths
