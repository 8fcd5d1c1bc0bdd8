"""
Filesystem access for the component tree generator.

Every blocking call runs in a worker thread so that many branches of a
generation run can wait on the disk at once while the event loop keeps
parsing and assembling trees.
"""
import asyncio
import logging
import os
import stat
from typing import List

logger = logging.getLogger(__name__)


class SourceReader:
    """Async facade over file reads, directory listings and existence checks."""

    def __init__(self, encoding: str = 'utf8'):
        self.encoding = encoding

    def _read(self, path: str) -> str:
        with open(path, 'r', encoding=self.encoding) as fh:
            return fh.read()

    async def read_text(self, path: str) -> str:
        """Read the file at ``path`` as text."""
        logger.debug(f"Reading {path}")
        return await asyncio.to_thread(self._read, path)

    async def list_dir(self, path: str) -> List[str]:
        """List entry names in ``path``, sorted so listings are deterministic."""
        entries = await asyncio.to_thread(os.listdir, path)
        return sorted(entries)

    async def is_dir(self, path: str) -> bool:
        """Stat ``path`` and report whether it is a directory. Stat errors propagate."""
        result = await asyncio.to_thread(os.stat, path)
        return stat.S_ISDIR(result.st_mode)

    async def exists(self, path: str) -> bool:
        """Report whether anything exists at ``path``."""
        return await asyncio.to_thread(os.path.exists, path)
