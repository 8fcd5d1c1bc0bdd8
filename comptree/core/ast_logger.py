"""Write-only debug sink for the syntax trees of parsed components."""
import asyncio
import json
import logging
import os

from tree_sitter import Node

from comptree.core.config import config
from comptree.core.engine.ast_handler import ASTHandler, get_ast_handler

logger = logging.getLogger(__name__)

# Failures absorbed while dumping a tree
WRITE_FAILURES = (OSError, RecursionError, TypeError, ValueError)


class ASTLogger:
    """Dumps one pretty-printed JSON file per component under ``log_dir``."""

    def __init__(self, log_dir: str, handler: ASTHandler = None):
        self.log_dir = log_dir
        self.handler = handler or get_ast_handler()

    @classmethod
    def for_project(cls, client_path: str) -> "ASTLogger":
        return cls(os.path.join(client_path, config.get('debug', 'log_dir')))

    def _dump(self, target: str, root: Node, code_bytes: bytes) -> None:
        data = self.handler.to_dict(root, code_bytes)
        os.makedirs(self.log_dir, exist_ok=True)
        with open(target, 'w', encoding='utf8') as fh:
            json.dump(data, fh, indent=2)

    async def write(self, component_name: str, root: Node, code_bytes: bytes) -> None:
        """Write the tree for ``component_name`` off the event loop. Failures are logged, never raised."""
        target = os.path.join(self.log_dir, f"{component_name}.json")
        try:
            await asyncio.to_thread(self._dump, target, root, code_bytes)
        except WRITE_FAILURES as e:
            logger.warning(f"Could not write AST log for {component_name} to {target}: {e}")
