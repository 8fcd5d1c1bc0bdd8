"""
AST Handler for comptree providing a unified interface for tree-sitter operations.
"""
import logging
from functools import lru_cache
from typing import Any, Dict, Iterator, List, Optional, Tuple

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from comptree.core.error_handling import SyntaxError
from comptree.core.utils.hashing import sha1_code

logger = logging.getLogger(__name__)

# The TSX grammar accepts plain JavaScript modules with markup syntax.
TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())


class ASTHandler:
    """
    Handles Abstract Syntax Tree operations using tree-sitter.
    Provides a unified interface for parsing component modules and
    navigating their syntax trees.
    """

    def __init__(self, language: Language = TSX_LANGUAGE):
        """
        Initialize the AST handler.

        Args:
            language: Tree-sitter language object
        """
        self.language = language
        self.parser = Parser(language)

    @lru_cache(maxsize=128)
    def _parse_cached(self, code_hash: str, code: str) -> Tuple[Node, bytes]:
        """Internal cached parse implementation."""
        code_bytes = code.encode("utf8")
        tree = self.parser.parse(code_bytes)
        return (tree.root_node, code_bytes)

    def parse(self, code: str, path: Optional[str] = None) -> Tuple[Node, bytes]:
        """
        Parse source code into an AST. Results are cached using an LRU cache
        keyed by the SHA1 hash of ``code``.

        Args:
            code: Source code as string
            path: Optional path of the parsed file, used in error reports

        Returns:
            Tuple of (root_node, code_bytes)

        Raises:
            SyntaxError: If tree-sitter could not parse the source cleanly
        """
        code_hash = sha1_code(code)
        root, code_bytes = self._parse_cached(code_hash, code)
        if root.has_error:
            error_node = self.first_error(root)
            line, column = (error_node.start_point[0] + 1, error_node.start_point[1]) if error_node else (None, None)
            raise SyntaxError("Source could not be parsed", path=path, line=line, column=column)
        return root, code_bytes

    def first_error(self, node: Node) -> Optional[Node]:
        """Return the first ERROR or missing node below ``node`` in document order."""
        for current in self.walk(node):
            if current.type == 'ERROR' or current.is_missing:
                return current
        return None

    def walk(self, node: Node) -> Iterator[Node]:
        """Yield ``node`` and all of its descendants depth-first."""
        stack = [node]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    def get_node_text(self, node: Node, code_bytes: bytes) -> str:
        """
        Get the text content of a node.

        Args:
            node: Tree-sitter node
            code_bytes: Source code as bytes

        Returns:
            String content of the node
        """
        return code_bytes[node.start_byte:node.end_byte].decode('utf8')

    def find_child_by_field_name(self, node: Node, field_name: str) -> Optional[Node]:
        """
        Find a child node by field name.

        Args:
            node: Parent node
            field_name: Field name to find

        Returns:
            Child node or None if not found
        """
        if node is None:
            return None
        return node.child_by_field_name(field_name)

    def named_children(self, node: Node) -> List[Node]:
        """Return the named children of ``node`` without comments."""
        return [child for child in node.named_children if child.type != 'comment']

    def has_token(self, node: Node, token: str) -> bool:
        """Check whether an anonymous keyword or punctuation token is a direct child."""
        return any(not child.is_named and child.type == token for child in node.children)

    def to_dict(self, node: Node, code_bytes: bytes) -> Dict[str, Any]:
        """
        Serialize a node and its named descendants to plain data.

        Leaves carry their source text; inner nodes carry their children.
        """
        data: Dict[str, Any] = {
            'type': node.type,
            'start': {'line': node.start_point[0] + 1, 'column': node.start_point[1]},
            'end': {'line': node.end_point[0] + 1, 'column': node.end_point[1]},
        }
        children = node.named_children
        if children:
            data['children'] = [self.to_dict(child, code_bytes) for child in children]
        else:
            data['text'] = self.get_node_text(node, code_bytes)
        return data


@lru_cache(maxsize=None)
def get_ast_handler() -> ASTHandler:
    """Return the shared handler for the TSX grammar."""
    logger.debug("Creating tree-sitter parser for TSX")
    return ASTHandler()
