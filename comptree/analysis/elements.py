"""
Extraction of the element names a component may render.
"""
import logging
from typing import Iterator, Optional, Set

from tree_sitter import Node

from comptree.analysis.declarations import resolve_render_block
from comptree.core.engine.ast_handler import ASTHandler, get_ast_handler
from comptree.core.error_handling import InvalidDeclarationError, NonMarkupReturnError
from comptree.models.declaration import ComponentDeclaration

logger = logging.getLogger(__name__)


def element_name(node: Node, code_bytes: bytes, handler: ASTHandler = None) -> Optional[str]:
    """Tag or component name of a markup element, None for fragments and other nodes."""
    handler = handler or get_ast_handler()
    if node.type == 'jsx_element':
        node = handler.find_child_by_field_name(node, 'open_tag')
    elif node.type != 'jsx_self_closing_element':
        return None
    name = handler.find_child_by_field_name(node, 'name')
    if name is None:
        return None
    return handler.get_node_text(name, code_bytes)


def is_markup_element(node: Optional[Node], code_bytes: bytes, handler: ASTHandler = None) -> bool:
    return node is not None and element_name(node, code_bytes, handler) is not None


def _unwrap_parentheses(node: Optional[Node], handler: ASTHandler) -> Optional[Node]:
    while node is not None and node.type == 'parenthesized_expression':
        inner = handler.named_children(node)
        node = inner[0] if inner else None
    return node


def return_argument(block: Node, handler: ASTHandler = None) -> Optional[Node]:
    """
    Argument of the first ``return`` statement directly inside ``block``.

    An arrow function body written without braces is its own return value.

    Raises:
        NonMarkupReturnError: If a statement block has no direct return statement
    """
    handler = handler or get_ast_handler()
    if block.type != 'statement_block':
        return _unwrap_parentheses(block, handler)
    for statement in block.named_children:
        if statement.type == 'return_statement':
            argument = handler.named_children(statement)
            return _unwrap_parentheses(argument[0] if argument else None, handler)
    raise NonMarkupReturnError(actual_type=None, reason='no direct return statement')


def render_output(declaration: Optional[ComponentDeclaration], code_bytes: bytes,
                  handler: ASTHandler = None) -> Node:
    """
    The markup element a component's render block directly returns.

    Only a single unconditional ``return`` of markup is recognised; markup
    returned through a variable, a conditional or several paths is not.

    Raises:
        InvalidDeclarationError: No declaration, or a declaration without a render block
        NonMarkupReturnError: The render block does not directly return markup
    """
    handler = handler or get_ast_handler()
    if declaration is None:
        raise InvalidDeclarationError("no declaration is bound to the default export")
    block = resolve_render_block(declaration, code_bytes, handler)
    if block is None:
        raise InvalidDeclarationError(
            f"{declaration.node.type} cannot declare a component", name=declaration.name
        )
    argument = return_argument(block, handler)
    if not is_markup_element(argument, code_bytes, handler):
        raise NonMarkupReturnError(actual_type=argument.type if argument is not None else None)
    return argument


def flatten_markup(node: Node, code_bytes: bytes, handler: ASTHandler = None) -> Iterator[str]:
    """Yield the names of ``node`` and every markup element nested below it, depth-first."""
    handler = handler or get_ast_handler()
    stack = [node]
    while stack:
        current = stack.pop()
        name = element_name(current, code_bytes, handler)
        if name is None:
            continue
        yield name
        if current.type == 'jsx_element':
            stack.extend(reversed(current.named_children))


def potentially_rendered_elements(declaration: Optional[ComponentDeclaration], code_bytes: bytes,
                                  handler: ASTHandler = None) -> Set[str]:
    """Every element and component name reachable from the declaration's returned markup."""
    handler = handler or get_ast_handler()
    root = render_output(declaration, code_bytes, handler)
    names = set(flatten_markup(root, code_bytes, handler))
    logger.debug(f"{declaration.name} may render {sorted(names)}")
    return names
