"""
Declaration resolution for component modules.

Finds the declaration bound to a module's default export and extracts the
block whose direct return value is the component's rendered output.
"""
import logging
from typing import Callable, Dict, List, Optional

from tree_sitter import Node

from comptree.core.engine.ast_handler import ASTHandler, get_ast_handler
from comptree.core.error_handling import (
    AmbiguousRenderMethodError,
    InvalidComponentSignatureError,
    InvalidDeclarationError,
    NoDefaultExportError,
)
from comptree.models.declaration import ComponentDeclaration
from comptree.models.enums import DeclarationShape

logger = logging.getLogger(__name__)

SHAPES_BY_NODE_TYPE = {
    'class_declaration': DeclarationShape.CLASS,
    'abstract_class_declaration': DeclarationShape.CLASS,
    'function_declaration': DeclarationShape.FUNCTION,
    'lexical_declaration': DeclarationShape.VARIABLE,
    'variable_declaration': DeclarationShape.VARIABLE,
}

FUNCTION_VALUE_TYPES = ('arrow_function', 'function_expression', 'function')


def _unwrap_export(node: Node, handler: ASTHandler) -> Node:
    if node.type == 'export_statement':
        declaration = handler.find_child_by_field_name(node, 'declaration')
        if declaration is not None:
            return declaration
    return node


def _declared_names(node: Node, handler: ASTHandler, code_bytes: bytes) -> List[str]:
    if node.type in ('lexical_declaration', 'variable_declaration'):
        names = []
        for declarator in node.named_children:
            if declarator.type != 'variable_declarator':
                continue
            name = handler.find_child_by_field_name(declarator, 'name')
            if name is not None:
                names.append(handler.get_node_text(name, code_bytes))
        return names
    name = handler.find_child_by_field_name(node, 'name')
    if name is None:
        return []
    return [handler.get_node_text(name, code_bytes)]


def _as_declaration(node: Node, name: Optional[str]) -> ComponentDeclaration:
    shape = SHAPES_BY_NODE_TYPE.get(node.type, DeclarationShape.OTHER)
    return ComponentDeclaration(shape=shape, name=name, node=node)


def find_declaration(body: List[Node], name: str, code_bytes: bytes,
                     handler: ASTHandler = None) -> Optional[ComponentDeclaration]:
    """
    Search ``body`` backward for the declaration of ``name``.

    The closest preceding declaration wins. Declarations wrapped in an
    ``export`` statement are considered as well.

    Returns:
        The matching declaration, or None if nothing in ``body`` declares ``name``
    """
    handler = handler or get_ast_handler()
    for statement in reversed(body):
        node = _unwrap_export(statement, handler)
        if name in _declared_names(node, handler, code_bytes):
            return _as_declaration(node, name)
    return None


def resolve_default_export(root: Node, code_bytes: bytes,
                           handler: ASTHandler = None) -> Optional[ComponentDeclaration]:
    """
    Find the declaration bound to the module's default export.

    ``export default Name;`` is resolved by searching the statements before the
    export. ``export default class Name {}`` and ``export default function
    Name() {}`` resolve to the inline declaration.

    Raises:
        NoDefaultExportError: If the module has no default export statement
    """
    handler = handler or get_ast_handler()
    body = handler.named_children(root)
    for index, statement in enumerate(body):
        if statement.type == 'export_statement' and handler.has_token(statement, 'default'):
            break
    else:
        raise NoDefaultExportError()

    declaration = handler.find_child_by_field_name(statement, 'declaration')
    if declaration is not None:
        names = _declared_names(declaration, handler, code_bytes)
        return _as_declaration(declaration, names[0] if names else None)

    value = handler.find_child_by_field_name(statement, 'value')
    if value is None or value.type != 'identifier':
        logger.debug("Default export is not a plain identifier")
        return None
    return find_declaration(body[:index], handler.get_node_text(value, code_bytes),
                            code_bytes, handler)


def _class_render_block(declaration: ComponentDeclaration, handler: ASTHandler,
                        code_bytes: bytes) -> Node:
    class_body = handler.find_child_by_field_name(declaration.node, 'body')
    render_methods = []
    for member in class_body.named_children if class_body is not None else []:
        if member.type != 'method_definition':
            continue
        key = handler.find_child_by_field_name(member, 'name')
        if key is not None and handler.get_node_text(key, code_bytes) == 'render':
            render_methods.append(member)
    if len(render_methods) != 1:
        raise AmbiguousRenderMethodError(declaration.name, len(render_methods))
    return handler.find_child_by_field_name(render_methods[0], 'body')


def _function_render_block(declaration: ComponentDeclaration, handler: ASTHandler,
                           code_bytes: bytes) -> Node:
    parameters = handler.find_child_by_field_name(declaration.node, 'parameters')
    count = len(handler.named_children(parameters)) if parameters is not None else 0
    if count > 1:
        raise InvalidComponentSignatureError(declaration.name, count)
    return handler.find_child_by_field_name(declaration.node, 'body')


def _variable_render_block(declaration: ComponentDeclaration, handler: ASTHandler,
                           code_bytes: bytes) -> Node:
    declarators = [n for n in declaration.node.named_children if n.type == 'variable_declarator']
    if len(declarators) != 1:
        raise InvalidDeclarationError(
            f"expected a single variable declarator, found {len(declarators)}",
            name=declaration.name,
        )
    value = handler.find_child_by_field_name(declarators[0], 'value')
    if value is None or value.type not in FUNCTION_VALUE_TYPES:
        raise InvalidDeclarationError(
            "variable is not bound to a function", name=declaration.name,
            actual_type=value.type if value is not None else None,
        )
    return handler.find_child_by_field_name(value, 'body')


RENDER_BLOCK_RESOLVERS: Dict[DeclarationShape, Callable[[ComponentDeclaration, ASTHandler, bytes], Node]] = {
    DeclarationShape.CLASS: _class_render_block,
    DeclarationShape.FUNCTION: _function_render_block,
    DeclarationShape.VARIABLE: _variable_render_block,
}


def resolve_render_block(declaration: ComponentDeclaration, code_bytes: bytes,
                         handler: ASTHandler = None) -> Optional[Node]:
    """
    Return the node holding the component's render output.

    This is a ``statement_block`` for classes, functions and function
    expressions, or the body expression of an arrow function written without
    braces. Declarations of any other shape have no render block.

    Raises:
        AmbiguousRenderMethodError: Class without exactly one ``render`` method
        InvalidComponentSignatureError: Function declared with several parameters
        InvalidDeclarationError: Variable declaration that is not a single function binding
    """
    handler = handler or get_ast_handler()
    resolver = RENDER_BLOCK_RESOLVERS.get(declaration.shape)
    if resolver is None:
        return None
    return resolver(declaration, handler, code_bytes)
