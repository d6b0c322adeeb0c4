"""Node-level extraction helpers shared by the entity passes."""

from tree_sitter import Node
from typing import List, Optional, Tuple

from .ast_parser import (
    NodeKind,
    descendants,
    has_token,
    kind_of,
    node_text,
    unwrap_parentheses,
)
from .data_structures import ParameterInfo

PARAMETER_TYPES = ('required_parameter', 'optional_parameter')
FIELD_TYPES = ('public_field_definition', 'field_definition')


def type_text(annotation: Optional[Node]) -> Optional[str]:
    """Declared type text of a `: T` annotation, without the colon"""
    if annotation is None:
        return None
    text = node_text(annotation).strip()
    if text.startswith(':'):
        text = text[1:].strip()
    return text or None


def string_value(node: Optional[Node]) -> str:
    """Text of a string literal without its quotes"""
    if node is None:
        return ''
    fragments = [node_text(child) for child in node.named_children if child.type == 'string_fragment']
    if fragments:
        return ''.join(fragments)
    return node_text(node).strip('\'"`')


def name_of(node: Optional[Node]) -> Optional[str]:
    """Declared name of a function, class, declarator or member"""
    if node is None:
        return None
    name_node = node.child_by_field_name('name')
    if name_node is None:
        return None
    if name_node.type in ('identifier', 'type_identifier', 'property_identifier',
                          'private_property_identifier'):
        return node_text(name_node)
    if name_node.type == 'string':
        return string_value(name_node)
    # Destructuring patterns do not bind a single name
    return None


def extract_parameters(node: Node) -> Tuple[ParameterInfo, ...]:
    """
    Extracts the declared parameters of a function-like node.

    Returns:
        ParameterInfo per parameter with name, declared type, optional
        flag and default value text
    """
    single = node.child_by_field_name('parameter')
    if single is not None:
        return (ParameterInfo(name=node_text(single)),)

    params_node = node.child_by_field_name('parameters')
    if params_node is None:
        return ()

    params = []
    for child in params_node.named_children:
        if child.type in PARAMETER_TYPES:
            pattern = child.child_by_field_name('pattern')
            value = child.child_by_field_name('value')
            is_rest = pattern is not None and pattern.type == 'rest_pattern'
            params.append(ParameterInfo(
                name=node_text(pattern),
                type=type_text(child.child_by_field_name('type')),
                optional=child.type == 'optional_parameter' or value is not None or is_rest,
                default_value=node_text(value) if value is not None else None,
            ))
        elif child.type == 'assignment_pattern':
            value = child.child_by_field_name('right')
            params.append(ParameterInfo(
                name=node_text(child.child_by_field_name('left')),
                optional=True,
                default_value=node_text(value),
            ))
        elif child.type != 'comment':
            params.append(ParameterInfo(name=node_text(child), optional=child.type == 'rest_pattern'))

    return tuple(params)


def extract_return_type(node: Node) -> Optional[str]:
    """Extracts the declared return type annotation"""
    return type_text(node.child_by_field_name('return_type'))


def is_async_function(node: Node) -> bool:
    return has_token(node, 'async')


def is_generator_function(node: Node) -> bool:
    if node.type in ('generator_function_declaration', 'generator_function'):
        return True
    return has_token(node, '*')


def extract_function_calls(node: Node) -> Tuple[str, ...]:
    """
    Extracts the callee text of every call within this code block.
    Only bare identifiers and property-access chains are recorded.
    """
    calls = {}
    for child in descendants(node):
        if kind_of(child) is NodeKind.CALL:
            callee = child.child_by_field_name('function')
            if callee is not None and callee.type in ('identifier', 'member_expression'):
                calls[node_text(callee)] = None
    return tuple(calls)


def hook_callee(call: Node) -> Optional[str]:
    """Name of a hook-style call (bare identifier starting with 'use')"""
    callee = call.child_by_field_name('function')
    if callee is None or callee.type != 'identifier':
        return None
    name = node_text(callee)
    return name if name.startswith('use') else None


def call_arguments(call: Node) -> List[Node]:
    args = call.child_by_field_name('arguments')
    if args is None:
        return []
    return [arg for arg in args.named_children if arg.type != 'comment']


def extract_heritage(node: Node) -> str:
    """Text of a class's extends clause, e.g. 'React.Component<Props>'"""
    for child in node.children:
        if child.type != 'class_heritage':
            continue
        clause = next((c for c in child.named_children if c.type == 'extends_clause'), None)
        text = node_text(clause if clause is not None else child)
        if not text.startswith('extends'):
            # implements-only heritage
            return ''
        return text[len('extends'):].strip()
    return ''


def extract_heritage_type_argument(node: Node) -> Optional[str]:
    """First type argument of the extends clause (Component<Props> -> Props)"""
    for child in node.children:
        if child.type != 'class_heritage':
            continue
        for clause in child.named_children:
            if clause.type != 'extends_clause':
                continue
            type_args = clause.child_by_field_name('type_arguments')
            if type_args is not None:
                args = [arg for arg in type_args.named_children if arg.type != 'comment']
                if args:
                    return node_text(args[0])
    return None


def class_members(node: Node) -> List[Node]:
    body = node.child_by_field_name('body')
    if body is None:
        return []
    return list(body.named_children)


def is_static(member: Node) -> bool:
    return has_token(member, 'static')


def returns_element_tree(node: Node) -> bool:
    """Checks whether any return statement yields an element-tree expression"""
    body = node.child_by_field_name('body')
    # Concise arrow bodies are the returned expression themselves
    if kind_of(node) is NodeKind.ARROW and body is not None and body.type != 'statement_block':
        expr = unwrap_parentheses(body)
        return expr is not None and kind_of(expr) is NodeKind.ELEMENT_TREE

    for ret in descendants(node):
        if kind_of(ret) is not NodeKind.RETURN:
            continue
        values = [child for child in ret.named_children if child.type != 'comment']
        expr = unwrap_parentheses(values[0]) if values else None
        if expr is not None and kind_of(expr) is NodeKind.ELEMENT_TREE:
            return True
    return False
