"""Tree-sitter parsing, node classification and location resolution."""

from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, Iterator, List, Optional

from tree_sitter import Node, Parser, Tree

from .data_structures import LocationInfo
from .errors import FileReadError, ParseError
from .language_config import get_language_config


class NodeKind(Enum):
    """Closed set of node kinds the extractors dispatch on"""
    FUNCTION = 'function'
    FUNCTION_EXPRESSION = 'function_expression'
    ARROW = 'arrow'
    METHOD = 'method'
    CLASS = 'class'
    VARIABLE = 'variable'
    CALL = 'call'
    RETURN = 'return'
    BLOCK = 'block'
    IF = 'if'
    WHILE = 'while'
    DO = 'do'
    FOR = 'for'
    SWITCH = 'switch'
    CASE = 'case'
    TERNARY = 'ternary'
    ELEMENT_TREE = 'element_tree'
    OTHER = 'other'


NODE_KINDS: Dict[str, NodeKind] = {
    'function_declaration': NodeKind.FUNCTION,
    'generator_function_declaration': NodeKind.FUNCTION,
    'function_expression': NodeKind.FUNCTION_EXPRESSION,
    'function': NodeKind.FUNCTION_EXPRESSION,  # older grammar releases
    'generator_function': NodeKind.FUNCTION_EXPRESSION,
    'arrow_function': NodeKind.ARROW,
    'method_definition': NodeKind.METHOD,
    'class_declaration': NodeKind.CLASS,
    'abstract_class_declaration': NodeKind.CLASS,
    'class': NodeKind.CLASS,
    'variable_declarator': NodeKind.VARIABLE,
    'call_expression': NodeKind.CALL,
    'return_statement': NodeKind.RETURN,
    'statement_block': NodeKind.BLOCK,
    'if_statement': NodeKind.IF,
    'while_statement': NodeKind.WHILE,
    'do_statement': NodeKind.DO,
    'for_statement': NodeKind.FOR,
    'for_in_statement': NodeKind.FOR,  # also covers for...of
    'switch_statement': NodeKind.SWITCH,
    'switch_case': NodeKind.CASE,
    'ternary_expression': NodeKind.TERNARY,
    'jsx_element': NodeKind.ELEMENT_TREE,
    'jsx_self_closing_element': NodeKind.ELEMENT_TREE,
    'jsx_fragment': NodeKind.ELEMENT_TREE,
}

FUNCTION_LIKE: FrozenSet[NodeKind] = frozenset({
    NodeKind.FUNCTION, NodeKind.FUNCTION_EXPRESSION, NodeKind.ARROW, NodeKind.METHOD,
})


def kind_of(node: Node) -> NodeKind:
    # Keyword tokens share names like 'function' and 'class' with real nodes
    if not node.is_named:
        return NodeKind.OTHER
    return NODE_KINDS.get(node.type, NodeKind.OTHER)


def read_source(file_path: str) -> bytes:
    """Reads raw source bytes; a missing file raises FileNotFoundError"""
    try:
        with open(file_path, 'rb') as f:
            return f.read()
    except FileNotFoundError:
        raise
    except OSError as e:
        raise FileReadError(file_path, e.strerror or str(e)) from e


def parse_source(source: bytes, file_path: str) -> Tree:
    """
    Parses source bytes with the grammar registered for the file suffix.

    Raises:
        ParseError: if tree-sitter recovered from any syntax error
    """
    config = get_language_config(Path(file_path).suffix)

    parser = Parser()
    parser.language = config['language']
    tree = parser.parse(source)

    if tree.root_node.has_error:
        error_node = _first_error(tree.root_node)
        if error_node is None:
            raise ParseError(file_path, 'Syntax error')
        location = get_location(error_node)
        message = (f"Missing '{error_node.type}'" if error_node.is_missing
                   else f"Unexpected '{_snippet(error_node)}'")
        raise ParseError(file_path, message, location.line, location.column)

    return tree


def _first_error(root: Node) -> Optional[Node]:
    for node in walk(root):
        if node.type == 'ERROR' or node.is_missing:
            return node
    return None


def _snippet(node: Node, limit: int = 40) -> str:
    text = node_text(node).strip().splitlines()
    first = text[0] if text else ''
    return first if len(first) <= limit else first[:limit] + '...'


def get_location(node: Node) -> LocationInfo:
    """Maps a node span (0-based tree-sitter points) to 1-based lines and columns"""
    return LocationInfo(
        line=node.start_point[0] + 1,
        column=node.start_point[1] + 1,
        end_line=node.end_point[0] + 1,
        end_column=node.end_point[1] + 1,
    )


def node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ''
    return node.text.decode('utf-8', errors='ignore')


def walk(node: Node) -> Iterator[Node]:
    """Pre-order traversal of node and all its descendants"""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def descendants(node: Node) -> Iterator[Node]:
    """Pre-order traversal excluding node itself"""
    nodes = walk(node)
    next(nodes)
    yield from nodes


def ancestors(node: Node) -> Iterator[Node]:
    """Walks parents outward from node, nearest first"""
    parent = node.parent
    while parent is not None:
        yield parent
        parent = parent.parent


def find_nodes_by_kind(node: Node, kind: NodeKind) -> List[Node]:
    return [n for n in descendants(node) if kind_of(n) is kind]


def has_token(node: Node, token: str) -> bool:
    """Checks for an anonymous keyword child such as 'async' or 'static'"""
    return any(not child.is_named and child.type == token for child in node.children)


def unwrap_parentheses(node: Optional[Node]) -> Optional[Node]:
    while node is not None and node.type == 'parenthesized_expression':
        inner = [child for child in node.named_children if child.type != 'comment']
        node = inner[0] if inner else None
    return node
