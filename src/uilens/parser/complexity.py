"""Complexity metrics computed over a syntax subtree."""

from typing import Optional

from tree_sitter import Node

from .ast_parser import FUNCTION_LIKE, NodeKind, kind_of
from .data_structures import ComplexityMetrics

CYCLOMATIC_KINDS = frozenset({
    NodeKind.IF, NodeKind.WHILE, NodeKind.FOR, NodeKind.DO, NodeKind.CASE, NodeKind.TERNARY,
})
COGNITIVE_KINDS = frozenset({NodeKind.IF, NodeKind.WHILE, NodeKind.FOR})
NESTING_KINDS = frozenset({
    NodeKind.BLOCK, NodeKind.IF, NodeKind.WHILE, NodeKind.FOR, NodeKind.DO,
})
PARAMETER_KINDS = frozenset({NodeKind.FUNCTION, NodeKind.ARROW, NodeKind.METHOD})


def parameter_count(node: Node) -> int:
    """Number of declared parameters of a function-like node"""
    if kind_of(node) not in FUNCTION_LIKE:
        return 0
    if node.child_by_field_name('parameter') is not None:
        return 1
    params = node.child_by_field_name('parameters')
    if params is None:
        return 0
    return sum(1 for child in params.named_children if child.type != 'comment')


def calculate_complexity(root: Node, lines_of_code: Optional[int] = None) -> ComplexityMetrics:
    """
    Computes cyclomatic, cognitive, nesting and parameter metrics for root.

    The root node itself is not counted; only its descendants are. The
    nesting depth of a node is the number of its ancestors (below root)
    that open a block, an if, or a loop, so depth rises on entry and falls
    on exit without needing an explicit exit event.
    """
    cyclomatic = 1
    cognitive = 0
    max_depth = 0
    max_params = 0

    stack = [(child, 0) for child in reversed(root.children)]
    while stack:
        node, depth = stack.pop()
        kind = kind_of(node)

        if kind in CYCLOMATIC_KINDS:
            cyclomatic += 1
        if kind in COGNITIVE_KINDS:
            cognitive += 1 + depth
        if kind in PARAMETER_KINDS:
            max_params = max(max_params, parameter_count(node))

        child_depth = depth
        if kind in NESTING_KINDS:
            child_depth = depth + 1
            max_depth = max(max_depth, child_depth)

        stack.extend((child, child_depth) for child in reversed(node.children))

    return ComplexityMetrics(
        cyclomatic_complexity=cyclomatic,
        cognitive_complexity=cognitive,
        lines_of_code=lines_of_code if lines_of_code is not None else root.end_point[0] + 1,
        nesting_depth=max_depth,
        parameter_count=max_params,
    )


def cyclomatic_complexity(node: Node) -> int:
    """Local cyclomatic score of a function, component or class body"""
    return calculate_complexity(node).cyclomatic_complexity
