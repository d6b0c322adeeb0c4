"""Heuristic architecture and design-pattern detection.

Each detector looks for one shape in a parsed file and reports it with a
fixed confidence weight. Detections are hints, not proofs.
"""

import re
from typing import Dict, Iterable, List, Optional, Tuple

from tree_sitter import Node

from .ast_parser import NodeKind, descendants, find_nodes_by_kind, get_location, kind_of, node_text
from .data_structures import ImportInfo, PatternInfo
from .entities import Declaration, iter_declarations
from .extractors import FIELD_TYPES, class_members, extract_return_type, is_static, name_of
from .language_config import (
    ELEMENT_RETURN_TYPES,
    FRAMEWORK_MODULE,
    FRAMEWORK_NAMESPACE,
    PATTERN_CONFIDENCE,
)

CUSTOM_HOOK_NAME = re.compile(r'^use[A-Z]')


def framework_namespace(imports: Iterable[ImportInfo]) -> Optional[str]:
    """
    Local identifier bound to the UI framework's root import.

    Returns:
        The default or namespace binding of the framework import, the
        conventional namespace when it is imported without one, or None
        when the file does not import the framework at all
    """
    found = False
    for imp in imports:
        if imp.source != FRAMEWORK_MODULE:
            continue
        found = True
        if imp.kind in ('default', 'namespace') and imp.specifiers:
            return imp.specifiers[0].name
    return FRAMEWORK_NAMESPACE if found else None


def detect_patterns(root: Node, imports: Iterable[ImportInfo],
                    confidence: Optional[Dict[str, float]] = None) -> Tuple[PatternInfo, ...]:
    """Runs every detector over one file"""
    weights = {**PATTERN_CONFIDENCE, **(confidence or {})}
    declarations = list(iter_declarations(root))
    patterns: List[PatternInfo] = []

    namespace = framework_namespace(imports)
    if namespace is not None:
        patterns.extend(detect_custom_hooks(declarations, weights['custom-hook']))
        for pattern in (
            detect_hoc_pattern(declarations, weights['higher-order-component']),
            detect_context_pattern(root, namespace, weights['react-context']),
        ):
            if pattern is not None:
                patterns.append(pattern)

    for pattern in (
        detect_singleton_pattern(declarations, weights['singleton']),
        detect_factory_pattern(declarations, weights['factory']),
    ):
        if pattern is not None:
            patterns.append(pattern)

    return tuple(patterns)


def detect_custom_hooks(declarations: List[Declaration], confidence: float) -> List[PatternInfo]:
    return [
        PatternInfo(
            type='custom-hook',
            name=decl.name,
            confidence=confidence,
            evidence=(f"Custom hook {decl.name} follows React conventions",),
            location=get_location(decl.node),
        )
        for decl in declarations
        if decl.kind != 'class' and decl.name and CUSTOM_HOOK_NAME.match(decl.name)
    ]


def detect_hoc_pattern(declarations: List[Declaration], confidence: float) -> Optional[PatternInfo]:
    for decl in declarations:
        if kind_of(decl.target) is not NodeKind.FUNCTION:
            continue
        if not decl.name or not decl.name.startswith('with'):
            continue
        return_type = extract_return_type(decl.target) or ''
        if any(marker in return_type for marker in ELEMENT_RETURN_TYPES):
            return PatternInfo(
                type='higher-order-component',
                name=decl.name,
                confidence=confidence,
                evidence=('Function name starts with "with"', 'Returns a component'),
                location=get_location(decl.node),
            )
    return None


def detect_context_pattern(root: Node, namespace: str, confidence: float) -> Optional[PatternInfo]:
    for node in descendants(root):
        if kind_of(node) is not NodeKind.CALL:
            continue
        callee = node.child_by_field_name('function')
        if callee is None or callee.type != 'member_expression':
            continue
        if (node_text(callee.child_by_field_name('object')) == namespace
                and node_text(callee.child_by_field_name('property')) == 'createContext'):
            parent = node.parent
            bound = name_of(parent) if parent is not None and kind_of(parent) is NodeKind.VARIABLE else None
            return PatternInfo(
                type='react-context',
                name=bound or 'Context Provider',
                confidence=confidence,
                evidence=(f"Uses {namespace}.createContext",),
                location=get_location(node),
            )
    return None


def detect_singleton_pattern(declarations: List[Declaration], confidence: float) -> Optional[PatternInfo]:
    for decl in declarations:
        if decl.kind != 'class':
            continue
        members = class_members(decl.target)
        has_instance = any(
            m.type in FIELD_TYPES and is_static(m) and name_of(m) == 'instance' for m in members
        )
        has_get_instance = any(
            m.type == 'method_definition' and is_static(m) and name_of(m) == 'getInstance' for m in members
        )
        if has_instance and has_get_instance:
            return PatternInfo(
                type='singleton',
                name=decl.name or 'Unknown',
                confidence=confidence,
                evidence=('Has static instance property', 'Has getInstance method'),
                location=get_location(decl.node),
            )
    return None


def detect_factory_pattern(declarations: List[Declaration], confidence: float) -> Optional[PatternInfo]:
    for decl in declarations:
        if kind_of(decl.target) is not NodeKind.FUNCTION:
            continue
        if not decl.name or 'factory' not in decl.name.lower():
            continue
        if len(find_nodes_by_kind(decl.target, NodeKind.RETURN)) > 1:
            return PatternInfo(
                type='factory',
                name=decl.name,
                confidence=confidence,
                evidence=('Function name contains "factory"', 'Multiple return statements'),
                location=get_location(decl.node),
            )
    return None
