"""Entity extraction passes over a parsed file.

Each ``extract_*`` function is an independent pass over the same tree and
returns a tuple of value records. Components and plain functions are
classified with the same predicate, so a declaration lands in exactly one
of the two collections.
"""

import re
from pathlib import Path
from typing import Iterator, List, NamedTuple, Optional, Tuple

from tree_sitter import Node

from .ast_parser import (
    FUNCTION_LIKE,
    NodeKind,
    ancestors,
    descendants,
    get_location,
    has_token,
    kind_of,
    node_text,
    unwrap_parentheses,
)
from .complexity import cyclomatic_complexity
from .data_structures import (
    ComponentInfo,
    DependencyInfo,
    ExportInfo,
    FunctionInfo,
    HookInfo,
    ImportInfo,
    ImportSpecifier,
    InterfaceInfo,
    PropertyInfo,
    TypeInfo,
)
from .errors import UnsupportedNodeError
from .extractors import (
    FIELD_TYPES,
    call_arguments,
    class_members,
    extract_function_calls,
    extract_heritage,
    extract_heritage_type_argument,
    extract_parameters,
    extract_return_type,
    hook_callee,
    is_async_function,
    is_generator_function,
    name_of,
    returns_element_tree,
    string_value,
    type_text,
)
from .language_config import (
    CLASS_COMPONENT_BASES,
    DEPENDENCY_HOOKS,
    EFFECT_HOOK,
    STATE_HOOK,
)

COMPONENT_NAME = re.compile(r'^[A-Z]')

METHOD_TYPES = ('method_definition', 'method_signature', 'abstract_method_signature')

CONDITIONAL_KINDS = frozenset({
    NodeKind.IF, NodeKind.WHILE, NodeKind.DO, NodeKind.FOR, NodeKind.SWITCH, NodeKind.TERNARY,
})

CONDITIONAL_HOOK = 'Hook called conditionally'
HOOK_OUTSIDE_FUNCTION = 'Hook not called inside function component'


class Declaration(NamedTuple):
    """A top-level function, arrow or class declaration"""
    kind: str  # function | arrow | class
    name: Optional[str]
    node: Node  # node whose span is reported
    target: Node  # function-like or class node


def top_level_statements(root: Node) -> Iterator[Node]:
    """Program statements, with exported declarations unwrapped"""
    for child in root.named_children:
        if child.type == 'export_statement':
            inner = child.child_by_field_name('declaration')
            if inner is None:
                inner = child.child_by_field_name('value')
            if inner is not None:
                yield inner
        else:
            yield child


def iter_declarations(root: Node) -> Iterator[Declaration]:
    for stmt in top_level_statements(root):
        kind = kind_of(stmt)
        if kind is NodeKind.CLASS:
            yield Declaration('class', name_of(stmt), stmt, stmt)
        elif kind in (NodeKind.FUNCTION, NodeKind.FUNCTION_EXPRESSION):
            yield Declaration('function', name_of(stmt), stmt, stmt)
        elif kind is NodeKind.ARROW:
            yield Declaration('arrow', None, stmt, stmt)
        elif stmt.type in ('lexical_declaration', 'variable_declaration'):
            for declarator in stmt.named_children:
                if kind_of(declarator) is not NodeKind.VARIABLE:
                    continue
                name = name_of(declarator)
                value = unwrap_parentheses(declarator.child_by_field_name('value'))
                if name is None or value is None:
                    continue
                value_kind = kind_of(value)
                if value_kind is NodeKind.ARROW:
                    yield Declaration('arrow', name, declarator, value)
                elif value_kind is NodeKind.FUNCTION_EXPRESSION:
                    yield Declaration('function', name, declarator, value)


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


def is_component_function(name: Optional[str], node: Node) -> bool:
    """Capitalized name and at least one return of an element-tree expression"""
    return bool(name) and COMPONENT_NAME.match(name) is not None and returns_element_tree(node)


def is_component_class(node: Node) -> bool:
    heritage = extract_heritage(node)
    return any(base in heritage for base in CLASS_COMPONENT_BASES)


def extract_components(root: Node) -> Tuple[ComponentInfo, ...]:
    components = []
    for decl in iter_declarations(root):
        if decl.kind == 'class':
            if is_component_class(decl.target):
                components.append(_class_component(decl))
        elif is_component_function(decl.name, decl.target):
            components.append(_function_component(decl))
    return tuple(components)


def _function_component(decl: Declaration) -> ComponentInfo:
    hooks, state_variables, effects = _collect_hook_usage(decl.target)
    params = extract_parameters(decl.target)
    return ComponentInfo(
        name=decl.name or 'Anonymous',
        kind=decl.kind,
        props=params[0].type if params else None,
        hooks=hooks,
        state_variables=state_variables,
        effects=effects,
        location=get_location(decl.node),
        complexity=cyclomatic_complexity(decl.target),
    )


def _class_component(decl: Declaration) -> ComponentInfo:
    return ComponentInfo(
        name=decl.name or 'Anonymous',
        kind='class',
        props=_class_props(decl.target),
        state_variables=_class_state_variables(decl.target),
        location=get_location(decl.node),
        complexity=cyclomatic_complexity(decl.target),
    )


def _collect_hook_usage(node: Node) -> Tuple[Tuple[str, ...], Tuple[str, ...], Tuple[str, ...]]:
    """Hooks (deduplicated), state variables and effects in one walk"""
    hooks = {}
    state_variables = []
    effects = []
    for child in descendants(node):
        if kind_of(child) is not NodeKind.CALL:
            continue
        name = hook_callee(child)
        if name is None:
            continue
        hooks[name] = None
        if name == STATE_HOOK:
            variable = _state_binding(child)
            if variable is not None:
                state_variables.append(variable)
        elif name == EFFECT_HOOK:
            effects.append(name)
    return tuple(hooks), tuple(state_variables), tuple(effects)


def _state_binding(call: Node) -> Optional[str]:
    """First name of `const [value, setValue] = useState(...)`"""
    declarator = call.parent
    if declarator is None or kind_of(declarator) is not NodeKind.VARIABLE:
        return None
    if declarator.child_by_field_name('value') != call:
        return None
    pattern = declarator.child_by_field_name('name')
    if pattern is None or pattern.type != 'array_pattern':
        return None

    for element in pattern.children:
        if element.type == '[':
            continue
        if element.type == 'assignment_pattern':
            element = element.child_by_field_name('left')
        if element is not None and element.type == 'identifier':
            return node_text(element)
        # Hole (`[, setX]`) or nested pattern
        return None
    return None


def _class_props(node: Node) -> Optional[str]:
    for member in class_members(node):
        if name_of(member) == 'props' and member.type in FIELD_TYPES:
            declared = type_text(member.child_by_field_name('type'))
            if declared:
                return declared
    return extract_heritage_type_argument(node)


def _class_state_variables(node: Node) -> Tuple[str, ...]:
    constructor = next(
        (m for m in class_members(node)
         if m.type == 'method_definition' and name_of(m) == 'constructor'),
        None,
    )
    if constructor is None:
        return ()

    state_variables = []
    for child in descendants(constructor):
        if child.type != 'assignment_expression':
            continue
        left = child.child_by_field_name('left')
        right = unwrap_parentheses(child.child_by_field_name('right'))
        if left is None or left.type != 'member_expression' or right is None:
            continue
        target = left.child_by_field_name('object')
        prop = left.child_by_field_name('property')
        if target is None or target.type != 'this' or node_text(prop) != 'state':
            continue
        if right.type != 'object':
            continue
        for pair in right.named_children:
            if pair.type == 'pair':
                key = pair.child_by_field_name('key')
                state_variables.append(string_value(key) if key.type == 'string' else node_text(key))
    return tuple(state_variables)


# ---------------------------------------------------------------------------
# Functions
# ---------------------------------------------------------------------------


def extract_functions(root: Node) -> Tuple[FunctionInfo, ...]:
    functions = []
    for decl in iter_declarations(root):
        if decl.kind == 'class':
            class_name = decl.name or 'Anonymous'
            for member in class_members(decl.target):
                if _is_plain_method(member):
                    functions.append(analyze_method(member, class_name))
        elif not is_component_function(decl.name, decl.target):
            functions.append(_function_info(decl))
    return tuple(functions)


def _is_plain_method(member: Node) -> bool:
    if member.type not in METHOD_TYPES:
        return False
    # Accessors and constructors are not methods
    if has_token(member, 'get') or has_token(member, 'set'):
        return False
    return name_of(member) != 'constructor'


def _function_info(decl: Declaration) -> FunctionInfo:
    fn = decl.target
    return FunctionInfo(
        name=decl.name or 'Anonymous',
        kind=decl.kind,
        parameters=extract_parameters(fn),
        return_type=extract_return_type(fn),
        is_async=is_async_function(fn),
        is_generator=is_generator_function(fn),
        location=get_location(decl.node),
        complexity=cyclomatic_complexity(fn),
        calls_to=extract_function_calls(fn),
    )


def analyze_method(method: Node, class_name: str) -> FunctionInfo:
    """
    Builds a FunctionInfo for a class method named `ClassName.method`.

    Raises:
        UnsupportedNodeError: if method is not a method declaration or signature
    """
    if method.type not in METHOD_TYPES:
        raise UnsupportedNodeError('method', method.type)

    return FunctionInfo(
        name=f"{class_name}.{name_of(method) or node_text(method.child_by_field_name('name'))}",
        kind='method',
        parameters=extract_parameters(method),
        return_type=extract_return_type(method),
        is_async=is_async_function(method),
        is_generator=is_generator_function(method),
        location=get_location(method),
        complexity=cyclomatic_complexity(method),
        calls_to=extract_function_calls(method),
    )


# ---------------------------------------------------------------------------
# Hooks
# ---------------------------------------------------------------------------


def extract_hooks(root: Node) -> Tuple[HookInfo, ...]:
    """Every hook-style call in the file, wherever it appears"""
    hooks = []
    for node in descendants(root):
        if kind_of(node) is not NodeKind.CALL:
            continue
        name = hook_callee(node)
        if name is None:
            continue
        violations = hook_violations(node)
        hooks.append(HookInfo(
            name=name,
            dependencies=_hook_dependencies(node, name),
            location=get_location(node),
            component=enclosing_component(node),
            violations=tuple(violations) if violations else None,
        ))
    return tuple(hooks)


def _hook_dependencies(call: Node, name: str) -> Tuple[str, ...]:
    if name not in DEPENDENCY_HOOKS:
        return ()
    args = call_arguments(call)
    if len(args) < 2 or args[1].type != 'array':
        return ()
    return tuple(node_text(elem) for elem in args[1].named_children if elem.type == 'identifier')


def enclosing_component(node: Node) -> str:
    """Name of the nearest enclosing component-like declaration"""
    for ancestor in ancestors(node):
        kind = kind_of(ancestor)
        # Any capitalized binding counts, so memo()/forwardRef() wrappers resolve
        if kind in (NodeKind.FUNCTION, NodeKind.VARIABLE):
            name = name_of(ancestor)
            if name and COMPONENT_NAME.match(name):
                return name
        elif kind is NodeKind.CLASS and is_component_class(ancestor):
            return name_of(ancestor) or 'Anonymous'
    return 'Unknown'


def hook_violations(call: Node) -> List[str]:
    violations = []

    for ancestor in ancestors(call):
        kind = kind_of(ancestor)
        if kind in FUNCTION_LIKE:
            break
        if kind in CONDITIONAL_KINDS:
            violations.append(CONDITIONAL_HOOK)
            break

    if not any(kind_of(ancestor) in FUNCTION_LIKE for ancestor in ancestors(call)):
        violations.append(HOOK_OUTSIDE_FUNCTION)

    return violations


# ---------------------------------------------------------------------------
# Imports, exports and declarations of types
# ---------------------------------------------------------------------------


def extract_imports(root: Node) -> Tuple[ImportInfo, ...]:
    imports = []
    for stmt in root.named_children:
        if stmt.type != 'import_statement':
            continue

        type_only = has_token(stmt, 'type')
        source = stmt.child_by_field_name('source')
        specifiers = []
        default = namespace = named = False

        for part in stmt.named_children:
            if part.type == 'import_require_clause':
                # import x = require('module')
                source = part.child_by_field_name('source')
                local = next((c for c in part.named_children if c.type == 'identifier'), None)
                specifiers.append(ImportSpecifier(name=node_text(local), is_type_only=type_only))
                default = True
            elif part.type == 'import_clause':
                for clause in part.named_children:
                    if clause.type == 'identifier':
                        specifiers.append(ImportSpecifier(name=node_text(clause), is_type_only=type_only))
                        default = True
                    elif clause.type == 'namespace_import':
                        local = next((c for c in clause.named_children if c.type == 'identifier'), None)
                        specifiers.append(ImportSpecifier(name=node_text(local), is_type_only=type_only))
                        namespace = True
                    elif clause.type == 'named_imports':
                        for spec in clause.named_children:
                            if spec.type != 'import_specifier':
                                continue
                            alias = spec.child_by_field_name('alias')
                            specifiers.append(ImportSpecifier(
                                name=node_text(spec.child_by_field_name('name')),
                                alias=node_text(alias) if alias is not None else None,
                                is_type_only=type_only or has_token(spec, 'type'),
                            ))
                            named = True

        if default:
            kind = 'default'
        elif namespace:
            kind = 'namespace'
        elif named:
            kind = 'named'
        else:
            kind = 'side-effect'

        imports.append(ImportInfo(
            source=string_value(source),
            kind=kind,
            specifiers=tuple(specifiers),
            location=get_location(stmt),
        ))
    return tuple(imports)


def extract_exports(root: Node) -> Tuple[ExportInfo, ...]:
    exports = []
    for stmt in root.named_children:
        if stmt.type != 'export_statement':
            continue

        location = get_location(stmt)
        declaration = stmt.child_by_field_name('declaration')
        value = stmt.child_by_field_name('value')
        clause = next((c for c in stmt.named_children if c.type == 'export_clause'), None)
        namespace_export = next((c for c in stmt.named_children if c.type == 'namespace_export'), None)

        if clause is not None:
            type_only = has_token(stmt, 'type')
            for spec in clause.named_children:
                if spec.type != 'export_specifier':
                    continue
                exports.append(ExportInfo(
                    name=node_text(spec.child_by_field_name('name')),
                    kind='named',
                    export_kind='type' if type_only or has_token(spec, 'type') else 'value',
                    location=get_location(spec),
                ))
        elif has_token(stmt, 'default'):
            target = declaration if declaration is not None else value
            name = name_of(target) if target is not None else None
            if name is None and value is not None and value.type == 'identifier':
                name = node_text(value)
            exports.append(ExportInfo(
                name=name or 'default',
                kind='default',
                export_kind=_export_kind(target) if target is not None else 'value',
                location=location,
            ))
        elif has_token(stmt, '='):
            # export = expression
            expr = next((c for c in stmt.named_children if c.type != 'comment'), None)
            exports.append(ExportInfo(name=node_text(expr), kind='namespace', location=location))
        elif namespace_export is not None or has_token(stmt, '*'):
            alias = None
            if namespace_export is not None:
                alias = next((c for c in namespace_export.named_children
                              if c.type in ('identifier', 'string')), None)
            exports.append(ExportInfo(
                name=node_text(alias) if alias is not None else '*',
                kind='namespace',
                location=location,
            ))
        elif declaration is not None:
            for name in _declared_names(declaration):
                exports.append(ExportInfo(
                    name=name,
                    kind='named',
                    export_kind=_export_kind(declaration),
                    location=location,
                ))
    return tuple(exports)


def _export_kind(declaration: Node) -> str:
    if declaration.type == 'interface_declaration':
        return 'interface'
    if declaration.type == 'type_alias_declaration':
        return 'type'
    return 'value'


def _declared_names(declaration: Node) -> List[str]:
    if declaration.type in ('lexical_declaration', 'variable_declaration'):
        return [name for name in (name_of(d) for d in declaration.named_children
                                  if kind_of(d) is NodeKind.VARIABLE) if name]
    name = name_of(declaration)
    return [name] if name else []


def extract_interfaces(root: Node) -> Tuple[InterfaceInfo, ...]:
    interfaces = []
    for stmt in top_level_statements(root):
        if stmt.type != 'interface_declaration':
            continue

        extends = []
        for child in stmt.named_children:
            if child.type == 'extends_type_clause':
                extends.extend(node_text(t) for t in child.named_children if t.type != 'comment')

        body = stmt.child_by_field_name('body')
        properties = []
        if body is not None:
            for member in body.named_children:
                if member.type != 'property_signature':
                    continue
                properties.append(PropertyInfo(
                    name=name_of(member) or node_text(member.child_by_field_name('name')),
                    type=type_text(member.child_by_field_name('type')),
                    optional=has_token(member, '?'),
                    readonly=has_token(member, 'readonly'),
                ))

        interfaces.append(InterfaceInfo(
            name=name_of(stmt) or 'Anonymous',
            properties=tuple(properties),
            extends=tuple(extends),
            location=get_location(stmt),
        ))
    return tuple(interfaces)


def extract_types(root: Node) -> Tuple[TypeInfo, ...]:
    return tuple(
        TypeInfo(
            name=name_of(stmt) or 'Anonymous',
            type=node_text(stmt.child_by_field_name('value')),
            location=get_location(stmt),
        )
        for stmt in top_level_statements(root)
        if stmt.type == 'type_alias_declaration'
    )


def extract_dependencies(file_path: str, imports: Tuple[ImportInfo, ...]) -> Tuple[DependencyInfo, ...]:
    """Coarse file -> module edges, one per import statement"""
    file_name = Path(file_path).name
    return tuple(DependencyInfo(source=file_name, target=imp.source, kind='import') for imp in imports)
