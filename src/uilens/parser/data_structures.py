"""Data structures for uilens analysis results.

Every record is a frozen dataclass holding plain values only, so results can
be cached, compared, and serialized without keeping the syntax tree alive.
"""

import json
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, Optional, Tuple


def _camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part.capitalize() for part in rest)


def _serialize(value: Any) -> Any:
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return value


class Record:
    """Mixin giving dataclass records a camelCase ``to_dict``"""

    # Field name -> serialized key, for keys that are not plain camelCase
    _renames: ClassVar[Dict[str, str]] = {}

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            data[self._renames.get(f.name, _camel(f.name))] = _serialize(value)
        return data


@dataclass(frozen=True)
class LocationInfo(Record):
    """Source span with 1-based lines and columns"""
    line: int
    column: int
    end_line: int
    end_column: int


@dataclass(frozen=True)
class ParameterInfo(Record):
    name: str
    type: Optional[str] = None
    optional: bool = False
    default_value: Optional[str] = None


@dataclass(frozen=True)
class ComponentInfo(Record):
    """A UI component declared in a file"""
    name: str
    kind: str  # function | class | arrow
    location: LocationInfo
    props: Optional[str] = None
    hooks: Tuple[str, ...] = ()
    state_variables: Tuple[str, ...] = ()
    effects: Tuple[str, ...] = ()
    complexity: int = 1


@dataclass(frozen=True)
class FunctionInfo(Record):
    """A plain function, arrow function or class method"""
    name: str
    kind: str  # function | arrow | method
    location: LocationInfo
    parameters: Tuple[ParameterInfo, ...] = ()
    return_type: Optional[str] = None
    is_async: bool = False
    is_generator: bool = False
    complexity: int = 1
    calls_to: Tuple[str, ...] = ()

    _renames: ClassVar[Dict[str, str]] = {'is_async': 'async', 'is_generator': 'generator'}


@dataclass(frozen=True)
class HookInfo(Record):
    name: str
    location: LocationInfo
    component: str = 'Unknown'
    dependencies: Tuple[str, ...] = ()
    violations: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class ImportSpecifier(Record):
    name: str
    alias: Optional[str] = None
    is_type_only: bool = False


@dataclass(frozen=True)
class ImportInfo(Record):
    source: str
    kind: str  # named | default | namespace | side-effect
    location: LocationInfo
    specifiers: Tuple[ImportSpecifier, ...] = ()


@dataclass(frozen=True)
class ExportInfo(Record):
    name: str
    kind: str  # named | default | namespace
    location: LocationInfo
    export_kind: str = 'value'  # value | type | interface


@dataclass(frozen=True)
class PropertyInfo(Record):
    name: str
    type: Optional[str] = None
    optional: bool = False
    readonly: bool = False


@dataclass(frozen=True)
class InterfaceInfo(Record):
    name: str
    location: LocationInfo
    properties: Tuple[PropertyInfo, ...] = ()
    extends: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TypeInfo(Record):
    name: str
    type: str
    location: LocationInfo


@dataclass(frozen=True)
class DependencyInfo(Record):
    """Directed file -> module edge"""
    source: str
    target: str
    kind: str = 'import'  # import | call | extends | implements

    _renames: ClassVar[Dict[str, str]] = {'source': 'from', 'target': 'to'}


@dataclass(frozen=True)
class ComplexityMetrics(Record):
    cyclomatic_complexity: int = 1
    cognitive_complexity: int = 0
    lines_of_code: int = 0
    nesting_depth: int = 0
    parameter_count: int = 0


@dataclass(frozen=True)
class PatternInfo(Record):
    type: str
    name: str
    confidence: float
    location: LocationInfo
    evidence: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AnalysisResult(Record):
    """Complete analysis of a single source file"""
    file_path: str
    complexity: ComplexityMetrics
    components: Tuple[ComponentInfo, ...] = ()
    functions: Tuple[FunctionInfo, ...] = ()
    hooks: Tuple[HookInfo, ...] = ()
    imports: Tuple[ImportInfo, ...] = ()
    exports: Tuple[ExportInfo, ...] = ()
    interfaces: Tuple[InterfaceInfo, ...] = ()
    types: Tuple[TypeInfo, ...] = ()
    dependencies: Tuple[DependencyInfo, ...] = ()
    patterns: Tuple[PatternInfo, ...] = ()

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
