"""
Parser module for uilens.
Extracts structural metadata from TypeScript and JavaScript UI sources.
"""

from .ast_parser import parse_source, read_source, get_location
from .directory_walker import find_source_files
from .data_structures import (
    AnalysisResult,
    ComplexityMetrics,
    ComponentInfo,
    DependencyInfo,
    ExportInfo,
    FunctionInfo,
    HookInfo,
    ImportInfo,
    InterfaceInfo,
    LocationInfo,
    PatternInfo,
    TypeInfo,
)
from .errors import (
    AnalysisError,
    FileReadError,
    InvalidPatternError,
    ParseError,
    UnsupportedLanguageError,
    UnsupportedNodeError,
)

__all__ = [
    'parse_source', 'read_source', 'get_location', 'find_source_files',
    'AnalysisResult', 'ComplexityMetrics', 'ComponentInfo', 'DependencyInfo', 'ExportInfo',
    'FunctionInfo', 'HookInfo', 'ImportInfo', 'InterfaceInfo', 'LocationInfo', 'PatternInfo',
    'TypeInfo', 'AnalysisError', 'FileReadError', 'InvalidPatternError', 'ParseError', 'UnsupportedLanguageError',
    'UnsupportedNodeError',
]
