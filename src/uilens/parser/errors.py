"""Error taxonomy for the uilens analysis engine."""

from typing import Optional


class AnalysisError(Exception):
    """Base class for every error raised by the engine."""


class ParseError(AnalysisError):
    """Source text could not be parsed into a well-formed tree."""

    def __init__(self, file_path: str, message: str,
                 line: Optional[int] = None, column: Optional[int] = None):
        self.file_path = file_path
        self.message = message
        self.line = line
        self.column = column
        where = f"{file_path}:{line}:{column}" if line is not None else file_path
        super().__init__(f"{where}: {message}")


class FileReadError(AnalysisError):
    """Source bytes could not be read from disk."""

    def __init__(self, file_path: str, reason: str):
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"Cannot read {file_path}: {reason}")


class UnsupportedNodeError(AnalysisError):
    """An extraction routine was handed a node of the wrong kind."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected a {expected} node, got '{actual}'")


class UnsupportedLanguageError(AnalysisError, ValueError):
    """No grammar is registered for the file extension."""


class InvalidPatternError(AnalysisError, ValueError):
    """A glob pattern is empty or not relative to the analyzed directory."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(f"Glob pattern must be relative to the directory: {pattern!r}")
