"""Directory walking and file discovery for the uilens parser."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .errors import InvalidPatternError
from .language_config import DEFAULT_EXCLUDE_DIRS, DEFAULT_PATTERNS

logger = logging.getLogger(__name__)


def find_source_files(dir_path: str,
                      patterns: Optional[Iterable[str]] = None,
                      exclude_dirs: Optional[Iterable[str]] = None) -> List[Path]:
    """
    Expands glob patterns against a directory.

    Args:
        dir_path: Root directory to search
        patterns: Glob patterns relative to dir_path (e.g., '**/*.tsx')
        exclude_dirs: Directory names to skip (e.g., ['node_modules', 'dist'])

    Returns:
        Absolute paths of matched files, in pattern order, without duplicates

    Raises:
        NotADirectoryError: if dir_path is not a directory
        InvalidPatternError: if a pattern is empty or absolute
    """
    if patterns is None:
        patterns = DEFAULT_PATTERNS
    if exclude_dirs is None:
        exclude_dirs = DEFAULT_EXCLUDE_DIRS
    patterns = list(patterns)
    for pattern in patterns:
        if not pattern or Path(pattern).is_absolute():
            raise InvalidPatternError(pattern)
    excluded = set(exclude_dirs)

    root = Path(dir_path).resolve()
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {dir_path}")

    matches = {}
    for pattern in patterns:
        for file_path in sorted(root.glob(pattern)):
            relative_parts = file_path.relative_to(root).parts[:-1]
            # Skip if in excluded directory
            if excluded.intersection(relative_parts):
                continue
            if file_path.is_file():
                matches[file_path] = None

    logger.debug("Found %d files under %s", len(matches), root)
    return list(matches)
