"""
Analyzer facade for uilens.

Parses a file once, runs every extraction, complexity and pattern pass over
the tree, and memoizes the result by absolute path until the cache is
cleared explicitly.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from .parser.ast_parser import parse_source, read_source
from .parser.complexity import calculate_complexity
from .parser.data_structures import AnalysisResult
from .parser.directory_walker import find_source_files
from .parser.errors import AnalysisError
from .parser.entities import (
    extract_components,
    extract_dependencies,
    extract_exports,
    extract_functions,
    extract_hooks,
    extract_imports,
    extract_interfaces,
    extract_types,
)
from .parser.language_config import DEFAULT_PATTERNS, PATTERN_CONFIDENCE
from .parser.patterns import detect_patterns

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[str, Exception], None]


def analyze_source(source: bytes, file_path: str,
                   confidence: Optional[Dict[str, float]] = None) -> AnalysisResult:
    """
    Analyzes in-memory source text.

    Args:
        source: Raw source bytes
        file_path: Path used for grammar selection and provenance
        confidence: Optional overrides of the pattern confidence table

    Raises:
        ParseError: if the source is malformed
    """
    tree = parse_source(source, file_path)
    root = tree.root_node
    imports = extract_imports(root)

    return AnalysisResult(
        file_path=file_path,
        components=extract_components(root),
        functions=extract_functions(root),
        hooks=extract_hooks(root),
        imports=imports,
        exports=extract_exports(root),
        interfaces=extract_interfaces(root),
        types=extract_types(root),
        dependencies=extract_dependencies(file_path, imports),
        complexity=calculate_complexity(root, lines_of_code=source.count(b'\n') + 1),
        patterns=detect_patterns(root, imports, confidence),
    )


class Analyzer:
    """Analyzes source files and caches results by absolute path."""

    def __init__(self,
                 confidence: Optional[Dict[str, float]] = None,
                 exclude_dirs: Optional[List[str]] = None):
        """Initialize analyzer.

        Args:
            confidence: Overrides for the per-pattern confidence weights
            exclude_dirs: Directory names skipped by directory analysis
        """
        self.confidence = {**PATTERN_CONFIDENCE, **(confidence or {})}
        self.exclude_dirs = exclude_dirs

        self._cache: Dict[str, AnalysisResult] = {}
        self._lock = threading.Lock()

    def analyze_file(self, file_path: str) -> AnalysisResult:
        """
        Analyzes one file, returning the cached result when present.

        Raises:
            FileNotFoundError: if the file does not exist
            FileReadError: if the file cannot be read
            ParseError: if the file is malformed
        """
        key = str(Path(file_path).resolve())

        cached = self._cache.get(key)
        if cached is not None:
            return cached

        logger.debug("Analyzing %s", key)
        result = analyze_source(read_source(key), key, self.confidence)

        with self._lock:
            # Another worker may have finished the same path first
            return self._cache.setdefault(key, result)

    def analyze_directory(self,
                          dir_path: str,
                          patterns: Optional[Iterable[str]] = None,
                          on_error: Optional[ErrorCallback] = None,
                          max_workers: int = 1) -> List[AnalysisResult]:
        """
        Analyzes every file under dir_path matching the glob patterns.

        A failing file is logged (and passed to on_error) and skipped; the
        returned list holds only the successful results, in discovery order.

        Args:
            dir_path: Root directory
            patterns: Glob patterns, defaults to ts/tsx/js/jsx sources
            on_error: Called with (path, exception) for each failed file
            max_workers: Files analyzed concurrently (1 = sequential)
        """
        files = find_source_files(dir_path, patterns or DEFAULT_PATTERNS, self.exclude_dirs)
        logger.info("Analyzing %d files under %s", len(files), dir_path)

        if max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                outcomes = list(pool.map(self._try_analyze, files))
        else:
            outcomes = [self._try_analyze(path) for path in files]

        results = []
        error_count = 0
        for path, result, error in outcomes:
            if error is not None:
                error_count += 1
                if on_error is not None:
                    on_error(str(path), error)
            else:
                results.append(result)

        logger.info("Analyzed %d files (%d errors)", len(results), error_count)
        return results

    def iter_directory(self,
                       dir_path: str,
                       patterns: Optional[Iterable[str]] = None,
                       on_error: Optional[ErrorCallback] = None) -> Iterator[AnalysisResult]:
        """Lazy version that yields results one at a time"""
        for path in find_source_files(dir_path, patterns or DEFAULT_PATTERNS, self.exclude_dirs):
            _, result, error = self._try_analyze(path)
            if error is not None:
                if on_error is not None:
                    on_error(str(path), error)
                continue
            yield result

    def _try_analyze(self, path: Path) -> Tuple[Path, Optional[AnalysisResult], Optional[Exception]]:
        try:
            return path, self.analyze_file(str(path)), None
        except (AnalysisError, OSError) as e:
            logger.error("Error analyzing %s: %s", path, e)
            return path, None, e

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def get_cache_size(self) -> int:
        return len(self._cache)
