"""Performance profiling infrastructure for uilens."""

import cProfile
import io
import logging
import pstats
import time
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


class AnalyzerProfiler:
    """Wrapper for profiling analyzer performance"""

    def __init__(self):
        self.profiler = cProfile.Profile()

    def profile_function(self, func: Callable, *args, **kwargs) -> Any:
        """
        Profiles a function call and returns its result.

        Args:
            func: Function to profile
            *args, **kwargs: Arguments to pass to function
        """
        self.profiler.enable()
        try:
            return func(*args, **kwargs)
        finally:
            self.profiler.disable()

    def format_stats(self, sort_by: str = 'cumtime', top_n: int = 20) -> str:
        """
        Renders profiling statistics as text.

        Args:
            sort_by: Sort key ('cumtime', 'tottime', 'ncalls')
            top_n: Number of top functions to include
        """
        s = io.StringIO()
        ps = pstats.Stats(self.profiler, stream=s).sort_stats(sort_by)
        ps.print_stats(top_n)
        return s.getvalue()

    def save_stats(self, output_path: str):
        """Saves profiling data to file for visualization with snakeviz"""
        self.profiler.dump_stats(output_path)
        logger.info("Profile saved to %s", output_path)


def profile_analysis(dir_path: str, analyzer=None, output_path: Optional[str] = None,
                     **analyze_kwargs) -> Dict[str, Any]:
    """
    Profiles analyzing a directory and returns statistics.

    Args:
        dir_path: Directory to analyze
        analyzer: Analyzer instance (a fresh one by default)
        output_path: Optional .prof file to write
        **analyze_kwargs: Passed to analyze_directory (patterns, on_error, max_workers)

    Returns:
        Dict with timing information and extraction counts
    """
    from .analyzer import Analyzer

    analyzer = analyzer or Analyzer()
    profiler = AnalyzerProfiler()

    start = time.perf_counter()
    results = profiler.profile_function(analyzer.analyze_directory, dir_path, **analyze_kwargs)
    elapsed = time.perf_counter() - start

    logger.debug(profiler.format_stats(sort_by='cumtime', top_n=15))
    if output_path:
        profiler.save_stats(output_path)

    total_components = sum(len(r.components) for r in results)
    total_functions = sum(len(r.functions) for r in results)

    return {
        'total_time': elapsed,
        'files_analyzed': len(results),
        'components_extracted': total_components,
        'functions_extracted': total_functions,
        'avg_time_per_file': elapsed / len(results) if results else 0,
        'functions_per_second': total_functions / elapsed if elapsed > 0 else 0,
        'results': results,
    }
