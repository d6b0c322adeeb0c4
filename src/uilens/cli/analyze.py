"""uilens CLI - analyze and patterns commands."""

import click
import json
import logging
from pathlib import Path
from typing import List, Optional, Tuple
from rich.console import Console
from rich.table import Table

from ..analyzer import Analyzer
from ..logging_config import setup_logging
from ..parser.data_structures import AnalysisResult
from ..parser.errors import AnalysisError
from ..profiling import profile_analysis

console = Console(stderr=True)


def _run(path: str, patterns: Tuple[str, ...], workers: int, exclude: Tuple[str, ...],
         profile_output: Optional[str] = None) -> Tuple[List[AnalysisResult], List[Tuple[str, Exception]]]:
    analyzer = Analyzer(exclude_dirs=list(exclude) if exclude else None)
    failures: List[Tuple[str, Exception]] = []

    if Path(path).is_file():
        return [analyzer.analyze_file(path)], failures

    options = dict(
        patterns=list(patterns) or None,
        on_error=lambda file_path, error: failures.append((file_path, error)),
        max_workers=workers,
    )
    if profile_output is None:
        return analyzer.analyze_directory(path, **options), failures

    stats = profile_analysis(path, analyzer=analyzer, output_path=profile_output, **options)
    console.print(f"Profiled {stats['files_analyzed']} files in {stats['total_time']:.2f}s "
                  f"({stats['avg_time_per_file']:.3f}s per file), saved to {profile_output}")
    return stats['results'], failures


def _summary_table(results: List[AnalysisResult], failures: list) -> Table:
    table = Table(title="Analysis Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="magenta", justify="right")

    table.add_row("Files", str(len(results)))
    table.add_row("Components", str(sum(len(r.components) for r in results)))
    table.add_row("Functions", str(sum(len(r.functions) for r in results)))
    table.add_row("Hooks", str(sum(len(r.hooks) for r in results)))
    table.add_row("Hook violations", str(sum(1 for r in results for h in r.hooks if h.violations)))
    table.add_row("Patterns", str(sum(len(r.patterns) for r in results)))
    table.add_row("Failures", str(len(failures)), style="red" if failures else None)
    return table


@click.command()
@click.argument('path', type=click.Path(exists=True))
@click.option('--output', '-o', default=None, help='Output JSON file (default: stdout)')
@click.option('--pattern', '-p', 'patterns', multiple=True, help='Glob pattern (can specify multiple times)')
@click.option('--exclude', multiple=True, help='Directories to exclude (can specify multiple times)')
@click.option('--workers', '-w', default=1, show_default=True, help='Files analyzed concurrently')
@click.option('--profile', 'profile_output', default=None, metavar='FILE',
              help='Profile a directory analysis and save cProfile stats to FILE')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def analyze(path: str, output: str, patterns: tuple, exclude: tuple, workers: int,
            profile_output: str, verbose: bool):
    """
    Analyze a source file or directory and emit structured metadata.

    Examples:
        uilens analyze src/App.tsx
        uilens analyze ./src -o analysis.json
        uilens analyze ./src --pattern '**/*.tsx' --workers 4
        uilens analyze ./src --profile analysis.prof
    """
    setup_logging(logging.DEBUG if verbose else logging.INFO)

    try:
        results, failures = _run(path, patterns, workers, exclude, profile_output)
    except (AnalysisError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}", style="bold")
        raise SystemExit(1)

    payload = json.dumps([r.to_dict() for r in results], indent=2)
    if output:
        with open(output, 'w') as f:
            f.write(payload)
        console.print(f"Output: {output}")
    else:
        click.echo(payload)

    console.print(_summary_table(results, failures))
    for file_path, error in failures:
        console.print(f"[red]✗[/red] {file_path}: {error}")


@click.command(name='patterns')
@click.argument('path', type=click.Path(exists=True))
def patterns_command(path: str):
    """List the architecture and design patterns detected under PATH."""
    setup_logging(logging.WARNING)

    try:
        results, _ = _run(path, (), 1, ())
    except (AnalysisError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}", style="bold")
        raise SystemExit(1)

    table = Table(title="Detected Patterns")
    table.add_column("File", style="cyan")
    table.add_column("Pattern", style="green")
    table.add_column("Name", style="magenta")
    table.add_column("Confidence", justify="right", style="yellow")
    table.add_column("Line", justify="right")

    for result in results:
        for pattern in result.patterns:
            table.add_row(
                Path(result.file_path).name,
                pattern.type,
                pattern.name,
                f"{pattern.confidence:.1f}",
                str(pattern.location.line),
            )

    Console().print(table)
