"""Tests for the Analyzer facade: caching and directory analysis."""

import logging
import os
from pathlib import Path

import pytest

from uilens import Analyzer, ParseError
from uilens.parser.errors import InvalidPatternError, UnsupportedLanguageError


class ListHandler(logging.Handler):

    def __init__(self):
        super().__init__(level=logging.ERROR)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def captured_errors():
    handler = ListHandler()
    logger = logging.getLogger('uilens.analyzer')
    logger.addHandler(handler)
    yield handler.records
    logger.removeHandler(handler)


@pytest.fixture
def project(fixtures_dir) -> Path:
    return fixtures_dir / 'project'


def names(results):
    return sorted(Path(r.file_path).name for r in results)


class TestAnalyzeFile:

    def test_second_call_returns_cached_object(self, fixtures_dir) -> None:
        analyzer = Analyzer()
        path = str(fixtures_dir / 'store.ts')

        first = analyzer.analyze_file(path)
        second = analyzer.analyze_file(path)

        assert second is first
        assert analyzer.get_cache_size() == 1

    def test_clear_cache_forces_reanalysis(self, fixtures_dir) -> None:
        analyzer = Analyzer()
        path = str(fixtures_dir / 'store.ts')

        first = analyzer.analyze_file(path)
        analyzer.clear_cache()
        assert analyzer.get_cache_size() == 0

        second = analyzer.analyze_file(path)
        assert second is not first
        assert second == first

    def test_relative_and_absolute_paths_share_entry(self, fixtures_dir, monkeypatch) -> None:
        analyzer = Analyzer()
        monkeypatch.chdir(fixtures_dir)

        relative = analyzer.analyze_file('store.ts')
        absolute = analyzer.analyze_file(str(fixtures_dir / 'store.ts'))

        assert absolute is relative
        assert analyzer.get_cache_size() == 1
        assert os.path.isabs(relative.file_path)

    def test_stale_results_until_cleared(self, tmp_path) -> None:
        source = tmp_path / 'a.ts'
        source.write_text("function one() {}\n")
        analyzer = Analyzer()

        before = analyzer.analyze_file(str(source))
        source.write_text("function one() {}\nfunction two() {}\n")

        assert analyzer.analyze_file(str(source)) is before
        analyzer.clear_cache()
        assert [f.name for f in analyzer.analyze_file(str(source)).functions] == ['one', 'two']

    def test_missing_file(self, tmp_path) -> None:
        analyzer = Analyzer()

        with pytest.raises(FileNotFoundError):
            analyzer.analyze_file(str(tmp_path / 'missing.ts'))
        assert analyzer.get_cache_size() == 0

    def test_parse_error(self, project) -> None:
        analyzer = Analyzer()

        with pytest.raises(ParseError) as excinfo:
            analyzer.analyze_file(str(project / 'components' / 'broken.tsx'))

        assert excinfo.value.file_path.endswith('broken.tsx')
        assert excinfo.value.line is not None
        assert analyzer.get_cache_size() == 0

    def test_unsupported_extension(self, tmp_path) -> None:
        script = tmp_path / 'script.py'
        script.write_text("print('hi')\n")

        with pytest.raises(UnsupportedLanguageError):
            Analyzer().analyze_file(str(script))

    def test_confidence_overrides(self, fixtures_dir) -> None:
        analyzer = Analyzer(confidence={'factory': 0.3})
        result = analyzer.analyze_file(str(fixtures_dir / 'store.ts'))

        assert {p.type: p.confidence for p in result.patterns} == {'singleton': 0.9, 'factory': 0.3}


class TestAnalyzeDirectory:

    def test_partial_success(self, tmp_path, captured_errors) -> None:
        (tmp_path / 'a.ts').write_text("export const a = 1;\n")
        (tmp_path / 'b.ts').write_text("export function b( {\n")
        (tmp_path / 'c.ts').write_text("export const c = 3;\n")
        failures = []

        results = Analyzer().analyze_directory(
            str(tmp_path), on_error=lambda path, error: failures.append((path, error)))

        assert names(results) == ['a.ts', 'c.ts']
        assert len(failures) == 1
        assert failures[0][0].endswith('b.ts')
        assert isinstance(failures[0][1], ParseError)
        assert len(captured_errors) == 1
        assert captured_errors[0].levelno == logging.ERROR
        assert 'b.ts' in captured_errors[0].getMessage()

    def test_fixture_project(self, project, captured_errors) -> None:
        analyzer = Analyzer()

        results = analyzer.analyze_directory(str(project))

        assert names(results) == ['Button.tsx', 'index.ts', 'utils.ts']
        assert len(captured_errors) == 1
        assert analyzer.get_cache_size() == 3

    def test_results_are_cached(self, project) -> None:
        analyzer = Analyzer()

        first = analyzer.analyze_directory(str(project))
        second = analyzer.analyze_directory(str(project))

        assert all(a is b for a, b in zip(first, second))

    def test_custom_patterns(self, project) -> None:
        results = Analyzer().analyze_directory(str(project), patterns=['**/*.ts'])

        assert names(results) == ['index.ts', 'utils.ts']

    def test_overlapping_patterns_analyzed_once(self, project) -> None:
        results = Analyzer().analyze_directory(str(project), patterns=['**/*.ts', '*.ts'])

        assert names(results) == ['index.ts', 'utils.ts']

    def test_excluded_directories(self, project) -> None:
        included = Analyzer(exclude_dirs=['components', 'node_modules']).analyze_directory(str(project))

        assert names(included) == ['index.ts', 'utils.ts']

        with_vendor = Analyzer(exclude_dirs=[]).analyze_directory(str(project), patterns=['**/*.js'])
        assert names(with_vendor) == ['index.js']

    def test_parallel_matches_sequential(self, project) -> None:
        sequential = Analyzer().analyze_directory(str(project))
        parallel = Analyzer().analyze_directory(str(project), max_workers=4)

        assert parallel == sequential

    def test_iter_directory(self, project) -> None:
        failures = []

        results = list(Analyzer().iter_directory(
            str(project), on_error=lambda path, error: failures.append(path)))

        assert names(results) == ['Button.tsx', 'index.ts', 'utils.ts']
        assert len(failures) == 1

    def test_not_a_directory(self, fixtures_dir) -> None:
        with pytest.raises(NotADirectoryError):
            Analyzer().analyze_directory(str(fixtures_dir / 'store.ts'))

    @pytest.mark.parametrize('pattern', ['', '/etc/*.ts'])
    def test_pattern_must_be_relative(self, project, pattern) -> None:
        with pytest.raises(InvalidPatternError) as excinfo:
            Analyzer().analyze_directory(str(project), patterns=['**/*.ts', pattern])

        assert excinfo.value.pattern == pattern
