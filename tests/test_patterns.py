"""Tests for heuristic pattern detection."""

import pytest

from uilens.parser.data_structures import ImportInfo, ImportSpecifier, LocationInfo
from uilens.parser.patterns import framework_namespace

SINGLETON = """
class Registry {
  private static instance: Registry;
  static getInstance(): Registry {
    if (!Registry.instance) {
      Registry.instance = new Registry();
    }
    return Registry.instance;
  }
}
"""


def pattern_types(result):
    return [p.type for p in result.patterns]


class TestSingleton:

    def test_detected_with_both_members(self, analyze) -> None:
        result = analyze(SINGLETON, 'registry.ts')

        assert pattern_types(result) == ['singleton']
        singleton = result.patterns[0]
        assert singleton.name == 'Registry'
        assert singleton.confidence == 0.9
        assert singleton.evidence == ('Has static instance property', 'Has getInstance method')

    def test_instance_without_get_instance(self, analyze) -> None:
        result = analyze("""
            class Registry {
              private static instance: Registry;
              static create(): Registry { return new Registry(); }
            }
        """, 'registry.ts')

        assert result.patterns == ()

    def test_non_static_members_ignored(self, analyze) -> None:
        result = analyze("""
            class Registry {
              instance: Registry;
              getInstance() { return this.instance; }
            }
        """, 'registry.ts')

        assert result.patterns == ()

    def test_first_match_only(self, analyze) -> None:
        result = analyze(SINGLETON + SINGLETON.replace('Registry', 'Cache'), 'registry.ts')

        assert [p.name for p in result.patterns] == ['Registry']

    def test_fixture_store(self, analyze, fixtures_dir) -> None:
        path = fixtures_dir / 'store.ts'
        result = analyze(path.read_text(), str(path))

        assert [(p.type, p.name, p.confidence) for p in result.patterns] == [
            ('singleton', 'Store', 0.9),
            ('factory', 'shapeFactory', 0.7),
        ]


class TestFactory:

    def test_multiple_returns(self, analyze) -> None:
        result = analyze("""
            function createWidgetFactory(kind: string) {
              if (kind === 'a') {
                return { kind };
              }
              return null;
            }
        """, 'factory.ts')

        assert [(p.type, p.name, p.confidence) for p in result.patterns] == [
            ('factory', 'createWidgetFactory', 0.7),
        ]

    def test_single_return(self, analyze) -> None:
        result = analyze("function widgetFactory() { return {}; }", 'factory.ts')

        assert result.patterns == ()


class TestFrameworkPatterns:

    def test_custom_hooks_require_framework_import(self, analyze) -> None:
        code = """
            export function useToggle(initial: boolean) { return initial; }
            export const useCounter = () => 0;
            const useless = 1;
        """
        without_import = analyze(code, 'hooks.ts')
        with_import = analyze("import { useState } from 'react';\n" + code, 'hooks.ts')

        assert without_import.patterns == ()
        assert [(p.type, p.name) for p in with_import.patterns] == [
            ('custom-hook', 'useToggle'),
            ('custom-hook', 'useCounter'),
        ]

    def test_lowercase_after_use_is_not_hook(self, analyze) -> None:
        result = analyze("""
            import React from 'react';
            function user() { return 1; }
            function usefulThing() { return 2; }
        """, 'x.ts')

        assert result.patterns == ()

    def test_higher_order_component(self, analyze) -> None:
        result = analyze("""
            import React from 'react';
            export function withAuth(Wrapped: React.ComponentType): React.FC {
              return (props) => <Wrapped {...props} />;
            }
            function withLogging(fn: () => void): void {}
        """)

        assert [(p.type, p.name, p.confidence) for p in result.patterns] == [
            ('higher-order-component', 'withAuth', 0.8),
        ]

    def test_context_uses_import_binding(self, analyze) -> None:
        result = analyze("""
            import * as R from 'react';
            export const ThemeContext = R.createContext('light');
            const Other = React.createContext(null);
        """, 'theme.ts')

        assert [(p.type, p.name, p.confidence) for p in result.patterns] == [
            ('react-context', 'ThemeContext', 1.0),
        ]
        assert result.patterns[0].evidence == ('Uses R.createContext',)

    def test_fixture_dashboard(self, analyze, fixtures_dir) -> None:
        path = fixtures_dir / 'dashboard.tsx'
        result = analyze(path.read_text(), str(path))

        assert [(p.type, p.name) for p in result.patterns] == [
            ('custom-hook', 'useUser'),
            ('react-context', 'ThemeContext'),
        ]

    def test_confidence_override(self, analyze) -> None:
        result = analyze(SINGLETON, 'registry.ts', confidence={'singleton': 0.5})

        assert result.patterns[0].confidence == 0.5


class TestFrameworkNamespace:

    @staticmethod
    def _import(source, kind, *names):
        location = LocationInfo(1, 1, 1, 10)
        return ImportInfo(source=source, kind=kind, location=location,
                          specifiers=tuple(ImportSpecifier(name=n) for n in names))

    @pytest.mark.parametrize('imports, expected', [
        ([], None),
        ([('lodash', 'default', '_')], None),
        ([('react', 'default', 'React', 'useState')], 'React'),
        ([('react', 'namespace', 'R')], 'R'),
        ([('react', 'named', 'useState')], 'React'),
        ([('react', 'named', 'useState'), ('react', 'default', 'Preact')], 'Preact'),
    ])
    def test_binding(self, imports, expected) -> None:
        infos = [self._import(*spec) for spec in imports]

        assert framework_namespace(infos) == expected
