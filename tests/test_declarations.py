"""Tests for imports, exports, interfaces, type aliases and dependencies."""

import pytest


class TestImports:

    @pytest.fixture
    def imports(self, analyze):
        return analyze("""
            import React from 'react';
            import * as path from 'path';
            import { a, b as c, type T } from './mod';
            import type { Props } from './types';
            import './styles.css';
        """, 'mod.ts').imports

    def test_kinds(self, imports) -> None:
        assert [(i.source, i.kind) for i in imports] == [
            ('react', 'default'),
            ('path', 'namespace'),
            ('./mod', 'named'),
            ('./types', 'named'),
            ('./styles.css', 'side-effect'),
        ]

    def test_named_specifiers(self, imports) -> None:
        specifiers = imports[2].specifiers

        assert [(s.name, s.alias, s.is_type_only) for s in specifiers] == [
            ('a', None, False),
            ('b', 'c', False),
            ('T', None, True),
        ]

    def test_type_only_import(self, imports) -> None:
        assert imports[3].specifiers[0].is_type_only is True

    def test_namespace_binding(self, imports) -> None:
        assert imports[1].specifiers[0].name == 'path'

    def test_default_with_named(self, analyze) -> None:
        imports = analyze("import React, { useState } from 'react';", 'x.ts').imports

        assert imports[0].kind == 'default'
        assert [s.name for s in imports[0].specifiers] == ['React', 'useState']


class TestExports:

    @pytest.fixture
    def exports(self, analyze):
        return analyze("""
            export const x = 1, y = 2;
            export function helper() {}
            export interface Shape { id: number }
            export type Id = string | number;
            export { x as renamed, helper };
            export default helper;
            export * from './all';
        """, 'exports.ts').exports

    def test_names_and_kinds(self, exports) -> None:
        assert [(e.name, e.kind, e.export_kind) for e in exports] == [
            ('x', 'named', 'value'),
            ('y', 'named', 'value'),
            ('helper', 'named', 'value'),
            ('Shape', 'named', 'interface'),
            ('Id', 'named', 'type'),
            ('x', 'named', 'value'),
            ('helper', 'named', 'value'),
            ('helper', 'default', 'value'),
            ('*', 'namespace', 'value'),
        ]

    def test_default_declaration(self, analyze) -> None:
        exports = analyze("export default function App() { return <div />; }").exports

        assert [(e.name, e.kind) for e in exports] == [('App', 'default')]

    def test_anonymous_default(self, analyze) -> None:
        exports = analyze("export default class extends Base {}", 'anon.ts').exports

        assert [(e.name, e.kind) for e in exports] == [('default', 'default')]

    def test_export_assignment(self, analyze) -> None:
        exports = analyze("const api = {};\nexport = api;", 'legacy.ts').exports

        assert [(e.name, e.kind) for e in exports] == [('api', 'namespace')]


class TestTypeDeclarations:

    def test_interface_properties(self, analyze) -> None:
        result = analyze("""
            interface Base { id: number }
            export interface User extends Base, Named<string> {
              readonly email: string;
              nickname?: string;
            }
        """, 'user.ts')

        user = result.interfaces[1]
        assert user.name == 'User'
        assert user.extends == ('Base', 'Named<string>')
        assert [(p.name, p.type, p.optional, p.readonly) for p in user.properties] == [
            ('email', 'string', False, True),
            ('nickname', 'string', True, False),
        ]
        assert result.interfaces[0].extends == ()

    def test_type_alias(self, analyze) -> None:
        result = analyze("type Status = 'idle' | 'busy';", 'status.ts')

        assert [(t.name, t.type) for t in result.types] == [('Status', "'idle' | 'busy'")]


class TestDependencies:

    def test_one_edge_per_import(self, analyze) -> None:
        result = analyze("""
            import React from 'react';
            import './global.css';
        """, '/repo/src/App.tsx')

        assert [(d.source, d.target, d.kind) for d in result.dependencies] == [
            ('App.tsx', 'react', 'import'),
            ('App.tsx', './global.css', 'import'),
        ]
