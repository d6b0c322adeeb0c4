"""Tests for the grammar registry."""

import pytest

from uilens.parser.errors import UnsupportedLanguageError
from uilens.parser.language_config import (
    LANGUAGE_REGISTRY,
    TSX_LANGUAGE,
    TYPESCRIPT_LANGUAGE,
    get_language_config,
)


@pytest.mark.parametrize('extension, name, language', [
    ('.ts', 'typescript', TYPESCRIPT_LANGUAGE),
    ('.TS', 'typescript', TYPESCRIPT_LANGUAGE),
    ('.tsx', 'tsx', TSX_LANGUAGE),
    ('.js', 'tsx', TSX_LANGUAGE),
    ('.jsx', 'tsx', TSX_LANGUAGE),
])
def test_grammar_for_extension(extension, name, language) -> None:
    config = get_language_config(extension)

    assert config['name'] == name
    assert config['language'] is language


def test_registry_entries_hold_only_grammar_settings() -> None:
    for config in LANGUAGE_REGISTRY.values():
        assert set(config) == {'name', 'extensions', 'language'}


@pytest.mark.parametrize('extension', ['.py', '.vue', ''])
def test_unsupported_extension(extension) -> None:
    with pytest.raises(UnsupportedLanguageError):
        get_language_config(extension)
