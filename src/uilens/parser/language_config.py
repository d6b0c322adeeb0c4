"""Language configuration for the uilens parser."""

from tree_sitter import Language
import tree_sitter_typescript
from typing import Dict, Any

from .errors import UnsupportedLanguageError

TYPESCRIPT_LANGUAGE = Language(tree_sitter_typescript.language_typescript())
TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())

TYPESCRIPT_CONFIG = {
    'name': 'typescript',
    'extensions': ['.ts', '.mts', '.cts'],
    'language': TYPESCRIPT_LANGUAGE,
}

# The TSX grammar is a superset that also accepts plain JavaScript and JSX
TSX_CONFIG = {
    'name': 'tsx',
    'extensions': ['.tsx', '.js', '.jsx', '.mjs', '.cjs'],
    'language': TSX_LANGUAGE,
}

# Registry of supported languages
LANGUAGE_REGISTRY: Dict[str, Dict[str, Any]] = {
    ext: config
    for config in (TYPESCRIPT_CONFIG, TSX_CONFIG)
    for ext in config['extensions']
}

DEFAULT_PATTERNS = ['**/*.ts', '**/*.tsx', '**/*.js', '**/*.jsx']

DEFAULT_EXCLUDE_DIRS = [
    'node_modules', '.git', 'dist', 'build', 'coverage',
    '.next', '.turbo', '.cache', 'out',
]

# UI framework conventions
FRAMEWORK_MODULE = 'react'
FRAMEWORK_NAMESPACE = 'React'
STATE_HOOK = 'useState'
EFFECT_HOOK = 'useEffect'
DEPENDENCY_HOOKS = ('useEffect', 'useCallback', 'useMemo')
CLASS_COMPONENT_BASES = ('Component', 'PureComponent')
ELEMENT_RETURN_TYPES = ('Component', 'FC', 'JSX.Element', 'ReactElement', 'ReactNode')

# Fixed weight per pattern heuristic
PATTERN_CONFIDENCE: Dict[str, float] = {
    'custom-hook': 0.9,
    'higher-order-component': 0.8,
    'react-context': 1.0,
    'singleton': 0.9,
    'factory': 0.7,
}


def get_language_config(file_extension: str) -> Dict[str, Any]:
    """Get language configuration for a file extension"""
    config = LANGUAGE_REGISTRY.get(file_extension.lower())
    if config is None:
        raise UnsupportedLanguageError(f"Unsupported file extension: {file_extension}")
    return config
