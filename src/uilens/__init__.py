"""uilens - static analysis of UI component sources."""

from .analyzer import Analyzer, analyze_source
from .parser import AnalysisResult, ParseError

__version__ = '0.1.0'

__all__ = ['Analyzer', 'analyze_source', 'AnalysisResult', 'ParseError']
