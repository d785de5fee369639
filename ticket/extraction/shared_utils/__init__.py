"""
Shared Utilities Package
"""
from .cascade import ExtractionContext, Strategy, run_cascade
from .diagnostics import DiagnosticSink, LoggingSink, MemorySink, NullSink
from .pattern_matcher import PatternMatcher, vocabulary_pattern
from .text_cleaner import TextCleaner

__all__ = [
    'ExtractionContext',
    'Strategy',
    'run_cascade',
    'DiagnosticSink',
    'LoggingSink',
    'MemorySink',
    'NullSink',
    'PatternMatcher',
    'vocabulary_pattern',
    'TextCleaner'
]
