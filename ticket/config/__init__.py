"""
Configuration Package

Exports:
- ExtractionConfig: Immutable tunables and vocabularies
- ConfigManager: Loads overrides from JSON/YAML files
"""
from .config_manager import ConfigManager, ExtractionConfig

__all__ = [
    'ConfigManager',
    'ExtractionConfig'
]
