"""
Configuration management package for fastfind.

This package provides loading, validation and saving of the YAML
configuration file consumed by the search core.
"""

from .parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    load_config,
    load_with_safeguard,
    validate_config_file,
    create_config_template
)

__all__ = [
    'ConfigParser',
    'ConfigParseResult',
    'ConfigurationError',
    'load_config',
    'load_with_safeguard',
    'validate_config_file',
    'create_config_template'
]
