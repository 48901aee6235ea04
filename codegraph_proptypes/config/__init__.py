"""
Configuration

Usage:
    from codegraph_proptypes.config import load_settings

    settings = load_settings(code_style="class")
"""

from codegraph_proptypes.config.settings import (
    AutoImport,
    CodeStyle,
    GeneratorSettings,
    QuoteStyle,
    load_settings,
    parse_config_json,
    read_config_file,
    resolve_config_file,
    write_config_file,
)

__all__ = [
    "AutoImport",
    "CodeStyle",
    "GeneratorSettings",
    "QuoteStyle",
    "load_settings",
    "parse_config_json",
    "read_config_file",
    "resolve_config_file",
    "write_config_file",
]
