"""
codegraph-proptypes

Infers React prop-types declarations from component source and splices
them back into the file.

Usage:
    from codegraph_proptypes import AstTree, analyze_component

    tree = AstTree.from_code(source)
    analysis = analyze_component(tree, "Button")
"""

__version__ = "0.1.0"

from codegraph_proptypes.errors import (
    ComponentNotFoundError,
    ConfigParseError,
    FileReadError,
    FileWriteError,
    NoPropertiesFoundError,
    PropTypesError,
)
from codegraph_proptypes.inference import ComponentAnalysis, analyze_component, infer_records
from codegraph_proptypes.models import PropertyRecord, PropKind
from codegraph_proptypes.parsing import AstTree, SourceFile

__all__ = [
    "AstTree",
    "ComponentAnalysis",
    "ComponentNotFoundError",
    "ConfigParseError",
    "FileReadError",
    "FileWriteError",
    "NoPropertiesFoundError",
    "PropKind",
    "PropTypesError",
    "PropertyRecord",
    "SourceFile",
    "analyze_component",
    "infer_records",
]
