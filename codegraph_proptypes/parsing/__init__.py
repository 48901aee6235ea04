"""
Parsing Layer

Tree-sitter based parsing for JavaScript, TypeScript and TSX.

Components:
- parser_registry: Grammar management
- source_file: Source file representation
- ast_tree: AST wrapper with byte-accurate text access
- node_kinds: Node kind tags and explicit traversal
"""

from codegraph_proptypes.parsing.ast_tree import AstTree
from codegraph_proptypes.parsing.node_kinds import NodeKind, traverse
from codegraph_proptypes.parsing.parser_registry import ParserRegistry, get_registry
from codegraph_proptypes.parsing.source_file import SourceFile

__all__ = [
    "AstTree",
    "NodeKind",
    "ParserRegistry",
    "SourceFile",
    "get_registry",
    "traverse",
]
