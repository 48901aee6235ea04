"""
AST Tree wrapper for Tree-sitter
"""

from tree_sitter import Node as TSNode
from tree_sitter import Tree as TSTree

from codegraph_proptypes.common.observability import get_logger
from codegraph_proptypes.errors import UnsupportedLanguageError
from codegraph_proptypes.parsing.node_kinds import NodeKind
from codegraph_proptypes.parsing.parser_registry import get_registry
from codegraph_proptypes.parsing.source_file import SourceFile

logger = get_logger(__name__)


class AstTree:
    """
    Wrapper for Tree-sitter AST.

    Keeps the encoded source next to the tree so node text is sliced by
    byte offsets, which stay correct for non-ASCII content.
    """

    def __init__(self, source: SourceFile, tree: TSTree):
        """
        Initialize AST tree.

        Args:
            source: Source file
            tree: Tree-sitter tree
        """
        self.source = source
        self.tree = tree
        self._root = tree.root_node
        self._data = source.data

    @classmethod
    def parse(cls, source: SourceFile) -> "AstTree":
        """
        Parse source file into AST.

        Parse errors do not fail: the tree is analysed best-effort and the
        number of error nodes is logged.

        Args:
            source: Source file to parse

        Returns:
            AstTree instance

        Raises:
            UnsupportedLanguageError: If no grammar is registered for the language
        """
        parser = get_registry().get_parser(source.language)
        if parser is None:
            raise UnsupportedLanguageError(f"Language not supported: {source.language}")

        tree = cls(source, parser.parse(source.data))

        error_count = len(tree.get_errors())
        if error_count:
            logger.warning(
                "parse_errors",
                file_path=source.file_path,
                error_count=error_count,
                hint="results may be incomplete",
            )
        return tree

    @classmethod
    def from_code(cls, code: str, language: str = "javascript", file_path: str = "<memory>") -> "AstTree":
        """Parse an in-memory snippet."""
        return cls.parse(SourceFile.from_content(file_path, code, language))

    @property
    def root(self) -> TSNode:
        """Get root node"""
        return self._root

    @property
    def data(self) -> bytes:
        """Encoded source the byte offsets refer to"""
        return self._data

    def get_text(self, node: TSNode | None) -> str:
        """
        Get text content of a node.

        Args:
            node: Tree-sitter node

        Returns:
            Node text ("" for None)
        """
        if node is None:
            return ""
        return self._data[node.start_byte : node.end_byte].decode(self.source.encoding)

    def top_level_statements(self) -> list[TSNode]:
        """Program-level statements, comments and hashbang excluded"""
        return [
            child
            for child in self._root.named_children
            if child.type not in (NodeKind.COMMENT.value, "hash_bang_line")
        ]

    def get_errors(self, node: TSNode | None = None) -> list[TSNode]:
        """
        Get all error nodes.

        Args:
            node: Starting node (defaults to root)

        Returns:
            List of error nodes
        """
        node = node or self._root
        if not node.has_error:
            return []
        errors = []
        stack = [node]
        while stack:
            current = stack.pop()
            if current.type == NodeKind.ERROR.value or current.is_missing:
                errors.append(current)
            stack.extend(child for child in current.children if child.has_error or child.is_missing)
        return errors

    def __repr__(self) -> str:
        return f"AstTree(file={self.source.file_path}, language={self.source.language})"
