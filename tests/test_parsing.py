"""
Unit tests for source loading and the AST wrapper.
"""

import pytest

from codegraph_proptypes.errors import FileReadError, UnsupportedLanguageError
from codegraph_proptypes.parsing import AstTree, SourceFile
from codegraph_proptypes.parsing.node_kinds import (
    NodeKind,
    enclosing_scope,
    first_parameter,
    iter_nodes,
    scope_range,
    unwrap_parameter,
)
from codegraph_proptypes.parsing.parser_registry import get_registry


@pytest.mark.unit
class TestSourceFile:
    """Test SourceFile loading."""

    @pytest.mark.parametrize(
        "name,language",
        [
            ("Button.js", "javascript"),
            ("Button.jsx", "javascript"),
            ("Button.ts", "typescript"),
            ("Button.tsx", "tsx"),
        ],
    )
    def test_language_detection(self, tmp_path, name, language):
        """Test the grammar is picked from the extension."""
        path = tmp_path / name
        path.write_text("const a = 1;\n", encoding="utf-8")

        source = SourceFile.from_file(path)

        assert source.language == language
        assert source.content == "const a = 1;\n"

    def test_unknown_extension(self, tmp_path):
        """Test unsupported extensions are rejected."""
        path = tmp_path / "styles.css"
        path.write_text("a { color: red; }", encoding="utf-8")

        with pytest.raises(UnsupportedLanguageError):
            SourceFile.from_file(path)

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileReadError."""
        with pytest.raises(FileReadError) as exc_info:
            SourceFile.from_file(tmp_path / "Missing.jsx")

        assert "can't resolve filePath" in exc_info.value.message

    def test_empty_file(self, tmp_path):
        """Test an empty file counts as unreadable."""
        path = tmp_path / "Empty.js"
        path.write_text("", encoding="utf-8")

        with pytest.raises(FileReadError):
            SourceFile.from_file(path)


@pytest.mark.unit
class TestAstTree:
    """Test AstTree helpers."""

    def test_registry_supports_grammars(self):
        """Test all JavaScript-family grammars are registered."""
        registry = get_registry()

        for language in ("javascript", "typescript", "tsx"):
            assert registry.supports_language(language)

    def test_get_text_uses_byte_offsets(self, parse):
        """Test node text is sliced from bytes, not characters."""
        tree = parse("const greeting = '안녕하세요 👋'; const after = 1;")

        declarators = list(iter_nodes(tree.root, NodeKind.VARIABLE_DECLARATOR))

        assert tree.get_text(declarators[0].child_by_field_name("value")) == "'안녕하세요 👋'"
        assert tree.get_text(declarators[1]) == "after = 1"

    def test_top_level_statements_skip_comments(self, parse):
        """Test comments are not statements."""
        tree = parse(
            """
            // header
            import React from 'react';
            const a = 1;
            """
        )

        statements = tree.top_level_statements()

        assert [statement.type for statement in statements] == ["import_statement", "lexical_declaration"]

    def test_parse_errors_do_not_fail(self, parse):
        """Test broken code still yields a tree."""
        tree = parse("function Foo( { return <div>; }")

        assert tree.get_errors()
        assert tree.root.type == "program"

    def test_first_parameter_forms(self, parse):
        """Test first parameter lookup for every function form."""
        tree = parse(
            """
            function A(props) {}
            const B = props => null;
            const C = ({ a } = {}) => null;
            """
        )

        functions = list(iter_nodes(tree.root, NodeKind.FUNCTION_DECLARATION, NodeKind.ARROW_FUNCTION))
        params = [first_parameter(node) for node in functions]

        assert [tree.get_text(param) for param in params[:2]] == ["props", "props"]
        assert params[2].type == "object_pattern"

        raw = functions[2].child_by_field_name("parameters").named_children[0]
        pattern, default = unwrap_parameter(raw)
        assert pattern.type == "object_pattern"
        assert tree.get_text(default) == "{}"

    def test_typescript_parameter_is_unwrapped(self, parse):
        """Test TypeScript required_parameter wrappers are looked through."""
        tree = parse("function Foo({ a, b = 2 }: Props) { return null; }", "tsx")

        function = next(iter_nodes(tree.root, NodeKind.FUNCTION_DECLARATION))

        assert first_parameter(function).type == "object_pattern"

    def test_enclosing_scope(self, parse):
        """Test parameters belong to their function and locals to their block."""
        tree = parse(
            """
            function Foo({ a }) {
              if (a) {
                const { b } = a;
              }
            }
            const top = 1;
            """
        )
        param, local = list(iter_nodes(tree.root, NodeKind.OBJECT_PATTERN))
        declarators = list(iter_nodes(tree.root, NodeKind.VARIABLE_DECLARATOR))

        assert enclosing_scope(param).type == "function_declaration"
        block = enclosing_scope(local)
        assert block.type == "statement_block"
        assert block.parent.type == "if_statement"
        assert scope_range(local) == (block.start_byte, block.end_byte)
        assert scope_range(declarators[-1]) is None
