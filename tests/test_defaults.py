"""
Unit tests for default value inference.
"""

import pytest

from codegraph_proptypes.inference.defaults import (
    infer_kind_from_value,
    records_from_defaults_object,
    records_from_object_pattern,
)
from codegraph_proptypes.inference.locator import declaration_object, find_declaration_node
from codegraph_proptypes.models import PropKind
from codegraph_proptypes.parsing.node_kinds import NodeKind, iter_nodes


@pytest.mark.unit
class TestInferKindFromValue:
    """Test structural kind inference of default expressions."""

    @pytest.mark.parametrize(
        "expression,kind",
        [
            ("18", PropKind.NUMBER),
            ("-1", PropKind.NUMBER),
            ("(3.5)", PropKind.NUMBER),
            ("'md'", PropKind.STRING),
            ("`tpl`", PropKind.STRING),
            ("true", PropKind.BOOL),
            ("!flag", PropKind.BOOL),
            ("[]", PropKind.ARRAY),
            ("{ a: 1 }", PropKind.OBJECT),
            ("() => {}", PropKind.FUNC),
            ("function () {}", PropKind.FUNC),
            ("<div />", PropKind.ELEMENT),
            ("null", PropKind.ANY),
            ("someValue", PropKind.ANY),
            ("makeDefault()", PropKind.ANY),
        ],
    )
    def test_kinds(self, parse, expression, kind):
        tree = parse(f"const x = {expression};")
        value = next(iter_nodes(tree.root, NodeKind.VARIABLE_DECLARATOR)).child_by_field_name("value")

        assert infer_kind_from_value(value) == kind

    def test_missing_value(self):
        assert infer_kind_from_value(None) == PropKind.ANY


@pytest.mark.unit
class TestObjectPattern:
    """Test destructuring patterns become records."""

    @pytest.fixture
    def records(self, parse):
        tree = parse("function Foo({ a, b = 1, c: d, e: f = 'x', g: { h }, i = someVar, ...rest }) {}")
        pattern = next(iter_nodes(tree.root, NodeKind.OBJECT_PATTERN))
        return {record.name: record for record in records_from_object_pattern(tree, pattern)}

    def test_shorthand(self, records):
        assert records["a"].binding_id == "a"
        assert records["a"].kind == PropKind.ANY
        assert records["a"].default_value is None

    def test_shorthand_default(self, records):
        assert records["b"].binding_id == "b"
        assert records["b"].kind == PropKind.NUMBER
        assert records["b"].default_value == "1"

    def test_renamed(self, records):
        assert records["c"].binding_id == "d"

    def test_renamed_default(self, records):
        assert records["e"].binding_id == "f"
        assert records["e"].kind == PropKind.STRING
        assert records["e"].default_value == "'x'"

    def test_nested_pattern(self, records):
        assert records["g"].kind == PropKind.SHAPE
        assert [child.name for child in records["g"].children] == ["h"]
        assert records["g"].children[0].binding_id == "h"

    def test_opaque_default_is_dropped(self, records):
        assert records["i"].kind == PropKind.ANY
        assert records["i"].default_value is None

    def test_rest_is_skipped(self, records):
        assert "rest" not in records
        assert len(records) == 6


@pytest.mark.unit
class TestDefaultsObject:
    """Test defaultProps declarations."""

    def test_defaults_declaration(self, parse):
        tree = parse(
            """
            function Foo(props) { return null; }
            Foo.defaultProps = { size: 'md', count: 0, onClick: noop };
            """
        )
        node = declaration_object(find_declaration_node(tree, "Foo", "defaultProps"))

        records = {record.name: record for record in records_from_defaults_object(tree, node)}

        assert records["size"].kind == PropKind.STRING
        assert records["size"].default_value == "'md'"
        assert records["count"].kind == PropKind.NUMBER
        assert records["count"].default_value == "0"
        assert records["onClick"].kind == PropKind.ANY
        assert records["onClick"].default_value is None

    def test_no_declaration(self, parse):
        tree = parse("const a = 1;")

        assert records_from_defaults_object(tree, None) == []
