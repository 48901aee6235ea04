"""
Unit tests for record merging and the completion pass.
"""

import copy
import itertools

import pytest

from codegraph_proptypes.inference.locator import find_component_node
from codegraph_proptypes.inference.merge import (
    MergeMode,
    complete_records,
    finalize_records,
    merge_property_records,
    merge_records,
)
from codegraph_proptypes.inference.usage import UsageInferenceEngine
from codegraph_proptypes.models import PropertyRecord, PropKind


def by_name(records):
    return {record.name: record for record in records}


@pytest.mark.unit
class TestMergePriority:
    """Test explicit > usage > defaults."""

    def test_explicit_kind_and_required_win(self):
        explicit = [PropertyRecord("id", kind=PropKind.STRING, required=True)]
        usage = [PropertyRecord("id", binding_id="id", kind=PropKind.FUNC)]

        merged = by_name(merge_property_records(explicit, usage, []))

        assert merged["id"].kind == PropKind.STRING
        assert merged["id"].required is True
        assert merged["id"].binding_id == "id"

    def test_explicit_any_is_kept(self):
        explicit = [PropertyRecord("onClick")]
        usage = [PropertyRecord("onClick", kind=PropKind.FUNC)]

        merged = by_name(merge_property_records(explicit, usage, []))

        assert merged["onClick"].kind == PropKind.ANY

    def test_defaults_fill_any_usage(self):
        usage = [PropertyRecord("age", binding_id="age")]
        defaults = [PropertyRecord("age", kind=PropKind.NUMBER, default_value="18")]

        merged = by_name(merge_property_records([], usage, defaults))

        assert merged["age"].kind == PropKind.NUMBER
        assert merged["age"].default_value == "18"

    def test_usage_shape_beats_defaults_object(self):
        usage = [PropertyRecord("user", kind=PropKind.SHAPE, children=[PropertyRecord("name")])]
        defaults = [PropertyRecord("user", kind=PropKind.OBJECT, default_value="{}")]

        merged = by_name(merge_property_records([], usage, defaults))

        assert merged["user"].kind == PropKind.SHAPE
        assert merged["user"].default_value == "{}"
        assert [child.name for child in merged["user"].children] == ["name"]

    def test_sources_are_unioned(self):
        merged = merge_property_records(
            [PropertyRecord("a", kind=PropKind.STRING)],
            [PropertyRecord("b")],
            [PropertyRecord("c", kind=PropKind.BOOL, default_value="true")],
        )

        assert {record.name for record in merged} == {"a", "b", "c"}

    def test_inputs_are_not_modified(self):
        usage = [PropertyRecord("a")]
        defaults = [PropertyRecord("a", kind=PropKind.NUMBER, default_value="1")]

        merge_property_records([], usage, defaults)

        assert usage[0].kind == PropKind.ANY
        assert usage[0].default_value is None


@pytest.mark.unit
class TestMergeRecords:
    """Test same-name record reconciliation."""

    def test_shape_children_union(self):
        first = PropertyRecord("user", kind=PropKind.SHAPE, children=[PropertyRecord("name")])
        second = PropertyRecord("user", kind=PropKind.SHAPE, children=[PropertyRecord("age")])

        merged = merge_records(first, second)

        assert [child.name for child in merged.children] == ["age", "name"]

    def test_func_beats_shape(self):
        shape = PropertyRecord("cb", kind=PropKind.SHAPE, children=[PropertyRecord("length")])
        func = PropertyRecord("cb", kind=PropKind.FUNC)

        merged = merge_records(shape, func, MergeMode.PEER)

        assert merged.kind == PropKind.FUNC
        assert merged.children == []

    def test_one_of_type_children_deduplicated(self):
        first = PropertyRecord(
            "v", kind=PropKind.ONE_OF_TYPE, children=[PropertyRecord("", kind=PropKind.STRING)]
        )
        second = PropertyRecord(
            "v",
            kind=PropKind.ONE_OF_TYPE,
            children=[PropertyRecord("", kind=PropKind.STRING), PropertyRecord("", kind=PropKind.NUMBER)],
        )

        merged = merge_records(first, second)

        assert [child.kind for child in merged.children] == [PropKind.STRING, PropKind.NUMBER]

    def test_required_is_sticky_for_peers(self):
        merged = merge_records(PropertyRecord("a"), PropertyRecord("a", required=True))

        assert merged.required is True


@pytest.mark.unit
class TestFinalize:
    """Test deterministic output ordering."""

    def test_sorted_regardless_of_input_order(self):
        records = [
            PropertyRecord("zeta"),
            PropertyRecord("alpha", kind=PropKind.NUMBER, default_value="1"),
            PropertyRecord("mid", kind=PropKind.SHAPE, children=[PropertyRecord("y"), PropertyRecord("x")]),
        ]

        results = [
            finalize_records(merge_property_records([], list(permutation), []))
            for permutation in itertools.permutations(copy.deepcopy(records))
        ]

        assert all(result == results[0] for result in results)
        assert [record.name for record in results[0]] == ["alpha", "mid", "zeta"]
        assert [child.name for child in results[0][1].children] == ["x", "y"]

    def test_non_container_children_are_dropped(self):
        record = PropertyRecord("a", kind=PropKind.STRING, children=[PropertyRecord("b")])

        assert finalize_records([record])[0].children == []


@pytest.mark.unit
class TestCompletion:
    """Test binding-based completion."""

    def complete(self, tree, name="Foo", exclude=frozenset()):
        component = find_component_node(tree, name)
        records = UsageInferenceEngine(tree).infer(component)
        return by_name(finalize_records(complete_records(tree, component, records, exclude)))

    def test_called_binding_becomes_func(self, parse):
        tree = parse(
            """
            function Foo({ onClick, user, name }) {
              onClick();
              return <div>{user.first}{user.last}{name}</div>;
            }
            """
        )

        records = self.complete(tree)

        assert records["onClick"].kind == PropKind.FUNC
        assert records["user"].kind == PropKind.SHAPE
        assert [child.name for child in records["user"].children] == ["first", "last"]
        assert records["name"].kind == PropKind.ANY

    def test_call_wins_over_member_access(self, parse):
        tree = parse("function Foo({ cb }) { cb(); return cb.length; }")

        records = self.complete(tree)

        assert records["cb"].kind == PropKind.FUNC
        assert records["cb"].children == []

    def test_nested_bindings(self, parse):
        tree = parse(
            """
            function Foo({ user }) {
              const { address } = user;
              return address.city;
            }
            """
        )

        user = self.complete(tree)["user"]

        assert user.kind == PropKind.SHAPE
        address = user.children[0]
        assert address.name == "address"
        assert address.kind == PropKind.SHAPE
        assert [child.name for child in address.children] == ["city"]

    def test_self_referencing_binding_terminates(self, parse):
        tree = parse(
            """
            function Foo({ node }) {
              {
                const { node } = node;
              }
              return null;
            }
            """
        )

        node = self.complete(tree)["node"]

        assert node.kind == PropKind.SHAPE
        assert [child.name for child in node.children] == ["node"]

    def test_idempotent(self, parse):
        tree = parse(
            """
            function Foo({ user, onClick }) {
              const { address } = user;
              onClick(address.city);
              return null;
            }
            """
        )
        component = find_component_node(tree, "Foo")
        records = complete_records(tree, component, UsageInferenceEngine(tree).infer(component))
        first = copy.deepcopy(records)

        again = complete_records(tree, component, records)

        assert again == first

    def test_excluded_names_keep_their_kind(self, parse):
        tree = parse("function Foo({ onClick }) { onClick(); return null; }")

        records = self.complete(tree, exclude=frozenset({"onClick"}))

        assert records["onClick"].kind == PropKind.ANY

    def test_records_without_bindings_are_left_alone(self, parse):
        tree = parse("function Foo(props) { label(); return props.label; }")

        assert self.complete(tree)["label"].kind == PropKind.ANY

    def test_same_local_name_in_another_method(self, parse):
        """Test evidence is gathered in the block that introduces the binding."""
        tree = parse(
            """
            class List extends React.Component {
              select() {
                const item = this.pick();
                item();
              }

              render() {
                const { item } = this.props;
                return <div>{item.title}</div>;
              }
            }
            """
        )

        item = self.complete(tree, "List")["item"]

        assert item.kind == PropKind.SHAPE
        assert [child.name for child in item.children] == ["title"]

    def test_sibling_block_does_not_leak(self, parse):
        tree = parse(
            """
            function Foo(props) {
              if (props.ready) {
                const { onDone } = props;
                return onDone.label;
              }
              const onDone = () => null;
              onDone();
              return null;
            }
            """
        )

        on_done = self.complete(tree)["onDone"]

        assert on_done.kind == PropKind.SHAPE
        assert [child.name for child in on_done.children] == ["label"]

    def test_binding_scope_survives_merge(self):
        scoped = PropertyRecord("a", binding_id="a", binding_scope=(10, 20))

        merged = merge_records(PropertyRecord("a", kind=PropKind.STRING), scoped)

        assert merged.binding_id == "a"
        assert merged.binding_scope == (10, 20)
