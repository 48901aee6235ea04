"""
Defaults inference

Default values come from two places:
- destructuring patterns: ``function Foo({ size = 'md' })``
- a defaults declaration: ``Foo.defaultProps = { size: 'md' }``

The kind of a default is inferred from the shape of its expression only.
"""

from typing import TYPE_CHECKING

from codegraph_proptypes.models import PropertyRecord, PropKind
from codegraph_proptypes.parsing.ast_tree import AstTree
from codegraph_proptypes.parsing.node_kinds import FUNCTION_VALUE_KINDS, JSX_KINDS, NodeKind, is_kind, scope_range

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

_LITERAL_KINDS = {
    NodeKind.NUMBER: PropKind.NUMBER,
    NodeKind.STRING: PropKind.STRING,
    NodeKind.TEMPLATE_STRING: PropKind.STRING,
    NodeKind.TRUE: PropKind.BOOL,
    NodeKind.FALSE: PropKind.BOOL,
    NodeKind.ARRAY: PropKind.ARRAY,
    NodeKind.OBJECT: PropKind.OBJECT,
}


def infer_kind_from_value(node: "TSNode | None") -> PropKind:
    """
    Kind of a value expression, judged structurally.

    ``-1`` counts as a number and parentheses are looked through; anything
    not recognised (identifiers, calls, null) is ``any``.
    """
    while is_kind(node, NodeKind.PARENTHESIZED_EXPRESSION):
        node = node.named_children[0] if node.named_children else None

    kind = NodeKind.of(node)
    if kind is None:
        return PropKind.ANY
    if kind in _LITERAL_KINDS:
        return _LITERAL_KINDS[kind]
    if kind in FUNCTION_VALUE_KINDS:
        return PropKind.FUNC
    if kind in JSX_KINDS:
        return PropKind.ELEMENT
    if kind == NodeKind.UNARY_EXPRESSION:
        argument = node.child_by_field_name("argument")
        operator = node.child_by_field_name("operator")
        if operator is not None and operator.type in ("-", "+") and is_kind(argument, NodeKind.NUMBER):
            return PropKind.NUMBER
        if operator is not None and operator.type == "!":
            return PropKind.BOOL
    return PropKind.ANY


def record_with_default(
    tree: AstTree,
    name: str,
    value: "TSNode",
    binding_id: str | None = None,
    binding_scope: tuple[int, int] | None = None,
) -> PropertyRecord:
    """
    Record for a property with a default expression.

    The default text is kept only when the kind could be inferred; an opaque
    default may reference bindings that mean nothing outside the component.
    """
    kind = infer_kind_from_value(value)
    return PropertyRecord(
        name=name,
        binding_id=binding_id,
        binding_scope=binding_scope,
        kind=kind,
        default_value=tree.get_text(value) if kind != PropKind.ANY else None,
    )


def property_key(tree: AstTree, key: "TSNode | None") -> str | None:
    """Plain name of an object key (identifier, string or number), None if computed."""
    if key is None:
        return None
    kind = NodeKind.of(key)
    if kind == NodeKind.STRING:
        return tree.get_text(key)[1:-1] or None
    if kind == NodeKind.NUMBER or key.type in (
        "property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "identifier",
        "private_property_identifier",
    ):
        return tree.get_text(key)
    return None


def records_from_object_pattern(tree: AstTree, pattern: "TSNode") -> list[PropertyRecord]:
    """
    One record per key of an object destructuring pattern.

    - ``{ a }``          -> a, bound to a
    - ``{ a = 1 }``      -> a, number, default "1"
    - ``{ a: b }``       -> a, bound to b
    - ``{ a: b = 1 }``   -> a, bound to b, default "1"
    - ``{ a: { b } }``   -> a, shape with child b
    Rest elements and computed keys are skipped.
    """
    records: list[PropertyRecord] = []
    scope = scope_range(pattern)
    for entry in pattern.named_children:
        kind = NodeKind.of(entry)

        if kind == NodeKind.SHORTHAND_PROPERTY_IDENTIFIER_PATTERN:
            name = tree.get_text(entry)
            records.append(PropertyRecord(name=name, binding_id=name, binding_scope=scope))

        elif kind == NodeKind.OBJECT_ASSIGNMENT_PATTERN:
            left = entry.child_by_field_name("left")
            right = entry.child_by_field_name("right")
            if is_kind(left, NodeKind.SHORTHAND_PROPERTY_IDENTIFIER_PATTERN) and right is not None:
                name = tree.get_text(left)
                records.append(record_with_default(tree, name, right, binding_id=name, binding_scope=scope))

        elif kind == NodeKind.PAIR_PATTERN:
            name = property_key(tree, entry.child_by_field_name("key"))
            value = entry.child_by_field_name("value")
            if name is None or value is None:
                continue
            record = _record_from_pattern_value(tree, name, value, scope)
            if record is not None:
                records.append(record)

    return records


def _record_from_pattern_value(
    tree: AstTree, name: str, value: "TSNode", scope: tuple[int, int] | None
) -> PropertyRecord | None:
    kind = NodeKind.of(value)
    if kind == NodeKind.IDENTIFIER:
        return PropertyRecord(name=name, binding_id=tree.get_text(value), binding_scope=scope)
    if kind == NodeKind.ASSIGNMENT_PATTERN:
        left = value.child_by_field_name("left")
        right = value.child_by_field_name("right")
        if right is None:
            return None
        if is_kind(left, NodeKind.IDENTIFIER):
            return record_with_default(tree, name, right, binding_id=tree.get_text(left), binding_scope=scope)
        if is_kind(left, NodeKind.OBJECT_PATTERN):
            record = PropertyRecord(name=name, kind=PropKind.SHAPE, children=records_from_object_pattern(tree, left))
            record.default_value = tree.get_text(right) if infer_kind_from_value(right) == PropKind.OBJECT else None
            return record
        return None
    if kind == NodeKind.OBJECT_PATTERN:
        return PropertyRecord(name=name, kind=PropKind.SHAPE, children=records_from_object_pattern(tree, value))
    return None


def records_from_defaults_object(tree: AstTree, object_node: "TSNode | None") -> list[PropertyRecord]:
    """
    One record per ``key: value`` pair of a defaults declaration object literal.
    """
    if not is_kind(object_node, NodeKind.OBJECT):
        return []
    records = []
    for entry in object_node.named_children:
        if NodeKind.of(entry) != NodeKind.PAIR:
            continue
        name = property_key(tree, entry.child_by_field_name("key"))
        value = entry.child_by_field_name("value")
        if name and value is not None:
            records.append(record_with_default(tree, name, value))
    return records
