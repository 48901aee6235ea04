"""
Member-access chains

Builds a record from an access such as ``props.user.address.city`` by
climbing from the innermost member expression to the top of the chain and
looking at how the chain is used:

    props.onClick()           -> onClick: func
    props.user.name           -> user: shape { name }
    const u = props.user      -> user bound to ``u``
    const { a } = props.user  -> user: shape { a }
"""

from typing import TYPE_CHECKING

from codegraph_proptypes.inference.defaults import records_from_object_pattern
from codegraph_proptypes.models import PropertyRecord, PropKind
from codegraph_proptypes.parsing.ast_tree import AstTree
from codegraph_proptypes.parsing.node_kinds import NodeKind, is_kind, same_node, scope_range

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

_MEMBER_NAME_TYPES = ("property_identifier", "private_property_identifier")


def normalized_text(tree: AstTree, node: "TSNode | None") -> str:
    """Node text with whitespace removed (``this . props`` == ``this.props``)."""
    return "".join(tree.get_text(node).split())


def member_name(tree: AstTree, member: "TSNode") -> str | None:
    prop = member.child_by_field_name("property")
    if prop is None or prop.type not in _MEMBER_NAME_TYPES:
        return None
    return tree.get_text(prop)


def _field_is(parent: "TSNode", field: str, node: "TSNode") -> bool:
    return same_node(parent.child_by_field_name(field), node)


def record_from_access(tree: AstTree, member: "TSNode") -> PropertyRecord | None:
    """
    Record for the property accessed by ``member`` (``<root>.<name>``).

    Returns:
        Record for ``name`` with nested members as shape children, or None for
        computed or private accesses
    """
    name = member_name(tree, member)
    if name is None:
        return None

    record = PropertyRecord(name=name)
    current_node, current_record = member, record

    parent = current_node.parent
    while is_kind(parent, NodeKind.MEMBER_EXPRESSION) and _field_is(parent, "object", current_node):
        child_name = member_name(tree, parent)
        if child_name is None:
            break
        child = PropertyRecord(name=child_name)
        current_record.kind = PropKind.SHAPE
        current_record.children = [child]
        current_node, current_record = parent, child
        parent = current_node.parent

    if is_kind(parent, NodeKind.CALL_EXPRESSION) and _field_is(parent, "function", current_node):
        current_record.kind = PropKind.FUNC
    elif is_kind(parent, NodeKind.VARIABLE_DECLARATOR) and _field_is(parent, "value", current_node):
        target = parent.child_by_field_name("name")
        if is_kind(target, NodeKind.IDENTIFIER):
            current_record.binding_id = tree.get_text(target)
            current_record.binding_scope = scope_range(parent)
        elif is_kind(target, NodeKind.OBJECT_PATTERN):
            current_record.kind = PropKind.SHAPE
            current_record.children = records_from_object_pattern(tree, target)

    return record
