"""
Explicit declaration interpreter

Turns an author-written ``propTypes`` object literal back into records so
regenerated declarations keep the author's types:

    {
      id: PropTypes.string.isRequired,          -> string, required
      user: PropTypes.shape({ name: ... }),      -> shape with named children
      size: PropTypes.oneOf(['sm', 'lg']),       -> oneOf, literals kept verbatim
      items: PropTypes.arrayOf(PropTypes.number) -> arrayOf with one child
    }
"""

from typing import TYPE_CHECKING

from codegraph_proptypes.common.observability import get_logger
from codegraph_proptypes.inference.defaults import property_key
from codegraph_proptypes.models import PropertyRecord, PropKind
from codegraph_proptypes.parsing.ast_tree import AstTree
from codegraph_proptypes.parsing.node_kinds import FUNCTION_VALUE_KINDS, NodeKind, is_kind

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

logger = get_logger(__name__)

# Nesting beyond this degrades to ``any``
MAX_TYPE_DEPTH = 32

REQUIRED_SUFFIX = "isRequired"


def records_from_declaration_object(tree: AstTree, object_node: "TSNode | None") -> list[PropertyRecord]:
    """
    One record per classifiable ``key: validator`` pair.

    Entries that cannot be classified (spreads, shorthand keys, arbitrary
    expressions) are left out rather than emitted half-formed.
    """
    return _records_from_object(tree, object_node, depth=0)


def _records_from_object(tree: AstTree, object_node: "TSNode | None", depth: int) -> list[PropertyRecord]:
    if not is_kind(object_node, NodeKind.OBJECT):
        return []
    records = []
    for entry in object_node.named_children:
        if NodeKind.of(entry) != NodeKind.PAIR:
            continue
        name = property_key(tree, entry.child_by_field_name("key"))
        if not name:
            continue
        record = classify_type_expression(tree, entry.child_by_field_name("value"), name, depth + 1)
        if record is not None:
            records.append(record)
    return records


def classify_type_expression(
    tree: AstTree,
    node: "TSNode | None",
    name: str = "",
    depth: int = 0,
) -> PropertyRecord | None:
    """
    Classify one validator expression.

    Args:
        tree: Parsed source
        node: Validator expression
        name: Property name ("" for positional type arguments)
        depth: Current nesting depth

    Returns:
        PropertyRecord, or None when the expression is not a validator
    """
    if node is None:
        return None
    if depth > MAX_TYPE_DEPTH:
        logger.debug("type_expression_too_deep", name=name, depth=depth)
        return PropertyRecord(name=name)

    kind = NodeKind.of(node)

    if kind == NodeKind.CALL_EXPRESSION:
        return _classify_call(tree, node, name, depth)

    if kind == NodeKind.MEMBER_EXPRESSION:
        member = tree.get_text(node.child_by_field_name("property"))
        target = node.child_by_field_name("object")
        if member == REQUIRED_SUFFIX:
            base = classify_type_expression(tree, target, name, depth + 1)
            if base is None:
                return None
            base.required = True
            return base
        return PropertyRecord(name=name, kind=PropKind.from_name(member) or PropKind.ANY)

    if kind == NodeKind.IDENTIFIER:
        # import { string } from 'prop-types'
        prop_kind = PropKind.from_name(tree.get_text(node))
        return PropertyRecord(name=name, kind=prop_kind) if prop_kind is not None else None

    if kind in FUNCTION_VALUE_KINDS:
        return PropertyRecord(name=name, kind=PropKind.CUSTOM, literal_set=tree.get_text(node))

    return None


def _callee_name(tree: AstTree, callee: "TSNode | None") -> str | None:
    if is_kind(callee, NodeKind.MEMBER_EXPRESSION):
        return tree.get_text(callee.child_by_field_name("property"))
    if is_kind(callee, NodeKind.IDENTIFIER):
        return tree.get_text(callee)
    return None


def _classify_call(tree: AstTree, node: "TSNode", name: str, depth: int) -> PropertyRecord | None:
    """``PropTypes.shape({...})``, ``PropTypes.oneOf([...])``, ``PropTypes.arrayOf(x)``..."""
    callee = _callee_name(tree, node.child_by_field_name("function"))
    kind = PropKind.from_name(callee) if callee else None
    if kind is None:
        return None

    record = PropertyRecord(name=name, kind=kind)
    arguments = node.child_by_field_name("arguments")
    args = [arg for arg in arguments.named_children if arg.type != NodeKind.COMMENT.value] if arguments else []
    if not args:
        return record
    argument = args[0]
    argument_kind = NodeKind.of(argument)

    if argument_kind == NodeKind.OBJECT:
        # shape / exact
        record.children = _records_from_object(tree, argument, depth)
    elif argument_kind == NodeKind.ARRAY:
        if kind == PropKind.ONE_OF:
            record.literal_set = tree.get_text(argument)
        else:
            # oneOfType
            for element in argument.named_children:
                child = classify_type_expression(tree, element, "", depth + 1)
                if child is not None:
                    record.children.append(child)
    else:
        # arrayOf / objectOf take a validator; instanceOf takes a constructor
        child = None
        if kind != PropKind.INSTANCE_OF:
            child = classify_type_expression(tree, argument, "", depth + 1)
        if child is not None:
            record.children = [child]
        else:
            record.literal_set = tree.get_text(argument)
    return record
