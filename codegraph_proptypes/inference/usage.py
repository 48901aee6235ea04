"""
Usage inference

Discovers the properties a component reads:

- function components: the first parameter is either the props identity
  (``function Foo(props)``) or a destructuring pattern (``function Foo({ a, b })``)
- class components: ``this.props`` is the identity; a constructor is analysed
  like a function component

Inside the component every ``<identity>.x`` access and every
``const { ... } = <identity>`` declarator contributes records.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from codegraph_proptypes.common.observability import get_logger
from codegraph_proptypes.inference.access import normalized_text, record_from_access
from codegraph_proptypes.inference.defaults import records_from_object_pattern
from codegraph_proptypes.inference.merge import merge_record_lists
from codegraph_proptypes.models import PropertyRecord
from codegraph_proptypes.parsing.ast_tree import AstTree
from codegraph_proptypes.parsing.node_kinds import (
    CLASS_KINDS,
    NodeKind,
    first_parameter,
    is_kind,
    traverse,
)

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

logger = get_logger(__name__)

CLASS_PROPS_IDENTITY = "this.props"


@dataclass
class _UsageState:
    """Accumulator threaded through the usage walk"""

    identities: frozenset[str]
    records: list[PropertyRecord] = field(default_factory=list)


class UsageInferenceEngine:
    """
    Infers property records from how a component reads its props.

    Stateless apart from the tree it reads; one instance may serve several
    components of the same file.
    """

    def __init__(self, tree: AstTree):
        self.tree = tree

    def infer(self, component_node: "TSNode") -> list[PropertyRecord]:
        """
        Records for every property the component reads.

        Args:
            component_node: Class declaration or function-like node

        Returns:
            Records in discovery order, duplicates merged
        """
        if NodeKind.of(component_node) in CLASS_KINDS:
            records = self._infer_class(component_node)
        else:
            records = self._infer_function(component_node)
        logger.debug("usage_inferred", count=len(records), names=[record.name for record in records])
        return records

    def _infer_function(self, function_node: "TSNode") -> list[PropertyRecord]:
        records: list[PropertyRecord] = []
        identities: set[str] = set()

        param = first_parameter(function_node)
        if is_kind(param, NodeKind.IDENTIFIER):
            identities.add(self.tree.get_text(param))
        elif is_kind(param, NodeKind.OBJECT_PATTERN):
            records = records_from_object_pattern(self.tree, param)

        state = self._walk(function_node, frozenset(identities))
        return merge_record_lists(records, state.records)

    def _infer_class(self, class_node: "TSNode") -> list[PropertyRecord]:
        records: list[PropertyRecord] = []
        constructor = self._find_constructor(class_node)
        if constructor is not None:
            records = self._infer_function(constructor)

        state = self._walk(class_node, frozenset({CLASS_PROPS_IDENTITY}))
        return merge_record_lists(records, state.records)

    def _find_constructor(self, class_node: "TSNode") -> "TSNode | None":
        body = class_node.child_by_field_name("body")
        if body is None:
            return None
        for member in body.named_children:
            if NodeKind.of(member) != NodeKind.METHOD_DEFINITION:
                continue
            name = member.child_by_field_name("name")
            if self.tree.get_text(name) == "constructor":
                return member
        return None

    def _walk(self, root: "TSNode", identities: frozenset[str]) -> _UsageState:
        state = _UsageState(identities=identities)
        if not identities:
            return state
        handlers = {
            NodeKind.MEMBER_EXPRESSION: self._on_member,
            NodeKind.VARIABLE_DECLARATOR: self._on_declarator,
        }
        return traverse(root, handlers, state)

    def _on_member(self, node: "TSNode", state: _UsageState) -> None:
        if normalized_text(self.tree, node.child_by_field_name("object")) not in state.identities:
            return
        record = record_from_access(self.tree, node)
        if record is not None:
            state.records.append(record)

    def _on_declarator(self, node: "TSNode", state: _UsageState) -> None:
        target = node.child_by_field_name("name")
        value = node.child_by_field_name("value")
        if not is_kind(target, NodeKind.OBJECT_PATTERN) or value is None:
            return
        if normalized_text(self.tree, value) in state.identities:
            state.records.extend(records_from_object_pattern(self.tree, target))
