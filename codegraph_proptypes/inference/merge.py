"""
Record merging and the completion pass

Three record sources are combined by name with a fixed priority:

    explicit declaration > usage inference > defaults

then bindings that are still imprecise (``any`` / ``shape``) are resolved
against the block that introduces them: a binding that is called becomes ``func``, a
binding with member accesses or destructuring becomes ``shape``.
When both kinds of evidence exist, the call wins.
"""

import copy
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from codegraph_proptypes.common.observability import get_logger
from codegraph_proptypes.inference.access import record_from_access
from codegraph_proptypes.inference.defaults import records_from_object_pattern
from codegraph_proptypes.models import (
    IMPRECISE_KINDS,
    PropertyRecord,
    PropKind,
    iter_records,
)
from codegraph_proptypes.parsing.ast_tree import AstTree
from codegraph_proptypes.parsing.node_kinds import SCOPE_KINDS, NodeKind, is_kind, iter_nodes, traverse

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

logger = get_logger(__name__)


class MergeMode(str, Enum):
    """How the kind of two same-named records is reconciled"""

    AUTHORITATIVE = "authoritative"  # base kind/required always win (explicit declaration)
    PRIORITY = "priority"  # base kind wins unless it is ``any``
    PEER = "peer"  # same source: the more specific kind wins, func beats shape


def _pick_kind(base: PropKind, other: PropKind, mode: MergeMode) -> PropKind:
    if mode == MergeMode.AUTHORITATIVE:
        return base
    if base == PropKind.ANY:
        return other
    if mode == MergeMode.PEER and base == PropKind.SHAPE and other == PropKind.FUNC:
        return PropKind.FUNC
    return base


def _merge_children(base: PropertyRecord, other: PropertyRecord, kind: PropKind, mode: MergeMode) -> list[PropertyRecord]:
    if mode == MergeMode.AUTHORITATIVE and base.literal_set and not base.children:
        # shape(userShape) as declared: usage members must not replace the reference
        return []
    if kind in (PropKind.SHAPE, PropKind.EXACT):
        child_mode = MergeMode.PEER if mode == MergeMode.PRIORITY else mode
        return merge_record_lists(base.children, other.children, child_mode)
    if kind == PropKind.ONE_OF_TYPE:
        children = [copy.deepcopy(child) for child in base.children]
        seen = {(child.kind, child.literal_set) for child in children}
        for child in other.children:
            if (child.kind, child.literal_set) not in seen:
                children.append(copy.deepcopy(child))
                seen.add((child.kind, child.literal_set))
        return children
    source = base.children or other.children
    return [copy.deepcopy(child) for child in source]


def merge_records(base: PropertyRecord, other: PropertyRecord, mode: MergeMode = MergeMode.PEER) -> PropertyRecord:
    """
    Merge two records for the same name into a new record.

    Args:
        base: Higher-priority record
        other: Lower-priority record
        mode: Kind reconciliation mode

    Returns:
        New record; inputs are not modified
    """
    kind = _pick_kind(base.kind, other.kind, mode)
    binder = base if base.binding_id else other
    required = base.required if mode == MergeMode.AUTHORITATIVE else base.required or other.required
    merged = PropertyRecord(
        name=base.name,
        binding_id=binder.binding_id,
        binding_scope=binder.binding_scope,
        kind=kind,
        required=required,
        children=_merge_children(base, other, kind, mode),
        literal_set=base.literal_set or other.literal_set,
        default_value=base.default_value or other.default_value,
    )
    return merged.normalize()


def merge_record_lists(
    base: list[PropertyRecord],
    other: list[PropertyRecord],
    mode: MergeMode = MergeMode.PEER,
    authoritative_names: frozenset[str] = frozenset(),
) -> list[PropertyRecord]:
    """
    Merge two record lists by name, keeping first-seen order.

    Duplicates inside ``base`` are merged as peers. Records of ``other`` are
    merged under ``mode``, or authoritatively when the name is in
    ``authoritative_names``.
    """
    merged: dict[str, PropertyRecord] = {}
    for record in base:
        if record.name in merged:
            merged[record.name] = merge_records(merged[record.name], record, MergeMode.PEER)
        else:
            merged[record.name] = copy.deepcopy(record)
    for record in other:
        if record.name in merged:
            record_mode = MergeMode.AUTHORITATIVE if record.name in authoritative_names else mode
            merged[record.name] = merge_records(merged[record.name], record, record_mode)
        else:
            merged[record.name] = copy.deepcopy(record)
    return list(merged.values())


def merge_property_records(
    explicit: list[PropertyRecord],
    usage: list[PropertyRecord],
    defaults: list[PropertyRecord],
) -> list[PropertyRecord]:
    """
    Combine the three sources by name.

    - explicit kind/required always win for a shared name
    - usage kind wins over defaults unless it is ``any``
    - default values fill in from whichever source has one
    - children are unioned
    """
    declared = frozenset(record.name for record in explicit)
    records = merge_record_lists(explicit, [], MergeMode.PEER)
    records = merge_record_lists(records, usage, MergeMode.PRIORITY, authoritative_names=declared)
    records = merge_record_lists(records, defaults, MergeMode.PRIORITY, authoritative_names=declared)
    return records


def finalize_records(records: list[PropertyRecord]) -> list[PropertyRecord]:
    """Normalize and sort by name (ascending, stable)."""
    for record in records:
        record.normalize()
    return sorted(records, key=lambda record: record.name)


# ============================================================
# Completion pass
# ============================================================


@dataclass
class _Evidence:
    """How local bindings are used inside a scope"""

    called: set[str] = field(default_factory=set)
    members: dict[str, list["TSNode"]] = field(default_factory=lambda: defaultdict(list))
    patterns: dict[str, list["TSNode"]] = field(default_factory=lambda: defaultdict(list))


def _collect_evidence(tree: AstTree, scope: "TSNode") -> _Evidence:
    def on_call(node: "TSNode", acc: _Evidence) -> None:
        function = node.child_by_field_name("function")
        if is_kind(function, NodeKind.IDENTIFIER):
            acc.called.add(tree.get_text(function))

    def on_member(node: "TSNode", acc: _Evidence) -> None:
        target = node.child_by_field_name("object")
        if is_kind(target, NodeKind.IDENTIFIER):
            acc.members[tree.get_text(target)].append(node)

    def on_declarator(node: "TSNode", acc: _Evidence) -> None:
        target = node.child_by_field_name("name")
        value = node.child_by_field_name("value")
        if is_kind(target, NodeKind.OBJECT_PATTERN) and is_kind(value, NodeKind.IDENTIFIER):
            acc.patterns[tree.get_text(value)].append(target)

    handlers = {
        NodeKind.CALL_EXPRESSION: on_call,
        NodeKind.MEMBER_EXPRESSION: on_member,
        NodeKind.VARIABLE_DECLARATOR: on_declarator,
    }
    return traverse(scope, handlers, _Evidence())


def _is_candidate(record: PropertyRecord) -> bool:
    return bool(record.binding_id) and record.kind in IMPRECISE_KINDS


class _ScopedEvidence:
    """
    Evidence per lexical block, collected lazily.

    A binding is looked up in the block that introduces it; bindings without
    a known block fall back to the whole component.
    """

    def __init__(self, tree: AstTree, component: "TSNode"):
        self.tree = tree
        self.component = component
        self.blocks = {(node.start_byte, node.end_byte): node for node in iter_nodes(component, *SCOPE_KINDS)}
        self._cache: dict[tuple[int, int] | None, _Evidence] = {}

    def key(self, record: PropertyRecord) -> tuple[int, int] | None:
        return record.binding_scope if record.binding_scope in self.blocks else None

    def get(self, record: PropertyRecord) -> _Evidence:
        key = self.key(record)
        if key not in self._cache:
            block = self.blocks[key] if key is not None else self.component
            self._cache[key] = _collect_evidence(self.tree, block)
        return self._cache[key]


def complete_records(
    tree: AstTree,
    scope: "TSNode | None",
    records: list[PropertyRecord],
    exclude_names: frozenset[str] = frozenset(),
) -> list[PropertyRecord]:
    """
    Upgrade imprecise records from how their bindings are used.

    Each binding is searched for in the block that introduces it, so a local
    of the same name in another method does not count. Records are updated
    in place. Each (binding, block) pair is resolved at most once, so the pass
    terminates even when bindings alias each other, and running it again on
    its own output changes nothing.

    Args:
        tree: Parsed source
        scope: Component node; bounds every search
        records: Merged records
        exclude_names: Top-level names that must keep their kind (explicitly declared)

    Returns:
        The same list
    """
    if scope is None:
        return records

    pending = [
        record
        for top in records
        if top.name not in exclude_names
        for record in iter_records([top])
        if _is_candidate(record)
    ]
    if not pending:
        return records

    evidence_by_block = _ScopedEvidence(tree, scope)
    resolved: set[tuple[str, tuple[int, int] | None]] = set()

    def resolution_key(record: PropertyRecord) -> tuple[str, tuple[int, int] | None]:
        return record.binding_id, evidence_by_block.key(record)

    while pending:
        record = pending.pop(0)
        key = resolution_key(record)
        if key in resolved:
            continue
        resolved.add(key)

        binding = record.binding_id
        evidence = evidence_by_block.get(record)

        if binding in evidence.called:
            record.kind = PropKind.FUNC
            record.children = []
            continue

        found: list[PropertyRecord] = []
        for member in evidence.members.get(binding, []):
            child = record_from_access(tree, member)
            if child is not None:
                found.append(child)
        for pattern in evidence.patterns.get(binding, []):
            found.extend(records_from_object_pattern(tree, pattern))
        if not found:
            continue

        record.kind = PropKind.SHAPE
        record.children = merge_record_lists(record.children, found, MergeMode.PEER)
        pending.extend(
            child
            for child in iter_records(record.children)
            if _is_candidate(child) and resolution_key(child) not in resolved
        )

    for record in records:
        record.normalize()
    logger.debug("completion_done", resolved=sorted(binding for binding, _ in resolved))
    return records
