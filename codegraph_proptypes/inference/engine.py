"""
Inference engine

Locates a component and its existing declarations, runs the three record
sources (explicit declaration, usage, defaults) against the same read-only
tree, merges them and runs the completion pass.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from codegraph_proptypes.common.observability import get_logger
from codegraph_proptypes.errors import NoPropertiesFoundError
from codegraph_proptypes.inference.declarations import records_from_declaration_object
from codegraph_proptypes.inference.defaults import records_from_defaults_object
from codegraph_proptypes.inference.locator import (
    DEFAULT_ALIAS,
    declaration_object,
    find_component_node,
    find_declaration_node,
)
from codegraph_proptypes.inference.merge import complete_records, finalize_records, merge_property_records
from codegraph_proptypes.inference.usage import UsageInferenceEngine
from codegraph_proptypes.models import PropertyRecord
from codegraph_proptypes.parsing.ast_tree import AstTree

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

logger = get_logger(__name__)

DEFAULT_PROPS_ALIAS = "defaultProps"


@dataclass
class ComponentAnalysis:
    """
    Result of analysing one component.

    Attributes:
        name: Component name
        component_node: Node defining the component
        prop_types_node: Existing propTypes declaration, if any
        default_props_node: Existing defaultProps declaration, if any
        records: Merged, completed and sorted records
    """

    name: str
    component_node: "TSNode"
    prop_types_node: "TSNode | None"
    default_props_node: "TSNode | None"
    records: list[PropertyRecord]


def infer_records(
    tree: AstTree,
    component_node: "TSNode",
    prop_types_node: "TSNode | None" = None,
    default_props_node: "TSNode | None" = None,
) -> list[PropertyRecord]:
    """
    Merged and completed records for a located component.

    Raises:
        NoPropertiesFoundError: If no source yields any record
    """
    usage = UsageInferenceEngine(tree).infer(component_node)
    defaults = records_from_defaults_object(tree, declaration_object(default_props_node))
    explicit = records_from_declaration_object(tree, declaration_object(prop_types_node))

    records = merge_property_records(explicit, usage, defaults)
    complete_records(tree, component_node, records, exclude_names=frozenset(record.name for record in explicit))
    records = finalize_records(records)

    if not records:
        raise NoPropertiesFoundError("Not find any props", {"file_path": tree.source.file_path})

    logger.debug(
        "properties_inferred",
        explicit=len(explicit),
        usage=len(usage),
        defaults=len(defaults),
        merged=len(records),
    )
    return records


def analyze_component(tree: AstTree, name: str, alias: str | None = None) -> ComponentAnalysis:
    """
    Locate component ``name`` and infer its property records.

    Args:
        tree: Parsed source
        name: Component name
        alias: Type declaration label (``propTypes`` unless configured)

    Raises:
        ComponentNotFoundError: If the component does not exist
        NoPropertiesFoundError: If nothing is known about its properties
    """
    component_node = find_component_node(tree, name)
    prop_types_node = find_declaration_node(tree, name, alias or DEFAULT_ALIAS)
    default_props_node = find_declaration_node(tree, name, DEFAULT_PROPS_ALIAS)

    try:
        records = infer_records(tree, component_node, prop_types_node, default_props_node)
    except NoPropertiesFoundError as e:
        e.details["name"] = name
        raise

    return ComponentAnalysis(
        name=name,
        component_node=component_node,
        prop_types_node=prop_types_node,
        default_props_node=default_props_node,
        records=records,
    )
