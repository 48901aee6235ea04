"""
Inference and merge engine

- locator: component, declaration and import lookup
- declarations: existing propTypes -> records
- usage: property accesses -> records
- defaults: destructuring / defaultProps defaults -> records
- merge: priority merge and completion pass
- engine: orchestration
"""

from codegraph_proptypes.inference.engine import ComponentAnalysis, analyze_component, infer_records
from codegraph_proptypes.inference.locator import (
    find_component_names,
    find_component_node,
    find_declaration_node,
    find_prop_types_import,
)
from codegraph_proptypes.inference.merge import complete_records, merge_property_records

__all__ = [
    "ComponentAnalysis",
    "analyze_component",
    "complete_records",
    "find_component_names",
    "find_component_node",
    "find_declaration_node",
    "find_prop_types_import",
    "infer_records",
    "merge_property_records",
]
