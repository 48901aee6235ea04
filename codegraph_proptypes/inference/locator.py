"""
Component and declaration locators

Find the node defining a component, the existing propTypes/defaultProps
declaration attached to it, and the prop-types import of a module.
"""

from enum import Enum
from typing import TYPE_CHECKING

from codegraph_proptypes.common.observability import get_logger
from codegraph_proptypes.errors import ComponentNotFoundError
from codegraph_proptypes.parsing.ast_tree import AstTree
from codegraph_proptypes.parsing.node_kinds import (
    CLASS_FIELD_KINDS,
    CLASS_KINDS,
    FUNCTION_VALUE_KINDS,
    JSX_KINDS,
    NodeKind,
    class_field_name_node,
    has_static_modifier,
    is_kind,
    iter_nodes,
)

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

logger = get_logger(__name__)

PROP_TYPES_MODULE = "prop-types"
DEFAULT_ALIAS = "propTypes"


class ModuleStyle(str, Enum):
    """How a file pulls in dependencies"""

    IMPORT = "import"
    REQUIRE = "require"


# ============================================================
# ComponentLocator
# ============================================================


def _declared_name(tree: AstTree, node: "TSNode") -> str | None:
    """Name a component-candidate node is defined under, or None."""
    if not node.is_named:
        return None
    kind = NodeKind.of(node)
    if kind in (NodeKind.CLASS_DECLARATION, NodeKind.FUNCTION_DECLARATION):
        name_node = node.child_by_field_name("name")
        return tree.get_text(name_node) if name_node is not None else None
    if kind in FUNCTION_VALUE_KINDS or kind == NodeKind.CLASS:
        # const Foo = () => ..., const Foo = class extends Component {}
        parent = node.parent
        if is_kind(parent, NodeKind.VARIABLE_DECLARATOR):
            value = parent.child_by_field_name("value")
            name_node = parent.child_by_field_name("name")
            if value is not None and value.start_byte == node.start_byte and is_kind(name_node, NodeKind.IDENTIFIER):
                return tree.get_text(name_node)
    return None


_COMPONENT_CANDIDATES = (
    NodeKind.CLASS_DECLARATION,
    NodeKind.CLASS,
    NodeKind.FUNCTION_DECLARATION,
    NodeKind.ARROW_FUNCTION,
    NodeKind.FUNCTION_EXPRESSION,
    NodeKind.FUNCTION,
)


def find_component_node(tree: AstTree, name: str) -> "TSNode":
    """
    Find the node defining component ``name``.

    Matches class and function declarations, and arrow/function/class
    expressions bound to a variable declarator. The first pre-order match wins.

    Raises:
        ComponentNotFoundError: If no candidate matches
    """
    for node in iter_nodes(tree.root, *_COMPONENT_CANDIDATES):
        if _declared_name(tree, node) == name:
            logger.debug("component_located", name=name, node_type=node.type, start_byte=node.start_byte)
            return node
    raise ComponentNotFoundError(
        "The selected text is not a valid React Component !",
        {"name": name, "file_path": tree.source.file_path},
    )


def _contains_jsx(node: "TSNode") -> bool:
    return next(iter_nodes(node, *JSX_KINDS), None) is not None


def _extends_component(tree: AstTree, class_node: "TSNode") -> bool:
    for child in class_node.children:
        if child.type == NodeKind.CLASS_HERITAGE.value:
            return "Component" in tree.get_text(child)
    return False


def find_component_names(tree: AstTree) -> list[str]:
    """
    Candidate component names in source order (batch mode).

    Classes (declared or bound to a variable) extending a ``*Component`` base,
    and capitalised functions or
    function-valued declarators whose body renders JSX.
    """
    names: list[str] = []
    for node in iter_nodes(tree.root, *_COMPONENT_CANDIDATES):
        name = _declared_name(tree, node)
        if not name or not name[0].isupper() or name in names:
            continue
        if NodeKind.of(node) in CLASS_KINDS:
            if _extends_component(tree, node):
                names.append(name)
        elif _contains_jsx(node):
            names.append(name)
    return names


# ============================================================
# DeclarationLocator
# ============================================================


def _enclosing_class(node: "TSNode") -> "TSNode | None":
    parent = node.parent
    if is_kind(parent, NodeKind.CLASS_BODY):
        owner = parent.parent
        if owner is not None and NodeKind.of(owner) in CLASS_KINDS:
            return owner
    return None


def find_declaration_node(tree: AstTree, name: str, alias: str | None = None) -> "TSNode | None":
    """
    Find an existing declaration for component ``name``.

    Looks for ``Name.<alias> = { ... }`` assignments and ``static <alias> = { ... }``
    class fields inside the class ``name``. The class field wins when both exist.

    Args:
        tree: Parsed source
        name: Component name
        alias: Declaration label (``propTypes`` or ``defaultProps``)

    Returns:
        assignment_expression or class field node, or None when absent
    """
    alias = alias or DEFAULT_ALIAS
    assignment_node = None
    field_node = None

    for node in iter_nodes(
        tree.root, NodeKind.ASSIGNMENT_EXPRESSION, NodeKind.FIELD_DEFINITION, NodeKind.PUBLIC_FIELD_DEFINITION
    ):
        if NodeKind.of(node) == NodeKind.ASSIGNMENT_EXPRESSION:
            if assignment_node is None and _is_declaration_assignment(tree, node, name, alias):
                assignment_node = node
        elif field_node is None and _is_declaration_field(tree, node, name, alias):
            field_node = node

    found = field_node or assignment_node
    logger.debug("declaration_located", name=name, alias=alias, found=found is not None)
    return found


def _is_declaration_assignment(tree: AstTree, node: "TSNode", name: str, alias: str) -> bool:
    left = node.child_by_field_name("left")
    right = node.child_by_field_name("right")
    if not is_kind(left, NodeKind.MEMBER_EXPRESSION) or not is_kind(right, NodeKind.OBJECT):
        return False
    target = left.child_by_field_name("object")
    prop = left.child_by_field_name("property")
    return (
        is_kind(target, NodeKind.IDENTIFIER)
        and tree.get_text(target) == name
        and is_kind(prop, NodeKind.PROPERTY_IDENTIFIER)
        and tree.get_text(prop) == alias
    )


def _is_declaration_field(tree: AstTree, node: "TSNode", name: str, alias: str) -> bool:
    if NodeKind.of(node) not in CLASS_FIELD_KINDS or not has_static_modifier(node):
        return False
    key = class_field_name_node(node)
    value = node.child_by_field_name("value")
    if key is None or tree.get_text(key) != alias or not is_kind(value, NodeKind.OBJECT):
        return False
    owner = _enclosing_class(node)
    if owner is None:
        return False
    return _declared_name(tree, owner) == name


def declaration_object(node: "TSNode | None") -> "TSNode | None":
    """Object literal held by a declaration node."""
    if node is None:
        return None
    if NodeKind.of(node) == NodeKind.ASSIGNMENT_EXPRESSION:
        return node.child_by_field_name("right")
    if NodeKind.of(node) in CLASS_FIELD_KINDS:
        return node.child_by_field_name("value")
    return None


# ============================================================
# Imports
# ============================================================


def _string_value(tree: AstTree, node: "TSNode | None") -> str | None:
    if not is_kind(node, NodeKind.STRING):
        return None
    return tree.get_text(node)[1:-1]


def _is_require_call(tree: AstTree, node: "TSNode", module: str | None = None) -> bool:
    function = node.child_by_field_name("function")
    if not is_kind(function, NodeKind.IDENTIFIER) or tree.get_text(function) != "require":
        return False
    if module is None:
        return True
    arguments = node.child_by_field_name("arguments")
    args = arguments.named_children if arguments is not None else []
    return len(args) == 1 and _string_value(tree, args[0]) == module


def find_prop_types_import(tree: AstTree, module: str = PROP_TYPES_MODULE) -> "TSNode | None":
    """
    Existing ``import ... from 'prop-types'`` or ``require('prop-types')`` node, or None.
    """
    for node in iter_nodes(tree.root, NodeKind.IMPORT_STATEMENT, NodeKind.CALL_EXPRESSION):
        if NodeKind.of(node) == NodeKind.IMPORT_STATEMENT:
            if _string_value(tree, node.child_by_field_name("source")) == module:
                return node
        elif _is_require_call(tree, node, module):
            return node
    return None


def detect_module_style(tree: AstTree) -> ModuleStyle:
    """``require`` when the file uses require() and no import statement, else ``import``."""
    if next(iter_nodes(tree.root, NodeKind.IMPORT_STATEMENT), None) is not None:
        return ModuleStyle.IMPORT
    for node in iter_nodes(tree.root, NodeKind.CALL_EXPRESSION):
        if _is_require_call(tree, node):
            return ModuleStyle.REQUIRE
    return ModuleStyle.IMPORT
