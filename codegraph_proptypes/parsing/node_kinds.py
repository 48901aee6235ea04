"""
Node kinds and explicit traversal

Tree-sitter node type names for the JavaScript, TypeScript and TSX grammars
that the inference engine dispatches on, plus a stack-based pre-order
traversal that threads an explicit accumulator through typed handlers.
"""

from collections.abc import Callable, Iterator, Mapping
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

A = TypeVar("A")


class NodeKind(str, Enum):
    """Grammar node types the engine cares about"""

    PROGRAM = "program"
    COMMENT = "comment"
    EXPRESSION_STATEMENT = "expression_statement"
    EXPORT_STATEMENT = "export_statement"
    IMPORT_STATEMENT = "import_statement"
    STATEMENT_BLOCK = "statement_block"

    # Declarations
    CLASS_DECLARATION = "class_declaration"
    CLASS = "class"  # class expression
    CLASS_HERITAGE = "class_heritage"
    CLASS_BODY = "class_body"
    FUNCTION_DECLARATION = "function_declaration"
    FUNCTION_EXPRESSION = "function_expression"
    FUNCTION = "function"  # older javascript grammars
    ARROW_FUNCTION = "arrow_function"
    METHOD_DEFINITION = "method_definition"
    FIELD_DEFINITION = "field_definition"
    PUBLIC_FIELD_DEFINITION = "public_field_definition"  # typescript / tsx
    VARIABLE_DECLARATOR = "variable_declarator"

    # Parameters and patterns
    FORMAL_PARAMETERS = "formal_parameters"
    REQUIRED_PARAMETER = "required_parameter"  # typescript / tsx
    OPTIONAL_PARAMETER = "optional_parameter"  # typescript / tsx
    OBJECT_PATTERN = "object_pattern"
    SHORTHAND_PROPERTY_IDENTIFIER_PATTERN = "shorthand_property_identifier_pattern"
    OBJECT_ASSIGNMENT_PATTERN = "object_assignment_pattern"
    PAIR_PATTERN = "pair_pattern"
    ASSIGNMENT_PATTERN = "assignment_pattern"
    REST_PATTERN = "rest_pattern"

    # Expressions
    ASSIGNMENT_EXPRESSION = "assignment_expression"
    CALL_EXPRESSION = "call_expression"
    MEMBER_EXPRESSION = "member_expression"
    IDENTIFIER = "identifier"
    PROPERTY_IDENTIFIER = "property_identifier"
    TYPE_IDENTIFIER = "type_identifier"
    THIS = "this"
    OBJECT = "object"
    PAIR = "pair"
    ARRAY = "array"
    ARGUMENTS = "arguments"
    PARENTHESIZED_EXPRESSION = "parenthesized_expression"
    UNARY_EXPRESSION = "unary_expression"

    # Literals
    NUMBER = "number"
    STRING = "string"
    TEMPLATE_STRING = "template_string"
    TRUE = "true"
    FALSE = "false"

    # JSX
    JSX_ELEMENT = "jsx_element"
    JSX_SELF_CLOSING_ELEMENT = "jsx_self_closing_element"
    JSX_FRAGMENT = "jsx_fragment"

    # Error recovery
    ERROR = "ERROR"

    @classmethod
    def of(cls, node: "TSNode | None") -> "NodeKind | None":
        """Kind tag of a node, or None for node types the engine ignores."""
        if node is None:
            return None
        return _BY_TYPE.get(node.type)


_BY_TYPE = {kind.value: kind for kind in NodeKind}

FUNCTION_KINDS = frozenset(
    {NodeKind.FUNCTION_DECLARATION, NodeKind.FUNCTION_EXPRESSION, NodeKind.FUNCTION, NodeKind.ARROW_FUNCTION}
)
CLASS_KINDS = frozenset({NodeKind.CLASS_DECLARATION, NodeKind.CLASS})
FUNCTION_VALUE_KINDS = frozenset({NodeKind.FUNCTION_EXPRESSION, NodeKind.FUNCTION, NodeKind.ARROW_FUNCTION})
CLASS_FIELD_KINDS = frozenset({NodeKind.FIELD_DEFINITION, NodeKind.PUBLIC_FIELD_DEFINITION})
JSX_KINDS = frozenset({NodeKind.JSX_ELEMENT, NodeKind.JSX_SELF_CLOSING_ELEMENT, NodeKind.JSX_FRAGMENT})
# Nodes that bound the visibility of a local binding
SCOPE_KINDS = FUNCTION_KINDS | {NodeKind.METHOD_DEFINITION, NodeKind.STATEMENT_BLOCK}

Handler = Callable[["TSNode", A], None]


def traverse(root: "TSNode", handlers: Mapping[NodeKind, Handler], acc: A) -> A:
    """
    Pre-order traversal dispatching each node to the handler registered for its kind.

    Iterative (no recursion limit on deeply nested JSX). Handlers receive the node
    and the accumulator; every node's children are visited regardless of handlers.

    Args:
        root: Node to start from (included)
        handlers: NodeKind -> handler
        acc: Mutable accumulator passed to every handler

    Returns:
        The accumulator
    """
    stack = [root]
    while stack:
        node = stack.pop()
        kind = _BY_TYPE.get(node.type)
        if kind is not None:
            handler = handlers.get(kind)
            if handler is not None:
                handler(node, acc)
        stack.extend(reversed(node.children))
    return acc


def iter_nodes(root: "TSNode", *kinds: NodeKind) -> Iterator["TSNode"]:
    """Yield nodes of the given kinds in pre-order."""
    wanted = {kind.value for kind in kinds}
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in wanted:
            yield node
        stack.extend(reversed(node.children))


def is_kind(node: "TSNode | None", *kinds: NodeKind) -> bool:
    return node is not None and NodeKind.of(node) in kinds


def same_node(a: "TSNode | None", b: "TSNode | None") -> bool:
    """Node identity by type and byte range (tree-sitter nodes are re-created on access)."""
    if a is None or b is None:
        return False
    return a.type == b.type and a.start_byte == b.start_byte and a.end_byte == b.end_byte


def has_static_modifier(node: "TSNode") -> bool:
    """Whether a class field carries the ``static`` keyword."""
    return any(child.type == "static" for child in node.children)


def class_field_name_node(node: "TSNode") -> "TSNode | None":
    """Name node of a class field (``property`` in javascript, ``name`` in typescript)."""
    return node.child_by_field_name("property") or node.child_by_field_name("name")


def unwrap_parameter(node: "TSNode") -> tuple["TSNode | None", "TSNode | None"]:
    """
    Split a formal parameter into (pattern, default value).

    Handles plain patterns, ``assignment_pattern`` (javascript) and
    ``required_parameter`` / ``optional_parameter`` (typescript).
    """
    kind = NodeKind.of(node)
    if kind in (NodeKind.REQUIRED_PARAMETER, NodeKind.OPTIONAL_PARAMETER):
        return node.child_by_field_name("pattern"), node.child_by_field_name("value")
    if kind == NodeKind.ASSIGNMENT_PATTERN:
        return node.child_by_field_name("left"), node.child_by_field_name("right")
    return node, None


def first_parameter(function_node: "TSNode") -> "TSNode | None":
    """
    First parameter pattern of a function-like node, or None.

    Covers ``x => ...`` (single ``parameter`` field) and parenthesised lists.
    """
    single = function_node.child_by_field_name("parameter")
    if single is not None:
        return single
    params = function_node.child_by_field_name("parameters")
    if params is None:
        return None
    for child in params.named_children:
        if child.type == NodeKind.COMMENT.value:
            continue
        pattern, _ = unwrap_parameter(child)
        return pattern
    return None


def enclosing_scope(node: "TSNode") -> "TSNode | None":
    """
    Block a declaration at ``node`` is visible in.

    Parameters resolve to their function, ``const``/``let`` declarators to the
    nearest statement block.
    """
    current = node.parent
    while current is not None and NodeKind.of(current) not in SCOPE_KINDS:
        current = current.parent
    return current


def scope_range(node: "TSNode") -> tuple[int, int] | None:
    """Byte range of ``enclosing_scope(node)``, or None at module level."""
    scope = enclosing_scope(node)
    if scope is None:
        return None
    return scope.start_byte, scope.end_byte
