"""
Property models shared by the inference, merge and render layers.
"""

from dataclasses import dataclass, field
from enum import Enum


class PropKind(str, Enum):
    """prop-types validator kinds"""

    ANY = "any"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    FUNC = "func"
    OBJECT = "object"
    ARRAY = "array"
    NODE = "node"
    ELEMENT = "element"
    ELEMENT_TYPE = "elementType"
    SYMBOL = "symbol"
    SHAPE = "shape"
    EXACT = "exact"
    ONE_OF = "oneOf"
    ONE_OF_TYPE = "oneOfType"
    ARRAY_OF = "arrayOf"
    OBJECT_OF = "objectOf"
    INSTANCE_OF = "instanceOf"
    CUSTOM = "custom"

    @classmethod
    def from_name(cls, name: str) -> "PropKind | None":
        """Resolve a validator name (e.g. ``"string"``) to a kind, or None if unknown."""
        try:
            return cls(name)
        except ValueError:
            return None


# Kinds whose children are named members
NAMED_CONTAINER_KINDS = frozenset({PropKind.SHAPE, PropKind.EXACT})

# Kinds whose children are positional type arguments
POSITIONAL_CONTAINER_KINDS = frozenset({PropKind.ONE_OF_TYPE, PropKind.ARRAY_OF, PropKind.OBJECT_OF})

CONTAINER_KINDS = NAMED_CONTAINER_KINDS | POSITIONAL_CONTAINER_KINDS

# Kinds the completion pass may still refine
IMPRECISE_KINDS = frozenset({PropKind.ANY, PropKind.SHAPE})


@dataclass(slots=True)
class PropertyRecord:
    """
    One inferred or declared component property.

    Attributes:
        name: Public property key (empty for positional type arguments)
        binding_id: Local identifier the property is bound to, if any
        kind: Validator kind
        required: Whether the property must be supplied
        children: Named members (shape/exact) or type arguments (oneOfType/arrayOf/objectOf)
        literal_set: Verbatim argument source (oneOf literals, instanceOf class, custom validator,
            non-literal shape/oneOfType arguments)
        default_value: Source text of the default expression
        binding_scope: Byte range of the block or function that introduces ``binding_id``
    """

    name: str
    binding_id: str | None = None
    kind: PropKind = PropKind.ANY
    required: bool = False
    children: list["PropertyRecord"] = field(default_factory=list)
    literal_set: str | None = None
    default_value: str | None = None
    binding_scope: tuple[int, int] | None = field(default=None, compare=False)

    @property
    def is_container(self) -> bool:
        return self.kind in CONTAINER_KINDS

    @property
    def has_named_children(self) -> bool:
        return self.kind in NAMED_CONTAINER_KINDS

    def normalize(self) -> "PropertyRecord":
        """Drop children that the kind cannot carry and sort named members (in place)."""
        if not self.is_container:
            self.children = []
        for child in self.children:
            child.normalize()
        if self.has_named_children:
            self.children.sort(key=lambda child: child.name)
        return self


def iter_records(records: list[PropertyRecord]):
    """Yield records and all their descendants in pre-order."""
    stack = list(reversed(records))
    while stack:
        record = stack.pop()
        yield record
        stack.extend(reversed(record.children))
