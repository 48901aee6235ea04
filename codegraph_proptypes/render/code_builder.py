"""
Declaration code builder

Renders property records as prop-types declaration source:

    Foo.propTypes = {                 (default style)
      age: PropTypes.number,
      user: PropTypes.shape({
        name: PropTypes.string
      }).isRequired
    };

    static propTypes = {...};         (class style)

The first line carries no indentation; ``base_indent`` is applied to the
following lines so the block lines up with wherever it is spliced.
"""

import re

from codegraph_proptypes.config.settings import CodeStyle, GeneratorSettings
from codegraph_proptypes.inference.locator import PROP_TYPES_MODULE, ModuleStyle
from codegraph_proptypes.models import PropertyRecord, PropKind

PROP_TYPES_IDENTIFIER = "PropTypes"

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _render_key(name: str, settings: GeneratorSettings) -> str:
    if _IDENTIFIER.match(name):
        return name
    quote = settings.quote_char
    return quote + name.replace("\\", "\\\\").replace(quote, "\\" + quote) + quote


def _render_fields(records: list[PropertyRecord], settings: GeneratorSettings, indent: str) -> str:
    inner = indent + settings.indent_unit
    lines = [f"{inner}{_render_key(child.name, settings)}: {render_validator(child, settings, inner)}" for child in records]
    return "{\n" + ",\n".join(lines) + f"\n{indent}}}"


def render_validator(record: PropertyRecord, settings: GeneratorSettings, indent: str = "") -> str:
    """
    Validator expression for one record.

    Args:
        record: Property record
        settings: Style settings
        indent: Indentation of the line the expression starts on
    """
    kind = record.kind
    base = f"{PROP_TYPES_IDENTIFIER}.{kind.value}"

    if kind == PropKind.CUSTOM:
        # Custom validators are functions; isRequired does not apply
        return record.literal_set or f"{PROP_TYPES_IDENTIFIER}.any"

    if kind in (PropKind.SHAPE, PropKind.EXACT):
        if record.children:
            body = _render_fields(record.children, settings, indent)
        else:
            # shape(userShape): a non-literal argument is kept verbatim
            body = record.literal_set or "{}"
        expression = f"{base}({body})"
    elif kind == PropKind.ONE_OF:
        expression = f"{base}({record.literal_set or '[]'})"
    elif kind == PropKind.ONE_OF_TYPE:
        if record.children:
            members = ", ".join(render_validator(child, settings, indent) for child in record.children)
            expression = f"{base}([{members}])"
        else:
            expression = f"{base}({record.literal_set or '[]'})"
    elif kind in (PropKind.ARRAY_OF, PropKind.OBJECT_OF):
        if record.children:
            argument = render_validator(record.children[0], settings, indent)
        else:
            argument = record.literal_set or f"{PROP_TYPES_IDENTIFIER}.any"
        expression = f"{base}({argument})"
    elif kind == PropKind.INSTANCE_OF:
        expression = f"{base}({record.literal_set or 'Object'})"
    else:
        expression = base

    if record.required:
        expression += ".isRequired"
    return expression


def _render_defaults(records: list[PropertyRecord], settings: GeneratorSettings, indent: str) -> str:
    inner = indent + settings.indent_unit
    lines = [f"{inner}{_render_key(record.name, settings)}: {record.default_value}" for record in records]
    return "{\n" + ",\n".join(lines) + f"\n{indent}}}"


def build_declaration(
    records: list[PropertyRecord],
    settings: GeneratorSettings,
    component_name: str,
    code_style: CodeStyle = CodeStyle.DEFAULT,
    base_indent: str = "",
    alias: str | None = None,
) -> str:
    """
    Render a full declaration statement.

    Args:
        records: Sorted property records
        settings: Style settings
        component_name: Component the declaration belongs to
        code_style: ``default`` (assignment) or ``class`` (static field)
        base_indent: Indentation of the line the statement starts on
        alias: Declaration label; ``defaultProps`` renders default values

    Returns:
        Declaration source ending with ``;`` (no trailing newline)
    """
    alias = alias or settings.alias
    if alias == "defaultProps":
        body = _render_defaults([record for record in records if record.default_value], settings, base_indent)
    else:
        body = _render_fields(records, settings, base_indent)

    if code_style == CodeStyle.CLASS:
        return f"static {alias} = {body};"
    return f"{component_name}.{alias} = {body};"


def build_import_code(settings: GeneratorSettings, module_style: ModuleStyle = ModuleStyle.IMPORT) -> str:
    """``import PropTypes from 'prop-types';`` or the require() form."""
    quote = settings.quote_char
    module = f"{quote}{PROP_TYPES_MODULE}{quote}"
    if module_style == ModuleStyle.REQUIRE:
        return f"const {PROP_TYPES_IDENTIFIER} = require({module});"
    return f"import {PROP_TYPES_IDENTIFIER} from {module};"
