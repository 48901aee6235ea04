"""
Generator

Reads a source file, analyses a component, renders its declaration and
splices it back in place:

- an existing declaration statement is replaced (trailing ``;`` included)
- otherwise the declaration is inserted after the component's top-level
  statement (default style) or right after the class body's ``{`` (class style)
- a prop-types import is inserted before the first top-level statement when
  missing and auto-import is enabled

Files are processed one at a time; each component of a file re-reads the
file so offsets always refer to the current content.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from codegraph_proptypes.common.observability import get_logger
from codegraph_proptypes.config.settings import CodeStyle, GeneratorSettings
from codegraph_proptypes.errors import ComponentNotFoundError, InferenceError, PropTypesError
from codegraph_proptypes.inference.engine import DEFAULT_PROPS_ALIAS, ComponentAnalysis, analyze_component
from codegraph_proptypes.inference.locator import detect_module_style, find_component_names, find_prop_types_import
from codegraph_proptypes.parsing.ast_tree import AstTree
from codegraph_proptypes.parsing.node_kinds import CLASS_FIELD_KINDS, CLASS_KINDS, NodeKind, is_kind
from codegraph_proptypes.parsing.source_file import SourceFile
from codegraph_proptypes.render.code_builder import build_declaration, build_import_code

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

logger = get_logger(__name__)

PROJECT_EXTENSIONS = frozenset({".js", ".jsx", ".ts", ".tsx"})
SKIPPED_DIRECTORIES = frozenset({"node_modules"})


# ============================================================
# Text edits
# ============================================================


@dataclass(frozen=True)
class TextEdit:
    """Replace bytes [start, end) with ``text`` (start == end inserts)."""

    start: int
    end: int
    text: str


def apply_edits(data: bytes, edits: list[TextEdit], encoding: str = "utf-8") -> str:
    """
    Apply non-overlapping edits in one pass.

    Insertions at the same offset keep their list order.

    Raises:
        ValueError: If two edits overlap
    """
    ordered = sorted(enumerate(edits), key=lambda item: (item[1].start, item[0]))
    parts: list[bytes] = []
    cursor = 0
    for _, edit in ordered:
        if edit.start < cursor:
            raise ValueError(f"Overlapping edit at byte {edit.start}")
        parts.append(data[cursor : edit.start])
        parts.append(edit.text.encode(encoding))
        cursor = edit.end
    parts.append(data[cursor:])
    return b"".join(parts).decode(encoding)


def _line_indent(data: bytes, offset: int) -> str:
    """Leading whitespace of the line containing ``offset``."""
    line_start = data.rfind(b"\n", 0, offset) + 1
    line = data[line_start:offset]
    stripped = line.lstrip(b" \t")
    return line[: len(line) - len(stripped)].decode("ascii", errors="ignore")


def _top_level_statement(node: "TSNode") -> "TSNode":
    """Ancestor of ``node`` sitting directly under the program."""
    current = node
    while current.parent is not None and current.parent.type != NodeKind.PROGRAM.value:
        current = current.parent
    return current


def _declaration_range(node: "TSNode") -> tuple[int, int]:
    """Byte range of a declaration statement including its ``;``."""
    if NodeKind.of(node) == NodeKind.ASSIGNMENT_EXPRESSION and is_kind(node.parent, NodeKind.EXPRESSION_STATEMENT):
        statement = node.parent
        return statement.start_byte, statement.end_byte
    end = node.end_byte
    sibling = node.next_sibling
    if sibling is not None and sibling.type == ";":
        end = sibling.end_byte
    return node.start_byte, end


def _declared_style(node: "TSNode") -> CodeStyle:
    return CodeStyle.CLASS if NodeKind.of(node) in CLASS_FIELD_KINDS else CodeStyle.DEFAULT


def resolve_code_style(analysis: ComponentAnalysis, settings: GeneratorSettings) -> CodeStyle:
    """
    Existing declaration form, then the configured style, then the component kind.
    Function components always use the default (assignment) style.
    """
    if analysis.prop_types_node is not None:
        return _declared_style(analysis.prop_types_node)
    is_class = NodeKind.of(analysis.component_node) in CLASS_KINDS
    if not is_class:
        return CodeStyle.DEFAULT
    return settings.code_style or CodeStyle.CLASS


# ============================================================
# Planning
# ============================================================


class _Renderer:
    """Binds records, settings and style so planning code only supplies indentation."""

    def __init__(self, analysis: ComponentAnalysis, settings: GeneratorSettings, style: CodeStyle, alias: str):
        self.analysis = analysis
        self.settings = settings
        self.style = style
        self.alias = alias
        self.unit = settings.indent_unit

    def __call__(self, base_indent: str) -> str:
        return build_declaration(
            self.analysis.records,
            self.settings,
            self.analysis.name,
            code_style=self.style,
            base_indent=base_indent,
            alias=self.alias,
        )


def _insertion(tree: AstTree, render: _Renderer) -> TextEdit | None:
    """Edit inserting a fresh declaration for the rendered component."""
    component = render.analysis.component_node
    if render.style == CodeStyle.CLASS:
        body = component.child_by_field_name("body")
        if body is None:
            return None
        indent = _line_indent(tree.data, component.start_byte) + render.unit
        return TextEdit(body.start_byte + 1, body.start_byte + 1, f"\n{indent}{render(indent)}\n")
    statement = _top_level_statement(component)
    indent = _line_indent(tree.data, statement.start_byte)
    return TextEdit(statement.end_byte, statement.end_byte, f"\n\n{indent}{render(indent)}")


def plan_edits(tree: AstTree, analysis: ComponentAnalysis, settings: GeneratorSettings) -> list[TextEdit]:
    """
    Edits that write the declaration(s) and import for one component.

    Args:
        tree: Parsed current file content
        analysis: Component analysis from the same tree
        settings: Style settings
    """
    edits: list[TextEdit] = []
    style = resolve_code_style(analysis, settings)
    render = _Renderer(analysis, settings, style, settings.alias)

    if analysis.prop_types_node is not None:
        start, end = _declaration_range(analysis.prop_types_node)
        edits.append(TextEdit(start, end, render(_line_indent(tree.data, start))))
    else:
        edit = _insertion(tree, render)
        if edit is not None:
            edits.append(edit)

    # defaultProps are author-owned once they exist; only a missing one is generated
    has_defaults = any(record.default_value for record in analysis.records)
    if settings.with_defaults and has_defaults and analysis.default_props_node is None:
        edit = _insertion(tree, _Renderer(analysis, settings, style, DEFAULT_PROPS_ALIAS))
        if edit is not None:
            edits.append(edit)

    if settings.import_enabled and find_prop_types_import(tree) is None:
        statements = tree.top_level_statements()
        if statements:
            first = statements[0].start_byte
            code = build_import_code(settings, detect_module_style(tree))
            edits.append(TextEdit(first, first, code + "\n"))

    return edits


# ============================================================
# Files and batches
# ============================================================


@dataclass
class GenerationResult:
    file_path: str
    component: str
    code_style: CodeStyle
    replaced: bool
    property_names: list[str]


@dataclass
class FileReport:
    """Outcome of one file in a batch"""

    file_path: str
    generated: list[GenerationResult] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return bool(self.generated) and not self.failures


def generate_prop_types(file_path: str | Path, settings: GeneratorSettings) -> GenerationResult:
    """
    Generate and splice the declaration for ``settings.name`` in one file.

    Raises:
        ComponentNotFoundError, NoPropertiesFoundError: Per-component inference failures
        FileReadError, FileWriteError, UnsupportedLanguageError: I/O failures
    """
    if not settings.name:
        raise ComponentNotFoundError("No component name given", {"file_path": str(file_path)})

    source = SourceFile.from_file(file_path)
    tree = AstTree.parse(source)
    analysis = analyze_component(tree, settings.name, settings.alias)

    edits = plan_edits(tree, analysis, settings)
    source.write(apply_edits(tree.data, edits, source.encoding))

    result = GenerationResult(
        file_path=str(file_path),
        component=analysis.name,
        code_style=resolve_code_style(analysis, settings),
        replaced=analysis.prop_types_node is not None,
        property_names=[record.name for record in analysis.records],
    )
    logger.info(
        "prop_types_generated",
        file_path=result.file_path,
        component=result.component,
        props=len(result.property_names),
    )
    return result


def generate_file(file_path: str | Path, settings: GeneratorSettings, names: list[str] | None = None) -> FileReport:
    """
    Generate declarations for several components of one file.

    Components are taken from ``names``, then ``settings.name``, then detected.
    Per-component inference failures are logged and recorded; I/O failures propagate.
    """
    report = FileReport(file_path=str(file_path))
    if names is None:
        names = [settings.name] if settings.name else find_component_names(AstTree.parse(SourceFile.from_file(file_path)))

    for name in names:
        try:
            report.generated.append(generate_prop_types(file_path, settings.derive(name=name)))
        except InferenceError as e:
            logger.error("component_failed", file_path=str(file_path), component=name, error=str(e))
            report.failures[name] = e.message
    return report


def iter_project_files(root: str | Path) -> Iterator[Path]:
    """JavaScript-family files under ``root`` in sorted order, skipping node_modules and hidden dirs."""
    root = Path(root)
    if root.is_file():
        if root.suffix.lower() in PROJECT_EXTENSIONS:
            yield root
        return
    for path in sorted(root.iterdir()):
        if path.is_dir():
            if path.name in SKIPPED_DIRECTORIES or path.name.startswith("."):
                continue
            yield from iter_project_files(path)
        elif path.suffix.lower() in PROJECT_EXTENSIONS:
            yield path


def generate_project(root: str | Path, settings: GeneratorSettings) -> list[FileReport]:
    """
    Process every JavaScript-family file under ``root`` sequentially.

    A failing file is logged and recorded; the batch continues.
    """
    reports = []
    for path in iter_project_files(root):
        try:
            reports.append(generate_file(path, settings.derive(name=None)))
        except PropTypesError as e:
            logger.error("file_failed", file_path=str(path), error=str(e))
            report = FileReport(file_path=str(path))
            report.failures["*"] = e.message
            reports.append(report)
    return reports
