"""Declaration rendering."""

from codegraph_proptypes.render.code_builder import build_declaration, build_import_code, render_validator

__all__ = ["build_declaration", "build_import_code", "render_validator"]
