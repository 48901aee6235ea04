"""
Shared test fixtures
"""

import textwrap

import pytest

from codegraph_proptypes.common.observability import configure_logging
from codegraph_proptypes.parsing import AstTree


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep the user's persisted settings and PROPTYPES_* environment out of tests"""
    monkeypatch.setenv("PROPTYPES_CONFIG_FILE", str(tmp_path / "no-such-setting.json"))
    for name in ("PROPTYPES_CODE_STYLE", "PROPTYPES_AUTO_IMPORT", "PROPTYPES_QUOTE", "PROPTYPES_NAME"):
        monkeypatch.delenv(name, raising=False)
    yield
    # CLI tests swap sys.stderr; point logging back at the live stream
    configure_logging("WARNING")


@pytest.fixture
def parse():
    """Parse a (dedented) snippet into an AstTree"""

    def _parse(code: str, language: str = "javascript") -> AstTree:
        return AstTree.from_code(textwrap.dedent(code), language)

    return _parse


@pytest.fixture
def write_source(tmp_path):
    """Write a (dedented) snippet to a file and return its path"""

    def _write(name: str, code: str):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(code).lstrip("\n"), encoding="utf-8")
        return path

    return _write

