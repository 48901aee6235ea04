"""
Tests for the command-line interface.
"""

import json

import pytest
from typer.testing import CliRunner

from codegraph_proptypes.cli import app


@pytest.fixture
def runner():
    return CliRunner()


@pytest.mark.integration
class TestGenerateCommand:
    """Test `proptypes generate`."""

    def test_generate_named_component(self, runner, write_source):
        path = write_source("Foo.jsx", "const Foo = ({ a }) => <div>{a}</div>;\n")

        result = runner.invoke(app, ["generate", str(path), "Foo"])

        assert result.exit_code == 0
        assert "Success" in result.output
        assert "Foo.propTypes = {\n  a: PropTypes.any\n};" in path.read_text(encoding="utf-8")

    def test_generate_all_components(self, runner, write_source):
        path = write_source(
            "Both.jsx",
            """
            const A = ({ x }) => <i>{x}</i>;
            const B = ({ y }) => <b>{y}</b>;
            """,
        )

        result = runner.invoke(app, ["generate", str(path), "--no-auto-import"])

        content = path.read_text(encoding="utf-8")
        assert result.exit_code == 0
        assert "import PropTypes" not in content
        assert "A.propTypes" in content
        assert "B.propTypes" in content

    def test_options(self, runner, write_source):
        path = write_source("Foo.jsx", "const Foo = ({ size = 'md' }) => <div>{size}</div>;\n")

        result = runner.invoke(app, ["generate", str(path), "Foo", "--quote", "double", "--with-defaults"])

        content = path.read_text(encoding="utf-8")
        assert result.exit_code == 0
        assert 'import PropTypes from "prop-types";' in content
        assert "Foo.defaultProps = {\n  size: 'md'\n};" in content

    def test_json_logs(self, runner, write_source):
        path = write_source("Foo.jsx", "const Foo = ({ a }) => <div>{a}</div>;\n")

        result = runner.invoke(app, ["generate", str(path), "Foo", "--json-logs"])

        assert result.exit_code == 0
        assert "Foo.propTypes" in path.read_text(encoding="utf-8")

    def test_missing_component(self, runner, write_source):
        path = write_source("Foo.jsx", "const Foo = ({ a }) => <div>{a}</div>;\n")

        result = runner.invoke(app, ["generate", str(path), "Bar"])

        assert result.exit_code == 1

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(app, ["generate", str(tmp_path / "Nope.jsx"), "Foo"])

        assert result.exit_code == 1

    def test_config_file_option(self, runner, write_source, tmp_path):
        config_file = tmp_path / "setting.json"
        config_file.write_text(json.dumps({"autoImport": "disable"}), encoding="utf-8")
        path = write_source("Foo.jsx", "const Foo = ({ a }) => <div>{a}</div>;\n")

        result = runner.invoke(app, ["generate", str(path), "Foo", "--config-file", str(config_file)])

        assert result.exit_code == 0
        assert "import PropTypes" not in path.read_text(encoding="utf-8")


@pytest.mark.integration
class TestProjectCommand:
    """Test `proptypes project`."""

    def test_project(self, runner, write_source, tmp_path):
        write_source("src/A.jsx", "const A = ({ x }) => <i>{x}</i>;\n")
        write_source("src/B.jsx", "const B = ({ y }) => <b>{y}</b>;\n")

        result = runner.invoke(app, ["project", str(tmp_path / "src")])

        assert result.exit_code == 0
        assert "component(s) generated" in result.output
        assert "A.propTypes" in (tmp_path / "src" / "A.jsx").read_text(encoding="utf-8")
        assert "B.propTypes" in (tmp_path / "src" / "B.jsx").read_text(encoding="utf-8")


@pytest.mark.integration
class TestConfigCommand:
    """Test `proptypes config`."""

    def test_write_config(self, runner, tmp_path):
        source = tmp_path / "mine.json"
        source.write_text(json.dumps({"codeStyle": "class"}), encoding="utf-8")
        target = tmp_path / "setting.json"

        result = runner.invoke(app, ["config", str(source), "--config-file", str(target)])

        assert result.exit_code == 0
        assert "Write Config Success" in result.output
        assert json.loads(target.read_text(encoding="utf-8")) == {"code_style": "class"}

    def test_malformed_config(self, runner, tmp_path):
        source = tmp_path / "mine.json"
        source.write_text("{oops", encoding="utf-8")

        result = runner.invoke(app, ["config", str(source), "--config-file", str(tmp_path / "setting.json")])

        assert result.exit_code == 1
        assert not (tmp_path / "setting.json").exists()
