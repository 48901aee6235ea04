"""
Generator settings

One immutable settings value per invocation, layered as

    defaults < environment (PROPTYPES_*) < persisted JSON file < command-line overrides

Per-component variations (name, detected code style) are derived copies.
"""

import json
import os
import re
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from codegraph_proptypes.errors import ConfigParseError

DEFAULT_CONFIG_FILE = Path.home() / ".proptypes" / "setting.json"


class CodeStyle(str, Enum):
    """Declaration surface style"""

    DEFAULT = "default"  # Name.propTypes = {...};
    CLASS = "class"  # static propTypes = {...};


class AutoImport(str, Enum):
    ENABLE = "enable"
    DISABLE = "disable"


class QuoteStyle(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"


class GeneratorSettings(BaseSettings):
    """
    Style configuration for one generation run.

    Environment variables use the PROPTYPES_ prefix,
    e.g. PROPTYPES_CODE_STYLE=class, PROPTYPES_AUTO_IMPORT=disable.
    """

    model_config = SettingsConfigDict(
        env_prefix="PROPTYPES_",
        extra="ignore",
        frozen=True,
    )

    name: str | None = None
    alias: str = "propTypes"
    code_style: CodeStyle | None = None
    auto_import: AutoImport = AutoImport.ENABLE
    quote: QuoteStyle = QuoteStyle.SINGLE
    tab_width: int = 2
    with_defaults: bool = False

    @property
    def indent_unit(self) -> str:
        return " " * max(self.tab_width, 0)

    @property
    def quote_char(self) -> str:
        return '"' if self.quote == QuoteStyle.DOUBLE else "'"

    @property
    def import_enabled(self) -> bool:
        return self.auto_import != AutoImport.DISABLE

    def derive(self, **changes: Any) -> "GeneratorSettings":
        """Copy with some fields replaced (validated)."""
        data = self.model_dump()
        data.update(changes)
        return type(self).model_validate(data)


# ============================================================
# Persisted configuration
# ============================================================

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _to_snake(key: str) -> str:
    """``codeStyle`` -> ``code_style``"""
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def resolve_config_file(config_file: str | Path | None = None) -> Path:
    """Explicit path, then PROPTYPES_CONFIG_FILE, then ~/.proptypes/setting.json"""
    if config_file:
        return Path(config_file)
    env_path = os.getenv("PROPTYPES_CONFIG_FILE")
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE


def read_config_file(config_file: str | Path | None = None) -> dict[str, Any]:
    """
    Persisted settings as snake_case keys ({} when the file does not exist).

    Raises:
        ConfigParseError: If the file is not a JSON object
    """
    path = resolve_config_file(config_file)
    if not path.exists():
        return {}
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigParseError(f"Cannot read config file: {path}", {"reason": str(e)}) from e
    return parse_config_json(raw, source=str(path))


def parse_config_json(raw: str, source: str = "<string>") -> dict[str, Any]:
    """
    Parse JSON settings text into snake_case keys.

    Raises:
        ConfigParseError: If the text is not a JSON object
    """
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigParseError("JSON parse Fail !", {"source": source, "reason": str(e)}) from e
    if not isinstance(data, dict):
        raise ConfigParseError("JSON parse Fail !", {"source": source, "reason": "expected a JSON object"})
    return {_to_snake(key): value for key, value in data.items()}


def write_config_file(values: dict[str, Any], config_file: str | Path | None = None) -> Path:
    """
    Merge ``values`` into the persisted settings file.

    Values are validated before anything is written.

    Returns:
        Path of the written file

    Raises:
        ConfigParseError: If the merged settings are invalid or cannot be written
    """
    path = resolve_config_file(config_file)
    merged = {**read_config_file(path), **{_to_snake(key): value for key, value in values.items()}}
    try:
        GeneratorSettings.model_validate(merged)
    except ValidationError as e:
        raise ConfigParseError("Invalid settings", {"errors": e.errors(include_url=False)}) from e

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(merged, indent=2), encoding="utf-8")
    except OSError as e:
        raise ConfigParseError(f"Cannot write config file: {path}", {"reason": str(e)}) from e
    return path


def load_settings(config_file: str | Path | None = None, **overrides: Any) -> GeneratorSettings:
    """
    Build the settings value for one invocation.

    Args:
        config_file: Persisted settings path (see resolve_config_file)
        **overrides: Command-line values; None means "not given"

    Raises:
        ConfigParseError: If the persisted file or the merged values are invalid
    """
    values = read_config_file(config_file)
    values.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return GeneratorSettings(**values)
    except ValidationError as e:
        raise ConfigParseError("Invalid settings", {"errors": e.errors(include_url=False)}) from e
