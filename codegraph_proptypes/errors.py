"""
codegraph-proptypes Exception Hierarchy

Usage:
    1. Per-component inference failures (InferenceError) -> log and continue with the next unit
    2. I/O and configuration failures -> surface to the caller
    3. External errors -> wrap in a custom exception

Example:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FileReadError(f"Cannot read {path}", {"path": str(path)}) from e
"""

from typing import Any


class PropTypesError(Exception):
    """Base exception for all codegraph-proptypes errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize error.

        Args:
            message: Human-readable error message
            details: Optional additional details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


# ============================================================
# Inference Errors
# ============================================================


class InferenceError(PropTypesError):
    """Per-component inference failures."""

    pass


class ComponentNotFoundError(InferenceError):
    """No component node matches the requested name."""

    pass


class NoPropertiesFoundError(InferenceError):
    """The merged property set is empty."""

    pass


# ============================================================
# I/O Errors
# ============================================================


class SourceIOError(PropTypesError):
    """Source file I/O failures."""

    pass


class FileReadError(SourceIOError):
    """Source file could not be read or decoded."""

    pass


class FileWriteError(SourceIOError):
    """Source file could not be rewritten."""

    pass


class UnsupportedLanguageError(SourceIOError):
    """No grammar is available for the file."""

    pass


# ============================================================
# Configuration Errors
# ============================================================


class ConfigParseError(PropTypesError):
    """Malformed or invalid persisted configuration."""

    pass
