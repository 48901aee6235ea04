"""
Source File representation
"""

from dataclasses import dataclass
from pathlib import Path

from codegraph_proptypes.errors import FileReadError, FileWriteError, UnsupportedLanguageError


@dataclass
class SourceFile:
    """
    Represents a JavaScript-family source file.

    Attributes:
        file_path: Path of the file on disk (or a label for in-memory sources)
        content: File content as string
        language: Grammar name (javascript, typescript, tsx)
        encoding: File encoding (default: utf-8)
    """

    file_path: str
    content: str
    language: str
    encoding: str = "utf-8"

    @classmethod
    def from_file(
        cls,
        file_path: str | Path,
        language: str | None = None,
        encoding: str = "utf-8",
    ) -> "SourceFile":
        """
        Load source file from disk.

        Args:
            file_path: Path to file
            language: Language override (auto-detected if None)
            encoding: File encoding

        Returns:
            SourceFile instance

        Raises:
            FileReadError: If the file cannot be read or decoded
            UnsupportedLanguageError: If the language cannot be detected
        """
        file_path = Path(file_path)

        if language is None:
            from .parser_registry import get_registry

            language = get_registry().detect_language(file_path)
            if language is None:
                raise UnsupportedLanguageError(f"Could not detect language for: {file_path}")

        try:
            content = file_path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(f"can't resolve filePath: {file_path}", {"reason": str(e)}) from e

        if not content:
            raise FileReadError(f"can't resolve filePath: {file_path}", {"reason": "empty file"})

        return cls(
            file_path=str(file_path),
            content=content,
            language=language,
            encoding=encoding,
        )

    @classmethod
    def from_content(
        cls,
        file_path: str,
        content: str,
        language: str = "javascript",
        encoding: str = "utf-8",
    ) -> "SourceFile":
        """
        Create source file from content string.

        Args:
            file_path: File path or label
            content: Source code content
            language: Grammar name
            encoding: File encoding

        Returns:
            SourceFile instance
        """
        return cls(
            file_path=file_path,
            content=content,
            language=language,
            encoding=encoding,
        )

    def write(self, content: str) -> None:
        """
        Rewrite the file on disk and keep this instance in sync.

        Raises:
            FileWriteError: If the file cannot be written
        """
        try:
            Path(self.file_path).write_text(content, encoding=self.encoding)
        except OSError as e:
            raise FileWriteError(f"can't write filePath: {self.file_path}", {"reason": str(e)}) from e
        self.content = content

    @property
    def data(self) -> bytes:
        """Encoded content (tree-sitter byte offsets index into this)"""
        return self.content.encode(self.encoding)
