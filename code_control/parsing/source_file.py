"""
Source File representation and discovery
"""

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from code_control.errors import SourceNotFoundError, SourceReadError
from code_control.observability import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SourceFile:
    """
    A source file read fully into memory.

    Attributes:
        file_path: Path as discovered (relative paths stay relative)
        content: File content as string
        encoding: File encoding (default: utf-8)
    """

    file_path: str
    content: str
    encoding: str = "utf-8"

    @classmethod
    def from_file(cls, file_path: str | Path, encoding: str = "utf-8") -> "SourceFile":
        """
        Load source file from disk.

        Raises:
            SourceReadError: If the file cannot be read or decoded
        """
        path = Path(file_path)
        try:
            content = path.read_bytes().decode(encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(str(path), str(e)) from e

        return cls(file_path=str(path), content=content, encoding=encoding)

    @classmethod
    def from_content(cls, file_path: str, content: str, encoding: str = "utf-8") -> "SourceFile":
        return cls(file_path=file_path, content=content, encoding=encoding)

    @property
    def source_bytes(self) -> bytes:
        return self.content.encode(self.encoding)


def normalize_extensions(extensions: Iterable[str]) -> set[str]:
    """
    Normalize extension arguments.

    "js", ".js", "JS" and "js,mjs" are all accepted.

    Returns:
        Lower-case extensions without the leading dot
    """
    result = set()
    for ext in extensions:
        for part in ext.split(","):
            part = part.strip().lstrip(".").lower()
            if part:
                result.add(part)
    return result


def _has_extension(path: Path, extensions: set[str]) -> bool:
    return path.suffix.lstrip(".").lower() in extensions


def discover_sources(root: str | Path, extensions: Iterable[str]) -> Iterator[SourceFile]:
    """
    Yield every source file under root whose extension matches.

    Directories are walked top-down; within a directory files come first,
    each level in sorted order.

    Args:
        root: Directory to scan, or a single file
        extensions: File extensions to include

    Raises:
        SourceNotFoundError: If root does not exist
        SourceReadError: If a matching file cannot be read
    """
    root = Path(root)
    exts = normalize_extensions(extensions)

    if not root.exists():
        raise SourceNotFoundError(str(root))

    if root.is_file():
        if _has_extension(root, exts):
            yield SourceFile.from_file(root)
        return

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if _has_extension(path, exts):
                logger.debug("source_discovered", path=str(path))
                yield SourceFile.from_file(path)
