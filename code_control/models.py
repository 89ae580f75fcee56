"""
Core Models

Position, AnnotatedRegion and DiffResult - plain immutable value records.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Position:
    """Zero-based (row, column) point as reported by tree-sitter"""

    row: int
    column: int

    def __post_init__(self) -> None:
        if self.row < 0 or self.column < 0:
            raise ValueError(f"Position must be non-negative, got ({self.row}, {self.column})")

    @classmethod
    def from_point(cls, point: Any) -> "Position":
        """Build from a tree-sitter Point (or any (row, column) pair)."""
        row, column = point
        return cls(row, column)

    @property
    def line(self) -> int:
        """1-based line number"""
        return self.row + 1


@dataclass(frozen=True)
class AnnotatedRegion:
    """
    One control-marked code span.

    Attributes:
        path: Source file the region was found in
        annotation: Exact text of the control comment (delimiters included)
        content: Exact text of the node following the comment
        start: Start of content
        end: End of content

    Two regions are equal only when all five fields are equal; this is the
    unit of comparison for change detection.
    """

    path: str
    annotation: str
    content: str
    start: Position
    end: Position

    @property
    def line_range(self) -> tuple[int, int]:
        """1-based inclusive (start_line, end_line)"""
        return self.start.line, self.end.line

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "annotation": self.annotation,
            "content": self.content,
            "start": {"row": self.start.row, "column": self.start.column},
            "end": {"row": self.end.row, "column": self.end.column},
        }


@dataclass(frozen=True)
class DiffResult:
    """Regions removed from the old snapshot and added in the new one"""

    removed: list[AnnotatedRegion] = field(default_factory=list)
    added: list[AnnotatedRegion] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.removed or self.added)
