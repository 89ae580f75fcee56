"""
code-control

Records the code that follows `control` annotations in source files and
detects when any of those regions drift.

Pipeline:
- parsing: tree-sitter parser registry, source discovery, tree walker
- extraction: annotation matcher and region extractor
- snapshot: binary control-log codec and multiset differ
"""

__version__ = "0.1.0"

from code_control.extraction import AnnotationMatcher, RegionExtractor, extract_regions
from code_control.models import AnnotatedRegion, DiffResult, Position
from code_control.snapshot import diff_regions, read_snapshot, write_snapshot

__all__ = [
    "AnnotatedRegion",
    "AnnotationMatcher",
    "DiffResult",
    "Position",
    "RegionExtractor",
    "diff_regions",
    "extract_regions",
    "read_snapshot",
    "write_snapshot",
]
