"""
Extraction Layer

Finds control annotations and the code regions they mark.
"""

from code_control.extraction.extractor import RegionExtractor, extract_regions
from code_control.extraction.matcher import COMMENT_KINDS, CONTROL_PATTERN, AnnotationMatcher

__all__ = [
    "AnnotationMatcher",
    "COMMENT_KINDS",
    "CONTROL_PATTERN",
    "RegionExtractor",
    "extract_regions",
]
