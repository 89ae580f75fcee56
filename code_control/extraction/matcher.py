"""
Control annotation matcher

Decides which comment nodes are control annotations.
"""

import re

from tree_sitter import Node

# Comment node kinds across the supported grammars
COMMENT_KINDS = frozenset({"comment", "line_comment", "block_comment"})

# `control` must open a comment line: only delimiters/whitespace may precede
# it on that line. Each identifier is one whitespace char then word chars.
CONTROL_PATTERN = re.compile(r"^[^\w\n]*control((?:\s\w+)+)", re.MULTILINE)

_IDENTIFIERS = re.compile(r"(?:\s\w[\w-]*)+")


class AnnotationMatcher:
    """
    Recognizes control annotations among comment nodes.

    Example:
        matcher = AnnotationMatcher()
        matcher.matches("/* control HE-110 JS-1 */")  # True
        matcher.matches("// controlling")  # False
    """

    def __init__(self, comment_kinds: frozenset[str] = COMMENT_KINDS, pattern: re.Pattern = CONTROL_PATTERN):
        self.comment_kinds = comment_kinds
        self.pattern = pattern

    def is_comment(self, node: Node) -> bool:
        return node.type in self.comment_kinds

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def control_ids(self, text: str) -> list[str]:
        """Identifiers named by the annotation, e.g. ["HE-110", "JS-1"]"""
        match = self.pattern.search(text)
        if match is None:
            return []
        # Rescan from the first identifier so dashed ids (HE-110) stay whole
        return _IDENTIFIERS.match(text, match.start(1)).group(0).split()

    def select(self, node: Node) -> Node | None:
        """Walker selector: keep comment nodes, skip everything else."""
        if self.is_comment(node):
            return node
        return None
