"""
Parsing Layer

Tree-sitter based parsing infrastructure.

Components:
- parser_registry: Language parser management (the grammar provider)
- source_file: Source file representation and discovery
- walker: Generic depth-first node selection
"""

from code_control.parsing.parser_registry import ParserRegistry, get_registry
from code_control.parsing.source_file import SourceFile, discover_sources, normalize_extensions
from code_control.parsing.walker import traverse_and_select

__all__ = [
    "ParserRegistry",
    "get_registry",
    "SourceFile",
    "discover_sources",
    "normalize_extensions",
    "traverse_and_select",
]
