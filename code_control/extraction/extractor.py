"""
Region Extractor

Pairs each control annotation with the node it annotates and records the
result as an AnnotatedRegion.
"""

from collections.abc import Iterable
from pathlib import Path

from tree_sitter import Node, Parser

from code_control.extraction.matcher import AnnotationMatcher
from code_control.models import AnnotatedRegion, Position
from code_control.observability import LogPerformance, get_logger
from code_control.parsing.parser_registry import ParserRegistry, get_registry
from code_control.parsing.source_file import SourceFile, discover_sources
from code_control.parsing.walker import traverse_and_select

logger = get_logger(__name__)


def _node_text(source_bytes: bytes, node: Node) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8")


class RegionExtractor:
    """
    Extracts annotated regions from source files of one language.

    Example:
        extractor = RegionExtractor(get_registry().get_parser("js"))
        regions = extractor.extract(SourceFile.from_file("index.js"))
    """

    def __init__(self, parser: Parser, matcher: AnnotationMatcher | None = None):
        self.parser = parser
        self.matcher = matcher or AnnotationMatcher()

    def extract(self, source: SourceFile) -> list[AnnotatedRegion]:
        """
        Extract regions from a single file.

        A file the parser cannot turn into a tree contributes no regions.
        A matching comment with no following sibling is skipped.
        """
        source_bytes = source.source_bytes
        tree = self.parser.parse(source_bytes)
        if tree is None:
            logger.warning("parse_failed", path=source.file_path)
            return []

        regions = []
        for comment in traverse_and_select(tree.root_node, self.matcher.select):
            annotation = _node_text(source_bytes, comment)
            if not self.matcher.matches(annotation):
                continue

            target = comment.next_named_sibling
            if target is None:
                logger.debug(
                    "annotation_without_sibling",
                    path=source.file_path,
                    line=comment.start_point[0] + 1,
                )
                continue

            regions.append(
                AnnotatedRegion(
                    path=source.file_path,
                    annotation=annotation,
                    content=_node_text(source_bytes, target),
                    start=Position.from_point(target.start_point),
                    end=Position.from_point(target.end_point),
                )
            )

        logger.debug("file_extracted", path=source.file_path, regions=len(regions))
        return regions

    def extract_all(self, sources: Iterable[SourceFile]) -> list[AnnotatedRegion]:
        """Concatenate per-file regions in source order."""
        regions: list[AnnotatedRegion] = []
        for source in sources:
            regions.extend(self.extract(source))
        return regions


def extract_regions(
    root: str | Path,
    language: str,
    extensions: Iterable[str],
    registry: ParserRegistry | None = None,
) -> list[AnnotatedRegion]:
    """
    Extract every annotated region below root.

    Args:
        root: Directory (or single file) to scan
        language: Language identifier or alias understood by the registry
        extensions: File extensions to include
        registry: Parser registry (defaults to the global one)

    Returns:
        Regions in file-discovery order, document order within a file

    Raises:
        GrammarError: Language unsupported or grammar unavailable
        DiscoveryError: Root missing or a file unreadable
    """
    registry = registry or get_registry()
    extractor = RegionExtractor(registry.get_parser(language))

    with LogPerformance(logger, "extract_regions", root=str(root), language=language):
        regions = extractor.extract_all(discover_sources(root, extensions))

    logger.info("regions_extracted", root=str(root), count=len(regions))
    return regions
