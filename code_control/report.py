"""
Human-readable renderings of extraction and diff results.
"""

import json
from collections.abc import Sequence

from code_control.models import AnnotatedRegion, DiffResult

NO_CHANGES = "No changes detected."
CHANGES_DETECTED = "Changes Detected!"


def _region_line(marker: str, region: AnnotatedRegion) -> str:
    start_line, end_line = region.line_range
    return f"\t{marker} {region.path};{start_line}:{end_line}"


def format_diff(result: DiffResult) -> list[str]:
    """
    Render a diff, one line per changed region.

    Example:
        Changes Detected!
        \t- src/index.js;3:3
        \t+ src/index.js;4:4
    """
    if not result.has_changes:
        return [NO_CHANGES]

    lines = [CHANGES_DETECTED]
    lines.extend(_region_line("-", region) for region in result.removed)
    lines.extend(_region_line("+", region) for region in result.added)
    return lines


def format_written(path: str, count: int) -> str:
    noun = "region" if count == 1 else "regions"
    return f"{path} generated ({count} {noun})."


def regions_to_json(regions: Sequence[AnnotatedRegion]) -> str:
    return json.dumps([region.to_dict() for region in regions], indent=2, ensure_ascii=False)
