"""
Snapshot Differ

Multiset difference between two region sequences. A region cancels only
against a field-for-field identical region; there is no fuzzy matching, so
a region that moved or changed shows up as one removal plus one addition.
"""

from collections import Counter
from collections.abc import Sequence

from code_control.models import AnnotatedRegion, DiffResult


def _subtract(regions: Sequence[AnnotatedRegion], other: Sequence[AnnotatedRegion]) -> list[AnnotatedRegion]:
    """Regions not cancelled by an occurrence in other, in input order."""
    available = Counter(other)
    remaining = []
    for region in regions:
        if available[region] > 0:
            available[region] -= 1
        else:
            remaining.append(region)
    return remaining


def common_regions(old: Sequence[AnnotatedRegion], new: Sequence[AnnotatedRegion]) -> list[AnnotatedRegion]:
    """Multiset intersection, in old's order."""
    available = Counter(new)
    common = []
    for region in old:
        if available[region] > 0:
            available[region] -= 1
            common.append(region)
    return common


def diff_regions(old: Sequence[AnnotatedRegion], new: Sequence[AnnotatedRegion]) -> DiffResult:
    """
    Compare a stored snapshot with a fresh extraction.

    Args:
        old: Previously stored regions
        new: Freshly extracted regions

    Returns:
        DiffResult with removed (old order) and added (new order)
    """
    return DiffResult(removed=_subtract(old, new), added=_subtract(new, old))
