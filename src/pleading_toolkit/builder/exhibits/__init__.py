"""
Exhibit grouping and labeling.

Public API:
    group_exhibits: Exhibits -> lettered groups and labels
    build_index_entries: Groups -> exhibit index entries
    iter_emission_plan: Groups -> content emission order
"""

from .grouper import (
    ExhibitGroup,
    GroupingResult,
    IndexEntry,
    build_index_entries,
    group_exhibits,
    group_letter,
    iter_emission_plan,
)

__all__ = [
    "ExhibitGroup",
    "GroupingResult",
    "IndexEntry",
    "build_index_entries",
    "group_exhibits",
    "group_letter",
    "iter_emission_plan",
]
