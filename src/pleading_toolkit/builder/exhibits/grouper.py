"""
Module: builder.exhibits.grouper

Purpose:
    Assign letters to exhibit groups and numbered labels to their
    children, derive the exhibit index entries and the order in which
    exhibit content is emitted.

Key Functions:
    - group_exhibits(): Single left-to-right grouping scan
    - group_letter(): 0 -> "A", 25 -> "Z", 26 -> "AA"
    - build_index_entries(): Display entries for the exhibit index
    - iter_emission_plan(): (label, exhibit) pairs in output order

Algorithm:
    1. A group marker or parent exhibit opens a new group
    2. Compound exhibits that follow join the open group as children
    3. A compound exhibit with no open group opens its own group
    4. Groups are lettered A, B, C ... in order; children get the
       group letter plus 1..n

Dependencies:
    - core.models.exhibits: Exhibit, ExhibitRole

Used By:
    - builder.output.exhibit_pages: Index and cover pages
    - builder.controller: Exhibit section emission
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Sequence, Tuple

from pleading_toolkit.core.models.exhibits import Exhibit, ExhibitRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExhibitGroup:
    """
    One lettered exhibit group.

    Attributes:
        parent_index: Index of the group's opening exhibit
        child_indices: Indices of compound children in order
        letter: Group letter ("A", "B", ... "AA")
    """
    parent_index: int
    child_indices: Tuple[int, ...]
    letter: str

    @property
    def has_children(self) -> bool:
        return bool(self.child_indices)

    def child_label(self, position: int) -> str:
        """Label of the child at 0-based ``position`` (A1, A2, ...)."""
        return f"{self.letter}{position + 1}"

    @property
    def indices(self) -> Tuple[int, ...]:
        return (self.parent_index, *self.child_indices)


@dataclass(frozen=True)
class GroupingResult:
    """
    Groups plus a label for every exhibit index.

    Attributes:
        groups: Groups in traversal order
        labels: Exhibit index -> label ("A" for parents, "A1" for children)
    """
    groups: Tuple[ExhibitGroup, ...]
    labels: Dict[int, str]


@dataclass(frozen=True)
class IndexEntry:
    """
    One line of the exhibit index.

    Attributes:
        label: Exhibit label ("A", "A1")
        title: Display title
        description: Free text, may be empty
        children: Entries of compound children
    """
    label: str
    title: str
    description: str = ""
    children: Tuple["IndexEntry", ...] = ()

    @property
    def display_label(self) -> str:
        return f"Exhibit {self.label} - {self.title}"


def group_letter(index: int) -> str:
    """
    Letter for the group at 0-based ``index``, continuing past Z.

    Example:
        >>> [group_letter(i) for i in (0, 25, 26, 27)]
        ['A', 'Z', 'AA', 'AB']
    """
    if index < 0:
        raise ValueError(f"Group index must be >= 0, got {index}")
    letters = ""
    n = index + 1
    while n > 0:
        n, remainder = divmod(n - 1, 26)
        letters = chr(65 + remainder) + letters
    return letters


def group_exhibits(exhibits: Sequence[Exhibit]) -> GroupingResult:
    """
    Group exhibits and assign labels.

    Every index appears in exactly one group and labels are unique.
    Running the scan twice over the same list yields identical groups.

    Args:
        exhibits: Exhibits in section order

    Returns:
        GroupingResult with groups and per-index labels
    """
    openers: List[int] = []
    children: Dict[int, List[int]] = {}

    for index, exhibit in enumerate(exhibits):
        if exhibit.role == ExhibitRole.COMPOUND and openers:
            children[openers[-1]].append(index)
            continue
        if exhibit.role == ExhibitRole.COMPOUND:
            logger.debug(f"Compound exhibit {exhibit.exhibit_id} has no group; opening one")
        openers.append(index)
        children[index] = []

    groups: List[ExhibitGroup] = []
    labels: Dict[int, str] = {}
    for position, opener in enumerate(openers):
        group = ExhibitGroup(
            parent_index=opener,
            child_indices=tuple(children[opener]),
            letter=group_letter(position),
        )
        groups.append(group)
        labels[opener] = group.letter
        for child_position, child_index in enumerate(group.child_indices):
            labels[child_index] = group.child_label(child_position)

    return GroupingResult(groups=tuple(groups), labels=labels)


def build_index_entries(grouping: GroupingResult, exhibits: Sequence[Exhibit]) -> Tuple[IndexEntry, ...]:
    """Index entries in group order, children nested under their parent."""
    entries: List[IndexEntry] = []
    for group in grouping.groups:
        parent = exhibits[group.parent_index]
        child_entries = tuple(
            IndexEntry(
                label=grouping.labels[index],
                title=exhibits[index].display_title,
                description=exhibits[index].description.strip(),
            )
            for index in group.child_indices
        )
        entries.append(IndexEntry(
            label=group.letter,
            title=parent.display_title,
            description=parent.description.strip(),
            children=child_entries,
        ))
    return tuple(entries)


def iter_emission_plan(
    grouping: GroupingResult,
    exhibits: Sequence[Exhibit],
) -> Iterator[Tuple[str, Exhibit]]:
    """
    Yield (label, exhibit) pairs whose content is emitted, in order.

    A group's own exhibit is emitted only when the group has no
    children; group markers carry no content and are never emitted.
    """
    for group in grouping.groups:
        parent = exhibits[group.parent_index]
        if not group.has_children and parent.role != ExhibitRole.GROUP_MARKER:
            yield group.letter, parent
        for index in group.child_indices:
            yield grouping.labels[index], exhibits[index]
