"""
Module: builder.layout.paginator

Purpose:
    Interactive paginator. Distributes rich-text blocks over preview
    pages using an injected measurement oracle, splitting paragraphs,
    lists, blockquotes and headings at a character offset when they
    straddle a page boundary, and tables between rows.

Key Functions:
    - paginate(): Main pagination function

Algorithm:
    Queue of blocks, remaining budget per page:
    1. Whole block fits (within tolerance): commit it
    2. Budget exhausted and page has content: flush, retry on next page
    3. Splittable: binary-search the longest prefix that fits, move the
       cut back to the nearest clean break, commit the head, flush and
       push the tail to the front of the queue
    4. Table taller than an empty page: commit the most leading rows
       that fit, flush and push the remaining rows (a continued table)
       to the front of the queue
    5. Unsplittable or nothing fits: flush and retry, or force the block
       onto its own page when the page is already empty

Dependencies:
    - core.models.blocks: Block, BlockKind
    - builder.layout.models: PageBudgets, PreviewPage, PreviewResult

Used By:
    - builder.preview: Section previews
"""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import Callable, Deque, List, Sequence

from pleading_toolkit.core.models.blocks import Block, BlockKind

from .models import PageBudgets, PreviewPage, PreviewResult

logger = logging.getLogger(__name__)

# Absorbs sub-pixel rounding in measured heights (points)
DEFAULT_TOLERANCE = 0.5

# Furthest the cut may move back looking for a clean break (characters)
SNAP_WINDOW = 200

MeasureFn = Callable[[Block], float]
MeasurePrefixFn = Callable[[Block, int], float]


def paginate(
    blocks: Sequence[Block],
    budgets: PageBudgets,
    measure: MeasureFn,
    measure_prefix: MeasurePrefixFn,
    *,
    spacing: float = 0.0,
    tolerance: float = DEFAULT_TOLERANCE,
    snap_window: int = SNAP_WINDOW,
) -> PreviewResult:
    """
    Distribute blocks over pages.

    Args:
        blocks: Blocks in reading order
        budgets: Content height of the first and following pages
        measure: Rendered height of a whole block
        measure_prefix: Rendered height of a block's first N characters
        spacing: Gap consumed before a block that is not first on its page
        tolerance: Overflow allowed when testing fit
        snap_window: Characters to search back for a clean break

    Returns:
        PreviewResult with at least one page. Concatenating the pages'
        plain text reproduces the input blocks' plain text.
    """
    if not budgets.is_valid:
        message = f"Invalid page budgets {budgets}; placing all blocks on one page"
        logger.warning(message)
        return PreviewResult(pages=(PreviewPage(blocks=tuple(blocks)),), warnings=(message,))

    queue: Deque[Block] = deque(blocks)
    pages: List[PreviewPage] = []
    warnings: List[str] = []

    current: List[Block] = []
    remaining = budgets.first
    used = 0.0

    def flush() -> None:
        nonlocal current, remaining, used
        pages.append(PreviewPage(blocks=tuple(current), used=used))
        current = []
        remaining = budgets.other
        used = 0.0

    while queue:
        block = queue.popleft()
        gap = spacing if current else 0.0
        height = measure(block)

        if not math.isfinite(height) or height < 0 or (height == 0 and block.text_length > 0):
            message = f"Measurement anomaly ({height}) for {block.kind} block; placing on its own page"
            logger.warning(message)
            warnings.append(message)
            if current:
                flush()
            current.append(block)
            flush()
            continue

        # 1. Whole block fits
        if gap + height <= remaining + tolerance:
            current.append(block)
            remaining -= gap + height
            used += gap + height
            continue

        available = remaining - gap

        # 2. Page is full
        if current and available <= tolerance:
            flush()
            queue.appendleft(block)
            continue

        # 3. Split at a character offset
        if block.is_splittable and block.text_length > 1:
            cut = _find_cut(block, available, measure_prefix, tolerance, snap_window)
            if cut >= block.text_length:
                # Prefix measurement disagrees with whole-block measurement
                current.append(block)
                flush()
                continue
            if cut > 0:
                head = block.head(cut)
                current.append(head)
                used += gap + max(measure_prefix(block, cut), 0.0)
                flush()
                queue.appendleft(block.tail(cut))
                logger.debug(f"Split {block.kind} block at offset {cut} of {block.text_length}")
                continue

        # 4. Table taller than an empty page: split between rows
        if not current and block.kind == BlockKind.TABLE and len(block.rows) > 1:
            count = min(max(_rows_that_fit(block, available, measure, tolerance), 1), len(block.rows) - 1)
            head, tail = block.split_rows(count)
            current.append(head)
            used += max(measure(head), 0.0)
            flush()
            queue.appendleft(tail)
            logger.debug(f"Split table after row {count} of {len(block.rows)}")
            continue

        # 5. Nothing fits here
        if current:
            flush()
            queue.appendleft(block)
            continue
        logger.debug(f"Forcing oversized {block.kind} block onto its own page")
        current.append(block)
        used += height
        flush()

    if current or not pages:
        flush()

    logger.debug(f"Paginated {len(blocks)} blocks into {len(pages)} pages")
    return PreviewResult(pages=tuple(pages), warnings=tuple(warnings))


def _find_cut(
    block: Block,
    available: float,
    measure_prefix: MeasurePrefixFn,
    tolerance: float,
    snap_window: int,
) -> int:
    """
    Longest prefix length that fits, snapped back to a clean break.

    Returns 0 when no prefix fits.
    """
    total = block.text_length
    low, high = 1, total
    best = 0
    while low <= high:
        mid = (low + high) // 2
        if measure_prefix(block, mid) <= available + tolerance:
            best = mid
            low = mid + 1
        else:
            high = mid - 1

    if best == 0 or best >= total:
        return best

    floor = max(1, best - snap_window)
    for offset in range(best, floor - 1, -1):
        if block.is_break_offset(offset):
            return offset
    return best


def _rows_that_fit(block: Block, available: float, measure: MeasureFn, tolerance: float) -> int:
    """Largest number of leading table rows that fit in ``available``."""
    low, high = 1, len(block.rows)
    best = 0
    while low <= high:
        mid = (low + high) // 2
        if measure(block.split_rows(mid)[0]) <= available + tolerance:
            best = mid
            low = mid + 1
        else:
            high = mid - 1
    return best
