"""
Ordering of continuous blocks when rendering them back into a tree.

Continuous ranges of one kind never overlap each other, but ranges of two
different kinds can cross. Wrapping the kind with fewer crossings first keeps
the rendered nesting shallow.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from typing import Dict, List, Sequence

from ..core.tag_registry import TagRegistry

logger = logging.getLogger(__name__)


def sorted_insert_position(block: Sequence[int], value: int) -> int:
    """
    Index at which ``value`` would be inserted into an ascending block.

    An exact match returns the index of the matching offset.
    """
    return bisect_left(block, value)


def count_crossings(block_a: Sequence[int], *other_blocks: Sequence[int]) -> int:
    """
    Count how many ranges of the other blocks cross a boundary of ``block_a``.

    A range ``[start, end)`` crosses when ``start`` and ``end`` would land at
    different insertion positions in ``block_a``.

    Example:
        count_crossings([0, 10], [5, 15]) == 1
        count_crossings([0, 20], [5, 10]) == 0
    """
    count = 0
    for block_b in other_blocks:
        for i in range(0, len(block_b) - 1, 2):
            insert_start = sorted_insert_position(block_a, block_b[i])
            insert_end = sorted_insert_position(block_a, block_b[i + 1])
            if insert_start != insert_end:
                count += 1
    return count


def order_continuous_blocks(
    blocks: Dict[str, List[int]], registry: TagRegistry
) -> List[str]:
    """
    Return the kind names of ``blocks`` in the order they should be rendered.

    Kinds start in registry order. With exactly two kinds the pair is swapped
    when rendering the second first produces fewer crossings. Three or more
    kinds keep registry order.
    """
    names = sorted(blocks, key=registry.order_of)
    if len(names) != 2:
        return names

    first, second = names
    forward = count_crossings(blocks[first], blocks[second])
    backward = count_crossings(blocks[second], blocks[first])
    if forward > backward:
        names = [second, first]

    logger.debug(f"Continuous render order {names} (crossings {forward} vs {backward})")
    return names
