"""
Splitting a RangeModel into two models at a text offset.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Tuple

from ..converters.overlap import sorted_insert_position
from ..core.errors import InvalidArgumentError
from ..core.range_model import RangeModel
from ..core.tag_registry import DEFAULT_REGISTRY, BlockKind, TagRegistry

logger = logging.getLogger(__name__)

Blocks = Dict[str, List[Any]]


def split(
    model: RangeModel, offset: int, registry: TagRegistry = DEFAULT_REGISTRY
) -> Tuple[RangeModel, RangeModel]:
    """
    Cut ``model`` at ``offset`` into a ``(before, after)`` pair.

    Continuous spans crossing the offset are cut in two, propertied ranges
    crossing it are cloned into both halves, and singled marks sitting exactly
    on it are dropped from both halves. Kinds left without ranges are omitted.

    Raises:
        InvalidArgumentError: if ``offset`` is not an integer in ``[0, len(text)]``
            or the model names an unknown kind.
    """
    if not isinstance(offset, int) or isinstance(offset, bool):
        raise InvalidArgumentError(f"Split offset must be an integer, got {offset!r}")
    if not 0 <= offset <= len(model.text):
        raise InvalidArgumentError(
            f"Split offset {offset} is outside the text (length {len(model.text)})"
        )

    before: Blocks = {}
    after: Blocks = {}

    _split_propertied_blocks(model.blocks_of_kind(BlockKind.PROPERTIED, registry), before, after, offset)
    _split_continuous_blocks(model.blocks_of_kind(BlockKind.CONTINUOUS, registry), before, after, offset)
    _split_singled_blocks(model.blocks_of_kind(BlockKind.SINGLED, registry), before, after, offset)

    return (
        RangeModel(text=model.text[:offset], blocks=before),
        RangeModel(text=model.text[offset:], blocks=after),
    )


def _assign(before: Blocks, after: Blocks, name: str, before_ranges: List[Any], after_ranges: List[Any]) -> None:
    if before_ranges:
        before[name] = before_ranges
    if after_ranges:
        after[name] = after_ranges


def _split_propertied_blocks(blocks: Blocks, before: Blocks, after: Blocks, num: int) -> None:
    """Propertied ranges cannot be cut, so ones crossing the offset are cloned."""
    for name, entries in blocks.items():
        before_ranges = []
        after_ranges = []

        for entry in entries:
            if entry["end"] <= num:
                before_ranges.append(copy.deepcopy(entry))
            elif entry["start"] >= num:
                cloned = copy.deepcopy(entry)
                cloned["start"] = entry["start"] - num
                cloned["end"] = entry["end"] - num
                after_ranges.append(cloned)
            else:
                cloned = copy.deepcopy(entry)
                cloned["end"] = num
                before_ranges.append(cloned)
                cloned = copy.deepcopy(entry)
                cloned["start"] = 0
                cloned["end"] = entry["end"] - num
                after_ranges.append(cloned)

        _assign(before, after, name, before_ranges, after_ranges)


def _split_continuous_blocks(blocks: Blocks, before: Blocks, after: Blocks, num: int) -> None:
    """Continuous spans are cut at the offset."""
    for name, block in blocks.items():
        index = sorted_insert_position(block, num)

        if index % 2 == 1:
            # the offset falls inside an open span
            before_ranges = list(block[:index - 1])
            before_ranges.extend((block[index - 1], num))
            after_ranges = []
            # an offset exactly on the span end leaves nothing to re-open
            if block[index] > num:
                after_ranges.extend((0, block[index] - num))
            after_ranges.extend(value - num for value in block[index + 1:])
        else:
            before_ranges = list(block[:index])
            after_ranges = [value - num for value in block[index:]]

        _assign(before, after, name, before_ranges, after_ranges)


def _split_singled_blocks(blocks: Blocks, before: Blocks, after: Blocks, num: int) -> None:
    """Marks cannot be cloned, so ones exactly on the offset are dropped."""
    for name, positions in blocks.items():
        before_ranges = [pos for pos in positions if pos < num]
        after_ranges = [pos - num for pos in positions if pos > num]

        dropped = len(positions) - len(before_ranges) - len(after_ranges)
        if dropped:
            logger.debug(f"Dropped {dropped} {name!r} mark(s) at split offset {num}")

        _assign(before, after, name, before_ranges, after_ranges)
