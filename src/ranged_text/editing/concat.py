"""
Concatenating two RangeModels, re-joining continuous spans cut at the seam.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List

from ..core.range_model import RangeModel
from ..core.tag_registry import DEFAULT_REGISTRY, BlockKind, TagRegistry

Blocks = Dict[str, List[Any]]


def concat(
    before: RangeModel, after: RangeModel, registry: TagRegistry = DEFAULT_REGISTRY
) -> RangeModel:
    """
    Join two models end to end.

    Ranges of ``after`` are shifted by the length of ``before.text``. A
    continuous span ending exactly at the seam is fused with one of the same
    kind starting there; propertied and singled ranges are never fused.

    Raises:
        InvalidArgumentError: if either model names an unknown kind.
    """
    num = len(before.text)
    blocks: Blocks = {}

    _concat_propertied_blocks(
        before.blocks_of_kind(BlockKind.PROPERTIED, registry),
        after.blocks_of_kind(BlockKind.PROPERTIED, registry),
        blocks,
        num,
    )
    _concat_continuous_blocks(
        before.blocks_of_kind(BlockKind.CONTINUOUS, registry),
        after.blocks_of_kind(BlockKind.CONTINUOUS, registry),
        blocks,
        num,
    )
    _concat_singled_blocks(
        before.blocks_of_kind(BlockKind.SINGLED, registry),
        after.blocks_of_kind(BlockKind.SINGLED, registry),
        blocks,
        num,
    )

    return RangeModel(text=before.text + after.text, blocks=blocks)


def _merge(before_blocks: Blocks, shifted: Blocks, blocks: Blocks) -> None:
    for name, ranges in before_blocks.items():
        merged = ranges + shifted.pop(name, [])
        if merged:
            blocks[name] = merged
    for name, ranges in shifted.items():
        if ranges:
            blocks[name] = ranges


def _concat_propertied_blocks(before_blocks: Blocks, after_blocks: Blocks, blocks: Blocks, num: int) -> None:
    shifted = {}
    for name, entries in after_blocks.items():
        moved = []
        for entry in entries:
            cloned = copy.deepcopy(entry)
            cloned["start"] = entry["start"] + num
            cloned["end"] = entry["end"] + num
            moved.append(cloned)
        shifted[name] = moved

    _merge(copy.deepcopy(before_blocks), shifted, blocks)


def _concat_continuous_blocks(before_blocks: Blocks, after_blocks: Blocks, blocks: Blocks, num: int) -> None:
    shifted = {
        name: [value + num for value in block] for name, block in after_blocks.items()
    }

    joined = {}
    for name, block in before_blocks.items():
        block = list(block)
        following = shifted.get(name)
        if following and block and block[-1] == num and following[0] == num:
            # a span cut at the seam becomes one span again
            shifted[name] = following[1:]
            block.pop()
        joined[name] = block

    _merge(joined, shifted, blocks)


def _concat_singled_blocks(before_blocks: Blocks, after_blocks: Blocks, blocks: Blocks, num: int) -> None:
    shifted = {
        name: [pos + num for pos in positions] for name, positions in after_blocks.items()
    }
    _merge({name: list(positions) for name, positions in before_blocks.items()}, shifted, blocks)
