"""
Converter from a RangeModel back to a markup tree.

The text is materialized as a single text node, then ranges are layered on
top by splitting text nodes and wrapping the pieces:
1. Propertied ranges, outermost first, which subdivide text nodes without
   reordering them
2. Continuous ranges, ordered to keep crossings between kinds low
3. Singled marks, which need the final text node boundaries
"""

from __future__ import annotations

import logging
from bisect import bisect_left, bisect_right
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..core.errors import InvalidArgumentError
from ..core.range_model import RangeModel
from ..core.tag_registry import DEFAULT_REGISTRY, BlockKind, TagRegistry
from ..core.tree import SoupTreeAdapter, TreeAdapter
from .overlap import order_continuous_blocks

TextTarget = Tuple[int, int, int]  # (text node index, local start, local end)


class ModelToTreeConverter:
    """
    Converts a RangeModel into a new tree container.

    The converter owns the container it builds for the duration of a call;
    nothing else should mutate it until ``convert`` returns. While building,
    it keeps the container's text nodes in document order together with the
    text offset each one starts at, so ranges are located without walking the
    tree again.
    """

    def __init__(
        self,
        registry: TagRegistry = DEFAULT_REGISTRY,
        adapter: Optional[TreeAdapter] = None,
    ):
        self.registry = registry
        self.adapter = adapter or SoupTreeAdapter()
        self.logger = logging.getLogger(__name__)
        self._nodes: List[Any] = []
        self._starts: List[int] = []
        self._length = 0

    def convert(self, model: RangeModel) -> Any:
        """
        Build a tree for the given model.

        Raises:
            InvalidArgumentError: if the model names an unknown kind, a block
                does not fit its kind, or a range reaches past the end of its
                text.
        """
        propertied = model.blocks_of_kind(BlockKind.PROPERTIED, self.registry)
        continuous = model.blocks_of_kind(BlockKind.CONTINUOUS, self.registry)
        singled = model.blocks_of_kind(BlockKind.SINGLED, self.registry)
        self.logger.debug(f"Emitting {len(model.text)} characters across {len(model.blocks)} kinds")

        root = self.adapter.create_container()
        self._nodes, self._starts, self._length = [], [], len(model.text)
        if model.text:
            node = self.adapter.create_text(model.text)
            self.adapter.append_child(root, node)
            self._nodes.append(node)
            self._starts.append(0)

        self._add_propertied_blocks(propertied)
        self._add_continuous_blocks(continuous)
        self._add_singled_blocks(root, singled)

        return root

    def _add_propertied_blocks(self, blocks: Dict[str, List[Any]]) -> None:
        entries = [
            (self.registry.kind_name_to_tag(name), entry)
            for name, ranges in blocks.items()
            for entry in ranges
        ]
        # outer ranges first, across kinds, so inner ones nest instead of cutting them
        entries.sort(key=lambda item: (item[1]["start"], -item[1]["end"]))

        for tag, entry in entries:
            attrs = {
                key: str(value) for key, value in entry.items()
                if key not in ("start", "end")
            }
            self._wrap_range(tag, attrs, entry["start"], entry["end"])

    def _add_continuous_blocks(self, blocks: Dict[str, List[int]]) -> None:
        for name in order_continuous_blocks(blocks, self.registry):
            tag = self.registry.kind_name_to_tag(name)
            block = blocks[name]
            for i in range(0, len(block) - 1, 2):
                self._wrap_range(tag, {}, block[i], block[i + 1])

    def _add_singled_blocks(self, root: Any, blocks: Dict[str, List[int]]) -> None:
        for name, positions in blocks.items():
            tag = self.registry.kind_name_to_tag(name)
            for pos in positions:
                self._insert_mark(root, tag, pos)

    def _wrap_range(self, tag: str, attrs: Mapping[str, str], start: int, end: int) -> None:
        # later nodes first, so the indexes of earlier targets stay valid
        for target in reversed(self._text_targets(start, end)):
            self._wrap_text(tag, attrs, target)

    def _text_targets(self, start: int, end: int) -> List[TextTarget]:
        """Find the text nodes covering ``[start, end)`` and the local span of each."""
        if start < 0:
            raise InvalidArgumentError(f"Range {start}-{end} starts before the text")
        if end > self._length:
            raise InvalidArgumentError(f"Range {start}-{end} reaches past the end of the text ({self._length})")

        targets = []
        index = max(bisect_right(self._starts, start) - 1, 0)
        while index < len(self._nodes) and self._starts[index] < end:
            node_start = self._starts[index]
            node_end = node_start + len(self.adapter.text_value(self._nodes[index]))
            lo = max(start, node_start)
            hi = min(end, node_end)
            # pieces of zero length are skipped
            if lo < hi:
                targets.append((index, lo - node_start, hi - node_start))
            index += 1
        return targets

    def _wrap_text(self, tag: str, attrs: Mapping[str, str], target: TextTarget) -> None:
        """Split a text node into before/middle/after and wrap the middle."""
        index, lo, hi = target
        node = self._nodes[index]
        node_start = self._starts[index]
        text = self.adapter.text_value(node)
        start_text, middle_text, end_text = text[:lo], text[lo:hi], text[hi:]
        pieces = []

        block_el = self.adapter.create_element(tag, attrs)
        middle = self.adapter.create_text(middle_text)
        self.adapter.append_child(block_el, middle)
        self.adapter.insert_before(block_el, node)

        if start_text:
            head = self.adapter.create_text(start_text)
            self.adapter.insert_before(head, block_el)
            pieces.append((head, node_start))
        pieces.append((middle, node_start + lo))

        if end_text:
            pieces.append((self.adapter.replace_text(node, end_text), node_start + hi))
        else:
            self.adapter.remove(node)

        self._replace_entry(index, pieces)

    def _insert_mark(self, root: Any, tag: str, pos: int) -> None:
        """Split the text node at ``pos`` and put an empty element between the halves."""
        if pos < 0:
            raise InvalidArgumentError(f"Position {pos} is before the start of the text")
        if pos > self._length:
            raise InvalidArgumentError(f"Position {pos} is past the end of the text ({self._length})")
        block_el = self.adapter.create_element(tag)

        if not self._nodes:
            # no text at all: marks simply follow each other
            self.adapter.append_child(root, block_el)
            return

        # on a boundary between two nodes the mark follows the earlier one
        index = max(bisect_left(self._starts, pos) - 1, 0)
        node = self._nodes[index]
        node_start = self._starts[index]
        text = self.adapter.text_value(node)
        local = pos - node_start
        pieces = []

        self.adapter.insert_before(block_el, node)
        if text[:local]:
            head = self.adapter.create_text(text[:local])
            self.adapter.insert_before(head, block_el)
            pieces.append((head, node_start))
        if text[local:]:
            pieces.append((self.adapter.replace_text(node, text[local:]), pos))
        else:
            self.adapter.remove(node)

        self._replace_entry(index, pieces)

    def _replace_entry(self, index: int, pieces: List[Tuple[Any, int]]) -> None:
        self._nodes[index:index + 1] = [node for node, _ in pieces]
        self._starts[index:index + 1] = [start for _, start in pieces]


def emit(
    model: RangeModel,
    registry: TagRegistry = DEFAULT_REGISTRY,
    adapter: Optional[TreeAdapter] = None,
) -> Any:
    """Convert a RangeModel to a tree container."""
    return ModelToTreeConverter(registry, adapter).convert(model)


def to_html(
    model: RangeModel,
    registry: TagRegistry = DEFAULT_REGISTRY,
    adapter: Optional[TreeAdapter] = None,
) -> str:
    """Convert a RangeModel to an HTML fragment string."""
    converter = ModelToTreeConverter(registry, adapter)
    return converter.adapter.serialize(converter.convert(model))
