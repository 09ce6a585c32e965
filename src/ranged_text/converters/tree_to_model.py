"""
Converter from a markup tree to a RangeModel.

Walks the tree in document order, accumulating content text and recording a
range for every element the tag registry knows about:
1. Continuous elements are merged with the previous span of the same kind
2. Propertied elements keep their attributes and are never merged
3. Singled elements become a point mark at the current text length
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..core.errors import TreeContractError
from ..core.range_model import RangeModel
from ..core.tag_registry import DEFAULT_REGISTRY, BlockKind, TagRegistry, TagSpec
from ..core.tree import SoupTreeAdapter, TreeAdapter


class TreeToModelConverter:
    """
    Converts a markup tree into a RangeModel.

    Elements unknown to the registry are transparent: their own range is not
    recorded but the text beneath them is. Text directly inside an opaque
    element (script, style) is never content.
    """

    def __init__(
        self,
        registry: TagRegistry = DEFAULT_REGISTRY,
        adapter: Optional[TreeAdapter] = None,
    ):
        self.registry = registry
        self.adapter = adapter or SoupTreeAdapter()
        self.logger = logging.getLogger(__name__)

    def convert(self, tree: Any) -> RangeModel:
        """
        Convert a tree (or a single node) to a RangeModel.

        A bare node is wrapped in an anonymous container first so that the
        node itself is visited like any of its siblings would be.
        """
        root = self.adapter.ensure_container(tree)
        parts: List[str] = []
        length = 0
        blocks: Dict[str, List[Any]] = {}

        for node in self.adapter.iter_descendants(root):
            if self.adapter.is_text(node):
                if self._is_content_text(node):
                    value = self.adapter.text_value(node)
                    parts.append(value)
                    length += len(value)
                continue

            if not self.adapter.is_element(node):
                continue

            spec = self.registry.classify(self.adapter.tag_name(node))
            if spec is None:
                continue

            if spec.kind is BlockKind.CONTINUOUS:
                self._add_continuous(blocks, spec, node, length)
            elif spec.kind is BlockKind.PROPERTIED:
                self._add_propertied(blocks, spec, node, length)
            else:
                blocks.setdefault(spec.name, []).append(length)

        return RangeModel(text="".join(parts), blocks=blocks)

    def _is_content_text(self, node: Any) -> bool:
        parent = self.adapter.parent(node)
        if parent is None:
            raise TreeContractError("Text node has no parent inside the walked tree")
        if self.adapter.is_element(parent):
            return not self.registry.is_opaque(self.adapter.tag_name(parent))
        return True

    def _content_length(self, el: Any) -> int:
        """Length of the content text beneath an element."""
        return sum(
            len(self.adapter.text_value(node))
            for node in self.adapter.iter_descendants(el)
            if self.adapter.is_text(node) and self._is_content_text(node)
        )

    def _add_continuous(self, blocks: Dict[str, List[Any]], spec: TagSpec, node: Any, start: int) -> None:
        """Continuous tags merge freely because they carry no attributes."""
        end = start + self._content_length(node)

        # tags of zero length are not allowed
        if start == end:
            self.logger.debug(f"Dropping empty <{self.adapter.tag_name(node)}> at {start}")
            return

        block = blocks.setdefault(spec.name, [])
        if len(block) >= 2 and block[-1] >= start:
            # continuation of the last span
            block[-1] = max(block[-1], end)
        else:
            block.extend((start, end))

    def _add_propertied(self, blocks: Dict[str, List[Any]], spec: TagSpec, node: Any, start: int) -> None:
        """Propertied tags are never merged; each element yields one entry."""
        end = start + self._content_length(node)

        if start == end:
            self.logger.debug(f"Dropping empty <{self.adapter.tag_name(node)}> at {start}")
            return

        entry: Dict[str, Any] = {"start": start, "end": end}
        for key, value in self.adapter.attributes(node).items():
            if key not in ("start", "end"):
                entry[key] = value
        blocks.setdefault(spec.name, []).append(entry)


def ingest(
    tree: Any,
    registry: TagRegistry = DEFAULT_REGISTRY,
    adapter: Optional[TreeAdapter] = None,
) -> RangeModel:
    """Convert a tree to a RangeModel."""
    return TreeToModelConverter(registry, adapter).convert(tree)


def from_html(
    markup: str,
    registry: TagRegistry = DEFAULT_REGISTRY,
    adapter: Optional[TreeAdapter] = None,
) -> RangeModel:
    """Parse an HTML fragment and convert it to a RangeModel."""
    converter = TreeToModelConverter(registry, adapter)
    return converter.convert(converter.adapter.parse(markup))
