"""
Tree capability interface used by the converters, plus a BeautifulSoup backend.

The converters never touch a tree directly; they go through a ``TreeAdapter``
so any markup tree that can walk, create and splice nodes can be plugged in.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Iterator, Mapping, Optional, Protocol, runtime_checkable

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from .errors import TreeContractError


@runtime_checkable
class TreeAdapter(Protocol):
    """Operations a tree backend must provide for ingest and emit."""

    def parse(self, markup: str) -> Any: ...

    def serialize(self, node: Any) -> str: ...

    def is_container(self, node: Any) -> bool: ...

    def ensure_container(self, node: Any) -> Any: ...

    def create_container(self) -> Any: ...

    def iter_descendants(self, root: Any) -> Iterator[Any]: ...

    def is_text(self, node: Any) -> bool: ...

    def is_element(self, node: Any) -> bool: ...

    def tag_name(self, node: Any) -> str: ...

    def attributes(self, node: Any) -> Dict[str, str]: ...

    def text_value(self, node: Any) -> str: ...

    def parent(self, node: Any) -> Optional[Any]: ...

    def create_element(self, tag: str, attrs: Optional[Mapping[str, str]] = None) -> Any: ...

    def create_text(self, value: str) -> Any: ...

    def append_child(self, parent: Any, child: Any) -> None: ...

    def insert_before(self, new: Any, ref: Any) -> None: ...

    def replace_text(self, node: Any, value: str) -> Any: ...

    def remove(self, node: Any) -> None: ...


class SoupTreeAdapter:
    """
    ``TreeAdapter`` over BeautifulSoup trees.

    A ``BeautifulSoup`` object plays the role of the anonymous container
    (document fragment). Comments, doctypes and other preformatted strings
    are not text nodes.
    """

    def __init__(self, parser: str = "html.parser"):
        self.parser = parser
        self._factory = BeautifulSoup("", parser)

    def parse(self, markup: str) -> BeautifulSoup:
        return BeautifulSoup(markup, self.parser)

    def serialize(self, node: Any) -> str:
        if isinstance(node, BeautifulSoup):
            return node.decode()
        return str(node)

    def is_container(self, node: Any) -> bool:
        return isinstance(node, BeautifulSoup)

    def ensure_container(self, node: Any) -> BeautifulSoup:
        """Return ``node`` if it is a container, else a container holding a copy of it."""
        if self.is_container(node):
            return node
        if not isinstance(node, (Tag, NavigableString)):
            raise TreeContractError(f"Not a BeautifulSoup node: {type(node).__name__}")

        container = self.create_container()
        if isinstance(node, Tag):
            container.append(copy.copy(node))
        else:
            container.append(type(node)(str(node)))
        return container

    def create_container(self) -> BeautifulSoup:
        return BeautifulSoup("", self.parser)

    def iter_descendants(self, root: Any) -> Iterator[Any]:
        if not isinstance(root, Tag):
            raise TreeContractError(f"Cannot walk a {type(root).__name__}")
        return iter(root.descendants)

    def is_text(self, node: Any) -> bool:
        return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)

    def is_element(self, node: Any) -> bool:
        return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)

    def tag_name(self, node: Any) -> str:
        return node.name.lower()

    def attributes(self, node: Any) -> Dict[str, str]:
        props = {}
        for key, value in node.attrs.items():
            # multi-valued attributes such as class come back as lists
            if isinstance(value, (list, tuple)):
                value = " ".join(value)
            props[key] = value
        return props

    def text_value(self, node: Any) -> str:
        return str(node)

    def parent(self, node: Any) -> Optional[Tag]:
        return node.parent

    def create_element(self, tag: str, attrs: Optional[Mapping[str, str]] = None) -> Tag:
        return self._factory.new_tag(tag, attrs=dict(attrs or {}))

    def create_text(self, value: str) -> NavigableString:
        return NavigableString(value)

    def append_child(self, parent: Any, child: Any) -> None:
        parent.append(child)

    def insert_before(self, new: Any, ref: Any) -> None:
        if ref.parent is None:
            raise TreeContractError("Cannot insert before a node that has no parent")
        ref.insert_before(new)

    def replace_text(self, node: Any, value: str) -> NavigableString:
        """Replace a text node's value, returning the node now in the tree."""
        if node.parent is None:
            raise TreeContractError("Cannot replace a text node that has no parent")
        replacement = NavigableString(value)
        node.replace_with(replacement)
        return replacement

    def remove(self, node: Any) -> None:
        node.extract()
