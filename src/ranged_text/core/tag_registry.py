"""
Tag registry classifying inline tags into block kinds.

The registry is the single source of truth for which kind (continuous,
propertied or singled) a canonical kind name belongs to, and for mapping a
kind name back to the tag used to render it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple


class BlockKind(Enum):
    """How a range of a given kind behaves under merge and split."""
    CONTINUOUS = "continuous"
    PROPERTIED = "propertied"
    SINGLED = "singled"


@dataclass(frozen=True)
class TagSpec:
    """Classification of a single tag."""

    tag: str
    kind: BlockKind
    name: str  # canonical kind name used as the blocks key


# It's good to list every allowed tag here, even ones the alias table folds
# into another tag. A tag missing from this list is never recorded by ingest.
DEFAULT_TAGS: Tuple[TagSpec, ...] = (
    TagSpec("b", BlockKind.CONTINUOUS, "bold"),
    TagSpec("i", BlockKind.CONTINUOUS, "italic"),
    TagSpec("u", BlockKind.CONTINUOUS, "underline"),
    TagSpec("em", BlockKind.CONTINUOUS, "emphasis"),
    TagSpec("strong", BlockKind.CONTINUOUS, "strong"),
    TagSpec("pre", BlockKind.CONTINUOUS, "pre"),
    TagSpec("del", BlockKind.CONTINUOUS, "del"),
    TagSpec("h1", BlockKind.CONTINUOUS, "h1"),
    TagSpec("h2", BlockKind.CONTINUOUS, "h2"),
    TagSpec("h3", BlockKind.CONTINUOUS, "h3"),
    TagSpec("h4", BlockKind.CONTINUOUS, "h4"),
    TagSpec("h5", BlockKind.CONTINUOUS, "h5"),
    TagSpec("h6", BlockKind.CONTINUOUS, "h6"),
    TagSpec("a", BlockKind.PROPERTIED, "link"),
    TagSpec("span", BlockKind.PROPERTIED, "span"),
    TagSpec("blockquote", BlockKind.PROPERTIED, "block quote"),
    TagSpec("q", BlockKind.PROPERTIED, "quote"),
    TagSpec("cite", BlockKind.PROPERTIED, "cite"),
    TagSpec("code", BlockKind.PROPERTIED, "code"),
    TagSpec("br", BlockKind.SINGLED, "soft return"),
    # hr, p and img are not allowed within a paragraph
)

# Synonyms folded into one canonical tag before classification.
DEFAULT_ALIASES: Dict[str, str] = {
    "strong": "b",
    "i": "em",
    "u": "em",
    "h1": "h2",
    "h3": "h2",
    "h4": "h2",
    "h5": "h2",
    "h6": "h2",
    "strike": "del",
}

# Text directly inside these elements is never content.
DEFAULT_OPAQUE_TAGS: FrozenSet[str] = frozenset({"script", "style"})


@dataclass(frozen=True, eq=False)
class TagRegistry:
    """
    Immutable classification tables for inline tags.

    Lookups are case-insensitive on tag names. Kind names are matched exactly.
    """

    tags: Tuple[TagSpec, ...] = DEFAULT_TAGS
    aliases: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_ALIASES))
    opaque_tags: FrozenSet[str] = DEFAULT_OPAQUE_TAGS

    def __post_init__(self) -> None:
        by_tag: Dict[str, TagSpec] = {}
        by_name: Dict[str, TagSpec] = {}
        for spec in self.tags:
            by_tag[spec.tag.lower()] = spec
            if spec.name in by_name and by_name[spec.name].kind is not spec.kind:
                raise ValueError(f"Kind name {spec.name!r} registered with two different kinds")
            by_name.setdefault(spec.name, spec)
        object.__setattr__(self, "_by_tag", by_tag)
        object.__setattr__(self, "_by_name", by_name)
        object.__setattr__(
            self, "aliases", {k.lower(): v.lower() for k, v in self.aliases.items()}
        )
        object.__setattr__(self, "opaque_tags", frozenset(t.lower() for t in self.opaque_tags))

    def canonicalize(self, tag: str) -> str:
        """Resolve a tag name through the alias table."""
        tag = tag.lower()
        return self.aliases.get(tag, tag)

    def classify(self, tag: str) -> Optional[TagSpec]:
        """Return the spec for a tag after alias resolution, or None if unknown."""
        return self._by_tag.get(self.canonicalize(tag))

    def is_known(self, tag: str) -> bool:
        return self.classify(tag) is not None

    def is_opaque(self, tag: str) -> bool:
        return tag.lower() in self.opaque_tags

    def has_kind_name(self, name: str) -> bool:
        return name in self._by_name

    def kind_of(self, name: str) -> BlockKind:
        """Return the block kind for a canonical kind name."""
        try:
            return self._by_name[name].kind
        except KeyError:
            raise KeyError(f"Unknown block kind name: {name!r}") from None

    def kind_name_to_tag(self, name: str) -> str:
        """Return the tag used to render ranges of the given kind name."""
        try:
            return self._by_name[name].tag
        except KeyError:
            raise KeyError(f"Unknown block kind name: {name!r}") from None

    def kind_names(self, kind: Optional[BlockKind] = None) -> List[str]:
        """Kind names in registry order, optionally restricted to one kind."""
        return [
            name for name, spec in self._by_name.items()
            if kind is None or spec.kind is kind
        ]

    def order_of(self, name: str) -> int:
        """Position of a kind name in registry order."""
        return list(self._by_name).index(name)

    def with_aliases(self, aliases: Mapping[str, str]) -> TagRegistry:
        """Return a copy of this registry with extra aliases applied."""
        merged = dict(self.aliases)
        merged.update({k.lower(): v.lower() for k, v in aliases.items()})
        return TagRegistry(tags=self.tags, aliases=merged, opaque_tags=self.opaque_tags)

    def with_opaque_tags(self, tags: Iterable[str]) -> TagRegistry:
        """Return a copy of this registry treating extra tags as opaque."""
        return TagRegistry(
            tags=self.tags,
            aliases=self.aliases,
            opaque_tags=self.opaque_tags | frozenset(t.lower() for t in tags),
        )

    def __iter__(self) -> Iterator[TagSpec]:
        return iter(self.tags)


DEFAULT_REGISTRY = TagRegistry()
