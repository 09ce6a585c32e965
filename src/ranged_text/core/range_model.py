"""
Range model: flat text plus typed, offset-addressed formatting ranges.

The model carries no reference to the tree it came from. Continuous kinds are
stored as flat ``[start, end, start, end, ...]`` lists, propertied kinds as
lists of ``{"start", "end", **attributes}`` objects and singled kinds as lists
of positions.

Blocks are frozen on construction: range lists become tuples and propertied
entries read-only mappings. ``to_dict``, ``block`` and ``blocks_of_kind`` hand
out plain mutable copies.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping as MappingABC
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidArgumentError
from .tag_registry import DEFAULT_REGISTRY, BlockKind, TagRegistry

FrozenBlocks = Mapping[str, Tuple[Any, ...]]


class RangeModel(BaseModel):
    """Text plus formatting blocks keyed by canonical kind name."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    blocks: FrozenBlocks = Field(default_factory=dict, validate_default=True)

    @field_validator("blocks", mode="after")
    @classmethod
    def _freeze_blocks(cls, blocks: FrozenBlocks) -> FrozenBlocks:
        frozen = {}
        for name, ranges in blocks.items():
            for item in ranges:
                if not _is_offset(item) and not _is_entry(item):
                    raise ValueError(
                        f"block {name!r} holds {item!r}; expected an integer offset "
                        "or an object with integer start and end"
                    )
            frozen[name] = tuple(
                MappingProxyType(copy.deepcopy(dict(item))) if isinstance(item, MappingABC) else item
                for item in ranges
            )
        return MappingProxyType(frozen)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RangeModel:
        """Create a model from its plain ``{"text", "blocks"}`` form."""
        if not isinstance(data, dict):
            raise InvalidArgumentError("Range model payload must be an object")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid range model payload: {e}") from e

    @classmethod
    def from_json(cls, payload: str) -> RangeModel:
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise InvalidArgumentError(f"Failed to parse range model JSON: {e}") from e
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Deep copy of the model as plain data."""
        return {
            "text": self.text,
            "blocks": {name: _thaw(ranges) for name, ranges in self.blocks.items()},
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def block(self, name: str) -> List[Any]:
        """Return a copy of the range list for a kind name (empty if absent)."""
        return _thaw(self.blocks.get(name, ()))

    def blocks_of_kind(
        self, kind: BlockKind, registry: TagRegistry = DEFAULT_REGISTRY
    ) -> Dict[str, List[Any]]:
        """
        Return plain copies of the blocks whose kind name belongs to ``kind``.

        Raises:
            InvalidArgumentError: if a kind name is not in the registry, or a
                block's shape does not fit its kind.
        """
        selected = {}
        for name, ranges in self.blocks.items():
            if not registry.has_kind_name(name):
                raise InvalidArgumentError(f"Unknown block kind name: {name!r}")
            block_kind = registry.kind_of(name)
            _check_shape(name, block_kind, ranges)
            if block_kind is kind:
                selected[name] = _thaw(ranges)
        return selected

    def get_stats(self, registry: TagRegistry = DEFAULT_REGISTRY) -> Dict[str, Any]:
        """Get model statistics."""
        return {
            "character_count": len(self.text),
            "word_count": len(self.text.split()),
            "kind_count": len(self.blocks),
            "range_counts": {
                name: self._range_count(name, ranges, registry) for name, ranges in self.blocks.items()
            },
        }

    def _range_count(self, name: str, ranges: Tuple[Any, ...], registry: TagRegistry) -> int:
        if registry.has_kind_name(name) and registry.kind_of(name) is BlockKind.CONTINUOUS:
            return len(ranges) // 2
        return len(ranges)

    def validate_integrity(self, registry: TagRegistry = DEFAULT_REGISTRY) -> List[str]:
        """Validate the per-kind invariants and return any issues found."""
        issues = []
        length = len(self.text)

        for name, ranges in self.blocks.items():
            if not registry.has_kind_name(name):
                issues.append(f"Unknown block kind name: {name!r}")
                continue
            if not ranges:
                issues.append(f"Block {name!r} is empty")
                continue

            kind = registry.kind_of(name)
            if kind is BlockKind.CONTINUOUS:
                issues.extend(_continuous_issues(name, ranges, length))
            elif kind is BlockKind.PROPERTIED:
                issues.extend(_propertied_issues(name, ranges, length))
            else:
                for pos in ranges:
                    if not _is_offset(pos):
                        issues.append(f"Block {name!r} holds an object where a position belongs")
                    elif not 0 <= pos <= length:
                        issues.append(f"Block {name!r} position {pos} is outside the text")

        return issues


def _is_offset(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_entry(value: Any) -> bool:
    return (
        isinstance(value, MappingABC)
        and _is_offset(value.get("start"))
        and _is_offset(value.get("end"))
    )


def _thaw(ranges: Tuple[Any, ...]) -> List[Any]:
    return [copy.deepcopy(dict(item)) if isinstance(item, MappingABC) else item for item in ranges]


def _check_shape(name: str, kind: BlockKind, ranges: Tuple[Any, ...]) -> None:
    """Raise if a block's contents do not match the layout of its kind."""
    if kind is BlockKind.PROPERTIED:
        if not all(_is_entry(item) for item in ranges):
            raise InvalidArgumentError(f"Block {name!r} must hold objects with integer start and end")
        return

    if not all(_is_offset(item) for item in ranges):
        raise InvalidArgumentError(f"Block {name!r} must hold integer offsets")
    if kind is BlockKind.CONTINUOUS and len(ranges) % 2:
        raise InvalidArgumentError(f"Block {name!r} has an odd number of offsets")


def _continuous_issues(name: str, ranges: Tuple[Any, ...], length: int) -> List[str]:
    issues = []
    if not all(_is_offset(v) for v in ranges):
        return [f"Block {name!r} has non-integer offsets"]
    if len(ranges) % 2:
        issues.append(f"Block {name!r} has an odd number of offsets")
    for previous, current in zip(ranges, ranges[1:]):
        if current <= previous:
            issues.append(f"Block {name!r} is not strictly ascending at {current}")
            break
    if ranges[0] < 0 or ranges[-1] > length:
        issues.append(f"Block {name!r} reaches outside the text")
    return issues


def _propertied_issues(name: str, ranges: Tuple[Any, ...], length: int) -> List[str]:
    issues = []
    for entry in ranges:
        if not _is_entry(entry):
            issues.append(f"Block {name!r} has an entry without integer start/end: {entry!r}")
            continue
        start, end = entry["start"], entry["end"]
        if start >= end:
            issues.append(f"Block {name!r} has an empty or inverted range {start}-{end}")
        if start < 0 or end > length:
            issues.append(f"Block {name!r} range {start}-{end} reaches outside the text")
    return issues
