"""
Core range model, tag registry and tree interface.
"""

from .errors import InvalidArgumentError, RangedTextError, TreeContractError
from .range_model import RangeModel
from .tag_registry import DEFAULT_REGISTRY, BlockKind, TagRegistry, TagSpec
from .tree import SoupTreeAdapter, TreeAdapter

__all__ = [
    "RangeModel",
    "BlockKind",
    "TagSpec",
    "TagRegistry",
    "DEFAULT_REGISTRY",
    "TreeAdapter",
    "SoupTreeAdapter",
    "RangedTextError",
    "InvalidArgumentError",
    "TreeContractError",
]
