"""
ranged-text: convert inline markup trees to flat text plus formatting ranges.

A RangeModel is a plain text string and a set of typed ranges (bold, link,
line break, ...) expressed as offsets into that string. Models can be split at
an offset and concatenated back together without losing formatting.
"""

from .converters import count_crossings, emit, from_html, ingest, to_html
from .core import (
    DEFAULT_REGISTRY,
    BlockKind,
    InvalidArgumentError,
    RangedTextError,
    RangeModel,
    SoupTreeAdapter,
    TagRegistry,
    TreeAdapter,
    TreeContractError,
)
from .editing import concat, split

__version__ = "0.1.0"

__all__ = [
    "ingest",
    "emit",
    "split",
    "concat",
    "from_html",
    "to_html",
    "count_crossings",
    "RangeModel",
    "BlockKind",
    "TagRegistry",
    "DEFAULT_REGISTRY",
    "TreeAdapter",
    "SoupTreeAdapter",
    "RangedTextError",
    "InvalidArgumentError",
    "TreeContractError",
]
