"""
Tree to model and model to tree conversion.
"""

from .model_to_tree import ModelToTreeConverter, emit, to_html
from .overlap import count_crossings, order_continuous_blocks
from .tree_to_model import TreeToModelConverter, from_html, ingest

__all__ = [
    "TreeToModelConverter",
    "ModelToTreeConverter",
    "ingest",
    "emit",
    "from_html",
    "to_html",
    "count_crossings",
    "order_continuous_blocks",
]
