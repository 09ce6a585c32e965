"""
Split and concat operations on range models.
"""

from .concat import concat
from .split import split

__all__ = ["split", "concat"]
