"""
Error types raised by the range model converters and editing operations.
"""

from __future__ import annotations


class RangedTextError(Exception):
    """Base class for all ranged-text errors."""


class InvalidArgumentError(RangedTextError, ValueError):
    """Raised when an operation is called with an argument it cannot accept."""


class TreeContractError(RangedTextError, ValueError):
    """Raised when a tree backend breaks the traversal or mutation contract."""
