"""
Utilities for chawuek.
"""

from .output import Console, console

__all__ = [
    'Console',
    'console',
]
