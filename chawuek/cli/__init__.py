"""
Command-line interface tools for chawuek.
"""

from . import tokenize

__all__ = [
    'tokenize',
]
