"""
Tokenization module for chawuek.

Character encoding and boundary decoding shared by every driver.
"""

from .charmap import (
    CharacterIndexTable,
    load_char_map,
    PUNCTUATION_SYMBOL,
    UNKNOWN_SYMBOL,
    PADDING_SYMBOL,
)
from .encoder import EncodedSequence, SequenceEncoder
from .decoder import BoundaryDecoder, decode, DEFAULT_THRESHOLD

__all__ = [
    'CharacterIndexTable',
    'load_char_map',
    'PUNCTUATION_SYMBOL',
    'UNKNOWN_SYMBOL',
    'PADDING_SYMBOL',
    'EncodedSequence',
    'SequenceEncoder',
    'BoundaryDecoder',
    'decode',
    'DEFAULT_THRESHOLD',
]
