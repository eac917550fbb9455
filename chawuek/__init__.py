"""
chawuek - Thai word segmentation with a character-level boundary classifier.

Usage:
    from chawuek import Segmenter

    segmenter = Segmenter.load("characters.json", "model.pt")
    segmenter.tokenize("กินข้าวม้า")
"""

from .errors import (
    ChawuekError,
    ConfigError,
    CharMapUnavailable,
    CharMapMalformed,
    MissingSpecialSymbol,
    ClassifierUnavailable,
    UnexpectedClassifierOutput,
)
from .tokenization import (
    CharacterIndexTable,
    EncodedSequence,
    SequenceEncoder,
    BoundaryDecoder,
)
from .inference import (
    SequenceClassifier,
    TorchScriptClassifier,
    Segmenter,
    LineResult,
)
from .config import load_config

__version__ = "0.1.0"

__all__ = [
    'ChawuekError',
    'ConfigError',
    'CharMapUnavailable',
    'CharMapMalformed',
    'MissingSpecialSymbol',
    'ClassifierUnavailable',
    'UnexpectedClassifierOutput',
    'CharacterIndexTable',
    'EncodedSequence',
    'SequenceEncoder',
    'BoundaryDecoder',
    'SequenceClassifier',
    'TorchScriptClassifier',
    'Segmenter',
    'LineResult',
    'load_config',
]
