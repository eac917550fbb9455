from .classifier import (
    SequenceClassifier,
    TorchScriptClassifier,
    boundary_probabilities,
)
from .segmenter import (
    Segmenter,
    LineResult,
    BatchStatistics,
)

__all__ = [
    'SequenceClassifier',
    'TorchScriptClassifier',
    'boundary_probabilities',
    'Segmenter',
    'LineResult',
    'BatchStatistics',
]
