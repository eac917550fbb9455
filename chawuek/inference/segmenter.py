"""
Word segmentation: encode -> classify -> decode.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from ..errors import ChawuekError
from ..tokenization import (
    BoundaryDecoder,
    CharacterIndexTable,
    SequenceEncoder,
    DEFAULT_THRESHOLD,
)
from ..utils import console
from .classifier import SequenceClassifier, TorchScriptClassifier, boundary_probabilities


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass
class LineResult:
    """Result of tokenizing one line in a batch."""
    line_number: int
    text: str
    tokens: Optional[List[str]] = None
    error: Optional[ChawuekError] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def __repr__(self) -> str:
        status = "SUCCESS" if self.success else "FAILED"
        return f"LineResult({self.line_number}, {status})"


@dataclass
class BatchStatistics:
    """Aggregated statistics for a batch of lines."""
    total_lines: int = 0
    failed_lines: int = 0
    total_characters: int = 0
    total_tokens: int = 0
    elapsed_time: float = 0.0

    @property
    def characters_per_second(self) -> float:
        if self.elapsed_time > 0:
            return self.total_characters / self.elapsed_time
        return 0.0

    def update(self, result: LineResult):
        self.total_lines += 1
        self.total_characters += len(result.text)
        if result.success:
            self.total_tokens += len(result.tokens)
        else:
            self.failed_lines += 1


# ============================================================
# SEGMENTER
# ============================================================

class Segmenter:
    """
    Segment text into words with a boundary classifier.

    The character table and classifier are loaded once and only read
    afterwards, so one instance can serve any number of calls.
    """

    def __init__(
        self,
        table: CharacterIndexTable,
        classifier: SequenceClassifier,
        threshold: float = DEFAULT_THRESHOLD
    ):
        """
        Initialize segmenter.

        Args:
            table: Loaded character table
            classifier: Boundary classifier
            threshold: Boundary probability cutoff (strict)
        """
        self.table = table
        self.classifier = classifier
        self.encoder = SequenceEncoder(table)
        self.decoder = BoundaryDecoder(threshold)

    @classmethod
    def load(
        cls,
        char_map_path: Union[str, Path],
        model_path: Union[str, Path],
        threshold: float = DEFAULT_THRESHOLD,
        device: str = None
    ) -> 'Segmenter':
        """
        Load character map and classifier from disk.

        Raises:
            CharMapUnavailable, CharMapMalformed, MissingSpecialSymbol,
            ClassifierUnavailable: Startup failure
        """
        table = CharacterIndexTable.load(char_map_path)
        classifier = TorchScriptClassifier.load(model_path, device=device)
        return cls(table, classifier, threshold=threshold)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'Segmenter':
        """Build segmenter from a config dict (see ``chawuek.config``)."""
        data_cfg = config.get('data', {})
        seg_cfg = config.get('segmentation', {})
        runtime_cfg = config.get('runtime', {})

        return cls.load(
            data_cfg['char_map'],
            data_cfg['model'],
            threshold=seg_cfg.get('threshold', DEFAULT_THRESHOLD),
            device=runtime_cfg.get('device')
        )

    @property
    def threshold(self) -> float:
        return self.decoder.threshold

    def tokenize(self, text: str) -> List[str]:
        """
        Split text into word tokens.

        Empty text gives an empty list without calling the classifier.

        Raises:
            UnexpectedClassifierOutput: Classifier output is invalid
        """
        if not text:
            return []

        encoded = self.encoder.encode(text)
        probabilities = boundary_probabilities(self.classifier, encoded)
        return self.decoder.decode(text, probabilities)

    def segment(self, text: str) -> Dict[str, Any]:
        """
        Tokenize with timing statistics.

        Returns:
            Dictionary with 'tokens' and 'statistics' keys
        """
        start_time = time.time()
        tokens = self.tokenize(text)
        elapsed_time = time.time() - start_time

        return {
            'tokens': tokens,
            'statistics': {
                'characters': len(text),
                'tokens': len(tokens),
                'elapsed_time': elapsed_time,
            }
        }

    def tokenize_lines(
        self,
        lines: Iterable[str],
        progress_callback: Callable[[LineResult], None] = None
    ) -> List[LineResult]:
        """
        Tokenize many lines, one result per line.

        A failing line is recorded as that line's error and processing
        continues with the next one.

        Args:
            lines: Input lines (trailing newlines should already be stripped)
            progress_callback: Optional callback(result) after each line

        Returns:
            List of results in input order
        """
        return list(self.iter_tokenize(lines, progress_callback))

    def iter_tokenize(
        self,
        lines: Iterable[str],
        progress_callback: Callable[[LineResult], None] = None
    ):
        """Streaming form of ``tokenize_lines``."""
        for line_number, line in enumerate(lines, start=1):
            try:
                result = LineResult(line_number, line, tokens=self.tokenize(line))
            except ChawuekError as e:
                console.verbose(f"Line {line_number} failed: {e}")
                result = LineResult(line_number, line, error=e)

            if progress_callback:
                progress_callback(result)

            yield result

    def __repr__(self) -> str:
        return f"Segmenter({self.table!r}, threshold={self.threshold})"
