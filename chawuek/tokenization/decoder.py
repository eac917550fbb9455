"""
Boundary decoding: per-character boundary probabilities -> tokens.

A probability at position ``i`` is the chance that a new word starts at
character ``i``. Position 0 always starts the first token and is never a
split decision.
"""

from typing import List, Sequence

DEFAULT_THRESHOLD = 0.5


def _check_threshold(threshold: float) -> float:
    threshold = float(threshold)
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"Threshold must be within [0, 1], got {threshold}")
    return threshold


def decode(
    characters: Sequence[str],
    probabilities: Sequence[float],
    threshold: float = DEFAULT_THRESHOLD
) -> List[str]:
    """
    Split characters into tokens at positions whose probability exceeds threshold.

    The comparison is strict: a probability equal to the threshold does not
    split.

    Args:
        characters: Input characters (a string works)
        probabilities: Boundary probability per character
        threshold: Split cutoff

    Returns:
        Tokens whose concatenation is the input

    Raises:
        ValueError: Lengths differ
    """
    if len(characters) != len(probabilities):
        raise ValueError(
            f"Got {len(probabilities)} probabilities for {len(characters)} characters"
        )
    if len(characters) == 0:
        return []

    tokens = []
    buf = [characters[0]]
    for ch, p in zip(characters[1:], probabilities[1:]):
        if p > threshold:
            tokens.append(''.join(buf))
            buf = []
        buf.append(ch)
    tokens.append(''.join(buf))
    return tokens


class BoundaryDecoder:
    """Decoder with a fixed threshold."""

    def __init__(self, threshold: float = DEFAULT_THRESHOLD):
        self.threshold = _check_threshold(threshold)

    def decode(self, characters: Sequence[str], probabilities: Sequence[float]) -> List[str]:
        return decode(characters, probabilities, self.threshold)

    def boundaries(self, probabilities: Sequence[float]) -> List[int]:
        """Positions (never 0) where a new token starts."""
        return [i for i, p in enumerate(probabilities) if i > 0 and p > self.threshold]

    def __repr__(self) -> str:
        return f"BoundaryDecoder(threshold={self.threshold})"
