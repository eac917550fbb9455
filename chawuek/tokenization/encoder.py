"""
Sequence encoding: text -> character indices for the classifier.
"""

from dataclasses import dataclass
from typing import Tuple

import torch

from .charmap import CharacterIndexTable


@dataclass(frozen=True)
class EncodedSequence:
    """
    Character indices for one input text.

    ``length`` always equals the number of code points in the text.
    """
    indices: Tuple[int, ...]
    length: int

    def to_tensors(self, device: torch.device = None) -> Tuple[torch.Tensor, torch.Tensor]:
        """
        Build the classifier input pair.

        Returns:
            (features, seq_lengths) with shapes [1, length] and [1]
        """
        features = torch.tensor(self.indices, dtype=torch.long, device=device).view(1, -1)
        seq_lengths = torch.tensor([self.length], dtype=torch.long, device=device)
        return features, seq_lengths


class SequenceEncoder:
    """Encode text with a character table."""

    def __init__(self, table: CharacterIndexTable):
        self.table = table

    def encode(self, text: str) -> EncodedSequence:
        """
        Encode text character by character.

        Empty text gives an empty sequence; callers decide what that means.
        """
        indices = tuple(self.table.index_of(ch) for ch in text)
        return EncodedSequence(indices=indices, length=len(indices))
