"""
Boundary classifier interface and TorchScript implementation.

A classifier takes one encoded sequence and returns one raw score per
character position. ``boundary_probabilities`` turns those scores into
probabilities with a float32 sigmoid.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union

import torch

from ..errors import ClassifierUnavailable, UnexpectedClassifierOutput
from ..tokenization import EncodedSequence
from ..utils import console


class SequenceClassifier(ABC):
    """
    Base class for boundary classifiers.

    Implementations return raw (pre-sigmoid) scores, exactly one per position
    and in input order.
    """

    @abstractmethod
    def scores(self, encoded: EncodedSequence):
        """
        Score one sequence.

        Returns:
            Tensor or sequence of floats with one score per position
        """
        pass


class TorchScriptClassifier(SequenceClassifier):
    """
    Classifier backed by a scripted PyTorch module.

    The module is called with a single tuple argument
    ``(features, seq_lengths)`` where features has shape [1, L] and
    seq_lengths has shape [1].
    """

    def __init__(self, module: torch.jit.ScriptModule, device: torch.device = None):
        self.module = module
        self.device = device if device is not None else torch.device('cpu')
        self.module.eval()

    @classmethod
    def load(cls, model_path: Union[str, Path], device: str = None) -> 'TorchScriptClassifier':
        """
        Load a scripted model.

        Args:
            model_path: Path to model file (.pt)
            device: Device to use (cuda/cpu, auto-detect if None)

        Raises:
            ClassifierUnavailable: Model file missing or not loadable
        """
        model_path = Path(model_path)

        # Auto-detect device
        if device is None:
            device = torch.device('cuda' if torch.cuda.is_available() else 'cpu')
        else:
            try:
                device = torch.device(device)
            except RuntimeError as e:
                raise ClassifierUnavailable(model_path, f"invalid device {device!r}") from e

        if not model_path.exists():
            raise ClassifierUnavailable(model_path, "file not found")

        try:
            module = torch.jit.load(str(model_path), map_location=device)
        except (RuntimeError, ValueError, OSError) as e:
            raise ClassifierUnavailable(model_path, str(e)) from e

        console.verbose(f"Loaded classifier from {model_path} on {device}")
        return cls(module, device)

    def scores(self, encoded: EncodedSequence) -> torch.Tensor:
        features, seq_lengths = encoded.to_tensors(self.device)
        with torch.no_grad():
            try:
                out = self.module((features, seq_lengths))
            except RuntimeError as e:
                raise UnexpectedClassifierOutput(f"The module failed on the input: {e}") from e
        return out


def _as_score_tensor(raw, length: int) -> torch.Tensor:
    if isinstance(raw, torch.Tensor):
        out = raw
    elif isinstance(raw, (list, tuple)) and all(isinstance(s, (int, float)) for s in raw):
        out = torch.tensor(raw, dtype=torch.float32)
    else:
        raise UnexpectedClassifierOutput(
            f"The module returned an invalid value: {type(raw).__name__}"
        )

    # Accepted layouts: [L], [1, L], [1, L, 1]
    shape = tuple(out.shape)
    if shape not in ((length,), (1, length), (1, length, 1)):
        raise UnexpectedClassifierOutput(
            f"Expected one score per position for length {length}, got shape {list(shape)}"
        )
    if not out.is_floating_point():
        raise UnexpectedClassifierOutput(f"Expected floating point scores, got {out.dtype}")
    return out.reshape(length)


def boundary_probabilities(classifier: SequenceClassifier, encoded: EncodedSequence) -> List[float]:
    """
    Run the classifier and convert raw scores to boundary probabilities.

    Raises:
        UnexpectedClassifierOutput: Output is not one score per position
    """
    raw = classifier.scores(encoded)
    scores = _as_score_tensor(raw, encoded.length)
    probs = torch.sigmoid(scores.detach().to('cpu', torch.float32))
    return probs.tolist()
