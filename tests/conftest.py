"""
Shared test fixtures.

Available fixtures:
- char_mapping: Small character map with the reserved symbols
- char_map_file: char_mapping written to a JSON file
- table: CharacterIndexTable built from char_mapping
- scripted_model_file: Tiny TorchScript boundary model saved to disk
- reset_console: Restores the global console after each test
"""

import json
import math
from typing import List, Tuple

import pytest
import torch
import torch.nn as nn

from chawuek.inference import SequenceClassifier
from chawuek.tokenization import CharacterIndexTable
from chawuek.utils import console


THAI_CHARS = "กขคนมวาิ้"
BOUNDARY_INDEX = 4  # index of "ข" in the test map


def logit(p: float) -> float:
    return math.log(p / (1.0 - p))


class StubClassifier(SequenceClassifier):
    """Returns fixed raw scores built from boundary probabilities."""

    def __init__(self, probabilities: List[float]):
        self.probabilities = list(probabilities)
        self.calls = 0

    def scores(self, encoded):
        self.calls += 1
        assert encoded.length == len(self.probabilities)
        return torch.tensor([[logit(p) for p in self.probabilities]], dtype=torch.float32)


class RawStubClassifier(SequenceClassifier):
    """Returns whatever it was given, for malformed-output tests."""

    def __init__(self, output):
        self.output = output

    def scores(self, encoded):
        return self.output


class IndexStubClassifier(SequenceClassifier):
    """Scores a boundary wherever the character index matches."""

    def __init__(self, boundary_index: int = BOUNDARY_INDEX):
        self.boundary_index = boundary_index
        self.calls = 0

    def scores(self, encoded):
        self.calls += 1
        return [10.0 if ix == self.boundary_index else -10.0 for ix in encoded.indices]


class TinyBoundaryModel(nn.Module):
    """Scriptable model: boundary where the index equals ``boundary_index``."""

    def __init__(self, boundary_index: int):
        super().__init__()
        self.boundary_index = boundary_index

    def forward(self, inputs: Tuple[torch.Tensor, torch.Tensor]) -> torch.Tensor:
        features, seq_lengths = inputs
        hits = (features == self.boundary_index).to(torch.float32)
        return hits * 20.0 - 10.0


class TupleOutputModel(nn.Module):
    """Scriptable model that returns a tuple instead of a tensor."""

    def forward(self, inputs: Tuple[torch.Tensor, torch.Tensor]) -> Tuple[torch.Tensor, torch.Tensor]:
        features, seq_lengths = inputs
        return features.to(torch.float32), seq_lengths


@pytest.fixture
def char_mapping():
    mapping = {"<PAD>": 0, "<PUNC>": 1, "<UNK>": 2, "<S>": 98, "ab": 99, "!": 77}
    for i, ch in enumerate(THAI_CHARS):
        mapping[ch] = i + 3
    return mapping


@pytest.fixture
def char_map_file(tmp_path, char_mapping):
    path = tmp_path / "characters.json"
    path.write_text(json.dumps(char_mapping, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def table(char_mapping):
    return CharacterIndexTable.from_mapping(char_mapping)


@pytest.fixture
def scripted_model_file(tmp_path, char_mapping):
    path = tmp_path / "model.pt"
    torch.jit.script(TinyBoundaryModel(char_mapping["ข"])).save(str(path))
    return path


@pytest.fixture
def tuple_model_file(tmp_path):
    path = tmp_path / "tuple_model.pt"
    torch.jit.script(TupleOutputModel()).save(str(path))
    return path


@pytest.fixture(autouse=True)
def reset_console():
    state = (console._verbose, console._quiet, console._use_color, console._stream)
    yield
    console._verbose, console._quiet, console._use_color, console._stream = state
