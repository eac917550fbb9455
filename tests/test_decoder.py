"""
Tests for boundary decoding.
"""

import pytest

from chawuek.tokenization import BoundaryDecoder, decode


def test_split_where_probability_exceeds_threshold():
    # New tokens start at positions 2 and 5
    assert decode("กินข้า", [0.9, 0.1, 0.9, 0.1, 0.1, 0.9]) == ["กิ", "นข้", "า"]


def test_probability_marks_start_of_new_token():
    assert decode("กินข้า", [0.2, 0.9, 0.1, 0.9, 0.1, 0.1]) == ["ก", "ิน", "ข้า"]


def test_equal_to_threshold_does_not_split():
    assert decode("abc", [0.0, 0.5, 0.5]) == ["abc"]
    assert decode("abc", [0.0, 0.5, 0.5], threshold=0.49) == ["a", "b", "c"]


def test_position_zero_never_splits():
    assert decode("ab", [1.0, 0.0]) == ["ab"]


def test_single_character_is_one_token():
    assert decode("ก", [0.99]) == ["ก"]


def test_empty_input_gives_no_tokens():
    assert decode("", []) == []


def test_length_mismatch_raises():
    with pytest.raises(ValueError):
        decode("abc", [0.1, 0.2])


def test_accepts_character_list():
    assert decode(["a", "b"], [0.0, 0.7]) == ["a", "b"]


@pytest.mark.parametrize("probabilities", [
    [0.1, 0.9, 0.9, 0.9, 0.1],
    [0.6, 0.6, 0.4, 0.7, 0.2],
    [0.0, 0.0, 0.0, 0.0, 0.0],
    [1.0, 1.0, 1.0, 1.0, 1.0],
])
def test_tokens_reconstruct_input(probabilities):
    text = "abcde"
    tokens = decode(text, probabilities)

    assert "".join(tokens) == text
    assert all(tokens)
    splits = sum(1 for p in probabilities[1:] if p > 0.5)
    assert len(tokens) - 1 == splits


def test_boundary_decoder_boundaries():
    decoder = BoundaryDecoder(0.5)

    assert decoder.boundaries([0.9, 0.5, 0.51, 0.2, 0.8]) == [2, 4]
    assert decoder.decode("abcde", [0.9, 0.5, 0.51, 0.2, 0.8]) == ["ab", "cd", "e"]


@pytest.mark.parametrize("threshold", [-0.1, 1.5])
def test_boundary_decoder_rejects_threshold_out_of_range(threshold):
    with pytest.raises(ValueError):
        BoundaryDecoder(threshold)
