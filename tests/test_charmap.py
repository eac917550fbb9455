"""
Tests for character map loading and lookup.
"""

import io
import json
import string

import pytest

from chawuek.errors import CharMapMalformed, CharMapUnavailable, MissingSpecialSymbol
from chawuek.tokenization import CharacterIndexTable, load_char_map


def test_load_from_file(char_map_file, char_mapping):
    table = load_char_map(char_map_file)

    assert table.punctuation_index == 1
    assert table.unknown_index == 2
    assert table.padding_index == 0
    assert table.index_of("ก") == char_mapping["ก"]
    assert table.path == char_map_file


def test_load_from_stream(char_mapping):
    stream = io.StringIO(json.dumps(char_mapping, ensure_ascii=False))
    table = CharacterIndexTable.load(stream)

    assert table.index_of("น") == char_mapping["น"]


def test_missing_file_is_unavailable(tmp_path):
    with pytest.raises(CharMapUnavailable):
        CharacterIndexTable.load(tmp_path / "missing.json")


def test_directory_is_unavailable(tmp_path):
    with pytest.raises(CharMapUnavailable):
        CharacterIndexTable.load(tmp_path)


def test_invalid_json_is_malformed(tmp_path):
    path = tmp_path / "characters.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(CharMapMalformed):
        CharacterIndexTable.load(path)


@pytest.mark.parametrize("content", [
    '["<PUNC>", "<UNK>"]',
    '{"<PUNC>": 1, "<UNK>": 2, "<PAD>": 0, "a": "3"}',
    '{"<PUNC>": 1, "<UNK>": 2, "<PAD>": 0, "a": 3.5}',
    '{"<PUNC>": true, "<UNK>": 2, "<PAD>": 0}',
])
def test_non_integer_map_is_malformed(tmp_path, content):
    path = tmp_path / "characters.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(CharMapMalformed):
        CharacterIndexTable.load(path)


def test_invalid_utf8_is_malformed(tmp_path):
    path = tmp_path / "characters.json"
    path.write_bytes(b'{"\xff": 1}')

    with pytest.raises(CharMapMalformed):
        CharacterIndexTable.load(path)


@pytest.mark.parametrize("symbol", ["<PUNC>", "<UNK>", "<PAD>"])
def test_missing_special_symbol(char_mapping, symbol):
    del char_mapping[symbol]

    with pytest.raises(MissingSpecialSymbol) as exc_info:
        CharacterIndexTable.from_mapping(char_mapping)

    assert exc_info.value.name == symbol
    assert symbol in str(exc_info.value)


def test_special_symbols_checked_in_order():
    with pytest.raises(MissingSpecialSymbol) as exc_info:
        CharacterIndexTable.from_mapping({"<UNK>": 2})

    assert exc_info.value.name == "<PUNC>"


def test_multi_character_keys_are_ignored(table):
    assert "ab" not in table
    assert "<S>" not in table
    assert "<PUNC>" not in table
    assert table.index_of("a") == table.unknown_index


def test_punctuation_precedence_over_table_entry(table, char_mapping):
    # "!" has its own entry in the map but is ASCII punctuation
    assert "!" in table
    assert table.index_of("!") == table.punctuation_index
    assert table.index_of("!") != char_mapping["!"]


@pytest.mark.parametrize("ch", list(string.punctuation))
def test_every_ascii_punctuation_maps_to_punctuation_index(table, ch):
    assert table.index_of(ch) == table.punctuation_index


@pytest.mark.parametrize("ch", ["z", " ", "。", "“", "\U0001F600", "๑"])
def test_unknown_character_fallback(table, ch):
    # Non-ASCII punctuation is not special-cased
    assert table.index_of(ch) == table.unknown_index


def test_special_indices(table):
    assert table.special_indices() == {'punctuation': 1, 'unknown': 2, 'padding': 0}


def test_len_counts_single_character_keys(table, char_mapping):
    expected = sum(1 for key in char_mapping if len(key) == 1)
    assert len(table) == expected
