"""
Character map loading and character-to-index lookup.

The character map is a JSON object of key -> integer. Three reserved keys
give the indices used for punctuation, unknown and padding characters; every
other single-character key populates the lookup table.
"""

from pathlib import Path
from typing import Dict, Optional, Union
import json
import string

from ..errors import CharMapUnavailable, CharMapMalformed, MissingSpecialSymbol
from ..utils import console


PUNCTUATION_SYMBOL = '<PUNC>'
UNKNOWN_SYMBOL = '<UNK>'
PADDING_SYMBOL = '<PAD>'

ASCII_PUNCTUATION = frozenset(string.punctuation)


class CharacterIndexTable:
    """
    Immutable character -> index table.

    Lookup rule for ``index_of``:
    1. ASCII punctuation -> punctuation index
    2. character present in the table -> its index
    3. anything else -> unknown index
    """

    __slots__ = ('_char_to_index', 'punctuation_index', 'unknown_index',
                 'padding_index', 'path')

    def __init__(
        self,
        char_to_index: Dict[str, int],
        punctuation_index: int,
        unknown_index: int,
        padding_index: int,
        path: Optional[Path] = None
    ):
        self._char_to_index = dict(char_to_index)
        self.punctuation_index = punctuation_index
        self.unknown_index = unknown_index
        self.padding_index = padding_index
        self.path = path

    @classmethod
    def load(
        cls,
        source,
        punctuation_symbol: str = PUNCTUATION_SYMBOL,
        unknown_symbol: str = UNKNOWN_SYMBOL,
        padding_symbol: str = PADDING_SYMBOL
    ) -> 'CharacterIndexTable':
        """
        Load character map from a JSON file.

        Args:
            source: Path to the JSON file, or an open text stream
            punctuation_symbol: Reserved key for the punctuation index
            unknown_symbol: Reserved key for the unknown-character index
            padding_symbol: Reserved key for the padding index

        Returns:
            Loaded table

        Raises:
            CharMapUnavailable: File cannot be opened or read
            CharMapMalformed: Content is not a JSON object of integers
            MissingSpecialSymbol: A reserved key is absent
        """
        if hasattr(source, 'read'):
            path = Path(getattr(source, 'name', '<stream>'))
            raw = cls._read_stream(source, path)
        else:
            path = Path(source)
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    raw = cls._read_stream(f, path)
            except OSError as e:
                raise CharMapUnavailable(path, e.strerror or str(e)) from e

        try:
            mapping = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CharMapMalformed(path, str(e)) from e

        table = cls.from_mapping(
            mapping,
            punctuation_symbol=punctuation_symbol,
            unknown_symbol=unknown_symbol,
            padding_symbol=padding_symbol,
            path=path
        )
        console.verbose(f"Loaded character map from {path}: {len(table):,} characters")
        return table

    @staticmethod
    def _read_stream(stream, path: Path) -> str:
        try:
            return stream.read()
        except UnicodeDecodeError as e:
            raise CharMapMalformed(path, f"not valid UTF-8: {e}") from e
        except OSError as e:
            raise CharMapUnavailable(path, e.strerror or str(e)) from e

    @classmethod
    def from_mapping(
        cls,
        mapping,
        punctuation_symbol: str = PUNCTUATION_SYMBOL,
        unknown_symbol: str = UNKNOWN_SYMBOL,
        padding_symbol: str = PADDING_SYMBOL,
        path: Optional[Path] = None
    ) -> 'CharacterIndexTable':
        """
        Build a table from an in-memory key -> integer mapping.

        Multi-character keys other than the reserved symbols are ignored.
        """
        if not isinstance(mapping, dict):
            raise CharMapMalformed(
                path or '<mapping>',
                f"expected an object, got {type(mapping).__name__}"
            )

        for key, value in mapping.items():
            # bool is an int subclass but never a valid index
            if not isinstance(value, int) or isinstance(value, bool):
                raise CharMapMalformed(
                    path or '<mapping>',
                    f"value for key {key!r} is not an integer"
                )

        def special(symbol: str) -> int:
            if symbol not in mapping:
                raise MissingSpecialSymbol(symbol)
            return mapping[symbol]

        punctuation_index = special(punctuation_symbol)
        padding_index = special(padding_symbol)
        unknown_index = special(unknown_symbol)

        char_to_index = {k: v for k, v in mapping.items() if len(k) == 1}

        return cls(
            char_to_index,
            punctuation_index=punctuation_index,
            unknown_index=unknown_index,
            padding_index=padding_index,
            path=path
        )

    def index_of(self, character: str) -> int:
        """
        Get index for a single character.

        Punctuation is checked before table lookup, so an ASCII punctuation
        mark present in the table still maps to the punctuation index.
        """
        if character in ASCII_PUNCTUATION:
            return self.punctuation_index
        return self._char_to_index.get(character, self.unknown_index)

    def special_indices(self) -> Dict[str, int]:
        """Get the reserved indices keyed by role."""
        return {
            'punctuation': self.punctuation_index,
            'unknown': self.unknown_index,
            'padding': self.padding_index,
        }

    def __len__(self) -> int:
        return len(self._char_to_index)

    def __contains__(self, character) -> bool:
        return character in self._char_to_index

    def __repr__(self) -> str:
        return (
            f"CharacterIndexTable({len(self)} characters, "
            f"punc={self.punctuation_index}, unk={self.unknown_index}, "
            f"pad={self.padding_index})"
        )


def load_char_map(path: Union[str, Path]) -> CharacterIndexTable:
    """Load the character map at ``path`` with the default reserved symbols."""
    return CharacterIndexTable.load(path)
