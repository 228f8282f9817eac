"""
Dictionary for ProseCheck
=========================
Read-only English word list with validity lookup and edit-distance
suggestions.

Features:
- Loads symspellpy's bundled frequency list by default
- Any newline-delimited word file ("word" or "word count" per line)
- Degraded "everything is valid" mode when no list can be loaded
- SymSpell delete-index lookups, built on first use

Requires: pip install symspellpy
"""

import threading
from importlib.resources import files
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Any, Union

from symspellpy import SymSpell, Verbosity

from ..base import ComponentBase
from ..config_logging import DictionaryError, get_logger

__version__ = "1.0.0"

_logger = get_logger('prosecheck.dictionary')


class Dictionary(ComponentBase):
    """
    Immutable word set.

    Constructed with None it is "unavailable": every word is valid and
    nothing is ever suggested, so spelling checks become no-ops instead
    of flagging the whole document.
    """

    COMPONENT_NAME = "Dictionary"
    COMPONENT_VERSION = "1.0.0"

    # Bundled with symspellpy
    FREQUENCY_DICT = "frequency_dictionary_en_82_765.txt"

    MAX_EDIT_DISTANCE = 2
    PREFIX_LENGTH = 7

    def __init__(self, words: Optional[Iterable[str]] = None, source: Optional[str] = None,
                 counts: Optional[Mapping[str, int]] = None):
        super().__init__()
        self.source = source

        # word -> corpus count, in first-seen order
        self._counts: Dict[str, int] = {}
        if words is not None:
            counts = counts or {}
            for raw in words:
                word = raw.strip().lower()
                if not word or word in self._counts:
                    continue
                self._counts[word] = max(1, counts.get(word, 1))
            self._available = True

        self._words = frozenset(self._counts)
        self._sym_spell: Optional[SymSpell] = None
        self._sym_spell_lock = threading.Lock()

    @classmethod
    def unavailable(cls, error: Optional[str] = None) -> 'Dictionary':
        """Degraded dictionary that accepts every word."""
        dictionary = cls(None)
        dictionary._error = error
        return dictionary

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'Dictionary':
        """
        Load a newline-delimited word list.

        The first whitespace-separated field of each line is the word;
        a numeric second field is taken as its corpus count, so
        symspellpy frequency files load as-is.
        """
        path = Path(path)
        try:
            words, counts = read_word_file(path)
        except DictionaryError as e:
            _logger.warning(e.message, path=str(path))
            return cls.unavailable(e.message)

        _logger.debug(f"Loaded {len(words)} words", path=str(path))
        return cls(words, source=str(path), counts=counts)

    @classmethod
    def from_symspell(cls) -> 'Dictionary':
        """Load the English frequency list that ships with symspellpy."""
        return cls.from_file(str(files("symspellpy").joinpath(cls.FREQUENCY_DICT)))

    def is_valid(self, word: str) -> bool:
        """Case-insensitive membership test."""
        if not self._available:
            return True
        return word.lower() in self._words

    def frequency(self, word: str) -> int:
        """Corpus count of `word`; 0 when unknown."""
        return self._counts.get(word.lower(), 0)

    def suggestions(self, word: str, limit: int = 5) -> List[str]:
        """
        Up to `limit` words within edit distance 2, nearest first.

        Words sharing the first letter (length within 2) are tried
        first; if that yields fewer than `limit`, words of any first
        letter whose length is within 1 are added, up to 2 * limit
        candidates. Ties sort alphabetically.
        """
        neighbours = self._neighbours(word, limit)
        neighbours.sort(key=lambda item: (item.distance, item.term))
        return [item.term for item in neighbours[:limit]]

    def candidates(self, word: str, limit: int = 10) -> List[str]:
        """
        Same search as `suggestions`, but the `limit` most frequent
        words are kept, whatever their distance.

        Used as the ranker's candidate pool: a common word two edits
        away ("wah" -> "what") must not be crowded out by rare words
        one edit away.
        """
        neighbours = self._neighbours(word, limit)
        neighbours.sort(key=lambda item: (-item.count, item.distance, item.term))
        return [item.term for item in neighbours[:limit]]

    def _neighbours(self, word: str, limit: int) -> list:
        if not self._available or not word or limit <= 0:
            return []

        word = word.lower()
        found = [
            item for item in self.sym_spell.lookup(word, Verbosity.ALL,
                                                   max_edit_distance=self.MAX_EDIT_DISTANCE)
            if item.distance > 0
        ]

        kept = [
            item for item in found
            if item.term[0] == word[0] and abs(len(item.term) - len(word)) <= 2
        ]
        if len(kept) < limit:
            seen = {item.term for item in kept}
            broadened = [
                item for item in found
                if item.term not in seen and abs(len(item.term) - len(word)) <= 1
            ]
            kept.extend(broadened[:max(0, limit * 2 - len(kept))])
        return kept

    @property
    def sym_spell(self) -> SymSpell:
        """The SymSpell index over this word list, built on first use."""
        if self._sym_spell is None:
            with self._sym_spell_lock:
                if self._sym_spell is None:
                    sym_spell = SymSpell(max_dictionary_edit_distance=self.MAX_EDIT_DISTANCE,
                                         prefix_length=self.PREFIX_LENGTH)
                    for word, count in self._counts.items():
                        sym_spell.create_dictionary_entry(word, count)
                    _logger.debug("Built SymSpell index", words=len(self._counts),
                                  source=self.source)
                    self._sym_spell = sym_spell
        return self._sym_spell

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_valid(word)

    def get_status(self) -> Dict[str, Any]:
        return {
            'available': self._available,
            'error': self._error,
            'words': len(self._words),
            'source': self.source,
            'indexed': self._sym_spell is not None,
        }


def read_word_file(path: Path):
    """
    Read (words, counts) from a word list.

    Raises DictionaryError when the file cannot be read.
    """
    words: List[str] = []
    counts: Dict[str, int] = {}
    try:
        with open(path, encoding='utf-8') as f:
            for line in f:
                fields = line.split()
                if not fields:
                    continue
                words.append(fields[0])
                if len(fields) > 1 and fields[1].isdigit():
                    counts.setdefault(fields[0].lower(), int(fields[1]))
    except OSError as e:
        raise DictionaryError(f"Failed to load word list: {e}", path=str(path)) from e
    return words, counts
