"""
Spelling for ProseCheck
=======================
Dictionary lookup and ranked spelling corrections.

Features:
- 82K-word English frequency list bundled with symspellpy
- Custom word lists (config: dictionary.path)
- Multi-signal ranking (edit distance, frequency, keyboard, phonetics, context)
- Curated misspelling rules ahead of the dictionary pass

Requires: pip install symspellpy
"""

import threading

__version__ = "1.0.0"

from ..config_logging import handle_errors
from .dictionary import Dictionary
from .ranker import EnhancedSpellingRanker, RankingOptions, SpellingCandidate
from .checker import SpellingChecker, SpellingResult, VERY_COMMON_WORDS

# Lazy singleton
_dictionary = None
_lock = threading.Lock()


def get_dictionary() -> Dictionary:
    """Get the shared Dictionary instance (lazy loaded)."""
    global _dictionary
    if _dictionary is None:
        with _lock:
            if _dictionary is None:
                _dictionary = _load_default_dictionary()
    return _dictionary


def _load_default_dictionary() -> Dictionary:
    from ..config import get_config
    config = get_config().dictionary

    if not config.enabled:
        return Dictionary.unavailable("Dictionary disabled in config")
    if config.path:
        return Dictionary.from_file(config.path)
    return Dictionary.from_symspell()


def reset():
    """Forget the shared dictionary (used after config changes)."""
    global _dictionary
    with _lock:
        _dictionary = None


@handle_errors(default=False)
def is_available() -> bool:
    """Check if a real word list is loaded."""
    return get_dictionary().is_available


def get_status() -> dict:
    """Get spelling integration status."""
    status = {
        'available': False,
        'dictionary': {'available': False},
    }

    try:
        dictionary = get_dictionary()
        status['dictionary'] = dictionary.get_status()
        status['available'] = dictionary.is_available
    except Exception as e:
        status['dictionary']['error'] = str(e)

    return status


__all__ = [
    'Dictionary',
    'EnhancedSpellingRanker',
    'RankingOptions',
    'SpellingCandidate',
    'SpellingChecker',
    'SpellingResult',
    'VERY_COMMON_WORDS',
    'get_dictionary',
    'get_status',
    'is_available',
    'reset',
]
