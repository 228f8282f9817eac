"""
Shared pytest fixtures for the ProseCheck test suite.
"""

import pytest

from prosecheck import config as prosecheck_config
from prosecheck import engine as prosecheck_engine
from prosecheck import spelling as prosecheck_spelling
from prosecheck.config import ProseCheckConfig
from prosecheck.engine import GrammarEngine
from prosecheck.spelling import Dictionary

# Every correctly spelled word (3+ letters) used by the engine tests
SAMPLE_WORDS = [
    'what', 'way', 'was', 'who', 'why', 'with', 'this', 'app',
    'the', 'will', 'package', 'tomorrow', 'and', 'items', 'receive', 'separate',
    'there', 'are', 'many', 'issues', 'sentence', 'document', 'written',
    'team', 'order', 'explain', 'process', 'received', 'lot', 'feedback',
    'from', 'users', 'report', 'ready', 'for', 'review', 'results', 'improve',
    'them', 'server', 'restarts', 'nightly', 'note', 'that', 'important', 'waiting',
]


@pytest.fixture
def sample_dictionary() -> Dictionary:
    """Small synthetic word list."""
    return Dictionary(SAMPLE_WORDS, source='tests')


@pytest.fixture(scope='session')
def symspell_dictionary() -> Dictionary:
    """The English frequency list bundled with symspellpy, loaded once per run."""
    return Dictionary.from_symspell()


@pytest.fixture
def fresh_config() -> ProseCheckConfig:
    """Default configuration, independent of the global one."""
    return ProseCheckConfig()


@pytest.fixture
def engine(sample_dictionary, fresh_config) -> GrammarEngine:
    """Engine over the synthetic dictionary with default settings."""
    return GrammarEngine(dictionary=sample_dictionary, config=fresh_config)


@pytest.fixture
def symspell_engine(symspell_dictionary, fresh_config) -> GrammarEngine:
    """Engine over the default symspellpy word list."""
    return GrammarEngine(dictionary=symspell_dictionary, config=fresh_config)


@pytest.fixture(autouse=True)
def reset_global_state():
    """Keep global configuration and shared instances from leaking between tests."""
    prosecheck_config.reset_config()
    yield
    prosecheck_config.reset_config()
    prosecheck_engine.reset_engine()
    prosecheck_spelling.reset()
