"""
ProseCheck
==========
Version: 1.0.0

Rule-based English prose checking:
- Grammar: agreement, pronoun case, confused words, articles
- Spelling: curated misspellings plus ranked dictionary corrections
- Style: wordiness, redundancy, clichés, with context-aware fixes
- Tone: lexicon-based tone label

Runs fully in-process with no network access.
Subpackages are loaded lazily on first access.
"""

__version__ = "1.0.0"
__author__ = "ProseCheck"

_MODULES = {
    'context': 'prosecheck.context',
    'rules': 'prosecheck.rules',
    'spelling': 'prosecheck.spelling',
    'style': 'prosecheck.style',
    'validation': 'prosecheck.validation',
    'engine': 'prosecheck.engine',
    'tone': 'prosecheck.tone',
    'ignore': 'prosecheck.ignore',
}

_loaded_modules = {}


def __getattr__(name):
    """Lazy load submodules on first access."""
    if name in _MODULES:
        if name not in _loaded_modules:
            import importlib
            _loaded_modules[name] = importlib.import_module(_MODULES[name])
        return _loaded_modules[name]
    raise AttributeError(f"module 'prosecheck' has no attribute '{name}'")


def __dir__():
    """List available submodules."""
    return list(_MODULES.keys()) + ['config', 'base', 'check_text', 'analyze_tone', 'get_status']


def check_text(text):
    """
    Check `text` for grammar, spelling and style issues.

    Returns a CheckResult; suggestions never overlap and are sorted by
    offset. Raises ValidationError when `text` is not a string.
    """
    from .engine import check_text as _check_text
    return _check_text(text)


def analyze_tone(text):
    """Tone label for `text` as a ToneResult."""
    from .tone import analyze_tone as _analyze_tone
    return _analyze_tone(text)


def get_status():
    """
    Get status of every component.

    Returns dict with enabled/available/error for each component plus
    dictionary and validator cache details.
    """
    from . import config
    status = {
        'version': __version__,
        'components': {},
    }

    for name in ('grammar', 'style'):
        status['components'][name] = {
            'enabled': config.is_enabled(name),
            'available': True,
            'error': None,
        }

    spelling_status = {
        'enabled': config.is_enabled('spelling'),
        'available': False,
        'error': None,
    }
    dictionary_status = {'enabled': config.is_enabled('dictionary'), 'available': False}
    try:
        from .spelling import get_dictionary
        dictionary = get_dictionary()
        dictionary_status.update(dictionary.get_status())
        spelling_status['available'] = True
        spelling_status['error'] = dictionary.error
    except Exception as e:
        spelling_status['error'] = str(e)
    status['components']['spelling'] = spelling_status
    status['components']['dictionary'] = dictionary_status

    validation_status = {'enabled': True, 'available': False, 'error': None}
    try:
        from .validation import get_validation_cache_stats
        validation_status['cache'] = get_validation_cache_stats()
        validation_status['available'] = True
    except Exception as e:
        validation_status['error'] = str(e)
    status['components']['validation'] = validation_status

    status['components']['tone'] = {'enabled': True, 'available': True, 'error': None}
    return status
