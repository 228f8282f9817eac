"""
Suggestion Validation for ProseCheck
====================================
Risk assessment and confidence adjustment for replacements.

Features:
- Structural validation (sentence count, completeness, punctuation)
- Context quality scoring
- SAFE / MODERATE / RISKY classification
- Bounded, thread-safe result cache
- Agreement, flow and readability helpers (textstat)

Requires: pip install textstat
"""

import threading

__version__ = "1.0.0"

from .validator import (
    SuggestionValidator,
    ValidationRequest,
    ValidationResult,
    adjust_confidence,
    assess_context_quality,
    assess_risk,
    filter_suggestions_by_validation,
)
from .analysis import (
    check_grammatical_agreement,
    check_replacement_whitelist,
    compare_before_after,
    reconstruct_sentence_with_replacement,
    starts_with_vowel_sound,
    validate_grammatical_patterns,
)

# Lazy singleton
_validator = None
_lock = threading.Lock()


def get_validator() -> SuggestionValidator:
    """Get the shared SuggestionValidator instance (lazy loaded)."""
    global _validator
    if _validator is None:
        with _lock:
            if _validator is None:
                from ..config import get_config
                _validator = SuggestionValidator(get_config().validation.cache_size)
    return _validator


def validate_suggestion(text: str, match_start: int, match_end: int, replacement: str,
                        rule_id: str, confidence: float) -> ValidationResult:
    """Validate a style replacement with the shared validator."""
    return get_validator().validate(
        text, match_start, match_end - match_start, replacement, rule_id, confidence, 'style'
    )


def clear_validation_cache():
    get_validator().clear_cache()


def get_validation_cache_stats() -> dict:
    return get_validator().get_cache_stats()


def get_status() -> dict:
    """Get validator status."""
    return {
        'available': True,
        'cache': get_validation_cache_stats(),
    }


__all__ = [
    'SuggestionValidator',
    'ValidationRequest',
    'ValidationResult',
    'adjust_confidence',
    'assess_context_quality',
    'assess_risk',
    'check_grammatical_agreement',
    'check_replacement_whitelist',
    'clear_validation_cache',
    'compare_before_after',
    'filter_suggestions_by_validation',
    'get_status',
    'get_validation_cache_stats',
    'get_validator',
    'reconstruct_sentence_with_replacement',
    'starts_with_vowel_sound',
    'validate_grammatical_patterns',
    'validate_suggestion',
]
