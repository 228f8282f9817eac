"""
Context-Aware Style Processing for ProseCheck
=============================================
Style rules that look at the surrounding sentence before suggesting a
fix.

Features:
- Sentence-position aware replacements ("There are many" -> "Many")
- Countable/uncountable choice for "a lot of"
- Validation of risky replacements
- Per-text LRU result cache
"""

import threading

__version__ = "1.0.0"

from .contextual import (
    AUXILIARY_VERBS,
    CONTEXTUAL_STYLE_RULES,
    ContextAwareStyleRule,
    GrammarContext,
    build_grammar_context,
    process_contextual_rules,
)
from .processor import ContextAwareRuleSelector, EnhancedStyleProcessor

# Lazy singletons
_processor = None
_selector = None
_lock = threading.Lock()


def get_processor() -> EnhancedStyleProcessor:
    """Get the shared EnhancedStyleProcessor instance (lazy loaded)."""
    global _processor
    if _processor is None:
        with _lock:
            if _processor is None:
                from ..config import get_config
                from ..validation import get_validator
                config = get_config()
                _processor = EnhancedStyleProcessor(
                    validator=get_validator(),
                    cache_size=config.style.cache_size,
                    risky_confidence_floor=config.validation.risky_confidence_floor,
                )
    return _processor


def get_selector() -> ContextAwareRuleSelector:
    """Get the shared ContextAwareRuleSelector instance."""
    global _selector
    if _selector is None:
        _selector = ContextAwareRuleSelector()
    return _selector


def process_enhanced_style_suggestions(text: str):
    """Context-aware style suggestions using the shared processor."""
    return get_processor().process_style_suggestions(text)


def get_status() -> dict:
    """Get style processor status."""
    return {
        'available': True,
        'rules': len(CONTEXTUAL_STYLE_RULES),
        'cache': get_processor().get_cache_stats(),
    }


__all__ = [
    'AUXILIARY_VERBS',
    'CONTEXTUAL_STYLE_RULES',
    'ContextAwareRuleSelector',
    'ContextAwareStyleRule',
    'EnhancedStyleProcessor',
    'GrammarContext',
    'build_grammar_context',
    'get_processor',
    'get_selector',
    'get_status',
    'process_contextual_rules',
    'process_enhanced_style_suggestions',
]
