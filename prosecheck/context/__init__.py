"""
Sentence/Context Analysis for ProseCheck
========================================
Pure helpers that answer "where in its sentence is this offset?" and
"does this edit leave the sentence whole?".

Features:
- Abbreviation-aware sentence splitting
- Fragment and completeness heuristics
- Context metadata (position, paragraph, neighbouring words)
- Structural validation of replacements
"""

__version__ = "1.0.0"

from .sentences import (
    COMMON_ABBREVIATIONS,
    SentenceBoundary,
    SentencePosition,
    clear_sentence_cache,
    detect_sentence_issues,
    get_sentence_position,
    has_basic_subject,
    has_basic_verb,
    is_complete_sentence,
    is_fragment,
    normalize_text,
    split_into_sentences,
    validate_sentence_completeness,
)
from .metadata import (
    ContextMetadata,
    analyze_multi_sentence_context,
    apply_replacement,
    build_context_metadata,
    extract_context_window,
    extract_words_around_position,
    find_paragraph_boundaries,
    find_sentence,
    validate_replacement,
)

__all__ = [
    'COMMON_ABBREVIATIONS',
    'ContextMetadata',
    'SentenceBoundary',
    'SentencePosition',
    'analyze_multi_sentence_context',
    'apply_replacement',
    'build_context_metadata',
    'clear_sentence_cache',
    'detect_sentence_issues',
    'extract_context_window',
    'extract_words_around_position',
    'find_paragraph_boundaries',
    'find_sentence',
    'get_sentence_position',
    'has_basic_subject',
    'has_basic_verb',
    'is_complete_sentence',
    'is_fragment',
    'normalize_text',
    'split_into_sentences',
    'validate_replacement',
    'validate_sentence_completeness',
]
