"""
Replacement Analysis
====================
Secondary checks on a proposed replacement: agreement with the words
around it, known good and bad replacements per rule, sentence flow and
a before/after readability comparison.

Requires: pip install textstat
"""

import re
from typing import List, Dict, Any

import textstat

from ..context import build_context_metadata, apply_replacement

__version__ = "1.0.0"


KNOWN_GOOD_REPLACEMENTS: Dict[str, List[str]] = {
    'there-are-many': ['Many', 'Several', 'Numerous'],
    'a-lot-of': ['many', 'much', 'numerous', 'several'],
    'due-to-the-fact-that': ['because', 'since'],
    'in-order-to': ['to'],
    'at-this-point-in-time': ['now', 'currently'],
}

KNOWN_BAD_REPLACEMENTS: Dict[str, List[str]] = {
    'there-are-many': ['Many issues', 'There many'],
    'a-lot-of': ['many feedback', 'much issues'],
    'basically': [''],
}

COMMON_VERBS = {'is', 'are', 'was', 'were', 'have', 'has', 'had', 'do', 'does', 'did'}
SILENT_H_WORDS = ('hour', 'honest', 'honor', 'heir')
CONSONANT_SOUND_VOWELS = ('university', 'european', 'one')

_DOUBLE_NEGATIVE = re.compile(
    r"\b(?:don't|won't|can't|shouldn't)\s+.*\b(?:no|nothing|never|nobody)\b", re.IGNORECASE
)
_INCOMPLETE_COMPARISON = re.compile(r'\b(?:more|less|better|worse)\s+than\s*$', re.IGNORECASE)
_SUBJECT_WORD = re.compile(r'\b(?:I|you|he|she|it|we|they|the|a|an)\b', re.IGNORECASE)
_BROKEN_ARTICLE = re.compile(r'\b(?:a|an)\s+(?:are|were)\b', re.IGNORECASE)
_BROKEN_COPULA = re.compile(r'\b(?:is|was)\s+are\b', re.IGNORECASE)
_DOUBLE_PUNCTUATION = re.compile(r'[.!?]{2,}|,,')


# =============================================================================
# WORD CLASS HEURISTICS
# =============================================================================

def is_verb(word: str) -> bool:
    return word in COMMON_VERBS or word.endswith(('s', 'ed', 'ing'))


def is_singular_noun(word: str) -> bool:
    return not word.endswith('s') or word.endswith(('ss', 'us'))


def is_plural_noun(word: str) -> bool:
    return word.endswith('s') and not word.endswith(('ss', 'us'))


def is_singular_verb(word: str) -> bool:
    return word in ('is', 'was', 'has', 'does') or (word.endswith('s') and not word.endswith('ss'))


def is_plural_verb(word: str) -> bool:
    return word in ('are', 'were', 'have', 'do')


def starts_with_vowel_sound(word: str) -> bool:
    """Rough a/an test: silent-h words count as vowels, 'uni-'/'one' as consonants."""
    lowered = word.lower()
    if lowered.startswith(SILENT_H_WORDS):
        return True
    if lowered.startswith(CONSONANT_SOUND_VOWELS):
        return False
    return lowered[:1] in ('a', 'e', 'i', 'o', 'u')


# =============================================================================
# AGREEMENT AND PATTERNS
# =============================================================================

def check_grammatical_agreement(text: str, offset: int, length: int, replacement: str) -> Dict[str, Any]:
    """Noun/verb number and a/an agreement between the replacement and its neighbours."""
    issues = []
    before = text[max(0, offset - 20):offset].lower().split()
    after = text[offset + length:offset + length + 20].lower().split()
    words = replacement.lower().split()

    if words and after and is_verb(after[0]):
        last, verb = words[-1], after[0]
        if is_singular_noun(last) and is_plural_verb(verb):
            issues.append('Singular noun with plural verb')
        elif is_plural_noun(last) and is_singular_verb(verb):
            issues.append('Plural noun with singular verb')

    if before and words:
        article = before[-1]
        if article == 'a' and starts_with_vowel_sound(words[0]):
            issues.append('Use "an" before vowel sound')
        elif article == 'an' and not starts_with_vowel_sound(words[0]):
            issues.append('Use "a" before consonant sound')

    return {'has_agreement_issues': bool(issues), 'issues': issues}


def validate_grammatical_patterns(text: str, offset: int, length: int, replacement: str) -> List[str]:
    """Double negatives, dangling comparisons and dangling modifiers."""
    issues = []
    new_text = apply_replacement(text, offset, length, replacement)

    if _DOUBLE_NEGATIVE.search(new_text):
        issues.append('Possible double negative')

    if _INCOMPLETE_COMPARISON.search(replacement):
        issues.append('Incomplete comparison')

    following = text[offset + length:offset + length + 20]
    if replacement.startswith('ing ') and not _SUBJECT_WORD.search(following):
        issues.append('Possible dangling modifier')

    return issues


def check_replacement_whitelist(rule_id: str, replacement: str) -> Dict[str, Any]:
    """Is this replacement a known good or known bad fix for the rule?"""
    good = KNOWN_GOOD_REPLACEMENTS.get(rule_id, [])
    bad = KNOWN_BAD_REPLACEMENTS.get(rule_id, [])
    is_known_bad = replacement in bad

    return {
        'is_known_good': replacement in good,
        'is_known_bad': is_known_bad,
        'suggestion': f"Consider: {good[0]}" if is_known_bad and good else None,
    }


# =============================================================================
# FLOW AND COMPARISON
# =============================================================================

def reconstruct_sentence_with_replacement(text: str, offset: int, length: int,
                                          replacement: str) -> Dict[str, Any]:
    """Sentence before and after the edit, plus flow and punctuation verdicts."""
    new_text = apply_replacement(text, offset, length, replacement)
    old_sentence = build_context_metadata(text, offset, length).sentence_boundary
    new_sentence = build_context_metadata(new_text, offset, len(replacement)).sentence_boundary

    return {
        'new_text': new_text,
        'affected_sentences': [old_sentence.text, new_sentence.text],
        'flow_maintained': _check_flow(text, offset, length, replacement),
        'punctuation_consistent': _check_punctuation(text, new_text, offset, length, replacement),
    }


def _check_flow(text: str, offset: int, length: int, replacement: str) -> bool:
    before = text[max(0, offset - 50):offset]
    after = text[offset + length:offset + length + 50]
    combined = before + replacement + after

    if _BROKEN_ARTICLE.search(combined) or _BROKEN_COPULA.search(combined):
        return False
    return _preserves_meaning(text[offset:offset + length], replacement)


def _preserves_meaning(original: str, replacement: str) -> bool:
    if replacement == '':
        return original.strip() == ''

    original_words = original.lower().split()
    replacement_words = replacement.lower().split()

    # A much shorter replacement should keep at least one key word
    if len(replacement_words) < len(original_words) / 2:
        shares_word = any(
            o in r or r in o
            for o in original_words
            for r in replacement_words
        )
        return shares_word or len(original) < 10
    return True


def _check_punctuation(text: str, new_text: str, offset: int, length: int, replacement: str) -> bool:
    before = text[max(0, offset - 5):offset]
    if re.search(r'[.!?]\s*$', before) and replacement and replacement[0] != replacement[0].upper():
        return False

    after = text[offset + length:offset + length + 5]
    if re.match(r'\s*[.!?]', after) and re.search(r'[.!?]$', replacement):
        return False

    window = new_text[max(0, offset - 5):offset + len(replacement) + 5]
    return not _DOUBLE_PUNCTUATION.search(window)


def text_complexity(text: str) -> float:
    """Half average word length plus half syllables per word."""
    words = text.split()
    if not words:
        return 0.0
    average_length = sum(len(w) for w in words) / len(words)
    syllables = sum(max(1, textstat.syllable_count(w)) for w in words)
    return average_length * 0.5 + (syllables / len(words)) * 0.5


def clarity_score(original: str, replacement: str) -> float:
    score = 0.8 if len(original.split()) > len(replacement.split()) else 0.6

    if 'there are' in original and replacement.startswith('Many'):
        score += 0.2
    if 'a lot of' in original and ('many' in replacement or 'much' in replacement):
        score += 0.2
    if 'due to the fact that' in original and 'because' in replacement:
        score += 0.3

    return min(1.0, score)


def compare_before_after(text: str, offset: int, length: int, replacement: str) -> Dict[str, Any]:
    """Clarity, length and complexity deltas between the span and its replacement."""
    original = text[offset:offset + length]
    length_change = len(replacement) - length
    complexity_change = text_complexity(replacement) - text_complexity(original)
    clarity = clarity_score(original, replacement)

    issues = []
    if length_change > len(original) * 2:
        issues.append('Replacement significantly longer than original')
    if complexity_change > 0.5:
        issues.append('Replacement increases complexity')

    return {
        'readability_improved': clarity > 0.6 and complexity_change <= 0,
        'clarity_score': clarity,
        'length_change': length_change,
        'complexity_change': complexity_change,
        'issues': issues,
    }
