"""
Spelling Checker for ProseCheck
===============================
Two-pass spelling stage: curated misspelling rules first, then a
dictionary pass that ranks corrections for every remaining unknown
word.

The dictionary is passed in, so tests and embedders can supply their
own word list.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..base import Suggestion, SuggestionKind, build_context, suggestion_id
from ..config import SpellingConfig
from ..config_logging import get_logger
from ..rules import SPELLING_RULES, Rule, apply_rule
from .dictionary import Dictionary
from .ranker import EnhancedSpellingRanker, RankingOptions

__version__ = "1.0.0"

_logger = get_logger('prosecheck.spelling')

# A correction to one of these is very likely right
VERY_COMMON_WORDS = frozenset({
    'the', 'and', 'that', 'have', 'with', 'this', 'from', 'they', 'will',
    'would', 'there', 'their', 'what', 'about', 'which', 'when', 'make',
    'like', 'time', 'just', 'know', 'take', 'people', 'into', 'your',
    'good', 'some', 'could', 'them', 'other', 'than', 'then', 'because',
    'through', 'should', 'where', 'while', 'right', 'write', 'thought',
    'before', 'after', 'another',
})

CONTRACTION_SUFFIX = r"(?:t|d|m|re|ve|ll)\b"

_WORD = re.compile(r'[A-Za-z]+')


@dataclass
class SpellingResult:
    """Suggestions from both passes plus counters for CheckStats."""
    suggestions: List[Suggestion] = field(default_factory=list)
    words_checked: int = 0
    rule_based_errors: int = 0
    dictionary_errors: int = 0


class SpellingChecker:
    """
    Rule-based and dictionary-based spelling checks.

    Features:
    - Curated rules win over dictionary guesses for the same word
    - Ranked suggestions using frequency, keyboard, phonetic and
      bigram context signals
    - Tokens already covered by another suggestion are left alone
    """

    def __init__(self, dictionary: Dictionary, config: Optional[SpellingConfig] = None,
                 rules: Optional[Sequence[Rule]] = None):
        self.dictionary = dictionary
        self.config = config or SpellingConfig()
        self.rules = list(SPELLING_RULES if rules is None else rules)
        self.ranker = EnhancedSpellingRanker(dictionary)
        # Contraction stems ("isn" in "isn't") and suffixes are not words
        self._token = re.compile(
            rf"(?<!['’])\b[a-zA-Z]{{{self.config.min_word_length},{self.config.max_word_length}}}\b"
            rf"(?!['’]{CONTRACTION_SUFFIX})"
        )

    def check(self, text: str, existing: Sequence[Suggestion] = ()) -> SpellingResult:
        """
        Check `text`.

        `existing` holds suggestions from earlier stages; dictionary
        flags never overlap them or the rule-based spelling flags.
        """
        result = SpellingResult()

        for rule in self.rules:
            try:
                result.suggestions.extend(apply_rule(rule, text))
            except Exception as e:
                _logger.error(f"Spelling rule failed: {e}", rule_id=rule.id, exc_info=True)
        result.rule_based_errors = len(result.suggestions)

        covered = list(existing) + result.suggestions
        tokens = list(self._token.finditer(text))
        result.words_checked = len(tokens)

        for token in tokens:
            start, end = token.span()
            if any(start < s.end and s.offset < end for s in covered):
                continue
            word = token.group(0)
            if self.dictionary.is_valid(word):
                continue

            result.suggestions.append(self._dictionary_suggestion(text, word, start))
            result.dictionary_errors += 1

        return result

    def _dictionary_suggestion(self, text: str, word: str, offset: int) -> Suggestion:
        options = RankingOptions(
            max_suggestions=self.config.max_suggestions,
            include_phonetic=self.config.include_phonetic,
            context_words=self.context_words(text, offset, len(word)),
            min_confidence=self.config.min_confidence,
        )
        candidates = self.ranker.get_enhanced_suggestions(word, options)

        return Suggestion(
            id=suggestion_id(None, offset),
            kind=SuggestionKind.SPELLING,
            message=f'"{word}" may be misspelled.',
            short_message=f'Try "{candidates[0]}"' if candidates else 'Check spelling',
            category='dictionary',
            confidence=self.suggestion_confidence(word, candidates),
            offset=offset,
            length=len(word),
            original_text=word,
            replacements=candidates,
            context=build_context(text, offset, len(word)),
        )

    def context_words(self, text: str, offset: int, length: int) -> List[str]:
        """Up to `context_window` words either side of the span."""
        window = self.config.context_window
        before = _WORD.findall(text[:offset])[-window:] if window else []
        after = _WORD.findall(text[offset + length:])[:window]
        return before + after

    @staticmethod
    def suggestion_confidence(word: str, candidates: Sequence[str]) -> float:
        """
        0.6 base, +0.2 for a very common top pick, +0.1 when the top pick
        is within one letter of the word's length, +0.1 for two or more
        candidates; capped at 0.95.
        """
        confidence = 0.6
        if candidates:
            top = candidates[0]
            if top.lower() in VERY_COMMON_WORDS:
                confidence += 0.2
            if abs(len(top) - len(word)) <= 1:
                confidence += 0.1
            if len(candidates) >= 2:
                confidence += 0.1
        return min(0.95, round(confidence, 4))
