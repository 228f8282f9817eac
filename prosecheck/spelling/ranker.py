"""
Enhanced Spelling Ranker
========================
Multi-stage ranking of spelling corrections.

Candidates come from three generators (dictionary edit distance,
common letter substitutions, adjacent-key typos) and are scored on
five signals:

    final = 0.30 / (edit + 1)
          + 0.25 * frequency
          + 0.20 * keyboard
          + 0.15 * phonetic
          + 0.10 * context

where `edit` is the keyboard-weighted edit distance. Confidence is
final * 1.2 for near misses (edit <= 1) and final * 0.8 otherwise,
capped at 1.0.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from .dictionary import Dictionary
from .scorers import (
    context_score,
    frequency_score,
    keyboard_score,
    keyboard_variants,
    phonetic_score,
    substitution_variants,
    weighted_edit_distance,
)

__version__ = "1.0.0"

WEIGHTS: Dict[str, float] = {
    'edit_distance': 0.30,
    'frequency': 0.25,
    'keyboard': 0.20,
    'phonetic': 0.15,
    'context': 0.10,
}


@dataclass
class RankingOptions:
    """Knobs for a single ranking call."""
    max_suggestions: int = 5
    include_phonetic: bool = True
    context_words: List[str] = field(default_factory=list)
    min_confidence: float = 0.3


@dataclass
class SpellingCandidate:
    """A scored correction candidate."""
    word: str
    edit_distance: float
    frequency_score: float
    keyboard_score: float
    phonetic_score: float
    context_score: float
    final_score: float
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'word': self.word,
            'edit_distance': round(self.edit_distance, 4),
            'frequency_score': round(self.frequency_score, 4),
            'keyboard_score': round(self.keyboard_score, 4),
            'phonetic_score': round(self.phonetic_score, 4),
            'context_score': round(self.context_score, 4),
            'final_score': round(self.final_score, 4),
            'confidence': round(self.confidence, 4),
        }


class EnhancedSpellingRanker:
    """Ranks dictionary candidates for a misspelled word. Stateless apart from the dictionary."""

    def __init__(self, dictionary: Dictionary):
        self.dictionary = dictionary

    def get_enhanced_suggestions(self, word: str, options: Optional[RankingOptions] = None) -> List[str]:
        """Best corrections for `word`, best first."""
        return [c.word for c in self.rank(word, options)]

    def rank(self, word: str, options: Optional[RankingOptions] = None) -> List[SpellingCandidate]:
        """Scored candidates that pass `min_confidence`, best first."""
        options = options or RankingOptions()
        normalized = word.lower()

        scored = [
            self.score(normalized, candidate, options.context_words, options.include_phonetic)
            for candidate in self.generate_candidates(normalized)
        ]

        kept = [c for c in scored if c.confidence >= options.min_confidence]
        # sorted() is stable, so equal scores keep generation order
        kept = sorted(kept, key=lambda c: c.final_score, reverse=True)
        return kept[:options.max_suggestions]

    def generate_candidates(self, word: str) -> List[str]:
        """Union of all generators, first-seen order, valid words only."""
        pool: Dict[str, None] = {}
        for candidate in self.dictionary.candidates(word, 10):
            pool.setdefault(candidate, None)
        for candidate in substitution_variants(word):
            pool.setdefault(candidate, None)
        for candidate in keyboard_variants(word):
            pool.setdefault(candidate, None)

        return [
            c for c in pool
            if c != word and self.dictionary.is_valid(c)
        ]

    def score(self, original: str, candidate: str, context_words: List[str],
              include_phonetic: bool = True) -> SpellingCandidate:
        edit = weighted_edit_distance(original, candidate)
        freq = frequency_score(candidate)
        keys = keyboard_score(original, candidate)
        phon = phonetic_score(original, candidate) if include_phonetic else 0.0
        ctx = context_score(candidate, context_words)

        final = (
            WEIGHTS['edit_distance'] / (edit + 1)
            + WEIGHTS['frequency'] * freq
            + WEIGHTS['keyboard'] * keys
            + WEIGHTS['phonetic'] * phon
            + WEIGHTS['context'] * ctx
        )
        confidence = min(1.0, final * (1.2 if edit <= 1 else 0.8))

        return SpellingCandidate(
            word=candidate,
            edit_distance=edit,
            frequency_score=freq,
            keyboard_score=keys,
            phonetic_score=phon,
            context_score=ctx,
            final_score=final,
            confidence=confidence,
        )
