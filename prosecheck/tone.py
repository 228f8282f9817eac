"""
Tone Analyzer
=============
Lexicon and punctuation based tone labelling.

Features:
- Eight keyword lexicons (whole-word, case-insensitive, phrases allowed)
- Exclamation / question density boosts
- Sentence-length formality boost
- Single user-facing label per text

Independent of the grammar engine; no state between calls.
"""

import re
from dataclasses import dataclass, field
from typing import List, Dict, Any, Tuple

from .config_logging import ValidationError, get_logger

__version__ = "1.0.0"

_logger = get_logger('prosecheck.tone')

NEUTRAL = 'neutral'

# Insertion order decides ties
TONE_LEXICONS: Dict[str, Tuple[str, ...]] = {
    'positive': (
        'excellent', 'amazing', 'wonderful', 'fantastic', 'great', 'good', 'love',
        'like', 'happy', 'excited', 'thrilled', 'delighted', 'pleased', 'satisfied',
        'awesome', 'brilliant', 'outstanding', 'superb', 'magnificent', 'marvelous',
        'terrific',
    ),
    'negative': (
        'terrible', 'awful', 'horrible', 'bad', 'hate', 'dislike', 'sad', 'angry',
        'frustrated', 'disappointed', 'annoyed', 'upset', 'worried', 'concerned',
        'dreadful', 'appalling', 'disgusting', 'revolting', 'pathetic', 'useless',
    ),
    'formal': (
        'therefore', 'furthermore', 'consequently', 'moreover', 'nevertheless',
        'however', 'thus', 'hence', 'accordingly', 'subsequently', 'notwithstanding',
        'pursuant', 'aforementioned', 'heretofore', 'whereas', 'whereby',
    ),
    'informal': (
        'hey', 'hi', 'yeah', 'yep', 'nope', 'gonna', 'wanna', 'gotta', 'kinda',
        'sorta', 'dunno', "ain't", "y'all", 'folks', 'guys', 'stuff', 'things',
    ),
    'confident': (
        'definitely', 'certainly', 'absolutely', 'undoubtedly', 'clearly',
        'obviously', 'surely', 'indeed', 'precisely', 'exactly', 'guaranteed',
        'assured', 'confident',
    ),
    'uncertain': (
        'maybe', 'perhaps', 'possibly', 'might', 'could', 'probably', 'seems',
        'appears', 'suggests', 'indicates', 'presumably', 'allegedly', 'supposedly',
    ),
    'friendly': (
        'thanks', 'thank you', 'please', 'welcome', 'appreciate', 'glad', 'nice',
        'kind', 'helpful', 'wonderful', 'pleasure', 'delighted', 'honored',
    ),
    'aggressive': (
        'must', 'should', 'need to', 'have to', 'required', 'mandatory', 'demand',
        'insist', 'force', 'compel', 'urgent', 'critical', 'essential',
    ),
}

TONE_LABELS: Dict[str, str] = {
    'positive': 'positive',
    'negative': 'negative',
    'formal': 'formal',
    'informal': 'casual',
    'confident': 'confident',
    'uncertain': 'tentative',
    'friendly': 'friendly',
    'aggressive': 'assertive',
    'excited': 'enthusiastic',
    'inquisitive': 'curious',
}

EXCLAMATION_RATIO = 0.3
QUESTION_RATIO = 0.2
LONG_SENTENCE_WORDS = 20
SHORT_SENTENCE_WORDS = 10
LENGTH_BOOST = 2

_SENTENCE = re.compile(r'([^.!?]+)([.!?]*)')


def _indicator_pattern(indicator: str) -> 're.Pattern':
    escaped = re.escape(indicator).replace(r'\ ', r'\s+')
    return re.compile(r'\b' + escaped + r'\b', re.IGNORECASE)


@dataclass
class ToneResult:
    """Tone label plus the scores that produced it."""
    label: str = NEUTRAL
    category: str = NEUTRAL
    scores: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {'tone': self.label}


class ToneAnalyzer:
    """Scores text against the tone lexicons and picks the dominant tone."""

    def __init__(self, lexicons: Dict[str, Tuple[str, ...]] = None):
        lexicons = TONE_LEXICONS if lexicons is None else lexicons
        self._patterns: Dict[str, List['re.Pattern']] = {
            category: [_indicator_pattern(word) for word in words]
            for category, words in lexicons.items()
        }

    def analyze(self, text: str) -> ToneResult:
        if not isinstance(text, str):
            raise ValidationError(
                f"text must be a string, got {type(text).__name__}", field="text"
            )
        if not text.strip():
            return ToneResult()

        scores = self.lexicon_scores(text)
        self._apply_structure(text, scores)

        best = max(scores.values())
        if best == 0:
            return ToneResult(scores=scores)

        category = next(name for name, score in scores.items() if score == best)
        label = TONE_LABELS.get(category, NEUTRAL)
        _logger.debug("Tone analyzed", category=category, score=best)
        return ToneResult(label=label, category=category, scores=scores)

    def lexicon_scores(self, text: str) -> Dict[str, int]:
        return {
            category: sum(len(p.findall(text)) for p in patterns)
            for category, patterns in self._patterns.items()
        }

    @staticmethod
    def _apply_structure(text: str, scores: Dict[str, int]):
        sentences = [
            (body.strip(), terminator)
            for body, terminator in _SENTENCE.findall(text)
            if body.strip()
        ]
        if not sentences:
            return

        exclamations = sum(1 for _, end in sentences if '!' in end)
        questions = sum(1 for _, end in sentences if '?' in end)
        avg_length = sum(len(body.split()) for body, _ in sentences) / len(sentences)

        if exclamations > len(sentences) * EXCLAMATION_RATIO:
            scores['excited'] = scores.get('excited', 0) + exclamations
        if questions > len(sentences) * QUESTION_RATIO:
            scores['inquisitive'] = scores.get('inquisitive', 0) + questions

        if avg_length > LONG_SENTENCE_WORDS:
            scores['formal'] = scores.get('formal', 0) + LENGTH_BOOST
        elif avg_length < SHORT_SENTENCE_WORDS:
            scores['informal'] = scores.get('informal', 0) + LENGTH_BOOST


_analyzer = None


def get_analyzer() -> ToneAnalyzer:
    """Get the shared ToneAnalyzer instance (lazy loaded)."""
    global _analyzer
    if _analyzer is None:
        _analyzer = ToneAnalyzer()
    return _analyzer


def analyze_tone(text: str) -> ToneResult:
    """Tone of `text`; "neutral" for empty or unremarkable text."""
    return get_analyzer().analyze(text)
