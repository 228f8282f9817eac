"""
ProseCheck Base Types
=====================
Data model shared by every component: suggestions, their validation
metadata and the result of a full check.

All offsets are Python string indices into the exact text handed to
check_text().
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Optional

__version__ = "1.0.0"


class SuggestionKind(Enum):
    """Which rule family produced a suggestion."""
    GRAMMAR = "grammar"
    SPELLING = "spelling"
    STYLE = "style"


class SuggestionRisk(Enum):
    """How likely a replacement is to be contextually wrong."""
    SAFE = "safe"
    MODERATE = "moderate"
    RISKY = "risky"


@dataclass(frozen=True)
class Example:
    """Before/after illustration attached to a rule."""
    incorrect: str
    correct: str

    def to_dict(self) -> Dict[str, str]:
        return {'incorrect': self.incorrect, 'correct': self.correct}


@dataclass
class ValidationInfo:
    """Validator verdict attached to a suggestion that passed through it."""
    risk: SuggestionRisk
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'risk': self.risk.value, 'reasons': list(self.reasons)}


@dataclass
class SuggestionContext:
    """Window of surrounding text for display, with its own position."""
    text: str
    offset: int
    length: int

    def to_dict(self) -> Dict[str, Any]:
        return {'text': self.text, 'offset': self.offset, 'length': self.length}


@dataclass
class Suggestion:
    """
    One flagged span of text with an explanation and candidate fixes.

    An empty replacements list means "flag only, no fix".
    """
    id: str
    kind: SuggestionKind
    message: str
    short_message: str
    category: str
    confidence: float
    offset: int
    length: int
    original_text: str
    replacements: List[str] = field(default_factory=list)
    context: Optional[SuggestionContext] = None
    rule_id: Optional[str] = None
    validation: Optional[ValidationInfo] = None
    examples: List[Example] = field(default_factory=list)

    @property
    def end(self) -> int:
        return self.offset + self.length

    def overlaps(self, other: 'Suggestion') -> bool:
        """True when the half-open ranges intersect."""
        return not (self.end <= other.offset or other.end <= self.offset)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format for API responses."""
        data = {
            'id': self.id,
            'type': self.kind.value,
            'message': self.message,
            'shortMessage': self.short_message,
            'category': self.category,
            'confidence': self.confidence,
            'offset': self.offset,
            'length': self.length,
            'originalText': self.original_text,
            'replacements': list(self.replacements),
            'context': self.context.to_dict() if self.context else None,
            'ruleId': self.rule_id,
        }
        if self.validation is not None:
            data['validation'] = self.validation.to_dict()
        if self.examples:
            data['examples'] = [e.to_dict() for e in self.examples]
        return data


@dataclass
class CheckStats:
    """Summary counters for one check_text() call."""
    total_checks: int = 0
    grammar_errors: int = 0
    spelling_errors: int = 0
    style_errors: int = 0
    processing_time_ms: float = 0.0
    words_checked: int = 0
    rule_based_errors: int = 0
    dictionary_errors: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalChecks': self.total_checks,
            'grammarErrors': self.grammar_errors,
            'spellingErrors': self.spelling_errors,
            'styleErrors': self.style_errors,
            'processingTime': self.processing_time_ms,
            'enhancedSpelling': {
                'wordsChecked': self.words_checked,
                'ruleBasedErrors': self.rule_based_errors,
                'dictionaryErrors': self.dictionary_errors,
            },
        }


@dataclass
class CheckResult:
    """Result of checking one text."""
    suggestions: List[Suggestion] = field(default_factory=list)
    stats: CheckStats = field(default_factory=CheckStats)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'suggestions': [s.to_dict() for s in self.suggestions],
            'stats': self.stats.to_dict(),
        }


def build_context(text: str, offset: int, length: int, window: int = 30) -> SuggestionContext:
    """Display window of `window` characters either side, clamped to text bounds."""
    start = max(0, offset - window)
    end = min(len(text), offset + length + window)
    return SuggestionContext(text=text[start:end], offset=start, length=end - start)


def suggestion_id(rule_id: Optional[str], offset: int) -> str:
    """Deterministic id; unique within one result because ranges never overlap."""
    return f"{rule_id or 'dictionary'}-{offset}"


class ComponentBase(ABC):
    """
    Abstract base class for components that load external resources.

    A component that fails to load stays usable in a degraded mode and
    reports why through `error`.
    """

    COMPONENT_NAME: str = "Component"
    COMPONENT_VERSION: str = "1.0.0"

    def __init__(self):
        self._available = False
        self._error: Optional[str] = None

    @property
    def is_available(self) -> bool:
        """Check if the component loaded its resources."""
        return self._available

    @property
    def error(self) -> Optional[str]:
        """Get initialization error if any."""
        return self._error

    @abstractmethod
    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the component."""
        pass
