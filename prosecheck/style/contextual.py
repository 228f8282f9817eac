"""
Context-Aware Style Rules
=========================
Style rules whose fix depends on where the match sits and what
follows it. Each rule may decline to suggest anything (returns None),
which is preferred over a fix that would leave a fragment behind.

Rules marked `requires_validation` are run through the
SuggestionValidator; risky low-confidence results are dropped.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, List, Dict, Optional, Sequence

from ..base import (
    Suggestion,
    SuggestionKind,
    SuggestionRisk,
    build_context,
    suggestion_id,
)
from ..config_logging import RuleDefinitionError, get_logger
from ..context import SentencePosition, build_context_metadata, get_sentence_position
from ..rules.grammar import NON_PLURAL_S_WORDS
from ..validation import SuggestionValidator

__version__ = "1.0.0"

_logger = get_logger('prosecheck.style')

# Verbs that keep "Many ..." a full sentence once "There are" is gone
AUXILIARY_VERBS = {
    'are', 'is', 'were', 'was', 'have', 'has', 'do', 'does',
    'will', 'would', 'can', 'could',
}

UNCOUNTABLE_NOUNS = {
    'feedback', 'information', 'advice', 'research', 'work', 'time', 'money',
    'water', 'food', 'music', 'traffic', 'furniture', 'equipment', 'software',
    'data', 'content', 'progress', 'experience', 'knowledge', 'support',
    'help', 'news', 'homework', 'housework', 'paperwork',
}

COUNTABLE_NOUNS = {
    'issue', 'problem', 'question', 'idea', 'option', 'choice', 'opportunity',
    'challenge', 'benefit', 'advantage', 'feature', 'improvement', 'change',
    'mistake', 'error', 'bug', 'file', 'document', 'report', 'email',
    'message', 'notification', 'user', 'customer', 'client', 'person',
    'people', 'item', 'thing', 'request', 'suggestion', 'recommendation',
    'solution', 'student', 'employee',
}

STRONGER_ADJECTIVES: Dict[str, str] = {
    'good': 'excellent',
    'bad': 'terrible',
    'big': 'enormous',
    'small': 'tiny',
    'important': 'crucial',
    'difficult': 'challenging',
    'easy': 'simple',
    'interesting': 'fascinating',
    'nice': 'wonderful',
    'great': 'outstanding',
}

# Words ending in "s" that never start a plural noun phrase
NOT_PLURAL_NOUNS = frozenset(NON_PLURAL_S_WORDS) | {
    'those', 'hers', 'ours', 'yours', 'theirs', 'whose', 'various', 'previous',
}

# How many words after "Many" are searched for a verb
VERB_LOOKAHEAD = 4

_WORD = re.compile(r"[A-Za-z']+")
_CLAUSE_BREAK = re.compile(r'[.!?,;:]')


@dataclass
class GrammarContext:
    """Where a match sits in the text."""
    full_text: str
    match_start: int
    match_end: int
    before_context: str
    after_context: str
    sentence_position: SentencePosition
    is_complete_sentence: bool


@dataclass(frozen=True)
class ContextAwareStyleRule:
    """A style rule with a context-dependent replacement."""
    id: str
    pattern: str
    message: str
    short_message: str
    category: str
    confidence: float
    risk_level: SuggestionRisk
    requires_validation: bool
    replacer: Callable[[str, GrammarContext], Optional[str]] = field(repr=False)
    flags: int = re.IGNORECASE
    regex: 're.Pattern' = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        try:
            compiled = re.compile(self.pattern, self.flags)
        except re.error as e:
            raise RuleDefinitionError(f"invalid pattern: {e}", rule_id=self.id) from e
        object.__setattr__(self, 'regex', compiled)

    def replace(self, matched: str, context: GrammarContext) -> Optional[str]:
        """Replacement for this occurrence, or None to suggest nothing."""
        return self.replacer(matched, context)


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def _there_are_many(matched: str, context: GrammarContext) -> Optional[str]:
    if context.sentence_position != SentencePosition.START:
        return None

    clause = _CLAUSE_BREAK.split(context.full_text[context.match_end:], maxsplit=1)[0]
    following = [w.lower() for w in _WORD.findall(clause)[:VERB_LOOKAHEAD]]
    if any(w in AUXILIARY_VERBS for w in following):
        return "Many"
    return None


def _a_lot_of(matched: str, context: GrammarContext) -> Optional[str]:
    words = _WORD.findall(context.full_text[context.match_end:])
    if not words:
        return None

    noun = words[0].lower()
    if noun in UNCOUNTABLE_NOUNS:
        replacement = "much"
    elif noun in COUNTABLE_NOUNS or _looks_plural(noun):
        replacement = "many"
    else:
        return None
    return _capitalize(replacement) if matched[:1].isupper() else replacement


def _looks_plural(word: str) -> bool:
    if word in NOT_PLURAL_NOUNS:
        return False
    return word.endswith('s') and not word.endswith('ss')


def _it_is_important(matched: str, context: GrammarContext) -> Optional[str]:
    # The match ends with the first letter of the point being made
    if context.sentence_position != SentencePosition.START:
        return None

    remainder = context.full_text[context.match_end - 1:].strip()
    if len(remainder) < 10:
        return None
    return matched[-1].upper()


def _basically(matched: str, context: GrammarContext) -> Optional[str]:
    # The match ends with the first character of the next word
    if context.sentence_position == SentencePosition.START:
        return matched[-1].upper()
    return matched[-1]


def _very_adjective(matched: str, context: GrammarContext) -> Optional[str]:
    adjective = matched.split()[-1]
    stronger = STRONGER_ADJECTIVES.get(adjective.lower(), adjective.lower())
    return _capitalize(stronger) if matched[:1].isupper() else stronger


def _always(replacement: str) -> Callable[[str, GrammarContext], Optional[str]]:
    def replacer(matched: str, context: GrammarContext) -> Optional[str]:
        return _capitalize(replacement) if matched[:1].isupper() else replacement
    return replacer


CONTEXTUAL_STYLE_RULES: List[ContextAwareStyleRule] = [
    ContextAwareStyleRule(
        id='there-are-many-contextual',
        pattern=r'\bthere\s+are\s+many\b',
        message="Weak sentence starter. Consider more direct phrasing.",
        short_message="Strengthen opening",
        category='weak-opening',
        confidence=0.7,
        risk_level=SuggestionRisk.RISKY,
        requires_validation=True,
        replacer=_there_are_many,
    ),
    ContextAwareStyleRule(
        id='a-lot-of-contextual',
        pattern=r'\ba\s+lot\s+of\b',
        message='Consider more precise quantifiers based on context.',
        short_message="Be more precise",
        category='vague',
        confidence=0.7,
        risk_level=SuggestionRisk.MODERATE,
        requires_validation=True,
        replacer=_a_lot_of,
    ),
    ContextAwareStyleRule(
        id='it-is-important-contextual',
        pattern=r'\bit\s+is\s+important\s+to\s+note\s+that\s+[a-zA-Z]',
        message="Wordy phrase. State the important point directly.",
        short_message="Be more direct",
        category='weak-opening',
        confidence=0.8,
        risk_level=SuggestionRisk.MODERATE,
        requires_validation=True,
        replacer=_it_is_important,
    ),
    ContextAwareStyleRule(
        id='basically-contextual',
        pattern=r'\bbasically,?\s+\w',
        message='"Basically" is often unnecessary filler.',
        short_message="Remove filler word",
        category='filler',
        confidence=0.8,
        risk_level=SuggestionRisk.SAFE,
        requires_validation=False,
        replacer=_basically,
    ),
    ContextAwareStyleRule(
        id='very-adjective-contextual',
        pattern=(r'\bvery\s+(?:good|bad|big|small|important|difficult'
                 r'|easy|interesting|nice|great)\b'),
        message='Consider stronger, more specific adjectives.',
        short_message="Strengthen language",
        category='adverb-overuse',
        confidence=0.7,
        risk_level=SuggestionRisk.SAFE,
        requires_validation=False,
        replacer=_very_adjective,
    ),
    ContextAwareStyleRule(
        id='make-decision-contextual',
        pattern=r'\bmake\s+a\s+decision\b',
        message='More concise: use "decide".',
        short_message='Use "decide"',
        category='nominalization',
        confidence=0.8,
        risk_level=SuggestionRisk.SAFE,
        requires_validation=False,
        replacer=_always('decide'),
    ),
    ContextAwareStyleRule(
        id='give-consideration-contextual',
        pattern=r'\bgive\s+consideration\s+to\b',
        message='More concise: use "consider".',
        short_message='Use "consider"',
        category='nominalization',
        confidence=0.9,
        risk_level=SuggestionRisk.SAFE,
        requires_validation=False,
        replacer=_always('consider'),
    ),
    ContextAwareStyleRule(
        id='conduct-analysis-contextual',
        pattern=r'\bconduct\s+an?\s+analysis\b',
        message='More concise: use "analyze".',
        short_message='Use "analyze"',
        category='nominalization',
        confidence=0.9,
        risk_level=SuggestionRisk.SAFE,
        requires_validation=False,
        replacer=_always('analyze'),
    ),
]


def build_grammar_context(text: str, start: int, end: int) -> GrammarContext:
    metadata = build_context_metadata(text, start, end - start)
    return GrammarContext(
        full_text=text,
        match_start=start,
        match_end=end,
        before_context=text[max(0, start - 50):start],
        after_context=text[end:end + 50],
        sentence_position=get_sentence_position(text, start),
        is_complete_sentence=metadata.sentence_boundary.is_complete,
    )


def process_contextual_rules(text: str,
                             rules: Sequence[ContextAwareStyleRule] = CONTEXTUAL_STYLE_RULES,
                             validator: Optional[SuggestionValidator] = None,
                             risky_confidence_floor: float = 0.6) -> List[Suggestion]:
    """
    Apply context-aware rules to `text`.

    Every match is considered, including one at offset 0. A rule that
    returns None for a match produces nothing; validated suggestions
    that come back RISKY below `risky_confidence_floor` are dropped.
    """
    if validator is None:
        from ..validation import get_validator
        validator = get_validator()

    suggestions = []
    for rule in rules:
        for match in rule.regex.finditer(text):
            start, end = match.span()
            matched = match.group(0)
            context = build_grammar_context(text, start, end)

            replacement = rule.replace(matched, context)
            if replacement is None:
                continue

            confidence = rule.confidence
            validation = None
            if rule.requires_validation:
                result = validator.validate(text, start, end - start, replacement,
                                            rule.id, rule.confidence, 'style')
                if result.risk == SuggestionRisk.RISKY and result.confidence < risky_confidence_floor:
                    _logger.debug("Dropped risky suggestion", rule_id=rule.id, offset=start,
                                  confidence=round(result.confidence, 4))
                    continue
                confidence = result.confidence
                validation = result.to_info()

            suggestions.append(Suggestion(
                id=suggestion_id(rule.id, start),
                kind=SuggestionKind.STYLE,
                message=rule.message,
                short_message=rule.short_message,
                category=rule.category,
                confidence=confidence,
                offset=start,
                length=end - start,
                original_text=matched,
                replacements=[replacement],
                context=build_context(text, start, end - start),
                rule_id=rule.id,
                validation=validation,
            ))
    return suggestions
