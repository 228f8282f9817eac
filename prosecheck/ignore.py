"""
Ignore-List Matching
====================
Decides whether a suggestion matches one the user dismissed earlier,
even after the surrounding text has shifted a little.

Matching:
- Exact original text and suggestion kind are required
- With rule ids on both sides, the ids must agree
- Otherwise a nearby position or similar surrounding context is enough
"""

from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Optional, Sequence

from .base import Suggestion, SuggestionKind

__version__ = "1.0.0"

CONTEXT_LENGTH = 50
POSITION_TOLERANCE = 20
CONTEXT_SIMILARITY_THRESHOLD = 0.7


@dataclass
class IgnoredSuggestion:
    """A dismissed suggestion, with enough context to recognise it again."""
    original_text: str
    suggestion_kind: SuggestionKind
    rule_id: Optional[str]
    position_start: int
    position_end: int
    context_before: str = ''
    context_after: str = ''

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['suggestion_kind'] = self.suggestion_kind.value
        return data


def extract_context(text: str, offset: int, length: int,
                    context_length: int = CONTEXT_LENGTH) -> Dict[str, str]:
    """Stripped text on either side of a span."""
    start = max(0, offset - context_length)
    end = min(len(text), offset + length + context_length)
    return {
        'before': text[start:offset].strip(),
        'after': text[offset + length:end].strip(),
    }


def context_similarity(a: str, b: str) -> float:
    """Share of characters in `a` that also occur in `b`, over the longer length."""
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    common = sum(1 for ch in a if ch in b)
    return common / max(len(a), len(b))


def should_ignore_suggestion(suggestion: Suggestion, text: str,
                             ignored: Sequence[IgnoredSuggestion]) -> bool:
    if not ignored:
        return False

    span = text[suggestion.offset:suggestion.end]
    context = extract_context(text, suggestion.offset, suggestion.length)

    for entry in ignored:
        if entry.original_text != span or entry.suggestion_kind != suggestion.kind:
            continue

        if entry.rule_id and suggestion.rule_id:
            if entry.rule_id == suggestion.rule_id:
                return True
            continue

        if abs(entry.position_start - suggestion.offset) <= POSITION_TOLERANCE:
            return True

        before = context_similarity(entry.context_before, context['before'])
        after = context_similarity(entry.context_after, context['after'])
        if (before + after) / 2 > CONTEXT_SIMILARITY_THRESHOLD:
            return True

    return False


def filter_ignored_suggestions(suggestions: Sequence[Suggestion], text: str,
                               ignored: Sequence[IgnoredSuggestion]) -> List[Suggestion]:
    if not ignored:
        return list(suggestions)
    return [s for s in suggestions if not should_ignore_suggestion(s, text, ignored)]


def create_ignored_suggestion(suggestion: Suggestion, text: str) -> IgnoredSuggestion:
    """Snapshot `suggestion` so it can be recognised on later checks."""
    context = extract_context(text, suggestion.offset, suggestion.length)
    return IgnoredSuggestion(
        original_text=text[suggestion.offset:suggestion.end],
        suggestion_kind=suggestion.kind,
        rule_id=suggestion.rule_id,
        position_start=suggestion.offset,
        position_end=suggestion.end,
        context_before=context['before'],
        context_after=context['after'],
    )
