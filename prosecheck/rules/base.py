"""
Rule Model
==========
Declarative pattern -> message -> replacement rules and the matcher
that turns them into suggestions.

A rule's replacement is one of:
- Literal("text")    fixed text (capitalized when the match starts uppercase)
- Derived(fn)        computed from the matched text
- None               flag only, no fix offered

Rule tables are validated when compiled; a malformed entry raises
RuleDefinitionError naming the rule.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List, Dict, Optional, Sequence, Union

from ..base import (
    Example,
    Suggestion,
    SuggestionKind,
    build_context,
    suggestion_id,
)
from ..config_logging import RuleDefinitionError

__version__ = "1.0.0"


@dataclass(frozen=True)
class Literal:
    """Fixed replacement text."""
    text: str

    def render(self, matched: str, match_case: bool = True) -> str:
        if match_case and matched[:1].isupper():
            return self.text[:1].upper() + self.text[1:]
        return self.text


@dataclass(frozen=True)
class Derived:
    """Replacement computed from the matched text."""
    fn: Callable[[str], str]

    def render(self, matched: str, match_case: bool = True) -> str:
        return self.fn(matched)


Replacement = Union[Literal, Derived]


@dataclass(frozen=True)
class Rule:
    """One regex rule."""
    id: str
    pattern: str
    kind: SuggestionKind
    message: str
    short_message: str
    category: str
    confidence: float
    replacement: Optional[Replacement] = None
    flags: int = re.IGNORECASE
    global_match: bool = True
    match_case: bool = True
    examples: Sequence[Example] = ()
    regex: 're.Pattern' = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        try:
            compiled = re.compile(self.pattern, self.flags)
        except re.error as e:
            raise RuleDefinitionError(f"invalid pattern: {e}", rule_id=self.id) from e
        object.__setattr__(self, 'regex', compiled)

    def iter_matches(self, text: str) -> Iterator['re.Match']:
        """Non-overlapping matches, or only the first one for single-match rules."""
        for match in self.regex.finditer(text):
            yield match
            if not self.global_match:
                return

    def render(self, matched: str) -> Optional[str]:
        """Replacement for `matched`, or None for flag-only rules."""
        if self.replacement is None:
            return None
        return self.replacement.render(matched, self.match_case)

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'type': self.kind.value,
            'message': self.message,
            'shortMessage': self.short_message,
            'category': self.category,
            'confidence': self.confidence,
            'hasReplacement': self.replacement is not None,
            'examples': [e.to_dict() for e in self.examples],
        }


def compile_rules(rules: Iterable[Rule]) -> List[Rule]:
    """
    Check a rule table and return it as a list.

    Raises RuleDefinitionError on a duplicate id, a confidence outside
    [0, 1] or a pattern that can match the empty string (bad regexes
    already fail when the Rule is built).
    """
    seen = set()
    compiled = []
    for rule in rules:
        if rule.id in seen:
            raise RuleDefinitionError("duplicate rule id", rule_id=rule.id)
        seen.add(rule.id)

        if not 0.0 <= rule.confidence <= 1.0:
            raise RuleDefinitionError(
                f"confidence {rule.confidence} outside [0, 1]", rule_id=rule.id
            )
        if rule.regex.search('') is not None:
            raise RuleDefinitionError("pattern matches the empty string", rule_id=rule.id)

        compiled.append(rule)
    return compiled


def apply_rule(rule: Rule, text: str) -> List[Suggestion]:
    """Run one rule over the text."""
    suggestions = []
    for match in rule.iter_matches(text):
        matched = match.group(0)
        if not matched:
            continue
        offset = match.start()
        replacement = rule.render(matched)

        suggestions.append(Suggestion(
            id=suggestion_id(rule.id, offset),
            kind=rule.kind,
            message=rule.message,
            short_message=rule.short_message,
            category=rule.category,
            confidence=rule.confidence,
            offset=offset,
            length=len(matched),
            original_text=matched,
            replacements=[replacement] if replacement is not None else [],
            context=build_context(text, offset, len(matched)),
            rule_id=rule.id,
            examples=list(rule.examples),
        ))
    return suggestions
