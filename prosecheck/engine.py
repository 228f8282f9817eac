"""
Grammar Engine
==============
Runs every rule family over a text and merges the results.

Pipeline:
1. Grammar rules
2. Style rules (context-aware processing for the rules that need it)
3. Spelling: curated rules, then the ranked dictionary pass
4. Overlap resolution and statistics

Each rule runs in isolation: one failing rule is logged and skipped
without affecting the rest of the check.
"""

import threading
import time
from typing import List, Dict, Any, Optional, Sequence

from .base import CheckResult, CheckStats, Suggestion, SuggestionKind
from .config import ProseCheckConfig, get_config
from .config_logging import ProcessingError, ValidationError, get_logger
from .rules import GRAMMAR_RULES, STYLE_RULES, Rule, apply_rule
from .spelling import Dictionary, SpellingChecker
from .style import ContextAwareRuleSelector, EnhancedStyleProcessor
from .validation import SuggestionValidator

__version__ = "1.0.0"

_logger = get_logger('prosecheck.engine')


def resolve_overlaps(suggestions: Sequence[Suggestion]) -> List[Suggestion]:
    """
    Make suggestion ranges disjoint.

    Suggestions are visited in offset order (stable, so earlier stages
    win ties). A suggestion that overlaps kept ones replaces them only
    when its confidence is strictly higher than each of theirs;
    otherwise it is dropped.
    """
    kept: List[Suggestion] = []
    for suggestion in sorted(suggestions, key=lambda s: s.offset):
        clashes = [k for k in kept if k.overlaps(suggestion)]
        if not clashes:
            kept.append(suggestion)
        elif all(suggestion.confidence > k.confidence for k in clashes):
            kept = [k for k in kept if not k.overlaps(suggestion)]
            kept.append(suggestion)

    return sorted(kept, key=lambda s: s.offset)


class GrammarEngine:
    """
    Rule-based grammar, spelling and style checker.

    Features:
    - Dictionary injection (tests and embedders supply their own)
    - Per-section enable/skip configuration
    - Context-aware style processing with graceful fallback
    - Deterministic output for a given text and configuration
    """

    def __init__(self, dictionary: Optional[Dictionary] = None,
                 config: Optional[ProseCheckConfig] = None,
                 validator: Optional[SuggestionValidator] = None):
        self.config = config or get_config()

        if dictionary is None:
            from .spelling import get_dictionary
            dictionary = get_dictionary()
        self.dictionary = dictionary

        self.validator = validator or SuggestionValidator(self.config.validation.cache_size)

        grammar_skip = set(self.config.grammar.skip_rules)
        style_skip = set(self.config.style.skip_rules)
        self.grammar_rules: List[Rule] = [r for r in GRAMMAR_RULES if r.id not in grammar_skip]
        self.style_rules: List[Rule] = [r for r in STYLE_RULES if r.id not in style_skip]

        self.selector = ContextAwareRuleSelector()
        self.style_processor = EnhancedStyleProcessor(
            validator=self.validator,
            cache_size=self.config.style.cache_size,
            risky_confidence_floor=self.config.validation.risky_confidence_floor,
        )
        self.spelling_checker = SpellingChecker(self.dictionary, self.config.spelling)

    @property
    def all_rules(self) -> List[Rule]:
        return self.grammar_rules + self.style_rules + self.spelling_checker.rules

    def check_text(self, text: str) -> CheckResult:
        """Check `text` and return non-overlapping suggestions plus statistics."""
        if not isinstance(text, str):
            raise ValidationError(
                f"text must be a string, got {type(text).__name__}", field="text"
            )
        if not text:
            return CheckResult()

        start_time = time.perf_counter()
        suggestions: List[Suggestion] = []
        stats = CheckStats(total_checks=len(self.grammar_rules) + len(self.style_rules))

        with _logger.log_operation('check_text', length=len(text)):
            if self.config.grammar.enabled:
                for rule in self.grammar_rules:
                    suggestions.extend(self._apply_rule(rule, text))

            if self.config.style.enabled:
                suggestions.extend(self._check_style(text))

            if self.config.spelling.enabled:
                spelling = self.spelling_checker.check(text, suggestions)
                suggestions.extend(spelling.suggestions)
                stats.words_checked = spelling.words_checked
                stats.rule_based_errors = spelling.rule_based_errors
                stats.dictionary_errors = spelling.dictionary_errors

            resolved = resolve_overlaps(suggestions)

        stats.grammar_errors = sum(1 for s in resolved if s.kind == SuggestionKind.GRAMMAR)
        stats.spelling_errors = sum(1 for s in resolved if s.kind == SuggestionKind.SPELLING)
        stats.style_errors = sum(1 for s in resolved if s.kind == SuggestionKind.STYLE)
        stats.processing_time_ms = round((time.perf_counter() - start_time) * 1000, 3)

        return CheckResult(suggestions=resolved, stats=stats)

    def _check_style(self, text: str) -> List[Suggestion]:
        if not self.config.style.enhanced_processing:
            return [s for rule in self.style_rules for s in self._apply_rule(rule, text)]

        plain = [r for r in self.style_rules if not self.selector.is_routed(r.id)]
        routed = [r for r in self.style_rules if self.selector.is_routed(r.id)]

        suggestions = [s for rule in plain for s in self._apply_rule(rule, text)]
        try:
            suggestions.extend(self.style_processor.process_style_suggestions(text))
        except ProcessingError as e:
            _logger.warning(f"Falling back to plain style rules: {e.message}", stage="style")
            suggestions.extend(s for rule in routed for s in self._apply_rule(rule, text))
        return suggestions

    def _apply_rule(self, rule: Rule, text: str) -> List[Suggestion]:
        try:
            return apply_rule(rule, text)
        except Exception as e:
            _logger.error(f"Rule failed and was skipped: {e}", rule_id=rule.id, exc_info=True)
            return []

    def get_rules_by_category(self, category: str) -> List[Rule]:
        return [r for r in self.all_rules if r.category == category]

    def get_rules_by_kind(self, kind: SuggestionKind) -> List[Rule]:
        return [r for r in self.all_rules if r.kind == kind]

    def get_categories(self) -> List[str]:
        return sorted({r.category for r in self.all_rules})

    def get_stats(self) -> Dict[str, Any]:
        """Rule counts per family."""
        return {
            'total_rules': len(self.all_rules),
            'grammar_rules': len(self.get_rules_by_kind(SuggestionKind.GRAMMAR)),
            'spelling_rules': len(self.get_rules_by_kind(SuggestionKind.SPELLING)),
            'style_rules': len(self.get_rules_by_kind(SuggestionKind.STYLE)),
            'contextual_style_rules': len(self.style_processor.rules),
            'categories': len(self.get_categories()),
        }


# Shared engine
_engine: Optional[GrammarEngine] = None
_engine_lock = threading.Lock()


def get_engine() -> GrammarEngine:
    """Get the shared GrammarEngine instance (lazy loaded)."""
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                _engine = GrammarEngine()
    return _engine


def reset_engine():
    """Drop the shared engine so the next call picks up new config."""
    global _engine
    with _engine_lock:
        _engine = None


def check_text(text: str) -> CheckResult:
    """Check `text` with the shared engine."""
    return get_engine().check_text(text)
