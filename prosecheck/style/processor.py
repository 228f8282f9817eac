"""
Enhanced Style Processor
========================
Runs the context-aware style rules, filters weak results and caches
the outcome per text.

Also provides ContextAwareRuleSelector, which decides which plain style
rules must be handed to the processor instead of being applied as-is.
"""

from typing import List, Dict, Any, Optional, Sequence

from ..base import Suggestion, SuggestionRisk
from ..cache import LRUCache, text_digest
from ..config_logging import ProcessingError, get_logger
from ..context import build_context_metadata, extract_context_window
from ..validation import SuggestionValidator
from .contextual import CONTEXTUAL_STYLE_RULES, ContextAwareStyleRule, process_contextual_rules

__version__ = "1.0.0"

_logger = get_logger('prosecheck.style')

CONTEXTUAL_SUFFIX = '-contextual'

# Below these the suggestion is not worth showing
MIN_CONFIDENCE = 0.3
MIN_RISKY_CONFIDENCE = 0.7


class EnhancedStyleProcessor:
    """
    Context-aware style processing with a bounded result cache.

    Features:
    - Per-match context decisions (suggest nothing rather than a fragment)
    - Validation of risky rules
    - Confidence / risk filtering
    - LRU cache keyed by a digest of the text
    """

    def __init__(self, validator: Optional[SuggestionValidator] = None, cache_size: int = 64,
                 rules: Sequence[ContextAwareStyleRule] = CONTEXTUAL_STYLE_RULES,
                 risky_confidence_floor: float = 0.6):
        self.validator = validator
        self.rules = list(rules)
        self.risky_confidence_floor = risky_confidence_floor
        self._cache = LRUCache(cache_size)

    def process_style_suggestions(self, text: str) -> List[Suggestion]:
        """
        Context-aware style suggestions for `text`.

        Raises ProcessingError (stage "style") if a rule blows up; the
        caller decides how to fall back.
        """
        key = (len(text), text_digest(text))
        cached = self._cache.get(key)
        if cached is not None:
            return list(cached)

        try:
            suggestions = process_contextual_rules(
                text, self.rules, self.validator, self.risky_confidence_floor
            )
        except Exception as e:
            _logger.error(f"Context-aware style processing failed: {e}", exc_info=True)
            raise ProcessingError(f"Style processing failed: {e}", stage="style") from e

        filtered = [s for s in suggestions if self._keep(s)]
        self._cache.put(key, filtered)
        return list(filtered)

    @staticmethod
    def _keep(suggestion: Suggestion) -> bool:
        if suggestion.confidence < MIN_CONFIDENCE:
            return False
        risky = suggestion.validation is not None and suggestion.validation.risk == SuggestionRisk.RISKY
        return not (risky and suggestion.confidence < MIN_RISKY_CONFIDENCE)

    def process_problematic_patterns(self, text: str) -> Dict[str, List[Suggestion]]:
        """Suggestions grouped into 'there_are_many', 'a_lot_of' and 'other'."""
        groups: Dict[str, List[Suggestion]] = {'there_are_many': [], 'a_lot_of': [], 'other': []}
        for suggestion in self.process_style_suggestions(text):
            rule_id = suggestion.rule_id or ''
            if 'there-are-many' in rule_id:
                groups['there_are_many'].append(suggestion)
            elif 'a-lot-of' in rule_id:
                groups['a_lot_of'].append(suggestion)
            else:
                groups['other'].append(suggestion)
        return groups

    def analyze_suggestion(self, text: str, start: int, end: int) -> Dict[str, Any]:
        """Debug view: what was suggested for text[start:end] and why."""
        matching = [
            s for s in self.process_style_suggestions(text)
            if s.offset == start and s.end == end
        ]
        metadata = build_context_metadata(text, start, end - start)
        window = extract_context_window(text, start, end - start, 50)
        final = matching[0] if matching else None

        return {
            'original_text': text[start:end],
            'matched_rules': [s.rule_id for s in matching],
            'context_analysis': {
                'sentence_position': metadata.sentence_position.value,
                'is_complete_sentence': metadata.sentence_boundary.is_complete,
                'surrounding_context': window['before'] + '[MATCH]' + window['after'],
            },
            'validation': final.validation.to_dict() if final and final.validation else None,
            'final_suggestion': final.to_dict() if final else None,
        }

    def clear_cache(self):
        self._cache.clear()

    def get_cache_stats(self) -> Dict[str, Any]:
        return self._cache.stats()


class ContextAwareRuleSelector:
    """Tracks which style rules need context-aware handling."""

    DEFAULT_PROBLEMATIC_RULE_IDS = (
        'there-are-many',
        'a-lot-of',
        'it-is-important',
        'basically',
        'there-are-many-contextual',
        'a-lot-of-contextual',
        'it-is-important-contextual',
        'basically-contextual',
    )

    DEFAULT_SAFE_RULE_IDS = (
        'make-decision',
        'give-consideration',
        'conduct-analysis',
        'very-unique',
        'quite-perfect',
    )

    def __init__(self, rules: Sequence[ContextAwareStyleRule] = CONTEXTUAL_STYLE_RULES):
        self._problematic = list(self.DEFAULT_PROBLEMATIC_RULE_IDS)
        self._safe = list(self.DEFAULT_SAFE_RULE_IDS)
        self._counterparts = {
            r.id[:-len(CONTEXTUAL_SUFFIX)]
            for r in rules
            if r.id.endswith(CONTEXTUAL_SUFFIX)
        }

    def should_use_context_aware_rule(self, rule_id: str) -> bool:
        return rule_id in self._problematic

    def has_contextual_counterpart(self, rule_id: str) -> bool:
        return rule_id in self._counterparts

    def is_routed(self, rule_id: str) -> bool:
        """True when the plain rule is handled by the processor instead."""
        return self.should_use_context_aware_rule(rule_id) or self.has_contextual_counterpart(rule_id)

    def get_problematic_rule_ids(self) -> List[str]:
        return list(self._problematic)

    def get_safe_rule_ids(self) -> List[str]:
        return list(self._safe)

    def add_problematic_rule(self, rule_id: str):
        if rule_id not in self._problematic:
            self._problematic.append(rule_id)

    def add_safe_rule(self, rule_id: str):
        if rule_id not in self._safe:
            self._safe.append(rule_id)
