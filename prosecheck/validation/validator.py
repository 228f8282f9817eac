"""
Suggestion Validator
====================
Pre-flight check of a replacement before it reaches the user.

For each candidate edit the validator:
1. applies it and checks the touched sentences still hold together
2. scores how much context the decision was based on (0.1 - 1.0)
3. classifies the edit as SAFE, MODERATE or RISKY
4. rescales the rule's confidence accordingly

Results are memoized in a bounded LRU cache guarded by a lock, so a
shared validator can serve concurrent callers.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Dict, Any, Optional, Sequence

from ..base import SuggestionRisk, ValidationInfo
from ..cache import LRUCache, text_digest
from ..config_logging import get_logger
from ..context import (
    ContextMetadata,
    SentencePosition,
    build_context_metadata,
    validate_replacement,
)

__version__ = "1.0.0"

_logger = get_logger('prosecheck.validation')

RISK_MULTIPLIERS: Dict[SuggestionRisk, float] = {
    SuggestionRisk.RISKY: 0.3,
    SuggestionRisk.MODERATE: 0.7,
    SuggestionRisk.SAFE: 1.1,
}

# Structurally broken edits keep only a fifth of their confidence
INVALID_STRUCTURE_MULTIPLIER = 0.2


@dataclass
class ValidationResult:
    """Outcome of validating one replacement."""
    is_valid: bool
    risk: SuggestionRisk
    confidence: float
    issues: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    context_quality: float = 1.0

    def to_info(self) -> ValidationInfo:
        """Compact form attached to a Suggestion."""
        return ValidationInfo(risk=self.risk, reasons=list(self.issues))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_valid': self.is_valid,
            'risk': self.risk.value,
            'confidence': self.confidence,
            'issues': list(self.issues),
            'suggestions': list(self.suggestions),
            'context_quality': self.context_quality,
        }


@dataclass
class ValidationRequest:
    """A replacement waiting to be validated."""
    text: str
    offset: int
    length: int
    replacement: str
    rule_id: str
    original_confidence: float
    rule_type: str = 'style'


class SuggestionValidator:
    """Validates replacements in context; thread-safe."""

    def __init__(self, cache_size: int = 200):
        self._cache = LRUCache(cache_size)

    def validate(self, text: str, offset: int, length: int, replacement: str,
                 rule_id: str, original_confidence: float,
                 rule_type: str = 'style') -> ValidationResult:
        """Validate replacing text[offset:offset+length] with `replacement`."""
        key = (rule_id, offset, length, replacement, len(text), text_digest(text))
        return self._cache.get_or_compute(
            key,
            lambda: self._validate(text, offset, length, replacement,
                                   original_confidence, rule_type),
        )

    def validate_request(self, request: ValidationRequest) -> ValidationResult:
        return self.validate(
            request.text, request.offset, request.length, request.replacement,
            request.rule_id, request.original_confidence, request.rule_type,
        )

    def _validate(self, text: str, offset: int, length: int, replacement: str,
                  original_confidence: float, rule_type: str) -> ValidationResult:
        structure = validate_replacement(text, offset, length, replacement)
        metadata = build_context_metadata(text, offset, length)
        quality = assess_context_quality(metadata, text, offset, length)
        risk = assess_risk(metadata, structure['is_valid'], replacement,
                           rule_type, original_confidence)
        confidence = adjust_confidence(original_confidence, quality, risk, structure['is_valid'])

        issues = list(structure['issues'])
        if quality < 0.5:
            issues.append('Low context quality - suggestion may be unreliable')
        if metadata.sentence_position == SentencePosition.START and not replacement[:1].isupper():
            issues.append('Replacement should be capitalized at sentence start')

        suggestions = []
        if risk == SuggestionRisk.RISKY:
            suggestions.append('Consider manual review of this suggestion')
        if not structure['is_valid']:
            suggestions.append('Suggestion may break sentence structure')

        _logger.debug("Validated replacement", offset=offset, risk=risk.value,
                      confidence=round(confidence, 4))

        return ValidationResult(
            is_valid=structure['is_valid'] and risk != SuggestionRisk.RISKY,
            risk=risk,
            confidence=confidence,
            issues=issues,
            suggestions=suggestions,
            context_quality=quality,
        )

    def clear_cache(self):
        self._cache.clear()

    def get_cache_stats(self) -> Dict[str, Any]:
        return self._cache.stats()


def assess_context_quality(metadata: ContextMetadata, text: str, offset: int, length: int) -> float:
    """How trustworthy the surrounding context is, clamped to [0.1, 1.0]."""
    quality = 1.0

    if metadata.sentence_boundary.is_fragment:
        quality *= 0.6
    if not metadata.sentence_boundary.is_complete:
        quality *= 0.7
    if offset < 10 or offset + length > len(text) - 10:
        quality *= 0.8
    if len(metadata.words_before) < 2 or len(metadata.words_after) < 2:
        quality *= 0.7
    if metadata.sentence_position in (SentencePosition.START, SentencePosition.MIDDLE):
        quality *= 1.1

    return max(0.1, min(1.0, quality))


def assess_risk(metadata: ContextMetadata, structure_valid: bool, replacement: str,
                rule_type: str, original_confidence: float) -> SuggestionRisk:
    at_start = metadata.sentence_position == SentencePosition.START

    if not structure_valid:
        return SuggestionRisk.RISKY
    if metadata.sentence_boundary.is_fragment and rule_type == 'style':
        return SuggestionRisk.RISKY
    if replacement == '' and at_start:
        return SuggestionRisk.RISKY

    if at_start and rule_type == 'style':
        return SuggestionRisk.MODERATE
    if original_confidence < 0.7:
        return SuggestionRisk.MODERATE

    return SuggestionRisk.SAFE


def adjust_confidence(original_confidence: float, quality: float,
                      risk: SuggestionRisk, structure_valid: bool) -> float:
    confidence = original_confidence * quality * RISK_MULTIPLIERS[risk]
    if not structure_valid:
        confidence *= INVALID_STRUCTURE_MULTIPLIER
    return max(0.1, min(1.0, confidence))


def filter_suggestions_by_validation(
    requests: Iterable[ValidationRequest],
    min_confidence: float = 0.5,
    allowed_risks: Sequence[SuggestionRisk] = (SuggestionRisk.SAFE, SuggestionRisk.MODERATE),
    validator: Optional[SuggestionValidator] = None,
) -> List[Dict[str, Any]]:
    """
    Validate each request and keep the valid ones that clear
    `min_confidence` with an allowed risk.

    Returns dicts with 'request' and 'validation' keys.
    """
    if validator is None:
        from . import get_validator
        validator = get_validator()

    kept = []
    for request in requests:
        result = validator.validate_request(request)
        if result.is_valid and result.confidence >= min_confidence and result.risk in allowed_risks:
            kept.append({'request': request, 'validation': result})
    return kept
