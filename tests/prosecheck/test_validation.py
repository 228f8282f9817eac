"""
Tests for Suggestion Validation
===============================
Risk classification, confidence adjustment, the result cache and the
replacement analysis helpers.
"""

import pytest

from prosecheck.base import SuggestionRisk
from prosecheck.context import build_context_metadata
from prosecheck.validation import (
    SuggestionValidator,
    ValidationRequest,
    adjust_confidence,
    assess_risk,
    clear_validation_cache,
    check_grammatical_agreement,
    check_replacement_whitelist,
    compare_before_after,
    filter_suggestions_by_validation,
    get_status,
    get_validation_cache_stats,
    reconstruct_sentence_with_replacement,
    starts_with_vowel_sound,
    validate_grammatical_patterns,
    validate_suggestion,
)

SAFE_TEXT = "The team will review the results in order to improve them."
SAFE_OFFSET = SAFE_TEXT.index("in order to")
RISKY_TEXT = "The report is ready for review."
RISKY_OFFSET = RISKY_TEXT.index("ready")


class TestSuggestionValidator:
    """Tests for SuggestionValidator.validate."""

    def test_safe_edit(self):
        validator = SuggestionValidator()
        result = validator.validate(SAFE_TEXT, SAFE_OFFSET, 11, "to", 'in-order-to', 0.9)

        assert result.is_valid
        assert result.risk == SuggestionRisk.SAFE
        assert result.context_quality == 1.0
        assert result.confidence == pytest.approx(0.99)
        assert result.issues == []

    def test_duplicated_punctuation_is_risky(self):
        validator = SuggestionValidator()
        result = validator.validate(RISKY_TEXT, RISKY_OFFSET, 5, "ready..", 'test', 0.9)

        assert not result.is_valid
        assert result.risk == SuggestionRisk.RISKY
        assert 'Replacement introduces duplicated punctuation' in result.issues
        assert 'Consider manual review of this suggestion' in result.suggestions
        assert 'Suggestion may break sentence structure' in result.suggestions
        assert result.confidence == pytest.approx(0.1)

    def test_confidence_is_clamped(self):
        validator = SuggestionValidator()
        result = validator.validate(SAFE_TEXT, SAFE_OFFSET, 11, "to", 'in-order-to', 1.0)
        assert result.confidence == 1.0

    def test_to_info_and_to_dict(self):
        validator = SuggestionValidator()
        result = validator.validate(RISKY_TEXT, RISKY_OFFSET, 5, "ready..", 'test', 0.9)

        info = result.to_info()
        assert info.risk == SuggestionRisk.RISKY
        assert info.reasons == result.issues
        assert result.to_dict()['risk'] == 'risky'


class TestValidatorCache:
    """The result cache is bounded and counts hits."""

    def test_repeat_is_a_hit(self):
        validator = SuggestionValidator()
        first = validator.validate(SAFE_TEXT, SAFE_OFFSET, 11, "to", 'in-order-to', 0.9)
        second = validator.validate(SAFE_TEXT, SAFE_OFFSET, 11, "to", 'in-order-to', 0.9)

        stats = validator.get_cache_stats()
        assert first is second
        assert stats['hits'] == 1
        assert stats['misses'] == 1
        assert stats['size'] == 1

    def test_capacity_evicts_oldest(self):
        validator = SuggestionValidator(cache_size=2)
        for replacement in ("to", "so as to", "for"):
            validator.validate(SAFE_TEXT, SAFE_OFFSET, 11, replacement, 'in-order-to', 0.9)

        assert validator.get_cache_stats()['size'] == 2

    def test_clear(self):
        validator = SuggestionValidator()
        validator.validate(SAFE_TEXT, SAFE_OFFSET, 11, "to", 'in-order-to', 0.9)
        validator.clear_cache()

        stats = validator.get_cache_stats()
        assert stats['size'] == 0
        assert stats['hits'] == 0

    def test_different_text_is_a_miss(self):
        validator = SuggestionValidator()
        validator.validate(SAFE_TEXT, SAFE_OFFSET, 11, "to", 'in-order-to', 0.9)
        validator.validate(SAFE_TEXT + " ", SAFE_OFFSET, 11, "to", 'in-order-to', 0.9)
        assert validator.get_cache_stats()['misses'] == 2


class TestAssessRisk:
    """Tests for the SAFE / MODERATE / RISKY classification."""

    def test_broken_structure(self):
        metadata = build_context_metadata(SAFE_TEXT, SAFE_OFFSET, 11)
        assert assess_risk(metadata, False, "to", 'style', 0.9) == SuggestionRisk.RISKY

    def test_style_in_fragment(self):
        text = "Because it rained."
        metadata = build_context_metadata(text, text.index("rained"), 6)

        assert assess_risk(metadata, True, "poured", 'style', 0.9) == SuggestionRisk.RISKY
        assert assess_risk(metadata, True, "poured", 'grammar', 0.9) == SuggestionRisk.SAFE

    def test_deletion_at_sentence_start(self):
        text = "Basically, it works fine today."
        metadata = build_context_metadata(text, 0, len("Basically, "))

        assert assess_risk(metadata, True, "", 'style', 0.9) == SuggestionRisk.RISKY
        assert assess_risk(metadata, True, "Simply, ", 'style', 0.9) == SuggestionRisk.MODERATE

    def test_low_confidence_is_moderate(self):
        metadata = build_context_metadata(SAFE_TEXT, SAFE_OFFSET, 11)
        assert assess_risk(metadata, True, "to", 'style', 0.5) == SuggestionRisk.MODERATE


class TestAdjustConfidence:
    """Tests for adjust_confidence."""

    def test_safe_boost(self):
        assert adjust_confidence(0.8, 1.0, SuggestionRisk.SAFE, True) == pytest.approx(0.88)

    def test_moderate(self):
        assert adjust_confidence(0.8, 0.5, SuggestionRisk.MODERATE, True) == pytest.approx(0.28)

    def test_floor(self):
        assert adjust_confidence(0.8, 1.0, SuggestionRisk.RISKY, False) == pytest.approx(0.1)

    def test_ceiling(self):
        assert adjust_confidence(1.0, 1.0, SuggestionRisk.SAFE, True) == 1.0


class TestFilterByValidation:
    """Tests for filter_suggestions_by_validation."""

    def test_keeps_only_valid_confident_edits(self):
        requests = [
            ValidationRequest(SAFE_TEXT, SAFE_OFFSET, 11, "to", 'in-order-to', 0.9),
            ValidationRequest(RISKY_TEXT, RISKY_OFFSET, 5, "ready..", 'test', 0.9),
        ]

        kept = filter_suggestions_by_validation(requests, validator=SuggestionValidator())

        assert len(kept) == 1
        assert kept[0]['request'].rule_id == 'in-order-to'
        assert kept[0]['validation'].risk == SuggestionRisk.SAFE

    def test_min_confidence(self):
        requests = [ValidationRequest(SAFE_TEXT, SAFE_OFFSET, 11, "to", 'in-order-to', 0.9)]
        kept = filter_suggestions_by_validation(
            requests, min_confidence=0.995, validator=SuggestionValidator()
        )
        assert kept == []


class TestAgreement:
    """Tests for check_grammatical_agreement and starts_with_vowel_sound."""

    def test_singular_noun_plural_verb(self):
        text = "The issue are here."
        result = check_grammatical_agreement(text, 4, 5, "issue")

        assert result['has_agreement_issues']
        assert result['issues'] == ['Singular noun with plural verb']

    def test_article_before_vowel_sound(self):
        text = "It took a hour."
        result = check_grammatical_agreement(text, text.index("hour"), 4, "hour")
        assert result['issues'] == ['Use "an" before vowel sound']

    @pytest.mark.parametrize('word,expected', [
        ('hour', True),
        ('apple', True),
        ('university', False),
        ('dog', False),
    ])
    def test_vowel_sound(self, word, expected):
        assert starts_with_vowel_sound(word) is expected


class TestPatternsAndWhitelist:
    """Tests for pattern checks and known replacements."""

    def test_double_negative(self):
        text = "I don't want it."
        issues = validate_grammatical_patterns(text, text.index("it"), 2, "nothing")
        assert 'Possible double negative' in issues

    def test_incomplete_comparison(self):
        text = "This is good."
        issues = validate_grammatical_patterns(text, text.index("good"), 4, "better than")
        assert 'Incomplete comparison' in issues

    def test_known_bad(self):
        result = check_replacement_whitelist('there-are-many', 'Many issues')
        assert result['is_known_bad']
        assert result['suggestion'] == 'Consider: Many'

    def test_known_good(self):
        result = check_replacement_whitelist('in-order-to', 'to')
        assert result['is_known_good']
        assert result['suggestion'] is None


class TestFlowAndComparison:
    """Tests for reconstruct_sentence_with_replacement and compare_before_after."""

    def test_reconstruct(self):
        text = "We did it in order to win."
        result = reconstruct_sentence_with_replacement(text, text.index("in order"), 11, "to")

        assert result['new_text'] == "We did it to win."
        assert result['flow_maintained']
        assert result['punctuation_consistent']

    def test_broken_copula_breaks_flow(self):
        text = "The plan is good."
        result = reconstruct_sentence_with_replacement(text, text.index("good"), 4, "are good")
        assert not result['flow_maintained']

    def test_compare_shorter_phrase(self):
        text = "We did it in order to win."
        result = compare_before_after(text, text.index("in order"), 11, "to")

        assert result['length_change'] == -9
        assert result['clarity_score'] == pytest.approx(0.8)
        assert result['complexity_change'] < 0
        assert result['readability_improved']
        assert result['issues'] == []


class TestSharedValidator:
    """Module-level convenience functions."""

    def test_validate_suggestion(self):
        clear_validation_cache()
        end = SAFE_OFFSET + len("in order to")
        result = validate_suggestion(SAFE_TEXT, SAFE_OFFSET, end, "to", 'in-order-to', 0.9)

        assert result.risk == SuggestionRisk.SAFE
        assert get_validation_cache_stats()['size'] == 1

    def test_status(self):
        status = get_status()
        assert status['available']
        assert 'hits' in status['cache']
