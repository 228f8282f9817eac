"""
Tests for the Grammar Engine
============================
End-to-end checks through GrammarEngine.check_text().
"""

import pytest

import prosecheck
from prosecheck.base import Suggestion, SuggestionKind, SuggestionRisk
from prosecheck.config_logging import ProcessingError, ValidationError
from prosecheck.engine import GrammarEngine, resolve_overlaps
from prosecheck.rules import Derived, Rule
from prosecheck.spelling import Dictionary


MIXED_TEXTS = [
    "Basically, the team are going to make a decision in order to finish. Its going to be very unique.",
    "There are many issues with this document. It is important to note that the server restarts nightly.",
    "Me and John went to the store, I went home. He could of helped, but he can't hardly walk.",
    "We recieved a lot of feedback from users, definately more then expected.",
    "The report was written by the team in order to explain the process at this point in time.",
]


def make_suggestion(offset, length, confidence, rule_id='rule'):
    return Suggestion(
        id=f"{rule_id}-{offset}",
        kind=SuggestionKind.STYLE,
        message='message',
        short_message='short',
        category='test',
        confidence=confidence,
        offset=offset,
        length=length,
        original_text='x' * length,
        rule_id=rule_id,
    )


def assert_offsets_valid(text, result):
    for s in result.suggestions:
        assert s.offset >= 0
        assert s.length > 0
        assert s.offset + s.length <= len(text)
        assert text[s.offset:s.offset + s.length] == s.original_text


def assert_no_overlap(result):
    ordered = sorted(result.suggestions, key=lambda s: s.offset)
    for first, second in zip(ordered, ordered[1:]):
        assert first.offset + first.length <= second.offset


class TestScenarios:
    """The documented end-to-end scenarios."""

    def test_there_is_plural(self, engine):
        """Subject-verb agreement at the start of the sentence."""
        result = engine.check_text("There is many issues with this sentence.")

        assert len(result.suggestions) == 1
        s = result.suggestions[0]
        assert s.kind == SuggestionKind.GRAMMAR
        assert s.rule_id == 'there-is-plural'
        assert s.offset == 0
        assert s.original_text == "There is"
        assert s.replacements == ["There are"]
        assert s.confidence >= 0.85

    def test_curated_misspellings(self, engine):
        """Both misspellings come from the curated rules."""
        text = "I will recieve the package tomorrow and seperate the items."
        result = engine.check_text(text)

        spelling = [s for s in result.suggestions if s.kind == SuggestionKind.SPELLING]
        assert [(s.original_text, s.replacements) for s in spelling] == [
            ("recieve", ["receive"]),
            ("seperate", ["separate"]),
        ]
        assert all(s.confidence >= 0.9 for s in spelling)
        assert_no_overlap(result)
        assert result.stats.rule_based_errors == 2
        assert result.stats.dictionary_errors == 0

    def test_passive_voice_and_wordiness(self, engine):
        text = "The document was written by the team in order to explain the process."
        result = engine.check_text(text)

        by_rule = {s.rule_id: s for s in result.suggestions}
        assert set(by_rule) == {'passive-voice-was', 'in-order-to'}
        assert by_rule['passive-voice-was'].original_text == "was written"
        assert by_rule['passive-voice-was'].replacements == []
        assert by_rule['in-order-to'].replacements == ["to"]
        assert all(s.kind == SuggestionKind.STYLE for s in result.suggestions)

    def test_there_are_many_without_verb_is_left_alone(self, engine):
        """Suggesting "Many" here would leave a verbless fragment."""
        result = engine.check_text("There are many issues with this document.")

        assert not [s for s in result.suggestions if 'there-are-many' in (s.rule_id or '')]

    def test_there_are_many_with_verb(self, engine):
        text = "There are many users who are waiting."
        result = engine.check_text(text)

        matches = [s for s in result.suggestions if s.rule_id == 'there-are-many-contextual']
        assert len(matches) == 1
        assert matches[0].replacements == ["Many"]
        assert matches[0].offset == 0
        assert matches[0].validation.risk == SuggestionRisk.MODERATE

    def test_ranked_dictionary_correction(self, engine):
        result = engine.check_text("wah is up with this app")

        assert len(result.suggestions) == 1
        s = result.suggestions[0]
        assert s.kind == SuggestionKind.SPELLING
        assert s.original_text == "wah"
        assert s.replacements[0] == "what"
        assert s.rule_id is None
        assert result.stats.dictionary_errors == 1

    def test_empty_text(self, engine):
        result = engine.check_text("")

        assert result.suggestions == []
        assert result.to_dict()['stats'] == {
            'totalChecks': 0,
            'grammarErrors': 0,
            'spellingErrors': 0,
            'styleErrors': 0,
            'processingTime': 0.0,
            'enhancedSpelling': {
                'wordsChecked': 0,
                'ruleBasedErrors': 0,
                'dictionaryErrors': 0,
            },
        }


class TestDefaultDictionary:
    """Scenarios run against the symspellpy word list the package loads by default."""

    def test_ranked_dictionary_correction(self, symspell_engine):
        result = symspell_engine.check_text("wah is up with this app")

        hits = [s for s in result.suggestions if s.original_text == "wah"]
        assert len(hits) == 1
        assert hits[0].kind == SuggestionKind.SPELLING
        assert hits[0].replacements[0] == "what"

    def test_curated_misspellings(self, symspell_engine):
        text = "I will recieve the package tomorrow and seperate the items."
        result = symspell_engine.check_text(text)

        spelling = [s for s in result.suggestions if s.kind == SuggestionKind.SPELLING]
        assert [(s.original_text, s.replacements) for s in spelling] == [
            ("recieve", ["receive"]),
            ("seperate", ["separate"]),
        ]
        assert all(s.confidence >= 0.9 for s in spelling)
        assert result.stats.dictionary_errors == 0

    def test_contractions_are_not_misspellings(self, symspell_engine):
        text = "It isn't ready and it doesn't work, so we couldn't ship."
        result = symspell_engine.check_text(text)

        assert [s for s in result.suggestions if s.category == 'dictionary'] == []
        assert result.stats.dictionary_errors == 0


class TestInvariants:
    """Properties that hold for every input."""

    @pytest.mark.parametrize('text', MIXED_TEXTS)
    def test_offsets_point_at_original_text(self, engine, text):
        assert_offsets_valid(text, engine.check_text(text))

    @pytest.mark.parametrize('text', MIXED_TEXTS)
    def test_no_overlapping_suggestions(self, engine, text):
        assert_no_overlap(engine.check_text(text))

    @pytest.mark.parametrize('text', MIXED_TEXTS)
    def test_deterministic(self, engine, text):
        first = [s.to_dict() for s in engine.check_text(text).suggestions]
        second = [s.to_dict() for s in engine.check_text(text).suggestions]
        assert first == second

    @pytest.mark.parametrize('text', MIXED_TEXTS)
    def test_sorted_by_offset(self, engine, text):
        offsets = [s.offset for s in engine.check_text(text).suggestions]
        assert offsets == sorted(offsets)

    @pytest.mark.parametrize('text', MIXED_TEXTS)
    def test_no_risky_low_confidence_output(self, engine, text):
        for s in engine.check_text(text).suggestions:
            if s.validation is not None and s.validation.risk == SuggestionRisk.RISKY:
                assert s.confidence >= 0.6

    def test_applied_fix_is_not_flagged_again(self, engine):
        text = "There are many users who are waiting."
        for s in engine.check_text(text).suggestions:
            if s.rule_id == 'there-are-many-contextual' and s.replacements:
                fixed = text[:s.offset] + s.replacements[0] + text[s.end:]
                again = engine.check_text(fixed)
                assert not [x for x in again.suggestions
                            if x.rule_id == s.rule_id and x.offset == s.offset]

    @pytest.mark.parametrize('text', [
        "!!!???...,,,;;;",
        "a" * 500,
        "日本語のテキストです。",
        "   \n\t  ",
    ])
    def test_pathological_input(self, engine, text):
        result = engine.check_text(text)
        assert result.stats.dictionary_errors == 0
        assert_offsets_valid(text, result)


class TestInputValidation:
    """Tests for rejected input."""

    @pytest.mark.parametrize('value', [None, 42, b"bytes", ["list"]])
    def test_non_string_raises(self, engine, value):
        with pytest.raises(ValidationError) as excinfo:
            engine.check_text(value)
        assert excinfo.value.details['field'] == 'text'
        assert excinfo.value.code == 'VALIDATION_ERROR'


class TestErrorIsolation:
    """Failures in one rule or stage do not abort the check."""

    def test_failing_rule_is_skipped(self, engine):
        def explode(matched):
            raise RuntimeError("boom")

        engine.grammar_rules.append(Rule(
            id='explodes',
            pattern=r'\bboom\b',
            kind=SuggestionKind.GRAMMAR,
            message='never shown',
            short_message='never shown',
            category='test',
            confidence=0.5,
            replacement=Derived(explode),
        ))

        result = engine.check_text("There is many issues with this boom.")

        assert 'explodes' not in {s.rule_id for s in result.suggestions}
        assert 'there-is-plural' in {s.rule_id for s in result.suggestions}

    def test_style_processor_failure_falls_back(self, engine, monkeypatch):
        def fail(text):
            raise ProcessingError("broken", stage="style")

        monkeypatch.setattr(engine.style_processor, 'process_style_suggestions', fail)
        result = engine.check_text("We received a lot of feedback from users.")

        fallback = [s for s in result.suggestions if s.rule_id == 'a-lot-of']
        assert len(fallback) == 1
        assert fallback[0].replacements == ["many"]


class TestConfiguration:
    """Engine honours its configuration."""

    def test_spelling_disabled(self, sample_dictionary, fresh_config):
        fresh_config.spelling.enabled = False
        engine = GrammarEngine(dictionary=sample_dictionary, config=fresh_config)

        result = engine.check_text("I will recieve the package tomorrow.")
        assert not [s for s in result.suggestions if s.kind == SuggestionKind.SPELLING]
        assert result.stats.words_checked == 0

    def test_grammar_skip_rules(self, sample_dictionary, fresh_config):
        fresh_config.grammar.skip_rules = ['there-is-plural']
        engine = GrammarEngine(dictionary=sample_dictionary, config=fresh_config)

        assert engine.check_text("There is many issues with this sentence.").suggestions == []

    def test_plain_style_rules_without_enhanced_processing(self, sample_dictionary, fresh_config):
        fresh_config.style.enhanced_processing = False
        engine = GrammarEngine(dictionary=sample_dictionary, config=fresh_config)

        result = engine.check_text("There are many issues with this document.")
        assert [s.rule_id for s in result.suggestions] == ['there-are-many']

    def test_unavailable_dictionary_flags_nothing(self, fresh_config):
        engine = GrammarEngine(dictionary=Dictionary.unavailable("missing"), config=fresh_config)

        result = engine.check_text("Zxqv blorp frobnicate.")
        assert result.suggestions == []
        assert result.stats.words_checked == 3


class TestStats:
    """Tests for statistics and rule introspection."""

    def test_counts_match_suggestions(self, engine):
        text = "There is many issues. I will recieve it in order to review."
        result = engine.check_text(text)
        stats = result.stats

        assert stats.grammar_errors == sum(1 for s in result.suggestions if s.kind == SuggestionKind.GRAMMAR)
        assert stats.spelling_errors == sum(1 for s in result.suggestions if s.kind == SuggestionKind.SPELLING)
        assert stats.style_errors == sum(1 for s in result.suggestions if s.kind == SuggestionKind.STYLE)
        assert stats.total_checks == len(engine.grammar_rules) + len(engine.style_rules)
        assert stats.processing_time_ms >= 0

    def test_get_stats(self, engine):
        stats = engine.get_stats()
        assert stats['total_rules'] == (
            stats['grammar_rules'] + stats['spelling_rules'] + stats['style_rules']
        )
        assert stats['contextual_style_rules'] == 8
        assert stats['categories'] == len(engine.get_categories())

    def test_rules_by_category(self, engine):
        rules = engine.get_rules_by_category('wordiness')
        assert rules
        assert all(r.category == 'wordiness' for r in rules)

    def test_categories_sorted(self, engine):
        categories = engine.get_categories()
        assert categories == sorted(categories)
        assert 'subject-verb' in categories


class TestResolveOverlaps:
    """Tests for overlap resolution."""

    def test_disjoint_kept(self):
        a = make_suggestion(0, 5, 0.5)
        b = make_suggestion(6, 3, 0.5)
        assert resolve_overlaps([b, a]) == [a, b]

    def test_higher_confidence_replaces(self):
        weak = make_suggestion(0, 10, 0.6, rule_id='weak')
        strong = make_suggestion(5, 10, 0.9, rule_id='strong')
        assert [s.rule_id for s in resolve_overlaps([weak, strong])] == ['strong']

    def test_equal_confidence_keeps_first(self):
        first = make_suggestion(0, 10, 0.8, rule_id='first')
        second = make_suggestion(5, 10, 0.8, rule_id='second')
        assert [s.rule_id for s in resolve_overlaps([first, second])] == ['first']

    def test_lower_confidence_dropped(self):
        left = make_suggestion(0, 4, 0.9, rule_id='left')
        right = make_suggestion(6, 4, 0.5, rule_id='right')
        wide = make_suggestion(2, 6, 0.7, rule_id='wide')
        assert [s.rule_id for s in resolve_overlaps([left, right, wide])] == ['left', 'right']

    def test_touching_ranges_do_not_overlap(self):
        a = make_suggestion(0, 5, 0.9, rule_id='a')
        b = make_suggestion(5, 5, 0.5, rule_id='b')
        assert [s.rule_id for s in resolve_overlaps([a, b])] == ['a', 'b']


class TestPackageInterface:
    """Tests for the top-level prosecheck functions."""

    def test_check_text_empty(self):
        result = prosecheck.check_text("")
        assert result.to_dict()['suggestions'] == []

    def test_analyze_tone_empty(self):
        assert prosecheck.analyze_tone("").to_dict() == {'tone': 'neutral'}

    def test_check_text_rejects_non_string(self):
        with pytest.raises(ValidationError):
            prosecheck.check_text(None)

    def test_status(self):
        status = prosecheck.get_status()

        assert status['version'] == prosecheck.__version__
        assert set(status['components']) == {
            'grammar', 'style', 'spelling', 'dictionary', 'validation', 'tone'
        }
        assert status['components']['grammar']['enabled'] is True
        assert 'cache' in status['components']['validation']

    def test_lazy_submodules(self):
        assert prosecheck.tone.analyze_tone is prosecheck.tone.analyze_tone
        with pytest.raises(AttributeError):
            prosecheck.no_such_module
