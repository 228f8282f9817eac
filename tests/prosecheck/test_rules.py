"""
Tests for Rule Tables
=====================
Rule model, load-time validation and representative rules from each
table.
"""

import pytest

from prosecheck.base import SuggestionKind
from prosecheck.config_logging import RuleDefinitionError
from prosecheck.rules import (
    GRAMMAR_RULES,
    SPELLING_RULES,
    STYLE_RULES,
    Derived,
    Literal,
    Rule,
    apply_rule,
    compile_rules,
    get_all_rules,
    get_rule,
)


def make_rule(rule_id='test', pattern=r'\bfoo\b', **kwargs):
    defaults = dict(
        kind=SuggestionKind.STYLE,
        message='message',
        short_message='short',
        category='test',
        confidence=0.5,
    )
    defaults.update(kwargs)
    return Rule(id=rule_id, pattern=pattern, **defaults)


def replacements_for(rule_id, text):
    return [s.replacements for s in apply_rule(get_rule(rule_id), text)]


class TestRuleTables:
    """Tests for the compiled tables."""

    def test_tables_are_populated(self):
        assert len(GRAMMAR_RULES) >= 15
        assert len(STYLE_RULES) >= 25
        assert len(SPELLING_RULES) >= 30

    def test_ids_unique(self):
        ids = [r.id for r in get_all_rules()]
        assert len(ids) == len(set(ids))

    def test_kinds_match_tables(self):
        assert all(r.kind == SuggestionKind.GRAMMAR for r in GRAMMAR_RULES)
        assert all(r.kind == SuggestionKind.STYLE for r in STYLE_RULES)
        assert all(r.kind == SuggestionKind.SPELLING for r in SPELLING_RULES)

    def test_no_rule_matches_empty_text(self):
        assert all(r.regex.search('') is None for r in get_all_rules())

    def test_get_rule(self):
        assert get_rule('in-order-to').category == 'wordiness'
        assert get_rule('no-such-rule') is None

    def test_to_dict(self):
        data = get_rule('passive-voice-was').to_dict()
        assert data['type'] == 'style'
        assert data['hasReplacement'] is False
        assert len(data['examples']) == 2


class TestCompileRules:
    """Malformed rules are rejected with the rule id."""

    def test_invalid_pattern(self):
        with pytest.raises(RuleDefinitionError) as excinfo:
            make_rule('broken', pattern='(unclosed')
        assert excinfo.value.rule_id == 'broken'

    def test_duplicate_id(self):
        with pytest.raises(RuleDefinitionError) as excinfo:
            compile_rules([make_rule('dup'), make_rule('dup')])
        assert excinfo.value.details['rule_id'] == 'dup'

    def test_confidence_out_of_range(self):
        with pytest.raises(RuleDefinitionError):
            compile_rules([make_rule(confidence=1.5)])

    def test_empty_match(self):
        with pytest.raises(RuleDefinitionError):
            compile_rules([make_rule(pattern=r'\s*')])


class TestApplyRule:
    """Tests for the matcher."""

    def test_global_match(self):
        rule = make_rule(replacement=Literal('bar'))
        suggestions = apply_rule(rule, "foo and foo")

        assert [s.offset for s in suggestions] == [0, 8]
        assert all(s.replacements == ['bar'] for s in suggestions)

    def test_first_match_only(self):
        rule = make_rule(replacement=Literal('bar'), global_match=False)
        assert len(apply_rule(rule, "foo and foo")) == 1

    def test_literal_keeps_leading_capital(self):
        rule = make_rule(replacement=Literal('bar'))
        assert apply_rule(rule, "Foo here")[0].replacements == ['Bar']

    def test_literal_without_case_matching(self):
        rule = make_rule(replacement=Literal('bar'), match_case=False)
        assert apply_rule(rule, "Foo here")[0].replacements == ['bar']

    def test_derived(self):
        rule = make_rule(replacement=Derived(lambda m: m.upper()))
        assert apply_rule(rule, "a foo")[0].replacements == ['FOO']

    def test_flag_only(self):
        rule = make_rule()
        assert apply_rule(rule, "foo")[0].replacements == []

    def test_suggestion_fields(self):
        text = "We did it in order to win."
        s = apply_rule(get_rule('in-order-to'), text)[0]

        assert s.id == f"in-order-to-{text.index('in order')}"
        assert s.original_text == "in order to"
        assert s.context.text in text
        assert s.rule_id == 'in-order-to'


class TestGrammarRules:
    """Representative grammar rules."""

    def test_there_is_plural(self):
        assert replacements_for('there-is-plural', "Here is the documents.") == [["Here are"]]

    @pytest.mark.parametrize('text', [
        "There is this house.",
        "There is a bus outside.",
        "There is news today.",
    ])
    def test_there_is_singular_not_flagged(self, text):
        assert replacements_for('there-is-plural', text) == []

    def test_me_and_subject(self):
        assert replacements_for('me-and-subject', "me and John went home") == [["John and I went"]]
        assert replacements_for('me-and-subject', "Me and john went home") == [["John and I went"]]

    def test_its_contraction(self):
        s = apply_rule(get_rule('its-contraction'), "Its going to rain.")[0]
        assert s.original_text == "Its"
        assert s.replacements == ["It's"]

    def test_could_of(self):
        assert replacements_for('could-of', "I could of won.") == [["could have"]]

    def test_collective_noun(self):
        assert replacements_for('collective-noun-singular', "The team are ready.") == [["team is"]]

    def test_then_comparison(self):
        assert replacements_for('then-comparison', "It is then better.") == [["than"]]
        assert replacements_for('then-comparison', "Back then, it rained.") == []

    def test_a_before_vowel_sound(self):
        assert replacements_for('a-vowel-sound', "It took a hour.") == [["an"]]


class TestStyleRules:
    """Representative style rules."""

    def test_passive_voice_irregular_participle(self):
        s = apply_rule(get_rule('passive-voice-was'), "The song was written quickly.")[0]
        assert s.original_text == "was written"
        assert s.replacements == []

    def test_very_adverb_keeps_capital(self):
        assert replacements_for('very-adverb', "Very quickly done.") == [["Quickly"]]

    def test_basically_removes_trailing_space(self):
        s = apply_rule(get_rule('basically'), "Basically, it works.")[0]
        assert s.original_text == "Basically, "
        assert s.replacements == [""]

    def test_wordiness(self):
        assert replacements_for('due-to-the-fact-that', "due to the fact that it rained") == [["because"]]

    def test_very_long_sentence(self):
        text = " ".join(["word"] * 45) + "."
        assert len(apply_rule(get_rule('very-long-sentence'), text)) == 1


class TestSpellingRules:
    """Representative spelling rules."""

    def test_misspelling_capitalized(self):
        assert replacements_for('definately', "Definately yes.") == [["Definitely"]]

    def test_lookahead_rule_matches_word_only(self):
        s = apply_rule(get_rule('loose-lose'), "Do not loose weight.")[0]
        assert s.original_text == "loose"
        assert s.replacements == ["lose"]

    def test_privilege_variants(self):
        text = "a privelege and a priviledge"
        assert len(apply_rule(get_rule('privilege'), text)) == 2
