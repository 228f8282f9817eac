"""
Rule Sets for ProseCheck
========================
Regex rule tables and the matcher that applies them.

Features:
- Grammar: agreement, pronouns, confused words, articles, verb forms
- Spelling: curated misspellings ahead of the dictionary pass
- Style: wordiness, redundancy, clichés, passive voice, vague language
- Load-time validation of every table
"""

__version__ = "1.0.0"

from .base import (
    Derived,
    Literal,
    Replacement,
    Rule,
    apply_rule,
    compile_rules,
)
from .grammar import GRAMMAR_RULES
from .spelling import SPELLING_RULES
from .style import STYLE_RULES


def get_all_rules():
    """Every rule, grammar first, then style, then spelling."""
    return GRAMMAR_RULES + STYLE_RULES + SPELLING_RULES


def get_rule(rule_id: str):
    """Look up a rule by id, or None."""
    for rule in get_all_rules():
        if rule.id == rule_id:
            return rule
    return None


__all__ = [
    'Derived',
    'GRAMMAR_RULES',
    'Literal',
    'Replacement',
    'Rule',
    'SPELLING_RULES',
    'STYLE_RULES',
    'apply_rule',
    'compile_rules',
    'get_all_rules',
    'get_rule',
]
