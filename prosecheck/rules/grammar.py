"""
Grammar Rules
=============
Subject-verb agreement, pronoun case, commonly confused words,
articles, verb forms, prepositions, double negatives and comma splices.

Rules that look ahead for a trigger word match only the word being
replaced, so applying the fix keeps the following space intact.
"""

import re

from ..base import Example, SuggestionKind
from .base import Derived, Literal, Rule, compile_rules

__version__ = "1.0.0"

# Words ending in "s" that are not plural nouns
NON_PLURAL_S_WORDS = (
    'this', 'is', 'was', 'has', 'his', 'its', 'us', 'as', 'yes', 'thus', 'plus',
    'less', 'always', 'perhaps', 'news', 'bus', 'gas', 'bonus', 'campus', 'virus',
    'focus', 'status', 'analysis', 'basis', 'crisis', 'lens', 'series', 'species',
)

_THERE_IS = re.compile(r'\b(there|here)\s+is\b', re.IGNORECASE)
_ME_AND = re.compile(r'\bme\s+and\s+(\w+)', re.IGNORECASE)
_ARE = re.compile(r'\s+are\b', re.IGNORECASE)
_OF = re.compile(r'\s+of\b', re.IGNORECASE)
_COMMA = re.compile(r',\s+')


def _there_are(matched: str) -> str:
    return _THERE_IS.sub(lambda m: f"{m.group(1)} are", matched)


def _subject_i(matched: str) -> str:
    """'me and John went' -> 'John and I went'."""
    def swap(m):
        other = m.group(1)
        if other.lower() == 'i':
            return 'I'
        if matched[:1].isupper():
            other = other[:1].upper() + other[1:]
        return f"{other} and I"
    return _ME_AND.sub(swap, matched, count=1)


def _singular_is(matched: str) -> str:
    return _ARE.sub(' is', matched)


def _modal_have(matched: str) -> str:
    return _OF.sub(' have', matched)


def _semicolon(matched: str) -> str:
    return _COMMA.sub('; ', matched, count=1)


def _grammar(rule_id: str, pattern: str, message: str, short_message: str, category: str,
             confidence: float, replacement, **kwargs) -> Rule:
    if isinstance(replacement, str):
        replacement = Literal(replacement)
    return Rule(
        id=rule_id,
        pattern=pattern,
        kind=SuggestionKind.GRAMMAR,
        message=message,
        short_message=short_message,
        category=category,
        confidence=confidence,
        replacement=replacement,
        **kwargs
    )


GRAMMAR_RULES = compile_rules([
    # Subject-verb agreement
    _grammar(
        'there-is-plural',
        r'\b(?:there|here)\s+is\b'
        r'(?=\s+(?:\w+\s+){0,2}(?!(?:' + '|'.join(NON_PLURAL_S_WORDS) + r')\b)\w+[^s\W]s\b)',
        'Subject-verb disagreement. Use "there are" with plural nouns.',
        'Use "there are"', 'subject-verb', 0.9, Derived(_there_are),
        examples=(
            Example("There is many issues", "There are many issues"),
            Example("Here is the documents", "Here are the documents"),
        ),
    ),
    _grammar('collective-noun-singular',
             r'\b(?:team|group|family|company|staff|crew|band|committee)\s+are\b',
             "Collective nouns typically take singular verbs in American English.",
             'Use "is"', 'subject-verb', 0.8, Derived(_singular_is)),
    _grammar('each-singular', r'\beach\s+of\s+\w+\s+are\b',
             '"Each" takes a singular verb.', 'Use "is"', 'subject-verb', 0.95,
             Derived(_singular_is)),

    # Pronouns
    _grammar('me-and-subject',
             r'\bme\s+and\s+\w+\s+(?:went|did|are|were|will|have|had)\b',
             'Use "I" instead of "me" when it\'s the subject of the sentence.',
             'Use "... and I"', 'pronoun', 0.9, Derived(_subject_i)),
    _grammar('between-you-and-i', r'\bbetween\s+you\s+and\s+I\b',
             'Use "between you and me" - prepositions take object pronouns.',
             'Use "between you and me"', 'pronoun', 0.95, 'between you and me'),

    # Its / it's
    _grammar('its-contraction',
             r"\bits(?=\s+(?:going|coming|being|doing|really|very|quite|always|never)\b)",
             'Use "it\'s" (contraction) when you mean "it is" or "it has".',
             'Use "it\'s"', 'contraction', 0.85, "it's"),
    _grammar('its-possessive',
             r"\bit's(?=\s+(?:own|color|size|shape|weight|length|width|height|name|purpose)\b)",
             'Use "its" (possessive) when showing ownership.',
             'Use "its"', 'possessive', 0.85, 'its'),

    # Your / you're
    _grammar('your-contraction',
             r"\byour(?=\s+(?:going|coming|being|doing|really|very|quite|always|never|not|welcome)\b)",
             'Use "you\'re" when you mean "you are".',
             'Use "you\'re"', 'contraction', 0.9, "you're"),
    _grammar('youre-possessive',
             r"\byou're(?=\s+(?:house|car|book|phone|computer|family|friend|job|work|idea)\b)",
             'Use "your" when showing ownership.',
             'Use "your"', 'possessive', 0.9, 'your'),

    # Then / than
    _grammar('then-comparison',
             r'\bthen(?=\s+(?:better|worse|more|less|bigger|smaller|faster|slower|higher|lower)\b)',
             'Use "than" for comparisons.', 'Use "than"', 'comparison', 0.95, 'than'),

    # Articles
    _grammar('an-consonant',
             r'\ban(?=\s+(?:university|user|unique|uniform|union|unit|usual|utility)\b)',
             'Use "a" before words that sound like they start with a consonant.',
             'Use "a"', 'article', 0.9, 'a'),
    _grammar('a-vowel-sound', r'\ba(?=\s+(?:hour|honor|honest|heir|herb)\b)',
             'Use "an" before words that sound like they start with a vowel.',
             'Use "an"', 'article', 0.95, 'an'),

    # Verb forms
    _grammar('could-of', r'\b(?:could|would|should|might|must)\s+of\b',
             'Use "have" instead of "of" after modal verbs.',
             'Use "have"', 'verb-form', 0.95, Derived(_modal_have)),
    _grammar('i-seen', r'\bI\s+seen\b',
             'Use "I saw" or "I have seen".', 'Use "I saw"', 'verb-form', 0.9, 'I saw'),

    # Prepositions
    _grammar('different-than', r'\bdifferent\s+than\b',
             'Use "different from" in formal writing.',
             'Use "different from"', 'preposition', 0.8, 'different from'),
    _grammar('try-and', r'\btry\s+and\b',
             'Use "try to" instead of "try and".', 'Use "try to"', 'preposition', 0.85, 'try to'),

    # Double negatives
    _grammar('dont-have-no', r"\bdon't\s+have\s+no\b",
             'Avoid double negatives. Use "don\'t have any".',
             'Use "don\'t have any"', 'double-negative', 0.95, "don't have any"),
    _grammar('cant-hardly', r"\bcan't\s+hardly\b",
             'Avoid double negatives. Use "can hardly".',
             'Use "can hardly"', 'double-negative', 0.95, 'can hardly'),

    # Comma splice
    _grammar('comma-splice', r'\b\w+,\s+I\s+(?:went|did|am|was|will|have|had)\b',
             "Possible comma splice. Consider using a semicolon or period.",
             "Check comma usage", 'punctuation', 0.7, Derived(_semicolon)),
])
