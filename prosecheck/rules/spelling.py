"""
Spelling Rules
==============
Known misspellings and commonly confused words.

These run ahead of the dictionary pass, so a word listed here gets the
curated correction and message instead of a ranked guess.
"""

from typing import Optional, Sequence

from ..base import Example, SuggestionKind
from .base import Literal, Rule, compile_rules

__version__ = "1.0.0"


def _misspelling(word: str, correct: str, category: str, pattern: Optional[str] = None,
                 confidence: float = 0.95, message: Optional[str] = None, short_message: Optional[str] = None,
                 examples: Sequence[Example] = ()) -> Rule:
    """Rule flagging `word` (or `pattern`) and offering `correct`."""
    return Rule(
        id=word,
        pattern=pattern or rf'\b{word}\b',
        kind=SuggestionKind.SPELLING,
        message=message or f'Incorrect spelling. The correct spelling is "{correct}".',
        short_message=short_message or f'Spell as "{correct}"',
        category=category,
        confidence=confidence,
        replacement=Literal(correct),
        examples=examples,
    )


SPELLING_RULES = compile_rules([
    # Common misspellings
    _misspelling('recieve', 'receive', 'ie-ei', examples=(
        Example("I will recieve the package", "I will receive the package"),
    )),
    _misspelling('seperate', 'separate', 'vowel-confusion', examples=(
        Example("Keep them seperate", "Keep them separate"),
    )),
    _misspelling('definately', 'definitely', 'vowel-confusion', examples=(
        Example("I will definately go", "I will definitely go"),
    )),

    # IE/EI
    _misspelling('beleive', 'believe', 'ie-ei'),
    _misspelling('acheive', 'achieve', 'ie-ei'),
    _misspelling('releive', 'relieve', 'ie-ei'),
    _misspelling('wierd', 'weird', 'ie-ei'),

    # Double letters
    _misspelling('accomodate', 'accommodate', 'double-letter'),
    _misspelling('occured', 'occurred', 'double-letter'),
    _misspelling('begining', 'beginning', 'double-letter'),
    _misspelling('comming', 'coming', 'double-letter'),
    _misspelling('runing', 'running', 'double-letter'),

    # Silent letters
    _misspelling('goverment', 'government', 'silent-letter'),
    _misspelling('enviroment', 'environment', 'silent-letter'),
    _misspelling('parlament', 'parliament', 'silent-letter'),

    # Vowels
    _misspelling('calender', 'calendar', 'vowel-confusion'),
    _misspelling('cemetary', 'cemetery', 'vowel-confusion'),
    _misspelling('independant', 'independent', 'vowel-confusion'),
    _misspelling('maintainance', 'maintenance', 'vowel-confusion'),

    # Word spacing
    _misspelling('alot', 'a lot', 'word-spacing',
                 message='Incorrect spelling. The correct spelling is "a lot" (two words).'),
    _misspelling('allright', 'all right', 'word-spacing', confidence=0.9,
                 message='Incorrect spelling. The correct spelling is "all right" (two words).'),
    _misspelling('noone', 'no one', 'word-spacing',
                 message='Incorrect spelling. The correct spelling is "no one" (two words).'),

    # Suffixes
    _misspelling('arguement', 'argument', 'suffix'),
    _misspelling('judgement', 'judgment', 'suffix', confidence=0.8,
                 message='In American English, "judgment" is preferred.',
                 short_message='Use "judgment"'),
    _misspelling('acknowledgement', 'acknowledgment', 'suffix', confidence=0.8,
                 message='In American English, "acknowledgment" is preferred.',
                 short_message='Use "acknowledgment"'),

    # Confused words; only the word itself is replaced
    _misspelling('loose-lose', 'lose', 'confused-words', confidence=0.9,
                 pattern=r'\bloose(?=\s+(?:weight|money|time|interest|hope|control)\b)',
                 message='Use "lose" when something is lost or defeated.',
                 short_message='Use "lose"'),
    _misspelling('affect-effect', 'effect', 'confused-words', confidence=0.8,
                 pattern=r'\baffect(?=\s+(?:is|was|will|has|had|on)\b)',
                 message='Use "effect" as a noun meaning result or consequence.',
                 short_message='Use "effect"'),
    _misspelling('accept-except', 'except', 'confused-words', confidence=0.85,
                 pattern=r'\baccept(?=\s+(?:for|that|when|if)\b)',
                 message='Use "except" when excluding something.',
                 short_message='Use "except"'),

    # Frequently misspelled
    _misspelling('necesary', 'necessary', 'common-misspelling'),
    _misspelling('embarass', 'embarrass', 'common-misspelling', pattern=r'\bembaras{1,2}\b'),
    _misspelling('recomend', 'recommend', 'common-misspelling'),
    _misspelling('occassion', 'occasion', 'common-misspelling'),
    _misspelling('privilege', 'privilege', 'common-misspelling',
                 pattern=r'\b(?:privelege|priviledge|privelige)\b'),

    # Business
    _misspelling('buisness', 'business', 'professional'),
    _misspelling('managment', 'management', 'professional'),
    _misspelling('experiance', 'experience', 'professional'),
    _misspelling('responsable', 'responsible', 'professional'),

    # Technology
    _misspelling('recieve-data', 'receive', 'technology',
                 pattern=r'\brecieve(?=\s+(?:data|information|message|signal)\b)'),
    _misspelling('developement', 'development', 'technology'),
])
