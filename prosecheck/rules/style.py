"""
Style Rules
===========
Wordiness, redundancy, clichés, weak openings and other style issues.

Rules whose fix depends on the surrounding sentence (there-are-many,
a-lot-of, it-is-important, basically, ...) also have a context-aware
counterpart in prosecheck.style; with enhanced processing on, the
engine routes them there instead of applying them blindly.
"""

import re

from ..base import Example, SuggestionKind
from .base import Derived, Literal, Rule, compile_rules

__version__ = "1.0.0"

# Regular -ed participles plus common irregular ones
PAST_PARTICIPLES = (
    r'\w+ed|given|taken|made|done|seen|heard|found|told|asked|shown'
    r'|written|built|sent|kept|held|paid|known|chosen|broken|spoken|drawn'
    r'|driven|eaten|forgotten|hidden|stolen|thrown|worn|begun|caught'
    r'|bought|brought|taught|thought|left|lost|put|set|read'
)

_VERY = re.compile(r'\bvery\s+', re.IGNORECASE)


def _drop_very(matched: str) -> str:
    """'very quickly' -> 'quickly', keeping a leading capital."""
    result = _VERY.sub('', matched, count=1)
    if matched[:1].isupper():
        result = result[:1].upper() + result[1:]
    return result


def _style(rule_id: str, pattern: str, message: str, short_message: str, category: str,
           confidence: float, replacement=None, **kwargs) -> Rule:
    if isinstance(replacement, str):
        replacement = Literal(replacement)
    return Rule(
        id=rule_id,
        pattern=pattern,
        kind=SuggestionKind.STYLE,
        message=message,
        short_message=short_message,
        category=category,
        confidence=confidence,
        replacement=replacement,
        **kwargs
    )


_ACTIVE_VOICE = "Consider using active voice for clearer, more direct writing."

STYLE_RULES = compile_rules([
    # Passive voice (flag only: a fix needs the agent)
    _style('passive-voice-was', rf'\b(?:was|were)\s+(?:{PAST_PARTICIPLES})\b',
           _ACTIVE_VOICE, "Consider active voice", 'voice', 0.7,
           examples=(
               Example("The report was written by John", "John wrote the report"),
               Example("Mistakes were made", "We made mistakes"),
           )),
    _style('passive-voice-being', rf'\b(?:is|are|am|was|were)\s+being\s+(?:{PAST_PARTICIPLES})\b',
           _ACTIVE_VOICE, "Consider active voice", 'voice', 0.8),

    # Redundancy
    _style('advance-planning', r'\badvance\s+planning\b',
           'Redundant phrase. "Planning" already implies advance preparation.',
           'Use "planning"', 'redundancy', 0.9, 'planning'),
    _style('brief-summary', r'\bbrief\s+summary\b',
           'Redundant phrase. A summary is inherently brief.',
           'Use "summary"', 'redundancy', 0.9, 'summary'),
    _style('close-proximity', r'\bclose\s+proximity\b',
           'Redundant phrase. "Proximity" means closeness.',
           'Use "proximity" or "close"', 'redundancy', 0.9, 'proximity'),
    _style('end-result', r'\bend\s+result\b',
           'Redundant phrase. Use "result" or "outcome".',
           'Use "result"', 'redundancy', 0.9, 'result'),
    _style('final-outcome', r'\bfinal\s+outcome\b',
           'Redundant phrase. An outcome is the final result.',
           'Use "outcome"', 'redundancy', 0.9, 'outcome'),

    # Wordiness
    _style('at-this-point-in-time', r'\bat\s+this\s+point\s+in\s+time\b',
           'Wordy phrase. Use "now" or "currently".', 'Use "now"', 'wordiness', 0.9, 'now'),
    _style('due-to-the-fact-that', r'\bdue\s+to\s+the\s+fact\s+that\b',
           'Wordy phrase. Use "because".', 'Use "because"', 'wordiness', 0.95, 'because'),
    _style('in-order-to', r'\bin\s+order\s+to\b',
           'Often unnecessary. Usually "to" is sufficient.', 'Consider "to"', 'wordiness', 0.8, 'to'),
    _style('for-the-purpose-of', r'\bfor\s+the\s+purpose\s+of\b',
           'Wordy phrase. Use "to" or "for".', 'Use "to"', 'wordiness', 0.9, 'to'),
    _style('in-the-event-that', r'\bin\s+the\s+event\s+that\b',
           'Wordy phrase. Use "if".', 'Use "if"', 'wordiness', 0.95, 'if'),
    _style('with-regard-to', r'\bwith\s+regard\s+to\b',
           'Wordy phrase. Use "about" or "regarding".', 'Use "about"', 'wordiness', 0.9, 'about'),

    # Qualifiers on absolutes
    _style('very-unique', r'\bvery\s+unique\b',
           '"Unique" means one of a kind and cannot be qualified.',
           'Use "unique"', 'qualifier', 0.95, 'unique'),
    _style('quite-perfect', r'\b(?:quite|very|rather)\s+perfect\b',
           '"Perfect" is absolute and cannot be qualified.',
           'Use "perfect"', 'qualifier', 0.9, 'perfect'),
    _style('absolutely-essential', r'\babsolutely\s+essential\b',
           '"Essential" is already absolute.', 'Use "essential"', 'qualifier', 0.9, 'essential'),

    # Filler words (the match includes the trailing space it removes)
    _style('basically', r'\bbasically,?\s+',
           '"Basically" is often unnecessary filler.', "Remove filler word", 'filler', 0.8, ''),
    _style('literally-figurative',
           r'\bliterally\s+(?=(?:amazing|incredible|dying|exploded|flew|melted)\b)',
           'Avoid using "literally" for emphasis when not literally true.',
           'Remove "literally"', 'filler', 0.85, ''),

    # Clichés
    _style('think-outside-box', r'\bthink\s+outside\s+the\s+box\b',
           "Cliché phrase. Consider more specific language.",
           "Avoid cliché", 'cliche', 0.8, 'think creatively'),
    _style('low-hanging-fruit', r'\blow.hanging\s+fruit\b',
           "Cliché phrase. Consider more specific language.",
           "Avoid cliché", 'cliche', 0.8, 'easy opportunities'),
    _style('paradigm-shift', r'\bparadigm\s+shift\b',
           "Overused business jargon. Consider more specific language.",
           "Avoid jargon", 'cliche', 0.7, 'fundamental change'),

    # Nominalizations
    _style('make-decision', r'\bmake\s+a\s+decision\b',
           'More concise: use "decide".', 'Use "decide"', 'nominalization', 0.8, 'decide'),
    _style('give-consideration', r'\bgive\s+consideration\s+to\b',
           'More concise: use "consider".', 'Use "consider"', 'nominalization', 0.9, 'consider'),
    _style('conduct-analysis', r'\bconduct\s+an?\s+analysis\b',
           'More concise: use "analyze".', 'Use "analyze"', 'nominalization', 0.9, 'analyze'),

    # Weak openings
    _style('there-are-many', r'\bthere\s+are\s+many\b',
           "Weak sentence starter. Consider more direct phrasing.",
           "Strengthen opening", 'weak-opening', 0.7, 'Many'),
    _style('it-is-important', r'\bit\s+is\s+important\s+to\s+note\s+that\b',
           "Wordy phrase. State the important point directly.",
           "Be more direct", 'weak-opening', 0.8, ''),

    # Vague language
    _style('stuff-things', r'\b(?:stuff|things)(?=\s+(?:that|which|like|such)\b)',
           "Vague language. Be more specific.", "Be more specific", 'vague', 0.8),
    _style('a-lot-of', r'\ba\s+lot\s+of\b',
           'Consider more precise quantifiers like "many," "several," or "numerous."',
           "Be more precise", 'vague', 0.7, 'many'),

    # Sentence length (40+ words before a period)
    _style('very-long-sentence', r'\b\w+(?:\s+\w+){40,}\.',
           "Very long sentence. Consider breaking into shorter sentences.",
           "Consider shorter sentences", 'sentence-length', 0.6, flags=0),

    # Adverbs
    _style('very-adverb',
           r'\bvery\s+(?:quickly|slowly|carefully|easily|clearly|obviously'
           r'|definitely|certainly|probably|possibly)\b',
           'Consider stronger verbs or adjectives instead of "very + adverb".',
           "Strengthen language", 'adverb-overuse', 0.7, Derived(_drop_very)),
])
