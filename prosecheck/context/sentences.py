"""
Sentence Analysis
=================
Abbreviation-aware sentence splitting and lightweight completeness
heuristics.

Features:
- Sentence boundaries that skip abbreviations (Dr., etc., approx.) and initials
- Fragment vs complete sentence classification
- Subject/verb presence detection without a parser
- Start/middle/end position lookup for any offset

Every function is pure and never raises on empty or punctuation-only input.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Dict, Any, Sequence

from ..cache import LRUCache, text_digest

__version__ = "1.0.0"


COMMON_ABBREVIATIONS = {
    'dr', 'mr', 'mrs', 'ms', 'prof', 'vs', 'etc', 'inc', 'ltd', 'corp',
    'st', 'ave', 'blvd', 'rd', 'apt', 'no', 'vol', 'pp', 'ch', 'sec',
    'fig', 'ref', 'eg', 'ie', 'cf', 'al', 'ed', 'eds', 'rev', 'est',
    'approx', 'min', 'max', 'avg', 'temp', 'dept', 'govt', 'assn',
    'bros', 'co', 'jr', 'sr', 'phd', 'md', 'ba', 'ma', 'bs',
}

FRAGMENT_STARTERS = {
    'because', 'since', 'although', 'though', 'while', 'whereas',
    'if', 'unless', 'until', 'when', 'where', 'after', 'before',
    'as', 'than', 'that', 'which', 'who', 'whom', 'whose',
}

SUBJECT_PRONOUNS = {
    'i', 'you', 'he', 'she', 'it', 'we', 'they',
    'this', 'that', 'these', 'those',
    # Expletive subjects ("There are ...", "Here is ...")
    'there', 'here',
}

ARTICLES = {'the', 'a', 'an'}

POSSESSIVES = {'my', 'your', 'his', 'her', 'its', 'our', 'their'}

DETERMINERS = {
    'each', 'every', 'some', 'many', 'several', 'most', 'all',
    'no', 'any', 'both', 'few',
}

COMMON_VERBS = {
    'is', 'are', 'was', 'were', 'am', 'be', 'been', 'being',
    'have', 'has', 'had', 'having',
    'do', 'does', 'did', 'doing',
    'will', 'would', 'could', 'should', 'might', 'may', 'can', 'must', 'shall',
    'go', 'goes', 'went', 'going',
    'get', 'gets', 'got', 'getting',
    'make', 'makes', 'made', 'making',
    'take', 'takes', 'took', 'taking',
    'come', 'comes', 'came', 'coming',
    'see', 'sees', 'saw', 'seeing',
    'know', 'knows', 'knew', 'knowing',
    'think', 'thinks', 'thought', 'thinking',
    'want', 'wants', 'wanted', 'wanting',
    'need', 'needs', 'needed', 'needing',
    'receive', 'receives', 'received', 'receiving',
    'give', 'gives', 'gave', 'giving',
    'find', 'finds', 'found', 'finding',
    'feel', 'feels', 'felt', 'feeling',
    'work', 'works', 'worked', 'working',
    'use', 'uses', 'used', 'using',
    'show', 'shows', 'showed', 'showing',
    'tell', 'tells', 'told', 'telling',
    'ask', 'asks', 'asked', 'asking',
    'try', 'tries', 'tried', 'trying',
    'help', 'helps', 'helped', 'helping',
    'play', 'plays', 'played', 'playing',
    'move', 'moves', 'moved', 'moving',
    'live', 'lives', 'lived', 'living',
    'believe', 'believes', 'believed', 'believing',
    'hold', 'holds', 'held', 'holding',
    'bring', 'brings', 'brought', 'bringing',
    'happen', 'happens', 'happened', 'happening',
    'write', 'writes', 'wrote', 'writing',
    'provide', 'provides', 'provided', 'providing',
    'sit', 'sits', 'sat', 'sitting',
    'stand', 'stands', 'stood', 'standing',
    'lose', 'loses', 'lost', 'losing',
    'pay', 'pays', 'paid', 'paying',
    'meet', 'meets', 'met', 'meeting',
    'include', 'includes', 'included', 'including',
    'continue', 'continues', 'continued', 'continuing',
    'set', 'sets', 'setting',
    'learn', 'learns', 'learned', 'learning',
    'change', 'changes', 'changed', 'changing',
    'lead', 'leads', 'led', 'leading',
    'understand', 'understands', 'understood', 'understanding',
    'watch', 'watches', 'watched', 'watching',
    'follow', 'follows', 'followed', 'following',
    'stop', 'stops', 'stopped', 'stopping',
    'create', 'creates', 'created', 'creating',
    'speak', 'speaks', 'spoke', 'speaking',
    'read', 'reads', 'reading',
    'allow', 'allows', 'allowed', 'allowing',
    'add', 'adds', 'added', 'adding',
    'spend', 'spends', 'spent', 'spending',
    'grow', 'grows', 'grew', 'growing',
    'open', 'opens', 'opened', 'opening',
    'walk', 'walks', 'walked', 'walking',
    'win', 'wins', 'won', 'winning',
    'offer', 'offers', 'offered', 'offering',
    'remember', 'remembers', 'remembered', 'remembering',
    'love', 'loves', 'loved', 'loving',
    'consider', 'considers', 'considered', 'considering',
    'appear', 'appears', 'appeared', 'appearing',
    'buy', 'buys', 'bought', 'buying',
    'wait', 'waits', 'waited', 'waiting',
    'serve', 'serves', 'served', 'serving',
    'die', 'dies', 'died', 'dying',
    'send', 'sends', 'sent', 'sending',
    'expect', 'expects', 'expected', 'expecting',
    'build', 'builds', 'built', 'building',
    'stay', 'stays', 'stayed', 'staying',
    'fall', 'falls', 'fell', 'falling',
    'cut', 'cuts', 'cutting',
    'reach', 'reaches', 'reached', 'reaching',
    'kill', 'kills', 'killed', 'killing',
    'remain', 'remains', 'remained', 'remaining',
}

SENTENCE_END_PATTERN = re.compile(r'([.!?]+)(\s+|$)')
TERMINAL_PUNCTUATION = re.compile(r'[.!?]$')
_TRAILING_WORD = re.compile(r'\b(\w+)$')
_PROPER_NOUN = re.compile(r'^[A-Z][a-z]+$')
_STRIP_CHARS = '.,!?;:"\'()[]{}'

_boundary_cache = LRUCache(capacity=100)


class SentencePosition(Enum):
    """Where an offset falls inside its sentence."""
    START = "start"
    MIDDLE = "middle"
    END = "end"
    STANDALONE = "standalone"


@dataclass(frozen=True)
class SentenceBoundary:
    """One detected sentence. `text` is stripped; start/end are raw offsets."""
    start: int
    end: int
    text: str
    is_complete: bool
    is_fragment: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start': self.start,
            'end': self.end,
            'text': self.text,
            'is_complete': self.is_complete,
            'is_fragment': self.is_fragment,
        }


def _tokens(text: str) -> List[str]:
    return text.split()


def _clean(token: str) -> str:
    return token.strip(_STRIP_CHARS)


def split_into_sentences(text: str) -> List[SentenceBoundary]:
    """
    Split text into sentences, skipping abbreviation and initial periods.

    Results are memoized in a small LRU keyed by the text digest.
    """
    if not text:
        return []
    key = (len(text), text_digest(text))
    boundaries = _boundary_cache.get_or_compute(key, lambda: tuple(_split(text)))
    return list(boundaries)


def _split(text: str) -> List[SentenceBoundary]:
    sentences: List[SentenceBoundary] = []
    last_end = 0

    for match in SENTENCE_END_PATTERN.finditer(text):
        end_pos = match.start() + len(match.group(1))

        before = text[max(0, match.start() - 10):match.start()]
        trailing = _TRAILING_WORD.search(before)
        if trailing:
            word = trailing.group(1).lower()
            # Abbreviation or a single-letter initial: not a sentence end
            if word in COMMON_ABBREVIATIONS or len(word) == 1:
                continue

        sentence_text = text[last_end:end_pos].strip()
        if sentence_text:
            sentences.append(SentenceBoundary(
                start=last_end,
                end=end_pos,
                text=sentence_text,
                is_complete=is_complete_sentence(sentence_text),
                is_fragment=is_fragment(sentence_text),
            ))
            last_end = end_pos

    if last_end < len(text):
        remaining = text[last_end:].strip()
        if remaining:
            sentences.append(SentenceBoundary(
                start=last_end,
                end=len(text),
                text=remaining,
                is_complete=is_complete_sentence(remaining),
                is_fragment=is_fragment(remaining),
            ))

    return sentences


def clear_sentence_cache():
    """Drop memoized sentence boundaries."""
    _boundary_cache.clear()


def has_basic_subject(words: Sequence[str]) -> bool:
    """Look for a subject indicator among the first three tokens."""
    count = min(3, len(words))
    for i in range(count):
        raw = _clean(words[i])
        word = raw.lower()

        if word in SUBJECT_PRONOUNS:
            return True

        # Article/possessive/determiner followed by a (presumed) noun
        if (word in ARTICLES or word in POSSESSIVES or word in DETERMINERS) and i + 1 < len(words):
            return True

        # Capitalized proper noun in a non-initial position
        if i > 0 and _PROPER_NOUN.match(raw):
            return True

    return False


def has_basic_verb(words: Sequence[str]) -> bool:
    """Look for a common verb or a verb-like inflection anywhere in the tokens."""
    for token in words:
        word = _clean(token).lower()
        if not word:
            continue
        if word in COMMON_VERBS:
            return True
        if word.endswith('ed') and len(word) > 3:
            return True
        if word.endswith('ing') and len(word) > 4:
            return True
        if word.endswith('s') and len(word) > 2 and not word.endswith('ss'):
            return True
    return False


def is_complete_sentence(text: str) -> bool:
    """Terminal punctuation, two or more tokens, a subject and a verb."""
    trimmed = text.strip()
    if len(trimmed) < 3 or not TERMINAL_PUNCTUATION.search(trimmed):
        return False

    words = _tokens(trimmed)
    if len(words) < 2:
        return False

    return has_basic_subject(words) and has_basic_verb(words)


def is_fragment(text: str) -> bool:
    """Complement of completeness, plus subordinating-conjunction openers."""
    trimmed = text.strip()
    if len(trimmed) < 3:
        return True
    if not TERMINAL_PUNCTUATION.search(trimmed):
        return True

    first_word = _clean(_tokens(trimmed)[0]).lower()
    if first_word in FRAGMENT_STARTERS:
        return True

    return not is_complete_sentence(trimmed)


def normalize_text(text: str) -> str:
    """Collapse ellipses and repeated terminal marks, then whitespace."""
    text = re.sub(r'\.{3,}', '.', text)
    text = re.sub(r'[!?]{2,}', '!', text)
    text = re.sub(r'[.!?]{2,}', '.', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def get_sentence_position(text: str, offset: int) -> SentencePosition:
    """Bucket an offset into the first 10%, last 10% or middle of its sentence."""
    for sentence in split_into_sentences(text):
        if sentence.start <= offset <= sentence.end:
            relative = offset - sentence.start
            length = sentence.end - sentence.start

            start_threshold = max(1, length * 0.1)
            end_threshold = length * 0.9

            if relative <= start_threshold:
                return SentencePosition.START
            if relative >= end_threshold:
                return SentencePosition.END
            return SentencePosition.MIDDLE

    return SentencePosition.STANDALONE


def validate_sentence_completeness(text: str) -> Dict[str, Any]:
    """Explain why a sentence is or is not complete."""
    trimmed = text.strip()
    if not trimmed:
        return {
            'is_complete': False,
            'has_subject': False,
            'has_verb': False,
            'issues': ['Empty text'],
        }

    issues: List[str] = []
    has_punctuation = bool(TERMINAL_PUNCTUATION.search(trimmed))
    if not has_punctuation:
        issues.append('Missing sentence punctuation')

    words = _tokens(trimmed)

    has_subject = has_basic_subject(words)
    if not has_subject:
        issues.append('No clear subject found')

    has_verb = has_basic_verb(words)
    if not has_verb:
        issues.append('No clear verb found')

    return {
        'is_complete': not issues or (has_subject and has_verb and has_punctuation),
        'has_subject': has_subject,
        'has_verb': has_verb,
        'issues': issues,
    }


def detect_sentence_issues(text: str) -> Dict[str, Any]:
    """Flag fragments, run-ons (25+ words) and likely comma splices."""
    trimmed = text.strip()
    issues: List[str] = []
    suggestions: List[str] = []

    fragment = is_fragment(trimmed)
    if fragment:
        issues.append('Sentence fragment detected')
        suggestions.append('Consider adding a subject or verb to complete the thought')

    sentences = split_into_sentences(trimmed)
    run_on = len(sentences) == 1 and len(_tokens(sentences[0].text)) > 25
    if run_on:
        issues.append('Potentially run-on sentence')
        suggestions.append('Consider breaking into shorter sentences')

    comma_count = trimmed.count(',')
    has_conjunction = re.search(r'\b(and|but|or|so|yet|for|nor)\b', trimmed, re.IGNORECASE)
    if comma_count > 2 and not has_conjunction:
        issues.append('Possible comma splice')
        suggestions.append('Consider using conjunctions or splitting sentences')

    return {
        'is_fragment': fragment,
        'is_run_on': run_on,
        'issues': issues,
        'suggestions': suggestions,
    }
