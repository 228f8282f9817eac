"""
Context Metadata
================
Builds the surrounding-context picture for a span of text and checks
whether a proposed replacement keeps the touched sentences intact.
"""

import re
from dataclasses import dataclass, field
from typing import List, Dict, Any

from .sentences import (
    SentenceBoundary,
    SentencePosition,
    split_into_sentences,
    get_sentence_position,
    validate_sentence_completeness,
)

__version__ = "1.0.0"

_PARAGRAPH_BREAK = re.compile(r'\n\s*\n')
_TOKEN = re.compile(r'\S+')

# Punctuation runs a replacement must not introduce
_DUPLICATED_PUNCTUATION = (
    re.compile(r'[.!?]{2,}'),
    re.compile(r',\s*,'),
    re.compile(r',\s*[.!?]'),
)


@dataclass
class ContextMetadata:
    """Sentence, paragraph and neighbouring-word facts for one span."""
    sentence_position: SentencePosition
    sentence_boundary: SentenceBoundary
    paragraph_start: int
    paragraph_end: int
    words_before: List[str] = field(default_factory=list)
    words_after: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sentence_position': self.sentence_position.value,
            'sentence_boundary': self.sentence_boundary.to_dict(),
            'paragraph_start': self.paragraph_start,
            'paragraph_end': self.paragraph_end,
            'words_before': list(self.words_before),
            'words_after': list(self.words_after),
        }


def extract_words_around_position(text: str, offset: int, word_count: int = 3) -> Dict[str, List[str]]:
    """
    Return up to `word_count` whitespace-delimited tokens on each side of
    the token containing `offset`.

    An offset sitting in whitespace belongs to the next token.
    """
    tokens = list(_TOKEN.finditer(text))
    index = -1
    for i, token in enumerate(tokens):
        if offset <= token.end():
            index = i
            break

    if index == -1:
        return {'before': [], 'after': []}

    before = [t.group() for t in tokens[max(0, index - word_count):index]]
    after = [t.group() for t in tokens[index + 1:index + 1 + word_count]]
    return {'before': before, 'after': after}


def extract_context_window(text: str, offset: int, length: int, window_size: int = 50) -> Dict[str, str]:
    """Slices of `window_size` characters either side of the span."""
    start = max(0, offset - window_size)
    end = min(len(text), offset + length + window_size)
    return {
        'before': text[start:offset],
        'after': text[offset + length:end],
        'full': text[start:end],
    }


def find_paragraph_boundaries(text: str, offset: int) -> Dict[str, Any]:
    """Paragraph (blank-line separated) containing the offset."""
    breaks = [0]
    breaks.extend(m.end() for m in _PARAGRAPH_BREAK.finditer(text))
    breaks.append(len(text))

    for start, end in zip(breaks, breaks[1:]):
        if start <= offset < end:
            return {'start': start, 'end': end, 'text': text[start:end].strip()}

    return {'start': 0, 'end': len(text), 'text': text.strip()}


def find_sentence(text: str, offset: int) -> SentenceBoundary:
    """Sentence containing the offset, or a whole-text fragment fallback."""
    for sentence in split_into_sentences(text):
        if sentence.start <= offset <= sentence.end:
            return sentence
    return SentenceBoundary(
        start=0,
        end=len(text),
        text=text,
        is_complete=False,
        is_fragment=True,
    )


def build_context_metadata(text: str, offset: int, length: int) -> ContextMetadata:
    """Combine sentence position, paragraph bounds and neighbouring words."""
    paragraph = find_paragraph_boundaries(text, offset)
    words = extract_words_around_position(text, offset, 3)

    return ContextMetadata(
        sentence_position=get_sentence_position(text, offset),
        sentence_boundary=find_sentence(text, offset),
        paragraph_start=paragraph['start'],
        paragraph_end=paragraph['end'],
        words_before=words['before'],
        words_after=words['after'],
    )


def analyze_multi_sentence_context(text: str, start_offset: int, end_offset: int) -> Dict[str, Any]:
    """Sentences touched by [start_offset, end_offset] and how they are covered."""
    affected = [
        s for s in split_into_sentences(text)
        if not (s.end < start_offset or s.start > end_offset)
    ]

    has_complete_span = bool(affected) and (
        start_offset <= affected[0].start and end_offset >= affected[-1].end
    )

    return {
        'sentences': affected,
        'is_multi_sentence': len(affected) > 1,
        'has_complete_span': has_complete_span,
        'fragments_included': any(s.is_fragment for s in affected),
    }


def apply_replacement(text: str, offset: int, length: int, replacement: str) -> str:
    """Text with [offset, offset+length) swapped for replacement."""
    return text[:offset] + replacement + text[offset + length:]


def validate_replacement(text: str, offset: int, length: int, replacement: str) -> Dict[str, Any]:
    """
    Structural check of an edit.

    Flags a changed sentence count, incomplete resulting sentences, a
    lowercase sentence start after ". ", a stray period inside a
    continuing sentence and newly duplicated punctuation.
    """
    new_text = apply_replacement(text, offset, length, replacement)
    issues: List[str] = []

    before = analyze_multi_sentence_context(text, offset, offset + length)
    after = analyze_multi_sentence_context(new_text, offset, offset + len(replacement))

    if len(before['sentences']) != len(after['sentences']):
        issues.append('Replacement changes sentence structure')

    for sentence in after['sentences']:
        completeness = validate_sentence_completeness(sentence.text)
        if not completeness['is_complete']:
            issues.append(f"Incomplete sentence: {', '.join(completeness['issues'])}")

    context_before = text[max(0, offset - 20):offset]
    context_after = text[offset + length:offset + length + 20]

    first_char = new_text[offset:offset + 1]
    if context_before.endswith('. ') and first_char.isalpha() and first_char.islower():
        issues.append('Replacement should be capitalized after period')

    stripped = replacement.rstrip()
    if context_after.startswith(' ') and stripped.endswith('.'):
        issues.append('Replacement ends with period but continues in sentence')

    for pattern in _DUPLICATED_PUNCTUATION:
        if len(pattern.findall(new_text)) > len(pattern.findall(text)):
            issues.append('Replacement introduces duplicated punctuation')
            break

    return {
        'is_valid': not issues,
        'new_text': new_text,
        'issues': issues,
        'affected_sentences': after['sentences'],
    }
