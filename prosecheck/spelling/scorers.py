"""
Spelling Scorers
================
Pure scoring functions used to rank spelling candidates.

Features:
- Keyboard-weighted edit distance
- QWERTY keyboard proximity
- Simplified consonant-skeleton phonetic code
- Frequency and bigram context scores
- Candidate generators (common substitutions, adjacent-key typos)
"""

import math
import re
from functools import lru_cache
from typing import Dict, List, Sequence, Tuple

__version__ = "1.0.0"


QWERTY_LAYOUT: Tuple[str, ...] = (
    'qwertyuiop',
    'asdfghjkl',
    'zxcvbnm',
)

# Distance reported when either key is off the layout
OFF_KEYBOARD_DISTANCE = 10

# Hand-curated sample of relative English word frequencies
WORD_FREQUENCIES: Dict[str, int] = {
    # Ultra high frequency
    'the': 10000, 'be': 9500, 'to': 9000, 'of': 8500, 'and': 8000,
    'a': 7500, 'in': 7000, 'that': 6500, 'have': 6000, 'i': 5500,
    'it': 5000, 'for': 4800, 'not': 4600, 'on': 4400, 'with': 4200,
    'he': 4000, 'as': 3800, 'you': 3600, 'do': 3400, 'at': 3200,

    # Very high frequency
    'this': 3000, 'but': 2800, 'his': 2600, 'by': 2400, 'from': 2200,
    'they': 2000, 'we': 1900, 'say': 1800, 'her': 1700, 'she': 1600,
    'or': 1500, 'an': 1400, 'will': 1300, 'my': 1200, 'one': 1100,
    'all': 1000, 'would': 950, 'there': 900, 'their': 850, 'what': 800,

    # High frequency
    'so': 750, 'up': 700, 'out': 650, 'if': 600, 'about': 550,
    'who': 500, 'get': 450, 'which': 400, 'go': 350, 'me': 300,
    'when': 280, 'make': 260, 'can': 240, 'like': 220, 'time': 200,
    'no': 190, 'just': 180, 'him': 170, 'know': 160, 'take': 150,
    'people': 140, 'into': 130, 'year': 120, 'your': 110, 'good': 100,

    # Common words that often get misspelled
    'because': 90, 'through': 85, 'could': 80, 'should': 75, 'while': 70,
    'where': 65, 'here': 60, 'how': 55, 'why': 50, 'way': 45,
    'come': 40, 'some': 38, 'work': 36, 'want': 34, 'thought': 32,
    'right': 30, 'write': 28, 'might': 26, 'night': 24, 'light': 22,
    'water': 20, 'after': 18, 'before': 16, 'other': 14, 'another': 12,
}

# Question words and the words that typically follow them
COMMON_BIGRAMS: Dict[str, Tuple[str, ...]] = {
    'what': ('is', 'are', 'was', 'were', 'do', 'does', 'did', 'about', 'if', 'when'),
    'how': ('are', 'is', 'do', 'does', 'can', 'could', 'would', 'to', 'about', 'much'),
    'where': ('is', 'are', 'was', 'were', 'do', 'does', 'did', 'to', 'can'),
    'when': ('is', 'are', 'was', 'were', 'do', 'does', 'did', 'to', 'can'),
    'why': ('is', 'are', 'was', 'were', 'do', 'does', 'did', 'not', 'would'),
    'who': ('is', 'are', 'was', 'were', 'do', 'does', 'did', 'can', 'would'),
}

# Frequent typo substitutions, applied to every occurrence
COMMON_SUBSTITUTIONS: Tuple[Tuple[str, str], ...] = (
    ('a', 'e'), ('e', 'a'), ('i', 'e'), ('e', 'i'), ('o', 'a'), ('a', 'o'),
    ('c', 'k'), ('k', 'c'), ('s', 'z'), ('z', 's'), ('f', 'ph'), ('ph', 'f'),
)

_KEY_POSITIONS: Dict[str, Tuple[int, int]] = {
    key: (row, col)
    for row, keys in enumerate(QWERTY_LAYOUT)
    for col, key in enumerate(keys)
}

_VOWELS = re.compile(r'[aeiou]')
_REPEATS = re.compile(r'(.)\1+')
_PHONETIC_MAP = str.maketrans({'c': 'k', 'z': 's', 'b': 'p', 'd': 't'})


# =============================================================================
# EDIT DISTANCE
# =============================================================================

def weighted_edit_distance(a: str, b: str) -> float:
    """
    Edit distance where insertions and deletions cost 1.2 and a
    substitution costs 0.8 between adjacent keys, 1.0 otherwise.
    """
    previous = [j * 1.2 for j in range(len(b) + 1)]
    for i, ca in enumerate(a, 1):
        current = [i * 1.2]
        for j, cb in enumerate(b, 1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(min(
                    previous[j] + 1.2,
                    current[j - 1] + 1.2,
                    previous[j - 1] + substitution_cost(ca, cb),
                ))
        previous = current
    return previous[-1]


def substitution_cost(a: str, b: str) -> float:
    return 0.8 if keyboard_distance(a, b) <= 1 else 1.0


# =============================================================================
# KEYBOARD
# =============================================================================

@lru_cache(maxsize=1024)
def keyboard_distance(a: str, b: str) -> int:
    """Manhattan distance between two keys on a QWERTY layout."""
    pos_a = _KEY_POSITIONS.get(a.lower())
    pos_b = _KEY_POSITIONS.get(b.lower())
    if pos_a is None or pos_b is None:
        return OFF_KEYBOARD_DISTANCE
    return abs(pos_a[0] - pos_b[0]) + abs(pos_a[1] - pos_b[1])


def keyboard_neighbors(key: str) -> List[str]:
    """Keys directly above, below, left and right of `key`."""
    position = _KEY_POSITIONS.get(key.lower())
    if position is None:
        return []

    row, col = position
    neighbors = []
    for r, c in ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)):
        if 0 <= r < len(QWERTY_LAYOUT) and 0 <= c < len(QWERTY_LAYOUT[r]):
            neighbors.append(QWERTY_LAYOUT[r][c])
    return neighbors


def keyboard_score(original: str, candidate: str) -> float:
    """1.0 for identical words, lower as differing keys sit further apart."""
    if len(original) != len(candidate):
        return 0.5

    distances = [
        keyboard_distance(a, b)
        for a, b in zip(original, candidate)
        if a != b
    ]
    if not distances:
        return 1.0

    average = sum(distances) / len(distances)
    return max(0.0, 1 - average / 5)


# =============================================================================
# PHONETICS, FREQUENCY, CONTEXT
# =============================================================================

def phonetic_code(word: str) -> str:
    """Consonant skeleton: vowels dropped, similar sounds merged, runs collapsed."""
    code = _VOWELS.sub('', word.lower()).translate(_PHONETIC_MAP)
    return _REPEATS.sub(r'\1', code)


def phonetic_score(a: str, b: str) -> float:
    code_a = phonetic_code(a)
    code_b = phonetic_code(b)
    if code_a == code_b:
        return 1.0

    longest = max(len(code_a), len(code_b))
    matches = sum(1 for x, y in zip(code_a, code_b) if x == y)
    return matches / longest


def frequency_score(word: str) -> float:
    """Log-scaled frequency in [0, 1]; unknown words count as frequency 1."""
    frequency = WORD_FREQUENCIES.get(word.lower(), 1)
    return min(1.0, math.log10(frequency + 1) / 4)


def context_score(candidate: str, context_words: Sequence[str]) -> float:
    """1.0 when a neighbouring word commonly follows the candidate."""
    if not context_words:
        return 0.5

    followers = COMMON_BIGRAMS.get(candidate.lower(), ())
    if any(w.lower() in followers for w in context_words):
        return 1.0
    return 0.0


# =============================================================================
# CANDIDATE GENERATION
# =============================================================================

def substitution_variants(word: str) -> List[str]:
    """Word with every occurrence of a commonly confused letter swapped."""
    variants = []
    for source, target in COMMON_SUBSTITUTIONS:
        if source in word:
            variant = word.replace(source, target)
            if variant != word:
                variants.append(variant)
    return variants


def keyboard_variants(word: str) -> List[str]:
    """Word with one character replaced by an adjacent key."""
    variants = []
    for i, char in enumerate(word):
        for neighbor in keyboard_neighbors(char):
            variants.append(word[:i] + neighbor + word[i + 1:])
    return variants
