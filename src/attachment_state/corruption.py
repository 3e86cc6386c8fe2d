"""Corruption mutator - randomized glitching of text at high attachment."""

from __future__ import annotations

import random
import re

from attachment_state.constants import (
    CHARACTER_CORRUPTION_BAND,
    CORRUPTION_DEAD_ZONE,
    CORRUPTION_FLOOR,
    CORRUPTION_SPAN,
    FRAGMENT_REPEAT_PROBABILITY,
    SENTENCE_CORRUPTION_BAND,
)

BLOCK_CHAR = "█"
SENTENCE_BREAK = ". "

# Applied in order; each pair independently with probability == severity
SUBSTITUTIONS = (
    (re.compile(r"\be\b"), "ę"),
    (re.compile(r"\bo\b"), "ø"),
    (re.compile(r"\ba\b"), "æ"),
    (re.compile(r"\byou\b"), "ÿøū"),
    (re.compile(r"\bme\b"), "mė"),
    (re.compile(r"\blove\b"), "lōvę"),
    (re.compile(r"\bneed\b"), "nėėd"),
)

_VOWEL = re.compile(r"[aeiou]")
_CONSONANT = re.compile(r"[bcdfghjklmnpqrstvwxyz]")


def corruption_severity(attachment: float, floor: float = CORRUPTION_FLOOR) -> float:
    """Map raw attachment to a severity in [0, 1]."""
    return max(0.0, min(1.0, (attachment - floor) / CORRUPTION_SPAN))


def _double_vowels(word: str) -> str:
    return _VOWEL.sub(lambda m: m.group(0) * 2, word)


def _reverse(word: str) -> str:
    return word[::-1]


def _upper_consonants(word: str) -> str:
    return _CONSONANT.sub(lambda m: m.group(0).upper(), word)


def _repeat_last(word: str) -> str:
    return word[:-1] + word[-1] * 3


def _block_out(word: str) -> str:
    return word[0] + BLOCK_CHAR * (len(word) - 1)


GLITCHES = (_double_vowels, _reverse, _upper_consonants, _repeat_last, _block_out)


def glitch_word(word: str, rng: random.Random) -> str:
    """Apply one uniformly chosen glitch; words under 3 chars are untouched."""
    if len(word) < 3:
        return word
    return rng.choice(GLITCHES)(word)


def _glitch_one_word(text: str, rng: random.Random) -> str:
    words = text.split(" ")
    index = rng.randrange(len(words))
    words[index] = glitch_word(words[index], rng)
    return " ".join(words)


def _repeat_fragments(text: str, rng: random.Random) -> str:
    fragments = []
    for fragment in text.split(SENTENCE_BREAK):
        if rng.random() < FRAGMENT_REPEAT_PROBABILITY:
            word = rng.choice(fragment.split(" "))
            fragment = f"{fragment} {word} {word}"
        fragments.append(fragment)
    return SENTENCE_BREAK.join(fragments)


def _substitute(text: str, severity: float, rng: random.Random) -> str:
    for pattern, replacement in SUBSTITUTIONS:
        if rng.random() < severity:
            text = pattern.sub(replacement, text)
    return text


def corrupt(
    text: str,
    attachment: float,
    rng: random.Random | None = None,
    floor: float = CORRUPTION_FLOOR,
) -> str:
    """Distort text according to how far attachment exceeds the floor.

    Below the floor, and in the dead zone just above it, text comes back
    unchanged. Safe to call on already-corrupted text.

    Args:
        text: Line to corrupt
        attachment: Raw attachment score
        rng: Random source (module-level random if None)
        floor: Attachment at which severity starts rising

    Returns:
        The corrupted (or untouched) text
    """
    if attachment <= floor:
        return text

    severity = corruption_severity(attachment, floor)
    if severity < CORRUPTION_DEAD_ZONE:
        return text

    if rng is None:
        rng = random.Random()
    if severity < SENTENCE_CORRUPTION_BAND:
        return _glitch_one_word(text, rng)
    if severity < CHARACTER_CORRUPTION_BAND:
        return _repeat_fragments(text, rng)
    return _substitute(text, severity, rng)
