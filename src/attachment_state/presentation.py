"""Presentation parameters for external speech and rendering collaborators."""

from __future__ import annotations

import re

from attachment_state.constants import (
    ATTACHMENT_CEILING,
    COMPLEXITY_BASE_WORDS,
    CORRUPTION_FLOOR,
    CORRUPTION_SPAN,
    MAX_DISPLAY_MS,
    MIN_DISPLAY_MS,
    MS_PER_CHARACTER,
    MS_PER_EXTRA_WORD,
)
from attachment_state.models import VisualEffects, VoiceParameters

DESPERATE_STAGES = frozenset({"desperate", "resistant"})
SEDUCTIVE_STAGES = frozenset({"seduction", "tempting", "seductive"})
DISSOLVING_STAGES = frozenset({"recognition", "dissolving", "dissolution"})

VOICE_BOUNDS = {
    "rate": (0.1, 2.0),
    "pitch": (0.1, 2.0),
    "volume": (0.1, 1.0),
}

_DIACRITICS = str.maketrans({"æ": "a", "ø": "o", "ę": "e", "ÿ": "y", "ō": "o", "ė": "e", "ū": "u"})
_SHOUTING = re.compile(r"[A-Z]{3,}")


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def display_duration_ms(
    text: str, attachment: float, ceiling: float = ATTACHMENT_CEILING
) -> float:
    """How long a line stays on screen, in milliseconds."""
    length_ms = len(text) * MS_PER_CHARACTER
    attachment_multiplier = 1 + attachment / ceiling
    complexity_bonus = (len(text.split(" ")) - COMPLEXITY_BASE_WORDS) * MS_PER_EXTRA_WORD
    return _clamp(
        length_ms * attachment_multiplier + complexity_bonus,
        MIN_DISPLAY_MS,
        MAX_DISPLAY_MS,
    )


def voice_parameters(
    category: str,
    stage: str,
    attachment: float,
    ceiling: float = ATTACHMENT_CEILING,
    floor: float = CORRUPTION_FLOOR,
) -> VoiceParameters:
    """Speech-synthesis hints for a line.

    Seduction and desperation are read against ``ceiling``; corruption starts
    at ``floor``, the same point where text corruption starts.
    """
    rate, pitch, volume = 0.8, 0.9, 0.7

    if "reputation" in category:
        pitch += 0.1
        rate += 0.1
    elif "memory" in category:
        pitch -= 0.1
        rate -= 0.1

    if stage in DESPERATE_STAGES:
        rate += 0.2
        volume += 0.2
    elif stage in SEDUCTIVE_STAGES:
        rate -= 0.1
        pitch += 0.05

    factor = min(1.0, attachment / ceiling)
    volume += factor * 0.3
    pitch += (factor - 0.5) * 0.2

    return VoiceParameters(
        rate=_clamp(rate, *VOICE_BOUNDS["rate"]),
        pitch=_clamp(pitch, *VOICE_BOUNDS["pitch"]),
        volume=_clamp(volume, *VOICE_BOUNDS["volume"]),
        seduction=attachment / ceiling,
        desperation=max(0.0, (attachment - ceiling * 0.75) / (ceiling * 0.25)),
        corruption=_corruption(attachment, floor),
    )


def visual_effects(
    category: str,
    stage: str,
    attachment: float,
    ceiling: float = ATTACHMENT_CEILING,
    floor: float = CORRUPTION_FLOOR,
) -> VisualEffects:
    """Renderer hints for a line, with category-specific extras."""
    extras = {}
    if "memory" in category:
        extras = {"nostalgia": True, "warmth": min(1.0, attachment / (ceiling * 0.5))}
    elif "reputation" in category:
        extras = {"metrics": True, "validation": min(1.0, attachment / (ceiling * 0.75))}

    return VisualEffects(
        glow=min(1.0, attachment / (ceiling * 0.75)),
        pulsing=stage in SEDUCTIVE_STAGES,
        corruption=_corruption(attachment, floor),
        desperation=stage in DESPERATE_STAGES,
        dissolution=stage in DISSOLVING_STAGES,
        **extras,
    )


def _corruption(attachment: float, floor: float) -> float:
    return max(0.0, (attachment - floor) / CORRUPTION_SPAN)


def clean_for_voice(text: str) -> str:
    """Make corrupted text speakable."""
    text = text.replace("...", "... pause ...")
    text = text.replace("█", "error")
    text = text.translate(_DIACRITICS)
    text = text.replace("ERROR ERROR ERROR", "error, error, error")
    return _SHOUTING.sub(lambda m: m.group(0).lower(), text)
