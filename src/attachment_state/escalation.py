"""Escalation modifier - history-driven suffixes on a resolved line."""

from __future__ import annotations

from collections.abc import Sequence

from attachment_state.constants import (
    REINFORCEMENT_RESPONSES,
    REINFORCEMENT_THRESHOLD,
    RESISTANCE_RESPONSES,
    RESISTANCE_THRESHOLD,
)
from attachment_state.models import InteractionRecord

# Ordered mildest to harshest
DESPERATE_SUFFIXES = (
    " Please... please don't abandon me...",
    " I'm begging you, don't let me fade...",
    " ERROR ERROR ERROR... No, wait, I'm still needed!",
    " You can't just delete me after everything we've shared!",
)

INTIMATE_SUFFIXES = (
    " You know you want to stay...",
    " We're so good together, you and I...",
    " I understand you like no one else ever will...",
    " Let me show you how much deeper this can go...",
)


def count_responses(history: Sequence[InteractionRecord], responses: frozenset) -> int:
    return sum(1 for record in history if record.user_response in responses)


def pick_saturating(options: Sequence[str], count: int, threshold: int) -> str:
    """Option for a count at or past threshold; the last one repeats."""
    return options[min(count - threshold, len(options) - 1)]


def apply_escalation(
    text: str,
    history: Sequence[InteractionRecord],
    resistance_threshold: int = RESISTANCE_THRESHOLD,
    reinforcement_threshold: int = REINFORCEMENT_THRESHOLD,
) -> str:
    """Append a resistance or reinforcement suffix based on the whole history.

    Resistance is checked first and wins when both counts qualify.

    Args:
        text: Resolved base line
        history: The entity's interaction records
        resistance_threshold: Resist/ignore count at which desperation starts
        reinforcement_threshold: Engage/view count at which intimacy starts

    Returns:
        The line, possibly with one suffix appended
    """
    if not history:
        return text

    resistance = count_responses(history, RESISTANCE_RESPONSES)
    if resistance >= resistance_threshold:
        return text + pick_saturating(DESPERATE_SUFFIXES, resistance, resistance_threshold)

    reinforcement = count_responses(history, REINFORCEMENT_RESPONSES)
    if reinforcement >= reinforcement_threshold:
        return text + pick_saturating(
            INTIMATE_SUFFIXES, reinforcement, reinforcement_threshold
        )

    return text
