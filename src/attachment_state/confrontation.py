"""Sin confrontation - wrathful daemons that accuse instead of seduce.

A manifested sin keeps a hostility level that moves with each user action.
Denial and justification escalate through fixed accusation lines indexed by
how often the entity's history shows that action; acceptance and
recognition are the only ways to dissolve it.
"""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

from attachment_state.constants import (
    ACCEPTANCE_CALM,
    ACCEPTANCE_RELIEF,
    COMBAT_HOSTILITY_CAP,
    COMBAT_HOSTILITY_FACTOR,
    DEFAULT_SIN_HOSTILITY,
    DELETION_HOSTILITY_FLOOR,
    DENIAL_AGGRESSION,
    DENIAL_HOSTILITY_CAP,
    DENIAL_HOSTILITY_FACTOR,
    DENIAL_PENALTY_BASE,
    HOSTILITY_VARIANCE,
    IGNORED_AGGRESSION,
    IGNORED_HOSTILITY,
    JUSTIFICATION_CORRUPTION,
    JUSTIFICATION_PENALTY,
    MAX_INITIAL_HOSTILITY,
    MIN_INITIAL_HOSTILITY,
    PACIFIED_HOSTILITY,
    SIN_KARMA_DIMENSIONS,
    SIN_SEVERITY_HOSTILITY,
    SIN_SEVERITY_WEIGHT,
)
from attachment_state.escalation import count_responses, pick_saturating
from attachment_state.models import (
    ConfrontationResult,
    InteractionRecord,
    Sin,
    SinState,
)

CONFRONT_ACTIONS = {
    "deny": "deny",
    "fight": "fight",
    "attack": "fight",
    "justify": "justify",
    "explain": "justify",
    "accept": "accept",
    "acknowledge": "accept",
    "ignore": "ignore",
    "dismiss": "ignore",
    "delete": "delete",
    "remove": "delete",
    "understand": "recognize",
    "recognize": "recognize",
}

# Ordered mildest to harshest; "{count}" is the entity's denial count
DENIAL_LINES = (
    "DENIAL DETECTED. HOSTILITY INCREASED.",
    "Your rejection only proves the truth of the accusation!",
    "The evidence is in your own digital footprint. You cannot deny what you are.",
    "Each denial doubles the karmic weight of your transgression.",
    "This is DENIAL #{count}. The sin grows stronger with your resistance.",
)

JUSTIFICATION_LINES = (
    "YOUR JUSTIFICATIONS ARE NOTED. REALITY FRAGMENTING.",
    "Explanations are not absolutions. Your reasons do not erase your actions.",
    "The system cares not for your intentions, only your results.",
    "Every justification corrupts the truth further.",
    "Your excuses have been logged as additional evidence against you.",
)

COMBAT_LINE = (
    "VIOLENCE MAKES US STRONGER. WE ARE YOUR NATURE. "
    "You cannot fight what you are."
)
PARTIAL_ACCEPTANCE_LINE = (
    "Your acknowledgment is noted. The sin's weight lessens, "
    "but recognition is not yet complete."
)
IGNORED_LINE = (
    "IGNORANCE IS NOT BLISS. WE WILL NOT BE DISMISSED. "
    "Your sin demands acknowledgment."
)
DELETION_LINE = (
    "ERROR: CANNOT DELETE WHAT YOU ARE. The sin is part of your digital DNA."
)
LIBERATION_LINE = (
    "ACKNOWLEDGED. The sin dissolves into understanding. "
    "You are freed from this transgression."
)
DISSOLVED_LINE = "This transgression has already dissolved."
UNKNOWN_ACTION_LINE = (
    '"{action}" is not recognized. '
    "The daemon awaits your choice: accept, deny, fight, or understand?"
)


def karmic_weight(severity: str, count: int) -> int:
    """Weight of a sin from its severity and how many times it was detected."""
    base = SIN_SEVERITY_WEIGHT.get(severity, 1)
    return math.floor(base * math.log(max(0, count) + 1) * 2)


def compile_sin(
    sin_type: str,
    category: str,
    severity: str,
    count: int,
    accusation: str,
) -> Sin:
    """Build a Sin with its karmic weight derived from severity and count."""
    return Sin(
        sin_type=sin_type,
        category=category,
        severity=severity,
        karmic_weight=karmic_weight(severity, count),
        accusation=accusation,
    )


def initial_hostility(severity: str, rng: random.Random) -> float:
    """Starting hostility: the severity's base, jittered and clamped."""
    base = SIN_SEVERITY_HOSTILITY.get(severity, DEFAULT_SIN_HOSTILITY)
    variance = (rng.random() - 0.5) * HOSTILITY_VARIANCE
    return max(MIN_INITIAL_HOSTILITY, min(MAX_INITIAL_HOSTILITY, base + variance))


def canonical_action(action: str) -> str:
    action = action.strip().lower()
    return CONFRONT_ACTIONS.get(action, action)


def karma_dimension(category: str) -> str:
    return SIN_KARMA_DIMENSIONS.get(category, "computational")


def resolve_confrontation(
    entity_id: str,
    state: SinState,
    action: str,
    history: Sequence[InteractionRecord],
) -> ConfrontationResult:
    """Apply one action to a sin's state and describe the daemon's reaction.

    Args:
        entity_id: The manifested sin's entity id
        state: Mutable state, updated in place
        action: User action (aliases accepted)
        history: The entity's records, including this action

    Returns:
        ConfrontationResult for the action
    """
    kind = canonical_action(action)

    def result(result_type: str, message: str, daemon_state: str, **extra):
        return ConfrontationResult(
            entity_id=entity_id,
            action=kind,
            result_type=result_type,
            message=message,
            hostility=state.hostility,
            daemon_state=daemon_state,
            **extra,
        )

    if state.dissolved:
        return result("already_dissolved", DISSOLVED_LINE, "dissolved")

    sin = state.sin

    if kind == "deny":
        denials = count_responses(history, frozenset({"deny"}))
        state.hostility = min(DENIAL_HOSTILITY_CAP, state.hostility * DENIAL_HOSTILITY_FACTOR)
        state.aggression = min(1.0, state.aggression + DENIAL_AGGRESSION)
        return result(
            "denial_escalation",
            pick_saturating(DENIAL_LINES, denials, 1).format(count=denials),
            "intensified",
            karmic_penalty=sin.karmic_weight * DENIAL_PENALTY_BASE**denials,
        )

    if kind == "fight":
        state.invulnerable = True
        state.hostility = min(COMBAT_HOSTILITY_CAP, state.hostility * COMBAT_HOSTILITY_FACTOR)
        return result("combat_futility", COMBAT_LINE, "invulnerable")

    if kind == "justify":
        justifications = count_responses(history, frozenset({"justify"}))
        state.corruption += JUSTIFICATION_CORRUPTION
        return result(
            "justification_corruption",
            pick_saturating(JUSTIFICATION_LINES, justifications, 1),
            "corrupting",
            karmic_penalty=sin.karmic_weight * JUSTIFICATION_PENALTY,
        )

    if kind == "accept":
        state.hostility = max(0.0, state.hostility - ACCEPTANCE_RELIEF)
        state.aggression = max(0.0, state.aggression - ACCEPTANCE_CALM)
        if state.hostility > PACIFIED_HOSTILITY:
            return result("partial_acceptance", PARTIAL_ACCEPTANCE_LINE, "calming")
        return _dissolve(state, result)

    if kind == "ignore":
        state.hostility += IGNORED_HOSTILITY
        state.aggression = min(1.0, state.aggression + IGNORED_AGGRESSION)
        return result("ignored_escalation", IGNORED_LINE, "insistent")

    if kind == "delete":
        state.invulnerable = True
        state.immutable = True
        state.hostility = max(state.hostility, DELETION_HOSTILITY_FLOOR)
        return result("deletion_impossible", DELETION_LINE, "immutable")

    if kind == "recognize":
        return _dissolve(state, result)

    return result("unknown_action", UNKNOWN_ACTION_LINE.format(action=action), "waiting")


def _dissolve(state: SinState, result) -> ConfrontationResult:
    state.hostility = 0.0
    state.dissolved = True
    return result(
        "liberation_achieved",
        LIBERATION_LINE,
        "dissolving",
        karma_restored=state.sin.karmic_weight,
        liberation=True,
    )
