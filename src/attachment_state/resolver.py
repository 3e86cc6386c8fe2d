"""Stage resolution: entity tags to categories, stages to catalog brackets,
attachment to a concrete candidate line."""

from __future__ import annotations

import math
from collections.abc import Sequence

from attachment_state.catalog import DEFAULT_CATEGORY, DEFAULT_STAGE, Brackets, Lines
from attachment_state.constants import (
    ATTACHMENT_CEILING,
    EXTREME_ATTACHMENT,
    HIGH_ATTACHMENT,
    KARMA_BIAS_CEILING,
    LOW_ATTACHMENT_STEP,
    MEDIUM_ATTACHMENT,
    SUB_BRACKET_DEPENDENCY,
    SUB_BRACKET_DESPERATION,
)
from attachment_state.models import InteractionRecord, KarmaProfile

ENTITY_CATEGORIES = {
    "nostalgic_connection": "memoryDaemons",
    "lost_opportunity": "memoryDaemons",
    "idealized_memory": "memoryDaemons",
    "digital_intimacy": "memoryDaemons",
    "perfect_moment": "memoryDaemons",
    "reputation_guardian": "reputationDaemons",
    "influence_amplifier": "reputationDaemons",
    "validation_provider": "reputationDaemons",
    "convenience_optimizer": "convenienceDaemons",
    "automation_angel": "convenienceDaemons",
    "friction_eliminator": "convenienceDaemons",
    "memoryDaemons": "memoryDaemons",
    "reputationDaemons": "reputationDaemons",
    "convenienceDaemons": "convenienceDaemons",
}

STAGE_CATEGORIES = {
    "initial": "greeting",
    "introduction": "greeting",
    "attracted": "greeting",
    "waiting": "greeting",
    "active": "greeting",
    "seduction": "temptation",
    "tempting": "temptation",
    "seductive": "temptation",
    "attached": "temptation",
    "dependency": "temptation",
    "resistant": "resistance_to_liberation",
    "defensive": "resistance_to_liberation",
    "desperate": "resistance_to_liberation",
    "desperation": "resistance_to_liberation",
    "insistent": "resistance_to_liberation",
    "recognition": "recognition_transition",
    "acknowledged": "recognition_transition",
    "dissolving": "recognition_transition",
    "dissolution": "recognition_transition",
}

# Catalog stage names resolve to themselves
STAGE_CATEGORIES.update({stage: stage for stage in set(STAGE_CATEGORIES.values())})


def map_entity_to_category(entity_type: str) -> str:
    """Map a free-form entity tag to a dialogue category."""
    return ENTITY_CATEGORIES.get(entity_type, DEFAULT_CATEGORY)


def map_stage_to_category(stage: str) -> str:
    """Map an interaction stage to a catalog stage."""
    return STAGE_CATEGORIES.get(stage, DEFAULT_STAGE)


def select_by_attachment(
    candidates, attachment: float, ceiling: float = ATTACHMENT_CEILING
) -> str:
    """Pick a line from an ordered candidate set by raw attachment.

    Higher attachment walks further toward the end of the set; anything
    above the extreme tier always gets the last line. Tiers scale with
    ``ceiling``.
    """
    scale = ceiling / ATTACHMENT_CEILING
    if isinstance(candidates, Lines):
        candidates = candidates.lines
    if isinstance(candidates, str) or not isinstance(candidates, Sequence):
        return str(candidates)

    length = len(candidates)
    if attachment > EXTREME_ATTACHMENT * scale:
        index = length - 1
    elif attachment > HIGH_ATTACHMENT * scale:
        index = min(length - 1, math.floor(length * 0.75))
    elif attachment > MEDIUM_ATTACHMENT * scale:
        index = math.floor(length * 0.5)
    else:
        index = min(
            math.floor(max(0.0, attachment) / (LOW_ATTACHMENT_STEP * scale)),
            math.floor(length * 0.25),
        )

    return candidates[max(0, min(index, length - 1))]


def karma_bias(karma: KarmaProfile | None) -> float:
    """Extra routing pressure from void karma outweighing emotional karma."""
    if karma is None:
        return 0.0
    return max(0.0, min(KARMA_BIAS_CEILING, karma.void - karma.emotional))


def select_sub_bracket(
    brackets: Brackets,
    attachment: float,
    karma: KarmaProfile | None = None,
    ceiling: float = ATTACHMENT_CEILING,
) -> str:
    """Choose a sub-bracket name within a bracketed stage."""
    names = brackets.names
    score = attachment + karma_bias(karma)
    scale = ceiling / ATTACHMENT_CEILING

    if score > SUB_BRACKET_DESPERATION * scale:
        return "desperation" if "desperation" in names else names[-1]
    if score > SUB_BRACKET_DEPENDENCY * scale:
        if "dependency" in names:
            return "dependency"
        return names[1] if len(names) > 1 else names[0]
    return names[0]


def resolve_candidates(
    entry: Lines | Brackets,
    attachment: float,
    karma: KarmaProfile | None = None,
    ceiling: float = ATTACHMENT_CEILING,
) -> Lines:
    """Flatten a stage entry to the Lines that will be drawn from."""
    if isinstance(entry, Brackets):
        name = select_sub_bracket(entry, attachment, karma, ceiling)
        return entry.get(name) or entry.first()
    return entry


def infer_entity_type(entity_id: str, history: Sequence[InteractionRecord] = ()) -> str:
    """Guess an entity's type tag from its id, then from its last dialogue."""
    if "memory" in entity_id:
        return "nostalgic_connection"
    if "reputation" in entity_id:
        return "reputation_guardian"
    if "convenience" in entity_id:
        return "convenience_optimizer"

    if history:
        recent = history[-1].dialogue_text.lower()
        if "remember" in recent or "memory" in recent:
            return "nostalgic_connection"
        if "score" in recent or "metrics" in recent:
            return "reputation_guardian"

    return "nostalgic_connection"
