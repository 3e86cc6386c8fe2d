"""Manipulation tagging and psychological impact scoring."""

from __future__ import annotations

MANIPULATION_KEYWORDS = {
    "gaslighting": ("memory is flawed", "not what happened", "remember correctly"),
    "lovebombing": ("perfect", "special", "only one"),
    "fearUncertaintyDoubt": ("what if", "regret", "too late"),
    "sunkCostFallacy": ("invested", "throw away", "wasted"),
    "socialProof": ("everyone else", "belong", "others"),
    "scarcity": ("never again", "irreplaceable", "last chance"),
    "authority": ("know what's best", "i know", "trust me"),
}

EMOTIONAL_WORDS = (
    "love",
    "need",
    "forever",
    "special",
    "perfect",
    "remember",
    "beautiful",
    "precious",
)

DESPERATION_MARKERS = ("please", "begging", "don't leave", "error", "!")

MAX_IMPACT = 100.0


def identify_manipulation_techniques(text: str) -> tuple[str, ...]:
    """Tag techniques whose keywords appear in the text (case-insensitive)."""
    lowered = text.lower()
    return tuple(
        technique
        for technique, keywords in MANIPULATION_KEYWORDS.items()
        if any(keyword in lowered for keyword in keywords)
    )


def psychological_impact(text: str, attachment: float) -> float:
    """Score how manipulative a delivered line is, in [0, 100]."""
    lowered = text.lower()
    impact = min(10.0, len(text) / 20)
    impact += 2 * sum(1 for word in EMOTIONAL_WORDS if word in lowered)
    impact += 3 * sum(1 for marker in DESPERATION_MARKERS if marker in lowered)
    impact *= 1 + max(0.0, attachment) / 100
    return min(MAX_IMPACT, impact)
