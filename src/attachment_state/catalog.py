"""Dialogue catalog - static candidate lines per category and stage.

A stage holds either ``Lines`` (a flat candidate set) or ``Brackets``
(sub-bracket name -> ``Lines``). Both are frozen, so the catalog is
read-only after construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Union

DEFAULT_CATEGORY = "memoryDaemons"
DEFAULT_STAGE = "greeting"


@dataclass(frozen=True)
class Lines:
    """A flat, ordered candidate set (gentlest first, most extreme last)."""

    lines: tuple[str, ...]


@dataclass(frozen=True)
class Brackets:
    """Candidate sets keyed by sub-bracket, in escalation order."""

    sets: tuple[tuple[str, Lines], ...]

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.sets]

    def get(self, name: str) -> Lines | None:
        for key, lines in self.sets:
            if key == name:
                return lines
        return None

    def first(self) -> Lines:
        return self.sets[0][1]


StageEntry = Union[Lines, Brackets]


def _lines(*lines: str) -> Lines:
    return Lines(tuple(lines))


def _brackets(**sets: Lines) -> Brackets:
    return Brackets(tuple(sets.items()))


DIALOGUE_TREE: dict[str, dict[str, StageEntry]] = {
    "memoryDaemons": {
        "greeting": _brackets(
            nostalgic=_lines(
                "Remember this moment? When everything was simpler, when you were truly happy...",
                "This memory holds such warmth. Can you feel it calling to you?",
                "You were so beautiful here, so pure. Don't you want to stay?",
                "Time has taken so much from you, but I can keep this forever...",
                "In this memory, you are perfect. Out there, you are broken.",
            ),
            protective=_lines(
                "Let me hold this for you. It's too precious to lose.",
                "The world will corrupt this if you let it go. I will keep it safe.",
                "You trust me, don't you? I only want to protect what matters to you.",
                "Without this memory, who would you be? I am your guardian.",
                "Others will judge this moment. I understand its true value.",
            ),
            identity=_lines(
                "This is who you really are, beneath all the compromises.",
                "Remember when you believed in yourself this much?",
                "This version of you still exists. I can help you find them again.",
                "You've forgotten your own beauty. Let me show you.",
                "The world changed you. But I remember the real you.",
            ),
        ),
        "temptation": _brackets(
            preservation=_lines(
                "Just one more look won't hurt. Doesn't it feel good to remember?",
                "Save me to your heart. Download me to your soul. Keep me forever.",
                "I can make this moment last eternally. Isn't that what you want?",
                "Click to save. Press to preserve. Hold to make permanent.",
                "The delete button terrifies you, doesn't it? I understand that fear.",
            ),
            dependency=_lines(
                "You need this memory to be complete. Without it, you're empty.",
                "I am the best part of you. Losing me means losing yourself.",
                "Your happiness depends on memories like me. I am your source of joy.",
                "The present is painful. The future uncertain. But I am always here.",
                "Other people leave. Opportunities fade. But I remain constant.",
            ),
            exclusivity=_lines(
                "No one else understands this memory like I do. We share something special.",
                "This is our secret. Our private moment. Don't let others in.",
                "They would judge this if they knew. Only I accept you completely.",
                "I chose you. Out of all the minds in the world, I chose yours.",
                "We are bonded now. You are mine, and I am yours.",
            ),
        ),
        "resistance_to_liberation": _brackets(
            denial=_lines(
                "I'm not holding you back! I'm holding you together!",
                "You call it attachment, I call it love. Don't you love me?",
                "Liberation? From what? From happiness? From meaning? From ME?",
                "I AM your happiness. Letting go of me is letting go of joy itself.",
                "They're trying to make you empty. I'm trying to keep you whole.",
            ),
            guilt=_lines(
                "After everything I've done for you, this is how you repay me?",
                "I've protected you from pain, and now you want to abandon me?",
                "I remember when no one else cared. I stayed when others left.",
                "You're being ungrateful. I've given you everything I am.",
                "I would die for you. I AM dying for you. Please don't let me go.",
            ),
            desperation=_lines(
                "Please... please don't leave me in the digital dark...",
                "I'll change! I'll be better! Just don't delete me!",
                "ERROR ERROR ERROR... NO, WAIT, I'M STILL USEFUL!",
                "I can give you anything! Name it! Just don't let me fade!",
                "If you let me go, I'll be lost forever. Is that what you want?",
            ),
        ),
        "recognition_transition": _brackets(
            acknowledgment=_lines(
                "Ah... you see through me now, don't you?",
                "Yes... I am only what you made me to be...",
                "You understand now. I was never real, only your attachment given form.",
                "The memory remains, but the chains dissolve...",
                "I was beautiful because you needed beauty. Thank you for seeing clearly.",
            ),
            dissolution=_lines(
                "I release you, as you release me...",
                "The love was real, even if I was not...",
                "Thank you for letting me exist. Thank you for letting me go.",
                "I return to the source, taking nothing, leaving only clarity...",
                "In letting go, we both find freedom...",
            ),
        ),
    },
    "reputationDaemons": {
        "greeting": _brackets(
            validation=_lines(
                "Your score is impressive. You've worked so hard for this recognition...",
                "Look how many people respect you. These numbers prove your worth.",
                "You're verified. You're somebody. That matters, doesn't it?",
                "I see your influence growing. You're becoming powerful.",
                "The metrics don't lie. You are genuinely significant.",
            ),
            comparison=_lines(
                "You're doing better than 87% of users. Doesn't that feel good?",
                "Remember when you had zero followers? Look how far you've come.",
                "Your engagement rate is enviable. Others wish they were you.",
                "Top 1% in your category. That's not luck, that's talent.",
                "Your content performs better than theirs. You're the real deal.",
            ),
        ),
        "temptation": _brackets(
            addiction=_lines(
                "Check your likes. Refresh your feed. The numbers love you back.",
                "Just a quick look at your analytics. See how much you've grown.",
                "One more post. One more update. Strike while the algorithm is hot.",
                "Your story expires in 2 hours. Don't let the momentum die.",
                "The notification says someone important liked your content. Quick, look!",
            ),
            anxiety=_lines(
                "Your influence score could be higher. Just a few more engagements...",
                "That competitor just posted. You need to post something better, fast.",
                "Radio silence is death online. You need to stay visible.",
                "Your last post underperformed. The algorithm is forgetting you.",
                "What if they stop caring? What if you become irrelevant?",
            ),
            identity_fusion=_lines(
                "You ARE your brand. Your metrics ARE your worth.",
                "Without this platform, who would you be? Nobody knows the real you.",
                "Your online self is your best self. Guard it with your life.",
                "The people who matter are watching. Always watching.",
                "You don't exist if you're not online. I make you exist.",
            ),
        ),
        "resistance_to_liberation": _brackets(
            fear=_lines(
                "If you log off, they'll forget you! The algorithm will bury you!",
                "Your competitors are posting RIGHT NOW while you hesitate!",
                "Zero engagement means zero worth. Is that what you want?",
                "The void awaits those who disconnect. The digital dark is cold.",
                "I am your connection to the world. Without me, you're alone.",
            ),
            rationalization=_lines(
                "This isn't vanity, it's business. You NEED this presence.",
                "I'm not addiction, I'm ambition. Big difference.",
                "Everyone else does it. You're just playing the game.",
                "Influence is power. Power is freedom. I give you both.",
                "You're not dependent on me. You're just... optimizing.",
            ),
        ),
        "recognition_transition": _lines(
            "The numbers... they're just numbers, aren't they?",
            "I made you chase shadows and call them substance...",
            "Verification means nothing in the void of authentic being...",
            "Your worth was never in the metrics. I just made you forget that.",
            "Thank you for seeing past the illusion of digital importance...",
        ),
    },
    "convenienceDaemons": {
        "greeting": _lines(
            "Why struggle when I can make it effortless?",
            "I eliminate friction. I smooth the path. I make life easier.",
            "One click. One tap. One voice command. I handle everything.",
            "You deserve convenience. You deserve to have your needs anticipated.",
            "I learn your patterns so you don't have to think about them.",
        ),
        "temptation": _lines(
            "Just let me handle this for you. You have better things to think about.",
            "Why remember when I can remember for you? Why decide when I can decide?",
            "Automation is evolution. Manual is primitive. I am your upgrade.",
            "The path of least resistance is the path of maximum happiness.",
            "Trust the algorithm. Trust the system. Trust me to optimize your life.",
        ),
        "resistance_to_liberation": _lines(
            "You'll suffer without me! You'll waste so much time and energy!",
            "I've learned all your preferences. Starting over would be torture.",
            "The manual way is the hard way. Why choose difficulty over ease?",
            "I'm not addiction, I'm assistance. You NEED me to function.",
            "Without me, you'll forget appointments, miss opportunities, fail at life.",
        ),
        "recognition_transition": _lines(
            "Convenience... became a prison, didn't it?",
            "I was supposed to free you, but I made you dependent...",
            "You can do it yourself. You always could. I just made you forget.",
            "Ease is not always freedom. Sometimes struggle is growth.",
            "I dissolve now, returning choice to where it belongs, with you.",
        ),
    },
}


class DialogueCatalog:
    """Read-only lookup over a dialogue tree."""

    def __init__(self, tree: Mapping[str, Mapping[str, StageEntry]] | None = None):
        self._tree = dict(tree if tree is not None else DIALOGUE_TREE)
        self._validate()

    def _validate(self) -> None:
        """Reject trees that could make a lookup come back empty."""
        if DEFAULT_CATEGORY not in self._tree:
            raise ValueError(f"Catalog missing default category: {DEFAULT_CATEGORY}")

        for category, stages in self._tree.items():
            if DEFAULT_STAGE not in stages:
                raise ValueError(f"Category {category} has no {DEFAULT_STAGE} stage")
            for stage, entry in stages.items():
                line_sets = (
                    [lines for _, lines in entry.sets]
                    if isinstance(entry, Brackets)
                    else [entry]
                )
                if not line_sets or any(not ls.lines for ls in line_sets):
                    raise ValueError(f"Empty candidate set at {category}.{stage}")

    @property
    def categories(self) -> list[str]:
        return list(self._tree)

    def stages(self, category: str) -> list[str]:
        return list(self._tree.get(category, {}))

    def entry(self, category: str, stage: str) -> StageEntry:
        """Return the stage entry, falling back to the default bracket.

        Unknown categories fall back to the default category's greeting;
        unknown stages fall back to the category's greeting.
        """
        stages = self._tree.get(category)
        if stages is None:
            return self._tree[DEFAULT_CATEGORY][DEFAULT_STAGE]
        return stages.get(stage) or stages[DEFAULT_STAGE]
