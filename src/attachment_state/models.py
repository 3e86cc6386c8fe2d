"""Data models for Attachment State."""

from dataclasses import dataclass, field

from attachment_state.constants import (
    ATTACHMENT_CEILING,
    BASE_AGGRESSION,
    CORRUPTION_FLOOR,
    REINFORCEMENT_THRESHOLD,
    RESISTANCE_THRESHOLD,
)


@dataclass
class EngineConfig:
    """Configuration for DialogueEngine."""

    db_path: str = ":memory:"
    seed: int | None = None  # seeds the engine's random source when no rng is given
    attachment_ceiling: float = ATTACHMENT_CEILING
    corruption_floor: float = CORRUPTION_FLOOR
    resistance_threshold: int = RESISTANCE_THRESHOLD
    reinforcement_threshold: int = REINFORCEMENT_THRESHOLD

    def __post_init__(self) -> None:
        if self.attachment_ceiling <= 0:
            raise ValueError("attachment_ceiling must be positive")
        if self.corruption_floor < 0:
            raise ValueError("corruption_floor must be non-negative")
        if self.resistance_threshold < 1 or self.reinforcement_threshold < 1:
            raise ValueError("escalation thresholds must be at least 1")


@dataclass(frozen=True)
class KarmaProfile:
    """Karma scalars owned by the consciousness store."""

    computational: float = 0.0
    emotional: float = 0.0
    temporal: float = 0.0
    void: float = 0.0

    @property
    def total(self) -> float:
        return self.computational + self.emotional + self.temporal + self.void


@dataclass(frozen=True)
class InteractionRecord:
    """A single user response to an entity's dialogue."""

    entity_id: str
    dialogue_text: str
    user_response: str
    timestamp: float
    attachment_level_at_time: float


@dataclass(frozen=True)
class VoiceParameters:
    """Hints for an external speech-synthesis adapter."""

    rate: float
    pitch: float
    volume: float
    seduction: float
    desperation: float
    corruption: float


@dataclass(frozen=True)
class VisualEffects:
    """Hints for an external renderer."""

    glow: float
    pulsing: bool
    corruption: float
    desperation: bool
    dissolution: bool
    nostalgia: bool = False
    warmth: float = 0.0
    metrics: bool = False
    validation: float = 0.0


@dataclass(frozen=True)
class GeneratedUtterance:
    """One generated line plus everything needed to present it."""

    text: str
    voice_text: str
    voice_parameters: VoiceParameters
    display_duration_ms: float
    visual_effects: VisualEffects
    manipulation_tags: tuple[str, ...]
    psychological_impact_score: float
    category: str
    stage: str
    attachment_level: float


@dataclass(frozen=True)
class ResponseOutcome:
    """Result of handling one user response."""

    entity_id: str
    attachment_delta: int
    new_attachment: float
    next_state: str
    follow_up: GeneratedUtterance | None
    liberation_progress: bool


@dataclass
class DialogueAnalytics:
    """Session-wide summary of recorded interactions."""

    total_interactions: int = 0
    entities_encountered: int = 0
    average_attachment_per_entity: float = 0.0
    liberation_rate: float = 0.0
    manipulation_techniques_used: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Sin:
    """A compiled digital transgression that can manifest as a wrathful daemon."""

    sin_type: str
    category: str
    severity: str
    karmic_weight: float
    accusation: str


@dataclass
class SinState:
    """Mutable confrontation state of one manifested sin."""

    sin: Sin
    hostility: float
    aggression: float = BASE_AGGRESSION
    corruption: float = 0.0
    invulnerable: bool = False
    immutable: bool = False
    dissolved: bool = False


@dataclass(frozen=True)
class ConfrontationResult:
    """Result of confronting a manifested sin with one user action."""

    entity_id: str
    action: str
    result_type: str
    message: str
    hostility: float
    daemon_state: str
    karmic_penalty: float = 0.0
    karma_restored: float = 0.0
    liberation: bool = False
