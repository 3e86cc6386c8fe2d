"""Attachment State - Attachment-driven narrative state engine for daemon dialogue."""

from attachment_state.models import (
    EngineConfig,
    KarmaProfile,
    InteractionRecord,
    VoiceParameters,
    VisualEffects,
    GeneratedUtterance,
    ResponseOutcome,
    DialogueAnalytics,
    Sin,
    SinState,
    ConfrontationResult,
)
from attachment_state.ledger import (
    AttachmentLedger,
    ConsciousnessStore,
    InMemoryConsciousness,
)
from attachment_state.history import InteractionHistoryStore
from attachment_state.catalog import DialogueCatalog
from attachment_state.confrontation import compile_sin
from attachment_state.engine import DialogueEngine

__version__ = "0.1.0"

__all__ = [
    "DialogueEngine",
    "EngineConfig",
    "KarmaProfile",
    "InteractionRecord",
    "VoiceParameters",
    "VisualEffects",
    "GeneratedUtterance",
    "ResponseOutcome",
    "DialogueAnalytics",
    "Sin",
    "SinState",
    "ConfrontationResult",
    "compile_sin",
    "AttachmentLedger",
    "ConsciousnessStore",
    "InMemoryConsciousness",
    "InteractionHistoryStore",
    "DialogueCatalog",
]
