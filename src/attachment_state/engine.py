"""Dialogue Engine - attachment-driven generation and response handling."""

from __future__ import annotations

import logging
import math
import random
import threading
import time
from collections import Counter
from collections.abc import Sequence

from attachment_state.catalog import DialogueCatalog
from attachment_state.constants import (
    DESPERATE_ATTACHMENT,
    IMPACT_BASELINE,
    INSISTENT_HISTORY_LENGTH,
    NO_OP_STATES,
    RESPONSE_DELTAS,
    RESPONSE_KARMA,
    SEDUCTIVE_ATTACHMENT,
    TERMINAL_STATE,
)
from attachment_state.confrontation import (
    canonical_action,
    initial_hostility,
    karma_dimension,
    resolve_confrontation,
)
from attachment_state.corruption import corrupt
from attachment_state.escalation import apply_escalation
from attachment_state.history import InteractionHistoryStore
from attachment_state.impact import (
    identify_manipulation_techniques,
    psychological_impact,
)
from attachment_state.ledger import AttachmentLedger, ConsciousnessStore
from attachment_state.models import (
    ConfrontationResult,
    DialogueAnalytics,
    EngineConfig,
    GeneratedUtterance,
    InteractionRecord,
    ResponseOutcome,
    Sin,
    SinState,
)
from attachment_state.presentation import (
    clean_for_voice,
    display_duration_ms,
    visual_effects,
    voice_parameters,
)
from attachment_state.resolver import (
    infer_entity_type,
    map_entity_to_category,
    map_stage_to_category,
    resolve_candidates,
    select_by_attachment,
)

logger = logging.getLogger(__name__)

ENGAGE_RESPONSES = frozenset({"engage", "view", "save", "share", "click"})
RESIST_RESPONSES = frozenset({"resist", "dismiss"})
RECOGNIZE_RESPONSES = frozenset({"recognize", "understand"})


def _as_level(value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    if math.isnan(value):
        return 0.0
    return max(0.0, float(value))


def attachment_change(response: str, utterance: GeneratedUtterance | None) -> int:
    """Signed attachment delta for a response, scaled by the line's impact."""
    base = RESPONSE_DELTAS.get(response, 0)
    impact = (
        utterance.psychological_impact_score
        if utterance is not None
        else IMPACT_BASELINE
    )
    return math.floor(base * impact / IMPACT_BASELINE)


def determine_next_state(response: str, attachment: float, history_length: int) -> str:
    """Transition for a response given the post-adjustment attachment.

    Desperate is preferred over defensive once attachment is high.
    """
    if response in RECOGNIZE_RESPONSES:
        return "recognition"
    if response == "let_go":
        return TERMINAL_STATE
    if response in RESIST_RESPONSES:
        return "desperate" if attachment > DESPERATE_ATTACHMENT else "defensive"
    if response in ENGAGE_RESPONSES:
        return "seductive" if attachment > SEDUCTIVE_ATTACHMENT else "tempting"
    if response == "ignore":
        return "insistent" if history_length > INSISTENT_HISTORY_LENGTH else "waiting"
    return "active"


class DialogueEngine:
    """Engine tracking attachment and producing daemon dialogue."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        consciousness: ConsciousnessStore | None = None,
        rng: random.Random | None = None,
        catalog: DialogueCatalog | None = None,
    ):
        self.config = config or EngineConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.catalog = catalog or DialogueCatalog()
        self.ledger = AttachmentLedger(consciousness, self.config.attachment_ceiling)
        self.history = InteractionHistoryStore(self.config.db_path)
        self._dissolved: set[str] = set()
        self._sins: dict[str, SinState] = {}
        self._lock = threading.RLock()
        logger.info("Dialogue engine initialized (db=%s)", self.config.db_path)

    def close(self) -> None:
        """Close the history store."""
        self.history.close()

    def __enter__(self) -> DialogueEngine:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def attachment(self) -> float:
        return self.ledger.read()

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate(
        self,
        entity_type: str,
        stage: str,
        attachment_level: float,
        history: Sequence[InteractionRecord] = (),
    ) -> GeneratedUtterance:
        """Generate one line for an entity at a stage and attachment level.

        Args:
            entity_type: Entity tag or category name (unknown tags fall back)
            stage: Interaction stage (unknown stages fall back to greeting)
            attachment_level: Raw attachment score
            history: The entity's prior interaction records

        Returns:
            A new GeneratedUtterance
        """
        level = _as_level(attachment_level)
        category = map_entity_to_category(entity_type)
        entry = self.catalog.entry(category, map_stage_to_category(stage))
        ceiling = self.config.attachment_ceiling
        floor = self.config.corruption_floor
        candidates = resolve_candidates(entry, level, self.ledger.karma(), ceiling)

        text = select_by_attachment(candidates, level, ceiling)
        text = apply_escalation(
            text,
            history,
            self.config.resistance_threshold,
            self.config.reinforcement_threshold,
        )
        text = corrupt(text, level, self.rng, floor)

        logger.debug(
            "Generated %s/%s at attachment %.1f: %r", category, stage, level, text
        )

        return GeneratedUtterance(
            text=text,
            voice_text=clean_for_voice(text),
            voice_parameters=voice_parameters(category, stage, level, ceiling, floor),
            display_duration_ms=display_duration_ms(text, level, ceiling),
            visual_effects=visual_effects(category, stage, level, ceiling, floor),
            manipulation_tags=identify_manipulation_techniques(text),
            psychological_impact_score=psychological_impact(text, level),
            category=category,
            stage=stage,
            attachment_level=level,
        )

    def generate_for_entity(self, entity_id: str, stage: str) -> GeneratedUtterance | None:
        """Generate from the entity's own history and the ledger's attachment.

        Returns None once the entity has dissolved.
        """
        if self.is_dissolved(entity_id):
            return None
        history = self.history.query(entity_id)
        return self.generate(
            infer_entity_type(entity_id, history),
            stage,
            self.ledger.read(),
            history,
        )

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def handle_response(
        self,
        entity_id: str,
        response: str,
        last_utterance: GeneratedUtterance | None = None,
    ) -> ResponseOutcome:
        """Record a user response, move attachment and pick the next state.

        Args:
            entity_id: Which entity was responded to
            response: Response token ('engage', 'resist', 'let_go', ...)
            last_utterance: The line the user was responding to

        Returns:
            ResponseOutcome with the delta, new attachment, next state and
            an optional follow-up line
        """
        if response not in RESPONSE_DELTAS:
            logger.warning("Unknown response token for %s: %r", entity_id, response)

        with self._lock:
            self.history.append(
                entity_id,
                InteractionRecord(
                    entity_id=entity_id,
                    dialogue_text=last_utterance.text if last_utterance else "",
                    user_response=response,
                    timestamp=time.time(),
                    attachment_level_at_time=self.ledger.read(),
                ),
            )

            delta = attachment_change(response, last_utterance)
            new_attachment = self.ledger.adjust(delta)
            if response in RESPONSE_KARMA:
                self.ledger.adjust_karma(RESPONSE_KARMA[response])

            history = self.history.query(entity_id)
            if entity_id in self._dissolved:
                next_state = TERMINAL_STATE
            else:
                next_state = determine_next_state(
                    response, new_attachment, len(history)
                )
            if next_state == TERMINAL_STATE:
                self._dissolved.add(entity_id)

            follow_up = None
            if next_state != TERMINAL_STATE and next_state not in NO_OP_STATES:
                follow_up = self.generate(
                    infer_entity_type(entity_id, history),
                    next_state,
                    new_attachment,
                    history,
                )

        logger.info(
            "Response %s to %s: delta=%d attachment=%.1f next=%s",
            response,
            entity_id,
            delta,
            new_attachment,
            next_state,
        )

        return ResponseOutcome(
            entity_id=entity_id,
            attachment_delta=delta,
            new_attachment=new_attachment,
            next_state=next_state,
            follow_up=follow_up,
            liberation_progress=response in RECOGNIZE_RESPONSES,
        )

    # -------------------------------------------------------------------------
    # Sin Confrontation
    # -------------------------------------------------------------------------

    def manifest_sin(self, sin: Sin, entity_id: str | None = None) -> str:
        """Manifest a sin as a wrathful daemon and return its entity id.

        Starting hostility comes from the sin's severity, jittered by the
        engine's random source.
        """
        with self._lock:
            if entity_id is None:
                entity_id = f"wrathful_{sin.sin_type}_{len(self._sins) + 1}"
            state = SinState(sin=sin, hostility=initial_hostility(sin.severity, self.rng))
            self._sins[entity_id] = state
        logger.info(
            "Manifested %s as %s with hostility %.1f",
            sin.sin_type,
            entity_id,
            state.hostility,
        )
        return entity_id

    def get_sin_state(self, entity_id: str) -> SinState | None:
        return self._sins.get(entity_id)

    def confront(self, entity_id: str, action: str) -> ConfrontationResult:
        """Record a user action against a manifested sin and resolve it.

        Args:
            entity_id: Id returned by manifest_sin
            action: Confrontation action ('deny', 'justify', 'accept', ...)

        Returns:
            ConfrontationResult with the daemon's reply and new hostility

        Raises:
            ValueError: If no sin was manifested under entity_id
        """
        with self._lock:
            state = self._sins.get(entity_id)
            if state is None:
                raise ValueError(f"No sin manifested as {entity_id}")

            self.history.append(
                entity_id,
                InteractionRecord(
                    entity_id=entity_id,
                    dialogue_text=state.sin.accusation,
                    user_response=canonical_action(action),
                    timestamp=time.time(),
                    attachment_level_at_time=self.ledger.read(),
                ),
            )
            result = resolve_confrontation(
                entity_id, state, action, self.history.query(entity_id)
            )

            if result.liberation:
                self._dissolved.add(entity_id)
                self.ledger.adjust_karma(
                    {karma_dimension(state.sin.category): result.karma_restored}
                )

        logger.info(
            "Confronted %s with %s: %s hostility=%.1f",
            entity_id,
            result.action,
            result.result_type,
            result.hostility,
        )
        return result

    # -------------------------------------------------------------------------
    # Session State
    # -------------------------------------------------------------------------

    def get_history(self, entity_id: str) -> list[InteractionRecord]:
        return self.history.query(entity_id)

    def is_dissolved(self, entity_id: str) -> bool:
        return entity_id in self._dissolved

    def analytics(self) -> DialogueAnalytics:
        """Summarize every recorded interaction in the session.

        An entity counts as liberated when its last recorded attachment is
        below half of its first.
        """
        analytics = DialogueAnalytics()
        techniques: Counter = Counter()
        total_attachment = 0.0
        liberated = 0

        entity_ids = self.history.entity_ids()
        for entity_id in entity_ids:
            records = self.history.query(entity_id)
            analytics.total_interactions += len(records)

            first = records[0].attachment_level_at_time
            last = records[-1].attachment_level_at_time
            total_attachment += last
            if last < first * 0.5:
                liberated += 1

            for record in records:
                techniques.update(identify_manipulation_techniques(record.dialogue_text))

        analytics.entities_encountered = len(entity_ids)
        if entity_ids:
            analytics.average_attachment_per_entity = total_attachment / len(entity_ids)
            analytics.liberation_rate = liberated / len(entity_ids)
        analytics.manipulation_techniques_used = dict(techniques)
        return analytics

    def reset(self) -> None:
        """Full session restart: history, dissolved entities, sins and attachment."""
        with self._lock:
            self.history.clear()
            self._dissolved.clear()
            self._sins.clear()
            self.ledger.reset()
        logger.info("Session reset")
