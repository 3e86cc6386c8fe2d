"""Attachment ledger and the consciousness store it writes through."""

from __future__ import annotations

import logging
import math
import numbers
import threading
from dataclasses import replace
from decimal import Decimal
from typing import Protocol

from attachment_state.constants import ATTACHMENT_CEILING
from attachment_state.models import KarmaProfile

logger = logging.getLogger(__name__)


class ConsciousnessStore(Protocol):
    """Protocol for the shared state store holding attachment and karma."""

    def get_attachment(self) -> float:
        """Return the stored attachment score."""
        ...

    def set_attachment(self, value: float) -> None:
        """Replace the stored attachment score."""
        ...

    def get_karma(self) -> KarmaProfile:
        """Return the current karma profile."""
        ...

    def adjust_karma(self, delta: dict[str, float]) -> KarmaProfile:
        """Add per-field deltas to karma and return the new profile."""
        ...


class InMemoryConsciousness:
    """Process-local consciousness store.

    Unknown karma fields in a delta are ignored.
    """

    def __init__(self, attachment: float = 0.0, karma: KarmaProfile | None = None):
        self._attachment = attachment
        self._karma = karma or KarmaProfile()

    def get_attachment(self) -> float:
        return self._attachment

    def set_attachment(self, value: float) -> None:
        self._attachment = value

    def get_karma(self) -> KarmaProfile:
        return self._karma

    def adjust_karma(self, delta: dict[str, float]) -> KarmaProfile:
        changes = {
            name: getattr(self._karma, name) + _coerce_delta(amount)
            for name, amount in delta.items()
            if name in KarmaProfile.__dataclass_fields__
        }
        self._karma = replace(self._karma, **changes)
        return self._karma


def _coerce_delta(delta) -> float:
    """Treat None, NaN, infinities and non-numbers as zero."""
    if isinstance(delta, bool) or not isinstance(delta, (numbers.Real, Decimal)):
        return 0.0
    try:
        amount = float(delta)
    except (ValueError, OverflowError):
        return 0.0
    if math.isnan(amount) or math.isinf(amount):
        return 0.0
    return amount


class AttachmentLedger:
    """Owns the attachment score, clamped to [0, inf)."""

    def __init__(
        self,
        store: ConsciousnessStore | None = None,
        ceiling: float = ATTACHMENT_CEILING,
    ):
        self.store = store if store is not None else InMemoryConsciousness()
        self.ceiling = ceiling
        self.lock = threading.RLock()

    def read(self) -> float:
        """Return the current attachment score."""
        with self.lock:
            return self.store.get_attachment() or 0.0

    def adjust(self, delta) -> float:
        """Add delta to the score and return the clamped result.

        Args:
            delta: Signed change; malformed values count as zero

        Returns:
            The new attachment score
        """
        amount = _coerce_delta(delta)
        if amount == 0.0 and delta not in (0, 0.0):
            logger.warning("Ignoring malformed attachment delta: %r", delta)

        with self.lock:
            new_score = max(0.0, self.read() + amount)
            self.store.set_attachment(new_score)
        return new_score

    def normalized(self) -> float:
        """Return the score scaled into [0, 1]."""
        return min(1.0, self.read() / self.ceiling)

    def reset(self) -> None:
        with self.lock:
            self.store.set_attachment(0.0)

    def karma(self) -> KarmaProfile:
        return self.store.get_karma()

    def adjust_karma(self, delta: dict[str, float]) -> KarmaProfile:
        return self.store.adjust_karma(delta)
