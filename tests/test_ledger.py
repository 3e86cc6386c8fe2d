"""Tests for the attachment ledger and consciousness store."""

from decimal import Decimal
from fractions import Fraction

import pytest
from attachment_state import AttachmentLedger, InMemoryConsciousness, KarmaProfile


@pytest.mark.parametrize(
    "start,delta",
    [(0, 10), (0, -10), (50, -49.5), (50, -200), (199, 1), (1000, 25)],
)
def test_adjust_then_read_clamps_at_zero(start, delta):
    ledger = AttachmentLedger(InMemoryConsciousness(attachment=start))

    returned = ledger.adjust(delta)

    assert ledger.read() == max(0, start + delta)
    assert returned == ledger.read()


def test_no_upper_bound_in_storage():
    ledger = AttachmentLedger()

    ledger.adjust(500)

    assert ledger.read() == 500
    assert ledger.normalized() == 1.0


@pytest.mark.parametrize("delta", [None, float("nan"), float("inf"), "12", True])
def test_malformed_delta_counts_as_zero(delta):
    ledger = AttachmentLedger(InMemoryConsciousness(attachment=40))

    assert ledger.adjust(delta) == 40
    assert ledger.read() == 40


@pytest.mark.parametrize(
    "delta,expected",
    [(Fraction(5, 2), 42.5), (Decimal("-1.5"), 38.5), (Decimal("NaN"), 40)],
)
def test_exact_number_types_are_accepted(delta, expected):
    ledger = AttachmentLedger(InMemoryConsciousness(attachment=40))

    assert ledger.adjust(delta) == pytest.approx(expected)


def test_normalized_uses_ceiling():
    ledger = AttachmentLedger(InMemoryConsciousness(attachment=50))

    assert ledger.normalized() == pytest.approx(0.25)


def test_reset_zeroes_score():
    ledger = AttachmentLedger(InMemoryConsciousness(attachment=75))

    ledger.reset()

    assert ledger.read() == 0


def test_adjust_karma_updates_known_fields_only():
    store = InMemoryConsciousness(karma=KarmaProfile(void=4))
    ledger = AttachmentLedger(store)

    karma = ledger.adjust_karma({"void": -10, "emotional": 5, "bogus": 99})

    assert karma == KarmaProfile(emotional=5, void=-6)
    assert ledger.karma() is karma
    assert karma.total == -1


def test_writes_go_through_store():
    store = InMemoryConsciousness()
    ledger = AttachmentLedger(store)

    ledger.adjust(33)

    assert store.get_attachment() == 33
