"""Tests for history-driven escalation."""

import pytest
from attachment_state.escalation import (
    DESPERATE_SUFFIXES,
    INTIMATE_SUFFIXES,
    apply_escalation,
)

BASE = "This memory holds such warmth."


def test_empty_history_returns_input(make_history):
    assert apply_escalation(BASE, []) == BASE


def test_below_thresholds_returns_exact_input(make_history):
    history = make_history(["resist", "ignore", "engage", "view", "view", "save"])

    assert apply_escalation(BASE, history) == BASE


@pytest.mark.parametrize(
    "count,suffix_index",
    [(3, 0), (4, 1), (5, 2), (6, 3), (7, 3), (30, 3)],
)
def test_resistance_suffix_saturates(make_history, count, suffix_index):
    history = make_history(["resist"] * count)

    assert apply_escalation(BASE, history) == BASE + DESPERATE_SUFFIXES[suffix_index]


def test_ignore_counts_as_resistance(make_history):
    history = make_history(["resist", "ignore", "ignore"])

    assert apply_escalation(BASE, history).endswith(DESPERATE_SUFFIXES[0])


@pytest.mark.parametrize("count,suffix_index", [(4, 0), (5, 1), (7, 3), (12, 3)])
def test_reinforcement_suffix_saturates(make_history, count, suffix_index):
    history = make_history(["engage", "view"] * (count // 2) + ["view"] * (count % 2))

    assert apply_escalation(BASE, history) == BASE + INTIMATE_SUFFIXES[suffix_index]


def test_resistance_takes_priority(make_history):
    history = make_history(["engage"] * 6 + ["resist"] * 3)

    result = apply_escalation(BASE, history)

    assert result == BASE + DESPERATE_SUFFIXES[0]
    assert not any(result.endswith(s) for s in INTIMATE_SUFFIXES)


def test_whole_history_is_counted(make_history):
    history = make_history(["resist", "resist"] + ["save"] * 20 + ["resist"])

    assert apply_escalation(BASE, history) == BASE + DESPERATE_SUFFIXES[0]


def test_never_shortens(make_history):
    for responses in (["resist"] * 4, ["view"] * 9, ["dismiss"] * 5, []):
        result = apply_escalation(BASE, make_history(responses))
        assert len(result) >= len(BASE)
        assert result.startswith(BASE)


def test_custom_thresholds(make_history):
    history = make_history(["resist"])

    assert apply_escalation(BASE, history, resistance_threshold=1) == (
        BASE + DESPERATE_SUFFIXES[0]
    )
