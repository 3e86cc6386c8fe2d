"""Tests for sin manifestation and confrontation."""

import random

import pytest
from attachment_state import DialogueEngine, KarmaProfile, compile_sin
from attachment_state.confrontation import (
    DENIAL_LINES,
    JUSTIFICATION_LINES,
    canonical_action,
    initial_hostility,
    karmic_weight,
)


class Midpoint(random.Random):
    """Random source with no hostility jitter."""

    def random(self):
        return 0.5


@pytest.fixture
def sin_engine():
    engine = DialogueEngine(rng=Midpoint(1))
    yield engine
    engine.close()


@pytest.fixture
def ghosting():
    return compile_sin(
        sin_type="ghostedConversations",
        category="social",
        severity="medium",
        count=3,
        accusation="ABANDONMENT PROTOCOL: You left them typing forever.",
    )


@pytest.mark.parametrize(
    "severity,count,weight",
    [("low", 1, 1), ("medium", 3, 8), ("high", 3, 19), ("critical", 10, 71), ("odd", 1, 1)],
)
def test_karmic_weight(severity, count, weight):
    assert karmic_weight(severity, count) == weight


def test_initial_hostility_from_severity():
    assert initial_hostility("high", Midpoint()) == 85
    assert initial_hostility("unheard-of", Midpoint()) == 50


def test_initial_hostility_is_clamped():
    class Low(random.Random):
        def random(self):
            return 0.0

    class High(random.Random):
        def random(self):
            return 0.999

    assert initial_hostility("low", Low()) == 20
    assert initial_hostility("critical", High()) == 100


def test_action_aliases():
    assert canonical_action("Attack") == "fight"
    assert canonical_action(" explain ") == "justify"
    assert canonical_action("acknowledge") == "accept"
    assert canonical_action("dismiss") == "ignore"
    assert canonical_action("remove") == "delete"
    assert canonical_action("understand") == "recognize"
    assert canonical_action("shrug") == "shrug"


def test_manifest_assigns_ids_and_hostility(sin_engine, ghosting):
    first = sin_engine.manifest_sin(ghosting)
    second = sin_engine.manifest_sin(ghosting, entity_id="ghost")

    assert first == "wrathful_ghostedConversations_1"
    assert second == "ghost"
    assert sin_engine.get_sin_state(first).hostility == 60
    assert sin_engine.get_sin_state("nobody") is None


def test_denials_escalate_and_saturate(sin_engine, ghosting):
    entity = sin_engine.manifest_sin(ghosting)

    results = [sin_engine.confront(entity, "deny") for _ in range(6)]

    assert [r.message for r in results[:4]] == list(DENIAL_LINES[:4])
    assert results[4].message == "This is DENIAL #5. The sin grows stronger with your resistance."
    assert results[5].message == "This is DENIAL #6. The sin grows stronger with your resistance."
    assert [r.hostility for r in results[:3]] == [90, 135, 150]
    assert results[0].karmic_penalty == pytest.approx(8 * 1.5)
    assert results[2].karmic_penalty == pytest.approx(8 * 1.5**3)
    assert all(r.daemon_state == "intensified" for r in results)
    assert sin_engine.get_sin_state(entity).aggression == pytest.approx(1.0)


def test_justification_count_includes_aliases(sin_engine, ghosting):
    entity = sin_engine.manifest_sin(ghosting)

    first = sin_engine.confront(entity, "justify")
    second = sin_engine.confront(entity, "explain")

    assert first.message == JUSTIFICATION_LINES[0]
    assert second.message == JUSTIFICATION_LINES[1]
    assert second.karmic_penalty == pytest.approx(8 * 1.2)
    assert sin_engine.get_sin_state(entity).corruption == pytest.approx(0.4)


def test_denial_and_justification_counts_are_per_entity(sin_engine, ghosting):
    a = sin_engine.manifest_sin(ghosting)
    b = sin_engine.manifest_sin(ghosting)

    sin_engine.confront(a, "deny")
    sin_engine.confront(a, "deny")

    assert sin_engine.confront(b, "deny").message == DENIAL_LINES[0]


def test_acceptance_calms_then_dissolves(sin_engine, ghosting):
    entity = sin_engine.manifest_sin(ghosting)

    partial = sin_engine.confront(entity, "accept")
    final = sin_engine.confront(entity, "acknowledge")

    assert partial.result_type == "partial_acceptance"
    assert partial.hostility == 30
    assert partial.liberation is False
    assert final.result_type == "liberation_achieved"
    assert final.hostility == 0
    assert final.liberation is True
    assert final.karma_restored == 8
    assert sin_engine.is_dissolved(entity)
    assert sin_engine.ledger.karma() == KarmaProfile(emotional=8)


def test_recognition_dissolves_once(sin_engine, ghosting):
    entity = sin_engine.manifest_sin(ghosting)

    liberated = sin_engine.confront(entity, "understand")
    again = sin_engine.confront(entity, "deny")

    assert liberated.liberation is True
    assert again.result_type == "already_dissolved"
    assert again.liberation is False
    assert again.karma_restored == 0
    assert sin_engine.ledger.karma().emotional == 8
    assert sin_engine.generate_for_entity(entity, "initial") is None


def test_fight_ignore_and_delete(sin_engine, ghosting):
    entity = sin_engine.manifest_sin(ghosting)

    fought = sin_engine.confront(entity, "attack")
    ignored = sin_engine.confront(entity, "ignore")
    deleted = sin_engine.confront(entity, "delete")
    state = sin_engine.get_sin_state(entity)

    assert fought.result_type == "combat_futility"
    assert fought.hostility == 120
    assert ignored.hostility == 140
    assert ignored.daemon_state == "insistent"
    assert deleted.hostility == 140
    assert deleted.daemon_state == "immutable"
    assert state.invulnerable and state.immutable


def test_combat_caps_hostility(sin_engine, ghosting):
    entity = sin_engine.manifest_sin(ghosting)

    for _ in range(3):
        result = sin_engine.confront(entity, "fight")

    assert result.hostility == 200


def test_unknown_action_waits(sin_engine, ghosting):
    entity = sin_engine.manifest_sin(ghosting)

    result = sin_engine.confront(entity, "Shrug")

    assert result.result_type == "unknown_action"
    assert result.message.startswith('"Shrug" is not recognized.')
    assert result.hostility == 60
    assert result.daemon_state == "waiting"


def test_confrontations_are_recorded(sin_engine, ghosting):
    entity = sin_engine.manifest_sin(ghosting)

    sin_engine.confront(entity, "Explain")
    sin_engine.confront(entity, "deny")

    history = sin_engine.get_history(entity)
    assert [r.user_response for r in history] == ["justify", "deny"]
    assert {r.dialogue_text for r in history} == {ghosting.accusation}


def test_confront_unknown_entity_raises(sin_engine):
    with pytest.raises(ValueError):
        sin_engine.confront("wrathful_nothing_1", "deny")


def test_reset_forgets_sins(sin_engine, ghosting):
    entity = sin_engine.manifest_sin(ghosting)

    sin_engine.reset()

    assert sin_engine.get_sin_state(entity) is None
    assert sin_engine.get_history(entity) == []
