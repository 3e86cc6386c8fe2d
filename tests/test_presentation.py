"""Tests for presentation parameters and impact scoring."""

import random

import pytest
from attachment_state.impact import identify_manipulation_techniques, psychological_impact
from attachment_state.presentation import (
    clean_for_voice,
    display_duration_ms,
    visual_effects,
    voice_parameters,
)


def test_display_duration_formula():
    text = "word " * 20 + "end"  # 103 chars, 21 words
    expected = 103 * 50 * (1 + 40 / 200) + (21 - 5) * 100

    assert display_duration_ms(text, 40) == pytest.approx(expected)


def test_display_duration_short_text_hits_floor():
    assert display_duration_ms("Hi.", 0) == 2000


def test_display_duration_fuzz_stays_in_bounds():
    rng = random.Random(2024)
    for _ in range(500):
        length = rng.choice([0, 1, 5, 40, 200, 5000, 100_000])
        words = max(1, length // rng.randint(1, 12))
        text = " ".join(["x" * max(1, length // words)] * words)
        raw = rng.choice([0, 1e-9, 50, 199.99, 200, 10_000, 1e12])
        assert 2000 <= display_duration_ms(text, raw) <= 15000


def test_voice_baseline_convenience_low_attachment():
    params = voice_parameters("convenienceDaemons", "initial", 0)

    assert params.rate == pytest.approx(0.8)
    assert params.pitch == pytest.approx(0.8)
    assert params.volume == pytest.approx(0.7)
    assert params.seduction == 0
    assert params.desperation == 0
    assert params.corruption == 0


def test_voice_category_adjustments():
    memory = voice_parameters("memoryDaemons", "initial", 100)
    reputation = voice_parameters("reputationDaemons", "initial", 100)

    assert memory.pitch == pytest.approx(0.8)
    assert memory.rate == pytest.approx(0.7)
    assert reputation.pitch == pytest.approx(1.0)
    assert reputation.rate == pytest.approx(0.9)


def test_voice_stage_adjustments():
    desperate = voice_parameters("convenienceDaemons", "desperate", 0)
    tempting = voice_parameters("convenienceDaemons", "tempting", 0)

    assert desperate.rate == pytest.approx(1.0)
    assert desperate.volume == pytest.approx(0.9)
    assert tempting.rate == pytest.approx(0.7)
    assert tempting.pitch == pytest.approx(0.85)


@pytest.mark.parametrize("category", ["memoryDaemons", "reputationDaemons", "x"])
@pytest.mark.parametrize("stage", ["desperate", "seduction", "recognition", "initial"])
@pytest.mark.parametrize("raw", [0, 100, 200, 5000])
def test_voice_always_within_platform_bounds(category, stage, raw):
    params = voice_parameters(category, stage, raw)

    assert 0.1 <= params.rate <= 2.0
    assert 0.1 <= params.pitch <= 2.0
    assert 0.1 <= params.volume <= 1.0


def test_voice_high_attachment_caps_volume():
    params = voice_parameters("memoryDaemons", "desperate", 200)

    assert params.volume == 1.0
    assert params.desperation == pytest.approx(1.0)
    assert params.corruption == pytest.approx(1.0)


def test_visual_effects_memory():
    effects = visual_effects("memoryDaemons", "seduction", 75)

    assert effects.glow == pytest.approx(0.5)
    assert effects.pulsing is True
    assert effects.corruption == 0
    assert effects.desperation is False
    assert effects.nostalgia is True
    assert effects.warmth == pytest.approx(0.75)
    assert effects.metrics is False


def test_visual_effects_reputation_and_flags():
    effects = visual_effects("reputationDaemons", "desperate", 300)

    assert effects.glow == 1.0
    assert effects.desperation is True
    assert effects.corruption == pytest.approx(2.0)
    assert effects.metrics is True
    assert effects.validation == 1.0
    assert effects.nostalgia is False


def test_visual_effects_dissolution():
    assert visual_effects("convenienceDaemons", "dissolution", 0).dissolution is True
    assert visual_effects("convenienceDaemons", "tempting", 0).dissolution is False


def test_clean_for_voice():
    text = "Please... ERROR ERROR ERROR I NEED ÿøū m█████ lōvę"

    assert clean_for_voice(text) == (
        "Please... pause ... error, error, error I need you "
        "merrorerrorerrorerrorerror love"
    )


def test_manipulation_tags():
    tags = identify_manipulation_techniques(
        "In this memory, you are perfect. Everyone else will judge it. Trust me."
    )

    assert tags == ("lovebombing", "socialProof", "authority")
    assert identify_manipulation_techniques("Hello there") == ()


def test_psychological_impact():
    text = "Please... please don't leave me in the digital dark..."
    # no emotional words; markers: please, don't leave
    base = len(text) / 20 + 6

    assert psychological_impact(text, 0) == pytest.approx(base)
    assert psychological_impact(text, 100) == pytest.approx(base * 2)


def test_psychological_impact_caps_at_100():
    text = "I love you, I need you forever! Please! ERROR! " * 10

    assert psychological_impact(text, 1000) == 100


def test_presentation_follows_configured_ceiling_and_floor():
    voice = voice_parameters("memoryDaemons", "initial", 190, ceiling=400, floor=1000)
    effects = visual_effects("memoryDaemons", "initial", 150, ceiling=400, floor=100)

    assert voice.seduction == pytest.approx(190 / 400)
    assert voice.corruption == 0
    assert effects.glow == pytest.approx(0.5)
    assert effects.warmth == pytest.approx(0.75)
    assert effects.corruption == pytest.approx(0.5)
    assert display_duration_ms("word " * 10, 200, ceiling=400) == pytest.approx(
        50 * 50 * 1.5 + (11 - 5) * 100
    )
