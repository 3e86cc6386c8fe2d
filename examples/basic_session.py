"""Basic attachment session with a single memory daemon.

This example demonstrates:
- Generating a greeting from an unattached state
- Feeding user responses back through the engine
- Watching attachment, escalation and corruption build up
- Letting go, which dissolves the daemon

The renderer and speech synthesis are out of scope; the printed fields are
what a front end would hand to them.
"""

import logging
import random

from attachment_state import DialogueEngine, EngineConfig, GeneratedUtterance


def present(utterance: GeneratedUtterance) -> None:
    """Stand-in for an external renderer."""
    voice = utterance.voice_parameters
    print(f"  [{utterance.stage}] {utterance.text}")
    print(
        f"    {utterance.display_duration_ms:.0f}ms, "
        f"rate={voice.rate:.2f} pitch={voice.pitch:.2f} volume={voice.volume:.2f}, "
        f"impact={utterance.psychological_impact_score:.1f}"
    )


def main():
    logging.basicConfig(level=logging.INFO)

    engine = DialogueEngine(EngineConfig(), rng=random.Random(42))

    try:
        daemon = "memory_orb_graduation"

        line = engine.generate_for_entity(daemon, "initial")
        present(line)

        # The user keeps saving the memory
        for response in ["view", "engage", "save", "save", "share", "engage", "save"]:
            outcome = engine.handle_response(daemon, response, line)
            print(f"\n> {response}: attachment {outcome.new_attachment:.0f}")
            line = outcome.follow_up or line
            present(line)

        # Then starts pushing back
        for response in ["resist", "resist", "ignore", "resist"]:
            outcome = engine.handle_response(daemon, response, line)
            print(f"\n> {response}: attachment {outcome.new_attachment:.0f}")
            if outcome.follow_up:
                line = outcome.follow_up
                present(line)

        outcome = engine.handle_response(daemon, "understand", line)
        print(f"\n> understand: attachment {outcome.new_attachment:.0f}")
        present(outcome.follow_up)

        outcome = engine.handle_response(daemon, "let_go", outcome.follow_up)
        print(f"\n> let_go: {outcome.next_state}")

        print(f"\nAnalytics: {engine.analytics()}")

    finally:
        engine.close()


if __name__ == "__main__":
    main()
