"""MCP server for the Attachment State dialogue engine.

Exposes generation and response handling through Model Context Protocol
tools, so an external renderer can drive a session over stdio.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import asdict
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from attachment_state.confrontation import compile_sin
from attachment_state.engine import DialogueEngine
from attachment_state.models import EngineConfig, GeneratedUtterance
from attachment_state.resolver import infer_entity_type

logger = logging.getLogger(__name__)

# Global engine instance (initialized on first call)
_engine: DialogueEngine | None = None

# Last line delivered per entity, consumed by handle_response
_last_utterances: dict[str, GeneratedUtterance] = {}


def get_engine() -> DialogueEngine:
    """Get or initialize the engine instance."""
    global _engine
    if _engine is None:
        seed = os.getenv("ATTACHMENT_SEED")
        config = EngineConfig(
            db_path=os.getenv("ATTACHMENT_DB_PATH", ":memory:"),
            seed=int(seed) if seed else None,
        )
        _engine = DialogueEngine(config)
    return _engine


def reset_engine() -> None:
    """Close and forget the engine instance."""
    global _engine
    if _engine is not None:
        _engine.close()
    _engine = None
    _last_utterances.clear()


# Initialize server
server = Server("attachment_state")


# -------------------------------------------------------------------------
# Tool Definitions
# -------------------------------------------------------------------------

TOOLS = [
    Tool(
        name="generate_dialogue",
        description="Generate the next line for an entity at a stage",
        inputSchema={
            "type": "object",
            "properties": {
                "entity_id": {"type": "string", "description": "Entity identifier"},
                "stage": {
                    "type": "string",
                    "description": "Interaction stage (e.g. initial, tempting, desperate)",
                },
                "entity_type": {
                    "type": "string",
                    "description": "Entity tag; inferred from the id when omitted",
                },
                "attachment_level": {
                    "type": "number",
                    "description": "Raw attachment; the session score when omitted",
                },
            },
            "required": ["entity_id", "stage"],
        },
    ),
    Tool(
        name="handle_response",
        description="Record a user response to an entity's last line",
        inputSchema={
            "type": "object",
            "properties": {
                "entity_id": {"type": "string", "description": "Entity identifier"},
                "response": {
                    "type": "string",
                    "description": "Response token (engage, resist, ignore, recognize, let_go, ...)",
                },
            },
            "required": ["entity_id", "response"],
        },
    ),
    Tool(
        name="manifest_sin",
        description="Manifest a compiled digital sin as a wrathful daemon",
        inputSchema={
            "type": "object",
            "properties": {
                "sin_type": {"type": "string", "description": "Sin identifier (e.g. ghostedConversations)"},
                "category": {
                    "type": "string",
                    "description": "Sin category (communication, security, privacy, productivity, consumption, social)",
                },
                "severity": {
                    "type": "string",
                    "description": "low, medium, high or critical",
                },
                "count": {
                    "type": "integer",
                    "description": "Times the sin was detected (default 1)",
                },
                "accusation": {"type": "string", "description": "Accusation text"},
                "entity_id": {
                    "type": "string",
                    "description": "Entity id to use; generated when omitted",
                },
            },
            "required": ["sin_type", "category", "severity", "accusation"],
        },
    ),
    Tool(
        name="confront",
        description="Confront a manifested sin (deny, fight, justify, accept, ignore, delete, recognize)",
        inputSchema={
            "type": "object",
            "properties": {
                "entity_id": {"type": "string", "description": "Sin entity identifier"},
                "action": {"type": "string", "description": "Confrontation action"},
            },
            "required": ["entity_id", "action"],
        },
    ),
    Tool(
        name="get_history",
        description="Get an entity's interaction history",
        inputSchema={
            "type": "object",
            "properties": {
                "entity_id": {"type": "string", "description": "Entity identifier"},
            },
            "required": ["entity_id"],
        },
    ),
    Tool(
        name="get_attachment",
        description="Get the session attachment score and karma",
        inputSchema={"type": "object", "properties": {}},
    ),
    Tool(
        name="get_analytics",
        description="Summarize all recorded interactions",
        inputSchema={"type": "object", "properties": {}},
    ),
    Tool(
        name="reset_session",
        description="Clear history, dissolved entities, manifested sins and attachment",
        inputSchema={"type": "object", "properties": {}},
    ),
]


def _text(payload: Any) -> list[TextContent]:
    if isinstance(payload, str):
        return [TextContent(type="text", text=payload)]
    return [TextContent(type="text", text=json.dumps(payload, indent=2))]


# -------------------------------------------------------------------------
# MCP Handlers
# -------------------------------------------------------------------------


@server.list_tools()
async def list_tools() -> list[Tool]:
    return TOOLS


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    try:
        engine = get_engine()

        if name == "generate_dialogue":
            entity_id = arguments["entity_id"]
            if engine.is_dissolved(entity_id):
                return _text(f"Entity dissolved: {entity_id}")

            history = engine.get_history(entity_id)
            utterance = engine.generate(
                entity_type=arguments.get("entity_type")
                or infer_entity_type(entity_id, history),
                stage=arguments["stage"],
                attachment_level=arguments.get("attachment_level", engine.attachment),
                history=history,
            )
            _last_utterances[entity_id] = utterance
            return _text(asdict(utterance))

        elif name == "handle_response":
            entity_id = arguments["entity_id"]
            outcome = engine.handle_response(
                entity_id,
                arguments["response"],
                _last_utterances.get(entity_id),
            )
            if outcome.follow_up is not None:
                _last_utterances[entity_id] = outcome.follow_up
            return _text(asdict(outcome))

        elif name == "manifest_sin":
            sin = compile_sin(
                sin_type=arguments["sin_type"],
                category=arguments["category"],
                severity=arguments["severity"],
                count=arguments.get("count", 1),
                accusation=arguments["accusation"],
            )
            entity_id = engine.manifest_sin(sin, arguments.get("entity_id"))
            return _text({"entity_id": entity_id, **asdict(engine.get_sin_state(entity_id))})

        elif name == "confront":
            result = engine.confront(arguments["entity_id"], arguments["action"])
            return _text(asdict(result))

        elif name == "get_history":
            records = engine.get_history(arguments["entity_id"])
            return _text([asdict(r) for r in records])

        elif name == "get_attachment":
            return _text(
                {
                    "attachment": engine.attachment,
                    "normalized": engine.ledger.normalized(),
                    "karma": asdict(engine.ledger.karma()),
                }
            )

        elif name == "get_analytics":
            return _text(asdict(engine.analytics()))

        elif name == "reset_session":
            engine.reset()
            _last_utterances.clear()
            return _text("Session reset")

        else:
            return _text(f"Unknown tool: {name}")

    except Exception as e:
        logger.exception("Tool %s failed", name)
        return _text(f"Error: {str(e)}")


# -------------------------------------------------------------------------
# Main Entry Point
# -------------------------------------------------------------------------


async def main():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def run():
    """Console entry point; logs go to stderr since stdout carries the protocol."""
    import asyncio

    logging.basicConfig(
        stream=sys.stderr,
        level=os.getenv("ATTACHMENT_LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(main())


if __name__ == "__main__":
    run()
