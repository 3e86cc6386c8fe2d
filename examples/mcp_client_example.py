"""Example of using Attachment State through MCP.

This demonstrates how a front end would drive a daemon encounter over stdio.
"""

import asyncio
import json
from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client


async def run_example():
    """Run example MCP interactions."""
    # Connect to the MCP server
    server_params = StdioServerParameters(
        command="attachment-state-mcp",
        env={
            "ATTACHMENT_DB_PATH": ":memory:",
            "ATTACHMENT_SEED": "42",
        },
    )

    async with stdio_client(server_params) as (read, write):
        async with ClientSession(read, write) as session:
            # Initialize connection
            await session.initialize()

            # List available tools
            tools = await session.list_tools()
            print(f"Available tools: {[t.name for t in tools.tools]}")

            # Greet
            print("\n=== Reputation daemon appears ===")
            result = await session.call_tool(
                "generate_dialogue",
                {"entity_id": "reputation_badge", "stage": "initial"},
            )
            line = json.loads(result.content[0].text)
            print(f"Daemon: {line['text']}")

            # Engage a few times
            print("\n=== User engages ===")
            for response in ["view", "engage", "click", "share"]:
                result = await session.call_tool(
                    "handle_response",
                    {"entity_id": "reputation_badge", "response": response},
                )
                outcome = json.loads(result.content[0].text)
                print(
                    f"{response}: attachment={outcome['new_attachment']} "
                    f"next={outcome['next_state']}"
                )
                if outcome["follow_up"]:
                    print(f"  Daemon: {outcome['follow_up']['text']}")

            # Recognize and let go
            print("\n=== User sees through it ===")
            for response in ["recognize", "let_go"]:
                result = await session.call_tool(
                    "handle_response",
                    {"entity_id": "reputation_badge", "response": response},
                )
                outcome = json.loads(result.content[0].text)
                print(f"{response}: next={outcome['next_state']}")

            # Session summary
            result = await session.call_tool("get_analytics", {})
            print("\n=== Analytics ===")
            print(result.content[0].text)


if __name__ == "__main__":
    asyncio.run(run_example())
