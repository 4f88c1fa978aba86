"""
Example: Drive the stdio server with a fastmcp client.

Spawns `python -m minimax_mcp.cli serve` and converts a sentence to speech
using MINIMAX_API_KEY from the environment (or .env).
"""

import asyncio
import os
import sys

from dotenv import load_dotenv
from fastmcp import Client
from fastmcp.client.transports import StdioTransport

from minimax_mcp.logging import configure_logging

load_dotenv()
configure_logging(level=os.getenv("LOG_LEVEL", "WARNING"))


async def main():
    transport = StdioTransport(
        command=sys.executable,
        args=["-m", "minimax_mcp.cli", "serve", "--mode", "stdio"],
        env=dict(os.environ),
    )

    async with Client(transport) as client:
        result = await client.call_tool_mcp(
            "text_to_audio",
            {"text": "Hello from the MiniMax MCP server", "outputDirectory": "minimax-examples"},
        )

    for item in result.content:
        print(item.text)


if __name__ == "__main__":
    asyncio.run(main())
