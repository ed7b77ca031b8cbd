"""Shared stdio session helper for the Todoist MCP scripts.

Spawns server.py as a child process with the current environment and
hands back an initialized ClientSession.
"""
import asyncio
import os
import sys
from contextlib import asynccontextmanager

from mcp.client.session import ClientSession
from mcp.client.stdio import StdioServerParameters, stdio_client

SERVER_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "server.py")


def require_token() -> str:
    token = os.environ.get("TODOIST_API_TOKEN")
    if not token:
        print("Missing TODOIST_API_TOKEN in environment.", file=sys.stderr)
        sys.exit(1)
    return token


@asynccontextmanager
async def open_session(token: str, quiet: bool = True):
    env = {**os.environ, "TODOIST_API_TOKEN": token}
    if quiet:
        env.setdefault("TODOIST_MCP_LOG_LEVEL", "WARNING")
    params = StdioServerParameters(command=sys.executable, args=[SERVER_PATH], env=env)
    async with stdio_client(params) as (read_stream, write_stream):
        async with ClientSession(read_stream, write_stream) as session:
            await session.initialize()
            yield session


async def call(session: ClientSession, name: str, arguments: dict, timeout: float):
    """Call a tool and return the text of its first content block."""
    result = await asyncio.wait_for(session.call_tool(name, arguments), timeout)
    texts = [c.text for c in result.content if getattr(c, "type", None) == "text"]
    return texts[0] if texts else ""
