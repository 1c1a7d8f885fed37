"""
Consul MCP server over stdio.

Every registered tool becomes a FastMCP tool whose input schema comes from the
tool registry and whose calls go through ``tools.call_tool``.

Run:
  python server.py            (or the ``consul-mcp-gateway`` script)

Logs go to stderr; stdout carries the MCP protocol.
"""
from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools.tool import Tool, ToolResult
from mcp.types import TextContent
from pydantic import Field

from core.config import Settings, load_settings
from core.consul_api import ConsulAPI
from tools import call_tool, list_tools
from tools.base import WRITE_TAG

log = logging.getLogger("consul_mcp")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


class ConsulTool(Tool):
    consul: Any = Field(default=None, exclude=True)

    async def run(self, arguments: Dict[str, Any]) -> ToolResult:
        result = await asyncio.to_thread(call_tool, self.consul, self.name, arguments)
        if result.is_error:
            raise ToolError(result.text)
        return ToolResult(content=[TextContent(type="text", text=result.text)])


class HideWriteTools(Middleware):
    """Keep write tools out of tools/list; they stay callable by name."""

    async def on_list_tools(self, context: MiddlewareContext, call_next):
        tools = await call_next(context)
        return [t for t in tools if WRITE_TAG not in t.tags]


def build_mcp(consul: Optional[Any] = None, settings: Optional[Settings] = None) -> FastMCP:
    settings = settings or load_settings()
    if consul is None:
        consul = ConsulAPI.from_settings(settings)

    mcp = FastMCP(name=settings.service_name)
    for spec in list_tools(expose_writes=True):
        mcp.add_tool(
            ConsulTool(
                name=spec.name.value,
                description=spec.description,
                parameters=spec.input_schema(),
                tags=set(spec.tags),
                consul=consul,
            )
        )
    if not settings.expose_writes:
        mcp.add_middleware(HideWriteTools())
    return mcp


def log_connection(consul) -> None:
    try:
        log.info("Consul leader: %s", consul.status_leader())
    except Exception as e:
        log.error("Error connecting to Consul: %s", e)


def main() -> None:
    load_dotenv()
    settings = load_settings()
    configure_logging(settings.log_level)

    consul = ConsulAPI.from_settings(settings)
    log_connection(consul)

    build_mcp(consul, settings).run()


if __name__ == "__main__":
    main()
