# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (all four KV tools)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Wires the core/ layer to MCP.  Each tool below is a thin wrapper that:
#     1. Logs the incoming call
#     2. Packs its parameters into a ToolCallRequest
#     3. Opens an httpx client and hands everything to core.dispatcher
#     4. Turns the ResultEnvelope into an MCP result:
#          success  →  the envelope text is returned as the tool output
#          error    →  ToolError(text), which FastMCP reports with isError
#
# HOW IT WORKS (the flow):
#   agent ──tools/call──▶ FastMCP ──▶ kv_put(...) ──▶ dispatch() ──▶ Cloudflare
#   agent ◀──result────── FastMCP ◀── text / ToolError ◀── ResultEnvelope
#
# TOOL NAMES & SCHEMAS:
#   Names and descriptions come from core/registry.py.  Parameter names
#   are the wire names the agent sends (expirationTtl, not expiration_ttl),
#   because FastMCP derives each tool's input schema from the signature.
#
# RUNNING THIS SERVER:
#   Normally started through main.py (which also loads .env):
#     python main.py
#   or, with the same .env loading and exit codes:
#     python -m tools.mcp_server
# =============================================================================

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import Annotated, Any, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from core.config import load_config
from core.dispatcher import dispatch
from core.models import KVConfig, ResultEnvelope, ToolCallRequest, ToolDescriptor
from core.registry import KV_DELETE_TOOL, KV_GET_TOOL, KV_LIST_TOOL, KV_PUT_TOOL, list_tools

SERVER_NAME = "mcp-server/cloudflare-kv"

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because stdout IS the MCP transport.  A single stray line
# on stdout corrupts the JSON-RPC stream and the client drops the server.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for successful responses
#     - YELLOW for status messages and error responses
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (success text)
_YELLOW = "\033[33m"   # Status/errors
_RESET = "\033[0m"     # Reset to default terminal color

_MAX_LOGGED_CHARS = 80

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _shorten(value: Any) -> Any:
    # Stored values can be large; the log only needs a glimpse.
    if isinstance(value, str) and len(value) > _MAX_LOGGED_CHARS:
        return value[:_MAX_LOGGED_CHARS] + f"... ({len(value)} chars)"
    return value


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={_shorten(v)!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, envelope: ResultEnvelope) -> ResultEnvelope:
    """Log the envelope (GREEN on success, YELLOW on error), then return it."""
    color = _YELLOW if envelope.is_error else _GREEN
    payload = json.dumps(
        {"isError": envelope.is_error, "text": _shorten(envelope.text)},
        separators=(",", ":"),
        ensure_ascii=False,
    )
    logging.info(f"{color}  ← {tool_name} response: {payload}{_RESET}")
    return envelope



def _describe(tool: ToolDescriptor, param: str) -> str:
    """Parameter description as declared in the tool's catalog schema."""
    return tool.input_schema["properties"][param]["description"]


@asynccontextmanager
async def _announce_ready(server: FastMCP):
    # Runs once the transport is up, so the line never shows for a failed start.
    logging.info("Cloudflare KV MCP Server running on stdio")
    yield {}


# =============================================================================
# Server factory
# =============================================================================
# The config is passed in rather than read at import time, so one process
# (or one test) can build servers for different namespaces.  `transport` is
# handed to every httpx client the tools open; tests use it to plug in an
# httpx.MockTransport instead of the network.
#
# Every parameter carries Field(description=...) taken from core/registry.py,
# so the schema an agent discovers says the same thing as the catalog.
# =============================================================================
def build_server(
    config: KVConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    lifespan=None,
) -> FastMCP:
    """Create a FastMCP server exposing kv_get, kv_put, kv_delete and kv_list."""
    mcp = FastMCP(SERVER_NAME, lifespan=lifespan)

    async def _call(tool_name: str, **params) -> str:
        _log_request(tool_name, **params)

        # Optional parameters the agent left out arrive here as None; the
        # dispatcher expects them to be absent.
        arguments = {k: v for k, v in params.items() if v is not None}
        request = ToolCallRequest(name=tool_name, arguments=arguments)

        async with httpx.AsyncClient(timeout=config.timeout, transport=transport) as client:
            envelope = await dispatch(request, config, client)

        _log_response(tool_name, envelope)
        if envelope.is_error:
            raise ToolError(envelope.text)
        return envelope.text

    # -------------------------------------------------------------------------
    # TOOL 1: kv_get — read a value
    # -------------------------------------------------------------------------
    @mcp.tool(name=KV_GET_TOOL.name, description=KV_GET_TOOL.description)
    async def kv_get(
        key: Annotated[str, Field(description=_describe(KV_GET_TOOL, "key"))],
    ) -> str:
        return await _call(KV_GET_TOOL.name, key=key)

    # -------------------------------------------------------------------------
    # TOOL 2: kv_put — write a value (overwrites)
    # -------------------------------------------------------------------------
    # expirationTtl is a float because the catalog declares it as a JSON
    # "number"; the adapter sends it to Cloudflare as whole seconds.
    # -------------------------------------------------------------------------
    @mcp.tool(name=KV_PUT_TOOL.name, description=KV_PUT_TOOL.description)
    async def kv_put(
        key: Annotated[str, Field(description=_describe(KV_PUT_TOOL, "key"))],
        value: Annotated[str, Field(description=_describe(KV_PUT_TOOL, "value"))],
        expirationTtl: Annotated[
            Optional[float], Field(description=_describe(KV_PUT_TOOL, "expirationTtl"))
        ] = None,
    ) -> str:
        return await _call(KV_PUT_TOOL.name, key=key, value=value, expirationTtl=expirationTtl)

    # -------------------------------------------------------------------------
    # TOOL 3: kv_delete — remove a key
    # -------------------------------------------------------------------------
    @mcp.tool(name=KV_DELETE_TOOL.name, description=KV_DELETE_TOOL.description)
    async def kv_delete(
        key: Annotated[str, Field(description=_describe(KV_DELETE_TOOL, "key"))],
    ) -> str:
        return await _call(KV_DELETE_TOOL.name, key=key)

    # -------------------------------------------------------------------------
    # TOOL 4: kv_list — list key names (single page)
    # -------------------------------------------------------------------------
    @mcp.tool(name=KV_LIST_TOOL.name, description=KV_LIST_TOOL.description)
    async def kv_list(
        prefix: Annotated[Optional[str], Field(description=_describe(KV_LIST_TOOL, "prefix"))] = None,
        limit: Annotated[Optional[float], Field(description=_describe(KV_LIST_TOOL, "limit"))] = None,
    ) -> str:
        return await _call(KV_LIST_TOOL.name, prefix=prefix, limit=limit)

    return mcp


def run_server(config: Optional[KVConfig] = None) -> None:
    """Build the server and serve MCP over stdio until the client disconnects.

    A missing credential is NOT fatal here: the tools stay discoverable and
    every call answers with a "not configured" error until it is fixed.
    """
    if config is None:
        config = load_config()

    missing = config.missing()
    if missing:
        _log_status(f"Missing configuration: {', '.join(missing)}. "
                    f"Tool calls will fail until these are set.")

    _log_status(f"Serving tools: {', '.join(tool['name'] for tool in list_tools())}")
    mcp = build_server(config, lifespan=_announce_ready)
    mcp.run()


# =============================================================================
# Server entry point
# =============================================================================
# Delegates to main.py so .env loading and the exit-1 path apply here too.
# =============================================================================
if __name__ == "__main__":
    import main

    main.main()
