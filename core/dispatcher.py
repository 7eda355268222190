# =============================================================================
# core/dispatcher.py  —  Request Dispatcher
# =============================================================================
#
# ONE STEP PER CALL, NO STATE:
#   1. Unknown tool name           →  "Unknown tool: {name}"
#   2. Required argument missing   →  "Invalid arguments for {name}: ..."
#   3. Server not configured       →  "Cloudflare KV is not configured: ..."
#   4. Otherwise                   →  call the adapter, return its envelope
#
#   Any exception raised in steps 2-4 (network errors, a bad JSON body, an
#   argument of the wrong type) becomes "Error: {message}".  Nothing leaves
#   this function except a ResultEnvelope.
#
# THE DISPATCH TABLE:
#   _HANDLERS maps each tool name to a small function that unpacks the
#   arguments dict into the adapter's keyword arguments.  Its keys are
#   exactly the names in core/registry.KV_TOOLS.
# =============================================================================

import logging
from typing import Any, Awaitable, Callable

import httpx

from core import cloudflare_kv
from core.models import KVConfig, ResultEnvelope, ToolCallRequest
from core.registry import get_tool

logger = logging.getLogger(__name__)

Handler = Callable[[httpx.AsyncClient, KVConfig, dict[str, Any]], Awaitable[ResultEnvelope]]


def _kv_get(client, config, args):
    return cloudflare_kv.get_value(client, config, args["key"])


def _kv_put(client, config, args):
    return cloudflare_kv.put_value(
        client, config, args["key"], args["value"],
        expiration_ttl=args.get("expirationTtl"),
    )


def _kv_delete(client, config, args):
    return cloudflare_kv.delete_key(client, config, args["key"])


def _kv_list(client, config, args):
    return cloudflare_kv.list_keys(
        client, config, prefix=args.get("prefix"), limit=args.get("limit"),
    )


_HANDLERS: dict[str, Handler] = {
    "kv_get": _kv_get,
    "kv_put": _kv_put,
    "kv_delete": _kv_delete,
    "kv_list": _kv_list,
}


def _missing_arguments(required: list[str], arguments: dict[str, Any]) -> list[str]:
    return [name for name in required if arguments.get(name) is None]


async def dispatch(
    request: ToolCallRequest,
    config: KVConfig,
    client: httpx.AsyncClient,
) -> ResultEnvelope:
    """Route one tool call to its adapter and always return an envelope."""
    tool = get_tool(request.name)
    handler = _HANDLERS.get(request.name)
    if tool is None or handler is None:
        return ResultEnvelope.error(f"Unknown tool: {request.name}")

    try:
        missing = _missing_arguments(tool.required, request.arguments)
        if missing:
            return ResultEnvelope.error(
                f"Invalid arguments for {tool.name}: "
                f"missing required argument(s): {', '.join(missing)}"
            )

        unset = config.missing()
        if unset:
            return ResultEnvelope.error(
                f"Cloudflare KV is not configured: missing {', '.join(unset)}"
            )

        return await handler(client, config, request.arguments)
    except Exception as exc:
        logger.exception("Tool %s failed", request.name)
        # Some httpx errors (timeouts) carry an empty message.
        return ResultEnvelope.error(f"Error: {str(exc) or type(exc).__name__}")
