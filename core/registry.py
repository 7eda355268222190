# =============================================================================
# core/registry.py  —  Tool Registry (the discovery catalog)
# =============================================================================
#
# Four static tool descriptors, in a fixed order.  The MCP layer registers
# one FastMCP tool per descriptor, using the name and description below,
# and the dispatcher uses the `required` list for its presence check.
#
# NOTE ON VALIDATION:
#   The schemas are declarations for the agent.  Apart from "are the required
#   arguments there?", nothing here enforces types; a bad value travels on
#   to Cloudflare, which rejects it with a normal error envelope.
# =============================================================================

from typing import Optional

from core.models import ToolDescriptor


KV_GET_TOOL = ToolDescriptor(
    name="kv_get",
    description="Get a value from Cloudflare KV store",
    input_schema={
        "type": "object",
        "properties": {
            "key": {"type": "string", "description": "The key to retrieve"},
        },
        "required": ["key"],
    },
)

KV_PUT_TOOL = ToolDescriptor(
    name="kv_put",
    description="Put a value into Cloudflare KV store",
    input_schema={
        "type": "object",
        "properties": {
            "key": {"type": "string", "description": "The key to store"},
            "value": {"type": "string", "description": "The value to store"},
            "expirationTtl": {
                "type": "number",
                "description": "Optional expiration time in seconds",
            },
        },
        "required": ["key", "value"],
    },
)

KV_DELETE_TOOL = ToolDescriptor(
    name="kv_delete",
    description="Delete a key from Cloudflare KV store",
    input_schema={
        "type": "object",
        "properties": {
            "key": {"type": "string", "description": "The key to delete"},
        },
        "required": ["key"],
    },
)

KV_LIST_TOOL = ToolDescriptor(
    name="kv_list",
    description="List keys in Cloudflare KV store",
    input_schema={
        "type": "object",
        "properties": {
            "prefix": {"type": "string", "description": "Optional prefix to filter keys"},
            "limit": {"type": "number", "description": "Maximum number of keys to return"},
        },
    },
)

KV_TOOLS: tuple[ToolDescriptor, ...] = (
    KV_GET_TOOL,
    KV_PUT_TOOL,
    KV_DELETE_TOOL,
    KV_LIST_TOOL,
)

_BY_NAME = {tool.name: tool for tool in KV_TOOLS}


def list_tools() -> list[dict]:
    """Return the discovery payload, one dict per tool, in catalog order."""
    return [tool.to_dict() for tool in KV_TOOLS]


def get_tool(name: str) -> Optional[ToolDescriptor]:
    return _BY_NAME.get(name)
