# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP server.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between MCP and core/.  It:
#     1. Registers one FastMCP tool per descriptor in core/registry.py
#     2. Converts tool parameters into a ToolCallRequest
#     3. Converts the ResultEnvelope back into an MCP result
#     4. Logs every call to stderr
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build Cloudflare URLs or read HTTP responses (core/)
#   - They do NOT decide what counts as an error (core/dispatcher.py)
# =============================================================================
