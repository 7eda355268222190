# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL of the logic for talking to Cloudflare KV.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any other MCP machinery.
#   core/ speaks two languages only: plain Python dataclasses (models.py)
#   and HTTP via httpx (cloudflare_kv.py).  The MCP layer in tools/ is just
#   the wiring; this is the engine.
#
# MODULES:
#   models.py         — KVConfig, ToolDescriptor, ToolCallRequest,
#                       ResultEnvelope, KVKey
#   config.py         — environment → KVConfig
#   registry.py       — the four tool descriptors
#   cloudflare_kv.py  — one HTTP adapter per operation
#   dispatcher.py     — tool name → adapter, plus the catch-all error envelope
# =============================================================================
