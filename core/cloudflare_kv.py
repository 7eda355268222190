# =============================================================================
# core/cloudflare_kv.py  —  HTTP Adapters for the Cloudflare KV REST API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   One async function per KV operation.  Each one:
#     1. Builds the Cloudflare URL for the namespace in KVConfig
#     2. Issues EXACTLY ONE HTTP request (no retries, no batching)
#     3. Maps the HTTP outcome into a ResultEnvelope
#
# URL TEMPLATE:
#   {api_base_url}/accounts/{account_id}/storage/kv/namespaces/{namespace_id}
#       /values/{key}          GET / PUT / DELETE
#       /keys?prefix=&limit=   GET
#
# ERROR POLICY:
#   - Non-2xx response  →  error envelope with the HTTP reason phrase
#                          ("Failed to get value: Not Found").
#   - list only: a 2xx body with "success": false  →  error envelope with
#     the provider's error messages joined by ", ".
#   - Anything else (connection refused, DNS, invalid JSON) is NOT caught
#     here.  It propagates to core/dispatcher.py, which owns the catch-all.
#
# WHY PASS THE httpx CLIENT IN?
#   The caller owns the client's lifetime (one per tool call in the MCP
#   layer) and tests hand in a client built on httpx.MockTransport, so
#   nothing in this module ever needs patching.
# =============================================================================

import json
import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from core.models import KVConfig, KVKey, ResultEnvelope

logger = logging.getLogger(__name__)


def _headers(config: KVConfig, content_type: Optional[str] = None) -> dict[str, str]:
    headers = {"Authorization": f"Bearer {config.api_token}"}
    if content_type:
        headers["Content-Type"] = content_type
    return headers


def _value_url(config: KVConfig, key: str) -> str:
    # A key is one path segment: "a/b" must reach Cloudflare as "a%2Fb".
    return f"{config.namespace_url}/values/{quote(key, safe='')}"


def _format_errors(errors: list[Any]) -> str:
    # Cloudflare sends [{"code": 10013, "message": "..."}]; older or proxied
    # responses may send plain strings.
    parts = []
    for err in errors or []:
        if isinstance(err, dict):
            parts.append(str(err.get("message", err)))
        else:
            parts.append(str(err))
    return ", ".join(parts)


async def get_value(client: httpx.AsyncClient, config: KVConfig, key: str) -> ResultEnvelope:
    """Read the raw value stored under `key`."""
    url = _value_url(config, key)
    logger.debug("GET %s", url)
    response = await client.get(url, headers=_headers(config))

    if not response.is_success:
        return ResultEnvelope.error(f"Failed to get value: {response.reason_phrase}")

    return ResultEnvelope.success(response.text)


async def put_value(
    client: httpx.AsyncClient,
    config: KVConfig,
    key: str,
    value: str,
    expiration_ttl: Optional[int] = None,
) -> ResultEnvelope:
    """Store `value` under `key`, overwriting any previous value.

    Args:
        client: Open httpx client.
        config: Namespace and credentials.
        key: Key to write.
        value: Sent verbatim as a text/plain body.
        expiration_ttl: Seconds until the key expires.  Sent as the
            `expiration_ttl` query parameter, which is where Cloudflare
            reads it.  Omitted when None or 0.
    """
    url = _value_url(config, key)
    params = {}
    if expiration_ttl:
        params["expiration_ttl"] = str(int(expiration_ttl))

    logger.debug("PUT %s params=%s", url, params)
    response = await client.put(
        url,
        params=params,
        content=value.encode("utf-8"),
        headers=_headers(config, content_type="text/plain"),
    )

    if not response.is_success:
        return ResultEnvelope.error(f"Failed to put value: {response.reason_phrase}")

    return ResultEnvelope.success(f"Successfully stored value for key: {key}")


async def delete_key(client: httpx.AsyncClient, config: KVConfig, key: str) -> ResultEnvelope:
    url = _value_url(config, key)
    logger.debug("DELETE %s", url)
    response = await client.delete(url, headers=_headers(config))

    if not response.is_success:
        return ResultEnvelope.error(f"Failed to delete key: {response.reason_phrase}")

    return ResultEnvelope.success(f"Successfully deleted key: {key}")


async def list_keys(
    client: httpx.AsyncClient,
    config: KVConfig,
    prefix: Optional[str] = None,
    limit: Optional[int] = None,
) -> ResultEnvelope:
    """List key names in the namespace, optionally filtered by prefix.

    Only one page is fetched.  Cloudflare's `cursor` for the next page is
    ignored, and so are each key's expiration and metadata: the agent gets
    a pretty-printed JSON array of names.
    """
    # Parameters are sent only when given; never as empty values.
    params = {}
    if prefix:
        params["prefix"] = prefix
    if limit:
        params["limit"] = str(int(limit))  # JSON numbers may arrive as 10.0

    url = f"{config.namespace_url}/keys"
    logger.debug("GET %s params=%s", url, params)
    response = await client.get(url, params=params, headers=_headers(config))

    if not response.is_success:
        return ResultEnvelope.error(f"Failed to list keys: {response.reason_phrase}")

    data = response.json()
    if not data.get("success"):
        return ResultEnvelope.error(f"Failed to list keys: {_format_errors(data.get('errors'))}")

    keys = [KVKey.from_api(item) for item in data.get("result") or []]
    names = [k.name for k in keys]
    return ResultEnvelope.success(json.dumps(names, indent=2, ensure_ascii=False))
