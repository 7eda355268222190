# =============================================================================
# core/config.py  —  Config Resolver
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the process environment into a KVConfig.  That's it.
#
# REQUIRED SETTINGS (no defaults):
#   CLOUDFLARE_ACCOUNT_ID       — the account that owns the namespace
#   CLOUDFLARE_API_TOKEN        — API token with Workers KV read/write rights
#   CLOUDFLARE_KV_NAMESPACE_ID  — the namespace to operate on
#
# OPTIONAL SETTINGS:
#   CLOUDFLARE_API_BASE_URL     — override the API root (mock servers, proxies)
#   CLOUDFLARE_KV_TIMEOUT       — per-request timeout in seconds (unset = none)
#
# PRESENCE IS NOT ENFORCED HERE:
#   A missing setting does not stop the server from starting.  The dispatcher
#   checks KVConfig.missing() on every call and answers with a "not
#   configured" error envelope instead.  That way an agent can still discover
#   the tools and gets an actionable message when it tries to use them.
#
# .env FILES:
#   main.py calls load_dotenv() BEFORE this module reads anything, so values
#   from a local .env show up here as ordinary environment variables.
# =============================================================================

import os
from typing import Mapping, Optional

from core.models import DEFAULT_API_BASE_URL, KVConfig


class ConfigError(ValueError):
    """An optional setting is present but cannot be parsed."""


def _read(environ: Mapping[str, str], name: str) -> Optional[str]:
    # Empty strings count as unset: `export CLOUDFLARE_API_TOKEN=` is a
    # common way to "clear" a variable.
    value = environ.get(name, "").strip()
    return value or None


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"CLOUDFLARE_KV_TIMEOUT must be a number of seconds, got {raw!r}")


def load_config(environ: Optional[Mapping[str, str]] = None) -> KVConfig:
    """Build a KVConfig from environment variables.

    Args:
        environ: Mapping to read from.  Defaults to os.environ; tests pass a
                 plain dict so they never depend on the real environment.

    Returns:
        A frozen KVConfig.  Required fields may be None.

    Raises:
        ConfigError: CLOUDFLARE_KV_TIMEOUT is set but not a number.
    """
    if environ is None:
        environ = os.environ

    base_url = _read(environ, "CLOUDFLARE_API_BASE_URL") or DEFAULT_API_BASE_URL

    return KVConfig(
        account_id=_read(environ, "CLOUDFLARE_ACCOUNT_ID"),
        api_token=_read(environ, "CLOUDFLARE_API_TOKEN"),
        namespace_id=_read(environ, "CLOUDFLARE_KV_NAMESPACE_ID"),
        api_base_url=base_url.rstrip("/"),
        timeout=_parse_timeout(_read(environ, "CLOUDFLARE_KV_TIMEOUT")),
    )
