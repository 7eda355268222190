# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that
# flows between the MCP layer and the Cloudflare KV REST API.  They carry
# almost no behavior: just enough helpers to build and serialize themselves.
#
# THE FLOW, IN NOUNS:
#   ToolCallRequest  →  (dispatcher)  →  one HTTP call  →  ResultEnvelope
#
#   KVConfig and ToolDescriptor are created once and never change.
#   ToolCallRequest and ResultEnvelope live for exactly one tool call.
#   KVKey is a provider-side record we read and mostly throw away.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional

DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4"

# Environment variable names, paired with the KVConfig field they fill.
REQUIRED_SETTINGS = (
    ("account_id", "CLOUDFLARE_ACCOUNT_ID"),
    ("api_token", "CLOUDFLARE_API_TOKEN"),
    ("namespace_id", "CLOUDFLARE_KV_NAMESPACE_ID"),
)


# -----------------------------------------------------------------------------
# KVConfig — where the namespace lives and how to authenticate
# -----------------------------------------------------------------------------
# Read once at startup (core/config.py) and then passed by reference to the
# server, the dispatcher and every adapter.  Frozen: nothing may change it
# for the lifetime of the process.
#
# The three identifiers are Optional.  The server is allowed to
# start without them; each tool call then reports "not configured" instead
# of sending a request with "None" baked into the URL.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class KVConfig:
    """Connection settings for one Cloudflare KV namespace."""

    account_id: Optional[str] = None
    api_token: Optional[str] = None
    namespace_id: Optional[str] = None
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout: Optional[float] = None    # None = wait forever

    def missing(self) -> list[str]:
        """Names of the required environment variables that are unset."""
        return [env for attr, env in REQUIRED_SETTINGS if not getattr(self, attr)]

    @property
    def namespace_url(self) -> str:
        return (
            f"{self.api_base_url}/accounts/{self.account_id}"
            f"/storage/kv/namespaces/{self.namespace_id}"
        )


# -----------------------------------------------------------------------------
# ToolDescriptor — one entry in the discovery catalog
# -----------------------------------------------------------------------------
# The agent reads the description to decide WHEN to call a tool and the
# input schema to decide WHAT to pass.  Four static instances live in
# core/registry.py.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDescriptor:
    """Name, human description and JSON-Schema-like input shape of a tool."""

    name: str
    description: str
    input_schema: dict[str, Any]

    @property
    def required(self) -> list[str]:
        return list(self.input_schema.get("required", []))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass
class ToolCallRequest:
    """A single inbound invocation: which tool, with which arguments."""

    name: str
    arguments: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.arguments is None:
            self.arguments = {}


# -----------------------------------------------------------------------------
# ResultEnvelope — the ONE response shape for every call
# -----------------------------------------------------------------------------
# Success or failure, the caller always gets a single text item plus an
# isError flag.  There is no structured error code: the text IS the error.
# Use the success()/error() constructors so an envelope can never carry
# both a payload and an error, or zero content items.
# -----------------------------------------------------------------------------
@dataclass
class ResultEnvelope:
    content: list[dict[str, str]]
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> "ResultEnvelope":
        return cls(content=[{"type": "text", "text": text}], is_error=False)

    @classmethod
    def error(cls, text: str) -> "ResultEnvelope":
        return cls(content=[{"type": "text", "text": text}], is_error=True)

    @property
    def text(self) -> str:
        return self.content[0]["text"]


# -----------------------------------------------------------------------------
# KVKey — one key record from Cloudflare's list endpoint
# -----------------------------------------------------------------------------
# Cloudflare returns {name, expiration?, metadata?} per key.  Only `name`
# reaches the agent (Context Budget Discipline: a list of names is what it
# needs to decide which key to read next).
# -----------------------------------------------------------------------------
@dataclass
class KVKey:
    name: str
    expiration: Optional[int] = None   # Unix timestamp, if the key expires
    metadata: Any = None               # Opaque; never interpreted here

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "KVKey":
        return cls(
            name=item["name"],
            expiration=item.get("expiration"),
            metadata=item.get("metadata"),
        )
