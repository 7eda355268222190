import pytest

from core.models import ResultEnvelope, ToolCallRequest
from core.registry import KV_TOOLS, get_tool, list_tools


def test_catalog_order_is_fixed() -> None:
    assert [tool["name"] for tool in list_tools()] == ["kv_get", "kv_put", "kv_delete", "kv_list"]


@pytest.mark.parametrize(
    "name, required",
    [
        ("kv_get", ["key"]),
        ("kv_put", ["key", "value"]),
        ("kv_delete", ["key"]),
        ("kv_list", []),
    ],
)
def test_required_arguments(name, required) -> None:
    assert get_tool(name).required == required


def test_optional_arguments_are_declared() -> None:
    assert "expirationTtl" in get_tool("kv_put").input_schema["properties"]
    assert set(get_tool("kv_list").input_schema["properties"]) == {"prefix", "limit"}


def test_discovery_payload_shape() -> None:
    for entry in list_tools():
        assert set(entry) == {"name", "description", "inputSchema"}
        assert entry["inputSchema"]["type"] == "object"
        assert entry["description"]


def test_unknown_tool_lookup() -> None:
    assert get_tool("kv_flush") is None
    assert len(KV_TOOLS) == 4


def test_envelope_carries_exactly_one_text_item() -> None:
    error = ResultEnvelope.error("boom")
    assert error.is_error
    assert error.content == [{"type": "text", "text": "boom"}]

    ok = ResultEnvelope.success("fine")
    assert not ok.is_error
    assert ok.text == "fine"


def test_request_arguments_default_to_empty() -> None:
    assert ToolCallRequest(name="kv_list", arguments=None).arguments == {}
