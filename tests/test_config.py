import pytest

from core.config import ConfigError, load_config
from core.models import DEFAULT_API_BASE_URL


FULL_ENV = {
    "CLOUDFLARE_ACCOUNT_ID": "acc-123",
    "CLOUDFLARE_API_TOKEN": "tok-secret",
    "CLOUDFLARE_KV_NAMESPACE_ID": "ns-456",
}


def test_load_config_reads_the_three_settings() -> None:
    config = load_config(FULL_ENV)

    assert config.account_id == "acc-123"
    assert config.api_token == "tok-secret"
    assert config.namespace_id == "ns-456"
    assert config.api_base_url == DEFAULT_API_BASE_URL
    assert config.timeout is None
    assert config.missing() == []


def test_load_config_tolerates_missing_settings() -> None:
    config = load_config({"CLOUDFLARE_ACCOUNT_ID": "acc-123"})

    assert config.api_token is None
    assert config.missing() == ["CLOUDFLARE_API_TOKEN", "CLOUDFLARE_KV_NAMESPACE_ID"]


def test_empty_values_count_as_missing() -> None:
    config = load_config({**FULL_ENV, "CLOUDFLARE_API_TOKEN": "  "})

    assert config.missing() == ["CLOUDFLARE_API_TOKEN"]


def test_optional_overrides() -> None:
    env = {
        **FULL_ENV,
        "CLOUDFLARE_API_BASE_URL": "http://localhost:8787/client/v4/",
        "CLOUDFLARE_KV_TIMEOUT": "2.5",
    }
    config = load_config(env)

    assert config.api_base_url == "http://localhost:8787/client/v4"
    assert config.timeout == 2.5
    assert config.namespace_url == (
        "http://localhost:8787/client/v4/accounts/acc-123/storage/kv/namespaces/ns-456"
    )


def test_invalid_timeout_raises() -> None:
    with pytest.raises(ConfigError):
        load_config({**FULL_ENV, "CLOUDFLARE_KV_TIMEOUT": "soon"})


def test_load_config_defaults_to_process_environment(monkeypatch) -> None:
    for name, value in FULL_ENV.items():
        monkeypatch.setenv(name, value)

    assert load_config().missing() == []


def test_config_is_immutable(config) -> None:
    with pytest.raises(AttributeError):
        config.api_token = "other"
