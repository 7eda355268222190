import asyncio

import httpx
import pytest

from core.models import KVConfig

NAMESPACE_PATH = "/client/v4/accounts/acc-123/storage/kv/namespaces/ns-456"


class FakeCloudflare:
    """httpx.MockTransport handler that records requests and replays one response."""

    def __init__(self, response=None, exc=None):
        self.response = response if response is not None else httpx.Response(200)
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def run_with_client(fake: FakeCloudflare, fn, *args, **kwargs):
    """Run `await fn(client, *args, **kwargs)` with a client wired to `fake`."""
    async def _go():
        async with httpx.AsyncClient(transport=fake.transport()) as client:
            return await fn(client, *args, **kwargs)

    return asyncio.run(_go())


@pytest.fixture
def config() -> KVConfig:
    return KVConfig(account_id="acc-123", api_token="tok-secret", namespace_id="ns-456")
