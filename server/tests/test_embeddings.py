import json

import httpx
import pytest

from verbum.core.errors import EmbeddingServiceError
from verbum.services.embeddings import EmbeddingClient


def _client(handler) -> EmbeddingClient:
    return EmbeddingClient(
        api_key="test-key",
        model="text-embedding-3-small",
        url="https://embeddings.test/v1/embeddings",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_embed_posts_input_and_model():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers["Authorization"]
        return httpx.Response(200, json={"data": [{"embedding": [0.1, 0.2, 0.3]}]})

    vector = await _client(handler).embed("El Señor es mi pastor")

    assert vector == [0.1, 0.2, 0.3]
    assert seen["body"] == {
        "input": "El Señor es mi pastor",
        "model": "text-embedding-3-small",
    }
    assert seen["auth"] == "Bearer test-key"


@pytest.mark.asyncio
async def test_embed_is_repeatable_for_same_text():
    def handler(request: httpx.Request) -> httpx.Response:
        text = json.loads(request.content)["input"]
        return httpx.Response(200, json={"data": [{"embedding": [float(len(text))]}]})

    client = _client(handler)

    assert await client.embed("paz") == await client.embed("paz")


@pytest.mark.asyncio
async def test_non_success_status_raises_with_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, text="rate limit exceeded")

    with pytest.raises(EmbeddingServiceError) as exc_info:
        await _client(handler).embed("paz")

    assert exc_info.value.status_code == 429
    assert exc_info.value.body == "rate limit exceeded"
    assert "rate limit exceeded" in str(exc_info.value)


@pytest.mark.asyncio
async def test_transport_error_raises_embedding_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(EmbeddingServiceError):
        await _client(handler).embed("paz")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [{}, {"data": []}, {"data": [{"vector": [1.0]}]}],
)
async def test_malformed_payload_raises(payload):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    with pytest.raises(EmbeddingServiceError, match="Malformed"):
        await _client(handler).embed("paz")
