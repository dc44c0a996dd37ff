"""
Unit tests for the HTTP embedding provider.

Tests for:
- Request shape (method, URL, headers, body)
- Response parsing
- Error mapping to ProviderError / DeserializationError
- End-to-end store behavior over a mocked transport
"""

import json

import httpx
import pytest

from wordvec.core.exceptions import DeserializationError, ProviderError
from wordvec.providers.http_provider import HttpEmbeddingProvider
from wordvec.store import VectorStore


ENDPOINT = "http://embed.test/"


def make_provider(handler, **kwargs) -> HttpEmbeddingProvider:
    return HttpEmbeddingProvider(ENDPOINT, transport=httpx.MockTransport(handler), **kwargs)


class TestHttpEmbeddingProviderRequests:
    """Tests for request construction and parsing."""

    def test_initialization(self):
        provider = HttpEmbeddingProvider(ENDPOINT, timeout_seconds=5.0)

        assert provider.endpoint == ENDPOINT
        assert provider.timeout_seconds == 5.0
        assert provider.batch_url == "http://embed.test/list"

    @pytest.mark.asyncio
    async def test_embed_word(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": [0.5, 1, -2.25]})

        vector = await make_provider(handler).embed_word("car")

        assert vector == [0.5, 1.0, -2.25]
        assert seen[0].method == "GET"
        assert seen[0].url.path == "/"
        assert seen[0].url.params["word"] == "car"
        assert seen[0].headers["accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_embed_word_encodes_query(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": [0.0]})

        await make_provider(handler).embed_word("ice cream&more")

        assert seen[0].url.params["word"] == "ice cream&more"

    @pytest.mark.asyncio
    async def test_embed_batch(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": [[1.0, 2.0], [3.0, 4.0]]})

        vectors = await make_provider(handler).embed_batch(["car", "bus"])

        assert vectors == [[1.0, 2.0], [3.0, 4.0]]
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "http://embed.test/list"
        assert json.loads(request.content) == ["car", "bus"]
        assert request.headers["content-type"] == "application/json"
        assert request.headers["accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_embed_batch_empty_makes_no_request(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        assert await make_provider(handler).embed_batch([]) == []


class TestHttpEmbeddingProviderErrors:
    """Tests for error mapping."""

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="overloaded")

        with pytest.raises(ProviderError) as exc_info:
            await make_provider(handler).embed_word("car")

        assert exc_info.value.status_code == 503
        assert exc_info.value.endpoint == ENDPOINT
        assert "overloaded" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ProviderError, match="Failed to reach") as exc_info:
            await make_provider(handler).embed_batch(["car"])

        assert exc_info.value.status_code is None
        assert exc_info.value.endpoint == "http://embed.test/list"

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>nope</html>")

        with pytest.raises(DeserializationError, match="Invalid JSON"):
            await make_provider(handler).embed_word("car")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"data": None},
            {"data": "1,2,3"},
            {"data": [1.0, "2"]},
            {"data": [1.0, True]},
            {"data": [10 ** 400, 2.0]},
            [1.0, 2.0],
        ],
    )
    async def test_malformed_word_body(self, body):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=body)

        with pytest.raises(DeserializationError):
            await make_provider(handler).embed_word("car")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"data": None},
            {"data": [1.0, 2.0]},
            {"data": [[1.0], ["x"]]},
        ],
    )
    async def test_malformed_batch_body(self, body):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=body)

        with pytest.raises(DeserializationError):
            await make_provider(handler).embed_batch(["a", "b"])


class TestVectorStoreOverHttp:
    """VectorStore driven through the HTTP provider."""

    @pytest.mark.asyncio
    async def test_similar_words_over_http(self, color_vectors):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "POST":
                words = json.loads(request.content)
                return httpx.Response(200, json={"data": [color_vectors[w] for w in words]})
            return httpx.Response(200, json={"data": color_vectors[request.url.params["word"]]})

        store = VectorStore.create(ENDPOINT, 3, provider=make_provider(handler))

        await store.insert_text("car\nred\nbus\nfrog")

        assert await store.similar_words("color", 2) == ["red", "car"]

    @pytest.mark.asyncio
    async def test_short_batch_response_commits_nothing(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": [[1.0, 0.0]]})

        store = VectorStore.create(ENDPOINT, 2, provider=make_provider(handler))

        with pytest.raises(DeserializationError):
            await store.insert_text("car\nbus")

        assert store.list_words() == []
