from typing import List, Optional

import httpx

from verbum.core.config import settings
from verbum.core.errors import EmbeddingServiceError
from verbum.core.log_config import get_logger

logger = get_logger(__name__)


class EmbeddingClient:
    """Text-to-vector client for an OpenAI-compatible embeddings endpoint.

    Used both for offline corpus backfill and online query encoding. The call
    is idempotent for identical text, so callers may retry it; this client
    does not retry on its own.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self.model = model or settings.EMBEDDING_MODEL
        self.url = url or settings.EMBEDDINGS_URL
        self.timeout = timeout if timeout is not None else settings.EMBEDDING_TIMEOUT
        self._transport = transport

    async def embed(self, text: str) -> List[float]:
        """Embed `text`, raising EmbeddingServiceError on any upstream failure."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {"input": text, "model": self.model}

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.url, json=payload, headers=headers, timeout=self.timeout
                )
        except httpx.HTTPError as e:
            raise EmbeddingServiceError(
                f"Embedding request failed: {e}", details={"model": self.model}
            ) from e

        if not response.is_success:
            logger.error(
                "Embedding provider returned %s: %s", response.status_code, response.text
            )
            raise EmbeddingServiceError(
                "Embedding provider returned an error",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
            embedding = data["data"][0]["embedding"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise EmbeddingServiceError(
                "Malformed embedding response",
                status_code=response.status_code,
                body=response.text,
            ) from e

        return [float(x) for x in embedding]
