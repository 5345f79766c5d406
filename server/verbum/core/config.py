import os
from dotenv import load_dotenv

from verbum.core.errors import ConfigurationError

load_dotenv()


class Settings:
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    EMBEDDINGS_URL: str = os.getenv(
        "EMBEDDINGS_URL", "https://api.openai.com/v1/embeddings"
    )
    EMBEDDING_MODEL: str = os.getenv("AI_MODEL_EMBEDDINGS", "text-embedding-3-small")
    # Consumed by the external generation call, not by this package.
    CHAT_MODEL: str = os.getenv("AI_MODEL_CHAT", "gpt-4")
    EMBEDDING_TIMEOUT: float = float(os.getenv("EMBEDDING_TIMEOUT", "60"))

    RAG_TOP_K: int = int(os.getenv("RAG_TOP_K", "5"))
    RAG_MIN_SCORE: float = float(os.getenv("RAG_MIN_SCORE", "0.75"))

    CHROMA_PERSIST_DIR: str = os.getenv("CHROMA_PERSIST_DIR", "./chroma_db")
    COLLECTION_NAME: str = os.getenv("COLLECTION_NAME", "bible_verses")
    VERSE_CORPUS_PATH: str = os.getenv(
        "VERSE_CORPUS_PATH", "./data/sample_verses.json"
    )

    EMBED_BATCH_SIZE: int = int(os.getenv("EMBED_BATCH_SIZE", "10"))
    EMBED_BATCH_DELAY: float = float(os.getenv("EMBED_BATCH_DELAY", "1.0"))

    CONTEXT_RADIUS: int = int(os.getenv("CONTEXT_RADIUS", "2"))
    VERSE_OF_DAY_CACHE_TTL: float = float(os.getenv("VERSE_OF_DAY_CACHE_TTL", "86400"))

    def require(self, *names: str) -> None:
        """Raise ConfigurationError if any of the named settings is empty."""
        missing = [name for name in names if not getattr(self, name, None)]
        if missing:
            raise ConfigurationError(
                "Missing required environment variables",
                details={"missing": missing},
            )


settings = Settings()
