"""
Script to generate embeddings for every verse that does not have one yet.

Vectors are stored in the ChromaDB collection; rerunning the script only
embeds the verses that are still missing.

Usage:
    python scripts/generate_embeddings.py [path/to/verses.json]

Environment variables required:
    OPENAI_API_KEY
"""

import asyncio
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from verbum.core.config import settings
from verbum.core.errors import ConfigurationError
from verbum.core.log_config import configure_logging
from verbum.services.backfill import backfill_embeddings
from verbum.services.embeddings import EmbeddingClient
from verbum.services.verse_store import ChromaVerseStore, load_corpus


async def generate_embeddings(corpus_path: str) -> int:
    """Run the backfill and return the number of failed verses."""
    print(f"Loading verses from: {corpus_path}")
    verses = load_corpus(corpus_path)
    print(f"Loaded {len(verses)} verses")

    store = ChromaVerseStore.open(verses)
    pending = len(store.all_verses_missing_embedding())
    if pending == 0:
        print("All verses already have embeddings!")
        return 0

    print(f"Model: {settings.EMBEDDING_MODEL}")
    print(f"Embedding {pending} verses (this may take a while)...")
    report = await backfill_embeddings(store, EmbeddingClient())

    print("\nProcessing complete:")
    print(f"   Successfully processed: {report.succeeded}")
    print(f"   Errors: {report.failed}")
    return report.failed


if __name__ == "__main__":
    configure_logging()

    try:
        settings.require("OPENAI_API_KEY")
    except ConfigurationError as e:
        print(f"Error: {e}")
        print("Please set these variables in your .env file")
        sys.exit(1)

    corpus_path = sys.argv[1] if len(sys.argv) > 1 else settings.VERSE_CORPUS_PATH
    if not os.path.exists(corpus_path):
        print(f"Error: File not found: {corpus_path}")
        sys.exit(1)

    failed = asyncio.run(generate_embeddings(corpus_path))
    sys.exit(1 if failed else 0)
