"""
Embedding backfill.

Embeds every verse that has no vector yet, in fixed-size batches. Verses in a
batch are embedded concurrently; batches run one after another with a delay
between them to respect upstream rate limits. A failing verse is counted and
reported, never allowed to abort the run.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from verbum.core.config import settings
from verbum.core.log_config import get_logger
from verbum.models import BackfillReport, Verse
from verbum.services.embeddings import EmbeddingClient
from verbum.services.verse_store import VerseStore

logger = get_logger(__name__)


async def _embed_and_store(
    store: VerseStore, embedder: EmbeddingClient, verse: Verse
) -> Verse:
    embedding = await embedder.embed(verse.text)
    # Store writes may block on disk or network; keep them off the event loop.
    return await asyncio.to_thread(store.save_embedding, verse.id, embedding)


async def backfill_embeddings(
    store: VerseStore,
    embedder: EmbeddingClient,
    batch_size: Optional[int] = None,
    delay: Optional[float] = None,
    stop_event: Optional[asyncio.Event] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> BackfillReport:
    """Embed all verses missing an embedding and report the outcome.

    Args:
        store: Verse store to read pending verses from and write vectors to
        embedder: Embedding client
        batch_size: Verses embedded concurrently per batch
        delay: Seconds to wait between batches
        stop_event: When set, the run stops before starting the next batch
        sleep: Awaitable used for the inter-batch delay

    Returns:
        BackfillReport with success and failure counts
    """
    batch_size = settings.EMBED_BATCH_SIZE if batch_size is None else batch_size
    delay = settings.EMBED_BATCH_DELAY if delay is None else delay
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")

    pending = store.all_verses_missing_embedding()
    report = BackfillReport(total=len(pending))
    if not pending:
        logger.info("All verses already have embeddings")
        return report

    total_batches = (len(pending) + batch_size - 1) // batch_size
    logger.info("Found %d verses to embed in %d batches", len(pending), total_batches)

    for start in range(0, len(pending), batch_size):
        if stop_event is not None and stop_event.is_set():
            logger.info("Backfill stopped after %d batches", report.batches)
            report.stopped_early = True
            break

        batch = pending[start : start + batch_size]
        report.batches += 1
        logger.info(
            "Processing batch %d/%d (verses %d-%d)",
            report.batches,
            total_batches,
            start + 1,
            start + len(batch),
        )

        results = await asyncio.gather(
            *(_embed_and_store(store, embedder, verse) for verse in batch),
            return_exceptions=True,
        )
        for verse, result in zip(batch, results):
            if isinstance(result, BaseException):
                report.failed += 1
                report.failed_ids.append(verse.id)
                logger.error(
                    "Error embedding %s %d:%d: %s",
                    verse.book,
                    verse.chapter,
                    verse.verse,
                    result,
                )
            else:
                report.succeeded += 1

        if start + batch_size < len(pending):
            await sleep(delay)

    logger.info(
        "Backfill complete: %d succeeded, %d failed", report.succeeded, report.failed
    )
    return report
