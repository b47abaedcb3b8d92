"""
Header skipping and batching over a line stream
"""

import logging
from typing import AsyncIterable, AsyncIterator, List

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100_000


async def skip_header_lines(lines: AsyncIterable[str], count: int) -> AsyncIterator[str]:
    """
    Drop the first ``count`` lines, then yield the rest

    A stream shorter than ``count`` simply yields nothing.
    """
    if count < 0:
        raise ValueError(f"header skip count must be non-negative, got {count}")

    skipped = 0
    async for line in lines:
        if skipped < count:
            skipped += 1
            continue
        yield line

    if skipped < count:
        logger.info(f"Stream ended after {skipped} of {count} header lines, nothing to load")


async def batch_lines(lines: AsyncIterable[str], size: int = DEFAULT_BATCH_SIZE) -> AsyncIterator[List[str]]:
    """
    Group lines into batches of at most ``size``

    Args:
        lines: Line stream (headers already skipped)
        size: Maximum lines per batch

    Yields:
        Batches in source order. A batch whose every line is blank is dropped.
    """
    if size < 1:
        raise ValueError(f"batch size must be positive, got {size}")

    batch: List[str] = []
    async for line in lines:
        batch.append(line)
        if len(batch) >= size:
            if _has_content(batch):
                yield batch
            batch = []

    if batch and _has_content(batch):
        yield batch


def _has_content(batch: List[str]) -> bool:
    return any(line.strip() for line in batch)
