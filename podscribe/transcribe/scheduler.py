"""
podscribe.transcribe.scheduler - Bounded-concurrency chunk dispatch.

At most ``max_concurrency`` chunks are in flight at once. Chunks are
submitted in index order but may complete in any order; results and the
completed counter are only touched from the coordinating thread, which
handles one completion at a time.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

from podscribe.exceptions import ConfigError, PodscribeError, TranscriptionError
from podscribe.logging import logger
from podscribe.models import ChunkArtifact, ChunkResult

ProgressCallback = Callable[[int, int], None]

DEFAULT_CONCURRENCY = 3


def run_bounded(
    artifacts: Sequence[ChunkArtifact],
    worker: Callable[[ChunkArtifact], ChunkResult],
    max_concurrency: int = DEFAULT_CONCURRENCY,
    on_progress: ProgressCallback | None = None,
) -> list[ChunkResult]:
    """Run worker over every artifact with bounded concurrency.

    Args:
        artifacts: Chunk artifacts, submitted in the given order
        worker: Callable producing a ChunkResult for one artifact
        max_concurrency: Maximum number of chunks in flight
        on_progress: Called as (completed, total) after each completion

    Returns:
        Results in completion order (callers sort by index)

    Raises:
        ConfigError: If max_concurrency < 1
        TranscriptionError: If any chunk fails; no results are returned
    """
    if max_concurrency < 1:
        raise ConfigError(f"max_concurrency must be at least 1, got {max_concurrency}")

    total = len(artifacts)
    if total == 0:
        return []

    results: dict[int, ChunkResult] = {}
    completed = 0

    executor = ThreadPoolExecutor(
        max_workers=min(max_concurrency, total),
        thread_name_prefix="podscribe-chunk",
    )
    try:
        futures = {executor.submit(worker, artifact): artifact.index for artifact in artifacts}

        for future in as_completed(futures):
            index = futures[future]
            try:
                result = future.result()
            except PodscribeError:
                logger.error("Chunk %d failed", index + 1)
                raise
            except Exception as e:
                logger.error("Chunk %d failed", index + 1)
                raise TranscriptionError(f"Chunk {index + 1} failed: {e}") from e

            results[result.index] = result
            completed += 1
            logger.debug("Completed %d/%d (chunk %d)", completed, total, index + 1)
            if on_progress:
                on_progress(completed, total)
    except BaseException:
        # In-flight requests are abandoned; queued chunks never start.
        executor.shutdown(wait=False, cancel_futures=True)
        raise

    executor.shutdown(wait=True)
    return list(results.values())
