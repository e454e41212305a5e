"""FastAPI dependency injection wiring."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache

from codebase_profiler.infrastructure.config import Settings, get_settings
from codebase_profiler.services.analyze_codebase import AnalyzeCodebaseUseCase

logger = logging.getLogger(__name__)

_executor: ThreadPoolExecutor | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _executor  # noqa: PLW0603

    settings = get_settings()
    _executor = ThreadPoolExecutor(
        max_workers=settings.max_workers,
        thread_name_prefix="profiler",
    )
    logger.info("Started analysis pool with %d workers", settings.max_workers)


async def shutdown() -> None:
    """Release shared resources."""
    global _executor  # noqa: PLW0603

    if _executor:
        _executor.shutdown(wait=True)
        _executor = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


def get_use_case() -> AnalyzeCodebaseUseCase:
    """Build the use case around the shared worker pool."""
    settings = _settings()

    assert _executor is not None, "startup() was not called"

    return AnalyzeCodebaseUseCase(
        executor=_executor,
        weights=settings.heuristic_weights(),
        parallel_threshold=settings.parallel_threshold,
        max_files=settings.max_files,
    )
