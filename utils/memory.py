"""
Memory usage reporting for the CLI, based on ``tracemalloc``.
"""

from __future__ import annotations

import logging
import tracemalloc

logger = logging.getLogger(__name__)

_MIB = 1024 * 1024


def start_memory_tracking() -> None:
    if not tracemalloc.is_tracing():
        tracemalloc.start()


def log_memory_usage(stage: str) -> None:
    """Log current and peak traced memory in MiB."""
    if not tracemalloc.is_tracing():
        logger.debug("Memory tracking is off, nothing to report for %s", stage)
        return
    current, peak = tracemalloc.get_traced_memory()
    logger.info(
        "[%s] Alloc = %.1f MiB, Peak = %.1f MiB",
        stage,
        current / _MIB,
        peak / _MIB,
    )
