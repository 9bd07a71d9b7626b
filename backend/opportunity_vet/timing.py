"""
Timing Utilities for Latency Instrumentation

Context manager for logging execution times of decision-core steps in a
single ``[TIMING]`` format.
"""

import logging
import time
from contextlib import contextmanager
from typing import Optional

logger = logging.getLogger(__name__)


def log_timing(step_name: str, action: str, duration_ms: Optional[float] = None):
    """Log a timing event in standard format."""
    if duration_ms is not None:
        logger.info("[TIMING] %s: %s — duration=%.0fms", step_name, action, duration_ms)
    else:
        logger.info("[TIMING] %s: %s", step_name, action)


@contextmanager
def sync_timer(step_name: str, action: str = "OPERATION"):
    """Synchronous context manager for timing operations."""
    log_timing(step_name, f"{action} START")
    start = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        log_timing(step_name, f"{action} END", duration_ms)
