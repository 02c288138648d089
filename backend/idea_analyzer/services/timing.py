"""
Timing Utilities for Latency Instrumentation

Context managers for logging how long each stage of an idea analysis
takes (keyword resolution, catalog fan-out, scoring).
"""

import logging
import time
from contextlib import asynccontextmanager, contextmanager
from typing import Optional

logger = logging.getLogger(__name__)


def log_timing(stage: str, action: str, duration_ms: Optional[float] = None):
    """Log a timing event in standard format."""
    if duration_ms is not None:
        logger.info("[TIMING] %s: %s — duration=%.0fms", stage, action, duration_ms)
    else:
        logger.info("[TIMING] %s: %s", stage, action)


class StepTimer:
    """
    Times the named steps of one analysis.

    Usage:
        timer = StepTimer("analyze")
        with timer.step("keywords"):
            resolve()
        async with timer.async_step("aggregate"):
            await fetch()
        timer.summary()
    """

    def __init__(self, stage: str):
        self.stage = stage
        self.steps: dict[str, float] = {}
        self.start_time = time.perf_counter()

    @contextmanager
    def step(self, step_name: str):
        """Time a single step."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self._record(step_name, start)

    @asynccontextmanager
    async def async_step(self, step_name: str):
        """Time a single async step."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self._record(step_name, start)

    def _record(self, step_name: str, start: float):
        duration_ms = (time.perf_counter() - start) * 1000
        self.steps[step_name] = duration_ms
        log_timing(self.stage, step_name, duration_ms)

    def summary(self) -> float:
        """Log and return the total elapsed time."""
        total_ms = (time.perf_counter() - self.start_time) * 1000
        log_timing(self.stage, "TOTAL", total_ms)
        return total_ms
