"""Per-device miss tracking for cache-miss re-discovery.

Bounds how many discovery cycles repeated lookups of an uncached device id
may trigger. Each id gets a retry budget of `threshold` attempts; a periodic
sweep gives back one unit per record once `cooldown` seconds have passed
since its last miss.

States per record:
- count < threshold: lookups may trigger a re-discovery
- count == threshold: lookups are refused until the sweep decays the count
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class MissRecord:
    """Miss history of one device id."""

    consecutive_miss_count: int = 0
    last_miss_time: float | None = None


class MissTracker:
    """Retry budget for lookups of devices that are not in the cache.

    Usage:
        tracker = MissTracker(threshold=3, cooldown=60)
        if tracker.record_attempt("light.kitchen"):
            ...  # run a discovery cycle
    """

    def __init__(
        self,
        threshold: int,
        cooldown: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize miss tracker.

        Args:
            threshold: Attempts allowed per id before lookups are refused
            cooldown: Seconds after the last miss before the count decays
            clock: Time source in seconds (injectable for tests)
        """
        self.threshold = threshold
        self.cooldown = cooldown
        self._clock = clock
        self._records: dict[str, MissRecord] = {}
        self._lock = threading.Lock()

    def record_attempt(self, device_id: str) -> bool:
        """Ask for permission to re-discover on a miss.

        Args:
            device_id: Device id that was not found in the cache

        Returns:
            True if a re-discovery is allowed (the attempt is counted),
            False if the budget is exhausted (nothing is changed)
        """
        with self._lock:
            record = self._records.setdefault(device_id, MissRecord())
            if record.consecutive_miss_count >= self.threshold:
                logger.info(
                    f"[{device_id}] Lookup refused "
                    f"({record.consecutive_miss_count}/{self.threshold} misses)"
                )
                return False

            record.consecutive_miss_count += 1
            record.last_miss_time = self._clock()
            logger.debug(
                f"[{device_id}] Miss {record.consecutive_miss_count}/{self.threshold}"
            )
            return True

    def sweep(self) -> int:
        """Decay every record whose cooldown has elapsed.

        Returns:
            Number of records that were decremented
        """
        now = self._clock()
        decayed = 0
        with self._lock:
            for device_id, record in self._records.items():
                if record.consecutive_miss_count == 0 or record.last_miss_time is None:
                    continue
                if now - record.last_miss_time > self.cooldown:
                    record.consecutive_miss_count -= 1
                    decayed += 1
                    logger.debug(
                        f"[{device_id}] Miss count decayed to {record.consecutive_miss_count}"
                    )
        return decayed

    async def run_sweeper(self, interval: float) -> None:
        """Call sweep() every `interval` seconds until cancelled."""
        logger.info(f"Miss sweeper started (interval={interval}s, cooldown={self.cooldown}s)")
        try:
            while True:
                await asyncio.sleep(interval)
                self.sweep()
        except asyncio.CancelledError:
            logger.info("Miss sweeper stopped")
            raise

    def get_record(self, device_id: str) -> MissRecord | None:
        """Get a copy of a device's miss record, None if it never missed."""
        with self._lock:
            record = self._records.get(device_id)
            return replace(record) if record else None

    def get_status(self) -> dict[str, Any]:
        """Get tracker status for diagnostics."""
        with self._lock:
            exhausted = [
                device_id
                for device_id, record in self._records.items()
                if record.consecutive_miss_count >= self.threshold
            ]
            return {
                "threshold": self.threshold,
                "cooldown": self.cooldown,
                "tracked_ids": len(self._records),
                "exhausted_ids": exhausted,
            }
