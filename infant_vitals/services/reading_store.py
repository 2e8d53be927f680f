"""
Holder of the current vitals reading.

One producer (the telemetry decoder, or the simulation driver in its place)
writes; any number of readers take snapshots. Readings are immutable and the
store swaps them whole under a lock, so a snapshot never mixes fields from two
frames.
"""

import math
import threading
from collections.abc import Iterable

import structlog

from infant_vitals.domain.models import Reading, VitalSign

logger = structlog.get_logger(__name__)

VitalUpdate = tuple[VitalSign, float]


class ReadingStore:
    """Current reading plus a monotonic update sequence."""

    def __init__(self, initial: Reading | None = None) -> None:
        self._reading = initial or Reading()
        self._sequence = 0
        self._lock = threading.Lock()
        self.logger = logger.bind(component="reading_store")

    @property
    def sequence(self) -> int:
        """Number of mutations so far; consumers compare it to detect change."""
        with self._lock:
            return self._sequence

    def apply(self, updates: Iterable[VitalUpdate]) -> int:
        """
        Apply one decoded frame atomically.

        Updates are applied in order, so a vital repeated in the frame keeps
        its last value. An empty frame leaves the store untouched.

        Returns:
            The sequence number after the update.
        """
        values: dict[VitalSign, float] = {}
        for vital, value in updates:
            if not math.isfinite(value):
                raise ValueError(f"non-finite value for {vital.value}: {value}")
            values[vital] = value

        with self._lock:
            if not values:
                return self._sequence
            self._reading = self._reading.with_values(values)
            self._sequence += 1
            return self._sequence

    def set(self, vital: VitalSign, value: float) -> int:
        """Write a single vital directly (simulated or manual input)."""
        return self.apply([(vital, value)])

    def reset(self) -> int:
        """Restore the default reading. The only explicit way to clear a danger state."""
        with self._lock:
            self._reading = Reading()
            self._sequence += 1
            sequence = self._sequence
        self.logger.info("reading_reset", sequence=sequence)
        return sequence

    def snapshot(self) -> Reading:
        """The current reading; frozen, so safe to hand to any number of readers."""
        with self._lock:
            return self._reading

    def read(self) -> tuple[int, Reading]:
        """Sequence and reading taken together."""
        with self._lock:
            return self._sequence, self._reading
