"""
Demo driver that stands in for the sensor transport.

Produces a gentle heartbeat of plausible readings once per tick and can
inject preset scenarios. Ambient ticks are suppressed while the subject is
in DANGER, so a critical reading is never quietly overwritten; only an
explicit scenario or a reset changes it.
"""

import asyncio
import time
from collections.abc import AsyncIterator
from datetime import datetime
from enum import Enum

import structlog

from infant_vitals.config import SimulationConfig
from infant_vitals.domain.models import VitalsReport, VitalSign, VitalStatus
from infant_vitals.services.monitoring import VitalsMonitor
from infant_vitals.services.reading_store import VitalUpdate

logger = structlog.get_logger(__name__)


class Scenario(str, Enum):
    """Preset conditions the demo can inject."""

    ROLLOVER = "rollover"
    HYPOXIA = "hypoxia"
    FEVER = "fever"
    CLEAR = "clear"


SCENARIO_UPDATES: dict[Scenario, list[VitalUpdate]] = {
    Scenario.ROLLOVER: [
        (VitalSign.HEART_RATE, 210.0),
        (VitalSign.SPO2, 82.0),
        (VitalSign.SYSTOLIC, 55.0),
        (VitalSign.DIASTOLIC, 28.0),
    ],
    Scenario.HYPOXIA: [(VitalSign.SPO2, 78.0), (VitalSign.HEART_RATE, 170.0)],
    Scenario.FEVER: [(VitalSign.TEMPERATURE, 39.6), (VitalSign.HEART_RATE, 165.0)],
}


def heartbeat_updates(tick: int) -> list[VitalUpdate]:
    """Small periodic wobble around the default reading."""
    return [
        (VitalSign.TEMPERATURE, 36.6 + (tick % 6) * 0.05),
        (VitalSign.HEART_RATE, 128 + ((tick % 8) - 4) * 1.5),
        (VitalSign.SPO2, 98 + ((tick % 6) - 3) * 0.3),
        (VitalSign.SYSTOLIC, 72.0 + ((tick % 4) - 2)),
        (VitalSign.DIASTOLIC, 44.0 + ((tick % 4) - 2)),
    ]


class SimulationDriver:
    """Single writer for the monitor's store while no real sensor is attached."""

    def __init__(self, monitor: VitalsMonitor, config: SimulationConfig | None = None) -> None:
        self.monitor = monitor
        self.config = config or SimulationConfig()
        self.ticks = 0
        self.suppressed_ticks = 0
        self.logger = logger.bind(component="simulation_driver")
        self._is_running = False

    def tick(self, now: datetime | None = None) -> bool:
        """
        Advance one heartbeat.

        Returns:
            True if the store was updated, False if the tick was suppressed
            because the current overall status is DANGER.
        """
        self.ticks += 1
        if self.monitor.overall_status(now) is VitalStatus.DANGER:
            self.suppressed_ticks += 1
            self.logger.info("ambient_update_suppressed", tick=self.ticks)
            return False

        self.monitor.store.apply(heartbeat_updates(self.ticks))
        return True

    def apply_scenario(self, scenario: Scenario) -> int:
        """Inject a preset condition. Explicit actions are never suppressed."""
        if scenario is Scenario.CLEAR:
            sequence = self.monitor.store.reset()
        else:
            sequence = self.monitor.store.apply(SCENARIO_UPDATES[scenario])
        self.logger.info("scenario_applied", scenario=scenario.value, sequence=sequence)
        return sequence

    async def run(self, max_ticks: int | None = None) -> AsyncIterator[VitalsReport]:
        """
        Tick continuously, yielding a fresh report after every tick.

        Stops after `max_ticks` ticks, or when `stop()` is called.
        """
        interval = self.config.tick_interval_seconds
        self.logger.info("simulation_started", interval_seconds=interval)
        self._is_running = True
        emitted = 0

        try:
            while self._is_running and (max_ticks is None or emitted < max_ticks):
                tick_start = time.perf_counter()

                self.tick()
                yield self.monitor.evaluate()
                emitted += 1

                elapsed = time.perf_counter() - tick_start
                sleep_time = max(0.0, interval - elapsed)
                if sleep_time > 0:
                    await asyncio.sleep(sleep_time)
        finally:
            self._is_running = False
            self.logger.info(
                "simulation_stopped", ticks=self.ticks, suppressed=self.suppressed_ticks
            )

    def stop(self) -> None:
        self._is_running = False
