"""
Tests for the simulation driver.

Covers:
- Heartbeat values and their classification
- Suppression of ambient ticks while the overall status is DANGER
- Scenarios as explicit actions, including reset
- The async tick loop
"""

from datetime import datetime, timedelta

import pytest

from infant_vitals.config import SimulationConfig
from infant_vitals.domain.models import Reading, VitalsReport, VitalSign, VitalStatus
from infant_vitals.services.baselines import BaselineTable
from infant_vitals.services.monitoring import VitalsMonitor
from infant_vitals.services.simulation import Scenario, SimulationDriver, heartbeat_updates


@pytest.fixture
def monitor() -> VitalsMonitor:
    return VitalsMonitor(
        baselines=BaselineTable.default(),
        birth=datetime.now() - timedelta(days=20),
    )


@pytest.fixture
def driver(monitor: VitalsMonitor) -> SimulationDriver:
    return SimulationDriver(monitor, SimulationConfig(tick_interval_seconds=0.01))


class TestHeartbeat:
    def test_heartbeat_covers_every_vital(self) -> None:
        assert {vital for vital, _ in heartbeat_updates(1)} == set(VitalSign)

    def test_heartbeat_values(self) -> None:
        values = dict(heartbeat_updates(5))

        assert values[VitalSign.TEMPERATURE] == pytest.approx(36.85)
        assert values[VitalSign.HEART_RATE] == pytest.approx(129.5)
        assert values[VitalSign.SPO2] == pytest.approx(98.6)
        assert values[VitalSign.SYSTOLIC] == 71.0
        assert values[VitalSign.DIASTOLIC] == 43.0

    @pytest.mark.parametrize("tick", range(1, 25))
    def test_heartbeat_never_reaches_danger(self, monitor: VitalsMonitor, tick: int) -> None:
        monitor.store.apply(heartbeat_updates(tick))

        assert monitor.overall_status() is not VitalStatus.DANGER


class TestSuppression:
    def test_tick_updates_store(self, driver: SimulationDriver, monitor: VitalsMonitor) -> None:
        assert driver.tick() is True
        assert monitor.store.sequence == 1

    @pytest.mark.parametrize("scenario", [Scenario.ROLLOVER, Scenario.HYPOXIA, Scenario.FEVER])
    def test_tick_suppressed_in_danger(
        self, driver: SimulationDriver, monitor: VitalsMonitor, scenario: Scenario
    ) -> None:
        driver.apply_scenario(scenario)
        assert monitor.overall_status() is VitalStatus.DANGER
        sequence, reading = monitor.store.read()

        assert driver.tick() is False
        assert driver.tick() is False

        assert monitor.store.read() == (sequence, reading)
        assert driver.suppressed_ticks == 2
        assert monitor.overall_status() is VitalStatus.DANGER

    def test_clear_resumes_ticks(self, driver: SimulationDriver, monitor: VitalsMonitor) -> None:
        driver.apply_scenario(Scenario.ROLLOVER)
        assert driver.tick() is False

        driver.apply_scenario(Scenario.CLEAR)

        assert monitor.store.snapshot() == Reading()
        assert driver.tick() is True

    def test_scenarios_apply_while_in_danger(
        self, driver: SimulationDriver, monitor: VitalsMonitor
    ) -> None:
        driver.apply_scenario(Scenario.HYPOXIA)
        driver.apply_scenario(Scenario.FEVER)

        reading = monitor.store.snapshot()
        assert reading.temperature_c == 39.6
        assert reading.heart_rate_bpm == 165.0
        assert reading.spo2_percent == 78.0


class TestRun:
    @pytest.mark.asyncio
    async def test_run_yields_one_report_per_tick(self, driver: SimulationDriver) -> None:
        reports: list[VitalsReport] = []

        async for report in driver.run(max_ticks=3):
            reports.append(report)

        assert len(reports) == 3
        assert [r.sequence for r in reports] == [1, 2, 3]
        assert driver.ticks == 3

    @pytest.mark.asyncio
    async def test_run_keeps_danger_until_cleared(self, driver: SimulationDriver) -> None:
        driver.apply_scenario(Scenario.ROLLOVER)

        statuses = [report.overall_status async for report in driver.run(max_ticks=3)]

        assert statuses == [VitalStatus.DANGER] * 3
        assert driver.suppressed_ticks == 3

    @pytest.mark.asyncio
    async def test_stop_ends_the_loop(self, driver: SimulationDriver) -> None:
        count = 0
        async for _ in driver.run():
            count += 1
            if count == 2:
                driver.stop()

        assert count == 2
