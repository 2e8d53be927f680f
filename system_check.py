"""
Complete system check exercising the full vitals pipeline.

This script checks:
1. Configuration loading and validation
2. Telemetry decoding into the reading store
3. Classification against the age baseline
4. Simulated scenarios and ambient-update suppression

Run with: uv run python system_check.py
"""

import asyncio
from datetime import datetime, timedelta

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from infant_vitals.config import (
    SimulationConfig,
    configure_logging,
    get_config,
    print_config_summary,
    validate_config,
)
from infant_vitals.domain.models import VitalsReport, VitalSign, VitalStatus
from infant_vitals.services.age_resolver import describe_age
from infant_vitals.services.baselines import BaselineTable
from infant_vitals.services.monitoring import VitalsMonitor
from infant_vitals.services.simulation import Scenario, SimulationDriver

console = Console()

STATUS_STYLES = {
    VitalStatus.NORMAL: "green",
    VitalStatus.WARNING: "yellow",
    VitalStatus.DANGER: "red",
}

SAMPLE_FRAMES = [
    "TEMP:36.9,HR:132,SPO2:98,BPSYS:72,BPDIA:44",
    "hr:171, spo2:96",
    "TEMP:abc,FOO:1,BPSYS:90",
]


def _report_table(report: VitalsReport, title: str) -> Table:
    table = Table(title=title)
    table.add_column("Vital", style="cyan")
    table.add_column("Value", style="white")
    table.add_column("Typical range", style="magenta")
    table.add_column("Status")

    for vital in VitalSign:
        reference = report.baseline.range_for(vital)
        decimals = 1 if vital is VitalSign.TEMPERATURE else 0
        status = report.statuses[vital]
        table.add_row(
            vital.value,
            f"{report.reading.value_for(vital):.1f}",
            reference.label(decimals),
            f"[{STATUS_STYLES[status]}]{status.value.upper()}[/]",
        )
    return table


def _new_monitor(age_days: int = 20) -> VitalsMonitor:
    return VitalsMonitor(
        baselines=BaselineTable.default(),
        birth=datetime.now() - timedelta(days=age_days),
    )


async def check_configuration() -> bool:
    """Check configuration loading and validation."""
    console.print(Panel("Checking Configuration", style="blue"))

    try:
        validate_config()
        configure_logging(get_config().logging)
        print_config_summary()
        console.print("Configuration loaded successfully", style="green")
        return True
    except Exception as e:
        console.print(f"Configuration check failed: {e}", style="red")
        return False


async def check_decoding() -> bool:
    """Check that frames reach the store and bad pairs are skipped."""
    console.print(Panel("Checking Telemetry Decoding", style="blue"))

    try:
        monitor = _new_monitor()
        for frame in SAMPLE_FRAMES:
            updates = monitor.feed(frame)
            console.print(f"{frame!r} -> {len(updates)} field(s) applied")

        report = monitor.evaluate()
        console.print(
            f"Age: {describe_age(report.age_days)} ({report.bracket.label})", style="cyan"
        )
        console.print(_report_table(report, "Decoded Reading"))
        return report.sequence == len(SAMPLE_FRAMES)
    except Exception as e:
        console.print(f"Decoding check failed: {e}", style="red")
        return False


async def check_scenarios() -> bool:
    """Check scenario injection and suppression of ambient ticks in DANGER."""
    console.print(Panel("Checking Scenarios", style="blue"))

    try:
        monitor = _new_monitor()
        driver = SimulationDriver(monitor, SimulationConfig(tick_interval_seconds=0.05))

        driver.apply_scenario(Scenario.HYPOXIA)
        report = monitor.evaluate()
        console.print(_report_table(report, "After Hypoxia"))

        sequence_before = monitor.store.sequence
        updated = driver.tick()
        if updated or monitor.store.sequence != sequence_before:
            console.print("Ambient tick was not suppressed in DANGER", style="red")
            return False
        console.print("Ambient tick suppressed while in DANGER", style="green")

        driver.apply_scenario(Scenario.CLEAR)
        async for tick_report in driver.run(max_ticks=3):
            style = STATUS_STYLES[tick_report.overall_status]
            console.print(
                f"tick seq={tick_report.sequence} overall={tick_report.overall_status.value}",
                style=style,
            )
        return monitor.overall_status() is not VitalStatus.DANGER
    except Exception as e:
        console.print(f"Scenario check failed: {e}", style="red")
        return False


async def run_all_checks() -> None:
    """Run all system checks."""

    console.print(Panel("Infant Vitals Monitor - System Checks", style="bold blue"))

    checks = [
        ("Configuration", check_configuration),
        ("Telemetry Decoding", check_decoding),
        ("Scenarios", check_scenarios),
    ]

    results = []

    for check_name, check_func in checks:
        console.print(f"\n{'=' * 60}")
        try:
            result = await check_func()
            results.append((check_name, result))
        except KeyboardInterrupt:
            console.print("\nChecks interrupted by user", style="yellow")
            break

    console.print(f"\n{'=' * 60}")
    summary_table = Table(title="Check Results Summary")
    summary_table.add_column("Check", style="cyan")
    summary_table.add_column("Result", style="white")

    passed = 0
    for check_name, result in results:
        if result:
            summary_table.add_row(check_name, "PASSED")
            passed += 1
        else:
            summary_table.add_row(check_name, "FAILED")

    console.print(summary_table)
    console.print(f"\nResults: {passed}/{len(results)} checks passed")


if __name__ == "__main__":
    try:
        asyncio.run(run_all_checks())
    except KeyboardInterrupt:
        console.print("\nChecks stopped by user", style="yellow")
