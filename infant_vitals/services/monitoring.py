"""
Vitals monitor: the composition root of the classification pipeline.

Wires the pieces together for one subject:
1. Decode telemetry frames into the reading store
2. Resolve the age bracket from the birth timestamp
3. Look up the bracket's baseline
4. Classify every vital and fold the statuses into an overall status

Reports are recomputed only when the store sequence or the subject's age in
days changes; otherwise the previous report is returned as is.
"""

from collections.abc import Callable
from datetime import UTC, date, datetime, tzinfo

import structlog

from infant_vitals.config import AppConfig, get_config
from infant_vitals.domain.models import VitalsReport, VitalSign, VitalStatus
from infant_vitals.services.age_resolver import bracket_for_days, elapsed_days
from infant_vitals.services.baselines import BaselineTable, load_baseline_table
from infant_vitals.services.classifier import aggregate, classify_reading
from infant_vitals.services.reading_store import ReadingStore, VitalUpdate
from infant_vitals.services.telemetry_decoder import TelemetryDecoder

logger = structlog.get_logger(__name__)


class VitalsMonitor:
    """Classifies the current reading of one subject against age-appropriate ranges."""

    def __init__(
        self,
        baselines: BaselineTable,
        birth: date | datetime,
        store: ReadingStore | None = None,
        clock: Callable[[], datetime] | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        """
        Args:
            baselines: Reference ranges, shared read-only across monitors.
            birth: Birth timestamp of the subject.
            store: Reading store to classify; a fresh one when omitted.
            clock: Source of "now" for age calculation; wall clock by default.
            tz: Calendar used for counting days of age; local by default.
        """
        self.baselines = baselines
        self.birth = birth
        self.store = store or ReadingStore()
        self.decoder = TelemetryDecoder(self.store)
        self.clock = clock or datetime.now
        self.tz = tz
        self.logger = logger.bind(component="vitals_monitor")

        self._last_report: VitalsReport | None = None

    @classmethod
    def from_config(cls, config: AppConfig | None = None) -> "VitalsMonitor":
        """Build a monitor for the configured subject and baseline table."""
        config = config or get_config()
        monitor = cls(
            baselines=load_baseline_table(config.baselines),
            birth=config.subject.birth_date,
        )
        monitor.logger.info("vitals_monitor_initialized", subject=config.subject.name)
        return monitor

    def feed(self, line: str | bytes) -> list[VitalUpdate]:
        """Hand one raw telemetry line from the transport to the decoder."""
        return self.decoder.feed(line)

    def evaluate(self, now: datetime | None = None) -> VitalsReport:
        """Classify the latest reading snapshot."""
        now = now or self.clock()
        sequence, reading = self.store.read()
        age_days = elapsed_days(self.birth, now, self.tz)

        previous = self._last_report
        if previous and previous.sequence == sequence and previous.age_days == age_days:
            return previous

        bracket = bracket_for_days(age_days)
        baseline = self.baselines.for_bracket(bracket)
        statuses = classify_reading(reading, baseline)

        report = VitalsReport(
            sequence=sequence,
            age_days=age_days,
            bracket=bracket,
            baseline=baseline,
            reading=reading,
            statuses=statuses,
            blood_pressure_status=aggregate(
                [statuses[VitalSign.SYSTOLIC], statuses[VitalSign.DIASTOLIC]]
            ),
            overall_status=aggregate(statuses.values()),
            generated_at=datetime.now(UTC),
        )

        if previous is None or previous.overall_status != report.overall_status:
            self._log_status_change(previous, report)

        self._last_report = report
        return report

    def overall_status(self, now: datetime | None = None) -> VitalStatus:
        return self.evaluate(now).overall_status

    def _log_status_change(self, previous: VitalsReport | None, report: VitalsReport) -> None:
        flagged = {
            vital.value: status.value
            for vital, status in report.statuses.items()
            if status is not VitalStatus.NORMAL
        }
        log = self.logger.warning if report.is_danger else self.logger.info
        log(
            "overall_status_changed",
            previous=previous.overall_status.value if previous else None,
            current=report.overall_status.value,
            bracket=report.bracket.value,
            flagged=flagged,
            sequence=report.sequence,
        )
