"""
Decoder for the sensor's key-value telemetry line.

Wire format: ``KEY:value[,KEY:value...]`` with case-insensitive keys, e.g.
``TEMP:36.9,HR:132,SPO2:98,BPSYS:72,BPDIA:44``. A frame never fails as a
whole: malformed pairs, non-numeric values and unknown keys are skipped one
by one so newer firmware can add fields without breaking older readers.
"""

import math
import re

import structlog

from infant_vitals.domain.models import VitalSign
from infant_vitals.domain.result import Result
from infant_vitals.services.reading_store import ReadingStore, VitalUpdate

logger = structlog.get_logger(__name__)

WIRE_KEYS: dict[str, VitalSign] = {
    "TEMP": VitalSign.TEMPERATURE,
    "HR": VitalSign.HEART_RATE,
    "SPO2": VitalSign.SPO2,
    "BPSYS": VitalSign.SYSTOLIC,
    "BPDIA": VitalSign.DIASTOLIC,
}

# Plain decimal notation only: no nan/inf, hex or underscore digit groups
_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class TelemetryPairError(ValueError):
    """A single key-value pair that cannot be used."""

    def __init__(self, pair: str, reason: str) -> None:
        super().__init__(f"{reason}: {pair!r}")
        self.pair = pair
        self.reason = reason


def parse_value(text: str) -> float | None:
    """Parse a finite decimal number, or return None."""
    if not _DECIMAL.fullmatch(text):
        return None
    value = float(text)
    # Overflowing exponents such as 1e999 parse to inf
    return value if math.isfinite(value) else None


def parse_pair(pair: str) -> Result[VitalUpdate, TelemetryPairError]:
    """Parse one ``KEY:value`` pair into a vital update."""
    key, sep, raw_value = pair.partition(":")
    key, raw_value = key.strip(), raw_value.strip()
    if not sep or not key or not raw_value:
        return Result.err(TelemetryPairError(pair, "malformed_pair"))

    vital = WIRE_KEYS.get(key.upper())
    if vital is None:
        return Result.err(TelemetryPairError(pair, "unknown_key"))

    value = parse_value(raw_value)
    if value is None:
        return Result.err(TelemetryPairError(pair, "unparsable_value"))

    return Result.ok((vital, value))


def decode_frame(line: str) -> list[VitalUpdate]:
    """
    Decode a telemetry line into updates, in the order they appear.

    Never raises for bad content; unusable pairs are logged and dropped.
    """
    updates: list[VitalUpdate] = []
    stripped = line.strip()
    if not stripped:
        return updates

    for pair in stripped.split(","):
        result = parse_pair(pair)
        if result.is_ok():
            updates.append(result.unwrap())
        else:
            error = result.unwrap_err()
            logger.debug("telemetry_pair_skipped", pair=error.pair, reason=error.reason)

    return updates


class TelemetryDecoder:
    """Feeds decoded frames from the transport into a reading store."""

    def __init__(self, store: ReadingStore) -> None:
        self.store = store
        self.logger = logger.bind(component="telemetry_decoder")
        self.frames_received = 0

    def feed(self, line: str | bytes) -> list[VitalUpdate]:
        """
        Decode one line and apply it to the store as a single frame.

        Args:
            line: Raw line from the transport; bytes are decoded as UTF-8.

        Returns:
            The updates that were applied (possibly empty).
        """
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")

        self.frames_received += 1
        updates = decode_frame(line)
        if updates:
            sequence = self.store.apply(updates)
            self.logger.debug("frame_decoded", fields=len(updates), sequence=sequence)
        else:
            self.logger.debug("frame_ignored", frame=line.strip()[:80])
        return updates
