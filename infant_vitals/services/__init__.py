"""
Core services for the application.

This package contains the telemetry decoder, age resolution, baseline lookup,
classification, the reading store and the monitor that ties them together.
"""

from .age_resolver import bracket_for_days, describe_age, elapsed_days, resolve_bracket
from .baselines import BaselineTable, load_baseline_table
from .classifier import aggregate, classify, classify_reading
from .monitoring import VitalsMonitor
from .reading_store import ReadingStore
from .simulation import Scenario, SimulationDriver
from .telemetry_decoder import TelemetryDecoder, decode_frame

__all__ = [
    "BaselineTable",
    "ReadingStore",
    "Scenario",
    "SimulationDriver",
    "TelemetryDecoder",
    "VitalsMonitor",
    "aggregate",
    "bracket_for_days",
    "classify",
    "classify_reading",
    "decode_frame",
    "describe_age",
    "elapsed_days",
    "load_baseline_table",
    "resolve_bracket",
]
