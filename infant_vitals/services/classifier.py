"""
Range classification and status aggregation.

A value outside its reference range is DANGER. Inside the range, a band of
10% of the range width at either edge is WARNING, and the rest is NORMAL.
For narrow ranges the two bands can overlap; the checks below are kept in
their literal order so edge values resolve the same way every time.
"""

import math
from collections.abc import Iterable

from infant_vitals.domain.models import Baseline, Reading, ReferenceRange, VitalSign, VitalStatus

MIN_RANGE_WIDTH = 1e-4
WARNING_BAND_FRACTION = 0.10


def classify(reference: ReferenceRange, value: float) -> VitalStatus:
    """Status of `value` against the closed range [low, high].

    NaN compares false against both bounds, so it is DANGER explicitly.
    """
    low, high = reference.low, reference.high
    if math.isnan(value) or value < low or value > high:
        return VitalStatus.DANGER

    width = max(MIN_RANGE_WIDTH, high - low)
    band = width * WARNING_BAND_FRACTION
    if value < low + band or value > high - band:
        return VitalStatus.WARNING

    return VitalStatus.NORMAL


def aggregate(statuses: Iterable[VitalStatus]) -> VitalStatus:
    """Worst status of the collection; NORMAL when it is empty."""
    return max(statuses, default=VitalStatus.NORMAL)


def classify_reading(reading: Reading, baseline: Baseline) -> dict[VitalSign, VitalStatus]:
    """Classify every vital of one snapshot against its range."""
    statuses: dict[VitalSign, VitalStatus] = {}
    for vital in VitalSign:
        statuses[vital] = classify(baseline.range_for(vital), reading.value_for(vital))
    return statuses
