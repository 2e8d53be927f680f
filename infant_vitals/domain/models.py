"""
Domain models for infant vitals monitoring.

These models represent the core concepts and are framework-agnostic.
They use Pydantic for validation but could be swapped to dataclasses if needed.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class VitalSign(str, Enum):
    """The five vitals reported by the sensor."""

    TEMPERATURE = "temperature"
    HEART_RATE = "heart_rate"
    SPO2 = "spo2"
    SYSTOLIC = "systolic"
    DIASTOLIC = "diastolic"

    @property
    def reading_field(self) -> str:
        """Name of the matching attribute on `Reading`."""
        return _READING_FIELDS[self]


_READING_FIELDS: dict[VitalSign, str] = {
    VitalSign.TEMPERATURE: "temperature_c",
    VitalSign.HEART_RATE: "heart_rate_bpm",
    VitalSign.SPO2: "spo2_percent",
    VitalSign.SYSTOLIC: "systolic_mmhg",
    VitalSign.DIASTOLIC: "diastolic_mmhg",
}


class VitalStatus(str, Enum):
    """Classification of a vital, ordered NORMAL < WARNING < DANGER."""

    NORMAL = "normal"
    WARNING = "warning"
    DANGER = "danger"

    @property
    def rank(self) -> int:
        return _STATUS_RANKS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VitalStatus):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, VitalStatus):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, VitalStatus):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, VitalStatus):
            return NotImplemented
        return self.rank >= other.rank


_STATUS_RANKS: dict[VitalStatus, int] = {
    VitalStatus.NORMAL: 0,
    VitalStatus.WARNING: 1,
    VitalStatus.DANGER: 2,
}


class AgeBracket(str, Enum):
    """Age groups used to pick reference ranges, youngest first."""

    UNDER_1_WEEK = "under_1_week"
    WEEK_2 = "week_2"
    WEEK_3 = "week_3"
    WEEK_4 = "week_4"
    MONTH_2 = "month_2"
    MONTH_3 = "month_3"
    MONTH_6 = "month_6"
    MONTH_9 = "month_9"
    YEAR_1 = "year_1"

    @property
    def ordinal(self) -> int:
        return _BRACKET_ORDINALS[self]

    @property
    def label(self) -> str:
        return _BRACKET_LABELS[self]

    # str comparison would order by value text, not by age
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, AgeBracket):
            return NotImplemented
        return self.ordinal < other.ordinal

    def __le__(self, other: object) -> bool:
        if not isinstance(other, AgeBracket):
            return NotImplemented
        return self.ordinal <= other.ordinal

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, AgeBracket):
            return NotImplemented
        return self.ordinal > other.ordinal

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, AgeBracket):
            return NotImplemented
        return self.ordinal >= other.ordinal


_BRACKET_ORDINALS: dict[AgeBracket, int] = {
    bracket: index for index, bracket in enumerate(AgeBracket)
}


_BRACKET_LABELS: dict[AgeBracket, str] = {
    AgeBracket.UNDER_1_WEEK: "Less than 1 week",
    AgeBracket.WEEK_2: "2 weeks",
    AgeBracket.WEEK_3: "3 weeks",
    AgeBracket.WEEK_4: "4 weeks",
    AgeBracket.MONTH_2: "2 months",
    AgeBracket.MONTH_3: "3 months",
    AgeBracket.MONTH_6: "6 months",
    AgeBracket.MONTH_9: "9 months",
    AgeBracket.YEAR_1: "1 year",
}


class ReferenceRange(BaseModel):
    """Closed interval [low, high] of typical values for one vital."""

    model_config = ConfigDict(frozen=True)

    low: float = Field(allow_inf_nan=False)
    high: float = Field(allow_inf_nan=False)

    @model_validator(mode="after")
    def low_not_above_high(self) -> "ReferenceRange":
        if self.low > self.high:
            raise ValueError(f"range low {self.low} is above high {self.high}")
        return self

    def label(self, decimals: int = 0) -> str:
        return f"{self.low:.{decimals}f}–{self.high:.{decimals}f}"


class Baseline(BaseModel):
    """Reference ranges for all five vitals in one age bracket."""

    model_config = ConfigDict(frozen=True)

    temperature_c: ReferenceRange
    heart_rate_bpm: ReferenceRange
    spo2_percent: ReferenceRange
    systolic_mmhg: ReferenceRange
    diastolic_mmhg: ReferenceRange

    def range_for(self, vital: VitalSign) -> ReferenceRange:
        range_: ReferenceRange = getattr(self, vital.reading_field)
        return range_


class Reading(BaseModel):
    """Current value of every vital. Immutable; the store swaps whole readings."""

    model_config = ConfigDict(frozen=True)  # Snapshots must never change under a reader

    temperature_c: float = Field(default=36.8, allow_inf_nan=False)
    heart_rate_bpm: float = Field(default=130.0, allow_inf_nan=False)
    spo2_percent: float = Field(default=98.0, allow_inf_nan=False)
    systolic_mmhg: float = Field(default=72.0, allow_inf_nan=False)
    diastolic_mmhg: float = Field(default=44.0, allow_inf_nan=False)

    def value_for(self, vital: VitalSign) -> float:
        value: float = getattr(self, vital.reading_field)
        return value

    def with_values(self, values: Mapping[VitalSign, float]) -> "Reading":
        """Return a validated copy with the given vitals replaced."""
        merged = self.model_dump()
        merged.update({vital.reading_field: value for vital, value in values.items()})
        return Reading.model_validate(merged)


class VitalsReport(BaseModel):
    """Classification of one reading snapshot against its age baseline."""

    model_config = ConfigDict(frozen=True)

    sequence: int = Field(ge=0, description="Store sequence the snapshot was taken at")
    age_days: int = Field(ge=0)
    bracket: AgeBracket
    baseline: Baseline
    reading: Reading
    statuses: dict[VitalSign, VitalStatus]
    blood_pressure_status: VitalStatus = Field(
        description="Worst of the systolic and diastolic statuses"
    )
    overall_status: VitalStatus
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_danger(self) -> bool:
        return self.overall_status is VitalStatus.DANGER
