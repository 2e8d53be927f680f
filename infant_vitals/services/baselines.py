"""
Reference ranges per age bracket.

The table is plain configuration data, built once by the composition root
and passed to whoever classifies readings. The built-in ranges are prototype
values, not clinically validated; load a JSON table to replace them.
"""

from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, model_validator

from infant_vitals.config import BaselineConfig
from infant_vitals.domain.models import AgeBracket, Baseline, ReferenceRange

logger = structlog.get_logger(__name__)


def _baseline(
    temp: tuple[float, float],
    hr: tuple[float, float],
    spo2: tuple[float, float],
    sys: tuple[float, float],
    dia: tuple[float, float],
) -> Baseline:
    def rng(bounds: tuple[float, float]) -> ReferenceRange:
        return ReferenceRange(low=bounds[0], high=bounds[1])

    return Baseline(
        temperature_c=rng(temp),
        heart_rate_bpm=rng(hr),
        spo2_percent=rng(spo2),
        systolic_mmhg=rng(sys),
        diastolic_mmhg=rng(dia),
    )


class BaselineTable(BaseModel):
    """Immutable lookup from age bracket to its five reference ranges."""

    model_config = ConfigDict(frozen=True)

    baselines: dict[AgeBracket, Baseline]

    @model_validator(mode="after")
    def covers_every_bracket(self) -> "BaselineTable":
        missing = [bracket.value for bracket in AgeBracket if bracket not in self.baselines]
        if missing:
            raise ValueError(f"baseline table has no entry for: {', '.join(missing)}")
        return self

    def for_bracket(self, bracket: AgeBracket) -> Baseline:
        return self.baselines[bracket]

    @classmethod
    def default(cls) -> "BaselineTable":
        """Prototype ranges; weeks 2-4, months 2-3 and 6 months onward share a baseline."""
        newborn = _baseline(
            temp=(36.5, 38.0), hr=(100, 180), spo2=(95, 100), sys=(60, 80), dia=(30, 50)
        )
        weeks = _baseline(
            temp=(36.5, 38.0), hr=(100, 170), spo2=(95, 100), sys=(65, 85), dia=(35, 55)
        )
        early_months = _baseline(
            temp=(36.5, 38.0), hr=(90, 160), spo2=(95, 100), sys=(70, 95), dia=(40, 60)
        )
        older = _baseline(
            temp=(36.5, 38.0), hr=(80, 150), spo2=(95, 100), sys=(75, 100), dia=(45, 65)
        )
        return cls(
            baselines={
                AgeBracket.UNDER_1_WEEK: newborn,
                AgeBracket.WEEK_2: weeks,
                AgeBracket.WEEK_3: weeks,
                AgeBracket.WEEK_4: weeks,
                AgeBracket.MONTH_2: early_months,
                AgeBracket.MONTH_3: early_months,
                AgeBracket.MONTH_6: older,
                AgeBracket.MONTH_9: older,
                AgeBracket.YEAR_1: older,
            }
        )

    @classmethod
    def from_json_file(cls, path: str | Path) -> "BaselineTable":
        """Load a table shaped like ``{"baselines": {"under_1_week": {...}, ...}}``."""
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))


def load_baseline_table(config: BaselineConfig) -> BaselineTable:
    """Build the table the configuration asks for."""
    if config.table_path is None:
        return BaselineTable.default()

    table = BaselineTable.from_json_file(config.table_path)
    logger.info("baseline_table_loaded", path=config.table_path)
    return table
