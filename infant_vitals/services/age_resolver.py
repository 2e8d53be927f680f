"""
Age bracket resolution from a birth timestamp.

Age is counted in whole calendar days between the start of the birth day and
the start of the current day, so a baby born late in the evening turns one day
old at midnight rather than 24 hours later.
"""

from datetime import date, datetime, tzinfo

from infant_vitals.domain.models import AgeBracket

# Inclusive upper bound in days for each bracket, first match wins
BRACKET_UPPER_BOUNDS: tuple[tuple[int, AgeBracket], ...] = (
    (6, AgeBracket.UNDER_1_WEEK),
    (13, AgeBracket.WEEK_2),
    (20, AgeBracket.WEEK_3),
    (27, AgeBracket.WEEK_4),
    (60, AgeBracket.MONTH_2),
    (90, AgeBracket.MONTH_3),
    (180, AgeBracket.MONTH_6),
    (270, AgeBracket.MONTH_9),
)


def _calendar_day(moment: date | datetime, tz: tzinfo | None) -> date:
    if isinstance(moment, datetime):
        if tz is not None:
            moment = moment.astimezone(tz)
        elif moment.tzinfo is not None:
            moment = moment.astimezone()  # local calendar
        return moment.date()
    return moment


def elapsed_days(
    birth: date | datetime, now: datetime | None = None, tz: tzinfo | None = None
) -> int:
    """
    Whole calendar days since birth, never negative.

    Args:
        birth: Birth timestamp or date. Naive datetimes are read as local time.
        now: Reference time; defaults to the wall clock.
        tz: Calendar to count days in; defaults to the local one.
    """
    if now is None:
        now = datetime.now(tz) if tz is not None else datetime.now()
    days = (_calendar_day(now, tz) - _calendar_day(birth, tz)).days
    return max(0, days)


def bracket_for_days(days: int) -> AgeBracket:
    for upper_bound, bracket in BRACKET_UPPER_BOUNDS:
        if days <= upper_bound:
            return bracket
    return AgeBracket.YEAR_1


def resolve_bracket(
    birth: date | datetime, now: datetime | None = None, tz: tzinfo | None = None
) -> AgeBracket:
    """Age bracket for a birth timestamp as of `now`."""
    return bracket_for_days(elapsed_days(birth, now, tz))


def describe_age(days: int) -> str:
    """Short human age: days for the first month, then 30-day months, then years."""
    days = max(0, days)
    if days < 30:
        return f"{days} days"
    months = days // 30
    if months < 12:
        return f"{months} months"
    return f"{months // 12} years"
