"""Date helpers for tests that depend on the current day."""

from datetime import date, timedelta


def years_ago(years: int, today: date | None = None) -> date:
    """Latest birth date that makes someone exactly ``years`` old today.

    On February 29th the anniversary does not exist in non-leap years, so
    February 28th is used instead.
    """
    today = today or date.today()
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        return today.replace(year=today.year - years, day=28)


def one_day_after(value: date) -> date:
    return value + timedelta(days=1)
