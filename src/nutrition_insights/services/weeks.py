"""Calendar helpers for Sunday-first weeks."""

from datetime import date, timedelta

DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def day_of_week(day: date) -> int:
    """Return 0 for Sunday through 6 for Saturday."""
    return (day.weekday() + 1) % 7


def day_name(index: int) -> str:
    """Return the English name of a Sunday-first weekday index."""
    return DAY_NAMES[index % 7]


def week_start(day: date) -> date:
    """Return the Sunday that starts the week containing ``day``."""
    return day - timedelta(days=day_of_week(day))


def week_start_iso(day: date) -> str:
    """Return the ISO date of the week start for ``day``."""
    return week_start(day).isoformat()


def add_days(iso_date: str, days: int) -> str:
    """Shift an ISO date by a number of days."""
    return (date.fromisoformat(iso_date) + timedelta(days=days)).isoformat()


def week_end(iso_week_start: str) -> str:
    """Return the Saturday closing the week that starts on ``iso_week_start``."""
    return add_days(iso_week_start, 6)


def format_week_range(iso_week_start: str) -> str:
    """Return a short label such as ``Jan 19 - 25`` or ``Jan 26 - Feb 1``."""
    start = date.fromisoformat(iso_week_start)
    end = start + timedelta(days=6)
    if start.month == end.month:
        return f"{start:%b} {start.day} - {end.day}"
    return f"{start:%b} {start.day} - {end:%b} {end.day}"
