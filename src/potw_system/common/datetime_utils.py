from __future__ import annotations

from datetime import date, datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def current_week_and_year(today: date | None = None) -> tuple[int, int]:
    """ISO week number and ISO year for the given day (defaults to today)."""
    today = today or now_local().date()
    iso = today.isocalendar()
    return int(iso[1]), int(iso[0])
