"""Time and calendar helpers"""

from datetime import date, datetime, timezone

from dateutil.relativedelta import relativedelta


def get_utc_now() -> datetime:
    """
    Returns a naive UTC datetime.
    Matches the DB schema (TIMESTAMP WITHOUT TIME ZONE).
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def add_one_month(value: date) -> date:
    """
    Advance a date by one calendar month.

    The day of month is kept when the next month has it, otherwise the result
    is clamped to that month's last day (2024-01-31 -> 2024-02-29,
    2023-01-31 -> 2023-02-28, 2024-03-31 -> 2024-04-30).
    """
    return value + relativedelta(months=+1)
