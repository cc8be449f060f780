"""Date parsing and calendar-month arithmetic."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def add_months(start: date, months: int) -> date:
    """Advance a date by whole calendar months.

    Day-of-month is kept where possible; overflow clamps to the last day of
    the target month (e.g. Jan 31 + 1 month = Feb 28/29).
    """
    return start + relativedelta(months=months)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative days: "today", "yesterday", "tomorrow"
    - Month starts: "this month", "last month", "next month"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": add_months(today.replace(day=1), -1),
        "next month": add_months(today.replace(day=1), 1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_month_range(period: str) -> tuple[date, date]:
    """Get first and last day of a month relative to today.

    Args:
        period: One of this-month, last-month, next-month

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    first_of_month = date.today().replace(day=1)

    offsets = {"last-month": -1, "this-month": 0, "next-month": 1}
    if period not in offsets:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: last-month, this-month, next-month"
        )

    start_date = add_months(first_of_month, offsets[period])
    # Last day of the month is the day before the next month starts
    end_date = add_months(start_date, 1) - timedelta(days=1)
    return (start_date, end_date)
