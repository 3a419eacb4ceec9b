"""Calendar helpers for recurring charges."""

import calendar
from datetime import date, timedelta

from subwatch.models.recurring import Frequency


def add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the target month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def calculate_next_expected(last_date: date, frequency: Frequency) -> date:
    """Calculate the next expected date based on frequency."""
    if frequency == Frequency.weekly:
        return last_date + timedelta(days=7)
    elif frequency == Frequency.biweekly:
        return last_date + timedelta(days=14)
    elif frequency == Frequency.monthly:
        return add_months(last_date, 1)
    elif frequency == Frequency.quarterly:
        return add_months(last_date, 3)
    elif frequency == Frequency.semi_annual:
        return add_months(last_date, 6)
    elif frequency == Frequency.annual:
        return add_months(last_date, 12)
    else:
        return last_date + timedelta(days=30)
