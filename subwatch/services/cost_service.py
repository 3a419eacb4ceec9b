"""Cost projection and ranking for detected subscriptions."""

from decimal import Decimal
from typing import Iterable, List, Union

from subwatch.services.periodicity_service import CENTS, round_half_up

DAYS_PER_YEAR = Decimal("365")
MONTHS_PER_YEAR = Decimal("12")


def project(representative_amount: Decimal, interval_days: Union[Decimal, int]) -> Decimal:
    """
    Annualize a per-charge amount.

    ``interval_days`` is the unrounded mean gap; the result is rounded
    half-up to cents.
    """
    interval = Decimal(interval_days)
    if interval <= 0:
        raise ValueError("interval_days must be positive")
    annual = Decimal(representative_amount) * DAYS_PER_YEAR / interval
    return round_half_up(annual, CENTS)


def monthly_cost(annual_cost: Decimal) -> Decimal:
    """Monthly share of an annual cost. Left unrounded so totals don't drift."""
    return Decimal(annual_cost) / MONTHS_PER_YEAR


def rank(records: Iterable) -> List:
    """Order records by annual cost, most expensive first, then by merchant key."""
    return sorted(records, key=lambda r: (-r.annual_cost, r.merchant_key))
