"""Interval extraction and periodicity classification for merchant clusters."""

import statistics
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from subwatch.models.recurring import Frequency
from subwatch.services.merchant_service import MerchantCluster

CENTS = Decimal("0.01")

# Three charges give the two gaps needed to judge regularity
MIN_GAPS = 2


@dataclass(frozen=True)
class DetectionConfig:
    """Tunable thresholds for the classifier and the merchant normalizer."""
    similarity_threshold: float = 0.90
    dispersion_ratio: float = 0.3
    min_mean_interval_days: int = 5
    max_mean_interval_days: int = 400

    @classmethod
    def from_settings(cls, settings) -> "DetectionConfig":
        return cls(
            similarity_threshold=settings.similarity_threshold,
            dispersion_ratio=settings.dispersion_ratio,
            min_mean_interval_days=settings.min_mean_interval_days,
            max_mean_interval_days=settings.max_mean_interval_days,
        )


@dataclass(frozen=True)
class SubscriptionCandidate:
    """A cluster that passed the regularity checks."""
    cluster: MerchantCluster
    gaps: List[int]
    mean_interval: Decimal
    interval_days: int
    frequency: Frequency
    representative_amount: Decimal


def extract_intervals(cluster: MerchantCluster) -> List[int]:
    """Return the day gaps between the cluster's charges in date order."""
    dates = sorted(c.date for c in cluster.charges)
    return [(later - earlier).days for earlier, later in zip(dates, dates[1:])]


def round_half_up(value: Decimal, exponent: Decimal = Decimal("1")) -> Decimal:
    return value.quantize(exponent, rounding=ROUND_HALF_UP)


def frequency_for_interval(days: int) -> Frequency:
    """Label a rounded mean interval."""
    if days <= 8:
        return Frequency.weekly
    if days <= 16:
        return Frequency.biweekly
    if days <= 35:
        return Frequency.monthly
    if days <= 100:
        return Frequency.quarterly
    if days <= 200:
        return Frequency.semi_annual
    return Frequency.annual


def representative_amount(cluster: MerchantCluster) -> Decimal:
    """Mean absolute charge, rounded half-up to cents."""
    amounts = [abs(Decimal(c.amount)) for c in cluster.charges]
    return round_half_up(sum(amounts) / len(amounts), CENTS)


def is_regular(gaps: List[int], config: DetectionConfig) -> bool:
    """
    Return True when the gaps describe a steady cadence.

    Requires at least two gaps, a mean inside the configured window and a
    population standard deviation below ``dispersion_ratio`` times the mean.
    """
    if len(gaps) < MIN_GAPS:
        return False

    mean = statistics.fmean(gaps)
    if not config.min_mean_interval_days <= mean <= config.max_mean_interval_days:
        return False

    return statistics.pstdev(gaps) < config.dispersion_ratio * mean


def classify(
    cluster: MerchantCluster,
    gaps: List[int],
    config: Optional[DetectionConfig] = None,
) -> Optional[SubscriptionCandidate]:
    """Accept a cluster as a subscription candidate, or return None."""
    config = config or DetectionConfig()
    if not is_regular(gaps, config):
        return None

    mean_interval = Decimal(sum(gaps)) / Decimal(len(gaps))
    interval_days = int(round_half_up(mean_interval))

    return SubscriptionCandidate(
        cluster=cluster,
        gaps=list(gaps),
        mean_interval=mean_interval,
        interval_days=interval_days,
        frequency=frequency_for_interval(interval_days),
        representative_amount=representative_amount(cluster),
    )
