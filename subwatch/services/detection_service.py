"""
Subscription detection pipeline.

Re-derives every subscription from the full ledger on each call:

    charges -> merchant clusters -> day gaps -> periodicity check
            -> annual cost -> hidden-state join -> ranking

Only the hide/unhide overrides are persisted. ``detect`` itself is pure;
``run_detection`` wraps it with the database reads and degrades to partial
results (plus warnings) when a read fails.
"""

import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import AbstractSet, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from subwatch.exceptions import (
    DetectionCancelled,
    InputUnavailable,
    MalformedTransaction,
    OverrideStoreUnavailable,
)
from subwatch.models.recurring import Frequency
from subwatch.models.transaction import Transaction
from subwatch.services import cost_service, override_service
from subwatch.services.merchant_service import LedgerEntry, cluster_charges
from subwatch.services.periodicity_service import (
    DetectionConfig,
    SubscriptionCandidate,
    classify,
    extract_intervals,
)
from subwatch.services.recurring_service import calculate_next_expected

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubscriptionRecord:
    """One detected subscription, ready for display."""
    merchant_key: str
    representative_amount: Decimal
    frequency_label: Frequency
    interval_days: int
    occurrence_count: int
    annual_cost: Decimal
    first_charge_date: date
    last_charge_date: date
    next_expected_date: date
    is_hidden: bool = False

    @property
    def monthly_cost(self) -> Decimal:
        return cost_service.monthly_cost(self.annual_cost)


@dataclass(frozen=True)
class SubscriptionSummary:
    """Aggregate figures over the visible (non-hidden) records."""
    total_monthly_cost: Decimal
    total_annual_cost: Decimal
    active_count: int
    hidden_count: int


@dataclass
class DetectionReport:
    """Records from one run plus any recoverable warnings raised on the way."""
    records: List[SubscriptionRecord] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def as_ledger_entry(row) -> LedgerEntry:
    """Convert a ledger row, raising MalformedTransaction if it can't be clustered."""
    description = getattr(row, "description", None)
    txn_date = getattr(row, "date", None)
    amount = getattr(row, "amount", None)

    if description is None or not str(description).strip():
        raise MalformedTransaction("transaction has no description")
    if txn_date is None:
        raise MalformedTransaction("transaction has no date")
    if amount is None:
        raise MalformedTransaction("transaction has no amount")

    return LedgerEntry(description=str(description), amount=Decimal(amount), date=txn_date)


def select_charges(transactions: Iterable) -> List[LedgerEntry]:
    """Keep well-formed debits; deposits, refunds and malformed rows are dropped."""
    charges = []
    for row in transactions:
        try:
            entry = as_ledger_entry(row)
        except MalformedTransaction as e:
            logger.debug(f"Skipping transaction: {e}")
            continue
        if entry.amount < 0:
            charges.append(entry)
    return charges


def build_record(candidate: SubscriptionCandidate, is_hidden: bool) -> SubscriptionRecord:
    charges = candidate.cluster.charges
    last_charge = charges[-1].date
    return SubscriptionRecord(
        merchant_key=candidate.cluster.key,
        representative_amount=candidate.representative_amount,
        frequency_label=candidate.frequency,
        interval_days=candidate.interval_days,
        occurrence_count=len(charges),
        annual_cost=cost_service.project(candidate.representative_amount, candidate.mean_interval),
        first_charge_date=charges[0].date,
        last_charge_date=last_charge,
        next_expected_date=calculate_next_expected(last_charge, candidate.frequency),
        is_hidden=is_hidden,
    )


def detect(
    transactions: Iterable,
    hidden_keys: AbstractSet[str] = frozenset(),
    config: Optional[DetectionConfig] = None,
    cancel_event: Optional[threading.Event] = None,
) -> List[SubscriptionRecord]:
    """
    Detect subscriptions in a set of transactions.

    Args:
        transactions: objects exposing ``description``, ``amount`` and ``date``
        hidden_keys: merchant keys the user has hidden
        config: detection thresholds; defaults apply when omitted
        cancel_event: checked between clusters; when set the run raises
            DetectionCancelled

    Returns:
        Records ranked by annual cost, highest first. Hidden merchants are
        included with ``is_hidden=True``.
    """
    config = config or DetectionConfig()
    clusters = cluster_charges(select_charges(transactions), config.similarity_threshold)

    records = []
    for cluster in clusters:
        if cancel_event is not None and cancel_event.is_set():
            raise DetectionCancelled("Detection was cancelled")

        gaps = extract_intervals(cluster)
        candidate = classify(cluster, gaps, config)
        if candidate is None:
            continue
        records.append(build_record(candidate, cluster.key in hidden_keys))

    return cost_service.rank(records)


def query_transactions(db: Session) -> List[Transaction]:
    """Read all debits from the ledger in a stable order."""
    try:
        return db.query(Transaction).filter(
            Transaction.amount < 0
        ).order_by(Transaction.date, Transaction.created_at, Transaction.id).all()
    except SQLAlchemyError as e:
        logger.error(f"Failed to read transactions: {e}")
        raise InputUnavailable("Transactions could not be loaded.") from e


def run_detection(
    db: Session,
    config: Optional[DetectionConfig] = None,
    cancel_event: Optional[threading.Event] = None,
) -> DetectionReport:
    """
    Load the ledger and overrides, then detect.

    An unreadable ledger yields an empty report; an unreadable override store
    is treated as "nothing hidden". Both add a warning to the report.
    """
    report = DetectionReport()

    try:
        transactions = query_transactions(db)
    except InputUnavailable as e:
        report.warnings.append(str(e))
        return report

    try:
        hidden_keys = override_service.list_hidden(db)
    except OverrideStoreUnavailable as e:
        logger.warning(f"Continuing without overrides: {e}")
        report.warnings.append(str(e))
        hidden_keys = set()

    report.records = detect(transactions, hidden_keys, config, cancel_event)
    logger.info(
        f"Detected {len(report.records)} subscriptions from {len(transactions)} charges"
    )
    return report


def apply_hidden(records: Iterable[SubscriptionRecord], hidden_keys: AbstractSet[str]) -> List[SubscriptionRecord]:
    """Re-join hidden state onto existing records without re-running detection."""
    return [replace(r, is_hidden=r.merchant_key in hidden_keys) for r in records]


def filter_records(
    records: Iterable[SubscriptionRecord],
    include_hidden: bool = True,
    search: Optional[str] = None,
) -> List[SubscriptionRecord]:
    """View-model filter: drop hidden records and/or keep merchant keys matching ``search``."""
    needle = search.strip().lower() if search else ""
    return [
        r for r in records
        if (include_hidden or not r.is_hidden) and needle in r.merchant_key
    ]


def summarize(records: Iterable[SubscriptionRecord]) -> SubscriptionSummary:
    """Totals over visible records; hidden ones are only counted."""
    records = list(records)
    visible = [r for r in records if not r.is_hidden]
    total_annual = sum((r.annual_cost for r in visible), Decimal("0"))
    return SubscriptionSummary(
        total_monthly_cost=cost_service.monthly_cost(total_annual),
        total_annual_cost=total_annual,
        active_count=len(visible),
        hidden_count=len(records) - len(visible),
    )
