"""Builders shared by the test modules."""

from decimal import Decimal
import uuid

from subwatch.models.transaction import Transaction
from subwatch.services.merchant_service import LedgerEntry


def charge(description, amount, when):
    """Build an in-memory ledger entry; amounts are given as strings."""
    return LedgerEntry(description=description, amount=Decimal(amount), date=when)


def add_transactions(db_session, rows):
    """Insert (description, amount, date) tuples into the ledger."""
    for description, amount, when in rows:
        db_session.add(Transaction(
            id=str(uuid.uuid4()),
            date=when,
            amount=Decimal(amount),
            description=description,
        ))
    db_session.commit()
