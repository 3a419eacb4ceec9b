"""
Transaction database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Numeric, Text, Index
from subwatch.database import Base


class Transaction(Base):
    """Ledger row. Read-only from the detector's point of view."""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    date = Column(Date, nullable=True, index=True)
    amount = Column(Numeric(12, 2), nullable=False)  # Negative = charge, positive = deposit/refund
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("idx_transaction_amount_date", "amount", "date"),
    )
