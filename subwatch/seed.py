"""
Seed script for a demo ledger.
"""

from datetime import date, timedelta
from decimal import Decimal
import uuid

from sqlalchemy.orm import Session

from subwatch.database import Base, SessionLocal, engine
from subwatch.models import Transaction
from subwatch.services.recurring_service import add_months


def build_demo_transactions(start: date = date(2024, 1, 1)) -> list:
    """Build a year of demo ledger rows: a few subscriptions plus everyday noise."""
    rows = []

    def add(description: str, amount: str, when: date):
        rows.append(Transaction(
            id=str(uuid.uuid4()),
            date=when,
            amount=Decimal(amount),
            description=description,
        ))

    for i in range(12):
        add("NETFLIX.COM", "-15.49", add_months(start, i) + timedelta(days=4))
        add("SPOTIFY USA", "-10.99", add_months(start, i) + timedelta(days=11))
        add("PLANET FITNESS", "-24.99", add_months(start, i))
        add("PAYROLL DEPOSIT", "2500.00", add_months(start, i) + timedelta(days=14))

    for week in range(52):
        add("WEEKLY MEAL KIT", "-59.95", start + timedelta(weeks=week, days=2))

    for quarter in range(4):
        add("ORKIN PEST CONTROL", "-54.99", add_months(start, quarter * 3) + timedelta(days=20))

    # Irregular spending that must not be detected
    for offset in (3, 9, 41, 44, 130, 131, 200, 310):
        add("WHOLE FOODS MARKET", "-83.12", start + timedelta(days=offset))

    return rows


def seed_ledger(db: Session) -> int:
    """Seed demo transactions unless the ledger already has data. Returns rows added."""
    existing_count = db.query(Transaction).count()
    if existing_count > 0:
        print(f"Ledger already seeded ({existing_count} transactions exist)")
        return 0

    rows = build_demo_transactions()
    db.add_all(rows)
    db.commit()
    print(f"Seeded {len(rows)} demo transactions")
    return len(rows)


if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed_ledger(session)
    finally:
        session.close()
