"""Service for the persisted hide/unhide overrides."""

import logging
from datetime import datetime
from typing import List, Optional, Set

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from subwatch.exceptions import OverrideStoreUnavailable, WriteFailure
from subwatch.models.override import SubscriptionOverride

logger = logging.getLogger(__name__)


def read_overrides(db: Session) -> List[SubscriptionOverride]:
    """Return every override row, ordered by merchant key."""
    try:
        return db.query(SubscriptionOverride).order_by(SubscriptionOverride.merchant_key).all()
    except SQLAlchemyError as e:
        logger.error(f"Failed to read subscription overrides: {e}")
        raise OverrideStoreUnavailable("Hidden subscriptions could not be loaded.") from e


def list_hidden(db: Session) -> Set[str]:
    """Merchant keys the user currently has hidden."""
    return {o.merchant_key for o in read_overrides(db) if o.hidden_at is not None}


def write_override(
    db: Session,
    merchant_key: str,
    hidden_at: Optional[datetime],
) -> Optional[SubscriptionOverride]:
    """
    Upsert or delete a single override row.

    A ``hidden_at`` value upserts the row; ``None`` deletes it. Either way the
    call is idempotent. Failed writes are rolled back and raised as
    WriteFailure so the caller never sees an unconfirmed state.
    """
    action = "hide" if hidden_at is not None else "unhide"
    try:
        override = db.get(SubscriptionOverride, merchant_key)

        if hidden_at is None:
            if override is not None:
                db.delete(override)
            db.commit()
            return None

        if override is None:
            override = SubscriptionOverride(merchant_key=merchant_key)
            db.add(override)
        override.hidden_at = hidden_at

        db.commit()
        db.refresh(override)
        return override

    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to {action} '{merchant_key}': {e}")
        raise WriteFailure(merchant_key, action) from e


def hide(db: Session, merchant_key: str, now: Optional[datetime] = None) -> SubscriptionOverride:
    """Hide a merchant. Works whether or not it currently has charges."""
    override = write_override(db, merchant_key, now or datetime.utcnow())
    logger.info(f"Hid subscription '{merchant_key}'")
    return override


def unhide(db: Session, merchant_key: str) -> None:
    """Restore a merchant to the default view. No-op if it was never hidden."""
    write_override(db, merchant_key, None)
    logger.info(f"Restored subscription '{merchant_key}'")
