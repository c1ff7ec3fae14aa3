import logging
from typing import Callable, Optional, TypeVar

from sqlalchemy.orm import Session

from shared.core.database import SessionLocal

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_transaction(
    db: Optional[Session],
    work: Callable[[Session], T],
    session_factory=SessionLocal,
) -> T:
    """
    Run `work` inside a database transaction.

    When `db` is supplied the caller owns the transaction: `work` runs in it
    and nothing is committed, rolled back or closed here. Otherwise a new
    session is opened, committed when `work` returns and rolled back when it
    raises; the original exception is re-raised and the session is always
    closed.
    """
    if db is not None:
        return work(db)

    session = session_factory()
    try:
        logger.debug("Transaction started")
        result = work(session)
        session.commit()
        logger.debug("Transaction committed")
        return result
    except Exception:
        session.rollback()
        logger.debug("Transaction rolled back", exc_info=True)
        raise
    finally:
        session.close()
