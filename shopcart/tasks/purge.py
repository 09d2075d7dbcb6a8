# shopcart/tasks/purge.py
from datetime import datetime, timezone, timedelta

from shopcart.celery_worker import celery_app
from shopcart.data.database import SessionLocal
from shopcart.repos.checkout_repo import CheckoutRepo
from shopcart.utils.settings import CHECKOUT_RECORD_TTL_SECONDS
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


def purge_checkout_records(db, now: datetime | None = None) -> int:
    """Usuwa znaczniki idempotencji starsze niz CHECKOUT_RECORD_TTL_SECONDS."""
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(seconds=CHECKOUT_RECORD_TTL_SECONDS)
    removed = CheckoutRepo(db).purge_older_than(cutoff)
    logger.info(f"Purged {removed} checkout records older than {cutoff.isoformat()}")
    return removed


@celery_app.task(name="shopcart.tasks.purge.purge_checkout_records_task")
def purge_checkout_records_task():
    logger.info("Purge checkout records task started")

    db = SessionLocal()
    try:
        return purge_checkout_records(db)
    finally:
        db.close()
