# shopcart/repos/checkout_repo.py
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from shopcart.data.models.checkout_record import CheckoutRecordModel


class CheckoutRepo:
    def __init__(self, db: Session):
        self.db = db

    def find(self, owner: str, idempotency_key: str) -> CheckoutRecordModel | None:
        return self.db.execute(
            select(CheckoutRecordModel).where(
                CheckoutRecordModel.owner == owner,
                CheckoutRecordModel.idempotency_key == idempotency_key,
            )
        ).scalar_one_or_none()

    def add(self, owner: str, idempotency_key: str, total: Decimal) -> CheckoutRecordModel:
        record = CheckoutRecordModel(owner=owner, idempotency_key=idempotency_key, total=total)
        self.db.add(record)
        self.db.flush()
        return record

    def purge_older_than(self, cutoff: datetime) -> int:
        result = self.db.execute(
            delete(CheckoutRecordModel).where(CheckoutRecordModel.created_at < cutoff)
        )
        self.db.commit()
        return result.rowcount
