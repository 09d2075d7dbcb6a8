from sqlalchemy import Column, Integer, String, DateTime, Numeric, UniqueConstraint
from datetime import datetime, timezone

from shopcart.data.database import Base


class CheckoutRecordModel(Base):
    """Znacznik idempotencji zapisywany w tej samej transakcji co checkout."""

    __tablename__ = "checkout_records"

    id = Column(Integer, primary_key=True)
    owner = Column(String, nullable=False, index=True)
    idempotency_key = Column(String, nullable=False)
    total = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (UniqueConstraint("owner", "idempotency_key", name="u_owner_idempotency_key"),)
