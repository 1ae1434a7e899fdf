"""
Order Record Model - One row per transaction, line items embedded as JSON
"""
from sqlalchemy import Column, String, DateTime, Float, Index, Uuid
from datetime import datetime
import uuid

from salespoint.database import Base
from salespoint.models.types import JSONType


class OrderRecord(Base):
    __tablename__ = "order_records"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Line items: [{"name": "Latte", "qty": 2, "price": 120.0}, ...]
    items = Column(JSONType, default=list, nullable=False)

    # Authoritative transaction amount, never recomputed from items downstream
    total = Column(Float, default=0, nullable=False)
    payment_method = Column(String, nullable=True)  # cash, card, gcash, ...

    customer_id = Column(String, nullable=True)
    store_id = Column(String, nullable=True)

    # Local wall-clock time of the sale
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    __table_args__ = (
        Index('idx_order_records_created', 'created_at'),
        Index('idx_order_records_store_created', 'store_id', 'created_at'),
    )

    def __repr__(self):
        return f"<OrderRecord {self.id} {self.total}>"
