"""
Order Model - Legacy store with one row per purchased line item.
Only read as the fallback source for today's summary.
"""
from sqlalchemy import Column, String, DateTime, Float, Integer, Index, Uuid
from datetime import datetime
import uuid

from salespoint.database import Base


class Order(Base):
    __tablename__ = "orders"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    item_name = Column(String, nullable=True)
    price = Column(Float, nullable=True)
    qty = Column(Integer, nullable=True)
    customer_id = Column(String, nullable=True)
    store_id = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    __table_args__ = (
        Index('idx_orders_created', 'created_at'),
    )

    def __repr__(self):
        return f"<Order {self.item_name} x{self.qty}>"
