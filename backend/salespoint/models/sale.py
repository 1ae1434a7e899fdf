"""
Sale Model - Pre-aggregated sales amounts keyed by calendar day.
Rows are added as orders are recorded; the dashboard groups them by date.
"""
from sqlalchemy import Column, String, DateTime, Date, Float, Index, Uuid
from datetime import datetime
import uuid

from salespoint.database import Base


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    date = Column(Date, nullable=False)
    amount = Column(Float, default=0, nullable=False)
    store_id = Column(String, nullable=True)

    # Metadata
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    __table_args__ = (
        Index('idx_sales_date', 'date'),
        Index('idx_sales_store_date', 'store_id', 'date'),
    )

    def __repr__(self):
        return f"<Sale {self.date} {self.amount}>"
