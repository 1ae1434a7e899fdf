"""
Product Model - Catalog entries with a running units-sold counter
"""
from sqlalchemy import Column, String, DateTime, Float, Integer, Uuid
from datetime import datetime
import uuid

from salespoint.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, unique=True, nullable=False, index=True)
    price = Column(Float, default=0, nullable=False)
    category = Column(String, nullable=True)
    stock = Column(Integer, default=0, nullable=False)
    sold = Column(Integer, default=0, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    def __repr__(self):
        return f"<Product {self.name} ({self.sold} sold)>"
