"""
Models package - Import all models so metadata is complete
"""
from salespoint.database import Base

from salespoint.models.sale import Sale
from salespoint.models.order_record import OrderRecord
from salespoint.models.order import Order
from salespoint.models.product import Product

__all__ = [
    "Base",
    "Sale",
    "OrderRecord",
    "Order",
    "Product",
]
