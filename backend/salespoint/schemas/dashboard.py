"""
Dashboard Schemas
"""
from typing import Optional, List
from datetime import datetime, date
from pydantic import BaseModel, Field, field_serializer
from uuid import UUID


class OrderSummary(BaseModel):
    """Canonical transaction-level order shown in the recent orders feed"""
    id: str
    items_summary: str
    quantity: int = 0
    total_amount: float = Field(0, ge=0)
    payment_method: str = ""
    created_at: datetime
    customer_id: Optional[str] = None
    store_id: Optional[str] = None

    class Config:
        frozen = True


class DailySales(BaseModel):
    """Sales total for one calendar day"""
    date: str  # YYYY-MM-DD
    total: float


class TodaySummary(BaseModel):
    """Headline metrics since local midnight"""
    total_sales: float = 0
    total_customers: int = 0
    total_orders: int = 0
    avg_sale: float = 0


class PopularProduct(BaseModel):
    """Product ranked by units sold"""
    id: UUID
    name: str
    price: float
    sold: int
    category: Optional[str] = None

    @field_serializer('id')
    def serialize_uuid(self, value):
        """Convert UUID to string"""
        if isinstance(value, UUID):
            return str(value)
        return value

    class Config:
        from_attributes = True


class WeeklyPoint(BaseModel):
    """One day of the Monday→Sunday chart"""
    date: date
    label: str
    value: float


class WeeklySales(BaseModel):
    """Monday→Sunday series for the week containing `now`"""
    monday: date
    points: List[WeeklyPoint]


class DashboardPayload(BaseModel):
    """Everything the dashboard page needs in a single response"""
    weekly_sales: List[DailySales]
    summary: TodaySummary
    recent_orders: List[OrderSummary]
    popular_products: List[PopularProduct]
