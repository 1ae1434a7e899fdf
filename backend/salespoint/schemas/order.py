"""
Order Schemas
"""
from typing import Optional, List
from pydantic import BaseModel, Field


class OrderItemCreate(BaseModel):
    """Line item of a new transaction"""
    name: str = Field(..., min_length=1)
    qty: int = Field(1, ge=1)
    price: float = Field(0, ge=0)


class OrderCreate(BaseModel):
    """Create a transaction-level order record"""
    items: List[OrderItemCreate] = Field(..., min_length=1)
    total: Optional[float] = Field(None, ge=0)  # Defaults to sum(price * qty)
    payment_method: str = ""
    customer_id: Optional[str] = None
    store_id: Optional[str] = None
