"""Shared fixtures: in-memory SQLite database and an API client bound to it."""
import os
from datetime import date, datetime
from typing import List, Optional

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from salespoint.database import Base, get_db
from salespoint.models import Order, OrderRecord, Product, Sale

# Monday 2026-10-19 .. Sunday 2026-10-25
MONDAY = date(2026, 10, 19)
WEDNESDAY_NOON = datetime(2026, 10, 21, 12, 0)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    from salespoint.main import app, limiter

    limiter.reset()
    app.dependency_overrides[get_db] = lambda: db_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def add_order_record(
    db,
    created_at: datetime,
    total: float,
    items: Optional[List[dict]] = None,
    customer_id: Optional[str] = None,
    store_id: Optional[str] = None,
    payment_method: Optional[str] = "cash",
) -> OrderRecord:
    record = OrderRecord(
        items=items if items is not None else [{"name": "Latte", "qty": 1}],
        total=total,
        payment_method=payment_method,
        customer_id=customer_id,
        store_id=store_id,
        created_at=created_at,
    )
    db.add(record)
    db.commit()
    return record


def add_legacy_order(db, created_at: datetime, price, qty, customer_id=None) -> Order:
    order = Order(item_name="Latte", price=price, qty=qty, customer_id=customer_id, created_at=created_at)
    db.add(order)
    db.commit()
    return order


def add_sale(db, day: date, amount: float) -> Sale:
    sale = Sale(date=day, amount=amount)
    db.add(sale)
    db.commit()
    return sale


def add_product(db, name: str, sold: int, price: float = 100.0, stock: int = 50) -> Product:
    product = Product(name=name, sold=sold, price=price, stock=stock)
    db.add(product)
    db.commit()
    return product
