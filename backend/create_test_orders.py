#!/usr/bin/env python3
"""Create test orders through the SalesPoint orders API"""
import sys
import httpx
import asyncio
import random

TEST_ITEMS = [
    {"name": "Cappuccino", "price": 145.0},
    {"name": "Latte", "price": 150.0},
    {"name": "Espresso", "price": 110.0},
    {"name": "Croissant", "price": 95.0},
    {"name": "Sandwich", "price": 180.0},
    {"name": "Muffin", "price": 85.0},
]

PAYMENT_METHODS = ["cash", "card", "gcash"]


async def create_test_orders(base_url: str, count: int):
    """Post `count` random orders to the running API"""
    print(f"Creating {count} test orders at {base_url}...\n")

    async with httpx.AsyncClient(timeout=30.0) as client:
        success_count = 0

        for i in range(1, count + 1):
            items = [
                {**item, "qty": random.randint(1, 3)}
                for item in random.sample(TEST_ITEMS, random.randint(1, 3))
            ]
            payload = {
                "items": items,
                "payment_method": random.choice(PAYMENT_METHODS),
                "customer_id": f"walk-in-{random.randint(1, 5)}" if random.random() < 0.7 else None,
            }

            try:
                resp = await client.post(f"{base_url}/api/v1/orders", json=payload)
            except httpx.HTTPError as e:
                print(f"  ✗ {i}. Exception: {e}")
                continue

            if resp.status_code == 201:
                order = resp.json()
                print(f"  ✓ {i}. Created: {order['items_summary']} - ₱{order['total_amount']:.2f}")
                success_count += 1
            else:
                print(f"  ✗ {i}. Failed: {resp.status_code} - {resp.text[:100]}")

        print(f"\n✓ Successfully created {success_count}/{count} test orders")


if __name__ == '__main__':
    if len(sys.argv) < 2:
        print("Usage: python create_test_orders.py <base_url> [count]")
        sys.exit(1)

    asyncio.run(create_test_orders(sys.argv[1], int(sys.argv[2]) if len(sys.argv) > 2 else 10))
