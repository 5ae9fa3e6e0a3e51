"""Test fixtures for seller statistics module."""

from collections.abc import AsyncGenerator
from decimal import Decimal
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings, get_settings
from app.features.seller_stats.domain import OrderItem, OrderLine, Product, Seller
from app.features.seller_stats.strategies import ProfitRankBonusStrategy, SimpleRevenueStrategy
from app.main import app


def make_purchase(
    receipt_id: str,
    seller_id: str,
    items: list[tuple[str, int, float, float]],
    total_amount: float | None = None,
) -> dict[str, Any]:
    """Build a raw purchase record from (sku, quantity, sale_price, discount) tuples."""
    record: dict[str, Any] = {
        "receipt_id": receipt_id,
        "seller_id": seller_id,
        "customer_id": "customer_1",
        "items": [
            {"sku": sku, "quantity": quantity, "sale_price": price, "discount": discount}
            for sku, quantity, price, discount in items
        ],
    }
    if total_amount is not None:
        record["total_amount"] = total_amount
    return record


@pytest.fixture
def revenue_strategy() -> SimpleRevenueStrategy:
    """Reference revenue strategy."""
    return SimpleRevenueStrategy()


@pytest.fixture
def bonus_strategy() -> ProfitRankBonusStrategy:
    """Reference bonus strategy."""
    return ProfitRankBonusStrategy()


@pytest.fixture
def single_sale_data() -> dict[str, Any]:
    """One seller selling two units of X at 10.00, cost 4.00."""
    return {
        "sellers": [{"id": "seller_a", "first_name": "Anna", "last_name": "Ivanova"}],
        "products": [{"sku": "X", "purchase_price": 4}],
        "purchase_records": [make_purchase("r1", "seller_a", [("X", 2, 10, 0)])],
    }


@pytest.fixture
def sample_sales_data() -> dict[str, Any]:
    """Four sellers, one of them without purchases.

    Receipt r1 carries a total (230) that differs from its item revenue (220)
    so the two revenue policies give different results.

    Profits (per_item policy):
        seller_1: (2*100*0.9 - 2*50) + (1*40 - 25) + (3*20 - 3*10) = 80 + 15 + 30 = 125
        seller_2: (5*20 - 5*10) + (1*100 - 50) = 50 + 50 = 100
        seller_3: (1*40*0.5 - 25) = -5
    """
    return {
        "sellers": [
            {"id": "seller_1", "first_name": "Alexey", "last_name": "Petrov"},
            {"id": "seller_2", "first_name": "Maria", "last_name": "Sidorova"},
            {"id": "seller_3", "first_name": "Ivan", "last_name": "Smirnov"},
            {"id": "seller_4", "first_name": "Olga", "last_name": "Kuznetsova"},
        ],
        "products": [
            {"sku": "SKU_001", "purchase_price": 50},
            {"sku": "SKU_002", "purchase_price": 25},
            {"sku": "SKU_003", "purchase_price": 10},
        ],
        "purchase_records": [
            make_purchase(
                "r1",
                "seller_1",
                [("SKU_001", 2, 100, 10), ("SKU_002", 1, 40, 0)],
                total_amount=230,
            ),
            make_purchase("r2", "seller_2", [("SKU_003", 5, 20, 0)], total_amount=100),
            make_purchase("r3", "seller_1", [("SKU_003", 3, 20, 0)], total_amount=60),
            make_purchase("r4", "seller_3", [("SKU_002", 1, 40, 50)], total_amount=20),
            make_purchase("r5", "seller_2", [("SKU_001", 1, 100, 0)]),
        ],
    }


@pytest.fixture
def sellers_index() -> dict[str, Seller]:
    """Indexed sellers for engine-level tests."""
    return {
        "s1": Seller(id="s1", first_name="Anna", last_name="Ivanova"),
        "s2": Seller(id="s2", first_name="Boris", last_name="Orlov"),
    }


@pytest.fixture
def products_index() -> dict[str, Product]:
    """Indexed products for engine-level tests."""
    return {
        "A": Product(sku="A", purchase_price=Decimal("4")),
        "B": Product(sku="B", purchase_price=Decimal("1.50")),
    }


@pytest.fixture
def purchases() -> list[OrderLine]:
    """Three purchases over two sellers."""
    return [
        OrderLine(
            receipt_id="r1",
            seller_id="s1",
            items=(
                OrderItem(sku="A", discount=Decimal("0"), quantity=2, sale_price=Decimal("10")),
                OrderItem(sku="B", discount=Decimal("10"), quantity=4, sale_price=Decimal("5")),
            ),
            total_amount=Decimal("40"),
        ),
        OrderLine(
            receipt_id="r2",
            seller_id="s2",
            items=(OrderItem(sku="B", discount=Decimal("0"), quantity=1, sale_price=Decimal("5")),),
            total_amount=Decimal("5"),
        ),
        OrderLine(
            receipt_id="r3",
            seller_id="s1",
            items=(OrderItem(sku="A", discount=Decimal("0"), quantity=1, sale_price=Decimal("10")),),
            total_amount=None,
        ),
    ]


# =============================================================================
# HTTP Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """Settings used by the seller stats routes; override per test."""
    return Settings()


@pytest.fixture
async def client(settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with the settings dependency overridden."""
    app.dependency_overrides[get_settings] = lambda: settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
