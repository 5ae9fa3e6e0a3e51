"""Domain entities for seller statistics.

Reference data (sellers, products) and purchase records are immutable.
``SellerStats`` is the frozen result of aggregation; the mutable accumulator
that builds it is private to the aggregation engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

SellerId = str | int


@dataclass(frozen=True)
class OrderItem:
    """One product line within a purchase.

    Attributes:
        sku: Product SKU.
        discount: Discount in percent (0-100).
        quantity: Units sold.
        sale_price: Unit sale price before discount.
    """

    sku: str
    discount: Decimal
    quantity: int
    sale_price: Decimal


@dataclass(frozen=True)
class OrderLine:
    """A purchase receipt attributed to exactly one seller.

    Attributes:
        receipt_id: Receipt identifier.
        seller_id: Seller the purchase is attributed to.
        items: Line items in receipt order.
        total_amount: Precomputed order total, or None when absent.
        customer_id: Customer identifier, if known.
    """

    receipt_id: str
    seller_id: SellerId
    items: tuple[OrderItem, ...]
    total_amount: Decimal | None = None
    customer_id: str | None = None


@dataclass(frozen=True)
class Seller:
    """Seller reference data."""

    id: SellerId
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        """First and last name separated by a single space."""
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class Product:
    """Product reference data keyed by sku."""

    sku: str
    purchase_price: Decimal


@dataclass(frozen=True)
class ProductSales:
    """Total quantity of one sku sold by a seller."""

    sku: str
    quantity: int


@dataclass(frozen=True)
class SellerStats:
    """Aggregated, unrounded statistics for one seller.

    Attributes:
        seller: The seller these totals belong to.
        revenue: Accumulated revenue.
        profit: Accumulated profit (revenue minus cost basis).
        sales_count: Number of purchase records attributed to the seller.
        products_sold: Quantity per sku, in first-occurrence order.
    """

    seller: Seller
    revenue: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")
    sales_count: int = 0
    products_sold: tuple[ProductSales, ...] = field(default_factory=tuple)

    @property
    def units_sold(self) -> int:
        """Total units across all skus."""
        return sum(entry.quantity for entry in self.products_sold)
