"""Ports consumed by the seller statistics pipeline.

Repositories supply reference data and purchases; strategies decide how
revenue and bonuses are computed. Any object with the right methods
satisfies a port, so in-memory, file or database backed adapters can be
swapped without touching the aggregation engine.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Protocol, runtime_checkable

from app.features.seller_stats.domain import OrderItem, OrderLine, Product, Seller, SellerId, SellerStats


@runtime_checkable
class SellerRepository(Protocol):
    """Source of seller reference data."""

    def get_indexed(self) -> Mapping[SellerId, Seller]:
        """Return sellers keyed by id."""
        ...


@runtime_checkable
class ProductRepository(Protocol):
    """Source of product reference data."""

    def get_indexed(self) -> Mapping[str, Product]:
        """Return products keyed by sku."""
        ...


@runtime_checkable
class MarketRepository(Protocol):
    """Source of purchase records."""

    def get_purchases(self) -> Sequence[OrderLine]:
        """Return purchase records in input order."""
        ...


@runtime_checkable
class RevenueStrategy(Protocol):
    """Computes the revenue of a single line item."""

    def calculate(self, item: OrderItem) -> Decimal:
        """Return revenue owed for ``item`` after discount.

        Non-Decimal numbers (int, float, numeric str) are converted through
        their string form; anything else is an InvalidDataError.
        """
        ...


@runtime_checkable
class BonusStrategy(Protocol):
    """Computes a seller's bonus from its rank position."""

    def calculate(self, index: int, total: int, stats: SellerStats) -> Decimal:
        """Return the bonus for the seller at 0-based ``index`` of ``total``.

        The result is converted like revenue results.
        """
        ...
