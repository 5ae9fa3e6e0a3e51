"""Aggregation engine: joins purchases to sellers and products.

Produces one ``SellerStats`` per distinct seller id seen in the purchases.
Accumulators are owned by a single ``aggregate_seller_stats`` call and frozen
in one pass before anything is returned.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from app.core.exceptions import ReferentialIntegrityError
from app.core.logging import get_logger
from app.features.seller_stats.domain import (
    OrderLine,
    Product,
    ProductSales,
    Seller,
    SellerId,
    SellerStats,
)
from app.features.seller_stats.ports import (
    MarketRepository,
    ProductRepository,
    RevenueStrategy,
    SellerRepository,
)
from app.features.seller_stats.strategies import strategy_result

logger = get_logger(__name__)


class RevenuePolicy(str, Enum):
    """Where a seller's revenue comes from.

    PER_ITEM sums the revenue strategy over every line item.
    ORDER_TOTAL trusts each purchase's precomputed ``total_amount`` and falls
    back to the per-item sum for purchases that carry no total.
    Profit is computed per item under both policies.
    """

    PER_ITEM = "per_item"
    ORDER_TOTAL = "order_total"


@dataclass
class _SellerAccumulator:
    """Mutable running totals for one seller during the purchase scan."""

    seller: Seller
    revenue: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")
    sales_count: int = 0
    products_sold: dict[str, int] = field(default_factory=dict)

    def freeze(self) -> SellerStats:
        return SellerStats(
            seller=self.seller,
            revenue=self.revenue,
            profit=self.profit,
            sales_count=self.sales_count,
            products_sold=tuple(
                ProductSales(sku=sku, quantity=quantity)
                for sku, quantity in self.products_sold.items()
            ),
        )


def find_unknown_references(
    sellers: Mapping[SellerId, Seller],
    products: Mapping[str, Product],
    purchases: Sequence[OrderLine],
) -> tuple[list[SellerId], list[str]]:
    """Collect seller ids and skus referenced by purchases but missing from the indexes.

    Returns:
        Tuple of (unknown seller ids, unknown skus), each in first-seen order
        without duplicates.
    """
    unknown_sellers: dict[SellerId, None] = {}
    unknown_skus: dict[str, None] = {}
    for order_line in purchases:
        if order_line.seller_id not in sellers:
            unknown_sellers[order_line.seller_id] = None
        for item in order_line.items:
            if item.sku not in products:
                unknown_skus[item.sku] = None
    return list(unknown_sellers), list(unknown_skus)


def aggregate_seller_stats(
    sellers: Mapping[SellerId, Seller],
    products: Mapping[str, Product],
    purchases: Sequence[OrderLine],
    revenue_strategy: RevenueStrategy,
    revenue_policy: RevenuePolicy = RevenuePolicy.PER_ITEM,
) -> list[SellerStats]:
    """Accumulate revenue, profit, sales count and units per seller.

    Args:
        sellers: Sellers keyed by id.
        products: Products keyed by sku.
        purchases: Purchase records in input order.
        revenue_strategy: Computes the revenue of each line item.
        revenue_policy: Source of seller revenue (see ``RevenuePolicy``).

    Returns:
        One SellerStats per distinct seller id in ``purchases``, in order of
        first appearance. Sellers without purchases are absent.

    Raises:
        ReferentialIntegrityError: If a purchase references an unknown seller
            or an item references an unknown sku. Raised before any
            accumulation.
    """
    unknown_sellers, unknown_skus = find_unknown_references(sellers, products, purchases)
    if unknown_sellers or unknown_skus:
        logger.warning(
            "seller_stats.unknown_references",
            unknown_seller_ids=[str(s) for s in unknown_sellers],
            unknown_skus=unknown_skus,
        )
        raise ReferentialIntegrityError(
            details={
                "seller_ids": unknown_sellers,
                "skus": unknown_skus,
            }
        )

    accumulators: dict[SellerId, _SellerAccumulator] = {}
    item_count = 0

    for order_line in purchases:
        accumulator = accumulators.get(order_line.seller_id)
        if accumulator is None:
            accumulator = _SellerAccumulator(seller=sellers[order_line.seller_id])
            accumulators[order_line.seller_id] = accumulator

        accumulator.sales_count += 1

        line_revenue = Decimal("0")
        for item in order_line.items:
            item_revenue = strategy_result(revenue_strategy.calculate(item), strategy="revenue")
            cost = products[item.sku].purchase_price * item.quantity

            line_revenue += item_revenue
            accumulator.profit += item_revenue - cost
            accumulator.products_sold[item.sku] = (
                accumulator.products_sold.get(item.sku, 0) + item.quantity
            )
            item_count += 1

        if revenue_policy is RevenuePolicy.ORDER_TOTAL and order_line.total_amount is not None:
            accumulator.revenue += order_line.total_amount
        else:
            accumulator.revenue += line_revenue

    stats = [accumulator.freeze() for accumulator in accumulators.values()]

    logger.info(
        "seller_stats.aggregation_completed",
        revenue_policy=revenue_policy.value,
        purchases=len(purchases),
        items=item_count,
        sellers=len(stats),
    )
    return stats


class SellerStatsAggregator:
    """Use case wiring the repositories and revenue strategy to the engine."""

    def __init__(
        self,
        *,
        seller_repo: SellerRepository,
        product_repo: ProductRepository,
        market_repo: MarketRepository,
        revenue_strategy: RevenueStrategy,
        revenue_policy: RevenuePolicy = RevenuePolicy.PER_ITEM,
    ) -> None:
        self._seller_repo = seller_repo
        self._product_repo = product_repo
        self._market_repo = market_repo
        self._revenue_strategy = revenue_strategy
        self._revenue_policy = revenue_policy

    def execute(self) -> list[SellerStats]:
        """Load a fresh snapshot from the repositories and aggregate it."""
        return aggregate_seller_stats(
            sellers=self._seller_repo.get_indexed(),
            products=self._product_repo.get_indexed(),
            purchases=self._market_repo.get_purchases(),
            revenue_strategy=self._revenue_strategy,
            revenue_policy=self._revenue_policy,
        )
