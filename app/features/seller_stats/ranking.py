"""Ranking and reporting of aggregated seller statistics."""

from __future__ import annotations

from collections.abc import Sequence

from app.core.exceptions import InvalidDataError
from app.core.logging import get_logger
from app.features.seller_stats.domain import ProductSales, SellerStats
from app.features.seller_stats.ports import BonusStrategy
from app.features.seller_stats.schemas import SellerReport, TopProduct
from app.features.seller_stats.strategies import round_money, strategy_result

logger = get_logger(__name__)

DEFAULT_TOP_PRODUCTS_LIMIT = 10


def check_top_products_limit(limit: int) -> None:
    """Reject a top products limit that is not a positive integer.

    Raises:
        InvalidDataError: If ``limit`` is below 1 or not an int.
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidDataError(
            "Invalid data format",
            details={"top_products_limit": limit},
        )


def rank_seller_stats(stats: Sequence[SellerStats]) -> list[SellerStats]:
    """Order sellers by profit, highest first; equal profits by seller id."""
    return sorted(stats, key=lambda s: (-s.profit, str(s.seller.id)))


def top_products(products_sold: Sequence[ProductSales], limit: int) -> list[TopProduct]:
    """Best-selling skus by quantity, highest first; equal quantities by sku."""
    ordered = sorted(products_sold, key=lambda p: (-p.quantity, p.sku))
    return [TopProduct(sku=p.sku, quantity=p.quantity) for p in ordered[:limit]]


def build_seller_reports(
    stats: Sequence[SellerStats],
    bonus_strategy: BonusStrategy,
    top_products_limit: int = DEFAULT_TOP_PRODUCTS_LIMIT,
) -> list[SellerReport]:
    """Rank sellers, assign bonuses and project them into reports.

    Args:
        stats: Aggregated, unrounded statistics in any order.
        bonus_strategy: Computes each seller's bonus from its rank.
        top_products_limit: Maximum number of top products per seller.

    Returns:
        Reports in rank order with revenue, profit and bonus rounded to cents.

    Raises:
        InvalidDataError: If ``top_products_limit`` is below 1.
    """
    check_top_products_limit(top_products_limit)

    ranked = rank_seller_stats(stats)
    total = len(ranked)

    reports = [
        SellerReport(
            seller_id=seller_stats.seller.id,
            name=seller_stats.seller.full_name,
            revenue=round_money(seller_stats.revenue),
            profit=round_money(seller_stats.profit),
            sales_count=seller_stats.sales_count,
            top_products=top_products(seller_stats.products_sold, top_products_limit),
            bonus=round_money(
                strategy_result(
                    bonus_strategy.calculate(index, total, seller_stats),
                    strategy="bonus",
                )
            ),
        )
        for index, seller_stats in enumerate(ranked)
    ]

    logger.info(
        "seller_stats.report_built",
        sellers=total,
        top_products_limit=top_products_limit,
    )
    return reports
