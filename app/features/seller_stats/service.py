"""Service layer for seller statistics.

``analyze_sales_data`` is the library entry point: validate the raw snapshot,
aggregate it through the local repositories and return ranked reports.
``SellerStatsService`` binds it to application settings for the HTTP route
and the CLI.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.core.config import Settings, get_settings
from app.core.exceptions import InvalidDataError, NoDataError
from app.core.logging import get_logger
from app.features.seller_stats.aggregation import RevenuePolicy, SellerStatsAggregator
from app.features.seller_stats.ports import BonusStrategy, RevenueStrategy
from app.features.seller_stats.ranking import (
    DEFAULT_TOP_PRODUCTS_LIMIT,
    build_seller_reports,
    check_top_products_limit,
)
from app.features.seller_stats.repositories import (
    MarketLocalDatabase,
    ProductLocalDatabase,
    SellerLocalDatabase,
)
from app.features.seller_stats.schemas import SalesDataIn, SellerReport, SellerReportResponse
from app.features.seller_stats.strategies import (
    BonusFunction,
    RevenueFunction,
    bonus_strategy_from,
    revenue_strategy_from,
    strategy_factory,
)

logger = get_logger(__name__)


def validate_sales_data(data: Any) -> Mapping[str, Any]:
    """Check the raw snapshot before any aggregation work.

    Checks run in a fixed order: data present, purchase records present and
    non-empty, sellers a non-empty list, products a list if given.

    Returns:
        The snapshot, narrowed to a mapping.

    Raises:
        NoDataError: If data is absent or has no purchase records.
        InvalidDataError: If the snapshot or one of its sections is malformed.
    """
    if not data and not isinstance(data, Mapping | list):
        raise NoDataError("No data provided")
    if not isinstance(data, Mapping):
        raise InvalidDataError(
            "Invalid data format",
            details={"received": type(data).__name__},
        )

    purchase_records = data.get("purchase_records")
    if not purchase_records:
        raise NoDataError("No purchase data provided")
    if not isinstance(purchase_records, list):
        raise InvalidDataError(
            "Invalid data format",
            details={"section": "purchase_records"},
        )

    sellers = data.get("sellers")
    if not isinstance(sellers, list) or not sellers:
        raise InvalidDataError("Invalid data format", details={"section": "sellers"})

    products = data.get("products")
    if products is not None and not isinstance(products, list):
        raise InvalidDataError("Invalid data format", details={"section": "products"})

    return data


def _revenue_policy_from(value: RevenuePolicy | str) -> RevenuePolicy:
    try:
        return RevenuePolicy(value)
    except ValueError as exc:
        raise InvalidDataError(
            "Invalid data format",
            details={
                "revenue_policy": str(value),
                "allowed": [policy.value for policy in RevenuePolicy],
            },
        ) from exc


def analyze_sales_data(
    data: Any,
    *,
    calculate_revenue: RevenueStrategy | RevenueFunction,
    calculate_bonus: BonusStrategy | BonusFunction,
    revenue_policy: RevenuePolicy | str = RevenuePolicy.PER_ITEM,
    top_products_limit: int = DEFAULT_TOP_PRODUCTS_LIMIT,
) -> list[SellerReport]:
    """Compute ranked per-seller statistics from a raw sales snapshot.

    Args:
        data: Mapping with ``sellers``, ``products`` and ``purchase_records``.
        calculate_revenue: Revenue strategy, or a function ``item -> Decimal``.
        calculate_bonus: Bonus strategy, or a function
            ``(index, total, stats) -> Decimal``.
        revenue_policy: ``per_item`` or ``order_total``.
        top_products_limit: Maximum top products per seller.

    Returns:
        Seller reports ordered by profit, highest first.

    Raises:
        NoDataError: If data or purchase records are missing or empty.
        InvalidDataError: If sellers are missing/empty, a strategy is not
            callable, the revenue policy is unknown, the top products limit
            is below 1, or a record is malformed.
        ReferentialIntegrityError: If purchases reference unknown sellers or skus.
    """
    try:
        snapshot = validate_sales_data(data)
        revenue_strategy = revenue_strategy_from(calculate_revenue)
        bonus_strategy = bonus_strategy_from(calculate_bonus)
        policy = _revenue_policy_from(revenue_policy)
        check_top_products_limit(top_products_limit)
    except (NoDataError, InvalidDataError) as exc:
        logger.warning(
            "seller_stats.validation_failed",
            error_code=exc.code,
            error=exc.message,
            details=exc.details,
        )
        raise

    aggregator = SellerStatsAggregator(
        seller_repo=SellerLocalDatabase(snapshot),
        product_repo=ProductLocalDatabase(snapshot),
        market_repo=MarketLocalDatabase(snapshot),
        revenue_strategy=revenue_strategy,
        revenue_policy=policy,
    )
    seller_stats = aggregator.execute()

    return build_seller_reports(
        seller_stats,
        bonus_strategy=bonus_strategy,
        top_products_limit=top_products_limit,
    )


class SellerStatsService:
    """Runs seller reports with the configured policy and reference strategies."""

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize seller stats service.

        Args:
            settings: Settings override; defaults to the cached application settings.
        """
        self.settings = settings or get_settings()
        self.revenue_strategy, self.bonus_strategy = strategy_factory()

    @property
    def revenue_policy(self) -> RevenuePolicy:
        return RevenuePolicy(self.settings.seller_stats_revenue_policy)

    def build_report(self, payload: SalesDataIn) -> SellerReportResponse:
        """Validate a request payload and build the ranked report.

        Args:
            payload: Parsed request body.

        Returns:
            Ranked seller reports with the policy used.

        Raises:
            InvalidDataError: If the payload exceeds the configured record limit.
        """
        max_records = self.settings.seller_stats_max_purchase_records
        if len(payload.purchase_records) > max_records:
            raise InvalidDataError(
                f"Too many purchase records: {len(payload.purchase_records)} "
                f"(maximum {max_records}). Split the batch or raise "
                "SELLER_STATS_MAX_PURCHASE_RECORDS.",
                details={"purchase_records": len(payload.purchase_records), "maximum": max_records},
            )

        reports = analyze_sales_data(
            payload.model_dump(mode="python"),
            calculate_revenue=self.revenue_strategy,
            calculate_bonus=self.bonus_strategy,
            revenue_policy=self.revenue_policy,
            top_products_limit=self.settings.seller_stats_top_products_limit,
        )

        return SellerReportResponse(
            revenue_policy=self.revenue_policy.value,
            total_sellers=len(reports),
            sellers=reports,
        )
