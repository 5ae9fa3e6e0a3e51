"""Seller statistics: per-seller revenue, profit, top products and bonus.

Aggregates purchase records against seller and product reference data,
ranks sellers by profit and assigns a rank-based bonus.
"""

from app.features.seller_stats.aggregation import (
    RevenuePolicy,
    SellerStatsAggregator,
    aggregate_seller_stats,
)
from app.features.seller_stats.ranking import build_seller_reports, rank_seller_stats
from app.features.seller_stats.routes import router
from app.features.seller_stats.schemas import SellerReport, SellerReportResponse
from app.features.seller_stats.service import SellerStatsService, analyze_sales_data
from app.features.seller_stats.strategies import (
    ProfitRankBonusStrategy,
    SimpleRevenueStrategy,
    calculate_bonus_by_profit,
    calculate_simple_revenue,
)

__all__ = [
    "ProfitRankBonusStrategy",
    "RevenuePolicy",
    "SellerReport",
    "SellerReportResponse",
    "SellerStatsAggregator",
    "SellerStatsService",
    "SimpleRevenueStrategy",
    "aggregate_seller_stats",
    "analyze_sales_data",
    "build_seller_reports",
    "calculate_bonus_by_profit",
    "calculate_simple_revenue",
    "rank_seller_stats",
    "router",
]
