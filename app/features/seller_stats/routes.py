"""API routes for seller statistics."""

from fastapi import APIRouter, Depends

from app.core.config import Settings, get_settings
from app.core.logging import get_logger
from app.features.seller_stats.schemas import SalesDataIn, SellerReportResponse
from app.features.seller_stats.service import SellerStatsService

logger = get_logger(__name__)

router = APIRouter(prefix="/seller-stats", tags=["seller-stats"])


def get_seller_stats_service(
    settings: Settings = Depends(get_settings),
) -> SellerStatsService:
    """Build the service from application settings."""
    return SellerStatsService(settings)


@router.post(
    "/report",
    response_model=SellerReportResponse,
    summary="Rank sellers by profit",
    description="""
Aggregate a batch of purchase records into per-seller statistics and rank
sellers by profit.

**Per seller**:
- `revenue`: sum of discounted line revenue (or order totals under the
  `order_total` policy)
- `profit`: revenue minus purchase price x quantity, per line item
- `sales_count`: number of purchase records
- `top_products`: up to 10 SKUs by quantity sold
- `bonus`: 15% of profit for 1st, 10% for 2nd-3rd, 0% for last, 5% otherwise

Money values are rounded to 2 decimal places (half up).

**Errors** (RFC 7807):
- 400 `NO_DATA`: no purchase records
- 422 `INVALID_DATA`: empty seller list or malformed record
- 422 `REFERENTIAL_INTEGRITY`: purchase references an unknown seller or SKU
""",
)
def create_seller_report(
    payload: SalesDataIn,
    service: SellerStatsService = Depends(get_seller_stats_service),
) -> SellerReportResponse:
    """Build a ranked seller report from the request snapshot.

    Declared sync so FastAPI runs the CPU-bound aggregation in its threadpool.

    Args:
        payload: Sellers, products and purchase records.
        service: Settings-bound seller stats service.

    Returns:
        Sellers ordered by profit, highest first.
    """
    response = service.build_report(payload)

    logger.info(
        "seller_stats.report_served",
        purchase_records=len(payload.purchase_records),
        total_sellers=response.total_sellers,
        revenue_policy=response.revenue_policy,
    )
    return response
