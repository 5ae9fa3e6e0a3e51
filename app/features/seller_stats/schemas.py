"""Pydantic schemas for the seller statistics report.

Input schemas mirror the raw snake_case snapshot read by the local
repositories. List lengths are unconstrained: emptiness is reported by
``analyze_sales_data`` as NoDataError / InvalidDataError.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Input Schemas
# =============================================================================


class SellerIn(BaseModel):
    """Seller reference record."""

    id: str | int = Field(..., description="Seller identifier referenced by purchase records.")
    first_name: str = Field("", description="Seller first name.")
    last_name: str = Field("", description="Seller last name.")


class ProductIn(BaseModel):
    """Product reference record."""

    sku: str = Field(..., min_length=1, description="Product SKU (natural key).")
    purchase_price: Decimal = Field(..., ge=0, description="Unit cost paid for the product.")


class OrderItemIn(BaseModel):
    """Line item of a purchase record."""

    sku: str = Field(..., min_length=1, description="SKU of the sold product.")
    quantity: int = Field(..., ge=0, description="Units sold (non-negative).")
    sale_price: Decimal = Field(..., ge=0, description="Unit sale price before discount.")
    discount: Decimal = Field(
        Decimal("0"),
        ge=0,
        le=100,
        description="Discount in percent (0-100).",
    )


class PurchaseRecordIn(BaseModel):
    """A purchase receipt attributed to one seller."""

    receipt_id: str = Field("", description="Receipt identifier.")
    seller_id: str | int = Field(..., description="Seller the purchase is attributed to.")
    customer_id: str | None = Field(None, description="Customer identifier, if known.")
    total_amount: Decimal | None = Field(
        None,
        ge=0,
        description="Precomputed order total. Used as revenue under the order_total policy.",
    )
    items: list[OrderItemIn] = Field(default_factory=list, description="Line items.")


class SalesDataIn(BaseModel):
    """Request body for POST /seller-stats/report."""

    sellers: list[SellerIn] = Field(default_factory=list, description="Seller reference data.")
    products: list[ProductIn] = Field(default_factory=list, description="Product reference data.")
    purchase_records: list[PurchaseRecordIn] = Field(
        default_factory=list,
        description="Purchase records to aggregate.",
    )


# =============================================================================
# Output Schemas
# =============================================================================


class TopProduct(BaseModel):
    """A best-selling sku of a seller."""

    model_config = ConfigDict(frozen=True)

    sku: str = Field(..., description="Product SKU.")
    quantity: int = Field(..., ge=0, description="Total units of this SKU sold by the seller.")


class SellerReport(BaseModel):
    """Ranked statistics for a single seller.

    Monetary values are rounded to exactly 2 decimal places (half up).
    """

    model_config = ConfigDict(frozen=True)

    seller_id: str | int = Field(..., description="Seller identifier.")
    name: str = Field(..., description="First and last name separated by a space.")
    revenue: Decimal = Field(..., description="Total revenue, 2 decimal places.")
    profit: Decimal = Field(..., description="Total profit, 2 decimal places.")
    sales_count: int = Field(..., ge=0, description="Number of purchase records.")
    top_products: list[TopProduct] = Field(
        ...,
        description="Best-selling SKUs by quantity (highest first, ties by SKU).",
    )
    bonus: Decimal = Field(..., description="Rank-based bonus, 2 decimal places.")


class SellerReportResponse(BaseModel):
    """Response body for POST /seller-stats/report."""

    revenue_policy: str = Field(..., description="Revenue policy used: per_item or order_total.")
    total_sellers: int = Field(..., ge=0, description="Number of ranked sellers.")
    sellers: list[SellerReport] = Field(
        ...,
        description="Sellers ordered by profit (highest first, ties by seller id).",
    )
