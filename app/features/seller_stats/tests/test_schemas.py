"""Tests for seller statistics schemas."""

from decimal import Decimal
from typing import Any

import pytest
from pydantic import ValidationError

from app.features.seller_stats.schemas import (
    OrderItemIn,
    PurchaseRecordIn,
    SalesDataIn,
    SellerReport,
    TopProduct,
)


class TestSalesDataIn:
    """Tests for request body parsing."""

    def test_parses_sample(self, sample_sales_data: dict[str, Any]) -> None:
        """Test the raw snapshot parses with Decimal money fields."""
        payload = SalesDataIn.model_validate(sample_sales_data)

        assert len(payload.sellers) == 4
        assert payload.products[0].purchase_price == Decimal("50")
        assert payload.purchase_records[0].total_amount == Decimal("230")
        assert payload.purchase_records[4].total_amount is None

    def test_empty_lists_allowed(self) -> None:
        """Test emptiness is left to the service layer."""
        payload = SalesDataIn()
        assert payload.sellers == []
        assert payload.purchase_records == []

    def test_integer_seller_ids_preserved(self) -> None:
        """Test integer ids are not coerced to strings."""
        payload = SalesDataIn.model_validate(
            {"sellers": [{"id": 1}], "purchase_records": [{"seller_id": 1}]}
        )
        assert payload.sellers[0].id == 1
        assert payload.purchase_records[0].seller_id == 1

    def test_dump_round_trips_to_repository_shape(
        self,
        sample_sales_data: dict[str, Any],
    ) -> None:
        """Test the python dump keeps the snake_case snapshot keys."""
        dumped = SalesDataIn.model_validate(sample_sales_data).model_dump(mode="python")

        assert set(dumped) == {"sellers", "products", "purchase_records"}
        assert set(dumped["purchase_records"][0]) == {
            "receipt_id",
            "seller_id",
            "customer_id",
            "total_amount",
            "items",
        }


class TestOrderItemIn:
    """Tests for line item validation."""

    def test_discount_defaults_to_zero(self) -> None:
        """Test discount is optional."""
        item = OrderItemIn(sku="A", quantity=1, sale_price=Decimal("5"))
        assert item.discount == Decimal("0")

    @pytest.mark.parametrize(
        "overrides",
        [
            {"quantity": -1},
            {"sale_price": -0.01},
            {"discount": 101},
            {"discount": -1},
            {"sku": ""},
        ],
    )
    def test_rejects_out_of_range(self, overrides: dict[str, Any]) -> None:
        """Test bounds on quantity, price, discount and sku."""
        values: dict[str, Any] = {"sku": "A", "quantity": 1, "sale_price": 5, "discount": 0}
        values.update(overrides)

        with pytest.raises(ValidationError):
            OrderItemIn.model_validate(values)


class TestPurchaseRecordIn:
    """Tests for purchase record validation."""

    def test_seller_id_required(self) -> None:
        """Test a purchase must name its seller."""
        with pytest.raises(ValidationError):
            PurchaseRecordIn.model_validate({"receipt_id": "r1", "items": []})

    def test_negative_total_rejected(self) -> None:
        """Test totals cannot be negative."""
        with pytest.raises(ValidationError):
            PurchaseRecordIn.model_validate({"seller_id": "s1", "total_amount": -1})


class TestSellerReport:
    """Tests for the output schema."""

    def test_frozen(self) -> None:
        """Test reports are immutable."""
        report = SellerReport(
            seller_id="s1",
            name="Anna Ivanova",
            revenue=Decimal("20.00"),
            profit=Decimal("12.00"),
            sales_count=1,
            top_products=[TopProduct(sku="X", quantity=2)],
            bonus=Decimal("1.80"),
        )

        with pytest.raises(ValidationError):
            report.bonus = Decimal("0")  # type: ignore[misc]

    def test_json_dump_keeps_two_decimals(self) -> None:
        """Test money values serialize as exact 2-decimal strings."""
        report = SellerReport(
            seller_id="s1",
            name="Anna Ivanova",
            revenue=Decimal("20.00"),
            profit=Decimal("12.00"),
            sales_count=1,
            top_products=[],
            bonus=Decimal("1.80"),
        )

        data = report.model_dump(mode="json")
        assert data["revenue"] == "20.00"
        assert data["bonus"] == "1.80"
