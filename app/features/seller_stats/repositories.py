"""In-memory repositories over a raw sales data snapshot.

The snapshot is the snake_case mapping accepted by ``analyze_sales_data``::

    {
        "sellers": [{"id", "first_name", "last_name"}, ...],
        "products": [{"sku", "purchase_price"}, ...],
        "purchase_records": [
            {"receipt_id", "seller_id", "customer_id"?, "total_amount"?,
             "items": [{"sku", "quantity", "sale_price", "discount"}, ...]},
            ...
        ],
    }

Each call builds fresh domain entities; the snapshot itself is never mutated.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from app.core.exceptions import InvalidDataError
from app.features.seller_stats.domain import OrderItem, OrderLine, Product, Seller, SellerId


def to_decimal(value: Any, *, field: str, section: str, index: int) -> Decimal:
    """Convert a raw number to Decimal via its string form.

    Going through ``str`` keeps ``0.1`` as ``Decimal("0.1")`` rather than the
    binary float expansion.

    Raises:
        InvalidDataError: If the value is missing, boolean or not numeric.
    """
    if value is None or isinstance(value, bool):
        raise _field_error(section, index, field, value)
    try:
        result = Decimal(str(value))
    except InvalidOperation as exc:
        raise _field_error(section, index, field, value) from exc
    if not result.is_finite():
        raise _field_error(section, index, field, value)
    return result


def _require(record: Mapping[str, Any], key: str, *, section: str, index: int) -> Any:
    if not isinstance(record, Mapping):
        raise InvalidDataError(
            f"{section}[{index}] must be an object",
            details={"section": section, "index": index},
        )
    if key not in record or record[key] is None:
        raise _field_error(section, index, key, None)
    return record[key]


def _field_error(section: str, index: int, field: str, value: Any) -> InvalidDataError:
    return InvalidDataError(
        f"Invalid value for '{field}' in {section}[{index}]: {value!r}",
        details={"section": section, "index": index, "field": field},
    )


class SellerLocalDatabase:
    """Seller repository backed by ``data["sellers"]``."""

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = data

    def get_indexed(self) -> dict[SellerId, Seller]:
        """Build sellers keyed by id; a later duplicate id replaces an earlier one."""
        index: dict[SellerId, Seller] = {}
        for i, raw in enumerate(self._data.get("sellers") or []):
            seller = Seller(
                id=_require(raw, "id", section="sellers", index=i),
                first_name=str(raw.get("first_name") or ""),
                last_name=str(raw.get("last_name") or ""),
            )
            index[seller.id] = seller
        return index


class ProductLocalDatabase:
    """Product repository backed by ``data["products"]``."""

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = data

    def get_indexed(self) -> dict[str, Product]:
        """Build products keyed by sku."""
        index: dict[str, Product] = {}
        for i, raw in enumerate(self._data.get("products") or []):
            sku = str(_require(raw, "sku", section="products", index=i))
            index[sku] = Product(
                sku=sku,
                purchase_price=to_decimal(
                    _require(raw, "purchase_price", section="products", index=i),
                    field="purchase_price",
                    section="products",
                    index=i,
                ),
            )
        return index


class MarketLocalDatabase:
    """Purchase repository backed by ``data["purchase_records"]``."""

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = data

    def get_purchases(self) -> list[OrderLine]:
        """Build purchase records in input order."""
        purchases: list[OrderLine] = []
        for i, raw in enumerate(self._data.get("purchase_records") or []):
            section = "purchase_records"
            raw_items = _require(raw, "items", section=section, index=i)
            if not isinstance(raw_items, list):
                raise _field_error(section, i, "items", raw_items)

            items = tuple(self._build_item(raw_item, i, j) for j, raw_item in enumerate(raw_items))

            total_raw = raw.get("total_amount")
            customer_id = raw.get("customer_id")
            purchases.append(
                OrderLine(
                    receipt_id=str(raw.get("receipt_id") or ""),
                    seller_id=_require(raw, "seller_id", section=section, index=i),
                    items=items,
                    total_amount=(
                        to_decimal(total_raw, field="total_amount", section=section, index=i)
                        if total_raw is not None
                        else None
                    ),
                    customer_id=str(customer_id) if customer_id is not None else None,
                )
            )
        return purchases

    @staticmethod
    def _build_item(raw: Mapping[str, Any], record_index: int, item_index: int) -> OrderItem:
        section = f"purchase_records[{record_index}].items"
        quantity = _require(raw, "quantity", section=section, index=item_index)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise _field_error(section, item_index, "quantity", quantity)

        return OrderItem(
            sku=str(_require(raw, "sku", section=section, index=item_index)),
            quantity=quantity,
            sale_price=to_decimal(
                _require(raw, "sale_price", section=section, index=item_index),
                field="sale_price",
                section=section,
                index=item_index,
            ),
            discount=to_decimal(
                raw.get("discount", 0),
                field="discount",
                section=section,
                index=item_index,
            ),
        )
