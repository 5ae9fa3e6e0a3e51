"""Reference revenue and bonus strategies.

Strategies satisfy the ``RevenueStrategy`` / ``BonusStrategy`` ports. Plain
functions with the same signatures are adapted by ``revenue_strategy_from``
and ``bonus_strategy_from`` so callers can pass either form.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Literal

from app.core.exceptions import InvalidDataError
from app.features.seller_stats.domain import OrderItem, SellerStats
from app.features.seller_stats.ports import BonusStrategy, RevenueStrategy

MONEY_QUANTUM = Decimal("0.01")
HUNDRED = Decimal("100")

WINNER_BONUS_PERCENTAGE = Decimal("15")
PRIZEWINNER_BONUS_PERCENTAGE = Decimal("10")
COMMON_BONUS_PERCENTAGE = Decimal("5")
LAST_PLACE_BONUS_PERCENTAGE = Decimal("0")

RevenueFunction = Callable[[OrderItem], Decimal]
BonusFunction = Callable[[int, int, SellerStats], Decimal]


def round_money(value: Decimal) -> Decimal:
    """Round to exactly 2 decimal places, half away from zero."""
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def strategy_result(value: Any, *, strategy: str) -> Decimal:
    """Coerce a strategy return value to Decimal via its string form.

    Raises:
        InvalidDataError: If the value is not a finite number.
    """
    if isinstance(value, Decimal) and value.is_finite():
        return value
    if value is None or isinstance(value, bool):
        raise _invalid_result(strategy, value)
    try:
        result = Decimal(str(value))
    except InvalidOperation as exc:
        raise _invalid_result(strategy, value) from exc
    if not result.is_finite():
        raise _invalid_result(strategy, value)
    return result


def _invalid_result(strategy: str, value: Any) -> InvalidDataError:
    return InvalidDataError(
        f"{strategy.capitalize()} strategy returned a non-numeric value: {value!r}",
        details={"strategy": strategy, "received": type(value).__name__},
    )


# =============================================================================
# Revenue
# =============================================================================


def calculate_simple_revenue(item: OrderItem) -> Decimal:
    """Revenue of a line item: sale_price * quantity * (1 - discount / 100).

    The result is not rounded; rounding happens once on the seller totals.
    """
    overall_price = item.sale_price * item.quantity
    return overall_price * (1 - item.discount / HUNDRED)


class SimpleRevenueStrategy:
    """Discounted sale price times quantity."""

    def calculate(self, item: OrderItem) -> Decimal:
        return calculate_simple_revenue(item)


class FunctionRevenueStrategy:
    """Adapts a plain ``item -> Decimal`` function to the revenue port."""

    def __init__(self, func: RevenueFunction) -> None:
        self._func = func

    def calculate(self, item: OrderItem) -> Decimal:
        return strategy_result(self._func(item), strategy="revenue")


# =============================================================================
# Bonus
# =============================================================================


def bonus_percentage(rank: int, total: int) -> Decimal:
    """Bonus percentage for a 1-based rank among ``total`` sellers.

    The checks run in order: winner, prize-winners (2nd and 3rd), last place,
    everyone else. A lone seller is therefore both first and last and
    receives the winner percentage; 2nd of 2 receives the prize-winner one.
    """
    if rank == 1:
        return WINNER_BONUS_PERCENTAGE
    if rank in (2, 3):
        return PRIZEWINNER_BONUS_PERCENTAGE
    if rank == total:
        return LAST_PLACE_BONUS_PERCENTAGE
    return COMMON_BONUS_PERCENTAGE


def calculate_bonus_by_profit(index: int, total: int, stats: SellerStats) -> Decimal:
    """Rank-based bonus: a percentage of the seller's profit, rounded to cents."""
    percentage = bonus_percentage(index + 1, total)
    return round_money(stats.profit * percentage / HUNDRED)


class ProfitRankBonusStrategy:
    """15% for 1st, 10% for 2nd-3rd, 0% for last, 5% otherwise."""

    def calculate(self, index: int, total: int, stats: SellerStats) -> Decimal:
        return calculate_bonus_by_profit(index, total, stats)


class FunctionBonusStrategy:
    """Adapts a plain ``(index, total, stats) -> Decimal`` function to the bonus port."""

    def __init__(self, func: BonusFunction) -> None:
        self._func = func

    def calculate(self, index: int, total: int, stats: SellerStats) -> Decimal:
        return strategy_result(self._func(index, total, stats), strategy="bonus")


# =============================================================================
# Coercion and factory
# =============================================================================


def revenue_strategy_from(value: Any) -> RevenueStrategy:
    """Return ``value`` as a revenue strategy.

    Raises:
        InvalidDataError: If ``value`` is neither a strategy nor callable.
    """
    if isinstance(value, RevenueStrategy):
        return value
    if callable(value):
        return FunctionRevenueStrategy(value)
    raise InvalidDataError(
        "Invalid functions provided",
        details={"strategy": "revenue", "received": type(value).__name__},
    )


def bonus_strategy_from(value: Any) -> BonusStrategy:
    """Return ``value`` as a bonus strategy.

    Raises:
        InvalidDataError: If ``value`` is neither a strategy nor callable.
    """
    if isinstance(value, BonusStrategy):
        return value
    if callable(value):
        return FunctionBonusStrategy(value)
    raise InvalidDataError(
        "Invalid functions provided",
        details={"strategy": "bonus", "received": type(value).__name__},
    )


RevenueStrategyName = Literal["simple"]
BonusStrategyName = Literal["profit_rank"]


def strategy_factory(
    revenue: RevenueStrategyName = "simple",
    bonus: BonusStrategyName = "profit_rank",
) -> tuple[RevenueStrategy, BonusStrategy]:
    """Create the named reference strategies.

    Raises:
        ValueError: If a strategy name is unknown.
    """
    if revenue == "simple":
        revenue_strategy: RevenueStrategy = SimpleRevenueStrategy()
    else:
        raise ValueError(f"Unknown revenue strategy: {revenue}")

    if bonus == "profit_rank":
        bonus_strategy: BonusStrategy = ProfitRankBonusStrategy()
    else:
        raise ValueError(f"Unknown bonus strategy: {bonus}")

    return revenue_strategy, bonus_strategy
