#!/usr/bin/env python
"""Seller leaderboard report CLI.

Rank sellers by profit from a JSON sales snapshot and print revenue, profit,
sales count, top products and bonus per seller.

Usage:
    # Ranked table with the configured revenue policy
    uv run python scripts/seller_report.py --input examples/sales_data.json

    # Revenue from precomputed order totals, three top products per seller
    uv run python scripts/seller_report.py --input examples/sales_data.json \
        --policy order_total --top-n 3

    # JSON report written to a file
    uv run python scripts/seller_report.py --input examples/sales_data.json \
        --json --output report.json
"""

from __future__ import annotations

import argparse
import json
import sys
import uuid
from pathlib import Path
from typing import Any

from app.core.config import get_settings
from app.core.exceptions import SalesLeaderboardError
from app.core.logging import configure_logging, request_id_ctx
from app.features.seller_stats import (
    ProfitRankBonusStrategy,
    RevenuePolicy,
    SellerReport,
    SimpleRevenueStrategy,
    analyze_sales_data,
)


def positive_int(value: str) -> int:
    """Parse a strictly positive integer argument.

    Raises:
        argparse.ArgumentTypeError: If the value is not a positive integer.
    """
    try:
        parsed = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Not an integer: {value}") from e
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"Must be at least 1: {value}")
    return parsed


def load_sales_data(path: Path) -> Any:
    """Load a sales snapshot from a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        Decoded JSON document.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        OSError: If the path cannot be read (e.g. a directory).
        ValueError: If the file is not valid JSON or not UTF-8.
    """
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    with path.open(encoding="utf-8") as f:
        try:
            return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="SalesLeaderboard seller report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Ranked table
  seller_report.py --input examples/sales_data.json

  # Order totals as revenue
  seller_report.py --input examples/sales_data.json --policy order_total

  # JSON to file
  seller_report.py --input examples/sales_data.json --json --output report.json
        """,
    )

    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Path to sales snapshot JSON (sellers, products, purchase_records)",
    )
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in RevenuePolicy],
        default=settings.seller_stats_revenue_policy,
        help="Revenue source (default: %(default)s)",
    )
    parser.add_argument(
        "--top-n",
        type=positive_int,
        default=settings.seller_stats_top_products_limit,
        help="Top products per seller (default: %(default)s)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON instead of a table",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the report to this file instead of stdout",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Emit info-level logs",
    )

    return parser


def format_table(reports: list[SellerReport], policy: str) -> str:
    """Render reports as a fixed-width table."""
    lines = [
        f"Seller leaderboard (revenue policy: {policy})",
        "-" * 86,
        f"  {'#':>2}  {'Seller':<24} {'Revenue':>12} {'Profit':>12} {'Sales':>6} {'Bonus':>10}",
        "-" * 86,
    ]
    for rank, report in enumerate(reports, start=1):
        lines.append(
            f"  {rank:>2}  {report.name:<24} {report.revenue:>12,} {report.profit:>12,} "
            f"{report.sales_count:>6} {report.bonus:>10,}"
        )
        if report.top_products:
            top = ", ".join(f"{p.sku} x{p.quantity}" for p in report.top_products)
            lines.append(f"      top: {top}")
    lines.append("-" * 86)
    lines.append(f"  Sellers ranked: {len(reports)}")
    return "\n".join(lines)


def format_json(reports: list[SellerReport], policy: str) -> str:
    """Render reports as a JSON document."""
    document = {
        "revenue_policy": policy,
        "total_sellers": len(reports),
        "sellers": [report.model_dump(mode="json") for report in reports],
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(
        settings.model_copy(
            update={
                "log_level": "INFO" if args.verbose else "WARNING",
                "log_format": "console",
            }
        )
    )
    token = request_id_ctx.set(f"cli-{uuid.uuid4().hex[:12]}")

    try:
        try:
            data = load_sales_data(args.input)
        except (OSError, ValueError) as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1

        try:
            reports = analyze_sales_data(
                data,
                calculate_revenue=SimpleRevenueStrategy(),
                calculate_bonus=ProfitRankBonusStrategy(),
                revenue_policy=args.policy,
                top_products_limit=args.top_n,
            )
        except SalesLeaderboardError as e:
            print(f"ERROR [{e.code}]: {e.message}", file=sys.stderr)
            if e.details:
                print(f"  details: {json.dumps(e.details, default=str)}", file=sys.stderr)
            return 1

        output = format_json(reports, args.policy) if args.json else format_table(reports, args.policy)

        if args.output:
            args.output.write_text(output + "\n", encoding="utf-8")
            print(f"Report written to: {args.output}")
        else:
            print(output)
        return 0
    finally:
        request_id_ctx.reset(token)


if __name__ == "__main__":
    sys.exit(main())
