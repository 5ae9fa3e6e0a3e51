#!/usr/bin/env python
"""Demonstrate the seller report API.

Usage:
    uv run python examples/seller_report_demo.py

This script demonstrates:
1. Ranking sellers from a sales snapshot
2. Reading revenue, profit, top products and bonus per seller
3. The RFC 7807 error for an unknown seller reference
4. The RFC 7807 error for an empty purchase batch

Prerequisites:
    - API running (uv run uvicorn app.main:app --reload --port 8123)
"""

import copy
import json
import sys
from pathlib import Path

import httpx

API_BASE = "http://localhost:8123"
SALES_DATA_PATH = Path(__file__).parent / "sales_data.json"


def print_section(title: str) -> None:
    """Print a section header."""
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}\n")


def print_problem(response: httpx.Response) -> None:
    """Print an RFC 7807 problem response."""
    problem = response.json()
    print(f"✗ [{response.status_code}] {problem.get('code')}: {problem.get('detail')}")
    if problem.get("details"):
        print(f"  details: {json.dumps(problem['details'])}")
    print(f"  request_id: {problem.get('request_id')}")


def main() -> int:
    """Run the seller report demo."""
    print_section("SalesLeaderboard - Seller Report Demo")

    client = httpx.Client(base_url=API_BASE, timeout=30)

    try:
        health = client.get("/health")
        if health.status_code != 200:
            print(f"API not healthy: {health.status_code}")
            return 1
    except httpx.ConnectError:
        print(f"Cannot connect to API at {API_BASE}")
        print("Start the API with: uv run uvicorn app.main:app --reload --port 8123")
        return 1

    sales_data = json.loads(SALES_DATA_PATH.read_text(encoding="utf-8"))

    # 1. Ranked report
    print_section("1. Ranked Report")
    response = client.post("/seller-stats/report", json=sales_data)
    if response.status_code != 200:
        print_problem(response)
        return 1

    report = response.json()
    print(f"Revenue policy: {report['revenue_policy']}")
    print(f"Sellers ranked: {report['total_sellers']}\n")
    for rank, seller in enumerate(report["sellers"], start=1):
        top = ", ".join(f"{p['sku']} x{p['quantity']}" for p in seller["top_products"])
        print(
            f"  {rank}. {seller['name']:<20} profit {seller['profit']:>10}  "
            f"bonus {seller['bonus']:>8}  sales {seller['sales_count']}"
        )
        print(f"     top: {top}")

    # 2. Unknown seller
    print_section("2. Unknown Seller Reference")
    broken = copy.deepcopy(sales_data)
    broken["purchase_records"][0]["seller_id"] = "seller_404"
    print_problem(client.post("/seller-stats/report", json=broken))

    # 3. Empty batch
    print_section("3. Empty Purchase Batch")
    empty = {**sales_data, "purchase_records": []}
    print_problem(client.post("/seller-stats/report", json=empty))

    print_section("Demo Complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
