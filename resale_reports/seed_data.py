#!/usr/bin/env python3
"""
seed_data.py

Generates a deterministic demo inventory to a records CSV under a local folder
(default: sample_data/inventory_records.csv).

Records:
- monthly sales of the core products across the sales channels
- a few extra random sales per month (seeded)
- open inventory in every non-sold status, plus a handful of long-held units

Run:
  python -m resale_reports.seed_data --months 12 --as-of 2024-12-31
"""

from __future__ import annotations
import argparse
import csv
import os
import random
import sys
from datetime import date, timedelta
from typing import Dict, List, Optional

from .config import get_config
from .data.models import Channel, ItemStatus

# -----------------------------
# Config & helper structures
# -----------------------------

PRODUCT_TEMPLATES = [
    {"product_id": "PRD-001", "product_name": "4K Drone Explorer", "category": "Electronics",
     "base_cost": 7_600_000, "base_price": 12_800_000},
    {"product_id": "PRD-002", "product_name": "Smart Air Purifier", "category": "Home",
     "base_cost": 3_900_000, "base_price": 7_200_000},
    {"product_id": "PRD-003", "product_name": "Performance Running Shoes", "category": "Apparel",
     "base_cost": 1_450_000, "base_price": 3_100_000},
    {"product_id": "PRD-004", "product_name": "Collector Vinyl Set", "category": "Collectibles",
     "base_cost": 2_100_000, "base_price": 5_000_000},
    {"product_id": "PRD-005", "product_name": "Compact Espresso Maker", "category": "Home",
     "base_cost": 2_650_000, "base_price": 5_200_000},
    {"product_id": "PRD-006", "product_name": "Hybrid Smartwatch", "category": "Electronics",
     "base_cost": 2_500_000, "base_price": 4_600_000},
]

# Units held for a long time, as (days held, days listed) before the as-of day.
LONG_HELD_ITEMS = [
    {"item_id": "INV-OLD-1", "product_id": "PRD-004-RARE", "product_name": "Collector Vinyl (Limited)",
     "category": "Collectibles", "channel": Channel.MARKETPLACE, "status": ItemStatus.LISTED,
     "held": 210, "listed": 170, "price": 6_400_000, "cost": 2_800_000, "refurb_cost": 0},
    {"item_id": "INV-OLD-2", "product_id": "PRD-007", "product_name": "Vintage Camera Lens",
     "category": "Collectibles", "channel": Channel.ONLINE_STORE, "status": ItemStatus.RESERVED,
     "held": 120, "listed": 90, "price": 9_800_000, "cost": 5_700_000, "refurb_cost": 640_000},
    {"item_id": "INV-OLD-3", "product_id": "PRD-008", "product_name": "Studio Lighting Kit",
     "category": "Electronics", "channel": Channel.WHOLESALE, "status": ItemStatus.IN_STOCK,
     "held": 310, "listed": None, "price": 18_400_000, "cost": 11_200_000, "refurb_cost": 0},
]

CHANNELS = list(Channel)
OPEN_STATUSES = [ItemStatus.IN_STOCK, ItemStatus.LISTED, ItemStatus.RESERVED, ItemStatus.REPAIR]

HEADERS = [
    "item_id", "product_id", "product_name", "category", "channel", "status",
    "acquired_at", "listed_at", "sold_at", "price", "cost", "refurb_cost",
]


# -----------------------------
# Utility functions
# -----------------------------

def ensure_dir(path: str) -> None:
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)

def month_starts(as_of: date, months: int) -> List[date]:
    """First day of each of the `months` calendar months ending with the month of `as_of`."""
    starts = []
    year, month = as_of.year, as_of.month
    for _ in range(months):
        starts.append(date(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(starts))

def iso(d: Optional[date]) -> str:
    return d.isoformat() if d else ""


# -----------------------------
# Core generators
# -----------------------------

def gen_sold_records(as_of: date, months: int) -> List[Dict]:
    """Three core products sold every month, rotating through the channels."""
    rows = []
    for month_index, month_start in enumerate(month_starts(as_of, months)):
        for template_index, template in enumerate(PRODUCT_TEMPLATES[:3]):
            sold = month_start + timedelta(days=12 + template_index * 5)
            if sold > as_of:
                continue
            rows.append({
                "item_id": f"ITM-{month_index + 1:02d}{template_index + 1}",
                "product_id": template["product_id"],
                "product_name": template["product_name"],
                "category": template["category"],
                "channel": CHANNELS[(month_index + template_index) % len(CHANNELS)].value,
                "status": ItemStatus.SOLD.value,
                "acquired_at": iso(sold - timedelta(days=14 + template_index)),
                "listed_at": iso(sold - timedelta(days=8)),
                "sold_at": iso(sold),
                "price": template["base_price"] + (month_index + 1) * 120_000 + template_index * 85_000,
                "cost": template["base_cost"] + month_index * 75_000 + template_index * 65_000,
                "refurb_cost": 380_000 + month_index * 8_000 if template_index % 2 == 0 else 0,
            })
    return rows

def gen_extra_sales(as_of: date, months: int, rng: random.Random) -> List[Dict]:
    """A few random sales per month of any product; some are sold at a loss."""
    rows = []
    for month_index, month_start in enumerate(month_starts(as_of, months)):
        for n in range(rng.randint(1, 4)):
            template = rng.choice(PRODUCT_TEMPLATES)
            sold = month_start + timedelta(days=rng.randint(0, 27))
            if sold > as_of:
                continue
            held = rng.randint(3, 150)
            refurb_cost = rng.choice([0, 0, 0, rng.randint(1, 8) * 50_000])
            rows.append({
                "item_id": f"ITM-X{month_index + 1:02d}{n + 1}",
                "product_id": template["product_id"],
                "product_name": template["product_name"],
                "category": template["category"],
                "channel": rng.choice(CHANNELS).value,
                "status": ItemStatus.SOLD.value,
                "acquired_at": iso(sold - timedelta(days=held)),
                "listed_at": iso(sold - timedelta(days=rng.randint(0, held))),
                "sold_at": iso(sold),
                "price": int(template["base_price"] * rng.uniform(0.7, 1.4)) // 1_000 * 1_000,
                "cost": template["base_cost"],
                "refurb_cost": refurb_cost,
            })
    return rows

def gen_inventory_records(as_of: date) -> List[Dict]:
    """One open bundle unit per product, cycling through the non-sold statuses."""
    rows = []
    for index, template in enumerate(PRODUCT_TEMPLATES):
        base = as_of - timedelta(days=45 + index * 7)
        status = OPEN_STATUSES[index % len(OPEN_STATUSES)]
        rows.append({
            "item_id": f"INV-{index + 1}",
            "product_id": f"{template['product_id']}-INV",
            "product_name": f"{template['product_name']} (Bundle)",
            "category": template["category"],
            "channel": CHANNELS[(index + 2) % len(CHANNELS)].value,
            "status": status.value,
            "acquired_at": iso(base - timedelta(days=18)),
            "listed_at": "" if status == ItemStatus.IN_STOCK else iso(base - timedelta(days=7)),
            "sold_at": "",
            "price": template["base_price"] + 450_000 + index * 70_000,
            "cost": template["base_cost"] + 160_000 + index * 45_000,
            "refurb_cost": 320_000 if index % 3 == 0 else 0,
        })

    for item in LONG_HELD_ITEMS:
        listed = item["listed"]
        rows.append({
            "item_id": item["item_id"],
            "product_id": item["product_id"],
            "product_name": item["product_name"],
            "category": item["category"],
            "channel": item["channel"].value,
            "status": item["status"].value,
            "acquired_at": iso(as_of - timedelta(days=item["held"])),
            "listed_at": iso(as_of - timedelta(days=listed)) if listed is not None else "",
            "sold_at": "",
            "price": item["price"],
            "cost": item["cost"],
            "refurb_cost": item["refurb_cost"],
        })
    return rows

def write_csv(path: str, rows: List[Dict], headers: List[str]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=headers)
        w.writeheader()
        for r in rows:
            w.writerow(r)


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Generate a demo inventory records CSV.")
    parser.add_argument("--months", type=int, default=config.default_seed_months,
                        help="Number of calendar months of sales history.")
    parser.add_argument("--as-of", type=str, default=None, help="YYYY-MM-DD (defaults to today)")
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    parser.add_argument("--seed", type=int, default=config.default_seed_value)
    parser.add_argument("--no-overwrite", action="store_true", help="Fail if the CSV already exists.")
    args = parser.parse_args(argv)

    if args.months < 1:
        parser.error("--months must be at least 1")
    as_of = date.fromisoformat(args.as_of) if args.as_of else date.today()
    rng = random.Random(args.seed)

    outdir = args.output_dir
    ensure_dir(outdir)
    path = os.path.join(outdir, config.records_file)
    if args.no_overwrite and os.path.exists(path):
        print(f"Refusing to overwrite existing file: {path}", file=sys.stderr)
        return 2

    sold = gen_sold_records(as_of, args.months) + gen_extra_sales(as_of, args.months, rng)
    inventory = gen_inventory_records(as_of)
    write_csv(path, sold + inventory, HEADERS)

    # simple summary
    print(f"Generated data in {outdir}")
    print(f" sold: {len(sold)} | open inventory: {len(inventory)} | as of: {as_of.isoformat()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
