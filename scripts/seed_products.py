#!/usr/bin/env python3
"""
Seed products from a JSON file, or from a small built-in catalogue when no
file is given. Entries go through ProductService, so names that already
exist (case-insensitively) are skipped rather than duplicated.

The JSON may be a list of entries or an object with an "items" list. Each
entry needs a name and a price; "quantity" (or "stock") defaults to 0.

Usage:
    python scripts/seed_products.py --file products.json
"""
import argparse
import json
import logging
import os
import sys
from decimal import Decimal, InvalidOperation

from pydantic import ValidationError

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from inventory_api.config import settings
from inventory_api.db import SessionLocal, init_db
from inventory_api.schemas.product_schema import ProductRecord
from inventory_api.services.product_service import DuplicateProductName, ProductService
from inventory_api.utils.logging_config import setup_logging

log = logging.getLogger("seed_products")

SAMPLE_PRODUCTS = [
    {"name": "Widget", "description": "Standard steel widget", "price": "9.99", "quantity": 5, "category": "Hardware"},
    {"name": "Gadget Pro", "description": "Multi-purpose gadget", "price": "24.50", "quantity": 40, "category": "Electronics"},
    {"name": "USB-C Cable", "description": "1m braided cable", "price": "7.25", "quantity": 120, "category": "Electronics"},
    {"name": "Desk Lamp", "description": "LED lamp with dimmer", "price": "32.00", "quantity": 8, "category": "Home Office"},
    {"name": "Notebook A5", "description": "Dotted paper, 120 pages", "price": "4.90", "quantity": 0, "category": "Stationery"},
]


def _normalize_entry(entry):
    """Return a dict with keys name, description, price, quantity, category."""
    raw_price = entry.get("price", entry.get("amount", 0))
    try:
        price = Decimal(str(raw_price))
    except InvalidOperation:
        price = Decimal("0")

    try:
        quantity = int(entry.get("quantity", entry.get("stock", 0)) or 0)
    except (TypeError, ValueError):
        quantity = 0

    return {
        "name": (entry.get("name") or entry.get("title") or "").strip(),
        "description": entry.get("description") or None,
        "price": price,
        "quantity": quantity,
        "category": entry.get("category") or None,
    }


def load_entries(path):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        return data.get("items", [])
    if isinstance(data, list):
        return data
    return []


def seed(entries):
    db = SessionLocal()
    svc = ProductService(db)
    created = skipped = 0
    try:
        for entry in entries:
            norm = _normalize_entry(entry)
            if not norm["name"]:
                continue
            try:
                svc.create_product(ProductRecord(**norm))
                created += 1
            except DuplicateProductName:
                skipped += 1
            except ValidationError as e:
                log.warning("Skipping invalid entry %r: %s", norm["name"], e)
                skipped += 1
        log.info("Seeded products: created=%d skipped=%d", created, skipped)
    finally:
        db.close()
    return created, skipped


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to a JSON list of product entries")
    args = parser.parse_args()
    setup_logging(settings.LOG_LEVEL)
    if args.file and not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    init_db()
    seed(load_entries(args.file) if args.file else SAMPLE_PRODUCTS)
