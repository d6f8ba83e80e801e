"""Shared pytest fixtures for freightquote tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml


@pytest.fixture
def quotation_data() -> dict[str, Any]:
    """A small two-vendor sea freight quotation."""
    return {
        "id": "quot-001",
        "quote_number": "IQ25120034",
        "customer_name": "Northwind Trading",
        "tax_rate": 0.12,
        "vendors": [
            {"id": "db-1", "vendor_id": "V-ACME", "name": "Acme Shipping", "service_tag": "Forwarding"},
            {"id": "db-2", "vendor_id": "V-PORT", "name": "Port Brokers", "service_tag": "Brokerage"},
        ],
        "buying_price": [
            {
                "id": "b-freight",
                "category_name": "SEA FREIGHT",
                "line_items": [
                    {
                        "id": "b1",
                        "description": "O/F",
                        "price": 40,
                        "currency": "USD",
                        "quantity": 3,
                        "forex_rate": 56,
                        "vendor_id": "V-ACME",
                    },
                ],
            },
            {
                "id": "b-origin",
                "category_name": "ORIGIN LOCAL CHARGES",
                "line_items": [
                    {"id": "b2", "description": "CFS", "price": 1500, "quantity": 1, "vendor_id": "V-PORT"},
                    {"id": "b3", "description": "Docs", "price": 500, "quantity": 1, "is_taxed": True},
                ],
            },
        ],
        "selling_price": [
            {
                "id": "s-freight",
                "category_name": "SEA FREIGHT",
                "line_items": [
                    {
                        "id": "s1",
                        "description": "O/F",
                        "base_cost": 40,
                        "percentage_added": 25,
                        "currency": "USD",
                        "quantity": 3,
                        "forex_rate": 56,
                        "vendor_id": "V-ACME",
                    },
                ],
            },
            {
                "id": "s-origin",
                "category_name": "ORIGIN LOCAL CHARGES",
                "line_items": [
                    {
                        "id": "s2",
                        "description": "CFS",
                        "base_cost": 1500,
                        "amount_added": 300,
                        "quantity": 1,
                        "is_taxed": True,
                        "vendor_id": "V-PORT",
                    },
                ],
            },
        ],
    }


@pytest.fixture
def quotation_file(tmp_path: Path, quotation_data: dict[str, Any]) -> Path:
    path = tmp_path / "quotation.yaml"
    path.write_text(yaml.safe_dump(quotation_data))
    return path
