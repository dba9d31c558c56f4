"""
Shared fixtures for the Stock Room test suite.
"""

import logging

import matplotlib
matplotlib.use("Agg")

import pytest
import yaml

from stockroom.catalog02.inventory_store import InventoryStore
from stockroom.catalog02.product import Product
from stockroom.utils.logger import PROJECT_LOGGER_NAME, project_handlers


@pytest.fixture(autouse=True)
def reset_project_logger():
    """get_logger caches its handlers; drop them around every test."""
    logger = logging.getLogger(PROJECT_LOGGER_NAME)

    def drop():
        for handler in project_handlers(logger):
            logger.removeHandler(handler)
            handler.close()

    drop()
    yield
    drop()


@pytest.fixture
def vase():
    return Product(
        id=1, name="Ceramic Vase - Blue", category="Homeware", supplier="Acme Ceramics",
        cost=8.50, rrp=24.00, stock=45, sales_last_month=4, sales_historical=120,
    )


@pytest.fixture
def sample_products(vase):
    return [
        vase,
        Product(id=2, name="Scented Candle - Fig", category="Gifts", supplier="Wax Works",
                cost=3.50, rrp=12.00, stock=12, sales_last_month=48, sales_historical=500),
        Product(id=3, name="Linen Shirt - White", category="Clothing", supplier="Natural Fibres",
                cost=15.00, rrp=45.00, stock=8, sales_last_month=15, sales_historical=200),
        Product(id=4, name="Oak Picture Frame", category="Homeware", supplier="Frame It",
                cost=6.00, rrp=18.00, stock=60, sales_last_month=2, sales_historical=50),
        Product(id=5, name="Greeting Card - Bday", category="Gifts", supplier="Paper Dreams",
                cost=0.45, rrp=2.95, stock=150, sales_last_month=80, sales_historical=1200),
    ]


@pytest.fixture
def sample_store(sample_products):
    return InventoryStore(sample_products)


@pytest.fixture
def config_dict(tmp_path):
    """Valid configuration rooted in tmp_path."""
    return {
        "project": {"name": "stockroom-test"},
        "paths": {
            "logs": str(tmp_path / "logs"),
            "data": {"raw": str(tmp_path / "raw")},
            "output": {
                "reports": str(tmp_path / "outputs" / "reports"),
                "plots": str(tmp_path / "outputs" / "plots"),
                "advice": str(tmp_path / "outputs" / "advice"),
            },
        },
        "logging": {"level": "INFO", "log_to_file": False, "filename": "test.log"},
        "ingestion": {
            "inventory_file": "stock_room_inventory.csv",
            "encoding": "utf-8",
            "use_sample_when_missing": True,
        },
        "planning": {
            "vat_divisor": 1.2,
            "weeks_per_month": 4,
            "forecast_weeks": 4,
            "cover_display_cap_weeks": 52,
            "overstock_factor": 1.5,
            "understock_factor": 0.8,
        },
        "actions": {
            "clearance_min_stock": 20,
            "clearance_max_sales": 3,
            "restock_max_stock": 10,
            "restock_min_sales": 10,
            "margin_review_max_margin_pct": 40,
            "margin_review_min_sales": 5,
        },
        "llm": {
            "enabled": False,
            "endpoint": "https://example.test/models/{model}:generateContent",
            "model": "test-model",
            "api_key_env": "STOCKROOM_TEST_API_KEY",
            "timeout_seconds": 5,
            "max_context_items": 50,
        },
        "visualization": {"enabled": False},
        "execution": {"mode": "dev", "save_outputs": False},
    }


@pytest.fixture
def write_config(tmp_path):
    """Write a config dictionary to YAML and return its path."""

    def _write(config, name="config.yaml"):
        path = tmp_path / name
        path.write_text(yaml.safe_dump(config), encoding="utf-8")
        return str(path)

    return _write


class FakeResponse:
    def __init__(self, status_code=200, payload=None, json_error=False):
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        self._payload = payload
        self._json_error = json_error

    def json(self):
        if self._json_error:
            raise ValueError("not json")
        return self._payload


class FakeSession:
    """Records POST calls and replays a canned response or exception."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


def gemini_payload(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}
