# src/stockroom/catalog02/sample_data.py

"""
Demo inventory loaded when no import file is available.
"""

from typing import List

from stockroom.catalog02.product import Product


def sample_inventory() -> List[Product]:
    return [
        Product(name="Ceramic Vase - Blue", category="Homeware", supplier="Acme Ceramics",
                cost=8.50, rrp=24.00, stock=45, sales_last_month=4, sales_historical=120),
        Product(name="Scented Candle - Fig", category="Gifts", supplier="Wax Works",
                cost=3.50, rrp=12.00, stock=12, sales_last_month=48, sales_historical=500),
        Product(name="Linen Shirt - White", category="Clothing", supplier="Natural Fibres",
                cost=15.00, rrp=45.00, stock=8, sales_last_month=15, sales_historical=200),
        Product(name="Oak Picture Frame", category="Homeware", supplier="Frame It",
                cost=6.00, rrp=18.00, stock=60, sales_last_month=2, sales_historical=50),
        Product(name="Greeting Card - Bday", category="Gifts", supplier="Paper Dreams",
                cost=0.45, rrp=2.95, stock=150, sales_last_month=80, sales_historical=1200),
    ]
