"""
Analytics Schemas for KAMS POS
==============================

Sales summary returned by GET /api/analytics for the dashboard. Cancelled
orders are excluded from every figure.
"""

from decimal import Decimal
from typing import Dict, List

from .common import CamelModel


class TopItem(CamelModel):
    name: str
    count: int


class SalesSummary(CamelModel):
    total_sales: Decimal
    order_count: int
    average_order_value: Decimal
    payment_methods: Dict[str, int]
    order_types: Dict[str, int]
    top_items: List[TopItem]
    range: str
