"""
Sales Analytics Service for KAMS POS
====================================

Aggregates orders for the admin dashboard.

Ranges:
-------
- today: since local midnight today
- week:  since local midnight seven days ago
- month: since local midnight thirty days ago

"Local" is the store timezone from config.STORE_TIMEZONE, so the business
day rolls over at the shop's midnight rather than at UTC midnight.

Any other value is treated as "today". Cancelled orders are excluded from
every figure. Top items are ranked by the summed quantity of their line
snapshots, so renamed menu items are counted under the name they were sold
with.
"""

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import config
from ..models import Order, OrderItem, OrderStatus

logger = logging.getLogger(__name__)

RANGE_DAYS = {
    "today": 0,
    "week": 7,
    "month": 30,
}
TOP_ITEM_LIMIT = 5
CENTS = Decimal("0.01")


def range_start(range_name: str, now: Optional[datetime] = None, tz: Optional[ZoneInfo] = None) -> datetime:
    """Start of the reporting window for a range name, returned in UTC."""
    tz = tz or ZoneInfo(config.STORE_TIMEZONE)
    local_now = (now or datetime.now(timezone.utc)).astimezone(tz)
    start_of_day = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    start = start_of_day - timedelta(days=RANGE_DAYS.get(range_name, 0))
    return start.astimezone(timezone.utc)


def sales_summary(db: Session, range_name: str = "today", now: Optional[datetime] = None) -> Dict[str, Any]:
    """Build the dashboard summary for the given range."""
    if range_name not in RANGE_DAYS:
        range_name = "today"
    since = range_start(range_name, now)

    window = (
        Order.created_at >= since,
        Order.status != OrderStatus.CANCELLED.value,
    )

    order_count, total_sales = (
        db.query(func.count(Order.id), func.coalesce(func.sum(Order.total), 0))
        .filter(*window)
        .one()
    )
    total_sales = Decimal(str(total_sales or 0)).quantize(CENTS)
    order_count = order_count or 0
    average = (total_sales / order_count).quantize(CENTS) if order_count else Decimal("0.00")

    payment_methods = dict(
        db.query(Order.payment_method, func.count(Order.id))
        .filter(*window)
        .group_by(Order.payment_method)
        .all()
    )
    order_types = dict(
        db.query(Order.type, func.count(Order.id))
        .filter(*window)
        .group_by(Order.type)
        .all()
    )

    quantity = func.sum(OrderItem.quantity)
    top_rows = (
        db.query(OrderItem.name_snapshot, quantity)
        .join(Order, OrderItem.order_id == Order.id)
        .filter(*window)
        .group_by(OrderItem.name_snapshot)
        .order_by(quantity.desc(), OrderItem.name_snapshot)
        .limit(TOP_ITEM_LIMIT)
        .all()
    )

    logger.debug("Analytics %s since %s: %d orders", range_name, since.isoformat(), order_count)

    return {
        "total_sales": total_sales,
        "order_count": order_count,
        "average_order_value": average,
        "payment_methods": payment_methods,
        "order_types": order_types,
        "top_items": [{"name": name, "count": int(count)} for name, count in top_rows],
        "range": range_name,
    }
