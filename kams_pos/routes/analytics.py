"""
Analytics Routes for KAMS POS
=============================

Endpoints:
----------
- GET /analytics?range=today|week|month: Sales summary (admin)

Summary Metrics:
----------------
- totalSales / orderCount / averageOrderValue
- paymentMethods: order count per payment method
- orderTypes: order count per order type
- topItems: five best sellers by quantity

Cancelled orders are excluded. An unknown range is treated as "today".
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth import AuthResult, require_admin
from ..db import get_db
from ..schemas.analytics import SalesSummary
from ..services.analytics import sales_summary

logger = logging.getLogger(__name__)

analytics_router = APIRouter(prefix="/analytics", tags=["Analytics"])


@analytics_router.get("", response_model=SalesSummary)
def get_analytics(
    range_name: str = Query("today", alias="range", description="today, week or month"),
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SalesSummary:
    return SalesSummary.model_validate(sales_summary(db, range_name))
