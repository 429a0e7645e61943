"""
Statistics API endpoints: dashboard, payment status and monthly report.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bluemoon.db import schemas
from bluemoon.db.database import get_db
from bluemoon.api.deps import get_current_user
from bluemoon.services.statistics_service import StatisticsService

router = APIRouter(prefix="/api/statistics", tags=["statistics"], dependencies=[Depends(get_current_user)])


@router.get("/dashboard", response_model=schemas.DashboardStats)
def get_dashboard(db: Session = Depends(get_db)):
    return StatisticsService(db).dashboard()


@router.get("/payment-status", response_model=List[schemas.HouseholdPaymentStatus])
def get_payment_status(db: Session = Depends(get_db)):
    return StatisticsService(db).payment_status()


@router.get("/monthly-report", response_model=schemas.MonthlyReport)
def get_monthly_report(
    year: Optional[int] = Query(default=None, ge=1970, le=9999),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    db: Session = Depends(get_db),
):
    return StatisticsService(db).monthly_report(year=year, month=month)
