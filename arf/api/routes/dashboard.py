from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session

from arf.api.deps import get_db
from arf.schemas.customer import CustomerRead
from arf.schemas.reporting import DashboardSummary, LedgerTotals, MonthlyReport
from arf.services.reporting import ReportingService

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardSummary)
def read_dashboard(session: Session = Depends(get_db)) -> DashboardSummary:
    return ReportingService(session).dashboard()


@router.get("/dashboard/totals", response_model=LedgerTotals)
def read_totals(session: Session = Depends(get_db)) -> LedgerTotals:
    return ReportingService(session).totals()


@router.get("/dashboard/notifications", response_model=List[CustomerRead])
def read_pending_notifications(session: Session = Depends(get_db)) -> List[CustomerRead]:
    customers = ReportingService(session).pending_notifications()
    return [CustomerRead.model_validate(customer, from_attributes=True) for customer in customers]


@router.get("/reports/monthly", response_model=MonthlyReport)
def read_monthly_report(
    month: str | None = Query(default=None, description="Mês no formato AAAA-MM"),
    session: Session = Depends(get_db),
) -> MonthlyReport:
    try:
        return ReportingService(session).monthly_report(month)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
