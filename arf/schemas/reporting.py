from __future__ import annotations

from pydantic import BaseModel


class LedgerTotals(BaseModel):
    gross_value: float
    total_cost: float
    total_manual: float
    net_value: float


class ServerStats(BaseModel):
    server_id: str
    name: str
    active: int
    # All-time figures from the renewal ledger, not limited to one month.
    monthly_gross: float
    monthly_cost: float
    accumulated_total: float


class ServerProfit(BaseModel):
    server_id: str
    name: str
    cost_per_active: float
    total_active: int
    total_generated: float
    total_paid: float
    profit: float


class ExpiringCustomer(BaseModel):
    customer_id: str
    name: str
    phone: str
    server_name: str | None = None
    due_date: str
    days_until_due: int
    due_label: str
    should_notify: bool
    already_notified: bool


class DashboardSummary(BaseModel):
    totals: LedgerTotals
    server_stats: list[ServerStats]
    expiring: list[ExpiringCustomer]
    pending_notifications: int


class MonthlyReport(BaseModel):
    month: str
    gross: float
    cost: float
    net: float
    renewals_count: int
    manual_additions_count: int
