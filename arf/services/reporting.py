from __future__ import annotations

from datetime import date

from sqlmodel import Session

from arf.db.repository import Repository
from arf.models.catalog import Plan, Server
from arf.models.customer import Customer
from arf.models.ledger import ManualAddition, Renewal
from arf.schemas.reporting import DashboardSummary, LedgerTotals, MonthlyReport, ServerProfit, ServerStats
from arf.services import aggregation
from arf.utils.dates import local_today


def parse_month(value: str | None, today: date | None = None) -> tuple[int, int]:
    """Parse ``YYYY-MM``; empty means the current month."""
    if not value:
        current = today or local_today()
        return current.year, current.month
    parts = value.strip().split("-")
    if len(parts) != 2:
        raise ValueError("Mês inválido, use AAAA-MM")
    try:
        year, month = int(parts[0]), int(parts[1])
    except ValueError as exc:
        raise ValueError("Mês inválido, use AAAA-MM") from exc
    if not 1 <= month <= 12 or year < 1:
        raise ValueError("Mês inválido, use AAAA-MM")
    return year, month


class ReportingService:
    """Loads the collections and hands them to the aggregation functions."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.servers = Repository(session, Server)
        self.plans = Repository(session, Plan)
        self.customers = Repository(session, Customer)
        self.renewals = Repository(session, Renewal)
        self.manual_additions = Repository(session, ManualAddition)

    def totals(self) -> LedgerTotals:
        return aggregation.ledger_totals(self.renewals.load(), self.manual_additions.load())

    def dashboard(self, *, today: date | None = None) -> DashboardSummary:
        return aggregation.dashboard_summary(
            self.servers.load(),
            self.customers.load(),
            self.renewals.load(),
            self.manual_additions.load(),
            today or local_today(),
        )

    def server_stats(self, *, today: date | None = None) -> list[ServerStats]:
        return aggregation.server_stats(
            self.servers.load(),
            self.customers.load(),
            self.renewals.load(),
            today or local_today(),
        )

    def server_profit(self, *, today: date | None = None) -> list[ServerProfit]:
        return aggregation.server_profit(
            self.servers.load(),
            self.customers.load(),
            self.plans.load(),
            today or local_today(),
        )

    def pending_notifications(self, *, today: date | None = None) -> list[Customer]:
        return aggregation.pending_notifications(self.customers.load(), today or local_today())

    def monthly_report(self, month: str | None = None, *, today: date | None = None) -> MonthlyReport:
        year, month_number = parse_month(month, today)
        return aggregation.monthly_report(
            self.renewals.load(),
            self.manual_additions.load(),
            year,
            month_number,
        )
