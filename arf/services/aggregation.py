"""Money and lifecycle views derived from the stored collections.

Everything here is a pure function of its arguments: the same collections and
the same ``today`` always produce the same result. Two profit models coexist
on purpose:

* the ledger model (:func:`ledger_totals`, :func:`server_stats`,
  :func:`monthly_report`) sums immutable renewal records and answers "how much
  money came in and went out";
* the snapshot model (:func:`server_profit`) looks only at customers active
  today and answers "what does each server yield right now".
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from arf.models.catalog import Plan, Server
from arf.models.customer import Customer
from arf.models.ledger import ManualAddition, Renewal
from arf.schemas.reporting import (
    DashboardSummary,
    ExpiringCustomer,
    LedgerTotals,
    MonthlyReport,
    ServerProfit,
    ServerStats,
)
from arf.utils.dates import (
    days_until_due,
    due_label,
    end_of_month,
    format_calendar_date,
    is_active,
    is_expiring_window,
    is_notify_threshold,
    parse_calendar_date,
    start_of_month,
)


@dataclass
class CustomerFilters:
    search: str | None = None
    server_id: str | None = None
    status: str | None = None  # "ativo" | "vencido"


def ledger_totals(renewals: Iterable[Renewal], manual_additions: Iterable[ManualAddition]) -> LedgerTotals:
    renewal_list = list(renewals)
    gross = sum(renewal.amount for renewal in renewal_list)
    cost = sum(renewal.cost or 0 for renewal in renewal_list)
    manual = sum(addition.amount for addition in manual_additions)
    return LedgerTotals(
        gross_value=gross,
        total_cost=cost,
        total_manual=manual,
        net_value=(gross - cost) + manual,
    )


def server_stats(
    servers: Sequence[Server],
    customers: Iterable[Customer],
    renewals: Iterable[Renewal],
    today: date,
) -> list[ServerStats]:
    stats: dict[str, ServerStats] = {
        server.id: ServerStats(
            server_id=server.id,
            name=server.name,
            active=0,
            monthly_gross=0.0,
            monthly_cost=0.0,
            accumulated_total=0.0,
        )
        for server in servers
    }

    for renewal in renewals:
        entry = stats.get(renewal.server_id)
        if entry is None:
            continue
        entry.monthly_gross += renewal.amount
        entry.monthly_cost += renewal.cost or 0
        entry.accumulated_total += renewal.amount

    for customer in customers:
        entry = stats.get(customer.server_id)
        if entry is not None and is_active(customer.due_date, today):
            entry.active += 1

    return list(stats.values())


def server_profit(
    servers: Sequence[Server],
    customers: Sequence[Customer],
    plans: Sequence[Plan],
    today: date,
) -> list[ServerProfit]:
    months_by_plan = {plan.id: plan.months for plan in plans}
    results: list[ServerProfit] = []
    for server in servers:
        active_customers = [
            customer
            for customer in customers
            if customer.server_id == server.id and is_active(customer.due_date, today)
        ]
        total_generated = sum(customer.amount_paid for customer in active_customers)
        total_paid = sum(
            server.cost_per_active * months_by_plan.get(customer.plan_id, 1)
            for customer in active_customers
        )
        results.append(
            ServerProfit(
                server_id=server.id,
                name=server.name,
                cost_per_active=server.cost_per_active,
                total_active=len(active_customers),
                total_generated=total_generated,
                total_paid=total_paid,
                profit=total_generated - total_paid,
            )
        )
    return results


def _due_sort_key(customer: Customer) -> tuple[int, date]:
    parsed = parse_calendar_date(customer.due_date)
    if parsed is None:
        return (1, date.max)
    return (0, parsed)


def sort_by_due_date(customers: Iterable[Customer]) -> list[Customer]:
    """Ascending by due date; invalid dates go last."""
    return sorted(customers, key=_due_sort_key)


def expiring_queue(customers: Iterable[Customer], today: date) -> list[Customer]:
    expiring = [
        customer
        for customer in customers
        if is_expiring_window(days_until_due(customer.due_date, today))
    ]
    return sort_by_due_date(expiring)


def was_notified_today(customer: Customer, today: date) -> bool:
    return customer.last_notified_date == format_calendar_date(today)


def pending_notifications(customers: Iterable[Customer], today: date) -> list[Customer]:
    return [
        customer
        for customer in expiring_queue(customers, today)
        if is_notify_threshold(days_until_due(customer.due_date, today))
        and not was_notified_today(customer, today)
    ]


def monthly_report(
    renewals: Iterable[Renewal],
    manual_additions: Iterable[ManualAddition],
    year: int,
    month: int,
) -> MonthlyReport:
    start = start_of_month(year, month)
    end = end_of_month(year, month)

    month_renewals = [renewal for renewal in renewals if start <= renewal.date <= end]
    month_additions = [addition for addition in manual_additions if start <= addition.date <= end]

    gross = sum(renewal.amount for renewal in month_renewals) + sum(
        addition.amount for addition in month_additions if addition.amount > 0
    )
    cost = sum(renewal.cost or 0 for renewal in month_renewals) + abs(
        sum(addition.amount for addition in month_additions if addition.amount < 0)
    )
    return MonthlyReport(
        month=f"{year:04d}-{month:02d}",
        gross=gross,
        cost=cost,
        net=gross - cost,
        renewals_count=len(month_renewals),
        manual_additions_count=len(month_additions),
    )


def dashboard_summary(
    servers: Sequence[Server],
    customers: Sequence[Customer],
    renewals: Sequence[Renewal],
    manual_additions: Sequence[ManualAddition],
    today: date,
) -> DashboardSummary:
    server_names = {server.id: server.name for server in servers}
    expiring: list[ExpiringCustomer] = []
    for customer in expiring_queue(customers, today):
        days = days_until_due(customer.due_date, today)
        notified = was_notified_today(customer, today)
        expiring.append(
            ExpiringCustomer(
                customer_id=customer.id,
                name=customer.name,
                phone=customer.phone,
                server_name=server_names.get(customer.server_id),
                due_date=customer.due_date,
                days_until_due=days,
                due_label=due_label(days),
                should_notify=is_notify_threshold(days) and not notified,
                already_notified=notified,
            )
        )

    return DashboardSummary(
        totals=ledger_totals(renewals, manual_additions),
        server_stats=server_stats(servers, customers, renewals, today),
        expiring=expiring,
        pending_notifications=len(pending_notifications(customers, today)),
    )


def filter_customers(customers: Iterable[Customer], filters: CustomerFilters, today: date) -> list[Customer]:
    search = (filters.search or "").strip().lower()
    status = (filters.status or "").strip().lower()
    matched: list[Customer] = []
    for customer in customers:
        if search and search not in customer.name.lower() and search not in (customer.phone or ""):
            continue
        if filters.server_id and customer.server_id != filters.server_id:
            continue
        if status in {"ativo", "vencido"}:
            customer_status = "ativo" if is_active(customer.due_date, today) else "vencido"
            if customer_status != status:
                continue
        matched.append(customer)
    return sort_by_due_date(matched)
