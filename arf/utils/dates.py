"""Calendar-date helpers for the subscription lifecycle.

Due dates are plain calendar days. They are parsed into ``date`` objects
(local midnight), never into UTC instants, so a customer due on the 10th is
due on the 10th regardless of the server's timezone. Anything that cannot be
parsed becomes ``None`` and callers treat it as an invalid date.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from arf.core.config import settings

INVALID_DATE_LABEL = "Data Inválida"


def local_today() -> date:
    if settings.timezone:
        return datetime.now(ZoneInfo(settings.timezone)).date()
    return date.today()


def local_now() -> datetime:
    """Naive local timestamp used to date ledger entries."""
    if settings.timezone:
        return datetime.now(ZoneInfo(settings.timezone)).replace(tzinfo=None)
    return datetime.now()


def to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    if settings.timezone:
        return value.astimezone(ZoneInfo(settings.timezone)).replace(tzinfo=None)
    return value.astimezone().replace(tzinfo=None)


def parse_calendar_date(value: str | date | None) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    raw = value.strip().split("T")[0]
    if not raw:
        return None
    parts = raw.split("-")
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(part) for part in parts)
    except ValueError:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def format_calendar_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def format_display_date(value: str | date | None) -> str:
    parsed = parse_calendar_date(value)
    if parsed is None:
        return INVALID_DATE_LABEL
    return parsed.strftime("%d/%m/%Y")


def add_months(value: date, months: int) -> date:
    """Add calendar months, clamping to the last day of the target month."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def start_of_month(year: int, month: int) -> datetime:
    return datetime(year, month, 1)


def end_of_month(year: int, month: int) -> datetime:
    last_day = calendar.monthrange(year, month)[1]
    return datetime.combine(date(year, month, last_day), time.max)


def is_active(due: str | date | None, today: date) -> bool:
    # due today still counts as active
    parsed = parse_calendar_date(due)
    if parsed is None:
        return False
    return parsed >= today


def days_until_due(due: str | date | None, today: date) -> int | None:
    parsed = parse_calendar_date(due)
    if parsed is None:
        return None
    return (parsed - today).days


def is_expiring_window(days: int | None) -> bool:
    if days is None:
        return False
    window = settings.expiring_window_days
    return -window <= days <= window


def is_notify_threshold(days: int | None) -> bool:
    return days is not None and days == settings.notify_threshold_days


def rollover_due_date(current_due: str | date | None, today: date, months: int) -> date:
    """Extend from the current due date while active, otherwise from today."""
    parsed = parse_calendar_date(current_due)
    if parsed is not None and parsed >= today:
        return add_months(parsed, months)
    return add_months(today, months)


def status_label(due: str | date | None, today: date) -> str:
    return "Ativo" if is_active(due, today) else "Vencido"


def due_label(days: int | None) -> str:
    if days is None:
        return INVALID_DATE_LABEL
    if days == 0:
        return "Vence hoje"
    if days < 0:
        elapsed = abs(days)
        return f"Vencido há {elapsed} {'dia' if elapsed == 1 else 'dias'}"
    if days == 7:
        return "Vence em 1 semana"
    return f"Vence em {days} dias"
