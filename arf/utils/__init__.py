from arf.utils.dates import (
    add_months,
    days_until_due,
    format_display_date,
    is_active,
    is_expiring_window,
    is_notify_threshold,
    local_today,
    parse_calendar_date,
    rollover_due_date,
)
from arf.utils.money import digits_only, format_currency, parse_amount

__all__ = [
    "add_months",
    "days_until_due",
    "format_display_date",
    "is_active",
    "is_expiring_window",
    "is_notify_threshold",
    "local_today",
    "parse_calendar_date",
    "rollover_due_date",
    "digits_only",
    "format_currency",
    "parse_amount",
]
