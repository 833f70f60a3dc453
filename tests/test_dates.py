from datetime import date

import pytest

from arf.utils.dates import (
    INVALID_DATE_LABEL,
    add_months,
    days_until_due,
    due_label,
    format_display_date,
    is_active,
    is_expiring_window,
    is_notify_threshold,
    parse_calendar_date,
    rollover_due_date,
    status_label,
)


def test_parse_calendar_date_discards_time_suffix():
    assert parse_calendar_date("2024-03-10") == date(2024, 3, 10)
    assert parse_calendar_date("2024-03-10T00:00:00.000Z") == date(2024, 3, 10)
    assert parse_calendar_date("2024-03-10T23:30:00-03:00") == date(2024, 3, 10)


@pytest.mark.parametrize("value", [None, "", "   ", "2024-03", "2024/03/10", "aaaa-bb-cc", "2024-02-30", "2024-13-01"])
def test_parse_calendar_date_invalid_inputs_return_none(value):
    assert parse_calendar_date(value) is None


def test_is_active_includes_due_today():
    today = date(2024, 3, 15)
    assert is_active("2024-03-15", today) is True
    assert is_active("2024-03-16", today) is True
    assert is_active("2024-03-14", today) is False
    assert is_active("lixo", today) is False
    assert status_label("2024-03-15", today) == "Ativo"
    assert status_label("2024-03-14", today) == "Vencido"


def test_days_until_due_is_antisymmetric():
    a, b = date(2024, 1, 10), date(2024, 3, 2)
    assert days_until_due(a, b) == -days_until_due(b, a)
    assert days_until_due("2024-03-17", date(2024, 3, 10)) == 7
    assert days_until_due("invalido", date(2024, 3, 10)) is None


def test_expiring_window_and_notify_threshold():
    assert all(is_expiring_window(days) for days in range(-7, 8))
    assert not is_expiring_window(8)
    assert not is_expiring_window(-8)
    assert not is_expiring_window(None)

    assert is_notify_threshold(7)
    assert not is_notify_threshold(6)
    assert not is_notify_threshold(0)
    assert not is_notify_threshold(None)


def test_add_months_clamps_to_month_end():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert add_months(date(2024, 11, 30), 3) == date(2025, 2, 28)
    assert add_months(date(2024, 5, 15), 12) == date(2025, 5, 15)


def test_rollover_extends_active_subscription_from_due_date():
    assert rollover_due_date("2024-01-31", date(2024, 1, 15), 1) == date(2024, 2, 29)


def test_rollover_restarts_expired_subscription_from_today():
    assert rollover_due_date("2024-01-01", date(2024, 3, 15), 1) == date(2024, 4, 15)


def test_rollover_due_today_counts_as_active():
    assert rollover_due_date("2024-03-15", date(2024, 3, 15), 3) == date(2024, 6, 15)


def test_rollover_invalid_due_date_uses_today():
    assert rollover_due_date("sem data", date(2024, 3, 15), 1) == date(2024, 4, 15)


def test_rollover_never_lands_in_the_past():
    today = date(2024, 6, 10)
    for due in ("2023-01-01", "2024-06-09", "2024-06-10", "2024-12-31"):
        assert rollover_due_date(due, today, 1) > today


def test_due_labels():
    assert due_label(0) == "Vence hoje"
    assert due_label(-1) == "Vencido há 1 dia"
    assert due_label(-5) == "Vencido há 5 dias"
    assert due_label(7) == "Vence em 1 semana"
    assert due_label(3) == "Vence em 3 dias"
    assert due_label(None) == INVALID_DATE_LABEL


def test_format_display_date():
    assert format_display_date("2024-03-05") == "05/03/2024"
    assert format_display_date("") == INVALID_DATE_LABEL
