from __future__ import annotations

from datetime import date
from urllib.parse import quote

from sqlmodel import Session

from arf.core.config import settings
from arf.core.logging_setup import logger
from arf.db.repository import Repository
from arf.models.catalog import AppSetting
from arf.models.customer import Customer
from arf.schemas.customer import NotificationRead
from arf.utils.dates import days_until_due, format_calendar_date, format_display_date, local_today
from arf.utils.money import digits_only, format_currency

WHATSAPP_MESSAGE_KEY = "whatsapp_message"


def render_message(template: str, customer: Customer, days: int) -> str:
    """Fill the reminder template for one customer.

    Each token is replaced once (first occurrence only); a template that
    repeats ``{nome}`` keeps the later copies verbatim.
    """
    return (
        template
        .replace("{nome}", customer.name, 1)
        .replace("{valor}", format_currency(customer.amount_paid), 1)
        .replace("{dias}", "hoje" if days == 0 else f"{days} dias", 1)
        .replace("{vencimento}", format_display_date(customer.due_date), 1)
    )


def whatsapp_link(phone: str, message: str) -> str:
    base = settings.whatsapp_base_url.rstrip("/")
    return f"{base}/{digits_only(phone)}?text={quote(message, safe='')}"


class NotificationService:
    def __init__(self, session: Session) -> None:
        self.session = session
        self.customers = Repository(session, Customer)
        self.settings_repo = Repository(session, AppSetting)

    def get_template(self) -> str:
        stored = self.session.get(AppSetting, WHATSAPP_MESSAGE_KEY)
        if stored and stored.value:
            return stored.value
        return settings.default_whatsapp_message

    def set_template(self, message: str) -> str:
        stored = self.session.get(AppSetting, WHATSAPP_MESSAGE_KEY)
        if stored is None:
            stored = AppSetting(key=WHATSAPP_MESSAGE_KEY, value=message)
        else:
            stored.value = message
        self.settings_repo.append(stored)
        return stored.value

    def notify(self, customer_id: str, *, today: date | None = None) -> NotificationRead | None:
        customer = self.customers.get(customer_id)
        if customer is None:
            return None
        today = today or local_today()
        days = days_until_due(customer.due_date, today)
        # an unreadable due date is announced as due today
        message = render_message(self.get_template(), customer, days if days is not None else 0)
        stamp = format_calendar_date(today)
        self.customers.update_by_id(customer.id, {"last_notified_date": stamp})
        logger.info("Lembrete de renovação gerado para o cliente %s", customer.id)
        return NotificationRead(
            customer_id=customer.id,
            phone=digits_only(customer.phone),
            message=message,
            link=whatsapp_link(customer.phone, message),
            last_notified_date=stamp,
        )
