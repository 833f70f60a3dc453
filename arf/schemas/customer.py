from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, field_validator

from arf.schemas.common import IDModel, Timestamped, validate_amount, validate_calendar_date


class CustomerCreate(BaseModel):
    name: str = Field(min_length=1)
    phone: str = ""
    server_id: str = ""
    plan_id: str = ""
    # Defaults to the plan's price / today + plan months when omitted.
    amount_paid: float | None = None
    due_date: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Nome é obrigatório")
        return value

    @field_validator("amount_paid", mode="before")
    @classmethod
    def parse_amount_paid(cls, value: object) -> float | None:
        if value is None:
            return None
        return validate_amount(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def normalize_due_date(cls, value: str | date | None) -> str | None:
        if value is None or value == "":
            return None
        return validate_calendar_date(value)


class CustomerUpdate(BaseModel):
    name: str | None = None
    phone: str | None = None
    server_id: str | None = None
    plan_id: str | None = None
    amount_paid: float | None = None
    due_date: str | None = None

    @field_validator("amount_paid", mode="before")
    @classmethod
    def parse_amount_paid(cls, value: object) -> float | None:
        if value is None:
            return None
        return validate_amount(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def normalize_due_date(cls, value: str | date | None) -> str | None:
        if value is None:
            return None
        return validate_calendar_date(value)


class CustomerRead(IDModel, Timestamped):
    name: str
    phone: str
    server_id: str
    plan_id: str
    amount_paid: float
    due_date: str
    last_notified_date: str | None = None


class CustomerListItem(CustomerRead):
    server_name: str | None = None
    plan_name: str | None = None
    status: str
    days_until_due: int | None = None
    due_label: str


class RenewRequest(BaseModel):
    server_id: str
    plan_id: str
    amount_paid: float | None = None

    @field_validator("amount_paid", mode="before")
    @classmethod
    def parse_amount_paid(cls, value: object) -> float | None:
        if value is None:
            return None
        return validate_amount(value)


class NotificationRead(BaseModel):
    customer_id: str
    phone: str
    message: str
    link: str
    last_notified_date: str
