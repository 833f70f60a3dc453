from __future__ import annotations

from sqlmodel import Field

from arf.models.base import StringIDModel, TimestampedModel


class Customer(StringIDModel, TimestampedModel, table=True):
    __tablename__ = "customers"

    name: str = Field(index=True)
    phone: str = Field(default="", max_length=64)

    # Plain ids, not foreign keys: servers/plans can be removed while customers keep the reference.
    server_id: str = Field(default="", max_length=64, index=True)
    plan_id: str = Field(default="", max_length=64)

    amount_paid: float = Field(default=0.0)
    due_date: str = Field(max_length=32, index=True)
    last_notified_date: str | None = Field(default=None, max_length=32)
