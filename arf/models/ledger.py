from __future__ import annotations

from datetime import datetime

from sqlmodel import Field

from arf.models.base import StringIDModel


class Renewal(StringIDModel, table=True):
    __tablename__ = "renewals"

    customer_id: str = Field(max_length=64, index=True)
    # Server and plan in effect when the payment happened.
    server_id: str = Field(default="", max_length=64, index=True)
    plan_id: str = Field(default="", max_length=64)
    amount: float = Field(default=0.0)
    cost: float = Field(default=0.0)
    date: datetime = Field(index=True)


class ManualAddition(StringIDModel, table=True):
    __tablename__ = "manual_additions"

    amount: float
    description: str = Field(default="")
    date: datetime = Field(index=True)
