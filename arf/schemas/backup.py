"""Wire format of the JSON backup file (camelCase keys)."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from arf.models.base import new_id


class BackupRecord(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(default_factory=new_id)


class BackupServer(BackupRecord):
    name: str
    cost_per_active: float = 0.0


class BackupPlan(BackupRecord):
    name: str
    months: int = Field(default=1, ge=1)
    default_price: float = 0.0


class BackupCustomer(BackupRecord):
    name: str
    phone: str = ""
    server_id: str = ""
    plan_id: str = ""
    amount_paid: float = 0.0
    # Kept verbatim; unparsable dates are classified as invalid, not rejected.
    due_date: str = ""
    last_notified_date: str | None = None

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_missing_due_date(cls, value: object) -> object:
        return "" if value is None else value


class BackupRenewal(BackupRecord):
    customer_id: str
    server_id: str = ""
    plan_id: str = ""
    amount: float = 0.0
    cost: float = 0.0
    date: datetime


class BackupManualAddition(BackupRecord):
    amount: float
    description: str = ""
    date: datetime


class BackupFile(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    customers: list[BackupCustomer]
    servers: list[BackupServer]
    plans: list[BackupPlan]
    renewals: list[BackupRenewal]
    manual_additions: list[BackupManualAddition]
    version: str
    export_date: datetime


class RestoreSummary(BaseModel):
    customers: int | None = None
    servers: int | None = None
    plans: int | None = None
    renewals: int | None = None
    manual_additions: int | None = None


class ImportSummary(BaseModel):
    imported: int
    skipped: int
