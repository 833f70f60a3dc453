from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

from arf.schemas.common import validate_amount


class ManualAction(str, Enum):
    ADD = "add"
    REMOVE = "remove"


class RenewalRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_id: str
    server_id: str
    plan_id: str
    amount: float
    cost: float
    date: datetime


class ManualAdditionCreate(BaseModel):
    amount: float
    description: str = ""
    action: ManualAction = ManualAction.ADD

    @field_validator("amount", mode="before")
    @classmethod
    def parse_magnitude(cls, value: object) -> float:
        amount = validate_amount(value)
        if amount <= 0:
            raise ValueError("Informe um valor maior que zero")
        return amount


class ManualAdditionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    amount: float
    description: str
    date: datetime


class ManualAdditionList(BaseModel):
    balance: float
    items: list[ManualAdditionRead]
