from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from arf.schemas.common import IDModel, Timestamped, validate_amount


class ServerCreate(BaseModel):
    name: str = Field(min_length=1)
    cost_per_active: float

    @field_validator("cost_per_active", mode="before")
    @classmethod
    def parse_cost(cls, value: object) -> float:
        cost = validate_amount(value)
        if cost < 0:
            raise ValueError("O custo não pode ser negativo")
        return cost


class ServerUpdate(BaseModel):
    name: str | None = None
    cost_per_active: float | None = None

    @field_validator("cost_per_active", mode="before")
    @classmethod
    def parse_cost(cls, value: object) -> float | None:
        if value is None:
            return None
        cost = validate_amount(value)
        if cost < 0:
            raise ValueError("O custo não pode ser negativo")
        return cost


class ServerRead(IDModel, Timestamped):
    name: str
    cost_per_active: float


class PlanRead(IDModel, Timestamped):
    name: str
    months: int
    default_price: float


class PlanPriceUpdate(BaseModel):
    default_price: float

    @field_validator("default_price", mode="before")
    @classmethod
    def parse_price(cls, value: object) -> float:
        return validate_amount(value)


class PlanReplaceItem(BaseModel):
    id: str | None = None
    name: str = Field(min_length=1)
    months: int = Field(default=1, ge=1)
    default_price: float = 0.0

    @field_validator("default_price", mode="before")
    @classmethod
    def parse_price(cls, value: object) -> float:
        return validate_amount(value)


class MessageTemplate(BaseModel):
    message: str = Field(min_length=1)
