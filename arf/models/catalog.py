from __future__ import annotations

from sqlmodel import Field, SQLModel

from arf.models.base import StringIDModel, TimestampedModel

FREE_PLAN_ID = "0"
FREE_PLAN_NAME = "Gratuito"


class Server(StringIDModel, TimestampedModel, table=True):
    __tablename__ = "servers"

    name: str = Field(index=True)
    cost_per_active: float = Field(default=0.0)


class Plan(StringIDModel, TimestampedModel, table=True):
    __tablename__ = "plans"

    name: str
    months: int = Field(default=1)
    default_price: float = Field(default=0.0)


class AppSetting(SQLModel, table=True):
    __tablename__ = "app_settings"

    key: str = Field(primary_key=True, max_length=64)
    value: str


def default_plans() -> list[Plan]:
    return [
        Plan(id=FREE_PLAN_ID, name=FREE_PLAN_NAME, default_price=0, months=1),
        Plan(id="1", name="Mensal", default_price=35, months=1),
        Plan(id="2", name="Trimestral", default_price=90, months=3),
        Plan(id="3", name="Semestral", default_price=160, months=6),
        Plan(id="4", name="Anual", default_price=300, months=12),
    ]
