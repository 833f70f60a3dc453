from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from arf.utils.dates import format_calendar_date, parse_calendar_date
from arf.utils.money import parse_amount


class Timestamped(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    created_at: datetime
    updated_at: datetime | None = None


class IDModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str


def validate_amount(value: object) -> float:
    return parse_amount(value)  # type: ignore[arg-type]


def validate_calendar_date(value: str | date) -> str:
    parsed = parse_calendar_date(value)
    if parsed is None:
        raise ValueError("Data inválida, use AAAA-MM-DD")
    return format_calendar_date(parsed)
