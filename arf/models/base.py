from datetime import datetime
from uuid import uuid4

from sqlmodel import Field, SQLModel


def new_id() -> str:
    return str(uuid4())


class TimestampedModel(SQLModel):
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
    updated_at: datetime | None = Field(default=None, nullable=True)


class StringIDModel(SQLModel):
    id: str = Field(default_factory=new_id, primary_key=True, index=True, max_length=64)
