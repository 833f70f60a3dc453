from __future__ import annotations

from datetime import datetime
from typing import Any, Generic, Iterable, TypeVar

from sqlmodel import Session, SQLModel, select

ModelT = TypeVar("ModelT", bound=SQLModel)


class Repository(Generic[ModelT]):
    """Record-level access to one collection.

    Each write commits immediately; there is no transaction spanning two
    repositories.
    """

    def __init__(self, session: Session, model: type[ModelT]) -> None:
        self.session = session
        self.model = model

    def load(self) -> list[ModelT]:
        return list(self.session.exec(select(self.model)).all())

    def get(self, record_id: str | None) -> ModelT | None:
        if not record_id:
            return None
        return self.session.get(self.model, record_id)

    def append(self, record: ModelT) -> ModelT:
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def update_by_id(self, record_id: str, partial: dict[str, Any]) -> ModelT | None:
        record = self.get(record_id)
        if record is None:
            return None
        for field, value in partial.items():
            setattr(record, field, value)
        if hasattr(record, "updated_at"):
            record.updated_at = datetime.utcnow()
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def delete_by_id(self, record_id: str) -> bool:
        record = self.get(record_id)
        if record is None:
            return False
        self.session.delete(record)
        self.session.commit()
        return True

    def replace_all(self, records: Iterable[ModelT], *, commit: bool = True) -> list[ModelT]:
        items = list(records)
        for existing in self.load():
            self.session.delete(existing)
        # deletes must reach the database before re-adding records with the same ids
        self.session.flush()
        self.session.add_all(items)
        if commit:
            self.session.commit()
            for item in items:
                self.session.refresh(item)
        return items
