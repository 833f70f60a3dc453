from __future__ import annotations

import json
from typing import Any, Callable

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from arf.core.config import settings
from arf.core.logging_setup import logger
from arf.db.repository import Repository
from arf.db.session import ensure_free_plan, seed_default_plans
from arf.models.catalog import AppSetting, Plan, Server
from arf.models.customer import Customer
from arf.models.ledger import ManualAddition, Renewal
from arf.schemas.backup import (
    BackupCustomer,
    BackupFile,
    BackupManualAddition,
    BackupPlan,
    BackupRenewal,
    BackupServer,
    RestoreSummary,
)
from arf.utils.dates import local_now, to_local_naive


class BackupError(ValueError):
    """The backup file cannot be restored; nothing was changed."""


def _dated(model: type[SQLModel]) -> Callable[[Any], SQLModel]:
    def build(record: Any) -> SQLModel:
        data = record.model_dump()
        data["date"] = to_local_naive(data["date"])
        return model(**data)

    return build


def _plain(model: type[SQLModel]) -> Callable[[Any], SQLModel]:
    def build(record: Any) -> SQLModel:
        return model(**record.model_dump())

    return build


# backup key -> (summary field, record schema, table model, record -> model)
COLLECTIONS: dict[str, tuple[str, type, type[SQLModel], Callable[[Any], SQLModel]]] = {
    "customers": ("customers", BackupCustomer, Customer, _plain(Customer)),
    "servers": ("servers", BackupServer, Server, _plain(Server)),
    "plans": ("plans", BackupPlan, Plan, _plain(Plan)),
    "renewals": ("renewals", BackupRenewal, Renewal, _dated(Renewal)),
    "manualAdditions": ("manual_additions", BackupManualAddition, ManualAddition, _dated(ManualAddition)),
}


class BackupService:
    def __init__(self, session: Session) -> None:
        self.session = session

    def export(self) -> dict[str, Any]:
        backup = BackupFile(
            customers=[BackupCustomer.model_validate(item.model_dump()) for item in Repository(self.session, Customer).load()],
            servers=[BackupServer.model_validate(item.model_dump()) for item in Repository(self.session, Server).load()],
            plans=[BackupPlan.model_validate(item.model_dump()) for item in Repository(self.session, Plan).load()],
            renewals=[BackupRenewal.model_validate(item.model_dump()) for item in Repository(self.session, Renewal).load()],
            manual_additions=[
                BackupManualAddition.model_validate(item.model_dump())
                for item in Repository(self.session, ManualAddition).load()
            ],
            version=settings.backup_version,
            export_date=local_now(),
        )
        return backup.model_dump(mode="json", by_alias=True)

    def restore(self, raw: bytes | str) -> RestoreSummary:
        """Replace every collection present in the file.

        The whole file is validated first; a single bad record aborts the
        restore before anything is written.
        """
        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise BackupError("Arquivo de backup inválido. Verifique o arquivo.") from exc
        if not isinstance(payload, dict):
            raise BackupError("Arquivo de backup inválido. Verifique o arquivo.")

        staged: dict[str, list[SQLModel]] = {}
        for key, (_, schema, _, build) in COLLECTIONS.items():
            items = payload.get(key)
            if not isinstance(items, list):
                continue
            try:
                records = TypeAdapter(list[schema]).validate_python(items)
            except ValidationError as exc:
                raise BackupError(f"Registros inválidos em '{key}'. Verifique o arquivo.") from exc
            if len({record.id for record in records}) != len(records):
                raise BackupError(f"IDs duplicados em '{key}'. Verifique o arquivo.")
            staged[key] = [build(record) for record in records]

        summary = RestoreSummary()
        try:
            for key, models in staged.items():
                field, _, model, _ = COLLECTIONS[key]
                Repository(self.session, model).replace_all(models, commit=False)
                setattr(summary, field, len(models))
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Falha ao restaurar backup")
            raise

        if "plans" in staged:
            ensure_free_plan(self.session)
        logger.info("Backup restaurado: %s", summary.model_dump(exclude_none=True))
        return summary

    def clear_all(self) -> None:
        for model in (Customer, Renewal, ManualAddition, Server, Plan, AppSetting):
            Repository(self.session, model).replace_all([], commit=False)
        self.session.commit()
        seed_default_plans(self.session)
        logger.warning("Todos os dados foram apagados pelo operador.")
