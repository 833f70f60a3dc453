from __future__ import annotations

from sqlmodel import Session, select

from arf.core.logging_setup import logger
from arf.db.repository import Repository
from arf.db.session import ensure_free_plan
from arf.models.base import new_id
from arf.models.catalog import Plan, Server
from arf.schemas.catalog import PlanReplaceItem, ServerCreate, ServerUpdate


class CatalogService:
    def __init__(self, session: Session) -> None:
        self.session = session
        self.servers = Repository(session, Server)
        self.plans = Repository(session, Plan)

    # Servers ------------------------------------------------------------
    def list_servers(self) -> list[Server]:
        return list(self.session.exec(select(Server).order_by(Server.created_at)).all())

    def get_server(self, server_id: str) -> Server | None:
        return self.servers.get(server_id)

    def create_server(self, payload: ServerCreate) -> Server:
        server = Server(name=payload.name.strip(), cost_per_active=payload.cost_per_active)
        return self.servers.append(server)

    def update_server(self, server_id: str, payload: ServerUpdate) -> Server | None:
        return self.servers.update_by_id(server_id, payload.model_dump(exclude_unset=True, exclude_none=True))

    def delete_server(self, server_id: str) -> bool:
        # customers keep the dangling server_id
        deleted = self.servers.delete_by_id(server_id)
        if deleted:
            logger.info("Servidor %s removido; clientes vinculados mantidos.", server_id)
        return deleted

    # Plans --------------------------------------------------------------
    def list_plans(self) -> list[Plan]:
        ensure_free_plan(self.session)
        return list(self.session.exec(select(Plan).order_by(Plan.months, Plan.default_price)).all())

    def get_plan(self, plan_id: str) -> Plan | None:
        return self.plans.get(plan_id)

    def update_plan_price(self, plan_id: str, default_price: float) -> Plan | None:
        return self.plans.update_by_id(plan_id, {"default_price": default_price})

    def replace_plans(self, items: list[PlanReplaceItem]) -> list[Plan]:
        plans = [
            Plan(
                id=item.id or new_id(),
                name=item.name.strip(),
                months=item.months,
                default_price=item.default_price,
            )
            for item in items
        ]
        if len({plan.id for plan in plans}) != len(plans):
            raise ValueError("IDs de plano duplicados")
        self.plans.replace_all(plans)
        ensure_free_plan(self.session)
        return self.list_plans()
