from typing import Any, Generator

from sqlmodel import Session, SQLModel, create_engine, select

from arf.core.config import settings
from arf.core.logging_setup import logger
from arf.db import base as _models  # noqa: F401
from arf.models.catalog import FREE_PLAN_ID, FREE_PLAN_NAME, Plan, default_plans

connect_args: dict[str, Any] = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    future=True,
    connect_args=connect_args,
)


def init_db() -> None:
    SQLModel.metadata.create_all(bind=engine)
    with Session(engine) as session:
        seed_default_plans(session)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def seed_default_plans(session: Session) -> None:
    existing = session.exec(select(Plan)).first()
    if existing is None:
        session.add_all(default_plans())
        session.commit()
        logger.info("Planos padrão criados.")
        return
    ensure_free_plan(session)


def ensure_free_plan(session: Session) -> Plan:
    """The free plan must always exist; recreate it when missing."""
    free_plan = session.exec(select(Plan).where(Plan.name == FREE_PLAN_NAME)).first()
    if free_plan is not None:
        return free_plan
    plan_id = FREE_PLAN_ID if session.get(Plan, FREE_PLAN_ID) is None else None
    free_plan = Plan(name=FREE_PLAN_NAME, default_price=0, months=1)
    if plan_id:
        free_plan.id = plan_id
    session.add(free_plan)
    session.commit()
    session.refresh(free_plan)
    logger.warning("Plano '%s' ausente. Recriado automaticamente.", FREE_PLAN_NAME)
    return free_plan
