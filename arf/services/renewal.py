from __future__ import annotations

from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from arf.core.logging_setup import logger
from arf.db.repository import Repository
from arf.models.catalog import Plan, Server
from arf.models.customer import Customer
from arf.models.ledger import ManualAddition, Renewal
from arf.schemas.customer import CustomerCreate, RenewRequest
from arf.schemas.ledger import ManualAction, ManualAdditionCreate
from arf.utils.dates import add_months, format_calendar_date, local_now, local_today, rollover_due_date


class FoundingRenewalError(RuntimeError):
    """The customer was saved but its first renewal was not.

    Customer and renewal are two separate writes; this error reports the
    half-finished state so the operator can fix it.
    """

    def __init__(self, customer_id: str) -> None:
        super().__init__(f"Cliente {customer_id} salvo sem renovação inicial")
        self.customer_id = customer_id


def renewal_cost(server: Server | None, plan: Plan | None) -> float:
    cost_per_active = server.cost_per_active if server else 0
    months = plan.months if plan else 1
    return (cost_per_active or 0) * months


class RenewalService:
    def __init__(self, session: Session) -> None:
        self.session = session
        self.customers = Repository(session, Customer)
        self.servers = Repository(session, Server)
        self.plans = Repository(session, Plan)
        self.renewals = Repository(session, Renewal)
        self.manual_additions = Repository(session, ManualAddition)

    def record_new_customer(
        self,
        payload: CustomerCreate,
        *,
        today: date | None = None,
    ) -> tuple[Customer, Renewal]:
        today = today or local_today()
        server = self.servers.get(payload.server_id)
        plan = self.plans.get(payload.plan_id)

        amount = payload.amount_paid
        if amount is None:
            amount = plan.default_price if plan else 0.0
        due_date = payload.due_date or format_calendar_date(add_months(today, plan.months if plan else 1))

        customer = self.customers.append(
            Customer(
                name=payload.name,
                phone=payload.phone,
                server_id=payload.server_id,
                plan_id=payload.plan_id,
                amount_paid=amount,
                due_date=due_date,
            )
        )
        renewal = self._append_founding_renewal(customer, server, plan)
        logger.info("Cliente %s cadastrado com renovação inicial %s", customer.id, renewal.id)
        return customer, renewal

    def _append_founding_renewal(self, customer: Customer, server: Server | None, plan: Plan | None) -> Renewal:
        try:
            return self.renewals.append(
                Renewal(
                    customer_id=customer.id,
                    server_id=customer.server_id,
                    plan_id=customer.plan_id,
                    amount=customer.amount_paid,
                    cost=renewal_cost(server, plan),
                    date=local_now(),
                )
            )
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Falha ao registrar renovação inicial do cliente %s", customer.id)
            raise FoundingRenewalError(customer.id) from exc

    def renew(
        self,
        customer_id: str,
        payload: RenewRequest,
        *,
        today: date | None = None,
    ) -> tuple[Customer, Renewal] | None:
        customer = self.customers.get(customer_id)
        plan = self.plans.get(payload.plan_id)
        if customer is None or plan is None:
            return None

        today = today or local_today()
        server = self.servers.get(payload.server_id)
        amount = payload.amount_paid
        if amount is None:
            # same plan keeps the negotiated price
            amount = customer.amount_paid if plan.id == customer.plan_id else plan.default_price
        new_due_date = rollover_due_date(customer.due_date, today, plan.months)

        customer = self.customers.update_by_id(
            customer.id,
            {
                "server_id": payload.server_id,
                "plan_id": plan.id,
                "amount_paid": amount,
                "due_date": format_calendar_date(new_due_date),
            },
        )
        renewal = self.renewals.append(
            Renewal(
                customer_id=customer.id,
                server_id=payload.server_id,
                plan_id=plan.id,
                amount=amount,
                cost=renewal_cost(server, plan),
                date=local_now(),
            )
        )
        logger.info("Cliente %s renovado até %s", customer.id, customer.due_date)
        return customer, renewal

    def add_manual_addition(self, payload: ManualAdditionCreate) -> ManualAddition:
        amount = payload.amount
        if payload.action == ManualAction.REMOVE:
            amount = -amount
        description = payload.description.strip() or (
            "Adição manual" if payload.action == ManualAction.ADD else "Remoção manual"
        )
        return self.manual_additions.append(
            ManualAddition(amount=amount, description=description, date=local_now())
        )

    def list_renewals(self, customer_id: str | None = None) -> list[Renewal]:
        statement = select(Renewal).order_by(Renewal.date.desc())
        if customer_id:
            statement = statement.where(Renewal.customer_id == customer_id)
        return list(self.session.exec(statement).all())

    def list_manual_additions(self) -> list[ManualAddition]:
        return list(self.session.exec(select(ManualAddition).order_by(ManualAddition.date.desc())).all())
