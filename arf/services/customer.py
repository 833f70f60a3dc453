from __future__ import annotations

from datetime import date

from sqlmodel import Session

from arf.db.repository import Repository
from arf.models.catalog import Plan, Server
from arf.models.customer import Customer
from arf.schemas.customer import CustomerListItem, CustomerRead, CustomerUpdate
from arf.services.aggregation import CustomerFilters, filter_customers
from arf.utils.dates import days_until_due, due_label, local_today, status_label


class CustomerService:
    def __init__(self, session: Session) -> None:
        self.session = session
        self.customers = Repository(session, Customer)
        self.servers = Repository(session, Server)
        self.plans = Repository(session, Plan)

    def list_customers(self, filters: CustomerFilters, *, today: date | None = None) -> list[CustomerListItem]:
        today = today or local_today()
        server_names = {server.id: server.name for server in self.servers.load()}
        plan_names = {plan.id: plan.name for plan in self.plans.load()}
        items: list[CustomerListItem] = []
        for customer in filter_customers(self.customers.load(), filters, today):
            days = days_until_due(customer.due_date, today)
            read = CustomerRead.model_validate(customer, from_attributes=True)
            items.append(
                CustomerListItem(
                    **read.model_dump(),
                    server_name=server_names.get(customer.server_id),
                    plan_name=plan_names.get(customer.plan_id),
                    status=status_label(customer.due_date, today),
                    days_until_due=days,
                    due_label=due_label(days),
                )
            )
        return items

    def get_customer(self, customer_id: str) -> Customer | None:
        return self.customers.get(customer_id)

    def update_customer(self, customer_id: str, payload: CustomerUpdate) -> Customer | None:
        # Editing is not a payment: no renewal is recorded.
        update_data = payload.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in update_data:
            update_data["name"] = update_data["name"].strip()
            if not update_data["name"]:
                raise ValueError("Nome é obrigatório")
        return self.customers.update_by_id(customer_id, update_data)

    def delete_customer(self, customer_id: str) -> bool:
        # renewal history stays in the ledger
        return self.customers.delete_by_id(customer_id)
