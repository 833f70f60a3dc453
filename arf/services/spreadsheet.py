"""Customer import from an Excel workbook.

Headers are matched loosely: a column belongs to a field when its header
contains one of the field's aliases, ignoring case. Rows without a name are
skipped; every imported row also gets its founding renewal.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from io import BytesIO
from typing import Any, Iterable, Mapping

from openpyxl import Workbook, load_workbook
from openpyxl.utils.datetime import from_excel
from sqlmodel import Session, select

from arf.core.logging_setup import logger
from arf.models.catalog import Plan, Server
from arf.models.customer import Customer
from arf.models.ledger import Renewal
from arf.schemas.backup import ImportSummary
from arf.utils.dates import add_months, format_calendar_date, local_now, local_today
from arf.utils.money import digits_only, parse_loose_amount

HEADER_ALIASES: dict[str, list[str]] = {
    "name": ["Nome"],
    "phone": ["Telefone", "Celular", "WhatsApp"],
    "server": ["Servidor"],
    "plan": ["Plano"],
    "amount": ["Valor", "Preço"],
    "due_date": ["Vencimento", "Data", "Vence"],
}

TEMPLATE_HEADERS = ["Nome", "Telefone", "Servidor", "Plano", "Valor", "Vencimento (DD/MM/AAAA)"]


class SpreadsheetError(ValueError):
    """The uploaded file is not a readable workbook."""


@dataclass
class SpreadsheetRow:
    name: str
    phone: str = ""
    server: str = ""
    plan: str = ""
    amount: Any = None
    due_date: Any = None


def read_workbook_rows(data: bytes) -> list[dict[str, Any]]:
    """First worksheet as a list of ``{header: value}`` dicts."""
    try:
        workbook = load_workbook(BytesIO(data), read_only=True, data_only=True)
    except Exception as exc:  # openpyxl raises several unrelated types for bad files
        raise SpreadsheetError("Erro ao ler o arquivo Excel. Verifique o formato e tente novamente.") from exc

    try:
        sheet = workbook.worksheets[0]
        rows = sheet.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            return []
        keys = [str(cell).strip() if cell is not None else "" for cell in header]
        return [
            {key: ("" if value is None else value) for key, value in zip(keys, row) if key}
            for row in rows
        ]
    finally:
        workbook.close()


def pick_field(row: Mapping[str, Any], field: str) -> Any:
    for alias in HEADER_ALIASES[field]:
        for key, value in row.items():
            if alias.lower() in key.lower():
                return value
    return ""


def cell_text(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value or "").strip()


def to_spreadsheet_row(row: Mapping[str, Any]) -> SpreadsheetRow | None:
    name = cell_text(pick_field(row, "name"))
    if not name:
        return None
    return SpreadsheetRow(
        name=name,
        phone=cell_text(pick_field(row, "phone")),
        server=cell_text(pick_field(row, "server")),
        plan=cell_text(pick_field(row, "plan")),
        amount=pick_field(row, "amount"),
        due_date=pick_field(row, "due_date"),
    )


def parse_cell_date(value: Any) -> date | None:
    """Native date cell, ``DD/MM/YYYY`` text or an Excel day serial."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        serial = value
    else:
        text = str(value).strip()
        parts = text.split("/")
        if len(parts) == 3:
            try:
                day, month, year = (int(part) for part in parts)
                return date(year, month, day)
            except ValueError:
                return None
        try:
            serial = float(text)
        except ValueError:
            return None
    try:
        converted = from_excel(serial)
    except (ValueError, OverflowError, TypeError):
        return None
    if isinstance(converted, datetime):
        return converted.date()
    if isinstance(converted, date):
        return converted
    return None


def build_template(server_name: str = "Servidor 1", plan_name: str = "Mensal", price: float = 35) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Clientes"
    sheet.append(TEMPLATE_HEADERS)
    example_due = add_months(local_today(), 1).strftime("%d/%m/%Y")
    sheet.append(["João Silva", "5511999999999", server_name, plan_name, price, example_due])
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


class SpreadsheetImportService:
    def __init__(self, session: Session) -> None:
        self.session = session

    def template(self) -> bytes:
        servers, plans = self._catalog()
        if servers and plans:
            return build_template(servers[0].name, plans[0].name, plans[0].default_price)
        return build_template()

    def _catalog(self) -> tuple[list[Server], list[Plan]]:
        """Servers and plans in registration order; index 0 is the import fallback."""
        servers = self.session.exec(select(Server).order_by(Server.created_at, Server.id)).all()
        plans = self.session.exec(select(Plan).order_by(Plan.created_at, Plan.id)).all()
        return list(servers), list(plans)

    def import_file(self, data: bytes, *, today: date | None = None) -> ImportSummary:
        return self.import_rows(read_workbook_rows(data), today=today)

    def import_rows(self, rows: Iterable[Mapping[str, Any]], *, today: date | None = None) -> ImportSummary:
        today = today or local_today()
        servers, plans = self._catalog()
        customers: list[Customer] = []
        renewals: list[Renewal] = []
        skipped = 0

        for index, raw in enumerate(rows, start=2):
            if all(value in ("", None) for value in raw.values()):
                continue
            try:
                mapped = to_spreadsheet_row(raw)
                if mapped is None:
                    skipped += 1
                    continue
                customer, renewal = self._build_records(mapped, servers, plans, today)
            except (ValueError, TypeError, AttributeError):
                logger.warning("Linha %s da planilha ignorada: formato inválido", index)
                skipped += 1
                continue
            customers.append(customer)
            renewals.append(renewal)

        if customers:
            self.session.add_all(customers)
            self.session.add_all(renewals)
            self.session.commit()
        logger.info("Importação de planilha: %s importados, %s ignorados", len(customers), skipped)
        return ImportSummary(imported=len(customers), skipped=skipped)

    @staticmethod
    def _build_records(
        row: SpreadsheetRow,
        servers: list[Server],
        plans: list[Plan],
        today: date,
    ) -> tuple[Customer, Renewal]:
        matched_server = next((s for s in servers if s.name.lower() == row.server.lower()), None)
        server = matched_server or (servers[0] if servers else None)

        matched_plan = next((p for p in plans if p.name.lower() == row.plan.lower()), None)
        plan = matched_plan or (plans[0] if plans else None)
        months = plan.months if plan else 1

        amount = parse_loose_amount(row.amount)
        if amount is None:
            amount = matched_plan.default_price if matched_plan else 0.0

        due = parse_cell_date(row.due_date) or add_months(today, months)

        customer = Customer(
            name=row.name,
            phone=digits_only(row.phone),
            server_id=server.id if server else "",
            plan_id=plan.id if plan else "",
            amount_paid=amount,
            due_date=format_calendar_date(due),
        )
        renewal = Renewal(
            customer_id=customer.id,
            server_id=customer.server_id,
            plan_id=customer.plan_id,
            amount=amount,
            cost=(server.cost_per_active if server else 0) * months,
            date=local_now(),
        )
        return customer, renewal
