from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from fastapi.responses import Response
from sqlmodel import Session

from arf.api.deps import get_db
from arf.schemas.backup import ImportSummary
from arf.schemas.customer import (
    CustomerCreate,
    CustomerListItem,
    CustomerRead,
    CustomerUpdate,
    NotificationRead,
    RenewRequest,
)
from arf.services.aggregation import CustomerFilters
from arf.services.customer import CustomerService
from arf.services.notification import NotificationService
from arf.services.renewal import FoundingRenewalError, RenewalService
from arf.services.spreadsheet import SpreadsheetError, SpreadsheetImportService

router = APIRouter(prefix="/customers", tags=["customers"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _serialize_customer(customer) -> CustomerRead:
    return CustomerRead.model_validate(customer, from_attributes=True)


@router.get("", response_model=List[CustomerListItem])
def list_customers(
    search: str | None = Query(default=None, description="Filtro por nome ou telefone"),
    server_id: str | None = Query(default=None),
    status_filter: str | None = Query(default=None, alias="status", description="ativo | vencido"),
    session: Session = Depends(get_db),
) -> List[CustomerListItem]:
    filters = CustomerFilters(search=search, server_id=server_id, status=status_filter)
    return CustomerService(session).list_customers(filters)


@router.post("", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
def create_customer(payload: CustomerCreate, session: Session = Depends(get_db)) -> CustomerRead:
    try:
        customer, _ = RenewalService(session).record_new_customer(payload)
    except FoundingRenewalError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return _serialize_customer(customer)


@router.get("/import/template")
def download_import_template(session: Session = Depends(get_db)) -> Response:
    data = SpreadsheetImportService(session).template()
    headers = {"Content-Disposition": "attachment; filename=\"modelo_clientes.xlsx\""}
    return Response(content=data, media_type=XLSX_MEDIA_TYPE, headers=headers)


@router.post("/import", response_model=ImportSummary)
async def import_customers(
    file: UploadFile = File(...),
    session: Session = Depends(get_db),
) -> ImportSummary:
    data = await file.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Arquivo vazio")
    try:
        return SpreadsheetImportService(session).import_file(data)
    except SpreadsheetError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/{customer_id}", response_model=CustomerRead)
def get_customer(customer_id: str, session: Session = Depends(get_db)) -> CustomerRead:
    customer = CustomerService(session).get_customer(customer_id)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cliente não encontrado")
    return _serialize_customer(customer)


@router.patch("/{customer_id}", response_model=CustomerRead)
def update_customer(customer_id: str, payload: CustomerUpdate, session: Session = Depends(get_db)) -> CustomerRead:
    try:
        customer = CustomerService(session).update_customer(customer_id, payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cliente não encontrado")
    return _serialize_customer(customer)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: str, session: Session = Depends(get_db)) -> Response:
    if not CustomerService(session).delete_customer(customer_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cliente não encontrado")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{customer_id}/renew", response_model=CustomerRead)
def renew_customer(customer_id: str, payload: RenewRequest, session: Session = Depends(get_db)) -> CustomerRead:
    result = RenewalService(session).renew(customer_id, payload)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cliente ou plano não encontrado")
    customer, _ = result
    return _serialize_customer(customer)


@router.post("/{customer_id}/notify", response_model=NotificationRead)
def notify_customer(customer_id: str, session: Session = Depends(get_db)) -> NotificationRead:
    notification = NotificationService(session).notify(customer_id)
    if notification is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cliente não encontrado")
    return notification
