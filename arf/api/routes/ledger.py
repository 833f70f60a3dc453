from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from arf.api.deps import get_db
from arf.schemas.ledger import ManualAdditionCreate, ManualAdditionList, ManualAdditionRead, RenewalRead
from arf.services.renewal import RenewalService

router = APIRouter(tags=["ledger"])


@router.get("/renewals", response_model=List[RenewalRead])
def list_renewals(
    customer_id: str | None = Query(default=None),
    session: Session = Depends(get_db),
) -> List[RenewalRead]:
    renewals = RenewalService(session).list_renewals(customer_id)
    return [RenewalRead.model_validate(renewal) for renewal in renewals]


@router.get("/manual-additions", response_model=ManualAdditionList)
def list_manual_additions(session: Session = Depends(get_db)) -> ManualAdditionList:
    additions = RenewalService(session).list_manual_additions()
    return ManualAdditionList(
        balance=sum(addition.amount for addition in additions),
        items=[ManualAdditionRead.model_validate(addition) for addition in additions],
    )


@router.post("/manual-additions", response_model=ManualAdditionRead, status_code=status.HTTP_201_CREATED)
def create_manual_addition(payload: ManualAdditionCreate, session: Session = Depends(get_db)) -> ManualAdditionRead:
    addition = RenewalService(session).add_manual_addition(payload)
    return ManualAdditionRead.model_validate(addition)
