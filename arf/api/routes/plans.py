from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from arf.api.deps import get_db
from arf.schemas.catalog import MessageTemplate, PlanPriceUpdate, PlanRead, PlanReplaceItem
from arf.services.catalog import CatalogService
from arf.services.notification import NotificationService

router = APIRouter(tags=["plans"])


@router.get("/plans", response_model=List[PlanRead])
def list_plans(session: Session = Depends(get_db)) -> List[PlanRead]:
    plans = CatalogService(session).list_plans()
    return [PlanRead.model_validate(plan, from_attributes=True) for plan in plans]


@router.put("/plans", response_model=List[PlanRead])
def replace_plans(payload: List[PlanReplaceItem], session: Session = Depends(get_db)) -> List[PlanRead]:
    try:
        plans = CatalogService(session).replace_plans(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return [PlanRead.model_validate(plan, from_attributes=True) for plan in plans]


@router.get("/plans/{plan_id}", response_model=PlanRead)
def get_plan(plan_id: str, session: Session = Depends(get_db)) -> PlanRead:
    plan = CatalogService(session).get_plan(plan_id)
    if not plan:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plano não encontrado")
    return PlanRead.model_validate(plan, from_attributes=True)


@router.patch("/plans/{plan_id}", response_model=PlanRead)
def update_plan_price(plan_id: str, payload: PlanPriceUpdate, session: Session = Depends(get_db)) -> PlanRead:
    plan = CatalogService(session).update_plan_price(plan_id, payload.default_price)
    if not plan:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plano não encontrado")
    return PlanRead.model_validate(plan, from_attributes=True)


@router.get("/settings/message", response_model=MessageTemplate)
def read_message_template(session: Session = Depends(get_db)) -> MessageTemplate:
    return MessageTemplate(message=NotificationService(session).get_template())


@router.put("/settings/message", response_model=MessageTemplate)
def update_message_template(payload: MessageTemplate, session: Session = Depends(get_db)) -> MessageTemplate:
    return MessageTemplate(message=NotificationService(session).set_template(payload.message))
