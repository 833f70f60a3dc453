from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response
from sqlmodel import Session

from arf.api.deps import get_db
from arf.schemas.catalog import ServerCreate, ServerRead, ServerUpdate
from arf.schemas.reporting import ServerProfit, ServerStats
from arf.services.catalog import CatalogService
from arf.services.reporting import ReportingService

router = APIRouter(prefix="/servers", tags=["servers"])


@router.get("", response_model=List[ServerRead])
def list_servers(session: Session = Depends(get_db)) -> List[ServerRead]:
    servers = CatalogService(session).list_servers()
    return [ServerRead.model_validate(server, from_attributes=True) for server in servers]


@router.post("", response_model=ServerRead, status_code=status.HTTP_201_CREATED)
def create_server(payload: ServerCreate, session: Session = Depends(get_db)) -> ServerRead:
    server = CatalogService(session).create_server(payload)
    return ServerRead.model_validate(server, from_attributes=True)


@router.get("/stats", response_model=List[ServerStats])
def read_server_stats(session: Session = Depends(get_db)) -> List[ServerStats]:
    return ReportingService(session).server_stats()


@router.get("/profit", response_model=List[ServerProfit])
def read_server_profit(session: Session = Depends(get_db)) -> List[ServerProfit]:
    return ReportingService(session).server_profit()


@router.get("/{server_id}", response_model=ServerRead)
def get_server(server_id: str, session: Session = Depends(get_db)) -> ServerRead:
    server = CatalogService(session).get_server(server_id)
    if not server:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Servidor não encontrado")
    return ServerRead.model_validate(server, from_attributes=True)


@router.patch("/{server_id}", response_model=ServerRead)
def update_server(server_id: str, payload: ServerUpdate, session: Session = Depends(get_db)) -> ServerRead:
    server = CatalogService(session).update_server(server_id, payload)
    if not server:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Servidor não encontrado")
    return ServerRead.model_validate(server, from_attributes=True)


@router.delete("/{server_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_server(server_id: str, session: Session = Depends(get_db)) -> Response:
    if not CatalogService(session).delete_server(server_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Servidor não encontrado")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
