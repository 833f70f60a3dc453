from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse, Response
from sqlmodel import Session

from arf.api.deps import get_db
from arf.schemas.backup import RestoreSummary
from arf.services.backup import BackupError, BackupService

router = APIRouter(prefix="/storage", tags=["storage"])


@router.get("/backup")
def download_backup(session: Session = Depends(get_db)) -> JSONResponse:
    data = BackupService(session).export()
    filename = f"backup_arf_{int(datetime.now().timestamp() * 1000)}.json"
    headers = {"Content-Disposition": f"attachment; filename=\"{filename}\""}
    return JSONResponse(content=data, headers=headers)


@router.post("/restore", response_model=RestoreSummary, response_model_exclude_none=True)
async def restore_backup(
    file: UploadFile = File(...),
    session: Session = Depends(get_db),
) -> RestoreSummary:
    raw = await file.read()
    try:
        return BackupService(session).restore(raw)
    except BackupError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_all_data(session: Session = Depends(get_db)) -> Response:
    BackupService(session).clear_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
