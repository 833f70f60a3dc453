from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from arf.api.routes import (
    customers,
    dashboard,
    health,
    ledger,
    plans,
    servers,
    storage,
)
from arf.core.config import settings
from arf.core.logging_setup import logger
from arf.db.session import init_db


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    # Cria tabelas e garante os planos padrão
    init_db()
    yield


def _normalize_origin(value: str | None) -> str | None:
    if not value:
        return None
    cleaned = value.strip().rstrip("/")
    return cleaned or None


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.project_name,
        debug=settings.debug,
        lifespan=lifespan,
    )

    logger.info("ARF Gestor API inicializada")

    # ===============================================================
    # CORS
    # ===============================================================
    origins: list[str] = []
    for item in settings.allowed_origins:
        normalized = _normalize_origin(item)
        if normalized and normalized not in origins:
            origins.append(normalized)

    logger.info(f"CORS configurado com origins: {origins}")

    application.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    # ===============================================================
    # ERROS DE PERSISTÊNCIA
    # ===============================================================
    @application.exception_handler(SQLAlchemyError)
    async def persistence_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception(f"[PERSISTENCIA] Falha em {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Falha ao gravar os dados. Tente novamente."},
        )

    # ===============================================================
    # ROTAS
    # ===============================================================
    application.include_router(health.router, prefix="/health")
    application.include_router(servers.router, prefix=settings.api_v1_str)
    application.include_router(plans.router, prefix=settings.api_v1_str)
    application.include_router(customers.router, prefix=settings.api_v1_str)
    application.include_router(ledger.router, prefix=settings.api_v1_str)
    application.include_router(dashboard.router, prefix=settings.api_v1_str)
    application.include_router(storage.router, prefix=settings.api_v1_str)

    @application.get("/")
    def root():
        return {"service": settings.project_name}

    return application


app = create_app()
