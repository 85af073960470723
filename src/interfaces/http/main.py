from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.application.use_cases.lots import init_ledger
from src.config.settings import Settings, get_settings
from src.infrastructure.db.session import create_engine, create_schema, create_session_factory
from src.infrastructure.ledger.memory_store import InMemoryLedgerStore
from src.interfaces.http.deps import build_uow, get_app_settings
from src.interfaces.http.routers import lots
from src.interfaces.middleware.error_handler import register_error_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    engine = getattr(app.state, "engine", None)
    try:
        if engine is not None and settings.auto_create_schema:
            await create_schema(engine)
        if settings.seed_on_startup:
            async with build_uow(app.state) as uow:
                await init_ledger.execute(uow)
            logger.info("Ledger seeded on startup")
        yield
    finally:
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    # Align common libraries
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(level)


def create_app(
    *,
    settings: Settings | None = None,
    store: InMemoryLedgerStore | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="Seed Lot Ledger",
        version="0.1.0",
        description="Traceable seed and cutting lots over a versioned key-value store",
        lifespan=lifespan,
    )
    app.state.settings = settings
    if store is not None:
        app.state.ledger_store = store
        app.state.engine = None
    else:
        app.state.engine = create_engine(settings.database_url)
        app.state.session_factory = create_session_factory(app.state.engine)
    register_error_handlers(app)

    # Group all API routes behind a single versioned prefix
    api = APIRouter(prefix="/api/v1")
    api.include_router(lots.ledger_router)
    api.include_router(lots.router)

    @api.get("/health", tags=["health"])
    async def health(_: Settings = Depends(get_app_settings)) -> dict[str, str]:  # noqa: ANN001
        return {"status": "ok"}

    app.include_router(api)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
