# medimatch/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from medimatch.core.config import ServerSettings, Settings, get_settings
from medimatch.core.logging import setup_logging
from medimatch.middleware.audit import AuditMiddleware
from medimatch.repos import RecordStore, build_store
from medimatch.routers import donations as donations_router
from medimatch.routers import requests as requests_router
from medimatch.routers import stats as stats_router

logger = logging.getLogger(__name__)


def create_app(store: Optional[RecordStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API. With no `store` the lifespan constructs one from settings;
    missing store configuration aborts startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        conf = settings
        if store is None:
            conf = conf or get_settings()
            setup_logging(conf.log_level)
            app.state.store = build_store(conf)
            logger.info("record store: %s", conf.store_backend)
        else:
            app.state.store = store

        ensure_indexes = getattr(app.state.store, "ensure_indexes", None)
        if ensure_indexes is not None:
            await ensure_indexes()

        yield
        await app.state.store.close()

    app = FastAPI(lifespan=lifespan, title="MediMatch API")

    origins = (settings or ServerSettings()).cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(AuditMiddleware)

    app.include_router(donations_router.router)     # /api/donations
    app.include_router(requests_router.router)      # /api/requests
    app.include_router(stats_router.router)         # /api/stats

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()
