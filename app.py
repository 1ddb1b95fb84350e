from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dotenv import load_dotenv

from persistence.errors import StoreError
from settings import get_settings

logger = logging.getLogger(__name__)


def log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def create_app() -> FastAPI:
    load_dotenv("local.env")

    settings = get_settings()
    logging.basicConfig(level=log_level(settings.log_level))

    from endpoints.document_endpoints import router as documents_router, store_error_handler

    app = FastAPI(title="jsonfile-store")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    app.add_exception_handler(StoreError, store_error_handler)
    app.include_router(documents_router)

    logger.debug("Serving documents from %s", settings.data_dir)
    return app


app = create_app()
