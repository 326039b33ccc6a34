# product_api/main.py

"""
FastAPI Product API.
Exposes CRUD operations over products (name, price, availability) under
/api/products, with interactive documentation at /docs.
"""
import logging
import os
import sys
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from .db import Database
from .errors import register_error_handlers
from .router import router

# -----------------------------
# Configure Logging
# -----------------------------
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Suppress noisy logs from third-party libraries for cleaner output
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)

# Load environment variables
FRONTEND_URL = os.getenv("FRONTEND_URL")
DOCS_URL = os.getenv("DOCS_URL")
PORT = int(os.getenv("PORT", "4000"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store on startup and release it on shutdown."""
    db: Database = app.state.db
    # A failed connection is logged by open(); the API still starts.
    await run_in_threadpool(db.open)
    try:
        yield
    finally:
        await run_in_threadpool(db.close)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the application around an explicitly owned store handle.
    Tests pass their own `Database`; production builds one from the environment.
    """
    app = FastAPI(
        title="Product API",
        description="Manages products, their prices and availability",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.db = database if database is not None else Database()

    allowed_origins = [origin for origin in (FRONTEND_URL, DOCS_URL) if origin]
    if allowed_origins:
        logger.info(f"CORS enabled for: {allowed_origins}")
    else:
        logger.info("CORS origins **NOT SET**, cross-origin requests will be rejected")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {duration_ms:.1f} ms"
        )
        return response

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/", status_code=status.HTTP_200_OK, summary="Root endpoint")
    async def read_root():
        """
        Returns a welcome message for the Product API.
        """
        return {"message": "Welcome to the Product Service!"}

    @app.get("/health", status_code=status.HTTP_200_OK, summary="Health check endpoint")
    def health_check():
        """
        Reports whether the service is alive and the database reachable.
        Always 200: a down database means degraded, not dead.
        """
        database_up = app.state.db.ping()
        return {
            "status": "ok" if database_up else "degraded",
            "service": "product-service",
            "database": "up" if database_up else "down",
        }

    return app


app = create_app()


if __name__ == "__main__":
    logger.info(f"REST API running on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
