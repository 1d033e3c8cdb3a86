# campusmart/api/__init__.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from campusmart.api.errors import (
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from campusmart.api.routers import carts, health, orders, users
from campusmart.data.database import init_db
from campusmart.data.seed import seed
from campusmart.utils.settings import SEED_DEMO_DATA
from campusmart.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Campus marketplace startup, initializing database")
    init_db()
    if SEED_DEMO_DATA:
        seed()
    yield
    logger.info("Campus marketplace shutdown")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Campus Marketplace",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app
