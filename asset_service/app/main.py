import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError

from shared.core.config import settings
from shared.core.database import Base, engine, SessionLocal
from shared.core.logging_config import setup_logging
from shared.exception_handler import setup_exception_handlers

from . import models  # registers every table on Base.metadata
from .core.services import build_services
from .router.common import file_router
from .router.products import (
    maintenance_window_router,
    product_commissioning_router,
    product_maintenance_router,
    product_router,
)

logger = logging.getLogger(__name__)


def init_database(bind, retry_delay: int = settings.DB_CONNECT_RETRY_DELAY):
    """Create all tables, waiting for the database to come up."""
    attempt = 1
    while True:
        try:
            Base.metadata.create_all(bind=bind)
            logger.info("Database ready")
            return
        except OperationalError as e:
            logger.warning("Database connection attempt %s failed: %s. Retrying in %ss",
                           attempt, e.orig, retry_delay)
            attempt += 1
            time.sleep(retry_delay)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_database(engine)
    app.state.services = build_services(SessionLocal, settings)
    logger.info("Asset service started")
    yield


app = FastAPI(title="Asset Service API", lifespan=lifespan)

setup_exception_handlers(app)

# Allow requests from your React app
origins = [
    "http://localhost:8080",
    "http://127.0.0.1:8000"
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(product_router.router)
app.include_router(product_commissioning_router.router)
app.include_router(product_maintenance_router.router)
app.include_router(maintenance_window_router.router)
app.include_router(file_router.router)


@app.get("/health")
def health():
    return {"status": "ok"}
