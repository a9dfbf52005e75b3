"""FastAPI application entrypoint."""

import random
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from src.api.health import router as health_router
from src.api.loot import router as loot_router
from src.config import settings
from src.core.event_bus import EventBus
from src.core.logging import get_logger, setup_logging
from src.db.database import SessionLocal, init_db
from src.services.loot_service import LootService

setup_logging(settings.LOG_LEVEL, sql_echo=settings.DEBUG)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Creating database tables...")
    init_db()
    logger.info("Database tables created.")

    # LOOT_SEED 지정 시 재현 가능한 보상 (디버깅용)
    rng = random.Random(settings.LOOT_SEED) if settings.LOOT_SEED is not None else None

    logger.info("Initializing LootService...")
    event_bus = EventBus()
    db_session = SessionLocal()
    app.state.event_bus = event_bus
    app.state.loot_service = LootService(
        db=db_session,
        event_bus=event_bus,
        config=settings.loot_config(),
        rng=rng,
    )
    logger.info("LootService initialized (seed=%s).", settings.LOOT_SEED)

    yield

    logger.info("Shutting down...")
    db_session.close()


app = FastAPI(title="Loot Engine", lifespan=lifespan)

app.include_router(health_router)
app.include_router(loot_router)
