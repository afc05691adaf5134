import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from app.api.notifications import NotificationValidationError, router as notifications_router
from app.core.config import Settings, settings as default_settings
from app.db.session import get_engine, get_sessionmaker, init_db
from app.events.dispatcher import EventDispatcher
from app.events.notifications import register_notification_listeners

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    engine: AsyncEngine | None = None,
    dispatcher: EventDispatcher | None = None,
) -> FastAPI:
    """
    Build the application with its own engine and event channel.

    Passing ``dispatcher`` replaces the channel the handler publishes to; the
    notification writer is only registered on a dispatcher built here.
    """
    settings = settings or default_settings
    engine = engine or get_engine(settings)

    if dispatcher is None:
        dispatcher = EventDispatcher()
        register_notification_listeners(dispatcher, get_sessionmaker(engine))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            await init_db(engine, create_tables=settings.db_synchronize)
        except Exception:
            logger.exception("Error starting server")
            await engine.dispose()
            raise
        logger.info("Database connected successfully")

        yield

        await dispatcher.drain()
        await engine.dispose()

    app = FastAPI(title="Notification Events API", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.dispatcher = dispatcher

    app.include_router(notifications_router)

    @app.exception_handler(NotificationValidationError)
    async def notification_validation_handler(request: Request, exc: NotificationValidationError):
        return JSONResponse(status_code=400, content={"error": exc.message})

    return app


# uvicorn app.main:app
app = create_app()
