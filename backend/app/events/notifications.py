import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.events.dispatcher import EventDispatcher
from app.models.notifications import Notification

logger = logging.getLogger(__name__)

NEW_NOTIFICATION = "newNotification"


class NotificationWriter:
    """Listener for NEW_NOTIFICATION that inserts one row per event.

    Store errors are not caught here; the dispatcher logs them.
    """

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self._sessionmaker = sessionmaker

    async def __call__(self, message: str, type_: str) -> Notification:
        async with self._sessionmaker() as session:
            notification = Notification(message=message, type=type_)
            session.add(notification)
            await session.commit()
            await session.refresh(notification)

        logger.info("Notification saved: %s (%s)", message, type_)
        return notification


def register_notification_listeners(
    dispatcher: EventDispatcher, sessionmaker: async_sessionmaker[AsyncSession]
) -> NotificationWriter:
    writer = NotificationWriter(sessionmaker)
    dispatcher.subscribe(NEW_NOTIFICATION, writer)
    return writer
