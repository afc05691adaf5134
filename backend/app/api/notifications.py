from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from app.api.deps import get_dispatcher
from app.events.dispatcher import EventDispatcher
from app.events.notifications import NEW_NOTIFICATION

router = APIRouter(prefix="/api", tags=["notifications"])


class NotificationValidationError(Exception):
    def __init__(self, message: str = "Message and type are required") -> None:
        super().__init__(message)
        self.message = message


class NotificationIn(BaseModel):
    message: Optional[str] = None
    type: Optional[str] = None


@router.post("/notifications", status_code=status.HTTP_201_CREATED)
async def create_notification(
    payload: Optional[NotificationIn] = None,
    dispatcher: EventDispatcher = Depends(get_dispatcher),
):
    if payload is None or not payload.message or not payload.type:
        raise NotificationValidationError()

    # fire and forget: the row is written after this response goes out
    dispatcher.publish(NEW_NOTIFICATION, payload.message, payload.type)
    return {"message": "Notification event triggered"}
