from fastapi import Request

from app.events.dispatcher import EventDispatcher


def get_dispatcher(request: Request) -> EventDispatcher:
    return request.app.state.dispatcher
