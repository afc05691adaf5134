import uvicorn

from app.core.config import settings
from app.core.logging import configure_logging


def run() -> None:
    configure_logging(settings.log_level, db_echo=settings.db_echo)
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
