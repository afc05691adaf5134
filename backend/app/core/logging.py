import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO", *, db_echo: bool = False) -> None:
    """Install one stream handler on the root logger and route uvicorn and SQL logs through it."""
    root = logging.getLogger()
    root.handlers = []
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level.upper())

    # uvicorn installs its own handlers; let its records reach ours instead
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uv_logger = logging.getLogger(name)
        uv_logger.handlers = []
        uv_logger.propagate = True
        uv_logger.setLevel(level.upper())

    # SQL echo goes through the root handler, never engine-level echo
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if db_echo else logging.WARNING)
