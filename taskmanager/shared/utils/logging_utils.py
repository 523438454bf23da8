# taskmanager/shared/utils/logging_utils.py

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once for the whole application."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    # SQL só aparece com DB_ECHO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
