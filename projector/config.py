import logging
import os


class Config:
    """Configuration settings for the application"""

    # SQLite database holding projects and occurrences
    DATA_FOLDER = os.environ.get("PROJECTOR_DATA", "./data")
    DB_PATH = os.environ.get("PROJECTOR_DB", os.path.join(DATA_FOLDER, "projector.db"))

    # API server
    HOST = os.environ.get("PROJECTOR_HOST", "127.0.0.1")
    PORT = int(os.environ.get("PROJECTOR_PORT", "8000"))

    # Used when turning "next friday" into a due date
    TIMEZONE = os.environ.get("PROJECTOR_TZ", "America/Los_Angeles")

    LOG_LEVEL = os.environ.get("PROJECTOR_LOG_LEVEL", "INFO")
    LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or Config.LOG_LEVEL).upper(),
        format=Config.LOG_FORMAT,
    )
