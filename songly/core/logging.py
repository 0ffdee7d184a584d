# ============================================================================
# FILE: songly/core/logging.py
# ============================================================================
import logging
from songly.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def setup_logging(level: str = None) -> None:
    """Configure root logging once for the whole process"""
    if settings.DEBUG:
        level = "DEBUG"
    level = (level or settings.LOG_LEVEL).upper()

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("songly").setLevel(level)

    # SQL echo is noisy outside of debugging
    if level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
