# ============================================================================
# FILE: songly/db/base.py
# ============================================================================
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()

def init_db(bind: Engine) -> None:
    """Create every table that does not exist yet"""
    # Importing the models registers their tables on Base.metadata
    from songly.db.models import playlist, song, user  # noqa: F401
    Base.metadata.create_all(bind=bind)
