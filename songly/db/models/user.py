# ============================================================================
# FILE: songly/db/models/user.py
# ============================================================================
from sqlalchemy import Boolean, Column, String, Text, false
from songly.db.base import Base

class User(Base):
    """User model for authentication and authorization"""
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    password = Column(Text, nullable=False)  # bcrypt digest
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())
