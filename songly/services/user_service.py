# ============================================================================
# FILE: songly/services/user_service.py
# ============================================================================
from typing import Any, Dict, List, Mapping
from sqlalchemy import text
from sqlalchemy.orm import Session
from songly.core.errors import BadRequestError, NotFoundError, UnauthorizedError
from songly.core.security import get_password_hash, verify_password
from songly.services.sql import placeholder, positional_params, select_columns, sql_for_partial_update
import logging

logger = logging.getLogger(__name__)

USER_COLUMNS = {"firstName": "first_name", "lastName": "last_name", "isAdmin": "is_admin"}
USER_FIELDS = ("username", "firstName", "lastName", "email", "isAdmin")

def _to_user(row: Mapping[str, Any]) -> Dict[str, Any]:
    user = dict(row)
    # SQLite hands booleans back as 0/1
    user["isAdmin"] = bool(user["isAdmin"])
    return user

class UserService:
    """Service layer for user operations"""

    def authenticate(self, db: Session, username: str, password: str) -> Dict[str, Any]:
        """
        Authenticate user with username and password

        Raises UnauthorizedError if the user is missing or the password is wrong.
        """
        row = db.execute(
            text(f"""
                SELECT {select_columns(USER_FIELDS, USER_COLUMNS)}, password
                FROM users
                WHERE username = :p1"""),
            positional_params([username]),
        ).mappings().first()

        if row and verify_password(password, row["password"]):
            user = _to_user(row)
            del user["password"]
            return user

        logger.info(f"Failed login for {username}")
        raise UnauthorizedError("Invalid username/password")

    def register(self, db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a user account from {username, password, firstName, lastName, email, isAdmin}

        isAdmin defaults to False; only admin-initiated creation passes it.
        Raises BadRequestError on a duplicate username.
        """
        username = data["username"]
        duplicate = db.execute(
            text("SELECT username FROM users WHERE username = :p1"),
            positional_params([username]),
        ).first()
        if duplicate:
            raise BadRequestError(f"Duplicate username: {username}")

        hashed_password = get_password_hash(data["password"])
        try:
            row = db.execute(
                text(f"""
                    INSERT INTO users (username, password, first_name, last_name, email, is_admin)
                    VALUES (:p1, :p2, :p3, :p4, :p5, :p6)
                    RETURNING {select_columns(USER_FIELDS, USER_COLUMNS)}"""),
                positional_params([
                    username,
                    hashed_password,
                    data["firstName"],
                    data["lastName"],
                    data["email"],
                    bool(data.get("isAdmin", False)),
                ]),
            ).mappings().one()
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating user {username}: {e}")
            raise

        logger.info(f"User created: {username}")
        return _to_user(row)

    def find_all(self, db: Session) -> List[Dict[str, Any]]:
        """Get all users ordered by username"""
        rows = db.execute(
            text(f"""
                SELECT {select_columns(USER_FIELDS, USER_COLUMNS)}
                FROM users
                ORDER BY username"""),
        ).mappings().all()
        return [_to_user(row) for row in rows]

    def get(self, db: Session, username: str) -> Dict[str, Any]:
        """Get user by username; NotFoundError if missing"""
        row = db.execute(
            text(f"""
                SELECT {select_columns(USER_FIELDS, USER_COLUMNS)}
                FROM users
                WHERE username = :p1"""),
            positional_params([username]),
        ).mappings().first()
        if not row:
            raise NotFoundError(f"No user: {username}")
        return _to_user(row)

    def update(self, db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partial update of {firstName, lastName, password, email}

        A new password is hashed before it is stored.
        Raises BadRequestError on empty data, NotFoundError if no such user.
        """
        data = dict(data)
        if data.get("password"):
            data["password"] = get_password_hash(data["password"])

        set_cols, values = sql_for_partial_update(data, USER_COLUMNS)
        username_idx = placeholder(len(values) + 1)

        try:
            row = db.execute(
                text(f"""
                    UPDATE users
                    SET {set_cols}
                    WHERE username = {username_idx}
                    RETURNING {select_columns(USER_FIELDS, USER_COLUMNS)}"""),
                positional_params([*values, username]),
            ).mappings().first()
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating user {username}: {e}")
            raise

        if not row:
            raise NotFoundError(f"No user: {username}")

        logger.info(f"User updated: {username}")
        return _to_user(row)

    def remove(self, db: Session, username: str) -> None:
        """Delete a user; NotFoundError if missing"""
        try:
            row = db.execute(
                text("DELETE FROM users WHERE username = :p1 RETURNING username"),
                positional_params([username]),
            ).first()
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting user {username}: {e}")
            raise

        if not row:
            raise NotFoundError(f"No user: {username}")

        logger.info(f"User deleted: {username}")

# Create singleton instance
user_service = UserService()
