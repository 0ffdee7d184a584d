# ============================================================================
# FILE: songly/core/errors.py
# ============================================================================
from typing import Any, Dict, List, Optional, Union

class SonglyError(Exception):
    """Base domain error; carries the HTTP status the error handler answers with"""

    status: int = 500

    def __init__(self, message: str = "Internal Server Error", status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status

    @property
    def payload(self) -> Union[str, List[str]]:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Serialize as the JSON error envelope"""
        return {"error": {"message": self.payload, "status": self.status}}

class NotFoundError(SonglyError):
    """404 NOT FOUND error"""

    status = 404

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)

class UnauthorizedError(SonglyError):
    """401 UNAUTHORIZED error"""

    status = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)

class ForbiddenError(SonglyError):
    """403 FORBIDDEN error"""

    status = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)

class BadRequestError(SonglyError):
    """
    400 BAD REQUEST error

    Validation failures carry every message, in order; `message` is the first.
    A single message is serialized as a plain string, several as a list.
    """

    status = 400

    def __init__(self, message: Union[str, List[str]] = "Bad Request"):
        messages = [message] if isinstance(message, str) else list(message)
        super().__init__(messages[0] if messages else "Bad Request")
        self.messages = messages or [self.message]

    @property
    def payload(self) -> Union[str, List[str]]:
        if len(self.messages) == 1:
            return self.messages[0]
        return self.messages
