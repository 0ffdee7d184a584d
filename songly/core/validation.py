# ============================================================================
# FILE: songly/core/validation.py
# ============================================================================
from typing import Any, Iterable, List, Mapping, Type, TypeVar
from pydantic import BaseModel, ValidationError
from songly.core.errors import BadRequestError

SchemaT = TypeVar("SchemaT", bound=BaseModel)

# Location prefixes FastAPI adds in front of the field name
_SOURCES = {"body", "query", "path", "header", "cookie"}

def format_errors(errors: Iterable[Mapping[str, Any]]) -> List[str]:
    """Turn pydantic error dicts into "field: problem" messages, order preserved"""
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in _SOURCES]
        field = ".".join(loc)
        msg = error.get("msg", "Invalid value")
        messages.append(f"{field}: {msg}" if field else msg)
    return messages

def validate(payload: Any, schema: Type[SchemaT]) -> SchemaT:
    """
    Validate a payload against a closed schema

    Raises BadRequestError carrying every message when the payload does not fit.
    """
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise BadRequestError(format_errors(e.errors())) from e
