# ============================================================================
# FILE: songly/services/sql.py
# Helpers for building parameterized SQL fragments
# ============================================================================
from typing import Any, Dict, List, Mapping, Sequence, Tuple
from songly.core.errors import BadRequestError

def placeholder(index: int) -> str:
    """Bind name for the index-th positional value (1-based)"""
    return f":p{index}"

def positional_params(values: Sequence[Any], start: int = 1) -> Dict[str, Any]:
    """Map an ordered value list onto the p1..pN bind names"""
    return {f"p{index}": value for index, value in enumerate(values, start)}

def sql_for_partial_update(data: Mapping[str, Any], js_to_sql: Mapping[str, str]) -> Tuple[str, List[Any]]:
    """
    Build the SET clause of a partial update

    data: {fieldName: newValue, ...} - only the fields to change
    js_to_sql: {fieldName: column_name} for fields whose column differs

    Returns ('"first_name"=:p1, "age"=:p2', ['Aliya', 32]); placeholders follow
    the insertion order of `data`, numbered from 1.
    """
    keys = list(data.keys())
    if not keys:
        raise BadRequestError("No data")

    cols = [
        f'"{js_to_sql.get(name, name)}"={placeholder(index)}'
        for index, name in enumerate(keys, 1)
    ]
    return ", ".join(cols), list(data.values())

def select_columns(fields: Sequence[str], js_to_sql: Mapping[str, str], table: str = None) -> str:
    """
    Column list selecting `fields` under their API names

    Renamed columns come back aliased, e.g. logo_url AS "logoUrl".
    """
    prefix = f"{table}." if table else ""
    cols = []
    for name in fields:
        column = js_to_sql.get(name, name)
        if column == name:
            cols.append(f"{prefix}{column}")
        else:
            cols.append(f'{prefix}{column} AS "{name}"')
    return ", ".join(cols)
