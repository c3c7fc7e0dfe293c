"""Request Parameters — parses the query syntax of the find/count/ids actions.

Invariants:
    - `where` must be a JSON object; list values mean IN, scalars mean equality
    - `order=col` is ASC, `order=-col` is DESC; `order[col]=X` is DESC only when X is DESC
    - `search` plain text splits on whitespace into OR terms; JSON must carry `and` and/or `or`
    - `limit` and `offset` are non-negative integers or absent
    - Malformed input raises InvalidQueryParameterError (400), never a bare ValueError
"""

import json
import re
from typing import Any

from starlette.datastructures import QueryParams

from crudkit.core.errors import InvalidQueryParameterError

_ORDER_KEY = re.compile(r"^order\[(?P<column>[^\]]+)\]$")


def get_criteria(params: QueryParams) -> dict[str, Any]:
    raw = params.get("where")
    if raw is None or raw == "":
        return {}
    try:
        criteria = json.loads(raw)
    except json.JSONDecodeError:
        raise InvalidQueryParameterError(
            "where", "Current 'where' parameter is not valid JSON.",
        )
    if not isinstance(criteria, dict):
        raise InvalidQueryParameterError(
            "where", "Current 'where' parameter must be a JSON object.",
        )
    return criteria


def get_order_by(params: QueryParams) -> dict[str, str]:
    """Ordering as {column: "ASC"|"DESC"}, preserving parameter order."""
    order: dict[str, str] = {}
    for key, value in params.multi_items():
        if key == "order":
            for column in filter(None, (c.strip() for c in value.split(","))):
                if column.startswith("-"):
                    order[column[1:]] = "DESC"
                else:
                    order[column] = "ASC"
            continue
        match = _ORDER_KEY.match(key)
        if match:
            order[match.group("column")] = "DESC" if value.upper() == "DESC" else "ASC"
    return order


def get_limit(params: QueryParams) -> int | None:
    return _non_negative_int(params, "limit")


def get_offset(params: QueryParams) -> int | None:
    return _non_negative_int(params, "offset")


def get_search_terms(params: QueryParams) -> dict[str, list[str]]:
    raw = (params.get("search") or "").strip()
    if not raw:
        return {}

    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError:
        decoded = None

    if not isinstance(decoded, dict):
        return {"or": _unique_terms(raw.split())}

    if "and" not in decoded and "or" not in decoded:
        raise InvalidQueryParameterError(
            "search",
            "Given search parameter is not valid, within JSON provide 'and' and/or 'or' property.",
        )

    terms = {}
    for operand in ("and", "or"):
        values = decoded.get(operand)
        if values is None:
            continue
        if isinstance(values, str):
            values = values.split()
        if not isinstance(values, list):
            raise InvalidQueryParameterError(
                "search", f"Search '{operand}' property must be a list of terms.",
            )
        unique = _unique_terms(str(v) for v in values)
        if unique:
            terms[operand] = unique
    return terms


def get_populate(params: QueryParams) -> list[str]:
    values = params.getlist("populate[]") + params.getlist("populate")
    return _unique_terms(v.strip() for v in values)


def _non_negative_int(params: QueryParams, name: str) -> int | None:
    raw = params.get(name)
    if raw is None or raw == "":
        return None
    try:
        value = int(raw)
    except ValueError:
        raise InvalidQueryParameterError(name, f"Parameter '{name}' must be an integer.")
    if value < 0:
        raise InvalidQueryParameterError(name, f"Parameter '{name}' cannot be negative.")
    return value


def _unique_terms(values) -> list[str]:
    seen: list[str] = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen
