"""Building SQL WHERE clauses from condition mappings."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Mapping


class NullType(IntEnum):
    """Marks a condition as ``IS NULL`` or ``IS NOT NULL``."""

    IS_NULL = 1
    IS_NOT_NULL = 2


_OPERATORS = {
    "=": "=?",
    ">": ">?",
    ">=": ">=?",
    "<": "<?",
    "<=": "<=?",
    "!=": "!=?",
    "<>": "!=?",
    "in": " in (?)",
    "like": " like ?",
}


def where_build(where: Mapping[str, Any]) -> tuple[str, list[Any]]:
    """Turn ``{"column [op]": value}`` into a WHERE fragment and its bound values.

    Conditions are joined with ``AND`` in the mapping's order.
    """
    clauses: list[str] = []
    values: list[Any] = []
    for key, value in where.items():
        parts = key.split(" ")
        if len(parts) > 2:
            raise ValueError(f"Error in query condition: {key}. ")
        if len(parts) == 1:
            if isinstance(value, NullType):
                suffix = " IS NOT NULL" if value is NullType.IS_NOT_NULL else " IS NULL"
                clauses.append(key + suffix)
            else:
                clauses.append(key + "=?")
                values.append(value)
            continue
        column, operator = parts
        try:
            clauses.append(column + _OPERATORS[operator])
        except KeyError:
            raise ValueError(f"Error in query condition: {key}. ") from None
        values.append(value)
    return " AND ".join(clauses), values