"""
Type definitions used across layers
"""

from enum import StrEnum
from typing import Any

# Records are schema-less: any JSON value can sit behind a field name.
JSONValue = str | int | float | bool | None | list[Any] | dict[str, Any]
GamerFields = dict[str, JSONValue]

ID_FIELD = "id"


class StoreBackend(StrEnum):
    JSON = "json"
    SQL = "sql"
