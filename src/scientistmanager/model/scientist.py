"""
Scientist Record
================
Defines the single record type of the application and its JSON mapping.

Why is this file needed?
------------------------
1. Identity: Every record carries a stable 'id' assigned at creation time, so
   the store can select, edit and delete by id instead of object identity.
2. Persistence: to_dict/from_dict define the on-disk JSON shape. Reading is
   permissive field-by-field (missing fields default), but the overall shape
   (object, string fields, parsable date) is enforced.

Classes:
    Scientist: One scientist's attribute set.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import datetime
import re
import uuid
from typing import Any, Dict, Optional

from scientistmanager.model.errors import ParseError

# Used when a record has no rank date
DEFAULT_RANK_DATE = datetime.date.min

# Attribute name -> JSON key. Order defines the column order of the table.
TEXT_FIELDS: Dict[str, str] = {
    "full_name": "fullName",
    "faculty": "faculty",
    "department": "department",
    "degree": "degree",
    "rank": "rank",
}
RANK_DATE_KEY = "rankDate"
ID_KEY = "id"

DATA_FIELDS = (*TEXT_FIELDS.keys(), "rank_date")

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}([T ].+)?$")


def new_id() -> str:
    return uuid.uuid4().hex


def _pascal(key: str) -> str:
    return key[0].upper() + key[1:]


def _lookup(data: Dict[str, Any], key: str) -> Any:
    """Reads a camelCase key, falling back to the PascalCase spelling."""
    if key in data:
        return data[key]
    return data.get(_pascal(key))


def parse_date(value: Optional[str]) -> datetime.date:
    """
    Parses 'YYYY-MM-DD' or an ISO date-time, dropping the time part.
    The time part must be valid too; it is not just cut off.
    """
    if value is None:
        return DEFAULT_RANK_DATE
    if not isinstance(value, str) or not _DATE_PATTERN.match(value):
        raise ParseError(f"Invalid date value: {value!r}")
    try:
        if len(value) == 10:
            return datetime.date.fromisoformat(value)
        return datetime.datetime.fromisoformat(value).date()
    except ValueError as e:
        raise ParseError(f"Invalid date value: {value!r}") from e


def format_date(value: datetime.date) -> str:
    """Serializes a date as an ISO date-time at midnight."""
    return f"{value.isoformat()}T00:00:00"


@dataclass
class Scientist:
    full_name: str = ""
    faculty: str = ""
    department: str = ""
    degree: str = ""
    rank: str = ""
    rank_date: datetime.date = DEFAULT_RANK_DATE
    id: str = field(default_factory=new_id)

    def copy_fields_from(self, other: Scientist) -> None:
        """Overwrites the six data fields; the id is kept."""
        for name in DATA_FIELDS:
            setattr(self, name, getattr(other, name))

    def same_fields(self, other: Scientist) -> bool:
        return all(getattr(self, n) == getattr(other, n) for n in DATA_FIELDS)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {ID_KEY: self.id}
        for attr, key in TEXT_FIELDS.items():
            data[key] = getattr(self, attr)
        data[RANK_DATE_KEY] = format_date(self.rank_date)
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Scientist:
        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object, got {type(data).__name__}.")

        values: Dict[str, Any] = {}
        for attr, key in TEXT_FIELDS.items():
            value = _lookup(data, key)
            if value is None:
                value = ""
            elif not isinstance(value, str):
                raise ParseError(f"Field '{key}' must be a string, got {type(value).__name__}.")
            values[attr] = value

        values["rank_date"] = parse_date(_lookup(data, RANK_DATE_KEY))

        record_id = _lookup(data, ID_KEY)
        if record_id is None or record_id == "":
            record_id = new_id()
        elif not isinstance(record_id, str):
            # Numeric ids from hand-written files are kept as text
            record_id = str(record_id)
        values["id"] = record_id

        return Scientist(**values)
