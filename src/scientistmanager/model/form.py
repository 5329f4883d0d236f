"""
Form Session
============
One add-or-edit interaction over a scientist record.

The session copies the record's fields into editable attributes. Nothing is
written back until confirm(), and even then the session only produces a new
Scientist carrying the edited values; the caller applies it to the store.
"""
from __future__ import annotations

import datetime
import logging
from enum import StrEnum
from typing import Optional

from scientistmanager.model.errors import SessionClosed
from scientistmanager.model.scientist import Scientist, new_id

logger = logging.getLogger(__name__)


class SessionOutcome(StrEnum):
    OPEN = "open"
    COMMITTED = "committed"
    DISCARDED = "discarded"


class FormSession:
    def __init__(self, record: Optional[Scientist] = None, today: Optional[datetime.date] = None) -> None:
        self.record_id: Optional[str] = record.id if record else None
        self.outcome = SessionOutcome.OPEN
        self.result: Optional[Scientist] = None

        if record is not None:
            self.full_name = record.full_name
            self.faculty = record.faculty
            self.department = record.department
            self.degree = record.degree
            self.rank = record.rank
            self.rank_date = record.rank_date
        else:
            self.full_name = ""
            self.faculty = ""
            self.department = ""
            self.degree = ""
            self.rank = ""
            self.rank_date = today or datetime.date.today()

    @classmethod
    def open(cls, record: Optional[Scientist] = None, today: Optional[datetime.date] = None) -> FormSession:
        """Starts a session; without a record the fields start empty."""
        return cls(record, today)

    @property
    def is_new(self) -> bool:
        return self.record_id is None

    @property
    def is_open(self) -> bool:
        return self.outcome == SessionOutcome.OPEN

    def confirm(self) -> Scientist:
        """Ends the session and returns the record built from the edited fields."""
        self._ensure_open()
        self.result = Scientist(
            full_name=self.full_name,
            faculty=self.faculty,
            department=self.department,
            degree=self.degree,
            rank=self.rank,
            rank_date=self.rank_date,
            id=self.record_id or new_id(),
        )
        self.outcome = SessionOutcome.COMMITTED
        logger.debug(f"Form session committed for '{self.result.full_name}' (new={self.is_new}).")
        return self.result

    def cancel(self) -> None:
        """Ends the session without producing a record."""
        self._ensure_open()
        self.outcome = SessionOutcome.DISCARDED
        logger.debug("Form session discarded.")

    def _ensure_open(self) -> None:
        if not self.is_open:
            raise SessionClosed(f"Form session already {self.outcome.value}.")
