"""
Scientist Store (Data Model)
============================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the ordered record list, the selected record and
   the path of the local data file in one place.
2. Persistence: It reads and writes the JSON data file. Mutations persist
   themselves (autosave) so callers cannot forget to save.
3. Decoupling: Views read from this object; UI actions write to it. It has no
   knowledge of Qt.

Every operation either fully applies or fully fails: when the write that
follows a mutation fails, the mutation is rolled back before the error
propagates.

Classes:
    ScientistStore: The record store.
"""
from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Iterator, List, Optional, Union

from scientistmanager.model.errors import (
    DuplicateRecord, NoFileSelected, NoSelection, NotFound, ParseError, ReadError,
    WriteError
)
from scientistmanager.model.scientist import Scientist, new_id

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Fields searched by filter(); department, degree and rank date are not
SEARCH_FIELDS = ("full_name", "faculty", "rank")


def parse_records(json_text: str) -> List[Scientist]:
    """Parses a JSON array of record objects."""
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise ParseError(f"Expected a JSON array, got {type(data).__name__}.")

    records = [Scientist.from_dict(item) for item in data]

    # Ids must be unique; later duplicates get a fresh one
    seen: set[str] = set()
    for record in records:
        if record.id in seen:
            old_id = record.id
            record.id = new_id()
            logger.warning(f"Duplicate record id '{old_id}' replaced with '{record.id}'.")
        seen.add(record.id)

    return records


def dump_records(records: List[Scientist]) -> str:
    """Serializes records as indented JSON."""
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False, indent=2)


def _write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to write '{path}': {e}")
        raise WriteError(f"Could not write '{path}': {e}") from e


class ScientistStore:
    """
    Holds the records of the open file. Pass this instance to the views.

    Args:
        file_path: Local data file. Usually set later by load/import_file.
        autosave: Persist every mutation immediately when a file path is known.
    """

    def __init__(self, file_path: Optional[PathLike] = None, autosave: bool = True) -> None:
        self._records: List[Scientist] = []
        self.file_path: Optional[Path] = Path(file_path) if file_path else None
        self.selected_id: Optional[str] = None
        self.autosave = autosave
        self.is_modified = False

    # --- READ ACCESS ---

    @property
    def records(self) -> List[Scientist]:
        """A shallow copy of the ordered record list."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Scientist]:
        return iter(list(self._records))

    def get(self, record_id: str) -> Scientist:
        return self._records[self.index_of(record_id)]

    def index_of(self, record_id: Optional[str]) -> int:
        for i, record in enumerate(self._records):
            if record.id == record_id:
                return i
        raise NotFound(str(record_id))

    def filter(self, query: Optional[str]) -> List[Scientist]:
        """
        Case-insensitive substring search over name, faculty and rank.
        A blank query returns every record. Order is preserved.
        """
        needle = (query or "").strip().casefold()
        if not needle:
            return list(self._records)

        result = [
            r for r in self._records
            if any(needle in getattr(r, name).casefold() for name in SEARCH_FIELDS)
        ]
        logger.debug(f"Filter '{query}' matched {len(result)} of {len(self._records)} records.")
        return result

    # --- SELECTION ---

    @property
    def selected(self) -> Optional[Scientist]:
        if self.selected_id is None:
            return None
        for record in self._records:
            if record.id == self.selected_id:
                return record
        return None

    def select(self, record_id: Optional[str]) -> Optional[Scientist]:
        """Selects a record by id; None clears the selection."""
        if record_id is None:
            self.selected_id = None
            return None
        record = self.get(record_id)
        self.selected_id = record.id
        logger.debug(f"Selected record '{record.full_name}' ({record.id}).")
        return record

    def require_selected(self) -> Scientist:
        record = self.selected
        if record is None:
            raise NoSelection("No record selected.")
        return record

    # --- FILE I/O ---

    def load(self, json_text: str, file_path: Optional[PathLike] = None) -> List[Scientist]:
        """
        Replaces the records with the ones parsed from json_text.

        If the store has a file path (or one is given), the text is copied
        verbatim into it first. Nothing changes when parsing or writing fails.
        """
        records = parse_records(json_text)

        target = Path(file_path) if file_path else self.file_path
        if target is not None:
            _write_text(target, json_text)
            logger.info(f"Imported {len(records)} records into '{target}'.")

        self.file_path = target
        self._records = records
        self.selected_id = None
        self.is_modified = False
        logger.info(f"Loaded {len(records)} records.")
        return list(records)

    def import_file(self, source_path: PathLike, file_path: Optional[PathLike] = None) -> List[Scientist]:
        """Reads a JSON file and loads it, copying it into file_path."""
        source = Path(source_path)
        logger.info(f"Opening '{source}'.")
        try:
            json_text = source.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"'{source}' is not valid UTF-8 text: {e}") from e
        except OSError as e:
            logger.error(f"Failed to read '{source}': {e}")
            raise ReadError(f"Could not read '{source}': {e}") from e

        try:
            return self.load(json_text, file_path)
        except ParseError as e:
            logger.error(f"Failed to parse '{source}': {e}")
            raise

    def dumps(self) -> str:
        return dump_records(self._records)

    def save(self) -> str:
        """Writes all records to the data file and returns the written text."""
        if self.file_path is None:
            raise NoFileSelected("No file has been opened.")

        json_text = self.dumps()
        _write_text(self.file_path, json_text)
        self.is_modified = False
        logger.info(f"Saved {len(self._records)} records to '{self.file_path}'.")
        return json_text

    # --- MUTATIONS ---

    def add(self, record: Scientist) -> Scientist:
        """Appends a record to the end of the list."""
        if any(r.id == record.id for r in self._records):
            raise DuplicateRecord(record.id)

        self._records.append(record)
        try:
            self._commit()
        except WriteError:
            self._records.pop()
            raise
        logger.info(f"Added record '{record.full_name}' ({record.id}).")
        return record

    def update(self, record_id: str, fields: Scientist) -> Scientist:
        """Overwrites the data fields of a record in place. Position and id stay."""
        record = self.get(record_id)
        if record.same_fields(fields):
            logger.debug(f"Record '{record.id}' unchanged, nothing to write.")
            return record
        previous = copy.copy(record)

        record.copy_fields_from(fields)
        try:
            self._commit()
        except WriteError:
            record.copy_fields_from(previous)
            raise
        logger.info(f"Updated record '{record.full_name}' ({record.id}).")
        return record

    def delete(self, record_id: str) -> Scientist:
        """Removes a record and clears the selection if it pointed at it."""
        index = self.index_of(record_id)
        previous_selection = self.selected_id

        record = self._records.pop(index)
        if self.selected_id == record.id:
            self.selected_id = None
        try:
            self._commit()
        except WriteError:
            self._records.insert(index, record)
            self.selected_id = previous_selection
            raise
        logger.info(f"Deleted record '{record.full_name}' ({record.id}).")
        return record

    def update_selected(self, fields: Scientist) -> Scientist:
        return self.update(self.require_selected().id, fields)

    def delete_selected(self) -> Scientist:
        return self.delete(self.require_selected().id)

    def _commit(self) -> None:
        """Persists a mutation according to the autosave policy."""
        was_modified = self.is_modified
        self.is_modified = True
        if not self.autosave or self.file_path is None:
            return
        try:
            self.save()
        except WriteError:
            self.is_modified = was_modified
            raise
