"""
Error Taxonomy
==============
Every failure the store or the form session can report to the UI.

The MainWindow catches ScientistManagerError at each user action and turns it
into a message box, so nothing here is fatal to the process.
"""


class ScientistManagerError(Exception):
    """Base class for all application errors."""


class ParseError(ScientistManagerError):
    """The JSON text is malformed or does not have the record shape."""


class ReadError(ScientistManagerError):
    """A source file could not be read."""


class WriteError(ScientistManagerError):
    """The data file could not be written."""


class NoFileSelected(ScientistManagerError):
    """Save was requested before any file was opened."""


class NoSelection(ScientistManagerError):
    """Edit or delete was requested with no record selected."""


class NotFound(ScientistManagerError):
    """No record with the given id exists in the store."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Record '{record_id}' not found.")
        self.record_id = record_id


class SessionClosed(ScientistManagerError):
    """The form session was already confirmed or cancelled."""


class DuplicateRecord(ScientistManagerError):
    """A record with the same id is already in the store."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Record '{record_id}' is already in the store.")
        self.record_id = record_id
