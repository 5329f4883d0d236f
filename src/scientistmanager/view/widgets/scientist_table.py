"""
Scientist Table Model
Renders a list of records as the six-column grid of the main window.
"""
from typing import Any, List, Optional

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt

from scientistmanager.model.scientist import Scientist

# (attribute, header) in display order
COLUMNS = [
    ("full_name", "ПІБ"),
    ("faculty", "Факультет"),
    ("department", "Кафедра"),
    ("degree", "Ступінь"),
    ("rank", "Звання"),
    ("rank_date", "Дата звання"),
]

# Custom role carrying the record id of a row
RecordIdRole = Qt.ItemDataRole.UserRole + 1


class ScientistTableModel(QAbstractTableModel):
    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self._records: List[Scientist] = []

    def set_records(self, records: List[Scientist]) -> None:
        """Replaces the displayed rows."""
        self.beginResetModel()
        self._records = list(records)
        self.endResetModel()

    def record_at(self, row: int) -> Optional[Scientist]:
        if 0 <= row < len(self._records):
            return self._records[row]
        return None

    def row_of(self, record_id: Optional[str]) -> int:
        for row, record in enumerate(self._records):
            if record.id == record_id:
                return row
        return -1

    # --- Qt model interface ---

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._records)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(COLUMNS)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid():
            return None
        record = self.record_at(index.row())
        if record is None:
            return None

        if role == Qt.ItemDataRole.DisplayRole:
            attr = COLUMNS[index.column()][0]
            value = getattr(record, attr)
            if attr == "rank_date":
                # yyyy-MM-dd
                return value.isoformat()
            return value
        if role == RecordIdRole:
            return record.id
        return None

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        if orientation == Qt.Orientation.Horizontal and 0 <= section < len(COLUMNS):
            return COLUMNS[section][1]
        if orientation == Qt.Orientation.Vertical:
            return section + 1
        return None
