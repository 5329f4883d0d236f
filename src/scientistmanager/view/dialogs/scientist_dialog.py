"""
Modal Dialog for adding or editing a scientist record.
The dialog is a thin view over a FormSession: it shows the session fields and
writes them back on OK.
"""
import datetime

from PySide6.QtCore import QDate
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QDateEdit, QDialogButtonBox
)

from scientistmanager.config import DATE_DISPLAY_FORMAT
from scientistmanager.model.form import FormSession


def to_qdate(value: datetime.date) -> QDate:
    return QDate(value.year, value.month, value.day)


def from_qdate(value: QDate) -> datetime.date:
    return datetime.date(value.year(), value.month(), value.day())


class ScientistDialog(QDialog):
    def __init__(self, session: FormSession, parent=None) -> None:
        super().__init__(parent)
        self.session = session
        self.setWindowTitle("Новий запис" if session.is_new else "Редагування запису")
        self.setModal(True)
        self.resize(520, 0)

        layout = QVBoxLayout(self)

        form = QFormLayout()
        self.edit_full_name = QLineEdit(session.full_name)
        form.addRow("ПІБ:", self.edit_full_name)

        self.edit_faculty = QLineEdit(session.faculty)
        form.addRow("Факультет:", self.edit_faculty)

        self.edit_department = QLineEdit(session.department)
        form.addRow("Кафедра:", self.edit_department)

        self.edit_degree = QLineEdit(session.degree)
        form.addRow("Науковий ступінь:", self.edit_degree)

        self.edit_rank = QLineEdit(session.rank)
        form.addRow("Вчене звання:", self.edit_rank)

        self.date_rank = QDateEdit()
        self.date_rank.setCalendarPopup(True)
        self.date_rank.setDisplayFormat(DATE_DISPLAY_FORMAT)
        # Allow the default date of records that had none
        self.date_rank.setMinimumDate(QDate(1, 1, 1))
        self.date_rank.setDate(to_qdate(session.rank_date))
        form.addRow("Дата присвоєння звання:", self.date_rank)

        layout.addLayout(form)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def apply_to_session(self) -> None:
        """Copies the widget values into the session fields."""
        self.session.full_name = self.edit_full_name.text()
        self.session.faculty = self.edit_faculty.text()
        self.session.department = self.edit_department.text()
        self.session.degree = self.edit_degree.text()
        self.session.rank = self.edit_rank.text()
        self.session.rank_date = from_qdate(self.date_rank.date())

    def accept(self) -> None:
        if self.session.is_open:
            self.apply_to_session()
            self.session.confirm()
        super().accept()

    def reject(self) -> None:
        # Also reached through Esc and the window close button
        if self.session.is_open:
            self.session.cancel()
        super().reject()
