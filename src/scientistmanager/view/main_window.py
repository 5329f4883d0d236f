"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, Toolbar, search box and
the scientists table.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (Open, Save, Add, Edit, Delete, ...) to
   the ScientistStore.
3. Error boundary: Every store error raised by an action is caught here and
   shown to the user as a message box.
"""
import logging
import os
from importlib.metadata import version, PackageNotFoundError
from pathlib import Path

from PySide6.QtCore import QSettings, QModelIndex, QItemSelection
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit,
    QTableView, QHeaderView, QAbstractItemView, QFileDialog, QMessageBox, QDialog
)

from scientistmanager.config import DEFAULT_DATASET_PATH, VISIBLE_APP_NAME
from scientistmanager.model.errors import (
    ScientistManagerError, NoFileSelected, NoSelection
)
from scientistmanager.model.form import FormSession
from scientistmanager.model.store import ScientistStore
from scientistmanager.view.dialogs.scientist_dialog import ScientistDialog
from scientistmanager.view.widgets.scientist_table import RecordIdRole, ScientistTableModel

logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("scientistmanager")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

STATUS_TIMEOUT_MS = 5000


class MainWindow(QMainWindow):
    def __init__(self, store: ScientistStore, data_file_path: Path) -> None:
        super().__init__()
        self.store: ScientistStore = store
        self.data_file_path: Path = Path(data_file_path)
        self._settings = QSettings()

        self.update_window_title()
        self.resize(1100, 650)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)

        # --- 1. SEARCH BAR ---
        search_layout = QHBoxLayout()
        search_layout.addWidget(QLabel("Пошук:"))
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("ПІБ, факультет або звання...")
        self.search_edit.setClearButtonEnabled(True)
        self.search_edit.textChanged.connect(self.on_search_text_changed)
        search_layout.addWidget(self.search_edit)
        main_layout.addLayout(search_layout)

        # --- 2. TABLE ---
        self.table_model = ScientistTableModel(self)
        self.table = QTableView()
        self.table.setModel(self.table_model)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setAlternatingRowColors(True)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        # Follow highlighted rows only; focus alone moves the current index
        self.table.selectionModel().selectionChanged.connect(self.on_selection_changed)
        self.table.doubleClicked.connect(self.on_row_double_clicked)
        main_layout.addWidget(self.table)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()
        self._create_toolbar()

        geometry = self._settings.value("win/geo")
        if geometry is not None:
            self.restoreGeometry(geometry)

        self.statusBar().showMessage("Відкрийте файл JSON, щоб почати роботу.")
        self.refresh_table()

    def _create_actions(self) -> None:
        # File Actions
        self.act_open = QAction("Відкрити JSON", self)
        self.act_open.setShortcut("Ctrl+O")
        self.act_open.triggered.connect(self.on_open_json)

        self.act_open_file = QAction("Відкрити файл...", self)
        self.act_open_file.setShortcut("Ctrl+Shift+O")
        self.act_open_file.triggered.connect(self.on_open_file)

        self.act_save = QAction("Зберегти", self)
        self.act_save.setShortcut("Ctrl+S")
        self.act_save.triggered.connect(self.on_save)

        self.act_exit = QAction("Вихід", self)
        self.act_exit.triggered.connect(self.on_exit)

        # Record Actions
        self.act_add = QAction("Додати", self)
        self.act_add.setShortcut("Ctrl+N")
        self.act_add.triggered.connect(self.on_add)

        self.act_edit = QAction("Редагувати", self)
        self.act_edit.setShortcut("Ctrl+E")
        self.act_edit.triggered.connect(self.on_edit)

        self.act_delete = QAction("Видалити", self)
        self.act_delete.setShortcut(QKeySequence.Delete)
        self.act_delete.triggered.connect(self.on_delete)

        # Help
        self.act_about = QAction("Про програму", self)
        self.act_about.triggered.connect(self.on_about)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&Файл")
        file_menu.addAction(self.act_open)
        file_menu.addAction(self.act_open_file)
        file_menu.addSeparator()
        file_menu.addAction(self.act_save)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        records_menu = menu_bar.addMenu("&Записи")
        records_menu.addAction(self.act_add)
        records_menu.addAction(self.act_edit)
        records_menu.addAction(self.act_delete)

        help_menu = menu_bar.addMenu("&Довідка")
        help_menu.addAction(self.act_about)

    def _create_toolbar(self) -> None:
        toolbar = self.addToolBar("Головна")
        toolbar.setObjectName("main_toolbar")
        toolbar.setMovable(False)
        for action in (self.act_open, self.act_save, None,
                       self.act_add, self.act_edit, self.act_delete, None,
                       self.act_about, self.act_exit):
            if action is None:
                toolbar.addSeparator()
            else:
                toolbar.addAction(action)

    # --- HELPER METHODS ---
    def update_window_title(self) -> None:
        """Updates the window title based on filename and dirty state."""
        filename = os.path.basename(self.store.file_path) if self.store.file_path else "Без назви"
        title = f"{VISIBLE_APP_NAME} - [{filename}"
        if self.store.is_modified:
            title += "*"
        title += "]"
        self.setWindowTitle(title)

    def refresh_table(self) -> None:
        """Re-renders the grid from the store, keeping the current search and selection."""
        records = self.store.filter(self.search_edit.text())

        self.table.selectionModel().blockSignals(True)
        try:
            self.table_model.set_records(records)
            row = self.table_model.row_of(self.store.selected_id)
            if row >= 0:
                self.table.selectRow(row)
        finally:
            self.table.selectionModel().blockSignals(False)

        self.update_window_title()

    def _show_error(self, message: str, error: Exception) -> None:
        logger.error(f"{message} {error}")
        QMessageBox.critical(self, "Помилка", f"{message}\n{error}")

    # --- FILE SLOTS ---

    def on_open_json(self) -> None:
        """Imports the bundled dataset into local storage."""
        self._open_source(DEFAULT_DATASET_PATH)

    def on_open_file(self) -> None:
        fname, _ = QFileDialog.getOpenFileName(
            self, "Відкрити файл JSON", "", "JSON Files (*.json)"
        )
        if fname:
            self._open_source(fname)

    def _open_source(self, source_path: str) -> None:
        try:
            self.store.import_file(source_path, self.data_file_path)
        except ScientistManagerError as e:
            self._show_error("Не вдалося відкрити файл:", e)
            return

        self.refresh_table()
        QMessageBox.information(
            self, "Успіх", f"Файл JSON успішно відкрито і скопійовано до {self.store.file_path}"
        )

    def on_save(self) -> None:
        try:
            self.store.save()
        except NoFileSelected:
            QMessageBox.warning(self, "Помилка", "Файл для збереження не обрано!")
            return
        except ScientistManagerError as e:
            self._show_error("Не вдалося зберегти файл:", e)
            return

        self.update_window_title()
        QMessageBox.information(self, "Успіх", "Зміни успішно збережено в тому ж файлі!")

    # --- SEARCH & SELECTION ---

    def on_search_text_changed(self, text: str) -> None:
        self.refresh_table()

    def on_selection_changed(self, selected: QItemSelection, deselected: QItemSelection) -> None:
        rows = self.table.selectionModel().selectedRows()
        record_id = rows[0].data(RecordIdRole) if rows else None
        record = self.store.select(record_id)
        if record is not None:
            self.statusBar().showMessage(f"Ви вибрали: {record.full_name}", STATUS_TIMEOUT_MS)

    def on_row_double_clicked(self, index: QModelIndex) -> None:
        record_id = index.data(RecordIdRole)
        if record_id is not None:
            self.store.select(record_id)
            self.on_edit()

    # --- RECORD SLOTS ---

    def _run_form(self, session: FormSession) -> bool:
        dlg = ScientistDialog(session, self)
        return dlg.exec() == QDialog.Accepted and session.result is not None

    def on_add(self) -> None:
        session = FormSession.open()
        if not self._run_form(session):
            return

        try:
            record = self.store.add(session.result)
        except ScientistManagerError as e:
            self._show_error("Не вдалося зберегти файл:", e)
            return

        self.store.select(record.id)
        self.refresh_table()
        self._report_persisted(f"Додано запис: {record.full_name}")

    def on_edit(self) -> None:
        try:
            selected = self.store.require_selected()
        except NoSelection:
            QMessageBox.warning(self, "Помилка", "Спочатку виберіть запис для редагування!")
            return

        session = FormSession.open(selected)
        if not self._run_form(session):
            return

        try:
            record = self.store.update_selected(session.result)
        except ScientistManagerError as e:
            self._show_error("Не вдалося зберегти файл:", e)
            return

        self.refresh_table()
        self._report_persisted(f"Змінено запис: {record.full_name}")

    def on_delete(self) -> None:
        try:
            selected = self.store.require_selected()
        except NoSelection:
            QMessageBox.warning(self, "Помилка", "Спочатку виберіть запис для видалення!")
            return

        reply = QMessageBox.question(
            self, "Підтвердження", f"Видалити запис: {selected.full_name}?",
            QMessageBox.Yes | QMessageBox.No
        )
        if reply != QMessageBox.Yes:
            return

        try:
            record = self.store.delete_selected()
        except ScientistManagerError as e:
            self._show_error("Не вдалося зберегти файл:", e)
            return

        self.refresh_table()
        self._report_persisted(f"Видалено запис: {record.full_name}")

    def _report_persisted(self, message: str) -> None:
        if self.store.is_modified:
            message += " (не збережено)"
        self.statusBar().showMessage(message, STATUS_TIMEOUT_MS)

    # --- HELP & EXIT ---

    def on_about(self) -> None:
        QMessageBox.about(
            self,
            "Про програму",
            f"{VISIBLE_APP_NAME}\n"
            f"Версія: {APP_VERSION}\n"
            "Опис: облік даних науковців навчального закладу (ПІБ, факультет, кафедра, "
            "науковий ступінь, вчене звання, дата присвоєння звання)."
        )

    def on_exit(self) -> None:
        reply = QMessageBox.question(
            self, "Підтвердження", "Ви впевнені, що хочете вийти?",
            QMessageBox.Yes | QMessageBox.No
        )
        if reply == QMessageBox.Yes:
            self.close()

    def closeEvent(self, event, /) -> None:
        """Handle window close event to prompt for saving if modified."""
        if self.store.is_modified:
            reply = QMessageBox.question(
                self,
                "Зберегти зміни?",
                "Дані було змінено. Зберегти зміни перед виходом?",
                QMessageBox.Save | QMessageBox.Discard | QMessageBox.Cancel
            )

            if reply == QMessageBox.Save:
                self.on_save()
                # Keep the window open if saving failed
                if self.store.is_modified:
                    event.ignore()
                    return
            elif reply == QMessageBox.Cancel:
                event.ignore()
                return

        self._settings.setValue("win/geo", self.saveGeometry())
        event.accept()
