"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging and the Qt application identity.
2. Instantiates the Data Model (ScientistStore).
3. Instantiates the Main Window (View) and passes the model into it.
"""
import logging
import os
import sys
from pathlib import Path

from PySide6.QtCore import (
    QCoreApplication, QLibraryInfo, QSettings, QStandardPaths, QTranslator, QtMsgType,
    qInstallMessageHandler
)
from PySide6.QtWidgets import QApplication

from scientistmanager import config
from scientistmanager.logging_config import setup_logging
from scientistmanager.model.store import ScientistStore
from scientistmanager.view.main_window import MainWindow

logger = logging.getLogger(__name__)
qt_logger = logging.getLogger("scientistmanager.qt")

_QT_LOG_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


def forward_qt_message(mode: QtMsgType, context, message: str) -> None:
    """Routes Qt's own warnings into the application log."""
    qt_logger.log(_QT_LOG_LEVELS.get(mode, logging.INFO), message)


def create_app() -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(config.ORG_ID)
    QCoreApplication.setApplicationName(config.APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationDisplayName(config.VISIBLE_APP_NAME)

    # Ukrainian translations for Qt standard widgets (OK, Cancel, etc.)
    translator = QTranslator(app)
    if translator.load("qtbase_uk", QLibraryInfo.path(QLibraryInfo.TranslationsPath)):
        app.installTranslator(translator)

    return app


def resolve_data_file() -> Path:
    """Local data file inside the application-private data directory."""
    app_data = QStandardPaths.writableLocation(QStandardPaths.AppDataLocation)
    return config.get_data_file_path(app_data or None)


def main() -> int:
    setup_logging(
        level=config.get_log_level(),
        log_file=config.get_log_file(),
        module_levels=config.get_module_log_levels(),
    )
    qInstallMessageHandler(forward_qt_message)

    app = create_app()

    data_file = resolve_data_file()
    logger.info(f"Local data file: {data_file}")

    store = ScientistStore(autosave=config.AUTOSAVE)

    window = MainWindow(store, data_file)
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
