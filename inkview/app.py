"""Native viewer window for a single live-reloading markdown file."""

from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtCore import QRect, Qt, QUrl
from PySide6.QtGui import QAction, QColor, QDesktopServices, QFont, QIcon, QPainter, QPen, QPixmap
from PySide6.QtWebEngineCore import QWebEnginePage
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QApplication, QMainWindow

from .config import DEFAULT_WINDOW_SIZE, load_window_geometry, save_window_geometry
from .renderer import RenderedDocument
from .session import FileSession

APP_NAME = "inkview"


def _build_default_icon() -> QIcon:
    """Draw the fallback app icon: "ink" on a warm paper tile."""
    size = 256
    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.GlobalColor.transparent)

    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setPen(QPen(QColor(26, 23, 20, 20), 3))
    painter.setBrush(QColor("#f0e6d8"))
    painter.drawRoundedRect(12, 12, size - 24, size - 24, 50, 50)

    painter.setPen(Qt.PenStyle.NoPen)
    painter.setBrush(QColor(26, 23, 20, 30))
    painter.drawEllipse(size - 90, 36, 32, 32)

    font = QFont("Palatino", 88)
    font.setBold(True)
    painter.setFont(font)
    painter.setPen(QColor("#211c1a"))
    painter.drawText(QRect(0, 0, size, size), Qt.AlignmentFlag.AlignCenter, "ink")
    painter.end()
    return QIcon(pixmap)


def load_app_icon(icon_path: Path | None) -> QIcon:
    if icon_path is not None:
        if icon_path.is_file():
            pixmap = QPixmap(str(icon_path))
            if not pixmap.isNull():
                return QIcon(pixmap)
        print(f"Unable to load icon: {icon_path} (using default)", file=sys.stderr)
    return _build_default_icon()


class ExternalLinkPage(QWebEnginePage):
    """Keeps local links in the view and hands everything else to the desktop."""

    def acceptNavigationRequest(self, url, nav_type, is_main_frame):  # noqa: N802
        if nav_type == QWebEnginePage.NavigationType.NavigationTypeLinkClicked and not url.isLocalFile():
            QDesktopServices.openUrl(url)
            return False
        return super().acceptNavigationRequest(url, nav_type, is_main_frame)


class InkViewWindow(QMainWindow):
    def __init__(self, path: Path, app_icon: QIcon, config_path: Path | None = None):
        super().__init__()
        self.config_path = config_path
        self.session = FileSession(path, parent=self)
        self.session.rendered.connect(self._show_document)

        self.setWindowTitle(self.session.path.name)
        self.setWindowIcon(app_icon)

        self.preview = QWebEngineView(self)
        self.preview.setPage(ExternalLinkPage(self.preview))
        self.setCentralWidget(self.preview)

        geometry = load_window_geometry(config_path)
        if geometry is not None:
            self.setGeometry(*geometry)
        else:
            self.resize(*DEFAULT_WINDOW_SIZE)
            self._center_on_screen()

        self._build_menus()
        self.statusBar().showMessage("Ready")

    def start(self) -> None:
        self.session.start()

    def _center_on_screen(self) -> None:
        screen = self.screen() or QApplication.primaryScreen()
        if screen is None:
            return
        frame = self.frameGeometry()
        frame.moveCenter(screen.availableGeometry().center())
        self.move(frame.topLeft())

    def _build_menus(self) -> None:
        """Register the app, File and Window menus with their shortcuts."""
        menu_bar = self.menuBar()

        app_menu = menu_bar.addMenu(APP_NAME)
        quit_action = QAction(f"Quit {APP_NAME}", self)
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(QApplication.quit)
        app_menu.addAction(quit_action)

        file_menu = menu_bar.addMenu("File")
        reload_action = QAction("Reload", self)
        reload_action.setShortcut("Ctrl+R")
        reload_action.triggered.connect(self.session.reload)
        file_menu.addAction(reload_action)

        window_menu = menu_bar.addMenu("Window")
        close_action = QAction("Close", self)
        close_action.setShortcut("Ctrl+W")
        close_action.triggered.connect(self.close)
        window_menu.addAction(close_action)
        window_menu.addSeparator()
        minimize_action = QAction("Minimize", self)
        minimize_action.setShortcut("Ctrl+M")
        minimize_action.triggered.connect(self.showMinimized)
        window_menu.addAction(minimize_action)
        zoom_action = QAction("Zoom", self)
        zoom_action.triggered.connect(self._toggle_zoom)
        window_menu.addAction(zoom_action)

    def _toggle_zoom(self) -> None:
        if self.isMaximized():
            self.showNormal()
        else:
            self.showMaximized()

    def _show_document(self, document: RenderedDocument) -> None:
        """Load a freshly rendered document, resolving relative links beside the file."""
        if document.base_path is not None:
            base_url = QUrl.fromLocalFile(f"{document.base_path}/")
        else:
            base_url = QUrl()
        self.preview.setHtml(document.html, base_url)
        if document.error:
            self.statusBar().showMessage(f"Render failed: {document.error}", 5000)
        else:
            self.statusBar().showMessage(f"Rendered: {self.session.path.name}", 3000)

    def closeEvent(self, event) -> None:  # noqa: N802
        """Stop watching and remember where the window was."""
        self.session.stop()
        if not self.isMaximized() and not self.isMinimized():
            rect = self.geometry()
            save_window_geometry((rect.x(), rect.y(), rect.width(), rect.height()), self.config_path)
        super().closeEvent(event)


def run_viewer(path: Path, icon_path: Path | None = None, config_path: Path | None = None) -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setDesktopFileName(APP_NAME)
    app_icon = load_app_icon(icon_path)
    app.setWindowIcon(app_icon)

    window = InkViewWindow(path, app_icon, config_path)
    window.show()
    window.start()
    return app.exec()
