"""Live-reload session for a single markdown file."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QFileSystemWatcher, QObject, QTimer, Signal

from .renderer import MarkdownRenderer, RenderedDocument

RELOAD_DEBOUNCE_MS = 200


class FileSession(QObject):
    """Watches one markdown file and re-renders it once edits settle."""

    rendered = Signal(object)

    def __init__(
        self,
        path: Path,
        renderer: MarkdownRenderer | None = None,
        debounce_ms: int = RELOAD_DEBOUNCE_MS,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self.path = Path(path).expanduser().resolve()
        self.renderer = renderer or MarkdownRenderer()
        self._watcher: QFileSystemWatcher | None = None
        # Restarting a single-shot timer drops the pending timeout, so a burst
        # of change events collapses into one reload.
        self._reload_timer = QTimer(self)
        self._reload_timer.setSingleShot(True)
        self._reload_timer.setInterval(max(0, int(debounce_ms)))
        self._reload_timer.timeout.connect(self.reload)

    @property
    def active(self) -> bool:
        return self._watcher is not None

    def start(self) -> RenderedDocument:
        """Begin watching the file and render it immediately."""
        self.stop()
        self._watcher = QFileSystemWatcher(self)
        self._watcher.fileChanged.connect(self._on_file_changed)
        self._watcher.directoryChanged.connect(self._on_directory_changed)
        self._rewatch()
        return self.reload()

    def stop(self) -> None:
        """Cancel any pending reload and release the watcher."""
        self._reload_timer.stop()
        if self._watcher is None:
            return
        watched = self._watcher.files() + self._watcher.directories()
        if watched:
            self._watcher.removePaths(watched)
        self._watcher.deleteLater()
        self._watcher = None

    def reload(self) -> RenderedDocument:
        """Render the file now and publish the result."""
        self._reload_timer.stop()
        document = self.renderer.render(self.path)
        self.rendered.emit(document)
        return document

    def schedule_reload(self) -> None:
        """Reload after the quiet period, replacing any reload already pending."""
        self._reload_timer.start()

    def is_reload_pending(self) -> bool:
        return self._reload_timer.isActive()

    def _rewatch(self) -> None:
        """(Re)attach the watch to the path, not to whatever file used to be there."""
        if self._watcher is None:
            return
        path_text = str(self.path)
        parent_text = str(self.path.parent)
        if self.path.exists():
            # A replaced file keeps its old entry until the event loop
            # catches up; drop it so the watch follows the current file.
            if path_text in self._watcher.files():
                self._watcher.removePath(path_text)
            self._watcher.addPath(path_text)
            if parent_text in self._watcher.directories():
                self._watcher.removePath(parent_text)
        elif parent_text not in self._watcher.directories() and self.path.parent.is_dir():
            # Wait for the file to reappear (atomic saves, delete-then-write).
            self._watcher.addPath(parent_text)

    def _on_file_changed(self, _path: str) -> None:
        # Renames and deletes drop the path from the watcher; re-attach
        # before the debounced reload reads the file again.
        self._rewatch()
        self.schedule_reload()

    def _on_directory_changed(self, _path: str) -> None:
        if self.path.exists():
            self._rewatch()
            self.schedule_reload()
