from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

from PySide6.QtCore import Qt, QSettings, QTimer
from PySide6.QtGui import QAction, QPixmap
from PySide6.QtWidgets import (
    QApplication,
    QComboBox,
    QFileDialog,
    QLabel,
    QMainWindow,
    QScrollArea,
    QToolBar,
    QWidget,
)

from app.portfolio.layout.breakpoints import VIEW_BREAKPOINTS, row_metrics
from app.portfolio.layout.controller import LayoutController
from app.portfolio.layout.justified import Placement
from app.portfolio.utils.imaging import scan_image_items


class QtScheduler:
    """Scheduler backed by the Qt event loop."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        QTimer.singleShot(int(delay_ms), callback)


class JustifiedGalleryWidget(QWidget):
    """Positions one QLabel per image at the geometry the controller computes."""

    def __init__(self, parent: QWidget | None = None, view: str = "gallery") -> None:
        super().__init__(parent)
        self.view = view
        self.controller = LayoutController(scheduler=QtScheduler())
        self.controller.subscribe(lambda _width: self.relayout())
        self._items = []
        self._labels: dict[str, QLabel] = {}
        self._pixmaps: dict[str, QPixmap] = {}

    def set_folder(self, folder: str) -> None:
        for label in self._labels.values():
            label.deleteLater()
        self._labels.clear()
        self._pixmaps.clear()

        self._items = scan_image_items(folder)
        for item in self._items:
            key = str(item.key)
            label = QLabel(self)
            label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            label.setStyleSheet("background: #171717;")
            self._labels[key] = label
            self._pixmaps[key] = QPixmap(key)
        self.relayout()

    def set_view(self, view: str) -> None:
        self.view = view
        self.relayout()

    def _place(self, placement: Placement, top: int) -> None:
        key = str(placement.key)
        label = self._labels[key]
        label.setGeometry(placement.x, top, placement.pixel_width, placement.pixel_height)
        pix = self._pixmaps.get(key)
        if pix is not None and not pix.isNull():
            label.setPixmap(
                pix.scaled(
                    placement.pixel_width,
                    placement.pixel_height,
                    Qt.AspectRatioMode.IgnoreAspectRatio,
                    Qt.TransformationMode.SmoothTransformation,
                )
            )
        label.show()

    def relayout(self) -> None:
        width = self.controller.container_width
        if width <= 0:
            return
        metrics = row_metrics(view=self.view, viewport_width_px=int(width))
        result = self.controller.layout(self._items, metrics.target_row_height, metrics.gap)
        for row in result.rows:
            for placement in row.placements:
                self._place(placement, row.top)
        self.setMinimumHeight(result.total_height)

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self.controller.measure(event.size().width())


class MainWindow(QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Portfolio Grid Preview")
        self.resize(1200, 800)
        self.settings = QSettings("portfolio", "PortfolioGrid")

        self.gallery = JustifiedGalleryWidget(view=str(self.settings.value("grid/view", "gallery", type=str)))
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.gallery)
        self.setCentralWidget(scroll)

        self._build_toolbar()

        last = str(self.settings.value("grid/last_folder", "", type=str) or "")
        if last and Path(last).is_dir():
            self.gallery.set_folder(last)

    def _build_toolbar(self) -> None:
        bar = QToolBar("Grid")
        self.addToolBar(bar)

        open_action = QAction("Open Folder…", self)
        open_action.triggered.connect(self.choose_folder)
        bar.addAction(open_action)

        views = QComboBox()
        views.addItems(sorted(VIEW_BREAKPOINTS))
        views.setCurrentText(self.gallery.view)
        views.currentTextChanged.connect(self._on_view_changed)
        bar.addWidget(views)

    def _on_view_changed(self, view: str) -> None:
        self.settings.setValue("grid/view", view)
        self.gallery.set_view(view)

    def choose_folder(self) -> None:
        folder = QFileDialog.getExistingDirectory(self, "Choose image folder")
        if folder:
            self.settings.setValue("grid/last_folder", folder)
            self.gallery.set_folder(folder)


def main() -> None:
    app = QApplication(sys.argv)
    app.setOrganizationName("portfolio")
    app.setApplicationName("PortfolioGrid")

    win = MainWindow()
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
