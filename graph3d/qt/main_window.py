# Qt Main Window
#
# Provides menu bar, the control dock, the central canvas and the
# status bar, and wires them to the shared ViewState.

import base64
import logging
import os

from PySide6.QtCore import Qt, QByteArray
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QMainWindow, QDockWidget, QStatusBar, QLabel,
    QFileDialog, QMessageBox,
)

from graph3d import PointFile
from graph3d import Transforms
from graph3d import utils_core as Utils
from graph3d.Demos import DEMOS
from graph3d.Projection import PROJECTIONS
from graph3d.utils_core import _

from .signals import AppSignals
from .canvas_widget import CanvasPanel
from .control_panel import ControlPanel

log = logging.getLogger(__name__)

FILETYPES_FILTER = (
    "Point files (*.txt *.xyz);;"
    "All files (*)"
)

ABOUT_TEXT = _("3D point set transform and projection viewer")


class MainWindow(QMainWindow):
    """Main application window around a ViewState."""

    def __init__(self, state):
        super().__init__()
        self.state = state
        self.signals = AppSignals(self)
        self._filename = None

        self.resize(1200, 800)
        self._update_title()

        # --- Central widget: Canvas ---
        self.canvas_panel = CanvasPanel(state, self.signals)
        self.canvas_panel.setMinimumWidth(400)
        self.setCentralWidget(self.canvas_panel)

        # --- Dock: Control panel (left) ---
        self.control_dock = QDockWidget(_("Control"), self)
        self.control_dock.setObjectName("ControlDock")
        self.control_dock.setAllowedAreas(
            Qt.DockWidgetArea.LeftDockWidgetArea
            | Qt.DockWidgetArea.RightDockWidgetArea)
        self.control_panel = ControlPanel(state, self.signals)
        self.control_dock.setWidget(self.control_panel)
        self.addDockWidget(Qt.DockWidgetArea.LeftDockWidgetArea,
                           self.control_dock)

        self._setup_statusbar()
        self._setup_menubar()

        # --- Wire signals ---
        self.signals.open_file.connect(self._on_open_file)
        self.signals.status_message.connect(self._on_status_message)
        self.signals.error_message.connect(self._on_error_message)
        self.signals.canvas_coords.connect(self._on_canvas_coords)
        self.signals.model_loaded.connect(self._on_model_loaded)
        state.observe("projection", self._on_projection_changed)

        self._restore_layout()

    # ------------------------------------------------------------------
    # Status bar
    # ------------------------------------------------------------------
    def _setup_statusbar(self):
        self.statusbar = QStatusBar()
        self.setStatusBar(self.statusbar)

        self._status_label = QLabel(_("Ready"))
        self.statusbar.addWidget(self._status_label, 1)

        # view-space position under the cursor
        self._coords = QLabel()
        self._coords.setMinimumWidth(180)
        self._coords.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.statusbar.addPermanentWidget(self._coords)
        self._on_canvas_coords(0.0, 0.0)

    # ------------------------------------------------------------------
    # Menu bar
    # ------------------------------------------------------------------
    def _setup_menubar(self):
        menubar = self.menuBar()

        # File menu
        file_menu = menubar.addMenu(_("&File"))

        open_action = QAction(_("&Open..."), self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._on_open_file)
        file_menu.addAction(open_action)

        self._recent_menu = file_menu.addMenu(_("Open &Recent"))
        self._build_recent_menu()

        demo_menu = file_menu.addMenu(_("&Demo"))
        for name in DEMOS:
            action = QAction(name.capitalize(), self)
            action.triggered.connect(
                lambda checked=False, n=name:
                    self.control_panel.model.load_demo(n))
            demo_menu.addAction(action)

        file_menu.addSeparator()

        quit_action = QAction(_("&Quit"), self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        # View menu
        view_menu = menubar.addMenu(_("&View"))
        view_menu.addAction(self.control_dock.toggleViewAction())
        view_menu.addSeparator()

        fit_action = QAction(_("&Fit to Content"), self)
        fit_action.setShortcut(QKeySequence("Ctrl+F"))
        fit_action.triggered.connect(
            lambda: self.canvas_panel.fit(
                Utils.getFloat("View", "margin", 0.1)))
        view_menu.addAction(fit_action)

        reset_action = QAction(_("&Reset Transform"), self)
        reset_action.setShortcut(QKeySequence("Ctrl+R"))
        reset_action.triggered.connect(self.control_panel.transform.reset)
        view_menu.addAction(reset_action)

        view_menu.addSeparator()

        # Projection shortcuts 1..4
        for i, cls in enumerate(PROJECTIONS, start=1):
            action = QAction(_(cls.label), self)
            action.setShortcut(QKeySequence(str(i)))
            action.triggered.connect(
                lambda checked=False, k=cls.kind:
                    self.control_panel.projection.select(k))
            view_menu.addAction(action)

        # Help menu
        help_menu = menubar.addMenu(_("&Help"))
        about_action = QAction(_("&About Graph3D"), self)
        about_action.triggered.connect(self._on_about)
        help_menu.addAction(about_action)

    # ------------------------------------------------------------------
    # File operations
    # ------------------------------------------------------------------
    def _on_open_file(self):
        filename, _filt = QFileDialog.getOpenFileName(
            self, _("Open Point File"), "", FILETYPES_FILTER)
        if filename:
            self.load(filename)

    def load(self, filename):
        """Load a point file, reporting problems to the user.

        Returns:
            True when the model was replaced.
        """
        try:
            result = PointFile.load(filename)
        except PointFile.PointFileError as e:
            log.error("Cannot load %s: %s", filename, e)
            self.signals.error_message.emit(_("Load error"), str(e))
            return False

        self.state.load_model(
            result.points, Transforms.default_view_transform())
        self.canvas_panel.fit(Utils.getFloat("View", "margin.load", 0.05))
        self._filename = filename
        Utils.addRecent(filename)
        self._build_recent_menu()
        self.signals.model_loaded.emit(filename, len(result.points))
        if result.warnings:
            self._on_status_message(
                _("'{}' loaded: {} points, {} lines skipped").format(
                    os.path.basename(filename), len(result.points),
                    len(result.warnings)))
        else:
            self._on_status_message(
                _("'{}' loaded: {} points").format(
                    os.path.basename(filename), len(result.points)))
        return True

    def _build_recent_menu(self):
        self._recent_menu.clear()
        for i in range(Utils._maxRecent):
            filename = Utils.getRecent(i)
            if filename is None:
                break
            action = QAction(f"{i + 1} {os.path.basename(filename)}", self)
            action.setToolTip(filename)
            action.triggered.connect(
                lambda checked=False, fn=filename: self.load(fn))
            self._recent_menu.addAction(action)
        self._recent_menu.setEnabled(not self._recent_menu.isEmpty())

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------
    def _update_title(self):
        if self._filename:
            fname = os.path.basename(self._filename)
            self.setWindowTitle(f"Graph3D {Utils.__version__}: {fname}")
        else:
            self.setWindowTitle(f"Graph3D {Utils.__version__}")

    def _on_model_loaded(self, source, count):
        if not os.path.isfile(source):
            self._filename = None
        self._update_title()

    def _on_projection_changed(self, key, new, old):
        self.control_panel.projection.show_projection(new)

    def _on_status_message(self, msg):
        self._status_label.setText(msg)

    def _on_error_message(self, title, msg):
        self._on_status_message(msg)
        QMessageBox.warning(self, title, msg)

    def _on_canvas_coords(self, x, y):
        self._coords.setText(f"x {x:9.3f}   y {y:9.3f}")

    def _on_about(self):
        QMessageBox.about(
            self,
            _("About Graph3D v{}").format(Utils.__version__),
            f"<h3>Graph3D v{Utils.__version__}</h3><p>{ABOUT_TEXT}</p>")

    # ------------------------------------------------------------------
    # Layout save / restore
    # ------------------------------------------------------------------
    def _save_layout(self):
        section = "Window"
        Utils.addSection(section)
        geo = base64.b64encode(
            self.saveGeometry().data()).decode("ascii")
        state = base64.b64encode(
            self.saveState().data()).decode("ascii")
        Utils.config.set(section, "geometry", geo)
        Utils.config.set(section, "state", state)

    def _restore_layout(self):
        try:
            geo = Utils.getStr("Window", "geometry")
            if geo:
                self.restoreGeometry(QByteArray(base64.b64decode(geo)))
            state = Utils.getStr("Window", "state")
            if state:
                self.restoreState(QByteArray(base64.b64decode(state)))
        except ValueError:
            log.debug("Ignoring malformed saved window layout")

    def closeEvent(self, event):
        self._save_layout()
        proj = self.state.projection.as_dict()
        for key, value in proj.items():
            Utils.setStr("Projection", key, value)
        try:
            Utils.saveConfiguration()
        except OSError as e:
            log.warning("Cannot save configuration: %s", e)
        super().closeEvent(event)
