# Qt Control Panel - model, projection and transform controls
#
# Compact QWidget groups for loading data, choosing the projection
# and applying translate/rotate/scale steps to the model.

import logging

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QStackedWidget,
    QGroupBox, QLabel, QPushButton, QComboBox, QDoubleSpinBox,
)

from graph3d import Demos
from graph3d import Transforms
from graph3d import utils_core as Utils
from graph3d.Projection import (
    PROJECTIONS,
    AxonometricProjection,
    IsometricProjection,
    ObliqueProjection,
    SimpleProjection,
)
from graph3d.utils_core import _

log = logging.getLogger(__name__)

# Quick scale factors
SCALE_PRESETS = [0.5, 0.8, 1.25, 2.0]

# Oblique presets: (label, lambda)
OBLIQUE_PRESETS = [("Cavalier", 1.0), ("Cabinet", 0.5)]


def _spin(minimum, maximum, value, step=1.0, decimals=2, suffix=""):
    sb = QDoubleSpinBox()
    sb.setRange(minimum, maximum)
    sb.setDecimals(decimals)
    sb.setSingleStep(step)
    sb.setValue(value)
    if suffix:
        sb.setSuffix(suffix)
    return sb


class ModelWidget(QGroupBox):
    """File and demo loading."""

    def __init__(self, state, signals, parent=None):
        super().__init__(_("Model"), parent)
        self.state = state
        self.signals = signals

        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        open_btn = QPushButton(_("Open..."))
        open_btn.clicked.connect(self.signals.open_file.emit)
        layout.addWidget(open_btn)

        self._demo_combo = QComboBox()
        self._demo_combo.addItems(list(Demos.DEMOS))
        layout.addWidget(self._demo_combo, 1)

        demo_btn = QPushButton(_("Load demo"))
        demo_btn.clicked.connect(self._on_load_demo)
        layout.addWidget(demo_btn)

    def _on_load_demo(self):
        self.load_demo(self._demo_combo.currentText())

    def load_demo(self, name):
        points = Demos.get_demo(name)
        self.state.load_model(points, Transforms.default_view_transform())
        self.signals.fit_requested.emit(
            Utils.getFloat("View", "margin.load", 0.05))
        self.signals.model_loaded.emit(name, len(points))
        self.signals.status_message.emit(
            _("Demo '{}' loaded").format(name))


class ProjectionWidget(QGroupBox):
    """Projection selector with per-projection parameters."""

    def __init__(self, state, parent=None):
        super().__init__(_("Projection"), parent)
        self.state = state

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        self._combo = QComboBox()
        for cls in PROJECTIONS:
            self._combo.addItem(_(cls.label), cls.kind)
        layout.addWidget(self._combo)

        # One parameter page per projection kind
        self._pages = QStackedWidget()
        self._page_index = {}

        # Oblique
        page = QWidget()
        grid = QGridLayout(page)
        grid.setContentsMargins(0, 0, 0, 0)
        self._phi = _spin(0.0, 360.0, 45.0, 5.0, 1, "°")
        self._lam = _spin(0.0, 2.0, 0.5, 0.05, 2)
        grid.addWidget(QLabel("φ"), 0, 0)
        grid.addWidget(self._phi, 0, 1)
        grid.addWidget(QLabel("λ"), 1, 0)
        grid.addWidget(self._lam, 1, 1)
        row = QHBoxLayout()
        for label, lam in OBLIQUE_PRESETS:
            btn = QPushButton(_(label))
            btn.clicked.connect(
                lambda checked=False, v=lam: self._lam.setValue(v))
            row.addWidget(btn)
        grid.addLayout(row, 2, 0, 1, 2)
        self._page_index[ObliqueProjection.kind] = self._pages.addWidget(page)

        # Axonometric
        page = QWidget()
        grid = QGridLayout(page)
        grid.setContentsMargins(0, 0, 0, 0)
        self._alpha = _spin(-180.0, 180.0, 30.0, 5.0, 1, "°")
        self._beta = _spin(-180.0, 180.0, 35.0, 5.0, 1, "°")
        grid.addWidget(QLabel("α"), 0, 0)
        grid.addWidget(self._alpha, 0, 1)
        grid.addWidget(QLabel("β"), 1, 0)
        grid.addWidget(self._beta, 1, 1)
        self._page_index[AxonometricProjection.kind] = \
            self._pages.addWidget(page)

        # No parameters
        empty = self._pages.addWidget(QWidget())
        self._page_index[IsometricProjection.kind] = empty
        self._page_index[SimpleProjection.kind] = empty

        layout.addWidget(self._pages)

        self.show_projection(state.projection)

        self._combo.currentIndexChanged.connect(self._on_changed)
        for sb in (self._phi, self._lam, self._alpha, self._beta):
            sb.valueChanged.connect(self._on_changed)

    def show_projection(self, proj):
        """Reflect proj in the widgets without emitting changes."""
        widgets = (self._combo, self._phi, self._lam, self._alpha, self._beta)
        for w in widgets:
            w.blockSignals(True)
        try:
            index = self._combo.findData(proj.kind)
            if index >= 0:
                self._combo.setCurrentIndex(index)
            if isinstance(proj, ObliqueProjection):
                self._phi.setValue(proj.phi)
                self._lam.setValue(proj.lam)
            elif isinstance(proj, AxonometricProjection):
                self._alpha.setValue(proj.alpha)
                self._beta.setValue(proj.beta)
            self._pages.setCurrentIndex(
                self._page_index.get(proj.kind, self._page_index["simple"]))
        finally:
            for w in widgets:
                w.blockSignals(False)

    def select(self, kind):
        """Select a projection by kind, keeping the current parameters."""
        index = self._combo.findData(kind)
        if index >= 0:
            self._combo.setCurrentIndex(index)

    def current_projection(self):
        kind = self._combo.currentData()
        if kind == ObliqueProjection.kind:
            return ObliqueProjection(self._phi.value(), self._lam.value())
        if kind == AxonometricProjection.kind:
            return AxonometricProjection(
                self._alpha.value(), self._beta.value())
        if kind == SimpleProjection.kind:
            return SimpleProjection()
        return IsometricProjection()

    def _on_changed(self, *args):
        proj = self.current_projection()
        self._pages.setCurrentIndex(self._page_index[proj.kind])
        self.state.set_projection(proj)


class TransformWidget(QGroupBox):
    """Translate / rotate / scale steps applied to the model."""

    transformed = Signal(str)

    def __init__(self, state, parent=None):
        super().__init__(_("Transform"), parent)
        self.state = state

        grid = QGridLayout(self)
        grid.setContentsMargins(4, 4, 4, 4)
        grid.setSpacing(4)

        for col, text in enumerate(["", "X", "Y", "Z"]):
            grid.addWidget(QLabel(text), 0, col)

        grid.addWidget(QLabel(_("Move")), 1, 0)
        self._move = [_spin(-1e6, 1e6, 0.0, 0.5, 3) for _i in range(3)]
        for col, sb in enumerate(self._move, start=1):
            grid.addWidget(sb, 1, col)
        move_btn = QPushButton(_("Apply"))
        move_btn.clicked.connect(self._on_translate)
        grid.addWidget(move_btn, 1, 4)

        grid.addWidget(QLabel(_("Rotate")), 2, 0)
        self._rot = [_spin(-360.0, 360.0, 0.0, 5.0, 1, "°") for _i in range(3)]
        for col, sb in enumerate(self._rot, start=1):
            grid.addWidget(sb, 2, col)
        rot_btn = QPushButton(_("Apply"))
        rot_btn.clicked.connect(self._on_rotate)
        grid.addWidget(rot_btn, 2, 4)

        grid.addWidget(QLabel(_("Scale")), 3, 0)
        self._scale = _spin(0.001, 1000.0, 1.0, 0.1, 3)
        grid.addWidget(self._scale, 3, 1)
        scale_btn = QPushButton(_("Apply"))
        scale_btn.clicked.connect(self._on_scale)
        grid.addWidget(scale_btn, 3, 4)

        presets = QHBoxLayout()
        for k in SCALE_PRESETS:
            btn = QPushButton(f"×{k:g}")
            btn.clicked.connect(lambda checked=False, v=k: self.scale(v))
            presets.addWidget(btn)
        grid.addLayout(presets, 4, 0, 1, 5)

        reset_btn = QPushButton(_("Reset transform"))
        reset_btn.clicked.connect(self.reset)
        grid.addWidget(reset_btn, 5, 0, 1, 5)

    def _on_translate(self):
        dx, dy, dz = (sb.value() for sb in self._move)
        self.state.translate(dx, dy, dz)
        for sb in self._move:
            sb.setValue(0.0)
        self.transformed.emit(
            _("Moved by ({:g}, {:g}, {:g})").format(dx, dy, dz))

    def _on_rotate(self):
        rx, ry, rz = (sb.value() for sb in self._rot)
        self.state.rotate(rx, ry, rz)
        for sb in self._rot:
            sb.setValue(0.0)
        self.transformed.emit(
            _("Rotated by ({:g}°, {:g}°, {:g}°)").format(rx, ry, rz))

    def _on_scale(self):
        k = self._scale.value()
        self._scale.setValue(1.0)
        if k == 1.0:
            return
        self.scale(k)

    def scale(self, k):
        self.state.scale(k)
        log.debug("Scale %g applied", k)
        self.transformed.emit(_("Scaled by {:g}").format(k))

    def reset(self):
        for sb in self._move + self._rot:
            sb.setValue(0.0)
        self._scale.setValue(1.0)
        self.state.reset_transform()
        self.transformed.emit(_("Transform reset"))


class ControlPanel(QWidget):
    """Left dock panel grouping the model, projection and transform controls."""

    def __init__(self, state, signals, parent=None):
        super().__init__(parent)
        self.state = state
        self.signals = signals

        layout = QVBoxLayout(self)
        layout.setContentsMargins(2, 2, 2, 2)

        self.model = ModelWidget(state, signals)
        layout.addWidget(self.model)

        self.projection = ProjectionWidget(state)
        layout.addWidget(self.projection)

        self.transform = TransformWidget(state)
        self.transform.transformed.connect(self.signals.status_message.emit)
        layout.addWidget(self.transform)

        fit_btn = QPushButton(_("Fit view"))
        fit_btn.clicked.connect(
            lambda: self.signals.fit_requested.emit(
                Utils.getFloat("View", "margin", 0.1)))
        layout.addWidget(fit_btn)

        layout.addStretch(1)
