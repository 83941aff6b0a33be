# Qt Canvas Widget - QPainter based point cloud view
#
# Paints the current ViewState back to front: the background planes
# with their grid first, then the axes and the model points.
# Uses Projection for 3D -> 2D, ViewTransform for 2D -> pixels and
# SceneGeometry for the raw scene geometry and styling.

from PySide6.QtCore import Qt, QPointF, Signal
from PySide6.QtGui import (
    QPen, QColor, QBrush, QPainter, QFont, QPolygonF, QLinearGradient,
    QWheelEvent, QMouseEvent,
)
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QToolBar, QCheckBox, QLabel,
)

from graph3d import FitView
from graph3d import Matrix4
from graph3d import Projection
from graph3d import SceneGeometry
from graph3d import ViewTransform
from graph3d import utils_core as Utils
from graph3d.utils_core import _

COLORS = {
    "background": QColor("white"),
    "point_outline": QColor("white"),
    "text": QColor("#81c784"),
    "plane_border": QColor(200, 200, 200, 128),
    "grid": QColor(180, 180, 180, 153),
    "grid_label": QColor(120, 120, 120, 204),
    "axis_x": QColor(SceneGeometry.AXIS_COLORS["x"]),
    "axis_y": QColor(SceneGeometry.AXIS_COLORS["y"]),
    "axis_z": QColor(SceneGeometry.AXIS_COLORS["z"]),
}

# Default max range for tick spacing with no model loaded
EMPTY_RANGE = 10.0

# Background geometry is built in world space, after Macc
_WORLD = Matrix4.identity()


class PointCanvas(QWidget):
    """Widget drawing a ViewState with pan (drag) and zoom (wheel)."""

    coords_changed = Signal(float, float)

    def __init__(self, state, parent=None):
        super().__init__(parent)
        self.state = state
        self.setMouseTracking(True)
        self.setMinimumSize(200, 200)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setCursor(Qt.CursorShape.OpenHandCursor)

        self._panning = False
        self._pan_start = QPointF()

        state.observe("*", self._on_state_changed)

    def _on_state_changed(self, key, new, old):
        self.update()

    # ------------------------------------------------------------------
    # Mouse interaction
    # ------------------------------------------------------------------
    def mousePressEvent(self, event: QMouseEvent):
        if event.button() in (Qt.MouseButton.LeftButton,
                              Qt.MouseButton.MiddleButton):
            self._panning = True
            self._pan_start = event.position()
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if self._panning and event.button() in (
                Qt.MouseButton.LeftButton, Qt.MouseButton.MiddleButton):
            self._panning = False
            self.setCursor(Qt.CursorShape.OpenHandCursor)
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        pos = event.position()
        if self._panning:
            delta = pos - self._pan_start
            self._pan_start = pos
            self.state.pan_pixels(delta.x(), delta.y())
            event.accept()
        x, y = ViewTransform.screen_to_world(
            pos.x(), pos.y(), self.state.view, self.width(), self.height())
        self.coords_changed.emit(x, y)

    def leaveEvent(self, event):
        self._panning = False
        self.setCursor(Qt.CursorShape.OpenHandCursor)
        super().leaveEvent(event)

    def wheelEvent(self, event: QWheelEvent):
        """Zoom in/out with mouse wheel."""
        dy = event.angleDelta().y()
        if dy:
            self.state.zoom(dy > 0)
        event.accept()

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.fillRect(self.rect(), COLORS["background"])
            transformed = Projection.transform_points(
                self.state.model, self.state.macc)
            if self.state.flag("grid"):
                bbox = SceneGeometry.background_box(transformed)
                self._draw_background(painter, bbox)
                self._draw_grid(painter, bbox)
            if self.state.flag("axes"):
                self._draw_axes(painter, transformed)
            if self.state.flag("points") and self.state.model:
                self._draw_points(painter)
            self._draw_info(painter)
        finally:
            painter.end()

    def _to_screen(self, xyz):
        """Project model-space xyz tuples to widget pixels."""
        return self._project(xyz, self.state.macc)

    def _world_to_screen(self, xyz):
        """Project world-space (already transformed) xyz to pixels."""
        return self._project(xyz, _WORLD)

    def _project(self, xyz, macc):
        coords = Projection.project_all(xyz, macc, self.state.projection)
        return ViewTransform.points_to_screen(
            coords, self.state.view, self.width(), self.height())

    def _make_pen(self, color, width=1.0):
        pen = QPen(color)
        pen.setWidthF(width)
        return pen

    def _draw_background(self, painter, bbox):
        painter.setPen(self._make_pen(COLORS["plane_border"], 1.0))
        planes = SceneGeometry.generate_background_planes(bbox)
        for name, corners in planes.items():
            screen = [QPointF(x, y) for x, y in self._world_to_screen(corners)]
            start, end = SceneGeometry.PLANE_COLORS[name]
            gradient = QLinearGradient(screen[0], screen[2])
            gradient.setColorAt(0.0, QColor(start))
            gradient.setColorAt(1.0, QColor(end))
            painter.setBrush(QBrush(gradient))
            painter.drawPolygon(QPolygonF(screen))
        painter.setBrush(Qt.BrushStyle.NoBrush)

    def _draw_grid(self, painter, bbox):
        step = ViewTransform.compute_grid_step(max(bbox.ranges))
        painter.setFont(QFont("Sans", 7))
        for plane in SceneGeometry.PLANE_COLORS:
            lines, labels = SceneGeometry.generate_plane_grid(
                bbox, step, plane)
            painter.setPen(self._make_pen(COLORS["grid"], 0.5))
            for start, end in lines:
                (x1, y1), (x2, y2) = self._world_to_screen([start, end])
                painter.drawLine(QPointF(x1, y1), QPointF(x2, y2))
            painter.setPen(self._make_pen(COLORS["grid_label"]))
            for value, pos in labels:
                ((sx, sy),) = self._world_to_screen([pos])
                painter.drawText(QPointF(sx + 3, sy - 3),
                                 SceneGeometry.grid_label(value))

    def _draw_axes(self, painter, transformed):
        if transformed:
            max_range = FitView.bounding_box_3d(transformed).max_range
            length = SceneGeometry.axis_length(
                transformed,
                Utils.getFloat("View", "axis.factor", FitView.AXIS_FACTOR))
        else:
            max_range = EMPTY_RANGE
            length = SceneGeometry.EMPTY_AXIS_LENGTH
        if length <= 0:
            return

        axes = SceneGeometry.generate_axes(length)
        step = ViewTransform.compute_tick_step(max_range)
        ticks = SceneGeometry.generate_ticks(length, step)

        label_font = QFont("Sans", 12, QFont.Weight.Bold)
        tick_font = QFont("Sans", 8)
        for name, segment in axes.items():
            color = COLORS["axis_" + name]
            (x1, y1), (x2, y2) = self._to_screen(segment)
            painter.setPen(self._make_pen(color, 2.0))
            painter.drawLine(QPointF(x1, y1), QPointF(x2, y2))
            painter.setFont(label_font)
            painter.drawText(QPointF(x2 + 8, y2 - 8), name.upper())

            painter.setPen(self._make_pen(color, 1.0))
            painter.setFont(tick_font)
            for _i, _value, _centre, a, b in ticks[name]:
                (ax, ay), (bx, by) = self._to_screen([a, b])
                painter.drawLine(QPointF(ax, ay), QPointF(bx, by))
            for label, centre in SceneGeometry.labelled_ticks(ticks[name]):
                ((cx, cy),) = self._to_screen([centre])
                painter.drawText(QPointF(cx + 3, cy - 3), label)

    def _draw_points(self, painter):
        model = self.state.model
        view = self.state.view
        w = self.width()
        h = self.height()
        screen = self._to_screen(model)
        r = SceneGeometry.adaptive_point_size(len(model), view.scale)

        painter.setPen(self._make_pen(COLORS["point_outline"], 1.0))
        for index, (sx, sy) in enumerate(screen):
            if -r <= sx <= w + r and -r <= sy <= h + r:
                painter.setBrush(QBrush(
                    QColor(SceneGeometry.point_color(index))))
                painter.drawEllipse(QPointF(sx, sy), r, r)

    def _draw_info(self, painter):
        painter.setPen(self._make_pen(COLORS["text"]))
        painter.setFont(QFont("Sans", 9))
        lines = [
            _("Points: {}").format(len(self.state.model)),
            _("Projection: {}").format(self.state.projection.label),
            _("Zoom: {:.0f}%").format(self.state.view.scale * 100),
        ]
        for i, text in enumerate(lines):
            painter.drawText(QPointF(10, 20 + 16 * i), text)


class CanvasPanel(QWidget):
    """Canvas with a toolbar of display toggles."""

    def __init__(self, state, signals, parent=None):
        super().__init__(parent)
        self.state = state
        self.signals = signals

        self.canvas = PointCanvas(state)

        toolbar = QToolBar()
        toolbar.setMovable(False)
        toolbar.addWidget(QLabel(_(" Show: ")))

        for flag, label in [
            ("axes", _("Axes")),
            ("points", _("Points")),
            ("grid", _("Grid")),
        ]:
            cb = QCheckBox(label)
            cb.setChecked(state.flag(flag))
            cb.toggled.connect(self._make_toggle(flag))
            toolbar.addWidget(cb)
            setattr(self, "cb_" + flag, cb)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(toolbar)
        layout.addWidget(self.canvas, 1)

        self.canvas.coords_changed.connect(self.signals.canvas_coords.emit)
        self.signals.draw_requested.connect(self.canvas.update)
        self.signals.fit_requested.connect(self.fit)

    def _make_toggle(self, flag):
        """Return a slot that sets a display flag."""
        def _toggle(checked):
            self.state.set_flag(flag, checked)
        return _toggle

    def fit(self, margin=None):
        """Fit the view to the canvas size."""
        if margin is not None and margin < 0:
            margin = None
        return self.state.fit(self.canvas.width(), self.canvas.height(),
                              margin)
