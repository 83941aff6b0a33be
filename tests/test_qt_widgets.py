"""Tests for the Qt shell: canvas, control panel and main window."""

import configparser
import gc
import os
import shutil
import sys
import tempfile
import unittest
from unittest import mock

# Offscreen rendering, must be set before QApplication import
os.environ["QT_QPA_PLATFORM"] = "offscreen"

_root = os.path.join(os.path.dirname(__file__), "..")
if _root not in sys.path:
    sys.path.insert(0, _root)

from PySide6.QtCore import (  # noqa: E402
    QEvent,
    QPoint,
    QPointF,
    Qt,
    qInstallMessageHandler,
)
from PySide6.QtGui import QMouseEvent, QWheelEvent  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402

# Single QApplication for all tests
app = QApplication.instance() or QApplication(sys.argv)

from graph3d import Demos  # noqa: E402
from graph3d import FitView  # noqa: E402
from graph3d import Matrix4  # noqa: E402
from graph3d import SceneGeometry  # noqa: E402
from graph3d import Transforms  # noqa: E402
from graph3d import utils_core as Utils  # noqa: E402
from graph3d.Projection import (  # noqa: E402
    AxonometricProjection,
    IsometricProjection,
    ObliqueProjection,
    SimpleProjection,
    UnknownProjection,
)
from graph3d.ViewState import ViewState  # noqa: E402
from graph3d.ViewTransform import ViewParams  # noqa: E402
from graph3d.qt.canvas_widget import CanvasPanel, PointCanvas  # noqa: E402
from graph3d.qt.control_panel import (  # noqa: E402
    ControlPanel,
    ProjectionWidget,
    TransformWidget,
)
from graph3d.qt.main_window import MainWindow  # noqa: E402
from graph3d.qt.signals import AppSignals  # noqa: E402


def _mouse(kind, x, y, button=Qt.MouseButton.LeftButton):
    pos = QPointF(x, y)
    buttons = Qt.MouseButton.NoButton \
        if kind == QEvent.Type.MouseButtonRelease else button
    return QMouseEvent(kind, pos, pos, button, buttons,
                       Qt.KeyboardModifier.NoModifier)


def _wheel(dy):
    pos = QPointF(50, 50)
    return QWheelEvent(pos, pos, QPoint(0, 0), QPoint(0, dy),
                       Qt.MouseButton.NoButton,
                       Qt.KeyboardModifier.NoModifier,
                       Qt.ScrollPhase.NoScrollPhase, False)


class ConfigTestCase(unittest.TestCase):
    """Run each test against an empty in-memory config.

    Widgets and signal hubs passed to keep() are deleted through the
    event loop after the test.
    """

    def setUp(self):
        self._saved_config = Utils.config
        Utils.config = configparser.ConfigParser(interpolation=None)
        self._objects = []

    def tearDown(self):
        for obj in reversed(self._objects):
            obj.deleteLater()
        self._objects = []
        app.sendPostedEvents(None, QEvent.Type.DeferredDelete)
        Utils.config = self._saved_config

    def keep(self, obj):
        self._objects.append(obj)
        return obj


class TestPointCanvas(ConfigTestCase):

    def setUp(self):
        super().setUp()
        self.state = ViewState(SimpleProjection())
        self.canvas = self.keep(PointCanvas(self.state))
        self.canvas.resize(400, 300)

    def test_paint_empty_and_loaded(self):
        self.assertFalse(self.canvas.grab().isNull())
        self.state.load_model(Demos.helix())
        self.state.fit(400, 300)
        self.assertFalse(self.canvas.grab().isNull())

    def test_paint_with_flags_off(self):
        self.state.load_model(Demos.cube())
        self.state.set_flag("axes", False)
        self.state.set_flag("points", False)
        self.state.set_flag("grid", False)
        self.assertFalse(self.canvas.grab().isNull())

    def test_tick_labels_symmetric(self):
        # length 3.0 and step 0.5: every second tick is labelled
        self.state.load_model([(0, 0, 0), (5, 0, 0)])
        self.state.set_flag("grid", False)
        with mock.patch.object(SceneGeometry, "tick_label",
                               wraps=SceneGeometry.tick_label) as label:
            self.canvas.grab()
        values = {round(c.args[0], 9) for c in label.call_args_list}
        self.assertEqual(values, {-3.0, -2.0, -1.0, 1.0, 2.0, 3.0})

    def test_grid_drawn_on_each_plane(self):
        self.state.load_model(Demos.cube())
        with mock.patch.object(SceneGeometry, "generate_plane_grid",
                               wraps=SceneGeometry.generate_plane_grid) \
                as grid:
            self.canvas.grab()
        planes = [c.args[2] for c in grid.call_args_list]
        self.assertEqual(planes, ["floor", "back", "side"])
        bbox, step = grid.call_args_list[0].args[:2]
        self.assertAlmostEqual(bbox.min_z, -1.4)
        self.assertGreater(step, 0.0)

    def test_grid_flag_off(self):
        self.state.load_model(Demos.cube())
        self.state.set_flag("grid", False)
        with mock.patch.object(SceneGeometry,
                               "generate_background_planes") as planes, \
                mock.patch.object(SceneGeometry,
                                  "generate_plane_grid") as grid:
            self.assertFalse(self.canvas.grab().isNull())
        planes.assert_not_called()
        grid.assert_not_called()

    def test_paint_unknown_projection(self):
        self.state.load_model(Demos.cube())
        self.state.set_projection(
            UnknownProjection("fisheye"))
        with self.assertLogs("graph3d.Projection", level="WARNING"):
            self.canvas.grab()

    def test_drag_pans(self):
        self.state.set_view(ViewParams(0, 0, 10))
        self.canvas.mousePressEvent(
            _mouse(QEvent.Type.MouseButtonPress, 10, 10))
        self.canvas.mouseMoveEvent(
            _mouse(QEvent.Type.MouseMove, 30, 20))
        self.canvas.mouseReleaseEvent(
            _mouse(QEvent.Type.MouseButtonRelease, 30, 20))
        self.assertEqual(self.state.view, ViewParams(2.0, -1.0, 10))

    def test_move_without_drag_reports_coords(self):
        coords = []
        self.canvas.coords_changed.connect(
            lambda x, y: coords.append((x, y)))
        self.canvas.mouseMoveEvent(_mouse(QEvent.Type.MouseMove, 200, 150))
        self.assertEqual(self.state.view, ViewParams())
        self.assertEqual(coords, [(0.0, 0.0)])

    def test_wheel_zooms(self):
        self.state.set_view(ViewParams(0, 0, 10))
        self.canvas.wheelEvent(_wheel(120))
        self.assertAlmostEqual(self.state.view.scale, 11.0)
        self.canvas.wheelEvent(_wheel(-120))
        self.assertAlmostEqual(self.state.view.scale, 9.9)


class TestCanvasPanel(ConfigTestCase):

    def setUp(self):
        super().setUp()
        self.state = ViewState(SimpleProjection())
        self.signals = self.keep(AppSignals())
        self.panel = self.keep(CanvasPanel(self.state, self.signals))
        self.panel.canvas.resize(800, 600)
        self.state.load_model(Demos.cube())

    def _expected(self, margin, include_axes=True):
        return FitView.fit_view_with_axes(
            Demos.cube(), Matrix4.identity(), SimpleProjection(),
            self.panel.canvas.width(), self.panel.canvas.height(),
            include_axes=include_axes, margin=margin)

    def test_fit_uses_canvas_size(self):
        self.assertEqual(self.panel.fit(0.05), self._expected(0.05))
        self.assertEqual(self.state.view, self._expected(0.05))

    def test_fit_requested_signal(self):
        self.signals.fit_requested.emit(-1.0)
        self.assertEqual(self.state.view, self._expected(0.1))

    def test_checkboxes_set_flags(self):
        self.panel.cb_axes.setChecked(False)
        self.assertFalse(self.state.flag("axes"))
        self.panel.cb_points.setChecked(False)
        self.assertFalse(self.state.flag("points"))
        self.panel.cb_grid.setChecked(False)
        self.assertFalse(self.state.flag("grid"))
        self.panel.fit(0.1)
        self.assertEqual(self.state.view, self._expected(0.1, False))


class TestProjectionWidget(ConfigTestCase):

    def setUp(self):
        super().setUp()
        self.state = ViewState()
        self.widget = self.keep(ProjectionWidget(self.state))

    def test_initial(self):
        self.assertEqual(self.widget.current_projection(),
                         IsometricProjection())

    def test_select_updates_state(self):
        self.widget.select("oblique")
        self.assertEqual(self.state.projection, ObliqueProjection(45, 0.5))
        self.widget.select("simple")
        self.assertEqual(self.state.projection, SimpleProjection())

    def test_parameters_update_state(self):
        self.widget.select("oblique")
        self.widget._lam.setValue(1.0)
        self.assertEqual(self.state.projection, ObliqueProjection(45, 1.0))
        self.widget.select("axono")
        self.widget._alpha.setValue(10.0)
        self.assertEqual(self.state.projection,
                         AxonometricProjection(10, 35))

    def test_show_projection_is_silent(self):
        self.widget.show_projection(AxonometricProjection(10, 20))
        self.assertEqual(self.state.projection, IsometricProjection())
        self.assertEqual(self.widget.current_projection(),
                         AxonometricProjection(10, 20))


class TestTransformWidget(ConfigTestCase):

    def setUp(self):
        super().setUp()
        self.state = ViewState()
        self.widget = self.keep(TransformWidget(self.state))
        self.messages = []
        self.widget.transformed.connect(self.messages.append)

    def test_translate(self):
        for sb, v in zip(self.widget._move, (1.0, 2.0, 3.0)):
            sb.setValue(v)
        self.widget._on_translate()
        self.assertEqual(self.state.macc, Matrix4.translation(1, 2, 3))
        self.assertEqual([sb.value() for sb in self.widget._move],
                         [0.0, 0.0, 0.0])
        self.assertEqual(len(self.messages), 1)

    def test_rotate(self):
        self.widget._rot[0].setValue(30.0)
        self.widget._on_rotate()
        self.assertEqual(
            self.state.macc,
            Transforms.apply_rotate(Matrix4.identity(), 30, 0, 0))
        self.assertEqual(self.widget._rot[0].value(), 0.0)

    def test_scale(self):
        self.widget._scale.setValue(2.0)
        self.widget._on_scale()
        self.assertEqual(self.state.macc, Matrix4.scale(2))
        self.assertEqual(self.widget._scale.value(), 1.0)

    def test_unit_scale_is_ignored(self):
        self.widget._on_scale()
        self.assertEqual(self.state.macc, Matrix4.identity())
        self.assertEqual(self.messages, [])

    def test_reset(self):
        self.widget.scale(0.5)
        self.widget.reset()
        self.assertEqual(self.state.macc, Matrix4.identity())


class TestControlPanel(ConfigTestCase):

    def setUp(self):
        super().setUp()
        self.state = ViewState()
        self.signals = self.keep(AppSignals())
        self.panel = self.keep(ControlPanel(self.state, self.signals))

    def test_load_demo(self):
        margins = []
        loaded = []
        self.signals.fit_requested.connect(margins.append)
        self.signals.model_loaded.connect(
            lambda name, n: loaded.append((name, n)))
        self.panel.model.load_demo("pyramid")
        self.assertEqual(self.state.model, Demos.pyramid())
        self.assertEqual(self.state.macc, Transforms.default_view_transform())
        self.assertEqual(margins, [0.05])
        self.assertEqual(loaded, [("pyramid", 5)])

    def test_transform_reports_status(self):
        status = []
        self.signals.status_message.connect(status.append)
        self.panel.transform.scale(2.0)
        self.assertEqual(len(status), 1)


class TestMainWindow(ConfigTestCase):

    def setUp(self):
        super().setUp()
        self.tmpdir = tempfile.mkdtemp()
        self.state = ViewState()
        self.window = self.keep(MainWindow(self.state))

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)
        super().tearDown()

    def _write(self, name, text):
        path = os.path.join(self.tmpdir, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def test_load(self):
        path = self._write("tri.xyz", "0 0 0\n1 0 0\n0 1 0\n")
        self.state.rotate(45, 0, 0)
        self.assertTrue(self.window.load(path))
        self.assertEqual(len(self.state.model), 3)
        self.assertEqual(self.state.macc, Transforms.default_view_transform())
        self.assertIn("tri.xyz", self.window.windowTitle())
        self.assertEqual(Utils.getRecent(0), os.path.abspath(path))

    @mock.patch("graph3d.qt.main_window.QMessageBox.warning")
    def test_load_error(self, warning):
        path = self._write("bad.txt", "not a point\n")
        errors = []
        self.window.signals.error_message.connect(
            lambda title, msg: errors.append(msg))
        self.state.load_model(Demos.cube())
        with self.assertLogs("graph3d.qt.main_window", level="ERROR"):
            self.assertFalse(self.window.load(path))
        self.assertEqual(self.state.model, Demos.cube())
        self.assertEqual(len(errors), 1)
        self.assertIn("No valid points", errors[0])
        warning.assert_called_once()

    def test_projection_change_updates_panel(self):
        self.state.set_projection(ObliqueProjection(30, 1.0))
        self.assertEqual(
            self.window.control_panel.projection.current_projection(),
            ObliqueProjection(30, 1.0))

    @mock.patch("graph3d.qt.main_window.QMessageBox.about")
    def test_about_has_no_link(self, about):
        self.window._on_about()
        about.assert_called_once()
        text = about.call_args.args[2]
        self.assertIn(Utils.__version__, text)
        self.assertNotIn("href", text)
        self.assertNotIn("http", text)

    def test_signal_hub_is_owned_by_window(self):
        self.assertIs(self.window.signals.parent(), self.window)


class TestWindowTeardown(ConfigTestCase):
    """Deleting a window with live connections leaves Qt quiet."""

    def setUp(self):
        super().setUp()
        self.messages = []
        self._previous = qInstallMessageHandler(self._capture)

    def tearDown(self):
        qInstallMessageHandler(self._previous)
        super().tearDown()

    def _capture(self, mode, context, message):
        self.messages.append(message)

    def test_delete_window(self):
        state = ViewState()
        window = MainWindow(state)
        errors = []
        window.signals.error_message.connect(
            lambda title, msg: errors.append(msg))
        window.signals.status_message.emit("ready")
        window.deleteLater()
        app.sendPostedEvents(None, QEvent.Type.DeferredDelete)
        del window
        gc.collect()
        app.processEvents()
        self.assertFalse(
            [m for m in self.messages if "deleted directly" in m],
            self.messages)


if __name__ == "__main__":
    unittest.main()
