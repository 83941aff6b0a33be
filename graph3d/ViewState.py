# ViewState - Observable application state
#
# Owns the loaded model, the accumulated transform, the projection,
# the 2D view parameters and the display flags.  The math modules
# stay pure; this is the one place that holds state between calls.
# Observers are told about every changed key, and batch() groups
# several changes into one notification round.

import logging
import threading
from collections import defaultdict

from graph3d import FitView
from graph3d import Matrix4
from graph3d import Transforms
from graph3d import ViewTransform
from graph3d import utils_core as Utils
from graph3d.Projection import IsometricProjection
from graph3d.ViewTransform import ViewParams

log = logging.getLogger(__name__)

MODEL = "model"
MACC = "macc"
VIEW = "view"
PROJECTION = "projection"
FLAGS = "flags"

DEFAULT_FLAGS = {"axes": True, "points": True, "grid": True}


class _BatchContext:
    """Context manager for batched ViewState updates."""

    def __init__(self, state):
        self._state = state

    def __enter__(self):
        with self._state._lock:
            self._state._batch_depth += 1
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        with self._state._lock:
            self._state._batch_depth -= 1
            if self._state._batch_depth == 0:
                changes = dict(self._state._batch_changes)
                self._state._batch_changes.clear()
                notifications = [
                    (key, new, old, self._state._observers_for(key))
                    for key, (new, old) in changes.items()
                    if new != old
                ]
            else:
                notifications = []

        for key, new, old, observers in notifications:
            self._state._notify(key, new, old, observers)


class ViewState:
    """Application state with change notification.

    Values are replaced, never mutated in place, so observers can
    keep the old value they are handed.
    """

    def __init__(self, projection=None):
        self._vars = {
            MODEL: [],
            MACC: Matrix4.identity(),
            VIEW: ViewParams(),
            PROJECTION: projection or IsometricProjection(),
            FLAGS: dict(DEFAULT_FLAGS),
        }
        self._lock = threading.Lock()
        self._observers = defaultdict(list)
        self._batch_depth = 0
        self._batch_changes = {}

    # ------------------------------------------------------------------
    # Observable store
    # ------------------------------------------------------------------
    def get(self, key, default=None):
        return self._vars.get(key, default)

    def set(self, key, value):
        """Set a state variable, notifying observers if it changed.

        During a batch() the notification is deferred until the
        outermost batch exits.
        """
        observers = None
        with self._lock:
            old = self._vars.get(key)
            self._vars[key] = value
            changed = old != value
            if changed:
                if self._batch_depth > 0:
                    # keep the value from before the batch started
                    first_old = self._batch_changes.get(key, (None, old))[1]
                    self._batch_changes[key] = (value, first_old)
                else:
                    observers = self._observers_for(key)

        if observers:
            self._notify(key, value, old, observers)

    def batch(self):
        """Context manager grouping several set() calls.

        Usage:
            with state.batch():
                state.set("view", view)
                state.set("macc", macc)
            # observers notified here
        """
        return _BatchContext(self)

    def observe(self, key, callback):
        """Register callback(key, new_value, old_value) for key or "*"."""
        with self._lock:
            if callback not in self._observers[key]:
                self._observers[key].append(callback)

    def unobserve(self, key, callback):
        with self._lock:
            try:
                self._observers[key].remove(callback)
            except ValueError:
                pass

    def _observers_for(self, key):
        return list(self._observers.get(key, [])) + \
            list(self._observers.get("*", []))

    def _notify(self, key, new_value, old_value, observers):
        """Invoke observer callbacks outside the lock."""
        for callback in observers:
            try:
                callback(key, new_value, old_value)
            except Exception:
                log.exception("Observer %r failed for %r", callback, key)

    def __getitem__(self, key):
        return self._vars[key]

    # ------------------------------------------------------------------
    # Convenience accessors
    # ------------------------------------------------------------------
    @property
    def model(self):
        return self._vars[MODEL]

    @property
    def macc(self):
        return self._vars[MACC]

    @property
    def view(self):
        return self._vars[VIEW]

    @property
    def projection(self):
        return self._vars[PROJECTION]

    def flag(self, name):
        return self._vars[FLAGS].get(name, False)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def load_model(self, points, macc=None):
        """Replace the model and reset the accumulated transform.

        Args:
            points: Iterable of (x, y, z).
            macc: Optional starting transform, identity by default.
        """
        model = [(float(p[0]), float(p[1]), float(p[2])) for p in points]
        with self.batch():
            self.set(MODEL, model)
            self.set(MACC, Matrix4.copy(macc) if macc else Matrix4.identity())
        log.debug("Model loaded with %d points", len(model))

    def translate(self, dx, dy, dz):
        self.set(MACC, Transforms.apply_translate(self.macc, dx, dy, dz))

    def rotate(self, rx, ry, rz):
        self.set(MACC, Transforms.apply_rotate(self.macc, rx, ry, rz))

    def scale(self, k):
        self.set(MACC, Transforms.apply_scale(self.macc, k))

    def reset_transform(self):
        self.set(MACC, Matrix4.identity())

    def set_projection(self, projection):
        self.set(PROJECTION, projection)

    def set_view(self, view):
        self.set(VIEW, view)

    def set_flag(self, name, value):
        flags = dict(self._vars[FLAGS])
        flags[name] = bool(value)
        self.set(FLAGS, flags)

    def fit(self, width, height, margin=None):
        """Fit the view to the model (and the axes when shown)."""
        if margin is None:
            margin = Utils.getFloat("View", "margin", 0.1)
        factor = Utils.getFloat("View", "axis.factor", FitView.AXIS_FACTOR)
        view = FitView.fit_view_with_axes(
            self.model, self.macc, self.projection, width, height,
            include_axes=self.flag("axes"), margin=margin, factor=factor)
        self.set(VIEW, view)
        return view

    def pan_pixels(self, dx, dy):
        self.set(VIEW, ViewTransform.pan_by_pixels(self.view, dx, dy))

    def zoom(self, zoom_in):
        view = ViewTransform.zoom_view(
            self.view, zoom_in,
            Utils.getFloat("View", "zoom.min", 0.01),
            Utils.getFloat("View", "zoom.max", 100000.0),
            Utils.getFloat("View", "zoom.factor", ViewTransform.ZOOM_FACTOR))
        self.set(VIEW, view)
