# Qt signal definitions for Graph3D
#
# Centralized signal hub.  Widgets talk to each other through these
# signals; model/view changes themselves are observed on ViewState.

from PySide6.QtCore import QObject, Signal


class AppSignals(QObject):
    """Central signal hub for the application."""

    # File / model
    open_file = Signal()                    # request file dialog
    model_loaded = Signal(str, int)         # source name, point count

    # Canvas
    draw_requested = Signal()               # repaint canvas
    fit_requested = Signal(float)           # margin, < 0 for configured
    canvas_coords = Signal(float, float)    # view-space x, y under cursor

    # Status bar
    status_message = Signal(str)
    error_message = Signal(str, str)        # title, message
