# Qt Application Entry Point
#
# Usage:
#     graph3d [file.xyz]
#   or
#     python -m graph3d.qt.app [file.xyz]

import logging
import os
import sys

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication

from graph3d import Demos
from graph3d import Projection
from graph3d import Transforms
from graph3d import utils_core as Utils
from graph3d.ViewState import ViewState

from .main_window import MainWindow

log = logging.getLogger(__name__)


def main():
    """Create the QApplication, ViewState and MainWindow, then run."""
    Utils.loadConfiguration()
    Utils.setupLogging()

    app = QApplication(sys.argv)
    app.setApplicationName("Graph3D")
    app.setApplicationVersion(Utils.__version__)

    state = ViewState(Projection.projection_from_config())
    window = MainWindow(state)
    window.show()

    # Load file from command line if provided, else the cube demo.
    # Deferred until the window is laid out so the fit sees the real
    # canvas size.
    args = [a for a in sys.argv[1:] if not a.startswith("-")]

    def _initial_load():
        if args and os.path.isfile(args[0]) and window.load(args[0]):
            return
        state.load_model(Demos.cube(), Transforms.default_view_transform())
        window.canvas_panel.fit(Utils.getFloat("View", "margin.load", 0.05))

    QTimer.singleShot(0, _initial_load)

    log.info("%s started", Utils.__title__)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
