# ViewTransform - Toolkit-independent view-space / screen mapping
#
# View space is the 2D output of the projector.  The screen
# convention is:
#
#     sx = width/2  + (x + pan_x) * scale
#     sy = height/2 - (y + pan_y) * scale
#
# The Y flip lives here, not in the projector.  Pan is in world
# units, scale is pixels per world unit.

import math

# Zoom factor per wheel step
ZOOM_FACTOR = 1.1


class ViewParams:
    """Pan offset (world units) and screen scale (pixels per unit)."""

    __slots__ = ("pan_x", "pan_y", "scale")

    def __init__(self, pan_x=0.0, pan_y=0.0, scale=1.0):
        self.pan_x = pan_x
        self.pan_y = pan_y
        self.scale = scale

    @property
    def pan(self):
        return (self.pan_x, self.pan_y)

    def copy(self):
        return ViewParams(self.pan_x, self.pan_y, self.scale)

    def __eq__(self, other):
        if not isinstance(other, ViewParams):
            return NotImplemented
        return (self.pan_x == other.pan_x
                and self.pan_y == other.pan_y
                and self.scale == other.scale)

    def __hash__(self):
        return hash((self.pan_x, self.pan_y, self.scale))

    def __repr__(self):
        return (f"ViewParams(pan_x={self.pan_x!r}, pan_y={self.pan_y!r}, "
                f"scale={self.scale!r})")


def world_to_screen(x, y, view, width, height):
    """Map a view-space point to screen pixels.

    Args:
        x, y: View-space coordinates (projector output).
        view: ViewParams.
        width, height: Viewport size in pixels.

    Returns:
        Tuple (sx, sy) with +Y pointing up on screen.
    """
    sx = width / 2.0 + (x + view.pan_x) * view.scale
    sy = height / 2.0 - (y + view.pan_y) * view.scale
    return sx, sy


def screen_to_world(sx, sy, view, width, height):
    """Inverse of world_to_screen."""
    x = (sx - width / 2.0) / view.scale - view.pan_x
    y = (height / 2.0 - sy) / view.scale - view.pan_y
    return x, y


def points_to_screen(points2, view, width, height):
    """world_to_screen over a list of (x, y) points."""
    cx = width / 2.0
    cy = height / 2.0
    s = view.scale
    px = view.pan_x
    py = view.pan_y
    return [(cx + (x + px) * s, cy - (y + py) * s) for x, y in points2]


def pan_by_pixels(view, dx, dy):
    """Return the view after dragging by (dx, dy) screen pixels.

    Pixel deltas are divided by the scale; screen Y grows down so
    the Y delta is negated.
    """
    return ViewParams(
        view.pan_x + dx / view.scale,
        view.pan_y - dy / view.scale,
        view.scale,
    )


def zoom_view(view, zoom_in, min_scale, max_scale, factor=ZOOM_FACTOR):
    """Return the view after one wheel step.

    Zooming in multiplies the scale by factor, zooming out by
    (2 - factor).  The result is clamped to [min_scale, max_scale]
    and the pan is left alone, so the zoom is about the viewport
    centre.
    """
    if zoom_in:
        new_scale = view.scale * factor
    else:
        new_scale = view.scale * (2.0 - factor)
    new_scale = max(min_scale, min(max_scale, new_scale))
    return ViewParams(view.pan_x, view.pan_y, new_scale)


def compute_tick_step(max_range):
    """Compute a readable spacing for axis tick marks.

    Aims for roughly 8 to 16 ticks across max_range.

    Args:
        max_range: Largest extent of the data on any axis.

    Returns:
        float: Tick spacing, 1.0 for an empty or degenerate range.
    """
    if not max_range or max_range <= 0 or not math.isfinite(max_range):
        return 1.0
    step = math.pow(10.0, math.floor(math.log10(max_range / 8.0)))
    if max_range / step > 16:
        step *= 2
    if max_range / step > 16:
        step *= 2.5
    return step


def compute_grid_step(max_range):
    """Spacing for the background plane grid.

    Small ranges are split into a fixed number of cells (8 below
    0.001 up to 15 below 1).  Larger ranges use a power of ten
    near max_range / 10, doubled then x2.5 while there would be
    more than 20 lines.  A step under max_range / 50 is replaced
    by max_range / 20.

    Returns:
        float: Grid spacing, 0.0 (no grid) for an empty range.
    """
    if not max_range or max_range <= 0 or not math.isfinite(max_range):
        return 0.0
    if max_range < 0.001:
        step = max_range / 8
    elif max_range < 0.01:
        step = max_range / 10
    elif max_range < 0.1:
        step = max_range / 12
    elif max_range < 1:
        step = max_range / 15
    else:
        step = math.pow(10.0, math.floor(math.log10(max_range / 10.0)))
        if max_range / step > 20:
            step *= 2
        if max_range / step > 20:
            step *= 2.5
    if step < max_range / 50:
        step = max_range / 20
    return step
