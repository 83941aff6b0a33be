# SceneGeometry - Toolkit-independent geometry for the canvas
#
# Generates raw 3D coordinates for the coordinate axes and their
# tick marks, the background planes and their grid, plus point
# styling rules.  Everything returned here still has to go through
# Projection and ViewTransform.

import math

from graph3d.FitView import AXIS_FACTOR, BoundingBox3D, bounding_box_3d

# Axis length used when no model is loaded (a +-5 box)
EMPTY_AXIS_LENGTH = 10.0 * AXIS_FACTOR

# Tick half-size as a fraction of the axis length
TICK_FRACTION = 0.02

# Background box margin as a fraction of the model range per axis
BACKGROUND_MARGIN = 0.2

# Two-tone fill per background plane (start, end of the gradient)
PLANE_COLORS = {
    "floor": ("#f0f0f0", "#e8e8e8"),
    "back": ("#f8f8f8", "#f0f0f0"),
    "side": ("#f5f5f5", "#eeeeee"),
}

AXIS_COLORS = {
    "x": "#d32f2f",
    "y": "#388e3c",
    "z": "#1976d2",
}

POINT_COLORS = (
    "#1976d2", "#1e88e5", "#42a5f5", "#64b5f6",
    "#90caf9", "#bbdefb", "#e3f2fd", "#f3e5f5",
    "#ce93d8", "#ba68c8", "#ab47bc", "#9c27b0",
    "#8e24aa", "#7b1fa2", "#6a1b9a", "#4a148c",
)

# (max point count, base size) bands
_POINT_SIZE_BANDS = (
    (50, 400),
    (200, 300),
    (1000, 200),
    (5000, 150),
)


def axis_length(points, factor=AXIS_FACTOR):
    """Axis length for a model: factor times its largest range."""
    if not points:
        return EMPTY_AXIS_LENGTH
    return bounding_box_3d(points).max_range * factor


def generate_axes(length):
    """Generate axis lines through the origin.

    Args:
        length: Half-length of each axis.

    Returns:
        Dict with keys "x", "y", "z", each mapping to a list of
        two xyz tuples (negative end, positive end).
    """
    return {
        "x": [(-length, 0.0, 0.0), (length, 0.0, 0.0)],
        "y": [(0.0, -length, 0.0), (0.0, length, 0.0)],
        "z": [(0.0, 0.0, -length), (0.0, 0.0, length)],
    }


def generate_ticks(length, step):
    """Generate tick marks along each axis.

    Ticks sit at every multiple of step within [-length, length],
    the origin excluded.  X and Y ticks are drawn across the axis
    in the Y and X direction, Z ticks in the X direction.

    Returns:
        Dict "x"/"y"/"z" -> list of (multiple, value, centre, end_a,
        end_b) where value = multiple * step and the three points are
        xyz tuples.
    """
    ticks = {"x": [], "y": [], "z": []}
    if step <= 0 or length <= 0:
        return ticks
    size = length * TICK_FRACTION
    count = int(length // step)
    for i in range(-count, count + 1):
        if i == 0:
            continue
        v = i * step
        ticks["x"].append(
            (i, v, (v, 0.0, 0.0), (v, size, 0.0), (v, -size, 0.0)))
        ticks["y"].append(
            (i, v, (0.0, v, 0.0), (size, v, 0.0), (-size, v, 0.0)))
        ticks["z"].append(
            (i, v, (0.0, 0.0, v), (size, 0.0, v), (-size, 0.0, v)))
    return ticks


def tick_label(value):
    """Whole numbers without decimals, anything else with one."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


def labelled_ticks(ticks):
    """Ticks of one axis that carry a label: every even multiple.

    Args:
        ticks: One axis list from generate_ticks().

    Returns:
        List of (label, centre) pairs, symmetric about the origin.
    """
    return [(tick_label(value), centre)
            for multiple, value, centre, _a, _b in ticks
            if multiple % 2 == 0]


# ----------------------------------------------------------------------
# Background planes and their grid
# ----------------------------------------------------------------------
def background_box(points):
    """Box enclosing the transformed model with a margin on each axis.

    Args:
        points: Model points already transformed by Macc.

    Returns:
        BoundingBox3D grown by BACKGROUND_MARGIN of its range on each
        side, or the +-5 cube when there are no points.
    """
    if not points:
        return BoundingBox3D(-5.0, 5.0, -5.0, 5.0, -5.0, 5.0)
    bbox = bounding_box_3d(points)
    rx, ry, rz = bbox.ranges
    mx = rx * BACKGROUND_MARGIN
    my = ry * BACKGROUND_MARGIN
    mz = rz * BACKGROUND_MARGIN
    return BoundingBox3D(bbox.min_x - mx, bbox.max_x + mx,
                         bbox.min_y - my, bbox.max_y + my,
                         bbox.min_z - mz, bbox.max_z + mz)


def generate_background_planes(bbox):
    """Floor (z = min_z), back wall (y = min_y), side wall (x = min_x).

    Returns:
        Dict plane name -> four xyz corners in drawing order.
    """
    x0, x1 = bbox.min_x, bbox.max_x
    y0, y1 = bbox.min_y, bbox.max_y
    z0, z1 = bbox.min_z, bbox.max_z
    return {
        "floor": [(x0, y0, z0), (x1, y0, z0), (x1, y1, z0), (x0, y1, z0)],
        "back": [(x0, y0, z0), (x1, y0, z0), (x1, y0, z1), (x0, y0, z1)],
        "side": [(x0, y0, z0), (x0, y1, z0), (x0, y1, z1), (x0, y0, z1)],
    }


def _grid_multiples(lo, hi, step):
    return range(math.floor(lo / step), math.ceil(hi / step) + 1)


def generate_plane_grid(bbox, step, plane):
    """Grid lines and labels on one background plane.

    Lines sit at every multiple of step from floor(min/step) to
    ceil(max/step).  The floor labels its X and Y lines, the back
    wall its Z lines, each at even multiples only.  The side wall
    has no labels.

    Args:
        bbox: BoundingBox3D from background_box().
        step: Grid spacing in world units.
        plane: "floor", "back" or "side".

    Returns:
        (lines, labels): lines is a list of (start, end) xyz pairs,
        labels a list of (value, xyz position).
    """
    lines = []
    labels = []
    if not step or step <= 0 or not math.isfinite(step):
        return lines, labels
    x0, x1 = bbox.min_x, bbox.max_x
    y0, y1 = bbox.min_y, bbox.max_y
    z0, z1 = bbox.min_z, bbox.max_z

    if plane == "floor":
        for i in _grid_multiples(x0, x1, step):
            x = i * step
            lines.append(((x, y0, z0), (x, y1, z0)))
            if i % 2 == 0:
                labels.append((x, (x, y0, z0)))
        for i in _grid_multiples(y0, y1, step):
            y = i * step
            lines.append(((x0, y, z0), (x1, y, z0)))
            if i % 2 == 0:
                labels.append((y, (x0, y, z0)))
    elif plane == "back":
        for i in _grid_multiples(x0, x1, step):
            x = i * step
            lines.append(((x, y0, z0), (x, y0, z1)))
        for i in _grid_multiples(z0, z1, step):
            z = i * step
            lines.append(((x0, y0, z), (x1, y0, z)))
            if i % 2 == 0:
                labels.append((z, (x0, y0, z)))
    elif plane == "side":
        for i in _grid_multiples(y0, y1, step):
            y = i * step
            lines.append(((x0, y, z0), (x0, y, z1)))
        for i in _grid_multiples(z0, z1, step):
            z = i * step
            lines.append(((x0, y0, z), (x0, y1, z)))
    else:
        raise ValueError(f"Unknown plane {plane!r}")
    return lines, labels


def grid_label(value):
    """Grid label with more decimals for small magnitudes."""
    a = abs(value)
    if a == 0:
        return "0"
    if a < 0.001:
        return f"{value:.2e}"
    if a < 0.01:
        return f"{value:.4f}"
    if a < 0.1:
        return f"{value:.3f}"
    if a < 1:
        return f"{value:.2f}"
    return f"{value:g}"


def adaptive_point_size(count, scale):
    """Point radius in pixels for a model of count points.

    Large clouds get smaller dots; the size also follows the zoom
    and is clamped to [0.5, 8].
    """
    base = 100
    for limit, size in _POINT_SIZE_BANDS:
        if count <= limit:
            base = size
            break
    return max(0.5, min(8.0, base * scale * 0.01))


def point_color(index):
    """Colour for the point at index in the model order."""
    return POINT_COLORS[index % len(POINT_COLORS)]
