# FitView - Bounding boxes and automatic view fitting
#
# Computes the pan/scale that makes the projected geometry fill a
# viewport with a margin.  Degenerate inputs (no points, all
# points on top of each other) have fixed fallback results.

from graph3d import Projection
from graph3d.ViewTransform import ViewParams

# Axis length used by fit_view_with_axes, as a fraction of the
# largest range of the raw cloud
AXIS_FACTOR = 0.6


class BoundingBox2D:
    __slots__ = ("min_x", "max_x", "min_y", "max_y")

    def __init__(self, min_x=0.0, max_x=0.0, min_y=0.0, max_y=0.0):
        self.min_x = min_x
        self.max_x = max_x
        self.min_y = min_y
        self.max_y = max_y

    @property
    def width(self):
        return self.max_x - self.min_x

    @property
    def height(self):
        return self.max_y - self.min_y

    @property
    def center(self):
        return ((self.min_x + self.max_x) / 2.0,
                (self.min_y + self.max_y) / 2.0)


class BoundingBox3D:
    __slots__ = ("min_x", "max_x", "min_y", "max_y", "min_z", "max_z")

    def __init__(self, min_x=0.0, max_x=0.0, min_y=0.0, max_y=0.0,
                 min_z=0.0, max_z=0.0):
        self.min_x = min_x
        self.max_x = max_x
        self.min_y = min_y
        self.max_y = max_y
        self.min_z = min_z
        self.max_z = max_z

    @property
    def ranges(self):
        return (self.max_x - self.min_x,
                self.max_y - self.min_y,
                self.max_z - self.min_z)

    @property
    def max_range(self):
        return max(self.ranges)


def bounding_box_2d(points):
    """Axis aligned box of (x, y) points in one pass.

    Returns an all-zero box for an empty list.
    """
    if not points:
        return BoundingBox2D()
    min_x = max_x = points[0][0]
    min_y = max_y = points[0][1]
    for x, y in points[1:]:
        if x < min_x:
            min_x = x
        elif x > max_x:
            max_x = x
        if y < min_y:
            min_y = y
        elif y > max_y:
            max_y = y
    return BoundingBox2D(min_x, max_x, min_y, max_y)


def bounding_box_3d(points):
    """Axis aligned box of (x, y, z) points in one pass."""
    if not points:
        return BoundingBox3D()
    x0, y0, z0 = points[0][0], points[0][1], points[0][2]
    min_x = max_x = x0
    min_y = max_y = y0
    min_z = max_z = z0
    for p in points[1:]:
        x, y, z = p[0], p[1], p[2]
        if x < min_x:
            min_x = x
        elif x > max_x:
            max_x = x
        if y < min_y:
            min_y = y
        elif y > max_y:
            max_y = y
        if z < min_z:
            min_z = z
        elif z > max_z:
            max_z = z
    return BoundingBox3D(min_x, max_x, min_y, max_y, min_z, max_z)


def fit_view(points, macc, proj, width, height, margin=0.1):
    """Compute view parameters that fit the projected points.

    Args:
        points: List of (x, y, z) model points.
        macc: Accumulated 4x4 model transform.
        proj: ProjectionConfig.
        width, height: Viewport size in pixels.
        margin: Fraction of each viewport side left empty.

    Returns:
        ViewParams.  An empty point list gives pan (0, 0) and
        scale 1.  Points that all project to one spot are centred
        with scale min(width, height) / 4.
    """
    if not points:
        return ViewParams(0.0, 0.0, 1.0)

    bbox = bounding_box_2d(Projection.project_all(points, macc, proj))
    cx, cy = bbox.center

    if bbox.width == 0 and bbox.height == 0:
        return ViewParams(-cx, -cy, min(width, height) / 4.0)

    available_w = width * (1 - 2 * margin)
    available_h = height * (1 - 2 * margin)

    # A flat box does not constrain the scale along that axis
    scale_x = available_w / bbox.width if bbox.width > 0 else 1.0
    scale_y = available_h / bbox.height if bbox.height > 0 else 1.0
    scale = min(scale_x, scale_y)

    shortest = min(width, height)
    min_scale = shortest / 20.0
    max_scale = shortest * 2.0
    scale = max(min_scale, min(max_scale, scale))

    return ViewParams(-cx, -cy, scale)


def axis_points(points, factor=AXIS_FACTOR):
    """Origin plus one point along each positive axis.

    The axis length is factor times the largest range of the raw
    (untransformed) cloud.  Returns an empty list when that range
    is zero, since all four points would sit on the origin.
    """
    length = bounding_box_3d(points).max_range * factor
    if length <= 0:
        return []
    return [
        (0.0, 0.0, 0.0),
        (length, 0.0, 0.0),
        (0.0, length, 0.0),
        (0.0, 0.0, length),
    ]


def fit_view_with_axes(points, macc, proj, width, height,
                       include_axes=True, margin=0.1, factor=AXIS_FACTOR):
    """fit_view that also keeps the coordinate axes on screen.

    An empty model gives pan (0, 0) and scale min(width, height) / 8.
    """
    if not points:
        return ViewParams(0.0, 0.0, min(width, height) / 8.0)

    all_points = list(points)
    if include_axes:
        all_points.extend(axis_points(points, factor))
    return fit_view(all_points, macc, proj, width, height, margin)
