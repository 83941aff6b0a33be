# Transforms - Accumulated model transform composition
#
# Every operation pre-multiplies onto the accumulated matrix, so
# it is applied in the current world frame rather than in the
# object's local frame.  Successive rotations therefore turn about
# the fixed world axes.  Inputs are never mutated.

from graph3d import Matrix4

# Rotation axes are always composed in this order
ROTATION_ORDER = (
    ("x", Matrix4.rotate_x),
    ("y", Matrix4.rotate_y),
    ("z", Matrix4.rotate_z),
)

# Rotation given to a freshly loaded model (rx, ry, rz) in degrees
DEFAULT_VIEW_ROTATION = (15.0, -25.0, 0.0)


def apply_translate(macc, dx, dy, dz):
    """Return translation(dx, dy, dz) . macc."""
    return Matrix4.multiply(Matrix4.translation(dx, dy, dz), macc)


def apply_rotate(macc, rx, ry, rz):
    """Pre-multiply rotations about X, then Y, then Z.

    Axes with a zero angle are skipped entirely, so
    apply_rotate(M, 0, 0, 0) returns a copy equal to M with no
    rounding introduced.

    Args:
        macc: Current accumulated 4x4 matrix.
        rx, ry, rz: Angles in degrees.

    Returns:
        New accumulated matrix Rz . Ry . Rx . macc.
    """
    angles = {"x": rx, "y": ry, "z": rz}
    result = Matrix4.copy(macc)
    for axis, rotation in ROTATION_ORDER:
        angle = angles[axis]
        if angle != 0:
            result = Matrix4.multiply(rotation(angle), result)
    return result


def apply_scale(macc, k):
    """Return scale(k) . macc."""
    return Matrix4.multiply(Matrix4.scale(k), macc)


def default_view_transform():
    """Accumulated matrix for a model that was just loaded."""
    return apply_rotate(Matrix4.identity(), *DEFAULT_VIEW_ROTATION)
