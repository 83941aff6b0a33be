# Projection - 3D to 2D projection models
#
# A projection configuration is one of a closed family of small
# classes.  Values that come from outside (ini files, saved
# sessions) and name no known projection are kept as an
# UnknownProjection so the problem is reported instead of being
# silently turned into a "simple" projection.

import logging
import math

from graph3d import Matrix4

log = logging.getLogger(__name__)

# Isometric angles.  35.264 approximates atan(1/sqrt(2)) and is
# kept as a literal so isometric output is reproducible.
ISO_ALPHA = 35.264
ISO_BETA = 45.0


class ProjectionConfig:
    """Base class for projection configurations."""

    __slots__ = ()

    kind = None
    label = ""

    def _values(self):
        return ()

    def as_dict(self):
        return {"type": self.kind}

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._values() == other._values()

    def __hash__(self):
        return hash((type(self).__name__,) + self._values())

    def __repr__(self):
        args = ", ".join(repr(v) for v in self._values())
        return f"{type(self).__name__}({args})"


class IsometricProjection(ProjectionConfig):
    __slots__ = ()
    kind = "iso"
    label = "Isometric"


class ObliqueProjection(ProjectionConfig):
    """Cavalier (lam=1) / cabinet (lam=0.5) style oblique projection."""

    __slots__ = ("phi", "lam")
    kind = "oblique"
    label = "Oblique"

    def __init__(self, phi=45.0, lam=0.5):
        """
        Args:
            phi: Receding axis angle in degrees.
            lam: Foreshortening factor applied to z.
        """
        self.phi = float(phi)
        self.lam = float(lam)

    def _values(self):
        return (self.phi, self.lam)

    def as_dict(self):
        return {"type": self.kind, "phi": self.phi, "lambda": self.lam}


class AxonometricProjection(ProjectionConfig):
    __slots__ = ("alpha", "beta")
    kind = "axono"
    label = "Axonometric"

    def __init__(self, alpha=30.0, beta=35.0):
        """
        Args:
            alpha: Rotation about X in degrees.
            beta: Rotation about Y in degrees.
        """
        self.alpha = float(alpha)
        self.beta = float(beta)

    def _values(self):
        return (self.alpha, self.beta)

    def as_dict(self):
        return {"type": self.kind, "ax": self.alpha, "ay": self.beta}


class SimpleProjection(ProjectionConfig):
    __slots__ = ()
    kind = "simple"
    label = "Simple (XY)"


class UnknownProjection(ProjectionConfig):
    """A projection name that is not recognised.

    Carries the offending kind and the raw payload it came with so
    the warning can say what was asked for.
    """

    __slots__ = ("unknown_kind", "payload")
    kind = "unknown"
    label = "Unknown"

    def __init__(self, unknown_kind, payload=None):
        self.unknown_kind = unknown_kind
        self.payload = dict(payload) if payload else {}

    def _values(self):
        return (self.unknown_kind, tuple(sorted(self.payload.items(), key=repr)))

    def as_dict(self):
        d = dict(self.payload)
        d["type"] = self.unknown_kind
        return d


PROJECTIONS = (
    IsometricProjection,
    ObliqueProjection,
    AxonometricProjection,
    SimpleProjection,
)


def projection_from_dict(d):
    """Build a projection configuration from a plain dict.

    Keys follow the saved format: "type" plus "phi"/"lambda" for
    oblique and "ax"/"ay" for axonometric.  Missing parameters
    take their defaults.  An unrecognised "type" gives an
    UnknownProjection holding the whole dict.
    """
    kind = d.get("type")
    if kind == IsometricProjection.kind:
        return IsometricProjection()
    if kind == ObliqueProjection.kind:
        return ObliqueProjection(d.get("phi", 45.0), d.get("lambda", 0.5))
    if kind == AxonometricProjection.kind:
        return AxonometricProjection(d.get("ax", 30.0), d.get("ay", 35.0))
    if kind == SimpleProjection.kind:
        return SimpleProjection()
    return UnknownProjection(kind, d)


def projection_from_config():
    """Projection configured in the [Projection] ini section."""
    from graph3d import utils_core as Utils
    return projection_from_dict({
        "type": Utils.getStr("Projection", "type", IsometricProjection.kind),
        "phi": Utils.getFloat("Projection", "phi", 45.0),
        "lambda": Utils.getFloat("Projection", "lambda", 0.5),
        "ax": Utils.getFloat("Projection", "ax", 30.0),
        "ay": Utils.getFloat("Projection", "ay", 35.0),
    })


# ----------------------------------------------------------------------
# Projection functions on already transformed homogeneous points
# ----------------------------------------------------------------------
def _drop_z(p4):
    return (p4[0], p4[1])


def _rotated_drop_z(rotation):
    def _project(p4):
        r = Matrix4.multiply_vector(rotation, p4)
        return (r[0], r[1])
    return _project


def _oblique(phi, lam):
    rad = math.radians(phi)
    c = math.cos(rad)
    s = math.sin(rad)

    def _project(p4):
        x, y, z = p4[0], p4[1], p4[2]
        return (x + lam * z * c, y + lam * z * s)
    return _project


def _projector(proj):
    """Return a function mapping a transformed point to 2D."""
    if isinstance(proj, IsometricProjection):
        return _rotated_drop_z(Matrix4.multiply(
            Matrix4.rotate_x(ISO_ALPHA), Matrix4.rotate_y(ISO_BETA)))
    if isinstance(proj, ObliqueProjection):
        return _oblique(proj.phi, proj.lam)
    if isinstance(proj, AxonometricProjection):
        return _rotated_drop_z(Matrix4.multiply(
            Matrix4.rotate_x(proj.alpha), Matrix4.rotate_y(proj.beta)))
    if isinstance(proj, SimpleProjection):
        return _drop_z

    if isinstance(proj, UnknownProjection):
        name = proj.unknown_kind
    else:
        name = type(proj).__name__
    log.warning("Unknown projection type %r, using simple XY projection", name)
    return _drop_z


def _lift(p3):
    return [p3[0], p3[1], p3[2], 1.0]


def project(point, macc, proj):
    """Project a single 3D point.

    Args:
        point: (x, y, z) model coordinates.
        macc: Accumulated 4x4 model transform.
        proj: A ProjectionConfig.

    Returns:
        (x, y) view-space coordinates.
    """
    return _projector(proj)(Matrix4.multiply_vector(macc, _lift(point)))


def project_all(points, macc, proj):
    """Project a list of 3D points, keeping their order.

    Index i of the result is the projection of points[i].  An
    unknown projection is reported once per call.
    """
    projector = _projector(proj)
    return [projector(Matrix4.multiply_vector(macc, _lift(p)))
            for p in points]


def transform_points(points, macc):
    """Apply macc to each point and return (x, y, z) tuples."""
    result = []
    for p in points:
        t = Matrix4.multiply_vector(macc, _lift(p))
        result.append((t[0], t[1], t[2]))
    return result
