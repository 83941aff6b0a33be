# Demos - Built-in demonstration point sets

import logging
import math
import random

log = logging.getLogger(__name__)


def cube():
    """The 8 vertices of the cube [-1, 1]^3."""
    return [
        (-1.0, -1.0, -1.0),
        (1.0, -1.0, -1.0),
        (1.0, 1.0, -1.0),
        (-1.0, 1.0, -1.0),
        (-1.0, -1.0, 1.0),
        (1.0, -1.0, 1.0),
        (1.0, 1.0, 1.0),
        (-1.0, 1.0, 1.0),
    ]


def pyramid():
    """Square base at z=-1 and apex at (0, 0, 2)."""
    return [
        (-1.0, -1.0, -1.0),
        (1.0, -1.0, -1.0),
        (1.0, 1.0, -1.0),
        (-1.0, 1.0, -1.0),
        (0.0, 0.0, 2.0),
    ]


def sphere(count=50, radius=1.0, rng=None):
    """Points uniformly distributed on a sphere surface."""
    rng = rng or random.Random()
    points = []
    for _ in range(count):
        theta = rng.random() * 2 * math.pi
        phi = math.acos(2 * rng.random() - 1)
        points.append((
            radius * math.sin(phi) * math.cos(theta),
            radius * math.sin(phi) * math.sin(theta),
            radius * math.cos(phi),
        ))
    return points


def helix(turns=3, points_per_turn=20, radius=1.0, height=4.0):
    """A helix around Z from -height/2 to height/2."""
    total = turns * points_per_turn
    if total <= 0:
        return []
    if total == 1:
        return [(radius, 0.0, -height / 2.0)]
    points = []
    for i in range(total):
        t = i / (total - 1)
        angle = t * turns * 2 * math.pi
        points.append((
            radius * math.cos(angle),
            radius * math.sin(angle),
            -height / 2.0 + t * height,
        ))
    return points


def random_cloud(count=100, size=2.0, rng=None):
    """Random points inside a cube of side size centred on the origin."""
    rng = rng or random.Random()
    return [
        ((rng.random() - 0.5) * size,
         (rng.random() - 0.5) * size,
         (rng.random() - 0.5) * size)
        for _ in range(count)
    ]


DEMOS = {
    "cube": cube,
    "pyramid": pyramid,
    "sphere": sphere,
    "helix": helix,
    "cloud": random_cloud,
}


def get_demo(name):
    """Return the demo point set called name (case-insensitive).

    Unknown names fall back to the cube with a warning.
    """
    factory = DEMOS.get(name.lower())
    if factory is None:
        log.warning("Unknown demo %r, using cube", name)
        factory = cube
    return factory()
