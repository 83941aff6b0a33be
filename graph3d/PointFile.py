# PointFile - Plain text point cloud files
#
# Reads .txt / .xyz files holding one "x y z" (or "x,y,z") point
# per line.  Bad lines are skipped and reported; a file with no
# usable line at all is an error.

import logging
import math
import os
import re

from graph3d.utils_core import _

log = logging.getLogger(__name__)

VALID_EXTENSIONS = (".txt", ".xyz")

_SPLIT = re.compile(r"[\s,]+")


class PointFileError(ValueError):
    """Raised when a point file cannot be used."""


class ParseResult:
    """Points read from a file plus the per-line problems skipped."""

    __slots__ = ("points", "warnings")

    def __init__(self, points, warnings=None):
        self.points = points
        self.warnings = warnings or []

    def __len__(self):
        return len(self.points)


def parse_points(text):
    """Parse point file content.

    Blank lines and lines starting with '#' or '//' are ignored.

    Args:
        text: File content.

    Returns:
        ParseResult with the valid points in file order and one
        warning string per rejected line.

    Raises:
        PointFileError: every non-comment line was rejected.
    """
    points = []
    warnings = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#") or line.startswith("//"):
            continue

        parts = [p for p in _SPLIT.split(line) if p]
        if len(parts) != 3:
            warnings.append(
                _("Line {}: expected 3 coordinates, found {}").format(
                    lineno, len(parts)))
            continue

        coords = []
        for part in parts:
            try:
                value = float(part)
            except ValueError:
                value = None
            if value is None or not math.isfinite(value):
                warnings.append(
                    _("Line {}: '{}' is not a valid number").format(
                        lineno, part))
                break
            coords.append(value)
        else:
            points.append(tuple(coords))

    if warnings and not points:
        raise PointFileError(
            _("No valid points found. Errors: {}").format(
                ", ".join(warnings)))

    return ParseResult(points, warnings)


def is_valid_file_type(filename):
    return os.path.splitext(filename)[1].lower() in VALID_EXTENSIONS


def load(filename):
    """Read and parse a point file.

    Args:
        filename: Path to a .txt or .xyz file.

    Returns:
        ParseResult.

    Raises:
        PointFileError: wrong extension, unreadable or no points.
    """
    if not is_valid_file_type(filename):
        raise PointFileError(
            _("Invalid file type '{}'. Use .txt or .xyz files").format(
                os.path.basename(filename)))
    try:
        with open(filename, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise PointFileError(
            _("Cannot read '{}': {}").format(filename, e)) from e

    result = parse_points(text)
    if result.warnings:
        log.warning("%s: skipped %d line(s): %s", filename,
                    len(result.warnings), "; ".join(result.warnings))
    log.info("Loaded %d points from %s", len(result.points), filename)
    return result
