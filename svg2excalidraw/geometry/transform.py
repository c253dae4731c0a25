"""Affine transform parsing and composition.

Matrices are 3x3 homogeneous numpy arrays mapping column vectors
``[x, y, 1]``. Composition follows SVG semantics: for nested groups
``A > B > element`` the composed matrix is ``A @ B @ element``, so the
innermost transform is applied to a point first.
"""

import logging
import math
import re
from typing import Iterable, List, Optional, Sequence

import numpy as np

from ..core.constants import SVGAttributes
from ..core.models import ElementBoundaries, Group
from ..parsers.svg_reader import TreeNode
from .positions import safe_number

logger = logging.getLogger(__name__)

_FLOAT_RE = re.compile(r"[-+]?(?:\d*\.\d+|\d+\.?)(?:[eE][-+]?\d+)?")
_TRANSFORM_RE = re.compile(r"([a-zA-Z]+)\s*\(([^)]*)\)")


def identity() -> np.ndarray:
    return np.identity(3)


def finite_matrix(matrix: np.ndarray) -> np.ndarray:
    """Replace NaN and infinite entries with zero."""
    return np.where(np.isfinite(matrix), matrix, 0.0)


def translate(tx: float, ty: float) -> np.ndarray:
    m = identity()
    m[0, 2] = tx
    m[1, 2] = ty
    return m


def scale(sx: float, sy: float) -> np.ndarray:
    m = identity()
    m[0, 0] = sx
    m[1, 1] = sy
    return m


def rotate(angle_deg: float, cx: float = 0.0, cy: float = 0.0) -> np.ndarray:
    theta = math.radians(angle_deg)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    rot = np.array([[cos_t, -sin_t, 0.0], [sin_t, cos_t, 0.0], [0.0, 0.0, 1.0]])
    if cx or cy:
        return translate(cx, cy) @ rot @ translate(-cx, -cy)
    return rot


def skew_x(angle_deg: float) -> np.ndarray:
    m = identity()
    m[0, 1] = math.tan(math.radians(angle_deg))
    return m


def skew_y(angle_deg: float) -> np.ndarray:
    m = identity()
    m[1, 0] = math.tan(math.radians(angle_deg))
    return m


def parse_transform(transform: Optional[str]) -> np.ndarray:
    """Parse an SVG ``transform`` attribute into a single matrix.

    Transform functions are composed left to right. Unknown functions and
    functions with the wrong number of arguments are ignored. Non-finite
    arguments count as zero and entries that overflow while composing
    become zero.
    """
    result = identity()
    if not transform or not transform.strip():
        return result

    for match in _TRANSFORM_RE.finditer(transform):
        name = match.group(1).lower()
        params = [safe_number(v) for v in _FLOAT_RE.findall(match.group(2))]

        if name == "matrix" and len(params) == 6:
            a, b, c, d, e, f = params
            m = np.array([[a, c, e], [b, d, f], [0.0, 0.0, 1.0]])
        elif name == "translate" and 1 <= len(params) <= 2:
            m = translate(params[0], params[1] if len(params) > 1 else 0.0)
        elif name == "scale" and 1 <= len(params) <= 2:
            m = scale(params[0], params[1] if len(params) > 1 else params[0])
        elif name == "rotate" and len(params) in (1, 3):
            m = rotate(*params)
        elif name == "skewx" and len(params) == 1:
            m = skew_x(params[0])
        elif name == "skewy" and len(params) == 1:
            m = skew_y(params[0])
        else:
            logger.debug(f"Ignoring transform function: {match.group(0)}")
            continue

        with np.errstate(over="ignore", invalid="ignore"):
            result = finite_matrix(result @ m)

    return result


def box_matrix(width: float, height: float, x: float, y: float) -> np.ndarray:
    """Matrix mapping the unit square onto the box ``(x, y, width, height)``."""
    return np.array(
        [
            [width, 0.0, x],
            [0.0, height, y],
            [0.0, 0.0, 1.0],
        ]
    )


def get_transform_matrix(node: TreeNode, groups: Iterable[Group]) -> np.ndarray:
    """Compose every enclosing group's transform with the node's own.

    ``groups`` is ordered outermost first. The result has finite entries.
    """
    matrix = identity()
    with np.errstate(over="ignore", invalid="ignore"):
        for group in groups:
            matrix = finite_matrix(matrix @ group.transform)
        return finite_matrix(
            matrix @ parse_transform(node.get(SVGAttributes.TRANSFORM))
        )


def apply_matrix(matrix: np.ndarray, point: Sequence[float]) -> List[float]:
    """Map an ``[x, y]`` point through a matrix; non-finite results become 0."""
    with np.errstate(over="ignore", invalid="ignore"):
        x, y, _ = matrix @ np.array([point[0], point[1], 1.0])
    return [safe_number(x), safe_number(y)]


def matrix_boundaries(matrix: np.ndarray) -> ElementBoundaries:
    """Read placement and size of a unit-square box matrix.

    The translation column gives the position and the diagonal scale
    entries give the size.
    """
    return ElementBoundaries(
        x=safe_number(matrix[0, 2]),
        y=safe_number(matrix[1, 2]),
        width=safe_number(matrix[0, 0]),
        height=safe_number(matrix[1, 1]),
    )
