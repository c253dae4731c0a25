"""Bézier curve flattening."""

from enum import Enum
from typing import List, Sequence, Union

from ..core.constants import CurveSampling
from ..core.error_handling import InvalidSampleCountError, UnknownCurveTypeError
from .positions import safe_number


class CurveType(Enum):
    """Supported Bézier curve orders."""

    CUBIC = "cubic"
    QUADRATIC = "quadratic"


def _point_of_cubic_curve(
    control_points: Sequence[Sequence[float]], section: float
) -> List[float]:
    """Get a point at a given section of a 2D cubic Bézier curve."""
    p0, p1, p2, p3 = control_points
    return [
        safe_number(
            p0[i] * (1 - section) ** 3
            + 3 * p1[i] * section * (1 - section) ** 2
            + 3 * p2[i] * section**2 * (1 - section)
            + p3[i] * section**3
        )
        for i in range(2)
    ]


def _point_of_quadratic_curve(
    control_points: Sequence[Sequence[float]], section: float
) -> List[float]:
    """Get a point at a given section of a 2D quadratic Bézier curve."""
    p0, p1, p2 = control_points
    return [
        safe_number(
            p0[i] * (1 - section) ** 2
            + 2 * p1[i] * section * (1 - section)
            + p2[i] * section**2
        )
        for i in range(2)
    ]


def curve_to_points(
    curve_type: Union[CurveType, str],
    control_points: Sequence[Sequence[float]],
    nb_points: int = CurveSampling.DEFAULT_POINTS,
) -> List[List[float]]:
    """Get the list of coordinates approximating a Bézier curve.

    Sections are taken at ``t = (k + 1) / nb_points``, so the starting
    control point is never returned. ``nb_points`` is capped at 100.

    Args:
        curve_type: ``"cubic"`` (4 control points) or ``"quadratic"`` (3)
        control_points: Control points as ``[x, y]`` pairs
        nb_points: Number of points to return

    Raises:
        InvalidSampleCountError: If ``nb_points`` is not positive
        UnknownCurveTypeError: If the curve type is not supported
    """
    if nb_points <= 0:
        raise InvalidSampleCountError(
            "Requested amount of points must be positive",
            {"nb_points": nb_points},
        )
    nb_points = max(1, min(int(nb_points), CurveSampling.MAX_POINTS))

    try:
        curve = CurveType(curve_type)
    except ValueError:
        raise UnknownCurveTypeError(
            f"Invalid bézier curve type requested: {curve_type!r}"
        ) from None

    if curve is CurveType.CUBIC:
        point_of_curve = _point_of_cubic_curve
    else:
        point_of_curve = _point_of_quadratic_curve

    return [
        point_of_curve(control_points, safe_number((index + 1) / nb_points))
        for index in range(nb_points)
    ]
