"""SVG path data parsing.

Each subpath of a ``d`` attribute becomes one line ``RawElement`` placed
in the path's own, untransformed coordinate space, with points relative
to the element's top-left corner. Curves are flattened with
``curve_to_points``; arcs are converted to cubic segments first.
"""

import logging
import math
import re
from typing import List, Optional, Sequence

from ..core.constants import CurveSampling, ElementType, SVGAttributes
from ..core.error_handling import ParsingError
from ..core.models import RawElement
from ..geometry.bezier import CurveType, curve_to_points
from .svg_reader import TreeNode

logger = logging.getLogger(__name__)

PATH_COMMANDS = "MmZzLlHhVvCcSsQqTtAa"

Point = List[float]


class _PathScanner:
    """Reads commands, numbers and arc flags from path data."""

    _NUMBER = re.compile(r"[-+]?(?:\d*\.\d+|\d+\.?)(?:[eE][-+]?\d+)?")
    _SEPARATOR = re.compile(r"[\s,]*")

    def __init__(self, data: str) -> None:
        self.data = data
        self.pos = 0

    def _skip_separators(self) -> None:
        self.pos = self._SEPARATOR.match(self.data, self.pos).end()

    def at_end(self) -> bool:
        self._skip_separators()
        return self.pos >= len(self.data)

    def read_command(self) -> Optional[str]:
        """Consume and return a command letter, or None if a number follows."""
        self._skip_separators()
        if self.pos < len(self.data) and self.data[self.pos] in PATH_COMMANDS:
            self.pos += 1
            return self.data[self.pos - 1]
        return None

    def number(self) -> float:
        self._skip_separators()
        match = self._NUMBER.match(self.data, self.pos)
        if not match:
            raise ParsingError(
                f"Expected a number at position {self.pos} of path data",
                {"path_data": self.data},
            )
        self.pos = match.end()
        return float(match.group(0))

    def flag(self) -> bool:
        self._skip_separators()
        if self.pos >= len(self.data) or self.data[self.pos] not in "01":
            raise ParsingError(
                f"Expected an arc flag at position {self.pos} of path data",
                {"path_data": self.data},
            )
        self.pos += 1
        return self.data[self.pos - 1] == "1"


def _reflect(point: Point, control: Optional[Point]) -> Point:
    if control is None:
        return list(point)
    return [2 * point[0] - control[0], 2 * point[1] - control[1]]


def arc_to_cubics(
    start: Sequence[float],
    rx: float,
    ry: float,
    rotation: float,
    large_arc: bool,
    sweep: bool,
    end: Sequence[float],
) -> Optional[List[List[Point]]]:
    """Convert an elliptical arc to cubic Bézier control point lists.

    Returns None when a radius is zero (the arc is a straight line) and an
    empty list when the end point equals the start point.
    """
    x1, y1 = start
    x2, y2 = end
    if (x1, y1) == (x2, y2):
        return []
    rx, ry = abs(rx), abs(ry)
    if rx == 0 or ry == 0:
        return None

    phi = math.radians(rotation)
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)

    # Endpoint to center parameterization
    dx, dy = (x1 - x2) / 2, (y1 - y2) / 2
    x1p = cos_phi * dx + sin_phi * dy
    y1p = -sin_phi * dx + cos_phi * dy

    radii_check = x1p**2 / rx**2 + y1p**2 / ry**2
    if radii_check > 1:
        rx *= math.sqrt(radii_check)
        ry *= math.sqrt(radii_check)

    numerator = rx**2 * ry**2 - rx**2 * y1p**2 - ry**2 * x1p**2
    denominator = rx**2 * y1p**2 + ry**2 * x1p**2
    coef = math.sqrt(max(0.0, numerator / denominator)) if denominator else 0.0
    if large_arc == sweep:
        coef = -coef
    cxp = coef * rx * y1p / ry
    cyp = -coef * ry * x1p / rx
    cx = cos_phi * cxp - sin_phi * cyp + (x1 + x2) / 2
    cy = sin_phi * cxp + cos_phi * cyp + (y1 + y2) / 2

    def angle(ux: float, uy: float, vx: float, vy: float) -> float:
        return math.atan2(ux * vy - uy * vx, ux * vx + uy * vy)

    theta1 = angle(1.0, 0.0, (x1p - cxp) / rx, (y1p - cyp) / ry)
    delta_theta = angle(
        (x1p - cxp) / rx, (y1p - cyp) / ry, (-x1p - cxp) / rx, (-y1p - cyp) / ry
    )
    if not sweep and delta_theta > 0:
        delta_theta -= 2 * math.pi
    elif sweep and delta_theta < 0:
        delta_theta += 2 * math.pi

    # At most a quarter turn per cubic segment
    segments = max(1, math.ceil(abs(delta_theta) / (math.pi / 2) - 1e-9))
    step = delta_theta / segments
    k = 4 / 3 * math.tan(step / 4)

    def point_at(theta: float) -> Point:
        ex, ey = rx * math.cos(theta), ry * math.sin(theta)
        return [cos_phi * ex - sin_phi * ey + cx, sin_phi * ex + cos_phi * ey + cy]

    def tangent_at(theta: float) -> Point:
        tx, ty = -rx * math.sin(theta), ry * math.cos(theta)
        return [cos_phi * tx - sin_phi * ty, sin_phi * tx + cos_phi * ty]

    curves = []
    segment_start = [x1, y1]
    for index in range(segments):
        theta_a = theta1 + index * step
        theta_b = theta_a + step
        segment_end = [x2, y2] if index == segments - 1 else point_at(theta_b)
        tangent_a, tangent_b = tangent_at(theta_a), tangent_at(theta_b)
        control1 = [
            segment_start[0] + k * tangent_a[0],
            segment_start[1] + k * tangent_a[1],
        ]
        control2 = [
            segment_end[0] - k * tangent_b[0],
            segment_end[1] - k * tangent_b[1],
        ]
        curves.append([segment_start, control1, control2, segment_end])
        segment_start = segment_end

    return curves


class PathDataParser:
    """Parser for the ``d`` attribute of SVG path elements."""

    def __init__(self, curve_points: int = CurveSampling.DEFAULT_POINTS) -> None:
        """Initialize path parser.

        Args:
            curve_points: Number of points sampled per curve segment
        """
        self.curve_points = curve_points

    def parse(self, node: TreeNode) -> List[RawElement]:
        """Parse a path element into one raw line element per subpath."""
        d = node.get(SVGAttributes.D, "")
        if not d or not d.strip():
            return []
        return self.parse_data(d)

    def parse_data(self, d: str) -> List[RawElement]:
        """Parse path data into one raw line element per subpath."""
        scanner = _PathScanner(d)
        subpaths: List[List[Point]] = []
        current: Optional[List[Point]] = None
        cursor: Point = [0.0, 0.0]
        start: Point = [0.0, 0.0]
        last_control: Optional[Point] = None
        last_kind = ""
        command: Optional[str] = None

        def read_point(absolute: bool) -> Point:
            x, y = scanner.number(), scanner.number()
            return [x, y] if absolute else [cursor[0] + x, cursor[1] + y]

        def open_subpath() -> List[Point]:
            nonlocal current
            if current is None:
                current = [list(cursor)]
                subpaths.append(current)
            return current

        while not scanner.at_end():
            next_command = scanner.read_command()
            if next_command is not None:
                command = next_command
            elif command is None or command in "Zz":
                raise ParsingError("Expected a path command", {"path_data": d})

            absolute = command.isupper()
            kind = command.lower()
            control: Optional[Point] = None

            if kind == "z":
                if current is not None and current[-1] != start:
                    current.append(list(start))
                current = None
                cursor = list(start)
            elif kind == "m":
                cursor = read_point(absolute)
                start = list(cursor)
                current = None
                open_subpath()
                # Further coordinate pairs are implicit line commands
                command = "L" if absolute else "l"
            elif kind == "l":
                target = read_point(absolute)
                open_subpath().append(target)
                cursor = target
            elif kind == "h":
                x = scanner.number()
                target = [x if absolute else cursor[0] + x, cursor[1]]
                open_subpath().append(target)
                cursor = target
            elif kind == "v":
                y = scanner.number()
                target = [cursor[0], y if absolute else cursor[1] + y]
                open_subpath().append(target)
                cursor = target
            elif kind in "cs":
                if kind == "c":
                    control1 = read_point(absolute)
                elif last_kind in ("c", "s"):
                    control1 = _reflect(cursor, last_control)
                else:
                    control1 = list(cursor)
                control = read_point(absolute)
                target = read_point(absolute)
                self._add_curve(
                    open_subpath(), CurveType.CUBIC, [cursor, control1, control, target]
                )
                cursor = target
            elif kind in "qt":
                if kind == "q":
                    control = read_point(absolute)
                elif last_kind in ("q", "t"):
                    control = _reflect(cursor, last_control)
                else:
                    control = list(cursor)
                target = read_point(absolute)
                self._add_curve(
                    open_subpath(), CurveType.QUADRATIC, [cursor, control, target]
                )
                cursor = target
            elif kind == "a":
                rx, ry, rotation = scanner.number(), scanner.number(), scanner.number()
                large_arc, sweep = scanner.flag(), scanner.flag()
                target = read_point(absolute)
                curves = arc_to_cubics(
                    cursor, rx, ry, rotation, large_arc, sweep, target
                )
                points = open_subpath()
                if curves is None:
                    points.append(target)
                for curve in curves or []:
                    self._add_curve(points, CurveType.CUBIC, curve)
                cursor = target

            last_kind = kind
            last_control = control

        elements = [
            RawElement.from_points(ElementType.LINE.value, points)
            for points in subpaths
            if len(points) > 1
        ]
        logger.debug(f"Parsed {len(elements)} subpath(s) from path data")
        return elements

    def _add_curve(
        self, points: List[Point], curve_type: CurveType, control_points: List[Point]
    ) -> None:
        points.extend(curve_to_points(curve_type, control_points, self.curve_points))
