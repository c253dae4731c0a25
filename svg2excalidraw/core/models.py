"""Data models for the SVG to Excalidraw conversion."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import numpy as np

from .constants import (
    ElementDefaults,
    ElementType,
    FillStyle,
    SceneEnvelope,
    StrokeSharpness,
)

# Element types that carry a point list in the scene file
POINT_ELEMENT_TYPES = (ElementType.LINE.value,)


@dataclass
class ElementBoundaries:
    """Axis-aligned bounding box."""

    x: float
    y: float
    width: float
    height: float


@dataclass
class RawElement:
    """Intermediate shape record produced before style attributes are attached.

    ``points`` is an ordered list of ``[x, y]`` pairs relative to the
    element's top-left corner ``(x, y)``.
    """

    type: str
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    points: List[List[float]] = field(default_factory=list)

    @classmethod
    def from_points(
        cls, element_type: str, points: List[List[float]]
    ) -> "RawElement":
        """Create a raw element from points in the surrounding space.

        The box is the extent of the points, which are stored relative to
        its top-left corner.
        """
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        min_x, min_y = min(xs), min(ys)
        return cls(
            type=element_type,
            x=min_x,
            y=min_y,
            width=max(xs) - min_x,
            height=max(ys) - min_y,
            points=[[p[0] - min_x, p[1] - min_y] for p in points],
        )


@dataclass
class ExcalidrawElement:
    """A scene element: raw geometry plus style and identity fields.

    The walker only sets geometry (x, y, width, height, points, type,
    group_ids); style fields come from the attribute mapper.
    """

    id: str
    type: str
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    angle: float = ElementDefaults.ANGLE
    stroke_color: str = ElementDefaults.STROKE_COLOR
    background_color: str = ElementDefaults.BACKGROUND_COLOR
    fill_style: str = FillStyle.HACHURE.value
    stroke_width: float = ElementDefaults.STROKE_WIDTH
    stroke_sharpness: str = StrokeSharpness.SHARP.value
    roughness: int = ElementDefaults.ROUGHNESS
    opacity: int = ElementDefaults.OPACITY
    seed: int = 0
    version: int = ElementDefaults.VERSION
    version_nonce: int = 0
    is_deleted: bool = False
    group_ids: List[str] = field(default_factory=list)
    points: List[List[float]] = field(default_factory=list)

    @property
    def boundaries(self) -> ElementBoundaries:
        """Get placement and size of the element."""
        return ElementBoundaries(self.x, self.y, self.width, self.height)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the Excalidraw field names."""
        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "angle": self.angle,
            "strokeColor": self.stroke_color,
            "backgroundColor": self.background_color,
            "fillStyle": self.fill_style,
            "strokeWidth": self.stroke_width,
            "strokeSharpness": self.stroke_sharpness,
            "roughness": self.roughness,
            "opacity": self.opacity,
            "seed": self.seed,
            "version": self.version,
            "versionNonce": self.version_nonce,
            "isDeleted": self.is_deleted,
            "groupIds": list(self.group_ids),
        }
        if self.type in POINT_ELEMENT_TYPES:
            data["points"] = [list(point) for point in self.points]
        return data


@dataclass
class ExcalidrawScene:
    """Ordered collection of elements in paint order."""

    elements: List[ExcalidrawElement] = field(default_factory=list)

    type: str = SceneEnvelope.TYPE
    version: int = SceneEnvelope.VERSION
    source: str = SceneEnvelope.SOURCE

    @property
    def element_count(self) -> int:
        """Get the number of elements in the scene."""
        return len(self.elements)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the scene envelope."""
        return {
            "type": self.type,
            "version": self.version,
            "source": self.source,
            "elements": [element.to_dict() for element in self.elements],
        }


@dataclass(frozen=True, eq=False)
class Group:
    """One <g> scope entered during traversal.

    ``transform`` is the group's own 3x3 transform; ``attributes`` holds the
    presentation attributes its descendants inherit.
    """

    id: str
    transform: np.ndarray = field(default_factory=lambda: np.identity(3))
    attributes: Dict[str, str] = field(default_factory=dict)
