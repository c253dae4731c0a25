"""Constants and enums for svg2excalidraw to eliminate magic strings and values."""

from enum import Enum
from typing import FrozenSet


class ElementType(Enum):
    """Excalidraw element types produced by the converter."""

    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"
    LINE = "line"


class StrokeSharpness(Enum):
    """Corner styles supported by Excalidraw."""

    SHARP = "sharp"
    ROUND = "round"


class FillStyle(Enum):
    """Fill styles supported by Excalidraw."""

    HACHURE = "hachure"
    SOLID = "solid"


class SceneEnvelope:
    """Fixed metadata of an Excalidraw scene file."""

    TYPE = "excalidraw"
    VERSION = 2
    SOURCE = "https://excalidraw.com"


class SVGTags:
    """SVG element tag names recognised by the tree walker."""

    SVG = "svg"
    G = "g"
    USE = "use"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    RECT = "rect"
    POLYLINE = "polyline"
    PATH = "path"
    LINE = "line"
    POLYGON = "polygon"

    CONTAINERS: FrozenSet[str] = frozenset({SVG, G, USE})
    SHAPES: FrozenSet[str] = frozenset({CIRCLE, ELLIPSE, RECT, POLYLINE, PATH})
    # Recognised but not converted
    PLACEHOLDERS: FrozenSet[str] = frozenset({LINE, POLYGON})

    SUPPORTED: FrozenSet[str] = CONTAINERS | SHAPES | PLACEHOLDERS


class SVGAttributes:
    """SVG attribute names."""

    ID = "id"
    TRANSFORM = "transform"
    STYLE = "style"
    HREF = "href"
    XLINK_HREF = "xlink:href"
    X = "x"
    Y = "y"
    WIDTH = "width"
    HEIGHT = "height"
    CX = "cx"
    CY = "cy"
    R = "r"
    RX = "rx"
    RY = "ry"
    D = "d"

    STROKE = "stroke"
    STROKE_WIDTH = "stroke-width"
    FILL = "fill"
    OPACITY = "opacity"

    PRESENTATION: FrozenSet[str] = frozenset({STROKE, STROKE_WIDTH, FILL, OPACITY})


class UseAttributes:
    """Attribute precedence rules for <use> reference resolution.

    Attributes on the referenced definition win over those on the <use>
    element, except for the override set, where the <use> value always wins.
    The skipped set is never copied from the <use> element.
    """

    SKIPPED: FrozenSet[str] = frozenset({SVGAttributes.ID})
    OVERRIDES: FrozenSet[str] = frozenset(
        {
            SVGAttributes.X,
            SVGAttributes.Y,
            SVGAttributes.WIDTH,
            SVGAttributes.HEIGHT,
            SVGAttributes.HREF,
            SVGAttributes.XLINK_HREF,
        }
    )


class Namespaces:
    """XML namespaces found in SVG documents."""

    XLINK = "http://www.w3.org/1999/xlink"
    XML = "http://www.w3.org/XML/1998/namespace"

    PREFIXES = {XLINK: "xlink", XML: "xml"}


class CurveSampling:
    """Bézier flattening limits."""

    DEFAULT_POINTS = 10
    MAX_POINTS = 100


class ElementDefaults:
    """Neutral default values for new Excalidraw elements."""

    ANGLE = 0
    STROKE_COLOR = "#000000"
    BACKGROUND_COLOR = "transparent"
    STROKE_WIDTH = 1
    ROUGHNESS = 1
    OPACITY = 100
    VERSION = 1


class FileExtensions:
    """File extensions used throughout the system."""

    EXCALIDRAW = ".excalidraw"


class ConfigSections:
    """Configuration file section names."""

    CONVERSION = "conversion"
    OUTPUT = "output"
    LOGGING = "logging"


class ConfigKeys:
    """Configuration parameter keys."""

    # Conversion settings
    CURVE_POINTS = "curve_points"
    SEED = "seed"

    # Output settings
    EXTENSION = "extension"
    INDENT = "indent"

    # Logging settings
    LEVEL = "level"
    FILE = "file"


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
