"""svg2excalidraw - Convert SVG drawings into Excalidraw scenes."""

__version__ = "0.1.0"

from svg2excalidraw.core.config import Config
from svg2excalidraw.core.converter import SVGToExcalidrawConverter
from svg2excalidraw.core.models import ExcalidrawElement, ExcalidrawScene

__all__ = [
    "Config",
    "SVGToExcalidrawConverter",
    "ExcalidrawElement",
    "ExcalidrawScene",
]
