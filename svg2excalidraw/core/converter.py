"""Main converter class that orchestrates the conversion process."""

import logging
from pathlib import Path
from typing import Optional

from ..generators.element_factory import ElementFactory
from ..generators.walker import SceneWalker
from ..outputs.scene_writer import write_scene
from ..parsers.svg_reader import SVGDocument
from .config import Config
from .constants import ConfigKeys, ConfigSections
from .error_handling import error_context
from .logging_config import LogContext, log_performance
from .models import ExcalidrawScene

logger = logging.getLogger(__name__)


class SVGToExcalidrawConverter:
    """Main converter class for SVG to Excalidraw conversion."""

    def __init__(
        self,
        config: Optional[Config] = None,
        curve_points: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> None:
        """Initialize converter with configuration.

        Args:
            config: Loaded configuration; searched for when omitted
            curve_points: Overrides ``conversion.curve_points``
            seed: Overrides ``conversion.seed``
        """
        self.config = config or Config()
        self.config.validate()

        self.curve_points = (
            curve_points
            if curve_points is not None
            else self.config.get(ConfigSections.CONVERSION, ConfigKeys.CURVE_POINTS)
        )
        self.seed = (
            seed
            if seed is not None
            else self.config.get(ConfigSections.CONVERSION, ConfigKeys.SEED)
        )

        # Last successfully converted scene
        self.scene: Optional[ExcalidrawScene] = None

    def _new_walker(self) -> SceneWalker:
        return SceneWalker(
            factory=ElementFactory(self.seed), curve_points=self.curve_points
        )

    def convert_document(self, document: SVGDocument) -> ExcalidrawScene:
        """Convert a parsed document into a new scene."""
        with LogContext("conversion", logger):
            scene = self._new_walker().walk_document(document)

        logger.info(f"Converted {scene.element_count} elements")
        self.scene = scene
        return scene

    def convert_string(self, svg_text: str) -> ExcalidrawScene:
        """Convert SVG text into a new scene."""
        with error_context("converting SVG text"):
            return self.convert_document(SVGDocument.from_string(svg_text))

    def convert_file(self, svg_path: str | Path) -> ExcalidrawScene:
        """Convert an SVG file into a new scene."""
        with error_context("converting SVG file", file=str(svg_path)):
            return self.convert_document(SVGDocument.from_file(svg_path))

    def default_output_path(self, svg_path: str | Path) -> Path:
        """Get the input path with the configured output extension."""
        extension = self.config.get(ConfigSections.OUTPUT, ConfigKeys.EXTENSION)
        return Path(svg_path).with_suffix(extension)

    @log_performance
    def convert(
        self,
        svg_path: str | Path,
        output_path: str | Path | None = None,
        indent: Optional[int] = None,
    ) -> ExcalidrawScene:
        """Complete conversion from an SVG file to an Excalidraw file."""
        if output_path is None:
            output_path = self.default_output_path(svg_path)
        if indent is None:
            indent = self.config.get(ConfigSections.OUTPUT, ConfigKeys.INDENT)

        scene = self.convert_file(svg_path)
        with error_context("writing scene", file=str(output_path)):
            write_scene(scene, output_path, indent)
        return scene

    @property
    def element_count(self) -> int:
        """Get the number of elements in the last converted scene."""
        return self.scene.element_count if self.scene else 0
