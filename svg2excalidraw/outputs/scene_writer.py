"""Serialization of Excalidraw scenes to JSON files."""

import json
import logging
from pathlib import Path

from ..core.error_handling import OutputError, handle_errors
from ..core.models import ExcalidrawScene

logger = logging.getLogger(__name__)


@handle_errors(
    error_types={ValueError: OutputError, TypeError: OutputError},
    default_error=OutputError,
    log_errors=False,
)
def scene_to_json(scene: ExcalidrawScene, indent: int | None = 2) -> str:
    """Render a scene as Excalidraw JSON text.

    Raises:
        OutputError: If the scene holds values JSON cannot represent, such as
            NaN or infinite coordinates
    """
    return json.dumps(
        scene.to_dict(), indent=indent, ensure_ascii=False, allow_nan=False
    )


@handle_errors(
    error_types={OSError: OutputError, TypeError: OutputError},
    default_error=OutputError,
    log_errors=False,
)
def write_scene(
    scene: ExcalidrawScene, output_path: str | Path, indent: int | None = 2
) -> Path:
    """Write a scene to a file, creating parent directories as needed.

    The JSON text is rendered before the file is opened, so a scene that
    cannot be serialized never truncates an existing file.

    Args:
        scene: Scene to write
        output_path: Destination file
        indent: JSON indentation; None for compact output

    Returns:
        Path of the written file

    Raises:
        OutputError: If the scene cannot be rendered or the file written
    """
    text = scene_to_json(scene, indent)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(text)
        f.write("\n")

    logger.info(f"Wrote {scene.element_count} elements to {output_path}")
    return output_path
