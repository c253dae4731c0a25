"""Tests for scene serialization."""

import json

import pytest

from svg2excalidraw.core.error_handling import OutputError
from svg2excalidraw.core.models import ExcalidrawScene
from svg2excalidraw.generators.element_factory import ElementFactory
from svg2excalidraw.outputs.scene_writer import scene_to_json, write_scene


@pytest.fixture
def scene():
    scene = ExcalidrawScene()
    factory = ElementFactory()
    scene.elements.append(factory.create_rect(x=1, y=2, width=3, height=4))
    scene.elements.append(factory.create_line(points=[[0, 0], [5, 5]]))
    return scene


class TestSceneWriter:
    """Test writing scenes to JSON."""

    def test_scene_to_json(self, scene):
        """Test the JSON rendering of a scene."""
        data = json.loads(scene_to_json(scene))

        assert data["type"] == "excalidraw"
        assert [element["type"] for element in data["elements"]] == [
            "rectangle",
            "line",
        ]

    def test_indent(self, scene):
        """Indentation is configurable and None renders compactly."""
        assert "\n" not in scene_to_json(scene, indent=None)
        assert '\n    "type"' in scene_to_json(scene, indent=4)

    def test_write_scene_creates_directories(self, scene, tmp_path):
        """Parent directories are created."""
        output_path = tmp_path / "nested" / "dir" / "scene.excalidraw"

        written = write_scene(scene, output_path)

        assert written == output_path
        data = json.loads(output_path.read_text(encoding="utf-8"))
        assert data["elements"][0]["x"] == 1

    def test_unicode_is_kept(self, tmp_path):
        """Non-ASCII text is written as UTF-8."""
        scene = ExcalidrawScene(source="ünïcode")
        output_path = tmp_path / "scene.excalidraw"

        write_scene(scene, output_path)

        assert "ünïcode" in output_path.read_text(encoding="utf-8")

    def test_write_failure_raises_output_error(self, scene, tmp_path):
        """I/O errors are reported as OutputError."""
        blocker = tmp_path / "file"
        blocker.write_text("")

        with pytest.raises(OutputError):
            write_scene(scene, blocker / "scene.excalidraw")

    def test_non_finite_values_are_rejected(self, scene):
        """NaN cannot be written as JSON."""
        scene.elements[0].x = float("nan")

        with pytest.raises(OutputError):
            scene_to_json(scene)

    def test_failed_render_keeps_existing_file(self, scene, tmp_path):
        """A scene that cannot be rendered leaves the target untouched."""
        output_path = tmp_path / "scene.excalidraw"
        output_path.write_text("previous", encoding="utf-8")
        scene.elements[1].points = [[0, float("inf")]]

        with pytest.raises(OutputError):
            write_scene(scene, output_path)

        assert output_path.read_text(encoding="utf-8") == "previous"
