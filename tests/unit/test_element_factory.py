"""Tests for element construction and serialization."""

from svg2excalidraw.core.models import ExcalidrawScene
from svg2excalidraw.generators.element_factory import MAX_SEED, ElementFactory


class TestElementFactory:
    """Test element defaults and identities."""

    def test_rect_defaults(self):
        """New elements carry neutral defaults."""
        element = ElementFactory().create_rect()

        assert element.type == "rectangle"
        assert (element.x, element.y, element.width, element.height) == (0, 0, 0, 0)
        assert element.stroke_color == "#000000"
        assert element.background_color == "transparent"
        assert element.fill_style == "hachure"
        assert element.stroke_sharpness == "sharp"
        assert element.opacity == 100
        assert element.group_ids == []
        assert element.is_deleted is False

    def test_line_defaults_to_round(self):
        """Lines use round stroke sharpness unless told otherwise."""
        factory = ElementFactory()

        assert factory.create_line().stroke_sharpness == "round"
        assert factory.create_line(stroke_sharpness="sharp").stroke_sharpness == (
            "sharp"
        )

    def test_fields_override_defaults(self):
        """Keyword fields replace defaults."""
        element = ElementFactory().create_ellipse(x=5, width=10, stroke_color="red")

        assert element.type == "ellipse"
        assert (element.x, element.width) == (5, 10)
        assert element.stroke_color == "red"

    def test_identities_are_reproducible(self):
        """The same seed yields the same ids and seeds."""
        first = ElementFactory(42).create_rect()
        second = ElementFactory(42).create_rect()

        assert first.id == second.id
        assert first.seed == second.seed
        assert first.version_nonce == second.version_nonce

    def test_identities_differ(self):
        """Consecutive elements and different seeds get different ids."""
        factory = ElementFactory(1)
        ids = {factory.create_rect().id for _ in range(50)}

        assert len(ids) == 50
        assert ElementFactory(1).new_id() != ElementFactory(2).new_id()

    def test_id_and_seed_format(self):
        """Ids are hex strings and seeds positive 31-bit integers."""
        factory = ElementFactory()
        element_id = factory.new_id()

        assert len(element_id) == 20
        int(element_id, 16)
        assert 1 <= factory.new_seed() <= MAX_SEED


class TestSerialization:
    """Test scene and element dictionaries."""

    def test_element_fields_are_camel_case(self):
        """Excalidraw field names are used."""
        data = ElementFactory().create_rect(group_ids=["g1"]).to_dict()

        assert data["strokeColor"] == "#000000"
        assert data["backgroundColor"] == "transparent"
        assert data["strokeSharpness"] == "sharp"
        assert data["groupIds"] == ["g1"]
        assert "points" not in data

    def test_line_has_points(self):
        """Only line elements carry points."""
        data = ElementFactory().create_line(points=[[0, 0], [1, 2]]).to_dict()
        assert data["points"] == [[0, 0], [1, 2]]

    def test_scene_envelope(self):
        """Test the scene file envelope."""
        scene = ExcalidrawScene()
        scene.elements.append(ElementFactory().create_rect())

        data = scene.to_dict()

        assert data["type"] == "excalidraw"
        assert data["version"] == 2
        assert data["source"] == "https://excalidraw.com"
        assert len(data["elements"]) == scene.element_count == 1
