"""Tests for affine transform parsing and composition."""

import numpy as np
import pytest

from svg2excalidraw.core.models import Group
from svg2excalidraw.geometry.transform import (
    apply_matrix,
    box_matrix,
    get_transform_matrix,
    matrix_boundaries,
    parse_transform,
    rotate,
)
from svg2excalidraw.parsers.svg_reader import SVGNode


class TestParseTransform:
    """Test the transform attribute parser."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty_is_identity(self, value):
        """Missing transforms parse to the identity."""
        assert np.array_equal(parse_transform(value), np.identity(3))

    def test_translate(self):
        """Test translate with one and two arguments."""
        assert apply_matrix(parse_transform("translate(10, 20)"), [1, 1]) == [11, 21]
        assert apply_matrix(parse_transform("translate(10)"), [1, 1]) == [11, 1]

    def test_scale(self):
        """A single scale factor applies to both axes."""
        assert apply_matrix(parse_transform("scale(2)"), [3, 4]) == [6, 8]
        assert apply_matrix(parse_transform("scale(2 3)"), [3, 4]) == [6, 12]

    def test_rotate(self):
        """Test rotation about the origin and about a center."""
        assert apply_matrix(parse_transform("rotate(90)"), [1, 0]) == pytest.approx(
            [0, 1]
        )
        assert apply_matrix(
            parse_transform("rotate(90, 10, 10)"), [10, 10]
        ) == pytest.approx([10, 10])

    def test_skew(self):
        """Test skewX and skewY."""
        assert apply_matrix(parse_transform("skewX(45)"), [0, 1]) == pytest.approx(
            [1, 1]
        )
        assert apply_matrix(parse_transform("skewY(45)"), [1, 0]) == pytest.approx(
            [1, 1]
        )

    def test_matrix(self):
        """Test the six-value matrix form."""
        matrix = parse_transform("matrix(1 0 0 1 5 6)")
        assert apply_matrix(matrix, [0, 0]) == [5, 6]

    def test_functions_compose_left_to_right(self):
        """The rightmost function is applied to a point first."""
        matrix = parse_transform("translate(10,0) scale(2)")
        assert apply_matrix(matrix, [1, 1]) == [12, 2]

    def test_unknown_functions_are_ignored(self):
        """Unknown functions and bad argument counts leave the matrix alone."""
        matrix = parse_transform("perspective(3) translate(1 2 3 4) scale(2)")
        assert apply_matrix(matrix, [1, 1]) == [2, 2]

    @pytest.mark.parametrize(
        "value",
        ["scale(1e400)", "translate(-1e400 0)", "scale(1e300) scale(1e300)"],
    )
    def test_entries_stay_finite(self, value):
        """Overflowing arguments and products become zero."""
        assert np.isfinite(parse_transform(value)).all()

    def test_non_finite_rotation_is_ignored(self):
        """An infinite angle counts as zero."""
        assert apply_matrix(parse_transform("rotate(1e400)"), [1, 2]) == [1, 2]


class TestMatrixComposition:
    """Test composition of group and element transforms."""

    def test_groups_are_outermost_first(self):
        """Inner group transforms are applied before outer ones."""
        outer = Group("outer", parse_transform("scale(2)"))
        inner = Group("inner", parse_transform("translate(10, 0)"))
        node = SVGNode("rect")

        matrix = get_transform_matrix(node, [outer, inner])
        assert apply_matrix(matrix, [0, 0]) == [20, 0]

    def test_element_transform_is_innermost(self):
        """The node's own transform is applied before its groups'."""
        group = Group("g", parse_transform("translate(5, 5)"))
        node = SVGNode("rect", {"transform": "scale(3)"})

        matrix = get_transform_matrix(node, [group])
        assert apply_matrix(matrix, [1, 1]) == [8, 8]

    def test_no_groups(self):
        """Without groups only the element transform applies."""
        node = SVGNode("rect", {"transform": "translate(1, 2)"})
        assert apply_matrix(get_transform_matrix(node, []), [0, 0]) == [1, 2]

    def test_composed_matrix_is_finite(self):
        """Products that overflow across groups are sanitized."""
        group = Group("g", parse_transform("scale(1e200)"))
        node = SVGNode("rect", {"transform": "scale(1e200)"})

        matrix = get_transform_matrix(node, [group, group])

        assert np.isfinite(matrix).all()

    def test_apply_matrix_sanitizes_points(self):
        """Points that overflow when mapped become zero."""
        assert apply_matrix(parse_transform("scale(1e300)"), [1e300, 2]) == [0, 2e300]


class TestBoxMatrix:
    """Test unit box matrices and their boundaries."""

    def test_box_maps_unit_square(self):
        """The unit square maps onto the box."""
        matrix = box_matrix(30, 40, 10, 20)
        assert apply_matrix(matrix, [0, 0]) == [10, 20]
        assert apply_matrix(matrix, [1, 1]) == [40, 60]

    def test_boundaries(self):
        """Position comes from translation and size from the diagonal."""
        boundaries = matrix_boundaries(
            parse_transform("translate(5, 5)") @ box_matrix(30, 40, 10, 20)
        )
        assert (boundaries.x, boundaries.y) == (15, 25)
        assert (boundaries.width, boundaries.height) == (30, 40)

    def test_non_finite_boundaries_become_zero(self):
        """Test sanitizing of NaN entries."""
        boundaries = matrix_boundaries(box_matrix(float("nan"), 2, float("inf"), 1))
        assert (boundaries.x, boundaries.width) == (0, 0)
        assert (boundaries.y, boundaries.height) == (1, 2)

    def test_rotate_helper_without_center(self):
        """Rotation by 180 degrees flips both axes."""
        assert apply_matrix(rotate(180), [1, 2]) == pytest.approx([-1, -2])
