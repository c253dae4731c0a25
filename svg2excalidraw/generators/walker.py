"""Tree walker that converts an SVG document into an Excalidraw scene.

The walk is a depth-first, pre-order traversal over allow-listed nodes.
Containers open a nested scope: ``g`` pushes a ``Group`` onto the group
stack, ``use`` converts its resolved reference into an isolated sub-scene.
Leaf shapes append their elements to the scene of the current scope.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Optional, Set, Tuple

import numpy as np

from ..core.constants import (
    CurveSampling,
    StrokeSharpness,
    SVGAttributes,
    SVGTags,
    UseAttributes,
)
from ..core.error_handling import (
    CyclicReferenceError,
    EmptyResolutionError,
    ReferenceNotFoundError,
)
from ..core.models import ExcalidrawElement, ExcalidrawScene, Group, RawElement
from ..geometry.positions import calculate_elements_positions, safe_number
from ..geometry.transform import (
    apply_matrix,
    box_matrix,
    get_transform_matrix,
    matrix_boundaries,
    parse_transform,
)
from ..parsers.attributes import (
    get_group_attrs,
    get_num,
    get_presentation_attributes,
    pres_attrs_to_element_values,
)
from ..parsers.path_parser import PathDataParser
from ..parsers.svg_reader import SVGDocument, TreeNode, accept_node, iter_accepted
from .element_factory import ElementFactory

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    """Kinds of nodes the walker dispatches on."""

    SVG = SVGTags.SVG
    G = SVGTags.G
    USE = SVGTags.USE
    CIRCLE = SVGTags.CIRCLE
    ELLIPSE = SVGTags.ELLIPSE
    RECT = SVGTags.RECT
    POLYLINE = SVGTags.POLYLINE
    PATH = SVGTags.PATH
    LINE = SVGTags.LINE
    POLYGON = SVGTags.POLYGON
    UNSUPPORTED = "#unsupported"

    @classmethod
    def from_tag(cls, tag: str) -> "NodeKind":
        """Get the kind of a tag; anything not allow-listed is UNSUPPORTED."""
        if tag not in SVGTags.SUPPORTED:
            return cls.UNSUPPORTED
        return cls(tag)


@dataclass(frozen=True)
class WalkerArgs:
    """Per-call traversal context.

    Every recursive step gets its own copy; only ``scene`` is shared with
    the caller. ``references`` holds the ids of the <use> targets being
    resolved on the current path.
    """

    root: SVGDocument
    node: TreeNode
    scene: ExcalidrawScene
    groups: Tuple[Group, ...] = ()
    references: FrozenSet[str] = frozenset()


def merge_use_attributes(definition: TreeNode, use: TreeNode) -> TreeNode:
    """Build the element a <use> node stands for.

    Attributes set on the definition win, except for x, y, width, height
    and href, where the <use> value wins. Attributes only set on the <use>
    node are adopted. The <use> node's id is never copied.
    """
    merged = definition.clone()
    for name, value in use.attributes.items():
        if name in UseAttributes.SKIPPED:
            continue
        if not merged.has(name) or name in UseAttributes.OVERRIDES:
            merged.set(name, value)
    return merged


class SceneWalker:
    """Walks an SVG document and emits Excalidraw elements."""

    def __init__(
        self,
        factory: Optional[ElementFactory] = None,
        path_parser: Optional[PathDataParser] = None,
        curve_points: int = CurveSampling.DEFAULT_POINTS,
    ) -> None:
        """Initialize the walker.

        Args:
            factory: Element factory; a new one with seed 1 by default
            path_parser: Path data parser; one using ``curve_points`` by default
            curve_points: Samples per curve segment for the default path parser
        """
        self.factory = factory or ElementFactory()
        self.path_parser = path_parser or PathDataParser(curve_points)
        # Group ids handed out so far in the current document
        self._group_ids: Set[str] = set()

    def walk_document(self, document: SVGDocument) -> ExcalidrawScene:
        """Convert a whole document into a new scene."""
        scene = ExcalidrawScene()
        self._group_ids = set()
        if accept_node(document.root):
            self.walk(WalkerArgs(root=document, node=document.root, scene=scene))
        else:
            logger.warning(f"Document root <{document.root.tag}> is not supported")
        return scene

    def walk(self, args: WalkerArgs) -> None:
        """Convert the node at the cursor of ``args``."""
        kind = NodeKind.from_tag(args.node.tag)
        self._handlers[kind](self, args)

    def _walk_children(self, args: WalkerArgs) -> None:
        for child in iter_accepted(args.node):
            self.walk(replace(args, node=child))

    def _walk_svg(self, args: WalkerArgs) -> None:
        self._walk_children(args)

    def _walk_g(self, args: WalkerArgs) -> None:
        group = self._create_group(args.node)
        logger.debug(f"Entering group {group.id}")
        self._walk_children(replace(args, groups=args.groups + (group,)))

    def _walk_use(self, args: WalkerArgs) -> None:
        use = args.node
        href = use.get(SVGAttributes.HREF) or use.get(SVGAttributes.XLINK_HREF)
        if not href:
            raise ReferenceNotFoundError("Unable to get id of use element")

        ref_id = href[1:] if href.startswith("#") else ""
        definition = args.root.find_by_id(ref_id) if ref_id else None
        if definition is None:
            raise ReferenceNotFoundError(
                f"Unable to find def element with id: {href}", {"href": href}
            )
        if ref_id in args.references:
            raise CyclicReferenceError(
                f"Use element references itself: {href}",
                {"href": href, "chain": sorted(args.references)},
            )

        sub_scene = ExcalidrawScene()
        self.walk(
            replace(
                args,
                node=merge_use_attributes(definition, use),
                scene=sub_scene,
                references=args.references | {ref_id},
            )
        )

        if not sub_scene.elements:
            raise EmptyResolutionError(
                f"Unable to create element for use of {href}", {"href": href}
            )
        if len(sub_scene.elements) > 1:
            logger.warning(
                f"Use of {href} produced {len(sub_scene.elements)} elements, "
                "keeping the last one"
            )

        args.scene.elements.append(sub_scene.elements[-1])

    def _walk_circle(self, args: WalkerArgs) -> None:
        node = args.node
        r = get_num(node, SVGAttributes.R, 0)
        d = r * 2
        x = get_num(node, SVGAttributes.X, 0) + get_num(node, SVGAttributes.CX, 0) - r
        y = get_num(node, SVGAttributes.Y, 0) + get_num(node, SVGAttributes.CY, 0) - r

        matrix = get_transform_matrix(node, args.groups) @ box_matrix(d, d, x, y)
        args.scene.elements.append(
            self._create_box_element(self.factory.create_ellipse, args, matrix)
        )

    def _walk_ellipse(self, args: WalkerArgs) -> None:
        node = args.node
        rx = get_num(node, SVGAttributes.RX, 0)
        ry = get_num(node, SVGAttributes.RY, 0)
        x = get_num(node, SVGAttributes.X, 0) + get_num(node, SVGAttributes.CX, 0) - rx
        y = get_num(node, SVGAttributes.Y, 0) + get_num(node, SVGAttributes.CY, 0) - ry

        matrix = get_transform_matrix(node, args.groups) @ box_matrix(
            rx * 2, ry * 2, x, y
        )
        args.scene.elements.append(
            self._create_box_element(self.factory.create_ellipse, args, matrix)
        )

    def _walk_rect(self, args: WalkerArgs) -> None:
        node = args.node
        x = get_num(node, SVGAttributes.X, 0)
        y = get_num(node, SVGAttributes.Y, 0)
        width = get_num(node, SVGAttributes.WIDTH, 0)
        height = get_num(node, SVGAttributes.HEIGHT, 0)

        matrix = get_transform_matrix(node, args.groups) @ box_matrix(
            width, height, x, y
        )

        # Excalidraw has no corner radius, only a round/sharp style
        is_round = node.has(SVGAttributes.RX) or node.has(SVGAttributes.RY)

        args.scene.elements.append(
            self._create_box_element(
                self.factory.create_rect,
                args,
                matrix,
                stroke_sharpness=(
                    StrokeSharpness.ROUND.value
                    if is_round
                    else StrokeSharpness.SHARP.value
                ),
            )
        )

    def _walk_path(self, args: WalkerArgs) -> None:
        node = args.node
        raw_elements = self.path_parser.parse(node)
        if not raw_elements:
            return

        matrix = get_transform_matrix(node, args.groups)
        min_x = min(raw.x for raw in raw_elements)
        min_y = min(raw.y for raw in raw_elements)
        style = self._style_values(args)

        for raw in calculate_elements_positions(raw_elements):
            origin_x, origin_y = min_x + raw.x, min_y + raw.y
            placed = RawElement.from_points(
                raw.type,
                [
                    apply_matrix(matrix, [origin_x + px, origin_y + py])
                    for px, py in raw.points
                ],
            )
            args.scene.elements.append(
                self.factory.create_line(
                    **style,
                    x=safe_number(placed.x),
                    y=safe_number(placed.y),
                    width=safe_number(placed.width),
                    height=safe_number(placed.height),
                    points=[
                        [safe_number(px), safe_number(py)] for px, py in placed.points
                    ],
                )
            )

    def _walk_polyline(self, args: WalkerArgs) -> None:
        # TODO: parse the points attribute into the line's points.
        args.scene.elements.append(
            self.factory.create_line(**get_group_attrs(args.groups))
        )

    def _walk_placeholder(self, args: WalkerArgs) -> None:
        logger.debug(f"Skipping unimplemented element: {args.node.tag}")

    def _walk_unsupported(self, args: WalkerArgs) -> None:
        logger.debug(f"No converter for element: {args.node.tag}")

    def _create_group(self, node: TreeNode) -> Group:
        # A group expanded by several <use> nodes gets its own id each time
        group_id = node.get(SVGAttributes.ID)
        if not group_id or group_id in self._group_ids:
            group_id = self.factory.new_id()
        self._group_ids.add(group_id)
        return Group(
            id=group_id,
            transform=parse_transform(node.get(SVGAttributes.TRANSFORM)),
            attributes=get_presentation_attributes(node),
        )

    def _style_values(self, args: WalkerArgs) -> Dict[str, Any]:
        """Group attributes overlaid with the node's own presentation attributes."""
        return {
            **get_group_attrs(args.groups),
            **pres_attrs_to_element_values(args.node),
        }

    def _create_box_element(
        self,
        create: Callable[..., ExcalidrawElement],
        args: WalkerArgs,
        matrix: np.ndarray,
        **fields: Any,
    ) -> ExcalidrawElement:
        boundaries = matrix_boundaries(matrix)
        return create(
            **self._style_values(args),
            **fields,
            x=boundaries.x,
            y=boundaries.y,
            width=boundaries.width,
            height=boundaries.height,
        )

    _handlers: Dict[NodeKind, Callable[["SceneWalker", WalkerArgs], None]] = {
        NodeKind.SVG: _walk_svg,
        NodeKind.G: _walk_g,
        NodeKind.USE: _walk_use,
        NodeKind.CIRCLE: _walk_circle,
        NodeKind.ELLIPSE: _walk_ellipse,
        NodeKind.RECT: _walk_rect,
        NodeKind.PATH: _walk_path,
        NodeKind.POLYLINE: _walk_polyline,
        NodeKind.LINE: _walk_placeholder,
        NodeKind.POLYGON: _walk_placeholder,
        NodeKind.UNSUPPORTED: _walk_unsupported,
    }


_unhandled = set(NodeKind) - set(SceneWalker._handlers)
if _unhandled:
    raise RuntimeError(
        f"No walker for node kinds: {sorted(kind.name for kind in _unhandled)}"
    )
