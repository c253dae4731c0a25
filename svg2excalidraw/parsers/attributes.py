"""Mapping of SVG presentation attributes onto Excalidraw element fields."""

import re
from typing import Any, Dict, Iterable, Optional

from ..core.constants import FillStyle, SVGAttributes
from ..core.models import Group
from .svg_reader import TreeNode

_NUMBER_RE = re.compile(r"^\s*([-+]?(?:\d*\.\d+|\d+\.?)(?:[eE][-+]?\d+)?)")


def parse_number(value: Optional[str], default: float = 0.0) -> float:
    """Parse a leading number, ignoring a unit suffix (``"10px"`` -> 10.0)."""
    if value is None:
        return default
    match = _NUMBER_RE.match(value)
    if not match:
        return default
    return float(match.group(1))


def get_num(node: TreeNode, name: str, default: float = 0.0) -> float:
    """Read a numeric attribute of a node."""
    return parse_number(node.get(name), default)


def parse_style(style: Optional[str]) -> Dict[str, str]:
    """Parse inline ``style`` declarations."""
    declarations: Dict[str, str] = {}
    if not style:
        return declarations
    for declaration in style.split(";"):
        if ":" not in declaration:
            continue
        name, value = declaration.split(":", 1)
        name = name.strip().lower()
        value = value.strip()
        if name and value:
            declarations[name] = value
    return declarations


def get_presentation_attributes(node: TreeNode) -> Dict[str, str]:
    """Collect presentation attributes of a node; ``style`` wins over attributes."""
    attrs = {
        name: node.get(name)
        for name in SVGAttributes.PRESENTATION
        if node.get(name) is not None
    }
    for name, value in parse_style(node.get(SVGAttributes.STYLE)).items():
        if name in SVGAttributes.PRESENTATION:
            attrs[name] = value
    return attrs


def _attrs_to_element_values(attrs: Dict[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}

    stroke = attrs.get(SVGAttributes.STROKE)
    if stroke:
        values["stroke_color"] = "transparent" if stroke == "none" else stroke

    fill = attrs.get(SVGAttributes.FILL)
    if fill:
        if fill == "none":
            values["background_color"] = "transparent"
        else:
            values["background_color"] = fill
            values["fill_style"] = FillStyle.SOLID.value

    if SVGAttributes.STROKE_WIDTH in attrs:
        values["stroke_width"] = parse_number(attrs[SVGAttributes.STROKE_WIDTH], 1.0)

    if SVGAttributes.OPACITY in attrs:
        opacity = min(max(parse_number(attrs[SVGAttributes.OPACITY], 1.0), 0.0), 1.0)
        values["opacity"] = round(opacity * 100)

    return values


def pres_attrs_to_element_values(node: TreeNode) -> Dict[str, Any]:
    """Map a node's own presentation attributes to element fields."""
    return _attrs_to_element_values(get_presentation_attributes(node))


def get_group_attrs(groups: Iterable[Group]) -> Dict[str, Any]:
    """Map attributes inherited from enclosing groups to element fields.

    Groups are ordered outermost first; inner groups override outer ones.
    """
    groups = list(groups)
    inherited: Dict[str, str] = {}
    for group in groups:
        inherited.update(group.attributes)

    values = _attrs_to_element_values(inherited)
    values["group_ids"] = [group.id for group in groups]
    return values
