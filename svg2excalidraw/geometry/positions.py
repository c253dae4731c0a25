"""Numeric sanitizing and re-basing of element coordinates."""

import math
from dataclasses import replace
from typing import List

from ..core.models import RawElement


def safe_number(value: float, default: float = 0.0) -> float:
    """Map NaN and infinities to ``default``."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def calculate_elements_positions(elements: List[RawElement]) -> List[RawElement]:
    """Re-base a batch of elements sharing one coordinate space.

    The minimum x/y across the batch becomes the new origin for element
    positions. Points are already relative to their own element's top-left
    corner, so they move with it and are only sanitized. Running this on
    its own output returns the batch unchanged. Input elements are not
    modified.
    """
    if not elements:
        return []

    min_x = min(element.x for element in elements)
    min_y = min(element.y for element in elements)

    return [
        replace(
            element,
            x=safe_number(element.x - min_x),
            y=safe_number(element.y - min_y),
            points=[[safe_number(px), safe_number(py)] for px, py in element.points],
        )
        for element in elements
    ]
