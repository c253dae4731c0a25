"""Default-value factories for Excalidraw elements."""

import random

from ..core.constants import ElementType, StrokeSharpness
from ..core.models import ExcalidrawElement

# Excalidraw seeds are positive 31-bit integers
MAX_SEED = 2**31 - 1


class ElementFactory:
    """Creates elements with neutral defaults and reproducible identities.

    Ids, seeds and version nonces are drawn from a private random generator,
    so converting the same document with the same seed always yields the
    same scene.
    """

    def __init__(self, seed: int = 1) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def new_id(self) -> str:
        """Get a new opaque element or group id."""
        return f"{self._rng.getrandbits(80):020x}"

    def new_seed(self) -> int:
        return self._rng.randint(1, MAX_SEED)

    def create(self, element_type: ElementType, **fields) -> ExcalidrawElement:
        """Create an element of the given type, overriding default fields."""
        return ExcalidrawElement(
            id=self.new_id(),
            type=element_type.value,
            seed=self.new_seed(),
            version_nonce=self.new_seed(),
            **fields,
        )

    def create_rect(self, **fields) -> ExcalidrawElement:
        return self.create(ElementType.RECTANGLE, **fields)

    def create_ellipse(self, **fields) -> ExcalidrawElement:
        return self.create(ElementType.ELLIPSE, **fields)

    def create_line(self, **fields) -> ExcalidrawElement:
        fields.setdefault("stroke_sharpness", StrokeSharpness.ROUND.value)
        return self.create(ElementType.LINE, **fields)
