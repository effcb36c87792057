from __future__ import annotations
from enum import Enum
import numpy as np
from .affine import deform_affine
from .similarity import deform_similarity
from .rigid import deform_rigid
from .weights import DEFAULT_ALPHA

class Deformation(str, Enum):
    AFFINE = "affine"
    SIMILARITY = "similarity"
    RIGID = "rigid"

    @classmethod
    def parse(cls, name: "str|Deformation") -> "Deformation":
        if isinstance(name, cls): return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            valid = ", ".join(k.value for k in cls)
            raise ValueError(f"unknown deformation {name!r}, expected one of: {valid}") from None

    @property
    def solver(self):
        return _SOLVERS[self]

    def evaluate(self, controls_src, controls_dst, query, alpha: float=DEFAULT_ALPHA) -> np.ndarray:
        return self.solver(controls_src, controls_dst, query, alpha)

_SOLVERS = {
    Deformation.AFFINE: deform_affine,
    Deformation.SIMILARITY: deform_similarity,
    Deformation.RIGID: deform_rigid,
}
