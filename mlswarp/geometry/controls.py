from __future__ import annotations
import numpy as np
from typing import List, Tuple
from pydantic import BaseModel
from .points import as_points

class ControlPointError(ValueError):
    """Control correspondences that no solver can work with."""

def check_controls(controls_src, controls_dst) -> Tuple[np.ndarray, np.ndarray]:
    """
    Validate a pair of control sequences and return them as (C,2) float64 arrays.
    Raises ControlPointError on empty, mismatched, non-2D or non-finite input.
    """
    try:
        p = as_points(controls_src); q = as_points(controls_dst)
    except ValueError as e:
        raise ControlPointError(str(e)) from e
    if p.ndim != 2 or q.ndim != 2:
        raise ControlPointError(f"control points must be sequences of (x, y), got shapes {p.shape} and {q.shape}")
    if len(p) == 0:
        raise ControlPointError("at least one control point is required")
    if len(p) != len(q):
        raise ControlPointError(f"got {len(p)} source but {len(q)} destination control points")
    if not (np.isfinite(p).all() and np.isfinite(q).all()):
        raise ControlPointError("control points must have finite coordinates")
    return p, q

class ControlPairs(BaseModel):
    src: List[Tuple[float,float]] = []
    dst: List[Tuple[float,float]] = []

    def add(self, src: Tuple[float,float], dst: Tuple[float,float]) -> "ControlPairs":
        self.src.append(src); self.dst.append(dst)
        return self

    def arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        return check_controls(self.src, self.dst)

def parse_pair(text: str) -> Tuple[Tuple[float,float], Tuple[float,float]]:
    """Parse "x1,y1:x2,y2" into ((x1,y1), (x2,y2))."""
    try:
        a, b = text.split(":")
        x1, y1 = (float(t) for t in a.split(","))
        x2, y2 = (float(t) for t in b.split(","))
    except ValueError as e:
        raise ControlPointError(f"bad control pair {text!r}, expected 'x1,y1:x2,y2'") from e
    return (x1, y1), (x2, y2)
