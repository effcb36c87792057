from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import numpy as np
from ..geometry.points import sqr_norm

DEFAULT_ALPHA = 1.0

@dataclass(frozen=True)
class Weights:
    """
    Per-query influence of every control point.

    w:          (N, C) weights proportional to 1/|p_i - v|^(2*alpha), scaled so the
                nearest control of each query weighs 1
    coincident: (N,) index of the first control point the query sits on, or -1.
                Rows with a coincident index hold placeholder weights and must be
                resolved by the caller (exact control point -> exact destination).
    """
    w: np.ndarray
    coincident: np.ndarray

    @property
    def singular(self) -> np.ndarray:
        return self.coincident >= 0

def inverse_distance_weights(p: np.ndarray, v: np.ndarray, alpha: float=DEFAULT_ALPHA) -> Weights:
    """p: (C,2) source control points, v: (N,2) queries."""
    if not alpha > 0:
        raise ValueError(f"weight exponent alpha must be > 0, got {alpha}")
    d = sqr_norm(p[None,:,:] - v[:,None,:])  # (N, C)
    nearest = d.min(axis=1, keepdims=True)
    coincident = np.where(nearest[:,0] == 0.0, d.argmin(axis=1), -1)
    # only weight ratios matter; relative to the nearest control they stay in (0, 1]
    # and cannot all underflow. Squared distance already carries the 2 of 2*alpha.
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        w = (d / nearest) ** -alpha
    w[coincident >= 0] = 1.0
    return Weights(w=w, coincident=coincident)

def weighted_centroids(weights: Weights, p: np.ndarray, q: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    w = weights.w
    w_sum = w.sum(axis=1, keepdims=True)
    return (w @ p) / w_sum, (w @ q) / w_sum
