from __future__ import annotations
from dataclasses import dataclass
import numpy as np
from ..geometry.controls import check_controls
from ..geometry.points import as_points
from .weights import Weights, inverse_distance_weights, weighted_centroids

@dataclass
class LocalFrame:
    """Everything the three solvers share for a batch of queries."""
    v: np.ndarray        # (N,2) queries
    q: np.ndarray        # (C,2) destination controls
    weights: Weights
    p_star: np.ndarray   # (N,2)
    q_star: np.ndarray   # (N,2)
    p_hat: np.ndarray    # (N,C,2)
    q_hat: np.ndarray    # (N,C,2)

    @property
    def w(self) -> np.ndarray:
        return self.weights.w

    def finish(self, out: np.ndarray, single: bool) -> np.ndarray:
        """Apply the exact-control shortcut and restore the query's shape."""
        hit = self.weights.singular
        if hit.any():
            out[hit] = self.q[self.weights.coincident[hit]]
        return out[0] if single else out

def local_frame(controls_src, controls_dst, query, alpha: float):
    p, q = check_controls(controls_src, controls_dst)
    v = as_points(query)
    single = v.ndim == 1
    v = np.atleast_2d(v)
    if v.ndim != 2:
        raise ValueError(f"query must be a point or an (N,2) batch, got shape {v.shape}")
    weights = inverse_distance_weights(p, v, alpha)
    p_star, q_star = weighted_centroids(weights, p, q)
    frame = LocalFrame(v=v, q=q, weights=weights, p_star=p_star, q_star=q_star,
                       p_hat=p[None,:,:] - p_star[:,None,:], q_hat=q[None,:,:] - q_star[:,None,:])
    return frame, single
