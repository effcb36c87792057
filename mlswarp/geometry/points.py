from __future__ import annotations
import numpy as np

# Points live on the last axis: (2,) for one point, (N,2) for a batch.

def as_points(obj) -> np.ndarray:
    pts = np.asarray(obj, dtype=np.float64)
    if pts.ndim == 0 or pts.shape[-1] != 2:
        raise ValueError(f"expected points with a trailing axis of 2, got shape {pts.shape}")
    return pts

def dot(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return a[...,0]*b[...,0] + a[...,1]*b[...,1]

def sqr_norm(a: np.ndarray) -> np.ndarray:
    return dot(a, a)

def perp(a: np.ndarray) -> np.ndarray:
    """Rotate by +90 degrees: (x, y) -> (-y, x)."""
    return np.stack([-a[...,1], a[...,0]], axis=-1)
