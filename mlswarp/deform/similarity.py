from __future__ import annotations
import numpy as np
from ._common import local_frame, LocalFrame
from .weights import DEFAULT_ALPHA
from ..geometry.points import dot, perp, sqr_norm

def similarity_terms(f: LocalFrame):
    """
    Return (A, B) so that the unnormalised similarity matrix is [[A, B], [-B, A]]:
    A = sum w p.q and B = sum w p_perp.q over centered controls.
    """
    a = (f.w * dot(f.p_hat, f.q_hat)).sum(axis=1)
    b = (f.w * dot(perp(f.p_hat), f.q_hat)).sum(axis=1)
    return a, b

def rotate_scale(d: np.ndarray, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Row vector d times [[a, b], [-b, a]]."""
    return np.stack([d[:,0]*a - d[:,1]*b, d[:,0]*b + d[:,1]*a], axis=-1)

def deform_similarity(controls_src, controls_dst, query, alpha: float=DEFAULT_ALPHA) -> np.ndarray:
    """
    Move `query` with the best weighted similarity (rotation, uniform scale, translation).
    No matrix is inverted: the transform is normalised by mu_s = sum w |p_hat|^2, and
    mu_s == 0 (all weight on one spot) leaves a pure translation.
    """
    f, single = local_frame(controls_src, controls_dst, query, alpha)
    a, b = similarity_terms(f)
    mu_s = (f.w * sqr_norm(f.p_hat)).sum(axis=1)
    ok = mu_s > 0
    mu = np.where(ok, mu_s, 1.0)
    a = np.where(ok, a / mu, 1.0); b = np.where(ok, b / mu, 0.0)
    out = rotate_scale(f.v - f.p_star, a, b) + f.q_star
    return f.finish(out, single)
