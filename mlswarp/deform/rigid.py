from __future__ import annotations
import logging
import numpy as np
from ._common import local_frame
from .weights import DEFAULT_ALPHA
from .similarity import similarity_terms, rotate_scale
from ..geometry.points import sqr_norm

logger = logging.getLogger(__name__)

def deform_rigid(controls_src, controls_dst, query, alpha: float=DEFAULT_ALPHA) -> np.ndarray:
    """
    Move `query` with the best weighted rigid transform (rotation and translation).

    The unnormalised similarity offset f(v) - q* is rescaled to the length |v - p*|, which
    strips the scale and keeps the rotation. Degenerate cases:
      - v == p*: returns q*
      - zero offset (no rotational information, e.g. a single control): v - p* + q*
    """
    f, single = local_frame(controls_src, controls_dst, query, alpha)
    a, b = similarity_terms(f)
    d = f.v - f.p_star
    offset = rotate_scale(d, a, b)

    d_len = np.sqrt(sqr_norm(d))
    o_len = np.sqrt(sqr_norm(offset))
    rotated = o_len > 0
    if not rotated.all():
        logger.debug("rigid: %d of %d queries without rotation, using translation", int((~rotated).sum()), len(d))
    scale = np.where(rotated, d_len / np.where(rotated, o_len, 1.0), 0.0)
    out = np.where(rotated[:,None], offset * scale[:,None], d) + f.q_star
    # d == 0 gives q* on both branches above
    return f.finish(out, single)
