from __future__ import annotations
import logging
import numpy as np
from ._common import local_frame
from .weights import DEFAULT_ALPHA

logger = logging.getLogger(__name__)

# |det| below this fraction of trace^2 counts as a singular moment matrix
SINGULAR_RTOL = 1e-10

def deform_affine(controls_src, controls_dst, query, alpha: float=DEFAULT_ALPHA) -> np.ndarray:
    """
    Move `query` (a point or an (N,2) batch) with the weighted least-squares affine map
    sending `controls_src` onto `controls_dst`.

    The linear part is M = (sum w p^T p)^-1 (sum w p^T q) over centered controls and the
    result is (v - p*) M + q*. When the moment matrix is singular (controls without 2D
    spread around the query, e.g. collinear or a single point) the map reduces to the
    translation v - p* + q*.
    """
    f, single = local_frame(controls_src, controls_dst, query, alpha)
    a = np.einsum("nc,nci,ncj->nij", f.w, f.p_hat, f.p_hat)
    b = np.einsum("nc,nci,ncj->nij", f.w, f.p_hat, f.q_hat)

    det = a[:,0,0]*a[:,1,1] - a[:,0,1]*a[:,1,0]
    trace = a[:,0,0] + a[:,1,1]
    ok = np.abs(det) > SINGULAR_RTOL * trace**2
    if not ok.all():
        logger.debug("affine: %d of %d queries fall back to translation", int((~ok).sum()), len(ok))

    safe_det = np.where(ok, det, 1.0)
    inv = np.stack([np.stack([a[:,1,1], -a[:,0,1]], -1),
                    np.stack([-a[:,1,0], a[:,0,0]], -1)], -2) / safe_det[:,None,None]
    m = np.where(ok[:,None,None], inv @ b, np.eye(2))

    out = np.einsum("ni,nij->nj", f.v - f.p_star, m) + f.q_star
    return f.finish(out, single)
