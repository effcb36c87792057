from __future__ import annotations
import logging, time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, Optional, Tuple
import numpy as np
from ..config import WarpConfig
from ..deform.kinds import Deformation
from ..geometry.controls import check_controls
from .sampling import check_image, sample

logger = logging.getLogger(__name__)

def row_bands(height: int, width: int, n_controls: int, budget: int) -> Iterator[Tuple[int,int]]:
    """Split [0, height) into contiguous (start, stop) bands of at most budget/(width*controls) rows."""
    rows = max(1, budget // max(1, width * n_controls))
    for start in range(0, height, rows):
        yield start, min(height, start + rows)

def run_bands(fill_band, bands, cfg: WarpConfig):
    """Call fill_band(start, stop) on every band, on a thread pool when cfg.parallel."""
    bands = list(bands)
    if cfg.parallel and len(bands) > 1:
        logger.debug("warping %d bands on %s threads", len(bands), cfg.workers or "default")
        with ThreadPoolExecutor(max_workers=cfg.workers) as executor:
            # list() re-raises the first worker exception here
            list(executor.map(lambda b: fill_band(*b), bands))
    else:
        for start, stop in bands:
            fill_band(start, stop)

def reverse_dense(image: np.ndarray, controls_src, controls_dst, deformation: "Deformation|str"=Deformation.RIGID,
                  config: Optional[WarpConfig]=None) -> np.ndarray:
    """
    Warp `image` so that controls_src moves onto controls_dst.

    Every output pixel (x, y) is mapped back into the source image with the inverse
    deformation (control roles swapped) and sampled there. The output has the input's
    shape and dtype.
    """
    cfg = config or WarpConfig()
    kind = Deformation.parse(deformation)
    p, q = check_controls(controls_src, controls_dst)
    img = check_image(image)
    h, w = img.shape[:2]
    out = np.empty_like(img)
    xs = np.arange(w, dtype=np.float64)

    def fill_band(start: int, stop: int):
        gx, gy = np.meshgrid(xs, np.arange(start, stop, dtype=np.float64))
        grid = np.stack([gx.ravel(), gy.ravel()], axis=-1)
        src = kind.evaluate(q, p, grid, cfg.alpha).reshape(stop - start, w, 2)
        out[start:stop] = sample(img, src[...,0], src[...,1], cfg.border, cfg.fill_value, cfg.interpolation)

    t0 = time.perf_counter()
    run_bands(fill_band, row_bands(h, w, len(p), cfg.band_budget), cfg)
    logger.info("dense %s warp of %dx%d with %d controls in %.3fs", kind.value, w, h, len(p), time.perf_counter() - t0)
    return out
