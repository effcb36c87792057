from __future__ import annotations
import cv2, numpy as np
from pathlib import Path
from typing import Iterable, Tuple

def read_image(path: str|Path) -> np.ndarray:
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise FileNotFoundError(f"Cannot read image {path}")
    return img

def write_image(path: str|Path, img: np.ndarray):
    if not cv2.imwrite(str(path), img):
        raise RuntimeError(f"Cannot write image {path}")

def draw_controls(img: np.ndarray, points: Iterable[Tuple[float,float]], radius: float=4.0,
                  color: Tuple[int,int,int]=(0,0,255)) -> np.ndarray:
    """Return a copy of `img` with an anti-aliased disc on every point (BGR color)."""
    dbg = img.copy()
    if dbg.ndim == 2:
        dbg = cv2.cvtColor(dbg, cv2.COLOR_GRAY2BGR)
    # sub-pixel centers via fixed-point shift
    shift = 4; s = 1 << shift
    for x,y in points:
        cv2.circle(dbg, (int(round(x*s)), int(round(y*s))), int(round(radius*s)), color, -1, cv2.LINE_AA, shift)
    return dbg
