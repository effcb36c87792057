from __future__ import annotations
from pathlib import Path
from typing import Literal, Optional
import yaml
from pydantic import BaseModel, Field
from .deform.weights import DEFAULT_ALPHA

class WarpConfig(BaseModel):
    """
    Tunables of the image warp.

    alpha:       weight exponent, w_i = 1/|p_i - v|^(2*alpha)
    border:      "clamp" replicates the edge pixel for samples outside the source image,
                 "fill" writes `fill_value` there
    parallel:    split the output rows over a thread pool
    band_budget: upper bound on pixels*controls per band, caps the temporary arrays
    """
    alpha: float = Field(DEFAULT_ALPHA, gt=0)
    border: Literal["clamp","fill"] = "clamp"
    fill_value: float = 0.0
    interpolation: Literal["bilinear","nearest"] = "bilinear"
    parallel: bool = False
    workers: Optional[int] = Field(None, ge=1)
    band_budget: int = Field(2**21, ge=1)

def load_config(path: str|Path|None) -> WarpConfig:
    if path is None:
        return WarpConfig()
    if not Path(path).exists():
        raise FileNotFoundError(f"Cannot read config {path}")
    with open(path,"r") as f: cfg = yaml.safe_load(f) or {}
    return WarpConfig(**cfg)
