from __future__ import annotations
import cv2, numpy as np

_INTERP = {"bilinear": cv2.INTER_LINEAR, "nearest": cv2.INTER_NEAREST}
_BORDER = {"clamp": cv2.BORDER_REPLICATE, "fill": cv2.BORDER_CONSTANT}

_DTYPES = (np.uint8, np.uint16, np.int16, np.float32, np.float64)

def check_image(image: np.ndarray) -> np.ndarray:
    """Validate a source image: a non-empty HxW or HxWxC array of a dtype cv2.remap accepts."""
    img = np.asarray(image)
    if img.dtype.type not in _DTYPES:
        raise ValueError(f"unsupported pixel type {img.dtype}")
    if img.ndim not in (2, 3) or img.shape[0] == 0 or img.shape[1] == 0:
        raise ValueError(f"expected a non-empty HxW or HxWxC image, got shape {img.shape}")
    return img

def sample(image: np.ndarray, map_x: np.ndarray, map_y: np.ndarray, border: str="clamp",
           fill_value: float=0.0, interpolation: str="bilinear") -> np.ndarray:
    """
    Read `image` at the float coordinates (map_x, map_y); output has the maps' shape
    (plus the image channels). Samples outside the image follow `border`.
    """
    if border not in _BORDER:
        raise ValueError(f"unknown border policy {border!r}")
    if interpolation not in _INTERP:
        raise ValueError(f"unknown interpolation {interpolation!r}")
    image = np.ascontiguousarray(image)
    channels = 1 if image.ndim == 2 else image.shape[2]
    map_x = np.ascontiguousarray(map_x, dtype=np.float32); map_y = np.ascontiguousarray(map_y, dtype=np.float32)
    out = cv2.remap(image, map_x, map_y,
                    _INTERP[interpolation], borderMode=_BORDER[border],
                    borderValue=(float(fill_value),)*min(4, channels))
    # remap drops a trailing singleton channel
    if image.ndim == 3 and out.ndim == 2:
        out = out[..., None]
    return out
