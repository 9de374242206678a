# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Image I/O Utilities
Helpers used by the ORB correspondence adapter, the match renderer
and the command-line script. The filter itself never touches pixels.
All images are BGR uint8 numpy arrays (OpenCV convention).
"""

from pathlib import Path

import cv2
import numpy as np

from gms_filter.api.middleware.error_handler import ImageLoadError


# ─── Load / Save ─────────────────────────────────────────────────────────────

def load_image_bgr(path: Path) -> np.ndarray:
    """
    Load an image from disk as a BGR uint8 numpy array.
    Raises FileNotFoundError if path does not exist.
    Raises ImageLoadError if the file cannot be decoded as an image.
    """
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")
    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None:
        raise ImageLoadError(f"Could not decode image: {path}")
    return img


def save_image(img: np.ndarray, path: Path, quality: int = 92) -> None:
    """
    Save a BGR numpy array (JPEG quality applies to .jpg output only).
    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(path), img, [cv2.IMWRITE_JPEG_QUALITY, quality])


# ─── Color Space ─────────────────────────────────────────────────────────────

def to_gray(img: np.ndarray) -> np.ndarray:
    """Single-channel view of an image; grayscale input is returned as is."""
    if img.ndim == 2:
        return img
    return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)


def to_bgr(img: np.ndarray) -> np.ndarray:
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    return img
