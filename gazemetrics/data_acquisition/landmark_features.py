"""
Eye Landmark Feature Extraction

Turns a per-frame facial landmark list (MediaPipe Face Mesh topology with
iris refinement) into a fixed-length eye feature vector, and provides a
raw iris-based gaze estimate in screen coordinates.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from gazemetrics import constants as const


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Landmark:
    """A single detector landmark in normalized coordinates"""
    x: float
    y: float
    z: float = 0.0


@dataclass(frozen=True)
class EyeLandmarkIndices:
    """Positions of the eye landmarks inside a detector landmark list"""
    left_outer: int = const.LEFT_EYE_OUTER_CORNER
    left_inner: int = const.LEFT_EYE_INNER_CORNER
    right_outer: int = const.RIGHT_EYE_OUTER_CORNER
    right_inner: int = const.RIGHT_EYE_INNER_CORNER
    left_iris: int = const.LEFT_IRIS_CENTER
    right_iris: int = const.RIGHT_IRIS_CENTER


DEFAULT_INDICES = EyeLandmarkIndices()


def _landmark_xy(landmarks: Sequence[Any], index: int) -> Optional[Tuple[float, float]]:
    """
    Read the (x, y) of one landmark, tolerating missing entries.

    Accepts objects exposing .x/.y (Landmark, MediaPipe NormalizedLandmark)
    as well as plain (x, y[, z]) sequences.
    """
    if landmarks is None or index < 0 or index >= len(landmarks):
        return None

    lm = landmarks[index]
    if lm is None:
        return None

    if hasattr(lm, 'x') and hasattr(lm, 'y'):
        return float(lm.x), float(lm.y)
    return float(lm[0]), float(lm[1])


def extract_features(
    landmarks: Sequence[Any],
    indices: EyeLandmarkIndices = DEFAULT_INDICES
) -> np.ndarray:
    """
    Extract the eye feature vector from a landmark list.

    Layout (FEATURE_LENGTH = 10):
        0-1: left iris offset from left outer corner (x, y)
        2-3: right iris offset from right outer corner (x, y)
        4:   left eye width (outer to inner corner)
        5:   right eye width
        6-7: left iris center (x, y)
        8-9: right iris center (x, y)

    Args:
        landmarks: Ordered landmark list for one face
        indices: Landmark positions to read

    Returns:
        Feature vector, all zeros if any required landmark is missing
    """
    left_outer = _landmark_xy(landmarks, indices.left_outer)
    left_inner = _landmark_xy(landmarks, indices.left_inner)
    right_outer = _landmark_xy(landmarks, indices.right_outer)
    right_inner = _landmark_xy(landmarks, indices.right_inner)
    left_iris = _landmark_xy(landmarks, indices.left_iris)
    right_iris = _landmark_xy(landmarks, indices.right_iris)

    required = (left_outer, left_inner, right_outer, right_inner, left_iris, right_iris)
    if any(point is None for point in required):
        logger.debug("Missing eye landmarks, returning zero feature vector")
        return np.zeros(const.FEATURE_LENGTH, dtype=float)

    left_width = math.hypot(left_inner[0] - left_outer[0], left_inner[1] - left_outer[1])
    right_width = math.hypot(right_inner[0] - right_outer[0], right_inner[1] - right_outer[1])

    return np.array([
        left_iris[0] - left_outer[0],
        left_iris[1] - left_outer[1],
        right_iris[0] - right_outer[0],
        right_iris[1] - right_outer[1],
        left_width,
        right_width,
        left_iris[0],
        left_iris[1],
        right_iris[0],
        right_iris[1],
    ], dtype=float)


def estimate_raw_gaze(
    landmarks: Sequence[Any],
    screen_width: float,
    screen_height: float,
    indices: EyeLandmarkIndices = DEFAULT_INDICES
) -> Optional[Tuple[float, float]]:
    """
    Uncalibrated gaze estimate: mean iris center scaled to the screen.

    Assumes landmarks are normalized to 0-1 and the camera frame is
    roughly proportional to the screen.

    Returns:
        (x, y) in screen units, or None if an iris landmark is missing
    """
    left_iris = _landmark_xy(landmarks, indices.left_iris)
    right_iris = _landmark_xy(landmarks, indices.right_iris)

    if left_iris is None or right_iris is None:
        logger.debug("Iris landmarks not found, cannot estimate gaze")
        return None

    raw_x = (left_iris[0] + right_iris[0]) / 2.0
    raw_y = (left_iris[1] + right_iris[1]) / 2.0
    return raw_x * screen_width, raw_y * screen_height
