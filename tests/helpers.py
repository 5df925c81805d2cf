"""
Synthetic MediaPipe-style landmark lists for tests
"""

from gazemetrics import constants as const
from gazemetrics.data_acquisition.landmark_features import Landmark


NUM_LANDMARKS = 478


def make_landmarks(
    left_iris=(0.40, 0.45),
    right_iris=(0.60, 0.45),
    left_outer=(0.35, 0.45),
    left_inner=(0.45, 0.45),
    right_outer=(0.65, 0.45),
    right_inner=(0.55, 0.45)
):
    """Build a full landmark list with the eye landmarks placed as given"""
    landmarks = [Landmark(0.5, 0.5, 0.0) for _ in range(NUM_LANDMARKS)]
    landmarks[const.LEFT_EYE_OUTER_CORNER] = Landmark(*left_outer)
    landmarks[const.LEFT_EYE_INNER_CORNER] = Landmark(*left_inner)
    landmarks[const.RIGHT_EYE_OUTER_CORNER] = Landmark(*right_outer)
    landmarks[const.RIGHT_EYE_INNER_CORNER] = Landmark(*right_inner)
    landmarks[const.LEFT_IRIS_CENTER] = Landmark(*left_iris)
    landmarks[const.RIGHT_IRIS_CENTER] = Landmark(*right_iris)
    return landmarks
