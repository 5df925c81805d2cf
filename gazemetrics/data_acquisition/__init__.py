"""
Data Acquisition Module
Converts detector landmark output into eye features and raw gaze estimates
"""

from gazemetrics.data_acquisition.landmark_features import (
    Landmark,
    EyeLandmarkIndices,
    extract_features,
    estimate_raw_gaze
)

__all__ = [
    'Landmark',
    'EyeLandmarkIndices',
    'extract_features',
    'estimate_raw_gaze'
]
