"""
Gaze Tracking Module

Calibration of landmark features to screen coordinates and online
fixation/saccade event detection on the resulting gaze stream.
"""

from .events import GazePoint, FixationEvent, SaccadeEvent
from .calibration_models import (
    CalibrationSample,
    CalibrationStatus,
    OffsetModel,
    LinearFeatureModel
)
from .calibrator import Calibrator
from .event_detector import FixationSaccadeSegmenter

__all__ = [
    'GazePoint',
    'FixationEvent',
    'SaccadeEvent',
    'CalibrationSample',
    'CalibrationStatus',
    'OffsetModel',
    'LinearFeatureModel',
    'Calibrator',
    'FixationSaccadeSegmenter',
]
