"""
gazemetrics - gaze estimation and gaze behaviour metrics from facial landmarks

Calibrates eye landmark features to screen coordinates and segments the
resulting gaze stream into fixations and saccades.
"""

from gazemetrics.data_acquisition import Landmark, extract_features, estimate_raw_gaze
from gazemetrics.gaze_tracker import (
    Calibrator,
    CalibrationStatus,
    FixationSaccadeSegmenter,
    FixationEvent,
    SaccadeEvent
)
from gazemetrics.metrics import (
    GazeMetricsSummary,
    MetricsAggregator,
    RectangularAOI,
    CircularAOI,
    AOIClassifier
)
from gazemetrics.pipeline import GazePipeline, FrameResult

__all__ = [
    'Landmark',
    'extract_features',
    'estimate_raw_gaze',
    'Calibrator',
    'CalibrationStatus',
    'FixationSaccadeSegmenter',
    'FixationEvent',
    'SaccadeEvent',
    'GazeMetricsSummary',
    'MetricsAggregator',
    'RectangularAOI',
    'CircularAOI',
    'AOIClassifier',
    'GazePipeline',
    'FrameResult',
]

__version__ = '1.0.0'
