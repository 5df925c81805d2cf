"""
Metrics Module

Includes:
- Gaze behaviour summary metrics (dwell time, saccade length, refixations, ...)
- Area-of-interest regions and classifier
"""

from gazemetrics.metrics.gaze_metrics import (
    GazeMetricsSummary,
    MetricsAggregator
)

from gazemetrics.metrics.aoi import (
    RectangularAOI,
    CircularAOI,
    AOIClassifier
)

__all__ = [
    'GazeMetricsSummary',
    'MetricsAggregator',
    'RectangularAOI',
    'CircularAOI',
    'AOIClassifier'
]
