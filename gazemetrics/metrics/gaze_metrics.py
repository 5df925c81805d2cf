"""
Gaze Behaviour Metrics

Reduces finalized fixation/saccade events into six summary metrics:
gaze duration, dwell time, mean saccade length, distractor saccades,
fixation count and refixation ratio.

AOI-dependent metrics (refixation ratio, distractor saccades) use an
injected AOI classifier. Without one they fall back to placeholder values:
refixation ratio = (n - 1) / n, distractor saccades = 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, Optional, Sequence

import numpy as np

from gazemetrics.metrics.aoi import AOIClassifierFn

if TYPE_CHECKING:
    from gazemetrics.gaze_tracker.events import FixationEvent, SaccadeEvent


@dataclass(frozen=True)
class GazeMetricsSummary:
    """Summary metrics for one gaze session"""
    gaze_duration: float = 0.0
    dwell_time: float = 0.0
    saccade_length: float = 0.0
    distractor_saccades: int = 0
    fixation_count: int = 0
    refixation_ratio: float = 0.0

    def to_dict(self) -> Dict:
        """Convert to dictionary using host application field names"""
        return {
            'gazeDuration': self.gaze_duration,
            'dwellTime': self.dwell_time,
            'saccadeLength': self.saccade_length,
            'distractorSaccades': self.distractor_saccades,
            'fixationCount': self.fixation_count,
            'refixationRatio': self.refixation_ratio
        }


class MetricsAggregator:
    """
    Computes GazeMetricsSummary from event lists

    Args:
        aoi_classifier: Optional callable mapping a point to an AOI id or None
    """

    def __init__(self, aoi_classifier: Optional[AOIClassifierFn] = None):
        self.aoi_classifier = aoi_classifier

    def aggregate(
        self,
        fixations: Sequence[FixationEvent],
        saccades: Sequence[SaccadeEvent],
        first_timestamp: Optional[float],
        last_timestamp: Optional[float],
        sample_count: int
    ) -> GazeMetricsSummary:
        """
        Reduce events into summary metrics

        Args:
            fixations: Finalized fixations in stream order
            saccades: Saccades in stream order
            first_timestamp: Timestamp of the first gaze sample
            last_timestamp: Timestamp of the latest gaze sample
            sample_count: Number of gaze samples processed

        Returns:
            GazeMetricsSummary
        """
        if sample_count >= 2 and first_timestamp is not None and last_timestamp is not None:
            gaze_duration = float(last_timestamp - first_timestamp)
        else:
            gaze_duration = 0.0

        fixation_count = len(fixations)
        dwell_time = float(sum(f.duration for f in fixations))

        if saccades:
            saccade_length = float(np.mean([s.distance for s in saccades]))
        else:
            saccade_length = 0.0

        if self.aoi_classifier is None:
            refixation_ratio = (fixation_count - 1) / fixation_count if fixation_count else 0.0
            distractor_saccades = 0
        else:
            refixation_ratio = self._refixation_ratio(fixations)
            distractor_saccades = self._count_distractor_saccades(saccades)

        return GazeMetricsSummary(
            gaze_duration=gaze_duration,
            dwell_time=dwell_time,
            saccade_length=saccade_length,
            distractor_saccades=distractor_saccades,
            fixation_count=fixation_count,
            refixation_ratio=float(refixation_ratio)
        )

    def _refixation_ratio(self, fixations: Sequence[FixationEvent]) -> float:
        """Share of fixations landing in an AOI an earlier fixation already visited"""
        if not fixations:
            return 0.0

        visited = set()
        revisits = 0
        for fixation in fixations:
            aoi_id = self.aoi_classifier(fixation.position)
            if aoi_id is None:
                continue
            if aoi_id in visited:
                revisits += 1
            visited.add(aoi_id)

        return revisits / len(fixations)

    def _count_distractor_saccades(self, saccades: Iterable[SaccadeEvent]) -> int:
        return sum(1 for s in saccades if self.aoi_classifier(s.end) is None)
