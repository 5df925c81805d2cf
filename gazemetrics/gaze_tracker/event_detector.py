"""
Fixation / Saccade Event Detection

Online, single-pass segmentation of a predicted gaze stream. Only the
previous sample and the single open fixation candidate are kept; history
is never re-examined.

Rules per sample:
- Distance to the previous sample > saccade_threshold: emit a saccade and
  finalize any open fixation candidate at the previous sample.
- Otherwise open a candidate if none is open. Once the candidate has lasted
  fixation_duration_threshold, each new sample either smooths its position
  (within fixation_radius) or finalizes it and opens a fresh one.

The radius check only runs after the duration threshold has been reached:
a candidate that drifts away earlier keeps its original position until then.
"""

import logging
import math
from collections import deque
from typing import Deque, Optional, Tuple

from gazemetrics import constants as const
from gazemetrics.gaze_tracker.events import FixationEvent, GazePoint, SaccadeEvent
from gazemetrics.metrics.aoi import AOIClassifierFn
from gazemetrics.metrics.gaze_metrics import GazeMetricsSummary, MetricsAggregator


Point = Tuple[float, float]


def euclidean_distance(p1: Point, p2: Point) -> float:
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


class FixationSaccadeSegmenter:
    """
    Segments a gaze stream into fixation and saccade events

    Timestamps must be non-decreasing and share one unit (milliseconds by
    default thresholds). Distances are in screen units.
    """

    def __init__(
        self,
        fixation_radius: float = const.DEFAULT_FIXATION_RADIUS,
        fixation_duration_threshold: float = const.DEFAULT_FIXATION_DURATION_THRESHOLD,
        saccade_threshold: float = const.DEFAULT_SACCADE_THRESHOLD,
        max_events: Optional[int] = None,
        aggregator: Optional[MetricsAggregator] = None
    ):
        """
        Initialize segmenter

        Args:
            fixation_radius: Max distance from the candidate position to keep a fixation
            fixation_duration_threshold: Minimum fixation duration
            saccade_threshold: Inter-sample distance above which a saccade is reported
            max_events: Bound on retained fixations/saccades (None = unbounded)
            aggregator: Metrics aggregator (default: AOI-less MetricsAggregator)
        """
        if fixation_radius <= 0 or fixation_duration_threshold <= 0 or saccade_threshold <= 0:
            raise ValueError("Segmentation thresholds must be positive")
        if max_events is not None and max_events <= 0:
            raise ValueError(f"max_events must be positive, got {max_events}")

        self.fixation_radius = fixation_radius
        self.fixation_duration_threshold = fixation_duration_threshold
        self.saccade_threshold = saccade_threshold
        self.max_events = max_events
        self.aggregator = aggregator or MetricsAggregator()

        self.logger = logging.getLogger(__name__)
        self.reset()

    def reset(self):
        """Clear all stream state and events"""
        self._fixations: Deque[FixationEvent] = deque(maxlen=self.max_events)
        self._saccades: Deque[SaccadeEvent] = deque(maxlen=self.max_events)

        self.last_point: Optional[GazePoint] = None
        self.first_timestamp: Optional[float] = None
        self.sample_count = 0

        # Open fixation candidate
        self._candidate_start: Optional[float] = None
        self._candidate_position: Optional[Point] = None

    @property
    def fixations(self) -> Tuple[FixationEvent, ...]:
        return tuple(self._fixations)

    @property
    def saccades(self) -> Tuple[SaccadeEvent, ...]:
        return tuple(self._saccades)

    @property
    def has_open_fixation(self) -> bool:
        return self._candidate_start is not None

    @property
    def open_fixation(self) -> Optional[Tuple[float, Point]]:
        """(start_time, position) of the open candidate, if any"""
        if self._candidate_start is None:
            return None
        return self._candidate_start, self._candidate_position

    def process_gaze(self, point: Point, timestamp: float) -> Optional[SaccadeEvent]:
        """
        Consume one gaze sample

        Args:
            point: Gaze position (x, y)
            timestamp: Sample time, not earlier than the previous sample

        Returns:
            SaccadeEvent if this sample completed a saccade, else None
        """
        point = (float(point[0]), float(point[1]))
        saccade = None

        if self.first_timestamp is None:
            self.first_timestamp = timestamp
        self.sample_count += 1

        previous = self.last_point
        distance = euclidean_distance(previous.position, point) if previous else 0.0

        if previous is not None and distance > self.saccade_threshold:
            saccade = SaccadeEvent(
                start=previous.position,
                end=point,
                distance=distance,
                start_time=previous.timestamp,
                end_time=timestamp
            )
            self._saccades.append(saccade)

            if self._candidate_start is not None:
                self._finalize_fixation(previous.timestamp)
        elif self._candidate_start is None:
            self._open_fixation(point, timestamp)
        elif timestamp - self._candidate_start >= self.fixation_duration_threshold:
            if euclidean_distance(self._candidate_position, point) <= self.fixation_radius:
                cx, cy = self._candidate_position
                self._candidate_position = ((cx + point[0]) / 2.0, (cy + point[1]) / 2.0)
            else:
                self._finalize_fixation(timestamp)
                self._open_fixation(point, timestamp)

        self.last_point = GazePoint(position=point, timestamp=timestamp)
        return saccade

    def _open_fixation(self, point: Point, timestamp: float):
        self._candidate_start = timestamp
        self._candidate_position = point

    def _build_fixation(self, end_time: float) -> Optional[FixationEvent]:
        if self._candidate_start is None:
            return None
        if end_time - self._candidate_start < self.fixation_duration_threshold:
            return None
        return FixationEvent(
            position=self._candidate_position,
            start_time=self._candidate_start,
            end_time=end_time
        )

    def _finalize_fixation(self, end_time: float):
        """Append the candidate if it lasted long enough, then clear it"""
        fixation = self._build_fixation(end_time)
        if fixation is not None:
            self._fixations.append(fixation)
        else:
            self.logger.debug("Discarding fixation candidate shorter than threshold")

        self._candidate_start = None
        self._candidate_position = None

    def flush(self):
        """Finalize any open candidate at the last seen sample (end of stream)"""
        if self._candidate_start is not None and self.last_point is not None:
            self._finalize_fixation(self.last_point.timestamp)

    def get_metrics(self, aoi_classifier: Optional[AOIClassifierFn] = None) -> GazeMetricsSummary:
        """
        Flush the open candidate and compute summary metrics

        Args:
            aoi_classifier: Overrides the aggregator's AOI classifier for this call
        """
        self.flush()
        return self._aggregate(list(self._fixations), aoi_classifier)

    def peek_metrics(self, aoi_classifier: Optional[AOIClassifierFn] = None) -> GazeMetricsSummary:
        """Metrics as if the stream ended now, without finalizing the open candidate"""
        fixations = list(self._fixations)
        if self.last_point is not None:
            pending = self._build_fixation(self.last_point.timestamp)
            if pending is not None:
                fixations.append(pending)
                if self.max_events is not None:
                    fixations = fixations[-self.max_events:]
        return self._aggregate(fixations, aoi_classifier)

    def _aggregate(self, fixations, aoi_classifier) -> GazeMetricsSummary:
        aggregator = self.aggregator
        if aoi_classifier is not None:
            aggregator = MetricsAggregator(aoi_classifier)

        return aggregator.aggregate(
            fixations=fixations,
            saccades=list(self._saccades),
            first_timestamp=self.first_timestamp,
            last_timestamp=self.last_point.timestamp if self.last_point else None,
            sample_count=self.sample_count
        )
