"""
Gaze Pipeline

Per-frame orchestration: landmarks -> features -> calibration or
prediction -> fixation/saccade segmentation -> metrics.

Frames must be delivered one at a time in timestamp order; the pipeline
holds no queue and performs no locking.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple

from gazemetrics import constants as const
from gazemetrics.data_acquisition.landmark_features import estimate_raw_gaze
from gazemetrics.gaze_tracker.calibration_models import CalibrationStatus
from gazemetrics.gaze_tracker.calibrator import Calibrator
from gazemetrics.gaze_tracker.event_detector import FixationSaccadeSegmenter
from gazemetrics.metrics.aoi import AOIClassifierFn
from gazemetrics.metrics.gaze_metrics import GazeMetricsSummary, MetricsAggregator
from gazemetrics.utils.config_loader import get_section, load_config
from gazemetrics.utils.logger import setup_logger_from_config


Point = Tuple[float, float]


@dataclass(frozen=True)
class FrameResult:
    """Pipeline output for one processed frame"""
    gaze: Point
    is_calibrating: bool
    current_calibration_target: Optional[Point]
    calibration_progress: float
    metrics: GazeMetricsSummary = field(default_factory=GazeMetricsSummary)

    def to_dict(self) -> Dict[str, Any]:
        target = self.current_calibration_target
        return {
            'gaze': list(self.gaze),
            'isCalibrating': self.is_calibrating,
            'currentCalibrationTarget': list(target) if target is not None else None,
            'calibrationProgress': self.calibration_progress,
            'metrics': self.metrics.to_dict()
        }


class GazePipeline:
    """
    Wires the calibrator and segmenter together for a landmark stream

    While calibrating, the raw iris gaze of each frame is recorded as a
    calibration sample and reported as-is. Otherwise the calibrated
    prediction (or the raw gaze when no model exists) is reported and fed
    to the segmenter.
    """

    def __init__(
        self,
        screen_width: float,
        screen_height: float,
        calibrator: Optional[Calibrator] = None,
        segmenter: Optional[FixationSaccadeSegmenter] = None,
        aoi_classifier: Optional[AOIClassifierFn] = None
    ):
        """
        Initialize pipeline

        Args:
            screen_width: Screen width in screen units
            screen_height: Screen height in screen units
            calibrator: Calibrator for the same screen size (default: built from it)
            segmenter: Segmenter instance (default thresholds if None)
            aoi_classifier: Optional AOI classifier for AOI-based metrics
        """
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.calibrator = calibrator or Calibrator(screen_width, screen_height)
        if (self.calibrator.screen_width, self.calibrator.screen_height) != (screen_width, screen_height):
            raise ValueError(
                f"Calibrator screen {self.calibrator.screen_width}x{self.calibrator.screen_height} "
                f"does not match pipeline screen {screen_width}x{screen_height}"
            )
        self.segmenter = segmenter or FixationSaccadeSegmenter(
            aggregator=MetricsAggregator(aoi_classifier)
        )
        if segmenter is not None and aoi_classifier is not None:
            self.segmenter.aggregator = MetricsAggregator(aoi_classifier)

        self.logger = logging.getLogger(__name__)
        self.gaze: Point = (screen_width / 2.0, screen_height / 2.0)

    @classmethod
    def from_config(
        cls,
        config_path: str = "config/config.yaml",
        aoi_classifier: Optional[AOIClassifierFn] = None,
        configure_logging: bool = True
    ) -> 'GazePipeline':
        """
        Build a pipeline from a YAML configuration file

        A missing file falls back to built-in defaults.
        """
        try:
            config = load_config(config_path)
        except FileNotFoundError:
            logging.getLogger(__name__).warning(
                f"Config file not found at {config_path}, using defaults"
            )
            config = {}

        if configure_logging:
            setup_logger_from_config(get_section(config, 'logging'))

        screen = get_section(config, 'screen')
        calibration = get_section(config, 'calibration')
        segmentation = get_section(config, 'segmentation')

        screen_width = screen.get('width', const.DEFAULT_SCREEN_WIDTH)
        screen_height = screen.get('height', const.DEFAULT_SCREEN_HEIGHT)

        calibrator = Calibrator(
            screen_width,
            screen_height,
            samples_per_point=calibration.get('samples_per_point', const.DEFAULT_SAMPLES_PER_POINT),
            grid_rows=calibration.get('grid_rows', const.DEFAULT_GRID_ROWS),
            grid_cols=calibration.get('grid_cols', const.DEFAULT_GRID_COLS),
            model_type=calibration.get('model_type', const.DEFAULT_MODEL_TYPE)
        )
        segmenter = FixationSaccadeSegmenter(
            fixation_radius=segmentation.get('fixation_radius', const.DEFAULT_FIXATION_RADIUS),
            fixation_duration_threshold=segmentation.get(
                'fixation_duration_threshold', const.DEFAULT_FIXATION_DURATION_THRESHOLD
            ),
            saccade_threshold=segmentation.get('saccade_threshold', const.DEFAULT_SACCADE_THRESHOLD),
            max_events=segmentation.get('max_events'),
            aggregator=MetricsAggregator(aoi_classifier)
        )

        return cls(screen_width, screen_height, calibrator=calibrator, segmenter=segmenter)

    # ------------------------------------------------------------------
    # Calibration control
    # ------------------------------------------------------------------
    @property
    def is_calibrating(self) -> bool:
        return self.calibrator.is_calibrating

    @property
    def current_calibration_target(self) -> Optional[Point]:
        return self.calibrator.get_current_calibration_point()

    @property
    def calibration_progress(self) -> float:
        return self.calibrator.get_calibration_progress()

    @property
    def calibration_status(self) -> CalibrationStatus:
        return self.calibrator.last_status

    def start_calibration(self):
        """Restart calibration and clear the gaze event history"""
        self.calibrator.start_calibration()
        self.segmenter.reset()

    def move_to_next_calibration_point(self):
        self.calibrator.move_to_next_calibration_point()

    # ------------------------------------------------------------------
    # Frame processing
    # ------------------------------------------------------------------
    def process_frame(
        self,
        landmarks: Optional[Sequence[Any]],
        timestamp: float
    ) -> Optional[FrameResult]:
        """
        Process one detector frame

        Args:
            landmarks: Landmark list for the tracked face (None/empty if no face)
            timestamp: Frame time, non-decreasing across calls

        Returns:
            FrameResult, or None when no gaze could be estimated for the frame
        """
        if landmarks is None or len(landmarks) == 0:
            return None

        raw_gaze = estimate_raw_gaze(landmarks, self.screen_width, self.screen_height)
        if raw_gaze is None:
            return None

        if self.calibrator.is_calibrating:
            self.calibrator.add_gaze_sample(landmarks, raw_gaze)
            self.gaze = raw_gaze
        else:
            predicted = self.calibrator.predict(landmarks)
            self.gaze = predicted if predicted is not None else raw_gaze
            self.segmenter.process_gaze(self.gaze, timestamp)

        return FrameResult(
            gaze=self.gaze,
            is_calibrating=self.calibrator.is_calibrating,
            current_calibration_target=self.current_calibration_target,
            calibration_progress=self.calibration_progress,
            metrics=self.segmenter.peek_metrics()
        )

    def get_metrics(self) -> GazeMetricsSummary:
        """Finalize any open fixation and return the session metrics"""
        return self.segmenter.get_metrics()

    def reset(self):
        """Clear gaze events and the reported gaze; calibration is kept"""
        self.segmenter.reset()
        self.gaze = (self.screen_width / 2.0, self.screen_height / 2.0)
