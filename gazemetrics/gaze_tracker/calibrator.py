"""
Gaze Calibrator

Learns a mapping from eye landmark features to screen coordinates using a
grid of calibration targets the user fixates one after another.

State machine:
    IdleState(model=None) -> CalibratingState(index, count) -> IdleState(model)

Provides:
- Calibration target grid generation
- Sample collection with automatic and operator-forced target advance
- Model fitting (offset baseline or linear drop-in)
- Clamped gaze prediction
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from gazemetrics import constants as const
from gazemetrics.data_acquisition.landmark_features import extract_features
from gazemetrics.gaze_tracker.calibration_models import (
    MODEL_TYPES,
    CalibratingState,
    CalibrationSample,
    CalibrationStatus,
    CalibratorState,
    IdleState,
    PredictiveModel,
)


Point = Tuple[float, float]


class Calibrator:
    """
    Collects calibration samples and predicts gaze from landmarks

    Screen dimensions are passed explicitly; predictions are clamped to
    [0, screen_width] x [0, screen_height].
    """

    def __init__(
        self,
        screen_width: float,
        screen_height: float,
        samples_per_point: int = const.DEFAULT_SAMPLES_PER_POINT,
        grid_rows: int = const.DEFAULT_GRID_ROWS,
        grid_cols: int = const.DEFAULT_GRID_COLS,
        model_type: str = const.DEFAULT_MODEL_TYPE
    ):
        """
        Initialize calibrator

        Args:
            screen_width: Screen width in screen units
            screen_height: Screen height in screen units
            samples_per_point: Samples collected before advancing to the next target
            grid_rows: Number of target rows
            grid_cols: Number of target columns
            model_type: 'offset' (mean translation) or 'linear' (least squares)
        """
        if screen_width <= 0 or screen_height <= 0:
            raise ValueError(f"Screen size must be positive, got {screen_width}x{screen_height}")
        if grid_rows <= 0 or grid_cols <= 0:
            raise ValueError(f"Grid must have at least one row and column, got {grid_rows}x{grid_cols}")
        if samples_per_point <= 0:
            raise ValueError(f"samples_per_point must be positive, got {samples_per_point}")
        if model_type not in MODEL_TYPES:
            raise ValueError(f"Unknown model type: {model_type}")

        self.screen_width = screen_width
        self.screen_height = screen_height
        self.samples_per_point = samples_per_point
        self.grid_rows = grid_rows
        self.grid_cols = grid_cols
        self.model_type = model_type

        self.logger = logging.getLogger(__name__)

        self._targets: Tuple[Point, ...] = tuple(self._generate_targets())
        self._samples: List[CalibrationSample] = []
        self._state: CalibratorState = IdleState()
        self.last_status = CalibrationStatus.NOT_RUN

    def _generate_targets(self) -> List[Point]:
        """Evenly spaced row-major grid with a one-step margin on every side"""
        x_step = self.screen_width / (self.grid_cols + 1)
        y_step = self.screen_height / (self.grid_rows + 1)

        return [
            ((c + 1) * x_step, (r + 1) * y_step)
            for r in range(self.grid_rows)
            for c in range(self.grid_cols)
        ]

    # ------------------------------------------------------------------
    # State inspection
    # ------------------------------------------------------------------
    @property
    def state(self) -> CalibratorState:
        return self._state

    @property
    def is_calibrating(self) -> bool:
        return isinstance(self._state, CalibratingState)

    @property
    def model(self) -> Optional[PredictiveModel]:
        if isinstance(self._state, IdleState):
            return self._state.model
        return None

    @property
    def is_trained(self) -> bool:
        return self.model is not None

    @property
    def targets(self) -> Tuple[Point, ...]:
        return self._targets

    @property
    def samples(self) -> Tuple[CalibrationSample, ...]:
        return tuple(self._samples)

    # ------------------------------------------------------------------
    # Calibration control
    # ------------------------------------------------------------------
    def start_calibration(self):
        """Begin (or restart) a calibration run from the first target"""
        self._samples.clear()
        self._state = CalibratingState()
        self.last_status = CalibrationStatus.NOT_RUN
        self.logger.info(f"Starting calibration with {len(self._targets)} targets")

    def add_gaze_sample(self, landmarks: Sequence[Any], observed_gaze: Point):
        """
        Record one sample for the current target

        Args:
            landmarks: Detector landmark list for the frame
            observed_gaze: Raw (uncalibrated) gaze point in screen units
        """
        state = self._state
        if not isinstance(state, CalibratingState):
            return
        if state.target_index >= len(self._targets):
            return

        target = self._targets[state.target_index]
        self._samples.append(CalibrationSample(
            features=extract_features(landmarks),
            observed_gaze=(float(observed_gaze[0]), float(observed_gaze[1])),
            target=target
        ))

        count = state.samples_at_target + 1
        if count >= self.samples_per_point:
            self._advance(state.target_index + 1)
        else:
            self._state = CalibratingState(state.target_index, count)

    def move_to_next_calibration_point(self):
        """Skip to the next target regardless of collected samples"""
        state = self._state
        if not isinstance(state, CalibratingState):
            return
        if state.target_index >= len(self._targets):
            return

        self._advance(state.target_index + 1)

    def _advance(self, next_index: int):
        if next_index >= len(self._targets):
            self.finish_calibration()
        else:
            self._state = CalibratingState(next_index, 0)

    def finish_calibration(self) -> CalibrationStatus:
        """
        End the run and fit the model over all collected samples

        Returns:
            CalibrationStatus.TRAINED, or EMPTY_TRAINING_SET when no samples
            were collected (the model is left absent)
        """
        self.logger.info(f"Finishing calibration with {len(self._samples)} samples")

        if not self._samples:
            self.logger.warning("No gaze samples collected for training")
            self._state = IdleState(model=None)
            self.last_status = CalibrationStatus.EMPTY_TRAINING_SET
            return self.last_status

        model = MODEL_TYPES[self.model_type].fit(self._samples)
        self._state = IdleState(model=model)
        self.last_status = CalibrationStatus.TRAINED
        self.logger.info(f"Calibration model trained: {model}")
        return self.last_status

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------
    def predict(self, landmarks: Sequence[Any]) -> Optional[Point]:
        """
        Predict the on-screen gaze point for a landmark list

        Returns:
            Clamped (x, y), or None if no model has been fitted
        """
        if self.model is None:
            self.logger.debug("Calibration model not trained, cannot predict gaze")
            return None

        return self.predict_from_features(extract_features(landmarks))

    def predict_from_features(self, features: np.ndarray) -> Optional[Point]:
        model = self.model
        if model is None:
            return None

        x, y = model.predict(features)
        x = float(max(0.0, min(self.screen_width, x)))
        y = float(max(0.0, min(self.screen_height, y)))
        return x, y

    def get_current_calibration_point(self) -> Optional[Point]:
        """Target the user should look at, or None when not calibrating"""
        state = self._state
        if isinstance(state, CalibratingState) and state.target_index < len(self._targets):
            return self._targets[state.target_index]
        return None

    def get_calibration_progress(self) -> float:
        """Fraction of required samples collected; 1.0 when not calibrating"""
        state = self._state
        if not isinstance(state, CalibratingState):
            return 1.0

        total = len(self._targets) * self.samples_per_point
        collected = state.target_index * self.samples_per_point + state.samples_at_target
        return collected / total
