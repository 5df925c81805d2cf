"""
Calibration data types and predictive models.

Two models share the same predict(features) -> (x, y) contract:

- OffsetModel: constant 2-D translation between the raw observed gaze and
  the calibration target, applied to the left iris center. This is the
  baseline model.
- LinearFeatureModel: least-squares linear map from the full feature vector
  to screen coordinates, per axis.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from gazemetrics import constants as const


Point = Tuple[float, float]


@dataclass(frozen=True)
class CalibrationSample:
    """One processed frame collected while looking at a calibration target"""
    features: np.ndarray
    observed_gaze: Point
    target: Point


class CalibrationStatus(Enum):
    """Outcome of the last finish_calibration() call"""
    NOT_RUN = "not_run"
    TRAINED = "trained"
    EMPTY_TRAINING_SET = "empty_training_set"


@dataclass(frozen=True)
class CalibratingState:
    """Calibration run in progress at a target"""
    target_index: int = 0
    samples_at_target: int = 0


@dataclass(frozen=True)
class IdleState:
    """Not calibrating; holds the fitted model if any"""
    model: Optional['PredictiveModel'] = None


CalibratorState = Union[CalibratingState, IdleState]


def _check_feature_lengths(samples: Sequence[CalibrationSample]) -> int:
    lengths = {len(s.features) for s in samples}
    if len(lengths) != 1:
        raise ValueError(f"Feature vectors have mismatched lengths: {sorted(lengths)}")
    return lengths.pop()


@dataclass(frozen=True)
class OffsetModel:
    """Mean (target - observed) offset added to a base feature pair"""
    offset_x: float
    offset_y: float
    base_x_index: int = const.BASE_FEATURE_X
    base_y_index: int = const.BASE_FEATURE_Y

    @classmethod
    def fit(cls, samples: Sequence[CalibrationSample]) -> 'OffsetModel':
        _check_feature_lengths(samples)

        targets = np.array([s.target for s in samples], dtype=float)
        observed = np.array([s.observed_gaze for s in samples], dtype=float)
        offset_x, offset_y = np.mean(targets - observed, axis=0)
        return cls(offset_x=float(offset_x), offset_y=float(offset_y))

    def predict(self, features: np.ndarray) -> Point:
        return (
            float(features[self.base_x_index]) + self.offset_x,
            float(features[self.base_y_index]) + self.offset_y
        )


@dataclass(frozen=True)
class LinearFeatureModel:
    """Per-axis linear regression: target = [features, 1] @ weights"""
    weights: np.ndarray = field(repr=False)

    @classmethod
    def fit(cls, samples: Sequence[CalibrationSample]) -> 'LinearFeatureModel':
        _check_feature_lengths(samples)

        X = np.array([s.features for s in samples], dtype=float)
        X = np.hstack([X, np.ones((X.shape[0], 1))])
        y = np.array([s.target for s in samples], dtype=float)

        weights, _, _, _ = np.linalg.lstsq(X, y, rcond=None)
        return cls(weights=weights)

    def predict(self, features: np.ndarray) -> Point:
        x = np.append(np.asarray(features, dtype=float), 1.0)
        if x.shape[0] != self.weights.shape[0]:
            raise ValueError(
                f"Expected {self.weights.shape[0] - 1} features, got {x.shape[0] - 1}"
            )
        px, py = x @ self.weights
        return float(px), float(py)


PredictiveModel = Union[OffsetModel, LinearFeatureModel]

MODEL_TYPES = {
    'offset': OffsetModel,
    'linear': LinearFeatureModel,
}
