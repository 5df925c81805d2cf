"""
Gaze stream value types: samples, fixations and saccades.
"""

from dataclasses import dataclass
from typing import Tuple


Point = Tuple[float, float]


@dataclass(frozen=True)
class GazePoint:
    """Represents a single predicted gaze sample"""
    position: Point
    timestamp: float


@dataclass(frozen=True)
class FixationEvent:
    """Represents a finalized fixation"""
    position: Point
    start_time: float
    end_time: float

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class SaccadeEvent:
    """Represents a saccade between two consecutive gaze samples"""
    start: Point
    end: Point
    distance: float
    start_time: float
    end_time: float

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time
