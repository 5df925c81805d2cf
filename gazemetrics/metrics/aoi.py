"""
Areas of Interest

AOIs are caller-defined screen regions. The metrics aggregator only needs a
classifier: any callable mapping a point to an AOI id (or None when the point
lies outside every AOI). AOIClassifier builds one from a list of regions.
"""

from dataclasses import dataclass
from typing import Callable, Hashable, Iterable, Optional, Tuple, Union


Point = Tuple[float, float]
AOIClassifierFn = Callable[[Point], Optional[Hashable]]


@dataclass(frozen=True)
class RectangularAOI:
    """Axis-aligned rectangle, edges inclusive"""
    aoi_id: Hashable
    x: float
    y: float
    width: float
    height: float

    def contains(self, point: Point) -> bool:
        px, py = point
        return (self.x <= px <= self.x + self.width and
                self.y <= py <= self.y + self.height)


@dataclass(frozen=True)
class CircularAOI:
    """Circle around a center point, boundary inclusive"""
    aoi_id: Hashable
    center_x: float
    center_y: float
    radius: float

    def contains(self, point: Point) -> bool:
        dx = point[0] - self.center_x
        dy = point[1] - self.center_y
        return dx * dx + dy * dy <= self.radius * self.radius


AreaOfInterest = Union[RectangularAOI, CircularAOI]


class AOIClassifier:
    """Maps a point to the id of the first AOI containing it"""

    def __init__(self, aois: Iterable[AreaOfInterest]):
        self.aois = list(aois)

        ids = [aoi.aoi_id for aoi in self.aois]
        if len(ids) != len(set(ids)):
            raise ValueError("AOI ids must be unique")

    def __call__(self, point: Point) -> Optional[Hashable]:
        for aoi in self.aois:
            if aoi.contains(point):
                return aoi.aoi_id
        return None
