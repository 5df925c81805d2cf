"""
Synthetic Gaze Session Example

Demonstrates the full pipeline without a camera:
- Calibration with simulated landmarks
- Tracking a scripted gaze path (fixations and saccades)
- AOI-based metrics
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np

from gazemetrics import constants as const
from gazemetrics.data_acquisition import Landmark
from gazemetrics.gaze_tracker import Calibrator
from gazemetrics.metrics import AOIClassifier, RectangularAOI
from gazemetrics.pipeline import GazePipeline
from gazemetrics.utils.logger import setup_logger


SCREEN_W, SCREEN_H = 1920, 1080
FRAME_MS = 33


def synthetic_landmarks(screen_x, screen_y, rng, noise=0.002):
    """Landmark list whose irises point (with a fixed bias) at a screen location"""
    landmarks = [Landmark(0.5, 0.5, 0.0) for _ in range(478)]

    # Simulated detector bias the calibration should learn
    nx = screen_x / SCREEN_W - 0.02 + rng.normal(0, noise)
    ny = screen_y / SCREEN_H - 0.03 + rng.normal(0, noise)

    landmarks[const.LEFT_EYE_OUTER_CORNER] = Landmark(nx - 0.05, ny)
    landmarks[const.LEFT_EYE_INNER_CORNER] = Landmark(nx + 0.05, ny)
    landmarks[const.RIGHT_EYE_OUTER_CORNER] = Landmark(nx + 0.05, ny)
    landmarks[const.RIGHT_EYE_INNER_CORNER] = Landmark(nx - 0.05, ny)
    landmarks[const.LEFT_IRIS_CENTER] = Landmark(nx, ny)
    landmarks[const.RIGHT_IRIS_CENTER] = Landmark(nx, ny)
    return landmarks


def main():
    """Synthetic session example"""

    print("=" * 60)
    print("Synthetic Gaze Session Example")
    print("=" * 60)

    rng = np.random.default_rng(7)
    aois = AOIClassifier([
        RectangularAOI('header', 0, 0, SCREEN_W, 200),
        RectangularAOI('content', 400, 300, 1100, 600),
    ])

    # Initialize pipeline
    print("\n1. Initializing pipeline...")
    setup_logger(log_level="INFO")
    # Linear model: the offset baseline adds screen offsets to normalized iris coordinates
    calibrator = Calibrator(SCREEN_W, SCREEN_H, samples_per_point=10, model_type="linear")
    pipeline = GazePipeline(SCREEN_W, SCREEN_H, calibrator=calibrator, aoi_classifier=aois)
    print(f"   ✓ Screen {pipeline.screen_width}x{pipeline.screen_height}, "
          f"{len(pipeline.calibrator.targets)} calibration targets")

    # Calibrate
    print("\n2. Calibrating...")
    pipeline.start_calibration()
    t = 0
    while pipeline.is_calibrating:
        tx, ty = pipeline.current_calibration_target
        pipeline.process_frame(synthetic_landmarks(tx, ty, rng), t)
        t += FRAME_MS

    print(f"   ✓ Status: {pipeline.calibration_status.value}")
    print(f"   ✓ Model: {pipeline.calibrator.model}")

    # Track
    print("\n3. Tracking scripted gaze path...")
    path = [(960, 100), (700, 500), (1200, 600), (960, 100), (1800, 1000), (800, 450)]
    for x, y in path:
        for _ in range(12):
            pipeline.process_frame(synthetic_landmarks(x, y, rng), t)
            t += FRAME_MS

    metrics = pipeline.get_metrics()
    print("   ✓ Done")

    # Report
    print("\n4. Metrics:")
    for name, value in metrics.to_dict().items():
        print(f"      {name}: {value:.3f}" if isinstance(value, float) else f"      {name}: {value}")

    print("\n" + "=" * 60)
    print("Synthetic session example completed!")
    print("=" * 60)


if __name__ == '__main__':
    main()
