"""
Tests for the gaze calibrator
"""

import numpy as np
import pytest

from gazemetrics.gaze_tracker.calibration_models import (
    CalibratingState,
    CalibrationSample,
    CalibrationStatus,
    IdleState,
    LinearFeatureModel,
    OffsetModel
)
from gazemetrics.gaze_tracker.calibrator import Calibrator
from tests.helpers import make_landmarks


W, H = 1920, 1080


def run_full_calibration(calibrator, observed_offset=(5.0, 5.0), landmarks=None):
    """Feed samples_per_point samples at every target, observed = target - offset"""
    landmarks = landmarks or make_landmarks()
    while calibrator.is_calibrating:
        tx, ty = calibrator.get_current_calibration_point()
        calibrator.add_gaze_sample(landmarks, (tx - observed_offset[0], ty - observed_offset[1]))


class TestCalibrationGrid:
    """Tests for calibration target generation"""

    def test_default_grid(self):
        """Test 5x5 grid at (c+1)*W/6, (r+1)*H/6 in row-major order"""
        calibrator = Calibrator(W, H)
        targets = calibrator.targets

        assert len(targets) == 25
        assert targets[0] == (W / 6, H / 6)
        assert targets[1] == (2 * W / 6, H / 6)
        assert targets[5] == (W / 6, 2 * H / 6)
        assert targets[-1] == (5 * W / 6, 5 * H / 6)

    @pytest.mark.parametrize("width,height,rows,cols", [
        (1920, 1080, 5, 5),
        (375, 812, 3, 4),
        (1, 1, 2, 2),
    ])
    def test_targets_strictly_inside_screen(self, width, height, rows, cols):
        """Test every target lies strictly inside the screen"""
        calibrator = Calibrator(width, height, grid_rows=rows, grid_cols=cols)
        assert len(calibrator.targets) == rows * cols
        for x, y in calibrator.targets:
            assert 0 < x < width
            assert 0 < y < height

    def test_invalid_dimensions(self):
        """Test non-positive screen or grid sizes are rejected"""
        with pytest.raises(ValueError):
            Calibrator(0, H)
        with pytest.raises(ValueError):
            Calibrator(W, H, grid_rows=0)
        with pytest.raises(ValueError):
            Calibrator(W, H, samples_per_point=0)
        with pytest.raises(ValueError):
            Calibrator(W, H, model_type="mlp")


class TestCalibrationStateMachine:
    """Tests for calibration run control"""

    def test_initial_state(self):
        """Test a new calibrator is idle without a model"""
        calibrator = Calibrator(W, H)
        assert calibrator.state == IdleState()
        assert not calibrator.is_calibrating
        assert calibrator.model is None
        assert calibrator.get_current_calibration_point() is None
        assert calibrator.get_calibration_progress() == 1.0
        assert calibrator.last_status == CalibrationStatus.NOT_RUN

    def test_start_calibration(self):
        """Test starting moves to the first target with zero progress"""
        calibrator = Calibrator(W, H)
        calibrator.start_calibration()

        assert calibrator.state == CalibratingState(0, 0)
        assert calibrator.get_current_calibration_point() == calibrator.targets[0]
        assert calibrator.get_calibration_progress() == 0.0

    def test_add_sample_ignored_when_idle(self, landmarks):
        """Test samples are dropped outside a calibration run"""
        calibrator = Calibrator(W, H)
        calibrator.add_gaze_sample(landmarks, (100, 100))
        assert calibrator.samples == ()

    def test_auto_advance_after_samples_per_point(self, landmarks):
        """Test the target advances once samples_per_point samples are collected"""
        calibrator = Calibrator(W, H, samples_per_point=3)
        calibrator.start_calibration()

        for _ in range(2):
            calibrator.add_gaze_sample(landmarks, (10, 10))
        assert calibrator.state == CalibratingState(0, 2)

        calibrator.add_gaze_sample(landmarks, (10, 10))
        assert calibrator.state == CalibratingState(1, 0)
        assert calibrator.get_current_calibration_point() == calibrator.targets[1]

    def test_samples_tied_to_current_target(self, landmarks):
        """Test each sample records the target active when it was added"""
        calibrator = Calibrator(W, H, samples_per_point=1)
        calibrator.start_calibration()
        calibrator.add_gaze_sample(landmarks, (1, 2))
        calibrator.add_gaze_sample(landmarks, (3, 4))

        samples = calibrator.samples
        assert samples[0].target == calibrator.targets[0]
        assert samples[1].target == calibrator.targets[1]
        assert samples[1].observed_gaze == (3.0, 4.0)

    def test_manual_advance(self, landmarks):
        """Test operator-forced advance resets the per-target counter"""
        calibrator = Calibrator(W, H)
        calibrator.start_calibration()
        calibrator.add_gaze_sample(landmarks, (10, 10))
        calibrator.move_to_next_calibration_point()

        assert calibrator.state == CalibratingState(1, 0)

    def test_manual_advance_past_last_target_finishes(self, landmarks):
        """Test skipping through all targets finishes calibration"""
        calibrator = Calibrator(W, H, grid_rows=1, grid_cols=2)
        calibrator.start_calibration()
        calibrator.add_gaze_sample(landmarks, (10, 10))
        calibrator.move_to_next_calibration_point()
        calibrator.move_to_next_calibration_point()

        assert not calibrator.is_calibrating
        assert calibrator.is_trained
        assert calibrator.get_current_calibration_point() is None

    def test_manual_advance_ignored_when_idle(self):
        """Test advancing outside a run does nothing"""
        calibrator = Calibrator(W, H)
        calibrator.move_to_next_calibration_point()
        assert calibrator.state == IdleState()

    def test_restart_clears_previous_run(self, landmarks):
        """Test start_calibration restarts from scratch"""
        calibrator = Calibrator(W, H, samples_per_point=2)
        calibrator.start_calibration()
        run_full_calibration(calibrator)
        assert calibrator.is_trained

        calibrator.start_calibration()
        assert calibrator.model is None
        assert calibrator.last_status == CalibrationStatus.NOT_RUN
        assert calibrator.samples == ()
        assert calibrator.state == CalibratingState(0, 0)

    def test_progress_monotonic(self, landmarks):
        """Test progress never decreases and reaches 1.0 only after finishing"""
        calibrator = Calibrator(W, H, samples_per_point=4, grid_rows=2, grid_cols=2)
        calibrator.start_calibration()

        previous = calibrator.get_calibration_progress()
        while calibrator.is_calibrating:
            assert previous < 1.0
            calibrator.add_gaze_sample(landmarks, (0, 0))
            progress = calibrator.get_calibration_progress()
            assert progress >= previous
            previous = progress

        assert previous == 1.0

    def test_progress_formula(self, landmarks):
        """Test progress = (index * spp + count) / (targets * spp)"""
        calibrator = Calibrator(W, H, samples_per_point=10)
        calibrator.start_calibration()
        for _ in range(13):
            calibrator.add_gaze_sample(landmarks, (0, 0))
        assert calibrator.get_calibration_progress() == pytest.approx(13 / 250)


class TestCalibrationFit:
    """Tests for model fitting and prediction"""

    def test_full_grid_offset_fit(self, landmark_factory):
        """Test 25 targets x 30 samples with observed = target - (5, 5)"""
        calibrator = Calibrator(W, H)
        calibrator.start_calibration()
        run_full_calibration(calibrator, observed_offset=(5.0, 5.0))

        assert len(calibrator.samples) == 25 * 30
        assert calibrator.last_status == CalibrationStatus.TRAINED
        assert calibrator.model.offset_x == 5.0
        assert calibrator.model.offset_y == 5.0

        landmarks = landmark_factory(left_iris=(100.0, 200.0))
        assert calibrator.predict(landmarks) == (105.0, 205.0)

    def test_empty_training_set(self):
        """Test finishing with zero samples leaves the model absent"""
        calibrator = Calibrator(W, H)
        calibrator.start_calibration()
        status = calibrator.finish_calibration()

        assert status == CalibrationStatus.EMPTY_TRAINING_SET
        assert calibrator.last_status == CalibrationStatus.EMPTY_TRAINING_SET
        assert not calibrator.is_calibrating
        assert calibrator.model is None
        assert calibrator.predict(make_landmarks()) is None

    def test_empty_training_set_logs_warning(self, caplog):
        """Test the empty training set is surfaced as a warning"""
        calibrator = Calibrator(W, H)
        calibrator.start_calibration()
        with caplog.at_level("WARNING"):
            calibrator.finish_calibration()
        assert "No gaze samples" in caplog.text

    def test_predict_before_fit_returns_none(self, landmarks):
        """Test prediction without a model returns None"""
        assert Calibrator(W, H).predict(landmarks) is None

    @pytest.mark.parametrize("base,offset", [
        ((-500.0, -500.0), (5.0, 5.0)),
        ((5000.0, 5000.0), (5.0, 5.0)),
        ((0.4, 0.45), (-100.0, 2000.0)),
    ])
    def test_prediction_clamped_to_screen(self, landmark_factory, base, offset):
        """Test predictions always lie within [0, W] x [0, H]"""
        calibrator = Calibrator(W, H, samples_per_point=1, grid_rows=1, grid_cols=1)
        calibrator.start_calibration()
        run_full_calibration(calibrator, observed_offset=offset)

        x, y = calibrator.predict(landmark_factory(left_iris=base))
        assert 0 <= x <= W
        assert 0 <= y <= H

    def test_missing_landmarks_predict_from_zero_vector(self):
        """Test missing landmarks degrade to a prediction from the zero vector"""
        calibrator = Calibrator(W, H, samples_per_point=1, grid_rows=1, grid_cols=1)
        calibrator.start_calibration()
        run_full_calibration(calibrator, observed_offset=(5.0, 7.0))

        assert calibrator.predict([]) == (5.0, 7.0)

    def test_linear_model_drop_in(self, landmark_factory):
        """Test the linear model maps features to targets behind the same predict"""
        calibrator = Calibrator(W, H, samples_per_point=1, model_type="linear")
        calibrator.start_calibration()

        # Iris position proportional to target
        while calibrator.is_calibrating:
            tx, ty = calibrator.get_current_calibration_point()
            lm = landmark_factory(left_iris=(tx / W, ty / H), right_iris=(tx / W, ty / H))
            calibrator.add_gaze_sample(lm, (0.0, 0.0))

        assert isinstance(calibrator.model, LinearFeatureModel)
        target = calibrator.targets[7]
        lm = landmark_factory(left_iris=(target[0] / W, target[1] / H),
                              right_iris=(target[0] / W, target[1] / H))
        assert calibrator.predict(lm) == pytest.approx(target, abs=1e-6)


class TestCalibrationModels:
    """Tests for the predictive models"""

    def test_offset_model_mean(self):
        """Test the offset is the mean per-axis target - observed"""
        samples = [
            CalibrationSample(np.zeros(10), observed_gaze=(0.0, 0.0), target=(2.0, 4.0)),
            CalibrationSample(np.zeros(10), observed_gaze=(0.0, 0.0), target=(4.0, 8.0)),
        ]
        model = OffsetModel.fit(samples)
        assert (model.offset_x, model.offset_y) == (3.0, 6.0)

    def test_mismatched_feature_lengths(self):
        """Test mixing feature vector lengths is rejected at fit time"""
        samples = [
            CalibrationSample(np.zeros(10), observed_gaze=(0.0, 0.0), target=(1.0, 1.0)),
            CalibrationSample(np.zeros(8), observed_gaze=(0.0, 0.0), target=(1.0, 1.0)),
        ]
        with pytest.raises(ValueError):
            OffsetModel.fit(samples)
        with pytest.raises(ValueError):
            LinearFeatureModel.fit(samples)
