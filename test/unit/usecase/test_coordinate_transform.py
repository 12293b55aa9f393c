"""CoordinateTransformEngine 유닛 테스트."""

import math
from unittest.mock import MagicMock

import pytest

from temi_location_bridge.domain.exceptions import NotCalibratedError
from temi_location_bridge.domain.value_objects.position import Anchor
from temi_location_bridge.usecase.coordinate_transform import (
    CoordinateTransformEngine,
    estimate_transform,
)


@pytest.fixture
def engine(calibration_store):
    return CoordinateTransformEngine(calibration_store)


def _rotated_anchor(base, d_east, d_north, scale, theta_deg):
    """base에서 (d_east, d_north)만큼 떨어진 기준점을 만든다."""
    theta = math.radians(theta_deg)
    dx = scale * (math.cos(theta) * d_east - math.sin(theta) * d_north)
    dy = scale * (math.sin(theta) * d_east + math.cos(theta) * d_north)
    return Anchor(
        survey_east=base.survey_east + d_east,
        survey_north=base.survey_north + d_north,
        map_x=base.map_x + dx,
        map_y=base.map_y + dy,
    )


class TestEstimateTransform:
    def test_quarter_turn(self, anchor_a, anchor_b):
        tf = estimate_transform(anchor_a, anchor_b)

        assert tf is not None
        assert tf.scale == pytest.approx(1.0, abs=1e-9)
        assert tf.rotation_deg == pytest.approx(90.0, abs=1e-9)
        assert tf.offset_x == pytest.approx(0.0, abs=1e-9)
        assert tf.offset_y == pytest.approx(0.0, abs=1e-9)

    def test_survey_anchors_too_close(self):
        a = Anchor(0.0, 0.0, 0.0, 0.0)
        b = Anchor(0.3, 0.0, 0.0, 5.0)
        assert estimate_transform(a, b) is None

    def test_map_anchors_too_close(self):
        a = Anchor(0.0, 0.0, 0.0, 0.0)
        b = Anchor(5.0, 0.0, 0.2, 0.2)
        assert estimate_transform(a, b) is None

    def test_large_grid_coordinates(self):
        a = Anchor(836000.0, 818000.0, 1.0, 2.0)
        b = _rotated_anchor(a, 10.0, 5.0, scale=1.0, theta_deg=30.0)

        tf = estimate_transform(a, b)

        assert tf.scale == pytest.approx(1.0, abs=1e-9)
        assert tf.rotation_deg == pytest.approx(30.0, abs=1e-7)
        x, y = tf.apply(a.survey_east, a.survey_north)
        assert x == pytest.approx(1.0, abs=1e-6)
        assert y == pytest.approx(2.0, abs=1e-6)


class TestCalibrate:
    def test_calibrate_and_apply(self, engine, anchor_a, anchor_b):
        assert engine.calibrate(anchor_a, anchor_b) is True
        assert engine.is_calibrated

        pose = engine.apply(10.0, 0.0)
        assert pose.x == pytest.approx(0.0, abs=1e-6)
        assert pose.y == pytest.approx(10.0, abs=1e-6)

    def test_anchors_map_onto_themselves(self, engine):
        a = Anchor(836000.0, 818000.0, 3.0, -4.0)
        b = _rotated_anchor(a, -12.0, 7.5, scale=0.98, theta_deg=-135.0)

        engine.calibrate(a, b)

        for anchor in (a, b):
            pose = engine.apply(anchor.survey_east, anchor.survey_north)
            assert pose.x == pytest.approx(anchor.map_x, abs=1e-6)
            assert pose.y == pytest.approx(anchor.map_y, abs=1e-6)

    def test_yaw_rotated_by_calibration(self, engine, anchor_a, anchor_b):
        engine.calibrate(anchor_a, anchor_b)

        pose = engine.apply(0.0, 0.0, heading_deg=45.0)
        assert pose.yaw == pytest.approx(135.0, abs=1e-9)

    def test_distance_preserved_up_to_scale(self, engine):
        a = Anchor(836000.0, 818000.0, 0.0, 0.0)
        b = _rotated_anchor(a, 20.0, 0.0, scale=2.0, theta_deg=10.0)
        engine.calibrate(a, b)

        p = (836003.0, 818004.0)
        q = (836015.0, 817999.0)
        pp = engine.apply(*p)
        pq = engine.apply(*q)

        mapped = math.hypot(pp.x - pq.x, pp.y - pq.y)
        survey_dist = math.hypot(p[0] - q[0], p[1] - q[1])
        assert mapped == pytest.approx(2.0 * survey_dist, rel=1e-6)

    def test_rejection_keeps_previous_calibration(
        self, engine, anchor_a, anchor_b
    ):
        engine.calibrate(anchor_a, anchor_b)
        before = engine.calibration

        ok = engine.calibrate(
            Anchor(0.0, 0.0, 0.0, 0.0), Anchor(0.3, 0.0, 5.0, 5.0)
        )

        assert ok is False
        assert engine.calibration is before

    def test_rejection_when_uncalibrated(self, engine):
        ok = engine.calibrate(
            Anchor(0.0, 0.0, 0.0, 0.0), Anchor(0.3, 0.0, 5.0, 5.0)
        )
        assert ok is False
        assert not engine.is_calibrated

    def test_calibrate_saves_to_store(self, anchor_a, anchor_b):
        store = MagicMock()
        store.load.return_value = None
        engine = CoordinateTransformEngine(store)

        engine.calibrate(anchor_a, anchor_b)

        store.save.assert_called_once()
        saved = store.save.call_args[0][0]
        assert saved.anchor_a == anchor_a
        assert saved.anchor_b == anchor_b

    def test_rejected_calibration_not_saved(self):
        store = MagicMock()
        store.load.return_value = None
        engine = CoordinateTransformEngine(store)

        engine.calibrate(Anchor(0, 0, 0, 0), Anchor(0.1, 0, 0, 3))

        store.save.assert_not_called()

    def test_failed_save_keeps_previous_calibration(
        self, kv_store, calibration_store, anchor_a, anchor_b
    ):
        engine = CoordinateTransformEngine(calibration_store)
        kv_store.update = MagicMock(side_effect=OSError('disk full'))

        with pytest.raises(OSError):
            engine.calibrate(anchor_a, anchor_b)

        assert not engine.is_calibrated
        assert not CoordinateTransformEngine(calibration_store).is_calibrated

    def test_failed_save_keeps_existing_transform(
        self, kv_store, calibration_store, translation_calibration,
        anchor_a, anchor_b,
    ):
        calibration_store.save(translation_calibration)
        engine = CoordinateTransformEngine(calibration_store)
        before = engine.calibration
        kv_store.update = MagicMock(side_effect=OSError('disk full'))

        with pytest.raises(OSError):
            engine.calibrate(anchor_a, anchor_b)

        assert engine.calibration is before


class TestPersistence:
    def test_round_trip_through_store(
        self, calibration_store, anchor_a, anchor_b
    ):
        first = CoordinateTransformEngine(calibration_store)
        first.calibrate(anchor_a, anchor_b)
        expected = first.apply(3.0, 4.0, heading_deg=10.0)

        second = CoordinateTransformEngine(calibration_store)
        pose = second.apply(3.0, 4.0, heading_deg=10.0)

        assert second.is_calibrated
        assert pose.x == pytest.approx(expected.x, abs=1e-9)
        assert pose.y == pytest.approx(expected.y, abs=1e-9)
        assert pose.yaw == pytest.approx(expected.yaw, abs=1e-9)

    def test_loads_existing_calibration(
        self, calibration_store, translation_calibration
    ):
        calibration_store.save(translation_calibration)

        engine = CoordinateTransformEngine(calibration_store)
        pose = engine.apply(814000.0, 818000.0, heading_deg=45.0)

        assert pose.x == pytest.approx(0.0)
        assert pose.y == pytest.approx(0.0)
        assert pose.yaw == pytest.approx(45.0)


class TestUncalibrated:
    def test_fresh_engine_raises(self, engine):
        with pytest.raises(NotCalibratedError):
            engine.apply(1.0, 2.0)

    def test_reset_engine_raises(self, engine, anchor_a, anchor_b, kv_store):
        engine.calibrate(anchor_a, anchor_b)
        engine.reset()

        assert not engine.is_calibrated
        assert kv_store.snapshot() == {}
        with pytest.raises(NotCalibratedError):
            engine.apply(1.0, 2.0)

    def test_reset_clears_store_even_if_uncalibrated(self):
        store = MagicMock()
        store.load.return_value = None
        engine = CoordinateTransformEngine(store)

        engine.reset()

        store.clear.assert_called_once()

    def test_failed_clear_keeps_calibration(self, anchor_a, anchor_b):
        store = MagicMock()
        store.load.return_value = None
        engine = CoordinateTransformEngine(store)
        engine.calibrate(anchor_a, anchor_b)
        store.clear.side_effect = OSError('read-only')

        with pytest.raises(OSError):
            engine.reset()

        assert engine.is_calibrated


class TestSummary:
    def test_not_calibrated(self, engine):
        assert engine.summary() == 'Not calibrated'

    def test_calibrated(self, engine, anchor_a, anchor_b):
        engine.calibrate(anchor_a, anchor_b)

        summary = engine.summary()
        assert 'Scale: 1.000000' in summary
        assert 'Rotation: 90.00 deg' in summary
        assert 'Anchor A' in summary
        assert 'Anchor B' in summary
