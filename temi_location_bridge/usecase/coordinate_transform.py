"""측량 그리드 ↔ 로봇 맵 좌표 변환 엔진.

두 개의 캘리브레이션 기준점으로 2-D similarity transform
(균일 스케일 + 회전 + 평행이동, 4 자유도)을 계산하고,
측위 좌표를 로봇 자세로 변환한다.

    map_x = scale * (cos θ · E − sin θ · N) + offset_x
    map_y = scale * (sin θ · E + cos θ · N) + offset_y
"""

from __future__ import annotations

import logging
import math
import threading

import nudged

from temi_location_bridge.domain.exceptions import NotCalibratedError
from temi_location_bridge.domain.value_objects.position import (
    Anchor,
    RobotPose,
)
from temi_location_bridge.domain.value_objects.transform import (
    Calibration,
    SimilarityTransform,
)
from temi_location_bridge.usecase.ports.calibration_store import (
    CalibrationStore,
)

logger = logging.getLogger(__name__)

# 기준점 간 최소 거리 (m). 더 가까우면 연립방정식이 불안정하다.
MIN_ANCHOR_SEPARATION = 0.5


def estimate_transform(
    anchor_a: Anchor, anchor_b: Anchor
) -> SimilarityTransform | None:
    """두 기준점으로부터 similarity transform을 계산한다.

    nudged는 기준점 A를 원점으로 옮긴 상대 벡터로 추정한다.
    두 점 대응이면 해가 유일하며 scale = |dTgt| / |dSrc|,
    rotation = angle(dTgt) − angle(dSrc)와 같다.

    Args:
        anchor_a: 기준점 A.
        anchor_b: 기준점 B.

    Returns:
        계산된 변환 또는 기준점이 너무 가까우면 None.
    """
    d_src = [
        anchor_b.survey_east - anchor_a.survey_east,
        anchor_b.survey_north - anchor_a.survey_north,
    ]
    d_tgt = [
        anchor_b.map_x - anchor_a.map_x,
        anchor_b.map_y - anchor_a.map_y,
    ]
    dist_src = math.hypot(d_src[0], d_src[1])
    dist_tgt = math.hypot(d_tgt[0], d_tgt[1])

    if dist_src < MIN_ANCHOR_SEPARATION or dist_tgt < MIN_ANCHOR_SEPARATION:
        logger.error(
            'Anchors too close (survey=%.3f m, map=%.3f m), '
            'choose points at least %.1f m apart',
            dist_src, dist_tgt, MIN_ANCHOR_SEPARATION,
        )
        return None

    domain = [[0.0, 0.0], d_src]
    target = [[0.0, 0.0], d_tgt]
    tf = nudged.estimate(domain, target)
    mse = nudged.estimate_error(tf, domain, target)
    logger.debug('Anchor fit MSE: %.9f', mse)

    scale = tf.get_scale()
    rotation = tf.get_rotation()

    # 기준점 A에서 이동량을 구한다
    cos_r = math.cos(rotation)
    sin_r = math.sin(rotation)
    offset_x = anchor_a.map_x - scale * (
        cos_r * anchor_a.survey_east - sin_r * anchor_a.survey_north
    )
    offset_y = anchor_a.map_y - scale * (
        sin_r * anchor_a.survey_east + cos_r * anchor_a.survey_north
    )
    return SimilarityTransform(
        scale=scale,
        rotation=rotation,
        offset_x=offset_x,
        offset_y=offset_y,
    )


class CoordinateTransformEngine:
    """캘리브레이션 상태를 소유하는 좌표 변환 엔진.

    캘리브레이션은 불변 Calibration 객체 하나로 보관하고
    통째로 교체하므로 부분적으로 설정된 상태는 외부에 드러나지 않는다.
    기준점 캡처가 다른 스레드에서 실행될 수 있으므로 Lock으로 보호한다.

    Args:
        store: 캘리브레이션 저장소. 생성 시 저장된 값을 로드한다.
    """

    def __init__(self, store: CalibrationStore) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._calibration: Calibration | None = store.load()

        if self._calibration is None:
            logger.info('No saved calibration found')
        else:
            tf = self._calibration.transform
            logger.info(
                'Loaded calibration: scale=%.6f, rotation=%.2f deg, '
                'offset=(%.3f, %.3f)',
                tf.scale, tf.rotation_deg, tf.offset_x, tf.offset_y,
            )

    @property
    def is_calibrated(self) -> bool:
        """캘리브레이션 완료 여부."""
        with self._lock:
            return self._calibration is not None

    @property
    def calibration(self) -> Calibration | None:
        """현재 캘리브레이션 (읽기 전용 스냅샷)."""
        with self._lock:
            return self._calibration

    def calibrate(self, anchor_a: Anchor, anchor_b: Anchor) -> bool:
        """두 기준점으로 변환을 계산하고 저장한다.

        실패 시 기존 캘리브레이션은 변경되지 않는다.

        Args:
            anchor_a: 기준점 A.
            anchor_b: 기준점 B.

        Returns:
            성공 여부.
        """
        transform = estimate_transform(anchor_a, anchor_b)
        if transform is None:
            return False

        calibration = Calibration(
            transform=transform, anchor_a=anchor_a, anchor_b=anchor_b
        )
        with self._lock:
            self._store.save(calibration)
            self._calibration = calibration

        logger.info(
            'Calibration complete: scale=%.6f, rotation=%.2f deg, '
            'offset=(%.3f, %.3f)',
            transform.scale, transform.rotation_deg,
            transform.offset_x, transform.offset_y,
        )
        return True

    def apply(
        self, survey_east: float, survey_north: float, heading_deg: float = 0.0
    ) -> RobotPose:
        """측량 좌표를 로봇 자세로 변환한다.

        Args:
            survey_east: HK1980 Easting (m).
            survey_north: HK1980 Northing (m).
            heading_deg: 측위 방향 (deg). 같은 회전량으로 보정된다.

        Returns:
            로봇 맵 좌표계 자세.

        Raises:
            NotCalibratedError: 캘리브레이션 전일 때.
        """
        calibration = self.calibration
        if calibration is None:
            raise NotCalibratedError('Coordinate transform is not calibrated')

        tf = calibration.transform
        x, y = tf.apply(survey_east, survey_north)
        yaw = tf.rotate_heading(heading_deg)
        logger.debug(
            'Mapped (E=%.2f, N=%.2f) -> map(x=%.3f, y=%.3f, yaw=%.1f)',
            survey_east, survey_north, x, y, yaw,
        )
        return RobotPose(x=x, y=y, yaw=yaw)

    def reset(self) -> None:
        """캘리브레이션과 저장된 상태를 모두 삭제한다."""
        with self._lock:
            self._store.clear()
            self._calibration = None
        logger.info('Calibration reset')

    def summary(self) -> str:
        """현재 캘리브레이션 요약 문자열."""
        calibration = self.calibration
        if calibration is None:
            return 'Not calibrated'

        tf = calibration.transform
        lines = [
            f'Scale: {tf.scale:.6f}',
            f'Rotation: {tf.rotation_deg:.2f} deg',
            f'Offset: ({tf.offset_x:.3f}, {tf.offset_y:.3f})',
        ]
        for label, anchor in (
            ('A', calibration.anchor_a), ('B', calibration.anchor_b)
        ):
            if anchor is not None:
                lines.append(
                    f'Anchor {label}: survey({anchor.survey_east:.2f}, '
                    f'{anchor.survey_north:.2f}) -> '
                    f'map({anchor.map_x:.3f}, {anchor.map_y:.3f})'
                )
        return '\n'.join(lines)
