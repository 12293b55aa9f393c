"""캘리브레이션 기준점 캡처 유스케이스.

운영자가 로봇을 알려진 지점에 세운 뒤, 마지막 측량 좌표와
현재 로봇 자세를 함께 기록하여 기준점 A/B를 만든다.
두 기준점이 모이면 변환 엔진을 캘리브레이션한다.

절차:
    1. 로봇을 지점 A로 이동 → capture('A')
    2. 수 미터 떨어진 지점 B로 이동 → capture('B')
    3. calibrate()
"""

from __future__ import annotations

import logging
import threading

from temi_location_bridge.domain.exceptions import AnchorCaptureError
from temi_location_bridge.domain.value_objects.position import Anchor
from temi_location_bridge.usecase.coordinate_transform import (
    CoordinateTransformEngine,
)
from temi_location_bridge.usecase.ports.robot_control import RobotControl
from temi_location_bridge.usecase.resolve_location import LocationResolver

logger = logging.getLogger(__name__)

ANCHOR_LABELS = ('A', 'B')


class AnchorCapture:
    """기준점 캡처 및 캘리브레이션 실행기.

    Args:
        engine: 좌표 변환 엔진.
        resolver: 최신 측량 좌표 캐시를 가진 위치 선택기.
        robot: 로봇 제어 인터페이스.
    """

    def __init__(
        self,
        engine: CoordinateTransformEngine,
        resolver: LocationResolver,
        robot: RobotControl,
    ) -> None:
        self._engine = engine
        self._resolver = resolver
        self._robot = robot
        self._lock = threading.Lock()
        self._pending: dict[str, Anchor] = {}

    @property
    def pending(self) -> dict[str, Anchor]:
        """캡처된 기준점 (label → Anchor) 사본."""
        with self._lock:
            return dict(self._pending)

    def capture(self, label: str) -> Anchor:
        """현재 측량 좌표와 로봇 자세를 기준점으로 기록한다.

        Args:
            label: 'A' 또는 'B'.

        Returns:
            캡처된 기준점.

        Raises:
            AnchorCaptureError: label이 잘못되었거나, 로봇이 준비되지 않았거나,
                측량 좌표/로봇 자세를 읽을 수 없을 때.
        """
        label = label.strip().upper()
        if label not in ANCHOR_LABELS:
            raise AnchorCaptureError(f'Unknown anchor label: {label!r}')
        if not self._robot.is_ready:
            raise AnchorCaptureError('Robot not ready')

        survey = self._resolver.latest_survey_point
        if survey is None:
            raise AnchorCaptureError('No survey location received yet')

        pose = self._robot.get_position()
        if pose is None:
            raise AnchorCaptureError('Cannot read robot position')

        anchor = Anchor(
            survey_east=survey.east,
            survey_north=survey.north,
            map_x=pose.x,
            map_y=pose.y,
        )
        with self._lock:
            self._pending[label] = anchor

        logger.info('Anchor %s captured: %s', label, anchor)
        return anchor

    def calibrate(self) -> bool:
        """캡처된 두 기준점으로 캘리브레이션한다.

        성공 시 캡처된 기준점을 비운다.

        Returns:
            성공 여부.

        Raises:
            AnchorCaptureError: A/B 중 하나라도 캡처되지 않았을 때.
        """
        with self._lock:
            anchor_a = self._pending.get('A')
            anchor_b = self._pending.get('B')
        if anchor_a is None or anchor_b is None:
            raise AnchorCaptureError('Capture both A and B first')

        ok = self._engine.calibrate(anchor_a, anchor_b)
        if ok:
            with self._lock:
                self._pending.clear()
        return ok

    def reset(self) -> None:
        """캘리브레이션과 캡처된 기준점을 모두 초기화한다."""
        self._engine.reset()
        with self._lock:
            self._pending.clear()
