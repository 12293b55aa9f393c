"""시뮬레이션 RobotControl 구현체.

실제 로봇 SDK 없이 relay를 실행/시험하기 위한 구현.
명령을 기록하고, repose 진행 상태를 즉시 완료로 보고한다.
"""

from __future__ import annotations

import logging
import threading

from temi_location_bridge.domain.enums import ReposeStatus
from temi_location_bridge.domain.events.robot_events import (
    ReposeStatusChangedEvent,
    RobotReadyEvent,
)
from temi_location_bridge.domain.value_objects.position import RobotPose
from temi_location_bridge.usecase.ports.event_publisher import EventPublisher
from temi_location_bridge.usecase.ports.robot_control import RobotControl

logger = logging.getLogger(__name__)

_DEFAULT_LOCATIONS = ('home base', 'entrance', 'reception')


class SimulatedRobotControl(RobotControl):
    """RobotControl의 시뮬레이션 구현체.

    Args:
        event_publisher: 로봇 이벤트 발행자.
        locations: 저장된 위치 이름 목록.
        initial_pose: 시작 자세.
    """

    def __init__(
        self,
        event_publisher: EventPublisher,
        locations: list[str] | None = None,
        initial_pose: RobotPose | None = None,
    ) -> None:
        self._events = event_publisher
        self._lock = threading.Lock()
        self._ready = False
        self._locations = list(
            locations if locations is not None else _DEFAULT_LOCATIONS
        )
        self._pose = initial_pose or RobotPose(x=0.0, y=0.0)
        self._history: list[tuple[str, object]] = []

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def history(self) -> list[tuple[str, object]]:
        """수행한 명령 기록 (명령 이름, 인자)."""
        with self._lock:
            return list(self._history)

    def start(self) -> None:
        """로봇 준비 완료를 알린다."""
        self._ready = True
        logger.info('Simulated robot ready')
        self._events.publish(RobotReadyEvent(is_ready=True))

    def shutdown(self) -> None:
        self._ready = False
        self._events.publish(RobotReadyEvent(is_ready=False))

    def reposition(self, pose: RobotPose) -> None:
        self._record('reposition', pose)
        self._events.publish(ReposeStatusChangedEvent(
            status=ReposeStatus.REPOSING_START,
            description='Reposing started',
        ))
        with self._lock:
            self._pose = pose
        self._events.publish(ReposeStatusChangedEvent(
            status=ReposeStatus.REPOSING_COMPLETE,
            description='Reposing completed',
        ))

    def go_to(self, location: str) -> None:
        if location not in self._locations:
            logger.warning('Unknown location: %s', location)
        self._record('go_to', location)

    def speak(self, text: str) -> None:
        self._record('speak', text)

    def stop_movement(self) -> None:
        self._record('stop_movement', None)

    def get_locations(self) -> list[str]:
        return list(self._locations)

    def get_position(self) -> RobotPose | None:
        with self._lock:
            return self._pose

    def set_position(self, pose: RobotPose) -> None:
        """현재 자세를 직접 설정한다 (수동 주행 대체)."""
        with self._lock:
            self._pose = pose

    def _record(self, command: str, argument: object) -> None:
        logger.info('Simulated robot: %s(%s)', command, argument)
        with self._lock:
            self._history.append((command, argument))
