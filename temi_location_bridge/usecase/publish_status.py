"""상태 메시지 발행 유스케이스.

명령 처리 결과와 로봇 라이프사이클 이벤트를 StatusEnvelope로 만들어
Status 토픽에 발행한다. 발행은 fire-and-forget이며
로봇 측 완료를 확인하지 않는다.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
import logging

from temi_location_bridge.domain.entities.envelope import (
    LocationsEnvelope,
    StatusEnvelope,
)
from temi_location_bridge.domain.enums import ReposeStatus, StatusCode
from temi_location_bridge.domain.events.robot_events import (
    ReposeStatusChangedEvent,
    RobotReadyEvent,
)
from temi_location_bridge.infra.mqtt.message_serializer import (
    serialize_locations,
    serialize_status,
)
from temi_location_bridge.usecase.ports.config_port import TopicConfig
from temi_location_bridge.usecase.ports.event_publisher import EventPublisher
from temi_location_bridge.usecase.ports.message_bus import MessageBus

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class StatusPublisher:
    """Status/Locations 토픽 발행자.

    버스가 연결되지 않은 동안의 메시지는 버퍼링하지 않고 버린다.

    Args:
        bus: 메시지 버스.
        topics: 토픽 설정.
        clock: 현재 시각 함수 (테스트용 주입).
    """

    def __init__(
        self,
        bus: MessageBus,
        topics: TopicConfig,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._bus = bus
        self._topics = topics
        self._clock = clock

    def attach(self, event_publisher: EventPublisher) -> None:
        """로봇 이벤트를 구독하여 상태 메시지로 전달한다.

        Args:
            event_publisher: 도메인 이벤트 발행자.
        """
        event_publisher.subscribe(RobotReadyEvent, self._on_robot_ready)
        event_publisher.subscribe(
            ReposeStatusChangedEvent, self._on_repose_status
        )

    def detach(self, event_publisher: EventPublisher) -> None:
        """attach()로 등록한 구독을 해제한다."""
        event_publisher.unsubscribe(RobotReadyEvent, self._on_robot_ready)
        event_publisher.unsubscribe(
            ReposeStatusChangedEvent, self._on_repose_status
        )

    def publish(self, status: str, detail: str = '') -> StatusEnvelope:
        """상태 메시지를 발행한다.

        Args:
            status: 상태 코드.
            detail: 상세 설명.

        Returns:
            생성된 StatusEnvelope (미연결로 버려진 경우 포함).
        """
        envelope = StatusEnvelope(
            status=str(status), detail=detail, timestamp=self._clock()
        )
        if not self._bus.is_connected:
            logger.warning(
                'Bus not connected, dropping status: %s', envelope.status
            )
            return envelope

        self._bus.publish(
            self._topics.status,
            serialize_status(envelope),
            qos=self._topics.qos,
        )
        logger.debug('Status published: %s (%s)', envelope.status, detail)
        return envelope

    def publish_locations(self, locations: list[str]) -> None:
        """위치 목록 메시지를 발행한다.

        Args:
            locations: 위치 이름 목록.
        """
        if not self._bus.is_connected:
            logger.warning('Bus not connected, dropping locations message')
            return

        self._bus.publish(
            self._topics.locations,
            serialize_locations(LocationsEnvelope(locations=list(locations))),
            qos=self._topics.qos,
        )
        logger.info('Locations published: %d entries', len(locations))

    # -- 로봇 이벤트 핸들러 --

    def _on_robot_ready(self, event: RobotReadyEvent) -> None:
        if event.is_ready:
            self.publish(StatusCode.READY, 'Robot is ready')

    def _on_repose_status(self, event: ReposeStatusChangedEvent) -> None:
        try:
            label = ReposeStatus(event.status).label
        except ValueError:
            label = f'Unknown ({event.status})'
        self.publish(
            f'repose_{event.status}', f'{label}: {event.description}'
        )
