"""도메인 이벤트 발행 포트 인터페이스.

로봇 SDK 알림(준비 상태, repose 진행)과 버스 연결 상태 변화가
이 경로로 전달된다. 기본 타입으로 구독하면 하위 타입 이벤트도 받는다.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from temi_location_bridge.domain.events.robot_events import DomainEvent


class EventPublisher(ABC):
    """도메인 이벤트 발행자 인터페이스."""

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """도메인 이벤트를 발행한다.

        Args:
            event: 발행할 도메인 이벤트.
        """

    @abstractmethod
    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: Callable[[DomainEvent], None],
    ) -> None:
        """이벤트 타입(및 그 하위 타입)을 구독한다.

        같은 핸들러를 같은 타입에 두 번 등록해도 한 번만 호출된다.

        Args:
            event_type: 구독할 이벤트 타입.
            handler: 이벤트 수신 시 호출할 핸들러.
        """

    @abstractmethod
    def unsubscribe(
        self,
        event_type: type[DomainEvent],
        handler: Callable[[DomainEvent], None],
    ) -> None:
        """구독을 해제한다. 등록되지 않은 핸들러는 무시한다."""
