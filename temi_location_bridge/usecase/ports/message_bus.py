"""메시지 버스 포트 인터페이스.

publish/subscribe 전송 계층을 추상화한다.
재연결/백오프는 구현체가 담당하며, usecase는 연결 여부만 관찰한다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable


class MessageBus(ABC):
    """publish/subscribe 메시지 버스 인터페이스."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """브로커 연결 여부."""

    @abstractmethod
    def publish(
        self, topic: str, payload: str, qos: int = 0, retain: bool = False
    ) -> None:
        """메시지를 발행한다.

        Args:
            topic: 토픽.
            payload: JSON 페이로드 문자열.
            qos: QoS 레벨.
            retain: Retained 플래그.
        """

    @abstractmethod
    def subscribe(
        self, topic: str, callback: Callable[[str, bytes], None], qos: int = 0
    ) -> None:
        """토픽을 구독한다.

        Args:
            topic: 구독할 토픽.
            callback: 메시지 수신 콜백 (topic, payload).
            qos: QoS 레벨.
        """
