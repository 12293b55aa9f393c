"""temi Location Bridge 도메인 이벤트 정의.

로봇 SDK와 메시지 버스에서 비동기로 발생하는 이벤트를 정의한다.
usecase 레이어에서 이벤트를 구독하여 상태 메시지를 발행한다.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True)
class DomainEvent:
    """도메인 이벤트 기본 클래스.

    Args:
        timestamp: 이벤트 발생 시각 (UTC).
    """

    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class RobotReadyEvent(DomainEvent):
    """로봇 준비 상태 변경 이벤트.

    Args:
        is_ready: 준비 여부.
    """

    is_ready: bool = False


@dataclass(frozen=True)
class ReposeStatusChangedEvent(DomainEvent):
    """로봇 repose 진행 상태 변경 이벤트.

    Args:
        status: SDK가 보고한 상태 코드 (ReposeStatus 범위 밖일 수 있다).
        description: SDK가 보고한 설명.
    """

    status: int = 0
    description: str = ""


@dataclass(frozen=True)
class ConnectionChangedEvent(DomainEvent):
    """메시지 버스 연결 상태 변경 이벤트.

    Args:
        connected: 연결 여부.
    """

    connected: bool = False
