"""MQTT 메시지 엔벨로프 엔티티."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class CommandEnvelope:
    """Command 토픽 메시지.

    Args:
        action: action 이름.
        payload: action 별 추가 필드 (action 키 제외).
    """

    action: str
    payload: dict[str, Any] = field(default_factory=dict)

    def get_str(self, key: str) -> str | None:
        """문자열 필드를 반환한다. 없거나 빈 문자열이면 None."""
        value = self.payload.get(key)
        if value is None:
            return None
        value = str(value).strip()
        return value or None


@dataclass(frozen=True)
class StatusEnvelope:
    """Status 토픽 메시지.

    Args:
        status: 상태 코드.
        detail: 상세 설명.
        timestamp: 발행 시각 (UTC).
    """

    status: str
    detail: str = ''
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class LocationsEnvelope:
    """get_locations 응답 메시지.

    Args:
        locations: 로봇에 저장된 위치 이름 목록.
    """

    locations: list[str] = field(default_factory=list)
