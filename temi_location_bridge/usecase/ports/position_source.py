"""PositionSource 포트 인터페이스.

측위 SDK의 콜백 등록 API를 대체한다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator

from temi_location_bridge.domain.entities.location import PositionReport


class PositionSource(ABC):
    """측위 업데이트 공급원 인터페이스."""

    @abstractmethod
    def reports(self) -> Iterator[PositionReport]:
        """측위 업데이트를 지연 생성하는 이터레이터를 반환한다.

        호출할 때마다 새 이터레이터를 반환한다 (재시작 가능).
        close() 호출 시 이터레이터가 종료된다.
        """

    @abstractmethod
    def close(self) -> None:
        """공급을 중지한다."""
