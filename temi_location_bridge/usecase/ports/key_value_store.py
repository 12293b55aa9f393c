"""Key/value 저장소 포트 인터페이스.

프로세스 재시작 후에도 유지되는 단순 key/value 저장을 추상화한다.
캘리브레이션 저장소가 유일한 사용자이다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):
    """Key/value 저장소 인터페이스."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """값을 조회한다.

        Args:
            key: 키.
            default: 키가 없을 때 반환할 값.

        Returns:
            저장된 값 또는 default.
        """

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """값을 저장한다.

        Args:
            key: 키.
            value: bool/int/float/str 값.
        """

    @abstractmethod
    def clear(self) -> None:
        """모든 키를 삭제한다."""

    def update(self, values: dict[str, Any]) -> None:
        """여러 값을 한 번에 저장한다.

        기본 구현은 set()을 반복 호출한다. 파일 기반 구현은
        한 번의 쓰기로 처리하도록 재정의한다.

        Args:
            values: 저장할 {key: value}.
        """
        for key, value in values.items():
            self.set(key, value)
