"""RobotControl 포트 인터페이스.

로봇 SDK의 싱글톤/콜백 API를 대체하는 명시적 capability 인터페이스.
비동기 상태 알림(준비 상태, repose 진행)은 구현체가
EventPublisher로 도메인 이벤트를 발행하여 전달한다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from temi_location_bridge.domain.value_objects.position import RobotPose


class RobotControl(ABC):
    """로봇 제어 인터페이스."""

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        """로봇이 명령을 받을 준비가 되었는지 여부."""

    @abstractmethod
    def reposition(self, pose: RobotPose) -> None:
        """로봇의 로컬라이제이션을 주어진 자세로 재설정한다 (repose).

        완료를 기다리지 않는다. 진행 상태는 이벤트로 보고된다.

        Args:
            pose: 로봇 맵 좌표계 자세.
        """

    @abstractmethod
    def go_to(self, location: str) -> None:
        """저장된 위치로 이동한다.

        Args:
            location: 위치 이름.
        """

    @abstractmethod
    def speak(self, text: str) -> None:
        """문장을 음성으로 출력한다.

        Args:
            text: 출력할 문장.
        """

    @abstractmethod
    def stop_movement(self) -> None:
        """모든 이동을 정지한다."""

    @abstractmethod
    def get_locations(self) -> list[str]:
        """로봇에 저장된 위치 이름 목록을 반환한다."""

    @abstractmethod
    def get_position(self) -> RobotPose | None:
        """현재 로봇 맵 좌표계 자세를 반환한다.

        Returns:
            현재 자세 또는 읽을 수 없으면 None.
        """
