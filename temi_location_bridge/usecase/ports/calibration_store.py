"""캘리브레이션 저장소 포트 인터페이스."""

from abc import ABC, abstractmethod

from temi_location_bridge.domain.value_objects.transform import Calibration


class CalibrationStore(ABC):
    """캘리브레이션 영속화 인터페이스."""

    @abstractmethod
    def load(self) -> Calibration | None:
        """저장된 캘리브레이션을 로드한다.

        Returns:
            Calibration 또는 저장된 값이 없으면 None.
        """

    @abstractmethod
    def save(self, calibration: Calibration) -> None:
        """캘리브레이션을 저장한다.

        Args:
            calibration: 저장할 캘리브레이션.
        """

    @abstractmethod
    def clear(self) -> None:
        """저장된 캘리브레이션을 삭제한다."""
