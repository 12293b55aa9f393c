"""2-D similarity transform 값 객체.

측량 그리드 → 로봇 맵 좌표 변환:
    map = scale * R(rotation) * survey + offset
"""

from __future__ import annotations

from dataclasses import dataclass
import math

from temi_location_bridge.domain.value_objects.position import Anchor


@dataclass(frozen=True)
class SimilarityTransform:
    """균일 스케일 + 회전 + 평행이동 변환.

    Args:
        scale: 스케일 팩터 (> 0).
        rotation: 회전 각도 (rad).
        offset_x: X 이동량 (m).
        offset_y: Y 이동량 (m).
    """

    scale: float
    rotation: float
    offset_x: float
    offset_y: float

    def apply(self, east: float, north: float) -> tuple[float, float]:
        """측량 좌표를 로봇 맵 좌표로 변환한다.

        Args:
            east: 측량 Easting (m).
            north: 측량 Northing (m).

        Returns:
            (x, y) 로봇 맵 좌표.
        """
        cos_r = math.cos(self.rotation)
        sin_r = math.sin(self.rotation)
        x = self.scale * (cos_r * east - sin_r * north) + self.offset_x
        y = self.scale * (sin_r * east + cos_r * north) + self.offset_y
        return x, y

    def rotate_heading(self, heading_deg: float) -> float:
        """방향각에 회전량을 더한다 (deg)."""
        return heading_deg + math.degrees(self.rotation)

    @property
    def rotation_deg(self) -> float:
        """회전 각도 (deg)."""
        return math.degrees(self.rotation)


@dataclass(frozen=True)
class Calibration:
    """캘리브레이션 결과 (변환 파라미터 + 기준점).

    저장소에서 기준점 없이 로드된 경우 anchor는 None일 수 있다.

    Args:
        transform: 계산된 변환.
        anchor_a: 기준점 A.
        anchor_b: 기준점 B.
    """

    transform: SimilarityTransform
    anchor_a: Anchor | None = None
    anchor_b: Anchor | None = None
