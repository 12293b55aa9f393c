"""위치 관련 값 객체."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SurveyPoint:
    """측량 그리드(HK1980) 상의 평면 좌표.

    Args:
        east: Easting (m).
        north: Northing (m).
    """

    east: float
    north: float


@dataclass(frozen=True)
class Anchor:
    """두 좌표계 모두에서 위치를 알고 있는 캘리브레이션 기준점.

    Args:
        survey_east: 측량 그리드 Easting (m).
        survey_north: 측량 그리드 Northing (m).
        map_x: 로봇 맵 X 좌표 (m).
        map_y: 로봇 맵 Y 좌표 (m).
    """

    survey_east: float
    survey_north: float
    map_x: float
    map_y: float


@dataclass(frozen=True)
class RobotPose:
    """로봇 맵 좌표계의 자세.

    Args:
        x: X 좌표 (m).
        y: Y 좌표 (m).
        yaw: 방향 (deg).
        extra: 로봇 SDK 예약 필드.
    """

    x: float
    y: float
    yaw: float = 0.0
    extra: int = 0
