"""측위 레코드 엔티티.

측위 SDK가 보고하는 원시 업데이트(PositionReport)와
출처 우선순위에 따라 선택된 활성 위치(ResolvedLocation)를 정의한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from temi_location_bridge.domain.enums import LocationSource
from temi_location_bridge.domain.value_objects.position import SurveyPoint


@dataclass(frozen=True)
class LocationRecord:
    """단일 출처의 측위 레코드.

    Args:
        source: 레코드 출처.
        latitude: 위도 (deg).
        longitude: 경도 (deg).
        survey_east: HK1980 Easting (m). 없으면 None.
        survey_north: HK1980 Northing (m). 없으면 None.
        floor_level: 층.
        geofence_id: 지오펜스 ID.
        geofence_name: 지오펜스 이름.
        floor_name: 층 이름.
        is_outdoor: 실외 여부.
        horizontal_accuracy: 수평 정확도 (m, GPS 전용).
        direction: 방향 (deg, 0 = 기준축).
        timestamp: 측위 시각.
    """

    source: LocationSource
    latitude: float = 0.0
    longitude: float = 0.0
    survey_east: float | None = None
    survey_north: float | None = None
    floor_level: int = 0
    geofence_id: str | None = None
    geofence_name: str | None = None
    floor_name: str | None = None
    is_outdoor: bool | None = None
    horizontal_accuracy: float | None = None
    direction: float | None = None
    timestamp: datetime | None = None

    @property
    def survey_point(self) -> SurveyPoint | None:
        """측량 좌표. 둘 중 하나라도 없으면 None."""
        if self.survey_east is None or self.survey_north is None:
            return None
        return SurveyPoint(self.survey_east, self.survey_north)

    @property
    def has_survey_fix(self) -> bool:
        """측량 좌표가 존재하고 두 값 모두 0이 아닌지 여부."""
        point = self.survey_point
        return point is not None and point.east != 0.0 and point.north != 0.0


@dataclass(frozen=True)
class PositionReport:
    """측위 SDK의 원시 업데이트 1건.

    Args:
        declared_source: SDK가 선언한 출처 문자열
            ('LocationEngine', 'GPS', 'Manual' 또는 기타).
        indoor: 실내 엔진/수동 레코드 (``location``).
        gps: GPS 레코드 (``gpsLocation``).
        direction: 기기 방향 (deg).
        timestamp: 업데이트 시각.
    """

    declared_source: str
    indoor: LocationRecord | None = None
    gps: LocationRecord | None = None
    direction: float | None = None
    timestamp: datetime | None = None


@dataclass(frozen=True)
class ResolvedLocation:
    """업데이트 1건에 대해 선택된 활성 위치.

    Args:
        active: 선택된 레코드 (항상 정확히 하나).
        declared_source: SDK가 선언한 출처 문자열.
        indoor: 실내 레코드 (있으면).
        gps: GPS 레코드 (있으면).
        direction: 기기 방향 (deg).
        timestamp: 업데이트 시각.
    """

    active: LocationRecord
    declared_source: str
    indoor: LocationRecord | None = None
    gps: LocationRecord | None = None
    direction: float | None = None
    timestamp: datetime | None = None

    @property
    def source(self) -> LocationSource:
        """활성 레코드의 출처."""
        return self.active.source

    @property
    def is_fallback(self) -> bool:
        """GPS 선언이었으나 실내 레코드로 대체되었는지 여부."""
        return (
            self.declared_source == LocationSource.GPS
            and self.active is not self.gps
        )
