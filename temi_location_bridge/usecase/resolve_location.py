"""측위 출처 선택 유스케이스.

업데이트 1건에 포함된 최대 세 개의 후보 레코드 중
고정된 우선순위 정책으로 정확히 하나의 활성 위치를 선택한다.

    'GPS'                       → gpsLocation, 없으면 location으로 대체
    'LocationEngine' / 'Manual' → location (대체 없음)
    그 외 선언값                  → location
"""

from __future__ import annotations

import logging
import threading

from temi_location_bridge.domain.entities.location import (
    PositionReport,
    ResolvedLocation,
)
from temi_location_bridge.domain.enums import LocationSource
from temi_location_bridge.domain.exceptions import LocationResolutionError
from temi_location_bridge.domain.value_objects.position import SurveyPoint

logger = logging.getLogger(__name__)


class LocationResolver:
    """활성 위치 선택기.

    마지막으로 수신한 유효한 측량 좌표(두 값 모두 0이 아님)를
    기준점 캡처용으로 캐시한다. 이 캐시는 해석 실패로 지워지지 않고
    이후의 유효한 좌표로만 덮어쓴다.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest: ResolvedLocation | None = None
        self._latest_survey: SurveyPoint | None = None

    @property
    def latest(self) -> ResolvedLocation | None:
        """마지막으로 해석된 활성 위치."""
        with self._lock:
            return self._latest

    @property
    def latest_survey_point(self) -> SurveyPoint | None:
        """마지막 유효 측량 좌표 스냅샷."""
        with self._lock:
            return self._latest_survey

    def resolve(self, report: PositionReport) -> ResolvedLocation:
        """활성 위치를 선택한다.

        Args:
            report: 측위 원시 업데이트.

        Returns:
            선택된 활성 위치.

        Raises:
            LocationResolutionError: 선택된 출처의 레코드가 없을 때.
        """
        declared = report.declared_source
        if declared == LocationSource.GPS:
            active = report.gps if report.gps is not None else report.indoor
            if active is not None and active is report.indoor:
                logger.info('GPS record missing, falling back to indoor record')
        else:
            active = report.indoor

        if active is None:
            raise LocationResolutionError(
                f'No location record for source={declared}'
            )

        resolved = ResolvedLocation(
            active=active,
            declared_source=declared,
            indoor=report.indoor,
            gps=report.gps,
            direction=report.direction,
            timestamp=report.timestamp,
        )

        with self._lock:
            self._latest = resolved
            if active.has_survey_fix:
                self._latest_survey = active.survey_point

        logger.debug(
            'Location resolved [source=%s]: lat=%s, lon=%s, E=%s, N=%s, '
            'floor=%d, geofence=%s',
            declared, active.latitude, active.longitude,
            active.survey_east, active.survey_north,
            active.floor_level, active.geofence_name,
        )
        return resolved
