"""위치 내보내기 유스케이스 (controller 측).

PositionSource의 측위 업데이트를 해석하여 캐시하고,
최소 간격으로 제한하여 update_location 명령으로 발행한다.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
import logging
import threading
import time
from typing import Any

from temi_location_bridge.domain.entities.envelope import CommandEnvelope
from temi_location_bridge.domain.entities.location import (
    LocationRecord,
    PositionReport,
    ResolvedLocation,
)
from temi_location_bridge.domain.enums import CommandAction, LocationSource
from temi_location_bridge.domain.exceptions import LocationResolutionError
from temi_location_bridge.infra.mqtt.message_serializer import (
    build_update_location_command,
    serialize_command,
)
from temi_location_bridge.usecase.ports.config_port import TopicConfig
from temi_location_bridge.usecase.ports.message_bus import MessageBus
from temi_location_bridge.usecase.ports.position_source import PositionSource
from temi_location_bridge.usecase.resolve_location import LocationResolver

logger = logging.getLogger(__name__)

# controller에서 직접 보낼 수 있는 action
_OPERATOR_ACTIONS = frozenset({
    CommandAction.GOTO,
    CommandAction.SPEAK,
    CommandAction.STOP,
    CommandAction.GET_LOCATIONS,
    CommandAction.CAPTURE_ANCHOR,
    CommandAction.CALIBRATE,
    CommandAction.RESET_CALIBRATION,
})


class LocationExporter:
    """측위 업데이트 → Command 토픽 발행기.

    Args:
        bus: 메시지 버스.
        topics: 토픽 설정.
        resolver: 활성 위치 선택기.
        min_interval_sec: 위치 발행 최소 간격 (초).
        clock: 단조 시계 함수 (테스트용 주입).
    """

    def __init__(
        self,
        bus: MessageBus,
        topics: TopicConfig,
        resolver: LocationResolver,
        min_interval_sec: float = 10.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._bus = bus
        self._topics = topics
        self._resolver = resolver
        self._min_interval = min_interval_sec
        self._clock = clock
        self._lock = threading.Lock()
        self._last_report: PositionReport | None = None
        self._last_publish: float | None = None

    @property
    def last_report(self) -> PositionReport | None:
        """마지막으로 수신한 측위 업데이트."""
        with self._lock:
            return self._last_report

    def on_report(self, report: PositionReport) -> bool:
        """측위 업데이트를 처리한다.

        해석 결과는 항상 캐시하며, 발행은 최소 간격으로 제한한다.

        Args:
            report: 측위 원시 업데이트.

        Returns:
            이번 업데이트를 발행했는지 여부.
        """
        with self._lock:
            self._last_report = report

        try:
            resolved = self._resolver.resolve(report)
        except LocationResolutionError as e:
            logger.warning('Location update ignored: %s', e)
            return False
        self._log_resolved(resolved)

        now = self._clock()
        with self._lock:
            if (
                self._last_publish is not None
                and now - self._last_publish < self._min_interval
            ):
                logger.debug(
                    'Location publish throttled (%.1fs since last)',
                    now - self._last_publish,
                )
                return False

        if not self._send(build_update_location_command(report)):
            return False

        with self._lock:
            self._last_publish = now
        return True

    def publish_manual(
        self,
        latitude: float,
        longitude: float,
        survey_east: float = 0.0,
        survey_north: float = 0.0,
        floor_level: int = 0,
    ) -> bool:
        """수동 위치를 즉시 발행한다 (간격 제한 없음).

        Args:
            latitude: 위도 (deg).
            longitude: 경도 (deg).
            survey_east: HK1980 Easting (m).
            survey_north: HK1980 Northing (m).
            floor_level: 층.

        Returns:
            발행 여부.
        """
        timestamp = datetime.now(UTC)
        record = LocationRecord(
            source=LocationSource.MANUAL,
            latitude=latitude,
            longitude=longitude,
            survey_east=survey_east,
            survey_north=survey_north,
            floor_level=floor_level,
            timestamp=timestamp,
        )
        report = PositionReport(
            declared_source=LocationSource.MANUAL,
            indoor=record,
            direction=0.0,
            timestamp=timestamp,
        )
        logger.info(
            'Publishing manual location: lat=%f, lon=%f, E=%.2f, N=%.2f',
            latitude, longitude, survey_east, survey_north,
        )
        with self._lock:
            self._last_report = report
        return self._send(build_update_location_command(report))

    def send_command(self, action: str, **fields: Any) -> bool:
        """운영자 명령을 발행한다.

        Args:
            action: goto, speak, stop, get_locations,
                capture_anchor, calibrate, reset_calibration 중 하나.
            **fields: action 별 추가 필드 (예: location, text, anchor).

        Returns:
            발행 여부.

        Raises:
            ValueError: 지원하지 않는 action일 때.
        """
        if action not in _OPERATOR_ACTIONS:
            raise ValueError(f'Unsupported operator action: {action}')
        return self._send(CommandEnvelope(action=action, payload=fields))

    def run(self, source: PositionSource) -> int:
        """PositionSource가 끝날 때까지 업데이트를 처리한다.

        Args:
            source: 측위 업데이트 공급원.

        Returns:
            발행한 업데이트 수.
        """
        published = 0
        for report in source.reports():
            if self.on_report(report):
                published += 1
        logger.info('Position source exhausted, %d updates published', published)
        return published

    def _send(self, envelope: CommandEnvelope) -> bool:
        if not self._bus.is_connected:
            logger.warning(
                'Bus not connected, dropping command: %s', envelope.action
            )
            return False

        self._bus.publish(
            self._topics.command,
            serialize_command(envelope),
            qos=self._topics.qos,
        )
        logger.debug('Command published: %s', envelope.action)
        return True

    @staticmethod
    def _log_resolved(resolved: ResolvedLocation) -> None:
        active = resolved.active
        if resolved.is_fallback:
            logger.info('GPS selected but unavailable, using indoor location')
        logger.debug(
            'Active location [%s]: lat=%f, lon=%f, E=%s, N=%s, floor=%d',
            resolved.source, active.latitude, active.longitude,
            active.survey_east, active.survey_north, active.floor_level,
        )
