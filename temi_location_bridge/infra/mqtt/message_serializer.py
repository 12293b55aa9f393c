"""MQTT 메시지 JSON 직렬화/역직렬화.

도메인 엔티티 ↔ 엔벨로프 JSON (camelCase) 변환을 담당한다.
snake_case(도메인) ↔ camelCase(측위 SDK 필드명) 변환은
이 모듈에서만 처리한다.
"""

from __future__ import annotations

from dataclasses import fields
from datetime import UTC, datetime
import json
import math
import re
from typing import Any

from temi_location_bridge.domain.entities.envelope import (
    CommandEnvelope,
    LocationsEnvelope,
    StatusEnvelope,
)
from temi_location_bridge.domain.entities.location import (
    LocationRecord,
    PositionReport,
)
from temi_location_bridge.domain.enums import CommandAction, LocationSource
from temi_location_bridge.domain.exceptions import MalformedCommandError


# -- snake_case ↔ camelCase 변환 --

_SNAKE_RE = re.compile(r'_([a-z])')
_CAMEL_RE = re.compile(r'([A-Z])')

# 측위 SDK에서 특별한 매핑이 필요한 필드
_SPECIAL_SNAKE_TO_CAMEL: dict[str, str] = {
    'survey_east': 'hkE',
    'survey_north': 'hkN',
    'is_outdoor': 'isOutDoor',
}

_SPECIAL_CAMEL_TO_SNAKE: dict[str, str] = {
    v: k for k, v in _SPECIAL_SNAKE_TO_CAMEL.items()
}

# 레코드 필드 중 JSON에 직접 싣지 않는 필드
_RECORD_EXCLUDED = frozenset({'source', 'timestamp'})

_FLOAT_FIELDS = frozenset({
    'latitude', 'longitude', 'survey_east', 'survey_north',
    'horizontal_accuracy', 'direction',
})
_STR_FIELDS = frozenset({'geofence_id', 'geofence_name', 'floor_name'})


def _snake_to_camel(name: str) -> str:
    """snake_case → camelCase 변환."""
    if name in _SPECIAL_SNAKE_TO_CAMEL:
        return _SPECIAL_SNAKE_TO_CAMEL[name]
    return _SNAKE_RE.sub(lambda m: m.group(1).upper(), name)


def _camel_to_snake(name: str) -> str:
    """camelCase → snake_case 변환."""
    if name in _SPECIAL_CAMEL_TO_SNAKE:
        return _SPECIAL_CAMEL_TO_SNAKE[name]
    return _CAMEL_RE.sub(r'_\1', name).lower()


def _to_epoch_ms(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def _from_epoch_ms(value: Any) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(float(value) / 1000.0, UTC)


def _finite_float(value: Any, name: str) -> float:
    """값을 float로 변환하고 NaN/Infinity를 거부한다."""
    result = float(value)
    if not math.isfinite(result):
        raise ValueError(f'{name} must be finite, got {value!r}')
    return result


def _loads_object(payload: bytes | str) -> dict[str, Any]:
    """페이로드를 JSON 객체로 파싱한다."""
    if isinstance(payload, bytes):
        try:
            payload = payload.decode('utf-8')
        except UnicodeDecodeError as e:
            raise MalformedCommandError(f'Payload is not UTF-8: {e}') from e
    try:
        data = json.loads(payload)
    except (ValueError, RecursionError) as e:
        raise MalformedCommandError(f'Invalid JSON: {e}') from e
    if not isinstance(data, dict):
        raise MalformedCommandError('Payload is not a JSON object')
    return data


# -- 측위 레코드 --

def _parse_record(
    data: Any,
    source: LocationSource,
    timestamp: datetime | None,
) -> LocationRecord | None:
    """location/gpsLocation 객체를 LocationRecord로 변환한다.

    null 또는 빈 객체는 레코드 없음으로 취급한다.
    """
    if data is None or data == {}:
        return None
    if not isinstance(data, dict):
        raise MalformedCommandError(
            f'Location record must be an object, got {type(data).__name__}'
        )

    kwargs: dict[str, Any] = {}
    try:
        for key, value in data.items():
            name = _camel_to_snake(key)
            if value is None:
                continue
            if name in _FLOAT_FIELDS:
                kwargs[name] = _finite_float(value, key)
            elif name in _STR_FIELDS:
                kwargs[name] = str(value)
            elif name == 'floor_level':
                kwargs[name] = int(_finite_float(value, key))
            elif name == 'is_outdoor':
                kwargs[name] = bool(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise MalformedCommandError(f'Invalid location field: {e}') from e

    return LocationRecord(source=source, timestamp=timestamp, **kwargs)


def _record_to_dict(record: LocationRecord) -> dict[str, Any]:
    """LocationRecord를 camelCase JSON dict로 변환한다."""
    result: dict[str, Any] = {}
    for f in fields(record):
        if f.name in _RECORD_EXCLUDED:
            continue
        value = getattr(record, f.name)
        if value is None:
            continue
        result[_snake_to_camel(f.name)] = value
    return result


def parse_position_report(location_data: Any) -> PositionReport:
    """update_location 명령의 location_data를 PositionReport로 변환한다.

    Args:
        location_data: location_data JSON 객체.

    Returns:
        측위 원시 업데이트.

    Raises:
        MalformedCommandError: 구조나 값이 잘못되었을 때.
    """
    if not isinstance(location_data, dict):
        raise MalformedCommandError('location_data must be an object')

    declared = str(location_data.get('locationSource') or 'Unknown')
    try:
        timestamp = _from_epoch_ms(location_data.get('timestamp'))
        direction = location_data.get('direction')
        direction = (
            _finite_float(direction, 'direction')
            if direction is not None else None
        )
    except (TypeError, ValueError, OverflowError, OSError) as e:
        raise MalformedCommandError(f'Invalid location_data field: {e}') from e

    indoor_source = (
        LocationSource.MANUAL
        if declared == LocationSource.MANUAL
        else LocationSource.LOCATION_ENGINE
    )
    return PositionReport(
        declared_source=declared,
        indoor=_parse_record(
            location_data.get('location'), indoor_source, timestamp
        ),
        gps=_parse_record(
            location_data.get('gpsLocation'), LocationSource.GPS, timestamp
        ),
        direction=direction,
        timestamp=timestamp,
    )


def serialize_position_report(report: PositionReport) -> dict[str, Any]:
    """PositionReport를 location_data JSON 객체로 변환한다."""
    result: dict[str, Any] = {}
    if report.indoor is not None:
        result['location'] = _record_to_dict(report.indoor)
    if report.gps is not None:
        result['gpsLocation'] = _record_to_dict(report.gps)
    result['locationSource'] = report.declared_source
    result['direction'] = (
        report.direction if report.direction is not None else 0.0
    )
    timestamp = report.timestamp or datetime.now(UTC)
    result['timestamp'] = _to_epoch_ms(timestamp)
    return result


# -- Command --

def parse_command(payload: bytes | str) -> CommandEnvelope:
    """Command 토픽 페이로드를 CommandEnvelope로 변환한다.

    Raises:
        MalformedCommandError: JSON이 아니거나 action이 없을 때.
    """
    data = _loads_object(payload)
    action = data.pop('action', None)
    if not isinstance(action, str) or not action:
        raise MalformedCommandError('Missing action field')
    return CommandEnvelope(action=action, payload=data)


def serialize_command(envelope: CommandEnvelope) -> str:
    """CommandEnvelope → JSON 문자열."""
    return json.dumps({'action': envelope.action, **envelope.payload})


def build_update_location_command(report: PositionReport) -> CommandEnvelope:
    """PositionReport로 update_location 명령을 만든다."""
    return CommandEnvelope(
        action=CommandAction.UPDATE_LOCATION,
        payload={'location_data': serialize_position_report(report)},
    )


# -- Status / Locations --

def serialize_status(envelope: StatusEnvelope) -> str:
    """StatusEnvelope → JSON 문자열."""
    return json.dumps({
        'status': envelope.status,
        'detail': envelope.detail,
        'timestamp': _to_epoch_ms(envelope.timestamp),
    })


def deserialize_status(payload: bytes | str) -> StatusEnvelope:
    """Status 토픽 페이로드 → StatusEnvelope."""
    data = _loads_object(payload)
    try:
        timestamp = _from_epoch_ms(data.get('timestamp'))
    except (TypeError, ValueError, OverflowError, OSError) as e:
        raise MalformedCommandError(f'Invalid timestamp: {e}') from e
    return StatusEnvelope(
        status=str(data.get('status', 'unknown')),
        detail=str(data.get('detail', '')),
        timestamp=timestamp or datetime.now(UTC),
    )


def serialize_locations(envelope: LocationsEnvelope) -> str:
    """LocationsEnvelope → JSON 문자열."""
    return json.dumps({
        'type': 'locations',
        'locations': list(envelope.locations),
    })


def deserialize_locations(payload: bytes | str) -> LocationsEnvelope:
    """Locations 토픽 페이로드 → LocationsEnvelope."""
    data = _loads_object(payload)
    if data.get('type') != 'locations':
        raise MalformedCommandError('Not a locations message')
    locations = data.get('locations') or []
    if not isinstance(locations, list):
        raise MalformedCommandError('locations must be a list')
    return LocationsEnvelope(locations=[str(loc) for loc in locations])
