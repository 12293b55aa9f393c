"""temi Location Bridge 유스케이스 레이어.

도메인 로직을 포트를 통해 조율하는 애플리케이션 서비스를 정의한다.
와이어 코덱(infra.mqtt.message_serializer) 외의 infra 의존성은 없다.
"""

from temi_location_bridge.usecase.capture_anchor import AnchorCapture
from temi_location_bridge.usecase.coordinate_transform import (
    CoordinateTransformEngine,
)
from temi_location_bridge.usecase.dispatch_command import CommandDispatcher
from temi_location_bridge.usecase.export_location import LocationExporter
from temi_location_bridge.usecase.publish_status import StatusPublisher
from temi_location_bridge.usecase.resolve_location import LocationResolver

__all__ = [
    "AnchorCapture",
    "CommandDispatcher",
    "CoordinateTransformEngine",
    "LocationExporter",
    "LocationResolver",
    "StatusPublisher",
]
