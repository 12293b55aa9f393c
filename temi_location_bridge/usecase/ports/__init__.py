"""유스케이스 포트 인터페이스 (ABC).

infra 레이어에서 구현해야 하는 추상 인터페이스를 정의한다.
"""

from temi_location_bridge.usecase.ports.calibration_store import (
    CalibrationStore,
)
from temi_location_bridge.usecase.ports.config_port import (
    AppConfig,
    ConfigPort,
    ControllerConfig,
    MqttConfig,
    RelayConfig,
    TopicConfig,
)
from temi_location_bridge.usecase.ports.event_publisher import EventPublisher
from temi_location_bridge.usecase.ports.key_value_store import KeyValueStore
from temi_location_bridge.usecase.ports.message_bus import MessageBus
from temi_location_bridge.usecase.ports.position_source import PositionSource
from temi_location_bridge.usecase.ports.robot_control import RobotControl

__all__ = [
    "AppConfig",
    "CalibrationStore",
    "ConfigPort",
    "ControllerConfig",
    "EventPublisher",
    "KeyValueStore",
    "MessageBus",
    "MqttConfig",
    "PositionSource",
    "RelayConfig",
    "RobotControl",
    "TopicConfig",
]
