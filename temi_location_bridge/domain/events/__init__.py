"""temi Location Bridge 도메인 이벤트."""

from temi_location_bridge.domain.events.robot_events import (
    ConnectionChangedEvent,
    DomainEvent,
    ReposeStatusChangedEvent,
    RobotReadyEvent,
)

__all__ = [
    "ConnectionChangedEvent",
    "DomainEvent",
    "ReposeStatusChangedEvent",
    "RobotReadyEvent",
]
