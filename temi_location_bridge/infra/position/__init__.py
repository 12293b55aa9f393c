"""측위 공급원 인프라 (PositionSource 구현)."""

from temi_location_bridge.infra.position.queue_position_source import (
    QueuePositionSource,
)
from temi_location_bridge.infra.position.replay_position_source import (
    ReplayPositionSource,
)

__all__ = ["QueuePositionSource", "ReplayPositionSource"]
