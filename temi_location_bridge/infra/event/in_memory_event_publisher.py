"""인메모리 도메인 이벤트 발행자 구현체."""

import logging
import threading
from collections import defaultdict
from collections.abc import Callable

from temi_location_bridge.domain.events.robot_events import DomainEvent
from temi_location_bridge.usecase.ports.event_publisher import EventPublisher

logger = logging.getLogger(__name__)

Handler = Callable[[DomainEvent], None]


class InMemoryEventPublisher(EventPublisher):
    """EventPublisher의 인메모리 구현체.

    로봇 SDK 스레드나 MQTT 네트워크 스레드에서 호출될 수 있으며,
    핸들러는 호출한 스레드에서 동기적으로 실행된다.
    이벤트의 MRO를 따라 구체 타입 핸들러부터 DomainEvent 핸들러 순으로
    호출하고, 여러 타입에 등록된 같은 핸들러는 한 번만 호출한다.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handlers: dict[type[DomainEvent], list[Handler]] = (
            defaultdict(list)
        )

    def publish(self, event: DomainEvent) -> None:
        event_type = type(event)
        handlers = self._handlers_for(event_type)
        logger.debug(
            "Dispatching %s to %d handler(s)",
            event_type.__name__, len(handlers),
        )

        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Handler failed for %s", event_type.__name__
                )

    def subscribe(
        self, event_type: type[DomainEvent], handler: Handler
    ) -> None:
        with self._lock:
            handlers = self._handlers[event_type]
            if handler in handlers:
                return
            handlers.append(handler)
        logger.debug("Handler registered for %s", event_type.__name__)

    def unsubscribe(
        self, event_type: type[DomainEvent], handler: Handler
    ) -> None:
        with self._lock:
            handlers = self._handlers.get(event_type, [])
            if handler not in handlers:
                return
            handlers.remove(handler)
        logger.debug("Handler removed for %s", event_type.__name__)

    def _handlers_for(self, event_type: type) -> list[Handler]:
        result: list[Handler] = []
        with self._lock:
            for cls in event_type.__mro__:
                if not issubclass(cls, DomainEvent):
                    continue
                for handler in self._handlers.get(cls, []):
                    if handler not in result:
                        result.append(handler)
        return result
