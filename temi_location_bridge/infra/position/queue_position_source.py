"""큐 기반 PositionSource 구현체.

측위 SDK의 콜백 스레드가 push()로 넣은 업데이트를
소비자 스레드가 reports() 이터레이터로 꺼낸다.
"""

from __future__ import annotations

from collections.abc import Iterator
import logging
import queue
import threading

from temi_location_bridge.domain.entities.location import PositionReport
from temi_location_bridge.usecase.ports.position_source import PositionSource

logger = logging.getLogger(__name__)

_CLOSED = object()


class QueuePositionSource(PositionSource):
    """PositionSource의 스레드 안전 큐 구현체.

    Args:
        maxsize: 대기 업데이트 최대 개수. 가득 차면 가장 오래된 것을 버린다.
    """

    def __init__(self, maxsize: int = 100) -> None:
        self._queue: queue.Queue[object] = queue.Queue(maxsize=maxsize)
        self._closed = threading.Event()
        # push()와 close()가 동시에 오래된 항목을 버리지 않도록 직렬화
        self._put_lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def push(self, report: PositionReport) -> None:
        """업데이트를 넣는다. close() 이후에는 무시된다.

        Args:
            report: 측위 원시 업데이트.
        """
        with self._put_lock:
            if self._closed.is_set():
                logger.debug('Source closed, report ignored')
                return
            self._put_dropping_oldest(report)

    def reports(self) -> Iterator[PositionReport]:
        """대기 중인 업데이트를 모두 내보낸 뒤 close()에서 끝난다."""
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                # 다음 이터레이터도 종료되도록 되돌려 놓는다
                self._queue.put_nowait(_CLOSED)
                return
            yield item

    def close(self) -> None:
        with self._put_lock:
            if self._closed.is_set():
                return
            self._closed.set()
            self._put_dropping_oldest(_CLOSED)

    def _put_dropping_oldest(self, item: object) -> None:
        while True:
            try:
                self._queue.put_nowait(item)
                return
            except queue.Full:
                try:
                    self._queue.get_nowait()
                    logger.warning('Position queue full, oldest report dropped')
                except queue.Empty:
                    pass
