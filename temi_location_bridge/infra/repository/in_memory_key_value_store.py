"""인메모리 key/value 저장소 구현체."""

import threading
from typing import Any

from temi_location_bridge.usecase.ports.key_value_store import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """KeyValueStore의 인메모리 구현체.

    프로세스 종료 시 내용이 사라진다. 테스트와 영속화가 필요 없는
    실행에 사용한다.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._lock = threading.Lock()
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def update(self, values: dict[str, Any]) -> None:
        with self._lock:
            self._data.update(values)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def snapshot(self) -> dict[str, Any]:
        """저장된 내용의 사본."""
        with self._lock:
            return dict(self._data)
