"""temi Location Bridge 도메인 예외 정의."""


class DomainError(Exception):
    """도메인 계층 기본 예외."""


class MalformedCommandError(DomainError):
    """파싱할 수 없는 메시지 또는 필수 필드 누락 시."""


class LocationResolutionError(DomainError):
    """선택된 측위 출처의 레코드가 없을 때."""


class NotCalibratedError(DomainError):
    """캘리브레이션 전에 좌표 변환을 요청할 때."""


class AnchorCaptureError(DomainError):
    """캘리브레이션 기준점을 캡처할 수 없을 때."""


class MqttConnectionError(DomainError):
    """MQTT 브로커 연결 실패 시."""
