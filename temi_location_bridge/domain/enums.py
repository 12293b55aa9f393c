"""temi Location Bridge 도메인 열거형 정의."""

from enum import IntEnum, StrEnum


class LocationSource(StrEnum):
    """측위 레코드의 출처."""

    LOCATION_ENGINE = 'LocationEngine'
    GPS = 'GPS'
    MANUAL = 'Manual'


class CommandAction(StrEnum):
    """Command 토픽으로 수신하는 action 종류."""

    UPDATE_LOCATION = 'update_location'
    GOTO = 'goto'
    SPEAK = 'speak'
    STOP = 'stop'
    GET_LOCATIONS = 'get_locations'
    CAPTURE_ANCHOR = 'capture_anchor'
    CALIBRATE = 'calibrate'
    RESET_CALIBRATION = 'reset_calibration'


class StatusCode(StrEnum):
    """Status 토픽으로 발행하는 상태 코드.

    로봇 repose 진행 상태는 ``repose_<code>`` 형태로 별도 생성된다.
    """

    READY = 'ready'
    REPOSING = 'reposing'
    NOT_CALIBRATED = 'not_calibrated'
    ROBOT_NOT_READY = 'robot_not_ready'
    GOING_TO = 'going_to'
    SPEAKING = 'speaking'
    STOPPED = 'stopped'
    ANCHOR_CAPTURED = 'anchor_captured'
    CALIBRATED = 'calibrated'
    CALIBRATION_FAILED = 'calibration_failed'
    CALIBRATION_RESET = 'calibration_reset'
    ERROR = 'error'


class ReposeStatus(IntEnum):
    """로봇 SDK가 보고하는 repose 진행 상태."""

    IDLE = 0
    REPOSE_REQUIRED = 1
    REPOSING_START = 2
    REPOSING_GOING = 3
    REPOSING_COMPLETE = 4
    REPOSING_OBSTACLE_DETECTED = 5
    REPOSING_ABORT = 6

    @property
    def label(self) -> str:
        """사람이 읽을 수 있는 상태 이름."""
        return _REPOSE_LABELS[self]


_REPOSE_LABELS: dict[ReposeStatus, str] = {
    ReposeStatus.IDLE: 'Idle',
    ReposeStatus.REPOSE_REQUIRED: 'Repose Required',
    ReposeStatus.REPOSING_START: 'Reposing...',
    ReposeStatus.REPOSING_GOING: 'Reposing (searching)',
    ReposeStatus.REPOSING_COMPLETE: 'Repose Complete',
    ReposeStatus.REPOSING_OBSTACLE_DETECTED: 'Obstacle Detected',
    ReposeStatus.REPOSING_ABORT: 'Repose Aborted',
}
