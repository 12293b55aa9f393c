"""명령 처리 유스케이스.

Command 토픽 메시지를 파싱하여 action 별로 좌표 변환 엔진과
RobotControl을 호출하고, 결과를 상태 메시지로 보고한다.

메시지는 한 번에 하나씩 처리된다. 어떤 예외도 handle_message() 밖으로
전파되지 않으며, 처리 중 오류는 'error' 상태 메시지로 변환된다.
"""

from __future__ import annotations

from collections.abc import Callable
import logging

from temi_location_bridge.domain.entities.envelope import CommandEnvelope
from temi_location_bridge.domain.enums import CommandAction, StatusCode
from temi_location_bridge.domain.exceptions import (
    AnchorCaptureError,
    LocationResolutionError,
    MalformedCommandError,
    NotCalibratedError,
)
from temi_location_bridge.domain.value_objects.position import RobotPose
from temi_location_bridge.infra.mqtt.message_serializer import (
    parse_command,
    parse_position_report,
)
from temi_location_bridge.usecase.capture_anchor import AnchorCapture
from temi_location_bridge.usecase.coordinate_transform import (
    CoordinateTransformEngine,
)
from temi_location_bridge.usecase.ports.config_port import RelayConfig
from temi_location_bridge.usecase.ports.robot_control import RobotControl
from temi_location_bridge.usecase.publish_status import StatusPublisher
from temi_location_bridge.usecase.resolve_location import LocationResolver

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Command 토픽 메시지 처리기.

    Args:
        engine: 좌표 변환 엔진.
        resolver: 활성 위치 선택기.
        robot: 로봇 제어 인터페이스.
        status: 상태 메시지 발행자.
        anchors: 기준점 캡처 유스케이스.
        config: relay 설정.
    """

    def __init__(
        self,
        engine: CoordinateTransformEngine,
        resolver: LocationResolver,
        robot: RobotControl,
        status: StatusPublisher,
        anchors: AnchorCapture,
        config: RelayConfig,
    ) -> None:
        self._engine = engine
        self._resolver = resolver
        self._robot = robot
        self._status = status
        self._anchors = anchors
        self._config = config

        self._handlers: dict[str, Callable[[CommandEnvelope], None]] = {
            CommandAction.UPDATE_LOCATION: self._update_location,
            CommandAction.GOTO: self._goto,
            CommandAction.SPEAK: self._speak,
            CommandAction.STOP: self._stop,
            CommandAction.GET_LOCATIONS: self._get_locations,
            CommandAction.CAPTURE_ANCHOR: self._capture_anchor,
            CommandAction.CALIBRATE: self._calibrate,
            CommandAction.RESET_CALIBRATION: self._reset_calibration,
        }

    def handle_message(self, topic: str, payload: bytes) -> None:
        """메시지 버스 콜백.

        Args:
            topic: 수신 토픽.
            payload: 원시 페이로드.
        """
        try:
            envelope = parse_command(payload)
        except MalformedCommandError as e:
            logger.warning('Dropping malformed message on %s: %s', topic, e)
            return

        self.dispatch(envelope)

    def dispatch(self, envelope: CommandEnvelope) -> None:
        """action에 맞는 처리기를 실행한다.

        Args:
            envelope: 수신한 명령.
        """
        handler = self._handlers.get(envelope.action)
        if handler is None:
            logger.warning('Ignoring unknown action: %s', envelope.action)
            return

        try:
            handler(envelope)
        except (MalformedCommandError, LocationResolutionError) as e:
            logger.warning('%s: message dropped: %s', envelope.action, e)
        except Exception as e:
            logger.exception('Error handling command: %s', envelope.action)
            self._report_error(str(e) or type(e).__name__)

    # -- action 처리기 --

    def _update_location(self, envelope: CommandEnvelope) -> None:
        location_data = envelope.payload.get('location_data')
        if location_data is None:
            raise MalformedCommandError('missing location_data')

        report = parse_position_report(location_data)
        resolved = self._resolver.resolve(report)
        active = resolved.active
        direction = (
            resolved.direction
            if resolved.direction is not None
            else self._config.default_yaw
        )

        if self._config.use_survey_mapping and active.has_survey_fix:
            try:
                pose = self._engine.apply(
                    active.survey_east, active.survey_north, direction
                )
            except NotCalibratedError:
                logger.warning('Not calibrated, skipping repose')
                self._status.publish(
                    StatusCode.NOT_CALIBRATED,
                    'Location received but coordinate mapper '
                    'is not calibrated',
                )
                return
        else:
            logger.warning('Using raw lat/lon as pose, only for testing')
            pose = RobotPose(
                x=active.latitude, y=active.longitude, yaw=direction
            )

        if not self._ensure_ready(envelope.action):
            return

        logger.info(
            'Calling repose with pose(x=%.3f, y=%.3f, yaw=%.1f)',
            pose.x, pose.y, pose.yaw,
        )
        self._robot.reposition(pose)
        self._status.publish(
            StatusCode.REPOSING,
            f'Repose started (x={pose.x:.3f}, y={pose.y:.3f}, '
            f'yaw={pose.yaw:.1f})',
        )

    def _goto(self, envelope: CommandEnvelope) -> None:
        location = envelope.get_str('location')
        if location is None:
            logger.warning('goto: missing location')
            return
        if not self._ensure_ready(envelope.action):
            return

        self._robot.go_to(location)
        self._status.publish(StatusCode.GOING_TO, f'Going to {location}')

    def _speak(self, envelope: CommandEnvelope) -> None:
        text = envelope.get_str('text')
        if text is None:
            logger.warning('speak: missing text')
            return
        if not self._ensure_ready(envelope.action):
            return

        self._robot.speak(text)
        self._status.publish(StatusCode.SPEAKING, text)

    def _stop(self, envelope: CommandEnvelope) -> None:
        if not self._ensure_ready(envelope.action):
            return

        self._robot.stop_movement()
        self._status.publish(StatusCode.STOPPED, 'Movement stopped')

    def _get_locations(self, envelope: CommandEnvelope) -> None:
        if not self._ensure_ready(envelope.action):
            return

        self._status.publish_locations(self._robot.get_locations())

    def _capture_anchor(self, envelope: CommandEnvelope) -> None:
        label = envelope.get_str('anchor')
        if label is None:
            logger.warning('capture_anchor: missing anchor label')
            return

        try:
            anchor = self._anchors.capture(label)
        except AnchorCaptureError as e:
            logger.warning('Anchor capture failed: %s', e)
            self._status.publish(
                StatusCode.ERROR, f'Anchor capture failed: {e}'
            )
            return

        self._status.publish(
            StatusCode.ANCHOR_CAPTURED,
            f'Anchor {label.upper()}: survey({anchor.survey_east:.2f}, '
            f'{anchor.survey_north:.2f}) <-> map({anchor.map_x:.3f}, '
            f'{anchor.map_y:.3f})',
        )

    def _calibrate(self, envelope: CommandEnvelope) -> None:
        try:
            ok = self._anchors.calibrate()
        except AnchorCaptureError as e:
            self._status.publish(StatusCode.CALIBRATION_FAILED, str(e))
            return

        if ok:
            self._status.publish(
                StatusCode.CALIBRATED, self._engine.summary()
            )
        else:
            self._status.publish(
                StatusCode.CALIBRATION_FAILED,
                'Anchors too close, choose points at least 0.5 m apart',
            )

    def _reset_calibration(self, envelope: CommandEnvelope) -> None:
        self._anchors.reset()
        self._status.publish(
            StatusCode.CALIBRATION_RESET, 'Calibration reset'
        )

    # -- 내부 --

    def _ensure_ready(self, action: str) -> bool:
        """로봇 준비 상태를 확인하고, 아니면 상태 메시지를 발행한다."""
        if self._robot.is_ready:
            return True

        logger.warning('Robot not ready, %s skipped', action)
        self._status.publish(
            StatusCode.ROBOT_NOT_READY, f'Robot not ready, {action} skipped'
        )
        return False

    def _report_error(self, detail: str) -> None:
        """'error' 상태를 발행한다. 발행 실패는 로깅만 한다."""
        try:
            self._status.publish(StatusCode.ERROR, detail)
        except Exception:
            logger.exception('Failed to publish error status')
