"""설정 포트 인터페이스.

애플리케이션 설정의 로딩을 추상화한다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MqttConfig:
    """MQTT 브로커 접속 설정.

    Args:
        broker_host: 브로커 호스트 주소.
        broker_port: 브로커 포트 번호.
        keepalive_sec: 연결 유지 간격 (초).
        reconnect_max_delay_sec: 재연결 최대 대기 시간 (초).
        username: 인증 사용자명. 빈 문자열이면 인증 없음.
        password: 인증 비밀번호.
        client_id: MQTT 클라이언트 ID.
    """

    broker_host: str = 'localhost'
    broker_port: int = 1883
    keepalive_sec: int = 20
    reconnect_max_delay_sec: int = 60
    username: str = ''
    password: str = ''
    client_id: str = ''


@dataclass(frozen=True)
class TopicConfig:
    """MQTT 토픽 설정.

    Args:
        command: controller → relay 명령 토픽.
        status: relay → controller 상태 토픽.
        locations: relay → controller 위치 목록 토픽.
        qos: 발행/구독 QoS.
    """

    command: str = 'temi/command'
    status: str = 'temi/status'
    locations: str = 'temi/location'
    qos: int = 1


@dataclass(frozen=True)
class RelayConfig:
    """Relay(로봇 측) 설정.

    Args:
        use_survey_mapping: HK1980 좌표를 캘리브레이션 변환으로 매핑할지 여부.
            False이면 위도/경도를 그대로 사용한다 (테스트 전용).
        default_yaw: direction이 없을 때 사용할 방향 (deg).
        calibration_path: 캘리브레이션 key/value 저장 파일 경로.
    """

    use_survey_mapping: bool = True
    default_yaw: float = 0.0
    calibration_path: str = 'calibration.yaml'


@dataclass(frozen=True)
class ControllerConfig:
    """Controller(측위 측) 설정.

    Args:
        min_publish_interval_sec: 위치 발행 최소 간격 (초).
        replay_path: 재생할 측위 기록 파일 경로. 빈 문자열이면 사용 안 함.
        replay_interval_sec: 재생 시 업데이트 간격 (초).
    """

    min_publish_interval_sec: float = 10.0
    replay_path: str = ''
    replay_interval_sec: float = 1.0


@dataclass(frozen=True)
class AppConfig:
    """전체 애플리케이션 설정."""

    mqtt: MqttConfig = field(default_factory=MqttConfig)
    topics: TopicConfig = field(default_factory=TopicConfig)
    relay: RelayConfig = field(default_factory=RelayConfig)
    controller: ControllerConfig = field(default_factory=ControllerConfig)


class ConfigPort(ABC):
    """설정 로더 인터페이스."""

    @abstractmethod
    def load(self) -> AppConfig:
        """설정을 로드한다.

        Returns:
            애플리케이션 설정.
        """
