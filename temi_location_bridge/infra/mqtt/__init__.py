"""MQTT 통신 인프라 (MessageBus 구현, 와이어 코덱)."""

from temi_location_bridge.infra.mqtt.mqtt_client import MqttClient

__all__ = ["MqttClient"]
