"""설정 인프라 (ConfigPort 구현)."""

from temi_location_bridge.infra.config.yaml_config_loader import (
    YamlConfigLoader,
)

__all__ = ["YamlConfigLoader"]
