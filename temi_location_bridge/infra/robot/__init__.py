"""로봇 제어 인프라 (RobotControl 구현)."""

from temi_location_bridge.infra.robot.simulated_robot_control import (
    SimulatedRobotControl,
)

__all__ = ["SimulatedRobotControl"]
