"""temi Location Bridge.

측위 피드(HK1980 그리드 + GPS)를 MQTT를 통해 로봇 맵 좌표계의
repose 명령으로 변환하는 controller/relay 브릿지.
"""

__version__ = '0.1.0'
