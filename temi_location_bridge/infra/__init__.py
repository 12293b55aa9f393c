"""temi Location Bridge 인프라 레이어.

usecase 포트의 구현체(MQTT, YAML 설정/저장소, 로봇, 측위 공급원)를 정의한다.
"""
