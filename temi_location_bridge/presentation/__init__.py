"""temi Location Bridge 프레젠테이션 레이어 (relay/controller 진입점)."""
