"""temi Location Bridge 도메인 레이어.

좌표 변환 값 객체, 위치/메시지 엔티티, 도메인 이벤트와 예외를 정의한다.
외부 라이브러리 의존성이 없다.
"""
