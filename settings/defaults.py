"""
기본 설정값 상수.
설정 파일은 문자열 → 문자열 맵이므로 모든 값을 문자열로 보관합니다 (예: "1.25", "true").
"""

DEFAULT_SETTINGS: dict[str, str] = {
    # 재생
    "playback_rate": "1.0",
    "volume": "1.0",
    # AI 요약
    "ai_summary_enabled": "false",
    # 외관
    "background_color": "#1a1a2e",
    "text_color": "#e0e0e0",
    "highlight_color": "#e94560",
    "font_family": "Malgun Gothic",
    "font_size": "11",
}
