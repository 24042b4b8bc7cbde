"""
SRT 타임스탬프 변환 모듈.
HH:MM:SS,mmm 문자열과 초 단위 실수 사이를 변환합니다.
"""

import math
import re

# 시(1자리 이상):분:초,밀리초
_TIMESTAMP_PATTERN = re.compile(r"^(\d+):(\d{2}):(\d{2}),(\d{3})$")


def parse_timestamp(text: str) -> float:
    """
    SRT 타임스탬프를 초 단위로 변환

    Args:
        text: "01:02:03,456" 형식 문자열

    Returns:
        초 단위 시각. 형식이 맞지 않으면 0.0
    """
    if not isinstance(text, str):
        return 0.0

    match = _TIMESTAMP_PATTERN.match(text.strip())
    if not match:
        return 0.0

    try:
        hours, minutes, seconds, millis = (int(group) for group in match.groups())
    except ValueError:
        return 0.0

    if minutes > 59 or seconds > 59:
        return 0.0

    # 밀리초를 정수로 합친 뒤 한 번만 나눠서 부동소수점 오차 최소화
    total_ms = ((hours * 60 + minutes) * 60 + seconds) * 1000 + millis
    return total_ms / 1000


def _whole_seconds(seconds: object) -> int:
    """표시용 정수 초. 음수/NaN/숫자가 아니면 -1"""
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        return -1
    if math.isnan(seconds) or math.isinf(seconds) or seconds < 0:
        return -1
    return int(seconds)


def format_timestamp(seconds: float) -> str:
    """초를 HH:MM:SS 형식으로 변환 (시간은 두 자리 이상)"""
    total = _whole_seconds(seconds)
    if total < 0:
        return "00:00:00"

    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_clock(seconds: float) -> str:
    """초를 MM:SS 형식으로 변환 (플레이리스트/자막 목록 표시용)"""
    total = _whole_seconds(seconds)
    if total < 0:
        return "00:00"

    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"
