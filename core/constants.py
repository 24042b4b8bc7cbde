"""
앱 전역 상수.
"""

# ── 재생 ──────────────────────────────────────────────────────────────────────

MIN_PLAYBACK_RATE = 0.5
MAX_PLAYBACK_RATE = 2.0
PLAYBACK_RATE_STEP = 0.25
DEFAULT_PLAYBACK_RATE = 1.0

SKIP_SECONDS = 5.0                  # 앞/뒤로 건너뛰기 간격
METADATA_PROBE_TIMEOUT_S = 5.0      # 재생 길이 조회 대기 시간
PROBE_MAX_WORKERS = 4               # 업로드 배치 동시 처리 수

# ── 폴링 ──────────────────────────────────────────────────────────────────────

EVENT_POLL_INTERVAL_MS = 50         # 엔진 이벤트 큐 처리 주기
UI_QUEUE_INTERVAL_MS = 50           # UI 명령 큐 처리 주기
NOTICE_DURATION_MS = 4000           # 알림 표시 시간

# ── 파일 ──────────────────────────────────────────────────────────────────────

SUBTITLE_EXTENSION = ".srt"
# SRT가 아닌 자막 형식 (잘못된 자막 파일로 보고)
OTHER_CAPTION_EXTENSIONS = frozenset({".vtt", ".ass", ".ssa", ".sub", ".sbv", ".lrc"})

# MIME 데이터베이스가 없는 환경에서도 오디오로 인식할 확장자
AUDIO_EXTENSIONS = (".mp3", ".wav", ".m4a", ".aac", ".ogg", ".flac", ".opus")

_AUDIO_PATTERNS = " ".join(f"*{ext}" for ext in AUDIO_EXTENSIONS)

AUDIO_FILE_TYPES = [
    ("오디오 및 자막", f"{_AUDIO_PATTERNS} *{SUBTITLE_EXTENSION}"),
    ("오디오", _AUDIO_PATTERNS),
    ("자막", "*.srt"),
    ("모든 파일", "*.*"),
]

# ── 요약 ──────────────────────────────────────────────────────────────────────

DEFAULT_SUMMARY_MODEL = "gemini-2.5-flash"

# ── 창 ────────────────────────────────────────────────────────────────────────

DEFAULT_WINDOW_WIDTH = 1100
DEFAULT_WINDOW_HEIGHT = 680
