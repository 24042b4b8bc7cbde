"""
도메인 데이터 클래스 통합 모듈.
자막, 트랙, 재생 상태 등 앱 전반에서 공유하는 데이터 클래스를 한 곳에서 관리합니다.
"""

import mimetypes
import os
from dataclasses import dataclass, field
from typing import Optional

from core.constants import AUDIO_EXTENSIONS, SUBTITLE_EXTENSION
from core.errors import PlayerError


# ── 자막 ──────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Subtitle:
    """파싱된 SRT 자막 한 블록"""
    id: int         # 파일에 적힌 번호 (중복/순서 검증 안 함)
    start: float    # 시작 시각 (초)
    end: float      # 종료 시각 (초)
    text: str       # 자막 텍스트 (여러 줄 가능)

    def contains(self, seconds: float) -> bool:
        """주어진 시각이 이 자막 구간 안에 있는지 (양 끝 포함)"""
        return self.start <= seconds <= self.end


# ── 업로드 파일 ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SourceFile:
    """사용자가 선택한 파일 핸들"""
    name: str                       # 파일 이름 (경로 제외)
    path: str                       # 실제 파일 경로
    mime_type: Optional[str] = None

    @classmethod
    def from_path(cls, path: str) -> "SourceFile":
        """경로로부터 파일 핸들 생성 (MIME 타입은 이름으로 추정)"""
        name = os.path.basename(path)
        mime_type, _ = mimetypes.guess_type(name)
        return cls(name=name, path=path, mime_type=mime_type)

    @property
    def media_handle(self) -> str:
        """재생 엔진에 넘길 미디어 핸들"""
        return self.path

    @property
    def base_name(self) -> str:
        """마지막 확장자만 제거한 이름 (a.b.srt -> a.b)"""
        return os.path.splitext(self.name)[0]

    @property
    def is_audio(self) -> bool:
        """MIME 타입이 audio/* 이거나, 추정 실패 시 알려진 오디오 확장자"""
        if self.mime_type and self.mime_type.startswith("audio/"):
            return True
        return os.path.splitext(self.name)[1].lower() in AUDIO_EXTENSIONS

    @property
    def is_subtitle(self) -> bool:
        return self.name.lower().endswith(SUBTITLE_EXTENSION)

    def read_text(self) -> str:
        """파일 전체를 텍스트로 읽기 (UTF-8, BOM 허용)"""
        with open(self.path, "r", encoding="utf-8-sig") as f:
            return f.read()


# ── 트랙 ──────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Track:
    """플레이리스트의 한 곡 (생성 후 변경되지 않음)"""
    id: str
    title: str                              # 확장자를 뺀 파일 이름
    audio_file: SourceFile
    subtitle_file: Optional[SourceFile] = None
    subtitles: tuple[Subtitle, ...] = ()
    duration: float = 0.0                   # 알 수 없으면 0

    @property
    def has_transcript(self) -> bool:
        return len(self.subtitles) > 0


@dataclass
class UploadResult:
    """업로드 배치 한 번의 결과"""
    tracks: list[Track] = field(default_factory=list)
    errors: list[PlayerError] = field(default_factory=list)


# ── 재생 상태 ─────────────────────────────────────────────────────────────────

@dataclass
class PlaybackState:
    """재생 엔진에서 미러링한 재생 상태"""
    is_playing: bool = False
    current_time: float = 0.0   # 초
    duration: float = 0.0       # 초
    playback_rate: float = 1.0
    volume: float = 1.0


# ── UI 표시용 ─────────────────────────────────────────────────────────────────

@dataclass
class TranscriptLine:
    """화면에 표시할 자막 라인 (View에 전달되는 DTO)"""
    index: int
    timestamp: str      # MM:SS
    text: str
    is_active: bool = False


@dataclass
class PlaylistEntry:
    """플레이리스트 패널에 표시할 항목"""
    title: str
    file_name: str
    duration: str       # MM:SS
    is_current: bool = False
