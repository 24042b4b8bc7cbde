"""
재생 엔진 인터페이스.
실제 디코딩/출력은 외부 엔진(libVLC 등)이 담당하고, 앱은 이 인터페이스만 사용합니다.
엔진 알림은 EngineEvent로 변환되어 등록된 싱크로 전달됩니다.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class EngineEventKind(Enum):
    TIME_UPDATE = "time_update"
    DURATION_AVAILABLE = "duration_available"
    STARTED = "started"
    PAUSED = "paused"
    ENDED = "ended"
    ERRORED = "errored"


@dataclass(frozen=True)
class EngineEvent:
    """재생 엔진 알림 한 건"""
    kind: EngineEventKind
    value: float = 0.0      # TIME_UPDATE / DURATION_AVAILABLE 의 초 단위 값
    message: str = ""       # ERRORED 상세


EventSink = Callable[[EngineEvent], None]


class PlaybackEngine(ABC):
    """외부 재생 엔진 계약"""

    def __init__(self) -> None:
        self._event_sink: Optional[EventSink] = None

    def set_event_sink(self, sink: Optional[EventSink]) -> None:
        """엔진 알림을 받을 콜백 등록 (어댑터만 등록)"""
        self._event_sink = sink

    def _emit(self, kind: EngineEventKind, value: float = 0.0, message: str = "") -> None:
        if self._event_sink:
            self._event_sink(EngineEvent(kind=kind, value=value, message=message))

    # ── 명령 ──────────────────────────────────────────────────────────────────

    @abstractmethod
    def load(self, handle: str) -> None:
        """미디어 로드 (재생은 시작하지 않음)"""

    @abstractmethod
    def play(self) -> None: ...

    @abstractmethod
    def pause(self) -> None: ...

    @abstractmethod
    def stop(self) -> None:
        """재생 중지 및 현재 미디어 해제"""

    @abstractmethod
    def release(self) -> None:
        """엔진 자원 해제 (앱 종료 시)"""

    # ── 속성 ──────────────────────────────────────────────────────────────────

    @property
    @abstractmethod
    def current_time(self) -> float: ...

    @current_time.setter
    @abstractmethod
    def current_time(self, seconds: float) -> None: ...

    @property
    @abstractmethod
    def playback_rate(self) -> float: ...

    @playback_rate.setter
    @abstractmethod
    def playback_rate(self, rate: float) -> None: ...

    @property
    @abstractmethod
    def volume(self) -> float: ...

    @volume.setter
    @abstractmethod
    def volume(self, volume: float) -> None: ...

    @property
    @abstractmethod
    def duration(self) -> float: ...

    # ── 메타데이터 ────────────────────────────────────────────────────────────

    @abstractmethod
    def probe_duration(self, handle: str, timeout: float) -> float:
        """
        미디어를 재생하지 않고 길이만 조회 (1회성, 비동기 로드 후 대기)

        Raises:
            MetadataProbeError: 제한 시간 안에 길이를 알아내지 못한 경우
        """
