"""
재생 시계 어댑터.
외부 재생 엔진의 비동기 알림을 재생 상태(PlaybackState)로 옮기고,
재생 명령을 엔진 호출로 전달합니다.

엔진 알림은 큐에 쌓였다가 process_events()가 호출되는 스레드(UI 메인 스레드)에서만 처리됩니다.
엔진 이벤트를 직접 받는 곳은 이 어댑터뿐입니다.
"""

import dataclasses
import queue
from typing import Callable, Optional

from core.constants import MAX_PLAYBACK_RATE, MIN_PLAYBACK_RATE, DEFAULT_PLAYBACK_RATE
from core.errors import PlaybackEngineError
from core.models import PlaybackState, Track
from services.playback_engine import EngineEvent, EngineEventKind, PlaybackEngine
from settings.settings_manager import SettingsManager


def clamp_rate(rate: float) -> float:
    return max(MIN_PLAYBACK_RATE, min(MAX_PLAYBACK_RATE, rate))


def clamp_volume(volume: float) -> float:
    return max(0.0, min(1.0, volume))


class PlaybackClockAdapter:
    """재생 엔진 ⇄ 재생 상태 어댑터"""

    def __init__(self, engine: PlaybackEngine, settings: SettingsManager) -> None:
        self._engine = engine
        self._settings = settings
        self._events: "queue.Queue[EngineEvent]" = queue.Queue()
        self._loaded = False
        self._halted_by_engine = False

        # 배속/볼륨은 시작 시 한 번만 읽음
        self._state = PlaybackState(
            playback_rate=clamp_rate(settings.get_float("playback_rate", DEFAULT_PLAYBACK_RATE)),
            volume=clamp_volume(settings.get_float("volume", 1.0)),
        )
        self._engine.playback_rate = self._state.playback_rate
        self._engine.volume = self._state.volume
        self._engine.set_event_sink(self._events.put)

        # ── 콜백 (ViewModel이 등록) ────────────────────────────────────────────
        self._on_state_changed: Optional[Callable[[], None]] = None
        self._on_ended: Optional[Callable[[], None]] = None
        self._on_error: Optional[Callable[[PlaybackEngineError], None]] = None

    # ── 콜백 등록 ─────────────────────────────────────────────────────────────

    def set_on_state_changed(self, callback: Callable[[], None]) -> None:
        self._on_state_changed = callback

    def set_on_ended(self, callback: Callable[[], None]) -> None:
        self._on_ended = callback

    def set_on_error(self, callback: Callable[[PlaybackEngineError], None]) -> None:
        self._on_error = callback

    # ── 상태 조회 ─────────────────────────────────────────────────────────────

    @property
    def state(self) -> PlaybackState:
        """현재 재생 상태 복사본"""
        return dataclasses.replace(self._state)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def halted_by_engine(self) -> bool:
        """지금 전달 중인 상태 변경이 엔진의 재생 종료/오류로 멈춘 것인지"""
        return self._halted_by_engine

    # ── 엔진 이벤트 처리 ──────────────────────────────────────────────────────

    def process_events(self) -> None:
        """큐에 쌓인 엔진 이벤트 처리 (메인 스레드에서 주기적으로 호출)"""
        while True:
            try:
                event = self._events.get_nowait()
            except queue.Empty:
                break
            self.handle_event(event)

    def handle_event(self, event: EngineEvent) -> None:
        """엔진 이벤트 하나를 재생 상태에 반영"""
        if not self._loaded:
            return

        kind = event.kind
        if kind is EngineEventKind.TIME_UPDATE:
            self._state.current_time = event.value
        elif kind is EngineEventKind.DURATION_AVAILABLE:
            self._state.duration = event.value
        elif kind is EngineEventKind.STARTED:
            self._state.is_playing = True
        elif kind is EngineEventKind.PAUSED:
            self._state.is_playing = False
        elif kind is EngineEventKind.ENDED:
            self._state.is_playing = False
            self._notify_halted()
            if self._on_ended:
                self._on_ended()
            return
        elif kind is EngineEventKind.ERRORED:
            self._state.is_playing = False
            print(f"[재생] 엔진 오류: {event.message}")
            self._notify_halted()
            if self._on_error:
                self._on_error(PlaybackEngineError(event.message or "오디오 파일을 불러오는 중 오류가 발생했습니다."))
            return

        self._notify()

    def _notify(self) -> None:
        if self._on_state_changed:
            self._on_state_changed()

    def _notify_halted(self) -> None:
        self._halted_by_engine = True
        try:
            self._notify()
        finally:
            self._halted_by_engine = False

    # ── 명령 ──────────────────────────────────────────────────────────────────

    def load(self, track: Track) -> None:
        """트랙 오디오 로드, 위치는 0으로 초기화"""
        # 이전 미디어에서 넘어온 알림은 버림
        self._drain()
        self._engine.load(track.audio_file.media_handle)
        self._loaded = True
        self._state.is_playing = False
        self._state.current_time = 0.0
        self._state.duration = track.duration
        self._notify()

    def unload(self) -> None:
        """미디어 해제 (플레이리스트 초기화, 엔진 오류 시)"""
        self._engine.stop()
        self._drain()
        self._loaded = False
        self._state.is_playing = False
        self._state.current_time = 0.0
        self._state.duration = 0.0
        self._notify()

    def _drain(self) -> None:
        while True:
            try:
                self._events.get_nowait()
            except queue.Empty:
                break

    def play(self) -> None:
        if not self._loaded:
            return
        self._engine.play()
        self._state.is_playing = True
        self._notify()

    def pause(self) -> None:
        if not self._loaded:
            return
        self._engine.pause()
        self._state.is_playing = False
        self._notify()

    def play_pause(self) -> None:
        """재생/일시정지 토글"""
        if self._state.is_playing:
            self.pause()
        else:
            self.play()

    def skip(self, delta_seconds: float) -> None:
        """현재 위치에서 앞/뒤로 이동 (범위 처리는 엔진에 맡김)"""
        if not self._loaded:
            return
        self._engine.current_time = self._engine.current_time + delta_seconds

    def seek(self, target_seconds: float) -> None:
        """지정 위치로 이동, 다음 시간 알림을 기다리지 않고 바로 반영"""
        if not self._loaded:
            return
        self._engine.current_time = target_seconds
        self._state.current_time = target_seconds
        self._notify()

    def set_playback_rate(self, rate: float) -> None:
        """배속 변경 및 저장 (트랙이 바뀌어도 유지)"""
        rate = clamp_rate(rate)
        self._state.playback_rate = rate
        self._engine.playback_rate = rate
        self._settings.set("playback_rate", str(rate))
        self._notify()

    def set_volume(self, volume: float) -> None:
        """볼륨 변경 및 저장"""
        volume = clamp_volume(volume)
        self._state.volume = volume
        self._engine.volume = volume
        self._settings.set("volume", str(volume))
        self._notify()
