"""
libVLC 기반 재생 엔진.
python-vlc의 MediaPlayer를 PlaybackEngine 인터페이스로 감쌉니다.

libVLC 이벤트 콜백은 VLC 내부 스레드에서 호출되므로,
콜백 안에서는 libVLC 함수를 다시 호출하지 않고 EngineEvent만 전달합니다.
"""

import threading

import vlc

from core.errors import MetadataProbeError
from services.playback_engine import EngineEventKind, PlaybackEngine


class VlcPlaybackEngine(PlaybackEngine):
    """libVLC 재생 엔진"""

    def __init__(self, *vlc_args: str) -> None:
        super().__init__()
        self._instance = vlc.Instance(*vlc_args)
        self._player = self._instance.media_player_new()
        self._media = None
        self._rate: float = 1.0
        self._volume: float = 1.0
        self._attach_events()

    def _attach_events(self) -> None:
        """MediaPlayer 이벤트 → EngineEvent 변환 등록"""
        em = self._player.event_manager()
        em.event_attach(vlc.EventType.MediaPlayerTimeChanged, self._on_time_changed)
        em.event_attach(vlc.EventType.MediaPlayerLengthChanged, self._on_length_changed)
        em.event_attach(vlc.EventType.MediaPlayerPlaying, lambda e: self._emit(EngineEventKind.STARTED))
        em.event_attach(vlc.EventType.MediaPlayerPaused, lambda e: self._emit(EngineEventKind.PAUSED))
        em.event_attach(vlc.EventType.MediaPlayerEndReached, lambda e: self._emit(EngineEventKind.ENDED))
        em.event_attach(vlc.EventType.MediaPlayerEncounteredError, self._on_error)

    def _on_time_changed(self, event) -> None:
        self._emit(EngineEventKind.TIME_UPDATE, max(0, event.u.new_time) / 1000)

    def _on_length_changed(self, event) -> None:
        if event.u.new_length > 0:
            self._emit(EngineEventKind.DURATION_AVAILABLE, event.u.new_length / 1000)

    def _on_error(self, event) -> None:
        print("[VLC] 재생 오류 이벤트 수신")
        self._emit(EngineEventKind.ERRORED, message="오디오를 재생할 수 없습니다.")

    # ── 명령 ──────────────────────────────────────────────────────────────────

    def load(self, handle: str) -> None:
        self._release_media()
        self._media = self._instance.media_new(handle)
        self._player.set_media(self._media)

    def play(self) -> None:
        if self._player.play() == -1:
            self._emit(EngineEventKind.ERRORED, message="재생을 시작할 수 없습니다.")
            return
        # 미디어가 바뀌면 배속/볼륨이 초기화될 수 있으므로 매번 다시 적용
        self._player.set_rate(self._rate)
        self._player.audio_set_volume(int(round(self._volume * 100)))

    def pause(self) -> None:
        self._player.set_pause(1)

    def stop(self) -> None:
        self._player.stop()
        self._release_media()

    def release(self) -> None:
        self.stop()
        self._player.release()
        self._instance.release()

    def _release_media(self) -> None:
        if self._media is not None:
            self._media.release()
            self._media = None

    # ── 속성 ──────────────────────────────────────────────────────────────────

    @property
    def current_time(self) -> float:
        ms = self._player.get_time()
        return ms / 1000 if ms >= 0 else 0.0

    @current_time.setter
    def current_time(self, seconds: float) -> None:
        # 음수 위치는 처음으로 (엔진 자체 범위 처리)
        self._player.set_time(max(0, int(seconds * 1000)))

    @property
    def playback_rate(self) -> float:
        return self._rate

    @playback_rate.setter
    def playback_rate(self, rate: float) -> None:
        self._rate = rate
        self._player.set_rate(rate)

    @property
    def volume(self) -> float:
        return self._volume

    @volume.setter
    def volume(self, volume: float) -> None:
        self._volume = volume
        self._player.audio_set_volume(int(round(volume * 100)))

    @property
    def duration(self) -> float:
        ms = self._player.get_length()
        return ms / 1000 if ms > 0 else 0.0

    # ── 메타데이터 ────────────────────────────────────────────────────────────

    def probe_duration(self, handle: str, timeout: float) -> float:
        """별도 Media 객체를 파싱하여 길이 조회 (재생 중인 미디어와 무관)"""
        media = self._instance.media_new(handle)
        parsed = threading.Event()
        try:
            media.event_manager().event_attach(
                vlc.EventType.MediaParsedChanged, lambda e: parsed.set()
            )
            if media.parse_with_options(vlc.MediaParseFlag.local, int(timeout * 1000)) == -1:
                raise MetadataProbeError("메타데이터 조회를 시작할 수 없습니다.", handle)

            if not parsed.wait(timeout):
                media.parse_stop()
                raise MetadataProbeError("메타데이터 조회 시간 초과", handle)

            duration_ms = media.get_duration()
            if duration_ms <= 0:
                raise MetadataProbeError("재생 길이를 알 수 없습니다.", handle)
            return duration_ms / 1000
        finally:
            media.release()
