"""
플레이어 ViewModel.
플레이리스트와 재생 제어 상태 머신을 관리하고 UI와 분리합니다.

책임:
- 업로드 배치 처리 (백그라운드 조립 → 메인 스레드에서 한 번에 추가)
- 현재 트랙 선택, 이전/다음 이동, 재생 종료 시 자동 다음 곡
- 현재 재생 시각에 해당하는 자막 계산
- AI 요약 작업 스레드 제어
- View에 변경 알림 (콜백 기반)

상태: Empty (트랙 없음) ⇄ Loaded (트랙 1개 이상, current_index 하나)
"""

import threading
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from core.constants import EVENT_POLL_INTERVAL_MS
from core.errors import NoAudioInBatchError, PlaybackEngineError, PlayerError
from core.models import (
    PlaybackState,
    PlaylistEntry,
    SourceFile,
    Subtitle,
    Track,
    TranscriptLine,
    UploadResult,
)
from services.srt_parser import SubtitleParser
from services.timestamp import format_clock
from services.track_assembler import TrackAssembler
from settings.settings_manager import SettingsManager
from viewmodels.playback_adapter import PlaybackClockAdapter

if TYPE_CHECKING:
    from services.summarizer import TranscriptSummarizer


class PlayerViewModel:
    """
    플레이어 ViewModel.
    View(UI)는 이 클래스의 콜백을 통해 상태 변화를 수신합니다.
    """

    def __init__(
        self,
        settings: SettingsManager,
        adapter: PlaybackClockAdapter,
        assembler: TrackAssembler,
        parser: SubtitleParser,
        summarizer: Optional["TranscriptSummarizer"] = None,
    ) -> None:
        self._settings = settings
        self._adapter = adapter
        self._assembler = assembler
        self._parser = parser
        self._summarizer = summarizer

        # ── 플레이리스트 상태 ──────────────────────────────────────────────────
        self._tracks: list[Track] = []
        self._current_index: Optional[int] = None
        self._is_ready: bool = False            # 재생 가능한 오디오가 로드됨
        self._is_uploading: bool = False
        self._active_index: Optional[int] = None
        self._transcript_visible: bool = True
        self._was_playing: bool = False

        # ── AI 요약 ────────────────────────────────────────────────────────────
        self._ai_enabled: bool = settings.get_bool("ai_summary_enabled", False)
        self._summary: str = ""
        self._summarized_until: float = 0.0
        self._is_summarizing: bool = False
        self._summary_thread: Optional[threading.Thread] = None

        # ── View 콜백 (UI가 등록) ──────────────────────────────────────────────
        self._on_playlist_updated: Optional[Callable[[list[PlaylistEntry]], None]] = None
        self._on_transcript_updated: Optional[Callable[[list[TranscriptLine]], None]] = None
        self._on_playback_updated: Optional[Callable[[PlaybackState], None]] = None
        self._on_track_updated: Optional[Callable[[str, str], None]] = None
        self._on_ready_changed: Optional[Callable[[bool], None]] = None
        self._on_uploading: Optional[Callable[[bool], None]] = None
        self._on_error: Optional[Callable[[str], None]] = None
        self._on_summary_updated: Optional[Callable[[str, bool], None]] = None
        self._on_transcript_visibility: Optional[Callable[[bool], None]] = None

        # ── 스케줄러 콜백 (UI가 after()로 실행) ───────────────────────────────
        self._schedule_fn: Optional[Callable[[int, Callable], None]] = None
        self._is_alive_fn: Optional[Callable[[], bool]] = None

        # ── 어댑터 → ViewModel ────────────────────────────────────────────────
        self._adapter.set_on_state_changed(self._on_clock_tick)
        self._adapter.set_on_ended(self._on_track_ended)
        self._adapter.set_on_error(self._on_playback_error)

    # ── 콜백 등록 ─────────────────────────────────────────────────────────────

    def set_on_playlist_updated(self, callback: Callable[[list[PlaylistEntry]], None]) -> None:
        self._on_playlist_updated = callback

    def set_on_transcript_updated(self, callback: Callable[[list[TranscriptLine]], None]) -> None:
        self._on_transcript_updated = callback

    def set_on_playback_updated(self, callback: Callable[[PlaybackState], None]) -> None:
        self._on_playback_updated = callback

    def set_on_track_updated(self, callback: Callable[[str, str], None]) -> None:
        self._on_track_updated = callback

    def set_on_ready_changed(self, callback: Callable[[bool], None]) -> None:
        self._on_ready_changed = callback

    def set_on_uploading(self, callback: Callable[[bool], None]) -> None:
        self._on_uploading = callback

    def set_on_error(self, callback: Callable[[str], None]) -> None:
        self._on_error = callback

    def set_on_summary_updated(self, callback: Callable[[str, bool], None]) -> None:
        self._on_summary_updated = callback

    def set_on_transcript_visibility(self, callback: Callable[[bool], None]) -> None:
        self._on_transcript_visibility = callback

    def set_schedule_fn(self, fn: Callable[[int, Callable], None]) -> None:
        """UI의 after() 래퍼 함수 등록"""
        self._schedule_fn = fn

    def set_is_alive_fn(self, fn: Callable[[], bool]) -> None:
        self._is_alive_fn = fn

    # ── 스케줄링 ──────────────────────────────────────────────────────────────

    def _is_alive(self) -> bool:
        return self._is_alive_fn() if self._is_alive_fn else False

    def _schedule(self, ms: int, fn: Callable) -> None:
        """메인 스레드에서 실행 (스케줄러가 없으면 즉시 실행)"""
        if self._schedule_fn:
            self._schedule_fn(ms, fn)
        else:
            fn()

    def start_polling(self) -> None:
        """엔진 이벤트 처리 루프 시작"""
        self._schedule_event_pump()

    def _schedule_event_pump(self) -> None:
        if not self._is_alive():
            return
        self._adapter.process_events()
        self._schedule(EVENT_POLL_INTERVAL_MS, self._schedule_event_pump)

    # ── 상태 조회 ─────────────────────────────────────────────────────────────

    @property
    def tracks(self) -> tuple[Track, ...]:
        return tuple(self._tracks)

    @property
    def current_index(self) -> Optional[int]:
        return self._current_index

    @property
    def current_track(self) -> Optional[Track]:
        if self._current_index is None:
            return None
        return self._tracks[self._current_index]

    @property
    def is_empty(self) -> bool:
        return not self._tracks

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    @property
    def is_uploading(self) -> bool:
        return self._is_uploading

    @property
    def playback_state(self) -> PlaybackState:
        return self._adapter.state

    @property
    def transcript_visible(self) -> bool:
        return self._transcript_visible

    @property
    def summary(self) -> str:
        return self._summary

    @property
    def is_summarizing(self) -> bool:
        return self._is_summarizing

    @property
    def ai_enabled(self) -> bool:
        return self._ai_enabled

    @property
    def active_index(self) -> Optional[int]:
        return self._active_index

    @property
    def active_subtitle(self) -> Optional[Subtitle]:
        track = self.current_track
        if track is None:
            return None
        return self._parser.find_active_subtitle(track.subtitles, self._adapter.state.current_time)

    # ── 업로드 ────────────────────────────────────────────────────────────────

    def upload_files(self, files: Iterable[SourceFile]) -> threading.Thread:
        """
        업로드 배치 처리 시작

        파일 읽기/길이 조회는 백그라운드에서 실행하고,
        완성된 트랙은 메인 스레드에서 한 번에 플레이리스트에 추가합니다.

        Returns:
            작업 스레드 (테스트에서 join 용도)
        """
        batch = list(files)
        self._set_uploading(True)

        def assemble_worker() -> None:
            try:
                result = self._assembler.assemble(batch)
            except NoAudioInBatchError as e:
                print(f"[업로드] 배치 거부: {e}")
                self._schedule(0, lambda err=e: self._finish_upload(UploadResult(errors=[*err.file_errors, err])))
                return
            except Exception as e:
                print(f"[업로드] 배치 처리 오류: {e}")
                self._schedule(0, lambda err=e: self._finish_upload(UploadResult(errors=[PlayerError(str(err))])))
                return

            self._schedule(0, lambda: self._finish_upload(result))

        thread = threading.Thread(target=assemble_worker, daemon=True)
        thread.start()
        return thread

    def _finish_upload(self, result: UploadResult) -> None:
        """업로드 결과 반영 (메인 스레드)"""
        self._set_uploading(False)

        for error in result.errors:
            self._report_error(error)

        if not result.tracks:
            return

        was_empty = not self._tracks
        self._tracks.extend(result.tracks)
        print(f"[업로드] 플레이리스트에 {len(result.tracks)}곡 추가 (총 {len(self._tracks)}곡)")

        if was_empty:
            self.select_track(0)
        else:
            self._notify_playlist_updated()

    def _set_uploading(self, uploading: bool) -> None:
        self._is_uploading = uploading
        if self._on_uploading:
            self._on_uploading(uploading)

    # ── 트랙 선택 ─────────────────────────────────────────────────────────────

    def select_track(self, index: int) -> None:
        """트랙 선택 → 로드 후 처음부터 자동 재생 (범위 밖이면 무시)"""
        if not 0 <= index < len(self._tracks):
            return

        self._current_index = index
        track = self._tracks[index]
        print(f"[재생] 트랙 선택: {track.title}")

        self._reset_summary()
        self._was_playing = False
        self._active_index = None

        self._adapter.load(track)
        self._set_ready(True)
        self._adapter.play()

        if self._on_track_updated:
            subtitle_name = track.subtitle_file.name if track.subtitle_file else ""
            self._on_track_updated(track.title, subtitle_name)
        self._notify_playlist_updated()
        self._notify_transcript_updated()

    def previous_track(self) -> None:
        if self._current_index is None or self._current_index == 0:
            return
        self.select_track(self._current_index - 1)

    def next_track(self) -> None:
        if self._current_index is None or self._current_index >= len(self._tracks) - 1:
            return
        self.select_track(self._current_index + 1)

    def _on_track_ended(self) -> None:
        """재생 종료 → 마지막 곡이 아니면 다음 곡"""
        if self._current_index is not None and self._current_index < len(self._tracks) - 1:
            self.next_track()
        else:
            print("[재생] 플레이리스트 끝")

    def clear_playlist(self) -> None:
        """플레이리스트 비우기 → Empty"""
        self._was_playing = False
        self._adapter.unload()
        self._tracks = []
        self._current_index = None
        self._active_index = None
        self._reset_summary()
        self._set_ready(False)

        if self._on_track_updated:
            self._on_track_updated("", "")
        self._notify_playlist_updated()
        self._notify_transcript_updated()
        print("[재생] 플레이리스트 초기화")

    def _set_ready(self, ready: bool) -> None:
        if ready != self._is_ready:
            self._is_ready = ready
            if self._on_ready_changed:
                self._on_ready_changed(ready)

    def _on_playback_error(self, error: PlaybackEngineError) -> None:
        """엔진 오류 → 알림 후 재생 준비 상태 해제 (업로드 화면으로)"""
        track = self.current_track
        if track is not None and not error.file_name:
            error.file_name = track.audio_file.name
        self._report_error(error)
        self._was_playing = False
        self._adapter.unload()
        self._set_ready(False)

    # ── 재생 제어 ─────────────────────────────────────────────────────────────

    def play_pause(self) -> None:
        if self._is_ready:
            self._adapter.play_pause()

    def skip(self, delta_seconds: float) -> None:
        if self._is_ready:
            self._adapter.skip(delta_seconds)

    def seek(self, target_seconds: float) -> None:
        if self._is_ready:
            self._adapter.seek(target_seconds)

    def seek_to_subtitle(self, index: int) -> None:
        """자막 클릭 → 해당 자막 시작 위치로 이동"""
        track = self.current_track
        if track is None or not 0 <= index < len(track.subtitles):
            return
        self.seek(track.subtitles[index].start)

    def set_playback_rate(self, rate: float) -> None:
        self._adapter.set_playback_rate(rate)

    def set_volume(self, volume: float) -> None:
        self._adapter.set_volume(volume)

    def toggle_transcript_visibility(self) -> None:
        """자막 패널 표시 토글 (재생 상태와 무관)"""
        self._transcript_visible = not self._transcript_visible
        if self._on_transcript_visibility:
            self._on_transcript_visibility(self._transcript_visible)

    # ── 재생 시계 ─────────────────────────────────────────────────────────────

    def _on_clock_tick(self) -> None:
        """재생 상태 변경마다 호출: 현재 자막 재계산, 일시정지 시 요약"""
        state = self._adapter.state
        if self._on_playback_updated:
            self._on_playback_updated(state)

        track = self.current_track
        new_index = (
            self._parser.get_active_index(track.subtitles, state.current_time)
            if track is not None
            else None
        )
        if new_index != self._active_index:
            self._active_index = new_index
            self._notify_transcript_updated()

        # 사용자의 일시정지만 요약 대상 (재생 종료/엔진 오류는 제외)
        if self._was_playing and not state.is_playing and not self._adapter.halted_by_engine:
            self._request_summary(state.current_time)
        self._was_playing = state.is_playing

    # ── 표시용 데이터 ─────────────────────────────────────────────────────────

    def get_transcript_lines(self) -> list[TranscriptLine]:
        """현재 트랙의 자막을 View 표시용 라인으로 변환"""
        track = self.current_track
        if track is None:
            return []
        return [
            TranscriptLine(
                index=i,
                timestamp=format_clock(subtitle.start),
                text=subtitle.text,
                is_active=(i == self._active_index),
            )
            for i, subtitle in enumerate(track.subtitles)
        ]

    def get_playlist_entries(self) -> list[PlaylistEntry]:
        return [
            PlaylistEntry(
                title=track.title,
                file_name=track.audio_file.name,
                duration=format_clock(track.duration),
                is_current=(i == self._current_index),
            )
            for i, track in enumerate(self._tracks)
        ]

    def _notify_playlist_updated(self) -> None:
        if self._on_playlist_updated:
            self._on_playlist_updated(self.get_playlist_entries())

    def _notify_transcript_updated(self) -> None:
        if self._on_transcript_updated:
            self._on_transcript_updated(self.get_transcript_lines())

    def _report_error(self, error: PlayerError) -> None:
        print(f"[오류] {error}")
        if self._on_error:
            self._on_error(str(error))

    # ── AI 요약 ───────────────────────────────────────────────────────────────

    def set_ai_enabled(self, enabled: bool) -> None:
        """AI 요약 사용 여부 변경 및 저장"""
        self._ai_enabled = enabled
        self._settings.set("ai_summary_enabled", enabled)
        self._notify_summary_updated()

    def _reset_summary(self) -> None:
        self._summary = ""
        self._summarized_until = 0.0
        self._is_summarizing = False
        self._notify_summary_updated()

    def _request_summary(self, current_time: float) -> None:
        """지난 요약 이후 ~ 현재 위치까지의 자막을 이전 요약에 이어 요약"""
        track = self.current_track
        if not self._ai_enabled or self._summarizer is None or track is None:
            return
        if self._is_summarizing:
            return

        excerpt = [
            subtitle.text
            for subtitle in track.subtitles
            if subtitle.end > self._summarized_until and subtitle.start <= current_time
        ]
        if not excerpt:
            return

        self._is_summarizing = True
        self._notify_summary_updated()

        track_id = track.id
        previous_summary = self._summary or None
        transcript = "\n".join(excerpt)
        summarizer = self._summarizer

        def summary_worker() -> None:
            print(f"[요약] 자막 {len(excerpt)}줄 요약 시작")
            try:
                summary = summarizer.summarize(transcript, previous_summary)
            except PlayerError as e:
                self._schedule(0, lambda err=e: self._on_summary_failed(track_id, err))
                return
            self._schedule(0, lambda: self._on_summary_ready(track_id, summary, current_time))

        self._summary_thread = threading.Thread(target=summary_worker, daemon=True)
        self._summary_thread.start()

    def _on_summary_ready(self, track_id: str, summary: str, until: float) -> None:
        track = self.current_track
        if track is None or track.id != track_id:
            return
        self._summary = summary
        self._summarized_until = until
        self._is_summarizing = False
        self._notify_summary_updated()
        print("[요약] 요약 갱신 완료")

    def _on_summary_failed(self, track_id: str, error: PlayerError) -> None:
        track = self.current_track
        if track is None or track.id != track_id:
            return
        self._is_summarizing = False
        self._notify_summary_updated()
        self._report_error(error)

    def _notify_summary_updated(self) -> None:
        if self._on_summary_updated:
            self._on_summary_updated(self._summary, self._is_summarizing)

    # ── 종료 ──────────────────────────────────────────────────────────────────

    def stop(self) -> None:
        """ViewModel 종료 처리"""
        self._adapter.unload()
        self._set_ready(False)
