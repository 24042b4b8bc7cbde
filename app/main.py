"""
앱 조립 및 실행 진입점.
모든 레이어를 조립하고 앱을 시작합니다.
이 파일은 앱의 의존성 주입(DI) 역할을 담당합니다.
"""

import sys
import os

# 프로젝트 루트를 sys.path에 추가 (패키지 임포트 지원)
_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)

from typing import Optional

from dotenv import load_dotenv

from core.constants import DEFAULT_SUMMARY_MODEL, METADATA_PROBE_TIMEOUT_S
from core.models import SourceFile
from services.srt_parser import SubtitleParser
from services.summarizer import TranscriptSummarizer
from services.track_assembler import TrackAssembler
from services.vlc_engine import VlcPlaybackEngine
from settings.settings_manager import SettingsManager
from ui.player_window import PlayerWindow
from viewmodels.playback_adapter import PlaybackClockAdapter
from viewmodels.player_viewmodel import PlayerViewModel


def create_and_run() -> None:
    """앱 생성 및 실행 (의존성 주입)"""

    # ── 1. 환경 변수 / 설정 ────────────────────────────────────────────────────
    load_dotenv()
    settings = SettingsManager()

    # ── 2. 서비스 레이어 생성 ──────────────────────────────────────────────────
    engine = VlcPlaybackEngine()
    parser = SubtitleParser()
    assembler = TrackAssembler(
        parser=parser,
        probe_duration=lambda handle: engine.probe_duration(handle, METADATA_PROBE_TIMEOUT_S),
    )
    summarizer = _create_summarizer()
    adapter = PlaybackClockAdapter(engine, settings)

    # ── 3. View 생성 ───────────────────────────────────────────────────────────
    window = PlayerWindow(settings, ai_available=summarizer is not None)

    # ── 4. ViewModel 생성 및 콜백 연결 ────────────────────────────────────────
    viewmodel = PlayerViewModel(
        settings=settings,
        adapter=adapter,
        assembler=assembler,
        parser=parser,
        summarizer=summarizer,
    )

    # ViewModel → View 콜백 등록
    viewmodel.set_on_playlist_updated(window.update_playlist)
    viewmodel.set_on_transcript_updated(window.update_transcript)
    viewmodel.set_on_playback_updated(window.update_playback)
    viewmodel.set_on_track_updated(window.update_track_info)
    viewmodel.set_on_ready_changed(window.set_ready)
    viewmodel.set_on_uploading(window.set_uploading)
    viewmodel.set_on_error(window.show_error)
    viewmodel.set_on_summary_updated(window.update_summary)
    viewmodel.set_on_transcript_visibility(window.set_transcript_visible)

    # ViewModel 스케줄러 연결
    viewmodel.set_schedule_fn(window.schedule)
    viewmodel.set_is_alive_fn(window.is_alive)

    # View → ViewModel 콜백 등록
    window.set_on_close(lambda: _on_close(viewmodel, engine, window))
    window.set_on_files_selected(lambda paths: viewmodel.upload_files(SourceFile.from_path(p) for p in paths))
    window.set_on_select_track(viewmodel.select_track)
    window.set_on_play_pause(viewmodel.play_pause)
    window.set_on_skip(viewmodel.skip)
    window.set_on_previous(viewmodel.previous_track)
    window.set_on_next(viewmodel.next_track)
    window.set_on_seek(viewmodel.seek)
    window.set_on_volume_change(viewmodel.set_volume)
    window.set_on_rate_change(viewmodel.set_playback_rate)
    window.set_on_subtitle_click(viewmodel.seek_to_subtitle)
    window.set_on_toggle_ai(viewmodel.set_ai_enabled)
    window.set_on_toggle_transcript(viewmodel.toggle_transcript_visibility)
    window.set_on_clear_playlist(viewmodel.clear_playlist)

    # ── 5. 초기 상태 반영 ──────────────────────────────────────────────────────
    window.update_playback(viewmodel.playback_state)

    # ── 6. 폴링 시작 ───────────────────────────────────────────────────────────
    viewmodel.start_polling()

    # ── 7. 메인 루프 실행 ──────────────────────────────────────────────────────
    window.run()


def _create_summarizer() -> Optional[TranscriptSummarizer]:
    """GOOGLE_API_KEY가 있으면 요약 클라이언트 생성, 없으면 AI 요약 비활성"""
    api_key = os.getenv("GOOGLE_API_KEY", "")
    if not api_key:
        print("[앱] GOOGLE_API_KEY 없음 - AI 요약 비활성화")
        return None
    try:
        return TranscriptSummarizer(api_key, os.getenv("GEMINI_MODEL", DEFAULT_SUMMARY_MODEL))
    except Exception as e:
        print(f"[앱] 요약 클라이언트 초기화 실패: {e}")
        return None


def _on_close(viewmodel: PlayerViewModel, engine: VlcPlaybackEngine, window: PlayerWindow) -> None:
    """앱 종료 처리"""
    viewmodel.stop()
    engine.release()
    window.quit()
