"""
메인 플레이어 창.
각 패널 컴포넌트를 조립하고 ViewModel과 연결합니다.
"""

import queue
import tkinter as tk
from typing import Callable, Optional

from core.constants import DEFAULT_WINDOW_HEIGHT, DEFAULT_WINDOW_WIDTH, SKIP_SECONDS, UI_QUEUE_INTERVAL_MS
from core.models import PlaybackState, PlaylistEntry, TranscriptLine
from settings.settings_manager import SettingsManager
from ui.playlist_panel import PlaylistPanel
from ui.summary_panel import SummaryPanel
from ui.title_bar import TitleBar
from ui.transcript_panel import TranscriptPanel
from ui.transport_panel import TransportPanel
from ui.upload_panel import UploadPanel
from ui.widgets.theme_engine import load_theme


class PlayerWindow:
    """
    메인 플레이어 창.
    좌측: 플레이리스트 / 재생 제어 / AI 요약, 우측: 자막.
    재생할 오디오가 없으면 업로드 패널이 컨텐츠 영역을 덮습니다.
    """

    def __init__(self, settings: SettingsManager, ai_available: bool = True) -> None:
        self._settings = settings
        self._ai_available = ai_available
        self._running = True
        self._transcript_visible = True

        # UI 명령 큐 (스레드 안전 UI 업데이트)
        self._cmd_queue: queue.Queue = queue.Queue()

        # 콜백 (app에서 ViewModel과 연결)
        self._on_close_callback: Optional[Callable[[], None]] = None
        self._on_files_selected: Optional[Callable[[list[str]], None]] = None
        self._on_select_track: Optional[Callable[[int], None]] = None
        self._on_play_pause: Optional[Callable[[], None]] = None
        self._on_skip: Optional[Callable[[float], None]] = None
        self._on_previous: Optional[Callable[[], None]] = None
        self._on_next: Optional[Callable[[], None]] = None
        self._on_seek: Optional[Callable[[float], None]] = None
        self._on_volume_change: Optional[Callable[[float], None]] = None
        self._on_rate_change: Optional[Callable[[float], None]] = None
        self._on_subtitle_click: Optional[Callable[[int], None]] = None
        self._on_toggle_ai: Optional[Callable[[bool], None]] = None
        self._on_toggle_transcript: Optional[Callable[[], None]] = None
        self._on_clear_playlist: Optional[Callable[[], None]] = None

        self._root: Optional[tk.Tk] = None
        self._setup_window()
        self._create_panels()
        self._bind_shortcuts()
        self._process_queue()

    # ── 창 설정 ───────────────────────────────────────────────────────────────

    def _setup_window(self) -> None:
        """Tkinter 창 초기화"""
        self._root = tk.Tk()
        self._root.title("SRT Transcript Player")
        self._root.minsize(720, 480)

        screen_w = self._root.winfo_screenwidth()
        screen_h = self._root.winfo_screenheight()
        x = max(0, (screen_w - DEFAULT_WINDOW_WIDTH) // 2)
        y = max(0, (screen_h - DEFAULT_WINDOW_HEIGHT) // 2)
        self._root.geometry(f"{DEFAULT_WINDOW_WIDTH}x{DEFAULT_WINDOW_HEIGHT}+{x}+{y}")

        self._root.protocol("WM_DELETE_WINDOW", self._on_close)

    def _create_panels(self) -> None:
        """패널 조립"""
        theme = load_theme(self._settings)
        bg, panel = theme.bg_color, theme.panel_color
        text, highlight = theme.text_color, theme.highlight_color

        self._main_frame = tk.Frame(self._root, bg=bg)
        self._main_frame.pack(fill=tk.BOTH, expand=True)

        self._title_bar = TitleBar(
            self._main_frame,
            panel_color=panel,
            text_color=text,
            highlight_color=highlight,
            on_add_files=self._open_file_dialog,
            on_toggle_transcript=lambda: self._call(self._on_toggle_transcript),
            on_clear_playlist=lambda: self._call(self._on_clear_playlist),
        )
        self._title_bar.pack(fill=tk.X)

        # 컨텐츠 영역: 좌측 컬럼 + 우측 자막
        self._content_frame = tk.Frame(self._main_frame, bg=bg)
        self._content_frame.pack(fill=tk.BOTH, expand=True)
        self._content_frame.grid_rowconfigure(0, weight=1)
        self._content_frame.grid_columnconfigure(0, weight=45, uniform="col")
        self._content_frame.grid_columnconfigure(1, weight=55, uniform="col")

        left = tk.Frame(self._content_frame, bg=bg)
        left.grid(row=0, column=0, sticky="nsew", padx=(8, 4), pady=8)

        self._playlist_panel = PlaylistPanel(
            left,
            bg_color=bg,
            panel_color=panel,
            text_color=text,
            highlight_color=highlight,
            on_select=lambda i: self._call(self._on_select_track, i),
        )
        self._playlist_panel.pack(fill=tk.BOTH, expand=True)

        self._transport_panel = TransportPanel(
            left,
            bg_color=bg,
            panel_color=panel,
            text_color=text,
            highlight_color=highlight,
            on_play_pause=lambda: self._call(self._on_play_pause),
            on_skip=lambda d: self._call(self._on_skip, d),
            on_previous=lambda: self._call(self._on_previous),
            on_next=lambda: self._call(self._on_next),
            on_seek=lambda t: self._call(self._on_seek, t),
            on_volume_change=lambda v: self._call(self._on_volume_change, v),
            on_rate_change=lambda r: self._call(self._on_rate_change, r),
        )
        self._transport_panel.pack(fill=tk.X, pady=8)

        self._summary_panel = SummaryPanel(
            left,
            bg_color=bg,
            text_color=text,
            highlight_color=highlight,
            ai_enabled=self._settings.get_bool("ai_summary_enabled"),
            ai_available=self._ai_available,
            on_toggle_ai=lambda enabled: self._call(self._on_toggle_ai, enabled),
        )
        self._summary_panel.pack(fill=tk.BOTH, expand=True)

        self._transcript_panel = TranscriptPanel(
            self._content_frame,
            bg_color=bg,
            text_color=text,
            highlight_color=highlight,
            font_family=theme.font_family,
            font_size=theme.font_size,
            on_line_click=lambda i: self._call(self._on_subtitle_click, i),
        )
        self._transcript_panel.grid(row=0, column=1, sticky="nsew", padx=(4, 8), pady=8)

        # 업로드 패널 (Overlay, 재생 준비 전까지 표시)
        self._upload_panel = UploadPanel(
            self._content_frame,
            bg_color=bg,
            text_color=text,
            highlight_color=highlight,
            on_files_selected=lambda paths: self._call(self._on_files_selected, paths),
        )
        self._upload_panel.place(relx=0, rely=0, relwidth=1.0, relheight=1.0)
        self._upload_panel.lift()

    def _bind_shortcuts(self) -> None:
        """키보드 단축키 (스페이스: 재생/일시정지, ←/→: 건너뛰기)"""
        self._root.bind("<space>", lambda e: self._call(self._on_play_pause))
        self._root.bind("<Left>", lambda e: self._call(self._on_skip, -SKIP_SECONDS))
        self._root.bind("<Right>", lambda e: self._call(self._on_skip, SKIP_SECONDS))

    @staticmethod
    def _call(callback: Optional[Callable], *args) -> None:
        if callback:
            callback(*args)

    def _open_file_dialog(self) -> None:
        self._upload_panel.open_dialog()

    def _on_close(self) -> None:
        """창 닫기"""
        self._running = False
        if self._on_close_callback:
            self._on_close_callback()

    # ── 공개 API (View → ViewModel 연결) ──────────────────────────────────────

    def set_on_close(self, callback: Callable[[], None]) -> None:
        self._on_close_callback = callback

    def set_on_files_selected(self, callback: Callable[[list[str]], None]) -> None:
        self._on_files_selected = callback

    def set_on_select_track(self, callback: Callable[[int], None]) -> None:
        self._on_select_track = callback

    def set_on_play_pause(self, callback: Callable[[], None]) -> None:
        self._on_play_pause = callback

    def set_on_skip(self, callback: Callable[[float], None]) -> None:
        self._on_skip = callback

    def set_on_previous(self, callback: Callable[[], None]) -> None:
        self._on_previous = callback

    def set_on_next(self, callback: Callable[[], None]) -> None:
        self._on_next = callback

    def set_on_seek(self, callback: Callable[[float], None]) -> None:
        self._on_seek = callback

    def set_on_volume_change(self, callback: Callable[[float], None]) -> None:
        self._on_volume_change = callback

    def set_on_rate_change(self, callback: Callable[[float], None]) -> None:
        self._on_rate_change = callback

    def set_on_subtitle_click(self, callback: Callable[[int], None]) -> None:
        self._on_subtitle_click = callback

    def set_on_toggle_ai(self, callback: Callable[[bool], None]) -> None:
        self._on_toggle_ai = callback

    def set_on_toggle_transcript(self, callback: Callable[[], None]) -> None:
        self._on_toggle_transcript = callback

    def set_on_clear_playlist(self, callback: Callable[[], None]) -> None:
        self._on_clear_playlist = callback

    # ── 공개 API (ViewModel → View, 스레드 안전) ──────────────────────────────

    def update_playlist(self, entries: list[PlaylistEntry]) -> None:
        self._cmd_queue.put(("update_playlist", entries))

    def update_transcript(self, lines: list[TranscriptLine]) -> None:
        self._cmd_queue.put(("update_transcript", lines))

    def update_playback(self, state: PlaybackState) -> None:
        self._cmd_queue.put(("update_playback", state))

    def update_track_info(self, title: str, subtitle_name: str) -> None:
        self._cmd_queue.put(("update_track", title, subtitle_name))

    def set_ready(self, ready: bool) -> None:
        """재생 준비 여부에 따라 업로드 패널 표시/숨김"""
        self._cmd_queue.put(("set_ready", ready))

    def set_uploading(self, uploading: bool) -> None:
        self._cmd_queue.put(("set_uploading", uploading))

    def show_error(self, message: str) -> None:
        self._cmd_queue.put(("show_error", message))

    def update_summary(self, summary: str, is_summarizing: bool) -> None:
        self._cmd_queue.put(("update_summary", summary, is_summarizing))

    def set_transcript_visible(self, visible: bool) -> None:
        self._cmd_queue.put(("set_transcript_visible", visible))

    def schedule(self, ms: int, fn: Callable) -> None:
        """tkinter after() 래퍼"""
        if self._root:
            self._root.after(ms, fn)

    def is_alive(self) -> bool:
        return self._running

    # ── 명령 큐 처리 ──────────────────────────────────────────────────────────

    def _process_queue(self) -> None:
        """큐에 쌓인 UI 명령 처리 (메인 스레드에서 실행)"""
        try:
            while not self._cmd_queue.empty():
                cmd = self._cmd_queue.get_nowait()
                self._dispatch_command(cmd)
        except Exception as e:
            print(f"[UI] 큐 처리 오류: {e}")
        finally:
            if self._running and self._root:
                self._root.after(UI_QUEUE_INTERVAL_MS, self._process_queue)

    def _dispatch_command(self, cmd: tuple) -> None:
        """명령 디스패치"""
        action = cmd[0]
        if action == "update_playlist":
            self._playlist_panel.update_entries(cmd[1])
        elif action == "update_transcript":
            self._transcript_panel.update_transcript(cmd[1])
        elif action == "update_playback":
            self._transport_panel.update_state(cmd[1])
        elif action == "update_track":
            self._title_bar.update_track_info(cmd[1], cmd[2])
        elif action == "set_ready":
            self._show_upload_panel(not cmd[1])
        elif action == "set_uploading":
            self._upload_panel.set_busy(cmd[1])
        elif action == "show_error":
            self._title_bar.show_notice(cmd[1])
        elif action == "update_summary":
            self._summary_panel.update_summary(cmd[1], cmd[2])
        elif action == "set_transcript_visible":
            self._apply_transcript_visible(cmd[1])

    def _show_upload_panel(self, show: bool) -> None:
        if show:
            self._upload_panel.place(relx=0, rely=0, relwidth=1.0, relheight=1.0)
            self._upload_panel.lift()
        else:
            self._upload_panel.place_forget()

    def _apply_transcript_visible(self, visible: bool) -> None:
        """자막 패널 표시/숨김 (숨기면 좌측 컬럼이 전체 너비 사용)"""
        self._transcript_visible = visible
        if visible:
            self._transcript_panel.grid()
            self._content_frame.grid_columnconfigure(1, weight=55, uniform="col")
        else:
            self._transcript_panel.grid_remove()
            self._content_frame.grid_columnconfigure(1, weight=0, uniform="")

    # ── 메인 루프 ─────────────────────────────────────────────────────────────

    def run(self) -> None:
        """tkinter 메인 루프 실행"""
        self._root.mainloop()

    def quit(self) -> None:
        """앱 종료"""
        self._running = False
        if self._root:
            self._root.quit()
            self._root.destroy()
