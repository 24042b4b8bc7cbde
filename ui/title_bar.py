"""
상단 바 컴포넌트.
현재 트랙 정보, 알림 메시지, 파일 추가 / 자막 토글 / 플레이리스트 비우기 버튼을 포함합니다.
"""

import tkinter as tk
from typing import Callable, Optional

from core.constants import NOTICE_DURATION_MS


class TitleBar(tk.Frame):
    """플레이어 상단 바"""

    _DEFAULT_TITLE = "SRT Transcript Player"

    def __init__(
        self,
        parent: tk.Widget,
        panel_color: str = "#16213e",
        text_color: str = "#e0e0e0",
        highlight_color: str = "#e94560",
        on_add_files: Optional[Callable[[], None]] = None,
        on_toggle_transcript: Optional[Callable[[], None]] = None,
        on_clear_playlist: Optional[Callable[[], None]] = None,
        **kwargs,
    ) -> None:
        super().__init__(parent, bg=panel_color, height=40, **kwargs)

        self._panel_color = panel_color
        self._text_color = text_color
        self._highlight_color = highlight_color

        self._on_add_files = on_add_files
        self._on_toggle_transcript = on_toggle_transcript
        self._on_clear_playlist = on_clear_playlist

        self._notice_job: Optional[str] = None
        self._create_widgets()

    def _create_widgets(self) -> None:
        # 우측: 버튼들 (먼저 배치하여 공간 확보)
        right_frame = tk.Frame(self, bg=self._panel_color)
        right_frame.pack(side=tk.RIGHT, fill=tk.Y, padx=4)

        left_frame = tk.Frame(self, bg=self._panel_color)
        left_frame.pack(side=tk.LEFT, fill=tk.X, expand=True, padx=8)

        tk.Label(left_frame, text="🎧", bg=self._panel_color, fg=self._highlight_color, font=("", 14)).pack(side=tk.LEFT)

        self._track_label = tk.Label(
            left_frame, text=self._DEFAULT_TITLE,
            bg=self._panel_color, fg=self._text_color, font=("Malgun Gothic", 10, "bold"),
        )
        self._track_label.pack(side=tk.LEFT, padx=4)

        self._notice_label = tk.Label(
            left_frame, text="", bg=self._panel_color, fg=self._highlight_color, font=("Malgun Gothic", 9),
        )
        self._notice_label.pack(side=tk.LEFT, padx=12)

        btn_cfg = dict(bg=self._panel_color, fg=self._text_color, padx=6, pady=4, cursor="hand2")

        btn_add = tk.Label(right_frame, text="＋ 파일", **btn_cfg)
        btn_add.pack(side=tk.LEFT)
        btn_add.bind("<Button-1>", lambda e: self._call(self._on_add_files))

        btn_transcript = tk.Label(right_frame, text="📝 자막", **btn_cfg)
        btn_transcript.pack(side=tk.LEFT)
        btn_transcript.bind("<Button-1>", lambda e: self._call(self._on_toggle_transcript))

        btn_clear = tk.Label(
            right_frame, text="🗑 비우기",
            bg=self._panel_color, fg=self._highlight_color, padx=6, pady=4, cursor="hand2",
        )
        btn_clear.pack(side=tk.LEFT)
        btn_clear.bind("<Button-1>", lambda e: self._call(self._on_clear_playlist))

    @staticmethod
    def _call(callback: Optional[Callable[[], None]]) -> None:
        if callback:
            callback()

    def update_track_info(self, title: str, subtitle_name: str) -> None:
        """트랙 정보 업데이트"""
        if title:
            display = f"{title}  ·  {subtitle_name}" if subtitle_name else f"{title}  ·  자막 없음"
            self._track_label.config(text=display)
        else:
            self._track_label.config(text=self._DEFAULT_TITLE)

    def show_notice(self, message: str) -> None:
        """잠시 표시되는 알림 (토스트)"""
        self._notice_label.config(text=f"⚠ {message}")
        if self._notice_job:
            self.after_cancel(self._notice_job)
        self._notice_job = self.after(NOTICE_DURATION_MS, self._clear_notice)

    def _clear_notice(self) -> None:
        self._notice_job = None
        self._notice_label.config(text="")
