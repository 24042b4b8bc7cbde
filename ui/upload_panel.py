"""
업로드 패널.
재생할 오디오가 없을 때 표시되며, 오디오/SRT 파일 선택 대화상자를 엽니다.
"""

import tkinter as tk
from tkinter import filedialog
from typing import Callable, Optional

from core.constants import AUDIO_FILE_TYPES
from ui.widgets.theme_engine import muted_color


class UploadPanel(tk.Frame):
    """파일 업로드 안내 패널"""

    def __init__(
        self,
        parent: tk.Widget,
        bg_color: str = "#1a1a2e",
        text_color: str = "#e0e0e0",
        highlight_color: str = "#e94560",
        on_files_selected: Optional[Callable[[list[str]], None]] = None,
        **kwargs,
    ) -> None:
        super().__init__(parent, bg=bg_color, **kwargs)

        self._text_color = text_color
        self._highlight_color = highlight_color
        self._on_files_selected = on_files_selected

        self._create_widgets()

    def _create_widgets(self) -> None:
        inner = tk.Frame(self, bg=self["bg"])
        inner.place(relx=0.5, rely=0.5, anchor="center")

        tk.Label(inner, text="🎧", bg=self["bg"], fg=self._highlight_color, font=("", 40)).pack()
        tk.Label(
            inner, text="오디오와 자막 파일을 불러오세요",
            bg=self["bg"], fg=self._text_color, font=("Malgun Gothic", 14, "bold"),
        ).pack(pady=(6, 2))
        tk.Label(
            inner, text="같은 이름의 .srt 파일은 자동으로 오디오와 연결됩니다. (예: lecture.mp3 + lecture.srt)",
            bg=self["bg"], fg=muted_color(self._text_color), font=("Malgun Gothic", 9),
        ).pack(pady=(0, 12))

        self._button = tk.Button(
            inner, text="파일 선택", command=self.open_dialog,
            bg=self._highlight_color, fg="#ffffff", relief=tk.FLAT, padx=16, pady=6,
            font=("Malgun Gothic", 10, "bold"),
        )
        self._button.pack()

        self._status_label = tk.Label(inner, text="", bg=self["bg"], fg=muted_color(self._text_color))
        self._status_label.pack(pady=(10, 0))

    def open_dialog(self) -> None:
        """파일 선택 대화상자 (여러 개 선택 가능)"""
        paths = filedialog.askopenfilenames(
            parent=self, title="오디오 / 자막 파일 선택", filetypes=AUDIO_FILE_TYPES
        )
        if paths and self._on_files_selected:
            self._on_files_selected(list(paths))

    def set_busy(self, busy: bool) -> None:
        """업로드 처리 중 표시"""
        self._button.config(state=tk.DISABLED if busy else tk.NORMAL)
        self._status_label.config(text="파일을 불러오는 중..." if busy else "")
