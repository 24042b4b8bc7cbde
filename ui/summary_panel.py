"""
AI 요약 패널.
AI 요약 사용 토글과 현재 요약 내용을 표시합니다.
"""

import tkinter as tk
from typing import Callable, Optional

from ui.widgets.theme_engine import muted_color


class SummaryPanel(tk.Frame):
    """AI 요약 패널"""

    def __init__(
        self,
        parent: tk.Widget,
        bg_color: str = "#1a1a2e",
        text_color: str = "#e0e0e0",
        highlight_color: str = "#e94560",
        ai_enabled: bool = False,
        ai_available: bool = True,
        on_toggle_ai: Optional[Callable[[bool], None]] = None,
        **kwargs,
    ) -> None:
        super().__init__(parent, bg=bg_color, **kwargs)

        self._text_color = text_color
        self._highlight_color = highlight_color
        self._on_toggle_ai = on_toggle_ai
        self._ai_var = tk.BooleanVar(value=ai_enabled)
        self._ai_available = ai_available

        self._create_widgets()
        self.update_summary("", False)

    def _create_widgets(self) -> None:
        header = tk.Frame(self, bg=self["bg"])
        header.pack(fill=tk.X, padx=8, pady=(6, 2))

        tk.Label(
            header, text="✨ AI 요약", bg=self["bg"], fg=self._text_color,
            font=("Malgun Gothic", 10, "bold"),
        ).pack(side=tk.LEFT)

        self._toggle = tk.Checkbutton(
            header, text="AI", variable=self._ai_var, command=self._on_toggle,
            bg=self["bg"], fg=self._text_color, selectcolor=self["bg"], activebackground=self["bg"],
        )
        self._toggle.pack(side=tk.RIGHT)
        if not self._ai_available:
            self._toggle.config(state=tk.DISABLED)

        self._summary_label = tk.Label(
            self, text="", bg=self["bg"], fg=self._text_color,
            font=("Malgun Gothic", 9), justify=tk.LEFT, anchor="nw", wraplength=360,
        )
        self._summary_label.pack(fill=tk.BOTH, expand=True, padx=8, pady=(2, 8))
        self._summary_label.bind("<Configure>", lambda e: self._summary_label.config(wraplength=max(100, e.width - 10)))

    def _on_toggle(self) -> None:
        if self._on_toggle_ai:
            self._on_toggle_ai(self._ai_var.get())

    def update_summary(self, summary: str, is_summarizing: bool) -> None:
        """요약 내용 또는 안내 문구 표시"""
        if is_summarizing:
            text, color = "요약을 생성하는 중...", muted_color(self._text_color)
        elif summary:
            text, color = summary, self._text_color
        elif not self._ai_available:
            text, color = "GOOGLE_API_KEY가 없어 AI 요약을 사용할 수 없습니다.", muted_color(self._text_color)
        elif self._ai_var.get():
            text, color = "재생 후 일시정지하면 요약이 여기에 표시됩니다.", muted_color(self._text_color)
        else:
            text, color = "AI를 켜면 요약을 생성합니다.", muted_color(self._text_color)
        self._summary_label.config(text=text, fg=color)
