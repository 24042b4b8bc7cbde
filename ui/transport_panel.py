"""
재생 제어 패널.
재생/일시정지, 건너뛰기, 이전/다음 곡, 재생 위치, 볼륨, 배속을 조절합니다.
"""

import tkinter as tk
from typing import Callable, Optional

from core.constants import (
    MAX_PLAYBACK_RATE,
    MIN_PLAYBACK_RATE,
    PLAYBACK_RATE_STEP,
    SKIP_SECONDS,
)
from core.models import PlaybackState
from services.timestamp import format_timestamp
from ui.widgets.rounded_slider import RoundedSlider


class TransportPanel(tk.Frame):
    """재생 제어 패널"""

    def __init__(
        self,
        parent: tk.Widget,
        bg_color: str = "#1a1a2e",
        panel_color: str = "#16213e",
        text_color: str = "#e0e0e0",
        highlight_color: str = "#e94560",
        on_play_pause: Optional[Callable[[], None]] = None,
        on_skip: Optional[Callable[[float], None]] = None,
        on_previous: Optional[Callable[[], None]] = None,
        on_next: Optional[Callable[[], None]] = None,
        on_seek: Optional[Callable[[float], None]] = None,
        on_volume_change: Optional[Callable[[float], None]] = None,
        on_rate_change: Optional[Callable[[float], None]] = None,
        **kwargs,
    ) -> None:
        super().__init__(parent, bg=panel_color, **kwargs)

        self._panel_color = panel_color
        self._text_color = text_color
        self._highlight_color = highlight_color

        self._on_play_pause = on_play_pause
        self._on_skip = on_skip
        self._on_previous = on_previous
        self._on_next = on_next
        self._on_seek = on_seek
        self._on_volume_change = on_volume_change
        self._on_rate_change = on_rate_change

        self._create_widgets()

    def _create_widgets(self) -> None:
        btn_cfg = dict(bg=self._panel_color, fg=self._text_color, relief=tk.FLAT, font=("", 14), padx=8)

        # 버튼 행
        button_row = tk.Frame(self, bg=self._panel_color)
        button_row.pack(pady=(10, 4))

        tk.Button(button_row, text="⏮", command=lambda: self._call(self._on_previous), **btn_cfg).pack(side=tk.LEFT)
        tk.Button(button_row, text="⏪", command=lambda: self._skip(-SKIP_SECONDS), **btn_cfg).pack(side=tk.LEFT)
        self._play_button = tk.Button(
            button_row, text="▶", command=lambda: self._call(self._on_play_pause),
            bg=self._highlight_color, fg="#ffffff", relief=tk.FLAT, font=("", 18), width=3,
        )
        self._play_button.pack(side=tk.LEFT, padx=10)
        tk.Button(button_row, text="⏩", command=lambda: self._skip(SKIP_SECONDS), **btn_cfg).pack(side=tk.LEFT)
        tk.Button(button_row, text="⏭", command=lambda: self._call(self._on_next), **btn_cfg).pack(side=tk.LEFT)

        # 재생 위치
        self._position_slider = RoundedSlider(
            self, from_=0, to=1, value=0,
            bg_color=self._panel_color, fill_color=self._highlight_color,
            release_command=self._seek,
        )
        self._position_slider.pack(fill=tk.X, padx=12, pady=(6, 0))

        time_row = tk.Frame(self, bg=self._panel_color)
        time_row.pack(fill=tk.X, padx=14)
        time_font = ("Consolas", 9)
        self._current_label = tk.Label(time_row, text="00:00:00", bg=self._panel_color, fg=self._text_color, font=time_font)
        self._current_label.pack(side=tk.LEFT)
        self._duration_label = tk.Label(time_row, text="00:00:00", bg=self._panel_color, fg=self._text_color, font=time_font)
        self._duration_label.pack(side=tk.RIGHT)

        # 볼륨 / 배속
        option_row = tk.Frame(self, bg=self._panel_color)
        option_row.pack(fill=tk.X, padx=12, pady=(8, 10))

        tk.Label(option_row, text="🔊", bg=self._panel_color, fg=self._text_color).pack(side=tk.LEFT)
        self._volume_slider = RoundedSlider(
            option_row, from_=0.0, to=1.0, value=1.0, step=0.05, width=120,
            bg_color=self._panel_color, fill_color=self._highlight_color,
            command=lambda v: self._call(self._on_volume_change, v),
        )
        self._volume_slider.pack(side=tk.LEFT, fill=tk.X, expand=True)

        tk.Label(option_row, text="⏱", bg=self._panel_color, fg=self._text_color).pack(side=tk.LEFT, padx=(8, 0))
        self._rate_slider = RoundedSlider(
            option_row, from_=MIN_PLAYBACK_RATE, to=MAX_PLAYBACK_RATE, value=1.0,
            step=PLAYBACK_RATE_STEP, width=120,
            bg_color=self._panel_color, fill_color=self._highlight_color,
            command=self._on_rate_slider,
        )
        self._rate_slider.pack(side=tk.LEFT, fill=tk.X, expand=True)
        self._rate_label = tk.Label(
            option_row, text="1.00x", width=5, bg=self._panel_color, fg=self._text_color, font=("Consolas", 9)
        )
        self._rate_label.pack(side=tk.LEFT)

    # ── 핸들러 ────────────────────────────────────────────────────────────────

    @staticmethod
    def _call(callback: Optional[Callable], *args) -> None:
        if callback:
            callback(*args)

    def _skip(self, delta: float) -> None:
        self._call(self._on_skip, delta)

    def _seek(self, seconds: float) -> None:
        self._call(self._on_seek, seconds)

    def _on_rate_slider(self, rate: float) -> None:
        self._rate_label.config(text=f"{rate:.2f}x")
        self._call(self._on_rate_change, rate)

    # ── 공개 API ──────────────────────────────────────────────────────────────

    def update_state(self, state: PlaybackState) -> None:
        """재생 상태 반영"""
        self._play_button.config(text="⏸" if state.is_playing else "▶")
        self._position_slider.configure_range(0, max(state.duration, 1.0))
        self._position_slider.set(state.current_time)
        self._current_label.config(text=format_timestamp(state.current_time))
        self._duration_label.config(text=format_timestamp(state.duration))
        self._volume_slider.set(state.volume)
        self._rate_slider.set(state.playback_rate)
        self._rate_label.config(text=f"{state.playback_rate:.2f}x")
