"""
자막 표시 패널.
현재 트랙의 전체 자막을 캔버스에 그리고, 재생 중인 라인을 강조하며 자동으로 스크롤합니다.
라인을 클릭하면 해당 자막 위치로 이동합니다.
"""

import tkinter as tk
from typing import Callable, Optional

from core.models import TranscriptLine
from ui.widgets.theme_engine import muted_color


class TranscriptPanel(tk.Frame):
    """자막 표시 패널"""

    _SCROLL_SENSITIVITY = 2
    _TIMESTAMP_WIDTH = 56       # 타임스탬프 열 너비 (px)
    _EMPTY_MESSAGE = "자막이 여기에 표시됩니다."

    def __init__(
        self,
        parent: tk.Widget,
        bg_color: str = "#1a1a2e",
        text_color: str = "#e0e0e0",
        highlight_color: str = "#e94560",
        font_family: str = "Malgun Gothic",
        font_size: int = 11,
        on_line_click: Optional[Callable[[int], None]] = None,
        **kwargs,
    ) -> None:
        super().__init__(parent, bg=bg_color, **kwargs)

        self._bg_color = bg_color
        self._text_color = text_color
        self._highlight_color = highlight_color
        self._font_family = font_family
        self._font_size = font_size
        self._on_line_click = on_line_click

        self._lines: list[TranscriptLine] = []
        self._active_index: int = -1
        self._line_y_positions: list[int] = []

        self._create_widgets()

    def _create_widgets(self) -> None:
        self._canvas = tk.Canvas(self, bg=self._bg_color, highlightthickness=0)
        self._scrollbar = tk.Scrollbar(self, orient=tk.VERTICAL, command=self._canvas.yview)
        self._canvas.configure(yscrollcommand=self._scrollbar.set)

        self._scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        self._canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=5, pady=5)

        self._canvas.bind("<Configure>", lambda e: self._render_all())
        # 마우스 휠 (Windows/Linux/Mac), 캔버스 위에 있을 때만
        self._canvas.bind("<Enter>", self._bind_wheel)
        self._canvas.bind("<Leave>", self._unbind_wheel)

    # ── 공개 API ──────────────────────────────────────────────────────────────

    def update_transcript(self, lines: list[TranscriptLine]) -> None:
        """
        자막 라인 업데이트.
        내용이 바뀌었으면 전체를 다시 그리고, 강조 라인만 바뀌었으면 강조만 갱신합니다.
        """
        needs_full_render = len(lines) != len(self._lines) or any(
            new.text != old.text or new.timestamp != old.timestamp
            for new, old in zip(lines, self._lines)
        )
        self._lines = lines
        new_index = next((line.index for line in lines if line.is_active), -1)

        if needs_full_render:
            self._active_index = new_index
            self._render_all()
            return

        if new_index != self._active_index:
            self._active_index = new_index
            self._update_highlight()
            self._scroll_to_active()

    # ── 렌더링 ────────────────────────────────────────────────────────────────

    def _render_all(self) -> None:
        self._canvas.delete("all")
        self._line_y_positions = []

        canvas_width = self._canvas.winfo_width()
        if canvas_width <= 1:
            canvas_width = 500

        if not self._lines:
            self._canvas.create_text(
                canvas_width // 2, 120,
                text=self._EMPTY_MESSAGE,
                fill=muted_color(self._text_color),
                font=(self._font_family, self._font_size),
                anchor="center",
            )
            self._canvas.configure(scrollregion=(0, 0, canvas_width, 0))
            return

        text_x = 10 + self._TIMESTAMP_WIDTH
        text_width = max(100, canvas_width - text_x - 20)
        y = 12

        for line in self._lines:
            self._line_y_positions.append(y)
            tag = f"line_{line.index}"

            self._canvas.create_text(
                10, y,
                text=line.timestamp,
                fill=muted_color(self._text_color),
                font=("Consolas", self._font_size - 1, "bold"),
                anchor="nw",
                tags=(tag, f"{tag}_time", "timestamp"),
            )
            text_item = self._canvas.create_text(
                text_x, y,
                text=line.text,
                fill=muted_color(self._text_color),
                font=(self._font_family, self._font_size),
                anchor="nw",
                width=text_width,
                tags=(tag, f"{tag}_text", "transcript_text"),
            )
            self._canvas.tag_bind(tag, "<Button-1>", lambda e, index=line.index: self._on_click(index))

            bbox = self._canvas.bbox(text_item)
            text_height = (bbox[3] - bbox[1]) if bbox else self._font_size + 6
            y += text_height + 14

        self._canvas.configure(scrollregion=(0, 0, canvas_width, y + 40))
        self._update_highlight()
        self._scroll_to_active()

    def _update_highlight(self) -> None:
        """재생 중인 라인 강조"""
        muted = muted_color(self._text_color)
        self._canvas.itemconfigure("transcript_text", fill=muted, font=(self._font_family, self._font_size))
        self._canvas.itemconfigure("timestamp", fill=muted)

        if self._active_index >= 0:
            tag = f"line_{self._active_index}"
            self._canvas.itemconfigure(
                f"{tag}_text", fill=self._text_color, font=(self._font_family, self._font_size, "bold")
            )
            self._canvas.itemconfigure(f"{tag}_time", fill=self._highlight_color)

    def _scroll_to_active(self) -> None:
        """강조 라인이 화면 1/3 지점에 오도록 스크롤"""
        if self._active_index < 0 or self._active_index >= len(self._line_y_positions):
            return

        scrollregion = self._canvas.bbox("all")
        if not scrollregion:
            return
        total_height = scrollregion[3]
        canvas_height = self._canvas.winfo_height()
        if total_height <= canvas_height:
            return

        target_y = self._line_y_positions[self._active_index]
        fraction = (target_y - canvas_height / 3) / total_height
        self._canvas.yview_moveto(max(0.0, min(1.0, fraction)))

    # ── 마우스 ────────────────────────────────────────────────────────────────

    def _on_click(self, index: int) -> None:
        if self._on_line_click:
            self._on_line_click(index)

    def _bind_wheel(self, event=None) -> None:
        self._canvas.bind_all("<MouseWheel>", self._on_mousewheel)
        self._canvas.bind_all("<Button-4>", self._on_mousewheel)
        self._canvas.bind_all("<Button-5>", self._on_mousewheel)

    def _unbind_wheel(self, event=None) -> None:
        self._canvas.unbind_all("<MouseWheel>")
        self._canvas.unbind_all("<Button-4>")
        self._canvas.unbind_all("<Button-5>")

    def _on_mousewheel(self, event) -> None:
        if event.delta:
            self._canvas.yview_scroll(int(-1 * (event.delta / 120) * self._SCROLL_SENSITIVITY), "units")
        elif event.num == 5:
            self._canvas.yview_scroll(1, "units")
        elif event.num == 4:
            self._canvas.yview_scroll(-1, "units")
