"""
커스텀 슬라이더 위젯.
재생 위치, 볼륨, 배속 조절에 공통으로 사용합니다.
"""

import tkinter as tk
from typing import Callable, Optional


class RoundedSlider(tk.Canvas):
    """
    둥근 트랙과 원형 핸들을 가진 커스텀 슬라이더 위젯.
    step이 있으면 값을 해당 간격으로 맞추고,
    드래그 중에는 외부 set() 호출을 무시하여 재생 위치 갱신과 충돌하지 않습니다.
    """

    def __init__(
        self,
        parent: tk.Widget,
        from_: float = 0.0,
        to: float = 100.0,
        value: float = 0.0,
        step: Optional[float] = None,
        width: int = 200,
        height: int = 20,
        bg_color: str = "#1a1a2e",
        track_color: str = "#3a3a5a",
        fill_color: str = "#e94560",
        handle_color: str = "#ffffff",
        command: Optional[Callable[[float], None]] = None,
        release_command: Optional[Callable[[float], None]] = None,
    ) -> None:
        super().__init__(parent, width=width, height=height, bg=bg_color, highlightthickness=0)

        self._from = from_
        self._to = to
        self._step = step
        self._value = self._snap(value)
        self._command = command                 # 드래그 중 값 변경마다
        self._release_command = release_command # 마우스를 놓을 때 한 번
        self._dragging = False

        self._track_color = track_color
        self._fill_color = fill_color
        self._handle_color = handle_color

        self._padding = 10
        self._track_height = 4
        self._handle_radius = 7

        self._draw()
        self.bind("<ButtonPress-1>", self._on_press)
        self.bind("<B1-Motion>", self._on_drag)
        self.bind("<ButtonRelease-1>", self._on_release)
        self.bind("<Configure>", lambda e: self._draw())

    # ── 좌표 변환 ─────────────────────────────────────────────────────────────

    def _track_bounds(self) -> tuple[int, int]:
        width = self.winfo_width()
        if width <= 1:
            width = int(self["width"])
        return self._padding, width - self._padding

    def _value_to_x(self, value: float) -> int:
        x_start, x_end = self._track_bounds()
        span = self._to - self._from
        ratio = (value - self._from) / span if span else 0
        return int(x_start + ratio * (x_end - x_start))

    def _x_to_value(self, x: int) -> float:
        x_start, x_end = self._track_bounds()
        ratio = (x - x_start) / (x_end - x_start) if x_end != x_start else 0
        ratio = max(0.0, min(1.0, ratio))
        return self._snap(self._from + ratio * (self._to - self._from))

    def _snap(self, value: float) -> float:
        value = max(self._from, min(self._to, value))
        if self._step:
            value = round(self._from + round((value - self._from) / self._step) * self._step, 6)
        return value

    # ── 그리기 ────────────────────────────────────────────────────────────────

    def _draw(self) -> None:
        self.delete("all")

        height = self.winfo_height()
        if height <= 1:
            height = int(self["height"])
        cy = height // 2
        half = self._track_height // 2

        x_start, x_end = self._track_bounds()
        handle_x = self._value_to_x(self._value)

        self.create_rounded_rect(x_start, cy - half, x_end, cy + half, radius=half, fill=self._track_color, outline="")
        if handle_x > x_start:
            self.create_rounded_rect(x_start, cy - half, handle_x, cy + half, radius=half, fill=self._fill_color, outline="")

        r = self._handle_radius
        self.create_oval(
            handle_x - r, cy - r, handle_x + r, cy + r,
            fill=self._handle_color, outline=self._fill_color, width=2,
        )

    def create_rounded_rect(self, x1: int, y1: int, x2: int, y2: int, radius: int = 5, **kwargs) -> int:
        """둥근 모서리 사각형 그리기"""
        points = [
            x1 + radius, y1, x2 - radius, y1, x2, y1, x2, y1 + radius,
            x2, y2 - radius, x2, y2, x2 - radius, y2, x1 + radius, y2,
            x1, y2, x1, y2 - radius, x1, y1 + radius, x1, y1,
        ]
        return self.create_polygon(points, smooth=True, **kwargs)

    # ── 마우스 ────────────────────────────────────────────────────────────────

    def _on_press(self, event: tk.Event) -> None:
        self._dragging = True
        self._update_value(event.x)

    def _on_drag(self, event: tk.Event) -> None:
        if self._dragging:
            self._update_value(event.x)

    def _on_release(self, event: tk.Event) -> None:
        self._dragging = False
        if self._release_command:
            self._release_command(self._value)

    def _update_value(self, x: int) -> None:
        self._value = self._x_to_value(x)
        self._draw()
        if self._command:
            self._command(self._value)

    # ── 공개 API ──────────────────────────────────────────────────────────────

    def get(self) -> float:
        return self._value

    def set(self, value: float) -> None:
        """값 설정 (콜백 호출 없음, 드래그 중이면 무시)"""
        if self._dragging:
            return
        self._value = self._snap(value)
        self._draw()

    def configure_range(self, from_: float, to: float) -> None:
        """범위 재설정 (재생 길이가 바뀔 때)"""
        self._from = from_
        self._to = to
        self._value = self._snap(self._value)
        self._draw()
