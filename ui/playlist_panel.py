"""
플레이리스트 패널.
업로드된 트랙 목록을 보여주고, 클릭한 트랙을 재생합니다.
"""

import tkinter as tk
from typing import Callable, Optional

from core.models import PlaylistEntry


class PlaylistPanel(tk.Frame):
    """트랙 목록 패널"""

    def __init__(
        self,
        parent: tk.Widget,
        bg_color: str = "#1a1a2e",
        panel_color: str = "#16213e",
        text_color: str = "#e0e0e0",
        highlight_color: str = "#e94560",
        on_select: Optional[Callable[[int], None]] = None,
        **kwargs,
    ) -> None:
        super().__init__(parent, bg=bg_color, **kwargs)

        self._panel_color = panel_color
        self._text_color = text_color
        self._highlight_color = highlight_color
        self._on_select = on_select
        self._entries: list[PlaylistEntry] = []

        self._create_widgets()

    def _create_widgets(self) -> None:
        tk.Label(
            self,
            text="플레이리스트",
            bg=self["bg"],
            fg=self._text_color,
            font=("Malgun Gothic", 10, "bold"),
            anchor="w",
        ).pack(fill=tk.X, padx=8, pady=(6, 2))

        list_frame = tk.Frame(self, bg=self["bg"])
        list_frame.pack(fill=tk.BOTH, expand=True, padx=8, pady=(0, 6))

        self._listbox = tk.Listbox(
            list_frame,
            bg=self._panel_color,
            fg=self._text_color,
            selectbackground=self._highlight_color,
            activestyle="none",
            relief=tk.FLAT,
            highlightthickness=0,
            font=("Malgun Gothic", 10),
            exportselection=False,
        )
        scrollbar = tk.Scrollbar(list_frame, orient=tk.VERTICAL, command=self._listbox.yview)
        self._listbox.configure(yscrollcommand=scrollbar.set)

        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        self._listbox.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self._listbox.bind("<<ListboxSelect>>", self._on_listbox_select)

    def update_entries(self, entries: list[PlaylistEntry]) -> None:
        """목록 다시 채우기"""
        self._entries = entries
        self._listbox.delete(0, tk.END)

        current = -1
        for i, entry in enumerate(entries):
            marker = "▶" if entry.is_current else "♪"
            self._listbox.insert(tk.END, f" {marker}  {entry.title}   [{entry.duration}]")
            if entry.is_current:
                current = i

        self._listbox.selection_clear(0, tk.END)
        if current >= 0:
            self._listbox.selection_set(current)
            self._listbox.see(current)

    def _on_listbox_select(self, event) -> None:
        selection = self._listbox.curselection()
        if not selection or not self._on_select:
            return
        index = selection[0]
        # 이미 재생 중인 트랙을 다시 그릴 때 발생하는 선택 이벤트는 무시
        if 0 <= index < len(self._entries) and not self._entries[index].is_current:
            self._on_select(index)
