"""
테마 엔진 - 색상 계산 및 시작 시 테마 로드.
"""

import colorsys
from dataclasses import dataclass

from settings.defaults import DEFAULT_SETTINGS
from settings.settings_manager import SettingsManager


# ── 색상 유틸리티 ─────────────────────────────────────────────────────────────

def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """HEX 색상 문자열을 RGB 튜플로 변환"""
    hex_color = hex_color.lstrip("#")
    return int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def adjust_color_brightness(hex_color: str, factor: float) -> str:
    """
    색상의 밝기를 조절합니다.

    Args:
        hex_color: HEX 색상 문자열 (#rrggbb)
        factor: 밝기 배율 (1.0 = 변경 없음)
    """
    r, g, b = hex_to_rgb(hex_color)
    h, l, s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
    new_l = max(0.0, min(1.0, l * factor))
    new_r, new_g, new_b = colorsys.hls_to_rgb(h, new_l, s)
    return rgb_to_hex(int(new_r * 255), int(new_g * 255), int(new_b * 255))


def calculate_panel_color(bg_color: str) -> str:
    """
    배경색을 기반으로 패널 배경색 계산.
    매우 어두운 배경에서도 구분이 가능하도록 최소 밝기를 보장합니다.
    """
    panel_color = adjust_color_brightness(bg_color, 0.85)
    r, g, b = hex_to_rgb(panel_color)
    if r < 20 and g < 20 and b < 20:
        panel_color = adjust_color_brightness(bg_color, 1.4)
    return panel_color


def muted_color(text_color: str) -> str:
    """비활성 텍스트 색상 (타임스탬프, 파일 이름 등)"""
    return adjust_color_brightness(text_color, 0.6)


# ── 시작 시 테마 로드 ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Theme:
    """창을 만들 때 한 번 읽어 오는 색상/글꼴 묶음"""
    bg_color: str
    panel_color: str
    text_color: str
    highlight_color: str
    font_family: str
    font_size: int


def load_theme(settings: SettingsManager) -> Theme:
    """설정에서 테마 값을 읽음 (비어 있거나 잘못된 값은 기본값)"""
    def read(key: str) -> str:
        return settings.get(key) or DEFAULT_SETTINGS[key]

    bg = read("background_color")
    return Theme(
        bg_color=bg,
        panel_color=calculate_panel_color(bg),
        text_color=read("text_color"),
        highlight_color=read("highlight_color"),
        font_family=read("font_family"),
        font_size=settings.get_int("font_size", int(DEFAULT_SETTINGS["font_size"])),
    )
