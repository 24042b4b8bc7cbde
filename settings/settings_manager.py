"""
설정 관리 클래스.
문자열 키-값 설정을 JSON 파일에 저장하고, 변경 시 등록된 콜백에 알립니다.
값은 문자 그대로 저장하며 (예: 배속 "1.25"), 읽을 때 get_float/get_bool로 변환합니다.
"""

import json
import os
import sys
from typing import Callable, Dict, List, Optional

from settings.defaults import DEFAULT_SETTINGS


class SettingsManager:
    """설정 관리 클래스 (Observer Pattern)"""

    def __init__(self, filepath: str = "settings.json") -> None:
        # PyInstaller 환경 지원: exe 실행 시 실행 파일 위치 기준
        if getattr(sys, "frozen", False):
            base_path = os.path.dirname(sys.executable)
        else:
            base_path = os.getcwd()

        self.filepath = os.path.join(base_path, filepath)
        self._settings: Dict[str, str] = DEFAULT_SETTINGS.copy()
        self._observers: List[Callable[[Dict[str, str]], None]] = []
        self._load()

    # ── 파일 I/O ──────────────────────────────────────────────────────────────

    def _load(self) -> None:
        """설정 파일 로드 (누락된 키는 기본값으로 보완)"""
        try:
            if os.path.exists(self.filepath):
                with open(self.filepath, "r", encoding="utf-8") as f:
                    loaded = json.load(f)
                if isinstance(loaded, dict):
                    for key, value in loaded.items():
                        self._settings[str(key)] = self._to_text(value)
        except (OSError, ValueError) as e:
            print(f"[Settings] 로드 실패: {e}")

    def _save(self) -> None:
        """설정 파일 저장"""
        try:
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._settings, f, ensure_ascii=False, indent=2)
        except OSError as e:
            print(f"[Settings] 저장 실패: {e}")

    @staticmethod
    def _to_text(value: object) -> str:
        """값을 저장용 문자열로 변환 (bool은 소문자 true/false)"""
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    # ── 공개 API ──────────────────────────────────────────────────────────────

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """설정값 조회 (문자열)"""
        return self._settings.get(key, default)

    def get_float(self, key: str, default: float) -> float:
        """실수 설정값 조회, 해석 불가 시 기본값"""
        try:
            return float(self._settings[key])
        except (KeyError, TypeError, ValueError):
            return default

    def get_int(self, key: str, default: int) -> int:
        try:
            return int(self._settings[key])
        except (KeyError, TypeError, ValueError):
            return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._settings.get(key)
        if value is None:
            return default
        return value.strip().lower() in ("true", "1", "yes", "on")

    def get_all(self) -> Dict[str, str]:
        """모든 설정 복사본 반환"""
        return self._settings.copy()

    def set(self, key: str, value: object) -> None:
        """단일 설정값 변경 및 저장"""
        self._settings[key] = self._to_text(value)
        self._save()
        self._notify_observers()

    def update(self, new_settings: Dict[str, object]) -> None:
        """여러 설정값 일괄 업데이트 및 저장"""
        for key, value in new_settings.items():
            self._settings[key] = self._to_text(value)
        self._save()
        self._notify_observers()

    # ── Observer 관리 ─────────────────────────────────────────────────────────

    def add_observer(self, callback: Callable[[Dict[str, str]], None]) -> None:
        """옵저버 등록"""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[Dict[str, str]], None]) -> None:
        """옵저버 제거"""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify_observers(self) -> None:
        """등록된 옵저버들에게 설정 변경 알림"""
        settings_copy = self._settings.copy()
        for callback in self._observers:
            try:
                callback(settings_copy)
            except Exception as e:
                print(f"[Settings] 옵저버 알림 실패: {e}")
