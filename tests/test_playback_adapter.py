"""
재생 시계 어댑터 테스트.
가짜 엔진으로 엔진 알림 → 재생 상태 반영과 재생 명령 전달을 검증합니다.
"""

import sys
import os
import unittest
import tempfile
import shutil

TEST_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(TEST_DIR)
for path in (PROJECT_ROOT, TEST_DIR):
    if path not in sys.path:
        sys.path.insert(0, path)

from engine_fakes import FakeEngine, make_track
from core.errors import PlaybackEngineError
from services.playback_engine import EngineEventKind
from settings.settings_manager import SettingsManager
from viewmodels.playback_adapter import PlaybackClockAdapter, clamp_rate, clamp_volume


class TestPlaybackClockAdapter(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.settings = SettingsManager(os.path.join(self.tmp_dir, "settings.json"))
        self.engine = FakeEngine()
        self.adapter = PlaybackClockAdapter(self.engine, self.settings)

        self.ticks = 0
        self.ended = 0
        self.errors = []
        self.adapter.set_on_state_changed(self._on_tick)
        self.adapter.set_on_ended(self._on_ended)
        self.adapter.set_on_error(self.errors.append)

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def _on_tick(self):
        self.ticks += 1

    def _on_ended(self):
        self.ended += 1

    def test_clamp_helpers(self):
        self.assertEqual(clamp_rate(0.1), 0.5)
        self.assertEqual(clamp_rate(3.0), 2.0)
        self.assertEqual(clamp_rate(1.25), 1.25)
        self.assertEqual(clamp_volume(-0.5), 0.0)
        self.assertEqual(clamp_volume(1.5), 1.0)

    def test_initial_rate_and_volume_from_settings(self):
        """배속/볼륨은 시작 시 설정에서 읽어 엔진에 적용"""
        self.settings.update({"playback_rate": "1.5", "volume": "0.4"})
        engine = FakeEngine()
        adapter = PlaybackClockAdapter(engine, self.settings)

        self.assertEqual(engine.playback_rate, 1.5)
        self.assertEqual(engine.volume, 0.4)
        self.assertEqual(adapter.state.playback_rate, 1.5)
        self.assertEqual(adapter.state.volume, 0.4)

    def test_out_of_range_settings_clamped(self):
        self.settings.update({"playback_rate": "9", "volume": "oops"})
        adapter = PlaybackClockAdapter(FakeEngine(), self.settings)
        self.assertEqual(adapter.state.playback_rate, 2.0)
        self.assertEqual(adapter.state.volume, 1.0)

    def test_events_ignored_before_load(self):
        self.engine.emit(EngineEventKind.TIME_UPDATE, 12.0)
        self.adapter.process_events()
        self.assertEqual(self.adapter.state.current_time, 0.0)
        self.assertEqual(self.ticks, 0)

    def test_load_resets_position(self):
        track = make_track(duration=90.0)
        self.adapter.load(track)

        state = self.adapter.state
        self.assertTrue(self.adapter.is_loaded)
        self.assertEqual(self.engine.loaded_handle, track.audio_file.media_handle)
        self.assertFalse(state.is_playing)
        self.assertEqual(state.current_time, 0.0)
        self.assertEqual(state.duration, 90.0)

    def test_engine_events_update_state(self):
        """엔진 알림은 process_events() 호출 시점에만 반영"""
        self.adapter.load(make_track())
        self.engine.emit(EngineEventKind.STARTED)
        self.engine.emit(EngineEventKind.TIME_UPDATE, 3.5)
        self.engine.emit(EngineEventKind.DURATION_AVAILABLE, 61.0)

        self.assertEqual(self.adapter.state.current_time, 0.0)
        self.adapter.process_events()

        state = self.adapter.state
        self.assertTrue(state.is_playing)
        self.assertEqual(state.current_time, 3.5)
        self.assertEqual(state.duration, 61.0)

        self.engine.emit(EngineEventKind.PAUSED)
        self.adapter.process_events()
        self.assertFalse(self.adapter.state.is_playing)

    def test_stale_events_dropped_on_load(self):
        """이전 미디어의 알림은 새 트랙에 반영되지 않음"""
        self.adapter.load(make_track("first"))
        self.engine.emit(EngineEventKind.TIME_UPDATE, 30.0)
        self.engine.emit(EngineEventKind.ENDED)

        self.adapter.load(make_track("second"))
        self.adapter.process_events()

        self.assertEqual(self.adapter.state.current_time, 0.0)
        self.assertEqual(self.ended, 0)

    def test_ended_event(self):
        self.adapter.load(make_track())
        self.adapter.play()
        self.engine.emit(EngineEventKind.ENDED)
        self.adapter.process_events()

        self.assertEqual(self.ended, 1)
        self.assertFalse(self.adapter.state.is_playing)

    def test_error_event(self):
        self.adapter.load(make_track())
        self.adapter.play()
        self.engine.emit(EngineEventKind.ERRORED, message="decode failed")
        self.adapter.process_events()

        self.assertEqual(len(self.errors), 1)
        self.assertIsInstance(self.errors[0], PlaybackEngineError)
        self.assertEqual(self.errors[0].message, "decode failed")
        self.assertFalse(self.adapter.state.is_playing)

    def test_halted_flag_only_during_engine_stop(self):
        """재생 종료/오류로 멈출 때만 상태 변경 알림 동안 halted_by_engine이 켜짐"""
        flags = []
        self.adapter.set_on_state_changed(lambda: flags.append(self.adapter.halted_by_engine))
        self.adapter.load(make_track())
        self.adapter.play()
        self.adapter.pause()
        self.assertEqual(flags, [False, False, False])

        self.adapter.play()
        self.engine.emit(EngineEventKind.ENDED)
        self.engine.emit(EngineEventKind.ERRORED, message="decode failed")
        self.adapter.process_events()

        self.assertEqual(flags[-2:], [True, True])
        self.assertFalse(self.adapter.halted_by_engine)

    def test_play_pause_toggle(self):
        """재생 명령은 엔진 확인 전에 상태에 바로 반영"""
        self.adapter.play()
        self.assertNotIn(("play",), self.engine.calls)  # 로드 전에는 무시

        self.adapter.load(make_track())
        self.adapter.play_pause()
        self.assertTrue(self.adapter.state.is_playing)
        self.assertTrue(self.engine.playing)

        self.adapter.play_pause()
        self.assertFalse(self.adapter.state.is_playing)
        self.assertFalse(self.engine.playing)

    def test_skip_relative_to_engine_time(self):
        self.adapter.load(make_track())
        self.engine.current_time = 10.0
        self.adapter.skip(5.0)
        self.assertEqual(self.engine.current_time, 15.0)
        self.adapter.skip(-30.0)
        self.assertEqual(self.engine.current_time, 0.0)

    def test_seek_updates_state_immediately(self):
        self.adapter.load(make_track())
        ticks_before = self.ticks
        self.adapter.seek(42.0)

        self.assertEqual(self.engine.current_time, 42.0)
        self.assertEqual(self.adapter.state.current_time, 42.0)
        self.assertGreater(self.ticks, ticks_before)

    def test_rate_and_volume_persisted(self):
        """배속/볼륨 변경은 범위 제한 후 설정에 저장"""
        self.adapter.set_playback_rate(1.75)
        self.assertEqual(self.engine.playback_rate, 1.75)
        self.assertEqual(self.settings.get("playback_rate"), "1.75")

        self.adapter.set_playback_rate(5.0)
        self.assertEqual(self.adapter.state.playback_rate, 2.0)
        self.assertEqual(self.settings.get("playback_rate"), "2.0")

        self.adapter.set_volume(0.25)
        self.assertEqual(self.engine.volume, 0.25)
        self.assertEqual(self.settings.get("volume"), "0.25")

    def test_rate_survives_track_change(self):
        self.adapter.set_playback_rate(1.5)
        self.adapter.load(make_track("first"))
        self.adapter.load(make_track("second"))
        self.assertEqual(self.adapter.state.playback_rate, 1.5)
        self.assertEqual(self.engine.playback_rate, 1.5)

    def test_unload(self):
        self.adapter.load(make_track())
        self.adapter.play()
        self.adapter.unload()

        self.assertFalse(self.adapter.is_loaded)
        self.assertIn(("stop",), self.engine.calls)
        self.assertFalse(self.adapter.state.is_playing)
        self.assertEqual(self.adapter.state.duration, 0.0)

    def test_state_is_a_copy(self):
        state = self.adapter.state
        state.current_time = 99.0
        self.assertEqual(self.adapter.state.current_time, 0.0)


if __name__ == '__main__':
    unittest.main()
