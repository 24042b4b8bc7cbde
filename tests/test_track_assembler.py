"""
업로드 배치 → 트랙 조립 테스트.
임시 디렉터리에 오디오/자막 파일을 만들고, 재생 길이 조회는 딕셔너리로 대체합니다.
"""

import sys
import os
import unittest
import tempfile
import shutil

TEST_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(TEST_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from core.errors import (
    InvalidAudioFileError,
    InvalidSubtitleFileError,
    MetadataProbeError,
    NoAudioInBatchError,
    SubtitleParseError,
)
from core.models import SourceFile
from services.srt_parser import SubtitleParser
from services.track_assembler import TrackAssembler


SRT_TEXT = "1\n00:00:01,000 --> 00:00:03,000\nFirst\n\n2\n00:00:04,000 --> 00:00:06,000\nSecond\n"


class TestTrackAssembler(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.durations = {}
        self.assembler = TrackAssembler(SubtitleParser(), self._probe, max_workers=2)

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def _probe(self, handle):
        if handle not in self.durations:
            raise MetadataProbeError("timeout")
        return self.durations[handle]

    def _write(self, name, content=b"\x00" * 16, duration=None):
        path = os.path.join(self.tmp_dir, name)
        mode = "wb" if isinstance(content, bytes) else "w"
        encoding = None if isinstance(content, bytes) else "utf-8"
        with open(path, mode, encoding=encoding) as f:
            f.write(content)
        if duration is not None:
            self.durations[path] = duration
        return SourceFile.from_path(path)

    def test_pairs_audio_with_matching_srt(self):
        """같은 이름의 SRT가 오디오와 연결됨"""
        audio = self._write("lecture.mp3", duration=120.5)
        srt = self._write("lecture.srt", SRT_TEXT)

        result = self.assembler.assemble([srt, audio])

        self.assertEqual(result.errors, [])
        self.assertEqual(len(result.tracks), 1)
        track = result.tracks[0]
        self.assertEqual(track.title, "lecture")
        self.assertEqual(track.audio_file, audio)
        self.assertEqual(track.subtitle_file, srt)
        self.assertEqual([s.text for s in track.subtitles], ["First", "Second"])
        self.assertEqual(track.duration, 120.5)
        self.assertTrue(track.id)

    def test_tracks_in_input_order_with_unique_ids(self):
        names = ["c.mp3", "a.mp3", "b.wav"]
        files = [self._write(name, duration=10.0) for name in names]

        result = self.assembler.assemble(files)

        self.assertEqual([t.title for t in result.tracks], ["c", "a", "b"])
        self.assertEqual(len({t.id for t in result.tracks}), 3)
        for track in result.tracks:
            self.assertFalse(track.has_transcript)
            self.assertIsNone(track.subtitle_file)

    def test_srt_match_is_case_sensitive_on_base_name(self):
        """확장자는 대소문자 무시, 이름은 그대로 비교"""
        audio = self._write("Talk.mp3", duration=5.0)
        matching = self._write("Talk.SRT", SRT_TEXT)
        result = self.assembler.assemble([audio, matching])
        self.assertEqual(result.tracks[0].subtitle_file, matching)

        other_audio = self._write("Intro.mp3", duration=5.0)
        lower = self._write("intro.srt", SRT_TEXT)
        result = self.assembler.assemble([other_audio, lower])
        self.assertIsNone(result.tracks[0].subtitle_file)
        self.assertEqual(result.errors, [])

    def test_batch_without_audio_rejected(self):
        """오디오가 없는 배치는 전체 취소"""
        srt = self._write("lecture.srt", SRT_TEXT)
        with self.assertRaises(NoAudioInBatchError):
            self.assembler.assemble([srt])
        with self.assertRaises(NoAudioInBatchError):
            self.assembler.assemble([])

    def test_rejected_batch_keeps_file_errors(self):
        """배치가 취소돼도 이미 찾은 파일별 오류는 예외에 담겨 전달됨"""
        vtt = self._write("notes.vtt", "WEBVTT")
        srt = self._write("lecture.srt", SRT_TEXT)

        with self.assertRaises(NoAudioInBatchError) as ctx:
            self.assembler.assemble([vtt, srt])

        self.assertEqual(len(ctx.exception.file_errors), 1)
        self.assertIsInstance(ctx.exception.file_errors[0], InvalidSubtitleFileError)
        self.assertEqual(ctx.exception.file_errors[0].file_name, "notes.vtt")

    def test_unsupported_files_reported(self):
        """지원하지 않는 파일은 파일별 오류, 나머지는 계속 처리"""
        audio = self._write("song.mp3", duration=3.0)
        vtt = self._write("song.vtt", "WEBVTT")
        text = self._write("notes.txt", "hello")

        result = self.assembler.assemble([audio, vtt, text])

        self.assertEqual(len(result.tracks), 1)
        self.assertEqual(len(result.errors), 2)
        self.assertIsInstance(result.errors[0], InvalidSubtitleFileError)
        self.assertEqual(result.errors[0].file_name, "song.vtt")
        self.assertIsInstance(result.errors[1], InvalidAudioFileError)
        self.assertEqual(result.errors[1].file_name, "notes.txt")

    def test_unparseable_srt_keeps_track(self):
        """자막 파싱 실패 시 자막 없는 트랙 + 오류"""
        audio = self._write("talk.mp3", duration=8.0)
        srt = self._write("talk.srt", "this is not an srt file")

        result = self.assembler.assemble([audio, srt])

        self.assertEqual(len(result.tracks), 1)
        self.assertEqual(result.tracks[0].subtitles, ())
        self.assertEqual(result.tracks[0].subtitle_file, srt)
        self.assertEqual(len(result.errors), 1)
        self.assertIsInstance(result.errors[0], SubtitleParseError)
        self.assertEqual(result.errors[0].file_name, "talk.srt")

    def test_empty_srt_is_not_an_error(self):
        audio = self._write("talk.mp3", duration=8.0)
        srt = self._write("talk.srt", "")

        result = self.assembler.assemble([audio, srt])

        self.assertEqual(result.errors, [])
        self.assertFalse(result.tracks[0].has_transcript)

    def test_undecodable_srt_reported(self):
        audio = self._write("talk.mp3", duration=8.0)
        srt = self._write("talk.srt", b"\xff\xfe\xfa\xfb invalid utf-8")

        result = self.assembler.assemble([audio, srt])

        self.assertEqual(len(result.tracks), 1)
        self.assertIsInstance(result.errors[0], InvalidSubtitleFileError)

    def test_missing_audio_file_reported(self):
        """읽을 수 없는 오디오는 트랙을 만들지 않음"""
        good = self._write("good.mp3", duration=1.0)
        missing = SourceFile.from_path(os.path.join(self.tmp_dir, "missing.mp3"))

        result = self.assembler.assemble([missing, good])

        self.assertEqual([t.title for t in result.tracks], ["good"])
        self.assertEqual(len(result.errors), 1)
        self.assertIsInstance(result.errors[0], InvalidAudioFileError)
        self.assertEqual(result.errors[0].file_name, "missing.mp3")

    def test_probe_failure_gives_zero_duration(self):
        """재생 길이 조회 실패는 오류가 아님 (길이 0)"""
        audio = self._write("slow.mp3")

        result = self.assembler.assemble([audio])

        self.assertEqual(result.errors, [])
        self.assertEqual(result.tracks[0].duration, 0.0)


if __name__ == '__main__':
    unittest.main()
