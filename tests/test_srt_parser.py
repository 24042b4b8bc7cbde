"""
SRT 파서 / 타임스탬프 변환 테스트.
"""

import sys
import os
import unittest

TEST_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(TEST_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from core.models import Subtitle
from services.srt_parser import SubtitleParser
from services.timestamp import format_clock, format_timestamp, parse_timestamp


SAMPLE_SRT = """1
00:00:01,000 --> 00:00:04,000
Hello there.

2
00:00:05,500 --> 00:00:08,250
This line
spans two rows.

3
01:02:03,456 --> 01:02:05,000
Last one."""


class TestTimestamp(unittest.TestCase):
    def test_parse_timestamp(self):
        """HH:MM:SS,mmm → 초"""
        self.assertEqual(parse_timestamp("00:00:01,000"), 1.0)
        self.assertEqual(parse_timestamp("01:02:03,456"), 3723.456)
        self.assertEqual(parse_timestamp("00:00:00,000"), 0.0)
        # 시 자리는 한 자리 이상 허용
        self.assertEqual(parse_timestamp("100:00:00,000"), 360000.0)
        self.assertEqual(parse_timestamp("1:00:00,500"), 3600.5)

    def test_parse_timestamp_invalid(self):
        """형식이 맞지 않으면 0"""
        cases = [
            "",
            "00:00:01.000",     # 점 구분자
            "00:60:00,000",     # 분 범위 초과
            "00:00:60,000",     # 초 범위 초과
            "00:00:01,00",      # 밀리초 자리수 부족
            "aa:bb:cc,ddd",
            None,
        ]
        for raw in cases:
            self.assertEqual(parse_timestamp(raw), 0.0, f"Failed for: {raw!r}")

    def test_format_timestamp(self):
        self.assertEqual(format_timestamp(0), "00:00:00")
        self.assertEqual(format_timestamp(59.9), "00:00:59")
        self.assertEqual(format_timestamp(3723.456), "01:02:03")
        self.assertEqual(format_timestamp(360000), "100:00:00")

    def test_format_invalid_values(self):
        """음수 / NaN / 숫자가 아닌 값은 0으로 표시"""
        for value in (-1, float("nan"), float("inf"), "12", None, True):
            self.assertEqual(format_timestamp(value), "00:00:00", f"Failed for: {value!r}")
            self.assertEqual(format_clock(value), "00:00", f"Failed for: {value!r}")

    def test_format_clock(self):
        self.assertEqual(format_clock(65), "01:05")
        self.assertEqual(format_clock(3723), "62:03")


class TestSubtitleParser(unittest.TestCase):
    def setUp(self):
        self.parser = SubtitleParser()

    def test_parse_blocks(self):
        """번호 / 시간 / 여러 줄 텍스트 파싱"""
        subs = self.parser.parse(SAMPLE_SRT)
        self.assertEqual(len(subs), 3)
        self.assertEqual(subs[0], Subtitle(id=1, start=1.0, end=4.0, text="Hello there."))
        self.assertEqual(subs[1].text, "This line\nspans two rows.")
        self.assertEqual(subs[1].start, 5.5)
        self.assertEqual(subs[1].end, 8.25)
        self.assertEqual(subs[2].start, 3723.456)

    def test_two_block_example(self):
        text = "1\n00:00:01,000 --> 00:00:02,500\nHello\n\n2\n00:00:03,000 --> 00:00:04,000\nWorld"
        subs = self.parser.parse(text)
        self.assertEqual(subs, [
            Subtitle(id=1, start=1.0, end=2.5, text="Hello"),
            Subtitle(id=2, start=3.0, end=4.0, text="World"),
        ])
        self.assertEqual(self.parser.get_active_index(subs, 2.0), 0)
        self.assertIsNone(self.parser.get_active_index(subs, 2.6))
        self.assertEqual(self.parser.get_active_index(subs, 3.5), 1)

    def test_crlf_and_trailing_newline(self):
        """Windows 줄바꿈과 끝 개행 처리"""
        subs = self.parser.parse(SAMPLE_SRT.replace("\n", "\r\n") + "\r\n")
        self.assertEqual(len(subs), 3)
        self.assertEqual(subs[2].text, "Last one.")
        self.assertEqual(subs[1].text, "This line\nspans two rows.")

    def test_malformed_blocks_skipped(self):
        """형식이 맞지 않는 블록은 건너뜀"""
        text = (
            "1\n00:00:01,000 --> 00:00:02,000\nGood\n\n"
            "two\n00:00:03,000 --> 00:00:04,000\nBad index\n\n"
            "3\n00:00:05.000 --> 00:00:06,000\nBad separator\n\n"
            "4\n00:00:07,000 --> 00:00:08,000\n\n\n"
            "5\n00:00:09,000 --> 00:00:10,000\nAlso good"
        )
        subs = self.parser.parse(text)
        self.assertEqual([s.id for s in subs], [1, 5])

    def test_file_order_preserved(self):
        """정렬/중복 검사 없이 파일 순서 유지"""
        text = (
            "7\n00:00:10,000 --> 00:00:12,000\nLater\n\n"
            "7\n00:00:01,000 --> 00:00:02,000\nEarlier"
        )
        subs = self.parser.parse(text)
        self.assertEqual([s.text for s in subs], ["Later", "Earlier"])
        self.assertEqual([s.id for s in subs], [7, 7])

    def test_empty_input(self):
        self.assertEqual(self.parser.parse(""), [])
        self.assertFalse(self.parser.is_parse_failure("", []))
        self.assertFalse(self.parser.is_parse_failure("  \n", []))

    def test_parse_failure_detection(self):
        """내용은 있는데 블록이 없으면 실패"""
        text = "WEBVTT\n\n00:01.000 --> 00:04.000\nHello"
        subs = self.parser.parse(text)
        self.assertEqual(subs, [])
        self.assertTrue(self.parser.is_parse_failure(text, subs))

    def test_active_index(self):
        """현재 시각을 포함하는 첫 번째 자막 (양 끝 포함)"""
        subs = self.parser.parse(SAMPLE_SRT)
        self.assertIsNone(self.parser.get_active_index(subs, 0.5))
        self.assertEqual(self.parser.get_active_index(subs, 1.0), 0)
        self.assertEqual(self.parser.get_active_index(subs, 4.0), 0)
        self.assertIsNone(self.parser.get_active_index(subs, 4.5))
        self.assertEqual(self.parser.get_active_index(subs, 6.0), 1)
        self.assertIsNone(self.parser.get_active_index([], 1.0))

    def test_active_index_overlap(self):
        """겹치는 구간은 저장 순서상 앞의 자막"""
        subs = [
            Subtitle(id=1, start=5.0, end=10.0, text="A"),
            Subtitle(id=2, start=0.0, end=20.0, text="B"),
        ]
        self.assertEqual(self.parser.get_active_index(subs, 7.0), 0)
        self.assertEqual(self.parser.get_active_index(subs, 2.0), 1)
        self.assertEqual(self.parser.find_active_subtitle(subs, 7.0).text, "A")
        self.assertIsNone(self.parser.find_active_subtitle(subs, 25.0))


if __name__ == '__main__':
    unittest.main()
