"""
SRT 형식의 자막을 파싱하는 모듈.
자막 블록 추출과 현재 재생 시각에 해당하는 자막 검색을 담당합니다.
"""

import re
from typing import Optional, Sequence

from core.models import Subtitle
from services.timestamp import parse_timestamp


class SubtitleParser:
    """SRT 자막 파서"""

    # 번호 줄 / "시작 --> 끝" 줄 / 텍스트 한 줄 이상, 빈 줄 또는 입력 끝에서 종료
    _BLOCK_PATTERN = re.compile(
        r"^(\d+)\n"
        r"(\d+:\d{2}:\d{2},\d{3}) --> (\d+:\d{2}:\d{2},\d{3})\n"
        r"([^\n][\s\S]*?)(?=\n\n|\Z)",
        re.MULTILINE,
    )

    def parse(self, srt_text: str) -> list[Subtitle]:
        """
        SRT 텍스트를 파싱하여 Subtitle 리스트 반환

        형식에 맞지 않는 블록은 조용히 건너뜁니다.

        Args:
            srt_text: SRT 파일 원문

        Returns:
            파일 순서 그대로의 Subtitle 리스트 (정렬하지 않음)
        """
        if not srt_text:
            return []

        normalized = srt_text.replace("\r\n", "\n")

        subtitles: list[Subtitle] = []
        for match in self._BLOCK_PATTERN.finditer(normalized):
            subtitles.append(
                Subtitle(
                    id=int(match.group(1)),
                    start=parse_timestamp(match.group(2)),
                    end=parse_timestamp(match.group(3)),
                    text=match.group(4).strip(),
                )
            )
        return subtitles

    @staticmethod
    def is_parse_failure(srt_text: str, subtitles: Sequence[Subtitle]) -> bool:
        """내용이 있는데 블록을 하나도 못 찾았으면 실패 (빈 파일은 정상)"""
        return len(subtitles) == 0 and bool(srt_text and srt_text.strip())

    def get_active_index(self, subtitles: Sequence[Subtitle], current_time: float) -> Optional[int]:
        """
        현재 시간에 해당하는 자막 인덱스 반환

        구간이 겹치거나 순서가 뒤섞여 있어도 저장 순서상 첫 번째 자막을 고릅니다.

        Args:
            subtitles: 파싱된 자막 리스트
            current_time: 현재 재생 시간 (초)

        Returns:
            현재 자막의 인덱스, 없으면 None
        """
        for i, subtitle in enumerate(subtitles):
            if subtitle.contains(current_time):
                return i
        return None

    def find_active_subtitle(self, subtitles: Sequence[Subtitle], current_time: float) -> Optional[Subtitle]:
        index = self.get_active_index(subtitles, current_time)
        return subtitles[index] if index is not None else None
