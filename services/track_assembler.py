"""
업로드된 파일로 트랙을 구성하는 모듈.
오디오와 같은 이름의 SRT 자막을 짝지어 파싱하고, 재생 길이를 조회하여 Track을 만듭니다.

파일 하나의 실패는 해당 파일의 오류로만 보고되고 배치의 나머지 파일 처리는 계속됩니다.
"""

import os
import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Optional

from core.constants import OTHER_CAPTION_EXTENSIONS, PROBE_MAX_WORKERS
from core.errors import (
    InvalidAudioFileError,
    InvalidSubtitleFileError,
    NoAudioInBatchError,
    PlayerError,
    SubtitleParseError,
)
from core.models import SourceFile, Subtitle, Track, UploadResult
from services.srt_parser import SubtitleParser


class TrackAssembler:
    """오디오 + 자막 파일 → Track 변환기"""

    def __init__(
        self,
        parser: SubtitleParser,
        probe_duration: Callable[[str], float],
        max_workers: int = PROBE_MAX_WORKERS,
    ) -> None:
        """
        Args:
            parser: SRT 파서
            probe_duration: 미디어 핸들의 재생 길이(초)를 조회하는 함수 (엔진 제공)
            max_workers: 배치 내 동시 처리 파일 수
        """
        self._parser = parser
        self._probe_duration = probe_duration
        self._max_workers = max(1, max_workers)

    def assemble(self, files: Iterable[SourceFile]) -> UploadResult:
        """
        업로드 배치 하나를 트랙 목록으로 변환

        Args:
            files: 새로 선택된 파일들 (오디오/자막 혼합)

        Returns:
            입력 순서대로 만들어진 트랙과 파일별 오류

        Raises:
            NoAudioInBatchError: 배치에 오디오 파일이 하나도 없는 경우
        """
        result = UploadResult()
        audio_files: list[SourceFile] = []
        subtitle_files: dict[str, SourceFile] = {}

        for file in files:
            if file.is_audio:
                audio_files.append(file)
            elif file.is_subtitle:
                subtitle_files[file.base_name] = file
            else:
                result.errors.append(self._unsupported_file_error(file))

        if not audio_files:
            raise NoAudioInBatchError(
                "오디오 파일이 없습니다. 오디오 파일을 하나 이상 선택해 주세요.",
                file_errors=result.errors,
            )

        matched = {audio.base_name for audio in audio_files}
        for base_name, srt_file in subtitle_files.items():
            if base_name not in matched:
                print(f"[업로드] 짝이 되는 오디오가 없는 자막 무시: {srt_file.name}")

        # 파일별 작업은 동시에 실행하고, 결과는 입력 순서대로 모음
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(audio_files))) as executor:
            futures = [
                executor.submit(self._build_track, audio, subtitle_files.get(audio.base_name))
                for audio in audio_files
            ]
            outcomes = [future.result() for future in futures]

        for track, errors in outcomes:
            if track is not None:
                result.tracks.append(track)
            result.errors.extend(errors)

        print(f"[업로드] 트랙 {len(result.tracks)}개 생성, 오류 {len(result.errors)}건")
        return result

    # ── 파일 단위 처리 ────────────────────────────────────────────────────────

    def _build_track(
        self,
        audio: SourceFile,
        srt_file: Optional[SourceFile],
    ) -> tuple[Optional[Track], list[PlayerError]]:
        """오디오 파일 하나로 트랙 생성 (예외를 밖으로 던지지 않음)"""
        errors: list[PlayerError] = []

        if not self._is_readable(audio.path):
            errors.append(InvalidAudioFileError("오디오 파일을 읽을 수 없습니다.", audio.name))
            return None, errors

        subtitles: tuple[Subtitle, ...] = ()
        if srt_file is not None:
            try:
                subtitles = tuple(self._load_subtitles(srt_file))
            except PlayerError as e:
                print(f"[업로드] 자막 처리 실패: {e}")
                errors.append(e)

        track = Track(
            id=uuid.uuid4().hex,
            title=audio.base_name,
            audio_file=audio,
            subtitle_file=srt_file,
            subtitles=subtitles,
            duration=self._probe(audio),
        )
        return track, errors

    def _load_subtitles(self, srt_file: SourceFile) -> list[Subtitle]:
        """자막 파일 읽기 + 파싱"""
        try:
            content = srt_file.read_text()
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidSubtitleFileError(f"자막 파일을 읽을 수 없습니다. ({e})", srt_file.name) from e

        subtitles = self._parser.parse(content)
        if self._parser.is_parse_failure(content, subtitles):
            raise SubtitleParseError("SRT 형식을 해석할 수 없습니다. 파일 형식을 확인해 주세요.", srt_file.name)
        return subtitles

    def _probe(self, audio: SourceFile) -> float:
        """재생 길이 조회, 실패하면 0"""
        try:
            return max(0.0, float(self._probe_duration(audio.media_handle)))
        except Exception as e:
            print(f"[업로드] 재생 길이 조회 실패 ({audio.name}): {e}")
            return 0.0

    @staticmethod
    def _is_readable(path: str) -> bool:
        return os.path.isfile(path) and os.access(path, os.R_OK)

    @staticmethod
    def _unsupported_file_error(file: SourceFile) -> PlayerError:
        extension = os.path.splitext(file.name)[1].lower()
        if extension in OTHER_CAPTION_EXTENSIONS:
            return InvalidSubtitleFileError("SRT 자막 파일만 지원합니다.", file.name)
        return InvalidAudioFileError("오디오 파일이 아닙니다.", file.name)
