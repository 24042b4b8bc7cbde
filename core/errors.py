"""
플레이어 도메인 예외.
파일 단위 오류는 배치를 중단하지 않고 보고되며, 어떤 파일에서 발생했는지 함께 기록합니다.
"""

from typing import Optional, Sequence


class PlayerError(Exception):
    """플레이어 예외 기본 클래스"""

    def __init__(self, message: str, file_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.file_name = file_name

    def __str__(self) -> str:
        if self.file_name:
            return f"{self.file_name}: {self.message}"
        return self.message


class InvalidAudioFileError(PlayerError):
    """오디오가 아니거나 읽을 수 없는 파일"""


class InvalidSubtitleFileError(PlayerError):
    """SRT 확장자가 아니거나 읽을 수 없는 자막 파일"""


class SubtitleParseError(PlayerError):
    """내용은 있지만 자막 블록을 하나도 찾지 못함"""


class NoAudioInBatchError(PlayerError):
    """업로드 배치에 오디오 파일이 없음 (배치 전체 취소)"""

    def __init__(self, message: str, file_errors: Sequence[PlayerError] = ()) -> None:
        super().__init__(message)
        # 취소 전에 이미 수집된 파일별 오류 (지원하지 않는 형식 등)
        self.file_errors = list(file_errors)


class PlaybackEngineError(PlayerError):
    """재생 엔진이 로드/디코딩 실패를 보고함"""


class MetadataProbeError(PlayerError):
    """재생 길이를 알아내지 못함 (치명적이지 않음, 길이 0으로 처리)"""


class SummaryError(PlayerError):
    """요약 서비스 호출 실패"""
