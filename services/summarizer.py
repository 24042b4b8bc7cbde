"""
자막 요약 모듈.
Gemini generate_content를 얇게 감싸서, 지금까지 들은 자막 구간을 이전 요약에 이어 요약합니다.
"""

from typing import Optional

from google import genai

from core.constants import DEFAULT_SUMMARY_MODEL
from core.errors import SummaryError


class TranscriptSummarizer:
    """자막 요약 클라이언트"""

    def __init__(self, api_key: str, model_name: str = DEFAULT_SUMMARY_MODEL) -> None:
        if not api_key:
            raise ValueError("요약 API 키가 비어 있습니다. GOOGLE_API_KEY를 설정해 주세요.")

        self.model_name = model_name or DEFAULT_SUMMARY_MODEL
        self.client = genai.Client(api_key=api_key)
        print(f"[요약] 모델: {self.model_name}")

    def summarize(self, transcript: str, current_summary: Optional[str] = None) -> str:
        """
        자막 구간 요약

        Args:
            transcript: 이번에 요약할 자막 텍스트
            current_summary: 지금까지의 요약 (있으면 이어서 작성)

        Returns:
            갱신된 요약. 자막이 비어 있으면 기존 요약을 그대로 반환
        """
        if not transcript.strip():
            return current_summary or ""

        try:
            resp = self.client.models.generate_content(
                model=self.model_name,
                contents=self._build_prompt(transcript, current_summary),
            )
        except Exception as e:
            raise SummaryError(f"요약 생성 실패: {e}") from e

        return (resp.text or "").strip()

    @staticmethod
    def _build_prompt(transcript: str, current_summary: Optional[str]) -> str:
        prompt = (
            "You are an expert summarizer, able to distill complex information into concise summaries.\n\n"
            "Summarize the following audio transcript, building upon the current summary if one exists. "
            "Focus on identifying the key topics and arguments presented.\n\n"
            f"Transcript: {transcript}\n\n"
        )
        if current_summary:
            prompt += f"Current Summary: {current_summary}\n\nContinue the summary:\n"
        return prompt + "Summary: "
