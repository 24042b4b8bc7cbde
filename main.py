"""
SRT 자막 오디오 플레이어
메인 진입점 - 오디오와 SRT 자막을 불러와 자막을 따라가며 재생합니다.
"""

from app.main import create_and_run


def main():
    """메인 함수"""
    print("=" * 50)
    print("  SRT Transcript Player")
    print("=" * 50)
    print()
    print("지원 기능:")
    print("  - 오디오 + 같은 이름의 .srt 자막 자동 연결")
    print("  - 현재 자막 강조 및 클릭 이동")
    print("  - 배속 / 볼륨 / 5초 건너뛰기 / 플레이리스트")
    print("  - AI 요약 (GOOGLE_API_KEY 필요)")
    print()

    create_and_run()


if __name__ == "__main__":
    main()
