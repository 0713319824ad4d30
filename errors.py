"""카드 메이커 예외 모듈."""


class CardMakerError(Exception):
    """카드 메이커 예외의 기본 클래스."""


class ConfigKeyError(CardMakerError, KeyError):
    """필수 설정 키가 빈 문자열("")로 남아 있을 때."""

    def __init__(self, key: str):
        super().__init__(f"설정 키 '{key}' 값이 비어 있습니다. 키를 다시 확인하세요")
        self.key = key

    def __str__(self) -> str:
        # KeyError의 repr 포맷 대신 메시지를 그대로 보여준다
        return self.args[0]


class DuplicateSurfaceError(CardMakerError):
    """서피스를 두 번 만들려고 할 때."""


class ContainerNotFoundError(CardMakerError):
    """서피스를 붙일 컨테이너 요소를 찾지 못했을 때."""


class MissingColorError(CardMakerError):
    """색상 배경을 그리는데 색상이 없을 때."""


class MissingImageError(CardMakerError):
    """이미지 배경을 그리는데 이미지가 없을 때."""


class NoSurfaceError(CardMakerError):
    """서피스 없이 이미지를 내보내려 할 때."""


class TriggerNotFoundError(CardMakerError):
    """다운로드 트리거 요소를 찾지 못했을 때."""


class ImageLoadError(CardMakerError):
    """이미지 소스를 불러오지 못했을 때."""

    def __init__(self, source, reason: str = ""):
        label = source if isinstance(source, str) else type(source).__name__
        if len(label) > 80:
            label = label[:77] + "..."
        message = f"이미지 로드 실패: {label}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.source = source


class RenderError(CardMakerError):
    """렌더링 중 하나 이상의 작업이 실패했을 때. failures에 실패 목록을 담는다."""

    def __init__(self, failures: list):
        labels = ", ".join(f.label for f in failures)
        super().__init__(f"렌더링 작업 {len(failures)}개 실패: {labels}")
        self.failures = failures
