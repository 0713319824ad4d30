"""카드 템플릿 모델 — 배경, 이미지 레이어, 텍스트 항목."""

from dataclasses import dataclass, field


@dataclass
class ImageLayer:
    """이미지 레이어 하나."""
    value: object                                   # URL, 경로, data URI 또는 Image
    props: dict = field(default_factory=dict)       # sx, sy, swidth, sheight, x, y, width, height

    def source_rect(self, natural: tuple[int, int]) -> tuple:
        """(sx, sy, sw, sh). 비어 있거나 0인 값은 원본 기준 기본값."""
        w, h = natural
        p = self.props
        return (p.get("sx") or 0, p.get("sy") or 0,
                p.get("swidth") or w, p.get("sheight") or h)

    def dest_rect(self, natural: tuple[int, int]) -> tuple:
        """(x, y, width, height). 기본은 원본 크기로 원점에."""
        w, h = natural
        p = self.props
        return (p.get("x") or 0, p.get("y") or 0,
                p.get("width") or w, p.get("height") or h)


@dataclass
class TextItem:
    """텍스트 항목 하나."""
    value: str | None
    props: dict = field(default_factory=dict)       # x, y, size, family, color, align


@dataclass
class Template:
    """카드 템플릿. 리스트 순서가 그리기 순서다."""
    background: str | None = None
    images: list[ImageLayer] = field(default_factory=list)
    text: list[TextItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data) -> "Template":
        """딕셔너리(또는 Template)에서 템플릿을 만든다. 누락된 리스트는 빈 리스트."""
        if isinstance(data, cls):
            return data
        data = data or {}
        images = [ImageLayer(*_entry(item)) for item in data.get("images") or []]
        text = [TextItem(*_entry(item)) for item in data.get("text") or []]
        return cls(background=data.get("background"), images=images, text=text)


def _entry(item) -> tuple:
    """항목을 (value, props)로 바꾼다. 딕셔너리가 아니면 값 자체로 본다."""
    if isinstance(item, dict):
        return item.get("value"), dict(item.get("props") or {})
    return item, {}
