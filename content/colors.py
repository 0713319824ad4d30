"""색상 판별 모듈 — 색상 이름/hex/rgb() 문자열을 해석한다."""

from PIL import ImageColor


def is_color(value) -> bool:
    """값이 인식 가능한 색상(이름, hex, rgb()/hsl())인지 확인한다.

    색상이 아니면 이미지 소스로 취급된다.
    """
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        ImageColor.getrgb(value.strip())
    except ValueError:
        return False
    return True


def color_name_to_hex(name: str) -> str:
    """색상 이름을 #rrggbb 문자열로 변환한다."""
    r, g, b = ImageColor.getrgb(name)[:3]
    return f"#{r:02x}{g:02x}{b:02x}"


def to_rgba(color) -> tuple[int, int, int, int]:
    """색상 문자열 또는 튜플을 RGBA 튜플로 변환한다."""
    if isinstance(color, tuple):
        if len(color) == 3:
            return (*color, 255)
        return color
    return ImageColor.getcolor(str(color).strip(), "RGBA")
