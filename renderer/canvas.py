"""Pillow 캔버스 관리 모듈 — 카드 서피스의 2D 그리기 컨텍스트."""

import base64
import logging
import re
from dataclasses import dataclass, field
from io import BytesIO

from PIL import Image, ImageDraw, ImageFont

from content.colors import to_rgba

logger = logging.getLogger(__name__)

# 캔버스 fillText처럼 공백으로 바꾸는 문자
_WHITESPACE = re.compile(r"[\n\r\t\f\v]")

# 내보내기 포맷 → Pillow 포맷 이름
_EXPORT_FORMATS = {
    "png": "PNG",
    "jpeg": "JPEG",
    "jpg": "JPEG",
    "webp": "WEBP",
}


@dataclass
class DrawCall:
    """캔버스에 기록된 그리기 호출."""
    seq: int
    op: str               # fill_rect | draw_image | fill_text
    detail: dict = field(default_factory=dict)


class Canvas:
    """width x height RGBA 캔버스.

    HTML 캔버스처럼 투명하게 시작하며, 모든 그리기 호출을 순번과 함께
    history에 남긴다.
    """

    def __init__(self, width: int, height: int):
        self._width = int(width)
        self._height = int(height)
        self._image = Image.new("RGBA", (self._width, self._height), (0, 0, 0, 0))
        self.history: list[DrawCall] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def image(self) -> Image.Image:
        return self._image

    def _record(self, op: str, **detail) -> None:
        self.history.append(DrawCall(seq=len(self.history), op=op, detail=detail))

    def fill_rect(self, color, box: tuple | None = None) -> None:
        """지정 영역(기본: 전체)을 색상으로 채운다 (알파 블렌딩)."""
        x, y, w, h = box or (0, 0, self._width, self._height)
        fill = Image.new("RGBA", (max(0, int(w)), max(0, int(h))), to_rgba(color))
        self._composite(fill, (int(x), int(y)))
        self._record("fill_rect", color=color, box=(x, y, w, h))

    def draw_image(self, image: Image.Image, source: tuple | None = None,
                   dest: tuple | None = None) -> None:
        """source 영역을 잘라 dest 영역에 맞춰 그린다.

        source: (sx, sy, sw, sh), 기본은 이미지 전체
        dest: (dx, dy, dw, dh), 기본은 원본 크기로 원점에
        """
        sx, sy, sw, sh = source or (0, 0, image.width, image.height)
        dx, dy, dw, dh = dest or (0, 0, image.width, image.height)
        self._record("draw_image", source=(sx, sy, sw, sh), dest=(dx, dy, dw, dh))
        if sw <= 0 or sh <= 0 or dw <= 0 or dh <= 0:
            logger.debug("크기가 0인 이미지 그리기 무시: %s → %s", (sw, sh), (dw, dh))
            return

        layer = image if image.mode == "RGBA" else image.convert("RGBA")
        layer = layer.crop((int(sx), int(sy), int(sx + sw), int(sy + sh)))
        if layer.size != (int(dw), int(dh)):
            layer = layer.resize((int(dw), int(dh)), Image.Resampling.LANCZOS)
        self._composite(layer, (int(dx), int(dy)))

    def fill_text(self, text: str, position: tuple, font: ImageFont.ImageFont,
                  color, align: str = "left", font_spec: str = "") -> None:
        """알파벳 기준선 기준으로 텍스트를 그린다. align은 캔버스 textAlign 값."""
        text = _WHITESPACE.sub(" ", text)
        x, y = position
        draw = ImageDraw.Draw(self._image)
        width = draw.textlength(text, font=font)
        if align == "center":
            x -= width / 2
        elif align in ("right", "end"):
            x -= width

        if isinstance(font, ImageFont.FreeTypeFont):
            draw.text((x, y), text, font=font, fill=to_rgba(color), anchor="ls")
        else:
            # 비트맵 폰트는 anchor를 지원하지 않아 위쪽 기준으로 맞춘다
            bbox = font.getbbox(text) if text else (0, 0, 0, 0)
            draw.text((x, y - bbox[3]), text, font=font, fill=to_rgba(color))
        self._record("fill_text", text=text, position=tuple(position),
                     color=color, align=align, font=font_spec)

    def encode(self, fmt: str = "png", quality: float = 1.0) -> tuple[str, bytes]:
        """캔버스를 인코딩하여 (mime, bytes)를 반환한다.

        지원하지 않는 포맷은 캔버스처럼 PNG로 대체한다.
        """
        key = (fmt or "png").lower()
        if key.startswith("image/"):
            key = key[len("image/"):]
        pil_format = _EXPORT_FORMATS.get(key)
        if pil_format is None:
            logger.warning("지원하지 않는 포맷 %s, PNG로 대체", fmt)
            key, pil_format = "png", "PNG"

        buf = BytesIO()
        if pil_format == "JPEG":
            # 투명 픽셀은 검정으로
            black = Image.new("RGBA", self._image.size, (0, 0, 0, 255))
            flat = Image.alpha_composite(black, self._image).convert("RGB")
            flat.save(buf, format="JPEG", quality=_quality(quality))
        elif pil_format == "WEBP":
            self._image.save(buf, format="WEBP", quality=_quality(quality))
        else:
            self._image.save(buf, format="PNG")

        mime = "image/jpeg" if pil_format == "JPEG" else f"image/{key}"
        return mime, buf.getvalue()

    def to_data_url(self, fmt: str = "png", quality: float = 1.0) -> str:
        """data:image/...;base64,... 문자열로 반환한다."""
        mime, data = self.encode(fmt, quality)
        b64 = base64.b64encode(data).decode("ascii")
        return f"data:{mime};base64,{b64}"

    def _composite(self, layer: Image.Image, position: tuple) -> None:
        self._image = Image.alpha_composite(self._image, _place(layer, position, self._image.size))


def _quality(quality: float) -> int:
    """0.0~1.0 품질 값을 Pillow의 1~100으로 변환한다."""
    try:
        q = float(quality)
    except (TypeError, ValueError):
        q = 1.0
    if not 0.0 <= q <= 1.0:
        q = 1.0
    return max(1, round(q * 100))


def _place(layer: Image.Image, position: tuple, size: tuple) -> Image.Image:
    """레이어를 캔버스 크기에 맞춰 지정 위치에 배치한다."""
    if layer.size == size and position == (0, 0):
        return layer
    result = Image.new("RGBA", size, (0, 0, 0, 0))
    result.paste(layer, position)
    return result
