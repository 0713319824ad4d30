"""텍스트 렌더링 모듈 — 템플릿 텍스트 항목을 서피스에 그린다.

폰트는 패밀리 이름으로 시스템에서 찾고, 없으면 OS별 폴백 폰트,
그마저 없으면 Pillow 기본 폰트를 쓴다.
"""

import functools
import logging
import os
import sys as _sys

from PIL import ImageFont

from config import ConfigStore
from content.template import TextItem
from errors import NoSurfaceError
from renderer.canvas import Canvas
from scheduler import DrawQueue, RenderReport, TaskOutcome

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 20
DEFAULT_FAMILY = "Arial"


def _find_fallback() -> str:
    """OS에 맞는 폴백 폰트 경로를 반환한다."""
    if _sys.platform == "win32":
        candidates = ["C:/Windows/Fonts/arial.ttf"]
    elif _sys.platform == "darwin":
        candidates = ["/System/Library/Fonts/Supplemental/Arial.ttf", "/System/Library/Fonts/Helvetica.ttc"]
    else:
        candidates = [
            "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
            "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
            "/usr/share/fonts/dejavu/DejaVuSans.ttf",
        ]
    for path in candidates:
        if os.path.exists(path):
            return path
    return ""


_FALLBACK_FONT = _find_fallback()

# 폰트 캐시 크기
FONT_CACHE_SIZE = 64


@functools.lru_cache(maxsize=FONT_CACHE_SIZE)
def _get_font(family: str, size: int) -> ImageFont.ImageFont:
    """폰트를 로드한다 (캐싱)."""
    font = None
    for name in (family, f"{family}.ttf", f"{family.lower()}.ttf", _FALLBACK_FONT):
        if not name:
            continue
        try:
            font = ImageFont.truetype(name, size)
            break
        except OSError:
            continue
    if font is None:
        logger.debug("폰트 %s 없음, 기본 폰트 사용", family)
        font = ImageFont.load_default(size)

    return font


class TextCompositor:
    """텍스트 항목을 리스트 순서대로 그린다."""

    def __init__(self, store: ConfigStore):
        self._store = store

    def write_text(self, text: str | None, props: dict | None = None,
                   report: RenderReport | None = None) -> Canvas:
        """텍스트 하나를 즉시 그린다. 누락된 스타일은 설정 기본값을 쓴다."""
        props = props or {}
        surface = self._store.get(["surface"])["surface"]
        if surface is None:
            raise NoSurfaceError("서피스가 없습니다. 텍스트를 그릴 수 없습니다")
        ctx = surface.get_context("2d")
        config = self._store.get(["color", "align"])

        if text is None or text == "":
            message = "빈 텍스트가 있습니다. 내용을 확인하세요"
            if report is not None:
                report.advise(message)
            else:
                logger.warning(message)
            text = ""

        size = props.get("size") or DEFAULT_SIZE
        family = props.get("family") or DEFAULT_FAMILY
        ctx.fill_text(
            str(text),
            (props.get("x") or 0, props.get("y") or 0),
            font=_get_font(family, int(size)),
            color=props.get("color") or config["color"],
            align=props.get("align") or config["align"],
            font_spec=f"{size}px {family}",
        )
        return ctx

    async def draw_all(self, items: list[TextItem], report: RenderReport) -> list[TaskOutcome]:
        """모든 텍스트 항목을 큐에 쌓고 실행한다."""
        queue = DrawQueue()
        for idx, item in enumerate(items):
            queue.schedule(f"text[{idx}]", self.write_text, item.value, item.props, report)

        outcomes = await queue.drain()
        report.outcomes.extend(outcomes)
        return outcomes
