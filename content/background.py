"""배경 렌더링 모듈 — 색상 또는 이미지 배경을 서피스 전체에 그린다."""

import logging

from PIL import Image

from config import ConfigStore
from content.colors import color_name_to_hex, is_color
from content.images import load_image
from errors import MissingColorError, MissingImageError, NoSurfaceError
from renderer.canvas import Canvas
from scheduler import RenderReport, TaskOutcome

logger = logging.getLogger(__name__)

# 배경이 지정되지 않았을 때
DEFAULT_BACKGROUND = "black"


class BackgroundRenderer:
    """공유 그리기 컨텍스트에 배경을 칠한다."""

    def __init__(self, store: ConfigStore, loader=load_image):
        self._store = store
        self._loader = loader

    def _context(self) -> Canvas:
        surface = self._store.get(["surface"])["surface"]
        if surface is None:
            raise NoSurfaceError("서피스가 없습니다. 배경을 그릴 수 없습니다")
        return surface.get_context("2d")

    def paint(self, kind: str, color=None, image: Image.Image | None = None) -> Canvas:
        """배경을 칠한다.

        kind="color": color로 (0, 0, width, height)를 채운다
        kind="image": image를 (0, 0, width, height)에 늘려 그린다
        """
        config = self._store.get(["width", "height"])
        ctx = self._context()
        full = (0, 0, config["width"], config["height"])

        if kind == "image":
            if image is None:
                raise MissingImageError("배경 이미지를 지정하세요")
            ctx.draw_image(image, dest=full)
        elif kind == "color":
            if color is None:
                raise MissingColorError("배경 색상을 지정하세요")
            ctx.fill_rect(color, full)
        else:
            raise ValueError(f"알 수 없는 배경 종류: {kind}")

        return ctx

    async def resolve(self, background, report: RenderReport | None = None) -> tuple[str, dict]:
        """배경 값을 (kind, paint 인자)로 해석한다. 이미지는 여기서 불러온다."""
        if is_color(background):
            return "color", {"color": background}
        if background is not None and background != "":
            image = await self._loader(background)
            return "image", {"image": image}

        message = "배경 이미지나 색상이 지정되지 않아 검정 배경을 사용합니다"
        if report is not None:
            report.advise(message)
        else:
            logger.warning(message)
        return "color", {"color": color_name_to_hex(DEFAULT_BACKGROUND)}

    async def render(self, report: RenderReport) -> bool:
        """설정의 배경을 해석하고 칠한다. 결과는 report에 남긴다."""
        background = self._store.get(["background"])["background"]
        try:
            kind, props = await self.resolve(background, report)
            self.paint(kind, **props)
        except Exception as e:
            report.fail("background", e)
            return False
        logger.debug("배경 완료: %s", kind)
        report.outcomes.append(TaskOutcome("background"))
        return True
