"""이미지 레이어 합성 모듈 — 템플릿 이미지들을 순서대로 서피스에 그린다."""

import asyncio
import logging

from PIL import Image

from config import ConfigStore
from content.images import load_image
from content.template import ImageLayer
from errors import NoSurfaceError
from scheduler import DrawQueue, RenderReport, TaskOutcome

logger = logging.getLogger(__name__)


class ImageCompositor:
    """이미지 레이어를 불러와 리스트 순서대로 그린다.

    로드는 동시에 시작하지만, 그리기는 항상 템플릿 순서대로 큐에 쌓인다.
    """

    def __init__(self, store: ConfigStore, loader=load_image):
        self._store = store
        self._loader = loader

    def draw_layer(self, image: Image.Image, layer: ImageLayer) -> None:
        """레이어 하나를 source 영역에서 dest 영역으로 그린다."""
        surface = self._store.get(["surface"])["surface"]
        if surface is None:
            raise NoSurfaceError("서피스가 없습니다. 이미지를 그릴 수 없습니다")
        ctx = surface.get_context("2d")
        ctx.draw_image(image, layer.source_rect(image.size), layer.dest_rect(image.size))

    async def draw_all(self, layers: list[ImageLayer], report: RenderReport,
                       ready: asyncio.Event | None = None) -> list[TaskOutcome]:
        """모든 레이어를 그리고 결과를 반환한다.

        ready가 주어지면 그 이벤트가 설정된 뒤에야 그리기를 시작한다
        (배경이 먼저 칠해지도록). 반환 시점에 모든 그리기가 끝나 있다.
        """
        if not layers:
            if ready is not None:
                await ready.wait()
            return []

        loads = [asyncio.ensure_future(self._loader(layer.value)) for layer in layers]
        logger.info("이미지 레이어 %d개 로드 시작", len(loads))

        if ready is not None:
            await ready.wait()

        queue = DrawQueue()
        outcomes = []
        for idx, (layer, task) in enumerate(zip(layers, loads)):
            label = f"image[{idx}]"
            try:
                image = await task
            except Exception as e:
                report.fail(label, e)
                outcomes.append(TaskOutcome(label, e))
                continue
            queue.schedule(label, self.draw_layer, image, layer)

        drawn = await queue.drain()
        report.outcomes.extend(drawn)
        outcomes.extend(drawn)
        return outcomes
