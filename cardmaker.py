"""카드 메이커 — 템플릿을 서피스에 렌더링하고 이미지로 내보낸다.

사용 예:
    maker = await CardMaker.create({
        "width": 400, "height": 250,
        "template": {
            "background": "blue",
            "images": [{"value": "logo.png", "props": {"x": 10, "y": 10}}],
            "text": [{"value": "Hi", "props": {"x": 10, "y": 20}}],
        },
    })
    data_url = maker.get_image("png")
"""

import asyncio
import logging

from PIL import Image

from config import ConfigStore
from content.background import BackgroundRenderer
from content.images import load_image
from content.template import Template
from dom.document import Document, Element
from renderer.canvas import Canvas
from renderer.export import ExportGateway
from renderer.layers import ImageCompositor
from renderer.surface import SurfaceProvisioner
from renderer.text import TextCompositor
from scheduler import RenderReport

logger = logging.getLogger(__name__)


class CardMaker:
    """카드 하나의 설정, 서피스, 렌더링, 내보내기를 묶는다.

    생성 시 설정 병합 → 서피스 부착 → 다운로드 트리거 연결까지 한다.
    렌더링은 비동기이므로 render()를 따로 기다리거나 create()를 쓴다.
    """

    def __init__(self, config: dict | None = None, document: Document | None = None,
                 loader=load_image):
        self._store = ConfigStore()
        self.set_config(config or {})

        if document is None:
            el = self._store.get(["el"])["el"]
            document = Document.with_container(el) if isinstance(el, str) and el else Document()
        self._document = document

        self._surfaces = SurfaceProvisioner(self._store, document)
        self._background = BackgroundRenderer(self._store, loader)
        self._images = ImageCompositor(self._store, loader)
        self._text = TextCompositor(self._store)
        self._export = ExportGateway(self._store, document)
        self.last_report: RenderReport | None = None

        self.put_canvas()
        self.enable_download()

    @classmethod
    async def create(cls, config: dict | None = None, document: Document | None = None,
                     loader=load_image) -> "CardMaker":
        """인스턴스를 만들고 바로 렌더링까지 마친다."""
        maker = cls(config, document, loader)
        await maker.render()
        return maker

    @property
    def document(self) -> Document:
        return self._document

    # ── 설정 ──

    def get_config(self, key=None):
        return self._store.get(key)

    def set_config(self, key_or_mapping, value=None) -> dict:
        return self._store.set(key_or_mapping, value)

    # ── 서피스 ──

    def get_context(self) -> Canvas | None:
        surface = self._store.get(["surface"])["surface"]
        if surface is not None:
            return surface.get_context("2d")
        return None

    def make_canvas(self, props: dict | None = None) -> Element:
        return self._surfaces.make_surface(props)

    def put_canvas(self) -> Element:
        return self._surfaces.attach()

    def change_background(self, kind: str, color=None, image: Image.Image | None = None) -> Canvas:
        return self._background.paint(kind, color=color, image=image)

    # ── 렌더링 ──

    async def render(self, strict: bool = False) -> RenderReport:
        """배경 → 이미지 → 텍스트 순으로 렌더링한다.

        배경 이미지와 레이어 이미지는 동시에 불러오지만, 그리기는 배경이
        칠해진 뒤 레이어 순서대로, 텍스트는 모든 이미지 그리기가 끝난 뒤에
        한다. 항목별 실패는 RenderReport에 모인다. strict=True면 실패 시
        RenderError.
        """
        report = RenderReport()
        config = self._store.get(["background", "template"])
        template = Template.from_dict(config["template"])

        # 설정에 배경이 없으면 템플릿 배경을 사용
        if not config["background"] and template.background:
            self.set_config("background", template.background)

        background_done = asyncio.Event()

        async def _paint_background():
            try:
                await self._background.render(report)
            finally:
                background_done.set()

        await asyncio.gather(
            _paint_background(),
            self._images.draw_all(template.images, report, ready=background_done),
        )
        await self._text.draw_all(template.text, report)

        logger.info("렌더링 완료: 작업 %d개, 실패 %d개, 경고 %d개",
                    len(report.outcomes), len(report.failures), len(report.advisories))
        self.last_report = report
        if strict:
            report.raise_for_errors()
        return report

    # ── 내보내기 ──

    def get_image(self, fmt: str = "jpeg", quality: float = 1.0) -> str:
        return self._export.get_image(fmt, quality)

    def save_image(self, path, fmt: str | None = None, quality: float = 1.0):
        return self._export.save_image(path, fmt, quality)

    def enable_download(self) -> Element | None:
        return self._export.enable_download()
