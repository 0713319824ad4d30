"""서피스 준비 모듈 — 캔버스 요소를 만들고 컨테이너에 붙인다."""

import logging

from config import ConfigStore
from dom.document import Document, Element, make_element
from errors import ContainerNotFoundError, DuplicateSurfaceError

logger = logging.getLogger(__name__)


class SurfaceProvisioner:
    """인스턴스당 하나의 서피스를 만들어 문서에 붙인다."""

    def __init__(self, store: ConfigStore, document: Document):
        self._store = store
        self._document = document

    def make_surface(self, props: dict | None = None) -> Element:
        """캔버스 요소를 만들어 설정에 저장한다. 이미 있으면 DuplicateSurfaceError."""
        if self._store.get(["surface"])["surface"] is not None:
            raise DuplicateSurfaceError("서피스를 만들 수 없습니다. 이미 서피스가 설정되어 있습니다")

        surface = make_element("canvas", props or {})
        self._store.set("surface", surface)
        return surface

    def attach(self) -> Element:
        """설정 크기로 서피스를 만들고 el 컨테이너에 추가한 뒤 컨테이너를 반환한다."""
        config = self._store.get(["el", "width", "height"])

        surface = self.make_surface({
            "width": config["width"],
            "height": config["height"],
        })

        container = self._document.query_selector(config["el"])
        if container is None:
            raise ContainerNotFoundError(f"문서에서 {config['el']} 요소를 찾을 수 없습니다")

        container.append_child(surface)
        logger.info("서피스 %dx%d → %r", surface.width, surface.height, container)
        return container
