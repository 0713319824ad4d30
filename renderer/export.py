"""내보내기 모듈 — 서피스를 인코딩된 이미지로 변환하고 다운로드를 연결한다."""

import logging
from pathlib import Path

from config import ConfigStore
from dom.document import Document, Element, Event
from errors import NoSurfaceError, TriggerNotFoundError

logger = logging.getLogger(__name__)

# 파일 확장자 → 내보내기 포맷
_SUFFIX_FORMATS = {
    ".png": "png",
    ".jpg": "jpeg",
    ".jpeg": "jpeg",
    ".webp": "webp",
}


class ExportGateway:
    """서피스 내보내기와 다운로드 트리거."""

    def __init__(self, store: ConfigStore, document: Document):
        self._store = store
        self._document = document

    def _surface(self):
        surface = self._store.get(["surface"])["surface"]
        if surface is None:
            raise NoSurfaceError("서피스가 없습니다. 이미지를 내보낼 수 없습니다")
        return surface

    def get_image(self, fmt: str = "jpeg", quality: float = 1.0) -> str:
        """서피스를 data URI로 반환한다. 렌더링 전이면 빈 서피스가 나온다."""
        return self._surface().to_data_url(fmt, quality)

    def save_image(self, path: str | Path, fmt: str | None = None, quality: float = 1.0) -> Path:
        """서피스를 파일로 저장한다. fmt가 없으면 확장자로 정한다."""
        path = Path(path)
        fmt = fmt or _SUFFIX_FORMATS.get(path.suffix.lower(), "png")
        _, data = self._surface().get_context("2d").encode(fmt, quality)
        path.write_bytes(data)
        logger.info("이미지 저장: %s (%d 바이트)", path, len(data))
        return path

    def enable_download(self) -> Element | None:
        """다운로드 트리거에 클릭 핸들러를 연결한다.

        트리거가 지정되지 않았으면 아무것도 하지 않는다.
        """
        download = self._store.get(["download"])["download"]
        if not download:
            logger.info("다운로드 트리거가 지정되지 않았습니다")
            return None

        button = self._document.query_selector(download)
        if button is None:
            raise TriggerNotFoundError(
                f"문서에서 {download} 요소를 찾을 수 없습니다. 셀렉터를 확인하세요"
            )

        def _on_click(event: Event) -> None:
            event.prevent_default()
            self._document.location.assign(self.get_image())

        button.add_event_listener("click", _on_click)
        logger.debug("다운로드 트리거 연결: %r", button)
        return button
