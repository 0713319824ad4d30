"""이미지 로더 모듈 — URL/data URI/파일 경로에서 이미지를 비동기로 불러온다."""

import asyncio
import base64
import logging
from io import BytesIO
from pathlib import Path

from PIL import Image

from errors import ImageLoadError

logger = logging.getLogger(__name__)

HTTP_TIMEOUT_SEC = 10


def _decode(data: bytes) -> Image.Image:
    """바이트를 디코딩된 RGBA 이미지로 변환한다."""
    img = Image.open(BytesIO(data))
    img.load()
    return img.convert("RGBA")


def _read_file(path: Path) -> Image.Image:
    with Image.open(path) as img:
        img.load()
        return img.convert("RGBA")


def _decode_data_url(source: str) -> bytes:
    """data:image/png;base64,... 형태를 바이트로 변환한다."""
    header, _, payload = source.partition(",")
    if ";base64" not in header:
        raise ValueError("base64 인코딩된 data URI만 지원")
    return base64.b64decode(payload, validate=False)


async def _fetch(url: str) -> bytes:
    """HTTP(S) URL에서 이미지 바이트를 받아온다."""
    import aiohttp

    async with aiohttp.ClientSession() as session:
        async with session.get(url, timeout=aiohttp.ClientTimeout(total=HTTP_TIMEOUT_SEC)) as resp:
            resp.raise_for_status()
            return await resp.read()


async def load_image(source) -> Image.Image:
    """이미지 소스를 불러와 디코딩된 이미지 핸들을 반환한다.

    지원 소스:
      - Pillow Image 객체 (그대로 사용)
      - data:image/...;base64,... URI
      - http://, https:// URL
      - 로컬 파일 경로 (str 또는 Path)

    실패하면 ImageLoadError.
    """
    if isinstance(source, Image.Image):
        return source

    if isinstance(source, Path):
        source = str(source)
    if not isinstance(source, str) or not source:
        raise ImageLoadError(source, "소스가 비어 있거나 문자열이 아님")

    try:
        if source.startswith("data:"):
            img = _decode(_decode_data_url(source))
        elif source.startswith(("http://", "https://")):
            data = await _fetch(source)
            img = _decode(data)
        else:
            img = await asyncio.to_thread(_read_file, Path(source))
    except Exception as e:
        # 디코딩 오류, aiohttp 네트워크 오류 등
        raise ImageLoadError(source, str(e)) from e

    logger.debug("이미지 로드: %s (%dx%d)", source[:60], img.width, img.height)
    return img
