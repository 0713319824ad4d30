"""공용 테스트 픽스처."""

import base64
from io import BytesIO

import pytest
from PIL import Image

from cardmaker import CardMaker
from config import ConfigStore
from dom.document import Document


def _png_data_url(color, size=(4, 4)) -> str:
    img = Image.new("RGBA", size, color)
    buf = BytesIO()
    img.save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


@pytest.fixture
def png_data_url():
    return _png_data_url


@pytest.fixture
def store():
    return ConfigStore()


@pytest.fixture
def document():
    return Document.with_container("#cardmaker")


@pytest.fixture
def maker(document):
    return CardMaker({"width": 100, "height": 50}, document=document)


@pytest.fixture
def canvas(maker):
    return maker.get_context()
