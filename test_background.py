"""배경 렌더링 테스트."""

import pytest
from PIL import Image

from config import ConfigStore
from content.background import BackgroundRenderer
from content.colors import color_name_to_hex, is_color, to_rgba
from errors import ImageLoadError, MissingColorError, MissingImageError, NoSurfaceError
from scheduler import RenderReport


@pytest.fixture
def background(maker):
    return BackgroundRenderer(maker._store)


def test_is_color():
    assert is_color("blue")
    assert is_color("#ff0000")
    assert is_color("#f00")
    assert is_color("rgb(1, 2, 3)")
    assert not is_color("https://example.com/bg.png")
    assert not is_color("assets/bg.png")
    assert not is_color("")
    assert not is_color(None)


def test_color_helpers():
    assert color_name_to_hex("black") == "#000000"
    assert color_name_to_hex("red") == "#ff0000"
    assert to_rgba("blue") == (0, 0, 255, 255)
    assert to_rgba((1, 2, 3)) == (1, 2, 3, 255)


def test_paint_color_fills_surface(background, canvas):
    background.paint("color", color="red")
    assert canvas.image.getpixel((0, 0)) == (255, 0, 0, 255)
    assert canvas.image.getpixel((99, 49)) == (255, 0, 0, 255)
    assert canvas.history[-1].detail["box"] == (0, 0, 100, 50)


def test_paint_color_requires_color(background):
    with pytest.raises(MissingColorError):
        background.paint("color")


def test_paint_image_requires_image(background):
    with pytest.raises(MissingImageError):
        background.paint("image")


def test_paint_image_stretches(background, canvas):
    img = Image.new("RGBA", (2, 2), (0, 255, 0, 255))
    background.paint("image", image=img)
    assert canvas.image.getpixel((0, 0)) == (0, 255, 0, 255)
    assert canvas.image.getpixel((99, 49)) == (0, 255, 0, 255)
    assert canvas.history[-1].detail["dest"] == (0, 0, 100, 50)


def test_paint_unknown_kind(background):
    with pytest.raises(ValueError):
        background.paint("gradient", color="red")


def test_paint_without_surface():
    with pytest.raises(NoSurfaceError):
        BackgroundRenderer(ConfigStore()).paint("color", color="red")


@pytest.mark.asyncio
async def test_resolve_color(background):
    assert await background.resolve("#00ff00") == ("color", {"color": "#00ff00"})


@pytest.mark.asyncio
async def test_resolve_unset_uses_black_with_advisory(background):
    report = RenderReport()
    kind, props = await background.resolve("", report)
    assert (kind, props) == ("color", {"color": "#000000"})
    assert len(report.advisories) == 1


@pytest.mark.asyncio
async def test_resolve_image_source(background, png_data_url):
    kind, props = await background.resolve(png_data_url((9, 8, 7, 255)))
    assert kind == "image"
    assert props["image"].getpixel((0, 0)) == (9, 8, 7, 255)


@pytest.mark.asyncio
async def test_render_records_load_failure(maker, canvas):
    maker.set_config("background", "missing/background.png")
    report = RenderReport()

    ok = await BackgroundRenderer(maker._store).render(report)

    assert not ok
    assert [f.label for f in report.failures] == ["background"]
    assert isinstance(report.failures[0].error, ImageLoadError)
    assert canvas.history == []


@pytest.mark.asyncio
async def test_render_image_background(maker, canvas, png_data_url):
    maker.set_config("background", png_data_url((10, 20, 30, 255)))
    report = RenderReport()

    assert await BackgroundRenderer(maker._store).render(report)
    assert report.ok
    assert canvas.image.getpixel((50, 25)) == (10, 20, 30, 255)
