"""텍스트 렌더링 테스트."""

import pytest

from cardmaker import CardMaker
from config import ConfigStore
from content.template import TextItem
from errors import NoSurfaceError
from renderer.text import DEFAULT_FAMILY, DEFAULT_SIZE, FONT_CACHE_SIZE, TextCompositor, _get_font
from scheduler import RenderReport


def _text_calls(canvas):
    return [c for c in canvas.history if c.op == "fill_text"]


def test_defaults_come_from_config(maker, canvas):
    TextCompositor(maker._store).write_text("Hi", {"x": 10, "y": 20})

    call = _text_calls(canvas)[-1]
    assert call.detail["position"] == (10, 20)
    assert call.detail["color"] == "black"
    assert call.detail["align"] == "left"
    assert call.detail["font"] == f"{DEFAULT_SIZE}px {DEFAULT_FAMILY}"
    assert canvas.image.getbbox() is not None


def test_item_overrides(maker, canvas):
    maker.set_config({"color": "white", "align": "right"})
    text = TextCompositor(maker._store)

    text.write_text("a", {})
    text.write_text("b", {"color": "red", "align": "center", "size": 12, "family": "Courier"})

    first, second = _text_calls(canvas)
    assert (first.detail["color"], first.detail["align"]) == ("white", "right")
    assert first.detail["position"] == (0, 0)
    assert (second.detail["color"], second.detail["align"]) == ("red", "center")
    assert second.detail["font"] == "12px Courier"


def test_center_alignment_shifts_left(document):
    left = CardMaker({"width": 200, "height": 60}, document=document)
    centered = CardMaker({"width": 200, "height": 60, "el": "#other"})

    TextCompositor(left._store).write_text("WWW", {"x": 100, "y": 40})
    TextCompositor(centered._store).write_text("WWW", {"x": 100, "y": 40, "align": "center"})

    left_box = left.get_context().image.getbbox()
    center_box = centered.get_context().image.getbbox()
    assert left_box[0] >= 99
    assert center_box[0] < left_box[0]
    assert center_box[2] > 100


def test_empty_text_is_advisory_and_still_drawn(maker, canvas):
    report = RenderReport()
    TextCompositor(maker._store).write_text("", {"x": 1, "y": 1}, report)
    TextCompositor(maker._store).write_text(None, {}, report)

    assert len(report.advisories) == 2
    assert len(_text_calls(canvas)) == 2


def test_without_surface():
    with pytest.raises(NoSurfaceError):
        TextCompositor(ConfigStore()).write_text("x")


def test_font_cache():
    assert _get_font("NoSuchFamily", 14) is _get_font("NoSuchFamily", 14)


@pytest.mark.asyncio
async def test_draw_all_in_order(maker, canvas):
    items = [TextItem(str(i), {"x": i * 10, "y": 20}) for i in range(4)]
    report = RenderReport()

    outcomes = await TextCompositor(maker._store).draw_all(items, report)

    assert [o.label for o in outcomes] == ["text[0]", "text[1]", "text[2]", "text[3]"]
    assert report.ok
    assert [c.detail["text"] for c in _text_calls(canvas)] == ["0", "1", "2", "3"]


@pytest.mark.asyncio
async def test_line_breaks_drawn_as_spaces():
    maker = CardMaker({"width": 60, "height": 30,
                       "template": {"background": "white", "text": [{"value": "a\nb\tc"}]}})
    report = await maker.render()

    assert report.ok
    call = _text_calls(maker.get_context())[-1]
    assert call.detail["text"] == "a b c"


def test_font_cache_is_bounded():
    assert _get_font.cache_info().maxsize == FONT_CACHE_SIZE
