"""설정 저장소 테스트."""

import json

import pytest

from config import ConfigStore, load_config
from errors import ConfigKeyError, DuplicateSurfaceError


def test_defaults(store):
    config = store.get()
    assert config["align"] == "left"
    assert config["color"] == "black"
    assert config["el"] == "#cardmaker"
    assert (config["width"], config["height"]) == (400, 250)
    assert config["background"] is None
    assert config["surface"] is None


def test_get_returns_reference(store):
    store.get()["color"] = "red"
    assert store.get("color") == "red"


def test_empty_string_key_raises(store):
    with pytest.raises(ConfigKeyError) as exc:
        store.get("download")
    assert exc.value.key == "download"
    assert isinstance(exc.value, KeyError)


def test_get_list_of_keys(store):
    store.set({"width": 640, "height": 480})
    assert store.get(["height", "width"]) == {"height": 480, "width": 640}


def test_get_list_missing_key_is_none(store):
    assert store.get(["width", "nope"]) == {"width": 400, "nope": None}


def test_get_list_does_not_raise_on_empty_sentinel(store):
    assert store.get(["download"]) == {"download": ""}


def test_set_single_round_trip(store):
    assert store.set("color", "red") == {"color": "red"}
    assert store.get("color") == "red"


def test_set_batch_later_wins(store):
    store.set({"color": "red", "align": "center"})
    result = store.set({"color": "blue"})
    assert result == {"color": "blue"}
    assert store.get(["color", "align"]) == {"color": "blue", "align": "center"}


def test_surface_assigned_once(store):
    handle = object()
    store.set("surface", handle)
    with pytest.raises(DuplicateSurfaceError):
        store.set("surface", object())
    assert store.get("surface") is handle


def test_stores_do_not_share_state():
    a = ConfigStore()
    b = ConfigStore()
    a.get("template")["background"] = "red"
    assert b.get("template") == {}


def test_initial_values():
    store = ConfigStore({"width": 10, "download": "#dl"})
    assert store.get("width") == 10
    assert store.get("download") == "#dl"


def test_load_config_missing_file(tmp_path):
    config = load_config(tmp_path / "missing.json")
    assert config["width"] == 400
    assert config["template"] == {}


def test_load_config_merges_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "width": 200,
        "template": {"background": "red", "text": [{"value": "x"}]},
    }), encoding="utf-8")

    config = load_config(path)
    assert config["width"] == 200
    assert config["height"] == 250
    assert config["template"]["background"] == "red"
    assert config["template"]["text"] == [{"value": "x"}]
