from __future__ import annotations

import dataclasses

import pytest

from qr_pro_studio.state import AIResult, ConfigStore, QRConfig


def test_defaults_match_startup_config():
    config = QRConfig()

    assert config.value == "https://google.com"
    assert config.fg_color == "#000000"
    assert config.bg_color == "#ffffff"
    assert config.size == 256
    assert config.level == "M"
    assert config.include_margin is True


def test_empty_value_renders_as_single_space():
    assert QRConfig(value="").render_value == " "
    assert QRConfig(value="abc").render_value == "abc"


def test_config_is_immutable():
    config = QRConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.value = "changed"  # type: ignore[misc]


def test_updates_return_new_snapshots():
    store = ConfigStore()
    before = store.config

    after = store.set_value("hello world")

    assert after is store.config
    assert after is not before
    assert before.value == "https://google.com"
    assert after.value == "hello world"
    assert after.level == before.level


def test_each_field_has_an_update():
    store = ConfigStore()
    store.set_fg_color("#112233")
    store.set_bg_color("not-a-colour")
    store.set_level("H")
    store.set_include_margin(False)
    store.set_size(512)

    assert store.config == QRConfig(
        value="https://google.com",
        fg_color="#112233",
        bg_color="not-a-colour",
        size=512,
        level="H",
        include_margin=False,
    )


def test_invalid_level_rejected():
    store = ConfigStore()
    with pytest.raises(ValueError):
        store.set_level("X")
    assert store.config.level == "M"


def test_subscribers_receive_every_snapshot():
    store = ConfigStore()
    seen = []
    store.subscribe(seen.append)

    store.set_value("a")
    store.set_value("a")
    store.set_level("Q")

    assert [c.value for c in seen] == ["a", "a", "a"]
    assert seen[-1].level == "Q"


def test_ai_result_from_mapping():
    result = AIResult.from_mapping({"suggestion": "নিরাপদ লিংক", "isSafe": False})
    assert result == AIResult(suggestion="নিরাপদ লিংক", is_safe=False)


@pytest.mark.parametrize(
    "payload",
    [{}, {"suggestion": "ok"}, {"isSafe": True}, {"suggestion": 1, "isSafe": True}, {"suggestion": "ok", "isSafe": "yes"}],
)
def test_ai_result_rejects_bad_shapes(payload):
    with pytest.raises(ValueError):
        AIResult.from_mapping(payload)
