from __future__ import annotations

import pytest

from qr_pro_studio.state import AIResult, QRConfig
from qr_pro_studio.studio import QRStudio
from qr_pro_studio.trigger import AnalysisState

SAFE = AIResult(suggestion="নিরাপদ লিংক", is_safe=True)


@pytest.fixture()
def studio(config, scheduler, runner, clipboard):
    studio = QRStudio(config, scheduler, runner, clipboard, clock=lambda: 1_700_000_000.0)
    studio.start()
    return studio


def test_start_renders_and_analyses_default_value(studio, scheduler, runner):
    assert studio.surface is not None
    assert studio.surface.config == QRConfig()

    scheduler.advance(1_500)
    assert runner.contents == ["https://google.com"]


def test_every_update_rerenders(studio):
    renders = []
    studio.render_listeners.append(renders.append)

    studio.store.set_fg_color("#123456")
    studio.store.set_level("H")
    studio.store.set_include_margin(False)

    assert len(renders) == 3
    assert studio.surface.config.fg_color == "#123456"
    assert studio.surface.config.level == "H"
    assert studio.surface.config.include_margin is False


def test_option_changes_do_not_rearm_analysis(studio, scheduler, runner):
    scheduler.advance(1_500)
    studio.store.set_bg_color("#eeeeee")
    studio.store.set_level("Q")
    scheduler.advance(5_000)

    assert runner.contents == ["https://google.com"]


def test_example_scenario(studio, scheduler, runner):
    results = []
    studio.result_listeners.append(results.append)

    studio.store.set_value("https://example.com/path")
    scheduler.advance(1_500)

    assert runner.contents == ["https://example.com/path"]
    assert studio.state.is_analyzing

    runner.complete(0, SAFE)
    assert studio.state.ai_result == SAFE
    assert studio.state.ai_result.suggestion == "নিরাপদ লিংক"
    assert not studio.state.is_analyzing
    assert results == [SAFE]


def test_short_value_never_analysed(studio, scheduler, runner):
    studio.store.set_value("hi")
    scheduler.advance(600_000)

    assert runner.contents == []
    assert studio.trigger.state == AnalysisState.IDLE


def test_render_failure_clears_surface_and_blocks_export(studio):
    studio.store.set_level("H")
    studio.store.set_value("x" * 5_000)

    assert studio.surface is None
    assert "too long" in studio.state.render_error
    assert studio.export_png() is None
    assert studio.export_pdf() is None

    studio.store.set_value("short again")
    assert studio.surface is not None
    assert studio.state.render_error is None


def test_exports_use_current_value(studio, config):
    studio.store.set_value("Contact: 555-1234")

    png = studio.export_png()
    pdf = studio.export_pdf()

    assert png.name == "qr-code-1700000000000.png"
    assert png.read_bytes() == studio.surface.png
    assert b"Contact: 555-1234" in pdf.read_bytes()


def test_copy_value_twice(studio, scheduler, clipboard):
    copied = []
    studio.copied_listeners.append(copied.append)

    studio.store.set_value("first value")
    studio.copy_value()
    scheduler.advance(500)
    studio.store.set_value("second value")
    studio.copy_value()

    assert clipboard.text == "second value"
    scheduler.advance(1_999)
    assert studio.state.copied
    scheduler.advance(1)
    assert not studio.state.copied
    assert copied == [True, False]


def test_shutdown_cancels_pending_analysis(studio, scheduler, runner):
    studio.shutdown()
    scheduler.advance(5_000)
    assert runner.contents == []


def test_results_reach_listeners_while_another_call_runs(studio, scheduler, runner):
    seen = []
    studio.result_listeners.append(
        lambda result: seen.append((result.suggestion, studio.state.is_analyzing))
    )

    studio.store.set_value("first long value")
    scheduler.advance(1_500)
    studio.store.set_value("second long value")
    scheduler.advance(1_500)
    assert runner.contents == ["first long value", "second long value"]

    runner.complete(0, AIResult(suggestion="first", is_safe=True))
    assert seen == [("first", True)]
    assert studio.state.is_analyzing

    runner.complete(1, SAFE)
    assert seen[-1][0] == SAFE.suggestion
    assert not studio.state.is_analyzing
