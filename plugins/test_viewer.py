"""Tests for the pygame viewer, driven without a real display."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame
import pytest
from PIL import Image

from texture_explorer.commands import QUIT, SAVE, change_domain, channel, texture
from texture_explorer.formulas import OFF
from texture_explorer.viewer import PANEL_WIDTH, Viewer


@pytest.fixture
def viewer():
    pygame.init()
    v = Viewer(16, 12, ask=lambda prompt: pytest.fail(f"unexpected prompt {prompt!r}"))
    yield v
    pygame.quit()


def test_initial_state(viewer):
    assert viewer.running
    assert viewer.needs_redraw
    assert viewer.explorer.indices == (0, 0, 0)
    assert viewer.total_w == 16 + PANEL_WIDTH


def test_texture_command_marks_redraw(viewer):
    viewer._render_canvas()
    assert not viewer.needs_redraw
    viewer.run_command(texture(4))
    assert viewer.explorer.indices == (4, 4, 4)
    assert viewer.needs_redraw


def test_quit_stops_the_loop(viewer):
    viewer.run_command(QUIT)
    assert not viewer.running


def test_invalid_domain_is_reported(viewer, capsys):
    before = viewer.explorer.domain
    viewer.run_command(change_domain((5, 1, 0, 1)))
    assert viewer.explorer.domain == before
    assert viewer.running
    assert "[TX]" in capsys.readouterr().out


def test_change_domain_prompts_in_terminal(viewer):
    replies = iter(["0", "2", "0", "3"])
    viewer.ask = lambda prompt: next(replies)
    viewer.run_command(change_domain())
    assert viewer.explorer.domain == (0.0, 2.0, 0.0, 3.0)
    assert viewer.needs_redraw


@pytest.mark.parametrize("interrupt", [EOFError, KeyboardInterrupt])
def test_cancelled_prompt_keeps_domain(viewer, capsys, interrupt):
    def ask(prompt):
        raise interrupt()

    viewer.ask = ask
    viewer._render_canvas()
    before = viewer.explorer.domain
    viewer.run_command(change_domain())
    assert viewer.explorer.domain == before
    assert viewer.running
    assert not viewer.needs_redraw
    assert "[TX] Coordinate change cancelled" in capsys.readouterr().out


def test_render_canvas_matches_explorer(viewer):
    viewer.run_command(channel("red", 2))
    viewer._render_canvas()
    assert viewer.canvas.get_size() == (16, 12)
    np.testing.assert_array_equal(viewer._capture(), viewer.explorer.render_surface())


def test_capture_before_first_render(viewer):
    assert viewer._capture() is None


def test_save_writes_displayed_pixels(viewer, tmp_path, capsys):
    viewer.explorer.filename = str(tmp_path / "texture.png")
    viewer._render_canvas()
    viewer.run_command(SAVE)
    assert "Texture saved" in capsys.readouterr().out
    with Image.open(viewer.explorer.filename) as img:
        assert img.size == (16, 12)
        np.testing.assert_array_equal(np.asarray(img), viewer.explorer.snapshot())


def test_panel_tracks_state(viewer):
    viewer._build_panel()
    assert viewer.selectors["texture"].selected == 0
    viewer.run_command(channel("green", OFF))
    assert viewer.selectors["texture"].selected is None
    green_row = [row for key, row in viewer.selectors.items()
                 if getattr(key, "value", None) == "green"][0]
    assert green_row.selected == OFF
    assert viewer.formula_text.lines[1] == "G[off]  off"


def test_panel_click_selects_texture():
    pygame.init()
    viewer = Viewer(16, 400)
    viewer._build_panel()
    row = viewer.selectors["texture"]
    target = row.buttons[7].rect
    pos = (viewer.panel.x + target.centerx, viewer.panel.y + target.centery)
    event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=1)
    assert viewer.panel.handle_event(event)
    assert viewer.explorer.indices == (7, 7, 7)
    pygame.quit()
