from unittest import mock

import pygame
import pytest

from fractview.app import (
    build_explorer,
    load_assets,
    main,
    main_bonus,
    run,
    translate_key,
)
from fractview.args import FractalType, NumberError, UsageError
from fractview.explorer import Explorer, Key, Settings
from fractview.args import Config

XPM = 'static char *x[] = {\n"3 2 1 1",\n"a c #FF0000",\n"aaa",\n"aaa"};\n'


@pytest.fixture
def asset_dir(tmp_path):
    for name in (".sidebar.xpm", ".hover.xpm", ".click.xpm"):
        (tmp_path / name).write_text(XPM)
    return tmp_path


@pytest.fixture
def dummy_video(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")


def test_translate_special_keys():
    assert translate_key(pygame.K_ESCAPE) == Key.ESCAPE
    assert translate_key(pygame.K_LSHIFT) == Key.SHIFT_L
    assert translate_key(pygame.K_KP_PLUS) == Key.KP_ADD
    assert translate_key(pygame.K_LEFT) == Key.LEFT


def test_translate_printable_keys_keep_code():
    assert translate_key(pygame.K_c) == Key.C
    assert translate_key(pygame.K_r) == Key.R
    assert translate_key(pygame.K_a) == ord("a")


def test_translate_unknown_key():
    assert translate_key(pygame.K_F1) is None


def test_load_assets_reads_images(asset_dir):
    sidebar, hover, click = load_assets(asset_dir)
    assert (sidebar.width, sidebar.height) == (3, 2)
    assert sidebar.get_pixel(0, 0) == 0xFF0000
    assert hover.get_pixel(2, 1) == 0xFF0000
    assert click.width == 3


def test_load_assets_missing(tmp_path):
    assert load_assets(tmp_path) == (None, None, None)


def test_build_explorer_plain():
    explorer = build_explorer(["./fractol", "Julia", "0.5", "-1"])
    assert explorer.config.fractal is FractalType.JULIA
    assert (explorer.config.c_re, explorer.config.c_im) == (0.5, -1.0)
    assert explorer.settings.bonus is False
    assert explorer.sidebar_width == 0


def test_build_explorer_bonus_with_assets(asset_dir):
    explorer = build_explorer(["./fractol_bonus", "Tricorn"], bonus=True, asset_dir=asset_dir)
    assert explorer.config.fractal is FractalType.TRICORN
    assert explorer.settings.bonus is True
    assert explorer.sidebar_width == 3
    assert explorer.sidebar_height == 2


def test_build_explorer_errors():
    with pytest.raises(UsageError):
        build_explorer(["./fractol", "Tricorn"])
    with pytest.raises(NumberError):
        build_explorer(["./fractol", "Julia", ".5", "1"])


def test_main_bad_name(capsys):
    assert main(["Nope"]) == 1
    assert "How to use ??" in capsys.readouterr().err


def test_main_bad_number(capsys):
    assert main(["Julia", "1.", "2"]) == 1
    assert "The number must be a number" in capsys.readouterr().err


def test_main_bonus_usage_names_program(capsys):
    assert main_bonus(["Tricorn", "x"]) == 1
    assert "./fractol_bonus Tricorn" in capsys.readouterr().err


def test_run_draws_until_quit(dummy_video):
    explorer = Explorer(Config(FractalType.MANDELBROT), Settings(width=8, height=6))
    quit_event = pygame.event.Event(pygame.QUIT)
    with mock.patch("pygame.event.get", side_effect=[[], [], [quit_event]]):
        frames = run(explorer, "test")
    assert frames == 2


def test_run_escape_key_closes(dummy_video):
    explorer = Explorer(Config(FractalType.MANDELBROT), Settings(width=8, height=6))
    escape = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)
    with mock.patch("pygame.event.get", side_effect=[[], [escape]]):
        frames = run(explorer, "test")
    assert frames == 1


def test_run_mouse_wheel_zooms(dummy_video):
    explorer = Explorer(Config(FractalType.MANDELBROT), Settings(width=8, height=6))
    wheel = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=4, pos=(3, 2))
    quit_event = pygame.event.Event(pygame.QUIT)
    with mock.patch("pygame.event.get", side_effect=[[wheel], [quit_event]]):
        run(explorer, "test")
    assert explorer.view.x_area < 4.0
    assert explorer.zoom_in is False


def test_main_runs_and_exits(dummy_video):
    quit_event = pygame.event.Event(pygame.QUIT)
    with mock.patch("pygame.event.get", return_value=[quit_event]):
        assert main(["Mandelbrot"]) == 0