import pytest

from fractview.args import Config, FractalType
from fractview.explorer import (
    BUTTON_LEFT,
    BUTTON_WHEEL_DOWN,
    BUTTON_WHEEL_UP,
    CloseRequested,
    Explorer,
    Key,
    Settings,
    View,
)
from fractview.fractal import BACKGROUND, shade
from fractview.image import Image

MANDELBROT = Config(FractalType.MANDELBROT)


def _filled(width, height, color):
    image = Image(width, height)
    image.data[:] = color.to_bytes(4, "little") * (width * height)
    return image


def _bonus_explorer(width=300, height=600):
    sidebar = _filled(250, 10, 0x123456)
    hover = _filled(250, 600, 0x00AA00)
    click = _filled(250, 600, 0xAA0000)
    settings = Settings(width=width, height=height, bonus=True)
    return Explorer(MANDELBROT, settings, sidebar, hover, click)


def test_initial_view():
    view = Explorer(MANDELBROT).view
    assert (view.x_area, view.y_area) == (4.0, 4.0)
    assert (view.x_start, view.y_start) == (-2.0, -2.0)
    assert view.iter_max == 20
    assert view.color_scale == 1


def test_reset_restores_defaults():
    view = View(x_area=1.0, y_area=2.0, x_start=3.0, y_start=4.0, iter_max=50, color_scale=9)
    view.reset()
    assert view == View()


def test_escape_requests_close():
    with pytest.raises(CloseRequested):
        Explorer(MANDELBROT).key_press(Key.ESCAPE)


def test_arrow_key_moves_view_until_released():
    settings = Settings(shift=0.25)
    explorer = Explorer(MANDELBROT, settings)
    explorer.key_press(Key.RIGHT)
    explorer.tick()
    assert explorer.view.x_start == pytest.approx(-2.0 + settings.shift * 4.0)
    explorer.key_release(Key.RIGHT)
    explorer.tick()
    assert explorer.view.x_start == pytest.approx(-2.0 + settings.shift * 4.0)


def test_up_and_down_cancel():
    explorer = Explorer(MANDELBROT)
    explorer.key_press(Key.UP)
    explorer.key_press(Key.DOWN)
    explorer.tick()
    assert explorer.view.y_start == pytest.approx(-2.0)


def test_shift_c_raises_color_scale():
    explorer = Explorer(MANDELBROT)
    explorer.key_press(Key.C)
    assert explorer.view.color_scale == 1
    explorer.key_press(Key.SHIFT_L)
    explorer.key_press(Key.C)
    assert explorer.view.color_scale == 6


def test_shift_add_and_cap():
    explorer = Explorer(MANDELBROT)
    explorer.key_press(Key.SHIFT_L)
    explorer.key_press(Key.KP_ADD)
    assert explorer.view.iter_max == 25
    explorer.view.iter_max = 999
    explorer.key_press(Key.KP_ADD)
    assert explorer.view.iter_max == 999


@pytest.mark.parametrize("bonus, expected", [(False, 6), (True, 11)])
def test_subtract_floor(bonus, expected):
    explorer = Explorer(MANDELBROT, Settings(bonus=bonus))
    explorer.view.iter_max = 11
    explorer.key_press(Key.SHIFT_L)
    explorer.key_press(Key.KP_SUBTRACT)
    assert explorer.view.iter_max == expected


def test_shift_release_disables_modifiers():
    explorer = Explorer(MANDELBROT)
    explorer.key_press(Key.SHIFT_L)
    explorer.key_release(Key.SHIFT_L)
    explorer.key_press(Key.KP_ADD)
    assert explorer.view.iter_max == 20


def test_shift_r_resets():
    explorer = Explorer(MANDELBROT)
    explorer.view.x_start = 1.5
    explorer.view.iter_max = 40
    explorer.key_press(Key.SHIFT_L)
    explorer.key_press(Key.R)
    assert explorer.view == View()


def test_zoom_keeps_point_under_mouse():
    view = View()
    before_x = (100 / 720) * view.x_area + view.x_start
    before_y = (50 / 720) * view.y_area + view.y_start
    view.zoom(True, 100, 50, 0, 720, 0.5)
    assert view.x_area == pytest.approx(2.0)
    assert (100 / 720) * view.x_area + view.x_start == pytest.approx(before_x)
    assert (50 / 720) * view.y_area + view.y_start == pytest.approx(before_y)


def test_zoom_in_then_out_round_trip():
    view = View()
    view.zoom(True, 300, 200, 40, 720, 0.9)
    view.zoom(False, 300, 200, 40, 720, 0.9)
    assert view.x_area == pytest.approx(4.0)
    assert view.x_start == pytest.approx(-2.0)
    assert view.y_start == pytest.approx(-2.0)


def test_wheel_zooms_once_per_tick():
    settings = Settings(zoom_factor=0.5)
    explorer = Explorer(MANDELBROT, settings)
    explorer.mouse_press(BUTTON_WHEEL_UP, 640, 360)
    explorer.tick()
    assert explorer.view.x_area == pytest.approx(4.0 * settings.zoom_factor)
    explorer.tick()
    assert explorer.view.x_area == pytest.approx(4.0 * settings.zoom_factor)
    explorer.mouse_press(BUTTON_WHEEL_DOWN, 640, 360)
    explorer.tick()
    assert explorer.view.x_area == pytest.approx(4.0)


def test_drag_moves_view():
    explorer = Explorer(MANDELBROT)
    explorer.mouse_press(BUTTON_LEFT, 10, 10)
    explorer.mouse_move(20, 10)
    assert explorer.view.x_start == pytest.approx(-2.0 - 10 / 720 * 4.0)
    assert explorer.view.y_start == pytest.approx(-2.0)
    assert (explorer.mouse_x, explorer.mouse_y) == (20, 10)


def test_move_without_press_does_nothing():
    explorer = Explorer(MANDELBROT)
    explorer.mouse_move(50, 50)
    assert explorer.view == View()


def test_drag_outside_window_stops():
    explorer = Explorer(MANDELBROT)
    explorer.mouse_press(BUTTON_LEFT, 10, 10)
    explorer.mouse_move(-1, 10)
    assert explorer.dragging is False
    assert explorer.view.x_start == -2.0


def test_release_other_button_ignored():
    explorer = Explorer(MANDELBROT)
    explorer.mouse_press(BUTTON_LEFT, 10, 10)
    explorer.mouse_release(3, 0, 0)
    assert explorer.dragging is True
    explorer.mouse_release(BUTTON_LEFT, 5, 6)
    assert explorer.dragging is False
    assert (explorer.mouse_x, explorer.mouse_y) == (5, 6)


def test_release_stops_arrow_movement():
    explorer = Explorer(MANDELBROT)
    explorer.key_press(Key.LEFT)
    explorer.mouse_release(BUTTON_LEFT, 0, 0)
    explorer.tick()
    assert explorer.view.x_start == -2.0


def test_mandelbrot_centre_never_escapes():
    explorer = Explorer(MANDELBROT)
    assert explorer.point(640, 360) == 20
    assert explorer.point(0, 0) < 20


def test_julia_with_zero_constant():
    explorer = Explorer(Config(FractalType.JULIA, 0.0, 0.0))
    assert explorer.point(640, 360) == 20
    assert explorer.point(0, 0) < 20


def test_tricorn_centre_never_escapes():
    explorer = Explorer(Config(FractalType.TRICORN))
    assert explorer.point(640, 360) == 20


def test_draw_fills_whole_image():
    settings = Settings(width=40, height=20)
    explorer = Explorer(MANDELBROT, settings)
    image = Image(40, 20)
    explorer.draw(image)
    assert image.get_pixel(20, 10) == BACKGROUND
    for x, y in [(0, 0), (5, 3), (39, 19)]:
        expected = shade(explorer.point(x, y), 20, 1, settings.base_color)
        assert image.get_pixel(x, y) == expected


def test_no_hover_without_sidebar():
    explorer = Explorer(MANDELBROT, Settings(bonus=True))
    explorer.mouse_move(200, 190)
    assert explorer.hovered == set()
    assert explorer.sidebar_width == 0


def test_sidebar_button_changes_color():
    explorer = _bonus_explorer()
    explorer.mouse_move(200, 190)
    assert explorer.hovered == {0}
    explorer.mouse_press(BUTTON_LEFT, 200, 190)
    explorer.tick()
    assert explorer.view.color_scale == 2
    assert explorer.mouse_y == 300
    explorer.mouse_release(BUTTON_LEFT, 200, 190)
    explorer.tick()
    assert explorer.view.color_scale == 2
    assert explorer.clicked == set()


def test_quit_button_requests_close():
    explorer = _bonus_explorer()
    explorer.mouse_move(200, 550)
    explorer.mouse_press(BUTTON_LEFT, 200, 550)
    with pytest.raises(CloseRequested):
        explorer.tick()


def test_hover_cleared_outside_buttons():
    explorer = _bonus_explorer()
    explorer.mouse_move(200, 190)
    explorer.mouse_move(200, 220)
    assert explorer.hovered == set()


def test_bonus_draw_sidebar_and_highlight():
    explorer = _bonus_explorer()
    image = Image(300, 600)
    explorer.mouse_move(200, 190)
    explorer.draw(image)
    assert image.get_pixel(5, 5) == 0x123456
    assert image.get_pixel(200, 190) == 0x00AA00
    assert image.get_pixel(250, 300) == 0
    explorer.mouse_press(BUTTON_LEFT, 200, 190)
    explorer.draw(image)
    assert image.get_pixel(200, 190) == 0xAA0000
    x, y = 280, 300
    assert image.get_pixel(x, y) == shade(explorer.point(x, y), 20, 1, 0xFFFFFF)