"""Interactive state of the fractal viewer: view window, input handling, drawing."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .args import Config, FractalType
from .fractal import escape_time, shade
from .image import Image

MAX_ITERATIONS = 999

BUTTON_LEFT = 1
BUTTON_WHEEL_UP = 4
BUTTON_WHEEL_DOWN = 5

# Vertical bands (exclusive bounds) where the sidebar buttons react to the pointer.
_BUTTON_BANDS = (
    (183, 205),
    (246, 284),
    (306, 343),
    (366, 403),
    (423, 450),
    (484, 510),
    (544, 570),
)
_BUTTON_X_MIN = 155
_BUTTON_X_MAX = 243
# Top row of the highlight drawn over each button.
_HIGHLIGHT_TOPS = (180, 243, 303, 363, 420, 481, 543)
_HIGHLIGHT_HEIGHT = 45
_HIGHLIGHT_X = (151, 248)

_COLOR_BUTTON = 0
_MORE_ITER_BUTTON = 1
_LESS_ITER_BUTTON = 2
_ZOOM_IN_BUTTON = 3
_ZOOM_OUT_BUTTON = 4
_RESET_BUTTON = 5
_QUIT_BUTTON = 6


class Key(enum.IntEnum):
    """Key symbols the viewer reacts to."""

    ESCAPE = 0xFF1B
    LEFT = 0xFF51
    UP = 0xFF52
    RIGHT = 0xFF53
    DOWN = 0xFF54
    SHIFT_L = 0xFFE1
    KP_ADD = 0xFFAB
    KP_SUBTRACT = 0xFFAD
    C = 0x63
    R = 0x72


class CloseRequested(Exception):
    """Raised when the user asks to close the viewer."""


@dataclass(frozen=True)
class Settings:
    """Window size and tuning constants of the viewer."""

    width: int = 1280
    height: int = 720
    base_color: int = 0xFFFFFF
    zoom_factor: float = 0.9
    shift: float = 0.02
    bonus: bool = False

    @property
    def iteration_floor(self) -> int:
        """Iteration limit at or below which decreasing is refused."""
        return 11 if self.bonus else 10


@dataclass
class View:
    """The region of the complex plane on screen and the colouring settings."""

    x_area: float = 4.0
    y_area: float = 4.0
    x_start: float = -2.0
    y_start: float = -2.0
    iter_max: int = 20
    color_scale: int = 1

    def reset(self) -> None:
        """Return to the initial view."""
        self.color_scale = 1
        self.iter_max = 20
        self.x_area = 4.0
        self.y_area = 4.0
        self.x_start = -2.0
        self.y_start = -2.0

    def zoom(
        self,
        zoom_in: bool,
        mouse_x: int,
        mouse_y: int,
        offset: int,
        height: int,
        factor: float,
    ) -> None:
        """Zoom in or out by ``factor``, keeping the point under the mouse fixed."""
        ms_x = float(mouse_x - offset)
        ms_y = float(mouse_y)
        center_x = (ms_x / height) * self.x_area + self.x_start
        center_y = (ms_y / height) * self.y_area + self.y_start
        if zoom_in:
            self.x_area *= factor
            self.y_area *= factor
        else:
            self.x_area /= factor
            self.y_area /= factor
        self.x_start = center_x - (ms_x / height) * self.x_area
        self.y_start = center_y - (ms_y / height) * self.y_area


class Explorer:
    """Reacts to keyboard and mouse input and renders the fractal."""

    def __init__(
        self,
        config: Config,
        settings: Settings | None = None,
        sidebar: Image | None = None,
        hover: Image | None = None,
        click: Image | None = None,
    ):
        self.config = config
        self.settings = settings or Settings()
        self.view = View()
        self.sidebar = sidebar
        self.hover_image = hover
        self.click_image = click
        if sidebar is not None and hover is not None and click is not None:
            self.sidebar_width = sidebar.width
            self.sidebar_height = sidebar.height
        else:
            self.sidebar_width = 0
            self.sidebar_height = 0
        self.mouse_x = 0
        self.mouse_y = 0
        self.held: set[Key] = set()
        self.zoom_in = False
        self.zoom_out = False
        self.dragging = False
        self.hovered: set[int] = set()
        self.clicked: set[int] = set()

    @property
    def offset(self) -> int:
        """Horizontal shift that centres the square plane in the drawing area."""
        return (self.settings.width - self.settings.height + self.sidebar_width) // 2

    # Keyboard

    def key_press(self, key: int) -> None:
        """Handle a key press; Escape raises :class:`CloseRequested`."""
        if key == Key.ESCAPE:
            raise CloseRequested
        if key in (Key.LEFT, Key.RIGHT, Key.UP, Key.DOWN, Key.SHIFT_L):
            self.held.add(Key(key))
        if Key.SHIFT_L in self.held:
            self._shifted_key(key)

    def _shifted_key(self, key: int) -> None:
        view = self.view
        if key == Key.C:
            view.color_scale += 5
        if key == Key.KP_ADD and view.iter_max < MAX_ITERATIONS:
            view.iter_max += 5
        if key == Key.KP_SUBTRACT and view.iter_max > self.settings.iteration_floor:
            view.iter_max -= 5
        if key == Key.R:
            view.reset()

    def key_release(self, key: int) -> None:
        """Handle a key release."""
        if key in (Key.LEFT, Key.RIGHT, Key.UP, Key.DOWN, Key.SHIFT_L):
            self.held.discard(Key(key))

    # Mouse

    def mouse_press(self, button: int, x: int, y: int) -> None:
        """Handle a mouse button press at (x, y)."""
        if button == BUTTON_WHEEL_UP:
            self.zoom_in = True
        if button == BUTTON_WHEEL_DOWN:
            self.zoom_out = True
        if button == BUTTON_LEFT:
            self.dragging = True
            first = self._first_hovered()
            if first is not None:
                self.clicked.add(first)
        self.mouse_x = x
        self.mouse_y = y

    def mouse_release(self, button: int, x: int, y: int) -> None:
        """Handle a mouse button release; only the left button matters."""
        if button != BUTTON_LEFT:
            return
        self.clicked.clear()
        self.held -= {Key.LEFT, Key.RIGHT, Key.UP, Key.DOWN}
        self.dragging = False
        self.mouse_x = x
        self.mouse_y = y

    def mouse_move(self, x: int, y: int) -> None:
        """Update button highlighting and drag the view while the left button is held."""
        self._update_hover(x, y)
        if not self.dragging:
            return
        settings = self.settings
        if x > settings.width or y > settings.height or x < self.sidebar_width or y < 0:
            self.dragging = False
            return
        self.view.x_start += (self.mouse_x - x) / settings.height * self.view.x_area
        self.view.y_start += (self.mouse_y - y) / settings.height * self.view.y_area
        self.mouse_x = x
        self.mouse_y = y

    def _update_hover(self, x: int, y: int) -> None:
        if (
            x < _BUTTON_X_MIN
            or x > _BUTTON_X_MAX
            or not self.sidebar_width
            or not self.sidebar_height
        ):
            self.hovered.clear()
            return
        for index, (low, high) in enumerate(_BUTTON_BANDS):
            if low < y < high:
                self.hovered.add(index)
                return
        self.hovered.clear()

    def _first_hovered(self) -> int | None:
        return min(self.hovered) if self.hovered else None

    # Frame update

    def tick(self) -> None:
        """Apply pending zooms, held arrow keys and pressed sidebar buttons."""
        settings = self.settings
        view = self.view
        if self.zoom_in:
            self._zoom(True)
        if self.zoom_out:
            self._zoom(False)
        if Key.DOWN in self.held:
            view.y_start += settings.shift * view.y_area
        if Key.LEFT in self.held:
            view.x_start -= settings.shift * view.x_area
        if Key.RIGHT in self.held:
            view.x_start += settings.shift * view.x_area
        if Key.UP in self.held:
            view.y_start -= settings.shift * view.y_area
        self._apply_buttons()
        self.zoom_in = False
        self.zoom_out = False

    def _zoom(self, zoom_in: bool) -> None:
        self.view.zoom(
            zoom_in,
            self.mouse_x,
            self.mouse_y,
            self.offset,
            self.settings.height,
            self.settings.zoom_factor,
        )

    def _apply_buttons(self) -> None:
        if not self.dragging or not self.clicked:
            return
        view = self.view
        self.mouse_x = self.settings.width // 2 + self.sidebar_width // 2
        self.mouse_y = self.settings.height // 2
        if _COLOR_BUTTON in self.clicked:
            view.color_scale += 1
        if _MORE_ITER_BUTTON in self.clicked and view.iter_max < MAX_ITERATIONS:
            view.iter_max += 1
        if _LESS_ITER_BUTTON in self.clicked and view.iter_max > 11:
            view.iter_max -= 1
        if _ZOOM_IN_BUTTON in self.clicked:
            self._zoom(True)
        if _ZOOM_OUT_BUTTON in self.clicked:
            self._zoom(False)
        if _RESET_BUTTON in self.clicked:
            view.reset()
        if _QUIT_BUTTON in self.clicked:
            raise CloseRequested

    # Rendering

    def point(self, x: int, y: int) -> int:
        """Return the escape-time count of the screen pixel (x, y)."""
        height = float(self.settings.height)
        view = self.view
        x -= self.offset
        re = (x / height) * view.x_area + view.x_start
        im = (y / height) * view.y_area + view.y_start
        if self.config.fractal in (FractalType.MANDELBROT, FractalType.TRICORN):
            return escape_time(0.0, 0.0, re, im, view.iter_max, self.config.sign)
        return escape_time(
            re, im, self.config.c_re, self.config.c_im, view.iter_max, self.config.sign
        )

    def _shade(self, x: int, y: int) -> int:
        return shade(
            self.point(x, y),
            self.view.iter_max,
            self.view.color_scale,
            self.settings.base_color,
        )

    def draw(self, image: Image) -> None:
        """Render the current frame into ``image``."""
        settings = self.settings
        if not settings.bonus:
            for y in range(settings.height):
                for x in range(settings.width):
                    image.put_pixel(x, y, self._shade(x, y))
            return
        self._draw_sidebar(image)
        for y in range(1, settings.height - 1):
            for x in range(self.sidebar_width + 1, settings.width - 1):
                image.put_pixel(x, y, self._shade(x, y))

    def _draw_sidebar(self, image: Image) -> None:
        if self.sidebar is not None:
            rows = min(self.sidebar_height, self.settings.height)
            cols = min(self.sidebar_width, self.settings.width)
            for y in range(rows):
                for x in range(cols):
                    image.put_pixel(x, y, self.sidebar.get_pixel(x, y))
        first = self._first_hovered()
        if first is None:
            return
        source = self.click_image if self.clicked else self.hover_image
        if source is None:
            return
        top = _HIGHLIGHT_TOPS[first]
        for y in range(top + 1, top + _HIGHLIGHT_HEIGHT):
            for x in range(*_HIGHLIGHT_X):
                image.put_pixel(x, y, source.get_pixel(x, y))