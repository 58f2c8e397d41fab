"""Window, event loop and command-line entry points of the fractal viewer."""

from __future__ import annotations

import os
import sys
from pathlib import Path

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from .args import NumberError, UsageError, parse_args  # noqa: E402
from .explorer import CloseRequested, Explorer, Key, Settings  # noqa: E402
from .image import Image  # noqa: E402
from .xpm import XpmError, read_xpm  # noqa: E402

DEFAULT_ASSET_DIR = "./.assets"
WINDOW_TITLE = "ART FRACTAL"

_SIDEBAR_FILE = ".sidebar.xpm"
_HOVER_FILE = ".hover.xpm"
_CLICK_FILE = ".click.xpm"

_KEY_MAP = {
    pygame.K_ESCAPE: Key.ESCAPE,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LSHIFT: Key.SHIFT_L,
    pygame.K_KP_PLUS: Key.KP_ADD,
    pygame.K_KP_MINUS: Key.KP_SUBTRACT,
}


def translate_key(pygame_key: int) -> int | None:
    """Map a pygame key code to the key symbol the viewer understands.

    Special keys are mapped through a table; printable keys keep their
    character code, which is also their key symbol. Other keys give None.
    """
    if pygame_key in _KEY_MAP:
        return int(_KEY_MAP[pygame_key])
    if 0x20 <= pygame_key < 0x7F:
        return pygame_key
    return None


def _load(path: Path) -> Image | None:
    try:
        return read_xpm(path)
    except XpmError:
        return None


def load_assets(
    directory: str | Path = DEFAULT_ASSET_DIR,
) -> tuple[Image | None, Image | None, Image | None]:
    """Load the sidebar, hover and click images; None for any that cannot be read."""
    base = Path(directory)
    return (
        _load(base / _SIDEBAR_FILE),
        _load(base / _HOVER_FILE),
        _load(base / _CLICK_FILE),
    )


def build_explorer(
    argv: list[str],
    bonus: bool = False,
    asset_dir: str | Path = DEFAULT_ASSET_DIR,
) -> Explorer:
    """Parse a full argument vector and set up the viewer state.

    Raises :class:`~fractview.args.UsageError` or
    :class:`~fractview.args.NumberError` for a bad command line.
    """
    config = parse_args(argv, allow_tricorn=bonus)
    settings = Settings(bonus=bonus)
    if not bonus:
        return Explorer(config, settings)
    sidebar, hover, click = load_assets(asset_dir)
    return Explorer(config, settings, sidebar, hover, click)


def _dispatch(explorer: Explorer, event: pygame.event.Event) -> None:
    if event.type == pygame.QUIT:
        explorer.key_press(Key.ESCAPE)
    elif event.type == pygame.KEYDOWN:
        key = translate_key(event.key)
        if key is not None:
            explorer.key_press(key)
    elif event.type == pygame.KEYUP:
        key = translate_key(event.key)
        if key is not None:
            explorer.key_release(key)
    elif event.type == pygame.MOUSEBUTTONDOWN:
        explorer.mouse_press(event.button, *event.pos)
    elif event.type == pygame.MOUSEBUTTONUP:
        explorer.mouse_release(event.button, *event.pos)
    elif event.type == pygame.MOUSEMOTION:
        explorer.mouse_move(*event.pos)


def run(explorer: Explorer, title: str = WINDOW_TITLE) -> int:
    """Open a window and run the viewer until it is closed.

    Returns the number of frames drawn.
    """
    settings = explorer.settings
    size = (settings.width, settings.height)
    frames = 0
    pygame.init()
    try:
        screen = pygame.display.set_mode(size)
        pygame.display.set_caption(title)
        image = Image(settings.width, settings.height)
        while True:
            for event in pygame.event.get():
                _dispatch(explorer, event)
            explorer.tick()
            explorer.draw(image)
            surface = pygame.image.frombuffer(image.to_rgb_bytes(), size, "RGB")
            screen.blit(surface, (0, 0))
            pygame.display.flip()
            frames += 1
    except CloseRequested:
        return frames
    finally:
        pygame.quit()


def _start(program: str, args: list[str], bonus: bool) -> int:
    argv = [program, *args]
    try:
        explorer = build_explorer(argv, bonus=bonus)
    except (UsageError, NumberError) as exc:
        sys.stderr.write(str(exc))
        return 1
    title = argv[1] if bonus else WINDOW_TITLE
    run(explorer, title)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Start the viewer with Mandelbrot or Julia; returns the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    return _start("./fractol", args, bonus=False)


def main_bonus(argv: list[str] | None = None) -> int:
    """Start the viewer with sidebar and Tricorn support; returns the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    return _start("./fractol_bonus", args, bonus=True)