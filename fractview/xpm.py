"""Reading XPM images into :class:`~fractview.image.Image` buffers."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from .colors import lookup_color
from .image import Image

TRANSPARENT = 0xFF000000

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or parsed."""


def find(text: str, pattern: str) -> int:
    """Return the index of the first ``pattern`` in ``text``, or -1."""
    return text.find(pattern)


def find_unquoted(text: str, pattern: str) -> int:
    """Like :func:`find`, but skip matches inside double-quoted strings."""
    quoted = False
    for pos in range(len(text) - len(pattern) + 1):
        if text[pos] == '"':
            quoted = not quoted
        if not quoted and text.startswith(pattern, pos):
            return pos
    return -1


def split_words(text: str) -> list[str]:
    """Split ``text`` on runs of spaces and tabs."""
    return [word for word in re.split(r"[ \t]+", text) if word]


def _blank(text: str, start: int, length: int) -> str:
    end = min(len(text), start + max(length, 0))
    return text[:start] + " " * (end - start) + text[end:]


def strip_comments(text: str) -> str:
    """Replace C comments outside strings with spaces, keeping the length."""
    while (begin := find_unquoted(text, "/*")) != -1:
        end = find(text[begin + 2:], "*/")
        text = _blank(text, begin, end + 4)
    while (begin := find_unquoted(text, "//")) != -1:
        end = find(text[begin + 2:], "\n")
        text = _blank(text, begin, end + 3)
    return text


def quoted_strings(text: str) -> Iterator[str]:
    """Yield the contents of each double-quoted string in ``text`` in order."""
    pos = 0
    while True:
        opening = text.find('"', pos)
        if opening == -1:
            return
        closing = text.find('"', opening + 1)
        if closing == -1:
            return
        yield text[opening + 1:closing]
        pos = closing + 1


def _atoi(word: str) -> int:
    match = _LEADING_INT.match(word)
    return int(match.group(1)) if match else 0


def xpm_to_image(lines: Iterable[str]) -> Image:
    """Build an image from XPM strings: header, colour lines, then pixel rows."""
    rows = iter(lines)

    def next_line() -> str:
        try:
            return next(rows)
        except StopIteration:
            raise XpmError("unexpected end of XPM data") from None

    header = split_words(next_line())
    if len(header) < 4:
        raise XpmError("XPM header needs width, height, colours and characters per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError("invalid XPM header")

    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = next_line()
        words = split_words(line[cpp:])
        try:
            index = words.index("c")
        except ValueError:
            raise XpmError(f"no colour key in line {line!r}") from None
        if index + 1 >= len(words):
            raise XpmError(f"missing colour value in line {line!r}")
        suffix = words[index + 2] if index + 2 < len(words) else None
        value = lookup_color(words[index + 1], suffix)
        key = line[:cpp]
        if cpp <= 2:
            palette[key] = value
        else:
            palette.setdefault(key, value)

    image = Image(width, height)
    for y in range(height):
        line = next_line()
        if len(line) < width * cpp:
            raise XpmError(f"pixel row {y} is too short")
        for x in range(width):
            color = palette.get(line[x * cpp:(x + 1) * cpp], 0)
            if color == -1:
                color = TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def read_xpm(path: str | Path) -> Image:
    """Read an XPM file and return its image."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return xpm_to_image(quoted_strings(strip_comments(text)))