"""Escape-time iteration and colouring of fractal points."""

from __future__ import annotations

BACKGROUND = 0x2D2D2D

_ESCAPE_RADIUS_SQUARED = 4


def escape_time(
    z_re: float,
    z_im: float,
    c_re: float,
    c_im: float,
    max_iter: int,
    sign: int = 1,
) -> int:
    """Count iterations of z -> z^2 + c before |z| reaches 2, up to ``max_iter``.

    With ``sign`` -1 the imaginary part of z^2 is negated, which gives the
    Tricorn iteration.
    """
    count = 0
    while z_re * z_re + z_im * z_im < _ESCAPE_RADIUS_SQUARED and count < max_iter:
        count += 1
        z_re, z_im = z_re * z_re - z_im * z_im + c_re, sign * 2 * z_re * z_im + c_im
    return count


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def shade(count: int, max_iter: int, color_scale: int, base_color: int) -> int:
    """Return the pixel colour for a point that took ``count`` iterations.

    Points that never escaped, or escaped at once, get the background
    colour; others get ``base_color * color_scale`` divided by ``count + 1``,
    computed in 32-bit arithmetic.
    """
    if count == max_iter or count == 0:
        return BACKGROUND
    product = _to_int32(base_color * color_scale)
    divisor = count + 1
    quotient = abs(product) // divisor
    if product < 0:
        quotient = -quotient
    return quotient & 0xFFFFFFFF