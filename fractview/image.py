"""In-memory pixel images and colour-value conversion for the display."""

from __future__ import annotations

TRUE_COLOR_DEPTH = 24


class Image:
    """A width x height pixel buffer with rows padded to 32-bit boundaries.

    ``bpp`` is the number of bits per pixel and ``byte_order`` is 0 when
    pixel bytes are stored least significant first, 1 when most significant
    first.
    """

    def __init__(self, width: int, height: int, bpp: int = 32, byte_order: int = 0):
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid image size {width}x{height}")
        if bpp <= 0 or bpp % 8:
            raise ValueError(f"unsupported bits per pixel: {bpp}")
        if byte_order not in (0, 1):
            raise ValueError(f"byte order must be 0 or 1, not {byte_order}")
        self.width = width
        self.height = height
        self.bpp = bpp
        self.byte_order = byte_order
        self.size_line = ((width * bpp + 31) // 32) * 4
        self.data = bytearray(self.size_line * height)

    @property
    def bytes_per_pixel(self) -> int:
        return self.bpp // 8

    @property
    def _endian(self) -> str:
        return "big" if self.byte_order else "little"

    def _offset(self, x: int, y: int) -> int:
        return y * self.size_line + x * self.bytes_per_pixel

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` at (x, y), keeping as many low bytes as a pixel holds."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        opp = self.bytes_per_pixel
        value = color & ((1 << (8 * opp)) - 1)
        offset = self._offset(x, y)
        self.data[offset:offset + opp] = value.to_bytes(opp, self._endian)

    def get_pixel(self, x: int, y: int) -> int:
        """Read the pixel at (x, y); 0 for positions outside the image."""
        if x < 0 or x > self.width or y < 0 or y > self.height:
            return 0
        opp = self.bytes_per_pixel
        offset = self._offset(x, y)
        if offset + opp > len(self.data):
            return 0
        return int.from_bytes(self.data[offset:offset + opp], self._endian)

    def to_rgb_bytes(self) -> bytes:
        """Return the pixels as packed R, G, B bytes, row after row."""
        opp = self.bytes_per_pixel
        row_len = self.width * opp
        out_row = self.width * 3
        out = bytearray(out_row * self.height)
        # Red, green and blue are bytes 2, 1 and 0 of a 0xRRGGBB value.
        for channel, value_byte in enumerate((2, 1, 0)):
            if value_byte >= opp:
                continue
            position = opp - 1 - value_byte if self.byte_order else value_byte
            for y in range(self.height):
                start = y * self.size_line + position
                out[y * out_row + channel:(y + 1) * out_row:3] = (
                    self.data[start:start + row_len:opp]
                )
        return bytes(out)


def channel_shifts(red_mask: int, green_mask: int, blue_mask: int) -> tuple[int, ...]:
    """Return (offset, width) of each colour mask as a flat 6-tuple."""
    shifts: list[int] = []
    for mask in (red_mask, green_mask, blue_mask):
        if mask <= 0:
            raise ValueError(f"colour mask must be positive, not {mask}")
        offset = (mask & -mask).bit_length() - 1
        mask >>= offset
        width = 0
        while mask & 1:
            mask >>= 1
            width += 1
        shifts.extend((offset, width))
    return tuple(shifts)


def convert_color(color: int, depth: int, shifts: tuple[int, ...]) -> int:
    """Convert a 0xRRGGBB colour to a pixel value for a visual of ``depth``."""
    if depth >= TRUE_COLOR_DEPTH:
        return color
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - shifts[1])) << shifts[0])
        + ((green >> (16 - shifts[3])) << shifts[2])
        + ((blue >> (16 - shifts[5])) << shifts[4])
    )