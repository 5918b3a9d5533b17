"""Reading and writing truecolour TGA images."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass

_HEADER = struct.Struct("<BBBHHBHHHHBB")
_UNCOMPRESSED = 2
_RLE = 10


class TgaError(ValueError):
    """The data is not a TGA image this loader can read."""


def _swap_red_blue(pixels: bytearray, bytes_per_pixel: int) -> None:
    reds = pixels[2::bytes_per_pixel]
    pixels[2::bytes_per_pixel] = pixels[0::bytes_per_pixel]
    pixels[0::bytes_per_pixel] = reds


@dataclass
class Image:
    """Pixels stored row by row in RGB or RGBA order."""

    width: int
    height: int
    bits: int = 32
    data: bytes = b""

    def to_tga_bytes(self) -> bytes:
        """Encode as an uncompressed 32-bit TGA file."""
        size = self.width * self.height * 4
        if len(self.data) != size:
            raise ValueError(f"expected {size} bytes of RGBA data, got {len(self.data)}")
        try:
            header = _HEADER.pack(0, 0, _UNCOMPRESSED, 0, 0, 0, 0, 0,
                                  self.width, self.height, 32, 0)
        except struct.error as exc:
            raise ValueError(f"image size does not fit a TGA header: {exc}") from exc
        pixels = bytearray(self.data)
        _swap_red_blue(pixels, 4)
        return header + bytes(pixels)

    def save_tga(self, path: str | os.PathLike) -> None:
        with open(path, "wb") as stream:
            stream.write(self.to_tga_bytes())


class _Reader:
    def __init__(self, data: bytes, offset: int) -> None:
        self._data = data
        self._offset = offset

    def take(self, size: int) -> bytes:
        chunk = self._data[self._offset:self._offset + size]
        if len(chunk) < size:
            raise TgaError("truncated pixel data")
        self._offset += size
        return chunk


def _bgr_to_rgb(pixel: bytes) -> bytes:
    return bytes((pixel[2], pixel[1], pixel[0])) + pixel[3:]


def parse_tga(data: bytes) -> Image:
    """Decode an uncompressed or RLE-compressed TGA of 24 bits or more."""
    if len(data) < _HEADER.size:
        raise TgaError("truncated header")
    (id_length, _, image_type, _, map_length, _, _, _,
     width, height, bits, _) = _HEADER.unpack_from(data)

    if image_type not in (_UNCOMPRESSED, _RLE):
        raise TgaError(f"unsupported image type {image_type}")
    if bits < 24:
        raise TgaError(f"unsupported pixel depth {bits}")

    bpp = bits // 8
    count = width * height
    reader = _Reader(data, _HEADER.size + id_length + map_length * bpp)

    if image_type == _UNCOMPRESSED:
        pixels = bytearray(reader.take(count * bpp))
        _swap_red_blue(pixels, bpp)
        return Image(width, height, bits, bytes(pixels))

    pixels = bytearray(count * bpp)
    n = 0
    while n < count:
        packet = reader.take(1)[0]
        first = reader.take(bpp)
        run = packet & 0x7F
        if packet & 0x80:
            group = [first] * (run + 1)
        else:
            group = [first] + [reader.take(bpp) for _ in range(run)]
        if n + len(group) > count:
            raise TgaError("RLE data overruns the image")
        for pixel in group:
            pixels[n * bpp:(n + 1) * bpp] = _bgr_to_rgb(pixel)
            n += 1
    return Image(width, height, bits, bytes(pixels))


def load_tga(path: str | os.PathLike) -> Image:
    with open(path, "rb") as stream:
        return parse_tga(stream.read())