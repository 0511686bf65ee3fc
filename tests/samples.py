from __future__ import annotations

import struct
import zlib

from fast_image_size.sources import FileByteSource


class CountingSource:
    """Wraps a byte source and records every underlying read."""

    def __init__(self, inner=None) -> None:
        self.inner = inner or FileByteSource()
        self.calls: list[tuple[str, int, int]] = []

    def read(self, location: str, offset: int, length: int) -> bytes:
        self.calls.append((location, offset, length))
        return self.inner.read(location, offset, length)


def _png_chunk(ctype: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(ctype + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + ctype + data + struct.pack(">I", crc)


def png_bytes(width: int, height: int) -> bytes:
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + _png_chunk(b"IHDR", ihdr) + _png_chunk(b"IEND", b"")


def gif_bytes(width: int, height: int) -> bytes:
    return b"GIF89a" + struct.pack("<HH", width, height) + b"\x00\x00\x00" + b"\x3b"


def jpeg_segment(marker: int, payload: bytes) -> bytes:
    return bytes([0xFF, marker]) + struct.pack(">H", len(payload) + 2) + payload


def jpeg_bytes(width: int, height: int, *, leading: list[bytes] | None = None, sof: int = 0xC0) -> bytes:
    if leading is None:
        leading = [jpeg_segment(0xE0, b"JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00")]
    frame = struct.pack(">BHHB", 8, height, width, 1) + b"\x01\x11\x00"
    scan = jpeg_segment(0xDA, b"\x01\x01\x00\x00\x3f\x00") + b"\x00" * 8
    return b"\xff\xd8" + b"".join(leading) + jpeg_segment(sof, frame) + scan + b"\xff\xd9"


def _riff(chunk: bytes) -> bytes:
    body = b"WEBP" + chunk
    return b"RIFF" + struct.pack("<I", len(body)) + body


def webp_lossy_bytes(width: int, height: int, *, scale: int = 0) -> bytes:
    payload = b"\x30\x01\x00" + b"\x9d\x01\x2a" + struct.pack("<HH", width | (scale << 14), height | (scale << 14))
    payload += b"\x00" * 8
    return _riff(b"VP8 " + struct.pack("<I", len(payload)) + payload)


def webp_lossless_bytes(width: int, height: int, *, alpha: bool = True) -> bytes:
    bits = (width - 1) | ((height - 1) << 14) | (int(alpha) << 28)
    payload = b"\x2f" + bits.to_bytes(4, "little") + b"\x00" * 5
    return _riff(b"VP8L" + struct.pack("<I", len(payload)) + payload)


def webp_extended_bytes(width: int, height: int) -> bytes:
    payload = b"\x10\x00\x00\x00" + (width - 1).to_bytes(3, "little") + (height - 1).to_bytes(3, "little")
    alph = b"ALPH" + struct.pack("<I", 2) + b"\x00\x00"
    return _riff(b"VP8X" + struct.pack("<I", len(payload)) + payload + alph)


def svg_bytes(attributes: str, *, prolog: str = '<?xml version="1.0" encoding="UTF-8"?>\n') -> bytes:
    return (
        prolog + f'<svg xmlns="http://www.w3.org/2000/svg" {attributes}>\n'
        '  <rect x="0" y="0" width="10" height="10"/>\n</svg>\n'
    ).encode("utf-8")
