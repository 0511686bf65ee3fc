from __future__ import annotations

import struct

from fast_image_size.errors import CorruptHeader, UnsupportedFormat
from fast_image_size.formats.base import require
from fast_image_size.model import FormatTag, ImageSize
from fast_image_size.reader import ByteWindowReader

WEBP_RIFF = b"RIFF"
WEBP_MAGIC = b"WEBP"
# RIFF(4) size(4) WEBP(4) chunk fourcc(4)
WEBP_CONTAINER_SIZE = 16
# chunk payload starts after fourcc(4) + chunk size(4)
WEBP_CHUNK_DATA_OFFSET = 20
WEBP_HEADER_SIZE = 30

VP8_START_CODE = b"\x9d\x01\x2a"
VP8L_SIGNATURE = 0x2F


class WebpParser:
    tag = FormatTag.WEBP
    header_size = WEBP_HEADER_SIZE

    def probe(self, reader: ByteWindowReader) -> ImageSize:
        container = require(reader, 0, WEBP_CONTAINER_SIZE, "WEBP container")
        if container[:4] != WEBP_RIFF or container[8:12] != WEBP_MAGIC:
            raise UnsupportedFormat(f"{reader.location}: missing RIFF/WEBP signature")

        fourcc = container[12:16]
        if fourcc == b"VP8 ":
            w, h = self._lossy(reader)
        elif fourcc == b"VP8L":
            w, h = self._lossless(reader)
        elif fourcc == b"VP8X":
            w, h = self._extended(reader)
        else:
            raise UnsupportedFormat(f"{reader.location}: unknown WEBP chunk {fourcc!r}")

        if w == 0 or h == 0:
            raise CorruptHeader(f"{reader.location}: zero WEBP dimension")
        return ImageSize(width=w, height=h, type=self.tag)

    def _lossy(self, reader: ByteWindowReader) -> tuple[int, int]:
        # frame tag(3) start code(3) width(2) height(2); top two bits are scaling
        data = require(reader, WEBP_CHUNK_DATA_OFFSET, 10, "VP8 frame header")
        if data[3:6] != VP8_START_CODE:
            raise CorruptHeader(f"{reader.location}: bad VP8 start code")
        w, h = struct.unpack("<HH", data[6:10])
        return w & 0x3FFF, h & 0x3FFF

    def _lossless(self, reader: ByteWindowReader) -> tuple[int, int]:
        # signature(1), then 14 bits width-1 and 14 bits height-1, LSB first
        data = require(reader, WEBP_CHUNK_DATA_OFFSET, 5, "VP8L header")
        if data[0] != VP8L_SIGNATURE:
            raise CorruptHeader(f"{reader.location}: bad VP8L signature")
        bits = int.from_bytes(data[1:5], "little")
        return (bits & 0x3FFF) + 1, ((bits >> 14) & 0x3FFF) + 1

    def _extended(self, reader: ByteWindowReader) -> tuple[int, int]:
        # flags(1) reserved(3) canvas width-1 (24 bit) canvas height-1 (24 bit)
        data = require(reader, WEBP_CHUNK_DATA_OFFSET, 10, "VP8X header")
        w = int.from_bytes(data[4:7], "little") + 1
        h = int.from_bytes(data[7:10], "little") + 1
        return w, h
