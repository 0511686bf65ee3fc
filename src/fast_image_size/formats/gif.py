from __future__ import annotations

import struct

from fast_image_size.errors import CorruptHeader, UnsupportedFormat
from fast_image_size.formats.base import require
from fast_image_size.model import FormatTag, ImageSize
from fast_image_size.reader import ByteWindowReader

GIF_SIGNATURES = (b"GIF87a", b"GIF89a")
# signature(6) + logical screen width(2) + height(2)
GIF_HEADER_SIZE = 10


class GifParser:
    tag = FormatTag.GIF
    header_size = GIF_HEADER_SIZE

    def probe(self, reader: ByteWindowReader) -> ImageSize:
        data = require(reader, 0, GIF_HEADER_SIZE, "GIF header")
        if data[:6] not in GIF_SIGNATURES:
            raise UnsupportedFormat(f"{reader.location}: missing GIF signature")

        w, h = struct.unpack("<HH", data[6:10])
        if w == 0 or h == 0:
            raise CorruptHeader(f"{reader.location}: zero GIF dimension")
        return ImageSize(width=int(w), height=int(h), type=self.tag)
