from __future__ import annotations

import struct

from fast_image_size.errors import CorruptHeader, UnsupportedFormat
from fast_image_size.formats.base import require
from fast_image_size.model import FormatTag, ImageSize
from fast_image_size.reader import ByteWindowReader

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
PNG_IHDR_OFFSET = 12
# signature(8) length(4) type(4) width(4) height(4)
PNG_HEADER_SIZE = 24


class PngParser:
    tag = FormatTag.PNG
    header_size = PNG_HEADER_SIZE

    def probe(self, reader: ByteWindowReader) -> ImageSize:
        data = require(reader, 0, PNG_HEADER_SIZE, "PNG header")
        if not data.startswith(PNG_SIGNATURE):
            raise UnsupportedFormat(f"{reader.location}: missing PNG signature")
        if data[PNG_IHDR_OFFSET : PNG_IHDR_OFFSET + 4] != b"IHDR":
            raise CorruptHeader(f"{reader.location}: first PNG chunk is not IHDR")

        w, h = struct.unpack(">II", data[16:24])
        if w == 0 or h == 0:
            raise CorruptHeader(f"{reader.location}: zero PNG dimension")
        return ImageSize(width=int(w), height=int(h), type=self.tag)
