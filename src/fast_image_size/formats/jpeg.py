from __future__ import annotations

import struct

from fast_image_size.config import JPEG_MAX_HEADER_SIZE
from fast_image_size.errors import BoundExceeded, CorruptHeader, TruncatedHeader, UnsupportedFormat
from fast_image_size.model import FormatTag, ImageSize
from fast_image_size.reader import ByteWindowReader

JPEG_SOI = b"\xff\xd8"

# SOF0..SOF15 minus DHT (C4), JPG (C8) and DAC (CC)
SOF_MARKERS = frozenset(range(0xC0, 0xD0)) - {0xC4, 0xC8, 0xCC}
# markers without a length field
STANDALONE_MARKERS = frozenset({0x01, *range(0xD0, 0xD8), 0xD8})
SOS_MARKER = 0xDA
EOI_MARKER = 0xD9


class JpegParser:
    tag = FormatTag.JPEG

    def __init__(self, *, max_header_size: int = JPEG_MAX_HEADER_SIZE) -> None:
        self.header_size = max_header_size

    def probe(self, reader: ByteWindowReader) -> ImageSize:
        data = reader.fetch(0, self.header_size, force_length=False)
        if data is None or len(data) < 2:
            raise TruncatedHeader(f"{reader.location}: empty JPEG")
        if not data.startswith(JPEG_SOI):
            raise UnsupportedFormat(f"{reader.location}: missing JPEG SOI marker")

        w, h = self._scan(data, reader)
        return ImageSize(width=w, height=h, type=self.tag)

    def _scan(self, data: bytes, reader: ByteWindowReader) -> tuple[int, int]:
        size = len(data)
        pos = 2
        while pos < size:
            if data[pos] != 0xFF:
                raise CorruptHeader(f"{reader.location}: expected JPEG marker at {pos}")
            # Skip fill bytes
            while pos < size and data[pos] == 0xFF:
                pos += 1
            if pos >= size:
                break
            marker = data[pos]
            pos += 1

            if marker in STANDALONE_MARKERS:
                continue
            if marker in (SOS_MARKER, EOI_MARKER):
                raise CorruptHeader(f"{reader.location}: no frame header before scan data")

            if pos + 2 > size:
                break
            (segment_length,) = struct.unpack(">H", data[pos : pos + 2])
            if segment_length < 2:
                raise CorruptHeader(f"{reader.location}: invalid JPEG segment length")

            if marker in SOF_MARKERS:
                # SOF segment: [length(2), precision(1), height(2), width(2), ...]
                if pos + 7 > size:
                    break
                _, h, w = struct.unpack(">BHH", data[pos + 2 : pos + 7])
                if w == 0 or h == 0:
                    raise CorruptHeader(f"{reader.location}: zero JPEG dimension")
                return int(w), int(h)

            pos += segment_length

        if size >= self.header_size:
            raise BoundExceeded(
                f"{reader.location}: no JPEG frame header within the first {self.header_size} bytes"
            )
        raise TruncatedHeader(f"{reader.location}: JPEG ended before the frame header")
