from __future__ import annotations

from typing import Protocol

from fast_image_size.errors import TruncatedHeader
from fast_image_size.model import FormatTag, ImageSize
from fast_image_size.reader import ByteWindowReader


class FormatParser(Protocol):
    tag: FormatTag
    # bytes from the start of the file the parser needs; used as the read hint
    header_size: int

    def probe(self, reader: ByteWindowReader) -> ImageSize:
        ...


def require(reader: ByteWindowReader, offset: int, length: int, what: str) -> bytes:
    data = reader.fetch(offset, length, force_length=True)
    if data is None:
        raise TruncatedHeader(f"{reader.location}: {what} needs {length} bytes at offset {offset}")
    return data
