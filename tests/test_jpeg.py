from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from fast_image_size.errors import BoundExceeded, CorruptHeader, TruncatedHeader, UnsupportedFormat
from fast_image_size.formats import JpegParser
from fast_image_size.model import FormatTag, ImageSize
from fast_image_size.reader import ByteWindowReader
from fast_image_size.sources import FileByteSource
from samples import jpeg_bytes, jpeg_segment, png_bytes


def _probe(tmp_path: Path, data: bytes, *, max_header_size: int = 4096) -> ImageSize:
    path = tmp_path / "x.jpg"
    path.write_bytes(data)
    parser = JpegParser(max_header_size=max_header_size)
    return parser.probe(ByteWindowReader(FileByteSource(), str(path), initial_size=parser.header_size))


def test_jpeg_from_pillow(tmp_path: Path) -> None:
    path = tmp_path / "x.jpg"
    Image.new("RGB", (123, 45), (0, 128, 255)).save(path, "JPEG", quality=80)

    parser = JpegParser()
    size = parser.probe(ByteWindowReader(FileByteSource(), str(path)))
    assert size == ImageSize(width=123, height=45, type=FormatTag.JPEG)


def test_jpeg_progressive_from_pillow(tmp_path: Path) -> None:
    path = tmp_path / "x.jpg"
    Image.new("RGB", (64, 200)).save(path, "JPEG", progressive=True)

    size = JpegParser().probe(ByteWindowReader(FileByteSource(), str(path)))
    assert (size.width, size.height) == (64, 200)


def test_jpeg_skips_leading_segments(tmp_path: Path) -> None:
    leading = [
        jpeg_segment(0xE0, b"JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"),
        jpeg_segment(0xE1, b"Exif\x00\x00" + b"\x00" * 600),
        jpeg_segment(0xFE, b"a comment"),
        jpeg_segment(0xDB, b"\x00" + bytes(64)),
        # DHT uses a C-range marker but is not a frame header
        jpeg_segment(0xC4, b"\x00" + bytes(28)),
    ]
    size = _probe(tmp_path, jpeg_bytes(640, 480, leading=leading))
    assert (size.width, size.height) == (640, 480)


def test_jpeg_fill_bytes_and_restart_markers(tmp_path: Path) -> None:
    leading = [b"\xff\xff\xff" + jpeg_segment(0xE0, b"JFIF\x00")[1:], b"\xff\xd0"]
    size = _probe(tmp_path, jpeg_bytes(17, 9, leading=leading))
    assert (size.width, size.height) == (17, 9)


def test_jpeg_progressive_frame_marker(tmp_path: Path) -> None:
    size = _probe(tmp_path, jpeg_bytes(1024, 768, sof=0xC2))
    assert (size.width, size.height) == (1024, 768)


def test_jpeg_frame_beyond_bound(tmp_path: Path) -> None:
    leading = [jpeg_segment(0xE1, b"\x00" * 1000)]
    with pytest.raises(BoundExceeded):
        _probe(tmp_path, jpeg_bytes(10, 10, leading=leading), max_header_size=512)


def test_jpeg_frame_just_within_bound(tmp_path: Path) -> None:
    data = jpeg_bytes(10, 12, leading=[jpeg_segment(0xE1, b"\x00" * 400)])
    size = _probe(tmp_path, data, max_header_size=512)
    assert (size.width, size.height) == (10, 12)


def test_jpeg_truncated_before_frame(tmp_path: Path) -> None:
    data = jpeg_bytes(10, 10, leading=[jpeg_segment(0xE1, b"\x00" * 100)])
    with pytest.raises(TruncatedHeader):
        _probe(tmp_path, data[:60])


def test_jpeg_scan_before_frame(tmp_path: Path) -> None:
    data = b"\xff\xd8" + jpeg_segment(0xDA, b"\x00" * 6) + b"\xff\xd9"
    with pytest.raises(CorruptHeader):
        _probe(tmp_path, data)


def test_jpeg_garbage_between_segments(tmp_path: Path) -> None:
    data = b"\xff\xd8" + jpeg_segment(0xE0, b"JFIF\x00") + b"\x12\x34" + jpeg_bytes(1, 1)[2:]
    with pytest.raises(CorruptHeader):
        _probe(tmp_path, data)


def test_jpeg_rejects_other_signature(tmp_path: Path) -> None:
    with pytest.raises(UnsupportedFormat):
        _probe(tmp_path, png_bytes(10, 10))
