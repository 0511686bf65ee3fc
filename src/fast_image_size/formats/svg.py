from __future__ import annotations

import math
import re

from fast_image_size.config import SVG_WINDOW_SIZE
from fast_image_size.errors import CorruptHeader, TruncatedHeader, UnsupportedFormat
from fast_image_size.model import FormatTag, ImageSize
from fast_image_size.reader import ByteWindowReader

_SVG_OPEN = re.compile(r"<(?:[A-Za-z_][\w.-]*:)?svg(?=[\s/>])")
_SVG_START_TAG = re.compile(
    r"<(?:[A-Za-z_][\w.-]*:)?svg((?:\s+[^\s=/>]+\s*=\s*(?:\"[^\"]*\"|'[^']*'))*)\s*/?>"
)
_ATTRIBUTE = re.compile(r"([^\s=/>]+)\s*=\s*(?:\"([^\"]*)\"|'([^']*)')")
_LENGTH = re.compile(r"^\s*\+?((?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*([A-Za-z%]*)\s*$")

# CSS absolute units expressed in px (96 dpi)
_UNIT_TO_PX: dict[str, float] = {
    "": 1.0,
    "px": 1.0,
    "pt": 96.0 / 72.0,
    "pc": 16.0,
    "mm": 96.0 / 25.4,
    "cm": 96.0 / 2.54,
    "in": 96.0,
}


class SvgParser:
    tag = FormatTag.SVG

    def __init__(self, *, window_size: int = SVG_WINDOW_SIZE) -> None:
        self.header_size = window_size

    def probe(self, reader: ByteWindowReader) -> ImageSize:
        data = reader.fetch(0, self.header_size, force_length=False)
        if data is None:
            raise TruncatedHeader(f"{reader.location}: empty SVG")

        text = data.decode("utf-8", errors="replace").lstrip("\ufeff")
        opened = _SVG_OPEN.search(text)
        if opened is None:
            raise UnsupportedFormat(f"{reader.location}: no <svg> element")

        match = _SVG_START_TAG.match(text, opened.start())
        if match is None:
            if len(data) >= self.header_size:
                raise TruncatedHeader(f"{reader.location}: <svg> start tag exceeds {self.header_size} bytes")
            raise CorruptHeader(f"{reader.location}: malformed <svg> start tag")

        attributes = parse_attributes(match.group(1))
        w, h = resolve_dimensions(
            width=parse_length(attributes.get("width")),
            height=parse_length(attributes.get("height")),
            view_box=parse_view_box(attributes.get("viewBox")),
        )
        if w is None or h is None:
            raise UnsupportedFormat(f"{reader.location}: SVG has neither width/height nor viewBox")
        if not (math.isfinite(w) and math.isfinite(h)):
            raise CorruptHeader(f"{reader.location}: SVG dimensions out of range")
        return ImageSize(width=_to_pixels(w), height=_to_pixels(h), type=self.tag)


def parse_attributes(source: str) -> dict[str, str]:
    attributes: dict[str, str] = {}
    for m in _ATTRIBUTE.finditer(source):
        value = m.group(2) if m.group(2) is not None else m.group(3)
        attributes[m.group(1)] = value
    return attributes


def parse_length(value: str | None) -> float | None:
    """
    Converts an SVG length to px. Relative units (%, em, ex) give None.
    """
    if value is None:
        return None
    m = _LENGTH.match(value)
    if m is None:
        return None
    factor = _UNIT_TO_PX.get(m.group(2).lower())
    if factor is None:
        return None
    number = float(m.group(1)) * factor
    return number if math.isfinite(number) and number > 0 else None


def parse_view_box(value: str | None) -> tuple[float, float] | None:
    if value is None:
        return None
    parts = [p for p in re.split(r"[\s,]+", value.strip()) if p]
    if len(parts) != 4:
        return None
    try:
        width, height = float(parts[2]), float(parts[3])
    except ValueError:
        return None
    if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
        return None
    return width, height


def resolve_dimensions(
    *, width: float | None, height: float | None, view_box: tuple[float, float] | None
) -> tuple[float | None, float | None]:
    if width is not None and height is not None:
        return width, height
    if view_box is None:
        return None, None

    vb_width, vb_height = view_box
    if width is not None:
        return width, width * vb_height / vb_width
    if height is not None:
        return height * vb_width / vb_height, height
    return vb_width, vb_height


def _to_pixels(value: float) -> int:
    return max(1, int(round(value)))
