from __future__ import annotations

import logging
import re
from collections.abc import Callable
from urllib.parse import urlsplit

from fast_image_size.config import ProbeConfig
from fast_image_size.errors import ProbeError, TruncatedHeader, UnsupportedFormat
from fast_image_size.formats import FormatParser, GifParser, JpegParser, PngParser, SvgParser, WebpParser
from fast_image_size.model import FormatTag, ImageSize
from fast_image_size.reader import ByteWindowReader
from fast_image_size.sources import ByteSource, DefaultByteSource, is_remote

LOGGER = logging.getLogger(__name__)

# Insertion order is the unknown-type scan order.
PARSER_FACTORIES: dict[FormatTag, Callable[[ProbeConfig], FormatParser]] = {
    FormatTag.PNG: lambda config: PngParser(),
    FormatTag.GIF: lambda config: GifParser(),
    FormatTag.JPEG: lambda config: JpegParser(max_header_size=config.jpeg_max_header_size),
    FormatTag.WEBP: lambda config: WebpParser(),
    FormatTag.SVG: lambda config: SvgParser(window_size=config.svg_window_size),
}

FORMAT_EXTENSIONS: dict[FormatTag, tuple[str, ...]] = {
    FormatTag.PNG: ("png",),
    FormatTag.GIF: ("gif",),
    FormatTag.JPEG: ("jpeg", "jpg", "jpe", "pjpeg"),
    FormatTag.WEBP: ("webp",),
    FormatTag.SVG: ("svg", "svg+xml"),
}

_EXTENSION_TO_FORMAT: dict[str, FormatTag] = {
    ext: tag for tag, extensions in FORMAT_EXTENSIONS.items() for ext in extensions
}

_EXTENSION = re.compile(r"\.([A-Za-z0-9]+)$")


def extension_of(location: str) -> str | None:
    """
    Returns the lower-cased extension of the file name in `location`, if any.

    For URLs only the path component is considered.
    """
    path = urlsplit(location).path if is_remote(location) else location
    name = re.split(r"[/\\]", path)[-1]
    m = _EXTENSION.search(name)
    return m.group(1).lower() if m else None


def normalize_type_hint(type_hint: str) -> str | None:
    """
    Reduces a mime type (`image/svg+xml; charset=utf-8`) or bare extension (`.JPG`) to a lookup key.
    """
    hint = type_hint.split(";", 1)[0].strip().lower()
    if "/" in hint:
        hint = hint.rsplit("/", 1)[1]
    hint = hint.lstrip(".")
    return hint or None


def format_for(key: str) -> FormatTag | None:
    return _EXTENSION_TO_FORMAT.get(key)


class FormatDispatcher:
    def __init__(self, *, source: ByteSource | None = None, config: ProbeConfig | None = None) -> None:
        self._owned_source = DefaultByteSource() if source is None else None
        self._source: ByteSource = source or self._owned_source
        self._config = config or ProbeConfig()
        self._parsers: dict[FormatTag, FormatParser] = {}

    def parser(self, tag: FormatTag) -> FormatParser:
        parser = self._parsers.get(tag)
        if parser is None:
            parser = PARSER_FACTORIES[tag](self._config)
            self._parsers[tag] = parser
        return parser

    def close(self) -> None:
        """Closes the byte source this dispatcher created itself; injected sources are left to the caller."""
        if self._owned_source is not None:
            self._owned_source.close()

    def resolve(self, location: str, type_hint: str | None = None) -> ImageSize | None:
        try:
            return self.probe(location, type_hint)
        except ProbeError as e:
            LOGGER.debug("No size for %s: %s: %s", location, type(e).__name__, e)
            return None

    def probe(self, location: str, type_hint: str | None = None) -> ImageSize:
        key = normalize_type_hint(type_hint) if type_hint else extension_of(location)
        if key is None:
            return self._probe_unknown_type(location)

        tag = format_for(key)
        if tag is None:
            raise UnsupportedFormat(f"{location}: unsupported image type {key!r}")

        parser = self.parser(tag)
        reader = ByteWindowReader(self._source, location, initial_size=parser.header_size)
        return parser.probe(reader)

    def _probe_unknown_type(self, location: str) -> ImageSize:
        # Grab the most any parser might need, then let every parser look at the same window.
        max_size = self._config.jpeg_max_header_size
        reader = ByteWindowReader(self._source, location, initial_size=max_size, limit=max_size)
        if reader.fetch(0, max_size, force_length=False) is None:
            raise TruncatedHeader(f"{location}: resource is empty")

        for tag in PARSER_FACTORIES:
            try:
                return self.parser(tag).probe(reader)
            except ProbeError as e:
                LOGGER.debug("%s is not %s: %s", location, tag.value, e)

        raise UnsupportedFormat(f"{location}: no known image header")
