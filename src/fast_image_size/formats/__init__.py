from fast_image_size.formats.base import FormatParser
from fast_image_size.formats.gif import GifParser
from fast_image_size.formats.jpeg import JpegParser
from fast_image_size.formats.png import PngParser
from fast_image_size.formats.svg import SvgParser
from fast_image_size.formats.webp import WebpParser

__all__ = ["FormatParser", "GifParser", "JpegParser", "PngParser", "SvgParser", "WebpParser"]
