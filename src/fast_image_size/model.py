from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FormatTag(str, Enum):
    PNG = "png"
    GIF = "gif"
    JPEG = "jpeg"
    WEBP = "webp"
    SVG = "svg"

    @property
    def mime_type(self) -> str:
        if self is FormatTag.SVG:
            return "image/svg+xml"
        return f"image/{self.value}"


@dataclass(frozen=True, slots=True)
class ImageSize:
    width: int
    height: int
    type: FormatTag

    def as_dict(self) -> dict[str, Any]:
        return {"width": self.width, "height": self.height, "type": self.type.value}
