from __future__ import annotations

from pathlib import Path
from typing import Protocol

from fast_image_size.project import resolve_from
from fast_image_size.sources import is_remote


class ResourceLocator(Protocol):
    def to_path(self, image: str) -> str:
        """Resolve an image reference to a readable location, or "" when there is none."""
        ...


class PathLocator:
    """
    Minimal locator: URLs pass through, file paths are resolved against `base_dir`.
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        self._base_dir = base_dir or Path.cwd()

    def to_path(self, image: str) -> str:
        image = image.strip()
        if not image:
            return ""
        if is_remote(image):
            return image
        try:
            return str(resolve_from(self._base_dir, Path(image).expanduser()))
        except (RuntimeError, ValueError):
            # unknown ~user, embedded NUL
            return ""
