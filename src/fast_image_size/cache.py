from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any

from fast_image_size.dispatcher import FormatDispatcher
from fast_image_size.locator import PathLocator, ResourceLocator
from fast_image_size.model import ImageSize

LOGGER = logging.getLogger(__name__)


class SizeCache:
    """
    Public entry point: memoizes one probe result per resolved location.

    Failed probes are cached as None too, so an unreadable image is probed
    once for the lifetime of the cache. Entries are never evicted; call
    `clear()` to start over.
    """

    def __init__(
        self,
        *,
        dispatcher: FormatDispatcher | None = None,
        locator: ResourceLocator | None = None,
    ) -> None:
        self._owns_dispatcher = dispatcher is None
        self._dispatcher = dispatcher or FormatDispatcher()
        self._locator = locator or PathLocator()
        self._entries: dict[str, ImageSize | None] = {}

    def get_size(self, image: str) -> ImageSize | None:
        location = self._locator.to_path(image)
        if location in self._entries:
            return self._entries[location]

        if not location:
            LOGGER.debug("No resource for image reference %r", image)
            size = None
        else:
            size = self._dispatcher.resolve(location)

        self._entries[location] = size
        return size

    def get_width(self, image: str) -> int:
        size = self.get_size(image)
        return size.width if size is not None else 0

    def init_attributes(self, image: str, attributes: MutableMapping[str, Any]) -> None:
        size = self.get_size(image)
        if size is not None:
            attributes["width"] = size.width
            attributes["height"] = size.height

    def clear(self) -> None:
        self._entries.clear()

    def close(self) -> None:
        if self._owns_dispatcher:
            self._dispatcher.close()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, location: object) -> bool:
        return location in self._entries
