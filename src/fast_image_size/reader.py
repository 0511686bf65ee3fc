from __future__ import annotations

from fast_image_size.sources import ByteSource


class ByteWindowReader:
    """
    Bounded view over the leading bytes of one resource, for a single probe.

    The buffer always starts at offset 0. The first read covers at least
    `initial_size` bytes so that parsers asking for several small ranges inside
    their header hit the source once. Nothing past `limit` is ever read.
    Build a new reader for every probe.
    """

    def __init__(
        self,
        source: ByteSource,
        location: str,
        *,
        initial_size: int = 0,
        limit: int | None = None,
    ) -> None:
        self.location = location
        self._source = source
        self._initial_size = initial_size
        self._limit = limit
        self._data = b""
        self._exhausted = False
        self.reads = 0
        self.truncated = False

    def fetch(self, offset: int, length: int, force_length: bool = True) -> bytes | None:
        end = offset + length
        if end > len(self._data) and not self._exhausted:
            target = max(end, self._initial_size)
            if self._limit is not None:
                target = min(target, self._limit)
            if target > len(self._data):
                self._fill(target)

        chunk = self._data[offset:end]
        self.truncated = len(chunk) < length
        if force_length and self.truncated:
            return None
        return chunk or None

    def _fill(self, end: int) -> None:
        start = len(self._data)
        wanted = end - start
        data = self._source.read(self.location, start, wanted)
        self.reads += 1
        if len(data) < wanted:
            self._exhausted = True
        self._data += data

    @property
    def buffered(self) -> int:
        return len(self._data)

    @property
    def exhausted(self) -> bool:
        return self._exhausted
