from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import httpx

from fast_image_size.config import HttpConfig
from fast_image_size.errors import ResourceNotFound

LOGGER = logging.getLogger(__name__)

_REMOTE_SCHEMES = ("http://", "https://")


def is_remote(location: str) -> bool:
    return location.lower().startswith(_REMOTE_SCHEMES)


class ByteSource(Protocol):
    def read(self, location: str, offset: int, length: int) -> bytes:
        """
        Return up to `length` bytes starting at `offset`.

        Returning fewer bytes than asked means the resource ended early.
        Raises ResourceNotFound when the resource cannot be opened at all.
        """
        ...


class FileByteSource:
    def read(self, location: str, offset: int, length: int) -> bytes:
        try:
            with Path(location).open("rb") as f:
                f.seek(offset)
                return f.read(length)
        except (OSError, ValueError) as e:
            raise ResourceNotFound(f"cannot read {location}: {e}") from e


class HttpByteSource:
    """
    Fetches byte ranges over HTTP with a `Range` header.

    Servers that ignore the range and answer 200 are streamed only as far as needed.
    """

    def __init__(self, *, config: HttpConfig | None = None, client: httpx.Client | None = None) -> None:
        config = config or HttpConfig()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=config.timeout,
            headers={"User-Agent": config.user_agent},
            follow_redirects=True,
        )

    def read(self, location: str, offset: int, length: int) -> bytes:
        if length <= 0:
            return b""

        headers = {"Range": f"bytes={offset}-{offset + length - 1}"}
        try:
            with self._client.stream("GET", location, headers=headers) as response:
                if response.status_code == 416:
                    # requested range starts past the end of the resource
                    return b""
                if response.status_code >= 400:
                    raise ResourceNotFound(f"cannot fetch {location}: HTTP {response.status_code}")

                skip = offset if response.status_code != 206 else 0
                if skip:
                    LOGGER.debug("Server ignored range request for %s", location)

                buf = bytearray()
                for chunk in response.iter_bytes():
                    buf.extend(chunk)
                    if len(buf) >= skip + length:
                        break
        except httpx.HTTPError as e:
            raise ResourceNotFound(f"cannot fetch {location}: {e}") from e

        return bytes(buf[skip : skip + length])

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class DefaultByteSource:
    """Routes http(s) URLs to an HttpByteSource and everything else to the filesystem."""

    def __init__(
        self,
        *,
        file_source: ByteSource | None = None,
        http_source: ByteSource | None = None,
        http_config: HttpConfig | None = None,
    ) -> None:
        self._file_source = file_source or FileByteSource()
        self._http_source = http_source
        self._owns_http_source = http_source is None
        self._http_config = http_config

    def read(self, location: str, offset: int, length: int) -> bytes:
        if is_remote(location):
            return self._ensure_http_source().read(location, offset, length)
        return self._file_source.read(location, offset, length)

    def _ensure_http_source(self) -> ByteSource:
        if self._http_source is None:
            self._http_source = HttpByteSource(config=self._http_config)
        return self._http_source

    def close(self) -> None:
        if self._owns_http_source and isinstance(self._http_source, HttpByteSource):
            self._http_source.close()
