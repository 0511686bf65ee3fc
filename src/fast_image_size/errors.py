from __future__ import annotations


class ProbeError(Exception):
    """Base class for every reason a probe can fail to produce a size."""


class ResourceNotFound(ProbeError):
    pass


class TruncatedHeader(ProbeError):
    pass


class UnsupportedFormat(ProbeError):
    pass


class CorruptHeader(ProbeError):
    pass


class BoundExceeded(ProbeError):
    pass
