from __future__ import annotations


class ViewerError(ValueError):
    """Base class for recoverable plot viewer errors."""


class EmptyDatasetError(ViewerError):
    pass


class MalformedDatasetError(ViewerError):
    pass


class PointFileError(ViewerError):
    pass


class ConfigError(ViewerError):
    pass
