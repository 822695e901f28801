"""
Errors raised by the text subpackage.
"""


class FontError(Exception):
    """Base class for errors that prevent a font configuration from being built."""


class SelectionError(FontError):
    """The requested font family could not be found."""


class LoadingError(FontError):
    """A face of a font family could not be loaded."""


class FeatureSpecError(ValueError):
    """A font feature string could not be parsed."""


class SourceError(OSError):
    """A text source is missing or cannot be read."""
