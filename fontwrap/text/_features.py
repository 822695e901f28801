"""
OpenType feature sets.

A feature set maps 4-character OpenType feature tags to a value. It is
used as an override set on top of the default features: callers can
switch a handful of shaping behaviors (kerning, ligatures, contextual
alternates, stylistic sets) without restating the whole set.
"""

from ..utils import logger, _enable_debug_output
from ._errors import FeatureSpecError


# The features that are enabled by default (for horizontal text)
DEFAULT_FEATURES = ("kern", "liga", "calt", "clig")

# Feature values are passed to the shaper as uint32
MAX_FEATURE_VALUE = 2**32 - 1


def check_feature_tag(tag):
    """Raise a FeatureSpecError if the tag is not a valid OpenType feature tag."""
    if not isinstance(tag, str):
        cls = type(tag).__name__
        raise TypeError(f"Feature tag must be str, not '{cls}'")
    if not (tag.isascii() and len(tag) == 4):
        raise FeatureSpecError(
            f"Invalid feature tag '{tag}': feature tags must be exactly 4 characters"
        )


def parse_feature_value(tag, value_str):
    """Parse the value part of a 'tag=value' token as a non-negative int."""
    text = value_str[1:] if value_str.startswith("+") else value_str
    if not (text.isascii() and text.isdigit()) or int(text) > MAX_FEATURE_VALUE:
        raise FeatureSpecError(
            f"Invalid feature value '{value_str}' for feature '{tag}'"
        )
    return int(text)


class FeatureSet:
    """A set of enabled OpenType features.

    Parameters:
        tags (iterable of str): the tags to enable (with value 1).
            Default ("kern", "liga", "calt", "clig").
        debug (bool): whether to report feature changes. This makes the info
            messages of the "fontwrap" logger visible.

    Only enabled features are stored: a value of zero means the feature
    is absent.
    """

    def __init__(self, tags=DEFAULT_FEATURES, *, debug=False):
        self._feature_map = {}
        self._features = ()
        self._debug = bool(debug)
        if self._debug:
            _enable_debug_output()
        for tag in tags:
            check_feature_tag(tag)
            self._feature_map[tag] = 1
        self._update_features()

    def __repr__(self):
        return f"<FeatureSet {self.summary()} at 0x{hex(id(self))}>"

    def __contains__(self, tag):
        return tag in self._feature_map

    def __len__(self):
        return len(self._feature_map)

    def __iter__(self):
        return iter(self._feature_map)

    def __eq__(self, other):
        if not isinstance(other, FeatureSet):
            return NotImplemented
        return self._feature_map == other._feature_map

    def __getitem__(self, tag):
        return self._feature_map[tag]

    def _log(self, msg):
        if self._debug:
            logger.info(msg)
        else:
            logger.debug(msg)

    def _update_features(self):
        # The derived list is what gets handed to the shaper
        self._features = tuple(self._feature_map.items())

    @property
    def features(self):
        """A tuple of (tag, value) tuples for the enabled features."""
        return self._features

    def as_dict(self):
        """Get a dict tag -> value, as accepted by Harfbuzz."""
        return dict(self._feature_map)

    def copy(self):
        """Make an independent copy of this feature set."""
        new = self.__class__((), debug=self._debug)
        new._feature_map.update(self._feature_map)
        new._update_features()
        return new

    def has(self, tag):
        """Whether the given feature is enabled."""
        return tag in self._feature_map

    def add(self, tag):
        """Enable the given feature (with value 1)."""
        check_feature_tag(tag)
        self._feature_map[tag] = 1
        self._update_features()

    def remove(self, tag):
        """Disable the given feature. Does nothing if it is not enabled."""
        if tag in self._feature_map:
            self._feature_map.pop(tag)
            self._update_features()

    def apply_spec(self, spec):
        """Set features from a string like "cv01=1,calt=0,liga".

        Each comma-separated token is a tag, optionally followed by
        ``=value``. A token without value enables the feature with value
        1. A value of zero disables the feature. Features that are not
        mentioned keep their current value.

        Raises a FeatureSpecError on the first invalid token. Tokens
        before that one remain applied.
        """
        if not isinstance(spec, str):
            cls = type(spec).__name__
            raise TypeError(f"Feature spec must be str, not '{cls}'")

        try:
            for token in spec.split(","):
                token = token.strip()
                if not token:
                    continue

                tag, sep, value_str = token.partition("=")
                tag = tag.strip()
                value = parse_feature_value(tag, value_str.strip()) if sep else 1
                check_feature_tag(tag)

                if value == 0:
                    self._feature_map.pop(tag, None)
                    self._log(f"Disabled font feature: {tag}")
                else:
                    self._feature_map[tag] = value
                    self._log(f"Enabled font feature: {tag}={value}")
        finally:
            self._update_features()

        self._log(f"Set font features: {list(self._feature_map)}")

    def summary(self):
        """Get a string like "kern=1,liga=1", or "none" if no features are enabled."""
        if not self._feature_map:
            return "none"
        return ",".join(f"{tag}={value}" for tag, value in self._feature_map.items())
