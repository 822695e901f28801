from ..utils import logger, assert_type, ReadOnlyDict, _enable_debug_output
from ..utils.enums import StyleKey
from ._features import FeatureSet
from ._styles import resolve_styles
from . import _fontprovider


class FontConfig:
    """The font configuration for a render session.

    Creating a FontConfig resolves the given font family via the font
    provider and sorts its faces into StyleKey buckets. The faces are
    fixed after that, while the features and letter spacing can be
    changed.

    Parameters:
        font_name (str): the name of the font family.
        size (int): the font size to render at, in pixels. Must be positive.
        fill_color (str): the fill color (passed on to the renderer).
        color (str): the text color (passed on to the renderer).
        debug (bool): whether to report font details. This makes the info
            messages of the "fontwrap" logger visible. Default False.
        provider (FontProvider, optional): where to find the family. Defaults
            to the global ``font_provider``.

    Raises SelectionError if the family does not exist, and LoadingError
    if any of its faces cannot be loaded.
    """

    def __init__(
        self,
        font_name,
        size,
        fill_color="#000",
        color="#000",
        debug=False,
        *,
        provider=None,
    ):
        assert_type("font_name", font_name, str)
        assert_type("size", size, int)
        assert_type("fill_color", fill_color, str)
        assert_type("color", color, str)
        if size < 1:
            raise ValueError(f"Font size must be positive, not {size}")

        if debug:
            _enable_debug_output()
        if provider is None:
            provider = _fontprovider.font_provider

        font_files = provider.resolve_family(font_name)
        faces = resolve_styles(font_files, debug=debug)
        if StyleKey.REGULAR not in faces:
            logger.warning(f"Font family {font_name!r} has no regular face")

        self._font_name = font_name
        self._size = size
        self._fill_color = fill_color
        self._color = color
        self._debug = bool(debug)
        self._faces = ReadOnlyDict(faces)
        # Only horizontal writing mode default features are supported
        self._features = FeatureSet(debug=debug)
        self._letter_space = 0.0

    def __repr__(self):
        return f"<FontConfig {self._font_name!r} {self._size}px at 0x{hex(id(self))}>"

    @property
    def font_name(self):
        """The name of the font family."""
        return self._font_name

    @property
    def size(self):
        """The font size, in pixels."""
        return self._size

    @property
    def fill_color(self):
        return self._fill_color

    @property
    def color(self):
        return self._color

    @property
    def debug(self):
        return self._debug

    @property
    def faces(self):
        """A read-only dict mapping StyleKey to FontFace."""
        return self._faces

    @property
    def features(self):
        """The FeatureSet with the OpenType features to apply when shaping."""
        return self._features

    @property
    def letter_space(self):
        """Extra space between characters, in em. Can be negative. Default 0."""
        return self._letter_space

    @letter_space.setter
    def letter_space(self, space):
        self._letter_space = float(space or 0)

    def get_face(self, style):
        """Get the FontFace for the given style, or None if the family
        does not have it.
        """
        return self._faces.get(StyleKey.parse(style))

    @property
    def regular_face(self):
        """The regular FontFace, or None."""
        return self._faces.get(StyleKey.REGULAR)

    def has_feature(self, tag):
        return self._features.has(tag)

    def add_feature(self, tag):
        self._features.add(tag)

    def remove_feature(self, tag):
        self._features.remove(tag)

    def set_features_from_string(self, spec):
        """Parse and set font features from a string like "cv01=1,calt=0,liga=1".
        See ``FeatureSet.apply_spec()``.
        """
        self._features.apply_spec(spec)

    def get_features_summary(self):
        """Get a summary of the active features, like "kern=1,liga=1"."""
        return self._features.summary()
