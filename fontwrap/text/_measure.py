"""
Measuring the rendered width of text.
"""

from ..utils.enums import StyleKey
from . import _shaper


class WidthMeasurer:
    """Measures the pixel width of text, for a font configuration and style.

    Parameters:
        font_config (FontConfig): provides the faces, features, size and letter spacing.
        style (StyleKey, str): the style to measure with. Falls back to the
            regular face if the family does not have this style.
        shaper (optional): the shaping engine. Defaults to Harfbuzz.

    The features, size and letter spacing are copied from the font config
    when the measurer is created, so that the same text always measures the
    same, even if the config is changed in the meantime.
    """

    def __init__(self, font_config, style=StyleKey.REGULAR, *, shaper=None):
        self._style = StyleKey.parse(style)
        self._face = font_config.faces.get(self._style) or font_config.regular_face
        self._features = font_config.features.as_dict()
        self._size = font_config.size
        self._letter_space = font_config.letter_space
        self._shaper = shaper or _shaper.shaper

    @property
    def style(self):
        """The requested style."""
        return self._style

    @property
    def face(self):
        """The face used for measuring, or None if there is none."""
        return self._face

    def measure(self, text):
        """Get the width of the text in pixels, or None if the text cannot be measured."""
        if not text:
            return 0.0

        if self._face is None:
            return None
        font_data = self._face.copy_font_data()
        if font_data is None:
            return None

        advances = self._shaper.shape(font_data, text, self._features)
        metrics = self._shaper.face_metrics(font_data)

        # Scale from font units to pixels
        origin_glyph_height = metrics.ascent - metrics.descent
        scale_factor = self._size / max(1, origin_glyph_height)
        total_width = float(advances.sum()) * scale_factor

        # Letter spacing goes between characters, not after the last one
        letter_space = scale_factor * self._letter_space * metrics.units_per_em
        total_width += letter_space * max(0, len(text) - 1)

        return total_width


def calculate_text_width(text, font_config, style=StyleKey.REGULAR, *, shaper=None):
    """Calculate the pixel width of text using font metrics. Returns None
    if the font config has no face to measure with.
    """
    return WidthMeasurer(font_config, style, shaper=shaper).measure(text)
