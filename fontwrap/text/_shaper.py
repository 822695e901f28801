"""
Text shaping with Harfbuzz and Freetype.

The shaping engine turns a run of text into glyph advances, which is
all that is needed to measure the width of a line. Advances and
metrics are reported in font units (i.e. unscaled).

Relevant links:
* https://harfbuzz.github.io/
* https://freetype.org/freetype2/docs/glyphs/glyphs-3.html

"""

import io
import time
from collections import namedtuple, OrderedDict

import freetype
import uharfbuzz
import numpy as np


FaceMetrics = namedtuple("FaceMetrics", ["ascent", "descent", "units_per_em"])


class TemporalCache:
    """A cache that drops items that have not been used for a while.

    Parameters:
        lifetime (float): the number of seconds that an unused item is kept.
        getter (callable): produces the value for a key that is not in the cache.
        minimum_items (int): the number of items to keep, regardless of age.
    """

    def __init__(self, lifetime, *, getter, minimum_items=0):
        self._lifetime = lifetime
        self._minimum_items = minimum_items
        self._getter = getter
        # key -> (value, last_used), least recently used first
        self._items = OrderedDict()

    def __getitem__(self, key):
        """Get the value for the given key, creating it if needed.

        This resets the lifetime of the item, and drops items that are too old.
        """
        try:
            value, _ = self._items.pop(key)
        except KeyError:
            value = self._getter(key)
        self._items[key] = value, time.time()
        self.check_lifetimes()
        return value

    def __contains__(self, key):
        return key in self._items

    def __len__(self):
        return len(self._items)

    def check_lifetimes(self):
        """Drop the items that have not been used during the lifetime."""
        too_old = time.time() - self._lifetime
        while len(self._items) > self._minimum_items:
            key, (_, last_used) = next(iter(self._items.items()))
            if last_used >= too_old:
                break
            self._items.pop(key)


# Caches to store HB and FT fonts/faces, keyed by the font data. Measuring
# a line means shaping many prefixes of it, so we don't want to parse the
# font each time. For HB it take just 16 KB per font, but an FT face can
# take substantial memory (close to 1MB for a CJK font). This is why we use
# a temporal cache, that drops unused items after 10s. A render session
# typically uses a handful of faces, so we keep up to 20 around regardless.


def get_hb_font(font_data):
    blob = uharfbuzz.Blob(font_data)
    face = uharfbuzz.Face(blob)
    font = uharfbuzz.Font(face)  # scale defaults to upem, i.e. font units
    return blob, face, font


CACHE_HB = TemporalCache(
    lifetime=10,
    getter=get_hb_font,
    minimum_items=20,
)


def get_ft_face(font_data):
    return freetype.Face(io.BytesIO(font_data))


CACHE_FT = TemporalCache(
    lifetime=10,
    getter=get_ft_face,
    minimum_items=20,
)


class HarfBuzzShaper:
    """Shaping engine based on Harfbuzz. Applies the given OpenType features."""

    def shape(self, font_data, text, features=None):
        """Shape the text. Returns an array with the x advance of each
        glyph, in font units.

        Parameters:
            font_data (bytes): the font file data.
            text (str): the text to shape.
            features (dict, optional): OpenType feature tag -> value.
        """
        buf = uharfbuzz.Buffer()
        buf.add_str(text)
        buf.guess_segment_properties()

        # Load font, maybe from the cache
        blob, face, font = CACHE_HB[font_data]

        # Shape!
        uharfbuzz.shape(font, buf, dict(features or {}))

        return np.array([pos.x_advance for pos in buf.glyph_positions], np.float64)

    def face_metrics(self, font_data):
        """Get the FaceMetrics (ascent, descent, units_per_em) in font units."""
        blob, face, font = CACHE_HB[font_data]
        extents = font.get_font_extents("ltr")
        return FaceMetrics(extents.ascender, extents.descender, face.upem)


class FreeTypeShaper:
    """Shaping engine based on FreeType.

    This engine is provided as a possible fallback. FreeType supports
    basic shaping with kerning but not much more than that (e.g. no
    glyph replacements), so the features are ignored.
    """

    def shape(self, font_data, text, features=None):
        """Shape the text. Returns an array with the x advance of each
        glyph (one per character), in font units.
        """
        face = CACHE_FT[font_data]

        # With Freetype we simply replace each char for a glyph.
        advances = np.zeros((len(text),), np.float64)
        prev = None
        for i, c in enumerate(text):
            glyph_index = face.get_char_index(c)
            advances[i] = face.get_advance(glyph_index, freetype.FT_LOAD_NO_SCALE)
            if prev is not None:
                kerning = face.get_kerning(prev, c, freetype.FT_KERNING_UNSCALED)
                advances[i - 1] += kerning.x
            prev = c
        return advances

    def face_metrics(self, font_data):
        """Get the FaceMetrics (ascent, descent, units_per_em) in font units."""
        face = CACHE_FT[font_data]
        return FaceMetrics(face.ascender, face.descender, face.units_per_EM)


# The default shaping engine
shaper = HarfBuzzShaper()
