"""
The stages of text layout in fontwrap:

* Font selection: a font provider resolves a family to its faces.
* Style resolution: the faces are sorted into StyleKey buckets.
* Shaping: a shaping engine turns text into glyph advances, using a FeatureSet.
* Measuring: the advances are scaled to a pixel width.
* Wrapping: lines are split by character count or by pixel width.

This namespace exposes the public objects of each stage.
"""

from ._errors import (  # noqa: F401
    FontError,
    SelectionError,
    LoadingError,
    FeatureSpecError,
    SourceError,
)
from ._fontfinder import FontFile, FontFace  # noqa: F401
from ._fontprovider import FontProvider, font_provider, list_font_families  # noqa: F401
from ._features import FeatureSet, DEFAULT_FEATURES  # noqa: F401
from ._styles import (  # noqa: F401
    resolve_styles,
    style_for_face,
    style_from_full_name,
    style_from_weight,
)
from ._fontconfig import FontConfig  # noqa: F401
from ._shaper import FaceMetrics, HarfBuzzShaper, FreeTypeShaper, shaper  # noqa: F401
from ._measure import WidthMeasurer, calculate_text_width  # noqa: F401
from ._wrap import (  # noqa: F401
    CharacterLineWrapper,
    PixelLineWrapper,
    split_line,
    split_line_by_pixel_width,
    wrap_text_by_pixel_width,
    wrap_by_characters,
    wrap_by_pixels,
    read_lines,
)
