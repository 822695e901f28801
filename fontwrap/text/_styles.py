"""
Style resolution: sorting the faces of a font family into StyleKey buckets.

A face is first matched on keywords in its full name. If that fails,
its posture and weight decide.
"""

from ..utils import logger, _enable_debug_output
from ..utils.enums import StyleKey, Posture


# Keywords in the (lowercase) full name, in order of priority. Longer
# patterns that contain a shorter one come first. Thin, extra-bold, black
# and italic faces are only found via their weight or posture.
FULL_NAME_KEYWORDS = (
    ("extralight", StyleKey.EXTRA_LIGHT),
    ("light", StyleKey.LIGHT),
    ("medium", StyleKey.MEDIUM),
    ("regular", StyleKey.REGULAR),
    ("semibold", StyleKey.SEMI_BOLD),
    ("bold", StyleKey.BOLD),
)

# The weight landmarks, each one is the start of a half-open interval
WEIGHT_LANDMARKS = (
    (100, StyleKey.THIN),
    (200, StyleKey.EXTRA_LIGHT),
    (300, StyleKey.LIGHT),
    (400, StyleKey.REGULAR),
    (500, StyleKey.MEDIUM),
    (600, StyleKey.SEMI_BOLD),
    (700, StyleKey.BOLD),
    (800, StyleKey.EXTRA_BOLD),
    (900, StyleKey.BLACK),
)


def style_from_full_name(name):
    """Get the StyleKey from keywords in a font's full name, or None."""
    name = name.lower()
    for keyword, style in FULL_NAME_KEYWORDS:
        if keyword in name:
            return style
    return None


def style_from_weight(weight):
    """Get the StyleKey for a numeric weight, flooring to the nearest
    weight class. Weights outside of the 100-900 classes map to black.
    """
    for (lo, style), (hi, _) in zip(WEIGHT_LANDMARKS[:-1], WEIGHT_LANDMARKS[1:]):
        if lo <= weight < hi:
            return style
    return StyleKey.BLACK


def style_for_face(face):
    """Get the StyleKey for a face (an object with full_name, posture and
    weight). Returns None for postures that we do not support.
    """
    style = style_from_full_name(face.full_name)
    if style is not None:
        return style
    posture = face.posture
    if posture == Posture.NORMAL:
        return style_from_weight(face.weight)
    elif posture == Posture.ITALIC:
        return StyleKey.ITALIC
    else:
        return None


def resolve_styles(font_files, *, debug=False):
    """Load the given font files and sort them into a dict StyleKey -> FontFace.

    When two faces get the same style, the last one wins. Faces with an
    unsupported posture are skipped. Raises LoadingError if any of the
    faces fails to load.
    """
    if debug:
        _enable_debug_output()
    log = logger.info if debug else logger.debug
    faces = {}
    for font_file in font_files:
        face = font_file.load()
        log(f"font name: {face.full_name!r}")
        log(f"font properties: posture={face.posture}, weight={face.weight}")

        style = style_for_face(face)
        if style is None:
            logger.warning(
                f"Unsupported font style of {face.full_name!r}: posture={face.posture}, weight={face.weight}"
            )
            continue
        faces[style] = face

    names = {str(k): v.full_name for k, v in faces.items()}
    log(f"faces: {names}")
    return faces
