"""
The enums used in fontwrap. The enums are all available from the root ``fontwrap`` namespace.

.. currentmodule:: fontwrap.utils.enums

.. autosummary::
    :toctree: utils/enums

    StyleKey
    Posture
    WrapState

"""

from enum import Enum


__all__ = [
    "Posture",
    "StyleKey",
    "WrapState",
]


class StyleKey(str, Enum):
    """The style buckets that the faces of a font family are sorted into.

    The first nine are weight classes, from light to heavy. Italic is
    orthogonal to these: a face is either italic, or has a weight class.
    """

    THIN = "thin"
    EXTRA_LIGHT = "extra_light"
    LIGHT = "light"
    REGULAR = "regular"
    MEDIUM = "medium"
    SEMI_BOLD = "semi_bold"
    BOLD = "bold"
    EXTRA_BOLD = "extra_bold"
    BLACK = "black"
    ITALIC = "italic"

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, name):
        """Get the style key for a name like 'bold', 'extra_light',
        'ExtraLight' or 'semi-bold'.
        """
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            cls_name = type(name).__name__
            raise TypeError(f"Style name must be str, not '{cls_name}'")
        key = name.strip().lower().replace("-", "").replace("_", "").replace(" ", "")
        for style in cls:
            if style.value.replace("_", "") == key:
                return style
        raise ValueError(f"Style name not known: '{name}'")

    @property
    def is_weight(self):
        """Whether this style is a weight class (i.e. not italic)."""
        return self is not StyleKey.ITALIC


class Posture(str, Enum):
    """The posture of a font face. Only normal and italic are supported
    by style resolution.
    """

    NORMAL = "normal"
    ITALIC = "italic"
    OBLIQUE = "oblique"

    def __str__(self):
        return self.value


class WrapState(str, Enum):
    """The states of a line wrapper."""

    READING_SOURCE = "reading_source"
    DRAINING_BUFFER = "draining_buffer"
    EXHAUSTED = "exhausted"

    def __str__(self):
        return self.value
