"""
Utility functions for fontwrap.

.. currentmodule:: fontwrap.utils

.. autosummary::
    :toctree: utils/

    enums
    ReadOnlyDict
    get_cache_dir

"""

import os
import logging

from . import enums  # noqa: F401

from ._dirs import get_cache_dir  # noqa: F401

logger = logging.getLogger("fontwrap")


def _set_log_level():
    logger.setLevel(logging.WARNING)
    level = os.getenv("FONTWRAP_LOG_LEVEL", "")
    if not level:
        return
    try:
        logger.setLevel(int(level) if level.isnumeric() else level.upper())
    except ValueError:
        logger.warning(f"Invalid fontwrap log level: {level}")


_set_log_level()


def _enable_debug_output():
    """Make the info messages of the fontwrap logger visible. Used when an
    object is created with debug=True.
    """
    if logger.getEffectiveLevel() > logging.INFO:
        logger.setLevel(logging.INFO)
    # Without any handler, Python only shows warnings and errors
    if not logger.hasHandlers():
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)


def assert_type(name, value, *classes):
    """Raise a TypeError if value is not an instance of any of the given
    classes. If the first class is None, the value may also be None.
    """
    if classes[0] is None:
        if value is None:
            return
        classes = classes[1:]
        or_none = " or None"
    else:
        or_none = ""

    if not isinstance(value, classes):
        class_names = " | ".join(cls.__name__ for cls in classes)
        got = type(value).__name__
        raise TypeError(
            f"Expected '{name}' to be an instance of {class_names}{or_none}, "
            f"but got {got} object."
        )


class ReadOnlyDict(dict):
    """A dict that cannot be changed after creation. It is hashable if
    its values are.
    """

    __slots__ = ["_hash"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._hash = hash(frozenset(self.items()))

    def _readonly(self, *args, **kwargs):
        raise TypeError("Cannot modify ReadOnlyDict")

    __setitem__ = __delitem__ = _readonly
    clear = pop = popitem = setdefault = update = _readonly

    def __hash__(self):
        return self._hash
