"""Fontwrap: font style resolution and line wrapping by character count or pixel width."""

# ruff: noqa: F401, F403

from ._version import __version__, version_info

from . import utils
from .utils import enums, logger
from .utils.enums import *

from .text import *
from .text import font_provider
