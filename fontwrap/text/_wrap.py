"""
Line wrapping, by character count or by rendered pixel width.

The wrappers read physical lines from a text source and produce logical
lines. A line that is too long is split, preferably at (ASCII) whitespace,
and the remainder is kept in a buffer that is drained before the next
line is read from the source. When no line needs splitting, the output
equals the lines of the source.
"""

import os

from ..utils import logger
from ..utils.enums import StyleKey, WrapState
from ._errors import SourceError
from ._measure import WidthMeasurer


# ASCII whitespace: space, tab, line feed, form feed, carriage return
ASCII_WHITESPACE = " \t\n\x0c\r"

# When text cannot be measured, we wrap on this many characters instead
FALLBACK_MAX_CHARS = 50


def split_line(line, max_width):
    """Split a line at max_width characters, trying to wrap at whitespace.

    Returns a tuple (head, tail). The head has at most max_width
    characters and no trailing whitespace, the tail has no leading
    whitespace. If the line fits, the tail is empty.
    """
    if len(line) <= max_width:
        return line.rstrip(), ""

    # Look backwards from the split point for whitespace
    potential_split_point = line[:max_width]
    for idx in range(len(potential_split_point) - 1, -1, -1):
        if potential_split_point[idx] in ASCII_WHITESPACE:
            # Found whitespace: split before it
            return potential_split_point[:idx].rstrip(), line[idx:].lstrip()

    # No whitespace found: hard break at max_width chars
    return potential_split_point, line[max_width:].lstrip()


def split_line_by_pixel_width(
    line, max_pixel_width, font_config, style=StyleKey.REGULAR, *, shaper=None
):
    """Split a line so that the head fits in max_pixel_width, trying to
    wrap at whitespace. Returns a tuple (head, tail).

    If the text cannot be measured (e.g. the family has no suitable face)
    the line is split at 50 characters instead.
    """
    measurer = WidthMeasurer(font_config, style, shaper=shaper)
    return _split_by_pixel_width(line, max_pixel_width, measurer)


def _split_by_pixel_width(line, max_pixel_width, measurer):
    text_width = measurer.measure(line)
    if text_width is None:
        return split_line(line, FALLBACK_MAX_CHARS)
    elif text_width <= max_pixel_width:
        return line.rstrip(), ""

    # Find the longest prefix that fits, and the last word boundary in it
    n = len(line)
    best_split = 0
    wrap_split = None
    for i in range(1, n + 1):
        width = measurer.measure(line[:i])
        if width is None or width > max_pixel_width:
            break
        best_split = i
        if i < n and line[i - 1] in ASCII_WHITESPACE:
            wrap_split = i - 1

    if wrap_split is not None:
        # Only use the word boundary if it is within 25% of the optimal split
        distance = best_split - wrap_split
        split_point = wrap_split if distance <= best_split // 4 else best_split
    else:
        split_point = best_split
        for pos in range(best_split - 1, 0, -1):
            if line[pos] in ASCII_WHITESPACE:
                split_point = pos
                break

    # Take at least one character, so we always make progress
    if split_point == 0:
        split_point = min(1, n)

    return line[:split_point].rstrip(), line[split_point:].lstrip()


def wrap_text_by_pixel_width(
    text, max_pixel_width, font_config, style=StyleKey.REGULAR, *, shaper=None
):
    """Wrap a single string into a list of lines that fit max_pixel_width."""
    if not text:
        return [""]

    measurer = WidthMeasurer(font_config, style, shaper=shaper)
    lines = []
    remaining = text

    while remaining:
        text_width = measurer.measure(remaining)
        if text_width is not None and text_width <= max_pixel_width:
            lines.append(remaining)
            break

        line, remaining = _split_by_pixel_width(remaining, max_pixel_width, measurer)
        if not line:
            # Prevent infinite loop
            break
        lines.append(line)

    return lines


class CharacterLineWrapper:
    """Iterator that reads lines from a source, and splits lines that
    have more than max_width characters, trying to wrap at whitespace.

    Parameters:
        source: an object with a ``readline()`` method, e.g. an open file.
            Lines may be str or (utf-8) bytes.
        max_width (int): the maximum number of characters per line.

    Use ``next_line()`` to get lines one by one (None means the end), or
    simply iterate over the wrapper.
    """

    def __init__(self, source, max_width):
        if not isinstance(max_width, int):
            cls = type(max_width).__name__
            raise TypeError(f"max_width must be an int, not '{cls}'")
        if max_width < 1:
            raise ValueError(f"max_width must be at least 1, not {max_width}")
        if not hasattr(source, "readline"):
            raise TypeError("The source must have a readline() method.")
        self._source = source
        self._max_width = max_width
        self._buffer = ""  # Holds leftover part of a line for the next iteration
        self._state = WrapState.READING_SOURCE

    def __iter__(self):
        return self

    def __next__(self):
        line = self.next_line()
        if line is None:
            raise StopIteration()
        return line

    @property
    def state(self):
        """The WrapState of this wrapper."""
        return self._state

    @property
    def buffer(self):
        """The text that is waiting to be emitted."""
        return self._buffer

    def _is_too_wide(self, text):
        return len(text) > self._max_width

    def _split(self, text):
        return split_line(text, self._max_width)

    def next_line(self):
        """Produce the next line, or None if the source is exhausted."""
        if self._state == WrapState.EXHAUSTED:
            return None

        # Process buffer first
        if self._buffer:
            if self._is_too_wide(self._buffer):
                line, self._buffer = self._split(self._buffer)
            else:
                line, self._buffer = self._buffer, ""
            self._update_state()
            return line

        # Buffer empty, read a new line
        line = self._read_line()
        if line is None:
            self._state = WrapState.EXHAUSTED
            return None

        line = line.rstrip("\r\n")
        if self._is_too_wide(line):
            line, self._buffer = self._split(line)
        self._update_state()
        return line

    def _update_state(self):
        if self._buffer:
            self._state = WrapState.DRAINING_BUFFER
        else:
            self._state = WrapState.READING_SOURCE

    def _read_line(self):
        # Read errors end the stream, lines that were already produced stay valid
        try:
            line = self._source.readline()
            if isinstance(line, bytes):
                line = line.decode("utf-8")
        except (OSError, UnicodeDecodeError) as err:
            logger.error(f"Error reading line: {err}")
            return None
        return line or None


class PixelLineWrapper(CharacterLineWrapper):
    """Iterator that reads lines from a source, and splits lines based on
    their rendered width, using the font metrics for precise measurements.

    Parameters:
        source: an object with a ``readline()`` method, e.g. an open file.
        max_pixel_width (float): the maximum width of a line in pixels.
        font_config (FontConfig): the font to measure with.
        style (StyleKey, str): the font style. Default regular.
        shaper (optional): the shaping engine. Defaults to Harfbuzz.

    The font config is sampled when the wrapper is created; changing it
    afterwards does not affect this wrapper.

    Lines that cannot be measured (no face for the style, and no regular
    face) are not emitted whole: like ``split_line_by_pixel_width()``, the
    wrapper then splits them at 50 characters.
    """

    def __init__(
        self,
        source,
        max_pixel_width,
        font_config,
        style=StyleKey.REGULAR,
        *,
        shaper=None,
    ):
        if not isinstance(max_pixel_width, (int, float)):
            cls = type(max_pixel_width).__name__
            raise TypeError(f"max_pixel_width must be a number, not '{cls}'")
        if not max_pixel_width > 0:
            raise ValueError(f"max_pixel_width must be positive, not {max_pixel_width}")
        super().__init__(source, FALLBACK_MAX_CHARS)
        self._max_pixel_width = float(max_pixel_width)
        self._measurer = WidthMeasurer(font_config, style, shaper=shaper)

    def _is_too_wide(self, text):
        text_width = self._measurer.measure(text)
        if text_width is None:
            return len(text) > FALLBACK_MAX_CHARS
        return text_width > self._max_pixel_width

    def _split(self, text):
        return _split_by_pixel_width(text, self._max_pixel_width, self._measurer)


# %% Entry points that read from a file


def _open_source(source):
    """Get (file, should_close) for a path or file-like object."""
    if hasattr(source, "readline"):
        return source, False
    try:
        path = os.fspath(source)
    except TypeError:
        cls = type(source).__name__
        raise TypeError(f"Source must be a path or have readline(), not '{cls}'")
    if not os.path.isfile(path):
        raise SourceError(f"{path}: doesn't exist or is not a regular file")
    try:
        f = open(path, "rt", encoding="utf-8")
    except OSError as err:
        raise SourceError(f"{path}: {err}") from err
    return f, True


def _collect(source, wrapper_factory):
    f, should_close = _open_source(source)
    try:
        return list(wrapper_factory(f))
    finally:
        if should_close:
            f.close()


def read_lines(source):
    """Read all lines of a source (path or file-like object), without wrapping.
    Raises SourceError if the source cannot be read.
    """
    f, should_close = _open_source(source)
    try:
        lines = []
        while True:
            try:
                line = f.readline()
                if isinstance(line, bytes):
                    line = line.decode("utf-8")
            except (OSError, UnicodeDecodeError) as err:
                raise SourceError(f"Error reading line: {err}") from err
            if not line:
                break
            if line.endswith("\n"):
                line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
            lines.append(line)
    finally:
        if should_close:
            f.close()
    return lines


def wrap_by_characters(source, max_width):
    """Read lines from a source (path or file-like object), splitting lines
    longer than max_width characters. Returns a list of lines.
    """
    return _collect(source, lambda f: CharacterLineWrapper(f, max_width))


def wrap_by_pixels(
    source, max_pixel_width, font_config, style=StyleKey.REGULAR, *, shaper=None
):
    """Read lines from a source (path or file-like object), splitting lines
    wider than max_pixel_width. Returns a list of lines.
    """
    return _collect(
        source,
        lambda f: PixelLineWrapper(
            f, max_pixel_width, font_config, style, shaper=shaper
        ),
    )
