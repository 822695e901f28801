"""
Finding font files, and reading their names.

Fonts are found by scanning the font directories of the OS (plus any
directories in FONTWRAP_FONT_DIRS). We do not ask the OS for its list of
registered fonts. Since we only need the mtime of a few directories to
know whether something changed, the result of a scan can be cached, and
updated partially.
"""

import io
import os
import sys
import json
import time
import secrets

import freetype

from ..utils import logger, get_cache_dir
from ..utils.enums import Posture
from ._errors import LoadingError


# Weight names according to CSS and the OpenType spec.
weight_dict = {
    "thin": 100,
    "hairline": 100,
    "ultralight": 200,
    "extralight": 200,
    "light": 300,
    "normal": 400,
    "regular": 400,
    "medium": 500,
    "semibold": 600,
    "demibold": 600,
    "bold": 700,
    "extrabold": 800,
    "ultrabold": 800,
    "black": 900,
    "heavy": 900,
}

# Longest names first, so that "extrabold" is not taken for "bold"
_weight_names = sorted(weight_dict, key=len, reverse=True)


posture_dict = {
    "italic": Posture.ITALIC,
    "oblique": Posture.OBLIQUE,
}

# The name id of the full font name in the sfnt name table
FULL_NAME_ID = 4
PLATFORM_MICROSOFT = 3


class FontFile:
    """Object to represent a font file. This is the handle that a font
    provider gives out for each face of a family.
    """

    def __init__(self, filename, family=None, variant=None, full_name=None):
        assert isinstance(filename, str)
        assert family is None or isinstance(family, str)
        assert variant is None or isinstance(variant, str)
        assert full_name is None or isinstance(full_name, str)

        self._filename = filename
        self._family = family
        self._variant = variant
        self._full_name = full_name
        self._name = None
        self._weight = None
        self._posture = None

    def __repr__(self):
        return f"<FontFile {self.name} at 0x{hex(id(self))}>"

    def __hash__(self):
        return hash(self.name)

    def _get_face(self):
        # This was factored out so it can be overloaded in tests
        return freetype.Face(self._filename)

    @property
    def filename(self):
        """The path to this font file."""
        return self._filename

    @property
    def family(self):
        """The family name of this font, e.g. 'Noto Sans' or 'Arial'.
        This value is defined in the font file.
        """
        if not self._family:
            self._family = self._get_face().family_name.decode()
            if not self._family:
                name = os.path.basename(self._filename).split(".")[0]
                family, _, _ = name.partition("-")
                self._family = family or "Unknown"
        return self._family

    @property
    def variant(self):
        """The variant name of this font, e.g. 'Regular', 'Bold',
        'Italic', 'Thin Italic'. This is a value defined in the font
        file, and from this the weight and posture are derived.
        """
        if not self._variant:
            self._variant = self._get_face().style_name.decode()
            if not self._variant:
                name = os.path.basename(self._filename).split(".")[0]
                _, _, variant = name.partition("-")
                self._variant = variant or "Regular"
        return self._variant

    @property
    def full_name(self):
        """The human readable full name, e.g. 'Noto Sans Bold'. This is
        read from the font's name table, and otherwise composed from the
        family and variant.
        """
        if not self._full_name:
            try:
                self._full_name = get_sfnt_name(self._get_face(), FULL_NAME_ID)
            except Exception:
                self._full_name = None
            if not self._full_name:
                self._full_name = f"{self.family} {self.variant}"
        return self._full_name

    @property
    def weight(self):
        """The font weight, as a number between 100-900."""
        if not self._weight:
            variant_name = self.variant.lower().replace(" ", "").replace("-", "")
            if variant_name == "regular":  # make common cases fast
                self._weight = 400
            else:
                for weight_name in _weight_names:
                    if weight_name in variant_name:
                        self._weight = weight_dict[weight_name]
                        break
                else:
                    self._weight = 400
        return self._weight

    @property
    def posture(self):
        """The posture, a Posture enum: normal, italic, or oblique."""
        if not self._posture:
            variant_name = self.variant.lower()
            for posture_name, posture in posture_dict.items():
                if posture_name in variant_name:
                    self._posture = posture
                    break
            else:
                self._posture = Posture.NORMAL
        return self._posture

    @property
    def name(self):
        """A normalized name that includes the family and variant. This
        therefore uniquely identifies the font. This typically is the
        same as the filename (without extension), but this is not
        guaranteed to be the case.
        """
        if not self._name:
            family = "".join(x[0].upper() + x[1:] for x in self.family.split())
            style = "".join(x[0].upper() + x[1:] for x in self.variant.split())
            self._name = family + "-" + style
        return self._name

    def load(self):
        """Load the font data, returning a FontFace. Raises LoadingError
        if the file cannot be read or is not a font.
        """
        try:
            with open(self._filename, "rb") as f:
                data = f.read()
        except OSError as err:
            raise LoadingError(f"Cannot load font {self._filename}: {err}") from err
        try:
            freetype.Face(io.BytesIO(data))
        except freetype.ft_errors.FT_Exception as err:
            raise LoadingError(f"Not a valid font {self._filename}: {err}") from err
        return FontFace(self, data)


class FontFace:
    """A loaded font face: the font data plus the metadata of the file
    it was loaded from.
    """

    def __init__(self, font_file, data):
        self._font_file = font_file
        self._data = data

    def __repr__(self):
        return f"<FontFace {self.full_name} at 0x{hex(id(self))}>"

    @property
    def font_file(self):
        """The FontFile that this face was loaded from."""
        return self._font_file

    @property
    def filename(self):
        return self._font_file.filename

    @property
    def family(self):
        return self._font_file.family

    @property
    def full_name(self):
        return self._font_file.full_name

    @property
    def posture(self):
        return self._font_file.posture

    @property
    def weight(self):
        return self._font_file.weight

    def copy_font_data(self):
        """Get the raw font data (bytes), or None if there is none."""
        return self._data or None


def get_sfnt_name(face, name_id):
    """Get an (English if possible) entry from the name table of a freetype face."""
    candidates = []
    for i in range(face.sfnt_name_count):
        entry = face.get_sfnt_name(i)
        if entry.name_id != name_id:
            continue
        if entry.platform_id == PLATFORM_MICROSOFT:
            text = entry.string.decode("utf-16-be", errors="ignore")
            is_english = entry.language_id == 0x0409
        else:
            text = entry.string.decode("latin-1", errors="ignore")
            is_english = entry.language_id == 0
        if text:
            candidates.append((not is_english, text))
    if candidates:
        return sorted(candidates, key=lambda x: x[0])[0][1]
    return None


def get_all_fonts():
    """Get a set of all available fonts."""
    # Without system fonts, results do not depend on what is installed
    disable_system_fonts = os.environ.get("FONTWRAP_DISABLE_SYSTEM_FONTS", "0").lower()
    if disable_system_fonts in ("1", "true", "yes"):
        return get_user_fonts()
    else:
        return get_user_fonts() | get_system_fonts()


def get_user_fonts():
    """Get a set of fonts from the directories listed in FONTWRAP_FONT_DIRS."""
    fonts = set()
    for directory in os.getenv("FONTWRAP_FONT_DIRS", "").split(os.pathsep):
        if not directory:
            continue
        try:
            _, file_paths = find_fonts_paths(directory, False)
        except OSError as err:
            logger.warning(f"Ignoring font directory: {err}")
            continue
        fonts.update(FontFile(p) for p in file_paths)
    return fonts


# The info that we keep per font file in the cache
CACHE_FILE_KEYS = {"mtime", "family", "variant", "full_name"}


def get_system_fonts():
    """Get a set of FontFile objects for the fonts in the system font
    directories.

    Scanning is slow-ish, so the result is cached in ``font_cache.json``
    in the cache dir. On each call, the mtime of the known font
    directories is compared with the cache, and only directories that
    changed (files added, removed or renamed) are scanned again.
    """
    filename = os.path.join(get_cache_dir(), "font_cache.json")
    cache = _read_font_cache(filename)

    changed_dirs = set()
    if cache is not None:
        for p, info in cache["dirs"].items():
            if info["mtime"] < os.path.getmtime(p):
                changed_dirs.add(p)

    if cache is None:
        # Full scan
        cache = {"dirs": {}, "files": {}}
        new_dirs, new_files = find_system_fonts()
    else:
        # Partial scan
        new_dirs, new_files = set(), set()
        for dir_path in changed_dirs:
            _forget_files_in_dir(cache, dir_path)
            _, file_paths = find_fonts_paths(dir_path, False)
            new_dirs.add(dir_path)
            new_files.update(file_paths)

    if new_dirs or new_files:
        logger.info(f"Searched for fonts in: {new_dirs}")
        _update_font_cache(cache, new_dirs, new_files)
        _write_font_cache(filename, cache)

    return {
        FontFile(path, info["family"], info["variant"], info["full_name"])
        for path, info in cache["files"].items()
    }


def _read_font_cache(filename):
    """Read the font cache. Returns None if it is missing, corrupt or
    outdated, in which case a full scan is needed.
    """
    try:
        with open(filename, "rt", encoding="utf-8") as f:
            cache = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return None

    try:
        for p, info in cache["dirs"].items():
            if not isinstance(info, dict) or "mtime" not in info:
                raise ValueError(f"Invalid dir info for {p!r}")
            if not os.path.isdir(p):
                return None  # A font dir was removed
        for p, info in cache["files"].items():
            if not isinstance(info, dict):
                raise ValueError(f"Invalid file info for {p!r}")
            if CACHE_FILE_KEYS.difference(info):
                return None  # Written by an older version
    except (KeyError, TypeError, AttributeError, ValueError) as err:
        logger.error(f"Error loading font cache: {err}")
        return None
    return cache


def _forget_files_in_dir(cache, dir_path):
    dir_path = os.path.normpath(dir_path)
    files = cache["files"]
    for p in list(files):
        if os.path.normpath(os.path.dirname(p)) == dir_path:
            files.pop(p)


def _update_font_cache(cache, dir_paths, file_paths):
    for p in dir_paths:
        cache["dirs"][p.replace("\\", "/")] = {"mtime": os.path.getmtime(p)}
    for p in file_paths:
        ff = FontFile(p)
        try:
            info = {
                "mtime": os.path.getmtime(p),
                "family": ff.family,
                "variant": ff.variant,
                "full_name": ff.full_name,
            }
        except Exception as err:
            # Not a font that FreeType can read
            logger.debug(f"Skipping font {p}: {err}")
            continue
        cache["files"][p.replace("\\", "/")] = info
    for key in ("dirs", "files"):
        cache[key] = dict(sorted(cache[key].items()))


def _write_font_cache(filename, cache):
    """Write the cache to a temporary file, then move it in place.

    The replace is atomic, so a process that reads the cache at the same
    time sees either the old or the new one. On Windows the replace fails
    while another process has the file open, so we retry for a while.
    """
    tmp_filename = f"{filename}.part.{secrets.token_urlsafe(4)}"
    with open(tmp_filename, "wt", encoding="utf-8") as f:
        json.dump(cache, f)

    deadline = time.time() + 5
    while time.time() < deadline:
        try:
            os.replace(tmp_filename, filename)
            return
        except OSError:
            time.sleep(0.1)

    logger.error("Failed to write font cache")
    try:
        os.remove(tmp_filename)
    except OSError:
        pass


def find_system_fonts():
    """Search the system font directories (recursively). Returns
    (dir_paths, file_paths).
    """
    dir_paths, file_paths = set(), set()
    for directory in get_system_font_directories():
        new_dirs, new_files = find_fonts_paths(directory, True)
        dir_paths.update(new_dirs)
        file_paths.update(new_files)
    return dir_paths, file_paths


FONT_EXTENSIONS = ".ttf", ".otf"


def find_fonts_paths(directory, recursive):
    """Find the font files in the given directory. Returns two sets
    (dir_paths, file_paths), with the searched dirs and the font files found.
    Raises OSError if the directory does not exist.
    """
    if not os.path.isdir(directory):
        raise OSError(f"Not a directory: {directory}")
    if recursive:
        walker = os.walk(directory)
    else:
        walker = [(directory, None, os.listdir(directory))]

    dir_paths, file_paths = set(), set()
    for dirpath, _, filenames in walker:
        dir_paths.add(dirpath)
        file_paths.update(
            os.path.join(dirpath, fname)
            for fname in filenames
            if fname.lower().endswith(FONT_EXTENSIONS)
        )
    return dir_paths, file_paths


# %% Where the OS keeps its fonts


def get_system_font_directories():
    """Get the set of existing font directories for this platform."""
    if sys.platform.startswith("win"):
        candidates = _get_windows_font_directories()
    elif sys.platform.startswith("darwin"):
        candidates = X11_FONT_DIRS + MACOS_FONT_DIRS
    else:
        candidates = X11_FONT_DIRS
    return {os.path.abspath(d) for d in candidates if d and os.path.isdir(d)}


def _get_windows_font_directories():
    import winreg

    dirs = [os.path.join(os.getenv("WINDIR", ""), "Fonts")]
    for env_name in ("LOCALAPPDATA", "APPDATA"):
        dirs.append(os.path.join(os.getenv(env_name, ""), "Microsoft/Windows/Fonts"))

    # The user font folder, as registered in the shell
    key = r"Software\Microsoft\Windows\CurrentVersion\Explorer\Shell Folders"
    try:
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, key) as user:
            dirs.append(winreg.QueryValueEx(user, "Fonts")[0])
    except OSError:
        pass
    return dirs


HOME = os.path.expanduser("~")

X11_FONT_DIRS = [
    "/usr/X11R6/lib/X11/fonts/TTF/",
    "/usr/X11/lib/X11/fonts",
    "/usr/share/fonts/",
    "/usr/local/share/fonts/",
    os.path.join(os.getenv("XDG_DATA_HOME") or HOME, ".local/share/fonts"),
    os.path.join(HOME, ".fonts"),
]

MACOS_FONT_DIRS = [
    "/Library/Fonts/",
    "/Network/Library/Fonts/",
    "/System/Library/Fonts/",
    "/opt/local/share/fonts",
    os.path.join(HOME, "Library/Fonts"),
]
