import os
import sys
import atexit
import shutil
import tempfile


def get_cache_dir():
    """Get the directory where fontwrap stores its cache data, e.g. the
    font cache. Can be set with FONTWRAP_DATA_DIR.
    """
    dir = os.getenv("FONTWRAP_DATA_DIR")
    if dir:
        return os.path.abspath(dir)

    base_dir = _get_platform_cache_base()
    user_dir = os.path.expanduser("~")
    if base_dir and os.path.isdir(base_dir):
        dir = os.path.join(base_dir, "fontwrap")
    elif os.path.isdir(user_dir):
        dir = os.path.join(user_dir, ".fontwrap")
    else:
        dir = os.path.join("/var/tmp", ".fontwrap")

    try:
        os.makedirs(dir, exist_ok=True)
        if not os.access(dir, os.W_OK):
            raise PermissionError(f"Not writable: {dir}")
    except OSError:
        # Use a temporary dir for the rest of this process
        dir = tempfile.mkdtemp(prefix="fontwrap-")
        os.environ["FONTWRAP_DATA_DIR"] = dir
        atexit.register(shutil.rmtree, dir, True)

    return dir


def _get_platform_cache_base():
    if sys.platform.startswith("win"):
        return os.getenv("LOCALAPPDATA") or os.getenv("APPDATA")
    elif sys.platform.startswith("darwin"):
        return os.path.join(os.path.expanduser("~"), "Library", "Caches")
    else:
        # https://specifications.freedesktop.org/basedir-spec/basedir-spec-latest.html
        xdg = os.getenv("XDG_CACHE_HOME")
        return xdg or os.path.join(os.path.expanduser("~"), ".cache")
