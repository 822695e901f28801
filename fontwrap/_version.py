"""
The version of fontwrap. In a git checkout, the commit is added as a
local version label, e.g. "0.1.0+g1a2b3c4".
"""

import logging
import subprocess
from pathlib import Path


# Bump before each release. The setup.py reads this definition.
__version__ = "0.1.0"


logger = logging.getLogger("fontwrap")

repo_dir = Path(__file__).parents[1]


def get_version():
    """Get the version string, with the git commit if this is a checkout."""
    if not repo_dir.joinpath(".git").is_dir():
        return __version__
    commit = get_git_commit()
    return f"{__version__}+g{commit}" if commit else __version__


def get_git_commit():
    """Get the short hash of the checked out commit, or None."""
    command = ["git", "rev-parse", "--short", "HEAD"]
    try:
        p = subprocess.run(command, cwd=repo_dir, capture_output=True)
    except OSError as err:
        logger.warning(f"Could not get fontwrap version: {err}")
        return None
    if p.returncode:
        return None
    return p.stdout.decode(errors="ignore").strip() or None


def _version_tuple(version):
    """Get a tuple of ints from the release part of a version string."""
    release = version.split("+")[0].split(".post")[0]
    return tuple(int(part) for part in release.split(".") if part.isdigit())


__version__ = get_version()
version_info = _version_tuple(__version__)
